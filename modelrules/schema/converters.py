"""Utilities for building a RecordSchema from existing declarations.

Pydantic converter
------------------
:func:`schema_from_pydantic` reads the fields of a pydantic model class.

SQLAlchemy converter
--------------------
:func:`schema_from_sqlalchemy` reads the columns of a SQLAlchemy ``Table``
or declarative class.

Install the optional dependency before using it::

    pip install "modelrules[sqlalchemy]"

Example::

    from modelrules.schema.converters import schema_from_sqlalchemy

    class User(Model):
        schema = schema_from_sqlalchemy(UserRow, exclude=["id"])
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic.fields import PydanticUndefined

from modelrules.errors import ConfigError
from modelrules.schema.record import FieldSpec, RecordSchema

if TYPE_CHECKING:
    from sqlalchemy import Table


def schema_from_pydantic(
    model_cls: type[BaseModel],
    *,
    exclude: Iterable[str] = (),
) -> RecordSchema:
    """Build a :class:`RecordSchema` from a pydantic model class.

    Field order follows the model's declaration order.  A field's ``title``
    becomes its label; required fields and fields with a ``default_factory``
    get ``None`` as their default.

    Args:
        model_cls: A :class:`pydantic.BaseModel` subclass.
        exclude: Field names to leave out.

    Returns:
        The corresponding :class:`RecordSchema`.
    """
    skip = set(exclude)
    specs: list[FieldSpec] = []
    for name, info in model_cls.model_fields.items():
        if name in skip:
            continue
        default = None if info.default is PydanticUndefined else info.default
        specs.append(FieldSpec(name=name, default=default, label=info.title))
    return RecordSchema(fields=tuple(specs))


def schema_from_sqlalchemy(
    source: Table | type[Any],
    *,
    exclude: Iterable[str] = (),
) -> RecordSchema:
    """Build a :class:`RecordSchema` from a SQLAlchemy table or mapped class.

    Column order follows the table definition.  Scalar column defaults are
    carried over; callable and server-side defaults are not.  A column's
    ``comment`` becomes its label.

    Args:
        source: A :class:`sqlalchemy.Table` or a declarative class exposing
            ``__table__``.
        exclude: Column names to leave out.

    Returns:
        The corresponding :class:`RecordSchema`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
        ConfigError: If ``source`` is neither a table nor a mapped class.
    """
    try:
        from sqlalchemy import Table as _Table
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for schema_from_sqlalchemy(). "
            'Install it with: pip install "modelrules[sqlalchemy]"'
        ) from exc

    table = source if isinstance(source, _Table) else getattr(source, "__table__", None)
    if not isinstance(table, _Table):
        raise ConfigError(
            f"Cannot build a record schema from {source!r}: expected a Table or mapped class."
        )

    skip = set(exclude)
    specs: list[FieldSpec] = []
    for column in table.columns:
        if column.name in skip:
            continue
        specs.append(
            FieldSpec(name=column.name, default=_column_default(column), label=column.comment)
        )
    return RecordSchema(fields=tuple(specs))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _column_default(column: Any) -> Any:
    default = column.default
    if default is None or not getattr(default, "is_scalar", False):
        return None
    return default.arg
