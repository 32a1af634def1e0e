"""Mass assignment of externally supplied values onto a record.

Only permitted names are written.  With ``safe_only`` the caller passes the
safe attributes of the record's current scenario, and every other incoming
name is reported as an :class:`UnsafeAssignmentNotice` instead of being
written.  Rejections are advisory; assignment never raises for them and
never touches the error bag.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from modelrules.schema.record import Record


@dataclass(frozen=True)
class UnsafeAssignmentNotice:
    """A mass-assignment attempt on a non-permitted attribute.

    Attributes:
        record_type: Name of the record class.
        attribute: The rejected attribute name.
        value: The value that was not written.
    """

    record_type: str
    attribute: str
    value: Any

    @property
    def message(self) -> str:
        return f"Failed to set unsafe attribute '{self.attribute}' in '{self.record_type}'."


def assign(
    record: Record,
    values: Mapping[str, Any],
    permitted: Iterable[str],
    safe_only: bool = True,
    on_unsafe: Callable[[str, Any], None] | None = None,
) -> list[str]:
    """Write the permitted subset of ``values`` onto ``record``.

    Args:
        record: Target record, mutated in place.
        values: Incoming ``name -> value`` pairs.
        permitted: Names that may be written.
        safe_only: When True, rejected names are reported via ``on_unsafe``.
        on_unsafe: ``(name, value)`` callback for rejected names.

    Returns:
        Names that were written, in input order.
    """
    allowed = set(permitted)
    written: list[str] = []
    for name, value in values.items():
        if name in allowed:
            record.set(name, value)
            written.append(name)
        elif safe_only and on_unsafe is not None:
            on_unsafe(name, value)
    return written
