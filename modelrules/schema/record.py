"""Record schema declarations and the record capability protocol.

A record type lists its attributes up front in a :class:`RecordSchema`
instead of having them discovered at runtime.  The engine only ever talks to
a record through the two-method :class:`Record` protocol.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from modelrules.errors import ConfigError


@runtime_checkable
class Record(Protocol):
    """Named-attribute read/write capability consumed by the engine."""

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...


class FieldSpec(BaseModel):
    """Declaration of a single record attribute.

    Attributes:
        name: Attribute name.
        default: Initial value for new records.
        label: Display label; generated from ``name`` when omitted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    default: Any = None
    label: str | None = None


class RecordSchema(BaseModel):
    """Ordered attribute declaration for a record type.

    Attributes:
        fields: Field declarations, in declaration order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    fields: tuple[FieldSpec, ...] = ()

    @model_validator(mode="after")
    def _unique_names(self) -> RecordSchema:
        seen: set[str] = set()
        for spec in self.fields:
            if spec.name in seen:
                raise ConfigError(f"Duplicate field '{spec.name}' in record schema.")
            seen.add(spec.name)
        return self

    @classmethod
    def of(cls, *fields: str | FieldSpec) -> RecordSchema:
        """Build a schema from bare names and/or :class:`FieldSpec` objects.

        Example::

            schema = RecordSchema.of("username", FieldSpec(name="age", default=0))
        """
        specs = [f if isinstance(f, FieldSpec) else FieldSpec(name=f) for f in fields]
        return cls(fields=tuple(specs))

    @property
    def names(self) -> list[str]:
        """Returns all attribute names in declaration order."""
        return [f.name for f in self.fields]

    def get(self, name: str) -> FieldSpec | None:
        """Returns the FieldSpec for ``name``, or ``None``."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def label_for(self, name: str) -> str | None:
        """Returns the declared label for ``name``, or ``None``."""
        spec = self.get(name)
        return spec.label if spec is not None else None

    def defaults(self) -> dict[str, Any]:
        """Returns a fresh ``name -> default`` mapping for a new record."""
        return {f.name: copy.deepcopy(f.default) for f in self.fields}


@dataclass(frozen=True)
class ModelConfig:
    """Per-record-type behaviour switches.

    Attributes:
        form_name: Key under which :meth:`Model.load` looks for this record's
            data.  ``None`` means the class name; ``""`` means the data is
            not nested at all.
        trace_unsafe_attributes: Log rejected mass-assignment attempts at
            DEBUG level.
    """

    form_name: str | None = None
    trace_unsafe_attributes: bool = True
