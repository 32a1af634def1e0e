"""Abstract base class for all validators.

A validator is bound to one or more attribute descriptors and to a set of
scenario filters.  The engine asks it whether it applies to the current
scenario, then hands it the record and the attributes to check; every
message the check returns lands in the record's error bag.

Subclasses implement :meth:`Validator.validate_attribute` and return a list
of messages (empty when the value is valid).  Transform validators (such as
``default`` or ``filter``) write through ``record.set`` and return ``[]``.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from modelrules.schema.scenario import UNSAFE_MARKER

if TYPE_CHECKING:
    from modelrules.engine.errors import ErrorBag
    from modelrules.schema.record import Record

#: `{name}` placeholders; any other brace text in a message is kept verbatim.
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _names(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def is_empty_value(value: Any) -> bool:
    """Return True for ``None``, ``""`` and empty lists / dicts."""
    return value is None or value == "" or value == [] or value == {}


class Validator(ABC):
    """Base class for a check bound to attributes and scenarios.

    Args:
        attributes: Attribute descriptors (a leading ``!`` marks the
            attribute as unsafe for mass assignment).
        on: Scenarios where the validator is active.  Empty means every
            scenario not listed in ``except_``.
        except_: Scenarios where the validator is inactive.  Ignored when
            ``on`` is non-empty.
        message: Custom error message template.  ``{attribute}`` is
            replaced with the attribute label.
        skip_on_error: Skip an attribute that already has errors.
        skip_on_empty: Skip an attribute whose value is empty.
        when: Optional ``(record, attribute) -> bool`` guard.
        is_empty: Optional replacement for :func:`is_empty_value`.
    """

    #: Default for ``skip_on_empty``; validators that must see empty values
    #: (``required``, ``default``) override it.
    skip_on_empty_default: bool = True

    def __init__(
        self,
        attributes: str | Iterable[str],
        *,
        on: str | Iterable[str] | None = None,
        except_: str | Iterable[str] | None = None,
        message: str | None = None,
        skip_on_error: bool = True,
        skip_on_empty: bool | None = None,
        when: Callable[[Any, str], bool] | None = None,
        is_empty: Callable[[Any], bool] | None = None,
    ) -> None:
        self.attributes: list[str] = _names(attributes)
        self.on: list[str] = _names(on)
        self.except_: list[str] = _names(except_)
        self.message = message
        self.skip_on_error = skip_on_error
        self.skip_on_empty = (
            self.skip_on_empty_default if skip_on_empty is None else skip_on_empty
        )
        self.when = when
        self._is_empty = is_empty

    # ------------------------------------------------------------------
    # Scenario applicability
    # ------------------------------------------------------------------

    def applies_to(self, scenario: str) -> bool:
        """Return True if this validator is active in ``scenario``.

        ``on`` takes precedence: when it is non-empty, ``except_`` is not
        consulted at all.
        """
        if self.on:
            return scenario in self.on
        return scenario not in self.except_

    # ------------------------------------------------------------------
    # Attribute selection
    # ------------------------------------------------------------------

    def validation_attributes(self, requested: Iterable[str] | None = None) -> list[str]:
        """Return own attribute names (marker stripped) filtered to ``requested``.

        Args:
            requested: Attribute names to validate, or ``None`` for all of
                this validator's attributes.
        """
        names = [a[1:] if a.startswith(UNSAFE_MARKER) else a for a in self.attributes]
        if requested is None:
            return names
        wanted = set(requested)
        return [n for n in names if n in wanted]

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------

    def validate_attributes(
        self,
        record: Record,
        attributes: Iterable[str] | None,
        errors: ErrorBag,
    ) -> None:
        """Check each selected attribute and append messages to ``errors``."""
        for attribute in self.validation_attributes(attributes):
            if self.skip_on_error and errors.has(attribute):
                continue
            if self.skip_on_empty and self.is_empty(record.get(attribute)):
                continue
            if self.when is not None and not self.when(record, attribute):
                continue
            for message in self.validate_attribute(record, attribute):
                errors.add(attribute, message)

    @abstractmethod
    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        """Check one attribute and return its error messages."""

    def is_empty(self, value: Any) -> bool:
        if self._is_empty is not None:
            return self._is_empty(value)
        return is_empty_value(value)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def format_message(
        self,
        record: Record,
        template: str,
        attribute: str,
        **params: Any,
    ) -> str:
        """Render ``template`` with the attribute label and extra params.

        Only ``{attribute}`` and ``{<param>}`` placeholders are substituted;
        unknown ones such as a regex quantifier ``{3}`` are left as written.
        """
        label_fn = getattr(record, "get_attribute_label", None)
        values = {**params, "attribute": label_fn(attribute) if callable(label_fn) else attribute}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            return str(values[name]) if name in values else match.group(0)

        return _PLACEHOLDER.sub(_substitute, template)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(attributes={self.attributes!r}, "
            f"on={self.on!r}, except_={self.except_!r})"
        )
