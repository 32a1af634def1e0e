"""Built-in validators, registered under their rule aliases.

======== ==============================
Alias    Class
======== ==============================
required :class:`RequiredValidator`
safe     :class:`SafeValidator`
string   :class:`StringValidator`
number   :class:`NumberValidator`
integer  :class:`IntegerValidator`
boolean  :class:`BooleanValidator`
compare  :class:`CompareValidator`
in       :class:`RangeValidator`
match    :class:`RegularExpressionValidator`
default  :class:`DefaultValueValidator`
filter   :class:`FilterValidator`
======== ==============================

Registration happens in :mod:`modelrules` via
:meth:`~modelrules.compile.registry.ValidatorRegistry.register_class`.
"""
from __future__ import annotations

import operator as _op
import re
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from modelrules.errors import ConfigError
from modelrules.schema.record import Record
from modelrules.validators.base import Validator

if TYPE_CHECKING:
    from modelrules.engine.errors import ErrorBag

# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


class RequiredValidator(Validator):
    """Checks that a value is not empty.

    Args:
        required_value: When set, the value must equal this exactly.
        strict: Compare ``required_value`` by type as well as value.
    """

    skip_on_empty_default = False

    def __init__(
        self,
        attributes: str | Iterable[str],
        required_value: Any = None,
        strict: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        self.required_value = required_value
        self.strict = strict

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if self.required_value is None:
            if self.strict and value is not None:
                return []
            if not self.strict and not self.is_empty(_strip(value)):
                return []
            template = self.message or "{attribute} cannot be blank."
            return [self.format_message(record, template, attribute)]
        if _equal(value, self.required_value, self.strict):
            return []
        template = self.message or '{attribute} must be "{required_value}".'
        return [
            self.format_message(record, template, attribute, required_value=self.required_value)
        ]


class SafeValidator(Validator):
    """Marks attributes as safe for mass assignment; performs no check."""

    def validate_attributes(
        self,
        record: Record,
        attributes: Iterable[str] | None,
        errors: ErrorBag,
    ) -> None:
        return None

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        return []


# ---------------------------------------------------------------------------
# Type and range
# ---------------------------------------------------------------------------


class StringValidator(Validator):
    """Checks that a value is a string, optionally within a length range.

    Args:
        length: Exact length, or a ``(min, max)`` pair.
        min: Minimum length.
        max: Maximum length.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        length: int | tuple[int, int] | list[int] | None = None,
        min: int | None = None,
        max: int | None = None,
        too_short: str | None = None,
        too_long: str | None = None,
        not_equal: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        self.length: int | None = None
        if isinstance(length, (tuple, list)):
            if len(length) != 2:
                raise ConfigError("StringValidator.length must be an int or a (min, max) pair.")
            min, max = length
        else:
            self.length = length
        self.min = min
        self.max = max
        self.too_short = too_short or "{attribute} should contain at least {min} characters."
        self.too_long = too_long or "{attribute} should contain at most {max} characters."
        self.not_equal = not_equal or "{attribute} should contain {length} characters."

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if not isinstance(value, str):
            template = self.message or "{attribute} must be a string."
            return [self.format_message(record, template, attribute)]
        size = len(value)
        if self.min is not None and size < self.min:
            return [self.format_message(record, self.too_short, attribute, min=self.min)]
        if self.max is not None and size > self.max:
            return [self.format_message(record, self.too_long, attribute, max=self.max)]
        if self.length is not None and size != self.length:
            return [self.format_message(record, self.not_equal, attribute, length=self.length)]
        return []


_NUMBER_PATTERN = re.compile(r"^\s*[-+]?[0-9]*\.?[0-9]+([eE][-+]?[0-9]+)?\s*$")
_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


class NumberValidator(Validator):
    """Checks that a value is numeric, optionally within ``[min, max]``.

    Numeric strings are accepted.  Booleans are not numbers here.

    Args:
        integer_only: Reject values with a fractional part.
        min: Lower bound (inclusive).
        max: Upper bound (inclusive).
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        integer_only: bool = False,
        min: float | None = None,
        max: float | None = None,
        too_small: str | None = None,
        too_big: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        self.integer_only = integer_only
        self.min = min
        self.max = max
        self.too_small = too_small or "{attribute} must be no less than {min}."
        self.too_big = too_big or "{attribute} must be no greater than {max}."

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        number = self._coerce(value)
        if number is None:
            default = (
                "{attribute} must be an integer." if self.integer_only
                else "{attribute} must be a number."
            )
            return [self.format_message(record, self.message or default, attribute)]
        if self.min is not None and number < self.min:
            return [self.format_message(record, self.too_small, attribute, min=self.min)]
        if self.max is not None and number > self.max:
            return [self.format_message(record, self.too_big, attribute, max=self.max)]
        return []

    def _coerce(self, value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if self.integer_only and not value.is_integer():
                return None
            return value
        if isinstance(value, str):
            pattern = _INTEGER_PATTERN if self.integer_only else _NUMBER_PATTERN
            if pattern.match(value):
                return float(value)
        return None


class IntegerValidator(NumberValidator):
    """:class:`NumberValidator` with ``integer_only=True``."""

    def __init__(self, attributes: str | Iterable[str], **options: Any) -> None:
        options.setdefault("integer_only", True)
        super().__init__(attributes, **options)


class BooleanValidator(Validator):
    """Checks that a value equals ``true_value`` or ``false_value``.

    The defaults suit submitted form data: loosely, ``"1"``, ``1`` and
    ``True`` all count as true, and ``"0"``, ``0`` and ``False`` as false.

    Args:
        true_value: Value representing true.
        false_value: Value representing false.
        strict: Compare by type as well as value.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        true_value: Any = "1",
        false_value: Any = "0",
        strict: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        self.true_value = true_value
        self.false_value = false_value
        self.strict = strict

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if not self.strict and isinstance(value, bool):
            value = int(value)
        if _equal(value, self.true_value, self.strict) or _equal(
            value, self.false_value, self.strict
        ):
            return []
        template = self.message or '{attribute} must be either "{true}" or "{false}".'
        return [
            self.format_message(
                record, template, attribute, true=self.true_value, false=self.false_value
            )
        ]


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": _op.eq,
    "!=": _op.ne,
    ">": _op.gt,
    ">=": _op.ge,
    "<": _op.lt,
    "<=": _op.le,
}

_COMPARE_MESSAGES: dict[str, str] = {
    "==": '{attribute} must be equal to "{compare_value_or_attribute}".',
    "!=": '{attribute} must not be equal to "{compare_value_or_attribute}".',
    ">": '{attribute} must be greater than "{compare_value_or_attribute}".',
    ">=": '{attribute} must be greater than or equal to "{compare_value_or_attribute}".',
    "<": '{attribute} must be less than "{compare_value_or_attribute}".',
    "<=": '{attribute} must be less than or equal to "{compare_value_or_attribute}".',
}


class CompareValidator(Validator):
    """Compares a value with another attribute or a constant.

    Args:
        compare_attribute: Attribute to compare with; defaults to
            ``<attribute>_repeat``.
        compare_value: Constant to compare with; takes precedence over
            ``compare_attribute``.
        operator: One of ``== != > >= < <=``.
        type: ``"string"`` compares as text, ``"number"`` as floats.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        compare_attribute: str | None = None,
        compare_value: Any = None,
        operator: str = "==",
        type: str = "string",
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        if operator not in _OPERATORS:
            raise ConfigError(
                f"Unknown compare operator '{operator}'. Supported: {sorted(_OPERATORS)}."
            )
        if type not in ("string", "number"):
            raise ConfigError(f"Unknown compare type '{type}'. Supported: ['number', 'string'].")
        self.compare_attribute = compare_attribute
        self.compare_value = compare_value
        self.operator = operator
        self.type = type

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if self.compare_value is not None:
            target = self.compare_value
            shown = self.compare_value
        else:
            compare_attribute = self.compare_attribute or f"{attribute}_repeat"
            target = record.get(compare_attribute)
            label_fn = getattr(record, "get_attribute_label", None)
            shown = label_fn(compare_attribute) if callable(label_fn) else compare_attribute
        if self._compare(value, target):
            return []
        template = self.message or _COMPARE_MESSAGES[self.operator]
        return [
            self.format_message(record, template, attribute, compare_value_or_attribute=shown)
        ]

    def _compare(self, value: Any, target: Any) -> bool:
        try:
            if self.type == "number":
                return _OPERATORS[self.operator](float(value), float(target))
            return _OPERATORS[self.operator](_text(value), _text(target))
        except (TypeError, ValueError):
            return False


class RangeValidator(Validator):
    """Checks that a value is (or is not) one of a fixed set.

    Args:
        range: Allowed values.
        strict: Compare by type as well as value.
        not_: Invert the check.
        allow_array: Accept a list whose every item is in range.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        range: Iterable[Any] | None = None,
        strict: bool = False,
        not_: bool = False,
        allow_array: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        if range is None:
            raise ConfigError("RangeValidator requires a 'range' parameter.")
        self.range = list(range)
        self.strict = strict
        self.not_ = not_
        self.allow_array = allow_array

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if self.allow_array and isinstance(value, (list, tuple)):
            found = all(self._contains(item) for item in value)
        else:
            found = self._contains(value)
        if found != self.not_:
            return []
        template = self.message or "{attribute} is invalid."
        return [self.format_message(record, template, attribute)]

    def _contains(self, value: Any) -> bool:
        return any(_equal(value, candidate, self.strict) for candidate in self.range)


class RegularExpressionValidator(Validator):
    """Checks that a string value matches (or does not match) a pattern.

    Args:
        pattern: Regular expression, as a string or compiled pattern.
        not_: Invert the check.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        pattern: str | re.Pattern[str] | None = None,
        not_: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        if pattern is None:
            raise ConfigError("RegularExpressionValidator requires a 'pattern' parameter.")
        try:
            self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as exc:
            raise ConfigError(f"Invalid pattern {pattern!r}: {exc}") from exc
        self.not_ = not_

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        valid = isinstance(value, str) and (
            (self.pattern.search(value) is not None) != self.not_
        )
        if valid:
            return []
        template = self.message or "{attribute} is invalid."
        return [self.format_message(record, template, attribute)]


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------


class DefaultValueValidator(Validator):
    """Fills empty values with a default; never reports errors.

    Args:
        value: The default, or a ``(record, attribute) -> value`` callable.
    """

    skip_on_empty_default = False

    def __init__(
        self,
        attributes: str | Iterable[str],
        value: Any = None,
        **options: Any,
    ) -> None:
        options.setdefault("skip_on_error", False)
        super().__init__(attributes, **options)
        self.value = value

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        if self.is_empty(record.get(attribute)):
            value = self.value(record, attribute) if callable(self.value) else self.value
            record.set(attribute, value)
        return []


class FilterValidator(Validator):
    """Replaces a value with ``filter(value)``; never reports errors.

    Args:
        filter: The transform to apply.
        skip_on_array: Leave list values untouched.
    """

    skip_on_empty_default = False

    def __init__(
        self,
        attributes: str | Iterable[str],
        filter: Callable[[Any], Any] | None = None,
        skip_on_array: bool = False,
        **options: Any,
    ) -> None:
        options.setdefault("skip_on_error", False)
        super().__init__(attributes, **options)
        if filter is None or not callable(filter):
            raise ConfigError("FilterValidator requires a callable 'filter' parameter.")
        self.filter = filter
        self.skip_on_array = skip_on_array

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        value = record.get(attribute)
        if not (self.skip_on_array and isinstance(value, list)):
            record.set(attribute, self.filter(value))
        return []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _equal(value: Any, expected: Any, strict: bool) -> bool:
    if strict:
        return type(value) is type(expected) and value == expected
    if value == expected:
        return True
    return _text(value) == _text(expected)
