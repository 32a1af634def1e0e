"""modelrules validators: the base contract and the built-in checks."""
from modelrules.validators.base import Validator, is_empty_value
from modelrules.validators.builtin import (
    BooleanValidator,
    CompareValidator,
    DefaultValueValidator,
    FilterValidator,
    IntegerValidator,
    NumberValidator,
    RangeValidator,
    RegularExpressionValidator,
    RequiredValidator,
    SafeValidator,
    StringValidator,
)
from modelrules.validators.inline import InlineValidator

__all__ = [
    "Validator",
    "is_empty_value",
    "BooleanValidator",
    "CompareValidator",
    "DefaultValueValidator",
    "FilterValidator",
    "InlineValidator",
    "IntegerValidator",
    "NumberValidator",
    "RangeValidator",
    "RegularExpressionValidator",
    "RequiredValidator",
    "SafeValidator",
    "StringValidator",
]
