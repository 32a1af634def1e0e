"""Validator wrapping a plain function or a method of the record itself.

Two call shapes are supported:

* a free callable, called as ``fn(record, attribute, params)``;
* a method of the record named by the rule (``rule("age", "check_age")``),
  bound at compile time and called as ``method(attribute, params)``.

The callable may return ``None``, a single message, or an iterable of
messages.  It may also add errors to the record directly.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from modelrules.schema.record import Record
from modelrules.validators.base import Validator


class InlineValidator(Validator):
    """Adapts a callable to the :class:`Validator` contract.

    Args:
        attributes: Attribute descriptors.
        method: The callable performing the check.
        params: Extra value handed to the callable as its last argument.
        bound: True when ``method`` is already bound to the record.
        **options: Common :class:`Validator` options.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        method: Callable[..., Any],
        params: Any = None,
        bound: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(attributes, **options)
        self.method = method
        self.params = params
        self.bound = bound

    def validate_attribute(self, record: Record, attribute: str) -> list[str]:
        if self.bound:
            result = self.method(attribute, self.params)
        else:
            result = self.method(record, attribute, self.params)
        if result is None:
            return []
        if isinstance(result, str):
            return [result]
        return list(result)
