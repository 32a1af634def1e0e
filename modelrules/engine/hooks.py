"""Observer registration for the validation lifecycle.

Three observer lists are kept per record:

``before_validate``
    ``fn(record) -> bool``.  Every observer runs; the validation pass is
    cancelled when any of them returns ``False``.

``after_validate``
    ``fn(record) -> None``.  Runs after every pass that was not cancelled.

``unsafe_attribute``
    ``fn(notice) -> None``.  Receives an
    :class:`~modelrules.engine.assign.UnsafeAssignmentNotice` for each
    rejected mass-assignment attempt.

Registration methods return the callable, so they double as decorators::

    @record.hooks.before_validate
    def _normalise(rec):
        rec.set("email", (rec.get("email") or "").strip())
        return True
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from modelrules.engine.assign import UnsafeAssignmentNotice

BeforeValidate = Callable[[Any], bool]
AfterValidate = Callable[[Any], None]
UnsafeAttribute = Callable[["UnsafeAssignmentNotice"], None]


class ModelHooks:
    """Per-record lifecycle observers."""

    def __init__(self) -> None:
        self._before: list[BeforeValidate] = []
        self._after: list[AfterValidate] = []
        self._unsafe: list[UnsafeAttribute] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def before_validate(self, fn: BeforeValidate) -> BeforeValidate:
        self._before.append(fn)
        return fn

    def after_validate(self, fn: AfterValidate) -> AfterValidate:
        self._after.append(fn)
        return fn

    def unsafe_attribute(self, fn: UnsafeAttribute) -> UnsafeAttribute:
        self._unsafe.append(fn)
        return fn

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run_before(self, record: Any) -> bool:
        """Run every pre-validation observer; False if any cancelled."""
        proceed = True
        for fn in self._before:
            if fn(record) is False:
                proceed = False
        return proceed

    def run_after(self, record: Any) -> None:
        for fn in self._after:
            fn(record)

    def notify_unsafe(self, notice: UnsafeAssignmentNotice) -> None:
        for fn in self._unsafe:
            fn(notice)
