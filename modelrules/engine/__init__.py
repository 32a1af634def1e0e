"""modelrules runtime: validation passes, error bag, hooks, assignment."""
from modelrules.engine.assign import UnsafeAssignmentNotice, assign
from modelrules.engine.engine import ValidationEngine, validate_multiple
from modelrules.engine.errors import ErrorBag
from modelrules.engine.hooks import ModelHooks

__all__ = [
    "ErrorBag",
    "ModelHooks",
    "UnsafeAssignmentNotice",
    "ValidationEngine",
    "assign",
    "validate_multiple",
]
