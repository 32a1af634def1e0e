"""Custom exception hierarchy for modelrules.

All public errors inherit from ModelRulesError so callers can catch the base
class for any modelrules-specific failure.

Validation failures are deliberately absent: a failing check is recorded in
the record's :class:`~modelrules.engine.errors.ErrorBag`, never raised.
"""
from __future__ import annotations

from typing import Any


class ModelRulesError(Exception):
    """Base exception for all modelrules errors."""


class ConfigError(ModelRulesError):
    """Raised when a rule or schema declaration is malformed.

    Detected when rules are compiled — before any record is validated — so
    the developer gets a clear message pointing at the offending declaration.

    Args:
        message: Human-readable description.
        rule: The raw declaration that failed to compile, if any.
    """

    def __init__(self, message: str, rule: Any = None) -> None:
        super().__init__(message)
        self.rule = rule


class UnknownScenarioError(ModelRulesError):
    """Raised when a record is validated in a scenario nobody declared.

    Args:
        scenario: The record's current scenario name.
        known_scenarios: Scenario names present in the resolved map.
    """

    def __init__(self, scenario: str, known_scenarios: list[str]) -> None:
        super().__init__(
            f"Unknown scenario: '{scenario}'. Known scenarios: {known_scenarios}."
        )
        self.scenario = scenario
        self.known_scenarios = known_scenarios


class UnknownAttributeError(ModelRulesError):
    """Raised when reading or writing an attribute the record does not declare.

    Args:
        attribute: The attribute name that was requested.
        record_type: Name of the record class.
    """

    def __init__(self, attribute: str, record_type: str) -> None:
        super().__init__(f"'{record_type}' has no attribute '{attribute}'.")
        self.attribute = attribute
        self.record_type = record_type
