"""Scenario resolution over compiled validators.

``ScenarioResolver`` derives, from a list of validators, which attribute
descriptors are active in each scenario:

1. The default scenario is always present, even with no validators.
2. Every scenario named in any validator's ``on`` or ``except_`` list is a
   candidate.
3. A validator with neither list applies to every candidate; one with only
   ``except_`` applies to every candidate not listed; one with ``on``
   applies to exactly those scenarios.
4. Attributes are collected per scenario in first-seen order.
5. Candidates other than the default that end up with no attributes are
   dropped.

Descriptors are passed through unchanged, so an unsafe marker declared on a
rule survives into the map.
"""
from __future__ import annotations

from collections.abc import Sequence

from modelrules.schema.scenario import DEFAULT_SCENARIO, ScenarioMap
from modelrules.validators.base import Validator


class ScenarioResolver:
    """Builds a :class:`ScenarioMap` from compiled validators.

    Args:
        default_scenario: Name of the scenario that is always materialised.
    """

    def __init__(self, default_scenario: str = DEFAULT_SCENARIO) -> None:
        self._default = default_scenario

    def resolve(self, validators: Sequence[Validator]) -> ScenarioMap:
        """Resolve the scenario map for ``validators``.

        Args:
            validators: Compiled validators, in compilation order.

        Returns:
            A frozen :class:`ScenarioMap`.
        """
        scenarios: dict[str, dict[str, None]] = {self._default: {}}
        for validator in validators:
            for name in (*validator.on, *validator.except_):
                scenarios.setdefault(name, {})

        candidates = list(scenarios)
        for validator in validators:
            for name in self._applicable(validator, candidates):
                bucket = scenarios[name]
                for attribute in validator.attributes:
                    bucket.setdefault(attribute, None)

        return ScenarioMap(
            {
                name: list(attrs)
                for name, attrs in scenarios.items()
                if attrs or name == self._default
            }
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _applicable(validator: Validator, candidates: list[str]) -> list[str]:
        if validator.on:
            return list(validator.on)
        return [name for name in candidates if name not in validator.except_]
