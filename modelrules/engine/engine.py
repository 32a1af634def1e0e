"""Validation pass orchestrator.

``ValidationEngine`` runs one validation pass over a record:

1. Clear the error bag (unless told not to).
2. Run the pre-validation observers; a cancellation ends the pass with
   ``False`` and skips the post-validation observers.
3. Resolve the scenario map and fail fast on an unknown scenario.
4. Pick the attributes to check: the scenario's active attributes, or the
   caller's list verbatim (which may name attributes outside that set).
5. Run every validator that applies to the scenario and covers at least one
   of those attributes, in compilation order.  Nothing halts early; every
   message accumulates in the bag.
6. Run the post-validation observers.
7. Report success iff the bag is empty.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol

from modelrules.engine.errors import ErrorBag
from modelrules.engine.hooks import ModelHooks
from modelrules.errors import UnknownScenarioError
from modelrules.resolve.resolver import ScenarioResolver
from modelrules.schema.record import Record
from modelrules.schema.scenario import ScenarioMap
from modelrules.validators.base import Validator

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Runs validators against a record and fills an :class:`ErrorBag`.

    Args:
        errors: The bag that receives failure messages.
        hooks: Lifecycle observers; an empty :class:`ModelHooks` by default.
        resolver: Scenario resolver used when no explicit scenario map is
            passed to :meth:`validate`.
    """

    def __init__(
        self,
        errors: ErrorBag,
        hooks: ModelHooks | None = None,
        resolver: ScenarioResolver | None = None,
    ) -> None:
        self._errors = errors
        self._hooks = hooks or ModelHooks()
        self._resolver = resolver or ScenarioResolver()

    @property
    def errors(self) -> ErrorBag:
        return self._errors

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(
        self,
        record: Record,
        scenario: str,
        validators: Sequence[Validator],
        attribute_names: Iterable[str] | None = None,
        clear_errors: bool = True,
        scenarios: ScenarioMap | Callable[[], ScenarioMap] | None = None,
    ) -> bool:
        """Run one validation pass.

        Args:
            record: The record to check.
            scenario: The record's current scenario.
            validators: Compiled validators, in compilation order.
            attribute_names: Attributes to check; ``None`` means every active
                attribute of ``scenario``.
            clear_errors: Clear the bag before the pass.
            scenarios: Scenario map, or a callable producing one after the
                pre-validation observers have run.  Resolved from
                ``validators`` when omitted.

        Returns:
            True if the bag is empty after the pass.

        Raises:
            UnknownScenarioError: If ``scenario`` is not in the scenario map.
        """
        if clear_errors:
            self._errors.clear()

        if not self._hooks.run_before(record):
            logger.debug(
                "Validation of %s cancelled by a pre-validation hook", type(record).__name__
            )
            return False

        if scenarios is None:
            scenarios = self._resolver.resolve(validators)
        elif callable(scenarios):
            scenarios = scenarios()
        if scenario not in scenarios:
            raise UnknownScenarioError(scenario, scenarios.names)

        if attribute_names is None:
            names = scenarios.active_attributes(scenario)
        else:
            names = list(attribute_names)

        for validator in self.active_validators(scenario, validators, names):
            validator.validate_attributes(record, names, self._errors)

        self._hooks.run_after(record)

        valid = not self._errors.has()
        logger.debug(
            "Validated %s in scenario '%s': %s",
            type(record).__name__,
            scenario,
            "ok" if valid else f"{len(self._errors)} attribute(s) with errors",
        )
        return valid

    @staticmethod
    def active_validators(
        scenario: str,
        validators: Sequence[Validator],
        attribute_names: Iterable[str] | None = None,
    ) -> list[Validator]:
        """Validators applicable to ``scenario`` that cover ``attribute_names``.

        Args:
            scenario: The scenario name.
            validators: Compiled validators.
            attribute_names: Restrict to validators covering at least one of
                these names; ``None`` keeps every applicable validator.
        """
        selected: list[Validator] = []
        for validator in validators:
            if not validator.applies_to(scenario):
                continue
            if attribute_names is not None and not validator.validation_attributes(
                attribute_names
            ):
                continue
            selected.append(validator)
        return selected


# ---------------------------------------------------------------------------
# Bulk entry point
# ---------------------------------------------------------------------------


class Validatable(Protocol):
    def validate(self, attribute_names: Iterable[str] | None = None) -> Any: ...


def validate_multiple(
    records: Iterable[Validatable],
    attribute_names: Iterable[str] | None = None,
) -> bool:
    """Validate every record and return the logical AND of the results.

    Every record is validated, even after one has failed, so each record's
    error bag is populated.

    Args:
        records: Records of any type exposing ``validate(attribute_names)``.
        attribute_names: Attributes to validate on each record; ``None``
            means each record's active attributes.
    """
    names = list(attribute_names) if attribute_names is not None else None
    valid = True
    for record in records:
        valid = bool(record.validate(names)) and valid
    return valid
