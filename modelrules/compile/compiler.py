"""Rule compilation: declarative rules → validator instances.

``RuleCompiler`` walks a record's rule list in declaration order and
produces one :class:`~modelrules.validators.base.Validator` per rule.  The
validator type of a rule is resolved as follows:

* a pre-built ``Validator`` instance in the rule list is kept as-is;
* a string naming a method of the owning record → an
  :class:`~modelrules.validators.inline.InlineValidator` bound to it, even
  when the name is also a registered alias;
* a string registered in :class:`ValidatorRegistry` → that class;
* a ``Validator`` subclass → instantiated directly;
* any other callable → an ``InlineValidator`` wrapping it.

Scenario filters are handed to the validator as ``on`` / ``except_`` and are
never forwarded as ordinary parameters.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from modelrules.compile.registry import ValidatorRegistry
from modelrules.errors import ConfigError
from modelrules.schema.rule import RuleSpec
from modelrules.validators.base import Validator
from modelrules.validators.inline import InlineValidator

logger = logging.getLogger(__name__)


class RuleCompiler:
    """Compiles rule declarations into an ordered list of validators.

    Args:
        registry: Registry used to resolve validator aliases.  Defaults to
            the global :class:`ValidatorRegistry`.
    """

    def __init__(self, registry: type[ValidatorRegistry] = ValidatorRegistry) -> None:
        self._registry = registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(self, rules: Iterable[Any], owner: Any = None) -> list[Validator]:
        """Compile ``rules`` in declaration order.

        Args:
            rules: Rule declarations (``RuleSpec``, tuples, mappings) and/or
                ready-made ``Validator`` instances.
            owner: The record the rules belong to; used to bind rules that
                name one of its methods.

        Returns:
            A fresh, mutable list of validators.

        Raises:
            ConfigError: If a declaration is malformed or names an unknown
                validator type.
        """
        validators: list[Validator] = []
        for raw in rules:
            if isinstance(raw, Validator):
                validators.append(raw)
                continue
            spec = RuleSpec.parse(raw)
            validators.append(self._instantiate(spec, owner, raw))
        logger.debug(
            "Compiled %d validator(s) for %s",
            len(validators),
            type(owner).__name__ if owner is not None else "<no owner>",
        )
        return validators

    # ------------------------------------------------------------------
    # Instantiation
    # ------------------------------------------------------------------

    def _instantiate(self, spec: RuleSpec, owner: Any, raw: Any) -> Validator:
        kind = spec.validator
        if isinstance(kind, str):
            method = getattr(owner, kind, None) if owner is not None else None
            if callable(method):
                return self._inline(spec, method, bound=True, raw=raw)
            validator_cls = self._registry.get(kind)
            if validator_cls is not None:
                return self._construct(validator_cls, spec, raw)
            raise ConfigError(
                f"Unknown validator type: '{kind}'. "
                f"Registered types: {self._registry.registered_types()}.",
                rule=raw,
            )
        if isinstance(kind, type) and issubclass(kind, Validator):
            return self._construct(kind, spec, raw)
        if callable(kind):
            return self._inline(spec, kind, bound=False, raw=raw)
        raise ConfigError(f"Invalid validator type: {kind!r}.", rule=raw)

    def _construct(self, validator_cls: type[Validator], spec: RuleSpec, raw: Any) -> Validator:
        try:
            return validator_cls(
                list(spec.attributes),
                on=list(spec.on),
                except_=list(spec.except_),
                **spec.params,
            )
        except TypeError as exc:
            raise ConfigError(
                f"Invalid parameters for {validator_cls.__name__}: {exc}", rule=raw
            ) from exc

    @staticmethod
    def _inline(spec: RuleSpec, method: Any, bound: bool, raw: Any) -> Validator:
        try:
            return InlineValidator(
                list(spec.attributes),
                method=method,
                bound=bound,
                on=list(spec.on),
                except_=list(spec.except_),
                **spec.params,
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid parameters for inline validator: {exc}", rule=raw) from exc
