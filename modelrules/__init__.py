"""modelrules – scenario-based validation for records.

Declare rules once per record type; validate and mass-assign per scenario.

Public API
----------
``Model``
    Base class for records: declares a :class:`RecordSchema` and
    ``rules()``, tracks the current scenario, validates, and collects errors.

``rule``
    Declares a single validation rule.

``load_multiple`` / ``validate_multiple``
    Bulk form loading and validation over a collection of records.

Re-exported types
-----------------
``RecordSchema``, ``FieldSpec``, ``ModelConfig``, ``RuleSpec``,
``ScenarioMap``, ``ErrorBag``, ``ModelHooks``, ``UnsafeAssignmentNotice``,
the compiler / resolver / engine classes, and all error classes.

Extensibility
-------------
New validators can be registered via::

    from modelrules.compile.registry import ValidatorRegistry

    @ValidatorRegistry.register("slug")
    class SlugValidator(Validator):
        ...

After registration, rules may refer to it by alias: ``rule("handle", "slug")``.
"""

from __future__ import annotations

from modelrules.compile.compiler import RuleCompiler
from modelrules.compile.registry import ValidatorRegistry
from modelrules.engine.assign import UnsafeAssignmentNotice
from modelrules.engine.engine import ValidationEngine, validate_multiple
from modelrules.engine.errors import ErrorBag
from modelrules.engine.hooks import ModelHooks
from modelrules.errors import (
    ConfigError,
    ModelRulesError,
    UnknownAttributeError,
    UnknownScenarioError,
)
from modelrules.model import Model, load_multiple
from modelrules.resolve.resolver import ScenarioResolver
from modelrules.schema.converters import schema_from_pydantic, schema_from_sqlalchemy
from modelrules.schema.record import FieldSpec, ModelConfig, Record, RecordSchema
from modelrules.schema.rule import RuleSpec, rule
from modelrules.schema.scenario import DEFAULT_SCENARIO, UNSAFE_MARKER, ScenarioMap
from modelrules.validators.base import Validator
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

# ---------------------------------------------------------------------------
# Register built-in validators with ValidatorRegistry
# ---------------------------------------------------------------------------

ValidatorRegistry.register_class("required", RequiredValidator)
ValidatorRegistry.register_class("safe", SafeValidator)
ValidatorRegistry.register_class("string", StringValidator)
ValidatorRegistry.register_class("number", NumberValidator)
ValidatorRegistry.register_class("integer", IntegerValidator)
ValidatorRegistry.register_class("boolean", BooleanValidator)
ValidatorRegistry.register_class("compare", CompareValidator)
ValidatorRegistry.register_class("in", RangeValidator)
ValidatorRegistry.register_class("match", RegularExpressionValidator)
ValidatorRegistry.register_class("default", DefaultValueValidator)
ValidatorRegistry.register_class("filter", FilterValidator)

__all__ = [
    # Records
    "Model",
    "Record",
    "RecordSchema",
    "FieldSpec",
    "ModelConfig",
    "load_multiple",
    "validate_multiple",
    # Converters
    "schema_from_pydantic",
    "schema_from_sqlalchemy",
    # Rules
    "rule",
    "RuleSpec",
    "RuleCompiler",
    "ValidatorRegistry",
    # Scenarios
    "DEFAULT_SCENARIO",
    "UNSAFE_MARKER",
    "ScenarioMap",
    "ScenarioResolver",
    # Runtime
    "ValidationEngine",
    "ErrorBag",
    "ModelHooks",
    "UnsafeAssignmentNotice",
    # Validators
    "Validator",
    "InlineValidator",
    "BooleanValidator",
    "CompareValidator",
    "DefaultValueValidator",
    "FilterValidator",
    "IntegerValidator",
    "NumberValidator",
    "RangeValidator",
    "RegularExpressionValidator",
    "RequiredValidator",
    "SafeValidator",
    "StringValidator",
    # Errors
    "ModelRulesError",
    "ConfigError",
    "UnknownScenarioError",
    "UnknownAttributeError",
]
