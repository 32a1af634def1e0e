"""modelrules schema models: records, rules and scenario maps."""
from modelrules.schema.record import FieldSpec, ModelConfig, Record, RecordSchema
from modelrules.schema.rule import RuleSpec, rule
from modelrules.schema.scenario import DEFAULT_SCENARIO, UNSAFE_MARKER, ScenarioMap

__all__ = [
    "FieldSpec",
    "ModelConfig",
    "Record",
    "RecordSchema",
    "RuleSpec",
    "rule",
    "DEFAULT_SCENARIO",
    "UNSAFE_MARKER",
    "ScenarioMap",
]
