"""Unit tests for ScenarioResolver and ScenarioMap."""
from __future__ import annotations

from modelrules.resolve.resolver import ScenarioResolver
from modelrules.schema.scenario import DEFAULT_SCENARIO, ScenarioMap
from modelrules.validators.builtin import RequiredValidator, SafeValidator


def _resolve(*validators) -> ScenarioMap:
    return ScenarioResolver().resolve(list(validators))


def test_default_scenario_present_with_no_validators():
    scenarios = _resolve()
    assert list(scenarios) == [DEFAULT_SCENARIO]
    assert scenarios[DEFAULT_SCENARIO] == ()


def test_unfiltered_validator_applies_to_scenarios_introduced_by_others():
    scenarios = _resolve(
        RequiredValidator(["a"]),
        RequiredValidator(["b"], on=["register"]),
        RequiredValidator(["c"], except_=["import"]),
    )
    assert scenarios["register"] == ("a", "b", "c")
    assert scenarios["import"] == ("a",)
    assert scenarios[DEFAULT_SCENARIO] == ("a", "c")


def test_on_restricts_to_listed_scenarios():
    scenarios = _resolve(RequiredValidator(["a"], on=["x", "y"]))
    assert scenarios["x"] == ("a",)
    assert scenarios["y"] == ("a",)
    assert scenarios[DEFAULT_SCENARIO] == ()


def test_on_takes_precedence_over_except():
    scenarios = _resolve(
        RequiredValidator(["a"], on=["x"], except_=["x"]),
        RequiredValidator(["b"]),
    )
    assert scenarios["x"] == ("a", "b")


def test_except_only_excludes_listed_scenarios():
    scenarios = _resolve(
        RequiredValidator(["a"], except_=["x"]),
        RequiredValidator(["b"], on=["x"]),
    )
    assert scenarios["x"] == ("b",)
    assert scenarios[DEFAULT_SCENARIO] == ("a",)


def test_empty_non_default_scenarios_are_pruned():
    # "gone" is only ever excluded, so no validator targets it.
    scenarios = _resolve(RequiredValidator(["a"], on=["x"], except_=["gone"]))
    assert "gone" not in scenarios
    assert DEFAULT_SCENARIO in scenarios


def test_attributes_deduplicated_in_first_seen_order(resolver):
    scenarios = resolver.resolve(
        [RequiredValidator(["b", "a"]), SafeValidator(["a", "c", "b"])]
    )
    assert scenarios[DEFAULT_SCENARIO] == ("b", "a", "c")


def test_unsafe_marker_passes_through():
    scenarios = _resolve(RequiredValidator(["name", "!role"]))
    assert scenarios[DEFAULT_SCENARIO] == ("name", "!role")


def test_active_and_safe_views():
    scenarios = _resolve(RequiredValidator(["name", "!role"]))
    assert scenarios.active_attributes(DEFAULT_SCENARIO) == ["name", "role"]
    assert scenarios.safe_attributes(DEFAULT_SCENARIO) == ["name"]


def test_views_of_unknown_scenario_are_empty():
    scenarios = _resolve(RequiredValidator(["a"]))
    assert scenarios.active_attributes("nope") == []
    assert scenarios.safe_attributes("nope") == []


def test_from_declared_deduplicates():
    scenarios = ScenarioMap.from_declared({"login": ["u", "!p", "u"]})
    assert scenarios["login"] == ("u", "!p")
    assert scenarios.names == ["login"]


def test_custom_default_scenario_name():
    scenarios = ScenarioResolver(default_scenario="base").resolve([])
    assert scenarios.names == ["base"]
