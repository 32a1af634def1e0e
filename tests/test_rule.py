"""Unit tests for RuleSpec parsing and the rule() helper."""
from __future__ import annotations

import pytest

from modelrules.errors import ConfigError
from modelrules.schema.rule import RuleSpec, rule


def test_tuple_form_with_params():
    spec = RuleSpec.parse((["a", "b"], "string", {"max": 5}))
    assert spec.attributes == ["a", "b"]
    assert spec.validator == "string"
    assert spec.params == {"max": 5}
    assert spec.on == []
    assert spec.except_ == []


def test_scalar_attribute_is_coerced_to_list():
    spec = RuleSpec.parse(("a", "required"))
    assert spec.attributes == ["a"]


def test_duplicate_attributes_keep_first_occurrence():
    spec = RuleSpec.parse((["b", "a", "b"], "required"))
    assert spec.attributes == ["b", "a"]


def test_reserved_keys_are_lifted_out_of_params():
    spec = RuleSpec.parse(("a", "required", {"on": "register", "except": ["x", "y"], "message": "m"}))
    assert spec.on == ["register"]
    assert spec.except_ == ["x", "y"]
    assert spec.params == {"message": "m"}


def test_mapping_form():
    spec = RuleSpec.parse(
        {"attributes": ["a"], "validator": "compare", "on": ["r"], "compare_value": 3}
    )
    assert spec.on == ["r"]
    assert spec.params == {"compare_value": 3}


def test_rule_helper_accepts_except_keyword():
    spec = rule("a", "required", except_="import", message="m")
    assert spec.except_ == ["import"]
    assert spec.params == {"message": "m"}


def test_callable_validator_is_accepted():
    def check(record, attribute, params):
        return None

    spec = rule("a", check)
    assert spec.validator is check


def test_parse_returns_existing_spec_unchanged():
    spec = rule("a", "required")
    assert RuleSpec.parse(spec) is spec


@pytest.mark.parametrize(
    "raw",
    [
        ("a",),
        ((), "required"),
        ([], "required"),
        ("a", None),
        ("a", ""),
        ("a", "required", "not-a-mapping"),
        ("a", "required", {}, "extra"),
        {"validator": "required"},
        {"attributes": ["a"]},
        42,
    ],
)
def test_malformed_rules_raise_config_error(raw):
    with pytest.raises(ConfigError) as exc_info:
        RuleSpec.parse(raw)
    assert exc_info.value.rule == raw


def test_rule_helper_rejects_empty_attributes():
    with pytest.raises(ConfigError):
        rule([], "required")
