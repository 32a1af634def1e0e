"""Unit tests for the Model record base class."""
from __future__ import annotations

import dataclasses

import pytest

from modelrules import FieldSpec, Model, RecordSchema, rule
from modelrules.errors import ConfigError, UnknownAttributeError
from modelrules.schema.record import Record
from modelrules.validators.builtin import CompareValidator, RequiredValidator
from tests.fixtures import LoginForm, TabularRow, UserForm


# ---------------------------------------------------------------------------
# Schema and attribute access
# ---------------------------------------------------------------------------


def test_schema_defaults_are_copied_per_instance():
    class Tagged(Model):
        schema = RecordSchema.of(FieldSpec(name="tags", default=[]))

    first, second = Tagged(), Tagged()
    first.get("tags").append("x")
    assert second.get("tags") == []


def test_duplicate_field_names_rejected():
    with pytest.raises(ConfigError):
        RecordSchema.of("a", "a")


def test_unknown_attribute_raises(user):
    with pytest.raises(UnknownAttributeError) as exc_info:
        user.get("nickname")
    assert exc_info.value.attribute == "nickname"
    with pytest.raises(UnknownAttributeError):
        user.set("nickname", "x")


def test_get_attributes_subset_and_exclusion(user):
    user.set("username", "eve")
    assert user.get_attributes(["username", "email"]) == {"username": "eve", "email": None}
    assert list(user.get_attributes(except_=["status", "is_admin"])) == ["username", "email"]


def test_model_satisfies_record_protocol(user):
    assert isinstance(user, Record)


def test_constructor_values_bypass_safety():
    form = UserForm(status="banned")
    assert form.get("status") == "banned"


# ---------------------------------------------------------------------------
# Item access
# ---------------------------------------------------------------------------


def test_item_access(user):
    user["username"] = "eve"
    assert user["username"] == "eve"
    assert "username" in user
    assert "email" not in user
    assert "nickname" not in user


def test_iteration_yields_name_value_pairs(login):
    assert dict(login) == {"username": "bob", "password": "secret", "password2": "typo"}


def test_repr_mentions_scenario(login):
    assert repr(login).startswith("LoginForm(scenario='default'")


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "name, label",
    [
        ("username", "Username"),
        ("first_name", "First Name"),
        ("firstName", "First Name"),
        ("password2", "Password2"),
        ("post-code", "Post Code"),
    ],
)
def test_generated_labels(name, label):
    assert Model.generate_attribute_label(name) == label


def test_declared_label_wins(user):
    assert user.get_attribute_label("email") == "E-mail address"


def test_attribute_labels_override():
    class Custom(LoginForm):
        def attribute_labels(self):
            return {"password2": "Confirmation"}

    form = Custom(username="a", password="b", password2="c", scenario="register")
    form.validate()
    assert form.get_first_error("password") == 'Password must be equal to "Confirmation".'


# ---------------------------------------------------------------------------
# Scenarios and validators
# ---------------------------------------------------------------------------


def test_resolved_scenarios(login):
    assert login.scenarios().names == ["default", "register"]
    assert login.active_attributes() == ["username", "password"]


def test_active_validators_for_attribute(login):
    login.scenario = "register"
    assert [type(v) for v in login.get_active_validators("password")] == [
        RequiredValidator,
        CompareValidator,
    ]
    assert login.get_active_validators("password2") == []


def test_required_with_guard_is_not_reported_as_required():
    class Guarded(Model):
        schema = RecordSchema.of("code")

        def rules(self):
            return [rule("code", "required", when=lambda record, attribute: True)]

    assert not Guarded().is_attribute_required("code")


def test_model_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Model.config.form_name = "Shared"
    assert UserForm.config.form_name is None


def test_form_name_defaults_to_class_name(user):
    assert user.form_name() == "UserForm"
    assert TabularRow().form_name() == "Row"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_manual_errors(user):
    user.add_error("username", "taken")
    user.add_errors({"email": ["bad", "worse"]})
    assert user.has_errors()
    assert user.get_errors("email") == ["bad", "worse"]
    assert user.get_first_errors() == {"username": "taken", "email": "bad"}
    user.clear_errors("email")
    assert user.get_errors() == {"username": ["taken"]}
    user.clear_errors()
    assert not user.errors


def test_hooks_decorator_form(user):
    @user.hooks.before_validate
    def _normalise(record):
        record.set("username", (record.get("username") or "").strip() or None)
        return True

    user.set("username", "  ")
    assert not user.validate()
    assert user.get("username") is None
