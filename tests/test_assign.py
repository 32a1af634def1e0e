"""Unit tests for mass assignment and form loading."""
from __future__ import annotations

import logging

import pytest

from modelrules import load_multiple
from modelrules.engine.assign import UnsafeAssignmentNotice, assign
from tests.fixtures import CodeForm, TabularRow, UserForm


def _collect_notices(record) -> list[UnsafeAssignmentNotice]:
    notices: list[UnsafeAssignmentNotice] = []
    record.hooks.unsafe_attribute(notices.append)
    return notices


# ---------------------------------------------------------------------------
# Safe attributes
# ---------------------------------------------------------------------------


def test_safe_attributes_follow_scenario(user):
    assert user.safe_attributes() == ["username", "email"]
    user.scenario = "admin"
    assert user.safe_attributes() == ["username", "email", "is_admin"]


def test_unsafe_marker_keeps_attribute_active(user):
    assert user.is_attribute_active("status")
    assert not user.is_attribute_safe("status")


def test_status_rule_excluded_in_signup(user):
    user.scenario = "signup"
    assert user.active_attributes() == ["username", "email"]


# ---------------------------------------------------------------------------
# set_attributes
# ---------------------------------------------------------------------------


def test_non_safe_attribute_is_rejected_with_one_notice(user):
    notices = _collect_notices(user)
    user.set_attributes({"username": "eve", "is_admin": True})
    assert user.get("username") == "eve"
    assert user.get("is_admin") is False
    assert notices == [UnsafeAssignmentNotice("UserForm", "is_admin", True)]
    assert notices[0].message == "Failed to set unsafe attribute 'is_admin' in 'UserForm'."


def test_unsafe_marked_attribute_is_rejected(user):
    notices = _collect_notices(user)
    user.set_attributes({"status": "banned"})
    assert user.get("status") is None
    assert [n.attribute for n in notices] == ["status"]


def test_rejection_does_not_touch_error_bag(user):
    user.set_attributes({"is_admin": True})
    assert not user.has_errors()


def test_safe_only_false_writes_declared_attributes(user):
    notices = _collect_notices(user)
    user.set_attributes({"status": "active", "is_admin": True}, safe_only=False)
    assert user.get("status") == "active"
    assert user.get("is_admin") is True
    assert notices == []


def test_safe_only_false_ignores_undeclared_names(user):
    notices = _collect_notices(user)
    user.set_attributes({"nickname": "x"}, safe_only=False)
    assert "nickname" not in user.attributes()
    assert notices == []


def test_unknown_name_reported_when_safe_only(user):
    notices = _collect_notices(user)
    user.set_attributes({"nickname": "x"})
    assert [n.attribute for n in notices] == ["nickname"]


def test_rejection_is_logged_at_debug(user, caplog):
    with caplog.at_level(logging.DEBUG, logger="modelrules.model"):
        user.set_attributes({"is_admin": True})
    assert "Failed to set unsafe attribute 'is_admin' in 'UserForm'." in caplog.text


def test_trace_can_be_disabled(caplog):
    from modelrules import ModelConfig

    class Quiet(UserForm):
        config = ModelConfig(trace_unsafe_attributes=False)

    with caplog.at_level(logging.DEBUG, logger="modelrules.model"):
        Quiet().set_attributes({"is_admin": True})
    assert "unsafe attribute" not in caplog.text


# ---------------------------------------------------------------------------
# assign()
# ---------------------------------------------------------------------------


class _Bucket:
    def __init__(self) -> None:
        self.values: dict = {}

    def get(self, name):
        return self.values.get(name)

    def set(self, name, value):
        self.values[name] = value


def test_assign_returns_written_names_in_input_order():
    bucket = _Bucket()
    rejected: list[str] = []
    written = assign(
        bucket,
        {"b": 2, "x": 0, "a": 1},
        ["a", "b"],
        on_unsafe=lambda name, value: rejected.append(name),
    )
    assert written == ["b", "a"]
    assert bucket.values == {"b": 2, "a": 1}
    assert rejected == ["x"]


def test_assign_without_callback_drops_silently():
    bucket = _Bucket()
    assert assign(bucket, {"x": 1}, []) == []
    assert bucket.values == {}


# ---------------------------------------------------------------------------
# load / load_multiple
# ---------------------------------------------------------------------------


def test_load_uses_form_name(user):
    assert user.load({"UserForm": {"username": "eve", "email": "e@x"}})
    assert user.get_attributes(["username", "email"]) == {"username": "eve", "email": "e@x"}


def test_load_missing_scope_returns_false(user):
    assert not user.load({"Other": {"username": "eve"}})
    assert user.get("username") is None


def test_load_empty_form_name_reads_top_level(user):
    assert user.load({"username": "eve"}, form_name="")
    assert user.get("username") == "eve"


def test_load_empty_form_name_with_empty_data(user):
    assert not user.load({}, form_name="")


def test_load_filters_unsafe_attributes(user):
    user.load({"UserForm": {"username": "eve", "is_admin": True}})
    assert user.get("is_admin") is False


@pytest.mark.parametrize("flag", ["1", "0"])
def test_loaded_checkbox_strings_pass_boolean_rule(flag):
    form = CodeForm()
    assert form.load({"CodeForm": {"code": "123", "flag": flag}})
    assert form.validate()


def test_loaded_checkbox_rejects_other_strings():
    form = CodeForm()
    form.load({"CodeForm": {"code": "123", "flag": "on"}})
    assert not form.validate()
    assert form.get_errors() == {"flag": ['Flag must be either "1" or "0".']}


def test_load_multiple_with_int_and_str_indexes():
    rows = [TabularRow(), TabularRow(), TabularRow()]
    data = {"Row": {0: {"name": "a", "qty": "1"}, "2": {"name": "c", "qty": 3}}}
    assert load_multiple(rows, data)
    assert rows[0].get("name") == "a"
    assert rows[1].get("name") is None
    assert rows[2].get("qty") == 3


def test_load_multiple_with_list_rows():
    rows = [TabularRow(), TabularRow()]
    assert load_multiple(rows, {"Row": [{"name": "a"}]})
    assert rows[0].get("name") == "a"
    assert rows[1].get("name") is None


def test_load_multiple_without_matching_data():
    assert not load_multiple([TabularRow()], {"Other": {0: {"name": "a"}}})
    assert not load_multiple([], {"Row": {0: {"name": "a"}}})


def test_load_multiple_with_empty_form_name():
    rows = [TabularRow()]
    assert load_multiple(rows, {0: {"name": "a"}}, form_name="")
    assert rows[0].get("name") == "a"
