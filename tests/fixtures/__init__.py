"""Test fixtures: sample record types shared across the test suite."""

from __future__ import annotations

from modelrules import FieldSpec, Model, ModelConfig, RecordSchema, rule


class LoginForm(Model):
    """Required credentials everywhere; password confirmation on register."""

    schema = RecordSchema.of("username", "password", "password2")

    def rules(self):
        return [
            (["username", "password"], "required"),
            ("password", "compare", {"compare_attribute": "password2", "on": ["register"]}),
        ]


class UserForm(Model):
    """A record with an unsafe attribute and an admin-only flag."""

    schema = RecordSchema.of(
        "username",
        FieldSpec(name="email", label="E-mail address"),
        "status",
        FieldSpec(name="is_admin", default=False),
    )

    def rules(self):
        return [
            rule("username", "required"),
            rule("email", "match", pattern=r"^[^@\s]+@[^@\s]+$"),
            rule("!status", "in", range=["active", "banned"], except_="signup"),
            rule("is_admin", "boolean", on="admin"),
        ]


class TabularRow(Model):
    """Minimal record used for bulk loading."""

    schema = RecordSchema.of("name", "qty")
    config = ModelConfig(form_name="Row")

    def rules(self):
        return [
            rule("name", "required"),
            rule("qty", "integer", min=1),
        ]


class CodeForm(Model):
    """A coded entry with a literal-brace message and a form checkbox."""

    schema = RecordSchema.of("code", "flag")

    def rules(self):
        return [
            rule("code", "match", pattern=r"^\d{3}$", message=r"{attribute} must match \d{3}"),
            rule("flag", "boolean"),
        ]


def make_login(scenario: str = "default", **values) -> LoginForm:
    """Return a LoginForm with ``values`` assigned unfiltered."""
    return LoginForm(scenario=scenario, **values)
