"""Shared pytest fixtures for modelrules tests."""
from __future__ import annotations

import pytest

from modelrules.compile.compiler import RuleCompiler
from modelrules.compile.registry import ValidatorRegistry
from modelrules.resolve.resolver import ScenarioResolver
from tests.fixtures import LoginForm, UserForm


@pytest.fixture
def compiler() -> RuleCompiler:
    return RuleCompiler()


@pytest.fixture
def resolver() -> ScenarioResolver:
    return ScenarioResolver()


@pytest.fixture
def login() -> LoginForm:
    """A LoginForm whose confirmation password does not match."""
    return LoginForm(username="bob", password="secret", password2="typo")


@pytest.fixture
def user() -> UserForm:
    return UserForm()


@pytest.fixture
def registry_snapshot():
    """Restore the global validator registry after a test registers aliases."""
    saved = dict(ValidatorRegistry._validators)
    yield ValidatorRegistry
    ValidatorRegistry._validators.clear()
    ValidatorRegistry._validators.update(saved)
