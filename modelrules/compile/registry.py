"""Validator registry (Open/Closed Principle).

Rule declarations refer to validators by alias (``"required"``,
``"compare"``, ...).  ``ValidatorRegistry`` maps those aliases to
:class:`~modelrules.validators.base.Validator` classes so new validators can
be added without touching the compiler.

Usage::

    from modelrules.compile.registry import ValidatorRegistry

    @ValidatorRegistry.register("slug")
    class SlugValidator(Validator):
        ...

After registration, any rule declared as ``rule("handle", "slug")`` compiles
to a ``SlugValidator``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from modelrules.errors import ConfigError
from modelrules.validators.base import Validator


class ValidatorRegistry:
    """Registry mapping validator aliases to :class:`Validator` classes.

    Example::

        @ValidatorRegistry.register("slug")
        class SlugValidator(Validator):
            ...

        validator = ValidatorRegistry.create("slug", ["handle"])
    """

    _validators: ClassVar[dict[str, type[Validator]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Validator]], type[Validator]]:
        """Decorator that registers a validator class under ``name``.

        Args:
            name: The alias used in rule declarations.

        Returns:
            A decorator that registers and returns the validator class.
        """

        def decorator(validator_cls: type[Validator]) -> type[Validator]:
            cls._validators[name] = validator_cls
            return validator_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, validator_cls: type[Validator]) -> None:
        """Register a validator class without using the decorator form."""
        cls._validators[name] = validator_cls

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove ``name`` from the registry (no-op if absent)."""
        cls._validators.pop(name, None)

    @classmethod
    def get(cls, name: str) -> type[Validator] | None:
        """Return the class registered for ``name``, or ``None``."""
        return cls._validators.get(name)

    @classmethod
    def create(cls, name: str, attributes: list[str], **params: Any) -> Validator:
        """Instantiate the validator registered for ``name``.

        Args:
            name: The validator alias.
            attributes: Attribute descriptors to bind.
            **params: Constructor keyword arguments.

        Returns:
            A fresh :class:`Validator` instance.

        Raises:
            ConfigError: If no validator is registered for ``name``.
        """
        validator_cls = cls._validators.get(name)
        if validator_cls is None:
            raise ConfigError(
                f"Unknown validator type: '{name}'. "
                f"Registered types: {cls.registered_types()}."
            )
        return validator_cls(attributes, **params)

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return the sorted list of registered validator aliases."""
        return sorted(cls._validators)
