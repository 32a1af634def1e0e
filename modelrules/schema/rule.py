"""Pydantic model for a single declarative validation rule.

A record type declares its rules as an ordered list.  Each entry names the
attributes it covers, the validator that checks them, optional scenario
filters and any extra validator parameters::

    rules = [
        rule(["username", "password"], "required"),
        rule("password", "compare", compare_attribute="password2", on="register"),
        (["email"], "match", {"pattern": r".+@.+", "except": "import"}),
    ]

The tuple form mirrors the positional ``(attributes, validator, params)``
declaration surface; ``on`` and ``except`` are reserved parameter keys that
are lifted out of ``params`` into the scenario filters.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modelrules.errors import ConfigError


def _as_name_list(value: Any) -> list[str]:
    """Coerce a scalar-or-sequence declaration to a de-duplicated list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple, set, frozenset)):
        # Left for pydantic to reject with a type error.
        return value
    names: list[str] = []
    for item in value:
        if item not in names:
            names.append(item)
    return names


class RuleSpec(BaseModel):
    """One validation rule, before compilation.

    Attributes:
        attributes: Attribute descriptors the rule applies to, in declaration
            order.  A leading ``!`` marks an attribute as active but unsafe.
        validator: Validator alias, validator class, or inline callable.
        on: Scenarios in which the rule is active (empty = all unless
            excepted).
        except_: Scenarios in which the rule is inactive.  Serialised as
            ``except``.
        params: Extra keyword arguments for the validator constructor.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    attributes: list[str] = Field(min_length=1)
    validator: str | Callable[..., Any]
    on: list[str] = Field(default_factory=list)
    except_: list[str] = Field(default_factory=list, alias="except")
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("attributes", "on", "except_", mode="before")
    @classmethod
    def _coerce_names(cls, value: Any) -> list[str]:
        return _as_name_list(value)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, raw: Any) -> RuleSpec:
        """Build a RuleSpec from any supported declaration form.

        Accepted forms are an existing :class:`RuleSpec`, a mapping with
        ``attributes`` / ``validator`` keys, or a positional sequence
        ``(attributes, validator[, params])``.

        Args:
            raw: The rule declaration.

        Returns:
            The parsed :class:`RuleSpec`.

        Raises:
            ConfigError: If the declaration is missing the attribute list or
                the validator type, or is otherwise malformed.
        """
        if isinstance(raw, RuleSpec):
            return raw
        if isinstance(raw, Mapping):
            data = dict(raw)
            params = dict(data.pop("params", None) or {})
            attributes = data.pop("attributes", None)
            validator = data.pop("validator", None)
            params.update(data)
            return cls._from_parts(raw, attributes, validator, params)
        if isinstance(raw, (list, tuple)):
            if len(raw) < 2 or len(raw) > 3:
                raise ConfigError(
                    "Invalid validation rule: a rule must specify both attribute "
                    "names and validator type.",
                    rule=raw,
                )
            params = raw[2] if len(raw) == 3 else {}
            if not isinstance(params, Mapping):
                raise ConfigError(
                    "Invalid validation rule: rule parameters must be a mapping.",
                    rule=raw,
                )
            return cls._from_parts(raw, raw[0], raw[1], dict(params))
        raise ConfigError(
            f"Invalid validation rule of type {type(raw).__name__}.", rule=raw
        )

    @classmethod
    def _from_parts(
        cls,
        raw: Any,
        attributes: Any,
        validator: Any,
        params: dict[str, Any],
    ) -> RuleSpec:
        if not attributes or validator is None or validator == "":
            raise ConfigError(
                "Invalid validation rule: a rule must specify both attribute "
                "names and validator type.",
                rule=raw,
            )
        on = params.pop("on", None)
        except_ = params.pop("except", None)
        alt_except = params.pop("except_", None)
        if except_ is None:
            except_ = alt_except
        try:
            return cls(
                attributes=attributes,
                validator=validator,
                on=on,
                except_=except_,
                params=params,
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid validation rule: {exc}", rule=raw) from exc


def rule(
    attributes: str | list[str],
    validator: str | Callable[..., Any],
    *,
    on: str | list[str] | None = None,
    except_: str | list[str] | None = None,
    **params: Any,
) -> RuleSpec:
    """Declare a rule with keyword parameters.

    Example::

        rule("password", "compare", compare_attribute="password2", on=["register"])

    Raises:
        ConfigError: If ``attributes`` is empty or ``validator`` is missing.
    """
    return RuleSpec._from_parts(
        (attributes, validator, params),
        attributes,
        validator,
        {**params, "on": on, "except": except_},
    )
