"""Record base class wiring rules, scenarios, validation and assignment.

A record type declares its attributes and its rules::

    class SignupForm(Model):
        schema = RecordSchema.of("username", "password", "password2", "is_admin")

        def rules(self):
            return [
                rule(["username", "password"], "required"),
                rule("password", "compare", compare_attribute="password2", on="register"),
            ]

    form = SignupForm()
    form.scenario = "register"
    form.set_attributes({"username": "bob", "password": "x", "password2": "y"})
    form.validate()            # False
    form.get_first_errors()    # {"password": 'Password must be equal to "Password2".'}

Validators are compiled on first use and cached for the lifetime of the
instance; :meth:`Model.reset_validators` forces recompilation.  The scenario
map is re-resolved on every call so validators injected into the cached
list take effect immediately.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, ClassVar

from modelrules.compile.compiler import RuleCompiler
from modelrules.engine.assign import UnsafeAssignmentNotice, assign
from modelrules.engine.engine import ValidationEngine
from modelrules.engine.errors import ErrorBag
from modelrules.engine.hooks import ModelHooks
from modelrules.errors import UnknownAttributeError
from modelrules.resolve.resolver import ScenarioResolver
from modelrules.schema.record import ModelConfig, RecordSchema
from modelrules.schema.scenario import DEFAULT_SCENARIO, ScenarioMap
from modelrules.validators.base import Validator
from modelrules.validators.builtin import RequiredValidator

logger = logging.getLogger(__name__)

_resolver = ScenarioResolver()


class Model:
    """Base class for validated records.

    Class attributes:
        schema: Ordered attribute declaration.
        config: Per-type behaviour switches.

    Args:
        scenario: Initial scenario name.
        **values: Initial attribute values, assigned without safety
            filtering.
    """

    schema: ClassVar[RecordSchema] = RecordSchema()
    config: ClassVar[ModelConfig] = ModelConfig()

    def __init__(self, scenario: str = DEFAULT_SCENARIO, **values: Any) -> None:
        self._values: dict[str, Any] = self.schema.defaults()
        self._scenario = scenario
        self._validators: list[Validator] | None = None
        self._errors = ErrorBag()
        self.hooks = ModelHooks()
        self.hooks.before_validate(lambda record: record.before_validate())
        self.hooks.after_validate(lambda record: record.after_validate())
        self._engine = ValidationEngine(self._errors, self.hooks, _resolver)
        if values:
            self.set_attributes(values, safe_only=False)

    # ------------------------------------------------------------------
    # Declarations (override in subclasses)
    # ------------------------------------------------------------------

    def rules(self) -> Sequence[Any]:
        """Validation rules for this record type; empty by default."""
        return []

    def attribute_labels(self) -> dict[str, str]:
        """Attribute labels; defaults to labels declared in :attr:`schema`."""
        return {f.name: f.label for f in self.schema.fields if f.label is not None}

    def scenarios(self) -> ScenarioMap:
        """Scenario name to attribute descriptors.

        Resolved from the compiled validators by default.  Override to
        declare scenarios explicitly, for example::

            def scenarios(self):
                return ScenarioMap.from_declared(
                    {**super().scenarios(), "login": ["username", "!password"]}
                )
        """
        return _resolver.resolve(self.get_validators())

    def form_name(self) -> str:
        """Key this record's data is nested under when loading a form."""
        if self.config.form_name is not None:
            return self.config.form_name
        return type(self).__name__

    # ------------------------------------------------------------------
    # Attribute access
    # ------------------------------------------------------------------

    def attributes(self) -> list[str]:
        """Returns all declared attribute names."""
        return self.schema.names

    def get(self, name: str) -> Any:
        if name not in self._values:
            raise UnknownAttributeError(name, type(self).__name__)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        if name not in self._values:
            raise UnknownAttributeError(name, type(self).__name__)
        self._values[name] = value

    def get_attributes(
        self,
        names: Iterable[str] | None = None,
        except_: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Returns ``name -> value`` for ``names`` (default all), minus ``except_``."""
        skip = set(except_)
        selected = self.attributes() if names is None else list(names)
        return {name: self.get(name) for name in selected if name not in skip}

    def set_attributes(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
        """Mass-assign ``values``.

        Args:
            values: Incoming ``name -> value`` pairs.
            safe_only: Write only the safe attributes of the current
                scenario; other names are reported via
                :meth:`on_unsafe_attribute`.  When False, every declared
                attribute may be written.
        """
        permitted = self.safe_attributes() if safe_only else self.attributes()
        assign(self, values, permitted, safe_only, self.on_unsafe_attribute)

    def on_unsafe_attribute(self, name: str, value: Any) -> None:
        """Report a rejected mass-assignment attempt.  Never raises."""
        notice = UnsafeAssignmentNotice(type(self).__name__, name, value)
        if self.config.trace_unsafe_attributes:
            logger.debug(notice.message)
        self.hooks.notify_unsafe(notice)

    # ------------------------------------------------------------------
    # Scenario
    # ------------------------------------------------------------------

    @property
    def scenario(self) -> str:
        return self._scenario

    @scenario.setter
    def scenario(self, value: str) -> None:
        self._scenario = value

    def safe_attributes(self) -> list[str]:
        """Attributes mass-assignable in the current scenario."""
        return self.scenarios().safe_attributes(self._scenario)

    def active_attributes(self) -> list[str]:
        """Attributes validated in the current scenario."""
        return self.scenarios().active_attributes(self._scenario)

    def is_attribute_safe(self, attribute: str) -> bool:
        return attribute in self.safe_attributes()

    def is_attribute_active(self, attribute: str) -> bool:
        return attribute in self.active_attributes()

    def is_attribute_required(self, attribute: str) -> bool:
        """True if an unconditional ``required`` rule covers ``attribute`` now."""
        return any(
            isinstance(v, RequiredValidator) and v.when is None
            for v in self.get_active_validators(attribute)
        )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    def get_validators(self) -> list[Validator]:
        """The compiled validator list (compiled once, then cached).

        The returned list is the cache itself; appending to it injects a
        validator into subsequent passes.
        """
        if self._validators is None:
            self._validators = self.create_validators()
        return self._validators

    def create_validators(self) -> list[Validator]:
        return RuleCompiler().compile(self.rules(), owner=self)

    def reset_validators(self) -> None:
        """Drop the cached validators so the next use recompiles the rules."""
        self._validators = None

    def get_active_validators(self, attribute: str | None = None) -> list[Validator]:
        """Validators applicable in the current scenario, optionally for one attribute."""
        names = None if attribute is None else [attribute]
        return ValidationEngine.active_validators(self._scenario, self.get_validators(), names)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(
        self,
        attribute_names: Iterable[str] | None = None,
        clear_errors: bool = True,
    ) -> bool:
        """Validate this record in its current scenario.

        Args:
            attribute_names: Attributes to validate; ``None`` means every
                active attribute.  Names outside the active set are allowed.
            clear_errors: Clear existing errors first.

        Returns:
            True if no errors were recorded.

        Raises:
            UnknownScenarioError: If the current scenario is not declared.
        """
        return self._engine.validate(
            self,
            self._scenario,
            self.get_validators(),
            attribute_names=attribute_names,
            clear_errors=clear_errors,
            scenarios=self.scenarios,
        )

    def before_validate(self) -> bool:
        """Called before each pass; return False to cancel it."""
        return True

    def after_validate(self) -> None:
        """Called after each pass that was not cancelled."""

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @property
    def errors(self) -> ErrorBag:
        return self._errors

    def has_errors(self, attribute: str | None = None) -> bool:
        return self._errors.has(attribute)

    def get_errors(self, attribute: str | None = None) -> Any:
        """All errors (``dict``), or one attribute's messages (``list``)."""
        if attribute is None:
            return self._errors.all()
        return self._errors.get(attribute)

    def get_first_error(self, attribute: str) -> str | None:
        return self._errors.first_of(attribute)

    def get_first_errors(self) -> dict[str, str]:
        return self._errors.first_of_each()

    def add_error(self, attribute: str, message: str = "") -> None:
        self._errors.add(attribute, message)

    def add_errors(self, items: Mapping[str, str | Iterable[str]]) -> None:
        self._errors.add_all(items)

    def clear_errors(self, attribute: str | None = None) -> None:
        self._errors.clear(attribute)

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------

    def get_attribute_label(self, attribute: str) -> str:
        labels = self.attribute_labels()
        if attribute in labels:
            return labels[attribute]
        return self.generate_attribute_label(attribute)

    @staticmethod
    def generate_attribute_label(name: str) -> str:
        """``"first_name"`` / ``"firstName"`` → ``"First Name"``."""
        words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name)
        words = re.sub(r"[-_.]+", " ", words).strip()
        return " ".join(w[:1].upper() + w[1:] for w in words.split())

    # ------------------------------------------------------------------
    # Form loading
    # ------------------------------------------------------------------

    def load(self, data: Mapping[str, Any], form_name: str | None = None) -> bool:
        """Mass-assign this record's slice of ``data``.

        Args:
            data: Submitted data, nested under :meth:`form_name` unless the
                form name is ``""``.
            form_name: Overrides :meth:`form_name`.

        Returns:
            True if data for this record was found and assigned.
        """
        scope = self.form_name() if form_name is None else form_name
        if scope == "" and data:
            self.set_attributes(data)
            return True
        if scope and scope in data:
            self.set_attributes(data[scope])
            return True
        return False

    # ------------------------------------------------------------------
    # Item access adapter
    # ------------------------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._values and self._values[name] is not None

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self.get_attributes().items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scenario={self._scenario!r}, {self._values!r})"


# ---------------------------------------------------------------------------
# Bulk entry points
# ---------------------------------------------------------------------------


def load_multiple(
    models: Sequence[Model],
    data: Mapping[str, Any],
    form_name: str | None = None,
) -> bool:
    """Load tabular form data into ``models``, one row per model.

    ``data`` is ``{form_name: {index: row}}`` (or ``{index: row}`` when the
    form name is ``""``); indexes may be ints or their string forms.

    Args:
        models: The records to populate, in index order.
        data: Submitted data.
        form_name: Defaults to the first model's :meth:`Model.form_name`.

    Returns:
        True if at least one model received data.
    """
    if not models:
        return False
    if form_name is None:
        form_name = models[0].form_name()
    rows = data if form_name == "" else data.get(form_name)
    success = False
    for index, model in enumerate(models):
        row = _row(rows, index)
        if row:
            model.load(row, "")
            success = True
    return success


def _row(rows: Any, index: int) -> Any:
    if isinstance(rows, Mapping):
        row = rows.get(index)
        return row if row is not None else rows.get(str(index))
    if isinstance(rows, Sequence) and not isinstance(rows, str) and index < len(rows):
        return rows[index]
    return None
