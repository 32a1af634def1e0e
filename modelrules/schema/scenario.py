"""Resolved scenario map: scenario name to active attribute descriptors."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

#: Name of the scenario every record starts in.
DEFAULT_SCENARIO = "default"

#: Prefix marking a descriptor as active but excluded from mass assignment.
UNSAFE_MARKER = "!"


class ScenarioMap(Mapping[str, tuple[str, ...]]):
    """Read-only ``scenario -> attribute descriptors`` mapping.

    Descriptors keep their ``!`` marker; use :meth:`active_attributes` and
    :meth:`safe_attributes` for the stripped / filtered views.

    Args:
        scenarios: Scenario name to ordered descriptors.
    """

    def __init__(self, scenarios: Mapping[str, Iterable[str]]) -> None:
        self._scenarios: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {name: tuple(attrs) for name, attrs in scenarios.items()}
        )

    @classmethod
    def from_declared(cls, scenarios: Mapping[str, Iterable[str]]) -> ScenarioMap:
        """Build a map from an explicit declaration, keeping first-seen order.

        Duplicate descriptors within a scenario are dropped.
        """
        cleaned: dict[str, list[str]] = {}
        for name, attrs in scenarios.items():
            seen: list[str] = []
            for attr in attrs:
                if attr not in seen:
                    seen.append(attr)
            cleaned[name] = seen
        return cls(cleaned)

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, scenario: str) -> tuple[str, ...]:
        return self._scenarios[scenario]

    def __iter__(self) -> Iterator[str]:
        return iter(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __repr__(self) -> str:
        return f"ScenarioMap({dict(self._scenarios)!r})"

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def names(self) -> list[str]:
        """Returns all scenario names in resolution order."""
        return list(self._scenarios)

    def active_attributes(self, scenario: str) -> list[str]:
        """Attributes validated in ``scenario``, marker stripped.

        Returns ``[]`` for an unknown scenario.
        """
        return [
            a[1:] if a.startswith(UNSAFE_MARKER) else a
            for a in self._scenarios.get(scenario, ())
        ]

    def safe_attributes(self, scenario: str) -> list[str]:
        """Attributes mass-assignable in ``scenario``.

        Marker-prefixed descriptors are excluded entirely.  Returns ``[]`` for
        an unknown scenario.
        """
        return [
            a for a in self._scenarios.get(scenario, ()) if not a.startswith(UNSAFE_MARKER)
        ]
