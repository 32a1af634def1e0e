"""Per-attribute accumulator of validation messages."""
from __future__ import annotations

from collections.abc import Iterable, Mapping


class ErrorBag:
    """Ordered multi-map of attribute name to error messages.

    An attribute key exists only while it holds at least one message, so
    ``has()`` is true exactly when the bag is non-empty.  Message order within
    one attribute is insertion order.
    """

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def add(self, attribute: str, message: str = "") -> None:
        """Append ``message`` to ``attribute``'s list."""
        self._errors.setdefault(attribute, []).append(message)

    def add_all(self, items: Mapping[str, str | Iterable[str]]) -> None:
        """Append one or many messages per attribute.

        Args:
            items: Attribute name to a single message or an iterable of
                messages.
        """
        for attribute, messages in items.items():
            if isinstance(messages, str):
                self.add(attribute, messages)
            else:
                for message in messages:
                    self.add(attribute, message)

    def clear(self, attribute: str | None = None) -> None:
        """Remove the messages of ``attribute``, or of every attribute."""
        if attribute is None:
            self._errors.clear()
        else:
            self._errors.pop(attribute, None)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def has(self, attribute: str | None = None) -> bool:
        if attribute is None:
            return bool(self._errors)
        return attribute in self._errors

    def all(self) -> dict[str, list[str]]:
        """Returns a copy of the full mapping."""
        return {attribute: list(messages) for attribute, messages in self._errors.items()}

    def get(self, attribute: str) -> list[str]:
        """Returns a copy of ``attribute``'s messages (``[]`` when none)."""
        return list(self._errors.get(attribute, ()))

    def first_of(self, attribute: str) -> str | None:
        messages = self._errors.get(attribute)
        return messages[0] if messages else None

    def first_of_each(self) -> dict[str, str]:
        """Returns the first message of every attribute that has one."""
        return {attribute: messages[0] for attribute, messages in self._errors.items() if messages}

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._errors

    def __repr__(self) -> str:
        return f"ErrorBag({self._errors!r})"
