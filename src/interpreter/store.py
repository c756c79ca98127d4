"""
Variable Store
Flat session state read by bindings and visibility, written by actions and inputs.
"""

import math
from typing import Any, Callable

from core import JSONParseError, dumps_bytes, get_logger, loads


logger = get_logger(__name__)

StoreListener = Callable[[str, Any], None]


def is_truthy(value: Any) -> bool:
    """Truthiness used by visibility and toggles: empty containers count as true."""
    if value is None or value is False:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


class VariableStore:
    """
    Mapping of variable name to JSON-like value.

    Undeclared names read as ``None``; the first write declares them.
    Listeners are called with ``(name, value)`` after every write.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})
        self._listeners: list[StoreListener] = []

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value
        for listener in list(self._listeners):
            listener(name, value)

    def toggle(self, name: str) -> bool:
        """Flip the truthiness of ``name``; undefined counts as false."""
        value = not is_truthy(self._values.get(name))
        self.set(name, value)
        return value

    def declare(self, name: str) -> bool:
        """Create ``name`` with an empty string; False when it already exists."""
        if not name or name in self._values:
            return False
        self.set(name, "")
        return True

    def names(self) -> list[str]:
        return list(self._values)

    def snapshot(self) -> dict[str, Any]:
        """Shallow copy of the current values."""
        return dict(self._values)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def to_json(self) -> bytes:
        return dumps_bytes(self._values)

    @classmethod
    def from_json(cls, data: bytes | str) -> "VariableStore":
        """
        Restore a store saved with ``to_json``.

        Raises:
            JSONParseError: If the data is not a JSON object
        """
        values = loads(data)
        if not isinstance(values, dict):
            raise JSONParseError("Variable store must be a JSON object")
        logger.debug("store_restored", variables=len(values))
        return cls(values)
