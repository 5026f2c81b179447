"""Store boundary used by generated settings modules."""

from __future__ import annotations

from collections.abc import Callable
from enum import Flag
from typing import Any, Protocol, runtime_checkable

ChangeCallback = Callable[[str], None]


class BindFlags(Flag):
    """Direction and behavior of a key-to-property binding."""

    DEFAULT = 0
    GET = 1
    SET = 2
    NO_SENSITIVITY = 4
    GET_NO_CHANGES = 8
    INVERT_BOOLEAN = 16


class ConversionError(ValueError):
    """Raised when a raw store value cannot be converted to its generated type."""


class UnknownVariantError(ConversionError):
    """Raised when a choice key holds a string outside its declared choices."""

    def __init__(self, variant_name: str, raw: object) -> None:
        super().__init__(f"{raw!r} is not a known {variant_name} choice.")
        self.variant_name = variant_name
        self.raw = raw


class WriteError(Exception):
    """Raised when the store rejects a write."""


class NotWritableError(WriteError):
    """Raised when the store reports the key as not writable."""

    def __init__(self, key_name: str) -> None:
        super().__init__(f"Settings key is not writable: {key_name}")
        self.key_name = key_name


@runtime_checkable
class SettingsAction(Protocol):
    """Stateful action whose state mirrors one settings key."""

    @property
    def name(self) -> str:
        """Action name, equal to the key name."""

    def get_state(self) -> Any:
        """Return the current raw value of the key."""

    def activate(self, parameter: Any = None) -> None:
        """Toggle a boolean key or write `parameter` to any other key."""


@runtime_checkable
class SettingsStore(Protocol):
    """Key-value store the generated accessors delegate to."""

    def get_value(self, key_name: str) -> Any:
        """Return the raw value, falling back to the schema default."""

    def set_value(self, key_name: str, raw: Any) -> bool:
        """Write the raw value; return False when the key is not writable."""

    def connect_changed(self, key_name: str, callback: ChangeCallback) -> int:
        """Register `callback` for changes of `key_name`; return a handler id."""

    def bind(
        self, key_name: str, target: object, property_name: str, flags: BindFlags
    ) -> None:
        """Keep `property_name` of `target` in sync with `key_name`."""

    def create_action(self, key_name: str) -> SettingsAction:
        """Return an action whose state follows `key_name`."""


StoreFactory = Callable[[str], SettingsStore]
