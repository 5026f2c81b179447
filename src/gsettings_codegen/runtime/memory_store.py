"""In-memory settings store for application tests and previews."""

from __future__ import annotations

import copy
import itertools
from collections.abc import Iterable, Mapping
from typing import Any

from .store_contracts import BindFlags, ChangeCallback


class MemorySettingsStore:
    """Dictionary-backed store implementing the `SettingsStore` protocol.

    Keys unknown to `defaults` raise KeyError, mirroring a store that only
    serves keys declared in its schema. Keys listed in `read_only` reject
    writes by returning False from `set_value`.

    Bindings only run in the get direction: the store cannot observe
    arbitrary target objects, so `BindFlags.SET` without `BindFlags.GET`
    raises ValueError and sensitivity is never toggled.
    """

    def __init__(self, defaults: Mapping[str, Any], *, read_only: Iterable[str] = ()) -> None:
        self._defaults = dict(defaults)
        self._values: dict[str, Any] = {}
        self._read_only = frozenset(read_only)
        self._handlers: dict[int, tuple[str, ChangeCallback]] = {}
        self._handler_ids = itertools.count(1)
        unknown = self._read_only - self._defaults.keys()
        if unknown:
            raise KeyError(f"Read-only keys are not declared: {', '.join(sorted(unknown))}")

    def get_value(self, key_name: str) -> Any:
        self._require_key(key_name)
        if key_name in self._values:
            return copy.deepcopy(self._values[key_name])
        return copy.deepcopy(self._defaults[key_name])

    def set_value(self, key_name: str, raw: Any) -> bool:
        self._require_key(key_name)
        if key_name in self._read_only:
            return False
        self._values[key_name] = copy.deepcopy(raw)
        self._notify(key_name)
        return True

    def is_writable(self, key_name: str) -> bool:
        self._require_key(key_name)
        return key_name not in self._read_only

    def has_user_value(self, key_name: str) -> bool:
        self._require_key(key_name)
        return key_name in self._values

    def reset(self, key_name: str) -> None:
        """Drop an explicit value so the default applies again."""
        self._require_key(key_name)
        if key_name in self._values:
            del self._values[key_name]
            self._notify(key_name)

    def connect_changed(self, key_name: str, callback: ChangeCallback) -> int:
        self._require_key(key_name)
        handler_id = next(self._handler_ids)
        self._handlers[handler_id] = (key_name, callback)
        return handler_id

    def bind(
        self,
        key_name: str,
        target: object,
        property_name: str,
        flags: BindFlags = BindFlags.DEFAULT,
    ) -> None:
        self._require_key(key_name)
        if flags & BindFlags.SET and not flags & BindFlags.GET:
            raise ValueError(f"Set-only bindings are not supported: {key_name}")
        invert = bool(flags & BindFlags.INVERT_BOOLEAN)

        def apply(_changed_key: str) -> None:
            value = self.get_value(key_name)
            setattr(target, property_name, not value if invert else value)

        apply(key_name)
        if not flags & BindFlags.GET_NO_CHANGES:
            self.connect_changed(key_name, apply)

    def create_action(self, key_name: str) -> MemorySettingsAction:
        self._require_key(key_name)
        return MemorySettingsAction(self, key_name)

    def disconnect(self, handler_id: int) -> None:
        self._handlers.pop(handler_id, None)

    def _notify(self, key_name: str) -> None:
        for handled_key, callback in list(self._handlers.values()):
            if handled_key == key_name:
                callback(key_name)

    def _require_key(self, key_name: str) -> None:
        if key_name not in self._defaults:
            raise KeyError(f"Unknown settings key: {key_name}")


class MemorySettingsAction:
    """Action over one key of a `MemorySettingsStore`."""

    def __init__(self, store: MemorySettingsStore, key_name: str) -> None:
        self._store = store
        self._key_name = key_name

    @property
    def name(self) -> str:
        return self._key_name

    def get_state(self) -> Any:
        return self._store.get_value(self._key_name)

    def activate(self, parameter: Any = None) -> None:
        if parameter is None:
            state = self.get_state()
            if not isinstance(state, bool):
                raise ValueError(f"Action {self._key_name} requires a parameter.")
            parameter = not state
        self._store.set_value(self._key_name, parameter)
