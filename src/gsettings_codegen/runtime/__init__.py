"""Runtime support imported by generated settings modules."""

from .memory_store import MemorySettingsAction, MemorySettingsStore
from .store_contracts import (
    BindFlags,
    ChangeCallback,
    ConversionError,
    NotWritableError,
    SettingsAction,
    SettingsStore,
    StoreFactory,
    UnknownVariantError,
    WriteError,
)

__all__ = [
    "BindFlags",
    "ChangeCallback",
    "ConversionError",
    "MemorySettingsAction",
    "MemorySettingsStore",
    "NotWritableError",
    "SettingsAction",
    "SettingsStore",
    "StoreFactory",
    "UnknownVariantError",
    "WriteError",
]
