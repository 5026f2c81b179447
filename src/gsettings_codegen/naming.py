"""Deterministic name derivation for generated Python identifiers."""

from __future__ import annotations

import keyword
import re

from gsettings_codegen.schema_management.schema_errors import NameCollisionError

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")
_WORD_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def accessor_name(key_name: str) -> str:
    """Return the getter name for a key, e.g. `window-width` -> `window_width`."""
    name = _NON_IDENTIFIER.sub("_", key_name.replace("-", "_"))
    if not name or name[0].isdigit():
        name = f"key_{name}"
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        name = f"{name}_"
    return name


def variant_name(source_name: str) -> str:
    """Return a PascalCase class name for a key name or dotted enum id."""
    last_segment = source_name.rsplit(".", 1)[-1]
    words = [word for word in _WORD_SEPARATORS.split(last_segment) if word]
    name = "".join(word[:1].upper() + word[1:] for word in words)
    if not name or name[0].isdigit():
        name = f"Choice{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


def case_identifier(choice: str) -> str:
    """Return the enum member name for a choice value, e.g. `desktop-audio` -> `DESKTOP_AUDIO`."""
    name = _NON_IDENTIFIER.sub("_", choice).upper()
    if not name or name[0].isdigit() or name.startswith("_"):
        name = f"V_{name}"
    return name


class NameRegistry:
    """Tracks generated names and their owners to detect collisions."""

    def __init__(self, reserved: tuple[str, ...] = (), *, reserved_owner: str = "<reserved>"):
        self._owners: dict[str, str] = {name: reserved_owner for name in reserved}

    def claim(self, name: str, owner: str) -> str:
        """Register `name` for `owner`; raise NameCollisionError if another owner holds it."""
        current = self._owners.get(name)
        if current is not None:
            raise NameCollisionError(name, current, owner)
        self._owners[name] = owner
        return name

    def __contains__(self, name: object) -> bool:
        return name in self._owners
