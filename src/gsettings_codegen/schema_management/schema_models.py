"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeyRange:
    """Inclusive numeric bounds declared with `<range min= max=/>`."""

    min_literal: str | None
    max_literal: str | None


@dataclass(frozen=True)
class EnumDeclaration:
    """Document-level `<enum>` or `<flags>` referenced through `enum="..."` or `flags="..."`."""

    enum_id: str
    nicks: tuple[str, ...]


@dataclass(frozen=True)
class KeyDeclaration:  # pylint: disable=too-many-instance-attributes
    """One `<key>` element of the matched schema."""

    name: str
    type_signature: str
    default_literal: str
    summary: str = ""
    description: str = ""
    choices: tuple[str, ...] | None = None
    enum_id: str | None = None
    flags_id: str | None = None
    flag_nicks: tuple[str, ...] | None = None
    range: KeyRange | None = None

    @property
    def has_choices(self) -> bool:
        """Return True when the key is restricted to a closed set of strings."""
        return bool(self.choices)


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed schema: its keys in document order plus the enums and flags they reference."""

    schema_id: str
    path: str | None
    keys: tuple[KeyDeclaration, ...]
    enums: Mapping[str, EnumDeclaration] = field(default_factory=dict)
    flags: Mapping[str, EnumDeclaration] = field(default_factory=dict)
    source: str | None = None
