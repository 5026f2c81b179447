"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gsettings_codegen.schema_management.schema_models import KeyDeclaration
from gsettings_codegen.type_mapping.type_mapper import TypeOverride


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized schema settings."""

    schema_id: str
    text: str
    source_path: Path | None


@dataclass(frozen=True)
class OutputSettings:
    """Destination of the generated module; no path means check only."""

    path: Path | None
    class_name: str


@dataclass(frozen=True)
class SkipSettings:
    """Keys excluded from generation, by name or by type signature."""

    keys: tuple[str, ...] = ()
    signatures: tuple[str, ...] = ()

    def excludes(self, declaration: KeyDeclaration) -> bool:
        return declaration.name in self.keys or declaration.type_signature in self.signatures


@dataclass(frozen=True)
class Configuration:
    """Top-level build configuration aggregate."""

    path: Path | None
    schema: SchemaConfig
    output: OutputSettings
    skip: SkipSettings
    overrides: tuple[TypeOverride, ...]
