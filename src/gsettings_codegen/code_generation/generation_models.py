"""Code generation entities."""

from __future__ import annotations

from dataclasses import dataclass

from gsettings_codegen.default_decoding.literal_models import DefaultValue, ValueRange
from gsettings_codegen.schema_management.schema_models import KeyDeclaration
from gsettings_codegen.type_mapping.type_descriptors import TypeDescriptor


@dataclass(frozen=True)
class CompiledKey:
    """Key declaration with its resolved type and decoded default."""

    declaration: KeyDeclaration
    descriptor: TypeDescriptor
    default: DefaultValue
    value_range: ValueRange | None = None

    @property
    def name(self) -> str:
        return self.declaration.name


@dataclass(frozen=True)
class GeneratedAccessorPair:  # pylint: disable=too-many-instance-attributes
    """Accessor methods emitted for one key."""

    key_name: str
    getter_name: str
    setter_name: str
    try_setter_name: str
    connect_name: str
    bind_name: str
    action_name: str
    getter_signature: str
    setter_signature: str
    doc_comment: str
    source_lines: tuple[str, ...]

    @property
    def member_names(self) -> tuple[str, ...]:
        return (
            self.getter_name,
            self.setter_name,
            self.try_setter_name,
            self.connect_name,
            self.bind_name,
            self.action_name,
        )


@dataclass(frozen=True)
class GeneratedVariant:
    """Enum or Flag class emitted for one choice or flags set."""

    variant_name: str
    key_names: tuple[str, ...]
    source_lines: tuple[str, ...]


@dataclass(frozen=True)
class GeneratedModule:
    """Complete generated settings module."""

    schema_id: str
    class_name: str
    accessors: tuple[GeneratedAccessorPair, ...]
    variants: tuple[GeneratedVariant, ...]
    source: str
