"""Type signature mapping service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gsettings_codegen.naming import case_identifier, variant_name
from gsettings_codegen.schema_management.schema_errors import (
    NameCollisionError,
    UnsupportedTypeError,
)
from gsettings_codegen.schema_management.schema_models import KeyDeclaration

from .type_descriptors import (
    ArrayType,
    ChoiceCase,
    ChoiceType,
    CustomType,
    FlagsType,
    PrimitiveKind,
    PrimitiveType,
    TypeDescriptor,
)

PRIMITIVE_SIGNATURES: dict[str, PrimitiveKind] = {
    "b": PrimitiveKind.BOOLEAN,
    "s": PrimitiveKind.STRING,
    "y": PrimitiveKind.BYTE,
    "n": PrimitiveKind.INT16,
    "q": PrimitiveKind.UINT16,
    "i": PrimitiveKind.INT32,
    "u": PrimitiveKind.UINT32,
    "x": PrimitiveKind.INT64,
    "t": PrimitiveKind.UINT64,
    "d": PrimitiveKind.DOUBLE,
}
ARRAY_SIGNATURES: dict[str, PrimitiveKind] = {"as": PrimitiveKind.STRING}


@dataclass(frozen=True)
class TypeOverride:
    """User-supplied annotation for one key or every key of one signature."""

    annotation: str
    key_name: str | None = None
    signature: str | None = None
    imports: tuple[str, ...] = ()

    def matches_key(self, key_name: str) -> bool:
        return self.key_name is not None and self.key_name == key_name

    def matches_signature(self, signature: str) -> bool:
        return self.key_name is None and self.signature == signature


def map_signature(signature: str, *, key_name: str) -> TypeDescriptor:
    """Map a GVariant type signature to a descriptor or raise UnsupportedTypeError."""
    kind = PRIMITIVE_SIGNATURES.get(signature)
    if kind is not None:
        return PrimitiveType(kind)
    element = ARRAY_SIGNATURES.get(signature)
    if element is not None:
        return ArrayType(element)
    raise UnsupportedTypeError(key_name, signature)


def map_key_type(
    declaration: KeyDeclaration, *, overrides: Sequence[TypeOverride] = ()
) -> TypeDescriptor:
    """Return the descriptor for one key, honoring overrides and choice lists."""
    override = _find_override(declaration, overrides)
    if override is not None:
        return CustomType(
            signature=declaration.type_signature,
            annotation=override.annotation,
            imports=override.imports,
        )

    if declaration.flags_id:
        return _flags_type(declaration)

    descriptor = map_signature(declaration.type_signature, key_name=declaration.name)
    if not declaration.choices:
        return descriptor
    if descriptor != PrimitiveType(PrimitiveKind.STRING):
        raise UnsupportedTypeError(
            declaration.name, declaration.type_signature, "choices require type 's'"
        )
    return _choice_type(declaration)


def _find_override(
    declaration: KeyDeclaration, overrides: Sequence[TypeOverride]
) -> TypeOverride | None:
    for override in overrides:
        if override.matches_key(declaration.name):
            return override
    for override in overrides:
        if override.matches_signature(declaration.type_signature):
            return override
    return None


def _choice_type(declaration: KeyDeclaration) -> ChoiceType:
    assert declaration.choices is not None
    return ChoiceType(
        variant_name=variant_name(declaration.enum_id or declaration.name),
        cases=_cases(declaration, declaration.choices),
    )


def _flags_type(declaration: KeyDeclaration) -> FlagsType:
    if not declaration.flag_nicks:
        raise UnsupportedTypeError(
            declaration.name,
            declaration.type_signature,
            f"flags '{declaration.flags_id}' declare no values",
        )
    assert declaration.flags_id is not None
    return FlagsType(
        variant_name=variant_name(declaration.flags_id),
        cases=_cases(declaration, declaration.flag_nicks),
    )


def _cases(declaration: KeyDeclaration, values: Sequence[str]) -> tuple[ChoiceCase, ...]:
    cases: list[ChoiceCase] = []
    owners: dict[str, str] = {}
    for value in values:
        identifier = case_identifier(value)
        if identifier in owners:
            first = f"{declaration.name}:{owners[identifier]}"
            raise NameCollisionError(identifier, first, f"{declaration.name}:{value}")
        owners[identifier] = value
        cases.append(ChoiceCase(identifier=identifier, value=value))
    return tuple(cases)
