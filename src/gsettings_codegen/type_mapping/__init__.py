"""Type mapping exports."""

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
from .type_mapper import (
    ARRAY_SIGNATURES,
    PRIMITIVE_SIGNATURES,
    TypeOverride,
    map_key_type,
    map_signature,
)

__all__ = [
    "ArrayType",
    "ChoiceCase",
    "ChoiceType",
    "CustomType",
    "FlagsType",
    "PrimitiveKind",
    "PrimitiveType",
    "TypeDescriptor",
    "TypeOverride",
    "ARRAY_SIGNATURES",
    "PRIMITIVE_SIGNATURES",
    "map_key_type",
    "map_signature",
]
