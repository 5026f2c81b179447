"""Semantic type descriptors derived from GVariant type signatures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(str, Enum):
    """Scalar kinds with a direct Python counterpart."""

    BOOLEAN = "boolean"
    STRING = "string"
    BYTE = "byte"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    DOUBLE = "double"

    @property
    def annotation(self) -> str:
        """Python annotation used in generated accessors."""
        if self is PrimitiveKind.BOOLEAN:
            return "bool"
        if self is PrimitiveKind.STRING:
            return "str"
        if self is PrimitiveKind.DOUBLE:
            return "float"
        return "int"

    @property
    def integer_bounds(self) -> tuple[int, int] | None:
        """Inclusive value bounds for integer kinds, None otherwise."""
        return _INTEGER_BOUNDS.get(self)


_INTEGER_BOUNDS: dict[PrimitiveKind, tuple[int, int]] = {
    PrimitiveKind.BYTE: (0, 2**8 - 1),
    PrimitiveKind.INT16: (-(2**15), 2**15 - 1),
    PrimitiveKind.UINT16: (0, 2**16 - 1),
    PrimitiveKind.INT32: (-(2**31), 2**31 - 1),
    PrimitiveKind.UINT32: (0, 2**32 - 1),
    PrimitiveKind.INT64: (-(2**63), 2**63 - 1),
    PrimitiveKind.UINT64: (0, 2**64 - 1),
}


@dataclass(frozen=True)
class PrimitiveType:
    """Flat scalar stored as-is."""

    kind: PrimitiveKind

    @property
    def annotation(self) -> str:
        return self.kind.annotation

    @property
    def argument_annotation(self) -> str:
        return self.kind.annotation


@dataclass(frozen=True)
class ArrayType:
    """Homogeneous array of scalars; only strings are supported."""

    element: PrimitiveKind

    @property
    def annotation(self) -> str:
        return f"list[{self.element.annotation}]"

    @property
    def argument_annotation(self) -> str:
        return f"Sequence[{self.element.annotation}]"


@dataclass(frozen=True)
class ChoiceCase:
    """One member of a closed choice set."""

    identifier: str
    value: str


@dataclass(frozen=True)
class ChoiceType:
    """Closed set of strings, exposed as a generated `Enum`."""

    variant_name: str
    cases: tuple[ChoiceCase, ...]

    @property
    def annotation(self) -> str:
        return self.variant_name

    @property
    def argument_annotation(self) -> str:
        return self.variant_name

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(case.value for case in self.cases)


@dataclass(frozen=True)
class FlagsType:
    """Set of named bits stored as an `as` array of nicks, exposed as a generated `Flag`."""

    variant_name: str
    cases: tuple[ChoiceCase, ...]

    @property
    def annotation(self) -> str:
        return self.variant_name

    @property
    def argument_annotation(self) -> str:
        return self.variant_name

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(case.value for case in self.cases)


@dataclass(frozen=True)
class CustomType:
    """User-defined annotation for a signature or key the mapper does not cover."""

    signature: str
    annotation: str
    imports: tuple[str, ...] = ()

    @property
    def argument_annotation(self) -> str:
        return self.annotation


TypeDescriptor = PrimitiveType | ArrayType | ChoiceType | FlagsType | CustomType
