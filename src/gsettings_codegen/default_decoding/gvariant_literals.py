"""GVariant text-format literal decoding and canonical encoding."""

from __future__ import annotations

import math
import re

from gsettings_codegen.schema_management.schema_errors import InvalidDefaultError
from gsettings_codegen.schema_management.schema_models import KeyDeclaration
from gsettings_codegen.type_mapping.type_descriptors import (
    ArrayType,
    ChoiceType,
    CustomType,
    FlagsType,
    PrimitiveKind,
    PrimitiveType,
    TypeDescriptor,
)

from .literal_models import DefaultValue, ValueRange

_TYPE_KEYWORDS: dict[str, PrimitiveKind] = {
    "boolean": PrimitiveKind.BOOLEAN,
    "byte": PrimitiveKind.BYTE,
    "int16": PrimitiveKind.INT16,
    "uint16": PrimitiveKind.UINT16,
    "int32": PrimitiveKind.INT32,
    "uint32": PrimitiveKind.UINT32,
    "int64": PrimitiveKind.INT64,
    "uint64": PrimitiveKind.UINT64,
    "double": PrimitiveKind.DOUBLE,
}
_INTEGER_PATTERN = re.compile(r"([+-]?)(0[xX][0-9a-fA-F]+|[0-9]+)")
_DOUBLE_PATTERN = re.compile(r"[+-]?(?:inf|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_WORD_TERMINATORS = frozenset(" \t\r\n,]")
_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_REVERSE_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\b": "\\b", "\f": "\\f", "\v": "\\v"}


class _LiteralSyntaxError(ValueError):
    """Internal parse failure, reported to callers as InvalidDefaultError."""


def decode_default(
    literal: str, descriptor: TypeDescriptor, *, key_name: str, attribute: str = "default"
) -> DefaultValue:
    """Decode a GVariant text literal into the raw store value for `descriptor`."""
    if isinstance(descriptor, CustomType):
        return DefaultValue(value=literal, literal=literal, is_decoded=False)
    try:
        value = _decode(literal, descriptor)
    except _LiteralSyntaxError as exc:
        raise InvalidDefaultError(key_name, literal, str(exc), attribute=attribute) from exc
    return DefaultValue(value=value, literal=literal)


def decode_range(declaration: KeyDeclaration, descriptor: TypeDescriptor) -> ValueRange | None:
    """Decode the key's `<range>` bounds, if declared."""
    if declaration.range is None:
        return None
    if not isinstance(descriptor, PrimitiveType) or (
        descriptor.kind.integer_bounds is None and descriptor.kind is not PrimitiveKind.DOUBLE
    ):
        raise InvalidDefaultError(
            declaration.name,
            declaration.range.min_literal or declaration.range.max_literal or "",
            "ranges require a numeric type",
            attribute="range",
        )
    bounds: list[int | float | None] = []
    for literal in (declaration.range.min_literal, declaration.range.max_literal):
        if literal is None:
            bounds.append(None)
            continue
        decoded = decode_default(literal, descriptor, key_name=declaration.name, attribute="range")
        assert isinstance(decoded.value, (int, float))
        bounds.append(decoded.value)
    value_range = ValueRange(minimum=bounds[0], maximum=bounds[1])
    if (
        value_range.minimum is not None
        and value_range.maximum is not None
        and value_range.minimum > value_range.maximum
    ):
        raise InvalidDefaultError(
            declaration.name,
            f"{declaration.range.min_literal}..{declaration.range.max_literal}",
            "minimum exceeds maximum",
            attribute="range",
        )
    return value_range


def check_default_in_range(
    declaration: KeyDeclaration, default: DefaultValue, value_range: ValueRange | None
) -> None:
    """Raise InvalidDefaultError when the default lies outside the declared range."""
    if value_range is None or not isinstance(default.value, (int, float)):
        return
    if not value_range.contains(default.value):
        raise InvalidDefaultError(
            declaration.name,
            default.literal,
            f"outside range {value_range.minimum}..{value_range.maximum}",
        )


def encode_value(value: object, descriptor: TypeDescriptor) -> str:
    """Serialize a raw store value back to canonical GVariant text."""
    if isinstance(descriptor, CustomType):
        return str(value)
    if isinstance(descriptor, (ArrayType, FlagsType)):
        assert isinstance(value, (list, tuple))
        if not value:
            return "@as []"
        return "[" + ", ".join(_quote(str(item)) for item in value) + "]"
    if isinstance(descriptor, ChoiceType):
        return _quote(str(getattr(value, "value", value)))
    kind = descriptor.kind
    if kind is PrimitiveKind.BOOLEAN:
        return "true" if value else "false"
    if kind is PrimitiveKind.STRING:
        return _quote(str(value))
    if kind is PrimitiveKind.DOUBLE:
        return _format_double(float(value))  # type: ignore[arg-type]
    return str(int(value))  # type: ignore[call-overload]


def _decode(literal: str, descriptor: TypeDescriptor) -> object:
    reader = _LiteralReader(literal)
    value: object
    if isinstance(descriptor, ArrayType):
        value = reader.read_string_array()
    elif isinstance(descriptor, FlagsType):
        value = reader.read_string_array()
        unknown = [nick for nick in value if nick not in descriptor.values]
        if unknown:
            raise _LiteralSyntaxError(f"unknown flag nicks {', '.join(unknown)}")
    elif isinstance(descriptor, ChoiceType):
        value = reader.read_string()
        if value not in descriptor.values:
            raise _LiteralSyntaxError(f"not one of {', '.join(descriptor.values)}")
    else:
        assert isinstance(descriptor, PrimitiveType)
        value = _read_scalar(reader, descriptor.kind)
    reader.finish()
    return value


def _read_scalar(reader: _LiteralReader, kind: PrimitiveKind) -> object:
    reader.skip_whitespace()
    if reader.peek() not in ("'", '"'):
        keyword = reader.peek_word()
        if keyword in _TYPE_KEYWORDS:
            if _TYPE_KEYWORDS[keyword] is not kind:
                raise _LiteralSyntaxError(f"type keyword '{keyword}' does not match {kind.value}")
            reader.read_word()
    if kind is PrimitiveKind.STRING:
        return reader.read_string()
    word = reader.read_word()
    if kind is PrimitiveKind.BOOLEAN:
        if word not in ("true", "false"):
            raise _LiteralSyntaxError("expected true or false")
        return word == "true"
    if kind is PrimitiveKind.DOUBLE:
        if not _DOUBLE_PATTERN.fullmatch(word):
            raise _LiteralSyntaxError("expected a floating point number")
        return float(word)
    return _parse_integer(word, kind)


def _parse_integer(word: str, kind: PrimitiveKind) -> int:
    match = _INTEGER_PATTERN.fullmatch(word)
    if match is None:
        raise _LiteralSyntaxError("expected an integer")
    sign, digits = match.groups()
    magnitude = int(digits[2:], 16) if digits[:2].lower() == "0x" else int(digits, 10)
    value = -magnitude if sign == "-" else magnitude
    bounds = kind.integer_bounds
    assert bounds is not None
    if not bounds[0] <= value <= bounds[1]:
        raise _LiteralSyntaxError(f"out of range for {kind.value}")
    return value


def _format_double(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(value)


def _quote(text: str) -> str:
    quote = '"' if "'" in text and '"' not in text else "'"
    parts = [quote]
    for char in text:
        if char in ("\\", quote):
            parts.append("\\" + char)
        elif char in _REVERSE_ESCAPES:
            parts.append(_REVERSE_ESCAPES[char])
        elif ord(char) < 0x20:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    parts.append(quote)
    return "".join(parts)


class _LiteralReader:
    """Cursor over a literal's text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._position = 0

    def peek(self) -> str:
        return self._text[self._position : self._position + 1]

    def skip_whitespace(self) -> None:
        while self._position < len(self._text) and self._text[self._position].isspace():
            self._position += 1

    def finish(self) -> None:
        self.skip_whitespace()
        if self._position != len(self._text):
            raise _LiteralSyntaxError(f"unexpected trailing text at offset {self._position}")

    def peek_word(self) -> str:
        end = self._position
        while end < len(self._text) and self._text[end] not in _WORD_TERMINATORS:
            end += 1
        return self._text[self._position : end]

    def read_word(self) -> str:
        self.skip_whitespace()
        word = self.peek_word()
        if not word:
            raise _LiteralSyntaxError("empty value")
        self._position += len(word)
        return word

    def read_string(self) -> str:
        self.skip_whitespace()
        quote = self.peek()
        if quote not in ("'", '"'):
            raise _LiteralSyntaxError("expected a quoted string")
        self._position += 1
        chars: list[str] = []
        while True:
            if self._position >= len(self._text):
                raise _LiteralSyntaxError("unterminated string")
            char = self._text[self._position]
            self._position += 1
            if char == quote:
                return "".join(chars)
            if char == "\\":
                chars.append(self._read_escape())
            else:
                chars.append(char)

    def read_string_array(self) -> list[str]:
        self.skip_whitespace()
        if self._text.startswith("@", self._position):
            annotation = self.peek_word()
            if annotation != "@as":
                raise _LiteralSyntaxError(f"expected '@as' type annotation, got '{annotation}'")
            self._position += len(annotation)
            self.skip_whitespace()
        self._expect("[")
        items: list[str] = []
        self.skip_whitespace()
        if self.peek() == "]":
            self._position += 1
            return items
        while True:
            items.append(self.read_string())
            self.skip_whitespace()
            separator = self.peek()
            self._position += 1
            if separator == "]":
                return items
            if separator != ",":
                raise _LiteralSyntaxError("expected ',' or ']' in array")

    def _expect(self, char: str) -> None:
        if self.peek() != char:
            raise _LiteralSyntaxError(f"expected '{char}'")
        self._position += 1

    def _read_escape(self) -> str:
        if self._position >= len(self._text):
            raise _LiteralSyntaxError("unterminated escape sequence")
        char = self._text[self._position]
        self._position += 1
        if char in ("u", "U"):
            width = 4 if char == "u" else 8
            digits = self._text[self._position : self._position + width]
            if len(digits) != width or not all(d in "0123456789abcdefABCDEF" for d in digits):
                raise _LiteralSyntaxError("invalid unicode escape")
            self._position += width
            codepoint = int(digits, 16)
            if codepoint > 0x10FFFF:
                raise _LiteralSyntaxError("unicode escape out of range")
            return chr(codepoint)
        return _ESCAPES.get(char, char)
