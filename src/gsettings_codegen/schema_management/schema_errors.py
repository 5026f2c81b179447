"""Compile-time schema errors."""

from __future__ import annotations


class SchemaError(Exception):
    """Raised when a schema cannot be compiled into accessors.

    Attributes:
      key_name: Name of the offending key, when the failure is tied to one.
      attribute: Name of the offending attribute or child element, if any.
    """

    def __init__(
        self, message: str, *, key_name: str | None = None, attribute: str | None = None
    ) -> None:
        super().__init__(message)
        self.key_name = key_name
        self.attribute = attribute


class DocumentError(SchemaError):
    """Raised when the schema document is not well-formed markup."""


class SchemaNotFoundError(SchemaError):
    """Raised when no schema element carries the requested id."""

    def __init__(self, schema_id: str) -> None:
        super().__init__(f"Schema not found in document: {schema_id}")
        self.schema_id = schema_id


class MissingAttributeError(SchemaError):
    """Raised when a key lacks a required attribute or child element."""

    def __init__(self, key_name: str | None, attribute: str) -> None:
        subject = f"Key '{key_name}'" if key_name else "Key element"
        super().__init__(
            f"{subject} is missing required '{attribute}'.",
            key_name=key_name,
            attribute=attribute,
        )


class UnsupportedTypeError(SchemaError):
    """Raised when a key's type signature has no typed mapping."""

    def __init__(self, key_name: str, signature: str, reason: str | None = None) -> None:
        message = f"Key '{key_name}' has unsupported type signature '{signature}'"
        message = f"{message}: {reason}." if reason else f"{message}."
        super().__init__(message, key_name=key_name, attribute="type")
        self.signature = signature


class InvalidDefaultError(SchemaError):
    """Raised when a default (or range bound) literal does not fit the key's type."""

    def __init__(
        self, key_name: str, literal: str, reason: str, *, attribute: str = "default"
    ) -> None:
        super().__init__(
            f"Key '{key_name}' has invalid {attribute} {literal!r}: {reason}.",
            key_name=key_name,
            attribute=attribute,
        )
        self.literal = literal


class NameCollisionError(SchemaError):
    """Raised when two declarations map to the same generated name."""

    def __init__(self, generated_name: str, first: str, second: str) -> None:
        super().__init__(
            f"Generated name '{generated_name}' of '{second}' collides with '{first}'.",
            key_name=second,
            attribute="name",
        )
        self.generated_name = generated_name
        self.first = first
        self.second = second
