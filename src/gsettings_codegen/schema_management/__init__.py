"""Schema management exports."""

from .schema_errors import (
    DocumentError,
    InvalidDefaultError,
    MissingAttributeError,
    NameCollisionError,
    SchemaError,
    SchemaNotFoundError,
    UnsupportedTypeError,
)
from .schema_models import EnumDeclaration, KeyDeclaration, KeyRange, SchemaDocument
from .schema_parsing import parse_key_declarations, parse_schema_document

__all__ = [
    "EnumDeclaration",
    "KeyDeclaration",
    "KeyRange",
    "SchemaDocument",
    "SchemaError",
    "DocumentError",
    "SchemaNotFoundError",
    "MissingAttributeError",
    "UnsupportedTypeError",
    "InvalidDefaultError",
    "NameCollisionError",
    "parse_key_declarations",
    "parse_schema_document",
]
