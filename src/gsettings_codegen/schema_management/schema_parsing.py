"""GSettings schema document parsing service."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping

from .schema_errors import (
    DocumentError,
    MissingAttributeError,
    NameCollisionError,
    SchemaError,
    SchemaNotFoundError,
)
from .schema_models import EnumDeclaration, KeyDeclaration, KeyRange, SchemaDocument

_ENUM_SIGNATURE = "s"
_FLAGS_SIGNATURE = "as"


def parse_schema_document(
    document: bytes | str, schema_id: str, *, source: str | None = None
) -> SchemaDocument:
    """Parse schema markup and return the schema whose `id` equals `schema_id`."""
    root = _parse_markup(document)
    schema_element = _find_schema_element(root, schema_id)
    enums = _collect_nick_sets(root, "enum")
    flags = _collect_nick_sets(root, "flags")

    keys: list[KeyDeclaration] = []
    seen_names: set[str] = set()
    for key_element in schema_element.findall("key"):
        declaration = _parse_key(key_element, enums, flags)
        if declaration.name in seen_names:
            raise NameCollisionError(declaration.name, declaration.name, declaration.name)
        seen_names.add(declaration.name)
        keys.append(declaration)

    return SchemaDocument(
        schema_id=schema_id,
        path=schema_element.get("path"),
        keys=tuple(keys),
        enums=enums,
        flags=flags,
        source=source,
    )


def parse_key_declarations(document: bytes | str, schema_id: str) -> tuple[KeyDeclaration, ...]:
    """Return the ordered key declarations of one schema."""
    return parse_schema_document(document, schema_id).keys


def _parse_markup(document: bytes | str) -> ET.Element:
    try:
        return ET.fromstring(document)
    except ET.ParseError as exc:
        raise DocumentError(f"Malformed schema document: {exc}") from exc


def _find_schema_element(root: ET.Element, schema_id: str) -> ET.Element:
    candidates = [root] if root.tag == "schema" else root.iter("schema")
    for element in candidates:
        if element.get("id") == schema_id:
            return element
    raise SchemaNotFoundError(schema_id)


def _collect_nick_sets(root: ET.Element, tag: str) -> dict[str, EnumDeclaration]:
    declarations: dict[str, EnumDeclaration] = {}
    for element in root.iter(tag):
        enum_id = element.get("id")
        if not enum_id:
            raise SchemaError(f"<{tag}> declaration is missing required 'id'.", attribute="id")
        nicks: list[str] = []
        for value in element.findall("value"):
            nick = value.get("nick")
            if not nick:
                raise SchemaError(
                    f"<{tag}> '{enum_id}' has a value without a 'nick'.", attribute="nick"
                )
            nicks.append(nick)
        declarations[enum_id] = EnumDeclaration(enum_id=enum_id, nicks=tuple(nicks))
    return declarations


def _parse_key(
    element: ET.Element,
    enums: Mapping[str, EnumDeclaration],
    flags: Mapping[str, EnumDeclaration],
) -> KeyDeclaration:
    name = element.get("name")
    if not name:
        raise MissingAttributeError(None, "name")

    enum_id = element.get("enum")
    flags_id = element.get("flags")
    choices = _parse_choices(element, name)
    flag_nicks: tuple[str, ...] | None = None
    if enum_id:
        enum = enums.get(enum_id)
        if enum is None:
            raise SchemaError(
                f"Key '{name}' references unknown enum '{enum_id}'.",
                key_name=name,
                attribute="enum",
            )
        type_signature = _ENUM_SIGNATURE
        choices = enum.nicks
    elif flags_id:
        flags_declaration = flags.get(flags_id)
        if flags_declaration is None:
            raise SchemaError(
                f"Key '{name}' references unknown flags '{flags_id}'.",
                key_name=name,
                attribute="flags",
            )
        type_signature = _FLAGS_SIGNATURE
        flag_nicks = flags_declaration.nicks
    else:
        signature = element.get("type")
        if not signature:
            raise MissingAttributeError(name, "type")
        type_signature = signature

    default_element = element.find("default")
    if default_element is None:
        raise MissingAttributeError(name, "default")

    return KeyDeclaration(
        name=name,
        type_signature=type_signature,
        default_literal=(default_element.text or "").strip(),
        summary=_collapse_whitespace(element.findtext("summary")),
        description=_collapse_whitespace(element.findtext("description")),
        choices=choices,
        enum_id=enum_id,
        flags_id=flags_id,
        flag_nicks=flag_nicks,
        range=_parse_range(element),
    )


def _parse_choices(element: ET.Element, key_name: str) -> tuple[str, ...] | None:
    choices_element = element.find("choices")
    if choices_element is None:
        return None
    values: list[str] = []
    for choice in choices_element.findall("choice"):
        value = choice.get("value")
        if value is None:
            raise MissingAttributeError(key_name, "choice value")
        if value in values:
            raise SchemaError(
                f"Key '{key_name}' declares choice '{value}' more than once.",
                key_name=key_name,
                attribute="choices",
            )
        values.append(value)
    return tuple(values) or None


def _parse_range(element: ET.Element) -> KeyRange | None:
    range_element = element.find("range")
    if range_element is None:
        return None
    return KeyRange(min_literal=range_element.get("min"), max_literal=range_element.get("max"))


def _collapse_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return " ".join(text.split())
