"""Schema parsing service tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from gsettings_codegen.schema_management import (
    DocumentError,
    KeyRange,
    MissingAttributeError,
    NameCollisionError,
    SchemaError,
    SchemaNotFoundError,
    parse_key_declarations,
    parse_schema_document,
)

SCHEMA_ID = "io.github.test"


def _schema(keys_xml: str, *, extra: str = "", schema_id: str = SCHEMA_ID) -> str:
    return (
        "<schemalist>"
        f"{extra}"
        f'<schema id="{schema_id}" path="/io/github/test/">{keys_xml}</schema>'
        "</schemalist>"
    )


def test_parses_keys_in_document_order_with_documentation() -> None:
    text = _schema(
        """
        <key name="window-width" type="i">
          <range min="0" max="10000"/>
          <default>800</default>
          <summary>Window width</summary>
          <description>
            Width of the main
            window in pixels.
          </description>
        </key>
        <key name="is-maximized" type="b">
          <default> false </default>
        </key>
        <key name="preferred-audio-source" type="s">
          <choices>
            <choice value="microphone"/>
            <choice value="desktop-audio"/>
          </choices>
          <default>'microphone'</default>
        </key>
        """
    )

    document = parse_schema_document(text, SCHEMA_ID, source="test.gschema.xml")

    assert document.schema_id == SCHEMA_ID
    assert document.path == "/io/github/test/"
    assert document.source == "test.gschema.xml"
    assert [key.name for key in document.keys] == [
        "window-width",
        "is-maximized",
        "preferred-audio-source",
    ]
    width, maximized, audio = document.keys
    assert width.type_signature == "i"
    assert width.default_literal == "800"
    assert width.summary == "Window width"
    assert width.description == "Width of the main window in pixels."
    assert width.range == KeyRange(min_literal="0", max_literal="10000")
    assert width.choices is None
    assert maximized.default_literal == "false"
    assert maximized.summary == ""
    assert audio.choices == ("microphone", "desktop-audio")
    assert audio.has_choices


def test_selects_the_requested_schema_among_several() -> None:
    text = (
        "<schemalist>"
        '<schema id="io.github.other"><key name="other" type="b"><default>true</default></key>'
        "</schema>"
        f'<schema id="{SCHEMA_ID}"><key name="mine" type="s"><default>""</default></key></schema>'
        "</schemalist>"
    )

    assert [key.name for key in parse_key_declarations(text, SCHEMA_ID)] == ["mine"]


def test_accepts_bytes_with_xml_declaration() -> None:
    text = '<?xml version="1.0" encoding="UTF-8"?>' + _schema(
        '<key name="title" type="s"><default>\'Grüße\'</default></key>'
    )

    keys = parse_key_declarations(text.encode("utf-8"), SCHEMA_ID)

    assert keys[0].default_literal == "'Grüße'"


def test_missing_schema_id_raises_schema_not_found() -> None:
    with pytest.raises(SchemaNotFoundError, match="io.github.missing") as exc_info:
        parse_schema_document(_schema(""), "io.github.missing")

    assert exc_info.value.schema_id == "io.github.missing"


def test_malformed_document_raises_document_error() -> None:
    with pytest.raises(DocumentError, match="Malformed schema document"):
        parse_schema_document("<schemalist><schema id='x'>", "x")


def test_missing_type_names_key_and_attribute() -> None:
    with pytest.raises(MissingAttributeError, match="window-width") as exc_info:
        parse_schema_document(
            _schema('<key name="window-width"><default>1</default></key>'), SCHEMA_ID
        )

    assert exc_info.value.key_name == "window-width"
    assert exc_info.value.attribute == "type"


def test_missing_name_is_reported() -> None:
    with pytest.raises(MissingAttributeError) as exc_info:
        parse_schema_document(_schema('<key type="b"><default>true</default></key>'), SCHEMA_ID)

    assert exc_info.value.key_name is None
    assert exc_info.value.attribute == "name"


def test_missing_default_is_reported() -> None:
    with pytest.raises(MissingAttributeError, match="default") as exc_info:
        parse_schema_document(_schema('<key name="flag" type="b"/>'), SCHEMA_ID)

    assert exc_info.value.attribute == "default"


def test_duplicate_key_names_raise_name_collision() -> None:
    text = _schema(
        '<key name="volume" type="d"><default>1.0</default></key>'
        '<key name="volume" type="i"><default>1</default></key>'
    )

    with pytest.raises(NameCollisionError, match="volume"):
        parse_schema_document(text, SCHEMA_ID)


def test_duplicate_choice_is_rejected() -> None:
    text = _schema(
        '<key name="mode" type="s"><choices><choice value="a"/><choice value="a"/></choices>'
        "<default>'a'</default></key>"
    )

    with pytest.raises(SchemaError, match="more than once"):
        parse_schema_document(text, SCHEMA_ID)


def test_enum_reference_supplies_choices() -> None:
    enum_xml = (
        '<enum id="io.github.test.Format">'
        '<value nick="webm" value="0"/><value nick="mp4" value="1"/>'
        "</enum>"
    )
    text = _schema(
        '<key name="video-format" enum="io.github.test.Format"><default>\'mp4\'</default></key>',
        extra=enum_xml,
    )

    document = parse_schema_document(text, SCHEMA_ID)

    key = document.keys[0]
    assert key.type_signature == "s"
    assert key.enum_id == "io.github.test.Format"
    assert key.choices == ("webm", "mp4")
    assert document.enums["io.github.test.Format"].nicks == ("webm", "mp4")


def test_unknown_enum_reference_is_rejected() -> None:
    text = _schema('<key name="video-format" enum="io.github.nope"><default>\'a\'</default></key>')

    with pytest.raises(SchemaError, match="unknown enum") as exc_info:
        parse_schema_document(text, SCHEMA_ID)

    assert exc_info.value.key_name == "video-format"


def test_flags_key_is_parsed_as_string_array_with_nicks() -> None:
    text = _schema(
        '<key name="space-style" flags="io.github.test.SpaceStyle"><default>[]</default></key>',
        extra=(
            '<flags id="io.github.test.SpaceStyle">'
            '<value nick="before-colon" value="1"/><value nick="after-colon" value="2"/>'
            "</flags>"
        ),
    )

    document = parse_schema_document(text, SCHEMA_ID)
    key = document.keys[0]

    assert key.type_signature == "as"
    assert key.flags_id == "io.github.test.SpaceStyle"
    assert key.flag_nicks == ("before-colon", "after-colon")
    assert document.flags["io.github.test.SpaceStyle"].nicks == ("before-colon", "after-colon")
    assert document.enums == {}


def test_unknown_flags_reference_is_rejected() -> None:
    text = _schema('<key name="space-style" flags="io.github.nope"><default>[]</default></key>')

    with pytest.raises(SchemaError, match="unknown flags") as exc_info:
        parse_schema_document(text, SCHEMA_ID)

    assert exc_info.value.key_name == "space-style"
    assert exc_info.value.attribute == "flags"


def test_flags_value_without_nick_is_rejected() -> None:
    text = _schema("", extra='<flags id="io.github.test.SpaceStyle"><value value="1"/></flags>')

    with pytest.raises(SchemaError, match="without a 'nick'"):
        parse_schema_document(text, SCHEMA_ID)


def test_sample_schema_parses_every_key() -> None:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "io.github.example.gschema.xml"

    document = parse_schema_document(sample_path.read_bytes(), "io.github.example")

    assert len(document.keys) == 13
    assert document.flags["io.github.example.CaptureOptions"].nicks == (
        "show-pointer",
        "show-clicks",
        "record-audio",
    )
    assert document.keys[0].name == "is-maximized"
    assert document.keys[-1].type_signature == "a{ss}"
