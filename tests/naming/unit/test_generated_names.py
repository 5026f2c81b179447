"""Generated name derivation tests."""

from __future__ import annotations

import pytest
from gsettings_codegen.naming import NameRegistry, accessor_name, case_identifier, variant_name
from gsettings_codegen.schema_management import NameCollisionError


@pytest.mark.parametrize(
    ("key_name", "expected"),
    [
        ("window-width", "window_width"),
        ("is-maximized", "is_maximized"),
        ("volume", "volume"),
        ("class", "class_"),
        ("3d-mode", "key_3d_mode"),
        ("font.size", "font_size"),
    ],
)
def test_accessor_name_is_a_valid_identifier(key_name: str, expected: str) -> None:
    name = accessor_name(key_name)

    assert name == expected
    assert name.isidentifier()


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("preferred-audio-source", "PreferredAudioSource"),
        ("io.github.example.VideoFormat", "VideoFormat"),
        ("org.gnome.desktop.clock-format", "ClockFormat"),
        ("3d-mode", "Choice3dMode"),
    ],
)
def test_variant_name_is_pascal_case(source: str, expected: str) -> None:
    assert variant_name(source) == expected


@pytest.mark.parametrize(
    ("choice", "expected"),
    [
        ("microphone", "MICROPHONE"),
        ("desktop-audio", "DESKTOP_AUDIO"),
        ("16:9", "V_16_9"),
        ("", "V_"),
        ("_hidden", "V__HIDDEN"),
    ],
)
def test_case_identifier_is_upper_snake_case(choice: str, expected: str) -> None:
    assert case_identifier(choice) == expected


def test_registry_reports_both_owners_on_collision() -> None:
    registry = NameRegistry()
    registry.claim("set_foo", "set-foo")

    with pytest.raises(NameCollisionError) as exc_info:
        registry.claim("set_foo", "foo")

    assert exc_info.value.generated_name == "set_foo"
    assert exc_info.value.first == "set-foo"
    assert exc_info.value.second == "foo"


def test_registry_treats_reserved_names_as_taken() -> None:
    registry = NameRegistry(("store",), reserved_owner="<reserved>")

    assert "store" in registry
    with pytest.raises(NameCollisionError, match="<reserved>"):
        registry.claim("store", "store")
