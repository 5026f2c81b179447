"""Choice and flags variant synthesis tests."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum, Flag

import pytest
from gsettings_codegen.code_generation import emit_flags, emit_variant
from gsettings_codegen.runtime import UnknownVariantError
from gsettings_codegen.type_mapping import ChoiceCase, ChoiceType, FlagsType

AUDIO_SOURCE = ChoiceType(
    variant_name="PreferredAudioSource",
    cases=(
        ChoiceCase(identifier="MICROPHONE", value="microphone"),
        ChoiceCase(identifier="DESKTOP_AUDIO", value="desktop-audio"),
    ),
)
CAPTURE_OPTIONS = FlagsType(
    variant_name="CaptureOptions",
    cases=(
        ChoiceCase(identifier="SHOW_POINTER", value="show-pointer"),
        ChoiceCase(identifier="SHOW_CLICKS", value="show-clicks"),
        ChoiceCase(identifier="RECORD_AUDIO", value="record-audio"),
    ),
)


def _define(source_lines: tuple[str, ...], name: str = "PreferredAudioSource") -> type:
    namespace: dict[str, object] = {
        "Enum": Enum,
        "Flag": Flag,
        "Iterable": Iterable,
        "UnknownVariantError": UnknownVariantError,
    }
    source = "from __future__ import annotations\n" + "\n".join(source_lines)
    exec(compile(source, "<variant>", "exec"), namespace)  # noqa: S102
    return namespace[name]  # type: ignore[return-value]


def test_variant_members_preserve_declaration_order() -> None:
    variant = emit_variant(AUDIO_SOURCE, key_names=["preferred-audio-source"])

    assert variant.variant_name == "PreferredAudioSource"
    assert variant.source_lines[0] == "class PreferredAudioSource(str, Enum):"
    assert variant.source_lines[1] == '    """Choices of the ``preferred-audio-source`` key."""'
    members = [line.strip() for line in variant.source_lines if " = " in line]
    assert members == ['MICROPHONE = "microphone"', 'DESKTOP_AUDIO = "desktop-audio"']


def test_shared_variant_documents_every_key() -> None:
    variant = emit_variant(AUDIO_SOURCE, key_names=["input", "fallback-input"])

    assert variant.key_names == ("input", "fallback-input")
    assert "``input``, ``fallback-input`` keys." in variant.source_lines[1]


def test_store_string_conversion_round_trips() -> None:
    variant_class = _define(emit_variant(AUDIO_SOURCE, key_names=["k"]).source_lines)

    for raw in ("microphone", "desktop-audio"):
        assert variant_class.from_store_string(raw).to_store_string() == raw
    assert variant_class.from_store_string("desktop-audio") is variant_class.DESKTOP_AUDIO


def test_unknown_store_string_is_rejected() -> None:
    variant_class = _define(emit_variant(AUDIO_SOURCE, key_names=["k"]).source_lines)

    with pytest.raises(UnknownVariantError, match="bluetooth") as exc_info:
        variant_class.from_store_string("bluetooth")

    assert exc_info.value.variant_name == "PreferredAudioSource"
    assert exc_info.value.raw == "bluetooth"


def test_flags_class_assigns_one_bit_per_nick() -> None:
    variant = emit_flags(CAPTURE_OPTIONS, key_names=["capture-options"])

    assert variant.source_lines[0] == "class CaptureOptions(Flag):"
    assert variant.source_lines[1] == '    """Flags of the ``capture-options`` key."""'
    members = [
        line.strip() for line in variant.source_lines if re.fullmatch(r"    [A-Z_]+ = \d+", line)
    ]
    assert members == ["SHOW_POINTER = 1", "SHOW_CLICKS = 2", "RECORD_AUDIO = 4"]


def test_flags_convert_between_nick_lists_and_flag_values() -> None:
    flags_class = _define(
        emit_flags(CAPTURE_OPTIONS, key_names=["k"]).source_lines, name="CaptureOptions"
    )

    combined = flags_class.from_store_strings(["record-audio", "show-pointer"])

    assert combined == flags_class.SHOW_POINTER | flags_class.RECORD_AUDIO
    assert combined.to_store_strings() == ["show-pointer", "record-audio"]
    assert flags_class.from_store_strings([]) == flags_class(0)
    assert flags_class(0).to_store_strings() == []


def test_unknown_flag_nick_is_rejected() -> None:
    flags_class = _define(
        emit_flags(CAPTURE_OPTIONS, key_names=["k"]).source_lines, name="CaptureOptions"
    )

    with pytest.raises(UnknownVariantError) as exc_info:
        flags_class.from_store_strings(["show-pointer", "webcam"])

    assert exc_info.value.variant_name == "CaptureOptions"
    assert exc_info.value.raw == "webcam"
