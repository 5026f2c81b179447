"""Variant synthesis: one `Enum` class per choice set, one `Flag` class per flags set."""

from __future__ import annotations

from collections.abc import Sequence

from gsettings_codegen.type_mapping.type_descriptors import ChoiceType, FlagsType

from .generation_models import GeneratedVariant
from .source_text import docstring, indent_lines, string_literal


def emit_variant(descriptor: ChoiceType, *, key_names: Sequence[str]) -> GeneratedVariant:
    """Render the enum class and its store-string conversions for `descriptor`."""
    name = descriptor.variant_name
    quoted_keys = ", ".join(f"``{key}``" for key in key_names)
    plural = "keys" if len(key_names) > 1 else "key"

    body: list[str] = docstring([f"Choices of the {quoted_keys} {plural}."], indent=0)
    body.append("")
    for case in descriptor.cases:
        body.append(f"{case.identifier} = {string_literal(case.value)}")
    body.extend(
        [
            "",
            "@classmethod",
            f"def from_store_string(cls, raw: str) -> {name}:",
            '    """Return the member for a raw store string.',
            "",
            "    Raises:",
            "      UnknownVariantError: If `raw` is not one of the declared choices.",
            '    """',
            "    try:",
            "        return cls(raw)",
            "    except ValueError as exc:",
            "        raise UnknownVariantError(cls.__name__, raw) from exc",
            "",
            "def to_store_string(self) -> str:",
            '    """Return the raw store string of this member."""',
            "    return self.value",
        ]
    )

    lines = [f"class {name}(str, Enum):", *indent_lines(body)]
    return GeneratedVariant(
        variant_name=name, key_names=tuple(key_names), source_lines=tuple(lines)
    )


def emit_flags(descriptor: FlagsType, *, key_names: Sequence[str]) -> GeneratedVariant:
    """Render the flag class and its nick-list conversions for `descriptor`."""
    name = descriptor.variant_name
    quoted_keys = ", ".join(f"``{key}``" for key in key_names)
    plural = "keys" if len(key_names) > 1 else "key"

    body: list[str] = docstring([f"Flags of the {quoted_keys} {plural}."], indent=0)
    body.append("")
    for position, case in enumerate(descriptor.cases):
        body.append(f"{case.identifier} = {1 << position}")
    body.extend(["", "@classmethod", f"def nicks(cls) -> dict[str, {name}]:"])
    body.extend(docstring(["Return the store nick of every single flag."], indent=1))
    body.append("    return {")
    for case in descriptor.cases:
        body.append(f"        {string_literal(case.value)}: cls.{case.identifier},")
    body.extend(
        [
            "    }",
            "",
            "@classmethod",
            f"def from_store_strings(cls, raw: Iterable[str]) -> {name}:",
            '    """Return the combined flags for a raw list of nicks.',
            "",
            "    Raises:",
            "      UnknownVariantError: If a nick is not one of the declared flags.",
            '    """',
            "    nicks = cls.nicks()",
            "    combined = cls(0)",
            "    for nick in raw:",
            "        if nick not in nicks:",
            "            raise UnknownVariantError(cls.__name__, nick)",
            "        combined |= nicks[nick]",
            "    return combined",
            "",
            "def to_store_strings(self) -> list[str]:",
            '    """Return the nicks of the flags set in this value, in declaration order."""',
            "    return [nick for nick, member in type(self).nicks().items() if member in self]",
        ]
    )

    lines = [f"class {name}(Flag):", *indent_lines(body)]
    return GeneratedVariant(
        variant_name=name, key_names=tuple(key_names), source_lines=tuple(lines)
    )
