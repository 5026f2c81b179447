"""Accessor synthesis: getter, setters and change hook for one key."""

from __future__ import annotations

from gsettings_codegen.default_decoding.gvariant_literals import encode_value
from gsettings_codegen.naming import accessor_name
from gsettings_codegen.type_mapping.type_descriptors import (
    ArrayType,
    ChoiceType,
    FlagsType,
    TypeDescriptor,
)

from .generation_models import CompiledKey, GeneratedAccessorPair
from .source_text import docstring, indent_lines, python_literal, string_literal


def accessor_member_names(key_name: str) -> tuple[str, str, str, str, str, str]:
    """Return (getter, setter, try-setter, connect, bind, action) method names for a key."""
    base = accessor_name(key_name)
    return (
        base,
        f"set_{base}",
        f"try_set_{base}",
        f"connect_{base}_changed",
        f"bind_{base}",
        f"create_{base}_action",
    )


def synthesize_accessor(compiled_key: CompiledKey) -> GeneratedAccessorPair:
    """Emit the accessor methods for one compiled key."""
    key = compiled_key.declaration
    descriptor = compiled_key.descriptor
    getter, setter, try_setter, connect, bind, action = accessor_member_names(key.name)
    key_literal = string_literal(key.name)
    returns = descriptor.annotation
    accepts = descriptor.argument_annotation

    getter_signature = f"{getter}(self) -> {returns}"
    setter_signature = f"{setter}(self, value: {accepts}) -> None"
    doc_paragraphs = _documentation(compiled_key)
    summary_line = key.summary or f"Value of the ``{key.name}`` key."

    lines: list[str] = [f"def {getter_signature}:"]
    lines.extend(docstring(doc_paragraphs, indent=1))
    lines.append(f"    return {_from_store(descriptor, f'self._store.get_value({key_literal})')}")
    lines.append("")

    lines.append(f"def {setter_signature}:")
    lines.extend(
        docstring(
            [
                f"Set ``{key.name}``: {_lower_first(summary_line)}",
                "Raises:\n  NotWritableError: If the store rejects the write.",
            ],
            indent=1,
        )
    )
    lines.extend(_store_write_prelude(descriptor))
    lines.append(f"    if not self._store.set_value({key_literal}, {_store_argument(descriptor)}):")
    lines.append(f"        raise NotWritableError({key_literal})")
    lines.append("")

    lines.append(f"def {try_setter}(self, value: {accepts}) -> bool:")
    lines.extend(
        docstring(
            [f"Set ``{key.name}`` and return whether the store accepted the write."], indent=1
        )
    )
    lines.extend(_store_write_prelude(descriptor))
    lines.append(f"    return self._store.set_value({key_literal}, {_store_argument(descriptor)})")
    lines.append("")

    lines.append(f"def {connect}(self, callback: ChangeCallback) -> int:")
    lines.extend(docstring([f"Call `callback` whenever ``{key.name}`` changes."], indent=1))
    lines.append(f"    return self._store.connect_changed({key_literal}, callback)")
    lines.append("")

    lines.extend(
        [
            f"def {bind}(",
            "    self, target: object, property_name: str, flags: BindFlags = BindFlags.DEFAULT",
            ") -> None:",
        ]
    )
    lines.extend(
        docstring([f"Keep `property_name` of `target` in sync with ``{key.name}``."], indent=1)
    )
    lines.append(f"    self._store.bind({key_literal}, target, property_name, flags)")
    lines.append("")

    lines.append(f"def {action}(self) -> SettingsAction:")
    lines.extend(docstring([f"Return an action whose state follows ``{key.name}``."], indent=1))
    lines.append(f"    return self._store.create_action({key_literal})")

    return GeneratedAccessorPair(
        key_name=key.name,
        getter_name=getter,
        setter_name=setter,
        try_setter_name=try_setter,
        connect_name=connect,
        bind_name=bind,
        action_name=action,
        getter_signature=getter_signature,
        setter_signature=setter_signature,
        doc_comment="\n\n".join(doc_paragraphs),
        source_lines=tuple(indent_lines(lines)),
    )


def describe_default(compiled_key: CompiledKey) -> str:
    """Return the default as it reads in Python, e.g. `False` or `Source.MICROPHONE`."""
    descriptor = compiled_key.descriptor
    default = compiled_key.default
    if not default.is_decoded:
        return default.literal
    if isinstance(descriptor, ChoiceType):
        for case in descriptor.cases:
            if case.value == default.value:
                return f"{descriptor.variant_name}.{case.identifier}"
    if isinstance(descriptor, FlagsType):
        assert isinstance(default.value, list)
        members = [
            f"{descriptor.variant_name}.{case.identifier}"
            for case in descriptor.cases
            if case.value in default.value
        ]
        return " | ".join(members) or f"{descriptor.variant_name}(0)"
    return python_literal(default.value)


def _documentation(compiled_key: CompiledKey) -> list[str]:
    key = compiled_key.declaration
    descriptor = compiled_key.descriptor
    paragraphs = [key.summary or f"Value of the ``{key.name}`` key."]
    if key.description:
        paragraphs.append(key.description)

    facts = [
        f"Key: ``{key.name}`` (``{key.type_signature}``)",
        f"Default: ``{describe_default(compiled_key)}``",
    ]
    if compiled_key.value_range is not None:
        low = compiled_key.value_range.minimum
        high = compiled_key.value_range.maximum
        facts.append(
            f"Range: ``{'-' if low is None else encode_value(low, descriptor)}`` to "
            f"``{'-' if high is None else encode_value(high, descriptor)}``"
        )
    if isinstance(descriptor, ChoiceType):
        facts.append("Choices: " + ", ".join(f"``{value}``" for value in descriptor.values))
    elif isinstance(descriptor, FlagsType):
        facts.append("Flags: " + ", ".join(f"``{value}``" for value in descriptor.values))
    paragraphs.append("\n".join(facts))
    return paragraphs


def _from_store(descriptor: TypeDescriptor, expression: str) -> str:
    if isinstance(descriptor, ChoiceType):
        return f"{descriptor.variant_name}.from_store_string({expression})"
    if isinstance(descriptor, FlagsType):
        return f"{descriptor.variant_name}.from_store_strings({expression})"
    if isinstance(descriptor, ArrayType):
        return f"list({expression})"
    return expression


def _store_write_prelude(descriptor: TypeDescriptor) -> list[str]:
    if isinstance(descriptor, ChoiceType):
        return [f"    raw = {descriptor.variant_name}.from_store_string(value).to_store_string()"]
    if isinstance(descriptor, ArrayType):
        return [
            "    if isinstance(value, str):",
            "        raise TypeError(\"expected a sequence of strings, got str\")",
            "    raw = list(value)",
        ]
    if isinstance(descriptor, FlagsType):
        return [f"    raw = {descriptor.variant_name}(value).to_store_strings()"]
    return []


def _store_argument(descriptor: TypeDescriptor) -> str:
    return "raw" if isinstance(descriptor, (ChoiceType, FlagsType, ArrayType)) else "value"


def _lower_first(text: str) -> str:
    if len(text) > 1 and text[1].isupper():
        return text
    return text[:1].lower() + text[1:]
