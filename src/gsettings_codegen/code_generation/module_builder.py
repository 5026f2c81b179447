"""Assembly of variants and accessors into one settings module."""

from __future__ import annotations

import ast
from collections.abc import Iterator, Sequence

from gsettings_codegen.naming import NameRegistry
from gsettings_codegen.schema_management.schema_errors import NameCollisionError, SchemaError
from gsettings_codegen.type_mapping.type_descriptors import (
    ArrayType,
    ChoiceType,
    CustomType,
    FlagsType,
)

from .accessor_emitter import synthesize_accessor
from .generation_models import (
    CompiledKey,
    GeneratedAccessorPair,
    GeneratedModule,
    GeneratedVariant,
)
from .source_text import docstring, python_literal, string_literal
from .variant_emitter import emit_flags, emit_variant

DEFAULT_CLASS_NAME = "Settings"

# Members of the generated settings class that accessors must not shadow.
RESERVED_MEMBERS: tuple[str, ...] = ("SCHEMA_ID", "DEFAULTS", "open", "store", "_store")

_LINE_LENGTH = 100

# Names bound at module level by the generated imports, with their source module.
_MODULE_IMPORTS: dict[str, str] = {
    "Iterable": "collections.abc",
    "Mapping": "collections.abc",
    "Sequence": "collections.abc",
    "Enum": "enum",
    "Flag": "enum",
    "Any": "typing",
    "BindFlags": "gsettings_codegen.runtime",
    "ChangeCallback": "gsettings_codegen.runtime",
    "NotWritableError": "gsettings_codegen.runtime",
    "SettingsAction": "gsettings_codegen.runtime",
    "SettingsStore": "gsettings_codegen.runtime",
    "StoreFactory": "gsettings_codegen.runtime",
    "UnknownVariantError": "gsettings_codegen.runtime",
}


def build_settings_module(
    compiled_keys: Sequence[CompiledKey],
    *,
    schema_id: str,
    class_name: str = DEFAULT_CLASS_NAME,
    source: str | None = None,
) -> GeneratedModule:
    """Render the settings module for `compiled_keys`.

    Raises:
      NameCollisionError: If two keys, variants, imported names or the class
        itself map to the same generated name.
      SchemaError: If a `define` import statement cannot be parsed.
    """
    module_names = NameRegistry(tuple(_MODULE_IMPORTS), reserved_owner="<import>")
    _claim_custom_imports(compiled_keys, module_names)
    module_names.claim(class_name, f"class {class_name}")
    variants = _collect_variants(compiled_keys, module_names)

    members = NameRegistry(RESERVED_MEMBERS)
    accessors: list[GeneratedAccessorPair] = []
    for compiled_key in compiled_keys:
        accessor = synthesize_accessor(compiled_key)
        for member_name in accessor.member_names:
            members.claim(member_name, compiled_key.name)
        accessors.append(accessor)

    lines = _module_header(schema_id, source)
    lines.extend(_import_lines(compiled_keys))
    exported = [class_name, *sorted(variant.variant_name for variant in variants)]
    lines.extend(["", "__all__ = [", *(f"    {string_literal(name)}," for name in exported), "]"])
    for variant in variants:
        lines.extend(["", "", *variant.source_lines])
    lines.extend(["", ""])
    lines.extend(_class_lines(compiled_keys, accessors, schema_id=schema_id, class_name=class_name))

    return GeneratedModule(
        schema_id=schema_id,
        class_name=class_name,
        accessors=tuple(accessors),
        variants=tuple(variants),
        source="\n".join(lines) + "\n",
    )


def _collect_variants(
    compiled_keys: Sequence[CompiledKey], module_names: NameRegistry
) -> list[GeneratedVariant]:
    descriptors: dict[str, ChoiceType | FlagsType] = {}
    owners: dict[str, list[str]] = {}
    for compiled_key in compiled_keys:
        descriptor = compiled_key.descriptor
        if not isinstance(descriptor, (ChoiceType, FlagsType)):
            continue
        existing = descriptors.get(descriptor.variant_name)
        if existing is None:
            module_names.claim(descriptor.variant_name, compiled_key.name)
            descriptors[descriptor.variant_name] = descriptor
            owners[descriptor.variant_name] = [compiled_key.name]
        elif existing == descriptor:
            owners[descriptor.variant_name].append(compiled_key.name)
        else:
            first = owners[descriptor.variant_name][0]
            raise NameCollisionError(descriptor.variant_name, first, compiled_key.name)
    variants: list[GeneratedVariant] = []
    for name, descriptor in descriptors.items():
        if isinstance(descriptor, FlagsType):
            variants.append(emit_flags(descriptor, key_names=owners[name]))
        else:
            variants.append(emit_variant(descriptor, key_names=owners[name]))
    return variants


def _claim_custom_imports(
    compiled_keys: Sequence[CompiledKey], module_names: NameRegistry
) -> None:
    bound = {name: f"{module}.{name}" for name, module in _MODULE_IMPORTS.items()}
    for compiled_key in compiled_keys:
        descriptor = compiled_key.descriptor
        if not isinstance(descriptor, CustomType):
            continue
        for statement in descriptor.imports:
            for name, origin in _bound_names(statement, key_name=compiled_key.name):
                if bound.get(name) == origin:
                    continue
                module_names.claim(name, f"<import> {statement}")
                bound[name] = origin


def _bound_names(statement: str, *, key_name: str) -> Iterator[tuple[str, str]]:
    """Yield (bound name, imported object) for one import statement."""
    try:
        tree = ast.parse(statement)
    except SyntaxError as exc:
        raise SchemaError(
            f"Invalid import statement for key '{key_name}': {statement}",
            key_name=key_name,
            attribute="imports",
        ) from exc
    for node in tree.body:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname:
                    yield alias.asname, alias.name
                else:
                    head = alias.name.split(".", 1)[0]
                    yield head, head
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            for alias in node.names:
                if alias.name == "*":
                    raise SchemaError(
                        f"Star imports cannot be checked for collisions: {statement}",
                        key_name=key_name,
                        attribute="imports",
                    )
                yield alias.asname or alias.name, f"{node.module}.{alias.name}"
        else:
            raise SchemaError(
                f"Only absolute import statements are allowed for key '{key_name}': "
                f"{statement}",
                key_name=key_name,
                attribute="imports",
            )


def _module_header(schema_id: str, source: str | None) -> list[str]:
    origin = "Generated by gsettings-codegen"
    if source:
        origin = f"{origin} from {source}"
    lines = docstring(
        [f"Typed accessors for the ``{schema_id}`` settings schema.", f"{origin}. Do not edit."],
        indent=0,
    )
    lines.extend(["", "from __future__ import annotations", ""])
    return lines


def _import_lines(compiled_keys: Sequence[CompiledKey]) -> list[str]:
    descriptors = [key.descriptor for key in compiled_keys]
    has_choices = any(isinstance(descriptor, ChoiceType) for descriptor in descriptors)
    has_flags = any(isinstance(descriptor, FlagsType) for descriptor in descriptors)

    abc_names = ["Mapping"]
    if has_flags:
        abc_names.insert(0, "Iterable")
    if any(isinstance(descriptor, ArrayType) for descriptor in descriptors):
        abc_names.append("Sequence")
    enum_names = [name for name, used in (("Enum", has_choices), ("Flag", has_flags)) if used]
    runtime_names = ["SettingsStore", "StoreFactory"]
    if compiled_keys:
        runtime_names.extend(["BindFlags", "ChangeCallback", "NotWritableError", "SettingsAction"])
    if has_choices or has_flags:
        runtime_names.append("UnknownVariantError")

    lines = [f"from collections.abc import {', '.join(abc_names)}"]
    if enum_names:
        lines.append(f"from enum import {', '.join(enum_names)}")
    lines.extend(["from typing import Any", ""])
    lines.extend(_from_import("gsettings_codegen.runtime", sorted(runtime_names)))

    custom_imports = sorted(
        {
            statement
            for key in compiled_keys
            if isinstance(key.descriptor, CustomType)
            for statement in key.descriptor.imports
        }
    )
    if custom_imports:
        lines.append("")
        lines.extend(custom_imports)
    return lines


def _from_import(module: str, names: Sequence[str]) -> list[str]:
    line = f"from {module} import {', '.join(names)}"
    if len(line) <= _LINE_LENGTH:
        return [line]
    return [f"from {module} import (", *(f"    {name}," for name in names), ")"]


def _class_lines(
    compiled_keys: Sequence[CompiledKey],
    accessors: Sequence[GeneratedAccessorPair],
    *,
    schema_id: str,
    class_name: str,
) -> list[str]:
    lines = [f"class {class_name}:"]
    lines.extend(docstring([f"Typed accessors for the ``{schema_id}`` schema."], indent=1))
    lines.append("")
    lines.append(f"    SCHEMA_ID = {string_literal(schema_id)}")
    lines.append("    DEFAULTS: Mapping[str, Any] = {")
    for compiled_key in compiled_keys:
        if compiled_key.default.is_decoded:
            value = python_literal(compiled_key.default.value)
            lines.append(f"        {string_literal(compiled_key.name)}: {value},")
    lines.append("    }")
    lines.extend(
        [
            "",
            "    def __init__(self, store: SettingsStore) -> None:",
            "        self._store = store",
            "",
            "    @classmethod",
            f"    def open(cls, store_factory: StoreFactory) -> {class_name}:",
            '        """Create accessors over the store opened for SCHEMA_ID."""',
            "        return cls(store_factory(cls.SCHEMA_ID))",
            "",
            "    @property",
            "    def store(self) -> SettingsStore:",
            "        return self._store",
        ]
    )
    for accessor in accessors:
        lines.append("")
        lines.extend(accessor.source_lines)
    return lines
