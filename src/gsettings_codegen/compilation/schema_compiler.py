"""Two-phase schema compiler: parse the schema, then emit the settings module."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gsettings_codegen.code_generation.generation_models import CompiledKey, GeneratedModule
from gsettings_codegen.code_generation.module_builder import (
    DEFAULT_CLASS_NAME,
    build_settings_module,
)
from gsettings_codegen.configuration.runtime_settings import SkipSettings
from gsettings_codegen.default_decoding.gvariant_literals import (
    check_default_in_range,
    decode_default,
    decode_range,
)
from gsettings_codegen.schema_management.schema_models import KeyDeclaration, SchemaDocument
from gsettings_codegen.schema_management.schema_parsing import parse_schema_document
from gsettings_codegen.type_mapping.type_mapper import TypeOverride, map_key_type

logger = logging.getLogger(__name__)


def compile_key(
    declaration: KeyDeclaration, *, overrides: Sequence[TypeOverride] = ()
) -> CompiledKey:
    """Resolve the type, default and range of one key declaration."""
    descriptor = map_key_type(declaration, overrides=overrides)
    default = decode_default(declaration.default_literal, descriptor, key_name=declaration.name)
    value_range = decode_range(declaration, descriptor)
    check_default_in_range(declaration, default, value_range)
    return CompiledKey(
        declaration=declaration, descriptor=descriptor, default=default, value_range=value_range
    )


def compile_keys(
    document: SchemaDocument,
    *,
    skip: SkipSettings | None = None,
    overrides: Sequence[TypeOverride] = (),
) -> tuple[CompiledKey, ...]:
    """Compile every key of `document` that is not skipped, in document order."""
    skip = skip or SkipSettings()
    compiled: list[CompiledKey] = []
    for declaration in document.keys:
        if skip.excludes(declaration):
            logger.info("Skipping key %s (%s)", declaration.name, declaration.type_signature)
            continue
        compiled.append(compile_key(declaration, overrides=overrides))
    return tuple(compiled)


def compile_schema(
    document: bytes | str,
    schema_id: str,
    *,
    class_name: str = DEFAULT_CLASS_NAME,
    skip: SkipSettings | None = None,
    overrides: Sequence[TypeOverride] = (),
    source: str | None = None,
) -> GeneratedModule:
    """Compile schema markup into generated module text.

    Raises:
      SchemaError: On any ill-formed or unsupported declaration; nothing is
        emitted in that case.
    """
    schema = parse_schema_document(document, schema_id, source=source)
    logger.debug("Parsed schema %s with %d keys", schema_id, len(schema.keys))
    compiled_keys = compile_keys(schema, skip=skip, overrides=overrides)
    module = build_settings_module(
        compiled_keys, schema_id=schema_id, class_name=class_name, source=source
    )
    logger.debug(
        "Generated %d accessor groups and %d variants for %s",
        len(module.accessors),
        len(module.variants),
        schema_id,
    )
    return module
