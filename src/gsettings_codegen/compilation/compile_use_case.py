"""Compilation use-case service."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from gsettings_codegen.code_generation.generation_models import GeneratedModule
from gsettings_codegen.configuration import (
    Configuration,
    ConfigurationError,
    build_configuration,
    load_configuration,
)
from gsettings_codegen.schema_management import SchemaError

from .compile_contracts import CompileOutcome, CompileRequest
from .schema_compiler import compile_schema

logger = logging.getLogger(__name__)


class CompilationError(Exception):
    """Raised when a compilation use case cannot be completed."""


def execute_compilation(request: CompileRequest) -> CompileOutcome:
    """Compile the requested schema and write the generated module unless checking only."""
    try:
        configuration = resolve_configuration(request)
        module = compile_configured_schema(configuration)
    except (ConfigurationError, SchemaError) as exc:
        raise CompilationError(str(exc)) from exc

    output_path = None if request.check_only else configuration.output.path
    if not request.check_only:
        if output_path is None:
            raise CompilationError("An output path is required unless checking only.")
        try:
            write_module(module, output_path)
        except OSError as exc:
            raise CompilationError(f"Failed to write {output_path}: {exc}") from exc
        logger.info("Wrote %s", output_path)

    return CompileOutcome(
        schema_id=module.schema_id,
        output_path=output_path.resolve() if output_path else None,
        key_count=len(module.accessors),
        variant_count=len(module.variants),
    )


def resolve_configuration(request: CompileRequest) -> Configuration:
    """Load the configuration file or build one from the request's direct values."""
    if request.config_path:
        if request.schema_path or request.schema_id:
            raise ConfigurationError("Use either a configuration file or --schema/--id, not both.")
        return load_configuration(request.config_path)
    if not request.schema_path or not request.schema_id:
        raise ConfigurationError("Either a configuration file or --schema and --id is required.")
    return build_configuration(
        schema_path=request.schema_path,
        schema_id=request.schema_id,
        output_path=request.output_path,
        class_name=request.class_name,
    )


def compile_configured_schema(configuration: Configuration) -> GeneratedModule:
    """Run the compiler with the skip rules and type overrides of `configuration`."""
    schema = configuration.schema
    source = schema.source_path.name if schema.source_path else None
    logger.debug("Compiling schema %s from %s", schema.schema_id, source or "<inline>")
    return compile_schema(
        schema.text,
        schema.schema_id,
        class_name=configuration.output.class_name,
        skip=configuration.skip,
        overrides=configuration.overrides,
        source=source,
    )


def write_module(module: GeneratedModule, output_path: Path) -> None:
    """Replace `output_path` with the module text in one step."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    file_descriptor, temporary_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            handle.write(module.source)
        os.replace(temporary_name, output_path)
    except BaseException:
        Path(temporary_name).unlink(missing_ok=True)
        raise
