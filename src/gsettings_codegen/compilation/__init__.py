"""Compilation domain exports."""

from .compile_contracts import CompileOutcome, CompileRequest
from .compile_use_case import (
    CompilationError,
    compile_configured_schema,
    execute_compilation,
    resolve_configuration,
    write_module,
)
from .schema_compiler import compile_key, compile_keys, compile_schema

__all__ = [
    "CompileRequest",
    "CompileOutcome",
    "CompilationError",
    "compile_configured_schema",
    "compile_key",
    "compile_keys",
    "compile_schema",
    "execute_compilation",
    "resolve_configuration",
    "write_module",
]
