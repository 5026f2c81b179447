"""Compilation entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CompileRequest:
    """Input contract for one compilation.

    Either `config_path` or all of `schema_path`, `schema_id` and
    `output_path` must be given.
    """

    config_path: str | None = None
    schema_path: str | None = None
    schema_id: str | None = None
    output_path: str | None = None
    class_name: str | None = None
    check_only: bool = False


@dataclass(frozen=True)
class CompileOutcome:
    """Output contract for one completed compilation."""

    schema_id: str
    output_path: Path | None
    key_count: int
    variant_count: int
