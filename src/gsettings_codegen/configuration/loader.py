"""Configuration loader service."""

from __future__ import annotations

import keyword
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from gsettings_codegen.code_generation.module_builder import DEFAULT_CLASS_NAME
from gsettings_codegen.schema_management.schema_errors import SchemaError
from gsettings_codegen.schema_management.schema_parsing import parse_schema_document
from gsettings_codegen.type_mapping.type_mapper import TypeOverride

from .runtime_settings import Configuration, OutputSettings, SchemaConfig, SkipSettings

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    output = _parse_output_section(parsed.get("output"), path.parent)
    skip = _parse_skip_section(parsed.get("skip"))
    overrides = _parse_define_section(parsed.get("define"))

    try:
        document = parse_schema_document(schema.text, schema.schema_id)
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc
    key_names = {key.name for key in document.keys}
    _require_known_keys(skip.keys, key_names, "skip.keys")
    _require_known_keys(
        tuple(override.key_name for override in overrides if override.key_name),
        key_names,
        "define.key",
    )

    logger.debug("Loaded configuration %s for schema %s", path, schema.schema_id)
    return Configuration(
        path=path,
        schema=schema,
        output=output,
        skip=skip,
        overrides=overrides,
    )


def build_configuration(
    *,
    schema_path: Path | str,
    schema_id: str,
    output_path: Path | str | None = None,
    class_name: str | None = None,
) -> Configuration:
    """Build a configuration from command line values instead of a file."""
    path = Path(schema_path)
    if not path.exists():
        raise ConfigurationError(f"Schema file not found: {path}")
    return Configuration(
        path=None,
        schema=SchemaConfig(
            schema_id=_require_non_empty_string(schema_id, "schema.id"),
            text=path.read_text(encoding="utf-8"),
            source_path=path.resolve(),
        ),
        output=OutputSettings(
            path=Path(output_path) if output_path else None,
            class_name=_require_class_name(class_name or DEFAULT_CLASS_NAME, "output.class_name"),
        ),
        skip=SkipSettings(),
        overrides=(),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    section = _require_mapping(value, "schema")
    schema_id = _require_non_empty_string(section.get("id"), "schema.id")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return SchemaConfig(schema_id=schema_id, text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaConfig(schema_id=schema_id, text=text, source_path=schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output")
    raw_path = _require_non_empty_string(section.get("path"), "output.path")
    class_name = section.get("class_name", DEFAULT_CLASS_NAME)
    return OutputSettings(
        path=_resolve_path(base_path, raw_path),
        class_name=_require_class_name(class_name, "output.class_name"),
    )


def _parse_skip_section(value: Any) -> SkipSettings:
    if value is None:
        return SkipSettings()
    section = _require_mapping(value, "skip")
    return SkipSettings(
        keys=_normalize_string_sequence(section.get("keys"), "skip.keys"),
        signatures=_normalize_string_sequence(section.get("signatures"), "skip.signatures"),
    )


def _parse_define_section(value: Any) -> tuple[TypeOverride, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigurationError("define must be a list of type overrides.")
    overrides: list[TypeOverride] = []
    for index, entry in enumerate(value):
        label = f"define[{index}]"
        mapping = _require_mapping(entry, label)
        key_name = _optional_string(mapping.get("key"), f"{label}.key")
        signature = _optional_string(mapping.get("signature"), f"{label}.signature")
        if (key_name is None) == (signature is None):
            raise ConfigurationError(f"{label} must set exactly one of key or signature.")
        annotation = _require_non_empty_string(mapping.get("annotation"), f"{label}.annotation")
        imports = _normalize_string_sequence(mapping.get("imports"), f"{label}.imports")
        for statement in imports:
            if not statement.startswith(("import ", "from ")):
                raise ConfigurationError(f"{label}.imports entries must be import statements.")
        overrides.append(
            TypeOverride(
                annotation=annotation, key_name=key_name, signature=signature, imports=imports
            )
        )
    return tuple(overrides)


def _require_known_keys(names: Sequence[str], key_names: set[str], label: str) -> None:
    for name in names:
        if name not in key_names:
            raise ConfigurationError(f"{label} '{name}' does not exist in schema.")


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_class_name(value: Any, field_name: str) -> str:
    name = _require_non_empty_string(value, field_name)
    if not name.isidentifier() or keyword.iskeyword(name):
        raise ConfigurationError(f"{field_name} must be a valid Python identifier.")
    return name
