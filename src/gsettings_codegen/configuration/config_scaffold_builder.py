"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "gsettings-codegen.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Build configuration for gsettings-codegen.
# Replace every <REQUIRED> placeholder before running generate.
# Relative paths are resolved against the directory of this file.

schema:
  # Provide either a schema path or inline schema XML text.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"
  # The id attribute of the <schema> element to compile.
  id: "<REQUIRED>"

output:
  # Python module the accessors are written to.
  path: "<REQUIRED>"
  # Name of the generated settings class (default: Settings).
  # class_name: "<OPTIONAL>"

# skip:
#   # Keys excluded from generation.
#   keys:
#     - "<OPTIONAL>"
#   # Type signatures excluded from generation, e.g. "(ss)".
#   signatures:
#     - "<OPTIONAL>"

# define:
#   # Python annotations for keys or signatures without a built-in mapping.
#   - signature: "a{ss}"
#     annotation: "dict[str, str]"
#   - key: "<OPTIONAL>"
#     annotation: "Path"
#     imports:
#       - "from pathlib import Path"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML build configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder build configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
