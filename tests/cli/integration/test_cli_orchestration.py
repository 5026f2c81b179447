"""CLI orchestration integration tests."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner
from gsettings_codegen.cli import cli

SCHEMA_TEXT = """<schemalist>
  <schema id="io.github.test" path="/io/github/test/">
    <key name="is-maximized" type="b"><default>false</default></key>
    <key name="preferred-audio-source" type="s">
      <choices><choice value="microphone"/><choice value="desktop-audio"/></choices>
      <default>'microphone'</default>
    </key>
    <key name="window-position" type="(ii)"><default>(0, 0)</default></key>
  </schema>
</schemalist>
"""


def _write_schema(tmp_path: Path) -> Path:
    path = tmp_path / "test.gschema.xml"
    path.write_text(SCHEMA_TEXT, encoding="utf-8")
    return path


def _write_config(tmp_path: Path) -> Path:
    _write_schema(tmp_path)
    path = tmp_path / "gsettings-codegen.yaml"
    path.write_text(
        """
schema:
  path: test.gschema.xml
  id: io.github.test
output:
  path: generated/test_settings.py
  class_name: TestSettings
skip:
  keys:
    - window-position
""",
        encoding="utf-8",
    )
    return path


def test_generate_command_writes_module_from_config(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    output_path = tmp_path / "generated" / "test_settings.py"

    result = runner.invoke(cli, ["generate", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.output
    source = output_path.read_text(encoding="utf-8")
    assert "class TestSettings:" in source
    assert "class PreferredAudioSource(str, Enum):" in source
    assert "window_position" not in source


def test_generate_command_with_direct_options_rejects_unsupported_keys(tmp_path: Path) -> None:
    runner = CliRunner()
    schema_path = _write_schema(tmp_path)
    output_path = tmp_path / "settings.py"

    result = runner.invoke(
        cli,
        [
            "generate",
            "--schema",
            str(schema_path),
            "--id",
            "io.github.test",
            "--output",
            str(output_path),
            "--class-name",
            "TestSettings",
        ],
    )

    assert result.exit_code != 0
    assert "window-position" in str(result.exception)
    assert not output_path.exists()


def test_check_command_reports_counts(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(cli, ["check", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "io.github.test: 2 keys, 1 variant types"
    assert not (tmp_path / "generated").exists()


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "gsettings-codegen.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_verbose_flag_logs_compiler_progress(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(cli, ["--verbose", "check", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "io.github.test: 2 keys, 1 variant types" in result.output
