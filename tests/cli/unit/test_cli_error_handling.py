"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from gsettings_codegen.cli import main

UNSUPPORTED_SCHEMA = """<schemalist>
  <schema id="io.github.test">
    <key name="custom-headers" type="a{ss}"><default>{}</default></key>
  </schema>
</schemalist>
"""


def test_option_without_value_returns_clean_click_error(capsys) -> None:
    exit_code = main(["check", "--config"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "requires an argument" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_schema_errors_are_reported_without_traceback(tmp_path: Path, capsys) -> None:
    schema_path = tmp_path / "test.gschema.xml"
    schema_path.write_text(UNSUPPORTED_SCHEMA, encoding="utf-8")
    output_path = tmp_path / "test_settings.py"

    exit_code = main(
        [
            "generate",
            "--schema",
            str(schema_path),
            "--id",
            "io.github.test",
            "--output",
            str(output_path),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "custom-headers" in captured.err
    assert "a{ss}" in captured.err
    assert "Traceback" not in captured.err
    assert not output_path.exists()


def test_missing_schema_selection_is_reported(capsys) -> None:
    exit_code = main(["check"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "--schema and --id" in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "gsettings-codegen.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert output_path.read_text(encoding="utf-8") == "existing"
