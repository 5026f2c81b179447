"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, TypeVar

import click

from gsettings_codegen.compilation import (
    CompilationError,
    CompileRequest,
    execute_compilation,
)
from gsettings_codegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)

F = TypeVar("F", bound=Callable[..., Any])


class CliError(Exception):
    """Custom CLI error."""


def _schema_options(command: F) -> F:
    """Attach the options that select a schema file and schema id."""
    command = click.option(
        "--id",
        "schema_id",
        required=False,
        help="Schema id to compile (the id attribute of the <schema> element)",
    )(command)
    command = click.option(
        "--schema",
        "schema_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to the GSettings schema XML file",
    )(command)
    command = click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to the YAML build configuration file",
    )(command)
    return command


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="gsettings-codegen")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log compiler progress.")
def cli(verbose: bool) -> None:
    """Typed Python accessors from GSettings schemas."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate")
@_schema_options
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the Python module to write",
)
@click.option(
    "--class-name",
    "class_name",
    required=False,
    help="Name of the generated settings class",
)
def generate(
    config_path: str | None,
    schema_path: str | None,
    schema_id: str | None,
    output_path: str | None,
    class_name: str | None,
) -> None:
    """Generate the typed settings module for one schema."""
    try:
        outcome = execute_compilation(
            CompileRequest(
                config_path=config_path,
                schema_path=schema_path,
                schema_id=schema_id,
                output_path=output_path,
                class_name=class_name,
            )
        )
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


@cli.command(name="check")
@_schema_options
def check(config_path: str | None, schema_path: str | None, schema_id: str | None) -> None:
    """Validate a schema without writing any output."""
    try:
        outcome = execute_compilation(
            CompileRequest(
                config_path=config_path,
                schema_path=schema_path,
                schema_id=schema_id,
                check_only=True,
            )
        )
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"{outcome.schema_id}: {outcome.key_count} keys, {outcome.variant_count} variant types"
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML build configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML build configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
