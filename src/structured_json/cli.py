"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from structured_json.completion import (
    CompletionError,
    CompletionRequest,
    OpenAIResponsesClient,
    StructuredCompletionError,
    execute_structured_completion,
)
from structured_json.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from structured_json.schema_compilation import build_schema
from structured_json.type_descriptors import TypeReferenceError, UnsupportedTypeError, load_type
from structured_json.value_decoding import DecodeError, decode

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="structured-json")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging threshold for diagnostic output on stderr",
)
def cli(log_level: str) -> None:
    """Compile Python types to JSON Schema and decode JSON back into them."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="schema")
@click.argument("target")
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the schema to this file instead of stdout",
)
def schema_command(target: str, output_path: str | None) -> None:
    """Print the JSON Schema of TARGET, given as 'package.module:TypeName'."""
    try:
        document = build_schema(load_type(target))
    except (TypeReferenceError, UnsupportedTypeError) as exc:
        raise CliError(str(exc)) from exc

    text = json.dumps(document, indent=2)
    if output_path is None:
        click.echo(text)
        return
    destination = Path(output_path)
    try:
        destination.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


@cli.command(name="decode")
@click.argument("target")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON document to decode",
)
def decode_command(target: str, input_path: str) -> None:
    """Decode a JSON document into TARGET and print the resulting value."""
    try:
        annotation = load_type(target)
        payload = json.loads(Path(input_path).read_text(encoding="utf-8"))
        value = decode(annotation, payload)
    except (
        TypeReferenceError,
        UnsupportedTypeError,
        DecodeError,
        json.JSONDecodeError,
        UnicodeDecodeError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc
    click.echo(repr(value))


@cli.command(name="complete")
@click.argument("target")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
@click.option("--prompt", required=True, help="Prompt sent to the completion API")
def complete_command(target: str, config_path: str, prompt: str) -> None:
    """Ask the completion API for a value of TARGET and print it."""
    try:
        configuration = load_configuration(config_path)
        annotation = load_type(target)
        client = OpenAIResponsesClient(configuration.completion)
        outcome = execute_structured_completion(
            CompletionRequest(
                target_type=annotation,
                prompt=prompt,
                max_attempts=configuration.completion.max_attempts,
            ),
            client=client,
        )
    except (
        ConfigurationError,
        TypeReferenceError,
        UnsupportedTypeError,
        CompletionError,
        StructuredCompletionError,
    ) as exc:
        raise CliError(str(exc)) from exc
    click.echo(repr(outcome.value))


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
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
