#!/usr/bin/env python3
"""
CLI for reshaping JSON/YAML documents.

Usage:
    reshaper run '[{"x": 12, "y": 5}]' --schema '["Number"]'
    reshaper run @people.json --schema @schema.yaml --hint lastName
    reshaper run @s3://bucket/people.json --schema '{"age": ["Number"]}'
    cat people.json | reshaper run - --schema '["String"]'
    reshaper check @schema.yaml
    reshaper --version
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import fsspec
import typer
import yaml
from pydantic import ValidationError

from reshaper import __version__
from reshaper.engine import reshape
from reshaper.exceptions import ReshaperError
from reshaper.schema import describe, leaf_kinds, parse_schema, validate_schema_document
from reshaper.settings import ReshapeSettings

app = typer.Typer(
    name="reshaper",
    help="Reshape nested JSON/YAML data into the shape described by a schema",
    no_args_is_help=True,
    add_completion=False,
)


def parse_text(text: str, name: str = "") -> Any:
    """Parse YAML for .yaml/.yml names, JSON otherwise."""
    if name.endswith((".yaml", ".yml")):
        return yaml.safe_load(text)
    return json.loads(text)


def read_path(path: str) -> str:
    """Read a local path or any fsspec URI (s3://, gs://, https://, ...)."""
    if "://" in path:
        with fsspec.open(path, "r") as f:
            return f.read()
    return Path(path).read_text()


def load_document(value: str, label: str) -> Any:
    """
    Load a document given inline, as @path, or as "-" for stdin.

    Raises:
        typer.Exit: On missing files or parse errors
    """
    if value == "-":
        try:
            return yaml.safe_load(sys.stdin.read())
        except yaml.YAMLError as e:
            typer.echo(f"Error: Invalid {label} on stdin: {e}", err=True)
            raise typer.Exit(1)

    if value.startswith("@"):
        name = value[1:]
        try:
            text = read_path(name)
        except FileNotFoundError:
            typer.echo(f"Error: {label.capitalize()} file not found: {name}", err=True)
            raise typer.Exit(1)
        try:
            return parse_text(text, name)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            typer.echo(f"Error: Invalid {label} file {name}: {e}", err=True)
            raise typer.Exit(1)

    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in {label}: {e}", err=True)
        raise typer.Exit(1)


def load_settings(path: Optional[Path]) -> ReshapeSettings:
    """Load ReshapeSettings from a YAML/JSON file."""
    if path is None:
        return ReshapeSettings.default()
    if not path.exists():
        typer.echo(f"Error: Settings file not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        config = yaml.safe_load(path.read_text())
        return ReshapeSettings.from_yaml(config)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        typer.echo(f"Error: Invalid settings in {path}: {e}", err=True)
        raise typer.Exit(1)


def resolve_hints(hint: Optional[List[str]], hints_json: Optional[str]) -> Any:
    """Combine repeated --hint options and the --hints JSON option."""
    if hint and hints_json:
        typer.echo("Error: Use either --hint or --hints, not both", err=True)
        raise typer.Exit(1)
    if hints_json:
        return load_document(hints_json, "hints")
    return list(hint) if hint else None


def setup_logging(verbose: int, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


@app.command()
def run(
    source: str = typer.Argument(..., help="Source as JSON, @file (JSON/YAML, local or URI) or - for stdin"),
    schema: str = typer.Option(..., "--schema", "-s", help="Schema as JSON or @file"),
    hint: Optional[List[str]] = typer.Option(None, "--hint", "-H", help="Hint property name (repeatable, consumed in order)"),
    hints_json: Optional[str] = typer.Option(None, "--hints", help="Hints as JSON or @file (string, list or key mapping)"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings file (YAML/JSON)"),
    indent: Optional[int] = typer.Option(None, "--indent", help="Indent the JSON output"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
):
    """Reshape a source document and print the result as JSON."""
    setup_logging(verbose, quiet)

    data = load_document(source, "source")
    schema_doc = load_document(schema, "schema")
    hints = resolve_hints(hint, hints_json)
    options = load_settings(settings)

    try:
        result = reshape(data, schema_doc, hints, options)
    except (ReshaperError, TypeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(result, indent=indent, ensure_ascii=False))


@app.command()
def check(
    schema: str = typer.Argument(..., help="Schema as JSON or @file"),
):
    """Validate a schema document without reshaping anything."""
    schema_doc = load_document(schema, "schema")

    report = validate_schema_document(schema_doc)
    if not report["valid"]:
        typer.echo("Invalid schema:", err=True)
        for error in report["errors"]:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)

    try:
        node = parse_schema(schema_doc)
    except ReshaperError as e:
        typer.echo(f"Invalid schema: {e}", err=True)
        raise typer.Exit(1)

    kinds = ", ".join(kind.value for kind in leaf_kinds(node))
    typer.echo(f"✓ {describe(node)} (leaves: {kinds})")


def version_callback(value: bool):
    if value:
        typer.echo(f"reshaper {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """reshaper - reshape nested data into the shape you describe."""


def main():
    """Entry point for the reshaper CLI."""
    app()


if __name__ == "__main__":
    main()
