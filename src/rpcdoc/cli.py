"""CLI entry point for rpcdoc."""

import logging
from pathlib import Path

import click

from rpcdoc.config import load_config
from rpcdoc.errors import RpcdocError
from rpcdoc.pipeline import load_source, run_jobs
from rpcdoc.schema.codec import dumps, load_file
from rpcdoc.schema.validator import validate
from rpcdoc.types.annotate import AnnotatedField, annotate
from rpcdoc.types.version import Version

LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _parse_version(ctx, param, value):
    if value is None:
        return None
    try:
        return Version.parse(value)
    except RpcdocError as e:
        raise click.BadParameter(str(e)) from e


def _write_definition(definition, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dumps(definition) + "\n", encoding="utf-8")


def _format_field(field: AnnotatedField, prefix: str) -> list[str]:
    label = f"{prefix}.{field.name}" if field.name else f"{prefix}[]"
    flags = " optional" if field.optional else ""
    if field.condition:
        flags += f" [{field.condition}]"
    lines = [f"  {label}: {field.schema_type} -> {field.target_type} ({field.category.value}){flags}"]
    for child in field.children:
        lines.extend(_format_field(child, label))
    return lines


@click.group()
@click.option("--log-level", default=None, type=click.Choice(LEVELS, case_sensitive=False), help="Logging level.")
@click.pass_context
def main(ctx, log_level: str | None):
    """rpcdoc: turn RPC help text into a typed API definition."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    logging.basicConfig(
        level=(log_level or "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("docs_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output JSON file.")
@click.option("--version", "version", default=None, callback=_parse_version, help="API version, e.g. 29.1.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "helpdir", "helptext", "bulk"]), help="Source format.")
def extract(docs_path: Path, output: Path, version: Version | None, fmt: str):
    """Extract an API definition from help text and save it as JSON."""
    click.echo(f"Parsing {docs_path} (format: {fmt})...")
    try:
        definition = load_source(docs_path, version=version, fmt=fmt)
        outcome = validate(definition)
    except RpcdocError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(definition.rpcs)} methods.")

    for warning in outcome.warnings:
        click.echo(f"Warning: {warning.message}")

    _write_definition(definition, output)
    click.echo(f"API definition saved to {output}")


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(schema_path: Path):
    """Load and validate an API definition."""
    try:
        definition = load_file(schema_path)
        outcome = validate(definition)
    except RpcdocError as e:
        raise click.ClickException(str(e)) from e

    for warning in outcome.warnings:
        click.echo(f"Warning: {warning.message}")
    click.echo(f"OK: {len(definition.rpcs)} methods, {len(outcome.warnings)} warnings")


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--method", "method_name", default=None, help="Only show this method.")
def types(schema_path: Path, method_name: str | None):
    """Print the resolved type of every argument and result field."""
    try:
        definition = load_file(schema_path)
    except RpcdocError as e:
        raise click.ClickException(str(e)) from e

    if method_name is not None and definition.get_method(method_name) is None:
        raise click.ClickException(f"Unknown method '{method_name}'")

    annotated = annotate(definition)
    for name, method in annotated.methods.items():
        if method_name is not None and name != method_name:
            continue
        click.echo(f"{name} -> {method.response_name}")
        for param in method.params:
            click.echo(f"  param {param.name}: {param.schema_type} -> {param.target_type} ({param.category.value})"
                       + (" optional" if param.optional else ""))
        for field in method.fields:
            for line in _format_field(field, "result"):
                click.echo(line)


@main.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def run(ctx, config_path: Path):
    """Run every extraction job listed in a YAML config."""
    try:
        config = load_config(config_path)
    except RpcdocError as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj.get("log_level") is None:
        logging.getLogger().setLevel(config.log_level)

    if not config.jobs:
        click.echo("No jobs configured.")
        return

    click.echo(f"Running {len(config.jobs)} jobs...")
    try:
        results = run_jobs(config.extraction_jobs())
    except RpcdocError as e:
        raise click.ClickException(str(e)) from e

    output = config.output or config_path.parent
    for version, definition in results.items():
        name = f"{version.as_module_name()}.json" if version is not None else "rpcs.json"
        file_path = output / name
        _write_definition(definition, file_path)
        click.echo(f"  Created {file_path} ({len(definition.rpcs)} methods)")

    click.echo(f"Done! Generated {len(results)} files in {output}")
