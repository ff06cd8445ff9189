"""Validate command for blueprint files."""

from pathlib import Path

import typer

from ...blueprints import validate_blueprint
from ..app import app, console, get_json_mode
from ..utils import (
    Output,
    ExitCode,
    format_validation_for_json,
    load_blueprints_for_command,
)


@app.command("validate")
def validate_command(
    file: Path | None = typer.Argument(
        None, help="Blueprints YAML file (defaults to the configured one)"
    ),
    blueprint: str | None = typer.Option(
        None, "--blueprint", "-b", help="Only validate this blueprint"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as errors"
    ),
):
    """
    Check blueprints for authoring mistakes.

    Errors (no root field, filters on unknown fields, circular filters, fields
    without options) make a blueprint unusable. Warnings (unsatisfiable
    counts, filters that can never match) are reported but do not fail
    unless --strict is given.

    EXIT CODES:
        0 = Valid
        1 = Validation errors
        3 = File not found

    Examples:
        npcforge validate npcs.yaml
        npcforge validate npcs.yaml -b noble --strict
    """
    out = Output(console=console, json_mode=get_json_mode())

    blueprints = load_blueprints_for_command(file, out)
    if blueprints is None:
        raise typer.Exit(out.finish())

    if blueprint is not None:
        if blueprint not in blueprints:
            out.error(
                f"Unknown blueprint: {blueprint}",
                suggestion=f"Available: {', '.join(blueprints)}",
            )
            raise typer.Exit(out.finish())
        blueprints = {blueprint: blueprints[blueprint]}

    results = {}
    failed = False
    for name, bp in blueprints.items():
        result = validate_blueprint(bp)
        results[name] = format_validation_for_json(result)

        for issue in result.errors:
            out.error(
                f"{name}: {issue}",
                location=issue.location,
                category=issue.category,
                suggestion=issue.suggestion,
            )
        for issue in result.warnings:
            out.warning(
                f"{name}: {issue}",
                location=issue.location,
                category=issue.category,
                suggestion=issue.suggestion,
            )
        for issue in result.info:
            out.text(f"[dim]ℹ {name}: {issue}[/dim]")

        if not result.valid or (strict and result.warnings):
            failed = True
        else:
            out.success(f"{name}: valid ({len(bp.fields)} fields)")

    out.set_data("blueprints", results)
    if failed:
        out.error(
            "Blueprint validation failed",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
    raise typer.Exit(out.finish())
