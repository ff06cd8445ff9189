"""CLI utilities for dual-mode output (human-friendly + machine-readable).

- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output printed once at the end

Example:
    out = Output(console=console, json_mode=get_json_mode())
    out.success("Loaded blueprints", count=3)
    out.table("Blueprints", ["Name", "Fields"], [["commoner", "5"]])
    raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.table import Table

from ..blueprints import load_blueprints
from ..config import get_config
from ..core.models import Blueprint, ValidationResult
from ..errors import BlueprintLoadError
from ..utils import display_path


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (fix the blueprint first)
        3 = File not found
        4 = Generation error
        10 = User cancelled
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    GENERATION_ERROR = 4
    USER_CANCELLED = 10


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for terminal output.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Output a warning message."""
        if self.json_mode:
            self._data["warnings"].append(
                _issue_dict(message, location, category, suggestion)
            )
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def error(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            self._data["errors"].append(
                _issue_dict(message, location, category, suggestion)
            )
        else:
            self.console.print(f"[red]✗[/red] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message)

    def blank(self) -> None:
        """Output a blank line (human mode only)."""
        if not self.json_mode:
            self.console.print()

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def _issue_dict(
    message: str,
    location: str | None,
    category: str | None,
    suggestion: str | None,
) -> dict[str, Any]:
    issue: dict[str, Any] = {"message": message}
    if location:
        issue["location"] = location
    if category:
        issue["category"] = category
    if suggestion:
        issue["suggestion"] = suggestion
    return issue


def load_blueprints_for_command(
    file: Path | None, out: Output
) -> dict[str, Blueprint] | None:
    """Load the blueprints file named on the command line (or the configured one).

    Reports failures through ``out`` and returns None instead of raising.
    """
    path = file or get_config().blueprints_path
    if not path.exists():
        out.error(
            f"Blueprints file not found: {display_path(path)}",
            suggestion="Pass --file or run `npcforge config set paths.blueprints_file <path>`",
            exit_code=ExitCode.FILE_NOT_FOUND,
        )
        return None
    try:
        return load_blueprints(path)
    except BlueprintLoadError as e:
        out.error(
            f"Failed to load blueprints from {display_path(path)}: {e}",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
        return None


def format_field_label(name: str) -> str:
    """Turn a field key like ``hair_colour`` into ``hair colour``."""
    return name.replace("-", " ").replace("_", " ")


def format_validation_for_json(result: ValidationResult) -> dict[str, Any]:
    """Format a ValidationResult for JSON output."""
    return {
        "valid": result.valid,
        "errors": [issue.model_dump(mode="json") for issue in result.errors],
        "warnings": [issue.model_dump(mode="json") for issue in result.warnings],
        "info": [issue.model_dump(mode="json") for issue in result.info],
    }
