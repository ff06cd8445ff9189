"""Config command for viewing and managing npcforge configuration."""

import typer

from ..app import app, console
from ...config import get_config, reset_config, config_file


VALID_KEYS = {
    "paths.blueprints_file",
    "generation.display_multiplier",
    "generation.seed",
}

INT_FIELDS = {
    "display_multiplier",
    "seed",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. paths.blueprints_file, generation.seed)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify npcforge configuration.

    Examples:
        npcforge config show
        npcforge config set paths.blueprints_file ~/campaign/npcs.yaml
        npcforge config set generation.display_multiplier 4
        npcforge config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] npcforge config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]npcforge Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Paths[/bold cyan]")
    console.print(f"  blueprints_file    = {config.blueprints_path}")

    console.print()
    console.print("[bold cyan]Generation[/bold cyan]")
    console.print(f"  display_multiplier = {config.generation.display_multiplier}")
    seed = config.generation.seed
    console.print(f"  seed               = {seed if seed is not None else '[dim](random)[/dim]'}")

    console.print()
    path = config_file()
    if path.exists():
        console.print(f"Config file: {path}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({path})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    zone, field_name = key.split(".", 1)
    target = config.paths if zone == "paths" else config.generation

    if field_name in INT_FIELDS:
        try:
            setattr(target, field_name, int(value))
        except ValueError:
            console.print(f"[red]Invalid integer value:[/red] {value}")
            raise typer.Exit(1)
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {config_file()}")


def _reset_config():
    """Reset config to defaults."""
    path = config_file()
    if path.exists():
        path.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {path}")
    else:
        console.print("Config already at defaults (no config file exists)")
