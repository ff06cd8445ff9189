"""List the blueprints available in a blueprints file."""

from pathlib import Path

import typer

from ...errors import BlueprintError
from ...generation import DependencyGraph
from ..app import app, console, get_json_mode
from ..utils import Output, load_blueprints_for_command


@app.command("blueprints")
def blueprints_command(
    file: Path | None = typer.Argument(
        None, help="Blueprints YAML file (defaults to the configured one)"
    ),
):
    """
    List blueprints with their field counts and resolution order.

    Examples:
        npcforge blueprints
        npcforge blueprints campaign/npcs.yaml
    """
    out = Output(console=console, json_mode=get_json_mode())

    blueprints = load_blueprints_for_command(file, out)
    if blueprints is None:
        raise typer.Exit(out.finish())

    rows = []
    for name, blueprint in blueprints.items():
        try:
            order = ", ".join(
                DependencyGraph.from_blueprints(blueprint.fields).resolution_order()
            )
        except BlueprintError as e:
            order = f"invalid: {e}"
        rows.append([name, str(len(blueprint.fields)), blueprint.description or "", order])

    out.table(
        "Blueprints",
        ["Name", "Fields", "Description", "Resolution order"],
        rows,
    )
    raise typer.Exit(out.finish())
