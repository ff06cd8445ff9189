"""Generate command: build one record interactively or at random."""

import random
from pathlib import Path

import typer

from ...config import get_config
from ...errors import BlueprintError, SubmitError
from ...generation import FieldInfo, ResolutionBuilder
from ..app import app, console, get_json_mode
from ..utils import (
    Output,
    ExitCode,
    format_field_label,
    load_blueprints_for_command,
)


def sample_display_options(
    options: list[str],
    required_count: int,
    multiplier: int,
    rng: random.Random,
) -> list[str]:
    """Pick the subset of options to show for one step.

    Shows ``required_count * multiplier`` options (all of them when there are
    fewer, or when multiplier is not positive), keeping their original order.
    """
    limit = required_count * multiplier
    if multiplier <= 0 or len(options) <= limit:
        return list(options)
    picked = set(rng.sample(options, limit))
    return [option for option in options if option in picked]


def parse_selection(text: str, displayed: list[str]) -> list[str]:
    """Parse a comma separated selection.

    Each entry is either an option label typed out in full or a 1-based
    number into ``displayed``. An entry equal to a displayed label is always
    taken as that label, so numeric options are never misread as positions.
    """
    values = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if entry in displayed:
            values.append(entry)
        elif entry.isdigit() and 1 <= int(entry) <= len(displayed):
            values.append(displayed[int(entry) - 1])
        else:
            values.append(entry)
    return values


def _prompt_for_field(info: FieldInfo, displayed: list[str]) -> list[str]:
    console.print()
    console.print(
        f"[bold]Choose {info.required_count} option"
        f"{'s' if info.required_count != 1 else ''} for "
        f"{format_field_label(info.field)}[/bold]"
    )
    for i, option in enumerate(displayed, 1):
        console.print(f"  [cyan]{i:>2}[/cyan]  {option}")
    if len(displayed) < len(info.options):
        console.print(
            f"  [dim]({len(info.options) - len(displayed)} more options not shown; "
            "type any valid option by name)[/dim]"
        )
    text = typer.prompt("Selection", default="", show_default=False)
    return parse_selection(text, displayed)


@app.command("generate")
def generate_command(
    blueprint: str = typer.Argument(..., help="Name of the blueprint to generate"),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Blueprints YAML file (defaults to the configured one)"
    ),
    auto: bool = typer.Option(
        False, "--auto", "-a", help="Pick options at random instead of prompting"
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for displayed options and --auto picks"
    ),
):
    """
    Generate one record from a blueprint, field by field.

    For each field the valid options are listed (a random subset when there
    are many). Enter a comma separated selection, by number or by name.
    Options for later fields depend on earlier choices.

    EXIT CODES:
        0 = Success
        1 = Blueprint invalid
        3 = File not found
        4 = Generation error (a field cannot be satisfied)
        10 = Cancelled

    Examples:
        npcforge generate commoner
        npcforge generate noble --file campaign/npcs.yaml
        npcforge --json generate commoner --auto --seed 7
    """
    json_mode = get_json_mode()
    out = Output(console=console, json_mode=json_mode)
    config = get_config()

    blueprints = load_blueprints_for_command(file, out)
    if blueprints is None:
        raise typer.Exit(out.finish())

    if blueprint not in blueprints:
        out.error(
            f"Unknown blueprint: {blueprint}",
            suggestion=f"Available: {', '.join(blueprints)}",
        )
        raise typer.Exit(out.finish())

    try:
        builder = ResolutionBuilder(blueprints[blueprint])
    except BlueprintError as e:
        out.error(
            f"Blueprint '{blueprint}' is invalid: {e}",
            suggestion="Run `npcforge validate` for details",
        )
        raise typer.Exit(out.finish())

    rng = random.Random(seed if seed is not None else config.generation.seed)
    # JSON mode never prompts
    interactive = not (auto or json_mode)
    multiplier = config.generation.display_multiplier

    record = None
    while record is None:
        info = builder.current_field_info()
        if info is None:
            break

        if info.required_count > len(info.options):
            out.error(
                f"Field '{info.field}' needs {info.required_count} values but only "
                f"{len(info.options)} options are available",
                location=info.field,
                exit_code=ExitCode.GENERATION_ERROR,
            )
            out.set_data("partial", builder.state)
            raise typer.Exit(out.finish())

        displayed = sample_display_options(
            info.options, info.required_count, multiplier, rng
        )
        while True:
            if interactive:
                try:
                    values = _prompt_for_field(info, displayed)
                except typer.Abort:
                    out.error("Cancelled", exit_code=ExitCode.USER_CANCELLED)
                    raise typer.Exit(out.finish())
            else:
                values = rng.sample(displayed, info.required_count)

            try:
                record = builder.submit(values)
                break
            except SubmitError as e:
                out.warning(str(e))

    out.blank()
    out.table(
        f"Generated {blueprint}",
        ["Field", "Value"],
        [
            [format_field_label(name), ", ".join(values)]
            for name, values in builder.state.items()
        ],
        data_key="fields",
    )
    out.set_data("blueprint", blueprint)
    out.set_data("record", builder.state)
    raise typer.Exit(out.finish())
