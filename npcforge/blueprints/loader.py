"""Load blueprints from YAML files.

A blueprint file maps blueprint names to blueprint bodies::

    commoner:
      description: Ordinary townsfolk
      fields:
        race: [Elf, Orc, Human]
        name: names/common.txt
        weapon:
          n: 1
          choices:
            - values: [Axe, Club]
              filter: "race: Orc"
            - values: [Bow]
              filter: "race: Elf"
            - file: weapons/generic.txt

A body may also list its fields directly, without the ``fields`` key.

A field is an option file path, an inline list of options, or a mapping with
an optional ``n`` (default 1) and exactly one of ``file`` or ``choices``.
Each entry in ``choices`` has exactly one of ``file`` or ``values`` and an
optional ``filter`` of the form ``"field: value"``.

Option files hold one option per line. Anything after ``#`` is a comment and
blank lines are skipped. Paths are relative to the blueprint file.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..core.models import (
    Blueprint,
    ChoiceSource,
    FieldDefinition,
    FieldValueFilter,
)
from ..errors import BlueprintLoadError
from ..utils import resolve_relative_to

logger = logging.getLogger(__name__)


def load_blueprints(path: Path | str) -> dict[str, Blueprint]:
    """Load every blueprint defined in a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        BlueprintLoadError: If the file content is not a valid blueprint set
    """
    path = Path(path).expanduser()
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BlueprintLoadError(f"Invalid YAML in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise BlueprintLoadError(f"{path} is not valid UTF-8 text: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BlueprintLoadError(
            f"{path}: expected a mapping of blueprint names, got {type(data).__name__}"
        )

    blueprints = {
        str(name): parse_blueprint(str(name), body, path)
        for name, body in data.items()
    }
    logger.info("Loaded %d blueprints from %s", len(blueprints), path)
    return blueprints


def parse_blueprint(name: str, data: Any, base_file: Path) -> Blueprint:
    """Parse one blueprint body."""
    if not isinstance(data, dict):
        raise BlueprintLoadError(
            f"Blueprint '{name}': expected a mapping of fields, got {type(data).__name__}"
        )

    description = None
    fields_data = data
    if isinstance(data.get("fields"), dict) and set(data) <= {"fields", "description"}:
        description = data.get("description")
        fields_data = data["fields"]

    if not fields_data:
        raise BlueprintLoadError(f"Blueprint '{name}' defines no fields")

    fields = {}
    for field_name, field_data in fields_data.items():
        try:
            fields[str(field_name)] = parse_field(field_data, base_file)
        except BlueprintLoadError as e:
            raise BlueprintLoadError(f"Blueprint '{name}', field '{field_name}': {e}") from e

    try:
        return Blueprint(name=name, description=description, fields=fields)
    except ValidationError as e:
        raise BlueprintLoadError(f"Blueprint '{name}': {e}") from e


def parse_field(data: Any, base_file: Path) -> FieldDefinition:
    """Parse a single field entry (path, list or mapping)."""
    if isinstance(data, str):
        return _field([_source_from_file(data, base_file)])
    if isinstance(data, list):
        return _field([ChoiceSource(options=_option_list(data))])
    if not isinstance(data, dict):
        raise BlueprintLoadError(f"unexpected field entry: {data!r}")

    count = data.get("n", 1)
    if isinstance(count, bool) or not isinstance(count, int):
        raise BlueprintLoadError(f"'n' must be an integer, got {count!r}")

    has_file = "file" in data
    has_choices = "choices" in data
    if has_file == has_choices:
        raise BlueprintLoadError(
            "a field must have either a 'file' key or a 'choices' key, but not both"
        )

    if has_file:
        sources = [_source_from_file(_require_str(data, "file"), base_file)]
    else:
        choices = data["choices"]
        if not isinstance(choices, list) or not choices:
            raise BlueprintLoadError("'choices' must be a non-empty list of sources")
        sources = [parse_choice_source(entry, base_file) for entry in choices]

    return _field(sources, count)


def parse_choice_source(data: Any, base_file: Path) -> ChoiceSource:
    """Parse one entry of a field's ``choices`` list."""
    if not isinstance(data, dict):
        raise BlueprintLoadError(f"a choice source must be a mapping, got {data!r}")

    has_file = "file" in data
    has_values = "values" in data
    if has_file == has_values:
        raise BlueprintLoadError(
            "a choice source must have a 'file' or a 'values' entry, but not both"
        )

    if has_file:
        options = read_option_file(
            resolve_relative_to(_require_str(data, "file"), base_file)
        )
    else:
        values = data["values"]
        if not isinstance(values, list):
            raise BlueprintLoadError(f"'values' must be a list, got {values!r}")
        options = _option_list(values)

    if "filter" not in data:
        return ChoiceSource(options=options)

    try:
        choice_filter = FieldValueFilter.parse(_require_str(data, "filter"))
    except ValueError as e:
        raise BlueprintLoadError(str(e)) from e
    return ChoiceSource(options=options, filter=choice_filter)


def read_option_file(path: Path | str) -> list[str]:
    """Read options from a text file, one per line, '#' starting a comment."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BlueprintLoadError(f"cannot read option file {path}: {e}") from e

    options = []
    for line in text.splitlines():
        clean = line.split("#", 1)[0].strip()
        if clean:
            options.append(clean)
    logger.debug("Read %d options from %s", len(options), path)
    return options


# =============================================================================
# Helpers
# =============================================================================


def _field(sources: list[ChoiceSource], count: int = 1) -> FieldDefinition:
    try:
        return FieldDefinition(required_count=count, sources=sources)
    except ValidationError as e:
        raise BlueprintLoadError(str(e)) from e


def _source_from_file(path: str, base_file: Path) -> ChoiceSource:
    return ChoiceSource(options=read_option_file(resolve_relative_to(path, base_file)))


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise BlueprintLoadError(f"'{key}' must be a string, got {value!r}")
    return value


def _option_list(values: list) -> list[str]:
    options = []
    for value in values:
        # YAML turns bare numbers into ints/floats; keep them as labels
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise BlueprintLoadError(f"options must be strings, got {value!r}")
        options.append(str(value))
    return options
