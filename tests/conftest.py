"""Shared fixtures for npcforge tests."""

import pytest

from npcforge import config as npcforge_config
from npcforge.core.models import (
    Blueprint,
    ChoiceSource,
    FieldDefinition,
    FieldValueFilter,
)


def _field(*sources: ChoiceSource, n: int = 1) -> FieldDefinition:
    return FieldDefinition(required_count=n, sources=list(sources))


def _opts(*values: str) -> ChoiceSource:
    return ChoiceSource(options=list(values))


def _gated(field: str, value: str, *values: str) -> ChoiceSource:
    return ChoiceSource(
        options=list(values),
        filter=FieldValueFilter(target_field=field, target_value=value),
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config at an empty temp dir and drop the cached singleton."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("NPCFORGE_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("NPCFORGE_BLUEPRINTS", raising=False)
    monkeypatch.delenv("NPCFORGE_DISPLAY_MULTIPLIER", raising=False)
    monkeypatch.delenv("NPCFORGE_SEED", raising=False)
    monkeypatch.setattr(npcforge_config, "_dotenv_loaded", True)
    npcforge_config.reset_config()
    yield config_dir
    npcforge_config.reset_config()


@pytest.fixture
def race_weapon_blueprint() -> Blueprint:
    """Race is chosen freely; the weapon depends on the race."""
    return Blueprint(
        name="fighter",
        fields={
            "Race": _field(_opts("Elf", "Orc")),
            "Weapon": _field(
                _gated("Race", "Orc", "Axe"),
                _gated("Race", "Elf", "Bow"),
            ),
        },
    )


@pytest.fixture
def filter_blueprint() -> Blueprint:
    """A has an unconditional pool and one extra option gated on B = b1."""
    return Blueprint(
        name="filtered",
        fields={
            "B": _field(_opts("b1", "b2")),
            "A": _field(_opts("x", "y"), _gated("B", "b1", "z")),
        },
    )


@pytest.fixture
def villager_blueprint() -> Blueprint:
    """Several roots plus a field depending on two others."""
    return Blueprint(
        name="villager",
        fields={
            "race": _field(_opts("Human", "Dwarf")),
            "class": _field(_opts("Fighter", "Wizard")),
            "traits": _field(_opts("brave", "shy", "loud", "calm"), n=2),
            "gear": _field(
                _opts("Backpack"),
                _gated("race", "Dwarf", "Pick"),
                _gated("class", "Wizard", "Staff"),
            ),
        },
    )


@pytest.fixture
def blueprint_file(tmp_path):
    """A blueprints YAML file with option files next to it."""
    lists = tmp_path / "lists"
    lists.mkdir()
    (lists / "names.txt").write_text(
        "# names\nAlys\n\nBram   # short for Bramwell\nCorwin\n"
    )
    path = tmp_path / "npcs.yaml"
    path.write_text(
        """
fighter:
  description: Sellswords
  fields:
    Race: [Elf, Orc]
    Weapon:
      choices:
        - values: [Axe]
          filter: "Race: Orc"
        - values: [Bow]
          filter: "Race: Elf"
    name: lists/names.txt
    traits:
      n: 2
      choices:
        - values: [brave, greedy, calm]
broken:
  a:
    choices:
      - values: [x]
        filter: "b: y"
  b:
    choices:
      - values: [y]
        filter: "a: x"
"""
    )
    return path
