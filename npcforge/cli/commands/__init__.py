"""CLI commands for npcforge."""

from . import (
    blueprints_cmd,
    validate,
    generate,
    config_cmd,
)

__all__ = [
    "blueprints_cmd",
    "validate",
    "generate",
    "config_cmd",
]
