"""Configuration management for npcforge.

Config resolution order (highest priority first):
1. Programmatic (NpcforgeConfig constructed in code, installed with configure())
2. Environment variables (NPCFORGE_BLUEPRINTS, NPCFORGE_DISPLAY_MULTIPLIER,
   NPCFORGE_SEED), including values from a .env file
3. Config file (~/.config/npcforge/config.json, managed by `npcforge config`)
4. Hardcoded defaults

NPCFORGE_CONFIG_DIR moves the config directory (and with it the default
blueprints file).
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================


def config_dir() -> Path:
    """Directory holding config.json and, by default, blueprints.yaml."""
    if val := os.environ.get("NPCFORGE_CONFIG_DIR"):
        return Path(val).expanduser()
    return Path.home() / ".config" / "npcforge"


def config_file() -> Path:
    return config_dir() / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class PathsConfig:
    """Where blueprints are read from.

    An empty blueprints_file means <config dir>/blueprints.yaml.
    """

    blueprints_file: str = ""


@dataclass
class GenerationConfig:
    """Interactive generation settings.

    - display_multiplier: options shown per step = required count * multiplier
    - seed: random seed for option display and --auto picks (None = random)
    """

    display_multiplier: int = 3
    seed: int | None = None


@dataclass
class NpcforgeConfig:
    """Top-level npcforge configuration.

    Examples:
        # Package use, no files needed
        config = NpcforgeConfig(paths=PathsConfig(blueprints_file="npcs.yaml"))

        # CLI use, loads from ~/.config/npcforge/config.json
        config = NpcforgeConfig.load()
    """

    paths: PathsConfig = field(default_factory=PathsConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    @classmethod
    def load(cls) -> "NpcforgeConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        _ensure_dotenv()
        config = cls()

        # Layer 1: Load from config file if it exists
        path = config_file()
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", path, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("NPCFORGE_BLUEPRINTS"):
            config.paths.blueprints_file = val
        if val := os.environ.get("NPCFORGE_DISPLAY_MULTIPLIER"):
            try:
                config.generation.display_multiplier = int(val)
            except ValueError:
                logger.warning("Invalid NPCFORGE_DISPLAY_MULTIPLIER=%r, ignoring", val)
        if val := os.environ.get("NPCFORGE_SEED"):
            try:
                config.generation.seed = int(val)
            except ValueError:
                logger.warning("Invalid NPCFORGE_SEED=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to <config dir>/config.json."""
        path = config_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "paths": asdict(self.paths),
            "generation": asdict(self.generation),
        }

    @property
    def blueprints_path(self) -> Path:
        """Resolve the blueprints file path."""
        if self.paths.blueprints_file:
            return Path(self.paths.blueprints_file).expanduser()
        return config_dir() / "blueprints.yaml"


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: NpcforgeConfig, data: dict) -> None:
    """Apply a dict of values onto an NpcforgeConfig."""
    if isinstance(data.get("paths"), dict):
        for k, v in data["paths"].items():
            if not hasattr(config.paths, k):
                continue
            if isinstance(v, str):
                setattr(config.paths, k, v)
            else:
                logger.warning("Invalid paths.%s=%r in config file, ignoring", k, v)
    if isinstance(data.get("generation"), dict):
        for k, v in data["generation"].items():
            if not hasattr(config.generation, k):
                continue
            # seed may be null (random); everything here is an int otherwise
            if k == "seed" and v is None:
                config.generation.seed = None
                continue
            try:
                setattr(config.generation, k, _as_int(v))
            except (TypeError, ValueError):
                logger.warning("Invalid generation.%s=%r in config file, ignoring", k, v)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return int(value)


_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: NpcforgeConfig | None = None


def get_config() -> NpcforgeConfig:
    """Get the global NpcforgeConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = NpcforgeConfig.load()
    return _config


def configure(config: NpcforgeConfig) -> None:
    """Set the global NpcforgeConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
