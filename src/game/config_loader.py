"""
Configuration loader for battle settings.

Loads ``assets/config/battle.yaml`` into a :class:`GameConfig`. A missing
file falls back to the built-in defaults; a file that exists but cannot be
parsed is a configuration error.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.errors import ConfigErrorKind, ConfigurationError
from .managers.log_manager import LogLevel

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = "assets/config/battle.yaml"


@dataclass
class GameConfig:
    """Settings for one battle session."""
    actors_path: str = "assets/data/actors.yaml"
    spells_path: str = "assets/data/spells.yaml"
    player_id: str = "initplayer"
    opponent_id: str = "bot"
    seed: Optional[int] = None
    display_width: int = 66
    display_height: int = 17
    display_title: str = "RPG Prototype"
    log_level: LogLevel = LogLevel.INFO
    max_log_messages: int = 1000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameConfig":
        defaults = cls()
        catalog = data.get("catalog") or {}
        battle = data.get("battle") or {}
        display = data.get("display") or {}
        log = data.get("log") or {}

        seed = battle.get("seed", defaults.seed)
        return cls(
            actors_path=str(catalog.get("actors", defaults.actors_path)),
            spells_path=str(catalog.get("spells", defaults.spells_path)),
            player_id=str(battle.get("player_id", defaults.player_id)),
            opponent_id=str(battle.get("opponent_id", defaults.opponent_id)),
            seed=int(seed) if seed is not None else None,
            display_width=int(display.get("width", defaults.display_width)),
            display_height=int(display.get("height", defaults.display_height)),
            display_title=str(display.get("title", defaults.display_title)),
            log_level=parse_log_level(log.get("level", defaults.log_level.name)),
            max_log_messages=int(log.get("max_messages", defaults.max_log_messages)),
        )

    def resolve_path(self, path: str) -> Path:
        """Resolve a configured path, treating relative paths as project-root relative."""
        if os.path.isabs(path):
            return Path(path)
        return PROJECT_ROOT / path

    @property
    def actors_file(self) -> Path:
        return self.resolve_path(self.actors_path)

    @property
    def spells_file(self) -> Path:
        return self.resolve_path(self.spells_path)


def parse_log_level(value: Any) -> LogLevel:
    """Map a level name like ``"debug"`` to a LogLevel."""
    if isinstance(value, LogLevel):
        return value
    try:
        return LogLevel[str(value).upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {value}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load battle configuration from a YAML file.

    Args:
        config_path: Path to the config file, absolute or relative to the project root

    Returns:
        GameConfig: the loaded settings, or the defaults if the file does not exist

    Raises:
        ConfigurationError: if the file exists but is not a valid config mapping
    """
    config_path = config_path or DEFAULT_CONFIG_PATH
    if os.path.isabs(config_path):
        config_file = Path(config_path)
    else:
        config_file = PROJECT_ROOT / config_path

    if not config_file.exists():
        print(f"Warning: Battle config file not found: {config_file}, using defaults")
        return GameConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            ConfigErrorKind.SOURCE_UNAVAILABLE, f"Failed to read battle config: {e}", str(config_file)
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            ConfigErrorKind.SOURCE_UNAVAILABLE, "Battle config must be a mapping", str(config_file)
        )

    try:
        return GameConfig.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(
            ConfigErrorKind.SOURCE_UNAVAILABLE, f"Malformed battle config: {e}", str(config_file)
        )
