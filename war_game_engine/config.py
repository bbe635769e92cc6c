"""
Configuration for War game engine.
Settings come from defaults, then environment variables (.env supported),
then an optional YAML file, then command-line flags.
"""

import os
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import yaml
from dotenv import load_dotenv

from war_game_engine.core.map import Faction
from war_game_engine.core.objectives import TARGET_FACTIONS

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""
    pass


@dataclass
class GameConfig:
    """Settings for one game session."""
    player_faction: Faction = Faction.BLUE
    min_troops: int = 1
    max_troops: int = 5
    seed: Optional[int] = None
    log_level: str = "INFO"
    log_file: Optional[str] = "war_game.log"
    snapshot_dir: str = "snapshots"
    visualize: bool = False
    # Explicit (name, faction, troops) entries replacing the standard map
    territories: List[Tuple[str, Faction, int]] = field(default_factory=list)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.min_troops < 1:
            raise ConfigError(f"min_troops must be at least 1, got {self.min_troops}")
        if self.max_troops < self.min_troops:
            raise ConfigError(f"max_troops ({self.max_troops}) is below min_troops ({self.min_troops})")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")
        if self.player_faction in TARGET_FACTIONS:
            raise ConfigError(
                f"{self.player_faction.value} cannot be played: an objective may order its elimination"
            )

    @staticmethod
    def from_env(env_file: Optional[str] = None) -> 'GameConfig':
        """
        Build a config from environment variables.

        Args:
            env_file: Optional .env path; by default python-dotenv searches for one
        """
        load_dotenv(env_file)
        values: Dict[str, Any] = {}

        faction = os.getenv('WAR_PLAYER_FACTION')
        if faction:
            values['player_faction'] = _parse_faction(faction)
        if os.getenv('WAR_MIN_TROOPS'):
            values['min_troops'] = _parse_int('WAR_MIN_TROOPS', os.getenv('WAR_MIN_TROOPS'))
        if os.getenv('WAR_MAX_TROOPS'):
            values['max_troops'] = _parse_int('WAR_MAX_TROOPS', os.getenv('WAR_MAX_TROOPS'))
        if os.getenv('WAR_SEED'):
            values['seed'] = _parse_int('WAR_SEED', os.getenv('WAR_SEED'))
        if os.getenv('WAR_LOG_LEVEL'):
            values['log_level'] = os.getenv('WAR_LOG_LEVEL').upper()
        if os.getenv('WAR_LOG_FILE') is not None:
            values['log_file'] = os.getenv('WAR_LOG_FILE') or None
        if os.getenv('WAR_SNAPSHOT_DIR'):
            values['snapshot_dir'] = os.getenv('WAR_SNAPSHOT_DIR')

        return GameConfig(**values)

    def merge_yaml(self, filepath: str) -> 'GameConfig':
        """Return a copy of this config with values from a YAML file applied."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError(f"{filepath}: top level must be a mapping")

        values: Dict[str, Any] = {}
        if 'player_faction' in data:
            values['player_faction'] = _parse_faction(str(data['player_faction']))
        for key in ('min_troops', 'max_troops', 'seed'):
            if data.get(key) is not None:
                values[key] = _parse_int(key, data[key])
        if data.get('log_level'):
            values['log_level'] = str(data['log_level']).upper()
        if 'log_file' in data:
            values['log_file'] = data['log_file'] or None
        if data.get('snapshot_dir'):
            values['snapshot_dir'] = str(data['snapshot_dir'])
        if data.get('territories'):
            values['territories'] = _parse_territories(data['territories'])

        logger.info(f"Loaded configuration from {filepath}")
        return replace(self, **values)

    def with_overrides(self, **overrides) -> 'GameConfig':
        """Apply command-line overrides; None values are ignored."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if 'player_faction' in values and not isinstance(values['player_faction'], Faction):
            values['player_faction'] = _parse_faction(values['player_faction'])
        if 'log_level' in values:
            values['log_level'] = values['log_level'].upper()
        return replace(self, **values)


def load_config(config_path: Optional[str] = None, **overrides) -> GameConfig:
    """Load the full configuration chain: defaults, environment, YAML, overrides."""
    config = GameConfig.from_env()
    if config_path:
        config = config.merge_yaml(config_path)
    return config.with_overrides(**overrides)


def _parse_faction(value: str) -> Faction:
    try:
        return Faction.parse(value)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _parse_territories(entries: Any) -> List[Tuple[str, Faction, int]]:
    """Parse a YAML list of {name, faction, troops} mappings."""
    if not isinstance(entries, list):
        raise ConfigError("territories must be a list")

    territories = []
    for i, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict) or not entry.get('name'):
            raise ConfigError(f"territories[{i}] needs at least a name")
        troops = _parse_int(f"territories[{i}].troops", entry.get('troops', 1))
        if troops < 1:
            raise ConfigError(f"territories[{i}].troops must be at least 1, got {troops}")
        faction = _parse_faction(str(entry.get('faction', '')))
        territories.append((str(entry['name']), faction, troops))
    return territories
