"""
Configuration Loader - Load and validate configuration from YAML.

Settings from the YAML file override the built-in defaults; unknown keys are
ignored.
"""
import logging
from copy import deepcopy
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..game.config import InvadersConfig

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: str = "logs/grid_invaders.log"


@dataclass
class Config:
    """Complete application configuration."""
    game: InvadersConfig = field(default_factory=InvadersConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_file() -> Optional[Path]:
    """Find config/default.yaml in the working directory or the project root."""
    possible_paths = [
        Path("config") / "default.yaml",
        Path(__file__).parent.parent.parent / "config" / "default.yaml",
    ]

    for path in possible_paths:
        if path.exists():
            return path
    return None


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{path}: top level of a config file must be a mapping")

    return data if data else {}


def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Build a Config from a (possibly partial) dictionary.

    Raises:
        ValueError: If the game settings fail validation
    """
    merged = _deep_merge(asdict(Config()), data)

    config = Config(
        game=InvadersConfig.from_dict(merged['game']),
        logging=_dict_to_dataclass(merged['logging'], LoggingConfig),
    )
    config.game.validate()
    return config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)

    Returns:
        Config object with all settings
    """
    if config_path is None:
        found = _find_config_file()
        if found is None:
            logger.info("No config file found, using defaults")
            return Config()
        path = found
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

    data = _load_yaml_file(path)
    logger.debug("Loaded config from %s", path)
    return config_from_dict(data)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = {
        'game': config.game.to_dict(),
        'logging': asdict(config.logging),
    }

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
