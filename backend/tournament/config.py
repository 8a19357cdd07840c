"""
Tournament configuration loading.
"""
import json
import logging
import os
from typing import List, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "tournament-config.json")
CONFIG_PATH_ENV = "TOURNAMENT_CONFIG_PATH"


class ConfigError(Exception):
    """Raised when the tournament configuration is missing or unusable."""


class TournamentConfig(BaseModel):
    """Contents of tournament-config.json. Keys keep the file's camelCase."""
    name: str
    primaryColor: str
    secondaryColor: Optional[str] = None
    logoUrl: Optional[str] = None
    sponsorName: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    prizes: List[str] = []
    tournamentRepo: Optional[str] = None  # "owner/repo" hosting the round files
    dataBranch: str = "data"
    dataPath: str = "data"
    rounds: List[str] = []  # Round filenames, in display order


def get_config_path(path: Optional[str] = None) -> str:
    """Resolve the config path: explicit argument, then env var, then default."""
    return path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH


def load_config(path: Optional[str] = None) -> TournamentConfig:
    """Read and validate the tournament config file."""
    config_path = get_config_path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Could not find configuration file: {config_path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}")

    try:
        config = TournamentConfig(**data)
    except (ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid tournament configuration in {config_path}: {e}")

    logger.info(f"Loaded config '{config.name}' with {len(config.rounds)} rounds from {config_path}")
    return config


def require_repo(config: TournamentConfig) -> str:
    """Return the configured repository, or fail if there is none."""
    if not config.tournamentRepo:
        raise ConfigError("Tournament repository is not configured in tournament-config.json")
    return config.tournamentRepo
