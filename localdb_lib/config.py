"""Database configuration.

Configuration is read from a YAML file (``data/config/localdb.yml`` by
default). A missing file means defaults. The ``LOCALDB_LOCATION`` environment
variable overrides the configured location.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from localdb_lib.exceptions import LocalDBError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/localdb.yml')
LOCATION_ENV = 'LOCALDB_LOCATION'
_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'NOTSET')


class DatabaseConfig(BaseModel):
    location: str = './data/localdb'
    log_level: str = 'WARNING'
    exit_hook: bool = False

    @field_validator('log_level')
    @classmethod
    def _known_level(cls, v: str) -> str:
        lvl = v.upper()
        if lvl not in _LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return lvl


def read_config_file(config_path: Optional[Path] = None) -> dict:
    cfg_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return {}
    try:
        with cfg_path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise LocalDBError(f"Failed to read configuration '{cfg_path}': {e}") from e
    if not isinstance(data, dict):
        raise LocalDBError(f"Configuration '{cfg_path}' must be a mapping")
    return data


def load_config(config_path: Optional[Path] = None) -> DatabaseConfig:
    data = read_config_file(config_path)
    env_location = os.environ.get(LOCATION_ENV)
    if env_location:
        data['location'] = env_location
    try:
        cfg = DatabaseConfig.model_validate(data)
    except ValidationError as e:
        raise LocalDBError(f"Invalid configuration: {e}") from e
    logger.debug('Loaded configuration: location=%s log_level=%s', cfg.location, cfg.log_level)
    return cfg
