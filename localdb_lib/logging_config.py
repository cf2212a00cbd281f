from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from localdb_lib.config import DEFAULT_CONFIG_PATH, read_config_file
from localdb_lib.exceptions import LocalDBError

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for LocalDB tools.

    An explicit `level` wins; otherwise `log_level` is taken from the YAML
    config, falling back to WARNING when it is missing or unreadable. Returns
    a module logger for the caller.
    """
    default_level = logging.WARNING
    lvl_name = level
    if not lvl_name:
        try:
            lvl_name = read_config_file(config_path or DEFAULT_CONFIG_PATH).get('log_level')
        except LocalDBError:
            # Unreadable config: keep the default level, the caller reports the config error
            lvl_name = None
    if isinstance(lvl_name, str):
        numeric = getattr(logging, lvl_name.upper(), None)
        if isinstance(numeric, int):
            default_level = numeric

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=default_level, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.debug('Log level set to: %s', logging.getLevelName(default_level))
    return logger
