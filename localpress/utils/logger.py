"""Logging setup and helpers"""

import logging
import logging.config
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LOGGING_CONFIG = Path(__file__).parent.parent / "config" / "logging_config.yaml"


def setup_logging(config_path: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Configure logging once, at process start (web_app.py's __main__).

    Args:
        config_path: dictConfig YAML. None uses the packaged logging_config.yaml;
            a missing file falls back to basicConfig at INFO.
        level: Optional root level override (e.g. "DEBUG").
    """
    path = Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG

    if path.is_file():
        with path.open("r", encoding="utf-8") as f:
            logging.config.dictConfig(yaml.safe_load(f) or {"version": 1})
    else:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_LOG_FORMAT)

    if level:
        logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with ``__name__`` so names follow the localpress.* hierarchy."""
    return logging.getLogger(name)
