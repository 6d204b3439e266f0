"""YAML settings manager"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from localpress.utils.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "LOCALPRESS_"


class ConfigManager:
    """
    Loads and serves the YAML settings under ``localpress/config``.

    - dot-notation access: config.get("cms.limits.area_articles")
    - environment overrides: LOCALPRESS_CMS_LIMITS_AREA_ARTICLES
    - every *.yaml except the logging config is merged into one view
    """

    def __init__(self, config_dir: Optional[str] = None) -> None:
        """
        Args:
            config_dir: Settings directory. None uses the packaged directory.
        """
        if config_dir is None:
            config_dir = str(Path(__file__).parent.parent / "config")

        self._config_dir = config_dir
        self._merged: Dict[str, Any] = {}
        self._load_all()

    def _load_all(self) -> None:
        config_path = Path(self._config_dir)
        if not config_path.exists():
            logger.warning("Config directory not found, using built-in defaults: %s", self._config_dir)
            return

        for yaml_file in sorted(config_path.glob("*.yaml")):
            if yaml_file.name.startswith("logging"):
                continue  # handled by setup_logging
            try:
                data = self.load(str(yaml_file))
            except (OSError, yaml.YAMLError) as e:
                logger.error("Failed to load config file %s: %s", yaml_file.name, e)
                continue
            self._merged.update(data)
            logger.debug("Loaded config file: %s", yaml_file.name)

    def load(self, filepath: str) -> Dict[str, Any]:
        """Parse a single YAML file; an empty file yields an empty dict."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else {}

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Look up a value by dot-notation path.
        An environment override wins over the YAML value.

        Args:
            key_path: Path such as "newsdata.timeframes.local".
            default: Returned when the key is missing.
        """
        env_value = self._env_override(key_path)
        if env_value is not None:
            return env_value

        current: Any = self._merged
        for key in key_path.split("."):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def get_int(self, key_path: str, default: int) -> int:
        """Like get(), coerced to int. Unusable values fall back to the default."""
        value = self.get(key_path, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Config value %s=%r is not an integer, using %d", key_path, value, default)
            return default

    def get_list(self, key_path: str, default: List[str]) -> List[str]:
        """Like get(), as a list. Comma-separated strings (env overrides) are split."""
        value = self.get(key_path, default)
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return list(default)

    def _env_override(self, key_path: str) -> Optional[str]:
        """"cms.base_url" -> LOCALPRESS_CMS_BASE_URL"""
        env_key = ENV_PREFIX + key_path.upper().replace(".", "_")
        return os.environ.get(env_key)
