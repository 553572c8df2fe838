"""Application config loading.

Reads config.yaml into an AppConfig. A missing, unreadable or invalid file
never stops the service: the defaults are used instead.
"""

import logging
from pathlib import Path

import yaml

from src.models.config import AppConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Loads AppConfig from a YAML file once and keeps it."""

    def __init__(self, config_path: str | Path = "config.yaml"):
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Read and validate the config file.

        Returns:
            The validated AppConfig, or the defaults when the file is
            absent or unusable.
        """
        self._config = self._read() or AppConfig()
        return self._config

    def get_config(self) -> AppConfig:
        """Return the loaded config, loading it on first use."""
        if self._config is None:
            return self.load()
        return self._config

    def _read(self) -> AppConfig | None:
        if not self.config_path.exists():
            logger.info(f"No config at {self.config_path}, using defaults")
            return None

        try:
            with open(self.config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except Exception as e:
            logger.warning(f"Could not read {self.config_path}: {e}, using defaults")
            return None

        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning(f"{self.config_path} does not hold a mapping, using defaults")
            return None

        try:
            return AppConfig.model_validate(raw)
        except Exception as e:
            logger.warning(f"Invalid config in {self.config_path}: {e}, using defaults")
            return None


# Module-level singleton
_config_service: ConfigService | None = None


def get_config_service(config_path: str | Path = "config.yaml") -> ConfigService:
    """Get the global config service.

    Args:
        config_path: Config file (only used on first call).
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (for testing)."""
    global _config_service
    _config_service = None
