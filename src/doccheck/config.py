"""
doccheck Configuration

Loads configuration from a YAML file, then applies environment variable
overrides. Values not set anywhere fall back to DEFAULT_CONFIG.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCCHECK_CONFIG"


def config_search_paths() -> List[Path]:
    """Configuration file locations, checked in order."""
    paths = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / "doccheck.yaml")
    paths.append(Path.home() / ".doccheck" / "config.yaml")
    return paths


DEFAULT_CONFIG = {
    # Suffixes of files checked when walking a directory
    "extensions": [".rs"],
    # Directory names never descended into
    "exclude_dirs": [".git", "target"],
    "print_tokens": False,
    "log_level": "WARNING",
}

_TRUE_VALUES = ("1", "true", "yes", "on")


class DocCheckConfig:
    """Configuration for the documentation checker."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        self._load_config(config_path)
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from the first YAML file found."""
        search_paths = [explicit_path] if explicit_path else config_search_paths()

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                except (OSError, yaml.YAMLError, ValueError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")
                    continue
                self._config.update(user_config)
                self._config_path = config_path
                logger.debug(f"Loaded config from {config_path}")
                return

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if "DOCCHECK_PRINT_TOKENS" in os.environ:
            value = os.environ["DOCCHECK_PRINT_TOKENS"].strip().lower()
            self._config["print_tokens"] = value in _TRUE_VALUES
        if "DOCCHECK_LOG_LEVEL" in os.environ:
            self._config["log_level"] = os.environ["DOCCHECK_LOG_LEVEL"]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def extensions(self) -> List[str]:
        return [str(e) for e in self._config.get("extensions") or []]

    @property
    def exclude_dirs(self) -> List[str]:
        return [str(d) for d in self._config.get("exclude_dirs") or []]

    @property
    def print_tokens(self) -> bool:
        return bool(self._config.get("print_tokens", False))

    @property
    def log_level(self) -> str:
        return str(self._config.get("log_level", "WARNING")).upper()

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "extensions": self.extensions,
            "exclude_dirs": self.exclude_dirs,
            "print_tokens": self.print_tokens,
            "log_level": self.log_level,
            "config_file": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[DocCheckConfig] = None


def get_config(config_path: Optional[Path] = None) -> DocCheckConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = DocCheckConfig(config_path)
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next get_config() reloads it."""
    global _config
    _config = None
