"""
Configuration management for Vászon.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage AI, export and canvas settings without
changing code.
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Vászon.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration root must be a mapping: {self.config_path}")
            self._config = self._merge(self._get_default_config(), loaded)

            logging.info(f"Configuration loaded from {self.config_path}")

        except Exception as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively overlay ``override`` onto ``base``."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ConfigManager._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "ai": {
                "provider": "gemini",
                "base_url": "https://generativelanguage.googleapis.com/v1beta",
                "model": "gemini-2.5-flash",
                "api_key": "",
                "api_key_env": "GEMINI_API_KEY",
                "timeout": 60.0
            },
            "paths": {
                "export_dir": "export",
                "log_file": "vaszon.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "canvas": {
                "blocks": []
            },
            "agents": {
                "definitions": {}
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "ai.model")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("ai.model")  # Returns "gemini-2.5-flash"
            config.get("paths.export_dir")  # Returns "export"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def api_key(self) -> str:
        """Get the AI API key, falling back to the configured environment variable."""
        key = self.get("ai.api_key") or ""
        if not key:
            env_name = self.get("ai.api_key_env", "GEMINI_API_KEY")
            key = os.environ.get(env_name, "") if env_name else ""
        return key.strip()

    @property
    def is_ai_configured(self) -> bool:
        """Whether an API key is available for the AI capabilities."""
        return bool(self.api_key)

    @property
    def model_name(self) -> str:
        """Get AI model name."""
        return self.get("ai.model", "gemini-2.5-flash")

    @property
    def ai_base_url(self) -> str:
        """Get the base URL of the generative API."""
        return self.get("ai.base_url", "https://generativelanguage.googleapis.com/v1beta")

    @property
    def ai_timeout(self) -> Optional[float]:
        """Get the AI request timeout in seconds (None disables it)."""
        return self.get("ai.timeout", 60.0)

    @property
    def export_directory(self) -> str:
        """Get export directory path."""
        return self.get("paths.export_dir", "export")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "vaszon.log")

    @property
    def block_definitions(self) -> List[Dict[str, Any]]:
        """Get block catalog overrides from configuration."""
        return self.get("canvas.blocks", []) or []

    @property
    def agent_definitions(self) -> Dict[str, Any]:
        """Get agent definitions from configuration."""
        return self.get("agents.definitions", {}) or {}


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
