"""
Configuration loading (YAML, with JSON accepted for older configs).
"""

from pathlib import Path
from typing import Any, Dict
import json
import yaml

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load a single YAML or JSON configuration file.

    Args:
        config_path: Path to the config file

    Returns:
        Dictionary containing configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file does not contain a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        if config_path.suffix.lower() == ".json":
            config = json.load(f)
        else:
            config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return config


class ConfigLoader:
    """Load configuration files from a config directory."""

    def __init__(self, config_dir: Path):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        if not self.config_dir.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir}")

    def find(self, config_name: str) -> Path:
        """Locate ``<config_name>.yaml|.yml|.json`` (first match wins)."""
        for suffix in CONFIG_SUFFIXES:
            config_path = self.config_dir / f"{config_name}{suffix}"
            if config_path.exists():
                return config_path
        raise FileNotFoundError(
            f"Config file not found: {self.config_dir / config_name}{{{','.join(CONFIG_SUFFIXES)}}}"
        )

    def load(self, config_name: str) -> Dict[str, Any]:
        """
        Load a configuration file by name.

        Args:
            config_name: Name of config file (without extension)

        Returns:
            Dictionary containing configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid
        """
        return load_config_file(self.find(config_name))

    def load_all(self) -> Dict[str, Dict[str, Any]]:
        """
        Load all configuration files.

        Returns:
            Dictionary mapping config names to their contents
        """
        configs = {}

        for config_file in sorted(self.config_dir.iterdir()):
            if config_file.suffix.lower() in CONFIG_SUFFIXES and config_file.stem not in configs:
                configs[config_file.stem] = load_config_file(config_file)

        return configs


def load_config(config_dir: Path, config_name: str) -> Dict[str, Any]:
    """
    Convenience function to load a single config file.

    Args:
        config_dir: Directory containing config files
        config_name: Name of config file (without extension)

    Returns:
        Dictionary containing configuration
    """
    loader = ConfigLoader(config_dir)
    return loader.load(config_name)
