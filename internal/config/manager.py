"""
Configuration management for the Markdown to HTML converter.
"""

import copy
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "files": {
        "input": "index.md",
        "output": "index.html",
        "encoding": "utf-8",
    },
    "markdown": {
        "max-heading-level": 6,
        "block-separator": "",
        "checkbox-checked": "[x]",
        "checkbox-unchecked": "[ ]",
    },
    "logging": {
        "level": "WARNING",
        "console": True,
    },
}


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholders with actual values.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Strings, dictionaries and lists are processed, other values are returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages configuration loading and merging for the converter."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        self.config = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory."""
        toml_files: List[Path] = []
        dir_path = Path(directory)

        if not dir_path.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping")
            return toml_files

        if not dir_path.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping")
            return toml_files

        for toml_file in dir_path.rglob("*.toml"):
            if toml_file.is_file():
                toml_files.append(toml_file)
                logger.debug(f"Found config file: {toml_file}")

        return sorted(toml_files)  # Sort for consistent ordering

    def _mergeConfigs(self, base_config: Dict[str, Any], new_config: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries."""
        merged = base_config.copy()

        for key, value in new_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadTomlFile(self, path: Path) -> Dict[str, Any]:
        """Load a single TOML file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load configuration from TOML file and optional config directories.

        Built-in defaults are the base layer, the main config file is merged
        over them, then every .toml file found in the config directories.
        A missing main config file is not an error.

        Raises:
            SystemExit: If the main configuration file cannot be read or parsed.
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        config_file = Path(self.config_path)
        if config_file.exists():
            try:
                config = self._mergeConfigs(config, self._loadTomlFile(config_file))
                logger.info(f"Loaded main config from {self.config_path}")
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.config_path}: {e}")
                sys.exit(1)
        else:
            logger.info(f"Configuration file {self.config_path} not found, using defaults")

        if self.config_dirs:
            logger.info(f"Scanning {len(self.config_dirs)} config directories for .toml files")

            for config_dir in self.config_dirs:
                toml_files = self._findTomlFilesRecursive(config_dir)
                logger.info(f"Found {len(toml_files)} .toml files in {config_dir}")

                for toml_file in toml_files:
                    try:
                        config = self._mergeConfigs(config, self._loadTomlFile(toml_file))
                        logger.info(f"Merged config from {toml_file}")
                    except (OSError, tomli.TOMLDecodeError) as e:
                        # Continue with other files instead of exiting
                        logger.error(f"Failed to load config file {toml_file}: {e}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getFilesConfig(self) -> Dict[str, Any]:
        """Get default input/output file configuration."""
        return self.get("files", {})

    def getMarkdownConfig(self) -> Dict[str, Any]:
        """
        Get converter options in the form MarkdownParser expects.

        Returns:
            Dict with `max_heading_level` and `html_options`
            (`block_separator`, `checkbox_checked`, `checkbox_unchecked`).

        Raises:
            SystemExit: If `max-heading-level` is not an integer from 1 to 6.
        """
        markdownConfig = self.get("markdown", {})
        defaults = DEFAULT_CONFIG["markdown"]

        def option(name: str) -> Any:
            return markdownConfig.get(name, defaults[name])

        try:
            maxHeadingLevel = int(option("max-heading-level"))
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid markdown.max-heading-level {option('max-heading-level')!r}: {e}")
            sys.exit(1)
        if not 1 <= maxHeadingLevel <= 6:
            logger.error(f"Invalid markdown.max-heading-level {maxHeadingLevel}: must be between 1 and 6")
            sys.exit(1)

        return {
            "max_heading_level": maxHeadingLevel,
            "html_options": {
                "block_separator": str(option("block-separator")),
                "checkbox_checked": str(option("checkbox-checked")),
                "checkbox_unchecked": str(option("checkbox-unchecked")),
            },
        }
