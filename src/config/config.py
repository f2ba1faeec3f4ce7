"""
Minimal Configuration Reader for the Quake Report Tools

A lightweight configuration system that provides:
- Profile-based configuration management
- JSON-based configuration storage with read-only access
- Secrets management for sensitive information
- Hierarchical configuration with dot-notation access
- Automatic path resolution for file paths

Usage:
    from config import Config
    config = Config(profile='my_server')
    indent = config.get('report.indent', 2)

The configuration system loads settings in this order (later overrides earlier):
1. Default or specified profile (profiles/<profile>.json)
2. Profile-specific secrets (secrets/<profile>_secrets.json)

Recognized keys:
    general.log_level     Logging level name (default: INFO)
    general.output_path   Directory for exported files (default: output)
    report.indent         JSON indentation of the report (default: 2)
    report.chart_dpi      Resolution of the means of death chart (default: 150)
"""

import json
from typing import Dict, Any, List, Optional
from pathlib import Path

from quake_report.base import JSONTool, logger


class Config(JSONTool):
    """
    A minimal JSON-based configuration reader for the Quake report tools.

    Attributes:
        config_dir (str): Directory containing profile JSON files
        secrets_dir (str): Directory containing secrets JSON files
        profile (str): Currently active profile name
        data (dict): Loaded configuration data
    """

    DEFAULT_CONFIG_DIR = str(Path(__file__).parent / 'profiles')
    DEFAULT_SECRETS_DIR = str(Path(__file__).parent / 'secrets')
    DEFAULT_PROFILE = "default"

    def __init__(self, config_dir: str = None, secrets_dir: str = None, profile: str = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Config instance.

        Args:
            config_dir (str, optional): Directory for config profiles.
                Defaults to 'profiles' subdirectory relative to this file.
            secrets_dir (str, optional): Directory for secrets files.
                Defaults to 'secrets' subdirectory relative to this file.
            profile (str, optional): Profile name to use. Defaults to 'default'.
            config (dict, optional): Base configuration dictionary for JSONTool compatibility.
        """
        super().__init__(config)

        self.config_dir = config_dir or self.DEFAULT_CONFIG_DIR
        self.secrets_dir = secrets_dir or self.DEFAULT_SECRETS_DIR
        self.profile = profile or self.DEFAULT_PROFILE
        self.data = {}

        self._load()

    def run(self) -> Dict[str, Any]:
        """
        Run the config tool (implementation of abstract method from QuakeTool).

        Returns:
            The full configuration dictionary.
        """
        return self.get_full_config()

    def _load(self):
        """
        Load configuration from the profile JSON file and merge with secrets.

        A missing profile gives an empty configuration, so every tool falls
        back to its built-in defaults.
        """
        profile_path = Path(self.config_dir) / f"{self.profile}.json"

        if not profile_path.exists():
            if self.profile != self.DEFAULT_PROFILE:
                logger.warning(f"Profile '{self.profile}' not found. Using empty configuration.")
            else:
                logger.debug("No default profile found. Using built-in defaults.")
            self.data = {}
            return

        try:
            self.data = self.read_json(str(profile_path))
            logger.info(f"Loaded configuration from '{self.profile}'")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration: {e}")
            self.data = {}
            return

        self._load_secrets()

    def _load_secrets(self):
        """
        Load and merge secrets from the secrets directory.

        Looks for a profile-specific secrets file named '<profile>_secrets.json'
        and deep-merges it into the configuration. Secrets override
        configuration values with the same keys.
        """
        profile_secrets_path = Path(self.secrets_dir) / f"{self.profile}_secrets.json"
        if not profile_secrets_path.exists():
            logger.debug(f"No secrets file found for profile '{self.profile}'")
            return

        try:
            profile_secrets = self.read_json(str(profile_secrets_path))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading profile-specific secrets: {e}")
            return

        if isinstance(profile_secrets, dict):
            self._deep_merge(self.data, profile_secrets)
            logger.info(f"Loaded and merged secrets from '{profile_secrets_path}'")

    def _deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]):
        """
        Deep merge two dictionaries.

        Args:
            target (dict): The target dictionary to merge into
            source (dict): The source dictionary to merge from
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def get(self, path: str = None, default: Any = None) -> Any:
        """
        Get a configuration value by path using dot notation.

        Args:
            path (str, optional): Dot notation path to the value
                (e.g., "general.output_path", "report.indent").
                If None, returns the entire configuration dictionary.
            default (Any, optional): Value to return if path not found.

        Returns:
            Any: The configuration value at the specified path, or default if not found.

        Examples:
            >>> config.get('report.indent', 2)
            4
            >>> config.get()
            {'general': {...}, 'report': {...}}
        """
        if path is None:
            return self.data

        current = self.data
        if path:
            for key in path.split('.'):
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default

        return current

    def list_profiles(self) -> List[str]:
        """
        List all available profile names.

        Returns:
            List[str]: Profile names (without .json extension) found in the config directory.
        """
        config_path = Path(self.config_dir)
        if not config_path.is_dir():
            return []
        return sorted(f.stem for f in config_path.glob("*.json"))

    def switch_profile(self, profile: str) -> bool:
        """
        Switch to a different profile.

        Args:
            profile (str): Name of profile to switch to (without .json extension).

        Returns:
            bool: True if successful, False if profile not found.
        """
        profile_path = Path(self.config_dir) / f"{profile}.json"
        if profile_path.exists():
            self.profile = profile
            self._load()
            return True
        else:
            logger.warning(f"Profile '{profile}' not found.")
            return False

    def get_full_config(self) -> Dict[str, Any]:
        """
        Return the full configuration dictionary, including merged secrets.
        """
        return self.data

    def get_path(self, path_key: str, fallback: str = None) -> str:
        """
        Get a resolved filesystem path from configuration.

        Args:
            path_key (str): Path key in dot notation (e.g., "general.output_path")
            fallback (str, optional): Default path if not found

        Returns:
            str: Resolved absolute path. Returns empty string if path is None/empty.
                 Relative paths are resolved relative to the config directory.
        """
        path = self.get(path_key, fallback)
        if not path:
            return ""

        path_obj = Path(path)
        if path_obj.is_absolute():
            return str(path_obj)

        return str(Path(self.config_dir) / path)
