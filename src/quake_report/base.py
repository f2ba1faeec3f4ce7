"""
Base classes for Quake Report Tools.

This module provides base classes used throughout the package.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from datetime import datetime
import logging
import os
from pathlib import Path

from .exceptions import LogReadError

logger = logging.getLogger(__name__)


class QuakeTool(ABC):
    """Base class for all Quake report tools."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the tool.

        Args:
            config: Optional configuration dictionary.
        """
        self.config = config or {}
        self.setup_logging()

    @staticmethod
    def add_standard_arguments(parser):
        """
        Add standard arguments that should be consistent across all command-line tools.

        Args:
            parser: The ArgumentParser instance to add arguments to
        """
        parser.add_argument("--profile", default=None,
                          help="Configuration profile to use (default: use default profile)")
        parser.add_argument("--console", action="store_true",
                          help="Log detailed output summary (in addition to regular logging)")

    @staticmethod
    def load_config(profile: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from a specified profile.

        Args:
            profile: Name of the profile to load. If None, uses the default profile.

        Returns:
            The configuration dictionary.
        """
        from config.config import Config

        config_obj = Config(profile=profile)
        config_data = config_obj.get()

        log_level = config_data.get('general', {}).get('log_level', 'INFO').upper()

        # Reset any existing handlers to avoid duplicated logs
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger().setLevel(getattr(logging, log_level, logging.INFO))

        logging.debug(f"Logging initialized with level: {log_level}")

        return config_data

    def setup_logging(self, level: int = logging.INFO):
        """
        Set up logging for this tool. Does nothing if logging is already configured.

        Args:
            level: The logging level to use.
        """
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        logging.basicConfig(level=level, format=log_format)

    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: The configuration key, e.g. "report.indent".
            default: Default value if the key is not found.

        Returns:
            The configuration value, or the default if not found.
        """
        value = self.config

        for part in key.split('.'):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    @abstractmethod
    def run(self) -> Any:
        """
        Run the tool. Must be implemented by subclasses.

        Returns:
            The result of running the tool.
        """
        pass


class FileBasedTool(QuakeTool):
    """Base class for tools that work with files."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.output_dir = None

    def initialize_directories(self):
        """
        Initialize the output directory from configuration.

        The directory is only created when something is written to it.
        """
        self.output_dir = self.get_config('general.output_path', 'output')
        logger.debug(f"Output directory: {self.resolve_path(self.output_dir)}")

    def resolve_path(self, path: str) -> str:
        """
        Resolve a path, expanding user paths and environment variables.

        Args:
            path: The path to resolve.

        Returns:
            The resolved absolute path.
        """
        expanded_path = os.path.expanduser(os.path.expandvars(path))
        return os.path.abspath(expanded_path)

    def ensure_dir(self, directory: str) -> str:
        """
        Ensure a directory exists, create it if it doesn't.

        Args:
            directory: The directory path.

        Returns:
            The absolute path to the directory.
        """
        path = Path(self.resolve_path(directory))
        os.makedirs(path, exist_ok=True)
        return str(path)

    def output_path_for(self, file_path: str) -> str:
        """
        Place a relative file path inside the output directory.

        Absolute paths and paths already under the output directory are kept.

        Args:
            file_path: File name or path

        Returns:
            The resolved absolute path.
        """
        if self.output_dir:
            output_dir_norm = os.path.normpath(self.output_dir)
            file_path_norm = os.path.normpath(file_path)

            if not os.path.isabs(file_path) and not file_path_norm.startswith(output_dir_norm):
                file_path = os.path.join(self.output_dir, file_path)

        return self.resolve_path(file_path)

    def read_text(self, file_path: str, encoding: str = 'utf-8') -> str:
        """
        Read a whole text file into memory.

        Args:
            file_path: Path to the file
            encoding: Text encoding of the file

        Returns:
            The file contents

        Raises:
            LogReadError: If the file is missing, unreadable or not valid text.
        """
        resolved_path = self.resolve_path(file_path)
        logger.debug(f"Reading {resolved_path}")

        try:
            with open(resolved_path, 'r', encoding=encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LogReadError(f"Cannot read {resolved_path}: {e}") from e

    def write_csv(self, data_rows: List, output_path: str, headers: List[str] = None) -> str:
        """
        Write data to a CSV file.

        Args:
            data_rows: List of dictionaries with data to write
            output_path: Path to the output CSV file
            headers: Optional list of header columns (if None, uses keys from first row)

        Returns:
            Absolute path to the created CSV file
        """
        import csv

        resolved_path = self.output_path_for(output_path)
        logger.debug(f"Writing CSV to {resolved_path}")

        self.ensure_dir(os.path.dirname(resolved_path))

        if headers is None and data_rows and isinstance(data_rows[0], dict):
            headers = list(data_rows[0].keys())

        with open(resolved_path, "w", newline="") as f:
            if data_rows and isinstance(data_rows[0], dict) and headers:
                writer = csv.DictWriter(f, fieldnames=headers)
                writer.writeheader()
                writer.writerows(data_rows)
            else:
                writer = csv.writer(f)
                if headers:
                    writer.writerow(headers)
                writer.writerows(data_rows)

        if not data_rows:
            logger.warning(f"No data to write, empty CSV file created at {resolved_path}")
        else:
            logger.info(f"Results written to {resolved_path}")
        return resolved_path

    def generate_timestamped_filename(self, base_name: str, extension: str) -> str:
        """
        Generate a filename with a timestamp.

        Args:
            base_name: The base name for the file
            extension: File extension (without the dot)

        Returns:
            A filename in the format: base_name_YYYYMMDD_HHMMSS.extension
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{base_name}_{timestamp}.{extension}"


class JSONTool(FileBasedTool):
    """Base class for tools that work with JSON files."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.initialize_directories()

    def read_json(self, file_path: str) -> Any:
        """
        Read a JSON file.

        Args:
            file_path: Path to the JSON file.

        Returns:
            The parsed JSON content.

        Raises:
            json.JSONDecodeError: If the file contains invalid JSON.
            FileNotFoundError: If the file doesn't exist.
        """
        import json

        resolved_path = self.resolve_path(file_path)
        logger.debug(f"Reading JSON file: {resolved_path}")

        with open(resolved_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def write_json(self, data: Any, file_path: str, indent: int = 2) -> str:
        """
        Write data to a JSON file.

        Args:
            data: The data to write.
            file_path: Path to the output file.
            indent: Number of spaces for indentation (default: 2).

        Returns:
            The absolute path to the created file.
        """
        import json

        resolved_path = self.output_path_for(file_path)
        self.ensure_dir(os.path.dirname(resolved_path))

        with open(resolved_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)

        logger.info(f"JSON data written to {resolved_path}")
        return resolved_path
