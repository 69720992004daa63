"""Configuration file loading utilities.

This module handles locating, parsing and merging the TOML configuration.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import SwaypadConfig
from .constants import CONFIG_FILE, LEGACY_CONFIG_FILE
from .models import ConfigError

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "merge"]

# nested includes deeper than this are most likely a loop
MAX_INCLUDE_DEPTH = 8


def merge(merged: dict[str, Any], obj2: dict[str, Any]) -> dict[str, Any]:
    """Merge the content of `obj2` into `merged`.

    Tables are merged recursively, lists are concatenated, anything else
    is replaced.

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value)
        elif key in merged and isinstance(merged[key], list) and isinstance(value, list):
            merged[key] += value
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports:
    - a single TOML file (default location or ``--config``)
    - the legacy ``spawn.toml`` location, with a warning
    - a directory, every ``*.toml`` file being merged in name order
    - ``include = [...]`` directives, relative to the including file
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self.loaded_files: list[Path] = []

    def load(self, config_filename: str = "") -> SwaypadConfig:
        """Load and build the configuration.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses the default location.

        Raises:
            ConfigError: if the file is missing, unreadable or invalid
        """
        return SwaypadConfig.from_dict(self.load_raw(config_filename), self.log)

    def load_raw(self, config_filename: str = "") -> dict[str, Any]:
        """Return the merged TOML document, without interpreting it."""
        if config_filename:
            fname = Path(os.path.expandvars(config_filename)).expanduser()
        elif CONFIG_FILE.exists() or not LEGACY_CONFIG_FILE.exists():
            fname = CONFIG_FILE
        else:
            self.log.warning("Using legacy config path: %s", LEGACY_CONFIG_FILE)
            self.log.warning("Please move your config to: %s", CONFIG_FILE)
            fname = LEGACY_CONFIG_FILE
        return self._open_config(fname, depth=0)

    def _open_config(self, fname: Path, depth: int) -> dict[str, Any]:
        """Load a file or directory, then its includes."""
        if depth > MAX_INCLUDE_DEPTH:
            msg = f"Too many nested includes while loading {fname}"
            raise ConfigError(msg)

        if fname.is_dir():
            config = self._load_config_directory(fname)
        else:
            config = self._load_config_file(fname)

        includes = config.pop("include", [])
        if isinstance(includes, str):
            includes = [includes]
        if not isinstance(includes, list) or not all(isinstance(item, str) for item in includes):
            msg = f"Invalid include in {fname}: expected a path or a list of paths, got {includes!r}"
            raise ConfigError(msg)
        base_dir = fname if fname.is_dir() else fname.parent
        for extra_config in includes:
            extra_path = Path(os.path.expandvars(extra_config)).expanduser()
            if not extra_path.is_absolute():
                extra_path = base_dir / extra_path
            merge(config, self._open_config(extra_path, depth + 1))

        return config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory."""
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not fname.exists():
            msg = f"Config file not found! Please create {fname}"
            raise ConfigError(msg)

        self.log.info("Loading %s", fname)
        try:
            with fname.open("rb") as f:
                config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Problem reading {fname}: {e}"
            raise ConfigError(msg) from e
        except OSError as e:
            msg = f"Cannot read {fname}: {e.strerror}"
            raise ConfigError(msg) from e
        self.loaded_files.append(fname)
        return config
