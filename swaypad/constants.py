"""Shared constants for swaypad."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "LEGACY_CONFIG_FILE",
    "MAX_TREE_DEPTH",
    "WINDOW_NODE_TYPES",
]

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "swaypad" / "config.toml"
LEGACY_CONFIG_FILE = Path.home() / ".config" / "spawn" / "spawn.toml"  # "spawn" era location

# sway node types carrying a window (tiled and floating)
WINDOW_NODE_TYPES = frozenset({"con", "floating_con"})

# Real sway trees are a handful of levels deep
MAX_TREE_DEPTH = 256
