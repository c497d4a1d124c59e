"""Path resolution.

Resolves the registry snapshot and configuration files. Uses environment
variables when available, falls back to conventional defaults.

Environment variables:
    AGRILEDGER_HOME — data directory (default: ~/.agriledger)
    AGRILEDGER_STATE — registry snapshot (default: <home>/registry.json)
    AGRILEDGER_CONFIG — configuration file (default: <home>/agriledger.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_HOME = Path.home() / ".agriledger"


def home_dir() -> Path:
    """Return the agriledger data directory."""
    return Path(os.environ.get("AGRILEDGER_HOME", str(_DEFAULT_HOME)))


def state_path() -> Path:
    """Return the path to the registry snapshot."""
    env = os.environ.get("AGRILEDGER_STATE")
    if env:
        return Path(env)
    return home_dir() / "registry.json"


def config_path() -> Path:
    """Return the path to agriledger.yaml."""
    env = os.environ.get("AGRILEDGER_CONFIG")
    if env:
        return Path(env)
    return home_dir() / "agriledger.yaml"
