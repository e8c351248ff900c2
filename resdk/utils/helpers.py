"""Utility functions for resdk."""

import os
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the resdk data directory.

    Respects RESDK_HOME environment variable; falls back to ~/.resdk.
    """
    resdk_home = os.environ.get("RESDK_HOME", "").strip()
    if resdk_home:
        return Path(resdk_home).expanduser()
    return Path.home() / ".resdk"
