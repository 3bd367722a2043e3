"""User-level directory locations."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .detection import is_windows

__all__ = ["APP_DIR_NAME", "home", "default_base_dir"]

# Directory created under the user's home
APP_DIR_NAME = ".gvm"


def home(environ: Mapping[str, str] | None = None) -> Path:
    """Get the user's home directory.

    USERPROFILE on Windows, HOME elsewhere, then Path.home() as a fallback.
    """
    env = os.environ if environ is None else environ
    key = "USERPROFILE" if is_windows() else "HOME"
    value = env.get(key)
    if value:
        return Path(value)
    return Path.home()


def default_base_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Base directory used when GVM_DIR is not set: ``~/.gvm``."""
    return home(environ) / APP_DIR_NAME
