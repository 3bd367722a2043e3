"""Runtime settings read from the environment.

gvm keeps no configuration files; its only state is the versions tree.
Behaviour can be adjusted with:

  GVM_DIR            base directory (default ~/.gvm), made absolute
  GVM_HTTP_TIMEOUT   network timeout in seconds (default 30)
  GVM_VERBOSE        1/true/yes/on prints extra diagnostics on stderr
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gvm.platform.paths import default_base_dir

from .errors import ConfigError
from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "ENV_BASE_DIR",
    "ENV_HTTP_TIMEOUT",
    "ENV_VERBOSE",
    "Settings",
    "load_settings",
]

ENV_BASE_DIR = "GVM_DIR"
ENV_HTTP_TIMEOUT = "GVM_HTTP_TIMEOUT"
ENV_VERBOSE = "GVM_VERBOSE"

DEFAULT_HTTP_TIMEOUT = 30.0

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide settings."""

    base_dir: Path
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    verbose: bool = False

    @property
    def versions_dir(self) -> Path:
        return self.base_dir / "versions"


def _parse_timeout(raw: str) -> Result[float, ConfigError]:
    try:
        value = float(raw)
    except ValueError:
        return Err(ConfigError(ENV_HTTP_TIMEOUT, f"not a number: {raw!r}"))
    if not math.isfinite(value) or value <= 0:
        return Err(ConfigError(ENV_HTTP_TIMEOUT, f"must be a positive number of seconds: {raw!r}"))
    return Ok(value)


def load_settings(environ: Mapping[str, str] | None = None) -> Result[Settings, ConfigError]:
    """Build Settings from environment variables.

    Args:
        environ: Environment to read (defaults to os.environ)

    Returns:
        Ok(Settings), or Err(ConfigError) for a malformed value
    """
    env = os.environ if environ is None else environ

    raw_dir = env.get(ENV_BASE_DIR, "").strip()
    base_dir = Path(raw_dir).expanduser().resolve() if raw_dir else default_base_dir(env)

    timeout = DEFAULT_HTTP_TIMEOUT
    raw_timeout = env.get(ENV_HTTP_TIMEOUT, "").strip()
    if raw_timeout:
        parsed = _parse_timeout(raw_timeout)
        if isinstance(parsed, Err):
            return parsed
        timeout = parsed.value

    verbose = env.get(ENV_VERBOSE, "").strip().lower() in _TRUTHY

    return Ok(Settings(base_dir=base_dir, http_timeout=timeout, verbose=verbose))
