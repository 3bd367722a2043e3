"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformInfo,
    detect,
    is_windows,
)
from .paths import (
    default_base_dir,
    home,
)
from .shell import (
    Shell,
    default_shell,
    render_path_assignment,
)

__all__ = [
    # detection
    "Arch",
    "Platform",
    "PlatformInfo",
    "detect",
    "is_windows",
    # paths
    "default_base_dir",
    "home",
    # shell
    "Shell",
    "default_shell",
    "render_path_assignment",
]
