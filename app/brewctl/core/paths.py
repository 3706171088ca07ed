"""XDG-compliant path management for brewctl.

brewctl stores nothing about operations between runs; the only files it
reads are user settings under the config directory.

XDG defaults:
- Config: ~/.config/brewctl/
"""

import os
import platform
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "brewctl"

# Default brew locations when brew is not on PATH
_BREW_PREFIX_ARM64_MACOS = Path("/opt/homebrew/bin/brew")
_BREW_PREFIX_INTEL_MACOS = Path("/usr/local/bin/brew")
_BREW_PREFIX_LINUX = Path("/home/linuxbrew/.linuxbrew/bin/brew")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/brewctl/ (or XDG_CONFIG_HOME/brewctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/brewctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/brewctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def default_brew_path() -> Path:
    """Return the standard Homebrew location for this platform.

    Used only when brew is neither configured nor on PATH.

    Returns:
        /opt/homebrew/bin/brew on Apple Silicon, /usr/local/bin/brew on
        Intel macOS, the Linuxbrew prefix everywhere else.
    """
    if platform.system() == "Darwin":
        if platform.machine() == "arm64":
            return _BREW_PREFIX_ARM64_MACOS
        return _BREW_PREFIX_INTEL_MACOS
    return _BREW_PREFIX_LINUX
