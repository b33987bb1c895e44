"""XDG-compliant path management for trashctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and for locating the home trash.

XDG defaults:
- Config: ~/.config/trashctl/
- Home trash: ~/.local/share/Trash/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "trashctl"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Path to the base directory (not application-specific).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/trashctl/ (or XDG_CONFIG_HOME/trashctl/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/trashctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/trashctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_data_home() -> Path:
    """Get the XDG data home directory.

    Returns:
        Path to ~/.local/share (or XDG_DATA_HOME).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share")


def get_home_trash_dir() -> Path:
    """Get the home trash directory.

    Returns:
        Path to ~/.local/share/Trash (or XDG_DATA_HOME/Trash).
    """
    return get_data_home() / "Trash"


def _ensure_dir(path: Path, name: str, mode: int = 0o777) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.
        mode: Permission bits for newly created directories.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_trash_dirs(root: Path) -> Path:
    """Create a trash directory with its files/ and info/ subdirectories.

    Trash directories are private to the user (mode 0700).

    Args:
        root: Trash directory to create.

    Returns:
        The trash directory path.

    Raises:
        RuntimeError: If a directory cannot be created.
    """
    _ensure_dir(root / "files", "trash files", mode=0o700)
    _ensure_dir(root / "info", "trash info", mode=0o700)
    return root
