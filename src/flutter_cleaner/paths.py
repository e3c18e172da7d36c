"""Path resolution and containment helpers."""

import os
import sys
from pathlib import Path


def get_home_directory() -> str:
    """Return the effective home directory."""
    env = os.environ
    if sys.platform == "win32":
        home = env.get("USERPROFILE") or env.get("HOME")
    else:
        home = env.get("HOME")
    if home:
        return home
    try:
        return str(Path.home())
    except RuntimeError:
        return ""


def expand_home(path: str | Path) -> str:
    """Expand a leading ~ to the home directory."""
    path_str = str(path)
    if path_str.startswith("~"):
        home = get_home_directory()
        if home:
            return os.path.join(home, path_str[1:].lstrip("/\\"))
    return path_str


def normalize(path: str | Path) -> str:
    """Absolute, normalized form of a path (symlinks untouched)."""
    return os.path.normpath(os.path.abspath(str(path)))


def resolve_canonical(path: str | Path) -> str | None:
    """
    Resolve a path to its canonical absolute form.

    Expands ~, makes the path absolute and follows every symlink.

    Returns:
        The canonical path, or None if it does not exist or cannot be resolved
    """
    try:
        resolved = Path(expand_home(path)).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None
    return str(resolved)


def is_descendant(child: str | Path, parent: str | Path) -> bool:
    """True if child is parent or lies inside it."""
    try:
        child_norm = normalize(child)
        parent_norm = normalize(parent)
    except (OSError, ValueError):
        return False
    if child_norm == parent_norm:
        return True
    prefix = parent_norm if parent_norm.endswith(os.sep) else parent_norm + os.sep
    return child_norm.startswith(prefix)


def is_directory(path: str | Path) -> bool:
    try:
        return os.path.isdir(path)
    except (OSError, ValueError):
        return False


def is_file(path: str | Path) -> bool:
    try:
        return os.path.isfile(path)
    except (OSError, ValueError):
        return False
