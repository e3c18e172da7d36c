"""Flutter project discovery.

Walks directory trees depth-first looking for Flutter project roots. A
project root is never descended into, so example apps nested inside a
package are not reported separately.
"""

import logging
import os

from flutter_cleaner.observer import NULL_OBSERVER, ScanObserver
from flutter_cleaner.paths import (
    expand_home,
    is_directory,
    is_file,
    normalize,
    resolve_canonical,
)
from flutter_cleaner.safety import should_prune_directory

log = logging.getLogger(__name__)

MANIFEST_FILE = "pubspec.yaml"
METADATA_FILE = ".metadata"
PLATFORM_DIRECTORIES = ("android", "ios")


def is_flutter_project(path: str) -> bool:
    """
    Check whether a directory is a Flutter project root.

    A project root has pubspec.yaml plus at least one of .metadata,
    android/ or ios/. pubspec.yaml alone is not enough: plain Dart packages
    have one too.
    """
    resolved = resolve_canonical(path)
    if resolved is None or not is_directory(resolved):
        return False

    if not is_file(os.path.join(resolved, MANIFEST_FILE)):
        return False

    if is_file(os.path.join(resolved, METADATA_FILE)):
        return True
    return any(is_directory(os.path.join(resolved, name)) for name in PLATFORM_DIRECTORIES)


def _walk(
    path: str,
    projects: list[str],
    seen_paths: set[str],
    max_depth: int,
    depth: int,
    observer: ScanObserver,
) -> None:
    if max_depth > 0 and depth >= max_depth:
        return

    resolved = resolve_canonical(path)
    if resolved is None:
        return

    key = normalize(resolved)
    if key in seen_paths:
        return
    seen_paths.add(key)

    if is_flutter_project(resolved):
        projects.append(resolved)
        observer.on_project_found(resolved)
        return

    try:
        with os.scandir(resolved) as entries:
            subdirs = [
                entry.path
                for entry in entries
                if _is_dir_entry(entry) and not should_prune_directory(entry.name)
            ]
    except (PermissionError, OSError) as e:
        log.debug("Skipping unreadable directory %s: %s", resolved, e)
        return

    for subdir in subdirs:
        _walk(subdir, projects, seen_paths, max_depth, depth + 1, observer)


def _is_dir_entry(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def find_projects(
    root: str,
    max_depth: int = 0,
    seen_paths: set[str] | None = None,
    observer: ScanObserver | None = None,
) -> list[str]:
    """
    Find Flutter projects under a root directory.

    Args:
        root: Directory to search from
        max_depth: Maximum recursion depth, 0 for unlimited
        seen_paths: Visited set to share across calls; a fresh one if None
        observer: Optional progress observer

    Returns:
        Canonical project paths in directory-listing order
    """
    projects: list[str] = []
    seen = seen_paths if seen_paths is not None else set()

    resolved_root = resolve_canonical(root)
    if resolved_root is None or not is_directory(resolved_root):
        return projects

    _walk(resolved_root, projects, seen, max_depth, 0, observer or NULL_OBSERVER)
    return projects


def find_projects_in_roots(
    roots: list[str],
    max_depth: int = 0,
    seen_paths: set[str] | None = None,
    observer: ScanObserver | None = None,
) -> dict[str, list[str]]:
    """
    Find Flutter projects under several roots.

    All roots share one visited set, so a directory reachable from two
    overlapping (or symlinked) roots is only inspected once.

    Returns:
        Mapping of canonical root to its projects, in root order. Roots with
        no projects, or that cannot be resolved, are left out.
    """
    results: dict[str, list[str]] = {}
    seen = seen_paths if seen_paths is not None else set()

    for root in roots:
        resolved = resolve_canonical(expand_home(root))
        if resolved is None:
            log.debug("Skipping unresolvable root %s", root)
            continue

        projects = find_projects(resolved, max_depth=max_depth, seen_paths=seen, observer=observer)
        if projects:
            results.setdefault(resolved, []).extend(projects)

    return results
