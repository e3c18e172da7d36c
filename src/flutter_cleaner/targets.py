"""Per-project and global cache target catalog."""

import logging
import os
from typing import Callable, Iterable

from flutter_cleaner import platforms
from flutter_cleaner.models import CacheTarget, TargetKind
from flutter_cleaner.paths import is_descendant, resolve_canonical

log = logging.getLogger(__name__)

# Always enumerated
REQUIRED_TARGETS: dict[TargetKind, tuple[str, ...]] = {
    TargetKind.BUILD: ("build",),
    TargetKind.DART_TOOL: (".dart_tool",),
    TargetKind.FLUTTER_PLUGINS: (".flutter-plugins",),
    TargetKind.FLUTTER_PLUGINS_DEPENDENCIES: (".flutter-plugins-dependencies",),
}

# Enumerated only on request
OPTIONAL_TARGETS: dict[TargetKind, tuple[str, ...]] = {
    TargetKind.IDEA: (".idea",),
    TargetKind.GRADLE: ("android", ".gradle"),
    TargetKind.PODS: ("ios", "Pods"),
    TargetKind.SYMLINKS: ("ios", ".symlinks"),
}

GLOBAL_TARGETS: dict[TargetKind, Callable[[], str | None]] = {
    TargetKind.PUB_CACHE: platforms.get_pub_cache_path,
    TargetKind.GRADLE_CACHE: platforms.get_gradle_cache_path,
    TargetKind.XCODE_DERIVED_DATA: platforms.get_xcode_derived_data_path,
    TargetKind.COCOAPODS_CACHE: platforms.get_cocoapods_cache_path,
}


def calculate_size(path: str) -> int:
    """
    Size of a file or directory in bytes.

    Directories are walked with os.scandir without following symlinks;
    entries that cannot be read count as 0.

    Returns:
        Total bytes, or 0 if the path is missing
    """
    try:
        if os.path.islink(path):
            return 0
        if os.path.isfile(path):
            return os.stat(path).st_size
        if not os.path.isdir(path):
            return 0
    except OSError:
        return 0

    total = 0
    pending = [path]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                    except OSError:
                        continue
        except OSError:
            continue
    return total


def _find_project_target(
    project_root: str, kind: TargetKind, segments: tuple[str, ...]
) -> CacheTarget | None:
    resolved = resolve_canonical(os.path.join(project_root, *segments))
    if resolved is None:
        return None

    # A symlinked target pointing outside the project is not ours to touch
    if resolved == project_root or not is_descendant(resolved, project_root):
        log.debug("Ignoring %s: resolves outside %s", resolved, project_root)
        return None

    return CacheTarget(
        kind=kind.value,
        path=resolved,
        size_bytes=calculate_size(resolved),
        is_global=False,
        exists=True,
    )


def find_project_targets(
    project_root: str,
    include_optional: bool = False,
    kinds: Iterable[TargetKind] | None = None,
) -> list[CacheTarget]:
    """
    Find cache targets inside a Flutter project.

    Args:
        project_root: Canonical project root
        include_optional: Also look at optional targets (.idea, Pods, ...)
        kinds: If given, only these kinds are considered

    Returns:
        Existing targets in table order; absent ones are omitted
    """
    table = dict(REQUIRED_TARGETS)
    if include_optional:
        table.update(OPTIONAL_TARGETS)

    wanted = set(kinds) if kinds is not None else None

    targets = []
    for kind, segments in table.items():
        if wanted is not None and kind not in wanted:
            continue
        target = _find_project_target(project_root, kind, segments)
        if target is not None:
            targets.append(target)
    return targets


def find_global_targets() -> list[CacheTarget]:
    """Find global caches that exist on this machine."""
    targets = []
    for kind, resolver in GLOBAL_TARGETS.items():
        cache_path = resolver()
        if cache_path is None:
            continue
        targets.append(
            CacheTarget(
                kind=kind.value,
                path=cache_path,
                size_bytes=calculate_size(cache_path),
                is_global=True,
                exists=True,
            )
        )
    return targets
