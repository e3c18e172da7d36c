"""Safety checks gating every deletion."""

import os

from flutter_cleaner.models import GLOBAL_KINDS, CacheTarget, TargetKind
from flutter_cleaner.paths import (
    is_descendant,
    is_directory,
    is_file,
    resolve_canonical,
)

# Kinds that may ever be deleted
DELETABLE_KINDS = frozenset(kind.value for kind in TargetKind)

# Directories skipped while looking for projects
PRUNE_DIRECTORIES = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        ".dart_tool",
        "build",
        ".idea",
        ".vscode",
        ".vs",
        "DerivedData",
        "Pods",
        ".gradle",
        "target",  # Rust, Maven
        "venv",
        "env",
        ".venv",
        "__pycache__",
        ".pytest_cache",
    }
)


def should_prune_directory(name: str) -> bool:
    """Whether a directory name is never worth descending into."""
    return name in PRUNE_DIRECTORIES


def matches_global_pattern(path: str, kind: str) -> bool:
    """
    Check that a global cache path looks like the cache its kind claims.

    Args:
        path: Resolved path of the target
        kind: Declared target kind

    Returns:
        True if the path matches the expected location pattern
    """
    normalized = os.path.normpath(path).lower()

    if kind == TargetKind.PUB_CACHE:
        return ".pub-cache" in normalized or ("pub" in normalized and "cache" in normalized)
    if kind == TargetKind.GRADLE_CACHE:
        return ".gradle" in normalized and "caches" in normalized
    if kind == TargetKind.XCODE_DERIVED_DATA:
        return "xcode" in normalized and "deriveddata" in normalized
    if kind == TargetKind.COCOAPODS_CACHE:
        return "cocoapods" in normalized and "cache" in normalized
    return False


def validate_deletion(target: CacheTarget, project_root: str) -> str | None:
    """
    Validate that a target is safe to delete.

    The target path is resolved again here, not trusted from the scan.

    Args:
        target: Target to check
        project_root: Owning project root, or the target path itself for
            global targets

    Returns:
        None if safe, otherwise a human-readable rejection reason
    """
    target_path = resolve_canonical(target.path)
    if target_path is None:
        return f"Target path does not exist or cannot be resolved: {target.path}"

    if target.kind not in DELETABLE_KINDS:
        return f'Target type "{target.kind}" is not in the safe allowlist'

    is_global_kind = target.kind in {k.value for k in GLOBAL_KINDS}

    if target.is_global:
        if not is_global_kind:
            return f'Target type "{target.kind}" is not a global cache type'
        if not matches_global_pattern(target_path, target.kind):
            return (
                "Global cache path does not match expected location "
                f'for type "{target.kind}"'
            )
    else:
        if is_global_kind:
            return f'Target type "{target.kind}" must be cleaned as a global cache'
        root_path = resolve_canonical(project_root)
        if root_path is None:
            return f"Project root does not exist or cannot be resolved: {project_root}"
        if target_path == root_path or not is_descendant(target_path, root_path):
            return f"Target path is not within project root: {target_path}"

    if not is_directory(target_path) and not is_file(target_path):
        return f"Target path does not exist: {target_path}"

    return None


def is_path_allowed(
    path: str,
    allowed_roots: list[str],
    global_cache_paths: list[str],
) -> bool:
    """True if path is inside a known global cache or an allowed project root."""
    resolved = resolve_canonical(path)
    if resolved is None:
        return False

    for candidate in [*global_cache_paths, *allowed_roots]:
        resolved_candidate = resolve_canonical(candidate)
        if resolved_candidate is not None and is_descendant(resolved, resolved_candidate):
            return True

    return False
