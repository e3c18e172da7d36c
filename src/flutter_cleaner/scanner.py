"""Scan orchestration: roots -> projects -> cache targets."""

import logging
import time
from typing import Iterable

from flutter_cleaner.detector import find_projects_in_roots
from flutter_cleaner.models import CacheTarget, ProjectInfo, ScanResult, TargetKind
from flutter_cleaner.observer import NULL_OBSERVER, ScanObserver
from flutter_cleaner.paths import expand_home, resolve_canonical
from flutter_cleaner.platforms import get_default_scan_roots
from flutter_cleaner.targets import calculate_size, find_global_targets, find_project_targets

log = logging.getLogger(__name__)


def _collect_projects(
    projects_by_root: dict[str, list[str]],
    include_optional: bool,
    kinds: Iterable[TargetKind] | None,
    is_priority: bool,
    observer: ScanObserver,
    exclude: set[str] | None = None,
) -> list[ProjectInfo]:
    projects = []
    for project_paths in projects_by_root.values():
        for project_path in project_paths:
            if exclude and project_path in exclude:
                observer.on_message(f"Skipping duplicate project: {project_path}")
                continue

            targets = find_project_targets(
                project_path,
                include_optional=include_optional,
                kinds=kinds,
            )
            for target in targets:
                observer.on_target_sized(target)

            if not targets:
                observer.on_message(f"No cache targets in {project_path}")
                continue

            projects.append(
                ProjectInfo(path=project_path, targets=targets, is_priority=is_priority)
            )
    return projects


def scan_global_targets(observer: ScanObserver | None = None) -> list[CacheTarget]:
    """Find global caches and size each one with a full directory walk."""
    observer = observer or NULL_OBSERVER
    targets = []
    for target in find_global_targets():
        sized = target.with_size(calculate_size(target.path))
        observer.on_target_sized(sized)
        targets.append(sized)
    return targets


def scan(
    priority_roots: list[str],
    include_defaults: bool = False,
    include_optional: bool = False,
    include_global: bool = False,
    max_depth: int = 0,
    kinds: Iterable[TargetKind] | None = None,
    observer: ScanObserver | None = None,
) -> ScanResult:
    """
    Scan for Flutter projects and their caches.

    Priority roots are walked first. Default roots reuse the same visited
    set, and any project already found under a priority root is dropped.

    Args:
        priority_roots: User-specified roots (may start with ~)
        include_defaults: Also walk the platform default roots
        include_optional: Include optional per-project targets
        include_global: Include global caches (pub, Gradle, Xcode, CocoaPods)
        max_depth: Maximum recursion depth, 0 for unlimited
        kinds: Restrict project targets to these kinds
        observer: Optional progress observer

    Returns:
        ScanResult for this invocation
    """
    observer = observer or NULL_OBSERVER
    kinds = list(kinds) if kinds is not None else None
    started = time.monotonic()
    seen_paths: set[str] = set()

    observer.on_message("Starting scan...")

    resolved_roots = [
        expand_home(root) for root in priority_roots if resolve_canonical(root) is not None
    ]

    priority_projects: list[ProjectInfo] = []
    if resolved_roots:
        observer.on_message(f"Scanning {len(resolved_roots)} priority root(s)...")
        found = find_projects_in_roots(
            resolved_roots, max_depth=max_depth, seen_paths=seen_paths, observer=observer
        )
        priority_projects = _collect_projects(
            found, include_optional, kinds, is_priority=True, observer=observer
        )

    default_projects: list[ProjectInfo] = []
    if include_defaults:
        default_roots = get_default_scan_roots()
        if default_roots:
            observer.on_message(f"Scanning {len(default_roots)} default root(s)...")
            found = find_projects_in_roots(
                default_roots, max_depth=max_depth, seen_paths=seen_paths, observer=observer
            )
            priority_paths = {p.path for p in priority_projects}
            default_projects = _collect_projects(
                found,
                include_optional,
                kinds,
                is_priority=False,
                observer=observer,
                exclude=priority_paths,
            )

    global_targets: list[CacheTarget] = []
    if include_global:
        observer.on_message("Scanning for global cache targets...")
        global_targets = scan_global_targets(observer)

    result = ScanResult(
        priority_projects=priority_projects,
        default_projects=default_projects,
        global_targets=global_targets,
    )

    elapsed = time.monotonic() - started
    observer.on_message(
        f"Scan completed in {elapsed:.2f}s: {result.project_count} project(s), "
        f"{len(global_targets)} global target(s)"
    )
    log.debug("Visited %d directories", len(seen_paths))
    return result
