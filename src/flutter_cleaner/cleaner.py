"""Cleanup execution with safety checks."""

import logging
import os
import shutil

from flutter_cleaner.models import (
    CacheTarget,
    CleanOutcome,
    ProjectInfo,
    ScanResult,
    TargetState,
)
from flutter_cleaner.observer import NULL_OBSERVER, ScanObserver
from flutter_cleaner.platforms import TrashHelper, get_trash_helper
from flutter_cleaner.safety import validate_deletion

log = logging.getLogger(__name__)

DELETE_FAILED = "Failed to delete"


def delete_directly(path: str) -> bool:
    """
    Permanently delete a file or directory.

    A symlink is removed itself, never followed.

    Returns:
        True on success (or if the path is already gone), False otherwise
    """
    try:
        if os.path.islink(path) or os.path.isfile(path):
            os.unlink(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
        return True
    except (PermissionError, OSError) as e:
        log.debug("Direct deletion of %s failed: %s", path, e)
        return False


class CacheCleaner:
    """Deletes validated cache targets, one at a time."""

    def __init__(
        self,
        move_to_trash: bool = False,
        observer: ScanObserver | None = None,
        trash_helper: TrashHelper | None = None,
    ) -> None:
        self.move_to_trash = move_to_trash
        self.observer = observer or NULL_OBSERVER
        self.trash_helper = trash_helper if trash_helper is not None else get_trash_helper()

    def _delete(self, path: str) -> bool:
        if self.move_to_trash:
            if self.trash_helper is not None and self.trash_helper.move_to_trash(path):
                return True
            log.info("Trash unavailable for %s, deleting directly", path)
        return delete_directly(path)

    def _clean_target(self, target: CacheTarget, project_root: str, outcome: CleanOutcome) -> TargetState:
        log.debug("%s: %s", TargetState.PENDING.value, target.path)
        reason = validate_deletion(target, project_root)
        if reason is not None:
            outcome.record_failed(target.path, reason)
            self.observer.on_deletion_attempted(target, TargetState.VALIDATION_REJECTED, reason)
            return TargetState.VALIDATION_REJECTED

        self.observer.on_deletion_attempted(target, TargetState.VALIDATED)
        if not self._delete(target.path):
            outcome.record_failed(target.path, DELETE_FAILED)
            self.observer.on_deletion_attempted(target, TargetState.DELETION_FAILED, DELETE_FAILED)
            return TargetState.DELETION_FAILED

        outcome.record_deleted(target.path, target.size_bytes)
        self.observer.on_deletion_attempted(target, TargetState.DELETED)
        return TargetState.DELETED

    def clean_targets(
        self,
        targets: list[CacheTarget],
        project_root: str | None = None,
    ) -> CleanOutcome:
        """
        Clean targets independently, continuing past failures.

        Args:
            targets: Targets to delete
            project_root: Owning project root for project-scoped targets.
                Global targets are checked against their own path.

        Returns:
            CleanOutcome covering every target
        """
        outcome = CleanOutcome()
        for target in targets:
            root = target.path if target.is_global else project_root
            if root is None:
                reason = "No project root given for project target"
                outcome.record_failed(target.path, reason)
                self.observer.on_deletion_attempted(target, TargetState.VALIDATION_REJECTED, reason)
                continue
            self._clean_target(target, root, outcome)
        return outcome

    def clean_project(self, project: ProjectInfo) -> CleanOutcome:
        """Clean all targets of one project."""
        return self.clean_targets(project.targets, project.path)

    def clean_global_targets(self, targets: list[CacheTarget]) -> CleanOutcome:
        """Clean global caches; anything not marked global is refused."""
        outcome = CleanOutcome()
        for target in targets:
            if not target.is_global:
                outcome.record_failed(target.path, "Not a global cache target")
                self.observer.on_deletion_attempted(
                    target, TargetState.VALIDATION_REJECTED, "Not a global cache target"
                )
                continue
            self._clean_target(target, target.path, outcome)
        return outcome

    def clean_scan_result(self, scan_result: ScanResult) -> CleanOutcome:
        """Clean everything a scan found: priority, default, then global."""
        outcome = CleanOutcome()

        if scan_result.priority_projects:
            self.observer.on_message(
                f"Cleaning {len(scan_result.priority_projects)} priority project(s)..."
            )
        for project in scan_result.priority_projects:
            outcome.merge(self.clean_project(project))

        if scan_result.default_projects:
            self.observer.on_message(
                f"Cleaning {len(scan_result.default_projects)} default project(s)..."
            )
        for project in scan_result.default_projects:
            outcome.merge(self.clean_project(project))

        if scan_result.global_targets:
            self.observer.on_message(
                f"Cleaning {len(scan_result.global_targets)} global target(s)..."
            )
            outcome.merge(self.clean_global_targets(scan_result.global_targets))

        self.observer.on_message(
            f"Total: {outcome.deleted_count} deleted, {outcome.failed_count} failed, "
            f"{outcome.size_human} reclaimed"
        )
        return outcome
