"""Progress observers for scans and cleans.

The core calls an observer at a few fixed points. Nothing in the core
depends on what an observer does, so passing ``None`` is always fine.
"""

from __future__ import annotations

import logging

from flutter_cleaner.models import CacheTarget, TargetState, format_size

log = logging.getLogger(__name__)


class ScanObserver:
    """No-op observer; subclass and override what you need."""

    def on_message(self, message: str) -> None:
        pass

    def on_project_found(self, path: str) -> None:
        pass

    def on_target_sized(self, target: CacheTarget) -> None:
        pass

    def on_deletion_attempted(
        self,
        target: CacheTarget,
        state: TargetState,
        reason: str | None = None,
    ) -> None:
        pass


class LoggingObserver(ScanObserver):
    """Forward observer events to the ``logging`` module."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def on_message(self, message: str) -> None:
        log.log(self.level, message)

    def on_project_found(self, path: str) -> None:
        log.log(self.level, "Found project: %s", path)

    def on_target_sized(self, target: CacheTarget) -> None:
        log.log(
            self.level,
            "  %s: %s (%s)",
            target.kind,
            target.path,
            format_size(target.size_bytes),
        )

    def on_deletion_attempted(
        self,
        target: CacheTarget,
        state: TargetState,
        reason: str | None = None,
    ) -> None:
        if state == TargetState.VALIDATED:
            log.debug("Deleting %s", target.path)
        elif state == TargetState.DELETED:
            log.log(self.level, "Deleted %s (%s)", target.path, format_size(target.size_bytes))
        else:
            log.warning("%s: %s (%s)", state.value, target.path, reason)


NULL_OBSERVER = ScanObserver()
