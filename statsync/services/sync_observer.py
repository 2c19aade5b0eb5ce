"""
statsync/services/sync_observer.py

Purpose:
    Progress hooks for the sync orchestrator. Observers are called at phase
    boundaries; the orchestrator shields itself from observer failures.

Dependencies:
    - statsync.models.sync
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from statsync.models.sync import SyncProgress


class SyncObserver(ABC):
    @abstractmethod
    def on_progress(self, progress: SyncProgress) -> None:
        """Called once per phase boundary; exceptions are logged by the caller."""


class NullSyncObserver(SyncObserver):
    def on_progress(self, progress: SyncProgress) -> None:
        return None


class LoggingSyncObserver(SyncObserver):
    """Writes one log line per progress event (used by the CLI)."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("statsync.progress")

    def on_progress(self, progress: SyncProgress) -> None:
        kind = progress.kind.value if progress.kind else "-"
        if progress.total:
            self._logger.info(
                "[%s] %s %d/%d %s",
                progress.phase.value,
                kind,
                progress.current,
                progress.total,
                progress.message,
            )
        else:
            self._logger.info("[%s] %s %s", progress.phase.value, kind, progress.message)
