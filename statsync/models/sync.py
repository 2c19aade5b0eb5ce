"""
statsync/models/sync.py

Purpose:
    Run-level contracts of the sync orchestrator: phases, progress events,
    narrowing filters and the run report.

Dependencies:
    - pydantic
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from statsync.utils import ensure_utc, parse_utc_or_none


class SyncPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    MAPPING = "mapping"
    STORING = "storing"
    DONE = "done"


class EntityKind(str, Enum):
    TOURNAMENT = "tournament"
    TEAM = "team"
    PLAYER = "player"
    COACH = "coach"
    REFEREE = "referee"
    STANDINGS = "standings"

    @property
    def collection(self) -> str:
        return _COLLECTIONS[self]

    @classmethod
    def parse(cls, value: "str | EntityKind") -> "EntityKind":
        if isinstance(value, EntityKind):
            return value
        text = str(value or "").strip().lower()
        for kind in cls:
            if text in (kind.value, kind.collection):
                return kind
        raise ValueError(f"Unknown entity kind: {value!r}")


_COLLECTIONS: dict[EntityKind, str] = {
    EntityKind.TOURNAMENT: "tournaments",
    EntityKind.TEAM: "teams",
    EntityKind.PLAYER: "players",
    EntityKind.COACH: "coaches",
    EntityKind.REFEREE: "referees",
    EntityKind.STANDINGS: "standings",
}

ALL_KINDS: tuple[EntityKind, ...] = tuple(EntityKind)


class SyncProgress(BaseModel):
    phase: SyncPhase
    kind: EntityKind | None = None
    current: int = 0
    total: int = 0
    message: str = ""


class SyncFilter(BaseModel):
    """Narrows a sync or clear run.

    ``include_ids`` / ``exclude_ids`` act on entity ids. The date range keeps
    tournaments whose [startDate, endDate] overlaps it during sync, and acts
    on ``last_synced`` during clear.
    """

    include_ids: set[int] | None = None
    exclude_ids: set[int] = Field(default_factory=set)
    after_date: datetime | None = None
    before_date: datetime | None = None

    def allows_id(self, entity_id: int) -> bool:
        if self.include_ids is not None and int(entity_id) not in self.include_ids:
            return False
        return int(entity_id) not in self.exclude_ids

    def overlaps(self, start: object, end: object) -> bool:
        """True when [start, end] intersects the filter range; unknown bounds are open."""
        start_dt = parse_utc_or_none(start)
        end_dt = parse_utc_or_none(end)
        if self.before_date is not None and start_dt is not None:
            if start_dt > ensure_utc(self.before_date):
                return False
        if self.after_date is not None and end_dt is not None:
            if end_dt < ensure_utc(self.after_date):
                return False
        return True

    @property
    def has_date_range(self) -> bool:
        return self.after_date is not None or self.before_date is not None


class SyncReport(BaseModel):
    processed: int = 0
    errors: list[str] = Field(default_factory=list)
    kinds: list[EntityKind] = Field(default_factory=list)
    tournament_ids: list[int] = Field(default_factory=list)
    phase: SyncPhase = SyncPhase.IDLE
    since: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def status(self) -> str:
        return "completed_with_errors" if self.errors else "completed"
