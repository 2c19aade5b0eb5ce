"""
statsync/services/read_service.py

Purpose:
    Read-through access to canonical records: cache -> store -> one
    on-demand single-entity sync -> store -> default shape. "Not yet synced"
    never raises; only a failed identity lookup surfaces as not-found.

Dependencies:
    - statsync.services.cache_service
    - statsync.services.document_store
    - statsync.services.sync_orchestrator
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Awaitable, Callable

from statsync.config import settings
from statsync.models.coach import CoachRecord
from statsync.models.player import PlayerRecord
from statsync.models.referee import RefereeRecord
from statsync.models.standings import StandingsRecord
from statsync.models.sync import EntityKind
from statsync.models.team import TeamRecord, TeamTournamentStats
from statsync.models.tournament import TournamentRecord
from statsync.services.cache_service import (
    TTLCache,
    entity_key,
    standings_key,
    team_form_key,
    team_key,
    team_list_key,
    team_stats_key,
)
from statsync.services.document_store import DocumentStore
from statsync.services.sync_orchestrator import EntityNotFoundError, SyncOrchestrator

logger = logging.getLogger("statsync.read")

_MASKED_MESSAGE = "Internal server error"


class ReadServiceError(Exception):
    """Unexpected failure on a read path. The message is masked in production."""


def _tournament_entry(team_doc: dict[str, Any] | None, tournament_id: int) -> dict[str, Any] | None:
    if not team_doc:
        return None
    for entry in team_doc.get("tournament_stats") or []:
        if int(entry.get("tournament_id") or 0) == int(tournament_id):
            return entry
    return None


def _form_view(team_doc: dict[str, Any] | None) -> dict[str, Any] | None:
    if not team_doc:
        return None
    entries = team_doc.get("tournament_stats") or []
    return {
        "team_id": team_doc["_id"],
        "form": entries[0].get("form", "") if entries else "",
        "form_over_time": team_doc.get("form_over_time") or [],
    }


class ReadService:
    def __init__(self, store: DocumentStore, cache: TTLCache, orchestrator: SyncOrchestrator) -> None:
        self.store = store
        self.cache = cache
        self.orchestrator = orchestrator

    # ---- Teams ----

    async def get_team(self, team_id: int) -> dict[str, Any]:
        team_id = int(team_id)
        return await self._read_through(
            team_key(team_id),
            settings.CACHE_TTL_PROFILE_SECONDS,
            lambda: self.store.find_one(EntityKind.TEAM.collection, team_id),
            lambda: self.orchestrator.sync_entity(EntityKind.TEAM, team_id),
            lambda: TeamRecord(id=team_id, name="Unknown Team").to_document(),
        )

    async def get_team_stats(self, team_id: int, tournament_id: int) -> dict[str, Any]:
        team_id, tournament_id = int(team_id), int(tournament_id)

        async def load() -> dict[str, Any] | None:
            return _tournament_entry(await self.store.find_one(EntityKind.TEAM.collection, team_id), tournament_id)

        return await self._read_through(
            team_stats_key(team_id, tournament_id),
            settings.CACHE_TTL_AGGREGATE_SECONDS,
            load,
            lambda: self.orchestrator.sync_entity(EntityKind.TEAM, team_id, tournament_id),
            lambda: TeamTournamentStats(tournament_id=tournament_id).model_dump(),
        )

    async def get_team_form(self, team_id: int) -> dict[str, Any]:
        team_id = int(team_id)

        async def load() -> dict[str, Any] | None:
            return _form_view(await self.store.find_one(EntityKind.TEAM.collection, team_id))

        return await self._read_through(
            team_form_key(team_id),
            settings.CACHE_TTL_FIXTURES_SECONDS,
            load,
            lambda: self.orchestrator.sync_entity(EntityKind.TEAM, team_id),
            lambda: {"team_id": team_id, "form": "", "form_over_time": []},
        )

    async def list_teams(self, tournament_id: int) -> list[dict[str, Any]]:
        """Teams stored for a tournament, by name. No on-demand sync for lists."""
        tournament_id = int(tournament_id)

        async def load() -> list[dict[str, Any]] | None:
            docs = await self.store.find_many(
                EntityKind.TEAM.collection,
                {"tournament_ids": tournament_id},
                sort=[("name", 1)],
            )
            return docs or None

        return await self._read_through(
            team_list_key(tournament_id),
            settings.CACHE_TTL_FIXTURES_SECONDS,
            load,
            None,
            list,
        )

    # ---- People ----

    async def get_player(self, player_id: int) -> dict[str, Any]:
        return await self._get_entity(
            EntityKind.PLAYER, int(player_id), lambda pid: PlayerRecord(id=pid, name="Unknown").to_document()
        )

    async def get_coach(self, coach_id: int) -> dict[str, Any]:
        return await self._get_entity(
            EntityKind.COACH, int(coach_id), lambda cid: CoachRecord(id=cid, name="Unknown").to_document()
        )

    async def get_referee(self, referee_id: int) -> dict[str, Any]:
        return await self._get_entity(
            EntityKind.REFEREE, int(referee_id), lambda rid: RefereeRecord(id=rid, name="Unknown").to_document()
        )

    # ---- Tournaments ----

    async def get_tournament(self, tournament_id: int) -> dict[str, Any]:
        return await self._get_entity(
            EntityKind.TOURNAMENT, int(tournament_id), lambda tid: TournamentRecord(id=tid).to_document()
        )

    # ---- Standings ----

    async def get_standings(self, tournament_id: int) -> dict[str, Any]:
        tournament_id = int(tournament_id)
        return await self._read_through(
            standings_key(tournament_id),
            settings.CACHE_TTL_AGGREGATE_SECONDS,
            lambda: self.store.find_one(EntityKind.STANDINGS.collection, tournament_id),
            lambda: self.orchestrator.sync_entity(EntityKind.STANDINGS, tournament_id),
            lambda: StandingsRecord(id=tournament_id, tournament_id=tournament_id).to_document(),
        )

    # ---- Internals ----

    async def _get_entity(
        self, kind: EntityKind, entity_id: int, default: Callable[[int], dict[str, Any]]
    ) -> dict[str, Any]:
        return await self._read_through(
            entity_key(kind.value, entity_id),
            settings.CACHE_TTL_PROFILE_SECONDS,
            lambda: self.store.find_one(kind.collection, entity_id),
            lambda: self.orchestrator.sync_entity(kind, entity_id),
            lambda: default(entity_id),
        )

    async def _read_through(
        self,
        key: str,
        ttl_seconds: int,
        load: Callable[[], Awaitable[Any]],
        sync: Callable[[], Awaitable[Any]] | None,
        default: Callable[[], Any],
    ) -> Any:
        cached = self.cache.get(key)
        if cached is not None:
            # callers may mutate what they get back
            return copy.deepcopy(cached)

        try:
            value = await load()
            if value is None and sync is not None:
                logger.info("Cache and store miss for %s; syncing on demand", key)
                await sync()
                value = await load()
        except EntityNotFoundError:
            raise
        except Exception as exc:
            logger.exception("Read failed for %s", key)
            message = _MASKED_MESSAGE if settings.is_production else str(exc)
            raise ReadServiceError(message) from exc

        if value is None:
            return default()
        self.cache.set(key, value, ttl_seconds)
        return copy.deepcopy(value)
