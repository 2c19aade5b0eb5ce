"""
statsync/services/sync_orchestrator.py

Purpose:
    Walks Korastats tournament lists, maps every referenced team, player,
    coach and referee exactly once, upserts the canonical record and keeps
    the read cache coherent. Tournament records and standings are synced
    once per tournament.

    Error tiers:
    - fatal: the Source is unreachable (list fetch failed, circuit open, no
      endpoint), the store is down, or another run holds the lock; the run
      is journaled as failed and the exception propagates.
    - entity: fetch/map/store failure for one entity, including a single
      request that failed after retries, is appended to the report and the
      run continues.
    - field: mappers fall back to defaults silently.

    Each locked run is journaled in ``sync_runs``; the document with
    ``active_lock: true`` doubles as the single-run lock (partial unique
    index). A running run refreshes ``updated_at``; a lock whose heartbeat is
    older than SYNC_STALE_RUN_MINUTES belongs to a killed process and is
    taken over. Cancellation releases the lock with status "cancelled".

Dependencies:
    - pymongo
    - statsync.mappers
    - statsync.providers.base
    - statsync.services.cache_service
    - statsync.services.document_store
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, AsyncIterator, Callable, Iterable

from bson import ObjectId
from pymongo.errors import ConnectionFailure, DuplicateKeyError, PyMongoError

from statsync.config import settings
from statsync.config_leagues import league_info
from statsync.mappers.coach_mapper import CoachMapper
from statsync.mappers.images import ImageResolver
from statsync.mappers.player_mapper import PlayerMapper
from statsync.mappers.referee_mapper import RefereeMapper
from statsync.mappers.standings_mapper import map_to_standings
from statsync.mappers.team_mapper import TeamMapper
from statsync.mappers.tournament_mapper import map_to_tournament
from statsync.models.common import CanonicalRecord
from statsync.models.raw import RawTournament
from statsync.models.sync import ALL_KINDS, EntityKind, SyncFilter, SyncPhase, SyncProgress, SyncReport
from statsync.providers.base import SourceClient, SourceUnreachableError, envelope_data
from statsync.services.cache_service import TTLCache, create_key, entity_key, standings_key, team_list_key
from statsync.services.document_store import DocumentStore
from statsync.services.sync_observer import NullSyncObserver, SyncObserver
from statsync.utils import ensure_utc, to_int, utcnow

logger = logging.getLogger("statsync.sync")

_RUN_TYPE = "korastats_sync"
_PER_TOURNAMENT = (EntityKind.TOURNAMENT, EntityKind.STANDINGS)


class SyncAlreadyRunningError(Exception):
    """Another sync run holds the lock."""


class EntityNotFoundError(Exception):
    """The source has no identity payload for the requested entity."""


@dataclass
class _Candidate:
    """One entity id and every tournament that referenced it, in first-seen order."""

    id: int
    name: str = "Unknown"
    raw: dict[str, Any] | None = None
    refs: list[tuple[int, Any]] = field(default_factory=list)

    @property
    def tournament_ids(self) -> list[int]:
        return [tid for tid, _ in self.refs]

    def add_ref(self, tournament_id: int, aux: Any = None) -> None:
        if tournament_id not in self.tournament_ids:
            self.refs.append((tournament_id, aux))


def _parse_kinds(kinds: Iterable[EntityKind | str] | None) -> list[EntityKind]:
    wanted = {EntityKind.parse(kind) for kind in (kinds or ALL_KINDS)}
    return [kind for kind in ALL_KINDS if kind in wanted]


def _is_fatal(exc: BaseException) -> bool:
    return isinstance(exc, (SourceUnreachableError, ConnectionFailure))


def _absence(envelope: Any) -> str:
    message = envelope.get("message") if isinstance(envelope, dict) else None
    return str(message or "no data")


class SyncOrchestrator:
    def __init__(
        self,
        source: SourceClient,
        store: DocumentStore | None = None,
        cache: TTLCache | None = None,
        observer: SyncObserver | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.source = source
        self.store = store or DocumentStore()
        self.cache = cache or TTLCache()
        self.observer = observer or NullSyncObserver()
        self.clock = clock
        self.images = ImageResolver(source)
        self.teams = TeamMapper(source, clock=clock, images=self.images)
        self.players = PlayerMapper(source, clock=clock, images=self.images)
        self.coaches = CoachMapper(source, clock=clock, images=self.images)
        self.referees = RefereeMapper(source, clock=clock, images=self.images)
        self._run_id: Any = None
        self._last_heartbeat: datetime | None = None

    # ---- Public operations ----

    async def sync(
        self,
        tournament_id: int | None = None,
        kinds: Iterable[EntityKind | str] | None = None,
        sync_filter: SyncFilter | None = None,
        *,
        incremental: bool = False,
    ) -> SyncReport:
        """Full or filtered sync.

        With ``incremental`` the last completed unscoped run bounds the date
        range: only tournaments still running since that day are walked. An
        explicit ``after_date`` wins; without a previous run it is a full sync.
        """
        selected = _parse_kinds(kinds)
        sync_filter = sync_filter or SyncFilter()
        since = None
        if incremental:
            since = await self._last_sync_day()
            if since is not None and sync_filter.after_date is None:
                sync_filter = sync_filter.model_copy(update={"after_date": since})
            logger.info("Incremental sync since %s", since.date().isoformat() if since else "never")

        mode = "incremental" if incremental else "sync"
        async with self._locked_run(mode, selected, tournament_id, since=since) as report:
            report.since = since
            tournaments = await self._tournaments(tournament_id, sync_filter)
            report.tournament_ids = [to_int(t.get("id")) for t in tournaments]
            await self._run(report, selected, tournaments, sync_filter)
        return report

    async def sync_specific(
        self,
        kind: EntityKind | str,
        ids: Iterable[int],
        tournament_id: int | None = None,
    ) -> SyncReport:
        kind = EntityKind.parse(kind)
        wanted = [int(entity_id) for entity_id in ids]
        sync_filter = SyncFilter(include_ids=set(wanted))
        async with self._locked_run("sync_specific", [kind], tournament_id) as report:
            tournaments = await self._tournaments(tournament_id, SyncFilter())
            if kind in _PER_TOURNAMENT:
                listed = {to_int(t.get("id")) for t in tournaments}
                tournaments = [*tournaments, *({"id": tid} for tid in wanted if tid not in listed)]
            report.tournament_ids = [to_int(t.get("id")) for t in tournaments]
            await self._run(report, [kind], tournaments, sync_filter, expected_ids=wanted)
        return report

    async def sync_entity(
        self,
        kind: EntityKind | str,
        entity_id: int,
        tournament_id: int | None = None,
    ) -> SyncReport:
        """Single-entity sync for read paths. Runs without the run lock.

        Auxiliary stats are gathered from every listed tournament so the
        stored record stays complete; ``tournament_id`` only picks the primary.
        Raises EntityNotFoundError when the source has no identity for it.
        """
        kind = EntityKind.parse(kind)
        entity_id = int(entity_id)
        report = SyncReport(kinds=[kind], started_at=self.clock())
        if kind in _PER_TOURNAMENT:
            tournaments = await self._tournaments(entity_id, SyncFilter())
            report.tournament_ids = [entity_id]
            await self._sync_tournament_kind(kind, tournaments[0], report)
            report.processed += 1
        else:
            tournaments = await self._tournaments(tournament_id, SyncFilter(), include_all=True)
            report.tournament_ids = [to_int(t.get("id")) for t in tournaments]
            candidates = await self._collect(kind, tournaments, SyncFilter(include_ids={entity_id}))
            candidate = candidates.get(entity_id) or _Candidate(id=entity_id)
            if tournament_id is not None:
                primary = int(tournament_id)
            else:
                primary = self._primary(candidate, None, tournaments)
            await self._sync_candidate(kind, candidate, primary, report=report)
            report.processed += 1
        report.phase = SyncPhase.DONE
        report.finished_at = self.clock()
        return report

    async def clear(
        self,
        kinds: Iterable[EntityKind | str] | None = None,
        sync_filter: SyncFilter | None = None,
    ) -> dict[str, int]:
        selected = _parse_kinds(kinds)
        sync_filter = sync_filter or SyncFilter()
        deleted: dict[str, int] = {}
        async with self._locked_run("clear", selected, None) as report:
            for kind in selected:
                query = self._clear_query(sync_filter)
                count = await self.store.delete_many(kind.collection, query)
                deleted[kind.value] = count
                self.cache.invalidate_prefix(create_key(kind.value) + ":")
                logger.info("Cleared %d %s documents", count, kind.collection)
            self.cache.invalidate_prefix("teams:list:")
            report.processed = sum(deleted.values())
        return deleted

    # ---- Run lock / journal ----

    @asynccontextmanager
    async def _locked_run(
        self,
        mode: str,
        kinds: list[EntityKind],
        tournament_id: int | None,
        *,
        since: datetime | None = None,
    ) -> AsyncIterator[SyncReport]:
        started = self.clock()
        run_doc = {
            "_id": ObjectId(),
            "type": _RUN_TYPE,
            "mode": mode,
            "status": "running",
            "phase": SyncPhase.IDLE.value,
            "active_lock": True,
            "kinds": [kind.value for kind in kinds],
            "tournament_id": tournament_id,
            "since": since,
            "processed": 0,
            "errors": [],
            "started_at": started,
            "updated_at": started,
            "finished_at": None,
        }
        run_id = await self._acquire_lock(run_doc)

        report = SyncReport(kinds=list(kinds), started_at=started)
        self._run_id, self._last_heartbeat = run_id, started
        try:
            yield report
        except BaseException as exc:
            self._run_id = None
            await self._release_after_failure(run_id, report, exc)
            raise
        self._run_id = None

        report.finished_at = self.clock()
        self._notify(SyncPhase.DONE, None, report.processed, report.processed, report.status, report=report)
        await self.store.finish_run(
            run_id,
            {
                "status": report.status,
                "phase": report.phase.value,
                "processed": report.processed,
                "errors": list(report.errors),
                "tournament_ids": list(report.tournament_ids),
                "updated_at": report.finished_at,
                "finished_at": report.finished_at,
            },
        )
        logger.info(
            "Sync run %s finished: processed=%d errors=%d", mode, report.processed, len(report.errors)
        )

    async def _acquire_lock(self, run_doc: dict[str, Any]) -> Any:
        try:
            return await self.store.insert_run(run_doc)
        except DuplicateKeyError as exc:
            if not await self._release_stale_lock():
                raise SyncAlreadyRunningError("Another sync run is already active.") from exc
        try:
            return await self.store.insert_run(run_doc)
        except DuplicateKeyError as exc:
            raise SyncAlreadyRunningError("Another sync run is already active.") from exc

    async def _release_stale_lock(self) -> bool:
        """True when the lock is free again (released meanwhile or taken over)."""
        held = await self.store.find_active_run()
        if held is None:
            return True
        seen_at = held.get("updated_at")
        if not isinstance(seen_at, datetime):
            return False
        now = self.clock()
        idle = now - ensure_utc(seen_at)
        if idle <= timedelta(minutes=settings.SYNC_STALE_RUN_MINUTES):
            return False
        logger.warning("Taking over stale sync lock %s (no heartbeat for %s)", held.get("_id"), idle)
        return await self.store.release_stale_run(
            held["_id"],
            seen_at,
            {
                "status": "abandoned",
                "finished_at": now,
                "error": {"message": f"No heartbeat since {ensure_utc(seen_at).isoformat()}", "type": "StaleRun"},
            },
        )

    async def _release_after_failure(self, run_id: Any, report: SyncReport, exc: BaseException) -> None:
        cancelled = isinstance(exc, (asyncio.CancelledError, KeyboardInterrupt))
        try:
            await self.store.finish_run(
                run_id,
                {
                    "status": "cancelled" if cancelled else "failed",
                    "phase": report.phase.value,
                    "processed": report.processed,
                    "errors": list(report.errors),
                    "error": {"message": str(exc), "type": type(exc).__name__},
                    "finished_at": self.clock(),
                },
            )
        except PyMongoError:
            logger.exception("Could not release sync lock for run %s", run_id)

    async def _heartbeat(self, report: SyncReport) -> None:
        if self._run_id is None:
            return
        now = self.clock()
        if self._last_heartbeat is not None:
            if (now - self._last_heartbeat).total_seconds() < settings.SYNC_HEARTBEAT_SECONDS:
                return
        self._last_heartbeat = now
        await self.store.touch_run(
            self._run_id,
            {"updated_at": now, "phase": report.phase.value, "processed": report.processed},
        )

    async def _last_sync_day(self) -> datetime | None:
        last = await self.store.last_completed_run(_RUN_TYPE, ["sync", "incremental"])
        started = (last or {}).get("started_at")
        if not isinstance(started, datetime):
            return None
        return ensure_utc(started).replace(hour=0, minute=0, second=0, microsecond=0)

    # ---- Run body ----

    async def _run(
        self,
        report: SyncReport,
        kinds: list[EntityKind],
        tournaments: list[RawTournament],
        sync_filter: SyncFilter,
        *,
        expected_ids: list[int] | None = None,
    ) -> None:
        for kind in kinds:
            if kind in _PER_TOURNAMENT:
                await self._run_per_tournament(report, kind, tournaments, sync_filter)
                continue

            self._notify(SyncPhase.FETCHING, kind, 0, len(tournaments), f"Fetching {kind.collection} lists", report=report)
            candidates = await self._collect(kind, tournaments, sync_filter)
            for missing in expected_ids or []:
                candidates.setdefault(missing, _Candidate(id=missing))

            total = len(candidates)
            for index, candidate in enumerate(candidates.values(), start=1):
                primary = self._primary(candidate, None, tournaments)
                try:
                    await self._sync_candidate(kind, candidate, primary, current=index, total=total, report=report)
                except Exception as exc:
                    if _is_fatal(exc):
                        raise
                    message = f"Failed to sync {kind.value} {candidate.name} (ID: {candidate.id}): {exc}"
                    logger.warning(message)
                    report.errors.append(message)
                else:
                    report.processed += 1
                await self._heartbeat(report)

    async def _run_per_tournament(
        self, report: SyncReport, kind: EntityKind, tournaments: list[RawTournament], sync_filter: SyncFilter
    ) -> None:
        total = len(tournaments)
        for index, tournament in enumerate(tournaments, start=1):
            tid = to_int(tournament.get("id"))
            if not sync_filter.allows_id(tid):
                continue
            self._notify(SyncPhase.FETCHING, kind, index, total, f"tournament {tid}", report=report)
            try:
                await self._sync_tournament_kind(kind, tournament, report, current=index, total=total)
            except Exception as exc:
                if _is_fatal(exc):
                    raise
                name = tournament.get("tournament") or "Unknown"
                message = f"Failed to sync {kind.value} {name} (ID: {tid}): {exc}"
                logger.warning(message)
                report.errors.append(message)
            else:
                report.processed += 1
            await self._heartbeat(report)

    # ---- Fetching ----

    async def _tournaments(
        self, tournament_id: int | None, sync_filter: SyncFilter, *, include_all: bool = False
    ) -> list[RawTournament]:
        envelope = await self.source.fetch_tournament_list()
        listed = [t for t in envelope_data(envelope, []) if isinstance(t, dict) and to_int(t.get("id")) > 0]
        if tournament_id is not None:
            match = next((t for t in listed if to_int(t.get("id")) == int(tournament_id)), None)
            if match is None:
                info = league_info(tournament_id) or {}
                logger.info("Tournament %s not in source list; syncing by id", tournament_id)
                match = {"id": int(tournament_id), "tournament": str(info.get("name") or "")}
                listed = [*listed, match] if include_all else [match]
            elif not include_all:
                listed = [match]
        if sync_filter.has_date_range:
            listed = [t for t in listed if sync_filter.overlaps(t.get("startDate"), t.get("endDate"))]
        return listed

    async def _collect(
        self, kind: EntityKind, tournaments: list[RawTournament], sync_filter: SyncFilter
    ) -> dict[int, _Candidate]:
        candidates: dict[int, _Candidate] = {}

        def offer(tid: int, entity_id: Any, name: Any, raw: Any = None, aux: Any = None) -> None:
            entity_id = to_int(entity_id)
            if entity_id <= 0 or not sync_filter.allows_id(entity_id):
                return
            candidate = candidates.get(entity_id)
            if candidate is None:
                candidate = candidates[entity_id] = _Candidate(id=entity_id, name=str(name or "Unknown"), raw=raw)
            candidate.add_ref(tid, aux)

        for tournament in tournaments:
            tid = to_int(tournament.get("id"))
            if kind is EntityKind.TEAM:
                data = envelope_data(await self.source.fetch_team_list(tid), {})
                for item in data.get("teams") or []:
                    offer(tid, item.get("id"), item.get("team") or item.get("name"), raw=item)
            elif kind is EntityKind.PLAYER:
                data = envelope_data(await self.source.fetch_team_player_list(tid), {})
                for team in data.get("teams") or []:
                    for player in team.get("players") or []:
                        offer(tid, player.get("id"), player.get("name"))
            elif kind is EntityKind.COACH:
                for coach in envelope_data(await self.source.fetch_coach_list(tid), []) or []:
                    offer(tid, coach.get("id"), coach.get("name"), aux=coach)
            elif kind is EntityKind.REFEREE:
                data = envelope_data(await self.source.fetch_referee_list(tid), {})
                for referee in data.get("referees") or []:
                    offer(tid, referee.get("id"), referee.get("name"), aux=referee)
        return candidates

    @staticmethod
    def _primary(candidate: _Candidate, tournament_id: int | None, tournaments: list[RawTournament]) -> int:
        if candidate.refs:
            return candidate.refs[0][0]
        if tournament_id is not None:
            return int(tournament_id)
        return to_int(tournaments[0].get("id")) if tournaments else 0

    # ---- Per-entity sync ----

    async def _sync_candidate(
        self,
        kind: EntityKind,
        candidate: _Candidate,
        primary: int,
        *,
        current: int = 1,
        total: int = 1,
        report: SyncReport | None = None,
    ) -> None:
        self._notify(SyncPhase.MAPPING, kind, current, total, candidate.name, report=report)
        if kind is EntityKind.TEAM:
            record = await self._map_team(candidate, primary)
        elif kind is EntityKind.PLAYER:
            record = await self._map_player(candidate, primary)
        elif kind in (EntityKind.COACH, EntityKind.REFEREE):
            record = await self._map_person(kind, candidate, primary)
        else:
            raise ValueError(f"Unsupported entity kind: {kind}")

        self._notify(SyncPhase.STORING, kind, current, total, candidate.name, report=report)
        await self.store.upsert(kind.collection, record.to_document(), now=self.clock())
        self._invalidate(kind, candidate.id, candidate.tournament_ids or [primary])

    async def _map_team(self, candidate: _Candidate, primary: int) -> CanonicalRecord:
        info_envelope = await self.source.fetch_team_info(candidate.id)
        team_info = envelope_data(info_envelope)
        raw = candidate.raw
        if raw is None:
            if not team_info:
                raise EntityNotFoundError(f"team {candidate.id} not found: {_absence(info_envelope)}")
            raw = {"id": candidate.id, "team": team_info.get("name")}
            candidate.name = str(team_info.get("name") or candidate.name)

        stats = []
        for tid in candidate.tournament_ids:
            data = envelope_data(await self.source.fetch_team_stats(candidate.id, tid))
            if data:
                stats.append((tid, data))
        return await self.teams.map_to_team(raw, stats, primary, team_info=team_info)

    async def _map_player(self, candidate: _Candidate, primary: int) -> CanonicalRecord:
        envelope = await self.source.fetch_entity_player(candidate.id)
        raw = envelope_data(envelope)
        if not raw:
            raise EntityNotFoundError(f"player {candidate.id} not found: {_absence(envelope)}")
        stats = []
        for tid in candidate.tournament_ids:
            data = envelope_data(await self.source.fetch_player_stats(candidate.id, tid))
            if data:
                stats.append((tid, data))
        return await self.players.map_to_player(raw, stats, primary)

    async def _map_person(self, kind: EntityKind, candidate: _Candidate, primary: int) -> CanonicalRecord:
        if kind is EntityKind.COACH:
            envelope = await self.source.fetch_entity_coach(candidate.id)
        else:
            envelope = await self.source.fetch_entity_referee(candidate.id)
        raw = envelope_data(envelope)
        if not raw:
            raise EntityNotFoundError(
                f"{kind.value} {candidate.id} not found: {_absence(envelope)}"
            )
        aux = [(tid, item) for tid, item in candidate.refs if item]
        if kind is EntityKind.COACH:
            return await self.coaches.map_to_coach(raw, aux, primary)
        return await self.referees.map_to_referee(raw, aux, primary)

    async def _sync_tournament_kind(
        self,
        kind: EntityKind,
        tournament: RawTournament,
        report: SyncReport | None = None,
        *,
        current: int = 1,
        total: int = 1,
    ) -> None:
        if kind is EntityKind.TOURNAMENT:
            await self._sync_tournament(tournament, report, current=current, total=total)
        else:
            await self._sync_standings(tournament, report, current=current, total=total)

    async def _sync_tournament(
        self, tournament: RawTournament, report: SyncReport | None, *, current: int = 1, total: int = 1
    ) -> None:
        tid = to_int(tournament.get("id"))
        envelope = await self.source.fetch_tournament_structure(tid)
        structure = envelope_data(envelope, {})
        if not isinstance(structure, dict):
            structure = {}
        # a bare id with no list entry and no structure has nothing to describe it
        if not structure and not (tournament.get("season") or tournament.get("startDate")):
            raise EntityNotFoundError(f"tournament {tid} not found: {_absence(envelope)}")
        self._notify(SyncPhase.MAPPING, EntityKind.TOURNAMENT, current, total, str(tid), report=report)
        record = map_to_tournament(tournament, structure, clock=self.clock)
        self._notify(SyncPhase.STORING, EntityKind.TOURNAMENT, current, total, str(tid), report=report)
        await self.store.upsert(EntityKind.TOURNAMENT.collection, record.to_document(), now=self.clock())
        self._invalidate(EntityKind.TOURNAMENT, tid, [tid])

    async def _sync_standings(
        self, tournament: RawTournament, report: SyncReport | None, *, current: int = 1, total: int = 1
    ) -> None:
        tid = to_int(tournament.get("id"))
        envelope = await self.source.fetch_group_standings(tid)
        data = envelope_data(envelope)
        if not data:
            raise EntityNotFoundError(f"standings for tournament {tid} not found: {_absence(envelope)}")
        self._notify(SyncPhase.MAPPING, EntityKind.STANDINGS, current, total, str(tid), report=report)
        team_ids = [
            to_int(row.get("teamID"))
            for stage in (data.get("stages") or [])[:1]
            for group in (stage.get("groups") or [])[:1]
            for row in group.get("standings") or []
        ]
        logos = await self.images.club_logos(team_ids)
        record = map_to_standings(tournament, data, team_logos=logos, clock=self.clock)
        self._notify(SyncPhase.STORING, EntityKind.STANDINGS, current, total, str(tid), report=report)
        await self.store.upsert(EntityKind.STANDINGS.collection, record.to_document(), now=self.clock())
        self.cache.invalidate(standings_key(tid))

    # ---- Helpers ----

    def _invalidate(self, kind: EntityKind, entity_id: int, tournament_ids: list[int]) -> None:
        self.cache.invalidate(entity_key(kind.value, entity_id))
        self.cache.invalidate_prefix(entity_key(kind.value, entity_id) + ":")
        for tid in tournament_ids:
            self.cache.invalidate(team_list_key(tid))
            self.cache.invalidate(standings_key(tid))

    @staticmethod
    def _clear_query(sync_filter: SyncFilter) -> dict[str, Any]:
        query: dict[str, Any] = {}
        id_clause: dict[str, Any] = {}
        if sync_filter.include_ids is not None:
            id_clause["$in"] = sorted(sync_filter.include_ids)
        if sync_filter.exclude_ids:
            id_clause["$nin"] = sorted(sync_filter.exclude_ids)
        if id_clause:
            query["_id"] = id_clause
        date_clause: dict[str, Any] = {}
        if sync_filter.after_date is not None:
            date_clause["$gte"] = sync_filter.after_date
        if sync_filter.before_date is not None:
            date_clause["$lte"] = sync_filter.before_date
        if date_clause:
            query["last_synced"] = date_clause
        return query

    def _notify(
        self,
        phase: SyncPhase,
        kind: EntityKind | None,
        current: int,
        total: int,
        message: str = "",
        *,
        report: SyncReport | None = None,
    ) -> None:
        if report is not None:
            report.phase = phase
        try:
            self.observer.on_progress(
                SyncProgress(phase=phase, kind=kind, current=current, total=total, message=message)
            )
        except Exception:
            logger.exception("Sync observer failed on %s", phase.value)
