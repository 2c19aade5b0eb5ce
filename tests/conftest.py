"""
tests/conftest.py

Purpose:
    Shared in-memory fakes for the Korastats source and the Mongo collections
    used by mapper, orchestrator, read-path and CLI tests.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any

import pytest
from pymongo.errors import DuplicateKeyError

from statsync.providers.base import SourceClient, error, success
from statsync.models.sync import SyncProgress
from statsync.services.document_store import DocumentStore
from statsync.services.sync_observer import SyncObserver

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeSource(SourceClient):
    """Dict-backed SourceClient. Missing keys answer with an Error envelope."""

    name = "fake"

    def __init__(self) -> None:
        self.tournaments: list[dict] = []
        self.team_lists: dict[int, list[dict]] = {}
        self.team_stats: dict[tuple[int, int], dict] = {}
        self.team_infos: dict[int, dict] = {}
        self.player_lists: dict[int, list[dict]] = {}
        self.players: dict[int, dict] = {}
        self.player_stats: dict[tuple[int, int], dict] = {}
        self.coach_lists: dict[int, list[dict]] = {}
        self.coaches: dict[int, dict] = {}
        self.referee_lists: dict[int, list[dict]] = {}
        self.referees: dict[int, dict] = {}
        self.standings: dict[int, dict] = {}
        self.structures: dict[int, dict] = {}
        self.failures: dict[tuple[str, Any], Exception] = {}
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    def _answer(self, method: str, key: Any, value: Any) -> dict:
        self.calls.append((method, key))
        failure = self.failures.get((method, key))
        if failure is not None:
            raise failure
        if value is None:
            return error(f"{method} {key} not found")
        return success(copy.deepcopy(value))

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    async def fetch_tournament_list(self):
        return self._answer("tournament_list", None, self.tournaments)

    async def fetch_team_list(self, tournament_id):
        teams = self.team_lists.get(tournament_id)
        return self._answer("team_list", tournament_id, None if teams is None else {"teams": teams})

    async def fetch_team_stats(self, team_id, tournament_id):
        return self._answer("team_stats", (team_id, tournament_id), self.team_stats.get((team_id, tournament_id)))

    async def fetch_entity_image(self, kind, entity_id):
        return self._answer("image", (kind, entity_id), f"https://img.test/{kind}/{entity_id}.png")

    async def fetch_tournament_structure(self, tournament_id):
        return self._answer("structure", tournament_id, self.structures.get(tournament_id))

    async def fetch_group_standings(self, tournament_id):
        return self._answer("standings", tournament_id, self.standings.get(tournament_id))

    async def fetch_team_info(self, team_id):
        return self._answer("team_info", team_id, self.team_infos.get(team_id))

    async def fetch_team_player_list(self, tournament_id):
        teams = self.player_lists.get(tournament_id)
        return self._answer("team_player_list", tournament_id, None if teams is None else {"teams": teams})

    async def fetch_entity_player(self, player_id):
        return self._answer("entity_player", player_id, self.players.get(player_id))

    async def fetch_player_stats(self, player_id, tournament_id):
        return self._answer(
            "player_stats", (player_id, tournament_id), self.player_stats.get((player_id, tournament_id))
        )

    async def fetch_coach_list(self, tournament_id):
        return self._answer("coach_list", tournament_id, self.coach_lists.get(tournament_id))

    async def fetch_entity_coach(self, coach_id):
        return self._answer("entity_coach", coach_id, self.coaches.get(coach_id))

    async def fetch_referee_list(self, tournament_id):
        referees = self.referee_lists.get(tournament_id)
        return self._answer(
            "referee_list", tournament_id, None if referees is None else {"referees": referees}
        )

    async def fetch_entity_referee(self, referee_id):
        return self._answer("entity_referee", referee_id, self.referees.get(referee_id))

    async def aclose(self) -> None:
        self.closed = True


class _Cursor:
    def __init__(self, items: list[dict]) -> None:
        self._items = list(items)
        self._limit: int | None = None

    def sort(self, spec):
        for key, direction in reversed(list(spec)):
            self._items.sort(
                key=lambda doc: (FakeCollection._get_nested(doc, key) is None, FakeCollection._get_nested(doc, key)),
                reverse=int(direction) < 0,
            )
        return self

    def limit(self, value: int):
        self._limit = int(value)
        return self

    async def to_list(self, length=None):
        items = self._items
        if self._limit is not None:
            items = items[: self._limit]
        if length is None:
            return list(items)
        return list(items)[: int(length)]

    def __aiter__(self):
        self._iter = iter(self._items)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class RecordingSyncObserver(SyncObserver):
    """Keeps every progress event for assertions."""

    def __init__(self) -> None:
        self.events: list[SyncProgress] = []

    def on_progress(self, progress: SyncProgress) -> None:
        self.events.append(progress)


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: dict[Any, dict] = {}
        self.calls: list[dict] = []

    @staticmethod
    def _set_nested(doc: dict, dotted_key: str, value) -> None:
        parts = dotted_key.split(".")
        target = doc
        for part in parts[:-1]:
            node = target.get(part)
            if not isinstance(node, dict):
                node = {}
                target[part] = node
            target = node
        target[parts[-1]] = value

    @staticmethod
    def _get_nested(doc: dict, dotted_key: str):
        target = doc
        for part in dotted_key.split("."):
            if not isinstance(target, dict):
                return None
            target = target.get(part)
        return target

    def _matches(self, doc: dict, query: dict | None) -> bool:
        if not isinstance(query, dict):
            return True
        for key, expected in query.items():
            actual = self._get_nested(doc, key)
            if isinstance(expected, dict):
                for op, operand in expected.items():
                    if op == "$in" and actual not in operand:
                        return False
                    if op == "$nin" and actual in operand:
                        return False
                    if op == "$ne" and actual == operand:
                        return False
                    if op == "$gt" and (actual is None or actual <= operand):
                        return False
                    if op == "$gte" and (actual is None or actual < operand):
                        return False
                    if op == "$lt" and (actual is None or actual >= operand):
                        return False
                    if op == "$lte" and (actual is None or actual > operand):
                        return False
                    if op == "$exists" and bool(operand) != (actual is not None):
                        return False
                continue
            if isinstance(actual, list) and not isinstance(expected, list):
                if expected not in actual:
                    return False
                continue
            if actual != expected:
                return False
        return True

    async def update_one(self, query, update, upsert=False):
        self.calls.append({"op": "update_one", "query": query, "update": update, "upsert": upsert})
        doc_id = query.get("_id")
        existing = self.docs.get(doc_id)
        upserted_id = None
        if existing is None and upsert:
            existing = {"_id": doc_id}
            self.docs[doc_id] = existing
            upserted_id = doc_id
            for key, value in update.get("$setOnInsert", {}).items():
                self._set_nested(existing, key, copy.deepcopy(value))
        if existing is not None:
            for key, value in update.get("$set", {}).items():
                self._set_nested(existing, key, copy.deepcopy(value))
        return type("Result", (), {"upserted_id": upserted_id, "matched_count": int(upserted_id is None)})()

    async def insert_one(self, document):
        self.calls.append({"op": "insert_one", "document": document})
        doc = copy.deepcopy(document)
        if doc.get("active_lock") is True and any(d.get("active_lock") is True for d in self.docs.values()):
            raise DuplicateKeyError("E11000 duplicate key error index: sync_runs_single_active_lock")
        if doc["_id"] in self.docs:
            raise DuplicateKeyError("E11000 duplicate key error index: _id_")
        self.docs[doc["_id"]] = doc
        return type("Result", (), {"inserted_id": doc["_id"]})()

    async def find_one(self, query=None, _projection=None, sort=None):
        cursor = self.find(query)
        if sort:
            cursor.sort(sort)
        rows = await cursor.to_list(1)
        return rows[0] if rows else None

    def find(self, query=None, _projection=None):
        return _Cursor([copy.deepcopy(doc) for doc in self.docs.values() if self._matches(doc, query)])

    async def find_one_and_update(self, query, update, return_document=None):
        self.calls.append({"op": "find_one_and_update", "query": query, "update": update})
        for doc in self.docs.values():
            if self._matches(doc, query):
                for key, value in update.get("$set", {}).items():
                    self._set_nested(doc, key, copy.deepcopy(value))
                return copy.deepcopy(doc)
        return None

    async def delete_many(self, query):
        self.calls.append({"op": "delete_many", "query": query})
        doomed = [key for key, doc in self.docs.items() if self._matches(doc, query)]
        for key in doomed:
            del self.docs[key]
        return type("Result", (), {"deleted_count": len(doomed)})()


class FakeDB:
    def __init__(self) -> None:
        self._collections: dict[str, FakeCollection] = {}

    def __getattr__(self, name: str) -> FakeCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    def __getitem__(self, name: str) -> FakeCollection:
        return getattr(self, name)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def fake_db() -> FakeDB:
    return FakeDB()


@pytest.fixture
def store(fake_db) -> DocumentStore:
    return DocumentStore(fake_db)
