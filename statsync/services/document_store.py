"""
statsync/services/document_store.py

Purpose:
    Thin async gateway over the MongoDB collections holding canonical
    records. Records are keyed by ``_id`` = provider id and written with a
    full-document upsert (last writer wins); ``created_at`` is stamped once.

Dependencies:
    - motor (via statsync.database)
    - pymongo
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pymongo import ReturnDocument

import statsync.database as _db
from statsync.utils import utcnow

logger = logging.getLogger("statsync.store")

SYNC_RUNS = "sync_runs"


class DocumentStore:
    def __init__(self, database: Any = None) -> None:
        self._database = database

    @property
    def db(self) -> Any:
        return self._database if self._database is not None else _db.db

    def collection(self, name: str) -> Any:
        return getattr(self.db, name)

    async def upsert(self, collection: str, document: dict[str, Any], *, now: datetime | None = None) -> None:
        doc = dict(document)
        doc_id = doc.pop("_id")
        await self.collection(collection).update_one(
            {"_id": doc_id},
            {"$set": doc, "$setOnInsert": {"created_at": now or utcnow()}},
            upsert=True,
        )

    async def find_one(self, collection: str, doc_id: Any) -> dict[str, Any] | None:
        doc = await self.collection(collection).find_one({"_id": doc_id})
        return doc if isinstance(doc, dict) else None

    async def find_many(
        self,
        collection: str,
        query: dict[str, Any],
        *,
        sort: list[tuple[str, int]] | None = None,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        cursor = self.collection(collection).find(query)
        if sort:
            cursor = cursor.sort(sort)
        return await cursor.to_list(length=limit or None)

    async def delete_many(self, collection: str, query: dict[str, Any]) -> int:
        result = await self.collection(collection).delete_many(query)
        return int(result.deleted_count or 0)

    # ---- Sync run journal ----

    async def insert_run(self, document: dict[str, Any]) -> Any:
        """Raises DuplicateKeyError when another run holds the active lock."""
        result = await self.collection(SYNC_RUNS).insert_one(document)
        return result.inserted_id

    async def finish_run(self, run_id: Any, fields: dict[str, Any]) -> dict[str, Any] | None:
        return await self.collection(SYNC_RUNS).find_one_and_update(
            {"_id": run_id},
            {"$set": {**fields, "active_lock": False}},
            return_document=ReturnDocument.AFTER,
        )

    async def touch_run(self, run_id: Any, fields: dict[str, Any]) -> None:
        await self.collection(SYNC_RUNS).update_one({"_id": run_id}, {"$set": fields})

    async def find_active_run(self) -> dict[str, Any] | None:
        return await self.collection(SYNC_RUNS).find_one({"active_lock": True})

    async def release_stale_run(self, run_id: Any, seen_at: Any, fields: dict[str, Any]) -> bool:
        """Release a lock only if its heartbeat has not moved since ``seen_at``."""
        doc = await self.collection(SYNC_RUNS).find_one_and_update(
            {"_id": run_id, "active_lock": True, "updated_at": seen_at},
            {"$set": {**fields, "active_lock": False}},
            return_document=ReturnDocument.AFTER,
        )
        return doc is not None

    async def last_completed_run(self, run_type: str, modes: list[str]) -> dict[str, Any] | None:
        return await self.collection(SYNC_RUNS).find_one(
            {
                "type": run_type,
                "mode": {"$in": modes},
                "tournament_id": None,
                "status": {"$in": ["completed", "completed_with_errors"]},
            },
            sort=[("started_at", -1)],
        )
