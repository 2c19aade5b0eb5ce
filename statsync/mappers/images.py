"""
statsync/mappers/images.py

Purpose:
    Auxiliary image lookups for mappers. Lookups inside one mapping call run
    concurrently, bounded by a semaphore; any failure (exception or a
    non-Success envelope) resolves to "" and never aborts the mapping.

Dependencies:
    - statsync.providers.base
    - statsync.config
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from statsync.config import settings
from statsync.models.raw import ImageKind
from statsync.providers.base import SourceClient, envelope_data

logger = logging.getLogger("statsync.images")


class ImageResolver:
    def __init__(self, source: SourceClient, max_concurrency: int | None = None) -> None:
        self._source = source
        self._semaphore = asyncio.Semaphore(max(1, int(max_concurrency or settings.KORASTATS_MAX_CONCURRENCY)))

    async def resolve(self, kind: ImageKind, entity_id: int | None) -> str:
        if not entity_id:
            return ""
        async with self._semaphore:
            try:
                envelope = await self._source.fetch_entity_image(kind, int(entity_id))
            except Exception as exc:
                logger.warning("Image lookup failed for %s %s: %s", kind, entity_id, exc)
                return ""
        url = envelope_data(envelope, "")
        return url if isinstance(url, str) else ""

    async def resolve_many(self, requests: Iterable[tuple[ImageKind, int | None]]) -> list[str]:
        return list(await asyncio.gather(*(self.resolve(kind, entity_id) for kind, entity_id in requests)))

    async def club_logos(self, team_ids: Iterable[int]) -> dict[int, str]:
        ids = sorted({int(team_id) for team_id in team_ids if team_id})
        urls = await self.resolve_many(("club", team_id) for team_id in ids)
        return dict(zip(ids, urls))
