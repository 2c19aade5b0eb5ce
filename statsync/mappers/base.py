"""
statsync/mappers/base.py

Purpose:
    Shared mapper plumbing: the MappingError raised when a payload lacks its
    identity, the injected clock used for ``last_synced`` and the league
    reference built from static league metadata.

Dependencies:
    - statsync.config_leagues
    - statsync.mappers.images
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from statsync.config_leagues import DEFAULT_COUNTRY, DEFAULT_COUNTRY_CODE, flag_url, league_info
from statsync.mappers.images import ImageResolver
from statsync.models.common import LeagueRef
from statsync.providers.base import SourceClient
from statsync.utils import to_int, utcnow


class MappingError(ValueError):
    """Raw payload is missing its identity field."""


def require_id(raw: Any, what: str) -> int:
    entity_id = to_int(raw.get("id") if isinstance(raw, dict) else None)
    if entity_id <= 0:
        raise MappingError(f"{what} payload has no id")
    return entity_id


def league_ref(tournament_id: int, *, season: int | None = None) -> LeagueRef:
    info = league_info(tournament_id)
    flag = flag_url(DEFAULT_COUNTRY_CODE)
    if info is None:
        return LeagueRef(id=int(tournament_id), season=season or 0, country=DEFAULT_COUNTRY, flag=flag)
    return LeagueRef(
        id=info["id"],
        name=info["name"],
        logo=info["logo"],
        season=info["season"],
        type=info["type"],
        country=DEFAULT_COUNTRY,
        flag=flag,
    )


def split_name(fullname: str | None) -> tuple[str | None, str | None]:
    parts = str(fullname or "").split()
    if len(parts) < 2:
        return None, None
    return parts[0], parts[-1]


class BaseMapper:
    def __init__(
        self,
        source: SourceClient,
        *,
        clock: Callable[[], datetime] = utcnow,
        images: ImageResolver | None = None,
    ) -> None:
        self.source = source
        self.clock = clock
        self.images = images or ImageResolver(source)
