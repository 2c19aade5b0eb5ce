"""
statsync/services/cache_service.py

Purpose:
    Process-local TTL cache in front of the document store. Expiry is lazy:
    an expired entry reads as absent and is dropped on access, nothing is
    swept in the background. Keys are plain strings built with create_key().

Dependencies:
    - threading
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, NamedTuple


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


def create_key(*parts: Any) -> str:
    return ":".join(str(part).strip() for part in parts if part is not None and str(part).strip())


def team_key(team_id: int) -> str:
    return create_key("team", int(team_id))


def team_stats_key(team_id: int, tournament_id: int) -> str:
    return create_key("team", int(team_id), "stats", int(tournament_id))


def team_form_key(team_id: int) -> str:
    return create_key("team", int(team_id), "form")


def team_list_key(tournament_id: int) -> str:
    return create_key("teams", "list", int(tournament_id))


def standings_key(tournament_id: int) -> str:
    return create_key("standings", int(tournament_id))


def entity_key(kind: str, entity_id: int) -> str:
    return create_key(kind, int(entity_id))


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + float(ttl_seconds))

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    create_key = staticmethod(create_key)
