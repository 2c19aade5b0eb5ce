"""
statsync/providers/base.py

Purpose:
    Source Client interface consumed by mappers and the sync orchestrator.
    Every fetch returns the provider envelope ``{result, message, data}``; a
    result other than "Success" means the data is absent, never an exception.

Dependencies:
    - statsync.models.raw
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from statsync.models.raw import (
    Envelope,
    ImageKind,
    RawEntityPerson,
    RawEntityPlayer,
    RawPlayerTournamentStats,
    RawRefereeList,
    RawStandingsData,
    RawTeamInfo,
    RawTeamList,
    RawTeamPlayerList,
    RawTeamStats,
    RawTournament,
    RawTournamentStructure,
    RawTournamentCoach,
)

SUCCESS = "Success"


class SourceUnavailableError(Exception):
    """A Source request failed after retries (transport error, 5xx or 429).

    Raised for one request; the orchestrator records it against the entity
    being fetched.
    """


class SourceUnreachableError(SourceUnavailableError):
    """The Source cannot be reached at all: no endpoint configured or circuit open."""


def is_success(envelope: Any) -> bool:
    return isinstance(envelope, dict) and envelope.get("result") == SUCCESS


def envelope_data(envelope: Any, default: Any = None) -> Any:
    """Return the envelope payload, or ``default`` when the result is not Success."""
    if not is_success(envelope):
        return default
    data = envelope.get("data")
    return default if data is None else data


def success(data: Any, message: str = "") -> Envelope:
    return {"result": SUCCESS, "message": message, "data": data}


def error(message: str) -> Envelope:
    return {"result": "Error", "message": message, "data": None}


class SourceClient(ABC):
    """Fetch-by-id access to the external statistics provider."""

    name: str = "source"

    @abstractmethod
    async def fetch_tournament_list(self) -> Envelope[list[RawTournament]]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_team_list(self, tournament_id: int) -> Envelope[RawTeamList]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_team_stats(self, team_id: int, tournament_id: int) -> Envelope[RawTeamStats]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_entity_image(self, kind: ImageKind, entity_id: int) -> Envelope[str]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_tournament_structure(self, tournament_id: int) -> Envelope[RawTournamentStructure]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_group_standings(self, tournament_id: int) -> Envelope[RawStandingsData]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_team_info(self, team_id: int) -> Envelope[RawTeamInfo]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_team_player_list(self, tournament_id: int) -> Envelope[RawTeamPlayerList]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_entity_player(self, player_id: int) -> Envelope[RawEntityPlayer]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_player_stats(
        self, player_id: int, tournament_id: int
    ) -> Envelope[RawPlayerTournamentStats]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_coach_list(self, tournament_id: int) -> Envelope[list[RawTournamentCoach]]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_entity_coach(self, coach_id: int) -> Envelope[RawEntityPerson]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_referee_list(self, tournament_id: int) -> Envelope[RawRefereeList]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_entity_referee(self, referee_id: int) -> Envelope[RawEntityPerson]:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
