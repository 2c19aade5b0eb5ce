"""
statsync/providers/korastats.py

Purpose:
    Korastats API v2 adapter. All endpoints share one URL and are selected by
    the ``api`` query parameter; responses arrive in the provider envelope.
    Transport failures surface as SourceUnavailableError (SourceUnreachableError
    when no endpoint is configured or the circuit is open); provider-side
    "Error" results pass through untouched.

Dependencies:
    - httpx
    - statsync.config
    - statsync.providers.http_client
    - statsync.providers.rate_limiter
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from statsync.config import settings
from statsync.models.raw import Envelope, ImageKind
from statsync.providers.base import SourceClient, SourceUnavailableError, SourceUnreachableError, error, success
from statsync.providers.http_client import CircuitOpenError, ResilientClient
from statsync.providers.rate_limiter import TokenBucket

logger = logging.getLogger("statsync.korastats")

_IMAGE_PATHS: dict[str, str] = {
    "coach": "coaches",
    "player": "players",
    "referee": "referees",
    "club": "club",
}


class KorastatsClient(SourceClient):
    """HTTP adapter for the Korastats statistics API."""

    name = "korastats"

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        api_key: str | None = None,
        image_base_url: str | None = None,
        http: ResilientClient | None = None,
    ) -> None:
        self._endpoint = str(endpoint or settings.KORASTATS_API_ENDPOINT or "").strip()
        self._api_key = str(api_key if api_key is not None else settings.KORASTATS_API_KEY or "")
        self._image_base_url = str(image_base_url or settings.KORASTATS_IMAGE_BASE_URL).rstrip("/")
        self._client = http or ResilientClient(
            "korastats",
            timeout=settings.KORASTATS_TIMEOUT_SECONDS,
            max_retries=settings.KORASTATS_MAX_RETRIES,
            base_delay=settings.KORASTATS_RETRY_BASE_DELAY_SECONDS,
            limiter=TokenBucket(settings.KORASTATS_RATE_LIMIT_RPM),
        )

    def _base_params(self) -> dict[str, str]:
        return {
            "key": self._api_key,
            "module": "api",
            "version": "V2",
            "response": "json",
            "lang": "en",
        }

    async def _request(self, api: str, **params: Any) -> Envelope:
        if not self._endpoint:
            raise SourceUnreachableError("KORASTATS_API_ENDPOINT is missing.")
        query = self._base_params()
        query["api"] = api
        query.update({key: value for key, value in params.items() if value is not None})
        logger.debug("Korastats API call: %s %s", api, {k: v for k, v in params.items() if v is not None})
        try:
            response = await self._client.get(self._endpoint, params=query)
        except CircuitOpenError as exc:
            raise SourceUnreachableError(f"Korastats {api} skipped: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(f"Korastats {api} unreachable: {exc}") from exc

        if response.status_code >= 500 or response.status_code == 429:
            raise SourceUnavailableError(f"Korastats {api} failed with HTTP {response.status_code}")
        if response.status_code >= 400:
            return error(f"HTTP {response.status_code}")
        try:
            payload = response.json() if response.content else {}
        except ValueError:
            return error(f"Korastats {api} returned a non-JSON body")
        if not isinstance(payload, dict) or "result" not in payload:
            return error(f"Korastats {api} returned an unexpected payload")
        if payload.get("result") != "Success":
            logger.info("Korastats %s returned %s: %s", api, payload.get("result"), payload.get("message"))
        return {
            "result": str(payload.get("result") or ""),
            "message": str(payload.get("message") or ""),
            "data": payload.get("data"),
        }

    # ---- Tournaments ----

    async def fetch_tournament_list(self) -> Envelope:
        return await self._request("TournamentList")

    async def fetch_group_standings(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentGroupStandings", tournament_id=int(tournament_id))

    async def fetch_tournament_structure(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentStructure", tournament_id=int(tournament_id))

    # ---- Teams ----

    async def fetch_team_list(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentTeamList", tournament_id=int(tournament_id))

    async def fetch_team_stats(self, team_id: int, tournament_id: int) -> Envelope:
        return await self._request(
            "TournamentTeamStats", tournament_id=int(tournament_id), team_id=int(team_id)
        )

    async def fetch_team_info(self, team_id: int) -> Envelope:
        return await self._request("TeamInfo", team_id=int(team_id))

    async def fetch_team_player_list(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentTeamPlayerList", tournament_id=int(tournament_id))

    # ---- Players ----

    async def fetch_entity_player(self, player_id: int) -> Envelope:
        return await self._request("EntityPlayer", player_id=int(player_id))

    async def fetch_player_stats(self, player_id: int, tournament_id: int) -> Envelope:
        return await self._request(
            "TournamentPlayerStats", tournament_id=int(tournament_id), player_id=int(player_id)
        )

    # ---- Coaches / referees ----

    async def fetch_coach_list(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentCoachList", tournament_id=int(tournament_id))

    async def fetch_entity_coach(self, coach_id: int) -> Envelope:
        return await self._request("EntityCoach", coach_id=int(coach_id))

    async def fetch_referee_list(self, tournament_id: int) -> Envelope:
        return await self._request("TournamentRefereeList", tournament_id=int(tournament_id))

    async def fetch_entity_referee(self, referee_id: int) -> Envelope:
        return await self._request("EntityReferee", referee_id=int(referee_id))

    # ---- Images ----

    async def fetch_entity_image(self, kind: ImageKind, entity_id: int) -> Envelope:
        """Image URLs follow a fixed CDN layout; no request is made."""
        path = _IMAGE_PATHS.get(str(kind))
        if path is None:
            return error(f"Unsupported image kind: {kind}")
        if entity_id is None or int(entity_id) <= 0:
            return error("Missing entity id")
        return success(f"{self._image_base_url}/{path}/{int(entity_id)}.png")

    async def aclose(self) -> None:
        await self._client.aclose()
