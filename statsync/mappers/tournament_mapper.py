"""
statsync/mappers/tournament_mapper.py

Purpose:
    TournamentList entry + TournamentStructure -> TournamentRecord. The list
    entry wins for naming and dates; the structure contributes gender and
    the stage/group skeleton. A missing structure leaves ``stages`` empty.

Dependencies:
    - statsync.config_leagues
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from statsync.config_leagues import DEFAULT_COUNTRY, DEFAULT_COUNTRY_CODE, country_code, flag_url, league_info
from statsync.mappers.base import MappingError
from statsync.models.common import CountryInfo
from statsync.models.raw import RawAgeGroup, RawStructureStage, RawTournament, RawTournamentStructure
from statsync.models.tournament import AgeGroup, Organizer, TournamentGroup, TournamentRecord, TournamentStage
from statsync.utils import first_non_empty, to_int, utcnow


def _age_group(raw: RawAgeGroup | None) -> AgeGroup:
    raw = raw or {}
    age = raw.get("age") or {}
    return AgeGroup(
        id=to_int(raw.get("id")),
        name=str(raw.get("name") or ""),
        min_age=to_int(age["min"]) if age.get("min") is not None else None,
        max_age=to_int(age["max"]) if age.get("max") is not None else None,
    )


def _stage(raw: RawStructureStage) -> TournamentStage:
    return TournamentStage(
        id=to_int(raw.get("id")),
        name=str(raw.get("stage") or ""),
        order=to_int(raw.get("order")),
        rounds=to_int(raw.get("rounds")),
        type=str(raw.get("type") or ""),
        groups=[
            TournamentGroup(
                id=to_int(group.get("id")),
                name=str(group.get("group") or ""),
                team_ids=[to_int(team.get("id")) for team in group.get("teams") or [] if to_int(team.get("id")) > 0],
            )
            for group in raw.get("groups") or []
        ],
    )


def map_to_tournament(
    tournament: RawTournament,
    structure: RawTournamentStructure | None = None,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> TournamentRecord:
    tournament_id = to_int(tournament.get("id"))
    if tournament_id <= 0:
        raise MappingError("tournament payload has no id")
    structure = structure or {}
    now = clock()
    info = league_info(tournament_id) or {}

    organizer = tournament.get("organizer") or structure.get("organizer") or {}
    country = str((organizer.get("country") or {}).get("name") or DEFAULT_COUNTRY)
    code = country_code(country, fallback=DEFAULT_COUNTRY_CODE)

    stages = sorted((_stage(raw) for raw in structure.get("stages") or []), key=lambda stage: stage.order)
    team_ids: list[int] = []
    for stage in stages:
        for group in stage.groups:
            team_ids.extend(team_id for team_id in group.team_ids if team_id not in team_ids)

    return TournamentRecord(
        id=tournament_id,
        name=str(
            first_non_empty(tournament.get("tournament"), structure.get("tournament"), info.get("name"))
            or f"Tournament {tournament_id}"
        ),
        season=str(first_non_empty(tournament.get("season"), structure.get("season")) or now.year),
        start_date=first_non_empty(tournament.get("startDate"), structure.get("startDate")),
        end_date=first_non_empty(tournament.get("endDate"), structure.get("endDate")),
        logo=str(info.get("logo") or ""),
        type=str(info.get("type") or "League"),
        country=CountryInfo(name=country, code=code, flag=flag_url(code)),
        organizer=Organizer(
            id=to_int(organizer.get("id")),
            name=str(organizer.get("name") or ""),
            abbrev=str(organizer.get("abbrev") or ""),
        ),
        age_group=_age_group(tournament.get("ageGroup") or structure.get("ageGroup")),
        gender=str(structure.get("gender") or "male").lower(),
        stages=stages,
        team_ids=team_ids,
        last_synced=now,
    )
