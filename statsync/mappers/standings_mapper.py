"""
statsync/mappers/standings_mapper.py

Purpose:
    TournamentGroupStandings -> StandingsRecord. Only the first stage's first
    group is used; provider row order and rank are kept and goal difference
    is always recomputed from scored/conceded totals.

Dependencies:
    - statsync.mappers.estimation
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping

from statsync.config_leagues import DEFAULT_COUNTRY_CODE, country_code, flag_url, league_info
from statsync.mappers import estimation as est
from statsync.mappers.base import MappingError
from statsync.models.common import TeamRef
from statsync.models.raw import RawSplit, RawStanding, RawStandingsData, RawTournament
from statsync.models.standings import StandingRow, StandingSplit, StandingsRecord
from statsync.utils import extract_year, to_int, utcnow


def _split(row: RawStanding, side: str) -> StandingSplit:
    def pick(key: str) -> int:
        block: RawSplit = row.get(key) or {}
        return to_int(block.get(side))

    return StandingSplit(
        played=pick("played"),
        win=pick("won"),
        draw=pick("draw"),
        lose=pick("lost"),
        goals_for=pick("scored"),
        goals_against=pick("conceded"),
    )


def map_to_standings(
    tournament: RawTournament,
    raw_standings: RawStandingsData | None,
    *,
    team_logos: Mapping[int, str] | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> StandingsRecord:
    tournament_id = to_int(tournament.get("id"))
    if tournament_id <= 0:
        raise MappingError("tournament payload has no id")
    logos = team_logos or {}

    stages = (raw_standings or {}).get("stages") or []
    groups = (stages[0].get("groups") or []) if stages else []
    group = groups[0] if groups else {}
    group_name = str(group.get("group") or "Main")

    rows: list[StandingRow] = []
    for raw in group.get("standings") or []:
        rank = to_int(raw.get("rank"))
        team_id = to_int(raw.get("teamID"))
        total = _split(raw, "total")
        rows.append(
            StandingRow(
                rank=rank,
                team=TeamRef(
                    id=team_id,
                    name=str(raw.get("team") or "Unknown Team"),
                    logo=logos.get(team_id, ""),
                ),
                points=to_int(raw.get("points")),
                goals_diff=total.goals_for - total.goals_against,
                group=group_name,
                form=est.standing_form(rank),
                status=est.standing_status(rank),
                description=est.standing_description(rank),
                all=total,
                home=_split(raw, "home"),
                away=_split(raw, "away"),
            )
        )

    now = clock()
    info = league_info(tournament_id) or {}
    country = str(((tournament.get("organizer") or {}).get("country") or {}).get("name") or "Unknown")
    return StandingsRecord(
        id=tournament_id,
        tournament_id=tournament_id,
        name=str(tournament.get("tournament") or info.get("name") or ""),
        country=country,
        logo=str(info.get("logo") or ""),
        flag=flag_url(country_code(country, fallback=DEFAULT_COUNTRY_CODE)),
        season=extract_year(tournament.get("season"), now.year),
        standings=rows,
        last_synced=now,
    )
