"""
statsync/mappers/referee_mapper.py

Purpose:
    EntityReferee + TournamentRefereeList entries -> RefereeRecord. The
    career list always carries at least one (possibly all-zero) entry.

Dependencies:
    - statsync.mappers.base
    - statsync.mappers.stat_map
"""

from __future__ import annotations

from typing import Sequence

from statsync.config_leagues import DEFAULT_COUNTRY_CODE, country_code, flag_url, league_info
from statsync.mappers.base import BaseMapper, require_id
from statsync.mappers.stat_map import StatName, build_stat_map
from statsync.models.common import CountryInfo
from statsync.models.raw import RawEntityPerson, RawRef, RawTournamentReferee
from statsync.models.referee import RefereeCareerStat, RefereeRecord
from statsync.utils import age_from_dob, first_non_empty, to_int


def referee_country(raw: RawRef | None) -> CountryInfo:
    name = str((raw or {}).get("name") or "").strip()
    code = country_code(name, fallback=DEFAULT_COUNTRY_CODE)
    return CountryInfo(name=name or "Unknown", code=code, flag=flag_url(code))


def _league_name(tournament_id: int) -> str:
    info = league_info(tournament_id) or {}
    return str(info.get("name") or "Unknown League")


class RefereeMapper(BaseMapper):
    async def map_to_referee(
        self,
        raw_referee: RawEntityPerson,
        raw_stats: Sequence[tuple[int, RawTournamentReferee]],
        tournament_id: int,
    ) -> RefereeRecord:
        referee_id = require_id(raw_referee, "referee")
        now = self.clock()
        photo = await self.images.resolve("referee", referee_id)

        career: list[RefereeCareerStat] = []
        for tid, raw in raw_stats:
            stats = build_stat_map((raw or {}).get("stats"))
            career.append(
                RefereeCareerStat(
                    tournament_id=int(tid),
                    league=_league_name(int(tid)),
                    appearances=int(stats.get(StatName.REFEREE_MATCHES_PLAYED)),
                    yellow_cards=int(stats.get(StatName.YELLOW_CARD)),
                    red_cards=int(
                        stats.get(StatName.REFEREE_SECOND_YELLOW) + stats.get(StatName.REFEREE_DIRECT_RED)
                    ),
                    penalties=int(stats.get(StatName.REFEREE_PENALTIES)),
                )
            )
        if not career:
            career.append(
                RefereeCareerStat(tournament_id=int(tournament_id), league=_league_name(int(tournament_id)))
            )

        name = first_non_empty(
            raw_referee.get("fullname"), *((raw or {}).get("name") for _, raw in raw_stats)
        ) or f"Referee {referee_id}"
        return RefereeRecord(
            id=referee_id,
            name=str(name),
            country=referee_country(raw_referee.get("nationality")),
            birth_date=raw_referee.get("dob") or None,
            age=to_int(raw_referee.get("age")) or age_from_dob(raw_referee.get("dob"), now.date()),
            photo=photo,
            matches=sum(entry.appearances for entry in career),
            career_stats=career,
            status="retired" if raw_referee.get("retired") else "active",
            last_synced=now,
        )
