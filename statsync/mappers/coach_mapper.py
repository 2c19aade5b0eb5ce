"""
statsync/mappers/coach_mapper.py

Purpose:
    EntityCoach + TournamentCoachList entries for that coach -> CoachRecord.
    Results come from the flattened ``Admin`` block; the preferred formation
    is inferred from averaged possession/defensive/offensive volumes.

Dependencies:
    - statsync.mappers.base
    - statsync.mappers.estimation
    - statsync.mappers.stat_map
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from statsync.config_leagues import country_code, flag_url, league_info
from statsync.mappers import estimation as est
from statsync.mappers.base import BaseMapper, league_ref, require_id, split_name
from statsync.mappers.stat_map import StatMap, StatName, build_stat_map
from statsync.models.coach import (
    CoachCareerEntry,
    CoachPerformance,
    CoachRecord,
    CoachTournamentStats,
    CoachTrophy,
    PersonBirth,
)
from statsync.models.common import CountryInfo
from statsync.models.raw import RawEntityPerson, RawRef, RawTournamentCoach
from statsync.utils import age_from_dob, first_non_empty, to_int


def country_info(raw: RawRef | None) -> CountryInfo:
    name = str((raw or {}).get("name") or "").strip()
    if not name:
        return CountryInfo()
    code = country_code(name)
    return CountryInfo(name=name, code=code, flag=flag_url(code))


def formation_inputs(stats: StatMap) -> est.FormationInputs:
    return est.FormationInputs(
        possession=stats.get(StatName.POSSESSION_TIME_PERCENT_AVERAGE),
        defensive=stats.get(StatName.BALL_WON_TOTAL) + stats.get(StatName.DEFENSIVE_TACKLE_CLEAR),
        offensive=stats.get(StatName.GOALS_SCORED_TOTAL) + stats.get(StatName.CHANCES_CHANCES_CREATED),
    )


class CoachMapper(BaseMapper):
    async def map_to_coach(
        self,
        raw_coach: RawEntityPerson,
        raw_stats: Sequence[tuple[int, RawTournamentCoach]],
        tournament_id: int,
    ) -> CoachRecord:
        coach_id = require_id(raw_coach, "coach")
        now = self.clock()
        photo = await self.images.resolve("coach", coach_id)

        entries = [(int(tid), raw or {}) for tid, raw in raw_stats]
        maps = [(tid, build_stat_map(raw.get("stats"))) for tid, raw in entries if raw.get("stats")]
        stats = [self._tournament_stats(tid, stat_map) for tid, stat_map in maps]

        name = first_non_empty(
            raw_coach.get("fullname"), *(raw.get("name") for _, raw in entries)
        ) or f"Coach {coach_id}"
        firstname, lastname = split_name(str(name))
        nationality = country_info(raw_coach.get("nationality"))

        return CoachRecord(
            id=coach_id,
            name=str(name),
            firstname=firstname,
            lastname=lastname,
            age=to_int(raw_coach.get("age")) or age_from_dob(raw_coach.get("dob"), now.date()),
            birth=PersonBirth(
                date=raw_coach.get("dob") or None,
                country=nationality.name,
            ),
            nationality=nationality,
            photo=photo,
            preferred_formation=est.infer_preferred_formation(formation_inputs(m) for _, m in maps),
            career_history=[CoachCareerEntry(start_date=now.date().isoformat())],
            stats=stats,
            coach_performance=self._performance(stats),
            trophies=self._trophies(stats, now),
            status="retired" if raw_coach.get("retired") else "active",
            last_synced=now,
        )

    @staticmethod
    def _tournament_stats(tournament_id: int, stats: StatMap) -> CoachTournamentStats:
        matches = int(stats.get(StatName.ADMIN_MATCHES_PLAYED))
        wins = int(stats.get(StatName.ADMIN_WIN))
        draws = int(stats.get(StatName.ADMIN_DRAW))
        total_points = est.points(wins, draws)
        return CoachTournamentStats(
            tournament_id=tournament_id,
            league=league_ref(tournament_id),
            matches=matches,
            wins=wins,
            draws=draws,
            loses=int(stats.get(StatName.ADMIN_LOST)),
            points=total_points,
            points_per_game=est.points_per_game(total_points, matches),
        )

    @staticmethod
    def _performance(stats: Sequence[CoachTournamentStats]) -> CoachPerformance:
        matches = sum(entry.matches for entry in stats)
        return CoachPerformance(
            win_percentage=est.percentage(sum(entry.wins for entry in stats), matches),
            draw_percentage=est.percentage(sum(entry.draws for entry in stats), matches),
            lose_percentage=est.percentage(sum(entry.loses for entry in stats), matches),
        )

    @staticmethod
    def _trophies(stats: Sequence[CoachTournamentStats], now: datetime) -> list[CoachTrophy]:
        trophies = []
        for entry in stats:
            # compared unrounded; 70.001% qualifies
            win_pct = entry.wins / entry.matches * 100 if entry.matches > 0 else 0.0
            if not est.is_successful_season(win_pct, entry.matches):
                continue
            info = league_info(entry.tournament_id) or {}
            trophies.append(
                CoachTrophy(
                    id=entry.tournament_id,
                    name="Successful Season",
                    season=str(now.year),
                    league=str(info.get("name") or "Unknown League"),
                )
            )
        return trophies or [CoachTrophy(name="No Trophies", season=str(now.year))]
