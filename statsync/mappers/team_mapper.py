"""
statsync/mappers/team_mapper.py

Purpose:
    TournamentTeamList item + TournamentTeamStats (one per referencing
    tournament) + TeamInfo match history -> canonical TeamRecord.

    Squad metrics (size, foreign players, average age, rank, market value)
    are estimates derived from the primary tournament's stats. Home/away
    figures use the fixed 60/40 split. Form and the over-time series come
    from past matches only, relative to the injected clock.

Dependencies:
    - statsync.mappers.base
    - statsync.mappers.estimation
    - statsync.mappers.stat_map
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from statsync.config_leagues import DEFAULT_COUNTRY, DEFAULT_LEAGUE_NAME, league_info
from statsync.mappers import estimation as est
from statsync.mappers.base import BaseMapper, league_ref, require_id
from statsync.mappers.stat_map import StatMap, StatName, build_stat_map
from statsync.models.common import HomeAwayAverage, HomeAwayTotal, TeamRef
from statsync.models.raw import RawMatch, RawTeamInfo, RawTeamListItem, RawTeamStats
from statsync.models.team import (
    Biggest,
    Fixtures,
    FormOverTimePoint,
    GoalsBlock,
    GoalsOverTimePoint,
    StaffCoach,
    StatsSummary,
    Streaks,
    TeamAttacking,
    TeamDefending,
    TeamGoals,
    TeamOthers,
    TeamPassing,
    TeamRecord,
    TeamTournamentStats,
    TeamTrophy,
    Venue,
)
from statsync.utils import first_non_empty, parse_utc_or_none, round_half_up, round_int, to_int

logger = logging.getLogger("statsync.mappers.team")

_SUFFIX_RE = re.compile(
    r"\s+(FC|SC|U19|U21|U23|Club|United|City|Town|Athletic|Sporting|Football|Soccer|KSA)\s*$",
    re.IGNORECASE,
)
_NATIONAL_PATTERNS = (
    "national",
    "country",
    "saudi arabia",
    "saudi",
    "kingdom",
    "المملكة",
    "السعودية",
    "المنتخب",
    "الوطني",
)
_FORM_WINDOW = 20
_DEFAULT_FORM = "WWWWW"


def clean_team_name(name: str | None) -> str:
    return _SUFFIX_RE.sub("", str(name or "")).strip()


def team_code(name: str | None) -> str:
    clean = clean_team_name(name)
    words = clean.split()
    if len(words) >= 2:
        return (words[0][:2] + words[1][:1]).upper()
    return clean[:3].upper()


def is_national_team(name: str | None) -> bool:
    lowered = str(name or "").lower()
    return any(pattern in lowered for pattern in _NATIONAL_PATTERNS)


def _rate(total: float, matches: float) -> float:
    return round_half_up(est.per_game_rate(total, matches), 2)


def _split(total: float) -> HomeAwayTotal:
    home, away = est.split_home_away(total)
    return HomeAwayTotal(home=home, away=away, total=int(total))


@dataclass
class TeamNumbers:
    """Headline counts for one tournament stat payload."""

    matches: float
    wins: float
    draws: float
    losses: float
    scored: float
    conceded: float
    clean_sheets: float
    yellow: float
    red: float

    @classmethod
    def from_stats(cls, stats: StatMap) -> "TeamNumbers":
        return cls(
            matches=stats.first(StatName.MATCHES_PLAYED_AS_LINEUP, StatName.MATCHES_PLAYED),
            wins=stats.first(StatName.WIN, StatName.WINS),
            draws=stats.get(StatName.DRAW),
            losses=stats.get(StatName.LOST),
            scored=stats.get(StatName.GOALS_SCORED),
            conceded=stats.get(StatName.GOALS_CONCEDED),
            clean_sheets=stats.get(StatName.CLEAN_SHEET),
            yellow=stats.first(StatName.YELLOW_CARD, StatName.YELLOW_CARDS),
            red=stats.first(StatName.RED_CARD, StatName.RED_CARDS),
        )

    @property
    def win_rate(self) -> float:
        return self.wins / max(self.matches, 1.0)

    @property
    def goals_per_game(self) -> float:
        return est.per_game_rate(self.scored, self.matches)

    @property
    def conceded_per_game(self) -> float:
        return est.per_game_rate(self.conceded, self.matches)


@dataclass
class _PastMatch:
    kickoff: datetime
    date: str
    is_home: bool
    scored: int | None
    conceded: int | None
    opponent_id: int
    opponent_name: str

    @property
    def result(self) -> str:
        if self.scored is None or self.conceded is None:
            return "D"
        if self.scored > self.conceded:
            return "W"
        if self.scored < self.conceded:
            return "L"
        return "D"

    @property
    def timestamp(self) -> int:
        return int(self.kickoff.timestamp() * 1000)


def _score(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return to_int(value)


def past_matches(team_id: int, matches: Sequence[RawMatch], now: datetime) -> list[_PastMatch]:
    """Matches kicked off before ``now``, oldest first."""
    out: list[_PastMatch] = []
    for match in matches or []:
        kickoff = parse_utc_or_none(match.get("dtDateTime"))
        if kickoff is None or kickoff >= now:
            continue
        home = match.get("objHomeTeam") or {}
        away = match.get("objAwayTeam") or {}
        is_home = to_int(home.get("intID")) == team_id
        opponent = away if is_home else home
        home_score = _score(match.get("intHomeTeamScore"))
        away_score = _score(match.get("intAwayTeamScore"))
        out.append(
            _PastMatch(
                kickoff=kickoff,
                date=str(match.get("dtDateTime")),
                is_home=is_home,
                scored=home_score if is_home else away_score,
                conceded=away_score if is_home else home_score,
                opponent_id=to_int(opponent.get("intID")),
                opponent_name=str(opponent.get("strTeamNameEn") or "Unknown Team"),
            )
        )
    out.sort(key=lambda item: item.kickoff)
    return out


def form_string(history: Sequence[_PastMatch]) -> str:
    recent = list(reversed(history))[:_FORM_WINDOW]
    if not recent:
        return _DEFAULT_FORM
    return "".join(match.result for match in recent)


class TeamMapper(BaseMapper):
    async def map_to_team(
        self,
        raw_team: RawTeamListItem,
        raw_stats: Sequence[tuple[int, RawTeamStats]],
        tournament_id: int,
        *,
        team_info: RawTeamInfo | None = None,
    ) -> TeamRecord:
        team_id = require_id(raw_team, "team")
        now = self.clock()

        entries = [(int(tid), stats or {}) for tid, stats in raw_stats]
        if not entries:
            logger.debug("Team %s has no tournament stats; using estimate defaults", team_id)
        primary_stats = next((stats for tid, stats in entries if tid == int(tournament_id)), None)
        if primary_stats is None and entries:
            primary_stats = entries[0][1]
        primary_stats = primary_stats or {}

        raw_name = first_non_empty(primary_stats.get("name"), raw_team.get("team"), raw_team.get("name")) or ""
        name = clean_team_name(raw_name) or f"Team {team_id}"

        history = past_matches(team_id, (team_info or {}).get("matches") or [], now)
        form = form_string(history)

        opponent_ids = [match.opponent_id for match in history]
        logos = await self.images.club_logos([team_id, *opponent_ids])
        logo = logos.get(team_id, "")
        team_ref = TeamRef(id=team_id, name=name, logo=logo)

        tournament_stats = [
            self._tournament_entry(tid, build_stat_map(stats.get("stats")), team_ref, form)
            for tid, stats in entries
        ]
        headline = TeamNumbers.from_stats(build_stat_map(primary_stats.get("stats")))

        country = raw_team.get("country") or {}
        return TeamRecord(
            id=team_id,
            name=name,
            code=team_code(raw_name),
            logo=logo,
            founded=to_int(raw_team.get("founded")) or None,
            national=bool(raw_team.get("is_national_team")) or is_national_team(raw_name),
            country=str(country.get("name") or DEFAULT_COUNTRY),
            club_market_value=est.estimated_market_value(headline.goals_per_game, headline.win_rate),
            total_players=est.estimated_total_players(headline.matches),
            foreign_players=est.estimated_foreign_players(headline.win_rate),
            average_player_age=est.estimated_average_age(
                headline.matches, headline.win_rate, headline.yellow, headline.red
            ),
            rank=est.estimated_rank(headline.win_rate),
            venue=self._venue(raw_team, team_id, (team_info or {}).get("matches") or []),
            coaches=self._coaches(team_id, (team_info or {}).get("matches") or []),
            trophies=self._trophies(headline, int(tournament_id), now),
            tournament_ids=[tid for tid, _ in entries] or [int(tournament_id)],
            tournament_stats=tournament_stats,
            stats_summary=self._summary(tournament_stats),
            goals_over_time=[
                GoalsOverTimePoint(
                    date=match.date,
                    timestamp=match.timestamp,
                    goals_scored=match.scored or 0,
                    goals_conceded=match.conceded or 0,
                    goal_difference=(match.scored or 0) - (match.conceded or 0),
                    opponent=TeamRef(
                        id=match.opponent_id,
                        name=match.opponent_name,
                        logo=logos.get(match.opponent_id, ""),
                    ),
                    is_home=match.is_home,
                )
                for match in history
            ],
            form_over_time=[
                FormOverTimePoint(
                    date=match.date,
                    timestamp=match.timestamp,
                    goals_scored=match.scored or 0,
                    goals_conceded=match.conceded or 0,
                    result=match.result,
                    opponent=TeamRef(
                        id=match.opponent_id,
                        name=match.opponent_name,
                        logo=logos.get(match.opponent_id, ""),
                    ),
                    is_home=match.is_home,
                )
                for match in history
            ],
            last_synced=now,
        )

    # ---- per-tournament blocks ----

    def _tournament_entry(
        self, tournament_id: int, stats: StatMap, team: TeamRef, form: str
    ) -> TeamTournamentStats:
        numbers = TeamNumbers.from_stats(stats)
        m = numbers.matches
        goals_scored_split = _split(numbers.scored)
        goals_conceded_split = _split(numbers.conceded)

        return TeamTournamentStats(
            tournament_id=tournament_id,
            league=league_ref(tournament_id) if league_info(tournament_id) else None,
            rank=est.estimated_rank(numbers.win_rate),
            average_team_rating=est.team_rating(
                numbers.win_rate, numbers.goals_per_game, numbers.conceded_per_game
            ),
            team=team,
            form=form,
            korastats_stats=stats.known_as_dict(),
            unknown_stats=dict(stats.unknown),
            attacking=self._attacking(stats, numbers),
            defending=self._defending(stats, numbers),
            passing=self._passing(stats, numbers),
            others=self._others(stats, numbers),
            clean_sheet=_split(numbers.clean_sheets),
            goals=TeamGoals(
                scored=GoalsBlock(
                    total=goals_scored_split,
                    average=HomeAwayAverage(
                        home=_rate(numbers.scored, m),
                        away=_rate(numbers.scored, m),
                        total=_rate(numbers.scored, m),
                    ),
                ),
                conceded=GoalsBlock(
                    total=goals_conceded_split,
                    average=HomeAwayAverage(
                        home=_rate(numbers.conceded, m),
                        away=_rate(numbers.conceded, m),
                        total=_rate(numbers.conceded, m),
                    ),
                ),
            ),
            biggest=Biggest(
                streak=Streaks(
                    wins=int(min(numbers.wins, 5)),
                    draws=int(min(numbers.draws, 3)),
                    loses=int(min(numbers.losses, 5)),
                )
            ),
            fixtures=Fixtures(
                played=_split(m),
                wins=_split(numbers.wins),
                draws=_split(numbers.draws),
                loses=_split(numbers.losses),
            ),
        )

    @staticmethod
    def _attacking(stats: StatMap, numbers: TeamNumbers) -> TeamAttacking:
        m = numbers.matches
        left = stats.get(StatName.GOALS_LEFT_FOOT)
        right = stats.get(StatName.GOALS_RIGHT_FOOT)
        head = stats.get(StatName.GOALS_HEAD)
        return TeamAttacking(
            penalty_goals=int(stats.get(StatName.PENALTY_SCORED)),
            goals_per_game=_rate(numbers.scored, m),
            goals_from_inside_the_box=int(left + right) or round_int(numbers.scored * 0.7),
            goals_from_outside_the_box=int(head) or round_int(numbers.scored * 0.3),
            left_foot_goals=int(left),
            right_foot_goals=int(right),
            headed_goals=int(head),
            big_chances_per_game=_rate(stats.get(StatName.CHANCE_CREATED), m),
            big_chances_missed_per_game=_rate(stats.get(StatName.ONE_ON_ONE_MISSED), m),
            total_shots_per_game=_rate(stats.get(StatName.TOTAL_ATTEMPTS), m),
            shots_on_target_per_game=_rate(stats.get(StatName.SUCCESS_ATTEMPTS), m),
            shots_off_target_per_game=_rate(stats.get(StatName.ATTEMPTS_OFF_TARGET), m),
            blocked_shots_per_game=_rate(stats.get(StatName.ATTEMPTS_BLOCKED), m),
            successful_dribbles_per_game=_rate(stats.get(StatName.DRIBBLE_SUCCESS), m),
            corners_per_game=_rate(stats.get(StatName.CORNERS), m),
            free_kicks_per_game=_rate(stats.get(StatName.FOULS_AWARDED), m),
            hit_woodwork=int(stats.get(StatName.ATTEMPTS_ON_BARS)),
        )

    @staticmethod
    def _defending(stats: StatMap, numbers: TeamNumbers) -> TeamDefending:
        m = numbers.matches
        tackles = stats.get(StatName.TACKLE_WON) + stats.get(StatName.TACKLE_FAIL)
        interceptions = stats.get(StatName.INTERCEPT_WON) + stats.get(StatName.INTERCEPT_CLEAR)
        return TeamDefending(
            clean_sheets=int(numbers.clean_sheets),
            goals_conceded_per_game=_rate(numbers.conceded, m),
            tackles_per_game=_rate(tackles, m),
            interceptions_per_game=_rate(interceptions, m),
            clearances_per_game=_rate(stats.get(StatName.CLEAR), m),
            saves_per_game=_rate(stats.get(StatName.GOALS_SAVED), m),
            balls_recovered_per_game=_rate(stats.get(StatName.BALL_RECOVER), m),
            penalties_committed=int(stats.get(StatName.PENALTY_COMMITTED)),
            penalty_goals_conceded=int(stats.get(StatName.PENALTY_SCORED)),
            clearance_off_line=int(stats.get(StatName.CLEAR)),
            last_man_tackle=int(stats.get(StatName.TACKLE_WON)),
        )

    @staticmethod
    def _passing(stats: StatMap, numbers: TeamNumbers) -> TeamPassing:
        successful = stats.get(StatName.SUCCESS_PASSES)
        accuracy = est.pass_accuracy(successful, stats.get(StatName.TOTAL_PASSES))
        possession = stats.get(StatName.POSSESSION) if StatName.POSSESSION in stats else None
        return TeamPassing(
            ball_possession=est.normalize_possession(possession),
            accurate_per_game=_rate(successful, numbers.matches),
            acc_own_half=round_int(accuracy * 0.9),
            acc_opposition_half=round_int(accuracy * 0.7),
            acc_long_balls=est.ratio_percent(
                stats.get(StatName.SUCCESS_LONG_PASS), stats.get(StatName.TOTAL_LONG_PASS)
            ),
            acc_crosses=est.ratio_percent(
                stats.get(StatName.SUCCESS_CROSSES), stats.get(StatName.TOTAL_CROSSES)
            ),
        )

    @staticmethod
    def _others(stats: StatMap, numbers: TeamNumbers) -> TeamOthers:
        m = numbers.matches
        aerial_won = stats.get(StatName.AERIAL_WON)
        aerial_total = aerial_won + stats.get(StatName.AERIAL_LOST)
        aerial_rate = round_int(aerial_won / aerial_total * 100) if aerial_total > 0 else 0
        duels_won = stats.get(StatName.TACKLE_WON) + stats.get(StatName.INTERCEPT_WON) + aerial_won
        return TeamOthers(
            duels_won_per_game=_rate(duels_won, m),
            ground_duels_won=aerial_rate,
            aerial_duels_won=aerial_rate,
            possession_lost_per_game=_rate(stats.get(StatName.TOTAL_BALL_LOST), m),
            throw_ins_per_game=_rate(stats.get(StatName.THROW_IN_TOTAL), m),
            offsides_per_game=_rate(stats.get(StatName.OFFSIDES), m),
            fouls_per_game=_rate(stats.get(StatName.FOULS_COMMITTED), m),
            yellow_cards_per_game=_rate(numbers.yellow, m),
            red_cards=int(numbers.red),
        )

    # ---- record-level blocks ----

    @staticmethod
    def _summary(entries: Sequence[TeamTournamentStats]) -> StatsSummary:
        summary = StatsSummary()
        for entry in entries:
            for target, source in (
                (summary.games_played, entry.fixtures.played),
                (summary.wins, entry.fixtures.wins),
                (summary.draws, entry.fixtures.draws),
                (summary.loses, entry.fixtures.loses),
                (summary.goals_scored, entry.goals.scored.total),
                (summary.goals_conceded, entry.goals.conceded.total),
            ):
                target.home += source.home
                target.away += source.away
            summary.clean_sheet_games += entry.clean_sheet.total
        summary.goal_difference = (
            summary.goals_scored.home
            + summary.goals_scored.away
            - summary.goals_conceded.home
            - summary.goals_conceded.away
        )
        return summary

    @staticmethod
    def _venue(raw_team: RawTeamListItem, team_id: int, matches: Sequence[RawMatch]) -> Venue:
        stadium = raw_team.get("stadium") or {}
        if to_int(stadium.get("id")) > 0:
            name = str(stadium.get("name") or "Unknown Stadium")
            city = str(stadium.get("city") or "Riyadh")
            return Venue(
                id=to_int(stadium.get("id")),
                name=name,
                address=f"{name}, {city}, {DEFAULT_COUNTRY}",
                capacity=to_int(stadium.get("capacity")) or 20000,
                surface=str(stadium.get("surface") or "Grass"),
                city=city,
            )

        for match in matches:
            home = match.get("objHomeTeam") or {}
            venue = match.get("objStadium") or {}
            if to_int(home.get("intID")) != team_id or to_int(venue.get("intID")) <= 0:
                continue
            name = str(venue.get("strStadiumNameEn") or venue.get("strStadiumNameAr") or "Unknown Stadium")
            established = to_int(venue.get("intEstablishYear"))
            return Venue(
                id=to_int(venue.get("intID")),
                name=name,
                address=f"{name}, Riyadh, {DEFAULT_COUNTRY}",
                capacity=to_int(venue.get("intCapacity")) or 20000,
                surface="Artificial Turf" if established > 2000 else "Grass",
            )
        return Venue()

    @staticmethod
    def _coaches(team_id: int, matches: Sequence[RawMatch]) -> list[StaffCoach]:
        found: dict[int, StaffCoach] = {}
        for match in matches:
            for side_key, coach_key in (("objHomeTeam", "objHomeCoach"), ("objAwayTeam", "objAwayCoach")):
                side = match.get(side_key) or {}
                coach = match.get(coach_key) or {}
                coach_id = to_int(coach.get("intID"))
                if to_int(side.get("intID")) != team_id or coach_id <= 0 or coach_id in found:
                    continue
                found[coach_id] = StaffCoach(
                    id=coach_id,
                    name=str(coach.get("strCoachNameEn") or coach.get("strCoachNameAr") or f"Coach {coach_id}"),
                    current=not bool(coach.get("boolRetired")),
                )
        return list(found.values()) or [StaffCoach()]

    @staticmethod
    def _trophies(headline: TeamNumbers, tournament_id: int, now: datetime) -> list[TeamTrophy]:
        if not (headline.win_rate > 0.7 and headline.matches > 10):
            return []
        info = league_info(tournament_id) or {}
        return [
            TeamTrophy(
                league=str(info.get("name") or DEFAULT_LEAGUE_NAME),
                country=DEFAULT_COUNTRY,
                season=str(info.get("season") or now.year),
            )
        ]
