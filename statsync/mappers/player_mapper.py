"""
statsync/mappers/player_mapper.py

Purpose:
    EntityPlayer + TournamentPlayerStats (one per referencing tournament)
    -> canonical PlayerRecord, including per-tournament stat blocks, the
    derived 0-100 traits, the game rating and a deterministic heat map
    placeholder.

Dependencies:
    - statsync.mappers.base
    - statsync.mappers.estimation
    - statsync.mappers.stat_map
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Sequence

from statsync.config_leagues import league_info
from statsync.mappers import estimation as est
from statsync.mappers.base import BaseMapper, league_ref, require_id, split_name
from statsync.mappers.stat_map import StatMap, StatName, build_stat_map
from statsync.models.common import TeamRef
from statsync.models.player import (
    Achievement,
    Birth,
    CareerEntry,
    CareerSummary,
    Cards,
    CurrentTeam,
    Dribbles,
    Duels,
    Fouls,
    Games,
    Goals,
    HeatMap,
    Passes,
    Penalty,
    PlayerPosition,
    PlayerPositions,
    PlayerRecord,
    PlayerTournamentStats,
    PlayerTraits,
    Shots,
    Tackles,
)
from statsync.models.raw import RawEntityPlayer, RawPlayerTournamentStats, RawRef
from statsync.utils import age_from_dob, first_non_empty, round_half_up, to_int

_DEFAULT_LEAGUE_ID = 840


def heat_map_points(player_id: int) -> list[list[float]]:
    """Fixed 10x10 grid sample seeded by the player id (about 30% coverage)."""
    rng = random.Random(int(player_id))
    points: list[list[float]] = []
    for i in range(10):
        for j in range(10):
            if rng.random() > 0.7:
                points.append([i / 10, j / 10])
    return points


def _foot_goals(stats: StatMap) -> tuple[float, float]:
    left = stats.get(StatName.GOALS_LEFT_FOOT) or stats.unknown.get("GoalsScored.LeftFoot", 0.0)
    right = stats.get(StatName.GOALS_RIGHT_FOOT) or stats.unknown.get("GoalsScored.RightFoot", 0.0)
    return left, right


def _position(raw: RawRef | None) -> PlayerPosition:
    raw = raw or {}
    name = str(raw.get("name") or "")
    return PlayerPosition(
        id=to_int(raw.get("id")),
        name=name or "Unknown",
        category=est.position_category(name),
    )


class PlayerMapper(BaseMapper):
    async def map_to_player(
        self,
        raw_player: RawEntityPlayer,
        raw_stats: Sequence[tuple[int, RawPlayerTournamentStats]],
        tournament_id: int,
    ) -> PlayerRecord:
        player_id = require_id(raw_player, "player")
        now = self.clock()
        entries = [(int(tid), stats or {}) for tid, stats in raw_stats]
        maps = [build_stat_map(stats.get("stats")) for _, stats in entries]

        current = raw_player.get("current_team") or {}
        team_ids = [to_int((stats.get("team") or {}).get("id")) or to_int(current.get("id")) for _, stats in entries]
        photo, *team_logos = await self.images.resolve_many(
            [("player", player_id), *(("club", team_id) for team_id in team_ids)]
        )

        positions = raw_player.get("positions") or {}
        primary = _position(positions.get("primary"))
        secondary = _position(positions.get("secondary"))
        position_name = first_non_empty(
            (positions.get("primary") or {}).get("name"),
            (positions.get("secondary") or {}).get("name"),
        ) or "Unknown"

        stats_blocks = [
            self._tournament_stats(tid, raw, stat_map, team_ref=self._team_ref(raw, current, logo), position=position_name)
            for (tid, raw), stat_map, logo in zip(entries, maps, team_logos)
        ]

        name = first_non_empty(
            raw_player.get("fullname"),
            raw_player.get("nickname"),
            *(stats.get("name") for _, stats in entries),
        ) or f"Player {player_id}"
        firstname, lastname = split_name(raw_player.get("fullname"))
        nationality = (raw_player.get("nationality") or {}).get("name") or "Unknown"
        retired = bool(raw_player.get("retired"))
        left, right = 0.0, 0.0
        for stat_map in maps:
            l_goals, r_goals = _foot_goals(stat_map)
            left += l_goals
            right += r_goals
        top_scorers, top_assists = self._achievements(stats_blocks, now)

        return PlayerRecord(
            id=player_id,
            name=str(name),
            firstname=firstname,
            lastname=lastname,
            birth=Birth(date=raw_player.get("dob") or None, country=nationality),
            age=to_int(raw_player.get("age")) or age_from_dob(raw_player.get("dob"), now.date()),
            nationality=nationality,
            shirt_number=to_int(entries[0][1].get("shirtnumber")) if entries else 0,
            preferred_foot=est.preferred_foot(left, right),
            photo=photo,
            positions=PlayerPositions(primary=primary, secondary=secondary),
            current_team=(
                CurrentTeam(
                    id=to_int(current.get("id")),
                    name=str(current.get("name") or "Unknown Team"),
                    position=position_name,
                )
                if to_int(current.get("id")) > 0
                else None
            ),
            career_summary=self._career(stats_blocks, now),
            stats=stats_blocks,
            player_traits=PlayerTraits(**self._traits(maps)),
            player_heat_map=HeatMap(points=heat_map_points(player_id)),
            top_scorers=top_scorers,
            top_assists=top_assists,
            status="retired" if retired else "active",
            last_synced=now,
        )

    @staticmethod
    def _team_ref(raw: RawPlayerTournamentStats, current: RawRef, logo: str) -> TeamRef:
        team = raw.get("team") or {}
        return TeamRef(
            id=to_int(team.get("id")) or to_int(current.get("id")),
            name=str(team.get("name") or current.get("name") or "Unknown Team"),
            logo=logo,
        )

    @staticmethod
    def _tournament_stats(
        tournament_id: int,
        raw: RawPlayerTournamentStats,
        stats: StatMap,
        *,
        team_ref: TeamRef,
        position: str,
    ) -> PlayerTournamentStats:
        def value(name: StatName) -> int:
            return int(stats.get(name))

        matches = stats.get(StatName.MATCHES_PLAYED_AS_LINEUP)
        accuracy = est.pass_accuracy(stats.get(StatName.SUCCESS_PASSES), stats.get(StatName.TOTAL_PASSES))
        return PlayerTournamentStats(
            tournament_id=tournament_id,
            team=team_ref,
            league=league_ref(tournament_id),
            games=Games(
                appearances=int(matches),
                lineups=int(matches),
                minutes=value(StatName.MINUTES_PLAYED),
                number=to_int(raw.get("shirtnumber")),
                position=position,
                rating=est.player_rating(
                    goals=stats.get(StatName.GOALS_SCORED),
                    assists=stats.get(StatName.ASSISTS),
                    accuracy=accuracy,
                    tackles=stats.get(StatName.TACKLE_WON),
                    interceptions=stats.get(StatName.INTERCEPT_WON),
                    matches=matches,
                ),
            ),
            shots=Shots(total=value(StatName.TOTAL_ATTEMPTS), on=value(StatName.SUCCESS_ATTEMPTS)),
            goals=Goals(
                total=value(StatName.GOALS_SCORED),
                assists=value(StatName.ASSISTS),
                conceded=value(StatName.GOALS_CONCEDED),
                saves=value(StatName.ATTEMPTS_SAVED),
            ),
            passes=Passes(
                total=value(StatName.TOTAL_PASSES),
                key=value(StatName.KEY_PASSES),
                accuracy=round_half_up(accuracy, 2),
            ),
            tackles=Tackles(
                total=value(StatName.TACKLE_WON),
                blocks=value(StatName.BLOCKS),
                interceptions=value(StatName.INTERCEPT_WON),
            ),
            duels=Duels(total=value(StatName.TOTAL_BALL_WON), won=value(StatName.TOTAL_BALL_WON)),
            dribbles=Dribbles(
                attempts=value(StatName.DRIBBLE_SUCCESS),
                success=value(StatName.DRIBBLE_SUCCESS),
            ),
            fouls=Fouls(drawn=value(StatName.FOULS_AWARDED), committed=value(StatName.FOULS_COMMITTED)),
            cards=Cards(
                yellow=value(StatName.YELLOW_CARD),
                yellowred=value(StatName.SECOND_YELLOW_CARD),
                red=value(StatName.RED_CARD),
            ),
            penalty=Penalty(
                won=value(StatName.PENALTY_AWARDED),
                committed=value(StatName.PENALTY_COMMITTED),
                scored=value(StatName.PENALTY_SCORED),
                missed=value(StatName.PENALTY_MISSED),
                saved=value(StatName.GOALS_SAVED),
            ),
        )

    @staticmethod
    def _traits(maps: Sequence[StatMap]) -> dict[str, int]:
        if not maps:
            return PlayerTraits().model_dump()
        totals = est.TraitTotals()
        for stats in maps:
            totals.goals += stats.get(StatName.GOALS_SCORED)
            totals.assists += stats.get(StatName.ASSISTS)
            totals.shots += stats.get(StatName.TOTAL_ATTEMPTS)
            totals.shots_on_target += stats.get(StatName.SUCCESS_ATTEMPTS)
            totals.max_pass_accuracy = max(
                totals.max_pass_accuracy,
                est.pass_accuracy(stats.get(StatName.SUCCESS_PASSES), stats.get(StatName.TOTAL_PASSES)),
            )
            totals.dribbles += stats.get(StatName.DRIBBLE_SUCCESS)
            totals.tackles += stats.get(StatName.TACKLE_WON)
            totals.interceptions += stats.get(StatName.INTERCEPT_WON)
            totals.blocks += stats.get(StatName.BLOCKS)
            totals.duels_won += stats.get(StatName.TOTAL_BALL_WON)
            totals.matches += stats.get(StatName.MATCHES_PLAYED_AS_LINEUP)
        return est.player_traits(totals)

    @staticmethod
    def _season(tournament_id: int, now: datetime) -> int:
        info = league_info(tournament_id) or {}
        return int(info.get("season") or now.year)

    def _career(self, blocks: Sequence[PlayerTournamentStats], now: datetime) -> CareerSummary:
        grouped: dict[tuple[int, int], CareerEntry] = {}
        for block in blocks:
            season = self._season(block.tournament_id, now)
            key = (block.team.id, season)
            entry = grouped.setdefault(key, CareerEntry(team=block.team, season=season))
            entry.matches += block.games.appearances
            entry.goals += block.goals.total
            entry.assists += block.goals.assists
            entry.saves += block.goals.saves
        return CareerSummary(
            total_matches=sum(block.games.lineups for block in blocks),
            career_data=list(grouped.values()),
        )

    def _achievements(
        self, blocks: Sequence[PlayerTournamentStats], now: datetime
    ) -> tuple[list[Achievement], list[Achievement]]:
        if not blocks:
            return [], []
        best = blocks[0]
        for block in blocks[1:]:
            if block.goals.total > best.goals.total or (
                block.goals.total == best.goals.total and block.goals.assists > best.goals.assists
            ):
                best = block
        info = league_info(best.tournament_id) or {}
        achievement = Achievement(
            season=int(info.get("season") or now.year),
            league=int(info.get("id") or _DEFAULT_LEAGUE_ID),
        )
        scorers = [achievement] if best.goals.total > 0 else []
        assists = [achievement.model_copy()] if best.goals.assists > 0 else []
        return scorers, assists
