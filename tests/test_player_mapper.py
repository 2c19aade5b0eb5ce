"""
tests/test_player_mapper.py

Purpose:
    Verify PlayerRecord derivation: identity fields, per-tournament stat
    blocks, rating and traits, achievements and the empty-stats defaults.
"""

from __future__ import annotations

import pytest

from statsync.mappers.base import MappingError
from statsync.mappers.player_mapper import PlayerMapper, heat_map_points
from tests.conftest import FIXED_NOW

RAW_PLAYER = {
    "id": 101,
    "fullname": "Salem Al Dawsari",
    "nickname": "Salem",
    "dob": "1991-08-19",
    "nationality": {"id": 1, "name": "Saudi Arabia"},
    "positions": {"primary": {"id": 3, "name": "LW"}, "secondary": {"id": 4, "name": "AM"}},
    "current_team": {"id": 5, "name": "Al Hilal"},
    "retired": False,
}

STATS_840 = {
    "shirtnumber": 29,
    "team": {"id": 5, "name": "Al Hilal"},
    "stats": [
        {"stat": "Matches Played as Lineup", "value": 10},
        {"stat": "Minutes Played", "value": 900},
        {"stat": "Goals Scored", "value": 5},
        {"stat": "Assists", "value": 2},
        {"stat": "Success Passes", "value": 80},
        {"stat": "Total Passes", "value": 100},
        {"stat": "TackleWon", "value": 10},
        {"stat": "Goals Scored By Left Foot", "value": 4},
        {"stat": "Goals Scored By Right Foot", "value": 1},
    ],
}


@pytest.mark.asyncio
async def test_map_to_player(fake_source, fixed_clock):
    player = await PlayerMapper(fake_source, clock=fixed_clock).map_to_player(RAW_PLAYER, [(840, STATS_840)], 840)

    assert player.id == 101
    assert player.name == "Salem Al Dawsari"
    assert (player.firstname, player.lastname) == ("Salem", "Dawsari")
    assert player.age == 33
    assert player.nationality == "Saudi Arabia"
    assert player.shirt_number == 29
    assert player.preferred_foot == "left"
    assert player.photo == "https://img.test/player/101.png"
    assert player.positions.primary.category == "Forward"
    assert player.positions.secondary.category == "Midfielder"
    assert player.current_team is not None and player.current_team.position == "LW"
    assert player.injured is False
    assert player.status == "active"
    assert player.last_synced == FIXED_NOW

    block = player.stats[0]
    assert block.team.logo == "https://img.test/club/5.png"
    assert block.league.name == "Pro League"
    assert block.games.appearances == 10
    assert block.games.minutes == 900
    assert block.games.number == 29
    assert block.games.rating == "7.6"
    assert block.passes.accuracy == 80.0
    assert block.goals.total == 5

    assert player.player_traits.att == 14
    assert player.player_traits.pas == 64
    assert player.career_summary.total_matches == 10
    assert [(c.team.id, c.season, c.goals) for c in player.career_summary.career_data] == [(5, 2024, 5)]
    assert [a.model_dump() for a in player.top_scorers] == [{"season": 2024, "league": 840}]
    assert [a.model_dump() for a in player.top_assists] == [{"season": 2024, "league": 840}]


@pytest.mark.asyncio
async def test_stat_ids_are_resolved(fake_source, fixed_clock):
    stats = {"team": {"id": 5}, "stats": [{"id": 21, "value": 3}, {"id": 27, "value": 6}]}

    player = await PlayerMapper(fake_source, clock=fixed_clock).map_to_player(RAW_PLAYER, [(840, stats)], 840)

    assert player.stats[0].goals.total == 3
    assert player.stats[0].games.appearances == 6


@pytest.mark.asyncio
async def test_player_without_stats_uses_defaults(fake_source, fixed_clock):
    raw = {"id": 102, "nickname": "Kanno", "retired": True}

    player = await PlayerMapper(fake_source, clock=fixed_clock).map_to_player(raw, [], 840)

    assert player.name == "Kanno"
    assert player.firstname is None
    assert player.stats == []
    assert player.player_traits.model_dump() == {
        "att": 0, "dri": 0, "phy": 0, "pas": 0, "sht": 0, "def_": 0, "tac": 0, "due": 0
    }
    assert player.top_scorers == []
    assert player.preferred_foot is None
    assert player.current_team is None
    assert player.status == "retired"


@pytest.mark.asyncio
async def test_unknown_league_achievement_falls_back_to_clock_year(fake_source, fixed_clock):
    player = await PlayerMapper(fake_source, clock=fixed_clock).map_to_player(RAW_PLAYER, [(777, STATS_840)], 777)

    assert [a.model_dump() for a in player.top_scorers] == [{"season": 2025, "league": 840}]


def test_heat_map_is_deterministic_per_player():
    points = heat_map_points(101)
    assert points == heat_map_points(101)
    assert all(0.0 <= x <= 0.9 and 0.0 <= y <= 0.9 for x, y in points)


@pytest.mark.asyncio
async def test_missing_id_raises(fake_source):
    with pytest.raises(MappingError):
        await PlayerMapper(fake_source).map_to_player({"fullname": "No Id"}, [], 840)
