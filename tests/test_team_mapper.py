"""
tests/test_team_mapper.py

Purpose:
    Verify TeamRecord derivation:
    - name cleanup, code, logo and venue
    - per-tournament blocks with 60/40 splits and per-game rates
    - form / over-time series from past matches only
    - defaults when stats and history are missing
"""

from __future__ import annotations

import pytest

from statsync.mappers.base import MappingError
from statsync.mappers.team_mapper import TeamMapper, clean_team_name, form_string, past_matches, team_code
from tests.conftest import FIXED_NOW


def _stats(name="Al Hilal FC", matches=10, wins=8):
    return {
        "name": name,
        "stats": [
            {"stat": "Matches Played", "value": matches},
            {"stat": "Win", "value": wins},
            {"stat": "Draw", "value": 1},
            {"stat": "Lost", "value": 1},
            {"stat": "Goals Scored", "value": 25},
            {"stat": "Goals Conceded", "value": 5},
            {"stat": "Clean Sheet", "value": 6},
            {"stat": "Yellow Card", "value": 12},
            {"stat": "Possession", "value": 0.58},
            {"stat": "Success Passes", "value": 4000},
            {"stat": "Total Passes", "value": 5000},
        ],
    }


def _match(match_id, when, home_id, away_id, home_score, away_score, home_coach=None):
    return {
        "intID": match_id,
        "dtDateTime": when,
        "objHomeTeam": {"intID": home_id, "strTeamNameEn": f"Team {home_id}"},
        "objAwayTeam": {"intID": away_id, "strTeamNameEn": f"Team {away_id}"},
        "intHomeTeamScore": home_score,
        "intAwayTeamScore": away_score,
        "objHomeCoach": home_coach or {},
        "objAwayCoach": {},
        "objStadium": {"intID": 0},
    }


RAW_TEAM = {
    "id": 5,
    "team": "Al Hilal FC",
    "country": {"name": "Saudi Arabia"},
    "founded": 1957,
    "stadium": {"id": 11, "name": "Kingdom Arena", "city": "Riyadh", "capacity": 26000},
}

TEAM_INFO = {
    "id": 5,
    "name": "Al Hilal",
    "matches": [
        _match(2, "2025-02-10T18:00:00Z", 9, 5, 0, 0),
        _match(1, "2025-01-10T18:00:00Z", 5, 7, 2, 1, home_coach={"intID": 77, "strCoachNameEn": "Jorge Jesus"}),
        _match(3, "2025-04-01T18:00:00Z", 5, 9, None, None),
    ],
}


def test_name_helpers():
    assert clean_team_name("Al Nassr FC") == "Al Nassr"
    assert clean_team_name(None) == ""
    assert team_code("Al Hilal FC") == "ALH"
    assert team_code("Ittihad") == "ITT"


def test_form_uses_past_matches_newest_first_and_scores_of_zero():
    history = past_matches(5, TEAM_INFO["matches"], FIXED_NOW)
    assert [match.result for match in history] == ["W", "D"]
    assert form_string(history) == "DW"
    assert form_string([]) == "WWWWW"


@pytest.mark.asyncio
async def test_map_to_team_full_payload(fake_source, fixed_clock):
    mapper = TeamMapper(fake_source, clock=fixed_clock)

    team = await mapper.map_to_team(RAW_TEAM, [(840, _stats())], 840, team_info=TEAM_INFO)

    assert team.id == 5
    assert team.name == "Al Hilal"
    assert team.code == "ALH"
    assert team.logo == "https://img.test/club/5.png"
    assert team.founded == 1957
    assert team.national is False
    assert team.tournament_ids == [840]
    assert team.last_synced == FIXED_NOW
    assert team.rank == 5
    assert team.trophies == []

    assert team.venue.name == "Kingdom Arena"
    assert team.venue.capacity == 26000
    assert [coach.id for coach in team.coaches] == [77]

    entry = team.tournament_stats[0]
    assert entry.league is not None and entry.league.name == "Pro League"
    assert entry.form == "DW"
    assert entry.average_team_rating == 9.5
    assert entry.attacking.goals_per_game == 2.5
    assert entry.defending.goals_conceded_per_game == 0.5
    assert entry.passing.ball_possession == 58
    assert entry.passing.accurate_per_game == 400.0
    assert entry.fixtures.played.model_dump() == {"home": 6, "away": 4, "total": 10}
    assert entry.fixtures.wins.model_dump() == {"home": 5, "away": 3, "total": 8}
    assert entry.korastats_stats["Goals Scored"] == 25.0

    assert team.stats_summary.games_played.home == 6
    assert team.stats_summary.goal_difference == 20

    assert [point.result for point in team.form_over_time] == ["W", "D"]
    assert team.form_over_time[1].opponent.logo == "https://img.test/club/9.png"
    assert team.goals_over_time[0].goal_difference == 1


@pytest.mark.asyncio
async def test_dominant_season_earns_trophy(fake_source, fixed_clock):
    mapper = TeamMapper(fake_source, clock=fixed_clock)

    team = await mapper.map_to_team(RAW_TEAM, [(840, _stats(matches=12, wins=10))], 840)

    assert [(t.league, t.season) for t in team.trophies] == [("Pro League", "2024")]


@pytest.mark.asyncio
async def test_defaults_without_stats_or_history(fake_source, fixed_clock):
    mapper = TeamMapper(fake_source, clock=fixed_clock)

    team = await mapper.map_to_team({"id": 8, "team": "Damac"}, [], 999)

    assert team.name == "Damac"
    assert team.tournament_ids == [999]
    assert team.tournament_stats == []
    assert team.total_players == 20
    assert team.venue.name == "Unknown Stadium"
    assert [coach.name for coach in team.coaches] == ["Unknown Coach"]
    assert team.form_over_time == []


@pytest.mark.asyncio
async def test_unknown_league_has_no_league_ref(fake_source, fixed_clock):
    mapper = TeamMapper(fake_source, clock=fixed_clock)

    team = await mapper.map_to_team(RAW_TEAM, [(840, _stats()), (777, _stats())], 840)

    assert team.tournament_ids == [840, 777]
    assert team.tournament_stats[1].league is None
    assert team.stats_summary.games_played.home == 12


@pytest.mark.asyncio
async def test_image_failure_leaves_logo_empty(fake_source, fixed_clock):
    fake_source.failures[("image", ("club", 5))] = RuntimeError("cdn down")
    mapper = TeamMapper(fake_source, clock=fixed_clock)

    team = await mapper.map_to_team(RAW_TEAM, [], 840)

    assert team.logo == ""


@pytest.mark.asyncio
async def test_missing_id_is_a_mapping_error(fake_source):
    with pytest.raises(MappingError):
        await TeamMapper(fake_source).map_to_team({"team": "Nameless"}, [], 840)
