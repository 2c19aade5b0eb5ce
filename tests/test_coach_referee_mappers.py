"""
tests/test_coach_referee_mappers.py

Purpose:
    Verify CoachRecord and RefereeRecord derivation from the tournament
    list entries: Admin block results, formation, trophies and referee
    career tallies.
"""

from __future__ import annotations

import pytest

from statsync.mappers.coach_mapper import CoachMapper
from statsync.mappers.referee_mapper import RefereeMapper

RAW_COACH = {"id": 77, "fullname": "Jorge Jesus", "dob": "1954-07-24", "nationality": {"name": "Portugal"}}
COACH_ENTRY = {
    "id": 77,
    "name": "Jorge Jesus",
    "stats": {
        "Admin": {"MatchesPlayed": 12, "Win": 10, "Draw": 1, "Lost": 1},
        "Possession": {"TimePercent": {"Average": 62}},
    },
}


@pytest.mark.asyncio
async def test_map_to_coach(fake_source, fixed_clock):
    coach = await CoachMapper(fake_source, clock=fixed_clock).map_to_coach(RAW_COACH, [(840, COACH_ENTRY)], 840)

    assert coach.name == "Jorge Jesus"
    assert coach.age == 70
    assert coach.nationality.model_dump() == {
        "name": "Portugal",
        "code": "po",
        "flag": "https://media.api-sports.io/flags/po.svg",
    }
    assert coach.photo == "https://img.test/coach/77.png"

    entry = coach.stats[0]
    assert (entry.matches, entry.wins, entry.draws, entry.loses) == (12, 10, 1, 1)
    assert entry.points == 31
    assert entry.points_per_game == 2.58
    assert coach.coach_performance.win_percentage == 83.33
    assert coach.coach_performance.draw_percentage == 8.33
    assert coach.preferred_formation == "4-3-3"
    assert coach.career_history[0].start_date == "2025-03-01"
    assert [(t.name, t.season, t.league) for t in coach.trophies] == [("Successful Season", "2025", "Pro League")]


@pytest.mark.asyncio
async def test_coach_without_stats(fake_source, fixed_clock):
    coach = await CoachMapper(fake_source, clock=fixed_clock).map_to_coach(
        {"id": 78, "fullname": "Someone"}, [(840, {"id": 78, "name": "Someone"})], 840
    )

    assert coach.stats == []
    assert coach.preferred_formation is None
    assert coach.coach_performance.win_percentage == 0.0
    assert [t.name for t in coach.trophies] == ["No Trophies"]
    assert coach.nationality.name == "Unknown"


RAW_REFEREE = {"id": 300, "fullname": "Mohammed Al Hoaish", "nationality": {"name": "Saudi Arabia"}}


@pytest.mark.asyncio
async def test_map_to_referee(fake_source, fixed_clock):
    entries = [
        (
            840,
            {
                "id": 300,
                "stats": [
                    {"stat": "MatchesPlayed", "value": 9},
                    {"stat": "Yellow Card", "value": 31},
                    {"stat": "2nd Yellow Card", "value": 1},
                    {"stat": "Direct Red Card", "value": 2},
                    {"stat": "Penalties", "value": 3},
                ],
            },
        ),
        (600, {"id": 300, "stats": [{"stat": "MatchesPlayed", "value": 2}]}),
    ]

    referee = await RefereeMapper(fake_source, clock=fixed_clock).map_to_referee(RAW_REFEREE, entries, 840)

    assert referee.matches == 11
    assert referee.country.code == "sa"
    first, second = referee.career_stats
    assert (first.league, first.yellow_cards, first.red_cards, first.penalties) == ("Pro League", 31, 3, 3)
    assert (second.league, second.appearances) == ("Yelo", 2)


@pytest.mark.asyncio
async def test_referee_always_has_a_career_entry(fake_source, fixed_clock):
    referee = await RefereeMapper(fake_source, clock=fixed_clock).map_to_referee({"id": 301}, [], 840)

    assert referee.name == "Referee 301"
    assert referee.country.model_dump() == {
        "name": "Unknown",
        "code": "sa",
        "flag": "https://media.api-sports.io/flags/sa.svg",
    }
    assert [(c.tournament_id, c.appearances) for c in referee.career_stats] == [(840, 0)]
    assert referee.matches == 0


@pytest.mark.asyncio
async def test_trophy_threshold_uses_unrounded_win_rate(fake_source, fixed_clock):
    entry = {"id": 79, "name": "Edge", "stats": {"Admin": {"MatchesPlayed": 100000, "Win": 70001}}}

    coach = await CoachMapper(fake_source, clock=fixed_clock).map_to_coach(
        {"id": 79, "fullname": "Edge"}, [(840, entry)], 840
    )

    assert coach.coach_performance.win_percentage == 70.0
    assert [t.name for t in coach.trophies] == ["Successful Season"]
