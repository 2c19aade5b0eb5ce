"""
tests/test_standings_mapper.py

Purpose:
    Verify standings extraction: first stage/first group only, provider row
    order kept, goal difference recomputed, labels from rank.
"""

from __future__ import annotations

import pytest

from statsync.mappers.base import MappingError
from statsync.mappers.standings_mapper import map_to_standings
from tests.conftest import FIXED_NOW

TOURNAMENT = {
    "id": 840,
    "tournament": "Saudi Pro League",
    "season": "2024/2025",
    "organizer": {"country": {"name": "Saudi Arabia"}},
}


def _row(team_id, rank, points, scored, conceded):
    return {
        "teamID": team_id,
        "team": f"Team {team_id}",
        "rank": rank,
        "points": points,
        "goalsDiff": 99,
        "played": {"total": 20, "home": 10, "away": 10},
        "won": {"total": 12, "home": 7, "away": 5},
        "scored": {"total": scored, "home": scored // 2, "away": scored - scored // 2},
        "conceded": {"total": conceded, "home": 0, "away": conceded},
    }


RAW = {
    "stages": [
        {
            "groups": [
                {"group": "", "standings": [_row(5, 1, 45, 40, 12), _row(9, 10, 25, 20, 22)]},
                {"group": "B", "standings": [_row(11, 1, 30, 10, 5)]},
            ]
        },
        {"groups": [{"group": "Final", "standings": [_row(12, 1, 3, 1, 0)]}]},
    ]
}


def test_first_stage_first_group_only():
    record = map_to_standings(TOURNAMENT, RAW, team_logos={5: "logo-5"}, clock=lambda: FIXED_NOW)

    assert record.id == 840
    assert record.season == 2024
    assert record.name == "Saudi Pro League"
    assert record.flag == "https://media.api-sports.io/flags/sa.svg"
    assert record.logo.endswith("/307.png")
    assert [row.team.id for row in record.standings] == [5, 9]

    top, mid = record.standings
    assert top.group == "Main"
    assert top.goals_diff == 28
    assert top.all.goals_for == 40
    assert top.home.win == 7
    assert top.team.logo == "logo-5"
    assert (top.status, top.description) == ("Champions League", "Champion")
    assert (mid.status, mid.description) == ("None", "Mid-table")
    assert mid.team.logo == ""


def test_missing_standings_payload_gives_empty_table():
    record = map_to_standings({"id": 934, "season": None}, None, clock=lambda: FIXED_NOW)

    assert record.standings == []
    assert record.season == 2025
    assert record.country == "Unknown"
    assert record.name == "Pro League U19"


def test_tournament_without_id_is_rejected():
    with pytest.raises(MappingError):
        map_to_standings({"tournament": "No id"}, RAW)
