"""
tests/test_stat_map.py

Purpose:
    Verify stat payload normalization: list, id-only and nested shapes,
    unknown names, and summing across tournaments.
"""

from __future__ import annotations

from statsync.mappers.stat_map import StatName, build_stat_map, merge_stat_maps, stat_pairs


def test_named_list_last_write_wins():
    stats = build_stat_map(
        [
            {"stat": "Goals Scored", "value": 3},
            {"stat": "Goals Scored", "value": 5},
            {"stat": "Assists", "value": "2"},
        ]
    )
    assert stats.get(StatName.GOALS_SCORED) == 5.0
    assert stats.get(StatName.ASSISTS) == 2.0
    assert stats.get(StatName.XG) == 0.0


def test_id_only_entries_resolve_through_table():
    stats = build_stat_map([{"id": 21, "value": 4}, {"id": 9999, "value": 1}])
    assert stats.get(StatName.GOALS_SCORED) == 4.0
    assert stats.unknown == {"#9999": 1.0}


def test_unknown_names_are_kept_verbatim():
    stats = build_stat_map([{"stat": "Something New", "value": 7}])
    assert StatName.GOALS_SCORED not in stats
    assert stats.unknown["Something New"] == 7.0
    assert len(stats) == 1


def test_nested_blocks_flatten_to_dotted_names():
    pairs = stat_pairs({"Admin": {"MatchesPlayed": 3, "Win": 2}, "Possession": {"TimePercent": {"Average": 55}}})
    assert ("Admin.MatchesPlayed", 3) in pairs
    stats = build_stat_map({"Admin": {"MatchesPlayed": 3, "Win": 2}})
    assert stats.get(StatName.ADMIN_MATCHES_PLAYED) == 3.0
    assert stats.get(StatName.ADMIN_WIN) == 2.0


def test_first_skips_zero_values():
    stats = build_stat_map([{"stat": "Win", "value": 0}, {"stat": "Wins", "value": 6}])
    assert stats.first(StatName.WIN, StatName.WINS) == 6.0
    assert stats.first(StatName.DRAW, default=-1.0) == -1.0


def test_missing_payload_is_empty():
    assert len(build_stat_map(None)) == 0
    assert build_stat_map(["not-a-dict", {"value": 1}]).known == {}


def test_merge_sums_known_and_unknown():
    merged = merge_stat_maps(
        [
            build_stat_map([{"stat": "Goals Scored", "value": 2}, {"stat": "Custom", "value": 1}]),
            build_stat_map([{"stat": "Goals Scored", "value": 3}, {"stat": "Custom", "value": 1}]),
        ]
    )
    assert merged.get(StatName.GOALS_SCORED) == 5.0
    assert merged.unknown["Custom"] == 2.0
    assert merged.known_as_dict() == {"Goals Scored": 5.0}
