"""
statsync/mappers/stat_map.py

Purpose:
    Typed name -> value lookup built once per raw statistics payload before
    any derived metric is computed. Known Korastats stat names form a closed
    enum; anything else lands in an "unknown" bucket keyed by its raw name.

    Three payload shapes are accepted:
    - ordered ``[{"stat": name, "value": v}]`` lists (last write wins),
    - entries carrying only a numeric ``id`` (resolved via STAT_IDS),
    - nested ``{"Admin": {"MatchesPlayed": 3}}`` blocks, flattened to dotted
      names such as ``Admin.MatchesPlayed``.

Dependencies:
    - statsync.utils
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping

from statsync.utils import to_float


class StatName(str, Enum):
    # Fixtures
    MATCHES_PLAYED = "Matches Played"
    MATCHES_PLAYED_AS_LINEUP = "Matches Played as Lineup"
    MINUTES_PLAYED = "Minutes Played"
    WIN = "Win"
    WINS = "Wins"
    DRAW = "Draw"
    LOST = "Lost"
    CLEAN_SHEET = "Clean Sheet"

    # Goals
    GOALS_SCORED = "Goals Scored"
    GOALS_CONCEDED = "Goals Conceded"
    ASSISTS = "Assists"
    GOALS_RIGHT_FOOT = "Goals Scored By Right Foot"
    GOALS_LEFT_FOOT = "Goals Scored By Left Foot"
    GOALS_HEAD = "Goals Scored By Head"
    GOALS_SAVED = "Goals Saved"

    # Attempts
    TOTAL_ATTEMPTS = "Total Attempts"
    SUCCESS_ATTEMPTS = "Success Attempts"
    ATTEMPTS_OFF_TARGET = "Attempts Off Target"
    ATTEMPTS_BLOCKED = "Attempts Blocked"
    ATTEMPTS_SAVED = "Attempts Saved"
    ATTEMPTS_ON_BARS = "Attempts on Bars"
    ONE_ON_ONE_MISSED = "One on One Missed"
    CHANCE_CREATED = "Chance Created"
    CHANCES_CREATED_OPEN_PLAY = "Chances Created Open Play"
    CHANCES_CREATED_SET_PIECES = "Chances Created Set-Pieces"
    KEY_PASSES = "KeyPasses"
    XG = "XG"
    XGA = "XGA"

    # Penalties
    PENALTY_COMMITTED = "Penalty Committed"
    PENALTY_AWARDED = "Penalty Awarded"
    PENALTY_MISSED = "Penalty Missed"
    PENALTY_SCORED = "Penalty Scored"

    # Passing
    TOTAL_PASSES = "Total Passes"
    SUCCESS_PASSES = "Success Passes"
    TOTAL_LONG_PASS = "Total Long Pass"
    SUCCESS_LONG_PASS = "Success Long Pass"
    TOTAL_CROSSES = "Total Crosses"
    SUCCESS_CROSSES = "Success Crosses"
    POSSESSION = "Possession"

    # Defending
    TACKLE_WON = "TackleWon"
    TACKLE_FAIL = "TackleFail"
    TACKLE_CLEAR = "TackleClear"
    INTERCEPT_WON = "InterceptWon"
    INTERCEPT_CLEAR = "InterceptClear"
    AERIAL_WON = "Aerial Won"
    AERIAL_LOST = "Aerial Lost"
    BALL_RECOVER = "Ball Recover"
    CLEAR = "Clear"
    BLOCKS = "Blocks"

    # Ball control
    DRIBBLE_SUCCESS = "Dribble Success"
    DRIBBLE_FAIL = "Dribble Fail"
    TOTAL_BALL_LOST = "Total Ball Lost"
    TOTAL_BALL_WON = "Total Ball Won"

    # Discipline and set pieces
    YELLOW_CARD = "Yellow Card"
    YELLOW_CARDS = "Yellow Cards"
    SECOND_YELLOW_CARD = "Second Yellow Card"
    RED_CARD = "Red Card"
    RED_CARDS = "Red Cards"
    FOULS_COMMITTED = "Fouls Commited"
    FOULS_AWARDED = "Fouls Awarded"
    CORNERS = "Corners"
    OFFSIDES = "Offsides"
    THROW_IN_TOTAL = "ThrowInTotal"

    # Nested coach blocks (flattened)
    ADMIN_MATCHES_PLAYED = "Admin.MatchesPlayed"
    ADMIN_WIN = "Admin.Win"
    ADMIN_DRAW = "Admin.Draw"
    ADMIN_LOST = "Admin.Lost"
    POSSESSION_TIME_PERCENT_AVERAGE = "Possession.TimePercent.Average"
    BALL_WON_TOTAL = "BallWon.Total"
    DEFENSIVE_TACKLE_CLEAR = "Defensive.TackleClear"
    GOALS_SCORED_TOTAL = "GoalsScored.Total"
    CHANCES_CHANCES_CREATED = "Chances.ChancesCreated"

    # Referee blocks
    REFEREE_MATCHES_PLAYED = "MatchesPlayed"
    REFEREE_SECOND_YELLOW = "2nd Yellow Card"
    REFEREE_DIRECT_RED = "Direct Red Card"
    REFEREE_PENALTIES = "Penalties"


# Korastats ListStatTypes ids seen in TournamentPlayerStats payloads.
STAT_IDS: dict[int, StatName] = {
    1: StatName.SUCCESS_PASSES,
    2: StatName.TOTAL_PASSES,
    9: StatName.TOTAL_BALL_WON,
    14: StatName.YELLOW_CARD,
    15: StatName.SECOND_YELLOW_CARD,
    16: StatName.RED_CARD,
    17: StatName.FOULS_COMMITTED,
    20: StatName.MINUTES_PLAYED,
    21: StatName.GOALS_SCORED,
    22: StatName.ASSISTS,
    27: StatName.MATCHES_PLAYED_AS_LINEUP,
    28: StatName.GOALS_CONCEDED,
    37: StatName.SUCCESS_ATTEMPTS,
    38: StatName.ATTEMPTS_SAVED,
    45: StatName.TOTAL_ATTEMPTS,
    48: StatName.PENALTY_COMMITTED,
    49: StatName.PENALTY_AWARDED,
    50: StatName.PENALTY_MISSED,
    51: StatName.PENALTY_SCORED,
    52: StatName.GOALS_SAVED,
    53: StatName.FOULS_AWARDED,
    54: StatName.BLOCKS,
    60: StatName.DRIBBLE_SUCCESS,
    81: StatName.TACKLE_WON,
    84: StatName.INTERCEPT_WON,
    92: StatName.KEY_PASSES,
}

_BY_VALUE: dict[str, StatName] = {member.value: member for member in StatName}


class StatMap:
    """Known stats keyed by StatName plus an ``unknown`` bucket keyed by raw name."""

    __slots__ = ("known", "unknown")

    def __init__(self) -> None:
        self.known: dict[StatName, float] = {}
        self.unknown: dict[str, float] = {}

    def put(self, name: str | StatName, value: Any) -> None:
        number = to_float(value)
        key = name if isinstance(name, StatName) else _BY_VALUE.get(str(name))
        if key is None:
            self.unknown[str(name)] = number
        else:
            self.known[key] = number

    def get(self, name: StatName, default: float = 0.0) -> float:
        return self.known.get(name, default)

    def first(self, *names: StatName, default: float = 0.0) -> float:
        """Value of the first present and non-zero stat among ``names``."""
        for name in names:
            value = self.known.get(name)
            if value:
                return value
        return default

    def __contains__(self, name: object) -> bool:
        return name in self.known

    def __len__(self) -> int:
        return len(self.known) + len(self.unknown)

    def known_as_dict(self) -> dict[str, float]:
        return {name.value: value for name, value in self.known.items()}


def _flatten(prefix: str, node: Mapping[str, Any], out: list[tuple[str, Any]]) -> None:
    for key, value in node.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            _flatten(name, value, out)
        else:
            out.append((name, value))


def stat_pairs(raw: Any) -> list[tuple[str | StatName, Any]]:
    """Normalize any supported payload shape to ordered (name, value) pairs."""
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        flat: list[tuple[str, Any]] = []
        _flatten("", raw, flat)
        return list(flat)
    pairs: list[tuple[str | StatName, Any]] = []
    for entry in raw if isinstance(raw, Iterable) else []:
        if not isinstance(entry, Mapping):
            continue
        name = entry.get("stat")
        if not name:
            stat_id = entry.get("id")
            try:
                name = STAT_IDS.get(int(stat_id)) if stat_id is not None else None
            except (TypeError, ValueError):
                name = None
            if name is None:
                if stat_id is None:
                    continue
                name = f"#{stat_id}"
        pairs.append((name, entry.get("value")))
    return pairs


def build_stat_map(raw: Any) -> StatMap:
    stat_map = StatMap()
    for name, value in stat_pairs(raw):
        stat_map.put(name, value)
    return stat_map


def merge_stat_maps(maps: Iterable[StatMap]) -> StatMap:
    """Sum known and unknown stats across payloads (e.g. several tournaments)."""
    merged = StatMap()
    for stat_map in maps:
        for name, value in stat_map.known.items():
            merged.known[name] = merged.known.get(name, 0.0) + value
        for name, value in stat_map.unknown.items():
            merged.unknown[name] = merged.unknown.get(name, 0.0) + value
    return merged
