"""
statsync/mappers/estimation.py

Purpose:
    Pure heuristics shared by the entity mappers: per-game rates, the fixed
    60/40 home/away split, team rating, squad estimates, player rating and
    traits, position categories, coach formation inference and standings
    labels. Estimated values are not rostered facts; the formulas themselves
    are part of the canonical document contract and must stay stable.

Dependencies:
    - statsync.utils
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from statsync.utils import round_half_up, round_int

HOME_RATIO = 0.6
AWAY_RATIO = 0.4


def per_game_rate(total: float, matches: float) -> float:
    return float(total) / max(float(matches), 1.0)


def split_home_away(total: float) -> tuple[int, int]:
    return round_int(total * HOME_RATIO), round_int(total * AWAY_RATIO)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def percentage(part: float, whole: float, digits: int = 2) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(float(part) / float(whole) * 100.0, digits)


def ratio_percent(part: float, whole: float) -> int:
    """Integer percentage; a zero denominator counts as 1."""
    return round_int(float(part) / max(float(whole), 1.0) * 100.0)


# ---- Team ----


def team_rating(win_rate: float, goals_per_game: float, conceded_per_game: float) -> float:
    """0-10 rating: 40% win rate, 30% attack, 30% defence."""
    attacking = goals_per_game / 2.0
    defensive = max(0.0, 1.0 - conceded_per_game / 3.0)
    overall = (win_rate * 0.4 + attacking * 0.3 + defensive * 0.3) * 10.0
    return round_half_up(overall, 1)


def estimated_total_players(matches: float) -> int:
    return 20 + min(5, int(math.floor(matches / 10)))


def estimated_foreign_players(win_rate: float) -> int:
    return min(7, 3 + int(math.floor(win_rate * 4)))


def estimated_average_age(matches: float, win_rate: float, yellow: float, red: float) -> int:
    discipline = 1.0 - (yellow + 2.0 * red) / max(matches, 1.0) / 8.0
    return round_int(24 + (discipline * 0.6 + win_rate * 0.4) * 6)


def estimated_rank(win_rate: float) -> int:
    return int(clamp(round_int(21 - win_rate * 20), 1, 20))


def estimated_market_value(goals_per_game: float, win_rate: float) -> str:
    value = max(1.0, (goals_per_game + win_rate * 2) * 5)
    return f"€{value:.1f}M"


def normalize_possession(value: float | None) -> int:
    """Provider possession arrives as a fraction or a percentage; default 50."""
    if value is None or value <= 0:
        return 50
    percent = value if value > 1 else value * 100.0
    return int(clamp(round_int(percent), 0, 100))


# ---- Player ----


def position_category(name: str | None) -> str:
    if not name:
        return "Unknown"
    pos = str(name).upper()

    def has(*parts: str) -> bool:
        return all(part in pos for part in parts)

    if has("GK") or has("GOALKEEPER"):
        return "Goalkeeper"
    if (
        has("CB") or has("CENTER", "BACK")
        or has("LB") or has("LEFT", "BACK")
        or has("RB") or has("RIGHT", "BACK")
        or has("WB") or has("WING", "BACK")
    ):
        return "Defender"
    if (
        has("DM") or has("DEFENSIVE", "MID")
        or has("CM") or has("CENTER", "MID")
        or has("AM") or has("ATTACKING", "MID")
        or has("RM") or has("RIGHT", "MID")
        or has("LM") or has("LEFT", "MID")
    ):
        return "Midfielder"
    if (
        has("RW") or has("RIGHT", "WING")
        or has("LW") or has("LEFT", "WING")
        or has("CF") or has("CENTER", "FORWARD")
        or has("ST") or has("STRIKER")
    ):
        return "Forward"
    return "Midfielder"


def pass_accuracy(successful: float, total: float) -> float:
    return float(successful) / max(float(total), 1.0) * 100.0


def player_rating(
    *,
    goals: float,
    assists: float,
    accuracy: float,
    tackles: float,
    interceptions: float,
    matches: float,
) -> str:
    m = max(matches, 1.0)
    rating = 5.0
    rating += goals / m * 2
    rating += assists / m * 1.5
    rating += accuracy / 100
    rating += (tackles + interceptions) / m * 0.5
    return f"{round_half_up(clamp(rating, 0.0, 10.0), 1):.1f}"


@dataclass
class TraitTotals:
    goals: float = 0.0
    assists: float = 0.0
    shots: float = 0.0
    shots_on_target: float = 0.0
    max_pass_accuracy: float = 0.0
    dribbles: float = 0.0
    tackles: float = 0.0
    interceptions: float = 0.0
    blocks: float = 0.0
    duels_won: float = 0.0
    matches: float = 0.0


def player_traits(totals: TraitTotals) -> dict[str, int]:
    m = max(totals.matches, 1.0)

    def score(value: float) -> int:
        return min(100, round_int(value))

    return {
        "att": score((totals.goals + totals.assists) / m * 20),
        "dri": score(totals.dribbles / m * 15),
        "phy": score(totals.duels_won / m * 10),
        "pas": score(totals.max_pass_accuracy * 0.8),
        "sht": score(totals.shots_on_target / max(totals.shots, 1.0) * 100),
        "def_": score((totals.tackles + totals.interceptions + totals.blocks) / m * 8),
        "tac": score(totals.tackles / m * 12),
        "due": score(totals.duels_won / m * 10),
    }


def preferred_foot(left_goals: float, right_goals: float) -> str | None:
    if left_goals == 0 and right_goals == 0:
        return None
    if abs(left_goals - right_goals) <= 1:
        return "both"
    return "left" if left_goals > right_goals else "right"


# ---- Coach ----


def points(wins: float, draws: float) -> int:
    return int(wins) * 3 + int(draws)


def points_per_game(total_points: float, matches: float) -> float:
    if matches <= 0:
        return 0.0
    return round_half_up(total_points / matches, 2)


@dataclass
class FormationInputs:
    possession: float = 0.0
    defensive: float = 0.0
    offensive: float = 0.0


def infer_preferred_formation(entries: Iterable[FormationInputs]) -> str | None:
    rows = list(entries)
    if not rows:
        return None
    count = len(rows)
    possession = sum(row.possession for row in rows) / count
    defensive = sum(row.defensive for row in rows) / count
    offensive = sum(row.offensive for row in rows) / count
    if possession > 60:
        return "4-3-3"
    if defensive > offensive:
        return "5-4-1"
    if offensive > defensive:
        return "4-2-3-1"
    return "4-4-2"


def is_successful_season(win_percentage: float, matches: float) -> bool:
    return win_percentage > 70 and matches >= 10


# ---- Standings ----


def standing_status(rank: int) -> str:
    if rank <= 2:
        return "Champions League"
    if rank <= 4:
        return "Europa League"
    if rank <= 6:
        return "Conference League"
    if rank >= 18:
        return "Relegation"
    return "None"


def standing_description(rank: int) -> str:
    if rank == 1:
        return "Champion"
    if rank <= 2:
        return "Champions League"
    if rank <= 4:
        return "Europa League"
    if rank <= 6:
        return "Conference League"
    if rank >= 18:
        return "Relegation to lower division"
    return "Mid-table"


def standing_form(rank: int) -> str:
    # Placeholder until per-match form is available for the table.
    if rank == 1:
        return "W"
    if rank == 2:
        return "L"
    if rank == 3:
        return "D"
    return "L"
