"""
statsync/models/coach.py

Purpose:
    Canonical coach document with tournament-scoped records, win/draw/lose
    percentages and the inferred preferred formation.

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from statsync.models.common import CanonicalRecord, CountryInfo, LeagueRef


class PersonBirth(BaseModel):
    date: str | None = None
    place: str = "Unknown"
    country: str = "Unknown"


class CoachCareerEntry(BaseModel):
    team_id: int = 0
    team_name: str = "Unknown Team"
    team_logo: str = ""
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = True


class CoachTournamentStats(BaseModel):
    tournament_id: int
    league: LeagueRef = Field(default_factory=LeagueRef)
    matches: int = 0
    wins: int = 0
    draws: int = 0
    loses: int = 0
    points: int = 0
    points_per_game: float = 0.0


class CoachPerformance(BaseModel):
    """Percentages in [0, 100], 2 decimals."""

    win_percentage: float = 0.0
    draw_percentage: float = 0.0
    lose_percentage: float = 0.0


class CoachTrophy(BaseModel):
    id: int = 0
    name: str
    season: str
    team_id: int = 0
    team_name: str = "Unknown Team"
    league: str = "Unknown League"


class CoachRecord(CanonicalRecord):
    name: str
    firstname: str | None = None
    lastname: str | None = None
    age: int = 0
    birth: PersonBirth = Field(default_factory=PersonBirth)
    nationality: CountryInfo = Field(default_factory=CountryInfo)
    photo: str = ""
    preferred_formation: str | None = None

    career_history: list[CoachCareerEntry] = Field(default_factory=list)
    stats: list[CoachTournamentStats] = Field(default_factory=list)
    coach_performance: CoachPerformance = Field(default_factory=CoachPerformance)
    trophies: list[CoachTrophy] = Field(default_factory=list)

    status: Literal["active", "retired"] = "active"
