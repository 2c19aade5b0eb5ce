"""
statsync/models/standings.py

Purpose:
    Canonical league table for one tournament season (first stage, first group).

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from statsync.models.common import CanonicalRecord, TeamRef


class StandingSplit(BaseModel):
    played: int = 0
    win: int = 0
    draw: int = 0
    lose: int = 0
    goals_for: int = 0
    goals_against: int = 0


class StandingRow(BaseModel):
    rank: int
    team: TeamRef
    points: int = 0
    goals_diff: int = 0
    group: str = "Main"
    form: str = ""
    status: str = "None"
    description: str = "Mid-table"
    all: StandingSplit = Field(default_factory=StandingSplit)
    home: StandingSplit = Field(default_factory=StandingSplit)
    away: StandingSplit = Field(default_factory=StandingSplit)


class StandingsRecord(CanonicalRecord):
    tournament_id: int
    name: str = ""
    country: str = "Unknown"
    logo: str = ""
    flag: str = ""
    season: int | None = None
    standings: list[StandingRow] = Field(default_factory=list)
