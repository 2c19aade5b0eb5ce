"""
statsync/models/referee.py

Purpose:
    Canonical referee document with per-tournament card/penalty tallies.

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from statsync.models.common import CanonicalRecord, CountryInfo


class RefereeCareerStat(BaseModel):
    tournament_id: int = 0
    league: str = "Unknown League"
    appearances: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    penalties: int = 0


class RefereeRecord(CanonicalRecord):
    name: str
    country: CountryInfo = Field(default_factory=CountryInfo)
    birth_date: str | None = None
    age: int = 0
    photo: str = ""
    matches: int = 0
    career_stats: list[RefereeCareerStat] = Field(default_factory=list)
    status: Literal["active", "retired"] = "active"
