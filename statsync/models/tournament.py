"""
statsync/models/tournament.py

Purpose:
    Canonical tournament (league season) record: list metadata plus the
    stage/group skeleton from TournamentStructure. Match lists are not kept.

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from statsync.models.common import CanonicalRecord, CountryInfo


class Organizer(BaseModel):
    id: int = 0
    name: str = ""
    abbrev: str = ""


class AgeGroup(BaseModel):
    id: int = 0
    name: str = ""
    min_age: int | None = None
    max_age: int | None = None


class TournamentGroup(BaseModel):
    id: int = 0
    name: str = ""
    team_ids: list[int] = Field(default_factory=list)


class TournamentStage(BaseModel):
    id: int = 0
    name: str = ""
    order: int = 0
    rounds: int = 0
    type: str = ""
    groups: list[TournamentGroup] = Field(default_factory=list)


class TournamentRecord(CanonicalRecord):
    name: str = "Unknown League"
    season: str = ""
    start_date: str | None = None
    end_date: str | None = None
    logo: str = ""
    type: str = "League"
    country: CountryInfo = Field(default_factory=CountryInfo)
    organizer: Organizer = Field(default_factory=Organizer)
    age_group: AgeGroup = Field(default_factory=AgeGroup)
    gender: str = "male"
    stages: list[TournamentStage] = Field(default_factory=list)
    team_ids: list[int] = Field(default_factory=list)
    status: str = "active"
