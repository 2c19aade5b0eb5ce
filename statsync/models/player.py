"""
statsync/models/player.py

Purpose:
    Canonical player document: identity, positions, career summary,
    per-tournament statistics and the derived 0-100 trait scores.

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from statsync.models.common import CanonicalRecord, LeagueRef, TeamRef

PositionCategory = Literal["Goalkeeper", "Defender", "Midfielder", "Forward", "Unknown"]


class PlayerPosition(BaseModel):
    id: int = 0
    name: str = "Unknown"
    category: PositionCategory = "Unknown"


class PlayerPositions(BaseModel):
    primary: PlayerPosition = Field(default_factory=PlayerPosition)
    secondary: PlayerPosition = Field(default_factory=PlayerPosition)


class Birth(BaseModel):
    date: str | None = None
    place: str = "Unknown"
    country: str = "Unknown"


class CurrentTeam(BaseModel):
    id: int
    name: str = "Unknown Team"
    position: str = "Unknown"


class CareerEntry(BaseModel):
    team: TeamRef = Field(default_factory=TeamRef)
    season: int
    matches: int = 0
    goals: int = 0
    assists: int = 0
    saves: int = 0


class CareerSummary(BaseModel):
    total_matches: int = 0
    career_data: list[CareerEntry] = Field(default_factory=list)


class Games(BaseModel):
    appearances: int = 0
    lineups: int = 0
    minutes: int = 0
    number: int = 0
    position: str = "Unknown"
    rating: str = "0.0"
    captain: bool = False


class Shots(BaseModel):
    total: int = 0
    on: int = 0


class Goals(BaseModel):
    total: int = 0
    assists: int = 0
    conceded: int = 0
    saves: int = 0


class Passes(BaseModel):
    total: int = 0
    key: int = 0
    accuracy: float = 0.0


class Tackles(BaseModel):
    total: int = 0
    blocks: int = 0
    interceptions: int = 0


class Duels(BaseModel):
    total: int = 0
    won: int = 0


class Dribbles(BaseModel):
    attempts: int = 0
    success: int = 0
    past: int = 0


class Fouls(BaseModel):
    drawn: int = 0
    committed: int = 0


class Cards(BaseModel):
    yellow: int = 0
    yellowred: int = 0
    red: int = 0


class Penalty(BaseModel):
    won: int = 0
    committed: int = 0
    scored: int = 0
    missed: int = 0
    saved: int = 0


class PlayerTournamentStats(BaseModel):
    tournament_id: int
    team: TeamRef = Field(default_factory=TeamRef)
    league: LeagueRef = Field(default_factory=LeagueRef)
    games: Games = Field(default_factory=Games)
    shots: Shots = Field(default_factory=Shots)
    goals: Goals = Field(default_factory=Goals)
    passes: Passes = Field(default_factory=Passes)
    tackles: Tackles = Field(default_factory=Tackles)
    duels: Duels = Field(default_factory=Duels)
    dribbles: Dribbles = Field(default_factory=Dribbles)
    fouls: Fouls = Field(default_factory=Fouls)
    cards: Cards = Field(default_factory=Cards)
    penalty: Penalty = Field(default_factory=Penalty)


class PlayerTraits(BaseModel):
    att: int = 0
    dri: int = 0
    phy: int = 0
    pas: int = 0
    sht: int = 0
    def_: int = 0
    tac: int = 0
    due: int = 0


class HeatMap(BaseModel):
    points: list[list[float]] = Field(default_factory=list)


class ShotMap(BaseModel):
    shots: list[dict] = Field(default_factory=list)
    accuracy: float = 0.0


class Achievement(BaseModel):
    season: int
    league: int


class PlayerRecord(CanonicalRecord):
    name: str
    firstname: str | None = None
    lastname: str | None = None
    birth: Birth = Field(default_factory=Birth)
    age: int = 0
    nationality: str = "Unknown"
    shirt_number: int = 0
    height: int | None = None
    weight: int | None = None
    preferred_foot: Literal["left", "right", "both"] | None = None
    photo: str = ""

    positions: PlayerPositions = Field(default_factory=PlayerPositions)
    current_team: CurrentTeam | None = None
    injured: bool = False

    career_summary: CareerSummary = Field(default_factory=CareerSummary)
    stats: list[PlayerTournamentStats] = Field(default_factory=list)
    player_traits: PlayerTraits = Field(default_factory=PlayerTraits)
    player_heat_map: HeatMap = Field(default_factory=HeatMap)
    player_shot_map: ShotMap = Field(default_factory=ShotMap)
    top_assists: list[Achievement] = Field(default_factory=list)
    top_scorers: list[Achievement] = Field(default_factory=list)

    status: Literal["active", "retired"] = "active"
