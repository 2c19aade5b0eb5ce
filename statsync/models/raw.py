"""
statsync/models/raw.py

Purpose:
    Type contracts for raw Korastats payloads as they arrive inside the
    provider envelope. Every field is optional on the wire; mappers fall back
    to documented defaults when one is missing.

Dependencies:
    - typing
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypedDict, TypeVar

T = TypeVar("T")

EnvelopeResult = Literal["Success", "Error"]
ImageKind = Literal["club", "player", "coach", "referee"]


class Envelope(TypedDict, Generic[T]):
    result: EnvelopeResult | str
    message: str
    data: T | None


class RawRef(TypedDict, total=False):
    id: int
    name: str


class RawStat(TypedDict, total=False):
    """One entry of a flat stat list: ``{"id": 21, "stat": "Goals Scored", "value": 4}``."""

    id: int
    stat: str
    value: float


class RawOrganizer(TypedDict, total=False):
    id: int
    name: str
    abbrev: str
    country: RawRef


class RawAgeRange(TypedDict, total=False):
    min: int | None
    max: int | None


class RawAgeGroup(TypedDict, total=False):
    id: int
    name: str
    age: RawAgeRange


class RawTournament(TypedDict, total=False):
    id: int
    tournament: str
    season: str
    startDate: str
    endDate: str
    organizer: RawOrganizer
    ageGroup: RawAgeGroup


class RawStadium(TypedDict, total=False):
    id: int
    name: str
    capacity: int
    surface: str
    city: str


class RawTeamListItem(TypedDict, total=False):
    id: int
    team: str
    name: str
    country: RawRef
    founded: int
    is_national_team: bool
    stadium: RawStadium


class RawTeamList(TypedDict, total=False):
    id: int
    tournament: str
    season: str
    teams: list[RawTeamListItem]


class RawTeamStats(TypedDict, total=False):
    id: int
    name: str
    stats: list[RawStat]


class RawMatchTeam(TypedDict, total=False):
    intID: int
    strTeamNameEn: str


class RawMatchCoach(TypedDict, total=False):
    intID: int
    strCoachNameEn: str
    strCoachNameAr: str
    boolRetired: bool


class RawMatchStadium(TypedDict, total=False):
    intID: int
    strStadiumNameEn: str
    strStadiumNameAr: str
    intCapacity: str | int
    intEstablishYear: str | int


class RawMatch(TypedDict, total=False):
    intID: int
    dtDateTime: str
    objHomeTeam: RawMatchTeam
    objAwayTeam: RawMatchTeam
    intHomeTeamScore: int | None
    intAwayTeamScore: int | None
    objHomeCoach: RawMatchCoach
    objAwayCoach: RawMatchCoach
    objStadium: RawMatchStadium


class RawTeamInfo(TypedDict, total=False):
    id: int
    name: str
    matches: list[RawMatch]


class RawPositions(TypedDict, total=False):
    primary: RawRef
    secondary: RawRef


class RawEntityPlayer(TypedDict, total=False):
    id: int
    fullname: str
    nickname: str
    nationality: RawRef
    dob: str
    age: str
    positions: RawPositions
    retired: bool
    current_team: RawRef
    image: str


class RawPlayerTournamentStats(TypedDict, total=False):
    id: int
    name: str
    shirtnumber: int
    position: RawRef
    team: RawRef
    stats: list[RawStat] | dict[str, Any]


class RawSquadPlayer(TypedDict, total=False):
    id: int
    name: str


class RawSquadTeam(TypedDict, total=False):
    id: int
    team: str
    players: list[RawSquadPlayer]


class RawTeamPlayerList(TypedDict, total=False):
    id: int
    teams: list[RawSquadTeam]


class RawEntityPerson(TypedDict, total=False):
    """EntityCoach / EntityReferee share this shape."""

    id: int
    fullname: str
    nationality: RawRef
    dob: str
    age: str
    retired: bool
    gender: str
    image: str


class RawTournamentCoach(TypedDict, total=False):
    id: int
    name: str
    dob: str
    nationality: RawRef
    retired: bool
    stats: dict[str, Any]


class RawTournamentReferee(TypedDict, total=False):
    id: int
    name: str
    dob: str
    stats: dict[str, Any]


class RawRefereeList(TypedDict, total=False):
    id: int
    tournament: str
    referees: list[RawTournamentReferee]


class RawSplit(TypedDict, total=False):
    total: int
    home: int
    away: int


class RawStanding(TypedDict, total=False):
    teamID: int
    team: str
    rank: int
    points: int
    played: RawSplit
    won: RawSplit
    draw: RawSplit
    lost: RawSplit
    scored: RawSplit
    conceded: RawSplit


class RawStandingsGroup(TypedDict, total=False):
    group: str
    standings: list[RawStanding]


class RawStandingsStage(TypedDict, total=False):
    groups: list[RawStandingsGroup]


class RawStandingsData(TypedDict, total=False):
    id: int
    stages: list[RawStandingsStage]


class RawStructureTeam(TypedDict, total=False):
    id: int
    team: str


class RawStructureGroup(TypedDict, total=False):
    id: int
    group: str
    teams: list[RawStructureTeam]


class RawStructureStage(TypedDict, total=False):
    """One stage of TournamentStructure; ``type`` is "League" or a knockout label."""

    id: int
    stage: str
    order: int
    rounds: int
    type: str
    groups: list[RawStructureGroup]


class RawTournamentStructure(RawTournament, total=False):
    gender: str
    stages: list[RawStructureStage]
