"""
statsync/models/team.py

Purpose:
    Canonical team document. Squad size, foreign player count, average age,
    rank and market value are estimates derived from performance stats, and
    home/away splits use a fixed 60/40 ratio. None of these are rostered or
    measured values.

Dependencies:
    - pydantic
    - statsync.models.common
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from statsync.models.common import (
    CanonicalRecord,
    HomeAway,
    HomeAwayAverage,
    HomeAwayTotal,
    LeagueRef,
    TeamRef,
)


class StatsSummary(BaseModel):
    games_played: HomeAway = Field(default_factory=HomeAway)
    wins: HomeAway = Field(default_factory=HomeAway)
    draws: HomeAway = Field(default_factory=HomeAway)
    loses: HomeAway = Field(default_factory=HomeAway)
    goals_scored: HomeAway = Field(default_factory=HomeAway)
    goals_conceded: HomeAway = Field(default_factory=HomeAway)
    goal_difference: int = 0
    clean_sheet_games: int = 0


class TeamAttacking(BaseModel):
    penalty_goals: int = 0
    goals_per_game: float = 0.0
    free_kick_goals: int = 0
    goals_from_inside_the_box: int = 0
    goals_from_outside_the_box: int = 0
    left_foot_goals: int = 0
    right_foot_goals: int = 0
    headed_goals: int = 0
    big_chances_per_game: float = 0.0
    big_chances_missed_per_game: float = 0.0
    total_shots_per_game: float = 0.0
    shots_on_target_per_game: float = 0.0
    shots_off_target_per_game: float = 0.0
    blocked_shots_per_game: float = 0.0
    successful_dribbles_per_game: float = 0.0
    corners_per_game: float = 0.0
    free_kicks_per_game: float = 0.0
    hit_woodwork: int = 0
    counter_attacks: int = 0


class TeamDefending(BaseModel):
    clean_sheets: int = 0
    goals_conceded_per_game: float = 0.0
    tackles_per_game: float = 0.0
    interceptions_per_game: float = 0.0
    clearances_per_game: float = 0.0
    saves_per_game: float = 0.0
    balls_recovered_per_game: float = 0.0
    errors_leading_to_shot: int = 0
    errors_leading_to_goal: int = 0
    penalties_committed: int = 0
    penalty_goals_conceded: int = 0
    clearance_off_line: int = 0
    last_man_tackle: int = 0


class TeamPassing(BaseModel):
    """Percentages are integers in [0, 100]."""

    ball_possession: int = 50
    accurate_per_game: float = 0.0
    acc_own_half: int = 0
    acc_opposition_half: int = 0
    acc_long_balls: int = 0
    acc_crosses: int = 0


class TeamOthers(BaseModel):
    duels_won_per_game: float = 0.0
    ground_duels_won: int = 0
    aerial_duels_won: int = 0
    possession_lost_per_game: float = 0.0
    throw_ins_per_game: float = 0.0
    goal_kicks_per_game: float = 0.0
    offsides_per_game: float = 0.0
    fouls_per_game: float = 0.0
    yellow_cards_per_game: float = 0.0
    red_cards: int = 0


class GoalsBlock(BaseModel):
    total: HomeAwayTotal = Field(default_factory=HomeAwayTotal)
    average: HomeAwayAverage = Field(default_factory=HomeAwayAverage)


class TeamGoals(BaseModel):
    scored: GoalsBlock = Field(default_factory=GoalsBlock)
    conceded: GoalsBlock = Field(default_factory=GoalsBlock)


class Streaks(BaseModel):
    wins: int = 0
    draws: int = 0
    loses: int = 0


class Biggest(BaseModel):
    streak: Streaks = Field(default_factory=Streaks)


class Fixtures(BaseModel):
    played: HomeAwayTotal = Field(default_factory=HomeAwayTotal)
    wins: HomeAwayTotal = Field(default_factory=HomeAwayTotal)
    draws: HomeAwayTotal = Field(default_factory=HomeAwayTotal)
    loses: HomeAwayTotal = Field(default_factory=HomeAwayTotal)


class TeamTournamentStats(BaseModel):
    tournament_id: int
    league: LeagueRef | None = None
    rank: int = 20
    average_team_rating: float = 0.0
    team: TeamRef = Field(default_factory=TeamRef)
    form: str = ""
    korastats_stats: dict[str, float] = Field(default_factory=dict)
    unknown_stats: dict[str, float] = Field(default_factory=dict)
    attacking: TeamAttacking = Field(default_factory=TeamAttacking)
    defending: TeamDefending = Field(default_factory=TeamDefending)
    passing: TeamPassing = Field(default_factory=TeamPassing)
    others: TeamOthers = Field(default_factory=TeamOthers)
    clean_sheet: HomeAwayTotal = Field(default_factory=HomeAwayTotal)
    goals: TeamGoals = Field(default_factory=TeamGoals)
    biggest: Biggest = Field(default_factory=Biggest)
    fixtures: Fixtures = Field(default_factory=Fixtures)


class Venue(BaseModel):
    id: int = 0
    name: str = "Unknown Stadium"
    address: str = "Unknown Address"
    capacity: int = 20000
    surface: str = "Grass"
    city: str = "Riyadh"
    image: str = ""


class StaffCoach(BaseModel):
    id: int = 0
    name: str = "Unknown Coach"
    current: bool = True


class TeamTrophy(BaseModel):
    league: str
    country: str = "Saudi Arabia"
    season: str


class MatchPoint(BaseModel):
    date: str
    timestamp: int
    goals_scored: int = 0
    goals_conceded: int = 0
    opponent: TeamRef = Field(default_factory=TeamRef)
    is_home: bool = False


class GoalsOverTimePoint(MatchPoint):
    goal_difference: int = 0


class FormOverTimePoint(MatchPoint):
    result: str = "D"


class TeamRecord(CanonicalRecord):
    name: str
    code: str = ""
    logo: str = ""
    founded: int | None = None
    national: bool = False
    country: str = "Saudi Arabia"

    club_market_value: str = "€1.0M"
    total_players: int = 20
    foreign_players: int = 3
    average_player_age: int = 24
    rank: int = 20

    venue: Venue = Field(default_factory=Venue)
    coaches: list[StaffCoach] = Field(default_factory=list)
    trophies: list[TeamTrophy] = Field(default_factory=list)

    tournament_ids: list[int] = Field(default_factory=list)
    tournament_stats: list[TeamTournamentStats] = Field(default_factory=list)
    stats_summary: StatsSummary = Field(default_factory=StatsSummary)

    goals_over_time: list[GoalsOverTimePoint] = Field(default_factory=list)
    form_over_time: list[FormOverTimePoint] = Field(default_factory=list)
