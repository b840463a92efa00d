"""Output contracts for every operation.

Each model declares its defaults explicitly: a field the upstream payload
does not provide serializes as ``null`` (scalars) or ``[]`` (lists). Fields
are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class ShapedModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_output(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# overview
# ---------------------------------------------------------------------------


class TeamSnapshot(ShapedModel):
    team: Optional[str] = None
    points: Optional[Number] = None
    wins: Optional[Number] = None
    losses: Optional[Number] = None
    ot_losses: Optional[Number] = None
    goal_diff: Optional[Number] = None


class ScorerSnapshot(ShapedModel):
    name: Optional[str] = None
    team: Optional[str] = None
    points: Optional[Number] = None


class GameSnapshot(ShapedModel):
    home: str = "TBD"
    away: str = "TBD"
    state: Optional[str] = None
    home_score: Optional[Number] = None
    away_score: Optional[Number] = None


class OverviewOutput(ShapedModel):
    top_teams: List[TeamSnapshot] = Field(default_factory=list)
    top_scorers: List[ScorerSnapshot] = Field(default_factory=list)
    today_games: List[GameSnapshot] = Field(default_factory=list)
    fetched_at: str
    data_source: str = "NHL Official API (live)"


# ---------------------------------------------------------------------------
# standings
# ---------------------------------------------------------------------------


class StandingRow(ShapedModel):
    team: Optional[str] = None
    team_name: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None
    games_played: Optional[Number] = None
    wins: Optional[Number] = None
    losses: Optional[Number] = None
    ot_losses: Optional[Number] = None
    points: Optional[Number] = None
    point_pctg: Optional[Number] = None
    goal_for: Optional[Number] = None
    goal_against: Optional[Number] = None
    goal_differential: Optional[Number] = None
    record: Optional[str] = None
    streak: Optional[str] = None
    last10: Optional[str] = None


class StandingsOutput(ShapedModel):
    standings: List[StandingRow] = Field(default_factory=list)
    as_of: Optional[str] = None
    count: int = 0


# ---------------------------------------------------------------------------
# player
# ---------------------------------------------------------------------------


class PlayerBio(ShapedModel):
    id: Optional[int] = None
    name: Optional[str] = None
    team: Optional[str] = None
    team_name: Optional[str] = None
    number: Optional[Number] = None
    position: Optional[str] = None
    birth_date: Optional[str] = None
    birth_city: Optional[str] = None
    birth_country: Optional[str] = None
    height: Optional[Number] = None
    weight: Optional[Number] = None
    shoots: Optional[str] = None


class SeasonStats(ShapedModel):
    games_played: Optional[Number] = None
    goals: Optional[Number] = None
    assists: Optional[Number] = None
    points: Optional[Number] = None
    plus_minus: Optional[Number] = None
    pim: Optional[Number] = None
    power_play_goals: Optional[Number] = None
    game_winning_goals: Optional[Number] = None
    shots: Optional[Number] = None
    shooting_pctg: Optional[Number] = None


class CareerStats(ShapedModel):
    games_played: Optional[Number] = None
    goals: Optional[Number] = None
    assists: Optional[Number] = None
    points: Optional[Number] = None


class PlayerOutput(ShapedModel):
    player: PlayerBio
    current_season: SeasonStats
    career: CareerStats
    headshot: Optional[str] = None


# ---------------------------------------------------------------------------
# leaders
# ---------------------------------------------------------------------------


class LeaderEntry(ShapedModel):
    rank: int
    name: Optional[str] = None
    team: Optional[str] = None
    position: Optional[str] = None
    value: Optional[Number] = None


class LeadersOutput(ShapedModel):
    category: str
    leaders: List[LeaderEntry] = Field(default_factory=list)
    count: int = 0
    fetched_at: str


# ---------------------------------------------------------------------------
# team
# ---------------------------------------------------------------------------


class TeamInfo(ShapedModel):
    abbrev: str
    name: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None


class TeamStanding(ShapedModel):
    league_rank: Optional[Number] = None
    conference_rank: Optional[Number] = None
    division_rank: Optional[Number] = None
    points: Optional[Number] = None
    record: Optional[str] = None
    goal_diff: Optional[Number] = None
    streak: Optional[str] = None


class RosterPlayer(ShapedModel):
    id: Optional[int] = None
    name: Optional[str] = None
    number: Optional[Number] = None
    position: Optional[str] = None
    birth_country: Optional[str] = None


class Roster(ShapedModel):
    forwards: List[RosterPlayer] = Field(default_factory=list)
    defensemen: List[RosterPlayer] = Field(default_factory=list)
    goalies: List[RosterPlayer] = Field(default_factory=list)


class RecentGame(ShapedModel):
    date: Optional[str] = None
    opponent: Optional[str] = None
    home: bool = False
    result: Optional[str] = None


class TeamOutput(ShapedModel):
    team: TeamInfo
    standing: Optional[TeamStanding] = None
    roster: Roster = Field(default_factory=Roster)
    recent_games: List[RecentGame] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


class StandingSummary(ShapedModel):
    rank: Optional[Number] = None
    team: Optional[str] = None
    points: Optional[Number] = None
    record: Optional[str] = None
    goal_diff: Optional[Number] = None
    last10: Optional[str] = None
    streak: Optional[str] = None


class LeaderLine(ShapedModel):
    name: Optional[str] = None
    team: Optional[str] = None
    value: Optional[Number] = None


class GoalieLine(ShapedModel):
    name: Optional[str] = None
    team: Optional[str] = None
    save_pctg: Optional[Number] = None


class ReportLeaders(ShapedModel):
    goals: List[LeaderLine] = Field(default_factory=list)
    assists: List[LeaderLine] = Field(default_factory=list)
    points: List[LeaderLine] = Field(default_factory=list)
    goalies: List[GoalieLine] = Field(default_factory=list)


class ScheduledGame(ShapedModel):
    game_id: Optional[int] = None
    home: Optional[str] = None
    away: Optional[str] = None
    state: Optional[str] = None
    home_score: Optional[Number] = None
    away_score: Optional[Number] = None
    start_time: Optional[str] = None
    venue: Optional[str] = None


class ReportSummary(ShapedModel):
    teams_count: int = 0
    games_count: int = 0
    as_of: Optional[str] = None


class ReportOutput(ShapedModel):
    standings: List[StandingSummary] = Field(default_factory=list)
    leaders: ReportLeaders = Field(default_factory=ReportLeaders)
    today_schedule: List[ScheduledGame] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    generated_at: str


# ---------------------------------------------------------------------------
# schedule (ESPN)
# ---------------------------------------------------------------------------


class EspnGame(ShapedModel):
    id: Optional[str] = None
    name: Optional[str] = None
    short_name: Optional[str] = None
    start_time: Optional[str] = None
    state: Optional[str] = None
    detail: Optional[str] = None
    home: Optional[str] = None
    away: Optional[str] = None
    home_score: Optional[Number] = None
    away_score: Optional[Number] = None
    venue: Optional[str] = None


class ScheduleDay(ShapedModel):
    date: str
    games: List[EspnGame] = Field(default_factory=list)
    count: int = 0


class ScheduleOutput(ShapedModel):
    days: List[ScheduleDay] = Field(default_factory=list)
    count: int = 0
    data_source: str = "ESPN (live)"
