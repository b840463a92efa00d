"""Pure transforms from raw upstream JSON to the output models.

Upstream schemas are treated as unstable. Every nested read goes through
:func:`dig` and the ``as_*`` coercers, so a missing or wrongly typed field
becomes the model's declared default instead of an exception.
"""

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

from loguru import logger

from nhl_stats.models.enums import Conference, GameSide
from nhl_stats.models.outputs import (
    CareerStats,
    EspnGame,
    GameSnapshot,
    GoalieLine,
    LeaderEntry,
    LeaderLine,
    PlayerBio,
    PlayerOutput,
    RecentGame,
    Roster,
    RosterPlayer,
    ScheduledGame,
    ScheduleDay,
    ScorerSnapshot,
    SeasonStats,
    StandingRow,
    StandingSummary,
    TeamInfo,
    TeamSnapshot,
    TeamStanding,
)

T = TypeVar("T")

_INTEGER = re.compile(r"^-?\d+$")

OVERVIEW_LIMIT = 5
REPORT_LEADERS_LIMIT = 5
RECENT_GAMES_LIMIT = 5


# ---------------------------------------------------------------------------
# Defensive access
# ---------------------------------------------------------------------------


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """Walks ``path`` through nested dicts/lists, returning ``default`` on any miss."""
    current = data
    for step in path:
        if isinstance(step, int) and isinstance(current, list):
            if -len(current) <= step < len(current):
                current = current[step]
                continue
            return default
        if isinstance(current, dict) and step in current:
            current = current[step]
            continue
        return default
    return default if current is None else current


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def as_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, float)) else None


def as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value)
    return None


def as_text(value: Any) -> Optional[str]:
    """Plain strings pass through; NHL ``{"default": ...}`` objects are unwrapped."""
    if isinstance(value, dict):
        value = value.get("default")
    return value if isinstance(value, str) else None


def full_name(record: Any) -> Optional[str]:
    parts = [as_text(dig(record, "firstName")), as_text(dig(record, "lastName"))]
    parts = [p for p in parts if p]
    return " ".join(parts) if parts else None


def format_streak(code: Any, count: Any) -> Optional[str]:
    """``("W", 4)`` -> ``"W4"``."""
    code, count = as_text(code), as_number(count)
    if code is None or count is None:
        return None
    return f"{code}{count}"


def format_record(wins: Any, losses: Any, ot_losses: Any) -> Optional[str]:
    """``(30, 12, 5)`` -> ``"30-12-5"``."""
    parts = [as_number(wins), as_number(losses), as_number(ot_losses)]
    if any(p is None for p in parts):
        return None
    return "-".join(str(p) for p in parts)


def shape_each(items: Any, shaper: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Applies ``shaper`` to every dict in ``items``, skipping anything else."""
    shaped = []
    for item in as_list(items):
        if not isinstance(item, dict):
            logger.debug(f"Skipping non-object entry: {type(item).__name__}")
            continue
        shaped.append(shaper(item))
    return shaped


# ---------------------------------------------------------------------------
# Standings
# ---------------------------------------------------------------------------


def filter_conference(teams: Iterable[Dict[str, Any]], conference: Conference) -> List[Dict[str, Any]]:
    teams = [t for t in teams if isinstance(t, dict)]
    if conference.code is None:
        return teams
    return [t for t in teams if dig(t, "conferenceAbbrev") == conference.code]


def _record(t: Dict[str, Any]) -> Optional[str]:
    return format_record(dig(t, "wins"), dig(t, "losses"), dig(t, "otLosses"))


def _last10(t: Dict[str, Any]) -> Optional[str]:
    return format_record(dig(t, "l10Wins"), dig(t, "l10Losses"), dig(t, "l10OtLosses"))


def _streak(t: Dict[str, Any]) -> Optional[str]:
    return format_streak(dig(t, "streakCode"), dig(t, "streakCount"))


def shape_standing_row(t: Dict[str, Any]) -> StandingRow:
    return StandingRow(
        team=as_text(dig(t, "teamAbbrev")),
        team_name=as_text(dig(t, "teamName")),
        conference=as_text(dig(t, "conferenceAbbrev")),
        division=as_text(dig(t, "divisionName")),
        games_played=as_number(dig(t, "gamesPlayed")),
        wins=as_number(dig(t, "wins")),
        losses=as_number(dig(t, "losses")),
        ot_losses=as_number(dig(t, "otLosses")),
        points=as_number(dig(t, "points")),
        point_pctg=as_number(dig(t, "pointPctg")),
        goal_for=as_number(dig(t, "goalFor")),
        goal_against=as_number(dig(t, "goalAgainst")),
        goal_differential=as_number(dig(t, "goalDifferential")),
        record=_record(t),
        streak=_streak(t),
        last10=_last10(t),
    )


def shape_standing_summary(t: Dict[str, Any]) -> StandingSummary:
    return StandingSummary(
        rank=as_number(dig(t, "leagueSequence")),
        team=as_text(dig(t, "teamAbbrev")),
        points=as_number(dig(t, "points")),
        record=_record(t),
        goal_diff=as_number(dig(t, "goalDifferential")),
        last10=_last10(t),
        streak=_streak(t),
    )


def shape_team_snapshot(t: Dict[str, Any]) -> TeamSnapshot:
    return TeamSnapshot(
        team=as_text(dig(t, "teamAbbrev")),
        points=as_number(dig(t, "points")),
        wins=as_number(dig(t, "wins")),
        losses=as_number(dig(t, "losses")),
        ot_losses=as_number(dig(t, "otLosses")),
        goal_diff=as_number(dig(t, "goalDifferential")),
    )


def find_team_standing(standings: Any, abbrev: str) -> Optional[Dict[str, Any]]:
    for t in as_list(dig(standings, "standings")):
        if as_text(dig(t, "teamAbbrev")) == abbrev:
            return t
    return None


def shape_team_standing(t: Dict[str, Any]) -> TeamStanding:
    return TeamStanding(
        league_rank=as_number(dig(t, "leagueSequence")),
        conference_rank=as_number(dig(t, "conferenceSequence")),
        division_rank=as_number(dig(t, "divisionSequence")),
        points=as_number(dig(t, "points")),
        record=_record(t),
        goal_diff=as_number(dig(t, "goalDifferential")),
        streak=_streak(t),
    )


# ---------------------------------------------------------------------------
# Leaders
# ---------------------------------------------------------------------------


def shape_leaders(leaders: Any, category: str, limit: int) -> List[LeaderEntry]:
    """Top ``limit`` entries of one category, ranked in upstream order."""
    entries = [p for p in as_list(dig(leaders, category)) if isinstance(p, dict)]
    return [
        LeaderEntry(
            rank=idx + 1,
            name=full_name(p),
            team=as_text(dig(p, "teamAbbrev")),
            position=as_text(dig(p, "position")),
            value=as_number(dig(p, "value")),
        )
        for idx, p in enumerate(entries[:limit])
    ]


def shape_leader_lines(leaders: Any, category: str, limit: int = REPORT_LEADERS_LIMIT) -> List[LeaderLine]:
    entries = as_list(dig(leaders, category))[:limit]
    return shape_each(
        entries,
        lambda p: LeaderLine(
            name=full_name(p),
            team=as_text(dig(p, "teamAbbrev")),
            value=as_number(dig(p, "value")),
        ),
    )


def shape_goalie_lines(leaders: Any, limit: int = REPORT_LEADERS_LIMIT) -> List[GoalieLine]:
    entries = as_list(dig(leaders, "savePctg"))[:limit]
    return shape_each(
        entries,
        lambda p: GoalieLine(
            name=full_name(p),
            team=as_text(dig(p, "teamAbbrev")),
            save_pctg=as_number(dig(p, "value")),
        ),
    )


def shape_top_scorers(leaders: Any, limit: int = OVERVIEW_LIMIT) -> List[ScorerSnapshot]:
    entries = as_list(dig(leaders, "points"))[:limit]
    return shape_each(
        entries,
        lambda p: ScorerSnapshot(
            name=full_name(p),
            team=as_text(dig(p, "teamAbbrev")),
            points=as_number(dig(p, "value")),
        ),
    )


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------


def shape_game_snapshot(g: Dict[str, Any]) -> GameSnapshot:
    return GameSnapshot(
        home=as_text(dig(g, "homeTeam", "abbrev")) or "TBD",
        away=as_text(dig(g, "awayTeam", "abbrev")) or "TBD",
        state=as_text(dig(g, "gameState")),
        home_score=as_number(dig(g, "homeTeam", "score")),
        away_score=as_number(dig(g, "awayTeam", "score")),
    )


def shape_scheduled_game(g: Dict[str, Any]) -> ScheduledGame:
    return ScheduledGame(
        game_id=as_int(dig(g, "id")),
        home=as_text(dig(g, "homeTeam", "abbrev")),
        away=as_text(dig(g, "awayTeam", "abbrev")),
        state=as_text(dig(g, "gameState")),
        home_score=as_number(dig(g, "homeTeam", "score")),
        away_score=as_number(dig(g, "awayTeam", "score")),
        start_time=as_text(dig(g, "startTimeUTC")),
        venue=as_text(dig(g, "venue")),
    )


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------


def shape_player(data: Any) -> PlayerOutput:
    season = dig(data, "featuredStats", "regularSeason", "subSeason", default={})
    career = dig(data, "featuredStats", "regularSeason", "career", default={})
    return PlayerOutput(
        player=PlayerBio(
            id=as_int(dig(data, "playerId")),
            name=full_name(data),
            team=as_text(dig(data, "currentTeamAbbrev")),
            team_name=as_text(dig(data, "fullTeamName")),
            number=as_number(dig(data, "sweaterNumber")),
            position=as_text(dig(data, "position")),
            birth_date=as_text(dig(data, "birthDate")),
            birth_city=as_text(dig(data, "birthCity")),
            birth_country=as_text(dig(data, "birthCountry")),
            height=as_number(dig(data, "heightInCentimeters")),
            weight=as_number(dig(data, "weightInKilograms")),
            shoots=as_text(dig(data, "shootsCatches")),
        ),
        current_season=SeasonStats(
            games_played=as_number(dig(season, "gamesPlayed")),
            goals=as_number(dig(season, "goals")),
            assists=as_number(dig(season, "assists")),
            points=as_number(dig(season, "points")),
            plus_minus=as_number(dig(season, "plusMinus")),
            pim=as_number(dig(season, "pim")),
            power_play_goals=as_number(dig(season, "powerPlayGoals")),
            game_winning_goals=as_number(dig(season, "gameWinningGoals")),
            shots=as_number(dig(season, "shots")),
            shooting_pctg=as_number(dig(season, "shootingPctg")),
        ),
        career=CareerStats(
            games_played=as_number(dig(career, "gamesPlayed")),
            goals=as_number(dig(career, "goals")),
            assists=as_number(dig(career, "assists")),
            points=as_number(dig(career, "points")),
        ),
        headshot=as_text(dig(data, "headshot")),
    )


# ---------------------------------------------------------------------------
# Team
# ---------------------------------------------------------------------------


def shape_team_info(abbrev: str, standing: Optional[Dict[str, Any]]) -> TeamInfo:
    return TeamInfo(
        abbrev=abbrev,
        name=as_text(dig(standing, "teamName")),
        conference=as_text(dig(standing, "conferenceName")),
        division=as_text(dig(standing, "divisionName")),
    )


def shape_roster_player(p: Dict[str, Any]) -> RosterPlayer:
    return RosterPlayer(
        id=as_int(dig(p, "id")),
        name=full_name(p),
        number=as_number(dig(p, "sweaterNumber")),
        position=as_text(dig(p, "positionCode")),
        birth_country=as_text(dig(p, "birthCountry")),
    )


def shape_roster(roster: Any) -> Roster:
    return Roster(
        forwards=shape_each(dig(roster, "forwards"), shape_roster_player),
        defensemen=shape_each(dig(roster, "defensemen"), shape_roster_player),
        goalies=shape_each(dig(roster, "goalies"), shape_roster_player),
    )


def shape_recent_games(schedule: Any, abbrev: str, limit: int = RECENT_GAMES_LIMIT) -> List[RecentGame]:
    """Last ``limit`` games of a club schedule, seen from ``abbrev``'s side."""

    def shape(g: Dict[str, Any]) -> RecentGame:
        home = as_text(dig(g, "homeTeam", "abbrev"))
        away = as_text(dig(g, "awayTeam", "abbrev"))
        is_home = home == abbrev
        return RecentGame(
            date=as_text(dig(g, "gameDate")),
            opponent=away if is_home else home,
            home=is_home,
            result=as_text(dig(g, "gameOutcome", "lastPeriodType")),
        )

    games = [g for g in as_list(dig(schedule, "games")) if isinstance(g, dict)]
    return shape_each(games[-limit:] if limit else [], shape)


# ---------------------------------------------------------------------------
# ESPN scoreboard
# ---------------------------------------------------------------------------


def _espn_competitor(competitors: List[Any], side: GameSide) -> Dict[str, Any]:
    for c in competitors:
        if isinstance(c, dict) and c.get("homeAway") == side.value:
            return c
    return {}


def shape_espn_game(event: Dict[str, Any]) -> EspnGame:
    competition = dig(event, "competitions", 0, default={})
    competitors = as_list(dig(competition, "competitors"))
    home = _espn_competitor(competitors, GameSide.HOME)
    away = _espn_competitor(competitors, GameSide.AWAY)
    return EspnGame(
        id=as_text(dig(event, "id")),
        name=as_text(dig(event, "name")),
        short_name=as_text(dig(event, "shortName")),
        start_time=as_text(dig(event, "date")),
        state=as_text(dig(event, "status", "type", "state")),
        detail=as_text(dig(event, "status", "type", "shortDetail")),
        home=as_text(dig(home, "team", "abbreviation")),
        away=as_text(dig(away, "team", "abbreviation")),
        home_score=as_int(dig(home, "score")),
        away_score=as_int(dig(away, "score")),
        venue=as_text(dig(competition, "venue", "fullName")),
    )


def shape_schedule_day(day: str, scoreboard: Any) -> ScheduleDay:
    games = shape_each(dig(scoreboard, "events"), shape_espn_game)
    return ScheduleDay(date=day, games=games, count=len(games))
