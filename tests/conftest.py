"""Shared fixtures: canned upstream payloads and httpx.MockTransport-backed clients."""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from nhl_stats.config.settings import AppSettings
from nhl_stats.operations import handlers  # noqa: F401  (registers operations)
from nhl_stats.operations.registry import OperationContext
from nhl_stats.upstream.espn_client import ESPNClient
from nhl_stats.upstream.nhl_client import NHLClient

NHL_BASE = "https://api-web.nhle.com/v1"
ESPN_BASE = "https://site.api.espn.com/apis/site/v2/sports/hockey/nhl"


class FakeUpstream:
    """MockTransport handler serving canned JSON by URL path.

    A route value may be a payload (served with 200), an int (served as an
    empty response with that status), or an exception instance (raised).
    A route key may carry a query string (``/path?dates=20250115``), which
    wins over the bare path.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.requests: List[httpx.Request] = []

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        query = request.url.query.decode()
        path = request.url.path
        route = self.routes.get(f"{path}?{query}") if query else None
        if route is None:
            route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route)
        return httpx.Response(200, json=route)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def nhl_route(path: str) -> str:
    return f"/v1{path}"


def espn_route(path: str) -> str:
    return f"/apis/site/v2/sports/hockey/nhl{path}"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


def _team(abbrev, name, conf, conf_name, division, wins, losses, otl, points, gd,
          streak_code, streak_count, seq):
    return {
        "teamAbbrev": {"default": abbrev},
        "teamName": {"default": name},
        "conferenceAbbrev": conf,
        "conferenceName": conf_name,
        "divisionName": division,
        "gamesPlayed": wins + losses + otl,
        "wins": wins,
        "losses": losses,
        "otLosses": otl,
        "points": points,
        "pointPctg": round(points / (2 * (wins + losses + otl)), 3),
        "goalFor": 150,
        "goalAgainst": 150 - gd,
        "goalDifferential": gd,
        "streakCode": streak_code,
        "streakCount": streak_count,
        "l10Wins": 6,
        "l10Losses": 3,
        "l10OtLosses": 1,
        "leagueSequence": seq,
        "conferenceSequence": seq,
        "divisionSequence": seq,
    }


@pytest.fixture
def standings_payload() -> Dict[str, Any]:
    return {
        "standingsDateTimeUtc": "2025-01-15T12:00:00Z",
        "standings": [
            _team("WSH", "Washington Capitals", "E", "Eastern", "Metropolitan",
                  30, 11, 4, 64, 40, "W", 4, 1),
            _team("WPG", "Winnipeg Jets", "W", "Western", "Central",
                  30, 12, 3, 63, 38, "L", 1, 2),
            _team("BOS", "Boston Bruins", "E", "Eastern", "Atlantic",
                  24, 17, 5, 53, -2, "OT", 2, 12),
            _team("EDM", "Edmonton Oilers", "W", "Western", "Pacific",
                  28, 13, 4, 60, 25, "W", 2, 4),
        ],
    }


def _leader(first, last, team, value, position="C"):
    return {
        "firstName": {"default": first},
        "lastName": {"default": last},
        "teamAbbrev": team,
        "position": position,
        "value": value,
    }


@pytest.fixture
def skater_leaders_payload() -> Dict[str, Any]:
    return {
        "goals": [
            _leader("Leon", "Draisaitl", "EDM", 34),
            _leader("Kyle", "Connor", "WPG", 27, "L"),
            _leader("William", "Nylander", "TOR", 26, "R"),
            _leader("Sam", "Reinhart", "FLA", 25),
            _leader("Alex", "Ovechkin", "WSH", 24, "L"),
            _leader("Brayden", "Point", "TBL", 24),
        ],
        "assists": [
            _leader("Connor", "McDavid", "EDM", 48),
            _leader("Nikita", "Kucherov", "TBL", 45, "R"),
        ],
        "points": [
            _leader("Nathan", "MacKinnon", "COL", 75),
            _leader("Nikita", "Kucherov", "TBL", 70, "R"),
            _leader("Leon", "Draisaitl", "EDM", 69),
            _leader("Connor", "McDavid", "EDM", 68),
            _leader("Kirill", "Kaprizov", "MIN", 60, "L"),
            _leader("Mitch", "Marner", "TOR", 59, "R"),
        ],
        "plusMinus": [],
    }


@pytest.fixture
def goalie_leaders_payload() -> Dict[str, Any]:
    return {
        "savePctg": [
            _leader("Connor", "Hellebuyck", "WPG", 0.927, "G"),
            _leader("Logan", "Thompson", "WSH", 0.919, "G"),
        ],
        "gaa": [
            _leader("Connor", "Hellebuyck", "WPG", 2.01, "G"),
            _leader("Logan", "Thompson", "WSH", 2.22, "G"),
        ],
    }


@pytest.fixture
def scores_payload() -> Dict[str, Any]:
    return {
        "games": [
            {
                "id": 2024020700,
                "gameState": "LIVE",
                "startTimeUTC": "2025-01-15T00:00:00Z",
                "venue": {"default": "Capital One Arena"},
                "homeTeam": {"abbrev": "WSH", "score": 2},
                "awayTeam": {"abbrev": "BOS", "score": 1},
            },
            {
                "id": 2024020701,
                "gameState": "FUT",
                "startTimeUTC": "2025-01-15T02:00:00Z",
                "homeTeam": {"abbrev": "EDM"},
                "awayTeam": {},
            },
        ]
    }


@pytest.fixture
def player_payload() -> Dict[str, Any]:
    return {
        "playerId": 8478402,
        "firstName": {"default": "Connor"},
        "lastName": {"default": "McDavid"},
        "currentTeamAbbrev": "EDM",
        "fullTeamName": {"default": "Edmonton Oilers"},
        "sweaterNumber": 97,
        "position": "C",
        "birthDate": "1997-01-13",
        "birthCity": {"default": "Richmond Hill"},
        "birthCountry": "CAN",
        "heightInCentimeters": 185,
        "weightInKilograms": 88,
        "shootsCatches": "L",
        "headshot": "https://assets.nhle.com/mugs/nhl/20242025/EDM/8478402.png",
        "featuredStats": {
            "regularSeason": {
                "subSeason": {
                    "gamesPlayed": 42,
                    "goals": 20,
                    "assists": 48,
                    "points": 68,
                    "plusMinus": 12,
                    "pim": 14,
                    "powerPlayGoals": 5,
                    "gameWinningGoals": 4,
                    "shots": 130,
                    "shootingPctg": 0.1538,
                },
                "career": {"gamesPlayed": 700, "goals": 355, "assists": 650, "points": 1005},
            }
        },
    }


def _skater(pid, first, last, number, position, country="CAN"):
    return {
        "id": pid,
        "firstName": {"default": first},
        "lastName": {"default": last},
        "sweaterNumber": number,
        "positionCode": position,
        "birthCountry": country,
    }


@pytest.fixture
def roster_payload() -> Dict[str, Any]:
    return {
        "forwards": [
            _skater(8477956, "David", "Pastrnak", 88, "R", "CZE"),
            _skater(8478443, "Brad", "Marchand", 63, "L"),
        ],
        "defensemen": [_skater(8479325, "Charlie", "McAvoy", 73, "D", "USA")],
        "goalies": [_skater(8480280, "Jeremy", "Swayman", 1, "G", "USA")],
    }


@pytest.fixture
def club_schedule_payload() -> Dict[str, Any]:
    opponents = ["TOR", "MTL", "OTT", "BUF", "DET", "FLA", "TBL"]
    games = []
    for i, opp in enumerate(opponents):
        home = i % 2 == 0
        games.append(
            {
                "gameDate": f"2025-01-{i + 1:02d}",
                "homeTeam": {"abbrev": "BOS" if home else opp},
                "awayTeam": {"abbrev": opp if home else "BOS"},
                "gameOutcome": {"lastPeriodType": "OT" if i == 6 else "REG"},
            }
        )
    return {"games": games}


def _espn_event(event_id, home, away, home_score, away_score, state="post"):
    return {
        "id": event_id,
        "name": f"{away} at {home}",
        "shortName": f"{away} @ {home}",
        "date": "2025-01-15T00:00Z",
        "status": {"type": {"state": state, "shortDetail": "Final" if state == "post" else "7:00 PM"}},
        "competitions": [
            {
                "venue": {"fullName": "TD Garden"},
                "competitors": [
                    {"homeAway": "home", "score": home_score, "team": {"abbreviation": home}},
                    {"homeAway": "away", "score": away_score, "team": {"abbreviation": away}},
                ],
            }
        ],
    }


@pytest.fixture
def espn_scoreboard_payload() -> Dict[str, Any]:
    return {
        "events": [
            _espn_event("401687001", "BOS", "TOR", "4", "2"),
            _espn_event("401687002", "EDM", "CGY", "0", "0", state="pre"),
        ]
    }


# ---------------------------------------------------------------------------
# Clients and context
# ---------------------------------------------------------------------------


@pytest.fixture
def make_ctx():
    """Builds an OperationContext whose clients talk to FakeUpstream handlers.

    Returns ``(ctx, nhl_fake, espn_fake)``.
    """

    def build(nhl_routes=None, espn_routes=None, settings: Optional[AppSettings] = None):
        nhl_fake = FakeUpstream({nhl_route(k): v for k, v in (nhl_routes or {}).items()})
        espn_fake = FakeUpstream({espn_route(k): v for k, v in (espn_routes or {}).items()})
        ctx = OperationContext(
            nhl=NHLClient(client=nhl_fake.client(), base_url=NHL_BASE),
            espn=ESPNClient(client=espn_fake.client(), base_url=ESPN_BASE),
        )
        if settings is not None:
            ctx.settings = settings
        return ctx, nhl_fake, espn_fake

    return build


@pytest.fixture
def league_routes(standings_payload, skater_leaders_payload, goalie_leaders_payload, scores_payload):
    return {
        "/standings/now": standings_payload,
        "/skater-stats-leaders/current": skater_leaders_payload,
        "/goalie-stats-leaders/current": goalie_leaders_payload,
        "/score/now": scores_payload,
    }


@pytest.fixture
def debug_logging():
    """Adds a DEBUG loguru sink for the test and yields the captured messages."""
    from loguru import logger

    messages: List[str] = []
    sink_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)
