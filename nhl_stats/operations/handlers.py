"""Operation handlers.

Each handler declares its fetch plan, runs it, and hands the raw payloads
to the shapers. Importing this module registers every operation on
``nhl_stats.operations.registry.registry``.
"""

from datetime import datetime, timedelta, timezone

from loguru import logger

from nhl_stats.models.inputs import (
    ConferenceInput,
    EmptyInput,
    LeadersInput,
    PlayerInput,
    ScheduleInput,
    TeamInput,
)
from nhl_stats.models.outputs import (
    LeadersOutput,
    OverviewOutput,
    PlayerOutput,
    ReportLeaders,
    ReportOutput,
    ReportSummary,
    ScheduleOutput,
    StandingsOutput,
    TeamOutput,
)
from nhl_stats.normalization import shapers
from nhl_stats.normalization.resolver import UnknownTeamError
from nhl_stats.plans.fetch_plan import FetchPlan, FetchTask
from nhl_stats.utils.misc_utils import utc_now_iso
from .registry import InputValidationError, OperationContext, registry

NO_GAMES = {"games": []}


@registry.entrypoint(
    key="overview",
    description="Free NHL overview - top teams, leading scorers, and today's games",
    input_model=EmptyInput,
    price=0,
)
async def overview(params: EmptyInput, ctx: OperationContext) -> OverviewOutput:
    data = await FetchPlan(
        [
            FetchTask("standings", ctx.nhl.get_standings),
            FetchTask("leaders", ctx.nhl.get_skater_leaders),
            FetchTask("scores", ctx.nhl.get_scores, required=False, fallback=NO_GAMES),
        ]
    ).run()

    top_teams = shapers.as_list(shapers.dig(data["standings"], "standings"))
    today_games = shapers.as_list(shapers.dig(data["scores"], "games"))
    return OverviewOutput(
        top_teams=shapers.shape_each(top_teams[: shapers.OVERVIEW_LIMIT], shapers.shape_team_snapshot),
        top_scorers=shapers.shape_top_scorers(data["leaders"]),
        today_games=shapers.shape_each(today_games[: shapers.OVERVIEW_LIMIT], shapers.shape_game_snapshot),
        fetched_at=utc_now_iso(),
    )


@registry.entrypoint(
    key="standings",
    description="Full NHL standings by conference and division",
    input_model=ConferenceInput,
    price=1000,
)
async def standings(params: ConferenceInput, ctx: OperationContext) -> StandingsOutput:
    data = await ctx.nhl.get_standings()
    teams = shapers.filter_conference(
        shapers.as_list(shapers.dig(data, "standings")), params.conference
    )
    rows = [shapers.shape_standing_row(t) for t in teams]
    return StandingsOutput(
        standings=rows,
        as_of=shapers.as_text(shapers.dig(data, "standingsDateTimeUtc")),
        count=len(rows),
    )


@registry.entrypoint(
    key="player",
    description="Get detailed player stats by NHL player ID",
    input_model=PlayerInput,
    price=2000,
)
async def player(params: PlayerInput, ctx: OperationContext) -> PlayerOutput:
    data = await ctx.nhl.get_player_landing(params.player_id)
    return shapers.shape_player(data)


@registry.entrypoint(
    key="leaders",
    description="NHL stats leaders - goals, assists, points, and more",
    input_model=LeadersInput,
    price=2000,
)
async def leaders(params: LeadersInput, ctx: OperationContext) -> LeadersOutput:
    if params.category.is_goalie:
        data = await ctx.nhl.get_goalie_leaders()
    else:
        data = await ctx.nhl.get_skater_leaders()

    entries = shapers.shape_leaders(data, params.category.value, params.limit)
    return LeadersOutput(
        category=params.category.value,
        leaders=entries,
        count=len(entries),
        fetched_at=utc_now_iso(),
    )


def _resolve_team(params: TeamInput, ctx: OperationContext) -> str:
    if ctx.settings.strict_team_lookup:
        try:
            return ctx.resolver.resolve_strict(params.team)
        except UnknownTeamError as e:
            raise InputValidationError(
                "team",
                [{"loc": ("team",), "msg": str(e), "type": "unknown_team", "input": params.team}],
            ) from e

    abbrev = ctx.resolver.resolve(params.team)
    if not ctx.resolver.is_known(params.team):
        logger.warning(f"Team '{params.team}' is not a known alias; guessing '{abbrev}'")
    return abbrev


@registry.entrypoint(
    key="team",
    description="Team details with roster and recent performance",
    input_model=TeamInput,
    price=3000,
)
async def team(params: TeamInput, ctx: OperationContext) -> TeamOutput:
    abbrev = _resolve_team(params, ctx)
    data = await FetchPlan(
        [
            FetchTask("roster", lambda: ctx.nhl.get_roster(abbrev)),
            FetchTask("standings", ctx.nhl.get_standings),
            FetchTask(
                "schedule",
                lambda: ctx.nhl.get_club_schedule(abbrev),
                required=False,
                fallback=NO_GAMES,
            ),
        ]
    ).run()

    standing = shapers.find_team_standing(data["standings"], abbrev)
    return TeamOutput(
        team=shapers.shape_team_info(abbrev, standing),
        standing=shapers.shape_team_standing(standing) if standing else None,
        roster=shapers.shape_roster(data["roster"]),
        recent_games=shapers.shape_recent_games(data["schedule"], abbrev),
    )


@registry.entrypoint(
    key="report",
    description="Full NHL report - standings, leaders, and today's schedule",
    input_model=ConferenceInput,
    price=5000,
)
async def report(params: ConferenceInput, ctx: OperationContext) -> ReportOutput:
    data = await FetchPlan(
        [
            FetchTask("standings", ctx.nhl.get_standings),
            FetchTask("skaters", ctx.nhl.get_skater_leaders),
            FetchTask("goalies", ctx.nhl.get_goalie_leaders),
            FetchTask("scores", ctx.nhl.get_scores, required=False, fallback=NO_GAMES),
        ]
    ).run()

    teams = shapers.filter_conference(
        shapers.as_list(shapers.dig(data["standings"], "standings")), params.conference
    )
    summary_rows = [shapers.shape_standing_summary(t) for t in teams]
    games = shapers.shape_each(shapers.dig(data["scores"], "games"), shapers.shape_scheduled_game)

    return ReportOutput(
        standings=summary_rows,
        leaders=ReportLeaders(
            goals=shapers.shape_leader_lines(data["skaters"], "goals"),
            assists=shapers.shape_leader_lines(data["skaters"], "assists"),
            points=shapers.shape_leader_lines(data["skaters"], "points"),
            goalies=shapers.shape_goalie_lines(data["goalies"]),
        ),
        today_schedule=games,
        summary=ReportSummary(
            teams_count=len(summary_rows),
            games_count=len(games),
            as_of=shapers.as_text(shapers.dig(data["standings"], "standingsDateTimeUtc")),
        ),
        generated_at=utc_now_iso(),
    )


@registry.entrypoint(
    key="schedule",
    description="NHL schedule and scores for up to a week of consecutive days (ESPN)",
    input_model=ScheduleInput,
    price=2000,
)
async def schedule(params: ScheduleInput, ctx: OperationContext) -> ScheduleOutput:
    start = params.start_date or datetime.now(timezone.utc).date()
    days = [start + timedelta(days=offset) for offset in range(params.days)]

    # One day at a time to keep the load on ESPN bounded
    data = await FetchPlan(
        [FetchTask(day.isoformat(), lambda d=day: ctx.espn.get_scoreboard(d)) for day in days],
        concurrent=False,
    ).run()

    shaped_days = [shapers.shape_schedule_day(day, data[day]) for day in data]
    return ScheduleOutput(
        days=shaped_days,
        count=sum(d.count for d in shaped_days),
    )
