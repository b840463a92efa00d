from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import Conference, LeaderCategory


class OperationInput(BaseModel):
    """Base for operation inputs. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EmptyInput(OperationInput):
    pass


class ConferenceInput(OperationInput):
    conference: Conference = Field(
        Conference.ALL, description="Conference filter: eastern, western or all."
    )


class PlayerInput(OperationInput):
    player_id: int = Field(
        ..., gt=0, description="NHL player ID (e.g., 8478402 for McDavid)."
    )


class LeadersInput(OperationInput):
    category: LeaderCategory = Field(
        LeaderCategory.POINTS, description="Stat category to rank by."
    )
    limit: int = Field(10, ge=1, le=25, description="Number of leaders to return.")


class TeamInput(OperationInput):
    team: str = Field(
        ...,
        min_length=1,
        description='Team name or abbreviation (e.g., "Bruins", "BOS", "Boston").',
    )


class ScheduleInput(OperationInput):
    start_date: Optional[date] = Field(
        None, description="First day (YYYY-MM-DD). Defaults to today (UTC)."
    )
    days: int = Field(3, ge=1, le=7, description="Number of consecutive days.")
