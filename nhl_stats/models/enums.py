from enum import Enum
from typing import Optional


class Conference(str, Enum):
    EASTERN = "eastern"
    WESTERN = "western"
    ALL = "all"

    @property
    def code(self) -> Optional[str]:
        """The NHL API's ``conferenceAbbrev`` value, or None for no filter."""
        return {"eastern": "E", "western": "W"}.get(self.value)


class LeaderCategory(str, Enum):
    GOALS = "goals"
    ASSISTS = "assists"
    POINTS = "points"
    PLUS_MINUS = "plusMinus"
    # Goalie categories live on a separate leaders endpoint
    GAA = "gaa"
    SAVE_PCTG = "savePctg"

    @property
    def is_goalie(self) -> bool:
        return self in (LeaderCategory.GAA, LeaderCategory.SAVE_PCTG)


class GameSide(str, Enum):
    HOME = "home"
    AWAY = "away"
