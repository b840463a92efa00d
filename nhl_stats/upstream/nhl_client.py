# nhl_stats/upstream/nhl_client.py

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from nhl_stats.config.settings import settings
from .base_client import BaseUpstreamClient


class NHLClient(BaseUpstreamClient):
    """Client for the official NHL web API (api-web.nhle.com)."""

    source: str = "NHL"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(base_url or settings.nhl_api_base_url, client=client, **kwargs)

    # ==================== League-wide ====================

    async def get_standings(self) -> Dict[str, Any]:
        return await self.fetch_json("/standings/now")

    async def get_skater_leaders(self) -> Dict[str, Any]:
        return await self.fetch_json("/skater-stats-leaders/current")

    async def get_goalie_leaders(self) -> Dict[str, Any]:
        return await self.fetch_json("/goalie-stats-leaders/current")

    async def get_scores(self) -> Dict[str, Any]:
        """Today's games with live scores."""
        return await self.fetch_json("/score/now")

    # ==================== Player ====================

    async def get_player_landing(self, player_id: int) -> Dict[str, Any]:
        return await self.fetch_json(f"/player/{player_id}/landing")

    # ==================== Team ====================

    async def get_roster(self, team_abbrev: str) -> Dict[str, Any]:
        return await self.fetch_json(f"/roster/{quote(team_abbrev, safe='')}/current")

    async def get_club_schedule(self, team_abbrev: str) -> Dict[str, Any]:
        """Full current-season schedule for a club."""
        return await self.fetch_json(f"/club-schedule-season/{quote(team_abbrev, safe='')}/now")
