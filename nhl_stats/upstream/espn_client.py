# nhl_stats/upstream/espn_client.py

from datetime import date
from typing import Any, Dict, Optional

import httpx

from nhl_stats.config.settings import settings
from .base_client import BaseUpstreamClient


class ESPNClient(BaseUpstreamClient):
    """Client for ESPN's public NHL site API."""

    source: str = "ESPN"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(base_url or settings.espn_api_base_url, client=client, **kwargs)

    async def get_scoreboard(self, day: date) -> Dict[str, Any]:
        """Scoreboard (scheduled, live and final games) for a single day."""
        return await self.fetch_json(
            "/scoreboard", params={"dates": day.strftime("%Y%m%d")}
        )
