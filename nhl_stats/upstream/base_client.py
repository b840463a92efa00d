from abc import ABC
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from nhl_stats.config.settings import settings

DEFAULT_TIMEOUT_SECONDS = 30.0


class UpstreamError(Exception):
    """Raised when an upstream source fails or answers with a non-success status."""

    def __init__(
        self,
        source: str,
        url: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.source = source
        self.url = url
        self.status_code = status_code
        self.detail = detail
        if status_code is not None:
            message = f"{source} API error: {status_code}"
        else:
            message = f"{source} API unreachable"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class BaseUpstreamClient(ABC):
    """Abstract base class for read-only JSON upstream sources.

    Every call is a single GET attempt: no retries, no backoff. Callers that
    can live without a particular payload decide that themselves (see
    ``nhl_stats.plans.fetch_plan``).
    """

    source: str = "Upstream"

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or settings.user_agent
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
            follow_redirects=True,
        )

    async def fetch_json(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """GETs ``base_url + path`` and returns the decoded JSON body.

        Raises:
            UpstreamError: on transport failure, a non-2xx status, or a body
                that is not JSON. ``status_code`` is ``None`` for transport
                failures.
        """
        url = f"{self.base_url}{path}"
        logger.debug("Fetching {} {} params={}", self.source, url, params)
        try:
            response = await self.client.get(
                url, params=params, headers={"User-Agent": self.user_agent}
            )
        except httpx.RequestError as e:
            logger.error(f"Request error for {self.source} at {url}: {e}")
            raise UpstreamError(self.source, url, detail=str(e)) from e

        if not response.is_success:
            logger.warning(
                f"{self.source} returned {response.status_code} for {url}"
            )
            raise UpstreamError(self.source, url, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.source} at {url}: {e}")
            raise UpstreamError(
                self.source, url, response.status_code, detail="invalid JSON body"
            ) from e

    async def close(self):
        """Closes the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()
            logger.info(f"Closed HTTP client for {self.source}")
