"""HTTP surface for the NHL stats operations.

Endpoints:
- GET  /health                      - Health check
- GET  /entrypoints                 - Operation keys, descriptions, prices, input schemas
- POST /entrypoints/{key}/invoke    - Run one operation, body {"input": {...}}
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Path, Request
from loguru import logger
from pydantic import BaseModel, Field

from nhl_stats.config.settings import settings
from nhl_stats.operations import handlers  # noqa: F401  (registers operations)
from nhl_stats.operations.registry import (
    InputValidationError,
    OperationContext,
    UnknownOperationError,
    registry,
)
from nhl_stats.upstream.base_client import UpstreamError
from nhl_stats.upstream.espn_client import ESPNClient
from nhl_stats.upstream.nhl_client import NHLClient


class InvokeRequest(BaseModel):
    input: Dict[str, Any] = Field(default_factory=dict)


def create_app(
    nhl_client: Optional[NHLClient] = None,
    espn_client: Optional[ESPNClient] = None,
) -> FastAPI:
    """Builds the app. Upstream clients are created on startup unless injected."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.agent_name} v{settings.agent_version}")
        nhl = nhl_client or NHLClient()
        espn = espn_client or ESPNClient()
        app.state.ctx = OperationContext(nhl=nhl, espn=espn)

        yield

        logger.info(f"Shutting down {settings.agent_name}")
        await nhl.close()
        await espn.close()

    app = FastAPI(
        title=settings.agent_name,
        description=settings.agent_description,
        version=settings.agent_version,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "name": settings.agent_name,
            "version": settings.agent_version,
        }

    @app.get("/entrypoints")
    async def list_entrypoints():
        operations = [op.describe() for op in registry.list_operations()]
        return {"entrypoints": operations, "count": len(operations)}

    @app.post("/entrypoints/{key}/invoke")
    async def invoke(
        request: Request,
        key: str = Path(..., description="Operation key, e.g. 'standings'"),
        body: Optional[InvokeRequest] = None,
    ):
        """Validate input, run the operation, and return ``{"output": ...}``."""
        raw_input = body.input if body else {}
        try:
            return await registry.invoke(key, raw_input, request.app.state.ctx)
        except UnknownOperationError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InputValidationError as e:
            raise HTTPException(status_code=400, detail=e.errors)
        except UpstreamError as e:
            logger.error(f"Upstream failure in '{key}': {e}")
            raise HTTPException(
                status_code=502,
                detail={
                    "message": str(e),
                    "source": e.source,
                    "upstream_status": e.status_code,
                },
            )
        except Exception as e:
            logger.exception(f"Unexpected error in '{key}': {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    return app
