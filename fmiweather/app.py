"""Weather report HTTP service: FastAPI front end for the report pipeline."""

import logging
import re
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

from fmiweather.config.schema import ServiceConfig
from fmiweather.ingest.fmi_client import client_from_config
from fmiweather.pipeline.report_pipeline import ObservationSource, ReportPipeline

logger = logging.getLogger(__name__)

STATION_ID_RE = re.compile(r"[0-9]+")

USAGE = (
    "query server with: /weather/<fmi station id>\n"
    "add optional ?year=NNNN for specific year"
)


def create_app(
    config: ServiceConfig | None = None, source: ObservationSource | None = None
) -> FastAPI:
    """Build the app. ``source`` replaces the FMI client (tests)."""
    config = config or ServiceConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if source is not None:
            yield
            return
        # One connection pool for the process, closed on shutdown
        async with httpx.AsyncClient() as http:
            app.state.pipeline = ReportPipeline(
                config, client_from_config(config.fmi, http_client=http)
            )
            yield

    app = FastAPI(title="FMI Weather Report", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.pipeline = ReportPipeline(config, source)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s\t%.3fs\t%s",
            request.method, client, request.url.path,
            time.monotonic() - start, response.status_code,
        )
        return response

    @app.get("/", response_class=PlainTextResponse)
    def usage():
        return PlainTextResponse(USAGE)

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    async def _report(request: Request, station_id: str, year: str | None):
        pipeline: ReportPipeline = request.app.state.pipeline
        outcome = await pipeline.run(station_id, year)
        status_code = 200 if outcome.ok else 500
        return PlainTextResponse(outcome.body, status_code=status_code)

    @app.get("/weather", response_class=PlainTextResponse)
    @app.get("/weather/", response_class=PlainTextResponse, include_in_schema=False)
    async def weather_default(request: Request, year: str | None = None):
        return await _report(request, "", year)

    @app.get("/weather/{station_id}", response_class=PlainTextResponse)
    async def weather(request: Request, station_id: str, year: str | None = None):
        """Yearly daily temperature report for an FMI station."""
        if not STATION_ID_RE.fullmatch(station_id):
            raise HTTPException(status_code=404, detail="Not Found")
        return await _report(request, station_id, year)

    return app
