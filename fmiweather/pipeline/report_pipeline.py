"""Report pipeline: fetch, parse and render a yearly station report per request."""

import asyncio
import logging
from datetime import datetime
from typing import Protocol

from fmiweather.config.loader import resolve_timezone
from fmiweather.config.schema import ServiceConfig
from fmiweather.errors import (
    FetchError,
    MalformedEnvelopeError,
    OrchestratorTimeoutError,
)
from fmiweather.ingest.fmi_client import client_from_config
from fmiweather.ingest.observation_parser import parse_observations
from fmiweather.models.observation import WeatherQuery
from fmiweather.models.reporting import OutcomeStatus, ReportOutcome
from fmiweather.reporting.formatters import count_hot_days, render_report

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "data read timeout"
FETCH_FAILED_MESSAGE = "data fetch failed"
PARSE_FAILED_MESSAGE = "data parse failed"


class ObservationSource(Protocol):
    async def fetch(self, year: str, station_id: str) -> bytes: ...


def resolve_station(raw: str | None, default: str) -> str:
    return raw if raw else default


def resolve_year(raw: str | None, default: str) -> str:
    """Any 4-character value is accepted as is; anything else means default."""
    if raw is None or len(raw) != 4:
        return default
    return raw


class ReportPipeline:
    def __init__(self, config: ServiceConfig, source: ObservationSource | None = None):
        self.config = config
        self.source = source or client_from_config(config.fmi)
        self.tz = resolve_timezone(config)
        dump = config.dump
        self.dump_path = dump.path if dump.enabled else None

    async def fetch_with_deadline(self, query: WeatherQuery) -> bytes:
        """Run the fetch as its own task, cancelled if the deadline passes."""
        deadline = self.config.server.request_deadline_seconds
        task = asyncio.create_task(self.source.fetch(query.year, query.station_id))
        try:
            return await asyncio.wait_for(task, timeout=deadline)
        except TimeoutError as e:
            raise OrchestratorTimeoutError(
                f"no data within {deadline:.1f}s"
            ) from e

    async def run(self, station_id: str | None = None, year: str | None = None) -> ReportOutcome:
        """Produce exactly one outcome for a station/year request."""
        query = WeatherQuery(
            station_id=resolve_station(station_id, self.config.server.default_station_id),
            year=resolve_year(year, self.config.report.default_year),
        )
        logger.info("get with fmisid %s year %s", query.station_id, query.year)

        try:
            raw = await self.fetch_with_deadline(query)
        except OrchestratorTimeoutError as e:
            logger.error("channel read timeout for station %s: %s", query.station_id, e)
            return ReportOutcome(OutcomeStatus.TIMED_OUT, query, TIMEOUT_MESSAGE, error=str(e))
        except FetchError as e:
            logger.error("failed to fetch data for station %s: %s", query.station_id, e)
            return ReportOutcome(OutcomeStatus.FAILED, query, FETCH_FAILED_MESSAGE, error=str(e))

        try:
            result = parse_observations(raw, self.tz, self.dump_path)
        except MalformedEnvelopeError as e:
            return ReportOutcome(OutcomeStatus.MALFORMED, query, PARSE_FAILED_MESSAGE, error=str(e))

        query.dates = result.dates
        report_cfg = self.config.report
        report = render_report(
            query.dates,
            threshold=report_cfg.hot_day_threshold,
            marker=report_cfg.hot_day_marker,
            label=report_cfg.hot_day_label,
        )
        header = f"Data at {datetime.now().strftime('%H:%M:%S')} year {query.year}:\n\n"
        return ReportOutcome(
            OutcomeStatus.READY,
            query,
            header + report,
            skipped=len(result.skipped),
            hot_days=count_hot_days(query.dates, report_cfg.hot_day_threshold),
        )
