"""Per-request outcome returned to the HTTP layer."""

from dataclasses import dataclass
from enum import StrEnum

from fmiweather.models.observation import WeatherQuery


class OutcomeStatus(StrEnum):
    READY = "ready"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ReportOutcome:
    status: OutcomeStatus
    query: WeatherQuery
    body: str
    error: str | None = None
    skipped: int = 0
    hot_days: int = 0

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.READY
