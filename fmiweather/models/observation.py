"""FMI WFS observation data models."""

import math
from dataclasses import dataclass, field
from enum import StrEnum

HOT_DAY_THRESHOLD = 25.0


@dataclass(frozen=True)
class ObservationRecord:
    time: str  # ISO-8601 with offset, e.g. "2019-06-01T00:00:00Z"
    parameter_name: str  # "tmax", "tday", "tmin", ...
    parameter_value: str  # float as text, may be "NaN"


@dataclass(frozen=True)
class FeatureCollection:
    timestamp: str
    members: list[ObservationRecord]


@dataclass
class DailyAggregate:
    min: float = math.nan
    avg: float = math.nan
    max: float = math.nan

    def is_hot(self, threshold: float = HOT_DAY_THRESHOLD) -> bool:
        # NaN compares False
        return self.max > threshold


AggregateMap = dict[str, DailyAggregate]


class SkipReason(StrEnum):
    INVALID_VALUE = "invalid_value"
    NAN_VALUE = "nan_value"
    INVALID_TIME = "invalid_time"


@dataclass(frozen=True)
class SkippedRecord:
    index: int
    reason: SkipReason
    detail: str


@dataclass
class ParseResult:
    dates: AggregateMap = field(default_factory=dict)
    skipped: list[SkippedRecord] = field(default_factory=list)
    server_timestamp: str = ""
    record_count: int = 0


@dataclass
class WeatherQuery:
    station_id: str
    year: str
    dates: AggregateMap = field(default_factory=dict)
