"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from fmiweather.config.defaults import (
    DEFAULT_STATION_ID,
    DEFAULT_YEAR,
    FMI_BASE_URL,
    STORED_QUERY_DAILY,
)


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class FmiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = FMI_BASE_URL
    stored_query_id: str = STORED_QUERY_DAILY
    fetch_timeout_seconds: float = Field(default=3.0, gt=0.0)
    user_agent: str = "fmiweather/0.1.0"


class ReportConfig(BaseModel):
    model_config = {"extra": "forbid"}

    hot_day_threshold: float = 25.0
    hot_day_marker: str = "hellepäivä"
    hot_day_label: str = "hellepäivät"
    default_year: str = Field(default=DEFAULT_YEAR, min_length=4, max_length=4)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    request_deadline_seconds: float = Field(default=5.0, gt=0.0)
    default_station_id: str = Field(default=DEFAULT_STATION_ID, pattern=r"^[0-9]+$")
    log_level: LogLevel = LogLevel.DEBUG
    local_timezone: str | None = None  # IANA name; None = system zone


class DumpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    path: str = "failed.xml"


class ServiceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    fmi: FmiConfig = FmiConfig()
    report: ReportConfig = ReportConfig()
    server: ServerConfig = ServerConfig()
    dump: DumpConfig = DumpConfig()
