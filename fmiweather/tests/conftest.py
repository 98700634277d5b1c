"""Shared test fixtures."""

from datetime import timedelta, timezone
from pathlib import Path

import pytest
import yaml

from fmiweather.config.schema import ServiceConfig

HELSINKI_SUMMER = timezone(timedelta(hours=3))

WFS_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<wfs:FeatureCollection timeStamp="2019-07-01T09:12:44Z" '
    'xmlns:wfs="http://www.opengis.net/wfs/2.0" '
    'xmlns:BsWfs="http://xml.fmi.fi/schema/wfs/2.0">\n'
)
WFS_MEMBER = (
    "  <wfs:member><BsWfs:BsWfsElement>"
    "<BsWfs:Time>{time}</BsWfs:Time>"
    "<BsWfs:ParameterName>{name}</BsWfs:ParameterName>"
    "<BsWfs:ParameterValue>{value}</BsWfs:ParameterValue>"
    "</BsWfs:BsWfsElement></wfs:member>\n"
)


def wfs_payload(records: list[tuple[str, str, str]]) -> bytes:
    """Build a minimal FMI simple-feature response from (time, name, value)."""
    body = "".join(
        WFS_MEMBER.format(time=t, name=n, value=v) for t, n, v in records
    )
    return (WFS_HEADER + body + "</wfs:FeatureCollection>\n").encode()


@pytest.fixture
def make_payload():
    return wfs_payload


@pytest.fixture
def helsinki_tz() -> timezone:
    """Fixed UTC+3 so local dates do not depend on the test host."""
    return HELSINKI_SUMMER


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def kaisaniemi_xml(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "fmi_daily_kaisaniemi_2019.xml").read_bytes()


@pytest.fixture
def test_config(tmp_path: Path) -> ServiceConfig:
    """Default config with a short deadline and dumps under tmp_path."""
    return ServiceConfig(
        server={"request_deadline_seconds": 0.5},
        dump={"path": str(tmp_path / "failed.xml")},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "fmi": {"fetch_timeout_seconds": 2.0},
        "server": {"port": 9090, "default_station_id": "101004"},
        "report": {"hot_day_threshold": 27.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
