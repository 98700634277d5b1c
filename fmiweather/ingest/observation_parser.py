"""Observation parser: folds an FMI WFS feature collection into daily aggregates."""

import logging
import math
import re
import time
import xml.etree.ElementTree as ET
from datetime import datetime, tzinfo
from pathlib import Path

from fmiweather.errors import MalformedEnvelopeError
from fmiweather.ingest.payload_dump import dump_payload
from fmiweather.models.observation import (
    AggregateMap,
    DailyAggregate,
    FeatureCollection,
    ObservationRecord,
    ParseResult,
    SkippedRecord,
    SkipReason,
)

logger = logging.getLogger(__name__)

WFS_NS = "http://www.opengis.net/wfs/2.0"
BSWFS_NS = "http://xml.fmi.fi/schema/wfs/2.0"

RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)
INFINITY_SPELLINGS = {"inf", "infinity"}

FEATURE_COLLECTION_TAG = f"{{{WFS_NS}}}FeatureCollection"
BSWFS_ELEMENT_TAG = f"{{{BSWFS_NS}}}BsWfsElement"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(elem: ET.Element, name: str) -> str:
    for child in elem:
        if _local_name(child.tag) == name:
            return child.text or ""
    return ""


def decode_feature_collection(data: bytes) -> FeatureCollection:
    """Decode raw bytes into a FeatureCollection.

    Raises MalformedEnvelopeError if the payload is not well-formed XML or
    its root is not a WFS 2.0 FeatureCollection.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedEnvelopeError(f"XML error: {e}") from e

    if root.tag != FEATURE_COLLECTION_TAG:
        raise MalformedEnvelopeError(f"Unexpected root element: {root.tag}")

    members: list[ObservationRecord] = []
    for member in root:
        if _local_name(member.tag) != "member":
            continue
        for elem in member.findall(BSWFS_ELEMENT_TAG):
            members.append(
                ObservationRecord(
                    time=_child_text(elem, "Time").strip(),
                    parameter_name=_child_text(elem, "ParameterName").strip(),
                    parameter_value=_child_text(elem, "ParameterValue").strip(),
                )
            )

    return FeatureCollection(timestamp=root.get("timeStamp", ""), members=members)


def parse_value(text: str) -> float:
    """Parse a parameter value as a float.

    Digit separators and finite literals that overflow to infinity are
    rejected; explicit inf spellings pass through.
    Raises ValueError for anything else float() cannot read.
    """
    if "_" in text:
        raise ValueError(f"digit separator in value: {text}")
    value = float(text)
    if math.isinf(value) and text.lstrip("+-").lower() not in INFINITY_SPELLINGS:
        raise ValueError(f"value out of range: {text}")
    return value


def local_date(timestamp: str, tz: tzinfo | None = None) -> str:
    """Convert an RFC 3339 timestamp to a local YYYY-MM-DD date.

    ``tz`` of None converts to the system local zone.
    Raises ValueError for unparsable timestamps or ones without an offset.
    """
    if not RFC3339_RE.fullmatch(timestamp):
        raise ValueError(f"not an RFC 3339 timestamp: {timestamp}")
    instant = datetime.fromisoformat(timestamp)
    return instant.astimezone(tz).strftime("%Y-%m-%d")


def fold_records(
    records: list[ObservationRecord], tz: tzinfo | None = None
) -> tuple[AggregateMap, list[SkippedRecord]]:
    """Fold observation records into a date-keyed aggregate map.

    Unusable records are skipped and reported, never fatal. A later record
    for the same date and parameter replaces the earlier value.
    """
    dates: AggregateMap = {}
    skipped: list[SkippedRecord] = []

    for i, rec in enumerate(records):
        try:
            value = parse_value(rec.parameter_value)
        except ValueError:
            logger.warning("failed to parse value: %r", rec.parameter_value)
            skipped.append(SkippedRecord(i, SkipReason.INVALID_VALUE, rec.parameter_value))
            continue

        if math.isnan(value):
            skipped.append(SkippedRecord(i, SkipReason.NAN_VALUE, rec.parameter_value))
            continue

        try:
            date = local_date(rec.time, tz)
        except ValueError:
            logger.warning("failed to parse date: %r", rec.time)
            skipped.append(SkippedRecord(i, SkipReason.INVALID_TIME, rec.time))
            continue

        agg = dates.get(date)
        if agg is None:
            agg = DailyAggregate()

        if rec.parameter_name == "tmax":
            agg.max = value
        elif rec.parameter_name == "tday":
            agg.avg = value
        elif rec.parameter_name == "tmin":
            agg.min = value

        dates[date] = agg

    return dates, skipped


def parse_observations(
    data: bytes,
    tz: tzinfo | None = None,
    dump_path: str | Path | None = None,
) -> ParseResult:
    """Parse a raw WFS response into daily aggregates.

    On a malformed envelope the raw payload is written to ``dump_path``
    (when given) before MalformedEnvelopeError propagates.
    """
    logger.debug("Data received, parsing it")
    start = time.monotonic()
    try:
        fc = decode_feature_collection(data)
    except MalformedEnvelopeError as e:
        logger.error("Malformed FMI payload: %s", e)
        if dump_path is not None:
            e.dump_path = dump_payload(data, dump_path)
        raise
    logger.debug("xml decode took %.3fs", time.monotonic() - start)

    dates, skipped = fold_records(fc.members, tz)
    if skipped:
        logger.info(
            "Skipped %d of %d observation records", len(skipped), len(fc.members)
        )

    return ParseResult(
        dates=dates,
        skipped=skipped,
        server_timestamp=fc.timestamp,
        record_count=len(fc.members),
    )
