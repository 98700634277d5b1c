"""Fixed-width text report of daily temperatures."""

import math

from fmiweather.models.observation import HOT_DAY_THRESHOLD, AggregateMap

HOT_DAY_MARKER = "hellepäivä"
HOT_DAY_LABEL = "hellepäivät"


def format_temp(value: float) -> str:
    """Two decimals, or NaN for a missing value."""
    if math.isnan(value):
        return "NaN"
    return f"{value:.2f}"


def count_hot_days(dates: AggregateMap, threshold: float = HOT_DAY_THRESHOLD) -> int:
    return sum(1 for agg in dates.values() if agg.is_hot(threshold))


def render_report(
    dates: AggregateMap,
    threshold: float = HOT_DAY_THRESHOLD,
    marker: str = HOT_DAY_MARKER,
    label: str = HOT_DAY_LABEL,
) -> str:
    """One line per date in ascending order, then the hot day total."""
    lines = []
    hot_count = 0
    for date in sorted(dates):
        agg = dates[date]
        flag = ""
        if agg.is_hot(threshold):
            flag = marker
            hot_count += 1
        lines.append(
            f"{date:<16} min={format_temp(agg.min):<7} "
            f"avg={format_temp(agg.avg):<7} max={format_temp(agg.max):<7} "
            f"{flag:>16}\n"
        )
    lines.append(f"\nTotal number of {label}: {hot_count}\n")
    return "".join(lines)
