"""Tests for the fixed-width temperature report."""

import math

from fmiweather.models.observation import DailyAggregate
from fmiweather.reporting.formatters import count_hot_days, format_temp, render_report

NAN = math.nan


def _line(date: str, lo: str, avg: str, hi: str, flag: str = "") -> str:
    return (
        date.ljust(16)
        + " min=" + lo.ljust(7)
        + " avg=" + avg.ljust(7)
        + " max=" + hi.ljust(7)
        + " " + flag.rjust(16)
        + "\n"
    )


class TestFormatTemp:
    def test_two_decimals(self):
        assert format_temp(7.0) == "7.00"
        assert format_temp(-12.345) == "-12.35"

    def test_nan(self):
        assert format_temp(NAN) == "NaN"


class TestRenderReport:
    def test_hot_day_line(self):
        report = render_report({"2019-06-01": DailyAggregate(max=27.5)})
        assert report == (
            _line("2019-06-01", "NaN", "NaN", "27.50", "hellepäivä")
            + "\nTotal number of hellepäivät: 1\n"
        )

    def test_exact_layout(self):
        line = render_report({"2019-06-02": DailyAggregate(14.0, 21.3, 26.1)}).splitlines()[0]
        assert line == (
            "2019-06-02       min=14.00   avg=21.30   max=26.10         hellepäivä"
        )

    def test_sorted_ascending(self):
        dates = {
            "2019-07-15": DailyAggregate(10.0, 15.0, 20.0),
            "2019-01-02": DailyAggregate(-5.0, -2.0, 0.5),
            "2019-03-30": DailyAggregate(0.0, 3.0, 6.0),
        }
        lines = render_report(dates).splitlines()
        assert [ln[:10] for ln in lines[:3]] == ["2019-01-02", "2019-03-30", "2019-07-15"]

    def test_threshold_is_strict(self):
        dates = {
            "2019-06-01": DailyAggregate(max=25.0),
            "2019-06-02": DailyAggregate(max=25.01),
        }
        report = render_report(dates)
        assert not report.splitlines()[0].rstrip().endswith("hellepäivä")
        assert report.splitlines()[1].endswith("hellepäivä")
        assert report.endswith("Total number of hellepäivät: 1\n")

    def test_nan_max_never_hot(self):
        report = render_report({"2019-06-01": DailyAggregate(min=30.0, avg=31.0)})
        assert report.endswith("Total number of hellepäivät: 0\n")
        assert "max=NaN" in report

    def test_empty_map(self):
        assert render_report({}) == "\nTotal number of hellepäivät: 0\n"

    def test_idempotent(self):
        dates = {
            "2019-06-02": DailyAggregate(14.0, 21.3, 26.1),
            "2019-06-01": DailyAggregate(11.2, 17.4, 22.9),
        }
        assert render_report(dates) == render_report(dates)

    def test_does_not_mutate_input(self):
        dates = {"2019-06-01": DailyAggregate(max=27.5)}
        render_report(dates)
        assert list(dates) == ["2019-06-01"]
        assert dates["2019-06-01"].max == 27.5

    def test_custom_threshold_and_labels(self):
        report = render_report(
            {"2019-06-01": DailyAggregate(max=22.0)},
            threshold=20.0, marker="hot day", label="hot days",
        )
        assert report.splitlines()[0].endswith("hot day")
        assert report.endswith("Total number of hot days: 1\n")


class TestCountHotDays:
    def test_counts_only_hot(self):
        dates = {
            "2019-06-01": DailyAggregate(max=26.0),
            "2019-06-02": DailyAggregate(max=25.0),
            "2019-06-03": DailyAggregate(),
            "2019-06-04": DailyAggregate(max=31.2),
        }
        assert count_hot_days(dates) == 2
        assert count_hot_days(dates, threshold=30.0) == 1
