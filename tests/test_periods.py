"""Tests for resolutions, period keys and query windows."""

from datetime import date, datetime, timedelta, timezone

import pytest

from sales_analytics_app.core.periods.period_key import PeriodKey, add_months, period_range, sunday_weekday
from sales_analytics_app.core.periods.resolution import (
    Resolution,
    select_projection_resolution,
    select_trend_resolution,
)
from sales_analytics_app.core.periods.windows import projection_window, recommendation_window, trend_window
from tests.factories import NOW


class TestResolutionSelection:

    @pytest.mark.parametrize("days,expected", [
        (0, Resolution.MONTHLY),
        (1, Resolution.DAILY),
        (14, Resolution.DAILY),
        (15, Resolution.WEEKLY),
        (90, Resolution.WEEKLY),
        (91, Resolution.MONTHLY),
        (365, Resolution.MONTHLY),
    ])
    def test_projection_resolution(self, days, expected):
        assert select_projection_resolution(days) is expected

    @pytest.mark.parametrize("days,expected", [
        (0, Resolution.YEARLY),
        (3, Resolution.HOURLY),
        (4, Resolution.DAILY),
        (14, Resolution.DAILY),
        (90, Resolution.WEEKLY),
        (365, Resolution.MONTHLY),
        (730, Resolution.QUARTERLY),
        (731, Resolution.YEARLY),
    ])
    def test_trend_resolution(self, days, expected):
        assert select_trend_resolution(days) is expected

    def test_negative_range_rejected(self):
        with pytest.raises(ValueError):
            select_projection_resolution(-1)
        with pytest.raises(ValueError):
            select_trend_resolution(-30)

    def test_coarser_steps_up_and_stops_at_yearly(self):
        assert Resolution.HOURLY.coarser() is Resolution.DAILY
        assert Resolution.QUARTERLY.coarser() is Resolution.YEARLY
        assert Resolution.YEARLY.coarser() is None

    def test_labels_follow_coarsening_order(self):
        assert [r.label for r in Resolution] == ["hourly", "daily", "weekly", "monthly", "quarterly", "yearly"]


class TestPeriodKey:

    @pytest.mark.parametrize("resolution,label", [
        (Resolution.HOURLY, "2024-06-15 12:00"),
        (Resolution.DAILY, "2024-06-15"),
        (Resolution.WEEKLY, "2024-06-09 to 2024-06-15"),
        (Resolution.MONTHLY, "2024-06"),
        (Resolution.QUARTERLY, "2024-Q2"),
        (Resolution.YEARLY, "2024"),
    ])
    def test_labels(self, resolution, label):
        assert PeriodKey.containing(datetime(2024, 6, 15, 12, 34), resolution).label == label

    def test_weeks_start_on_sunday(self):
        key = PeriodKey.containing(datetime(2024, 6, 9), Resolution.WEEKLY)
        assert key.start == datetime(2024, 6, 9)
        assert key.weekday == 0
        assert key.end == datetime(2024, 6, 16)

    def test_next_rolls_over_year(self):
        key = PeriodKey.containing(datetime(2023, 12, 5), Resolution.MONTHLY)
        assert key.next().label == "2024-01"
        q4 = PeriodKey.containing(datetime(2023, 11, 5), Resolution.QUARTERLY)
        assert q4.next().label == "2024-Q1"

    def test_contains_is_half_open(self):
        key = PeriodKey.containing(datetime(2024, 6, 15), Resolution.DAILY)
        assert key.contains(datetime(2024, 6, 15, 23, 59))
        assert not key.contains(datetime(2024, 6, 16))
        assert key.contains(date(2024, 6, 15))

    def test_aware_timestamps_normalized_to_utc(self):
        moment = datetime(2024, 6, 15, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
        assert PeriodKey.containing(moment, Resolution.DAILY).label == "2024-06-16"

    def test_keys_order_chronologically(self):
        a = PeriodKey.containing(datetime(2024, 1, 31), Resolution.DAILY)
        b = PeriodKey.containing(datetime(2024, 2, 1), Resolution.DAILY)
        assert a < b
        assert sorted([b, a]) == [a, b]

    def test_period_range_is_inclusive_and_gap_free(self):
        keys = period_range(datetime(2024, 1, 30), datetime(2024, 3, 2), Resolution.MONTHLY)
        assert [k.label for k in keys] == ["2024-01", "2024-02", "2024-03"]

        days = period_range(datetime(2024, 2, 27, 15), datetime(2024, 3, 1, 8), Resolution.DAILY)
        assert [k.label for k in days] == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"]

    def test_period_range_empty_when_reversed(self):
        assert period_range(datetime(2024, 3, 1), datetime(2024, 2, 1), Resolution.DAILY) == []

    def test_helpers(self):
        assert sunday_weekday(datetime(2024, 6, 9)) == 0
        assert sunday_weekday(datetime(2024, 6, 15)) == 6
        assert add_months(datetime(2024, 11, 1), 3) == datetime(2025, 2, 1)


class TestWindows:

    def test_projection_window_is_symmetric_around_now(self):
        window = projection_window(30, NOW)
        assert window.start == NOW - timedelta(days=30)
        assert window.end == NOW + timedelta(days=30)
        assert window.current == NOW
        assert not window.is_fallback

    def test_all_time_projection_mirrors_history(self):
        bounds = (datetime(2024, 1, 1), datetime(2024, 3, 1))
        window = projection_window(0, NOW, bounds)
        assert window.start == datetime(2024, 1, 1)
        assert window.end == datetime(2024, 4, 30)

    def test_all_time_without_sales_falls_back_to_a_year_each_way(self):
        window = projection_window(0, NOW, None)
        assert window.is_fallback
        assert window.start == datetime(2023, 6, 15, 12)
        assert window.end == datetime(2025, 6, 15, 12)

    def test_trend_window(self):
        assert trend_window(7, NOW).start == NOW - timedelta(days=7)
        assert trend_window(7, NOW).end == NOW

        bounds = (datetime(2022, 5, 1), datetime(2024, 6, 1))
        window = trend_window(0, NOW, bounds)
        assert window.start == datetime(2022, 5, 1)
        assert window.end == datetime(2024, 6, 8)

        fallback = trend_window(0, NOW, None)
        assert fallback.is_fallback
        assert fallback.days == pytest.approx(365)

    @pytest.mark.parametrize("days,expected", [(30, 30), (0, 90), (-5, 90)])
    def test_recommendation_window_defaults_to_90_days(self, days, expected):
        window = recommendation_window(days, NOW)
        assert window.end == NOW
        assert window.days == pytest.approx(expected)
