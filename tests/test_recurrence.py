"""Tests for the recurrence engine."""

from datetime import date

import pytest

from daydeck import config
from daydeck.models import Recurrence
from daydeck.timeline.recurrence import (
    next_occurrence,
    next_task_occurrence,
    occurrences_in_range,
    sunday_weekday,
    task_occurrences,
)


def daily(interval=1, end_date=None):
    return Recurrence(frequency="daily", interval=interval, end_date=end_date)


class TestSundayWeekday:
    def test_sunday_is_zero(self):
        assert sunday_weekday(date(2026, 1, 4)) == 0

    def test_monday_is_one(self):
        assert sunday_weekday(date(2026, 1, 5)) == 1

    def test_saturday_is_six(self):
        assert sunday_weekday(date(2026, 1, 10)) == 6


class TestDaily:
    def test_interval_one(self):
        assert next_occurrence("2026-01-05", daily()) == "2026-01-06"

    def test_interval_three(self):
        assert next_occurrence("2026-01-05", daily(3)) == "2026-01-08"

    def test_crosses_month(self):
        assert next_occurrence("2026-01-31", daily()) == "2026-02-01"

    def test_accepts_date_object(self):
        assert next_occurrence(date(2026, 1, 5), daily()) == "2026-01-06"


class TestWeekly:
    def test_plain_weekly(self, weekly):
        assert next_occurrence("2026-01-05", weekly()) == "2026-01-12"

    def test_plain_biweekly(self, weekly):
        assert next_occurrence("2026-01-05", weekly(2)) == "2026-01-19"

    def test_empty_days_list_is_plain_weekly(self, weekly):
        assert next_occurrence("2026-01-05", weekly(days=[])) == "2026-01-12"

    def test_later_day_same_week(self, weekly):
        # 2026-01-05 is a Monday; Wed and Fri listed
        assert next_occurrence("2026-01-05", weekly(days=[3, 5])) == "2026-01-07"

    def test_wraps_to_next_week(self, weekly):
        # Friday, no listed day later this week -> following Monday
        assert next_occurrence("2026-01-09", weekly(days=[1, 3])) == "2026-01-12"

    def test_unsorted_duplicate_days(self, weekly):
        assert next_occurrence("2026-01-05", weekly(days=[5, 3, 3])) == "2026-01-07"

    def test_anchor_not_on_listed_day(self, weekly):
        # Tuesday with only Monday listed
        assert next_occurrence("2026-01-06", weekly(days=[1])) == "2026-01-12"

    def test_saturday_wraps_to_sunday(self, weekly):
        assert next_occurrence("2026-01-10", weekly(days=[0])) == "2026-01-11"

    def test_interval_ignored_within_week(self, weekly):
        # Monday -> Wednesday of the same week even with interval 2
        assert next_occurrence("2026-01-05", weekly(2, days=[1, 3])) == "2026-01-07"

    def test_interval_applies_on_wrap(self, weekly):
        # Wednesday -> skip a week -> Monday 2026-01-19
        assert next_occurrence("2026-01-07", weekly(2, days=[1, 3])) == "2026-01-19"


class TestMonthlyYearly:
    def test_monthly(self):
        rule = Recurrence(frequency="monthly", interval=1)
        assert next_occurrence("2026-01-15", rule) == "2026-02-15"

    def test_monthly_across_year_boundary(self):
        rule = Recurrence(frequency="monthly", interval=2)
        assert next_occurrence("2026-11-15", rule) == "2027-01-15"

    def test_month_end_clamps(self):
        rule = Recurrence(frequency="monthly", interval=1)
        assert next_occurrence("2026-01-31", rule) == "2026-02-28"

    def test_month_end_clamps_leap_year(self):
        rule = Recurrence(frequency="monthly", interval=1)
        assert next_occurrence("2028-01-31", rule) == "2028-02-29"

    def test_clamped_date_becomes_new_anchor(self):
        # The cursor carries the clamped day forward: 31 -> 28 -> 28
        rule = Recurrence(frequency="monthly", interval=1)
        assert occurrences_in_range("2026-01-31", rule, "2026-01-01", "2026-03-31") == [
            "2026-01-31",
            "2026-02-28",
            "2026-03-28",
        ]

    def test_yearly(self):
        rule = Recurrence(frequency="yearly", interval=1)
        assert next_occurrence("2026-03-10", rule) == "2027-03-10"

    def test_yearly_leap_day_clamps(self):
        rule = Recurrence(frequency="yearly", interval=1)
        assert next_occurrence("2028-02-29", rule) == "2029-02-28"


class TestEndDate:
    def test_occurrence_on_end_date_is_kept(self):
        assert next_occurrence("2026-01-05", daily(end_date="2026-01-06")) == "2026-01-06"

    def test_occurrence_after_end_date_is_none(self):
        assert next_occurrence("2026-01-05", daily(end_date="2026-01-05")) is None


class TestUnknownFrequency:
    def test_next_is_none(self):
        assert next_occurrence("2026-01-05", Recurrence(frequency="hourly")) is None

    def test_warning_logged(self, caplog):
        next_occurrence("2026-01-05", Recurrence(frequency="hourly"))
        assert "Unknown recurrence frequency" in caplog.text

    def test_range_keeps_anchor_only(self):
        rule = Recurrence(frequency="hourly")
        assert occurrences_in_range("2026-01-05", rule, "2026-01-01", "2026-01-31") == ["2026-01-05"]

    def test_range_empty_when_anchor_before_range(self):
        rule = Recurrence(frequency="hourly")
        assert occurrences_in_range("2025-12-01", rule, "2026-01-01", "2026-01-31") == []


class TestOccurrencesInRange:
    def test_daily_inclusive_bounds(self):
        assert occurrences_in_range("2026-01-05", daily(), "2026-01-05", "2026-01-08") == [
            "2026-01-05",
            "2026-01-06",
            "2026-01-07",
            "2026-01-08",
        ]

    def test_weekly_in_month(self, weekly):
        assert occurrences_in_range("2026-01-05", weekly(), "2026-01-01", "2026-01-31") == [
            "2026-01-05",
            "2026-01-12",
            "2026-01-19",
            "2026-01-26",
        ]

    def test_respects_end_date(self):
        rule = daily(end_date="2026-01-07")
        assert occurrences_in_range("2026-01-05", rule, "2026-01-01", "2026-01-31") == [
            "2026-01-05",
            "2026-01-06",
            "2026-01-07",
        ]

    def test_fast_forwards_to_range(self, weekly):
        assert occurrences_in_range("2025-12-01", weekly(), "2026-01-05", "2026-01-19") == [
            "2026-01-05",
            "2026-01-12",
            "2026-01-19",
        ]

    def test_fast_forward_lands_inside_range(self, weekly):
        # 2025-12-01 weekly reaches 2026-01-05 first; range starts on the 3rd
        assert occurrences_in_range("2025-12-01", weekly(), "2026-01-03", "2026-01-10") == ["2026-01-05"]

    def test_rule_ends_before_range(self):
        rule = daily(end_date="2026-01-07")
        assert occurrences_in_range("2026-01-05", rule, "2026-01-10", "2026-01-20") == []

    def test_anchor_after_range(self):
        assert occurrences_in_range("2026-02-01", daily(), "2026-01-01", "2026-01-31") == []

    def test_biweekly_with_days(self, weekly):
        rule = weekly(2, days=[1])
        assert occurrences_in_range("2026-01-05", rule, "2026-01-05", "2026-02-10") == [
            "2026-01-05",
            "2026-01-19",
            "2026-02-02",
        ]

    def test_weekly_days_across_weeks(self, weekly):
        rule = weekly(days=[1, 3, 5])
        assert occurrences_in_range("2026-01-05", rule, "2026-01-05", "2026-01-14") == [
            "2026-01-05",
            "2026-01-07",
            "2026-01-09",
            "2026-01-12",
            "2026-01-14",
        ]

    def test_single_day_range(self):
        assert occurrences_in_range("2026-01-01", daily(2), "2026-01-05", "2026-01-05") == ["2026-01-05"]
        assert occurrences_in_range("2026-01-01", daily(2), "2026-01-06", "2026-01-06") == []

    def test_zero_interval_does_not_loop(self):
        assert occurrences_in_range("2026-01-05", daily(0), "2026-01-01", "2026-01-31") == ["2026-01-05"]

    def test_zero_interval_before_range_does_not_loop(self):
        assert occurrences_in_range("2025-12-01", daily(0), "2026-01-01", "2026-01-31") == []

    def test_weekly_days_zero_interval_stops_when_it_wraps_back(self, weekly, caplog):
        # Wednesday -> interval 0 wraps to Monday of the same week
        rule = weekly(0, days=[1, 3])
        assert occurrences_in_range("2026-01-07", rule, "2026-01-01", "2026-12-31") == ["2026-01-07"]
        assert "does not advance" in caplog.text
        assert "Stopped expanding" not in caplog.text

    def test_expansion_cap(self, monkeypatch, caplog):
        monkeypatch.setattr(config, "RECURRENCE_MAX_OCCURRENCES", 3)
        result = occurrences_in_range("2026-01-01", daily(), "2026-01-01", "2026-12-31")
        assert result == ["2026-01-01", "2026-01-02", "2026-01-03"]
        assert "Stopped expanding" in caplog.text


class TestTaskHelpers:
    def test_no_recurrence_next_is_none(self, make_task):
        assert next_task_occurrence(make_task()) is None

    def test_no_recurrence_occurrences_empty(self, make_task):
        assert task_occurrences(make_task(), "2026-01-01", "2026-01-31") == []

    def test_next_from_scheduled_date(self, make_task):
        task = make_task(scheduled_date="2026-01-05", recurrence=daily(3))
        assert next_task_occurrence(task) == "2026-01-08"

    def test_occurrences_from_scheduled_date(self, make_task, weekly):
        task = make_task(scheduled_date="2026-01-05", recurrence=weekly())
        assert task_occurrences(task, "2026-01-10", "2026-01-20") == ["2026-01-12", "2026-01-19"]


@pytest.mark.parametrize(
    "frequency,expected",
    [("daily", "2026-01-07"), ("weekly", "2026-01-19"), ("monthly", "2026-03-05"), ("yearly", "2028-01-05")],
)
def test_interval_two_per_frequency(frequency, expected):
    assert next_occurrence("2026-01-05", Recurrence(frequency=frequency, interval=2)) == expected
