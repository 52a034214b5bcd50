"""Tests for calendar arithmetic used by reward cycles and report schedules."""

from datetime import date, datetime

import pytest

from src.crm.services.reward_service import add_months, cycle_end
from src.crm.services.scheduled_report_service import compute_next_run

pytestmark = pytest.mark.unit


class TestAddMonths:
    def test_plain_month(self):
        assert add_months(date(2024, 3, 15), 1) == date(2024, 4, 15)

    def test_clamps_to_month_end(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_clamps_to_leap_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_crosses_year(self):
        assert add_months(date(2024, 12, 10), 1) == date(2025, 1, 10)
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_keeps_time_of_day(self):
        assert add_months(datetime(2024, 5, 31, 8, 30), 1) == datetime(2024, 6, 30, 8, 30)


class TestCycleEnd:
    def test_weekly_cycle_is_seven_days_inclusive(self):
        assert cycle_end(date(2024, 6, 3), "weekly") == date(2024, 6, 9)

    def test_monthly_cycle_ends_day_before_next_start(self):
        assert cycle_end(date(2024, 6, 1), "monthly") == date(2024, 6, 30)
        assert cycle_end(date(2024, 1, 31), "monthly") == date(2024, 2, 28)


class TestComputeNextRun:
    NOW = datetime(2024, 1, 31, 9, 0)

    def test_daily(self):
        assert compute_next_run("daily", self.NOW) == datetime(2024, 2, 1, 9, 0)

    def test_weekly(self):
        assert compute_next_run("weekly", self.NOW) == datetime(2024, 2, 7, 9, 0)

    def test_monthly_clamps(self):
        assert compute_next_run("monthly", self.NOW) == datetime(2024, 2, 29, 9, 0)

    def test_unknown_type_runs_daily(self):
        assert compute_next_run("hourly", self.NOW) == datetime(2024, 2, 1, 9, 0)
