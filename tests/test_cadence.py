"""Tests for the billing cadence calculator."""

from datetime import date, timedelta

import pytest

from spendtracker.billing import (
    add_months,
    count_weekly_occurrences,
    is_active_in_month,
    is_active_in_year,
    last_of_month,
    months_active_in_year,
    months_between,
    next_renewal_after,
)
from spendtracker.models import BillingType


class TestWeeklyOccurrences:
    """Tests for count_weekly_occurrences."""

    @pytest.mark.parametrize("start", [
        date(2024, 1, 1),
        date(2023, 12, 31),
        date(2024, 2, 29),
        date(2025, 7, 16),
    ])
    def test_one_charge_per_week(self, start):
        """Test one charge in the first 7 days and two in the first 14."""
        assert count_weekly_occurrences(start, start, start + timedelta(days=6)) == 1
        assert count_weekly_occurrences(start, start, start + timedelta(days=13)) == 2

    def test_february_leap_year(self):
        """Charges anchored on Jan 1 land on Feb 5, 12, 19 and 26."""
        start = date(2024, 1, 1)
        assert count_weekly_occurrences(start, date(2024, 2, 1), date(2024, 2, 29)) == 4

    def test_charge_on_window_start_is_counted_once(self):
        start = date(2024, 1, 1)
        assert count_weekly_occurrences(start, date(2024, 1, 8), date(2024, 1, 8)) == 1
        assert count_weekly_occurrences(start, date(2024, 1, 8), date(2024, 1, 14)) == 1
        assert count_weekly_occurrences(start, date(2024, 1, 8), date(2024, 1, 15)) == 2

    def test_window_between_charges(self):
        start = date(2024, 1, 1)
        assert count_weekly_occurrences(start, date(2024, 1, 2), date(2024, 1, 7)) == 0

    def test_window_before_start(self):
        start = date(2024, 3, 1)
        assert count_weekly_occurrences(start, date(2024, 1, 1), date(2024, 2, 28)) == 0

    def test_start_inside_window(self):
        start = date(2024, 2, 10)
        assert count_weekly_occurrences(start, date(2024, 2, 1), date(2024, 2, 29)) == 3

    def test_full_leap_year(self):
        start = date(2024, 1, 1)
        assert count_weekly_occurrences(start, date(2024, 1, 1), date(2024, 12, 31)) == 53

    def test_inverted_window(self):
        start = date(2024, 1, 1)
        assert count_weekly_occurrences(start, date(2024, 5, 1), date(2024, 4, 1)) == 0

    def test_widening_window_never_decreases_count(self):
        """Test monotonicity as the window end moves forward."""
        start = date(2024, 1, 3)
        window_start = date(2024, 1, 1)
        previous = 0
        for days in range(0, 120):
            current = count_weekly_occurrences(
                start, window_start, window_start + timedelta(days=days)
            )
            assert current >= previous
            previous = current


class TestMonthsActiveInYear:
    """Tests for months_active_in_year."""

    def test_full_year_without_stop(self):
        assert months_active_in_year(date(2023, 5, 20), None, 2024) == 12

    def test_partial_first_year(self):
        """Test Mar 10 start covers Mar through Dec."""
        assert months_active_in_year(date(2024, 3, 10), None, 2024) == 10

    def test_stop_month_is_inclusive(self):
        """Test a Mar 15 stop covers Jan, Feb and Mar."""
        assert months_active_in_year(date(2023, 1, 1), date(2024, 3, 15), 2024) == 3

    def test_start_and_stop_in_same_year(self):
        assert months_active_in_year(date(2024, 4, 1), date(2024, 6, 2), 2024) == 3

    def test_starts_after_target_year(self):
        assert months_active_in_year(date(2025, 1, 1), None, 2024) == 0

    def test_stopped_before_target_year(self):
        assert months_active_in_year(date(2022, 1, 1), date(2023, 12, 1), 2024) == 0

    def test_stop_in_later_year(self):
        assert months_active_in_year(date(2024, 11, 1), date(2026, 1, 1), 2024) == 2


class TestActivityChecks:
    """Tests for is_active_in_month and is_active_in_year."""

    def test_month_before_start(self):
        start = date(2024, 3, 10)
        assert is_active_in_month(start, None, 2024, 2) is False
        assert is_active_in_month(start, None, 2024, 3) is True
        assert is_active_in_month(start, None, 2025, 1) is True

    def test_month_after_stop(self):
        start = date(2023, 1, 1)
        stop = date(2024, 5, 15)
        assert is_active_in_month(start, stop, 2024, 5) is True
        assert is_active_in_month(start, stop, 2024, 6) is False
        assert is_active_in_month(start, stop, 2025, 1) is False

    def test_year_activity(self):
        start = date(2022, 7, 1)
        stop = date(2024, 2, 1)
        assert is_active_in_year(start, stop, 2021) is False
        assert is_active_in_year(start, stop, 2022) is True
        assert is_active_in_year(start, stop, 2024) is True
        assert is_active_in_year(start, stop, 2025) is False
        assert is_active_in_year(start, None, 2030) is True


class TestCalendarHelpers:
    """Tests for month arithmetic helpers."""

    def test_last_of_month(self):
        assert last_of_month(2024, 2) == date(2024, 2, 29)
        assert last_of_month(2023, 2) == date(2023, 2, 28)
        assert last_of_month(2024, 12) == date(2024, 12, 31)

    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_months_between(self):
        assert months_between(date(2024, 1, 31), date(2024, 7, 1)) == 6
        assert months_between(date(2023, 11, 1), date(2024, 2, 1)) == 3


class TestNextRenewal:
    """Tests for next_renewal_after."""

    def test_weekly(self):
        start = date(2024, 1, 1)
        assert next_renewal_after(start, BillingType.WEEKLY, date(2024, 1, 1)) == date(2024, 1, 8)
        assert next_renewal_after(start, BillingType.WEEKLY, date(2024, 1, 3)) == date(2024, 1, 8)

    def test_monthly_end_of_month_anchor(self):
        start = date(2024, 1, 31)
        assert next_renewal_after(start, BillingType.MONTHLY, date(2024, 2, 15)) == date(2024, 2, 29)
        assert next_renewal_after(start, BillingType.MONTHLY, date(2024, 3, 31)) == date(2024, 4, 30)

    def test_yearly(self):
        start = date(2023, 6, 1)
        assert next_renewal_after(start, BillingType.YEARLY, date(2024, 6, 1)) == date(2025, 6, 1)
        assert next_renewal_after(start, BillingType.YEARLY, date(2024, 5, 31)) == date(2024, 6, 1)

    def test_future_start_is_first_renewal(self):
        start = date(2024, 9, 1)
        assert next_renewal_after(start, BillingType.MONTHLY, date(2024, 8, 1)) == start

    def test_lifetime_never_renews(self):
        assert next_renewal_after(date(2024, 1, 1), BillingType.LIFETIME, date(2024, 2, 1)) is None

    def test_no_renewal_after_stop(self):
        start = date(2024, 1, 10)
        stop = date(2024, 3, 1)
        assert next_renewal_after(start, BillingType.MONTHLY, date(2024, 2, 1), stop) == date(2024, 2, 10)
        assert next_renewal_after(start, BillingType.MONTHLY, date(2024, 2, 20), stop) is None
