"""
Billing Cadence Calculator

Pure date arithmetic answering "is this billing item active, and how many
times does it bill" inside an arbitrary window.

DESIGN DECISION: Every function here is total over its documented domain.
No logging, no validation, no I/O. Dates are local calendar dates; a stop
date is inclusive at day granularity. Months are 1-based (January = 1).
"""

import calendar
from datetime import date, timedelta
from typing import Optional

from spendtracker.models.subscription import BillingType


DAYS_PER_WEEK = 7


def count_weekly_occurrences(
    start_date: date,
    window_start: date,
    window_end: date,
) -> int:
    """
    Count weekly charges anchored at start_date inside [window_start, window_end].

    The window may already be clamped to a stop date by the caller.

    The first charge at or after the window start is found by rounding the
    day offset from start_date UP to the next multiple of 7, so a charge that
    lands exactly on a window boundary is counted once.
    """
    clamped_start = max(start_date, window_start)
    if window_end < clamped_start:
        return 0

    offset_days = (clamped_start - start_date).days
    aligned_offset = -(-offset_days // DAYS_PER_WEEK) * DAYS_PER_WEEK
    first_charge = start_date + timedelta(days=aligned_offset)

    if first_charge > window_end:
        return 0

    return 1 + (window_end - first_charge).days // DAYS_PER_WEEK


def months_active_in_year(
    start_date: date,
    stop_date: Optional[date],
    target_year: int,
) -> int:
    """
    Number of calendar months in target_year a monthly subscription is active.

    Both the start month and the stop month count in full. Result is
    clamped to [0, 12].
    """
    if start_date.year > target_year:
        return 0
    if stop_date is not None and stop_date.year < target_year:
        return 0

    first_month = start_date.month if start_date.year == target_year else 1
    if stop_date is not None and stop_date.year == target_year:
        last_month = stop_date.month
    else:
        last_month = 12

    return max(0, min(last_month - first_month + 1, 12))


def is_active_in_month(
    start_date: date,
    stop_date: Optional[date],
    target_year: int,
    target_month: int,
) -> bool:
    """True unless the subscription starts after, or stops before, the month."""
    target = (target_year, target_month)
    if (start_date.year, start_date.month) > target:
        return False
    if stop_date is not None and (stop_date.year, stop_date.month) < target:
        return False
    return True


def is_active_in_year(
    start_date: date,
    stop_date: Optional[date],
    target_year: int,
) -> bool:
    """Year-granularity activity check used for yearly renewals."""
    if start_date.year > target_year:
        return False
    return stop_date is None or stop_date.year >= target_year


# =============================================================================
# CALENDAR HELPERS
# =============================================================================

def first_of_month(year: int, month: int) -> date:
    return date(year, month, 1)


def last_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def add_months(value: date, count: int) -> date:
    """Shift by whole months, clamping the day to the end of short months."""
    month_index = value.year * 12 + (value.month - 1) + count
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(earlier: date, later: date) -> int:
    """Whole calendar-month distance, ignoring the day of month."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def next_renewal_after(
    start_date: date,
    billing_type: BillingType,
    after: date,
    stop_date: Optional[date] = None,
) -> Optional[date]:
    """
    First renewal date strictly after `after`.

    Returns None for lifetime purchases, and when the next renewal would
    fall after the planned stop date.
    """
    if billing_type == BillingType.LIFETIME:
        return None

    if start_date > after:
        renewal = start_date
    elif billing_type == BillingType.WEEKLY:
        elapsed_weeks = (after - start_date).days // DAYS_PER_WEEK + 1
        renewal = start_date + timedelta(days=elapsed_weeks * DAYS_PER_WEEK)
    else:
        step = 1 if billing_type == BillingType.MONTHLY else 12
        cycles = months_between(start_date, after) // step
        renewal = add_months(start_date, cycles * step)
        # Anchor-day clamping means the estimate may land on or before `after`
        while renewal <= after:
            cycles += 1
            renewal = add_months(start_date, cycles * step)

    if stop_date is not None and renewal > stop_date:
        return None
    return renewal
