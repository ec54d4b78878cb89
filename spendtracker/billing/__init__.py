"""Billing cadence package."""

from spendtracker.billing.cadence import (
    add_months,
    count_weekly_occurrences,
    first_of_month,
    is_active_in_month,
    is_active_in_year,
    last_of_month,
    months_active_in_year,
    months_between,
    next_renewal_after,
)

__all__ = [
    "add_months",
    "count_weekly_occurrences",
    "first_of_month",
    "is_active_in_month",
    "is_active_in_year",
    "last_of_month",
    "months_active_in_year",
    "months_between",
    "next_renewal_after",
]
