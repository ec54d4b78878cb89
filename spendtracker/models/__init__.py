"""
Data Models Package

This package contains all Pydantic models used by Spend Tracker.
Every record reaching the spend engine must conform to these schemas.
"""

from spendtracker.models.subscription import (
    AccessType,
    BillingType,
    OneTimeItem,
    SpendCategory,
    Subscription,
    SubscriptionStatus,
)
from spendtracker.models.report import (
    CategoryEntry,
    CategoryTotal,
    EntryKind,
    ReportingWindow,
    SpendReport,
    SpendView,
)

__all__ = [
    # Record models
    "AccessType",
    "BillingType",
    "OneTimeItem",
    "SpendCategory",
    "Subscription",
    "SubscriptionStatus",
    # Report models
    "CategoryEntry",
    "CategoryTotal",
    "EntryKind",
    "ReportingWindow",
    "SpendReport",
    "SpendView",
]
