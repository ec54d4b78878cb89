"""Spend analytics package."""

from spendtracker.analytics.aggregator import (
    AggregationError,
    ReportingWindowError,
    SpendAggregator,
    available_years,
    eligible_subscriptions,
)
from spendtracker.analytics.insights import (
    BillingCount,
    CategoryCount,
    SubscriptionInsights,
    UpcomingRenewal,
    build_insights,
)

__all__ = [
    "AggregationError",
    "ReportingWindowError",
    "SpendAggregator",
    "available_years",
    "eligible_subscriptions",
    "BillingCount",
    "CategoryCount",
    "SubscriptionInsights",
    "UpcomingRenewal",
    "build_insights",
]
