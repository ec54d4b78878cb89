"""
Subscription Insights

Counts and reminders shown beside the spend chart: how subscriptions are
spread over categories and billing types, which ones look stale, and which
renew soon. Same wishlist filtering as the spend engine, but shared and
lifetime items are still counted here since they are part of the
user's subscription list.
"""

from collections import Counter
from datetime import date, timedelta
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from spendtracker.billing.cadence import months_between, next_renewal_after
from spendtracker.models.subscription import (
    BillingType,
    SpendCategory,
    Subscription,
    SubscriptionStatus,
)


class CategoryCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: SpendCategory
    count: int


class BillingCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    billing_type: BillingType
    count: int


class UpcomingRenewal(BaseModel):
    model_config = ConfigDict(frozen=True)

    subscription: Subscription
    renewal_date: date


class SubscriptionInsights(BaseModel):
    """Everything the insights panel renders."""
    model_config = ConfigDict(frozen=True)

    category_counts: tuple[CategoryCount, ...] = ()
    billing_counts: tuple[BillingCount, ...] = ()
    inactive: tuple[Subscription, ...] = ()
    inactivity_threshold_months: int
    upcoming_renewals: tuple[UpcomingRenewal, ...] = ()
    renewal_horizon_days: int


def build_insights(
    subscriptions: Iterable[Subscription],
    include_wishlist: bool,
    today: date,
    inactivity_months: int = 6,
    renewal_horizon_days: int = 7,
) -> SubscriptionInsights:
    """
    Summarize the subscription list as of `today`.

    A subscription is flagged inactive once its start date is at least
    `inactivity_months` calendar months in the past. Upcoming renewals only
    cover active, recurring subscriptions.
    """
    visible = [
        sub for sub in subscriptions
        if include_wishlist or sub.status == SubscriptionStatus.ACTIVE
    ]

    category_counter = Counter(sub.category for sub in visible)
    category_order = list(SpendCategory)
    category_counts = tuple(
        CategoryCount(category=category, count=count)
        for category, count in sorted(
            category_counter.items(),
            key=lambda pair: (-pair[1], category_order.index(pair[0])),
        )
    )

    billing_counter = Counter(sub.billing_type for sub in visible)
    billing_counts = tuple(
        BillingCount(billing_type=billing_type, count=billing_counter.get(billing_type, 0))
        for billing_type in BillingType
    )

    inactive = tuple(
        sub for sub in visible
        if months_between(sub.start_date, today) >= inactivity_months
    )

    horizon = today + timedelta(days=renewal_horizon_days)
    renewals = []
    for sub in visible:
        if sub.status != SubscriptionStatus.ACTIVE:
            continue
        renewal = next_renewal_after(
            sub.start_date, sub.billing_type, today, sub.effective_stop_date
        )
        if renewal is not None and renewal <= horizon:
            renewals.append(UpcomingRenewal(subscription=sub, renewal_date=renewal))
    renewals.sort(key=lambda entry: (entry.renewal_date, entry.subscription.id))

    return SubscriptionInsights(
        category_counts=category_counts,
        billing_counts=billing_counts,
        inactive=inactive,
        inactivity_threshold_months=inactivity_months,
        upcoming_renewals=tuple(renewals),
        renewal_horizon_days=renewal_horizon_days,
    )
