"""
Spend Aggregation Engine

DESIGN DECISION: Aggregation is PURE and DETERMINISTIC.
Every selector (view, reporting window, wishlist toggle) is an explicit
argument. There is no caching and no shared mutable state, so the same
snapshot and the same selectors always produce the same report.

The per-item cadence evaluation lives in exactly one place,
SpendAggregator.contribution(). Both the category totals and the
drill-down list are built from the same stream of entries, so a bucket
always equals the sum of its drill-down contributions.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Iterator

from spendtracker.billing.cadence import (
    count_weekly_occurrences,
    first_of_month,
    is_active_in_month,
    is_active_in_year,
    last_of_month,
    months_active_in_year,
)
from spendtracker.logger import get_logger
from spendtracker.models.report import (
    CategoryEntry,
    CategoryTotal,
    EntryKind,
    ReportingWindow,
    SpendReport,
    SpendView,
)
from spendtracker.models.subscription import (
    BillingType,
    OneTimeItem,
    SpendCategory,
    Subscription,
    SubscriptionStatus,
)


logger = get_logger(__name__)

ZERO = Decimal("0")

_CATEGORY_ORDER = {category: index for index, category in enumerate(SpendCategory)}


class AggregationError(Exception):
    """Error during spend aggregation."""
    pass


class ReportingWindowError(AggregationError):
    """The reporting window does not fit the requested view."""
    pass


def eligible_subscriptions(
    subscriptions: Iterable[Subscription],
    include_wishlist: bool,
) -> list[Subscription]:
    """
    Subscriptions that may contribute to spend.

    Wishlist items only when asked for; shared items someone else pays for
    and lifetime purchases never.
    """
    return [
        sub for sub in subscriptions
        if (include_wishlist or sub.status == SubscriptionStatus.ACTIVE)
        and sub.counts_toward_spend
    ]


class SpendAggregator:
    """
    Turns a snapshot of subscriptions and one-time purchases into
    per-category spend for one reporting window.

    GUARANTEES:
    - Only strictly positive buckets are emitted
    - Total equals the sum of emitted buckets
    - drill_down() uses the same contributions aggregate() summed
    """

    def contribution(
        self,
        subscription: Subscription,
        view: SpendView,
        window: ReportingWindow,
    ) -> Decimal:
        """
        What one subscription adds to its category for the given window.

        Weekly and monthly cadences are clamped to the stop date; yearly
        renewals only look at the year of the stop date.
        """
        start = subscription.start_date
        stop = subscription.effective_stop_date
        billing_type = subscription.billing_type

        if billing_type == BillingType.LIFETIME:
            return ZERO

        if view == SpendView.OVERALL:
            if billing_type == BillingType.WEEKLY:
                window_end = last_of_month(window.year, 12)
                if stop is not None and stop < window_end:
                    window_end = stop
                occurrences = count_weekly_occurrences(
                    start, first_of_month(window.year, 1), window_end
                )
                return subscription.amount * occurrences
            if billing_type == BillingType.MONTHLY:
                return subscription.amount * months_active_in_year(start, stop, window.year)
            if is_active_in_year(start, stop, window.year):
                return subscription.amount
            return ZERO

        if view == SpendView.MONTHLY:
            month = self._require_month(window)
            if billing_type == BillingType.WEEKLY:
                window_end = last_of_month(window.year, month)
                if stop is not None and stop < window_end:
                    window_end = stop
                occurrences = count_weekly_occurrences(
                    start, first_of_month(window.year, month), window_end
                )
                return subscription.amount * occurrences
            if billing_type == BillingType.MONTHLY:
                if is_active_in_month(start, stop, window.year, month):
                    return subscription.amount
            return ZERO

        if view == SpendView.YEARLY:
            if billing_type == BillingType.YEARLY and is_active_in_year(start, stop, window.year):
                return subscription.amount
            return ZERO

        raise AggregationError(f"Unsupported view: {view}")

    def aggregate(
        self,
        subscriptions: Iterable[Subscription],
        one_time_items: Iterable[OneTimeItem],
        view: SpendView,
        window: ReportingWindow,
        include_wishlist: bool = False,
    ) -> SpendReport:
        """
        Sum contributions per category.

        Categories come out by descending value; ties keep the order of
        SpendCategory so repeated calls are identical.
        """
        buckets: dict[SpendCategory, Decimal] = defaultdict(lambda: ZERO)
        for entry in self._entries(subscriptions, one_time_items, view, window, include_wishlist):
            buckets[entry.item.category] += entry.contribution

        ranked = sorted(
            buckets.items(),
            key=lambda pair: (-pair[1], _CATEGORY_ORDER[pair[0]]),
        )
        categories = tuple(
            CategoryTotal(category=category, value=value)
            for category, value in ranked
            if value > 0
        )
        total = sum((entry.value for entry in categories), ZERO)

        logger.debug(
            "spend_aggregated",
            view=view.value,
            window=window.describe(),
            include_wishlist=include_wishlist,
            category_count=len(categories),
            total=str(total),
        )

        return SpendReport(
            view=view,
            window=window,
            include_wishlist=include_wishlist,
            total=total,
            categories=categories,
        )

    def drill_down(
        self,
        category: SpendCategory,
        subscriptions: Iterable[Subscription],
        one_time_items: Iterable[OneTimeItem],
        view: SpendView,
        window: ReportingWindow,
        include_wishlist: bool = False,
    ) -> list[CategoryEntry]:
        """The records behind one category bucket, with what each added."""
        category = SpendCategory.parse(category)
        return [
            entry
            for entry in self._entries(subscriptions, one_time_items, view, window, include_wishlist)
            if entry.item.category == category
        ]

    def _entries(
        self,
        subscriptions: Iterable[Subscription],
        one_time_items: Iterable[OneTimeItem],
        view: SpendView,
        window: ReportingWindow,
        include_wishlist: bool,
    ) -> Iterator[CategoryEntry]:
        """Every record with a strictly positive contribution, subscriptions first."""
        if view == SpendView.MONTHLY:
            self._require_month(window)

        for sub in eligible_subscriptions(subscriptions, include_wishlist):
            amount = self.contribution(sub, view, window)
            if amount > 0:
                yield CategoryEntry(
                    kind=EntryKind.SUBSCRIPTION,
                    item=sub,
                    contribution=amount,
                )

        # One-time purchases have no status and only belong to the annual view
        if view != SpendView.OVERALL:
            return
        for item in one_time_items:
            if item.date.year == window.year and item.amount > 0:
                yield CategoryEntry(
                    kind=EntryKind.ONE_TIME,
                    item=item,
                    contribution=item.amount,
                )

    @staticmethod
    def _require_month(window: ReportingWindow) -> int:
        if window.month is None:
            raise ReportingWindowError(
                f"Monthly view needs a month, got year-only window {window.describe()}"
            )
        return window.month


def available_years(
    subscriptions: Iterable[Subscription],
    one_time_items: Iterable[OneTimeItem],
    current_year: int,
) -> list[int]:
    """
    Reporting years worth offering, newest first.

    Every year from a subscription's start through the latest year seen,
    every year holding a one-time purchase, and always the current year.
    """
    subscriptions = list(subscriptions)
    one_time_items = list(one_time_items)

    latest = max(
        [current_year]
        + [sub.start_date.year for sub in subscriptions]
        + [item.date.year for item in one_time_items]
    )

    years = {current_year}
    for sub in subscriptions:
        years.update(range(sub.start_date.year, latest + 1))
    for item in one_time_items:
        years.add(item.date.year)

    return sorted(years, reverse=True)

