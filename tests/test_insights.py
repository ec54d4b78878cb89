"""Tests for subscription insights."""

from datetime import date

from spendtracker.analytics import build_insights
from spendtracker.models import BillingType, SpendCategory


TODAY = date(2024, 8, 15)


class TestInsights:
    """Tests for build_insights."""

    def test_category_counts_sorted(self, subscription_factory):
        subs = [
            subscription_factory(category="Productivity"),
            subscription_factory(category="Entertainment"),
            subscription_factory(category="Entertainment"),
            subscription_factory(category="Fitness", status="wishlist"),
        ]
        insights = build_insights(subs, include_wishlist=False, today=TODAY)

        assert [(c.category, c.count) for c in insights.category_counts] == [
            (SpendCategory.ENTERTAINMENT, 2),
            (SpendCategory.PRODUCTIVITY, 1),
        ]

    def test_billing_counts_keep_zero_entries(self, subscription_factory):
        subs = [
            subscription_factory(billing_type="monthly"),
            subscription_factory(billing_type="lifetime"),
        ]
        insights = build_insights(subs, include_wishlist=False, today=TODAY)

        counts = {b.billing_type: b.count for b in insights.billing_counts}
        assert counts == {
            BillingType.WEEKLY: 0,
            BillingType.MONTHLY: 1,
            BillingType.YEARLY: 0,
            BillingType.LIFETIME: 1,
        }

    def test_inactive_threshold(self, subscription_factory):
        stale = subscription_factory(start_date=date(2024, 2, 28))
        fresh = subscription_factory(start_date=date(2024, 3, 1))
        insights = build_insights(
            [stale, fresh], include_wishlist=False, today=TODAY, inactivity_months=6
        )

        assert [sub.id for sub in insights.inactive] == [stale.id]
        assert insights.inactivity_threshold_months == 6

    def test_upcoming_renewals(self, subscription_factory):
        soon = subscription_factory(billing_type="monthly", start_date=date(2024, 1, 20))
        later = subscription_factory(billing_type="monthly", start_date=date(2024, 1, 30))
        weekly = subscription_factory(billing_type="weekly", start_date=date(2024, 8, 12))
        lifetime = subscription_factory(billing_type="lifetime", start_date=date(2024, 1, 16))
        wishlist = subscription_factory(status="wishlist", start_date=date(2024, 1, 16))

        insights = build_insights(
            [soon, later, weekly, lifetime, wishlist],
            include_wishlist=True,
            today=TODAY,
            renewal_horizon_days=7,
        )

        assert [(r.subscription.id, r.renewal_date) for r in insights.upcoming_renewals] == [
            (weekly.id, date(2024, 8, 19)),
            (soon.id, date(2024, 8, 20)),
        ]

    def test_wishlist_included_in_counts_when_asked(self, subscription_factory):
        subs = [subscription_factory(status="wishlist")]
        assert build_insights(subs, include_wishlist=False, today=TODAY).category_counts == ()
        assert len(build_insights(subs, include_wishlist=True, today=TODAY).category_counts) == 1
