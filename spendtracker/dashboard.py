"""
Dashboard Facade for Spend Tracker

This module ties storage to the spend engine and exposes the two calls the
presentation layer makes:
1. aggregate(view, window, include_wishlist) -> category totals
2. drill_down(category, view, window, include_wishlist) -> contributing items

DESIGN DECISION: The facade enforces the boundaries:
- Records are read from storage in one async step (refresh)
- Aggregation runs synchronously on the immutable snapshot it produced
- Nothing here remembers the last selectors; the caller passes them each time

If two calls race, the caller decides which result to show. The facade
never supersedes or cancels anything itself.
"""

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from spendtracker.analytics import (
    SpendAggregator,
    SubscriptionInsights,
    available_years,
    build_insights,
)
from spendtracker.config import AppSettings, get_settings, validate_all_settings
from spendtracker.logger import configure_logging, get_logger
from spendtracker.models.report import (
    CategoryEntry,
    ReportingWindow,
    SpendReport,
    SpendView,
)
from spendtracker.models.subscription import OneTimeItem, SpendCategory, Subscription
from spendtracker.services.storage import (
    InMemorySubscriptionStorage,
    StorageError,
    SubscriptionStorageInterface,
)


logger = get_logger(__name__)


class RecordSnapshot(BaseModel):
    """Point-in-time copy of every record the engine may look at."""
    model_config = ConfigDict(frozen=True)

    subscriptions: tuple[Subscription, ...] = ()
    one_time_items: tuple[OneTimeItem, ...] = ()
    loaded_at: datetime = Field(default_factory=datetime.now)


class SpendDashboard:
    """
    Presentation-facing entry point.

    Flow:
    1. refresh() → read subscriptions and one-time items from storage
    2. aggregate() / drill_down() → pure computation on that snapshot
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        aggregator: Optional[SpendAggregator] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._storage = storage
        self._aggregator = aggregator or SpendAggregator()
        self._settings = settings or get_settings().app
        self._snapshot: Optional[RecordSnapshot] = None

    @property
    def snapshot(self) -> Optional[RecordSnapshot]:
        return self._snapshot

    async def refresh(self) -> RecordSnapshot:
        """
        Reload records from storage.

        On failure the previous snapshot is kept and the error propagates.
        """
        try:
            subscriptions = await self._storage.list_subscriptions()
            one_time_items = await self._storage.list_one_time_items()
        except StorageError as e:
            logger.error(
                "snapshot_refresh_failed",
                error=str(e),
                storage=type(self._storage).__name__,
            )
            raise

        self._snapshot = RecordSnapshot(
            subscriptions=tuple(subscriptions),
            one_time_items=tuple(one_time_items),
        )
        logger.info(
            "snapshot_refreshed",
            subscription_count=len(subscriptions),
            one_time_item_count=len(one_time_items),
        )
        return self._snapshot

    async def aggregate(
        self,
        view: SpendView,
        window: ReportingWindow,
        include_wishlist: Optional[bool] = None,
    ) -> SpendReport:
        """Category totals for the window. Loads a snapshot if none exists yet."""
        snapshot = await self._ensure_snapshot()
        return self._aggregator.aggregate(
            snapshot.subscriptions,
            snapshot.one_time_items,
            view=view,
            window=window,
            include_wishlist=self._wishlist(include_wishlist),
        )

    async def drill_down(
        self,
        category: Union[SpendCategory, str],
        view: SpendView,
        window: ReportingWindow,
        include_wishlist: Optional[bool] = None,
    ) -> list[CategoryEntry]:
        """Items contributing to one category for the window."""
        snapshot = await self._ensure_snapshot()
        return self._aggregator.drill_down(
            SpendCategory.parse(category),
            snapshot.subscriptions,
            snapshot.one_time_items,
            view=view,
            window=window,
            include_wishlist=self._wishlist(include_wishlist),
        )

    async def insights(
        self,
        today: Optional[date] = None,
        include_wishlist: Optional[bool] = None,
    ) -> SubscriptionInsights:
        snapshot = await self._ensure_snapshot()
        return build_insights(
            snapshot.subscriptions,
            include_wishlist=self._wishlist(include_wishlist),
            today=today or date.today(),
            inactivity_months=self._settings.inactivity_threshold_months,
            renewal_horizon_days=self._settings.renewal_horizon_days,
        )

    async def available_years(self, current_year: Optional[int] = None) -> list[int]:
        snapshot = await self._ensure_snapshot()
        return available_years(
            snapshot.subscriptions,
            snapshot.one_time_items,
            current_year=current_year or date.today().year,
        )

    async def _ensure_snapshot(self) -> RecordSnapshot:
        if self._snapshot is None:
            return await self.refresh()
        return self._snapshot

    def _wishlist(self, include_wishlist: Optional[bool]) -> bool:
        if include_wishlist is None:
            return self._settings.include_wishlist_by_default
        return include_wishlist


def create_app_components(
    storage: Optional[SubscriptionStorageInterface] = None,
    settings: Optional[AppSettings] = None,
) -> SpendDashboard:
    """
    Factory function to create the dashboard.

    Args:
        storage: Storage backend. Falls back to an empty in-memory store.
        settings: Application settings. Loaded from the environment if None.

    Raises:
        ValueError: If settings are loaded from the environment and invalid
    """
    if settings is None:
        results = validate_all_settings()
        if not results["app"]:
            logger.error("settings_invalid", error=results["app_error"])
            raise ValueError(f"Invalid application settings: {results['app_error']}")
        settings = get_settings().app

    configure_logging(settings.log_level)

    if storage is None:
        logger.warning("storage_not_configured", fallback="in_memory")
        storage = InMemorySubscriptionStorage()

    return SpendDashboard(storage=storage, settings=settings)
