"""
In-Memory Storage Implementation

Dict-backed storage used by tests and as the default backend when no
database is configured. Records are immutable models, so handing out the
stored objects directly is safe.
"""

from typing import Iterable, Optional

from spendtracker.logger import get_logger
from spendtracker.models.subscription import OneTimeItem, Subscription
from spendtracker.services.storage.interface import (
    DuplicateError,
    NotFoundError,
    SubscriptionStorageInterface,
)


logger = get_logger(__name__)


class InMemorySubscriptionStorage(SubscriptionStorageInterface):
    """Storage backed by two dicts keyed by record id."""

    def __init__(
        self,
        subscriptions: Optional[Iterable[Subscription]] = None,
        one_time_items: Optional[Iterable[OneTimeItem]] = None,
    ):
        self._subscriptions: dict[str, Subscription] = {}
        self._one_time_items: dict[str, OneTimeItem] = {}

        for subscription in subscriptions or ():
            self._subscriptions[subscription.id] = subscription
        for item in one_time_items or ():
            if item.id in self._one_time_items:
                raise DuplicateError(f"One-time item {item.id} already exists")
            self._one_time_items[item.id] = item

    async def list_subscriptions(self) -> list[Subscription]:
        return sorted(
            self._subscriptions.values(),
            key=lambda sub: sub.start_date,
            reverse=True,
        )

    async def list_one_time_items(self) -> list[OneTimeItem]:
        return sorted(
            self._one_time_items.values(),
            key=lambda item: item.date,
            reverse=True,
        )

    async def save_subscription(self, subscription: Subscription) -> bool:
        replaced = subscription.id in self._subscriptions
        self._subscriptions[subscription.id] = subscription
        logger.debug(
            "subscription_saved",
            subscription_id=subscription.id,
            replaced=replaced,
        )
        return True

    async def delete_subscription(self, subscription_id: str) -> bool:
        if subscription_id not in self._subscriptions:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        del self._subscriptions[subscription_id]
        logger.debug("subscription_deleted", subscription_id=subscription_id)
        return True

    async def save_one_time_item(self, item: OneTimeItem) -> bool:
        if item.id in self._one_time_items:
            raise DuplicateError(f"One-time item {item.id} already exists")
        self._one_time_items[item.id] = item
        logger.debug("one_time_item_saved", item_id=item.id)
        return True

    async def delete_one_time_item(self, item_id: str) -> bool:
        if item_id not in self._one_time_items:
            raise NotFoundError(f"One-time item {item_id} not found")
        del self._one_time_items[item_id]
        logger.debug("one_time_item_deleted", item_id=item_id)
        return True
