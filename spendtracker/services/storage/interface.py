"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the spend engine unaware of where records live
2. Use in-memory storage for testing
3. Plug in a real database later without touching aggregation

Reading records is the only asynchronous boundary in the system. It
finishes entirely before any aggregation begins.
"""

from abc import ABC, abstractmethod

from spendtracker.models.subscription import OneTimeItem, Subscription


class SubscriptionStorageInterface(ABC):
    """
    Abstract interface for subscription and one-time purchase storage.

    Any storage implementation must implement these methods. Validation of
    individual records happens when the models are constructed, so a
    backend only ever hands out well-formed records.
    """

    @abstractmethod
    async def list_subscriptions(self) -> list[Subscription]:
        """
        List every stored subscription, newest start date first.

        Returns:
            Snapshot list; callers may keep it after further writes
        """
        pass

    @abstractmethod
    async def list_one_time_items(self) -> list[OneTimeItem]:
        """
        List every stored one-time purchase, newest date first.
        """
        pass

    @abstractmethod
    async def save_subscription(self, subscription: Subscription) -> bool:
        """
        Insert or replace a subscription by id.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def delete_subscription(self, subscription_id: str) -> bool:
        """
        Delete a subscription by id.

        Raises:
            NotFoundError: If no subscription has this id
        """
        pass

    @abstractmethod
    async def save_one_time_item(self, item: OneTimeItem) -> bool:
        """
        Insert a one-time purchase.

        Raises:
            DuplicateError: If an item with the same id already exists
        """
        pass

    @abstractmethod
    async def delete_one_time_item(self, item_id: str) -> bool:
        """
        Delete a one-time purchase by id.

        Raises:
            NotFoundError: If no item has this id
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
