"""Services package."""

from spendtracker.services.storage import (
    DuplicateError,
    InMemorySubscriptionStorage,
    NotFoundError,
    StorageError,
    SubscriptionStorageInterface,
)

__all__ = [
    "DuplicateError",
    "InMemorySubscriptionStorage",
    "NotFoundError",
    "StorageError",
    "SubscriptionStorageInterface",
]
