"""
Storage Services Package

Provides the abstract storage interface the dashboard reads records from,
plus an in-memory implementation.
"""

from spendtracker.services.storage.interface import (
    DuplicateError,
    NotFoundError,
    StorageError,
    SubscriptionStorageInterface,
)
from spendtracker.services.storage.memory import InMemorySubscriptionStorage

__all__ = [
    # Interfaces
    "SubscriptionStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemorySubscriptionStorage",
]
