"""
Record Models for Spend Tracker

These models define the schemas for the records the storage layer hands
to the spend engine. They are designed to:
1. Reject malformed records before they ever reach aggregation
2. Stay immutable for the duration of an aggregation call
3. Keep category labels inside a closed set so buckets never fragment

DESIGN DECISION: Records are frozen Pydantic v2 models.
The engine receives a point-in-time snapshot and must never mutate it.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class SpendCategory(str, Enum):
    """
    Supported spend categories.

    DESIGN DECISION: Categories are a closed set with an explicit fallback.
    A blank label lands in OTHER; an unknown label is rejected outright
    instead of silently opening a new bucket.
    """
    GENERAL = "General"
    ENTERTAINMENT = "Entertainment"
    PRODUCTIVITY = "Productivity"
    FITNESS = "Fitness"
    FINANCE = "Finance"
    EDUCATION = "Education"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Union["SpendCategory", str, None]) -> "SpendCategory":
        """Resolve a raw label, falling back to OTHER when blank."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.OTHER
        if not isinstance(value, str):
            raise ValueError(f"Category must be a string, got {type(value).__name__}")
        label = value.strip()
        if not label:
            return cls.OTHER
        for member in cls:
            if member.value.lower() == label.lower():
                return member
        raise ValueError(
            f"Unknown category: {value!r}. "
            f"Allowed: {[member.value for member in cls]}"
        )


class BillingType(str, Enum):
    """How often a subscription charges."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    LIFETIME = "lifetime"  # Paid once, never recurs


class SubscriptionStatus(str, Enum):
    """
    Subscription lifecycle status.

    WISHLIST items are only counted when the caller explicitly asks for them.
    """
    ACTIVE = "active"
    WISHLIST = "wishlist"


class AccessType(str, Enum):
    """Whether the user owns the subscription or shares someone else's."""
    OWNED = "owned"
    SHARED = "shared"


def _coerce_category(value: Any) -> SpendCategory:
    return SpendCategory.parse(value)


# =============================================================================
# RECORD MODELS
# =============================================================================

class Subscription(BaseModel):
    """
    A recurring (or lifetime) subscription.

    Owned by the storage layer; read-only to the spend engine.

    Invariants enforced here:
    - stop_date is present if and only if has_stop_date is set
    - stop_date falls strictly after start_date
    - shared_members is empty unless access_type is SHARED
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque stable identifier"
    )
    name: str = Field(
        default="",
        max_length=200,
        description="Display name (e.g. Netflix)"
    )
    category: SpendCategory = Field(
        default=SpendCategory.OTHER,
        description="Spend category; blank resolves to Other"
    )
    billing_type: BillingType = Field(
        ...,
        description="Billing cadence"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Charge per billing cycle"
    )
    start_date: date = Field(
        ...,
        description="Date the billing cycle is anchored to"
    )

    # Planned cancellation
    has_stop_date: bool = False
    stop_date: Optional[date] = None

    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    access_type: AccessType = AccessType.OWNED
    user_paying: bool = Field(
        default=True,
        description="False when someone else pays for a shared subscription"
    )
    shared_members: tuple[str, ...] = Field(
        default=(),
        max_length=10,
        description="Names of the people the subscription is shared with"
    )

    linked_credential_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    reminder_enabled: bool = False
    reminder_days_before: Optional[int] = None

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> SpendCategory:
        return _coerce_category(v)

    @field_validator("shared_members", mode="before")
    @classmethod
    def clean_shared_members(cls, v: Any) -> tuple[str, ...]:
        """Drop blank names. A single name is treated as a one-person list."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = (v,)
        if any(not isinstance(member, str) for member in v):
            raise ValueError("Shared members must be names")
        return tuple(member.strip() for member in v if member and member.strip())

    @field_validator("reminder_days_before")
    @classmethod
    def validate_reminder_days(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v not in (1, 3, 7):
            raise ValueError("Reminder must be 1, 3 or 7 days before renewal")
        return v

    @model_validator(mode="after")
    def validate_stop_date(self) -> "Subscription":
        """Validate the planned stop date against the start date."""
        if self.has_stop_date and self.stop_date is None:
            raise ValueError("Stop date required when has_stop_date is set")

        if not self.has_stop_date and self.stop_date is not None:
            raise ValueError("Stop date given but has_stop_date is not set")

        if self.stop_date is not None and self.stop_date <= self.start_date:
            raise ValueError("Stop date must be after the start date")

        if self.access_type == AccessType.OWNED and self.shared_members:
            raise ValueError("Only shared subscriptions can list shared members")

        return self

    @property
    def effective_stop_date(self) -> Optional[date]:
        """The stop date if one is planned, otherwise None."""
        return self.stop_date if self.has_stop_date else None

    @property
    def counts_toward_spend(self) -> bool:
        """
        Whether this subscription can ever contribute to spend totals.

        Lifetime purchases never recur, and shared items someone else
        pays for are not the user's spend.
        """
        return self.user_paying and self.billing_type != BillingType.LIFETIME


class OneTimeItem(BaseModel):
    """A single purchase, counted entirely in the year it falls in."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=200)
    platform: str = Field(
        default="",
        max_length=100,
        description="Where the purchase was made (e.g. Steam)"
    )
    category: SpendCategory = SpendCategory.OTHER
    amount: Decimal = Field(..., ge=0)
    date: date

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> SpendCategory:
        return _coerce_category(v)
