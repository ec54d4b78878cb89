"""
Report Models

What the spend engine returns to the presentation layer: the reporting
window it was asked about, per-category totals, and the drill-down entries
behind a single category.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from spendtracker.models.subscription import (
    BillingType,
    OneTimeItem,
    SpendCategory,
    Subscription,
)


class SpendView(str, Enum):
    """
    Which breakdown the user is looking at.

    OVERALL: annual projection of every cadence plus one-time purchases
    MONTHLY: weekly and monthly charges inside one calendar month
    YEARLY:  yearly renewals only
    """
    OVERALL = "overall"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ReportingWindow(BaseModel):
    """A full year, or a (year, month) pair. Months are 1-based."""
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)

    @classmethod
    def for_year(cls, year: int) -> "ReportingWindow":
        return cls(year=year)

    @classmethod
    def for_month(cls, year: int, month: int) -> "ReportingWindow":
        return cls(year=year, month=month)

    def describe(self) -> str:
        """Human-readable label, e.g. 'Feb 2024' or '2024'."""
        if self.month is None:
            return str(self.year)
        return f"{_MONTH_NAMES[self.month - 1]} {self.year}"


_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class CategoryTotal(BaseModel):
    """One category bucket. Only strictly positive buckets are ever emitted."""
    model_config = ConfigDict(frozen=True)

    category: SpendCategory
    value: Decimal = Field(..., gt=0)


class SpendReport(BaseModel):
    """
    Result of one aggregation call.

    An empty report (total 0, no categories) is a normal outcome and
    means nothing billed in the window.
    """
    model_config = ConfigDict(frozen=True)

    view: SpendView
    window: ReportingWindow
    include_wishlist: bool
    total: Decimal = Field(default=Decimal("0"), ge=0)
    categories: tuple[CategoryTotal, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def value_for(self, category: SpendCategory) -> Decimal:
        """Bucket value for a category, zero when it was not emitted."""
        for entry in self.categories:
            if entry.category == category:
                return entry.value
        return Decimal("0")


class EntryKind(str, Enum):
    SUBSCRIPTION = "subscription"
    ONE_TIME = "one_time"


class CategoryEntry(BaseModel):
    """A single record feeding a category bucket, with what it added."""
    model_config = ConfigDict(frozen=True)

    kind: EntryKind
    item: Union[Subscription, OneTimeItem]
    contribution: Decimal = Field(..., gt=0)

    @property
    def billing_type(self) -> Optional[BillingType]:
        if isinstance(self.item, Subscription):
            return self.item.billing_type
        return None
