"""Shared fixtures: small factories for records with sensible defaults."""

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from spendtracker.models import OneTimeItem, Subscription


_ids = count(1)


def make_subscription(**overrides) -> Subscription:
    fields = {
        "id": f"sub-{next(_ids)}",
        "name": "Netflix",
        "category": "Entertainment",
        "billing_type": "monthly",
        "amount": Decimal("200"),
        "start_date": date(2024, 1, 1),
        "status": "active",
    }
    if overrides.get("stop_date") is not None:
        fields["has_stop_date"] = True
    fields.update(overrides)
    return Subscription(**fields)


def make_one_time_item(**overrides) -> OneTimeItem:
    fields = {
        "id": f"item-{next(_ids)}",
        "name": "Game",
        "platform": "Steam",
        "category": "Entertainment",
        "amount": Decimal("60"),
        "date": date(2024, 6, 1),
    }
    fields.update(overrides)
    return OneTimeItem(**fields)


@pytest.fixture
def subscription_factory():
    return make_subscription


@pytest.fixture
def one_time_item_factory():
    return make_one_time_item
