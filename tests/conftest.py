"""Shared fixtures: in-memory catalog rows (no database)."""

from datetime import timedelta
from decimal import Decimal

import pytest

from coupons.models import Category, Deal, Store
from coupons.services.discounts import DealType

from tests.factories import NOW, make_category, make_deal, make_store


@pytest.fixture
def electronics() -> Category:
    return make_category()


@pytest.fixture
def best_buy(electronics: Category) -> Store:
    return make_store(1, "Best Buy", electronics)


@pytest.fixture
def best_buy_deals(best_buy: Store) -> list[Deal]:
    return [
        make_deal(
            1,
            best_buy,
            type=DealType.FIXED_AMOUNT,
            discount_amount=Decimal("100.00"),
            code="LAPTOP100",
            expiration_date=NOW + timedelta(days=2),
            featured=True,
        ),
        make_deal(
            2,
            best_buy,
            type=DealType.PERCENTAGE,
            discount_percentage=15,
            code="TV15",
            expiration_date=NOW + timedelta(days=45),
            usage_count=7,
        ),
        make_deal(
            3,
            best_buy,
            type=DealType.PERCENTAGE,
            discount_percentage=50,
            code="EXPIRED50",
            expiration_date=NOW - timedelta(days=10),
            is_expired=True,
        ),
        # Flag and date disagree: the stored flag wins.
        make_deal(
            4,
            best_buy,
            type=DealType.FREE_SHIPPING,
            expiration_date=NOW - timedelta(days=1),
            is_expired=False,
        ),
    ]
