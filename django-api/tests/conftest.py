"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timezone

import pytest
from rest_framework.test import APIClient

from checkout.domain.models import AppliedPromoCode, CampSession, SelectedAddOn, initial_state
from checkout.domain.value_objects import Capacity, DiscountType, Money, PromoScope
from checkout.stores.interfaces import CheckoutStore

TODAY = date(2026, 6, 15)
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


class MemoryStore(CheckoutStore):
    """Dict-backed store that can be told to fail."""

    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}
        self.fail_reads = False
        self.fail_writes = False

    def read(self, key):
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.blobs.get(key)

    def write(self, key, blob):
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.blobs[key] = blob

    def delete(self, key):
        self.blobs.pop(key, None)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_camp():
    def make(**overrides) -> CampSession:
        values = {
            "id": "camp-1",
            "slug": "summer-soccer",
            "price": Money(10000),
            "min_age": 8,
            "max_age": 14,
            "spots_remaining": Capacity(10),
            "sibling_discount_percent": 10,
        }
        values.update(overrides)
        return CampSession(**values)

    return make


@pytest.fixture
def camp(make_camp) -> CampSession:
    return make_camp()


@pytest.fixture
def make_add_on():
    def make(addon_id="fuel-pack", quantity=1, unit_price=2500, variant_id=None, camper_id=None) -> SelectedAddOn:
        return SelectedAddOn(
            addon_id=addon_id,
            quantity=quantity,
            unit_price=Money(unit_price),
            variant_id=variant_id,
            camper_id=camper_id,
        )

    return make


@pytest.fixture
def make_promo():
    def make(discount_type=DiscountType.PERCENT, value=10, applies_to=PromoScope.BOTH) -> AppliedPromoCode:
        return AppliedPromoCode(code="SAVE", discount_type=discount_type, discount_value=value, applies_to=applies_to)

    return make


@pytest.fixture
def state():
    return initial_state()
