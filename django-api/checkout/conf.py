"""Checkout settings, read from ``settings.CHECKOUT`` with defaults."""

from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings

DEFAULTS = {
    "STORAGE_KEY": "empowered-checkout-state",
    "MAX_AGE_HOURS": 24,
    "CACHE_ALIAS": "default",
}


@dataclass(frozen=True)
class CheckoutSettings:
    storage_key: str
    max_age: timedelta
    cache_alias: str


def checkout_settings() -> CheckoutSettings:
    configured = {**DEFAULTS, **getattr(settings, "CHECKOUT", {})}
    return CheckoutSettings(
        storage_key=configured["STORAGE_KEY"],
        max_age=timedelta(hours=configured["MAX_AGE_HOURS"]),
        cache_alias=configured["CACHE_ALIAS"],
    )
