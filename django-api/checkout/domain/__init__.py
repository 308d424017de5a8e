from checkout.domain.models import (
    AppliedPromoCode,
    AuthorizedPickup,
    CampSession,
    CamperEntry,
    CheckoutState,
    CheckoutTotals,
    ExistingAthlete,
    ParentInfo,
    ParentProfile,
    SelectedAddOn,
    initial_state,
)
from checkout.domain.value_objects import Capacity, CheckoutStep, DiscountType, Money, PromoScope

__all__ = [
    "AppliedPromoCode",
    "AuthorizedPickup",
    "CampSession",
    "CamperEntry",
    "CheckoutState",
    "CheckoutTotals",
    "ExistingAthlete",
    "ParentInfo",
    "ParentProfile",
    "SelectedAddOn",
    "initial_state",
    "Capacity",
    "CheckoutStep",
    "DiscountType",
    "Money",
    "PromoScope",
]
