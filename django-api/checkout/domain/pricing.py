"""Order totals, derived from the camp, campers, add-ons and promo code.

Totals are never stored; callers recompute them from the four inputs.
Camps are tax-exempt, so tax is always zero.
"""

from collections.abc import Sequence

from checkout.domain.models import (
    AppliedPromoCode,
    CampSession,
    CamperEntry,
    CheckoutTotals,
    SelectedAddOn,
)
from checkout.domain.value_objects import DiscountType, Money, PromoScope


def sibling_discount(camp: CampSession, camper_count: int) -> Money:
    """Discount on every camper after the first, at the camp's percent."""
    if camper_count <= 1:
        return Money.zero()
    return camp.unit_price.times(camper_count - 1).percent(camp.sibling_discount_percent)


def add_ons_subtotal(add_ons: Sequence[SelectedAddOn]) -> Money:
    total = Money.zero()
    for add_on in add_ons:
        total += add_on.line_total
    return total


def promo_eligible_base(promo: AppliedPromoCode, registration: Money, add_ons: Money) -> Money:
    """The part of the order a promo code may discount."""
    base = Money.zero()
    if promo.applies_to in (PromoScope.REGISTRATION, PromoScope.BOTH):
        base += registration
    if promo.applies_to in (PromoScope.ADDONS, PromoScope.BOTH):
        base += add_ons
    return base


def promo_discount(promo: AppliedPromoCode | None, registration: Money, add_ons: Money) -> Money:
    if promo is None:
        return Money.zero()
    base = promo_eligible_base(promo, registration, add_ons)
    if promo.discount_type is DiscountType.PERCENT:
        return base.percent(promo.discount_value)
    return min(Money(round(promo.discount_value)), base)


def compute_totals(
    camp: CampSession | None,
    campers: Sequence[CamperEntry],
    add_ons: Sequence[SelectedAddOn],
    promo: AppliedPromoCode | None,
) -> CheckoutTotals:
    if camp is None:
        return CheckoutTotals.zero()

    camp_subtotal = camp.unit_price.times(len(campers))
    siblings = sibling_discount(camp, len(campers))
    extras = add_ons_subtotal(add_ons)
    registration = camp_subtotal - siblings

    discount = promo_discount(promo, registration, extras)
    subtotal = registration + extras - discount
    tax = Money.zero()

    return CheckoutTotals(
        camp_subtotal=camp_subtotal,
        sibling_discount=siblings,
        add_ons_subtotal=extras,
        promo_discount=discount,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )
