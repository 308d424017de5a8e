"""Domain models for an in-progress camp registration.

These are pure domain objects. Camp sessions, athletes, parent profiles
and promo codes are reference data supplied by other services; the
checkout only reads them.
"""

from dataclasses import dataclass, field
from uuid import uuid4

from checkout.domain.value_objects import (
    CAMPER_SEX,
    Capacity,
    CheckoutStep,
    DiscountType,
    Money,
    PromoScope,
)


@dataclass(frozen=True)
class CampSession:
    """A scheduled camp with its own price, age bounds and capacity."""

    id: str
    slug: str
    price: Money
    min_age: int
    max_age: int
    spots_remaining: Capacity
    sibling_discount_percent: float = 0
    early_bird_price: Money | None = None
    is_early_bird: bool = False
    name: str = ""
    tenant_id: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.sibling_discount_percent <= 100:
            raise ValueError("Sibling discount must be between 0 and 100 percent")

    @property
    def unit_price(self) -> Money:
        if self.is_early_bird and self.early_bird_price:
            return self.early_bird_price
        return self.price


@dataclass(frozen=True)
class ExistingAthlete:
    """Athlete already on the parent's account."""

    id: str
    first_name: str
    last_name: str
    date_of_birth: str
    grade: str | None = None
    tshirt_size: str | None = None
    medical_notes: str | None = None
    allergies: str | None = None


@dataclass(frozen=True)
class ParentProfile:
    """Account profile of the signed-in parent."""

    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None


@dataclass(frozen=True)
class AuthorizedPickup:
    name: str = ""
    relationship: str = ""
    phone: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip()) and bool(self.phone.strip())


@dataclass(frozen=True)
class CamperEntry:
    """One athlete being registered. ``age`` and ``is_eligible`` are derived."""

    id: str
    existing_athlete_id: str | None = None
    is_new_athlete: bool = True
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    grade: str = ""
    sex: str = CAMPER_SEX
    tshirt_size: str = ""
    medical_notes: str = ""
    allergies: str = ""
    special_considerations: str = ""
    authorized_pickups: tuple[AuthorizedPickup, ...] = (AuthorizedPickup(),)
    age: int | None = None
    is_eligible: bool = False


# Fields a caller may change through an update; the rest are identity or derived.
CAMPER_EDITABLE_FIELDS = frozenset(
    {
        "existing_athlete_id",
        "is_new_athlete",
        "first_name",
        "last_name",
        "date_of_birth",
        "grade",
        "tshirt_size",
        "medical_notes",
        "allergies",
        "special_considerations",
        "authorized_pickups",
    }
)


@dataclass(frozen=True)
class ParentInfo:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    emergency_contact_relationship: str = ""
    address_line_1: str = ""
    address_line_2: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass(frozen=True)
class SelectedAddOn:
    """An add-on line. Uniqueness is keyed by (addon, variant, camper)."""

    addon_id: str
    quantity: int
    unit_price: Money
    variant_id: str | None = None
    camper_id: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Add-on quantity must be at least 1")

    @property
    def key(self) -> tuple[str, str | None, str | None]:
        return (self.addon_id, self.variant_id, self.camper_id)

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True)
class AppliedPromoCode:
    code: str
    discount_type: DiscountType
    discount_value: float
    applies_to: PromoScope = PromoScope.BOTH
    id: str | None = None

    def __post_init__(self) -> None:
        if self.discount_value < 0:
            raise ValueError("Promo discount cannot be negative")
        if self.discount_type is DiscountType.PERCENT and self.discount_value > 100:
            raise ValueError("Percent promo cannot exceed 100")


@dataclass(frozen=True)
class CheckoutTotals:
    camp_subtotal: Money
    sibling_discount: Money
    add_ons_subtotal: Money
    promo_discount: Money
    subtotal: Money
    tax: Money
    total: Money

    @classmethod
    def zero(cls) -> "CheckoutTotals":
        nothing = Money.zero()
        return cls(nothing, nothing, nothing, nothing, nothing, nothing, nothing)


@dataclass(frozen=True)
class CheckoutState:
    """Root aggregate of a registration session."""

    step: CheckoutStep = CheckoutStep.CAMP
    camp_session: CampSession | None = None
    campers: tuple[CamperEntry, ...] = ()
    parent_info: ParentInfo = field(default_factory=ParentInfo)
    selected_add_ons: tuple[SelectedAddOn, ...] = ()
    promo_code: AppliedPromoCode | None = None
    squad_id: str | None = None
    is_waitlist_mode: bool = False

    @property
    def totals(self) -> CheckoutTotals:
        from checkout.domain.pricing import compute_totals

        return compute_totals(
            self.camp_session, self.campers, self.selected_add_ons, self.promo_code
        )

    def find_camper(self, camper_id: str) -> CamperEntry | None:
        return next((c for c in self.campers if c.id == camper_id), None)


def new_camper(camper_id: str | None = None) -> CamperEntry:
    """Blank camper with a fresh client-side id."""
    return CamperEntry(id=camper_id or str(uuid4()))


def initial_state() -> CheckoutState:
    return CheckoutState(campers=(new_camper(),))
