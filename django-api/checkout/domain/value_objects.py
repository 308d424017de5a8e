"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self

TSHIRT_SIZES = ("YXS", "YS", "YM", "YL", "AS", "AM", "AL", "AXL")

# Females-only camps.
CAMPER_SEX = "female"


class CheckoutStep(Enum):
    """Positions of the registration wizard."""

    CAMP = "camp"
    CAMPERS = "campers"
    SQUAD = "squad"
    ADDONS = "addons"
    WAIVERS = "waivers"
    ACCOUNT = "account"
    PAYMENT = "payment"
    CONFIRMATION = "confirmation"
    WAITLIST_CONFIRM = "waitlist-confirm"


class DiscountType(Enum):
    PERCENT = "percent"
    FIXED = "fixed"


class PromoScope(Enum):
    """Which part of the order a promo code discounts."""

    REGISTRATION = "registration"
    ADDONS = "addons"
    BOTH = "both"


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative amount in cents."""

    cents: int

    def __post_init__(self) -> None:
        if self.cents < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(0)

    def __add__(self, other: "Money") -> "Money":
        return Money(self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.cents - other.cents)

    def times(self, factor: int) -> "Money":
        return Money(self.cents * factor)

    def percent(self, rate: float | int | Decimal) -> "Money":
        """Return ``rate`` percent of this amount, rounded half up to the cent."""
        exact = Decimal(self.cents) * Decimal(str(rate)) / Decimal(100)
        return Money(int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP)))

    def __str__(self) -> str:
        return f"{Decimal(self.cents) / 100:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    @property
    def has_room(self) -> bool:
        return self.value > 0
