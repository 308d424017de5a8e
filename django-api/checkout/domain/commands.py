"""Commands accepted by the checkout reducer."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from checkout.domain.models import (
    AppliedPromoCode,
    CampSession,
    ExistingAthlete,
    ParentProfile,
    SelectedAddOn,
)
from checkout.domain.value_objects import CheckoutStep


@dataclass(frozen=True)
class SetStep:
    step: CheckoutStep


@dataclass(frozen=True)
class SetCamp:
    camp: CampSession


@dataclass(frozen=True)
class AddCamper:
    pass


@dataclass(frozen=True)
class RemoveCamper:
    camper_id: str


@dataclass(frozen=True)
class UpdateCamper:
    camper_id: str
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SelectExistingAthlete:
    camper_id: str
    athlete: ExistingAthlete


@dataclass(frozen=True)
class SetNewAthleteMode:
    camper_id: str


@dataclass(frozen=True)
class UpdateParent:
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SetParentFromProfile:
    profile: ParentProfile


@dataclass(frozen=True)
class SetSquad:
    squad_id: str | None


@dataclass(frozen=True)
class AddAddOn:
    add_on: SelectedAddOn


@dataclass(frozen=True)
class RemoveAddOn:
    addon_id: str
    variant_id: str | None = None
    camper_id: str | None = None


@dataclass(frozen=True)
class UpdateAddOnQuantity:
    addon_id: str
    quantity: int
    variant_id: str | None = None
    camper_id: str | None = None


@dataclass(frozen=True)
class ApplyPromo:
    promo: AppliedPromoCode


@dataclass(frozen=True)
class RemovePromo:
    pass


@dataclass(frozen=True)
class SetWaitlistMode:
    is_waitlist_mode: bool


@dataclass(frozen=True)
class Reset:
    pass


Command = (
    SetStep
    | SetCamp
    | AddCamper
    | RemoveCamper
    | UpdateCamper
    | SelectExistingAthlete
    | SetNewAthleteMode
    | UpdateParent
    | SetParentFromProfile
    | SetSquad
    | AddAddOn
    | RemoveAddOn
    | UpdateAddOnQuantity
    | ApplyPromo
    | RemovePromo
    | SetWaitlistMode
    | Reset
)
