"""Checkout service - owns the live checkout and all business entry points.

Services:
- Depend only on interfaces (stores)
- Run commands through the pure reducer
- Persist after every transition
- Raise domain errors only at the submission boundary
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from django.utils import timezone

from checkout.conf import checkout_settings
from checkout.domain import commands as c
from checkout.domain.errors import CheckoutNotReadyError
from checkout.domain.models import (
    AppliedPromoCode,
    CampSession,
    CheckoutState,
    CheckoutTotals,
    ExistingAthlete,
    ParentProfile,
    SelectedAddOn,
    initial_state,
)
from checkout.domain.reducer import reduce
from checkout.domain.steps import active_order, can_proceed, next_step, prev_step
from checkout.domain.validation import campers_step_errors
from checkout.domain.value_objects import CheckoutStep
from checkout.services.persistence import CheckoutPersistence
from checkout.stores.interfaces import CheckoutStore
from checkout.stores.serializers import RegistrationPayloadSerializer


class CheckoutService:
    """Mutable handle around one registration session.

    The state is rehydrated from ``store`` once, at construction. Stored
    state for a different camp than ``camp_slug`` is discarded.
    ``on_step_change`` is called with the new step after every navigation,
    e.g. to scroll the page back to the top.
    """

    def __init__(
        self,
        store: CheckoutStore,
        session_id: str,
        *,
        camp_slug: str | None = None,
        clock: Callable[[], datetime] = timezone.now,
        on_step_change: Callable[[CheckoutStep], None] | None = None,
    ) -> None:
        config = checkout_settings()
        self._clock = clock
        self._on_step_change = on_step_change
        self._persistence = CheckoutPersistence(
            store,
            key=f"{config.storage_key}:{session_id}",
            max_age=config.max_age,
            clock=clock,
        )
        self._state = self._persistence.load(camp_slug) or initial_state()

    @property
    def state(self) -> CheckoutState:
        return self._state

    @property
    def totals(self) -> CheckoutTotals:
        return self._state.totals

    @property
    def step_order(self) -> tuple[CheckoutStep, ...]:
        return active_order(self._state.is_waitlist_mode)

    def dispatch(self, command: c.Command) -> CheckoutState:
        """Apply ``command``, persist the result and return it."""
        self._state = reduce(self._state, command, today=self._clock().date())
        self._persistence.save(self._state)
        if isinstance(command, c.Reset):
            self._persistence.clear()
        return self._state

    # Navigation

    def set_step(self, step: CheckoutStep) -> None:
        self.dispatch(c.SetStep(step))
        self._notify_step_change()

    def next_step(self) -> None:
        target = next_step(self._state)
        if target is not self._state.step:
            self.set_step(target)

    def prev_step(self) -> None:
        target = prev_step(self._state)
        if target is not self._state.step:
            self.set_step(target)

    def can_proceed(self) -> bool:
        return can_proceed(self._state)

    def step_errors(self) -> dict[str, dict[str, str]]:
        """Field errors blocking the campers step, keyed by camper id or ``"parent"``."""
        if self._state.step is not CheckoutStep.CAMPERS:
            return {}
        return campers_step_errors(self._state)

    # Camp and campers

    def set_camp(self, camp: CampSession) -> None:
        self.dispatch(c.SetCamp(camp))

    def add_camper(self) -> None:
        self.dispatch(c.AddCamper())

    def remove_camper(self, camper_id: str) -> None:
        self.dispatch(c.RemoveCamper(camper_id))

    def update_camper(self, camper_id: str, changes: Mapping[str, Any]) -> None:
        self.dispatch(c.UpdateCamper(camper_id, dict(changes)))

    def select_existing_athlete(self, camper_id: str, athlete: ExistingAthlete) -> None:
        self.dispatch(c.SelectExistingAthlete(camper_id, athlete))

    def set_new_athlete_mode(self, camper_id: str) -> None:
        self.dispatch(c.SetNewAthleteMode(camper_id))

    # Parent

    def update_parent(self, changes: Mapping[str, Any]) -> None:
        self.dispatch(c.UpdateParent(dict(changes)))

    def set_parent_from_profile(self, profile: ParentProfile) -> None:
        self.dispatch(c.SetParentFromProfile(profile))

    def set_squad(self, squad_id: str | None) -> None:
        self.dispatch(c.SetSquad(squad_id))

    # Add-ons

    def add_add_on(self, add_on: SelectedAddOn) -> None:
        self.dispatch(c.AddAddOn(add_on))

    def remove_add_on(self, addon_id: str, variant_id: str | None = None, camper_id: str | None = None) -> None:
        self.dispatch(c.RemoveAddOn(addon_id, variant_id, camper_id))

    def update_add_on_quantity(
        self,
        addon_id: str,
        variant_id: str | None,
        camper_id: str | None,
        quantity: int,
    ) -> None:
        self.dispatch(c.UpdateAddOnQuantity(addon_id, quantity, variant_id, camper_id))

    def get_add_on_quantity(self, addon_id: str, variant_id: str | None = None, camper_id: str | None = None) -> int:
        key = (addon_id, variant_id, camper_id)
        return next((a.quantity for a in self._state.selected_add_ons if a.key == key), 0)

    # Promo and waitlist

    def apply_promo(self, promo: AppliedPromoCode) -> None:
        self.dispatch(c.ApplyPromo(promo))

    def remove_promo(self) -> None:
        self.dispatch(c.RemovePromo())

    def set_waitlist_mode(self, is_waitlist_mode: bool) -> None:
        self.dispatch(c.SetWaitlistMode(is_waitlist_mode))

    def reset(self) -> None:
        self.dispatch(c.Reset())

    # Submission

    def build_registration_payload(self) -> dict[str, Any]:
        """Body for the registration/order endpoint.

        Raises:
            CheckoutNotReadyError: If no camp is selected or camper details are incomplete.
        """
        state = self._state
        if state.camp_session is None:
            raise CheckoutNotReadyError("No camp selected")
        if campers_step_errors(state):
            raise CheckoutNotReadyError("Camper or parent details are incomplete")
        return RegistrationPayloadSerializer(state).data

    def _notify_step_change(self) -> None:
        if self._on_step_change is not None:
            self._on_step_change(self._state.step)
