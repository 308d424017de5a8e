"""Pure state transitions of a checkout.

``reduce`` never raises for ids it does not know: every id a caller passes
comes from state it already holds, so a miss leaves the state unchanged.
"""

from collections.abc import Callable
from dataclasses import fields, replace
from datetime import date

from checkout.domain import commands as c
from checkout.domain.eligibility import with_derived_age
from checkout.domain.models import (
    CAMPER_EDITABLE_FIELDS,
    CamperEntry,
    CheckoutState,
    ParentInfo,
    initial_state,
    new_camper,
)
from checkout.domain.value_objects import CAMPER_SEX

_PARENT_FIELDS = frozenset(f.name for f in fields(ParentInfo))


def reduce(state: CheckoutState, command: c.Command, today: date | None = None) -> CheckoutState:
    """Apply ``command`` to ``state`` and return the new state."""
    handler = _HANDLERS.get(type(command))
    if handler is None:
        return state
    return handler(state, command, today or date.today())


def _replace_camper(state: CheckoutState, camper_id: str, update: Callable[[CamperEntry], CamperEntry]) -> CheckoutState:
    campers = list(state.campers)
    for index, camper in enumerate(campers):
        if camper.id == camper_id:
            campers[index] = update(camper)
            return replace(state, campers=tuple(campers))
    return state


def _set_step(state, command: c.SetStep, today):
    return replace(state, step=command.step)


def _set_camp(state, command: c.SetCamp, today):
    camp = command.camp
    campers = tuple(
        with_derived_age(camper, camp, today) if camper.date_of_birth else camper
        for camper in state.campers
    )
    # Add-ons belong to a camp; re-affirming the same camp keeps them.
    if state.camp_session is not None and state.camp_session.id == camp.id:
        return replace(state, camp_session=camp, campers=campers)
    return replace(state, camp_session=camp, campers=campers, selected_add_ons=())


def _add_camper(state, command: c.AddCamper, today):
    return replace(state, campers=state.campers + (new_camper(),))


def _remove_camper(state, command: c.RemoveCamper, today):
    if len(state.campers) <= 1 or state.find_camper(command.camper_id) is None:
        return state
    return replace(
        state,
        campers=tuple(x for x in state.campers if x.id != command.camper_id),
        selected_add_ons=tuple(a for a in state.selected_add_ons if a.camper_id != command.camper_id),
    )


def _update_camper(state, command: c.UpdateCamper, today):
    changes = {k: v for k, v in command.changes.items() if k in CAMPER_EDITABLE_FIELDS}
    if "authorized_pickups" in changes:
        changes["authorized_pickups"] = tuple(changes["authorized_pickups"])

    def update(camper: CamperEntry) -> CamperEntry:
        updated = replace(camper, **changes)
        if "date_of_birth" in changes:
            updated = with_derived_age(updated, state.camp_session, today)
        return updated

    return _replace_camper(state, command.camper_id, update)


def _select_existing_athlete(state, command: c.SelectExistingAthlete, today):
    athlete = command.athlete

    def update(camper: CamperEntry) -> CamperEntry:
        selected = replace(
            camper,
            existing_athlete_id=athlete.id,
            is_new_athlete=False,
            first_name=athlete.first_name,
            last_name=athlete.last_name,
            date_of_birth=athlete.date_of_birth,
            grade=athlete.grade or "",
            sex=CAMPER_SEX,
            tshirt_size=athlete.tshirt_size or "",
            medical_notes=athlete.medical_notes or "",
            allergies=athlete.allergies or "",
            special_considerations="",
        )
        return with_derived_age(selected, state.camp_session, today)

    return _replace_camper(state, command.camper_id, update)


def _set_new_athlete_mode(state, command: c.SetNewAthleteMode, today):
    return _replace_camper(state, command.camper_id, lambda camper: new_camper(camper.id))


def _update_parent(state, command: c.UpdateParent, today):
    changes = {k: v for k, v in command.changes.items() if k in _PARENT_FIELDS}
    return replace(state, parent_info=replace(state.parent_info, **changes))


def _set_parent_from_profile(state, command: c.SetParentFromProfile, today):
    profile = command.profile
    parent = ParentInfo(**{name: getattr(profile, name) or "" for name in _PARENT_FIELDS})
    return replace(state, parent_info=parent)


def _set_squad(state, command: c.SetSquad, today):
    return replace(state, squad_id=command.squad_id)


def _add_add_on(state, command: c.AddAddOn, today):
    add_on = command.add_on
    add_ons = list(state.selected_add_ons)
    for index, existing in enumerate(add_ons):
        if existing.key == add_on.key:
            add_ons[index] = replace(existing, quantity=existing.quantity + add_on.quantity)
            return replace(state, selected_add_ons=tuple(add_ons))
    return replace(state, selected_add_ons=state.selected_add_ons + (add_on,))


def _without_add_on(state: CheckoutState, key: tuple) -> CheckoutState:
    return replace(state, selected_add_ons=tuple(a for a in state.selected_add_ons if a.key != key))


def _remove_add_on(state, command: c.RemoveAddOn, today):
    return _without_add_on(state, (command.addon_id, command.variant_id, command.camper_id))


def _update_add_on_quantity(state, command: c.UpdateAddOnQuantity, today):
    key = (command.addon_id, command.variant_id, command.camper_id)
    if command.quantity <= 0:
        return _without_add_on(state, key)
    return replace(
        state,
        selected_add_ons=tuple(
            replace(a, quantity=command.quantity) if a.key == key else a
            for a in state.selected_add_ons
        ),
    )


def _apply_promo(state, command: c.ApplyPromo, today):
    return replace(state, promo_code=command.promo)


def _remove_promo(state, command: c.RemovePromo, today):
    return replace(state, promo_code=None)


def _set_waitlist_mode(state, command: c.SetWaitlistMode, today):
    return replace(state, is_waitlist_mode=command.is_waitlist_mode)


def _reset(state, command: c.Reset, today):
    return initial_state()


_HANDLERS: dict[type, Callable[[CheckoutState, c.Command, date], CheckoutState]] = {
    c.SetStep: _set_step,
    c.SetCamp: _set_camp,
    c.AddCamper: _add_camper,
    c.RemoveCamper: _remove_camper,
    c.UpdateCamper: _update_camper,
    c.SelectExistingAthlete: _select_existing_athlete,
    c.SetNewAthleteMode: _set_new_athlete_mode,
    c.UpdateParent: _update_parent,
    c.SetParentFromProfile: _set_parent_from_profile,
    c.SetSquad: _set_squad,
    c.AddAddOn: _add_add_on,
    c.RemoveAddOn: _remove_add_on,
    c.UpdateAddOnQuantity: _update_add_on_quantity,
    c.ApplyPromo: _apply_promo,
    c.RemovePromo: _remove_promo,
    c.SetWaitlistMode: _set_waitlist_mode,
    c.Reset: _reset,
}
