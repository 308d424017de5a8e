"""Field-level checks behind the campers step.

Each function returns ``{field: message}``; an empty dict means valid.
"""

from checkout.domain.models import CampSession, CamperEntry, CheckoutState, ParentInfo

REQUIRED = "This field is required"

_PARENT_REQUIRED = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "emergency_contact_name",
    "emergency_contact_phone",
    "emergency_contact_relationship",
)


def age_error(camper: CamperEntry, camp: CampSession | None) -> str | None:
    if camper.age is None or camp is None:
        return None
    if camper.age < camp.min_age:
        return f"Must be at least {camp.min_age} years old for this camp"
    if camper.age > camp.max_age:
        return f"Must be {camp.max_age} or younger for this camp"
    return None


def camper_errors(camper: CamperEntry, camp: CampSession | None) -> dict[str, str]:
    errors = {}
    if not camper.first_name.strip():
        errors["first_name"] = REQUIRED
    if not camper.last_name.strip():
        errors["last_name"] = REQUIRED
    if not camper.date_of_birth.strip():
        errors["date_of_birth"] = REQUIRED
    elif not camper.is_eligible:
        errors["date_of_birth"] = age_error(camper, camp) or "Camper is not eligible for this camp"
    if not any(pickup.is_complete for pickup in camper.authorized_pickups):
        errors["authorized_pickups"] = "At least one authorized pickup with a name and phone is required"
    return errors


def parent_errors(parent: ParentInfo) -> dict[str, str]:
    return {name: REQUIRED for name in _PARENT_REQUIRED if not getattr(parent, name).strip()}


def campers_step_errors(state: CheckoutState) -> dict[str, dict[str, str]]:
    """Errors keyed by camper id, plus ``"parent"`` for the guardian record."""
    errors = {}
    for camper in state.campers:
        found = camper_errors(camper, state.camp_session)
        if found:
            errors[camper.id] = found
    found = parent_errors(state.parent_info)
    if found:
        errors["parent"] = found
    return errors
