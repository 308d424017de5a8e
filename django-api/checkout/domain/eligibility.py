"""Age and age-bracket eligibility of campers."""

from dataclasses import replace
from datetime import date

from checkout.domain.models import CampSession, CamperEntry


def compute_age(date_of_birth: str, today: date) -> int | None:
    """Whole years between ``date_of_birth`` (YYYY-MM-DD) and ``today``.

    Returns None for blank or unparseable dates.
    """
    if not date_of_birth:
        return None
    try:
        born = date.fromisoformat(date_of_birth[:10])
    except ValueError:
        return None
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def is_eligible(age: int | None, camp: CampSession | None) -> bool:
    if camp is None or age is None:
        return False
    return camp.min_age <= age <= camp.max_age


def with_derived_age(camper: CamperEntry, camp: CampSession | None, today: date) -> CamperEntry:
    age = compute_age(camper.date_of_birth, today)
    return replace(camper, age=age, is_eligible=is_eligible(age, camp))
