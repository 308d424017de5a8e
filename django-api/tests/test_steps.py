"""Unit tests for step order, gating and field validation.

Run with: pytest tests/test_steps.py -v
"""

from dataclasses import replace

import pytest

from checkout.domain.errors import InvalidStepError
from checkout.domain.models import AuthorizedPickup, ParentInfo
from checkout.domain.steps import (
    STEP_ORDER,
    WAITLIST_STEP_ORDER,
    can_proceed,
    next_step,
    parse_step,
    prev_step,
)
from checkout.domain.validation import age_error, camper_errors, campers_step_errors, parent_errors
from checkout.domain.value_objects import Capacity, CheckoutStep

COMPLETE_PARENT = ParentInfo(
    first_name="Dana",
    last_name="Lopez",
    email="dana@example.com",
    phone="555-0100",
    emergency_contact_name="Sam Lopez",
    emergency_contact_phone="555-0101",
    emergency_contact_relationship="uncle",
)


@pytest.fixture
def complete_state(state, camp):
    camper = replace(
        state.campers[0],
        first_name="Maya",
        last_name="Lopez",
        date_of_birth="2015-03-02",
        age=11,
        is_eligible=True,
        authorized_pickups=(AuthorizedPickup(name="Sam", relationship="uncle", phone="555-0101"),),
    )
    return replace(state, step=CheckoutStep.CAMPERS, camp_session=camp, campers=(camper,), parent_info=COMPLETE_PARENT)


class TestStepOrder:
    """Tests for next/prev navigation in both flows."""

    def test_next_walks_standard_order(self, state):
        assert next_step(state) is CheckoutStep.CAMPERS
        at_squad = replace(state, step=CheckoutStep.SQUAD)
        assert next_step(at_squad) is CheckoutStep.ADDONS

    def test_waitlist_skips_add_ons_and_payment(self, state):
        at_squad = replace(state, step=CheckoutStep.SQUAD, is_waitlist_mode=True)
        assert next_step(at_squad) is CheckoutStep.WAIVERS
        at_account = replace(state, step=CheckoutStep.ACCOUNT, is_waitlist_mode=True)
        assert next_step(at_account) is CheckoutStep.WAITLIST_CONFIRM

    @pytest.mark.parametrize("waitlist", [False, True])
    def test_prev_at_first_step_is_noop(self, state, waitlist):
        assert prev_step(replace(state, is_waitlist_mode=waitlist)) is CheckoutStep.CAMP

    @pytest.mark.parametrize("order,waitlist", [(STEP_ORDER, False), (WAITLIST_STEP_ORDER, True)])
    def test_next_at_last_step_is_noop(self, state, order, waitlist):
        last = replace(state, step=order[-1], is_waitlist_mode=waitlist)
        assert next_step(last) is order[-1]

    def test_step_outside_active_order(self, state):
        at_addons = replace(state, step=CheckoutStep.ADDONS, is_waitlist_mode=True)
        assert next_step(at_addons) is CheckoutStep.CAMP
        assert prev_step(at_addons) is CheckoutStep.ADDONS

    def test_parse_step(self):
        assert parse_step("waitlist-confirm") is CheckoutStep.WAITLIST_CONFIRM
        with pytest.raises(InvalidStepError):
            parse_step("shipping")


class TestCanProceed:
    """Tests for step gating."""

    def test_camp_step_needs_camp(self, state):
        assert not can_proceed(state)

    def test_camp_step_needs_capacity_unless_waitlisted(self, state, make_camp):
        full = replace(state, camp_session=make_camp(spots_remaining=Capacity(0)))
        assert not can_proceed(full)
        assert can_proceed(replace(full, is_waitlist_mode=True))
        assert can_proceed(replace(state, camp_session=make_camp()))

    def test_campers_step_complete(self, complete_state):
        assert can_proceed(complete_state)

    def test_campers_step_blocks_ineligible_camper(self, complete_state):
        camper = replace(complete_state.campers[0], is_eligible=False)
        assert not can_proceed(replace(complete_state, campers=(camper,)))

    def test_campers_step_needs_complete_pickup(self, complete_state):
        camper = replace(complete_state.campers[0], authorized_pickups=(AuthorizedPickup(name="Sam", phone="  "),))
        assert not can_proceed(replace(complete_state, campers=(camper,)))

    def test_campers_step_needs_emergency_contact(self, complete_state):
        parent = replace(COMPLETE_PARENT, emergency_contact_relationship=" ")
        assert not can_proceed(replace(complete_state, parent_info=parent))

    @pytest.mark.parametrize("step", [CheckoutStep.SQUAD, CheckoutStep.ADDONS, CheckoutStep.PAYMENT])
    def test_optional_steps_always_open(self, state, step):
        assert can_proceed(replace(state, step=step))

    @pytest.mark.parametrize("step", [CheckoutStep.WAIVERS, CheckoutStep.ACCOUNT, CheckoutStep.CONFIRMATION])
    def test_other_steps_closed(self, state, step):
        assert not can_proceed(replace(state, step=step))


class TestValidation:
    """Tests for field-level error messages."""

    def test_blank_camper_errors(self, state, camp):
        errors = camper_errors(state.campers[0], camp)
        assert set(errors) == {"first_name", "last_name", "date_of_birth", "authorized_pickups"}

    def test_age_messages(self, state, make_camp):
        camp = make_camp(min_age=8, max_age=14)
        assert age_error(replace(state.campers[0], age=7), camp) == "Must be at least 8 years old for this camp"
        assert age_error(replace(state.campers[0], age=15), camp) == "Must be 14 or younger for this camp"
        assert age_error(replace(state.campers[0], age=10), camp) is None

    def test_parent_errors_list_missing_fields(self):
        errors = parent_errors(replace(COMPLETE_PARENT, email="", phone=" "))
        assert set(errors) == {"email", "phone"}

    def test_step_errors_keyed_by_camper_and_parent(self, complete_state):
        assert campers_step_errors(complete_state) == {}
        broken = replace(complete_state, parent_info=ParentInfo())
        assert set(campers_step_errors(broken)) == {"parent"}
