"""Unit tests for checkout state transitions.

Run with: pytest tests/test_reducer.py -v
"""

from dataclasses import replace

from conftest import TODAY

from checkout.domain import commands as c
from checkout.domain.models import AuthorizedPickup, ExistingAthlete, ParentInfo, ParentProfile
from checkout.domain.reducer import reduce
from checkout.domain.value_objects import CheckoutStep


def run(state, *commands):
    for command in commands:
        state = reduce(state, command, today=TODAY)
    return state


class TestSetCamp:
    """Tests for selecting a camp."""

    def test_same_camp_keeps_add_ons(self, state, camp, make_add_on):
        state = run(state, c.SetCamp(camp), c.AddAddOn(make_add_on()))
        state = run(state, c.SetCamp(replace(camp, spots_remaining=camp.spots_remaining)))
        assert len(state.selected_add_ons) == 1

    def test_different_camp_clears_add_ons(self, state, camp, make_camp, make_add_on):
        state = run(state, c.SetCamp(camp), c.AddAddOn(make_add_on()))
        state = run(state, c.SetCamp(make_camp(id="camp-2", slug="fall-hoops")))
        assert state.selected_add_ons == ()
        assert state.camp_session.id == "camp-2"

    def test_new_camp_rechecks_eligibility(self, state, camp, make_camp):
        camper_id = state.campers[0].id
        state = run(state, c.SetCamp(camp), c.UpdateCamper(camper_id, {"date_of_birth": "2014-06-15"}))
        assert state.campers[0].is_eligible

        state = run(state, c.SetCamp(make_camp(id="camp-teen", slug="teen", min_age=13, max_age=17)))
        assert state.campers[0].age == 12
        assert not state.campers[0].is_eligible


class TestCampers:
    """Tests for adding, removing and editing campers."""

    def test_add_camper_appends_blank_camper(self, state):
        state = run(state, c.AddCamper())
        assert len(state.campers) == 2
        assert state.campers[0].id != state.campers[1].id

    def test_removing_last_camper_is_noop(self, state):
        only = state.campers[0].id
        assert run(state, c.RemoveCamper(only)) == state

    def test_camper_list_never_empties(self, state):
        state = run(state, c.AddCamper(), c.AddCamper())
        for camper in list(state.campers):
            state = run(state, c.RemoveCamper(camper.id))
        assert len(state.campers) == 1

    def test_remove_camper_drops_scoped_add_ons(self, state, make_add_on):
        state = run(state, c.AddCamper())
        first, second = (x.id for x in state.campers)
        state = run(
            state,
            c.AddAddOn(make_add_on(camper_id=first)),
            c.AddAddOn(make_add_on(camper_id=second)),
            c.AddAddOn(make_add_on(addon_id="photo-package")),
            c.RemoveCamper(second),
        )
        assert [x.id for x in state.campers] == [first]
        assert {a.camper_id for a in state.selected_add_ons} == {first, None}

    def test_unknown_camper_id_is_noop(self, state, camp):
        state = run(state, c.SetCamp(camp))
        assert run(state, c.UpdateCamper("missing", {"first_name": "Ava"})) == state
        assert run(state, c.SetNewAthleteMode("missing")) == state

    def test_update_merges_fields(self, state):
        camper_id = state.campers[0].id
        state = run(state, c.UpdateCamper(camper_id, {"first_name": "Ava", "tshirt_size": "YM"}))
        camper = state.campers[0]
        assert (camper.first_name, camper.tshirt_size, camper.last_name) == ("Ava", "YM", "")

    def test_update_ignores_identity_and_derived_fields(self, state):
        camper_id = state.campers[0].id
        state = run(state, c.UpdateCamper(camper_id, {"id": "hijack", "age": 99, "is_eligible": True, "nickname": "x"}))
        camper = state.campers[0]
        assert camper.id == camper_id
        assert camper.age is None and not camper.is_eligible

    def test_update_pickups(self, state):
        camper_id = state.campers[0].id
        pickups = [AuthorizedPickup(name="Grandma", relationship="grandmother", phone="555-0100")]
        state = run(state, c.UpdateCamper(camper_id, {"authorized_pickups": pickups}))
        assert state.campers[0].authorized_pickups == tuple(pickups)

    def test_date_of_birth_recomputes_age_and_eligibility(self, state, make_camp):
        camper_id = state.campers[0].id
        state = run(state, c.SetCamp(make_camp(min_age=8, max_age=14)))
        state = run(state, c.UpdateCamper(camper_id, {"date_of_birth": "2014-06-15"}))
        assert state.campers[0].is_eligible

        state = run(state, c.SetCamp(make_camp(min_age=13, max_age=17)))
        state = run(state, c.UpdateCamper(camper_id, {"date_of_birth": "2014-01-01"}))
        assert state.campers[0].age == 12
        assert not state.campers[0].is_eligible

    def test_date_of_birth_without_camp_is_ineligible(self, state):
        camper_id = state.campers[0].id
        state = run(state, c.UpdateCamper(camper_id, {"date_of_birth": "2014-06-15"}))
        assert state.campers[0].age == 12
        assert not state.campers[0].is_eligible


class TestAthleteSelection:
    """Tests for switching between existing and new athletes."""

    def test_select_existing_athlete_copies_profile(self, state, camp):
        camper_id = state.campers[0].id
        athlete = ExistingAthlete(
            id="ath-7",
            first_name="Maya",
            last_name="Lopez",
            date_of_birth="2015-03-02",
            grade="5",
            tshirt_size=None,
            allergies="peanuts",
        )
        state = run(state, c.SetCamp(camp), c.SelectExistingAthlete(camper_id, athlete))
        camper = state.campers[0]
        assert camper.id == camper_id
        assert camper.existing_athlete_id == "ath-7"
        assert not camper.is_new_athlete
        assert (camper.first_name, camper.grade, camper.tshirt_size, camper.allergies) == ("Maya", "5", "", "peanuts")
        assert camper.age == 11
        assert camper.is_eligible

    def test_new_athlete_mode_blanks_camper_but_keeps_id(self, state, camp):
        camper_id = state.campers[0].id
        athlete = ExistingAthlete(id="ath-7", first_name="Maya", last_name="Lopez", date_of_birth="2015-03-02")
        state = run(state, c.SetCamp(camp), c.SelectExistingAthlete(camper_id, athlete), c.SetNewAthleteMode(camper_id))
        camper = state.campers[0]
        assert camper.id == camper_id
        assert camper.is_new_athlete
        assert camper.existing_athlete_id is None
        assert camper.first_name == "" and camper.age is None


class TestParent:
    def test_update_parent_merges(self, state):
        state = run(state, c.UpdateParent({"first_name": "Dana"}), c.UpdateParent({"email": "dana@example.com"}))
        assert state.parent_info.first_name == "Dana"
        assert state.parent_info.email == "dana@example.com"

    def test_parent_from_profile_fills_blanks(self, state):
        state = run(state, c.UpdateParent({"city": "Austin"}))
        profile = ParentProfile(email="dana@example.com", first_name="Dana", phone=None)
        state = run(state, c.SetParentFromProfile(profile))
        assert state.parent_info == ParentInfo(first_name="Dana", email="dana@example.com")


class TestAddOns:
    """Tests for the add-on line items."""

    def test_same_key_merges_quantities(self, state, make_add_on):
        state = run(state, c.AddAddOn(make_add_on(quantity=2)), c.AddAddOn(make_add_on(quantity=3)))
        assert len(state.selected_add_ons) == 1
        assert state.selected_add_ons[0].quantity == 5

    def test_different_variant_is_separate_line(self, state, make_add_on):
        state = run(
            state,
            c.AddAddOn(make_add_on(addon_id="tee", variant_id="YS")),
            c.AddAddOn(make_add_on(addon_id="tee", variant_id="YM")),
        )
        assert len(state.selected_add_ons) == 2

    def test_remove_matches_exact_key(self, state, make_add_on):
        state = run(
            state,
            c.AddAddOn(make_add_on(addon_id="tee", variant_id="YS")),
            c.AddAddOn(make_add_on(addon_id="tee", variant_id="YM")),
            c.RemoveAddOn("tee", "YS", None),
        )
        assert [a.variant_id for a in state.selected_add_ons] == ["YM"]

    def test_update_quantity_sets_value(self, state, make_add_on):
        state = run(state, c.AddAddOn(make_add_on()), c.UpdateAddOnQuantity("fuel-pack", 4))
        assert state.selected_add_ons[0].quantity == 4

    def test_zero_or_negative_quantity_removes(self, state, make_add_on):
        for quantity in (0, -2):
            updated = run(state, c.AddAddOn(make_add_on()), c.UpdateAddOnQuantity("fuel-pack", quantity))
            assert updated.selected_add_ons == ()


class TestMisc:
    def test_promo_apply_replace_remove(self, state, make_promo):
        state = run(state, c.ApplyPromo(make_promo(value=10)), c.ApplyPromo(make_promo(value=20)))
        assert state.promo_code.discount_value == 20
        assert run(state, c.RemovePromo()).promo_code is None

    def test_squad_and_waitlist(self, state):
        state = run(state, c.SetSquad("squad-1"), c.SetWaitlistMode(True))
        assert state.squad_id == "squad-1"
        assert state.is_waitlist_mode
        assert run(state, c.SetSquad(None)).squad_id is None

    def test_set_step(self, state):
        assert run(state, c.SetStep(CheckoutStep.WAIVERS)).step is CheckoutStep.WAIVERS

    def test_reset_restores_defaults(self, state, camp, make_add_on):
        state = run(state, c.SetCamp(camp), c.AddCamper(), c.AddAddOn(make_add_on()), c.SetSquad("s"))
        state = run(state, c.Reset())
        assert state.camp_session is None
        assert len(state.campers) == 1
        assert state.selected_add_ons == () and state.squad_id is None

    def test_unknown_command_returns_state(self, state):
        assert reduce(state, object(), today=TODAY) is state
