"""Serializers turning checkout API payloads into service calls.

Payload keys are camelCase, matching the web client and the persisted
layout. Each command serializer validates its payload and applies it to
a ``CheckoutService``. Camps, add-ons and promo codes share their
serializers with the stored layout.
"""

from rest_framework import serializers

from checkout.domain.models import AuthorizedPickup, ExistingAthlete, ParentProfile
from checkout.domain.steps import parse_step
from checkout.domain.value_objects import TSHIRT_SIZES
from checkout.services.checkout_service import CheckoutService
from checkout.stores.serializers import (
    AddOnSerializer,
    CampSessionSerializer,
    PickupSerializer,
    PromoCodeSerializer,
    _renamed,
)


def _text(source: str | None = None) -> serializers.CharField:
    return serializers.CharField(**_renamed(source), required=False, allow_blank=True)


def _optional(source: str) -> serializers.CharField:
    return serializers.CharField(source=source, required=False, allow_null=True, allow_blank=True, default=None)


# Reference data


class ExistingAthleteSerializer(serializers.Serializer):
    """Athlete record as the athlete-profile service returns it."""

    id = serializers.CharField()
    first_name = serializers.CharField(allow_blank=True)
    last_name = serializers.CharField(allow_blank=True)
    date_of_birth = serializers.CharField(allow_blank=True)
    grade = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    tshirt_size = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    medical_notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    allergies = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class ParentProfileSerializer(serializers.Serializer):
    """Account profile as the account service returns it."""

    email = serializers.CharField(allow_blank=True)
    first_name = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    last_name = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    phone = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    address_line_1 = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    address_line_2 = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    city = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    state = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    zip_code = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    emergency_contact_name = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    emergency_contact_phone = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    emergency_contact_relationship = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class CamperChangesSerializer(serializers.Serializer):
    """Partial camper update; only the keys sent are changed."""

    existingAthleteId = serializers.CharField(source="existing_athlete_id", required=False, allow_null=True)
    isNewAthlete = serializers.BooleanField(source="is_new_athlete", required=False)
    firstName = _text("first_name")
    lastName = _text("last_name")
    dateOfBirth = _text("date_of_birth")
    grade = _text()
    tshirtSize = serializers.ChoiceField(source="tshirt_size", choices=TSHIRT_SIZES, required=False, allow_blank=True)
    medicalNotes = _text("medical_notes")
    allergies = _text()
    specialConsiderations = _text("special_considerations")
    authorizedPickups = PickupSerializer(source="authorized_pickups", many=True, required=False, allow_empty=False)

    @staticmethod
    def to_domain(data: dict) -> dict:
        if "authorized_pickups" in data:
            data = {**data, "authorized_pickups": tuple(AuthorizedPickup(**p) for p in data["authorized_pickups"])}
        return data


class ParentChangesSerializer(serializers.Serializer):
    """Partial parent/guardian update."""

    firstName = _text("first_name")
    lastName = _text("last_name")
    email = _text()
    phone = _text()
    emergencyContactName = _text("emergency_contact_name")
    emergencyContactPhone = _text("emergency_contact_phone")
    emergencyContactRelationship = _text("emergency_contact_relationship")
    addressLine1 = _text("address_line_1")
    addressLine2 = _text("address_line_2")
    city = _text()
    state = _text()
    zipCode = _text("zip_code")


# Commands


class CommandSerializer(serializers.Serializer):
    """Base for command payloads. ``apply`` runs the validated command."""

    def apply(self, service: CheckoutService) -> None:
        raise NotImplementedError


class SetStepSerializer(CommandSerializer):
    step = serializers.CharField()

    def apply(self, service):
        service.set_step(parse_step(self.validated_data["step"]))


class NextStepSerializer(CommandSerializer):
    def apply(self, service):
        service.next_step()


class PrevStepSerializer(CommandSerializer):
    def apply(self, service):
        service.prev_step()


class SetCampSerializer(CommandSerializer):
    camp = CampSessionSerializer()

    def apply(self, service):
        service.set_camp(CampSessionSerializer.to_domain(self.validated_data["camp"]))


class AddCamperSerializer(CommandSerializer):
    def apply(self, service):
        service.add_camper()


class CamperCommandSerializer(CommandSerializer):
    camperId = serializers.CharField(source="camper_id")


class RemoveCamperSerializer(CamperCommandSerializer):
    def apply(self, service):
        service.remove_camper(self.validated_data["camper_id"])


class UpdateCamperSerializer(CamperCommandSerializer):
    data = CamperChangesSerializer()

    def apply(self, service):
        changes = CamperChangesSerializer.to_domain(self.validated_data["data"])
        service.update_camper(self.validated_data["camper_id"], changes)


class SelectExistingAthleteSerializer(CamperCommandSerializer):
    athlete = ExistingAthleteSerializer()

    def apply(self, service):
        athlete = ExistingAthlete(**self.validated_data["athlete"])
        service.select_existing_athlete(self.validated_data["camper_id"], athlete)


class SetNewAthleteModeSerializer(CamperCommandSerializer):
    def apply(self, service):
        service.set_new_athlete_mode(self.validated_data["camper_id"])


class UpdateParentSerializer(CommandSerializer):
    data = ParentChangesSerializer()

    def apply(self, service):
        service.update_parent(self.validated_data["data"])


class SetParentFromProfileSerializer(CommandSerializer):
    profile = ParentProfileSerializer()

    def apply(self, service):
        service.set_parent_from_profile(ParentProfile(**self.validated_data["profile"]))


class SetSquadSerializer(CommandSerializer):
    squadId = serializers.CharField(source="squad_id", allow_null=True)

    def apply(self, service):
        service.set_squad(self.validated_data["squad_id"])


class AddAddOnSerializer(CommandSerializer):
    addon = AddOnSerializer()

    def apply(self, service):
        service.add_add_on(AddOnSerializer.to_domain(self.validated_data["addon"]))


class AddOnKeySerializer(CommandSerializer):
    addonId = serializers.CharField(source="addon_id")
    variantId = _optional("variant_id")
    camperId = _optional("camper_id")


class RemoveAddOnSerializer(AddOnKeySerializer):
    def apply(self, service):
        data = self.validated_data
        service.remove_add_on(data["addon_id"], data["variant_id"], data["camper_id"])


class UpdateAddOnQuantitySerializer(AddOnKeySerializer):
    quantity = serializers.IntegerField()

    def apply(self, service):
        data = self.validated_data
        service.update_add_on_quantity(data["addon_id"], data["variant_id"], data["camper_id"], data["quantity"])


class ApplyPromoSerializer(CommandSerializer):
    promo = PromoCodeSerializer()

    def apply(self, service):
        service.apply_promo(PromoCodeSerializer.to_domain(self.validated_data["promo"]))


class RemovePromoSerializer(CommandSerializer):
    def apply(self, service):
        service.remove_promo()


class SetWaitlistModeSerializer(CommandSerializer):
    isWaitlistMode = serializers.BooleanField(source="is_waitlist_mode")

    def apply(self, service):
        service.set_waitlist_mode(self.validated_data["is_waitlist_mode"])


class ResetSerializer(CommandSerializer):
    def apply(self, service):
        service.reset()


COMMAND_SERIALIZERS: dict[str, type[CommandSerializer]] = {
    "SET_STEP": SetStepSerializer,
    "NEXT_STEP": NextStepSerializer,
    "PREV_STEP": PrevStepSerializer,
    "SET_CAMP": SetCampSerializer,
    "ADD_CAMPER": AddCamperSerializer,
    "REMOVE_CAMPER": RemoveCamperSerializer,
    "UPDATE_CAMPER": UpdateCamperSerializer,
    "SELECT_EXISTING_ATHLETE": SelectExistingAthleteSerializer,
    "SET_NEW_ATHLETE_MODE": SetNewAthleteModeSerializer,
    "UPDATE_PARENT": UpdateParentSerializer,
    "SET_PARENT_FROM_PROFILE": SetParentFromProfileSerializer,
    "SET_SQUAD": SetSquadSerializer,
    "ADD_ADDON": AddAddOnSerializer,
    "REMOVE_ADDON": RemoveAddOnSerializer,
    "UPDATE_ADDON_QUANTITY": UpdateAddOnQuantitySerializer,
    "APPLY_PROMO": ApplyPromoSerializer,
    "REMOVE_PROMO": RemovePromoSerializer,
    "SET_WAITLIST_MODE": SetWaitlistModeSerializer,
    "RESET": ResetSerializer,
}
