"""Serializers for the camelCase checkout layout.

The same layout is written to the store and returned by the API:
``{"step": ..., "campSession": ..., "campers": [...], ...}``. Money is
integer cents. Totals are derived, so the persisted blob never holds them
and a ``totals`` key in an old blob is ignored.

Reading goes through ``is_valid``; ``to_domain`` builds the domain object
from ``validated_data`` once every field has been checked.
"""

from typing import Any

from rest_framework import serializers

from checkout.domain.models import (
    AppliedPromoCode,
    AuthorizedPickup,
    CampSession,
    CamperEntry,
    CheckoutState,
    ParentInfo,
    SelectedAddOn,
)
from checkout.domain.value_objects import Capacity, CheckoutStep, DiscountType, Money, PromoScope

# Fields


class TextField(serializers.CharField):
    """A string as sent. Numbers and other types are rejected, not coerced."""

    def __init__(self, **kwargs):
        kwargs.setdefault("trim_whitespace", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class MoneyField(serializers.IntegerField):
    """Integer cents on the wire, ``Money`` in the domain."""

    def to_internal_value(self, data):
        cents = super().to_internal_value(data)
        if cents < 0:
            self.fail("min_value", min_value=0)
        return Money(cents)

    def to_representation(self, value):
        return value.cents


class CapacityField(serializers.IntegerField):
    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value < 0:
            self.fail("min_value", min_value=0)
        return Capacity(value)

    def to_representation(self, value):
        return value.value


class EnumField(serializers.ChoiceField):
    """Enum value on the wire, enum member in the domain."""

    def __init__(self, enum, **kwargs):
        self.enum = enum
        super().__init__(choices=[member.value for member in enum], **kwargs)

    def to_internal_value(self, data):
        return self.enum(super().to_internal_value(data))

    def to_representation(self, value):
        return value.value


def _text(source: str | None = None) -> TextField:
    # DRF rejects a source equal to the field name, so it is only passed when it differs.
    return TextField(**_renamed(source), required=False, allow_blank=True)


def _optional(source: str | None = None) -> TextField:
    return TextField(**_renamed(source), required=False, allow_null=True, allow_blank=True, default=None)


def _renamed(source: str | None) -> dict[str, str]:
    return {"source": source} if source else {}


# Reference data


class CampSessionSerializer(serializers.Serializer):
    id = TextField()
    slug = serializers.SlugField()
    name = TextField(required=False, allow_blank=True, default="")
    tenantId = _optional("tenant_id")
    price = MoneyField()
    earlyBirdPrice = MoneyField(source="early_bird_price", allow_null=True, default=None)
    isEarlyBird = serializers.BooleanField(source="is_early_bird", default=False)
    minAge = serializers.IntegerField(source="min_age", min_value=0)
    maxAge = serializers.IntegerField(source="max_age", min_value=0)
    siblingDiscountPercent = serializers.FloatField(source="sibling_discount_percent", min_value=0, max_value=100, default=0)
    spotsRemaining = CapacityField(source="spots_remaining")

    def validate(self, attrs):
        if attrs["min_age"] > attrs["max_age"]:
            raise serializers.ValidationError("minAge cannot be greater than maxAge")
        return attrs

    @staticmethod
    def to_domain(data: dict) -> CampSession:
        return CampSession(**data)


class AddOnSerializer(serializers.Serializer):
    addonId = TextField(source="addon_id")
    variantId = _optional("variant_id")
    camperId = _optional("camper_id")
    quantity = serializers.IntegerField(min_value=1)
    unitPrice = MoneyField(source="unit_price")

    @staticmethod
    def to_domain(data: dict) -> SelectedAddOn:
        return SelectedAddOn(**data)


class PromoCodeSerializer(serializers.Serializer):
    id = _optional()
    code = TextField()
    discountType = EnumField(DiscountType, source="discount_type")
    discountValue = serializers.FloatField(source="discount_value", min_value=0)
    appliesTo = EnumField(PromoScope, source="applies_to", allow_null=True, default=None)

    def validate(self, attrs):
        if attrs["discount_type"] is DiscountType.PERCENT and attrs["discount_value"] > 100:
            raise serializers.ValidationError("Percent discounts cannot exceed 100")
        return attrs

    @staticmethod
    def to_domain(data: dict) -> AppliedPromoCode:
        # A promo without a scope discounts the whole order.
        return AppliedPromoCode(**{**data, "applies_to": data["applies_to"] or PromoScope.BOTH})


class PickupSerializer(serializers.Serializer):
    name = TextField(allow_blank=True, default="")
    relationship = TextField(allow_blank=True, default="")
    phone = TextField(allow_blank=True, default="")


# Checkout


class CamperSerializer(serializers.Serializer):
    id = TextField()
    existingAthleteId = _optional("existing_athlete_id")
    isNewAthlete = serializers.BooleanField(source="is_new_athlete", required=False)
    firstName = _text("first_name")
    lastName = _text("last_name")
    dateOfBirth = _text("date_of_birth")
    grade = _text()
    sex = serializers.CharField(read_only=True)
    tshirtSize = _text("tshirt_size")
    medicalNotes = _text("medical_notes")
    allergies = _text()
    specialConsiderations = _text("special_considerations")
    authorizedPickups = PickupSerializer(source="authorized_pickups", many=True, required=False)
    age = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    isEligible = serializers.BooleanField(source="is_eligible", required=False)

    @staticmethod
    def to_domain(data: dict) -> CamperEntry:
        pickups = tuple(AuthorizedPickup(**p) for p in data.get("authorized_pickups", ()))
        return CamperEntry(**{**data, "authorized_pickups": pickups or (AuthorizedPickup(),)})


class ParentInfoSerializer(serializers.Serializer):
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


class CheckoutTotalsSerializer(serializers.Serializer):
    campSubtotal = MoneyField(source="camp_subtotal", read_only=True)
    addOnsSubtotal = MoneyField(source="add_ons_subtotal", read_only=True)
    siblingDiscount = MoneyField(source="sibling_discount", read_only=True)
    promoDiscount = MoneyField(source="promo_discount", read_only=True)
    subtotal = MoneyField(read_only=True)
    tax = MoneyField(read_only=True)
    total = MoneyField(read_only=True)


class CheckoutStateSerializer(serializers.Serializer):
    """The whole checkout, as persisted and as shown to the web client."""

    step = EnumField(CheckoutStep)
    campSession = CampSessionSerializer(source="camp_session", allow_null=True, default=None)
    campers = CamperSerializer(many=True, allow_empty=False)
    parentInfo = ParentInfoSerializer(source="parent_info", required=False)
    selectedAddOns = AddOnSerializer(source="selected_add_ons", many=True, required=False)
    promoCode = PromoCodeSerializer(source="promo_code", allow_null=True, default=None)
    squadId = _optional("squad_id")
    isWaitlistMode = serializers.BooleanField(source="is_waitlist_mode", required=False)

    @staticmethod
    def to_domain(data: dict) -> CheckoutState:
        camp = data["camp_session"]
        promo = data["promo_code"]
        return CheckoutState(
            step=data["step"],
            camp_session=None if camp is None else CampSessionSerializer.to_domain(camp),
            campers=tuple(CamperSerializer.to_domain(camper) for camper in data["campers"]),
            parent_info=ParentInfo(**data.get("parent_info", {})),
            selected_add_ons=tuple(AddOnSerializer.to_domain(a) for a in data.get("selected_add_ons", ())),
            promo_code=None if promo is None else PromoCodeSerializer.to_domain(promo),
            squad_id=data["squad_id"],
            is_waitlist_mode=data.get("is_waitlist_mode", False),
        )


class RegistrationPayloadSerializer(serializers.Serializer):
    """Body for the registration/order endpoint, read from a ``CheckoutState``."""

    campId = serializers.CharField(source="camp_session.id")
    tenantId = serializers.CharField(source="camp_session.tenant_id", allow_null=True)
    parent = ParentInfoSerializer(source="parent_info")
    campers = CamperSerializer(many=True)
    addOns = AddOnSerializer(source="selected_add_ons", many=True)
    promoCode = serializers.CharField(source="promo_code.code", allow_null=True)
    squadId = serializers.CharField(source="squad_id", allow_null=True)
    isWaitlist = serializers.BooleanField(source="is_waitlist_mode")
    totals = CheckoutTotalsSerializer()


def encode_state(state: CheckoutState) -> dict[str, Any]:
    return CheckoutStateSerializer(state).data


def decode_state(data: Any) -> CheckoutState:
    """Validate a stored blob and build the state.

    Raises:
        ValidationError: If any field is missing or has the wrong type.
    """
    serializer = CheckoutStateSerializer(data=data)
    serializer.is_valid(raise_exception=True)
    return CheckoutStateSerializer.to_domain(serializer.validated_data)
