from django.urls import path

from checkout.handlers import CheckoutCommandView, CheckoutView, RegistrationPayloadView

urlpatterns = [
    path("checkout/<slug:session_id>", CheckoutView.as_view(), name="checkout-detail"),
    path(
        "checkout/<slug:session_id>/commands",
        CheckoutCommandView.as_view(),
        name="checkout-commands",
    ),
    path(
        "checkout/<slug:session_id>/registration",
        RegistrationPayloadView.as_view(),
        name="checkout-registration",
    ),
]
