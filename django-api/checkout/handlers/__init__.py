from checkout.handlers.views import CheckoutCommandView, CheckoutView, RegistrationPayloadView

__all__ = ["CheckoutView", "CheckoutCommandView", "RegistrationPayloadView"]
