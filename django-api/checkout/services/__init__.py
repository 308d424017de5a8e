from checkout.services.checkout_service import CheckoutService
from checkout.services.persistence import CheckoutPersistence

__all__ = ["CheckoutService", "CheckoutPersistence"]
