from checkout.stores.cache_store import CacheCheckoutStore
from checkout.stores.interfaces import CheckoutStore

__all__ = ["CheckoutStore", "CacheCheckoutStore"]
