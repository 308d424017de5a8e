"""Django cache implementation of the CheckoutStore."""

from django.core.cache import caches

from checkout.stores.interfaces import CheckoutStore


class CacheCheckoutStore(CheckoutStore):
    """Checkout blobs kept in a configured Django cache.

    Entries never expire in the cache itself; the 24 hour window is
    checked against the saved timestamp on load.
    """

    def __init__(self, alias: str = "default") -> None:
        self._cache = caches[alias]

    def read(self, key: str) -> str | None:
        return self._cache.get(key)

    def write(self, key: str, blob: str) -> None:
        self._cache.set(key, blob, timeout=None)

    def delete(self, key: str) -> None:
        self._cache.delete(key)
