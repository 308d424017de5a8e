"""Saving and rehydrating a checkout across page loads.

Storage problems never reach the caller: a failed read means "start
fresh", a failed write is skipped. Both are logged.
"""

import json
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

from django.utils import timezone
from rest_framework.exceptions import ValidationError

from checkout.domain.models import CheckoutState
from checkout.domain.steps import is_terminal
from checkout.stores.interfaces import CheckoutStore
from checkout.stores.serializers import decode_state, encode_state

logger = logging.getLogger(__name__)

SAVED_AT = "_savedAt"
DEFAULT_MAX_AGE = timedelta(hours=24)

_MALFORMED = (AttributeError, KeyError, TypeError, ValueError, ValidationError)


class CheckoutPersistence:
    """Reads and writes one checkout blob under a fixed key."""

    def __init__(
        self,
        store: CheckoutStore,
        key: str,
        max_age: timedelta = DEFAULT_MAX_AGE,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._key = key
        self._max_age = max_age
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def load(self, camp_slug: str | None = None) -> CheckoutState | None:
        """Return the stored checkout if it is fresh and for ``camp_slug``."""
        try:
            blob = self._store.read(self._key)
        except Exception:
            logger.exception("Failed to read checkout state for %s", self._key)
            return None
        if not blob:
            return None

        try:
            data = json.loads(blob)
            saved_at = self._saved_at(data)
            state = decode_state(data)
            expired = saved_at is not None and _aware(self._clock()) - saved_at > self._max_age
        except _MALFORMED:
            logger.exception("Discarding unreadable checkout state for %s", self._key)
            return None

        if expired:
            logger.info("Checkout state for %s expired, starting fresh", self._key)
            self.clear()
            return None

        stored_slug = state.camp_session.slug if state.camp_session else None
        if camp_slug and stored_slug and stored_slug != camp_slug:
            logger.info("Checkout state for %s is for camp %s, not %s; starting fresh", self._key, stored_slug, camp_slug)
            self.clear()
            return None

        return state

    def save(self, state: CheckoutState) -> None:
        """Write ``state``, or clear the entry once checkout has finished."""
        if is_terminal(state.step):
            self.clear()
            return
        payload = {**encode_state(state), SAVED_AT: self._clock().isoformat()}
        try:
            self._store.write(self._key, json.dumps(payload))
        except Exception:
            logger.exception("Failed to persist checkout state for %s", self._key)

    def clear(self) -> None:
        try:
            self._store.delete(self._key)
        except Exception:
            logger.exception("Failed to clear checkout state for %s", self._key)

    @staticmethod
    def _saved_at(data: dict) -> datetime | None:
        raw = data.get(SAVED_AT)
        if raw is None:
            return None
        return _aware(datetime.fromisoformat(raw))


def _aware(moment: datetime) -> datetime:
    """Naive timestamps are taken as UTC."""
    if timezone.is_naive(moment):
        return timezone.make_aware(moment, dt_timezone.utc)
    return moment
