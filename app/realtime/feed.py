import logging
import threading
from typing import Any, Callable, Optional

from app.models.schemas import ChangeEvent, ChangeType
from app.utils.helper import utc_now

logger = logging.getLogger(__name__)


def make_event(table: str, change_type: ChangeType, row: dict) -> ChangeEvent:
    return ChangeEvent(table=table, type=change_type, row=dict(row), occurred_at=utc_now())


class Subscription:
    """Handle returned by ``ChangeFeed.subscribe``; ``cancel()`` unregisters it."""

    def __init__(self, feed, table: str, callback: Callable[[ChangeEvent], Any],
                 column: Optional[str] = None, value: Any = None):
        self._feed = feed
        self.table = table
        self.callback = callback
        self.column = column
        self.value = value
        self.active = True

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        if self.column is None:
            return True
        # Compare as strings so query-string filters match integer columns
        row_value = event.row.get(self.column)
        return row_value is not None and str(row_value) == str(self.value)

    def cancel(self):
        if self.active:
            self.active = False
            self._feed._remove(self)


class ChangeFeed:

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions = []

    def subscribe(self, table: str, callback: Callable[[ChangeEvent], Any],
                  column: Optional[str] = None, value: Any = None) -> Subscription:
        subscription = Subscription(self, table, callback, column, value)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("Subscribed to %s (%s=%s)", table, column, value)
        return subscription

    def _remove(self, subscription: Subscription):
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
        logger.debug("Unsubscribed from %s", subscription.table)

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            if table is None:
                return len(self._subscriptions)
            return sum(1 for s in self._subscriptions if s.table == table)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to every matching subscriber. Returns the delivery count."""
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(event)]

        delivered = 0
        for subscription in targets:
            if not subscription.active:
                continue
            try:
                subscription.callback(event)
                delivered += 1
            except Exception:
                logger.warning(
                    "Subscriber callback failed for %s %s event",
                    event.table, event.type.value, exc_info=True
                )
        return delivered


change_feed = ChangeFeed()
