"""Observer registry for locale change notifications.

Python 3.13+. Zero external dependencies.
"""

import logging
import threading
from collections.abc import Callable

from intlengine.runtime.messages import LocaleCode

__all__ = ["LocaleSubscriber", "SubscriptionRegistry"]

logger = logging.getLogger(__name__)

type LocaleSubscriber = Callable[[LocaleCode], None]


class SubscriptionRegistry:
    """Insertion-ordered set of locale change callbacks.

    A callback registered twice is stored once. Registration returns a
    disposer that removes the callback; disposing is idempotent.

    Notification iterates over a snapshot of the registry, so callbacks may
    subscribe or dispose (themselves or others) while a round is in flight.
    A callback disposed mid-round may still be called in that round.

    Example:
        >>> registry = SubscriptionRegistry()
        >>> seen = []
        >>> dispose = registry.subscribe(seen.append)
        >>> registry.notify("lv")
        >>> dispose()
        >>> registry.notify("en")
        >>> seen
        ['lv']
    """

    __slots__ = ("_callbacks", "_lock")

    def __init__(self) -> None:
        # dict keys give set semantics with insertion order
        self._callbacks: dict[LocaleSubscriber, None] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        with self._lock:
            return callback in self._callbacks

    def subscribe(self, callback: LocaleSubscriber) -> Callable[[], None]:
        """Register a callback and return its disposer."""
        with self._lock:
            self._callbacks[callback] = None

        def dispose() -> None:
            with self._lock:
                self._callbacks.pop(callback, None)

        return dispose

    def notify(self, locale: LocaleCode) -> None:
        """Call every registered callback with the locale, in registration order.

        A callback that raises is logged; the remaining callbacks still run.
        """
        with self._lock:
            callbacks = tuple(self._callbacks)

        for callback in callbacks:
            try:
                callback(locale)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Locale change subscriber %r failed for '%s'", callback, locale)
