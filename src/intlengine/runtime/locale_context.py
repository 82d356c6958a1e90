"""Locale state owned by the application and shared with formatting engines.

This module replaces an ambient, process-wide locale with an explicit context
object. The active locale and its FormatterConfig live together in one frozen
LocaleState snapshot; set_locale() swaps the snapshot reference in one step,
so concurrent readers never observe a locale paired with another locale's
formatter.

Python 3.13+. Uses Babel (via FormatterConfig).
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from intlengine.constants import DEFAULT_LOCALE
from intlengine.runtime.formatter_config import FormatterConfig
from intlengine.runtime.messages import LocaleCode
from intlengine.runtime.subscriptions import LocaleSubscriber, SubscriptionRegistry

__all__ = ["LocaleContext", "LocaleState"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleState:
    """Immutable snapshot of the active locale configuration.

    Attributes:
        default_locale: Locale used when nothing else has been selected
        current_locale: Locale used for message resolution
        formatter: Formatter configuration derived from current_locale
    """

    default_locale: LocaleCode
    current_locale: LocaleCode
    formatter: FormatterConfig


def _require_locale(locale: object, name: str) -> None:
    if not isinstance(locale, str) or not locale:
        msg = f"{name} must be a non-empty string, got {locale!r}"
        raise ValueError(msg)


class LocaleContext:
    """Current/default locale plus change notification.

    Example:
        >>> context = LocaleContext("en-US")
        >>> dispose = context.on_locale_change(lambda locale: print("now", locale))
        >>> context.set_locale("lv")
        now lv
        >>> context.current_locale
        'lv'
        >>> context.formatter.locale_code
        'lv'
        >>> dispose()

    Thread Safety:
        Reads are lock-free (single reference load). Writers are serialized
        so that concurrent set_locale() calls cannot interleave their swaps.
    """

    __slots__ = ("_state", "_subscriptions", "_write_lock")

    def __init__(self, default_locale: LocaleCode = DEFAULT_LOCALE) -> None:
        """Initialize with current_locale equal to default_locale.

        Raises:
            ValueError: If default_locale is not a non-empty string
        """
        _require_locale(default_locale, "default_locale")
        self._state = LocaleState(
            default_locale=default_locale,
            current_locale=default_locale,
            formatter=FormatterConfig.create(default_locale),
        )
        self._subscriptions = SubscriptionRegistry()
        self._write_lock = threading.Lock()

    @property
    def state(self) -> LocaleState:
        """Current snapshot; read it once per operation for a consistent view."""
        return self._state

    @property
    def default_locale(self) -> LocaleCode:
        return self._state.default_locale

    @property
    def current_locale(self) -> LocaleCode:
        return self._state.current_locale

    @property
    def formatter(self) -> FormatterConfig:
        return self._state.formatter

    def __repr__(self) -> str:
        state = self._state
        return (
            f"LocaleContext(current_locale={state.current_locale!r}, "
            f"default_locale={state.default_locale!r}, "
            f"subscribers={len(self._subscriptions)})"
        )

    def set_locale(self, locale: LocaleCode) -> None:
        """Switch the active locale and notify subscribers.

        The locale is not checked for support: unknown locales are accepted
        (formatting falls back to en_US rules) and only surface when a
        message loader cannot resolve a message for them.

        Subscribers are called synchronously on this thread, in registration
        order, with the new locale. A failing subscriber is logged and does
        not stop the others.

        Raises:
            ValueError: If locale is not a non-empty string
        """
        _require_locale(locale, "locale")
        formatter = FormatterConfig.create(locale)
        with self._write_lock:
            previous = self._state.current_locale
            self._state = LocaleState(
                default_locale=self._state.default_locale,
                current_locale=locale,
                formatter=formatter,
            )
        logger.debug("Locale changed from %s to %s", previous, locale)
        self._subscriptions.notify(locale)

    def on_locale_change(self, callback: LocaleSubscriber) -> Callable[[], None]:
        """Subscribe to locale changes; returns a disposer."""
        return self._subscriptions.subscribe(callback)
