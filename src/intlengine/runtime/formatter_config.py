"""Locale-derived formatter configuration for compiled message templates.

Compiled templates receive a FormatterConfig on every format call and use it
for every locale-sensitive operation (numbers, dates, currency, plurals).
Uses Babel for CLDR-compliant formatting.

Architecture:
    - FormatterConfig: Immutable, cached, one per locale
    - No dependency on Python's locale module (avoids global state)
    - LocaleContext derives a new FormatterConfig on every set_locale()

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from intlengine.constants import MAX_LOCALE_CACHE_SIZE
from intlengine.diagnostics import Diagnostic, DiagnosticCode, FormattingError

__all__ = ["FormatterConfig", "normalize_locale"]

logger = logging.getLogger(__name__)

type DateTimeStyle = Literal["short", "medium", "long", "full"]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to the POSIX form Babel expects.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("pt_BR")
        'pt_BR'
    """
    return locale_code.replace("-", "_")


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Immutable formatting configuration for one locale.

    Use FormatterConfig.create() to construct instances. It never raises:
    unknown or malformed locales are accepted, logged, and formatted with
    en_US rules. The requested code is preserved so that message resolution
    still sees the locale the application asked for.

    Examples:
        >>> config = FormatterConfig.create("de-DE")
        >>> config.format_number(1234.5)
        '1.234,5'

        >>> config = FormatterConfig.create("xx-UNKNOWN")
        >>> config.locale_code
        'xx-UNKNOWN'
        >>> config.is_fallback
        True

    Thread Safety:
        Instances are immutable and can be shared freely. The class-level
        cache is protected by an RLock.
    """

    _cache: ClassVar[OrderedDict[str, "FormatterConfig"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Drop every cached instance."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached FormatterConfig instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> "FormatterConfig":
        """Create (or reuse) the configuration for a locale.

        Args:
            locale_code: BCP-47 or POSIX locale identifier (e.g., 'en-US', 'lv_LV')

        Returns:
            FormatterConfig for the locale. Unknown locales get en_US rules
            with is_fallback set.
        """
        # Keyed by the original code so that locale_code round-trips exactly
        cache_key = locale_code

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
            babel_locale = Locale.parse("en_US")
            used_fallback = True
        except (ValueError, TypeError) as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to en_US", locale_code, e
            )
            babel_locale = Locale.parse("en_US")
            used_fallback = True

        config = cls(locale_code=locale_code, babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = config
            return config

    @classmethod
    def create_or_raise(cls, locale_code: str) -> "FormatterConfig":
        """Create a configuration, raising instead of falling back.

        Raises:
            ValueError: If the locale code is invalid or unknown to Babel
        """
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            msg = f"Unknown locale identifier '{locale_code}': {e}"
            raise ValueError(msg) from None
        except ValueError as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None
        return cls(locale_code=locale_code, babel_locale=babel_locale)

    def plural_category(self, n: int | float | Decimal) -> str:
        """Select the CLDR plural category for a number.

        Returns:
            One of "zero", "one", "two", "few", "many", "other"
        """
        return str(self.babel_locale.plural_form(n))

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        pattern: str | None = None,
    ) -> str:
        """Format a number with locale-specific separators.

        Raises:
            FormattingError: If Babel rejects the value or pattern
        """
        try:
            if pattern is None:
                integer_part = "#,##0" if use_grouping else "0"
                if maximum_fraction_digits == 0:
                    value = round(value)
                    pattern = integer_part
                else:
                    required = "0" * minimum_fraction_digits
                    optional = "#" * max(maximum_fraction_digits - minimum_fraction_digits, 0)
                    pattern = f"{integer_part}.{required}{optional}"
            return str(babel_numbers.format_decimal(value, format=pattern, locale=self.babel_locale))
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(
                self._diagnostic(f"Number formatting failed for '{value}': {e}"),
                fallback_value=str(value),
            ) from e

    def format_datetime(
        self,
        value: datetime | str,
        *,
        date_style: DateTimeStyle = "medium",
        time_style: DateTimeStyle | None = None,
        pattern: str | None = None,
    ) -> str:
        """Format a datetime (or ISO 8601 string) for this locale.

        Raises:
            FormattingError: If the string is not ISO 8601 or Babel fails
        """
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as e:
                raise FormattingError(
                    self._diagnostic(f"Invalid datetime string '{value}': not ISO 8601 format"),
                    fallback_value=value,
                ) from e

        try:
            if pattern is not None:
                return str(babel_dates.format_datetime(value, format=pattern, locale=self.babel_locale))
            date_str = str(babel_dates.format_date(value, format=date_style, locale=self.babel_locale))
            if time_style is None:
                return date_str
            time_str = str(babel_dates.format_time(value, format=time_style, locale=self.babel_locale))
            # CLDR combining pattern: {0} is the time, {1} is the date
            combining = (
                self.babel_locale.datetime_formats.get(date_style)
                or self.babel_locale.datetime_formats.get("medium")
                or "{1} {0}"
            )
            return str(combining).format(time_str, date_str)
        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            raise FormattingError(
                self._diagnostic(f"DateTime formatting failed for '{value}': {e}"),
                fallback_value=value.isoformat(),
            ) from e

    def format_currency(self, value: int | float | Decimal, *, currency: str) -> str:
        """Format a monetary amount with the currency symbol and its CLDR digits.

        Raises:
            FormattingError: If Babel rejects the amount or currency code
        """
        try:
            return str(
                babel_numbers.format_currency(
                    value, currency, locale=self.babel_locale, currency_digits=True
                )
            )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(
                self._diagnostic(f"Currency formatting failed for '{currency} {value}': {e}"),
                fallback_value=f"{currency} {value}",
            ) from e

    def _diagnostic(self, message: str) -> Diagnostic:
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=message,
            locale=self.locale_code,
        )
