"""intlengine exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object for rich
error information.

Failure domains:
    InvalidMessageKindError - Engine received something that is not a message
    UnresolvedLocaleVariantError - Resolver found no template for a locale
    FormattingError - Locale-aware value formatting failed
    CompileError - One definition file failed to compile (never propagated)
    DiscoveryError - Scan or watch setup is misconfigured

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class IntlError(Exception):
    """Base exception for all intlengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IntlError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidMessageKindError(IntlError, TypeError):
    """Message reference is neither literal, resolvable, nor compiled.

    Raised immediately by the formatting engine instead of coercing the
    value to a string.
    """


class UnresolvedLocaleVariantError(IntlError):
    """No usable template exists for the requested locale.

    Raised by resolver collaborators (message loaders). The formatting engine
    lets it propagate unchanged to the caller.

    Attributes:
        locale: Locale that failed to resolve
    """

    def __init__(self, message: str | Diagnostic, *, locale: str = "") -> None:
        """Initialize UnresolvedLocaleVariantError.

        Args:
            message: Error message string OR Diagnostic object
            locale: Locale that failed to resolve
        """
        super().__init__(message)
        self.locale = locale


class FormattingError(IntlError):
    """Raised when locale-aware formatting fails.

    The error carries a fallback_value that templates should use in the
    output when the formatting fails, so the rendered message stays readable.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value


class CompileError(IntlError):
    """Processing a single definition file failed.

    Covers parse errors, I/O errors and internal compiler errors. Always
    caught at the CompileDispatcher boundary; the file stays uncompiled (or
    stale) until it is fixed and saved again.

    Attributes:
        source_path: Definition file that failed to compile
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str = "") -> None:
        """Initialize CompileError.

        Args:
            message: Error message string OR Diagnostic object
            source_path: Definition file that failed to compile
        """
        super().__init__(message)
        self.source_path = source_path


class DiscoveryError(IntlError):
    """Structural failure while setting up discovery or watching.

    Not per-file: indicates a misconfiguration such as a missing root
    directory, so it propagates to the caller.
    """
