"""intlengine - Locale-reactive message formatting and message compilation.

Renders localized messages (structured parts, plain text, markdown) for the
current locale, and keeps compiled message artifacts in sync with their
definition files.

Public API:
    FormattingEngine - Renders message references in the current locale
    LocaleContext - Current/default locale with change subscriptions
    LiteralMessage, ResolvableMessage, CompiledMessage - Message references
    compile_message_files - Initial scan plus continuous recompilation

Exceptions:
    IntlError - Base exception class
    InvalidMessageKindError - Not a message reference
    UnresolvedLocaleVariantError - No template for the requested locale
    CompileError - One definition file failed to compile
    DiscoveryError - Invalid discovery/watch configuration

Submodules:
    intlengine.runtime - Formatting engine, locale context, message model
    intlengine.pipeline - Discovery, watching, and compile dispatching
    intlengine.diagnostics - Error types and diagnostic codes
"""

from .constants import DEFAULT_LOCALE
from .diagnostics import (
    CompileError,
    DiscoveryError,
    FormattingError,
    IntlError,
    InvalidMessageKindError,
    UnresolvedLocaleVariantError,
)
from .pipeline import CompiledFormat, CompileSession, compile_message_files
from .runtime import (
    CompiledMessage,
    FormatPart,
    FormatterConfig,
    FormattingEngine,
    LiteralMessage,
    LocaleContext,
    ResolvableMessage,
)

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("intlengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_LOCALE",
    "CompileError",
    "CompileSession",
    "CompiledFormat",
    "CompiledMessage",
    "DiscoveryError",
    "FormatPart",
    "FormatterConfig",
    "FormattingEngine",
    "FormattingError",
    "IntlError",
    "InvalidMessageKindError",
    "LiteralMessage",
    "LocaleContext",
    "ResolvableMessage",
    "UnresolvedLocaleVariantError",
    "__version__",
    "compile_message_files",
]
