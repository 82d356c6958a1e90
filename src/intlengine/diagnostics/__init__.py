"""Diagnostic system for intlengine errors.

Provides structured error diagnostics with codes and hints, and the
exception hierarchy shared by the runtime and pipeline packages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CompileError,
    DiscoveryError,
    FormattingError,
    IntlError,
    InvalidMessageKindError,
    UnresolvedLocaleVariantError,
)

__all__ = [
    "CompileError",
    "Diagnostic",
    "DiagnosticCode",
    "DiscoveryError",
    "FormattingError",
    "IntlError",
    "InvalidMessageKindError",
    "UnresolvedLocaleVariantError",
]
