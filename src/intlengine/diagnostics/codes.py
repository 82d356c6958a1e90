"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Message errors (invalid or unresolvable message references)
        2000-2999: Formatting errors (locale-aware value formatting)
        3000-3999: Compile errors (definition file processing)
        4000-4999: Discovery errors (scan and watch setup)
    """

    # Message errors (1000-1999)
    INVALID_MESSAGE_KIND = 1001
    UNRESOLVED_LOCALE_VARIANT = 1002

    # Formatting errors (2000-2999)
    FORMATTING_FAILED = 2001

    # Compile errors (3000-3999)
    COMPILE_FAILED = 3001
    COMPILE_IO_FAILED = 3002

    # Discovery errors (4000-4999)
    ROOT_NOT_FOUND = 4001
    ROOT_NOT_DIRECTORY = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tooling.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        source_path: Definition file or root directory involved (if any)
        locale: Locale in effect when the error occurred (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    source_path: str | None = None
    locale: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Control characters in the message are escaped so that file names or
        compiler output cannot inject terminal sequences into logs.

        Example output:
            error[COMPILE_FAILED]: Failed to compile messages
              --> src/app/home.messages.js
              = locale: en-US
              = help: Fix the definition file and save it again

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.source_path is not None:
            lines.append(f"  --> {_escape(self.source_path)}")
        if self.locale is not None:
            lines.append(f"  = locale: {_escape(self.locale)}")
        if self.hint is not None:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters while keeping Unicode letters readable."""
    if text.isprintable():
        return text
    return repr(text)[1:-1]
