"""Enumerations for intlengine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PartType(StrEnum):
    """Kind of a formatted message part.

    StrEnum provides automatic string conversion: str(PartType.LITERAL) == "literal"
    """

    LITERAL = "literal"
    """Plain text taken from the message or from a formatted value."""

    RICH = "rich"
    """Output of a rich element renderer (opaque to the engine)."""


class CompiledFormat(StrEnum):
    """Serialization format of a compiled message artifact."""

    JSON = "json"
    """Compiled messages keyed by message name."""

    KEYLESS_JSON = "keyless-json"
    """Compiled messages in key order, without the key names."""


class CompileStatus(StrEnum):
    """Outcome of processing one definition file.

    StrEnum provides automatic string conversion: str(CompileStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Definitions registered and artifact written."""

    SKIPPED = "skipped"
    """Path is not a definition file; nothing was compiled."""

    ERROR = "error"
    """Compilation failed; the previous artifact (if any) is left as is."""


class ChangeKind(StrEnum):
    """Kind of file-system change forwarded to the compile worker."""

    ADDED = "added"
    """File created, or moved into a watched directory."""

    MODIFIED = "modified"
    """File contents changed."""


__all__ = [
    "ChangeKind",
    "CompileStatus",
    "CompiledFormat",
    "PartType",
]
