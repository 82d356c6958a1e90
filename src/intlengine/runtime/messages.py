"""Message references, format parts, and the compiled template protocol.

A message reference is an explicit tagged variant matched exhaustively by the
formatting engine:

    LiteralMessage     - Plain text, identical in every locale
    ResolvableMessage  - Resolved per locale by a message loader
    CompiledMessage    - A template already resolved for the current locale

Compiled templates are owned by the external loader; the engine only relies
on the CompiledTemplate protocol.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from intlengine.enums import PartType

if TYPE_CHECKING:
    from intlengine.runtime.formatter_config import FormatterConfig

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Type aliases
    "LocaleCode",
    "RichElementRenderer",
    "ValueBindings",
    # Template boundary
    "CompiledTemplate",
    "FormatPart",
    # Message variant
    "CompiledMessage",
    "LiteralMessage",
    "MessageReference",
    "ResolvableMessage",
]

type LocaleCode = str
"""Opaque locale identifier (e.g., 'en-US', 'lv')."""

type RichElementRenderer = Callable[[Sequence[Any]], Any]
"""Renders the formatted children of a rich element into opaque content."""

type ValueBindings = Mapping[str, Any]
"""Placeholder name to plain value or RichElementRenderer."""


@dataclass(frozen=True, slots=True)
class FormatPart:
    """One typed piece of a formatted message, in source order.

    Attributes:
        type: Whether the value is plain text or rich content
        value: Text for literal parts, renderer output for rich parts
    """

    type: PartType
    value: Any

    @classmethod
    def literal(cls, text: str) -> FormatPart:
        """Create a literal part."""
        return cls(PartType.LITERAL, text)

    @classmethod
    def rich(cls, content: Any) -> FormatPart:
        """Create a rich part holding rendered content."""
        return cls(PartType.RICH, content)

    @property
    def is_literal(self) -> bool:
        """Check if this part is plain text."""
        return self.type is PartType.LITERAL


class CompiledTemplate(Protocol):
    """Protocol for compiled message templates produced by a message loader.

    Both methods receive the active FormatterConfig for locale-aware value
    formatting (numbers, dates, plurals).
    """

    def format_to_parts(
        self, formatter: FormatterConfig, values: ValueBindings
    ) -> Sequence[FormatPart]:
        """Produce the ordered typed parts of the message."""
        ...

    def format_to_plain_string(
        self, formatter: FormatterConfig, values: ValueBindings | None
    ) -> str:
        """Produce the message text with all rich elements stripped."""
        ...


@dataclass(frozen=True, slots=True)
class LiteralMessage:
    """Message whose text does not depend on locale or values."""

    text: str


@dataclass(frozen=True, slots=True)
class CompiledMessage:
    """Message backed by a compiled template for the current locale."""

    template: CompiledTemplate


@dataclass(frozen=True, slots=True)
class ResolvableMessage:
    """Message resolved per locale by a message loader.

    The resolve callable returns a LiteralMessage or a CompiledMessage for
    the given locale, or raises UnresolvedLocaleVariantError.

    Example:
        >>> greeting = ResolvableMessage(lambda locale: LiteralMessage("Hi"))
        >>> greeting.resolve("en-US")
        LiteralMessage(text='Hi')
    """

    resolve: Callable[[LocaleCode], LiteralMessage | CompiledMessage]


type MessageReference = LiteralMessage | ResolvableMessage | CompiledMessage
