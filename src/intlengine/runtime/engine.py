"""FormattingEngine - Main API for rendering messages in the current locale.

Three output projections are available for every message:

    format_to_parts           - Literal text and rendered rich content, in order
    format_to_plain_string    - Text only; rich elements are stripped
    format_to_markdown_string - Text with rich elements written back as markdown

Python 3.13+. External dependency: Babel (via FormatterConfig).
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from intlengine.diagnostics import Diagnostic, DiagnosticCode, InvalidMessageKindError
from intlengine.runtime.formatter_config import FormatterConfig
from intlengine.runtime.locale_context import LocaleContext
from intlengine.runtime.messages import (
    CompiledMessage,
    CompiledTemplate,
    FormatPart,
    LiteralMessage,
    LocaleCode,
    MessageReference,
    ResolvableMessage,
    RichElementRenderer,
    ValueBindings,
)
from intlengine.runtime.rich_elements import (
    MARKDOWN_RICH_ELEMENTS,
    MarkdownBindings,
    RichElementMerger,
)
from intlengine.runtime.subscriptions import LocaleSubscriber

__all__ = ["FormattingEngine", "coalesce_literal_parts"]

_MARKDOWN_ELEMENTS = RichElementMerger(MARKDOWN_RICH_ELEMENTS)


def coalesce_literal_parts(parts: Iterable[FormatPart]) -> list[Any]:
    """Merge each run of adjacent literal parts into one string.

    Rich values are passed through untouched and always end a literal run.

    Example:
        >>> coalesce_literal_parts([
        ...     FormatPart.literal("Hello, "),
        ...     FormatPart.literal("Anna"),
        ...     FormatPart.rich(["<b>", "!", "</b>"]),
        ...     FormatPart.literal("."),
        ... ])
        ['Hello, Anna', ['<b>', '!', '</b>'], '.']
    """
    result: list[Any] = []
    in_literal = False
    for part in parts:
        # in_literal is False on the first part, so nothing is merged backward
        if in_literal and part.is_literal:
            result[-1] += part.value
            continue
        in_literal = part.is_literal
        result.append(part.value)
    return result


class FormattingEngine:
    """Renders message references using a LocaleContext.

    The engine holds no locale of its own: every call reads the context's
    LocaleState snapshot once, so a concurrent set_locale() is observed as a
    whole or not at all.

    Default rich elements are fixed at construction and apply to every
    format_to_parts() call unless the caller overrides them by key.

    Examples:
        >>> engine = FormattingEngine(LocaleContext("en-US"))
        >>> engine.format_to_parts(LiteralMessage("Hello"))
        ['Hello']
        >>> engine.string(LiteralMessage("Hello"))
        'Hello'

    Thread Safety:
        All format methods are safe for concurrent use. They never mutate the
        engine or the context.
    """

    __slots__ = ("_context", "_rich_elements")

    def __init__(
        self,
        context: LocaleContext | None = None,
        default_rich_elements: Mapping[str, RichElementRenderer] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            context: Locale context shared with the application. A new
                context on DEFAULT_LOCALE is created when omitted.
            default_rich_elements: Renderers applied to every
                format_to_parts() call, e.g. {"b": render_bold}
        """
        self._context = context if context is not None else LocaleContext()
        self._rich_elements = RichElementMerger(default_rich_elements)

    @property
    def context(self) -> LocaleContext:
        return self._context

    @property
    def default_rich_elements(self) -> Mapping[str, Any]:
        """Read-only default rich element renderers."""
        return self._rich_elements.defaults

    @property
    def current_locale(self) -> LocaleCode:
        return self._context.current_locale

    def set_locale(self, locale: LocaleCode) -> None:
        """Shortcut for context.set_locale()."""
        self._context.set_locale(locale)

    def on_locale_change(self, callback: LocaleSubscriber) -> Callable[[], None]:
        """Shortcut for context.on_locale_change()."""
        return self._context.on_locale_change(callback)

    def __repr__(self) -> str:
        return (
            f"FormattingEngine(locale={self._context.current_locale!r}, "
            f"rich_elements={sorted(self._rich_elements.defaults)!r})"
        )

    def _resolve(
        self, message: MessageReference
    ) -> tuple[str | None, CompiledTemplate | None, FormatterConfig]:
        """Resolve a reference to literal text or a template.

        Returns:
            (text, None, formatter) for literals,
            (None, template, formatter) for compiled messages

        Raises:
            InvalidMessageKindError: If message (or what it resolves to) is
                not a recognized message variant
        """
        state = self._context.state

        match message:
            case LiteralMessage(text=text):
                return text, None, state.formatter
            case ResolvableMessage(resolve=resolve):
                resolved = resolve(state.current_locale)
            case CompiledMessage():
                resolved = message
            case _:
                raise InvalidMessageKindError(_invalid_kind(message, state.current_locale))

        match resolved:
            case LiteralMessage(text=text):
                return text, None, state.formatter
            case CompiledMessage(template=template):
                return None, template, state.formatter
            case _:
                raise InvalidMessageKindError(_invalid_kind(resolved, state.current_locale))

    def format_to_parts(
        self, message: MessageReference, values: ValueBindings | None = None
    ) -> list[Any]:
        """Format a message into literal strings and rendered rich content.

        The result is always a list, even for literal messages. Adjacent
        literal parts are merged so the list holds as few entries as possible.

        Args:
            message: Message to format
            values: Placeholder values and rich element renderers. Keys that
                collide with default rich elements override them for this
                call only.

        Returns:
            Literal strings and opaque rich values in source order

        Raises:
            InvalidMessageKindError: If message is not a message reference
        """
        text, template, formatter = self._resolve(message)
        if template is None:
            return [text]

        bindings = self._rich_elements.merge(values)
        parts = template.format_to_parts(formatter, bindings)
        return coalesce_literal_parts(parts)

    def format_to_plain_string(
        self, message: MessageReference, values: ValueBindings | None = None
    ) -> str:
        """Format a message as plain text, discarding rich styling.

        Default rich elements are not applied: all stylistic content is
        removed by the template anyway.

        Raises:
            InvalidMessageKindError: If message is not a message reference
        """
        text, template, formatter = self._resolve(message)
        if template is None:
            return text  # type: ignore[return-value]
        return template.format_to_plain_string(formatter, values)

    def string(self, message: MessageReference) -> str:
        """Format a message that has no value placeholders.

        Output is identical to format_to_plain_string(message).
        """
        if isinstance(message, LiteralMessage):
            return message.text
        return self.format_to_plain_string(message)

    def format_to_markdown_string(
        self, message: MessageReference, values: ValueBindings | None = None
    ) -> str:
        """Format a message as markdown text.

        Rich elements are rendered back to equivalent markdown (``<b>`` to
        ``**bold**``, ``<code>`` to backticks, ...) so the result can be fed
        to a separate markdown renderer. Caller values override the markdown
        renderers by key, which is how tags without a built-in markdown form
        (links, mentions) are supplied. Tags left unbound keep their children as
        plain text.

        Raises:
            InvalidMessageKindError: If message is not a message reference
        """
        text, template, formatter = self._resolve(message)
        if template is None:
            return text  # type: ignore[return-value]

        bindings = MarkdownBindings(_MARKDOWN_ELEMENTS.merge(values))
        parts = template.format_to_parts(formatter, bindings)
        return "".join(str(part.value) for part in parts)


def _invalid_kind(message: object, locale: LocaleCode) -> Diagnostic:
    return Diagnostic(
        code=DiagnosticCode.INVALID_MESSAGE_KIND,
        message=(
            f"Expected LiteralMessage, ResolvableMessage or CompiledMessage, "
            f"got {type(message).__name__}"
        ),
        hint="Wrap plain strings in LiteralMessage and loader output in ResolvableMessage",
        locale=locale,
    )
