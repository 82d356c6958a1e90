"""Formatting runtime package.

Provides the locale context, message model, rich element handling and the
FormattingEngine API.

Python 3.13+.
"""

from .engine import FormattingEngine, coalesce_literal_parts
from .formatter_config import FormatterConfig
from .locale_context import LocaleContext, LocaleState
from .messages import (
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
from .rich_elements import MARKDOWN_RICH_ELEMENTS, MarkdownBindings, RichElementMerger
from .subscriptions import SubscriptionRegistry

__all__ = [
    "MARKDOWN_RICH_ELEMENTS",
    "CompiledMessage",
    "CompiledTemplate",
    "FormatPart",
    "FormatterConfig",
    "FormattingEngine",
    "LiteralMessage",
    "LocaleCode",
    "LocaleContext",
    "LocaleState",
    "MarkdownBindings",
    "MessageReference",
    "ResolvableMessage",
    "RichElementMerger",
    "RichElementRenderer",
    "SubscriptionRegistry",
    "ValueBindings",
    "coalesce_literal_parts",
]
