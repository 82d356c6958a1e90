"""Hypothesis strategies for intlengine tests."""

from .messages import format_parts, literal_parts, rich_parts, value_bindings

__all__ = ["format_parts", "literal_parts", "rich_parts", "value_bindings"]
