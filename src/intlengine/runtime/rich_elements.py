"""Rich element bindings: default merging and markdown renderers.

Rich elements are named placeholders such as ``<b>...</b>`` bound to a
renderer that receives the formatted children and returns rendered content.
An engine owns a fixed set of default renderers; each format call may
override them key by key.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from intlengine.runtime.messages import RichElementRenderer, ValueBindings

__all__ = ["MARKDOWN_RICH_ELEMENTS", "MarkdownBindings", "RichElementMerger"]


class RichElementMerger:
    """Computes the effective bindings for a single format call.

    Defaults are copied into a read-only mapping at construction; later
    changes to the caller's original dict do not leak in, and the defaults
    cannot be mutated through the merger.

    Example:
        >>> bold = lambda chunks: ["<b>", *chunks, "</b>"]
        >>> merger = RichElementMerger({"b": bold})
        >>> sorted(merger.merge({"name": "Anna"}))
        ['b', 'name']
        >>> merger.merge({"b": str})["b"] is str
        True
    """

    __slots__ = ("_defaults",)

    def __init__(self, defaults: Mapping[str, RichElementRenderer] | None = None) -> None:
        self._defaults: Mapping[str, Any] = MappingProxyType(dict(defaults or {}))

    @property
    def defaults(self) -> Mapping[str, Any]:
        """Read-only default bindings."""
        return self._defaults

    def merge(self, values: ValueBindings | None) -> Mapping[str, Any]:
        """Return defaults overridden by values; the caller wins on collision.

        With values of None the read-only defaults are returned as they are.
        """
        if values is None:
            return self._defaults
        return {**self._defaults, **values}


def _join(chunks: Sequence[Any]) -> str:
    return "".join(str(chunk) for chunk in chunks)


def _wrap(marker: str) -> RichElementRenderer:
    def render(chunks: Sequence[Any]) -> str:
        return f"{marker}{_join(chunks)}{marker}"

    return render


def _paragraph(chunks: Sequence[Any]) -> str:
    return f"{_join(chunks)}\n\n"


# Renderers used by the markdown projection to turn rich elements back into
# markdown syntax instead of rendered content.
MARKDOWN_RICH_ELEMENTS: Mapping[str, RichElementRenderer] = MappingProxyType(
    {
        "b": _wrap("**"),
        "strong": _wrap("**"),
        "i": _wrap("*"),
        "em": _wrap("*"),
        "del": _wrap("~~"),
        "s": _wrap("~~"),
        "code": _wrap("`"),
        "p": _paragraph,
    }
)


class MarkdownBindings(dict[str, Any]):
    """Bindings for the markdown projection.

    A rich element with no markdown form and no caller renderer (links,
    hooks, mentions) keeps its children as text, the same output the plain
    projection gives for it.

    Example:
        >>> bindings = MarkdownBindings(MARKDOWN_RICH_ELEMENTS)
        >>> bindings["link"](["the ", "docs"])
        'the docs'
    """

    def __missing__(self, key: str) -> RichElementRenderer:
        return _join
