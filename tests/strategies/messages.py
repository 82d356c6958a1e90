"""Strategies for formatted message parts and value bindings."""

from __future__ import annotations

from hypothesis import strategies as st

from intlengine.runtime.messages import FormatPart


class RichContent:
    """Opaque rendered value; never a string so it cannot pass as a literal."""

    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label

    def __repr__(self) -> str:
        return f"RichContent({self.label!r})"


literal_parts = st.text(max_size=8).map(FormatPart.literal)

rich_parts = st.text(min_size=1, max_size=4).map(lambda label: FormatPart.rich(RichContent(label)))

format_parts = st.lists(st.one_of(literal_parts, rich_parts), max_size=30)

value_bindings = st.dictionaries(
    keys=st.sampled_from(["b", "i", "code", "link", "name", "count"]),
    values=st.text(max_size=5),
    max_size=6,
)
