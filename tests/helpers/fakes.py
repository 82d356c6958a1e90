"""Test doubles for the external collaborators of intlengine.

FakeTemplate stands in for a compiled message template produced by a message
loader. FakeCompiler stands in for the message compiler service and writes
small JSON artifacts so that tests can inspect the file system.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from intlengine.enums import CompiledFormat
from intlengine.runtime.messages import FormatPart

if TYPE_CHECKING:
    from intlengine.runtime.formatter_config import FormatterConfig

SYNTAX_ERROR_MARKER = "SYNTAX ERROR"


@dataclass(frozen=True)
class Var:
    """Value placeholder: ``{name}``, or ``{name, number, ::currency/CODE}``."""

    name: str
    currency: str | None = None


@dataclass(frozen=True)
class Tag:
    """Rich element: ``<name>children</name>``."""

    name: str
    children: tuple[Any, ...] = ()


type Segment = str | Var | Tag


def _format_value(formatter: FormatterConfig, value: Any, currency: str | None = None) -> str:
    if currency is not None:
        return formatter.format_currency(value, currency=currency)
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return formatter.format_number(value)
    return str(value)


def _parts(
    segments: Sequence[Segment], formatter: FormatterConfig, values: Mapping[str, Any]
) -> list[FormatPart]:
    parts: list[FormatPart] = []
    for segment in segments:
        match segment:
            case str():
                parts.append(FormatPart.literal(segment))
            case Var(name=name, currency=currency):
                parts.append(FormatPart.literal(_format_value(formatter, values[name], currency)))
            case Tag(name=name, children=children):
                chunks = [part.value for part in _parts(children, formatter, values)]
                parts.append(FormatPart.rich(values[name](chunks)))
    return parts


def _plain(
    segments: Sequence[Segment], formatter: FormatterConfig, values: Mapping[str, Any]
) -> str:
    text = []
    for segment in segments:
        match segment:
            case str():
                text.append(segment)
            case Var(name=name, currency=currency):
                text.append(_format_value(formatter, values[name], currency))
            case Tag(children=children):
                text.append(_plain(children, formatter, values))
    return "".join(text)


class FakeTemplate:
    """Compiled template built from literal, Var and Tag segments.

    Records every call so tests can inspect the formatter and bindings the
    engine passed in.
    """

    def __init__(self, *segments: Segment) -> None:
        self.segments = segments
        self.calls: list[tuple[str, FormatterConfig, Mapping[str, Any] | None]] = []

    def format_to_parts(
        self, formatter: FormatterConfig, values: Mapping[str, Any]
    ) -> list[FormatPart]:
        self.calls.append(("parts", formatter, values))
        return _parts(self.segments, formatter, values)

    def format_to_plain_string(
        self, formatter: FormatterConfig, values: Mapping[str, Any] | None
    ) -> str:
        self.calls.append(("plain", formatter, values))
        return _plain(self.segments, formatter, values or {})


class RawPartsTemplate:
    """Template returning a fixed sequence of parts, regardless of values."""

    def __init__(self, parts: Sequence[FormatPart]) -> None:
        self.parts = tuple(parts)

    def format_to_parts(
        self, formatter: FormatterConfig, values: Mapping[str, Any]
    ) -> list[FormatPart]:
        return list(self.parts)

    def format_to_plain_string(
        self, formatter: FormatterConfig, values: Mapping[str, Any] | None
    ) -> str:
        return "".join(str(part.value) for part in self.parts if part.is_literal)


@dataclass
class FakeCompiler:
    """In-memory compiler service writing JSON artifacts.

    Definition files containing SYNTAX_ERROR_MARKER, or named in fail_on,
    fail to parse.
    """

    fail_on: set[str] = field(default_factory=set)
    database: dict[str, str] = field(default_factory=dict)
    processed: list[str] = field(default_factory=list)
    precompiled: list[tuple[str, str, str, CompiledFormat]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_definitions_file(self, path: str) -> bool:
        return path.endswith(".messages.js")

    def process_definitions_file(self, path: str) -> None:
        source = Path(path).read_text(encoding="utf-8")
        if Path(path).name in self.fail_on or SYNTAX_ERROR_MARKER in source:
            msg = f"Unexpected token while parsing {path}"
            raise ValueError(msg)
        with self._lock:
            self.database[path] = source
            self.processed.append(path)

    def precompile(
        self, path: str, locale: str, output_path: str, output_format: CompiledFormat
    ) -> None:
        with self._lock:
            source = self.database[path]
        payload = {
            "format": str(output_format),
            "locale": locale,
            "messages": source.strip().splitlines(),
            "source": Path(path).name,
        }
        Path(output_path).write_text(json.dumps(payload, sort_keys=True), encoding="utf-8")
        with self._lock:
            self.precompiled.append((path, locale, output_path, output_format))

    def compiled_paths(self) -> list[str]:
        with self._lock:
            return [entry[0] for entry in self.precompiled]
