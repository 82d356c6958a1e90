"""Continuous watching of message definition files.

ChangeWatcher wraps ``watchfiles.watch`` and turns its change batches into a
flat stream of WatchEvent items, one per changed definition file. watchfiles
only reports changes made after the watch is attached, so files that merely
exist when watching starts never produce events.

Deletions are dropped: there is nothing to compile. A rename arrives as a
deletion of the old name plus an addition of the new one, so the new name is
compiled.

Python 3.13+. External dependency: watchfiles.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, DefaultFilter, watch

from intlengine.constants import DEFAULT_WATCH_DEBOUNCE_MS, DEFAULT_WATCH_POLL_TIMEOUT_MS
from intlengine.enums import ChangeKind
from intlengine.pipeline.config import IgnoreRules
from intlengine.pipeline.naming import is_definitions_file

if TYPE_CHECKING:
    import threading

__all__ = ["ChangeWatcher", "DefinitionFileFilter", "WatchEvent"]

logger = logging.getLogger(__name__)

_CHANGE_KINDS: dict[Change, ChangeKind] = {
    Change.added: ChangeKind.ADDED,
    Change.modified: ChangeKind.MODIFIED,
}


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """One change to one definition file.

    Attributes:
        kind: Whether the file was added or modified
        path: Absolute path of the changed file
    """

    kind: ChangeKind
    path: Path


class DefinitionFileFilter(DefaultFilter):
    """watchfiles filter accepting only added/modified definition files.

    The deny-list is applied relative to the watched root containing the
    path, matching what FileDiscovery does for the initial scan.
    """

    def __init__(self, roots: Iterable[Path], ignore: IgnoreRules) -> None:
        # Directory rules are applied relative to the roots in __call__,
        # so the absolute-path ignore_dirs check of DefaultFilter is disabled
        super().__init__(ignore_dirs=())
        # Deepest root first so nested roots take precedence
        self._roots = tuple(sorted(roots, key=lambda root: len(root.parts), reverse=True))
        self._ignore = ignore

    def _root_of(self, path: Path) -> Path | None:
        for root in self._roots:
            if path.is_relative_to(root):
                return root
        return None

    def __call__(self, change: Change, path: str) -> bool:
        if change not in _CHANGE_KINDS or not is_definitions_file(path):
            return False
        candidate = Path(path)
        root = self._root_of(candidate)
        if root is None or self._ignore.is_ignored(candidate, root):
            return False
        return super().__call__(change, path)


class ChangeWatcher:
    """Iterable stream of WatchEvents for the given roots.

    Iteration blocks while waiting for changes and ends when stop_event is
    set. Within one debounced batch, each path is yielded once, in path order.

    ready_event, when given, is set as soon as the underlying watch is
    attached (on its first idle poll or first batch), so callers can tell
    when later changes are guaranteed to be observed.

    Example:
        >>> watcher = ChangeWatcher([Path("src")], IgnoreRules())  # doctest: +SKIP
        >>> for event in watcher:  # doctest: +SKIP
        ...     print(event.kind, event.path)
        modified /work/app/src/home/home.messages.js
    """

    __slots__ = ("_debounce_ms", "_filter", "_ready_event", "_roots", "_stop_event")

    def __init__(
        self,
        roots: Iterable[Path],
        ignore: IgnoreRules | None = None,
        *,
        debounce_ms: int = DEFAULT_WATCH_DEBOUNCE_MS,
        stop_event: threading.Event | None = None,
        ready_event: threading.Event | None = None,
    ) -> None:
        self._roots = tuple(Path(root).resolve() for root in roots)
        self._filter = DefinitionFileFilter(
            self._roots, ignore if ignore is not None else IgnoreRules()
        )
        self._debounce_ms = debounce_ms
        self._stop_event = stop_event
        self._ready_event = ready_event

    @property
    def roots(self) -> tuple[Path, ...]:
        return self._roots

    def __iter__(self) -> Iterator[WatchEvent]:
        logger.info(
            "Watching for message definition changes in:\n- %s",
            "\n- ".join(str(root) for root in self._roots),
        )
        for changes in watch(
            *self._roots,
            watch_filter=self._filter,
            debounce=self._debounce_ms,
            stop_event=self._stop_event,
            rust_timeout=DEFAULT_WATCH_POLL_TIMEOUT_MS,
            yield_on_timeout=True,
            raise_interrupt=False,
        ):
            if self._ready_event is not None:
                self._ready_event.set()
            # One event per path and batch; "added" wins over "modified"
            latest: dict[str, Change] = {}
            for change, path in changes:
                latest[path] = min(latest.get(path, change), change)
            for path in sorted(latest):
                change = latest[path]
                logger.debug("Got event %s for %s", change.name, path)
                yield WatchEvent(kind=_CHANGE_KINDS[change], path=Path(path))
        logger.info("Stopped watching message definition files")
