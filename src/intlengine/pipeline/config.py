"""Configuration for definition file discovery and watching.

Frozen dataclasses validated at construction time. Constructing
``WatchConfig(roots=[...])`` with no other arguments produces a usable
configuration.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path

from intlengine.constants import (
    DEFAULT_EVENT_QUEUE_SIZE,
    DEFAULT_IGNORED_DIRECTORIES,
    DEFAULT_IGNORED_FILE_PATTERNS,
    DEFAULT_LOCALE,
    DEFAULT_RESULT_HISTORY_SIZE,
    DEFAULT_WATCH_DEBOUNCE_MS,
)
from intlengine.enums import CompiledFormat

__all__ = ["IgnoreRules", "WatchConfig"]


@dataclass(frozen=True, slots=True)
class IgnoreRules:
    """Deny-list shared by discovery and the watcher.

    Directory names are matched against every directory component below a
    root; the root's own location is never checked, so a project living
    under e.g. ``/home/me/build/app`` is still scanned.

    Attributes:
        directory_names: Directory names never descended into
        file_patterns: fnmatch patterns of file names never compiled

    Example:
        >>> rules = IgnoreRules()
        >>> rules.is_ignored(Path("/app/node_modules/x.messages.js"), Path("/app"))
        True
        >>> rules.is_ignored(Path("/app/src/a.compiled.messages.jsona"), Path("/app"))
        True
        >>> rules.is_ignored(Path("/app/src/a.messages.js"), Path("/app"))
        False
    """

    directory_names: frozenset[str] = DEFAULT_IGNORED_DIRECTORIES
    file_patterns: tuple[str, ...] = DEFAULT_IGNORED_FILE_PATTERNS

    def __post_init__(self) -> None:
        """Normalize iterables passed by callers into immutable containers."""
        object.__setattr__(self, "directory_names", frozenset(self.directory_names))
        object.__setattr__(self, "file_patterns", tuple(self.file_patterns))

    def is_ignored_directory(self, name: str) -> bool:
        return name in self.directory_names

    def is_ignored_file(self, name: str) -> bool:
        return any(fnmatchcase(name, pattern) for pattern in self.file_patterns)

    def is_ignored(self, path: Path, root: Path) -> bool:
        """Check a file path located under root against the deny-list."""
        try:
            relative = path.relative_to(root)
        except ValueError:
            relative = path
        *directories, name = relative.parts or ("",)
        if any(self.is_ignored_directory(part) for part in directories):
            return True
        return self.is_ignored_file(name)


@dataclass(frozen=True, slots=True)
class WatchConfig:
    """Options for compile_message_files().

    Attributes:
        roots: Directories scanned (and watched) recursively
        watch: Keep watching after the initial scan (default: True)
        locale: Locale compiled artifacts are emitted for
        output_format: Serialization format of compiled artifacts
        ignore: Deny-list for discovery and watching
        debounce_ms: Milliseconds watchfiles groups bursts of events over
        queue_size: Bound of the event channel to the compile worker
        result_history: Most recent results kept by the session
    """

    roots: tuple[Path, ...]
    watch: bool = True
    locale: str = DEFAULT_LOCALE
    output_format: CompiledFormat = CompiledFormat.JSON
    ignore: IgnoreRules = field(default_factory=IgnoreRules)
    debounce_ms: int = DEFAULT_WATCH_DEBOUNCE_MS
    queue_size: int = DEFAULT_EVENT_QUEUE_SIZE
    result_history: int = DEFAULT_RESULT_HISTORY_SIZE

    def __post_init__(self) -> None:
        """Normalize roots and validate values.

        Raises:
            ValueError: If no roots are given, locale is empty, or a numeric
                option is not positive
        """
        roots = self.roots
        if isinstance(roots, (str, Path)):
            roots = (roots,)
        object.__setattr__(self, "roots", tuple(Path(root) for root in roots))
        if not self.roots:
            msg = "at least one root directory is required"
            raise ValueError(msg)
        if not self.locale:
            msg = "locale must be a non-empty string"
            raise ValueError(msg)
        if self.debounce_ms <= 0:
            msg = "debounce_ms must be positive"
            raise ValueError(msg)
        if self.queue_size <= 0:
            msg = "queue_size must be positive"
            raise ValueError(msg)
        if self.result_history <= 0:
            msg = "result_history must be positive"
            raise ValueError(msg)

