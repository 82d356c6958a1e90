"""Streaming discovery of message definition files.

FileDiscovery walks each root top-down and yields definition files as they
are found, so the caller can compile the first file before the tree has been
fully listed. Ignored directories are pruned before they are entered.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from intlengine.diagnostics import Diagnostic, DiagnosticCode, DiscoveryError
from intlengine.pipeline.config import IgnoreRules
from intlengine.pipeline.naming import is_definitions_file

__all__ = ["FileDiscovery"]

logger = logging.getLogger(__name__)


class FileDiscovery:
    """Iterable over every definition file below a set of root directories.

    Roots are validated at construction, before anything is yielded, so a
    misconfigured root fails fast instead of halfway through a scan.

    Symbolic links to directories are not followed. Paths are absolute and,
    within each directory, yielded in sorted order. A file reachable from
    two overlapping roots is yielded once: a root nested inside another is
    skipped by the outer walk and scanned with its own root-relative rules.

    Example:
        >>> for path in FileDiscovery(["src"]):  # doctest: +SKIP
        ...     print(path)
        /work/app/src/home/home.messages.js

    Raises:
        DiscoveryError: If a root does not exist or is not a directory
    """

    __slots__ = ("_ignore", "_roots")

    def __init__(self, roots: Iterable[str | Path], ignore: IgnoreRules | None = None) -> None:
        # dict.fromkeys drops repeated roots and keeps their order
        self._roots = tuple(dict.fromkeys(self._validate_root(Path(root)) for root in roots))
        self._ignore = ignore if ignore is not None else IgnoreRules()

    @staticmethod
    def _validate_root(root: Path) -> Path:
        resolved = root.resolve()
        if not resolved.exists():
            raise DiscoveryError(
                Diagnostic(
                    code=DiagnosticCode.ROOT_NOT_FOUND,
                    message=f"Root directory '{root}' does not exist",
                    hint="Check the configured message roots",
                    source_path=str(root),
                )
            )
        if not resolved.is_dir():
            raise DiscoveryError(
                Diagnostic(
                    code=DiagnosticCode.ROOT_NOT_DIRECTORY,
                    message=f"Root '{root}' is not a directory",
                    hint="Message roots must be directories, not files",
                    source_path=str(root),
                )
            )
        return resolved

    @property
    def roots(self) -> tuple[Path, ...]:
        """Resolved root directories."""
        return self._roots

    @property
    def ignore(self) -> IgnoreRules:
        return self._ignore

    def __iter__(self) -> Iterator[Path]:
        for root in self._roots:
            logger.debug("Scanning %s for message definition files", root)
            yield from self._walk(root)

    def _walk(self, root: Path) -> Iterator[Path]:
        # Roots nested below this one are scanned on their own turn
        nested = {other for other in self._roots if other != root and other.is_relative_to(root)}
        for directory, dirnames, filenames in root.walk(top_down=True, follow_symlinks=False):
            # Pruning in place stops Path.walk from descending
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not self._ignore.is_ignored_directory(name) and directory / name not in nested
            )
            for name in sorted(filenames):
                if self._ignore.is_ignored_file(name) or not is_definitions_file(name):
                    continue
                yield directory / name
