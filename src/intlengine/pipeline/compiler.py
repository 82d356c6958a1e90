"""Boundary to the external message compiler service.

The compiler parses definition files, keeps their declarations in a shared
database keyed by file path, and emits compiled artifacts. Its parsing
algorithm and artifact layout are not part of this package.

Python 3.13+. Zero external dependencies.
"""

from typing import Protocol

from intlengine.enums import CompiledFormat

__all__ = ["CompilerService"]


class CompilerService(Protocol):
    """Protocol for message compiler services.

    This is a Protocol (structural typing) rather than ABC so that bindings
    to native compilers can be used without subclassing.

    Any method may raise on malformed input or I/O failure; the dispatcher
    isolates such failures per file.
    """

    def is_definitions_file(self, path: str) -> bool:
        """Return True if the compiler accepts path as a definitions file."""
        ...

    def process_definitions_file(self, path: str) -> None:
        """Parse path and register its declarations under the path key."""
        ...

    def precompile(
        self, path: str, locale: str, output_path: str, output_format: CompiledFormat
    ) -> None:
        """Write the compiled artifact of path for one locale and format."""
        ...
