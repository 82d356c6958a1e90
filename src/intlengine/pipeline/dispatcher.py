"""Per-file compile-and-emit routine with fault isolation.

CompileDispatcher is the only place that talks to the compiler service. Every
failure while processing a file is converted into a CompileError, logged, and
returned in a CompileResult; nothing propagates to the scan or watch loop
that called it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from intlengine.constants import DEFAULT_LOCALE
from intlengine.diagnostics import CompileError, Diagnostic, DiagnosticCode
from intlengine.enums import CompiledFormat, CompileStatus
from intlengine.pipeline.compiler import CompilerService
from intlengine.pipeline.locks import KeyedLock
from intlengine.pipeline.naming import compiled_output_path, is_definitions_file

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "CompileDispatcher",
    # Result types
    "CompileResult",
    "CompileSummary",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Result of processing a single definition file.

    Attributes:
        source_path: Path that was dispatched
        status: Compile status (success, skipped, error)
        output_path: Compiled artifact path (None when skipped)
        error: CompileError if status is ERROR, None otherwise
    """

    source_path: Path
    status: CompileStatus
    output_path: Path | None = None
    error: CompileError | None = None

    @property
    def is_success(self) -> bool:
        return self.status == CompileStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        return self.status == CompileStatus.SKIPPED

    @property
    def is_error(self) -> bool:
        return self.status == CompileStatus.ERROR


@dataclass(frozen=True, slots=True)
class CompileSummary:
    """Aggregate of compile results, e.g. from the initial scan.

    Example:
        >>> summary = session.initial_summary  # doctest: +SKIP
        >>> summary.total, summary.successful, summary.errors  # doctest: +SKIP
        (12, 11, 1)
    """

    results: tuple[CompileResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[CompileResult]) -> CompileSummary:
        return cls(results=tuple(results))

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for result in self.results if result.is_success)

    @property
    def skipped(self) -> int:
        return sum(1 for result in self.results if result.is_skipped)

    @property
    def errors(self) -> int:
        return sum(1 for result in self.results if result.is_error)

    @property
    def all_successful(self) -> bool:
        """True when no file failed (skipped files do not count as failures)."""
        return self.errors == 0

    def get_errors(self) -> tuple[CompileResult, ...]:
        return tuple(result for result in self.results if result.is_error)


class CompileDispatcher:
    """Compiles one definition file at a time through a CompilerService.

    Safe to call concurrently, including for the same path: calls for one
    path are serialized by a per-path lock, and recompiling an unchanged file
    simply rewrites the same artifact.

    Example:
        >>> dispatcher = CompileDispatcher(compiler, locale="en-US")  # doctest: +SKIP
        >>> result = dispatcher.process_file("src/home.messages.js")  # doctest: +SKIP
        >>> result.output_path  # doctest: +SKIP
        PosixPath('src/home.compiled.messages.jsona')
    """

    __slots__ = ("_compiler", "_locale", "_locks", "_output_format")

    def __init__(
        self,
        compiler: CompilerService,
        *,
        locale: str = DEFAULT_LOCALE,
        output_format: CompiledFormat = CompiledFormat.JSON,
    ) -> None:
        self._compiler = compiler
        self._locale = locale
        self._output_format = output_format
        self._locks = KeyedLock()

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def output_format(self) -> CompiledFormat:
        return self._output_format

    def process_file(self, path: str | Path) -> CompileResult:
        """Register a definition file and write its compiled artifact.

        Paths that do not follow the naming convention (e.g. from an overly
        broad watch) are skipped.

        Returns:
            CompileResult describing the outcome. Never raises for failures
            of the file itself.
        """
        source = Path(path)
        source_key = str(source)

        if not is_definitions_file(source):
            return self._skipped(source)

        output = compiled_output_path(source)

        with self._locks.hold(source_key):
            try:
                if not self._compiler.is_definitions_file(source_key):
                    return self._skipped(source)
                logger.debug("Processing file: %s", source)
                self._compiler.process_definitions_file(source_key)
                self._compiler.precompile(
                    source_key, self._locale, str(output), self._output_format
                )
            except Exception as e:  # pylint: disable=broad-exception-caught
                error = self._compile_error(source, e)
                error.__cause__ = e
                logger.error("Failed to compile messages in %s: %s", source, e)
                logger.debug("Compile failure details", exc_info=e)
                return CompileResult(
                    source_path=source,
                    status=CompileStatus.ERROR,
                    output_path=output,
                    error=error,
                )

        logger.info("Compiled %s -> %s", source, output.name)
        return CompileResult(source_path=source, status=CompileStatus.SUCCESS, output_path=output)

    def process_files(self, paths: Iterable[str | Path]) -> CompileSummary:
        """Process paths one by one, as the iterable produces them."""
        return CompileSummary.from_results(self.process_file(path) for path in paths)

    @staticmethod
    def _skipped(source: Path) -> CompileResult:
        logger.debug("Skipping non-definition file: %s", source)
        return CompileResult(source_path=source, status=CompileStatus.SKIPPED)

    def _compile_error(self, source: Path, cause: Exception) -> CompileError:
        code = (
            DiagnosticCode.COMPILE_IO_FAILED
            if isinstance(cause, OSError)
            else DiagnosticCode.COMPILE_FAILED
        )
        return CompileError(
            Diagnostic(
                code=code,
                message=f"Failed to compile messages: {cause}",
                hint="Fix the definition file and save it again",
                source_path=str(source),
                locale=self._locale,
            ),
            source_path=str(source),
        )
