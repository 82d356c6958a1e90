"""Entry point keeping compiled message artifacts in sync with their sources.

compile_message_files() first compiles every existing definition file, so
that every artifact exists before anything tries to load it, then (unless
``watch=False``) keeps recompiling files as they change.

Watching uses a bounded event channel: a watcher thread puts WatchEvents on a
queue and a dedicated compile worker thread consumes them. A file that fails
to compile is logged and skipped; the worker moves on to the next event.

Python 3.13+. External dependency: watchfiles.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from collections.abc import Iterable
from pathlib import Path

from intlengine.constants import (
    DEFAULT_EVENT_QUEUE_SIZE,
    DEFAULT_LOCALE,
    DEFAULT_RESULT_HISTORY_SIZE,
    DEFAULT_WATCH_DEBOUNCE_MS,
)
from intlengine.enums import CompiledFormat
from intlengine.pipeline.compiler import CompilerService
from intlengine.pipeline.config import IgnoreRules, WatchConfig
from intlengine.pipeline.discovery import FileDiscovery
from intlengine.pipeline.dispatcher import CompileDispatcher, CompileResult, CompileSummary
from intlengine.pipeline.watcher import ChangeWatcher, WatchEvent

__all__ = ["CompileSession", "compile_message_files"]

logger = logging.getLogger(__name__)


class CompileSession:
    """Handle on a running compile pipeline.

    Watch threads are daemons: by default the session lives as long as the
    process. stop() is provided for embedding hosts and tests.

    Attributes:
        config: Configuration the session was started with
        initial_summary: Results of the initial scan
    """

    __slots__ = (
        "_dispatcher",
        "_events",
        "_ready_event",
        "_results",
        "_results_lock",
        "_stop_event",
        "_watcher_thread",
        "_worker_thread",
        "config",
        "initial_summary",
    )

    def __init__(
        self,
        config: WatchConfig,
        dispatcher: CompileDispatcher,
        initial_summary: CompileSummary,
    ) -> None:
        self.config = config
        self.initial_summary = initial_summary
        self._dispatcher = dispatcher
        self._results: deque[CompileResult] = deque(
            initial_summary.results, maxlen=config.result_history
        )
        self._results_lock = threading.Lock()
        self._events: queue.Queue[WatchEvent | None] = queue.Queue(maxsize=config.queue_size)
        self._stop_event = threading.Event()
        self._ready_event = threading.Event()
        self._watcher_thread: threading.Thread | None = None
        self._worker_thread: threading.Thread | None = None

    def __repr__(self) -> str:
        return (
            f"CompileSession(roots={[str(root) for root in self.config.roots]!r}, "
            f"watching={self.is_watching}, results={len(self.results)})"
        )

    @property
    def dispatcher(self) -> CompileDispatcher:
        return self._dispatcher

    @property
    def is_watching(self) -> bool:
        thread = self._watcher_thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    @property
    def results(self) -> tuple[CompileResult, ...]:
        """Most recent results, oldest first: the initial scan, then watch-triggered compiles.

        At most config.result_history results are kept; initial_summary always
        holds the complete initial scan.
        """
        with self._results_lock:
            return tuple(self._results)

    def start_watching(self) -> None:
        """Start the watcher and compile worker threads.

        Raises:
            RuntimeError: If watching was already started
        """
        if self._watcher_thread is not None:
            msg = "Watching already started for this session"
            raise RuntimeError(msg)

        watcher = ChangeWatcher(
            self.config.roots,
            self.config.ignore,
            debounce_ms=self.config.debounce_ms,
            stop_event=self._stop_event,
            ready_event=self._ready_event,
        )
        self._worker_thread = threading.Thread(
            target=self._compile_loop, name="intl-compile-worker", daemon=True
        )
        self._watcher_thread = threading.Thread(
            target=self._watch_loop, args=(watcher,), name="intl-watcher", daemon=True
        )
        self._worker_thread.start()
        self._watcher_thread.start()

    def wait_until_watching(self, timeout: float | None = None) -> bool:
        """Block until changes are guaranteed to be observed.

        Returns:
            True if the watch is attached and running, False on timeout or if
            the watcher has already stopped
        """
        if self._watcher_thread is None:
            return False
        self._ready_event.wait(timeout)
        return self.is_watching and self._ready_event.is_set()

    def stop(self) -> None:
        """Ask the watcher to stop; pending events are still compiled."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the watcher and worker threads to finish."""
        for thread in (self._watcher_thread, self._worker_thread):
            if thread is not None:
                thread.join(timeout)

    def _watch_loop(self, watcher: ChangeWatcher) -> None:
        try:
            for event in watcher:
                self._events.put(event)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Watching message definition files failed")
        finally:
            # Unblock wait_until_watching() and shut the worker down
            self._ready_event.set()
            self._events.put(None)

    def _compile_loop(self) -> None:
        while (event := self._events.get()) is not None:
            logger.debug("Compiling after %s event: %s", event.kind, event.path)
            result = self._dispatcher.process_file(event.path)
            with self._results_lock:
                self._results.append(result)
        logger.debug("Compile worker stopped")


def compile_message_files(
    roots: Iterable[str | Path] | WatchConfig,
    compiler: CompilerService,
    *,
    watch: bool = True,
    locale: str = DEFAULT_LOCALE,
    output_format: CompiledFormat = CompiledFormat.JSON,
    ignore: IgnoreRules | None = None,
    debounce_ms: int = DEFAULT_WATCH_DEBOUNCE_MS,
    queue_size: int = DEFAULT_EVENT_QUEUE_SIZE,
    result_history: int = DEFAULT_RESULT_HISTORY_SIZE,
) -> CompileSession:
    """Compile all definition files under roots, then keep them compiled.

    The initial scan runs on the calling thread and dispatches each file as
    soon as it is found. It completes before this function returns, so every
    pre-existing definition file has been compiled at least once.

    Args:
        roots: Directories to scan, or a complete WatchConfig (in which case
            the remaining keyword options are ignored)
        compiler: Compiler service used for every file
        watch: Keep watching for changes after the initial scan
        locale: Locale to emit compiled artifacts for
        output_format: Serialization format of compiled artifacts
        ignore: Deny-list (defaults to IgnoreRules())
        debounce_ms: Event grouping window for the watcher
        queue_size: Bound of the watcher-to-worker event channel
        result_history: Most recent results kept by the session

    Returns:
        CompileSession with the initial scan summary. When watching, the
        session is already attached to the file system.

    Raises:
        DiscoveryError: If a root does not exist or is not a directory
        ValueError: If the options are invalid

    Example:
        >>> session = compile_message_files(["src"], compiler)  # doctest: +SKIP
        >>> session.initial_summary.errors  # doctest: +SKIP
        0
    """
    if isinstance(roots, WatchConfig):
        config = roots
    else:
        config = WatchConfig(
            roots=tuple(Path(root) for root in roots),
            watch=watch,
            locale=locale,
            output_format=output_format,
            ignore=ignore if ignore is not None else IgnoreRules(),
            debounce_ms=debounce_ms,
            queue_size=queue_size,
            result_history=result_history,
        )

    discovery = FileDiscovery(config.roots, config.ignore)
    dispatcher = CompileDispatcher(
        compiler, locale=config.locale, output_format=config.output_format
    )

    logger.debug("Scanning for initial message definition files")
    initial_summary = dispatcher.process_files(discovery)
    logger.info(
        "Initial message scan completed: %d compiled, %d failed",
        initial_summary.successful,
        initial_summary.errors,
    )

    session = CompileSession(config, dispatcher, initial_summary)
    if config.watch:
        session.start_watching()
        session.wait_until_watching()
    else:
        logger.debug("Not watching files because the watch option is false")
    return session
