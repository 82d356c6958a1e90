"""End-to-end tests for compile_message_files() and CompileSession."""

import json
import time
from collections.abc import Iterator
from pathlib import Path

import pytest

from intlengine.diagnostics import DiscoveryError
from intlengine.enums import CompiledFormat
from intlengine.pipeline.config import WatchConfig
from intlengine.pipeline.runner import CompileSession, compile_message_files
from tests.helpers.fakes import SYNTAX_ERROR_MARKER, FakeCompiler
from tests.helpers.waiting import wait_for


def write_definitions(path: Path, content: str = "greeting: 'Hello'\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def sessions() -> Iterator[list[CompileSession]]:
    """Collects sessions and shuts their threads down after the test."""
    started: list[CompileSession] = []
    yield started
    for session in started:
        session.stop()
        session.join(15)


class TestInitialScan:
    """Tests for the initial compile pass."""

    def test_compiles_existing_files_only(
        self, compiler: FakeCompiler, message_root: Path
    ) -> None:
        """Stale artifacts and ignored directories are left alone."""
        source = write_definitions(message_root / "a.messages.js")
        stale = write_definitions(message_root / "a.compiled.messages.jsona", "stale")
        write_definitions(message_root / "node_modules" / "b.messages.js")

        session = compile_message_files([message_root], compiler, watch=False)

        assert compiler.compiled_paths() == [str(source.resolve())]
        assert session.initial_summary.total == 1
        assert session.initial_summary.all_successful
        assert json.loads(stale.read_text(encoding="utf-8"))["source"] == "a.messages.js"
        assert not (message_root / "node_modules" / "b.compiled.messages.jsona").exists()

    def test_not_watching_when_disabled(self, compiler: FakeCompiler, message_root: Path) -> None:
        """watch=False returns after the scan without starting threads."""
        write_definitions(message_root / "a.messages.js")

        session = compile_message_files([message_root], compiler, watch=False)

        assert not session.is_watching
        assert not session.wait_until_watching(0.1)
        assert session.results == session.initial_summary.results

    def test_failures_reported_not_raised(
        self, compiler: FakeCompiler, message_root: Path
    ) -> None:
        """A broken file is reported in the summary; the others compile."""
        write_definitions(message_root / "a.messages.js")
        write_definitions(message_root / "b.messages.js", SYNTAX_ERROR_MARKER)

        session = compile_message_files([message_root], compiler, watch=False)

        assert session.initial_summary.successful == 1
        assert session.initial_summary.errors == 1

    def test_locale_and_format_forwarded(
        self, compiler: FakeCompiler, message_root: Path
    ) -> None:
        """Options reach the compiler service."""
        write_definitions(message_root / "a.messages.js")

        compile_message_files(
            [message_root],
            compiler,
            watch=False,
            locale="lv",
            output_format=CompiledFormat.KEYLESS_JSON,
        )

        assert [entry[1:] for entry in compiler.precompiled] == [
            (
                "lv",
                str((message_root / "a.compiled.messages.jsona").resolve()),
                CompiledFormat.KEYLESS_JSON,
            )
        ]

    def test_accepts_watch_config(self, compiler: FakeCompiler, message_root: Path) -> None:
        """A complete WatchConfig can be passed instead of roots."""
        write_definitions(message_root / "a.messages.js")
        config = WatchConfig(roots=(message_root,), watch=False, locale="de-DE")

        session = compile_message_files(config, compiler)

        assert session.config is config
        assert session.dispatcher.locale == "de-DE"

    def test_result_history_bounded(self, compiler: FakeCompiler, message_root: Path) -> None:
        """Only the most recent results are kept; the summary stays complete."""
        for name in ("a", "b", "c"):
            write_definitions(message_root / f"{name}.messages.js")

        session = compile_message_files([message_root], compiler, watch=False, result_history=2)

        assert session.initial_summary.total == 3
        assert [result.source_path.name for result in session.results] == [
            "b.messages.js",
            "c.messages.js",
        ]

    def test_missing_root_raises(self, compiler: FakeCompiler, tmp_path: Path) -> None:
        """Misconfigured roots fail before anything is compiled."""
        with pytest.raises(DiscoveryError):
            compile_message_files([tmp_path / "missing"], compiler, watch=False)
        assert compiler.processed == []

    def test_invalid_options_raise(self, compiler: FakeCompiler, message_root: Path) -> None:
        """Invalid options are rejected."""
        with pytest.raises(ValueError, match="debounce_ms"):
            compile_message_files([message_root], compiler, debounce_ms=0)


class TestWatching:
    """Tests for continuous recompilation (uses the real file system)."""

    def test_modified_file_recompiled(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """Saving an existing file recompiles that file exactly once."""
        write_definitions(message_root / "a.messages.js")
        target = write_definitions(message_root / "c.messages.js")
        session = compile_message_files([message_root], compiler, debounce_ms=200)
        sessions.append(session)
        initial = len(compiler.compiled_paths())
        assert session.is_watching

        write_definitions(target, "greeting: 'Sveiki'\n")

        assert wait_for(lambda: len(compiler.compiled_paths()) > initial)
        # Let any further batch for the same save arrive before counting
        time.sleep(1.0)
        assert compiler.compiled_paths()[initial:] == [str(target.resolve())]
        assert session.results[-1].is_success
        artifact = json.loads(
            (message_root / "c.compiled.messages.jsona").read_text(encoding="utf-8")
        )
        assert artifact["messages"] == ["greeting: 'Sveiki'"]

    def test_failure_then_recovery(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """A broken save is logged and the next change still compiles."""
        target = write_definitions(message_root / "c.messages.js")
        session = compile_message_files([message_root], compiler, debounce_ms=50)
        sessions.append(session)
        initial = len(session.results)

        write_definitions(target, SYNTAX_ERROR_MARKER)
        assert wait_for(
            lambda: any(result.is_error for result in session.results[initial:])
        )

        created = write_definitions(message_root / "d.messages.js")
        assert wait_for(
            lambda: any(
                result.is_success and result.source_path == created.resolve()
                for result in session.results[initial:]
            )
        )
        assert session.is_watching
        assert (message_root / "d.compiled.messages.jsona").exists()

    def test_new_file_in_subdirectory(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """Files created in new subdirectories are compiled."""
        session = compile_message_files([message_root], compiler, debounce_ms=50)
        sessions.append(session)

        directory = message_root / "pages" / "home"
        directory.mkdir(parents=True)
        # Give the watcher time to attach to the new directories
        time.sleep(1.0)
        created = write_definitions(directory / "home.messages.js")

        assert wait_for(
            lambda: (created.parent / "home.compiled.messages.jsona").exists()
        )

    def test_ignored_directory_not_compiled(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """Changes inside ignored directories never reach the compiler."""
        session = compile_message_files([message_root], compiler, debounce_ms=50)
        sessions.append(session)

        write_definitions(message_root / "node_modules" / "lib.messages.js")
        marker = write_definitions(message_root / "after.messages.js")

        assert wait_for(lambda: str(marker.resolve()) in compiler.compiled_paths())
        assert all("node_modules" not in path for path in compiler.compiled_paths())

    def test_watched_results_bounded(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """Watch-triggered results push the oldest ones out."""
        write_definitions(message_root / "a.messages.js")
        session = compile_message_files(
            [message_root], compiler, debounce_ms=50, result_history=1
        )
        sessions.append(session)

        created = write_definitions(message_root / "b.messages.js")

        assert wait_for(lambda: session.results[0].source_path == created.resolve())
        assert len(session.results) == 1
        assert session.initial_summary.total == 1

    def test_stop_ends_threads(self, compiler: FakeCompiler, message_root: Path) -> None:
        """stop() and join() shut the session down."""
        session = compile_message_files([message_root], compiler, debounce_ms=50)

        session.stop()
        session.join(15)

        assert not session.is_watching
        assert "watching=False" in repr(session)

    def test_start_twice_raises(
        self, compiler: FakeCompiler, message_root: Path, sessions: list[CompileSession]
    ) -> None:
        """A session watches at most once."""
        session = compile_message_files([message_root], compiler, debounce_ms=50)
        sessions.append(session)

        with pytest.raises(RuntimeError, match="already started"):
            session.start_watching()
