"""Incremental compilation pipeline for message definition files.

Submodules:
    naming     - Definition/compiled file naming rules
    config     - IgnoreRules and WatchConfig
    compiler   - CompilerService protocol (external compiler boundary)
    discovery  - FileDiscovery (streaming initial scan)
    watcher    - ChangeWatcher (watchfiles-based change stream)
    dispatcher - CompileDispatcher, CompileResult, CompileSummary
    runner     - compile_message_files() and CompileSession

Python 3.13+. External dependency: watchfiles.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from intlengine.enums import ChangeKind, CompiledFormat, CompileStatus
from intlengine.pipeline.compiler import CompilerService
from intlengine.pipeline.config import IgnoreRules, WatchConfig
from intlengine.pipeline.discovery import FileDiscovery
from intlengine.pipeline.dispatcher import CompileDispatcher, CompileResult, CompileSummary
from intlengine.pipeline.naming import compiled_output_path, is_definitions_file
from intlengine.pipeline.runner import CompileSession, compile_message_files
from intlengine.pipeline.watcher import ChangeWatcher, DefinitionFileFilter, WatchEvent

__all__ = [
    # Entry point
    "compile_message_files",
    "CompileSession",
    # Components
    "ChangeWatcher",
    "CompileDispatcher",
    "CompilerService",
    "DefinitionFileFilter",
    "FileDiscovery",
    # Configuration
    "CompiledFormat",
    "IgnoreRules",
    "WatchConfig",
    # Results and events
    "ChangeKind",
    "CompileResult",
    "CompileStatus",
    "CompileSummary",
    "WatchEvent",
    # Naming
    "compiled_output_path",
    "is_definitions_file",
]
