"""Shared constants for intlengine.

Centralized configuration constants used across the runtime and pipeline
packages. Placing constants here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Locale defaults: Fallback locale and formatter cache bounds
- File naming: Definition and compiled-artifact suffixes
- Deny-list: Directories and files never scanned or watched
- Watch limits: Debounce and event channel bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # File naming
    "DEFINITION_SUFFIX",
    "COMPILED_SUFFIX",
    # Deny-list
    "DEFAULT_IGNORED_DIRECTORIES",
    "DEFAULT_IGNORED_FILE_PATTERNS",
    # Watch limits
    "DEFAULT_WATCH_DEBOUNCE_MS",
    "DEFAULT_WATCH_POLL_TIMEOUT_MS",
    "DEFAULT_EVENT_QUEUE_SIZE",
    "DEFAULT_RESULT_HISTORY_SIZE",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used for all formatting when no other locale has been selected.
DEFAULT_LOCALE: str = "en-US"

# Maximum cached FormatterConfig instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# FILE NAMING
# ============================================================================

# Message definition files are recognized by this suffix only.
DEFINITION_SUFFIX: str = ".messages.js"

# Compiled artifacts replace DEFINITION_SUFFIX with this suffix, in place.
COMPILED_SUFFIX: str = ".compiled.messages.jsona"

# ============================================================================
# DENY-LIST
# ============================================================================

# Directory names pruned from discovery and ignored by the watcher.
# Dependency caches and build outputs make scans slow and never hold sources.
DEFAULT_IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {
        "node_modules",
        "target",
        "native",
        "dist",
        "build",
        "cache",
        ".cache",
        "__pycache__",
    }
)

# File name patterns (fnmatch syntax) never treated as candidates.
# Compiled artifacts are excluded so that writing them cannot retrigger a compile.
DEFAULT_IGNORED_FILE_PATTERNS: tuple[str, ...] = ("*.compiled.messages.*",)

# ============================================================================
# WATCH LIMITS
# ============================================================================

# Milliseconds watchfiles waits to group bursts of events into one batch.
DEFAULT_WATCH_DEBOUNCE_MS: int = 200

# Milliseconds the watcher waits for changes before reporting an idle poll.
# The first idle poll (or first batch) signals that watching is attached.
DEFAULT_WATCH_POLL_TIMEOUT_MS: int = 500

# Bound of the event channel between the watcher and the compile worker.
DEFAULT_EVENT_QUEUE_SIZE: int = 256

# Most recent compile results a watch session keeps; older ones are dropped.
DEFAULT_RESULT_HISTORY_SIZE: int = 1024
