"""Definition file naming rules.

A definition file is recognized by DEFINITION_SUFFIX alone; contents are
never inspected. Its compiled artifact lives next to it, with the suffix
replaced by COMPILED_SUFFIX:

    src/home/home.messages.js  ->  src/home/home.compiled.messages.jsona

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

from intlengine.constants import COMPILED_SUFFIX, DEFINITION_SUFFIX

__all__ = ["compiled_output_path", "is_definitions_file"]


def is_definitions_file(path: str | Path) -> bool:
    """Check whether a path follows the definition file naming convention.

    Example:
        >>> is_definitions_file("app/home.messages.js")
        True
        >>> is_definitions_file("app/home.compiled.messages.jsona")
        False
        >>> is_definitions_file("app/.messages.js")
        False
    """
    name = Path(path).name
    return name.endswith(DEFINITION_SUFFIX) and len(name) > len(DEFINITION_SUFFIX)


def compiled_output_path(path: str | Path) -> Path:
    """Return the compiled artifact path for a definition file.

    Pure function of the input path: the result is absolute when the input
    is, and always in the same directory.

    Raises:
        ValueError: If path is not a definition file

    Example:
        >>> compiled_output_path("/src/home.messages.js").as_posix()
        '/src/home.compiled.messages.jsona'
    """
    source = Path(path)
    if not is_definitions_file(source):
        msg = f"Not a message definitions file: '{source}'"
        raise ValueError(msg)
    stem = source.name[: -len(DEFINITION_SUFFIX)]
    return source.with_name(stem + COMPILED_SUFFIX)
