"""Canonical folder paths.

Folders are addressed by canonical paths that act as stable external
references, so non-canonical input is rejected rather than repaired.
"""

import re
from typing import Optional

from folder_contents.services.exceptions import InvalidPath

PATH_SEPARATOR = "/"
ROOT_PATH = PATH_SEPARATOR

_REPEATED_SEPARATORS = re.compile(f"{re.escape(PATH_SEPARATOR)}{{2,}}")


def normalize_path(raw: str) -> str:
    """Return the canonical form of a folder path.

    Surrounding whitespace is trimmed, repeated separators collapse to one and
    a trailing separator is dropped unless the path is the root itself.
    Case is preserved.
    """
    path = _REPEATED_SEPARATORS.sub(PATH_SEPARATOR, raw.strip())
    if len(path) > 1 and path.endswith(PATH_SEPARATOR):
        path = path[:-1]
    return path


def validate_path(raw: Optional[str]) -> str:
    """Check that ``raw`` is already a canonical absolute path and return it.

    Raises:
        InvalidPath: if the path is missing, relative or not canonical
    """
    path = raw.strip() if raw is not None else ""
    if not path:
        raise InvalidPath("You need to specify path as a request parameter!")
    if not path.startswith(PATH_SEPARATOR):
        raise InvalidPath(f"Paths must start with '{PATH_SEPARATOR}': '{path}'")
    if normalize_path(path) != path:
        raise InvalidPath(f"Do not pass trailing or repeated '{PATH_SEPARATOR}' for paths: '{path}'")
    return path


def path_prefixes(path: str) -> list[str]:
    """Canonical paths of every folder from the root down to ``path``.

    >>> path_prefixes("/a/b")
    ['/', '/a', '/a/b']
    """
    prefixes = [ROOT_PATH]
    current = ""
    for segment in path.split(PATH_SEPARATOR):
        if not segment:
            continue
        current = f"{current}{PATH_SEPARATOR}{segment}"
        prefixes.append(current)
    return prefixes


def join_path(parent: str, name: str) -> str:
    """Canonical path of a child named ``name`` under ``parent``."""
    if parent == ROOT_PATH:
        return f"{ROOT_PATH}{name}"
    return f"{parent}{PATH_SEPARATOR}{name}"
