from __future__ import annotations

import os
import re
from typing import Callable, Iterable, List, Optional, Pattern

from .errors import PatternError


def compile_any(patterns: List[str]) -> Optional[Pattern[str]]:
    """Join ``patterns`` into one case-insensitive alternation, or None if empty."""
    if not patterns:
        return None
    expr = "|".join(f"({p})" for p in patterns)
    try:
        return re.compile(expr, re.IGNORECASE)
    except re.error as exc:
        raise PatternError(f"Error parsing regexp {expr}: {exc}") from exc


class PathFilter:
    """Include/exclude regex filter compiled once per build."""

    def __init__(self, include: Iterable[str] = (), exclude: Iterable[str] = ()):
        self._include = compile_any(list(include))
        self._exclude = compile_any(list(exclude))

    @property
    def has_include(self) -> bool:
        return self._include is not None

    @property
    def has_exclude(self) -> bool:
        return self._exclude is not None

    def accepts(self, path: str) -> bool:
        if self._include is not None and not self._include.search(path):
            return False
        if self._exclude is not None and self._exclude.search(path):
            return False
        return True


def traverse_directory(root: str, callback: Callable[[str], None]) -> None:
    """Invoke ``callback`` for every regular file below ``root``.

    Directories are visited in sorted order and symlinked directories are
    not followed.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not os.path.islink(os.path.join(dirpath, d)))
        for fn in sorted(filenames):
            full = os.path.join(dirpath, fn)
            if os.path.isfile(full):
                callback(full)


def collect_files(paths: Iterable[str], files: Iterable[str], path_filter: PathFilter) -> List[str]:
    """Build the sorted, de-duplicated input list for a build.

    Files found by scanning ``paths`` are filtered; explicit ``files`` are
    kept as given.
    """
    found: List[str] = list(files)

    def _accept(path: str) -> None:
        if path_filter.accepts(path):
            found.append(path)

    for root in paths:
        traverse_directory(root, _accept)
    return sorted(set(found))
