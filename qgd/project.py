from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import ARCHIVE_SUFFIX
from .errors import ProjectError


_DIRECTIVES = ("path", "include", "exclude")


@dataclass
class Project:
    paths: List[str] = field(default_factory=list)
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)


def _split_directive(line: str) -> Optional[tuple]:
    """Return ``(directive, value)`` when ``line`` starts with a known keyword.

    The keyword must be followed by whitespace and a non-empty remainder;
    ``pathological.txt`` is an explicit file, not a ``path`` directive.
    """
    for name in _DIRECTIVES:
        if line.startswith(name) and len(line) > len(name) and line[len(name)].isspace():
            return name, line[len(name):].strip(" \t")
    return None


def parse_project_lines(lines) -> Project:
    proj = Project()
    for raw in lines:
        line = raw.rstrip("\r\n")
        shp = line.find("#")
        if shp != -1:
            line = line[:shp]
        hit = _split_directive(line)
        if hit is not None:
            name, value = hit
            getattr(proj, "paths" if name == "path" else name).append(value)
            continue
        path = line.strip(" \t")
        if path:
            proj.files.append(path)
    return proj


def parse_project(project_path: str) -> Project:
    """Parse a project file.

    Format, one entry per line, ``#`` starts a comment::

        path src              # directory to scan recursively
        include \\.(c|h)$      # regex, case-insensitive
        exclude /generated/
        docs/README           # any other line is an explicit file
    """
    try:
        with open(project_path, "r", encoding="utf-8", errors="surrogateescape") as fh:
            return parse_project_lines(fh)
    except OSError as exc:
        raise ProjectError(f"Error opening project file {project_path} for reading: {exc}") from exc


def archive_path_for(project_path: str) -> str:
    base, _ext = os.path.splitext(project_path)
    return base + ARCHIVE_SUFFIX
