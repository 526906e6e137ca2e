from __future__ import annotations

import os

from .chunk import IngestedFile


_READ_BLOCK = 65536


def read_file(path: str) -> IngestedFile:
    """Load one input file for ingestion.

    Raises OSError when the file cannot be opened, read or stat'ed; the
    caller decides whether that is fatal.
    """
    with open(path, "rb") as rf:
        st = os.fstat(rf.fileno())
        parts = []
        while True:
            block = rf.read(_READ_BLOCK)
            if not block:
                break
            parts.append(block)
    return IngestedFile(
        name=path,
        contents=b"".join(parts),
        file_size=st.st_size,
        time_stamp=int(st.st_mtime),
    )
