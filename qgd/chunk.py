from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from .constants import U32_MAX
from .errors import ChunkLayoutError
from .records import CHUNK_FILE_HEADER_SIZE, ChunkFileHeader


def encode_name(name: str) -> bytes:
    """Archive key bytes for a path; undecodable POSIX names round-trip."""
    return os.fsencode(name)


@dataclass
class IngestedFile:
    name: str
    contents: bytes
    file_size: int
    time_stamp: int

    @property
    def name_bytes(self) -> bytes:
        return encode_name(self.name)


@dataclass
class Chunk:
    """Files waiting to be written as one compressed block.

    ``total_size`` counts content bytes only; names and headers are not
    included in the flush threshold.
    """

    files: List[IngestedFile] = field(default_factory=list)
    total_size: int = 0

    def __len__(self) -> int:
        return len(self.files)

    @property
    def is_empty(self) -> bool:
        return not self.files

    def exceeds(self, threshold: int) -> bool:
        return self.total_size > threshold

    def append(self, f: IngestedFile) -> None:
        self.files.append(f)
        self.total_size += len(f.contents)

    def reset(self) -> None:
        self.files = []
        self.total_size = 0


def chunk_file_headers(chunk: Chunk) -> List[ChunkFileHeader]:
    """Compute the per-file header records for ``chunk``.

    Offsets are absolute within the uncompressed chunk buffer:
    header array first, then all names, then all contents, each region in
    insertion order.
    """
    names = [f.name_bytes for f in chunk.files]
    header_size = CHUNK_FILE_HEADER_SIZE * len(chunk.files)
    name_offset = header_size
    data_offset = header_size + sum(len(n) for n in names)
    if data_offset > U32_MAX:
        raise ChunkLayoutError(f"chunk name region ends at {data_offset}, beyond the u32 offset range")
    headers: List[ChunkFileHeader] = []
    for f, name in zip(chunk.files, names):
        headers.append(
            ChunkFileHeader(
                name_offset=name_offset,
                name_length=len(name),
                data_offset=data_offset,
                data_size=len(f.contents),
                file_size=f.file_size,
                time_stamp=f.time_stamp,
            )
        )
        name_offset += len(name)
        data_offset += len(f.contents)
    return headers


def serialize_chunk(chunk: Chunk) -> bytes:
    """Lay out ``chunk`` as ``[header array][name bytes][data bytes]``."""
    if chunk.is_empty:
        raise ValueError("cannot serialize an empty chunk")
    headers = chunk_file_headers(chunk)
    last = headers[-1]
    total = last.data_offset + last.data_size
    buf = bytearray(total)
    for i, (f, h) in enumerate(zip(chunk.files, headers)):
        h.pack_into(buf, i * CHUNK_FILE_HEADER_SIZE)
        buf[h.name_offset:h.name_offset + h.name_length] = f.name_bytes
        buf[h.data_offset:h.data_offset + h.data_size] = f.contents
    return bytes(buf)
