from __future__ import annotations

import os
from typing import BinaryIO, Optional

from .chunk import Chunk, IngestedFile, serialize_chunk
from .codec import Codec
from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_CODEC_ID
from .errors import ArchiveOpenError, ArchiveStateError
from .fileutil import read_file
from .records import ArchiveFileHeader, ChunkHeader
from .stats import Statistics, StatisticsTracker


class ArchiveWriter:
    """Sequential writer for chunked .qgd archives.

    Files are buffered into a chunk until its content exceeds ``chunk_size``;
    the check happens when the next file arrives, so a chunk overshoots the
    threshold by at most one file and files are never split. Each flushed
    chunk becomes one ``[ChunkHeader][compressed bytes]`` block appended to
    the stream right after the archive file header.
    """

    def __init__(
        self,
        out_path: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        codec_id: int = DEFAULT_CODEC_ID,
        level: Optional[int] = None,
    ):
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1 byte")
        self.out_path = out_path
        self.chunk_size = chunk_size
        self.codec = Codec(codec_id, level)
        self.f: Optional[BinaryIO] = None
        self.chunk_count = 0
        self._chunk = Chunk()
        self._stats = StatisticsTracker()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __del__(self):
        if getattr(self, "f", None) is not None:
            self.close()

    @property
    def statistics(self) -> Statistics:
        return self._stats.snapshot()

    @property
    def pending_files(self) -> int:
        return len(self._chunk)

    def start(self):
        if self.f is not None:
            return
        try:
            self.f = open(self.out_path, "wb")
        except OSError as exc:
            raise ArchiveOpenError(f"cannot open {self.out_path} for writing: {exc}") from exc
        self.f.write(ArchiveFileHeader(codec_id=self.codec.codec_id).pack())

    def append(self, name: str, contents: bytes, file_size: int, time_stamp: int):
        """Queue one file; flushes the previous chunk first if it is over the threshold."""
        self.append_file(IngestedFile(name=name, contents=bytes(contents), file_size=file_size, time_stamp=time_stamp))

    def append_file(self, f: IngestedFile):
        if self.f is None:
            raise ArchiveStateError("Archive not open")
        if self._chunk.exceeds(self.chunk_size):
            self.flush()
        self._chunk.append(f)

    def add_file(self, path: str):
        """Read ``path`` from disk and queue it under its path as archive key.

        OSError from opening or reading propagates and nothing is queued.
        """
        if self.f is None:
            raise ArchiveStateError("Archive not open")
        self.append_file(read_file(path))

    def flush(self):
        if self.f is None:
            raise ArchiveStateError("Archive not open")
        if self._chunk.is_empty:
            return
        data = serialize_chunk(self._chunk)
        self._write_chunk(self._chunk, data, self.codec.compress(data))
        self._chunk = Chunk()

    def close(self):
        """Write any pending chunk and close the stream once it is on disk."""
        if self.f is None:
            return
        try:
            self.flush()
            self.f.flush()
            os.fsync(self.f.fileno())
        finally:
            self.f.close()
            self.f = None

    # internals
    def _write_chunk(self, chunk: Chunk, data: bytes, cdata: bytes):
        hdr = ChunkHeader(file_count=len(chunk), uncompressed_size=len(data), compressed_size=len(cdata))
        self.f.write(hdr.pack())
        self.f.write(cdata)
        self.chunk_count += 1
        self._stats.record_chunk(len(chunk), len(data), len(cdata))
