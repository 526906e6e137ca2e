from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import ARCHIVE_MAGIC, VERSION_MAJOR, VERSION_MINOR
from .errors import FormatError


# All records are little endian with no padding.
#
# Archive file header (16 bytes): <8s H H H H
#  - magic[8]
#  - version_major u16
#  - version_minor u16
#  - codec_id u16
#  - reserved u16
_FILE_HDR_STRUCT = struct.Struct("<8sHHHH")

# Chunk header (20 bytes): <I Q Q
#  - file_count u32
#  - uncompressed_size u64
#  - compressed_size u64
_CHUNK_HDR_STRUCT = struct.Struct("<IQQ")

# Chunk file header (40 bytes): <I I Q Q Q Q
#  - name_offset u32
#  - name_length u32
#  - data_offset u64
#  - data_size u64
#  - file_size u64
#  - time_stamp u64
_CHUNK_FILE_HDR_STRUCT = struct.Struct("<IIQQQQ")

FILE_HEADER_SIZE = _FILE_HDR_STRUCT.size
CHUNK_HEADER_SIZE = _CHUNK_HDR_STRUCT.size
CHUNK_FILE_HEADER_SIZE = _CHUNK_FILE_HDR_STRUCT.size


def _require(raw: bytes, size: int, what: str) -> None:
    if len(raw) < size:
        raise FormatError(f"{what} too short: {len(raw)} < {size} bytes")


@dataclass(frozen=True)
class ArchiveFileHeader:
    codec_id: int
    version_major: int = VERSION_MAJOR
    version_minor: int = VERSION_MINOR

    def pack(self) -> bytes:
        return _FILE_HDR_STRUCT.pack(ARCHIVE_MAGIC, self.version_major, self.version_minor, self.codec_id, 0)

    @classmethod
    def unpack(cls, raw: bytes) -> "ArchiveFileHeader":
        _require(raw, FILE_HEADER_SIZE, "archive header")
        magic, vmaj, vmin, codec_id, _reserved = _FILE_HDR_STRUCT.unpack_from(raw)
        if magic != ARCHIVE_MAGIC:
            raise FormatError("Bad archive magic")
        if vmaj != VERSION_MAJOR:
            raise FormatError(f"Unsupported archive version {vmaj}.{vmin}")
        return cls(codec_id=codec_id, version_major=vmaj, version_minor=vmin)


@dataclass(frozen=True)
class ChunkHeader:
    file_count: int
    uncompressed_size: int
    compressed_size: int

    def pack(self) -> bytes:
        return _CHUNK_HDR_STRUCT.pack(self.file_count, self.uncompressed_size, self.compressed_size)

    @classmethod
    def unpack(cls, raw: bytes) -> "ChunkHeader":
        _require(raw, CHUNK_HEADER_SIZE, "chunk header")
        file_count, usize, csize = _CHUNK_HDR_STRUCT.unpack_from(raw)
        return cls(file_count=file_count, uncompressed_size=usize, compressed_size=csize)


@dataclass(frozen=True)
class ChunkFileHeader:
    name_offset: int
    name_length: int
    data_offset: int
    data_size: int
    file_size: int
    time_stamp: int

    def pack(self) -> bytes:
        return _CHUNK_FILE_HDR_STRUCT.pack(
            self.name_offset,
            self.name_length,
            self.data_offset,
            self.data_size,
            self.file_size,
            self.time_stamp,
        )

    def pack_into(self, buf: bytearray, offset: int) -> None:
        _CHUNK_FILE_HDR_STRUCT.pack_into(
            buf,
            offset,
            self.name_offset,
            self.name_length,
            self.data_offset,
            self.data_size,
            self.file_size,
            self.time_stamp,
        )

    @classmethod
    def unpack(cls, raw: bytes, offset: int = 0) -> "ChunkFileHeader":
        _require(raw[offset:offset + CHUNK_FILE_HEADER_SIZE], CHUNK_FILE_HEADER_SIZE, "chunk file header")
        return cls(*_CHUNK_FILE_HDR_STRUCT.unpack_from(raw, offset))


def unpack_chunk_file_headers(data: bytes, file_count: int):
    """Decode the header array at the start of an uncompressed chunk buffer."""
    return [ChunkFileHeader.unpack(data, i * CHUNK_FILE_HEADER_SIZE) for i in range(file_count)]
