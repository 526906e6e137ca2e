from __future__ import annotations

import zlib
from typing import Optional

import zstandard

from .constants import (
    CODEC_NONE,
    CODEC_DEFLATE,
    CODEC_ZSTD,
    DEFAULT_DEFLATE_LEVEL,
    DEFAULT_ZSTD_LEVEL,
)
from .errors import CodecError


_ZSTD_BLOCK_SIZE_MAX = 128 * 1024


def zstd_compress_bound(n: int) -> int:
    # ZSTD_COMPRESSBOUND from zstd.h
    margin = (_ZSTD_BLOCK_SIZE_MAX - n) >> 11 if n < _ZSTD_BLOCK_SIZE_MAX else 0
    return n + (n >> 8) + margin


def deflate_compress_bound(n: int) -> int:
    # compressBound() from zlib's compress.c
    return n + (n >> 12) + (n >> 14) + (n >> 25) + 13


class Codec:
    """Chunk compression capability.

    Every chunk block of one archive is compressed with the same codec; the
    codec id is recorded in the archive file header.
    """

    def __init__(self, codec_id: int, level: Optional[int] = None):
        if codec_id not in (CODEC_NONE, CODEC_DEFLATE, CODEC_ZSTD):
            raise CodecError(f"unsupported codec id: {codec_id}")
        self.codec_id = codec_id
        self.level = level

    def compress_bound(self, n: int) -> int:
        if self.codec_id == CODEC_DEFLATE:
            return deflate_compress_bound(n)
        if self.codec_id == CODEC_ZSTD:
            return zstd_compress_bound(n)
        return n

    def compress(self, data: bytes) -> bytes:
        out = self._compress(data)
        bound = self.compress_bound(len(data))
        if len(out) > bound:
            raise CodecError(
                f"compressed size {len(out)} exceeds bound {bound} for {len(data)} input bytes"
            )
        return out

    def decompress(self, data: bytes, uncompressed_size: int) -> bytes:
        if self.codec_id == CODEC_NONE:
            out = bytes(data)
        elif self.codec_id == CODEC_DEFLATE:
            try:
                out = zlib.decompress(data)
            except zlib.error as e:
                raise CodecError(f"deflate decompression failed: {e}")
        else:
            try:
                out = zstandard.ZstdDecompressor().decompressobj().decompress(data)
            except zstandard.ZstdError as e:
                raise CodecError(f"zstd decompression failed: {e}")
        if len(out) != uncompressed_size:
            raise CodecError(f"decompressed {len(out)} bytes, expected {uncompressed_size}")
        return out

    def _compress(self, data: bytes) -> bytes:
        if self.codec_id == CODEC_NONE:
            return bytes(data)
        if self.codec_id == CODEC_DEFLATE:
            try:
                return zlib.compress(data, self.level if self.level is not None else DEFAULT_DEFLATE_LEVEL)
            except zlib.error as e:
                raise CodecError(f"deflate compression failed: {e}")
        try:
            c = zstandard.ZstdCompressor(level=self.level if self.level is not None else DEFAULT_ZSTD_LEVEL)
            return c.compress(data)
        except zstandard.ZstdError as e:
            raise CodecError(f"zstd compression failed: {e}")
