# Magic and version
ARCHIVE_MAGIC = b"QGDPACK\x00"  # 8 bytes: "QGDPACK\0"

VERSION_MAJOR = 1
VERSION_MINOR = 0


# Codec IDs (0=none, 1=deflate/zlib, 2=zstd)
CODEC_NONE = 0
CODEC_DEFLATE = 1
CODEC_ZSTD = 2

CODEC_NAMES = {
    "none": CODEC_NONE,
    "deflate": CODEC_DEFLATE,
    "zstd": CODEC_ZSTD,
}

DEFAULT_DEFLATE_LEVEL = 9
DEFAULT_ZSTD_LEVEL = 19


# A chunk is flushed once its content exceeds this many bytes
DEFAULT_CHUNK_SIZE = 524_288  # 512 KiB
DEFAULT_CODEC_ID = CODEC_ZSTD

ARCHIVE_SUFFIX = ".qgd"
TEMP_SUFFIX = "_"

U32_MAX = 0xFFFFFFFF
