"""
qgd — chunked file packs for bulk scanning.

Packs a sorted list of input files into a single .qgd container:

- Files are grouped into size-bounded chunks; a file is never split.
- Each chunk is laid out as [header array][names][contents] so any file's
  name and bytes are addressed by two offset/length pairs.
- Each chunk is compressed as one block (zstd by default, deflate or none
  selectable) and appended after a small chunk header.
- Builds write to a temporary path and are renamed into place only when
  the whole stream is on disk.

The on-disk layout is documented in qgd/records.py.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "codec",
    "records",
    "chunk",
    "writer",
    "stats",
    "project",
    "scan",
]

# Programmatic API is available via qgd.writer.ArchiveWriter and
# qgd.cli.cmd_build, which takes normal parameters.
