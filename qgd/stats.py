from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass(frozen=True)
class Statistics:
    file_count: int = 0
    file_size: int = 0
    result_size: int = 0


class StatisticsTracker:
    """Running totals over every chunk block written in one build."""

    def __init__(self) -> None:
        self._file_count = 0
        self._file_size = 0
        self._result_size = 0

    def record_chunk(self, file_count: int, uncompressed_size: int, compressed_size: int) -> None:
        if file_count < 0 or uncompressed_size < 0 or compressed_size < 0:
            raise ValueError("chunk statistics must be non-negative")
        self._file_count += file_count
        self._file_size += uncompressed_size
        self._result_size += compressed_size

    def snapshot(self) -> Statistics:
        return Statistics(
            file_count=self._file_count,
            file_size=self._file_size,
            result_size=self._result_size,
        )


class ProgressReporter:
    """Single-line progress display for a build.

    A line is only printed when the compressed output size has changed since
    the last report, so per-file calls between chunk flushes stay silent.
    """

    def __init__(self, total_files: int = 0, *, stream: Optional[TextIO] = None, quiet: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.quiet = quiet
        self.total_files = total_files
        self._last_result_size = 0

    def init(self, total_files: int) -> None:
        self.total_files = total_files
        self._last_result_size = 0

    def percent(self, stats: Statistics) -> int:
        if self.total_files <= 0:
            return 100
        return stats.file_count * 100 // self.total_files

    def report(self, stats: Statistics) -> bool:
        if stats.result_size == self._last_result_size:
            return False
        self._last_result_size = stats.result_size
        if self.quiet:
            return True
        mb_in = stats.file_size // 1024 // 1024
        mb_out = stats.result_size // 1024 // 1024
        self.stream.write(
            "\r[%3d%%] %d files, %d Mb in, %d Mb out\r" % (self.percent(stats), stats.file_count, mb_in, mb_out)
        )
        self.stream.flush()
        return True
