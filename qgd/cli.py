from __future__ import annotations

import os
import sys
import time
import argparse

from dataclasses import dataclass
from typing import List, Optional

from qgd.constants import CODEC_NAMES, DEFAULT_CHUNK_SIZE, DEFAULT_CODEC_ID, TEMP_SUFFIX
from qgd.errors import QgdError
from qgd.project import archive_path_for, parse_project
from qgd.scan import PathFilter, collect_files
from qgd.stats import ProgressReporter, Statistics
from qgd.writer import ArchiveWriter


@dataclass
class BuildResult:
    target: str
    statistics: Statistics
    skipped: List[str]


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        print(f"Warning: failed to remove temporary file {path}: {exc}", file=sys.stderr)


def cmd_build(
    project_file: str,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    codec_id: int = DEFAULT_CODEC_ID,
    level: Optional[int] = None,
    quiet: bool = False,
) -> BuildResult:
    """Build the archive described by a project file.

    The archive is written to ``<project>.qgd_`` and renamed to
    ``<project>.qgd`` only after every chunk is on disk.

    Args:
        project_file: Path to the project description.
        chunk_size: Content bytes after which a chunk is flushed.
        codec_id: Compression codec for every chunk block.
        level: Optional codec level override.
        quiet: Suppress progress and summary output.

    Returns:
        BuildResult with the final path, statistics and unreadable inputs.

    Raises:
        ProjectError: The project file cannot be read.
        PatternError: An include/exclude pattern does not compile.
        ArchiveOpenError: The temporary output cannot be created.
        CodecError: Compression failed.
        OSError: The finished archive cannot be renamed into place.
    """
    project = parse_project(project_file)
    path_filter = PathFilter(project.include, project.exclude)

    target = archive_path_for(project_file)
    temp = target + TEMP_SUFFIX

    t0 = time.time()
    skipped: List[str] = []
    progress = ProgressReporter(quiet=quiet)

    writer = ArchiveWriter(temp, chunk_size=chunk_size, codec_id=codec_id, level=level)
    try:
        with writer:
            if project.paths and not quiet:
                print("Scanning folder for files...", flush=True)
            files = collect_files(project.paths, project.files, path_filter)
            progress.init(len(files))
            for path in files:
                try:
                    writer.add_file(path)
                except OSError as exc:
                    print(f"Warning: error reading file {path}: {exc}", file=sys.stderr)
                    skipped.append(path)
                progress.report(writer.statistics)
        stats = writer.statistics
        progress.report(stats)
        os.replace(temp, target)
    except BaseException:
        _remove_quietly(temp)
        raise

    if not quiet:
        dt = max(0.000001, time.time() - t0)
        mib_in = stats.file_size / (1024.0 * 1024.0)
        mib_out = stats.result_size / (1024.0 * 1024.0)
        print(
            f"\nDone: {stats.file_count} files, {len(skipped)} skipped; "
            f"{mib_in:.2f} MiB in, {mib_out:.2f} MiB out in {dt:.1f}s; "
            f"{writer.chunk_count} chunks -> {target}"
        )
    return BuildResult(target=target, statistics=stats, skipped=skipped)


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="qgd",
        description="Pack project files into a chunked, compressed .qgd archive",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_build = sub.add_parser("build", help="Build archive from a project file")
    ap_build.add_argument("project", help="Project file (path/include/exclude directives and file lines)")
    ap_build.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Flush a chunk once its content exceeds this many bytes (default {DEFAULT_CHUNK_SIZE})",
    )
    ap_build.add_argument(
        "--codec",
        choices=sorted(CODEC_NAMES),
        default="zstd",
        help="Chunk compression codec (default: zstd)",
    )
    ap_build.add_argument("--level", type=int, help="Compression level override")
    ap_build.add_argument("--quiet", help="suppress progress and summary output", action="store_true")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "build":
            if args.chunk_size < 1:
                ap.error("--chunk-size must be at least 1")
            cmd_build(
                args.project,
                chunk_size=args.chunk_size,
                codec_id=CODEC_NAMES[args.codec],
                level=args.level,
                quiet=args.quiet,
            )
    except (QgdError, OSError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
