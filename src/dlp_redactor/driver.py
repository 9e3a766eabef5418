"""File-processing driver — reads, scans, transforms and writes files.

Each file is handled start to finish before the next one: read into
memory, PII / SPII counts logged, transformed, written as
``<stem>_redacted<suffix>``.  A failure is recorded on that file's
FileResult and the batch moves on.

Usage:
    from dlp_redactor import DlpConfig, process_path

    results = process_path("notes/", DlpConfig(mode="redact"))
    failed = [r for r in results if not r.ok]
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable

from .config import DlpConfig
from .patterns import scan
from .transformer import transform
from .types import DlpError, FileResult, IllegalPathError, InputError, OutputError

logger = logging.getLogger(__name__)

ILLEGAL_DIRECTORIES = (
    "/etc",
    "/var",
    "C:/Program Files",
    "C:/Program Files (x86)",
    "C:/Windows",
    "C:/Windows/System32",
)

# Above this many files a directory run asks once before prompting per file
BULK_PROMPT_THRESHOLD = 20

OUTPUT_SUFFIX = "_redacted"

Approver = Callable[[Path], bool]
BulkConfirmer = Callable[[int], bool]


def is_illegal_directory(path: str | Path) -> bool:
    """True if path is a directory at or below a protected system location."""
    path = Path(path)
    if not path.is_dir():
        return False
    absolute = str(path.resolve()).replace("\\", "/")
    for root in ILLEGAL_DIRECTORIES:
        if absolute == root or absolute.startswith(root + "/"):
            return True
    return False


def list_files(directory: str | Path) -> list[Path]:
    """Regular files directly inside directory, sorted by name."""
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise InputError(f"Could not access directory contents of {directory}: {e}") from e
    return [p for p in entries if p.is_file()]


def output_path_for(source: str | Path, output_dir: str | Path | None = None) -> Path:
    """Where the transformed copy of source is written."""
    source = Path(source)
    name = f"{source.stem}{OUTPUT_SUFFIX}{source.suffix}"
    if output_dir is not None:
        output_dir = Path(output_dir)
        if output_dir.is_dir():
            return output_dir / name
        logger.warning("Output directory %s is not a directory, writing beside %s", output_dir, source)
    return source.with_name(name)


def process_file(path: str | Path, config: DlpConfig) -> FileResult:
    """Read, scan, transform and write one file.  Never raises DlpError."""
    result = FileResult(source=Path(path))
    try:
        try:
            document = result.source.read_bytes()
        except OSError as e:
            raise InputError(f"Could not read input file {result.source}: {e}") from e

        result.report = scan(document, config.patterns)
        logger.info(
            "Processing %s... Found %d PII matches and %d SPII matches",
            result.source, result.report.pii, result.report.spii,
        )

        output = transform(document, config.mode, config.token, config.patterns)

        target = output_path_for(result.source, config.output_dir)
        try:
            target.write_bytes(output)
        except OSError as e:
            raise OutputError(f"Could not write output file {target}: {e}") from e
        result.output = target
    except DlpError as e:
        result.error = str(e)
        logger.error("Error: %s", e)
        return result

    logger.info("Processed %s, output saved to %s", result.source, result.output)
    return result


def process_path(
    path: str | Path,
    config: DlpConfig,
    approve: Approver | None = None,
    confirm_all: BulkConfirmer | None = None,
) -> list[FileResult]:
    """Process a single file or every file in a directory.

    approve(path) is asked per file; for a directory holding more than
    BULK_PROMPT_THRESHOLD files, confirm_all(count) is asked first and a
    yes skips the per-file prompts.  A missing callback approves.

    Raises InputError if path is missing or its directory is unreadable,
    IllegalPathError for a protected system directory.
    """
    path = Path(path)
    if not path.exists():
        raise InputError(f"Could not access file or directory {path}")
    if is_illegal_directory(path):
        raise IllegalPathError(f"Illegal directory selected: {path}")

    if not path.is_dir():
        if approve is not None and not approve(path):
            logger.debug("Skipped %s", path)
            return []
        return [process_file(path, config)]

    files = list_files(path)
    logger.debug("Found %d files in %s", len(files), path)
    if len(files) > BULK_PROMPT_THRESHOLD and confirm_all is not None and confirm_all(len(files)):
        approve = None

    results: list[FileResult] = []
    for file in files:
        if approve is not None and not approve(file):
            logger.debug("Skipped %s", file)
            continue
        results.append(process_file(file, config))
    return results
