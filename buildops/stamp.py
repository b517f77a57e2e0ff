"""
Build stamps: epoch-second integers embedded in source files.

Both time sources go through the same UTC epoch arithmetic, so a stamp taken
from the clock and one taken from a file's modification time are comparable
regardless of the host's local time zone.
"""
import math
import os
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from .config import logger
from .mutation import (
    ErrorKind, Mutation, MutationResult, PatternError,
    compile_pattern, fail_all, mutate_files,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class StampSource(str, Enum):
    CURRENT_TIME = "current-time"
    FILE_MTIME = "file-mtime"


def _utcnow():
    return datetime.now(timezone.utc)


def epoch_seconds(dt: datetime) -> int:
    """Whole seconds since 1970-01-01T00:00:00 UTC, floored. Naive datetimes are UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor((dt - EPOCH).total_seconds())


def current_epoch() -> int:
    return epoch_seconds(_utcnow())


def file_mtime_epoch(path) -> int:
    """The modification time of path as epoch seconds. Raises OSError if missing."""
    mtime = os.stat(path).st_mtime
    return epoch_seconds(datetime.fromtimestamp(mtime, tz=timezone.utc))


def resolve_stamp(source, reference_file=None) -> int:
    """
    Computes the stamp value for a source.

    Raises:
        FileNotFoundError: For FILE_MTIME when the reference file is missing.
        ValueError: For FILE_MTIME without a reference file.
    """
    source = StampSource(source)
    if source is StampSource.CURRENT_TIME:
        return current_epoch()
    if reference_file is None:
        raise ValueError("A reference file is required for the file-mtime source")
    return file_mtime_epoch(reference_file)


def _parse_stamp(text):
    return int(text) if text is not None and text.isascii() and text.isdigit() else text


def update_build_stamp(content: str, pattern, new_stamp: int) -> Tuple[str, Optional[object], Optional[int], bool]:
    """
    Replaces the capture group 1 span of the first match with new_stamp.

    Returns:
        tuple: (new_content, old_stamp, new_stamp, changed). old_stamp is an int
        when the captured text is numeric. When nothing matches:
        (content, None, None, False).

    Raises:
        PatternError: If the pattern does not compile or has no capture group.
        The batch functions report this as an InvalidPattern result instead.
    """
    match = compile_pattern(pattern).search(content)
    if not match or match.group(1) is None:
        return content, None, None, False
    new_content = content[:match.start(1)] + str(new_stamp) + content[match.end(1):]
    return new_content, _parse_stamp(match.group(1)), new_stamp, True


def stamp_files(files, pattern, source=StampSource.CURRENT_TIME, reference_file=None,
                backup=False, dry_run=False) -> List[MutationResult]:
    """
    Writes a build stamp into every file; one MutationResult per file.

    CURRENT_TIME is read once for the whole batch. FILE_MTIME uses
    reference_file for every target when given, otherwise each target's own
    modification time from before it is rewritten.
    """
    files = list(files)
    try:
        compiled = compile_pattern(pattern)
    except PatternError as e:
        return fail_all(files, ErrorKind.INVALID_PATTERN, str(e))

    source = StampSource(source)
    batch_stamp = None
    if source is StampSource.CURRENT_TIME or reference_file is not None:
        try:
            batch_stamp = resolve_stamp(source, reference_file)
        except FileNotFoundError:
            return fail_all(files, ErrorKind.NOT_FOUND, f"Reference file not found: {reference_file}")

    logger.debug(f"Stamping {len(files)} file(s) from {source.value}")

    def transform(content, path):
        stamp = batch_stamp if batch_stamp is not None else file_mtime_epoch(path)
        new_content, old_stamp, new_stamp, changed = update_build_stamp(content, compiled, stamp)
        if not changed:
            return None
        return Mutation(
            content=new_content,
            old_value=old_stamp,
            new_value=new_stamp,
            changed=new_content != content,
        )

    return mutate_files(files, transform, backup=backup, dry_run=dry_run)
