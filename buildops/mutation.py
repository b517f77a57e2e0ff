"""
Per-file batch runner shared by the version and build-stamp engines.

Every file in a batch is attempted and reported on its own: a missing file,
an unmatched pattern or a failed write becomes a failed MutationResult for
that file and the batch moves on.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .config import logger
from .utils import backup_file, read_text_file, write_text_file


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    PATTERN_NOT_MATCHED = "PatternNotMatched"
    MALFORMED_VERSION = "MalformedVersion"
    WRITE_FAILURE = "WriteFailure"
    READ_FAILURE = "ReadFailure"
    INVALID_PATTERN = "InvalidPattern"


class PatternError(ValueError):
    """Raised when a caller-supplied pattern cannot be used."""


@dataclass
class Mutation:
    """What a transform did to one file's content."""

    content: str
    old_value: Optional[object] = None
    new_value: Optional[object] = None
    changed: bool = False
    warnings: List[str] = field(default_factory=list)


@dataclass
class MutationResult:
    file: str
    success: bool
    old_value: Optional[object] = None
    new_value: Optional[object] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    changed: bool = False
    warnings: List[str] = field(default_factory=list)
    backup: Optional[str] = None

    @classmethod
    def failure(cls, file, kind, error):
        return cls(file=str(file), success=False, kind=kind, error=error)

    def to_dict(self) -> Dict:
        data = {
            "file": self.file,
            "success": self.success,
            "changed": self.changed,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }
        if self.kind is not None:
            data["error_type"] = self.kind.value
            data["error"] = self.error
        if self.warnings:
            data["warnings"] = list(self.warnings)
        if self.backup:
            data["backup"] = self.backup
        return data


def compile_pattern(pattern):
    """
    Compiles a caller-supplied pattern and checks it has a capture group.

    Raises:
        PatternError: If the pattern is invalid or has no capture group.
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e
    if compiled.groups < 1:
        raise PatternError(f"Pattern {compiled.pattern!r} must contain a capture group")
    return compiled


def mutate_file(path, transform, backup=False, dry_run=False) -> MutationResult:
    """
    Runs one read-modify-write cycle.

    Args:
        path: The target file.
        transform: Called with the file content and path; returns a Mutation, or None
            when the pattern did not match.
        backup (bool): Write a '.backup' sibling before overwriting.
        dry_run (bool): Compute the result without writing anything.
    """
    path = Path(path)
    if not path.is_file():
        return MutationResult.failure(path, ErrorKind.NOT_FOUND, f"File not found: {path}")

    try:
        content = read_text_file(path)
    except (OSError, UnicodeDecodeError) as e:
        return MutationResult.failure(path, ErrorKind.READ_FAILURE, f"Could not read {path}: {e}")

    mutation = transform(content, path)
    if mutation is None:
        return MutationResult.failure(path, ErrorKind.PATTERN_NOT_MATCHED, f"Pattern not found in {path}")

    result = MutationResult(
        file=str(path),
        success=True,
        old_value=mutation.old_value,
        new_value=mutation.new_value,
        changed=mutation.changed,
        warnings=list(mutation.warnings),
    )

    if dry_run or mutation.content == content:
        return result

    try:
        if backup:
            result.backup = str(backup_file(path))
        write_text_file(path, mutation.content)
    except OSError as e:
        return MutationResult(
            file=str(path),
            success=False,
            old_value=mutation.old_value,
            new_value=mutation.new_value,
            kind=ErrorKind.WRITE_FAILURE,
            error=f"Could not write {path}: {e}",
            warnings=list(mutation.warnings),
            backup=result.backup,
        )

    logger.info(f"Updated {path}: {mutation.old_value} -> {mutation.new_value}")
    return result


def mutate_files(files: Iterable, transform: Callable[[str, Path], Optional[Mutation]],
                 backup=False, dry_run=False) -> List[MutationResult]:
    """Applies transform to each file in order and returns one result per file."""
    results = []
    for path in files:
        result = mutate_file(path, transform, backup=backup, dry_run=dry_run)
        if not result.success:
            logger.error(result.error)
        results.append(result)
    return results


def fail_all(files: Iterable, kind: ErrorKind, error: str) -> List[MutationResult]:
    """Reports the same failure for every file of a batch that cannot start."""
    logger.error(error)
    return [MutationResult.failure(path, kind, error) for path in files]


def summarize(results: List[MutationResult]) -> Dict[str, int]:
    return {
        "total": len(results),
        "succeeded": sum(1 for r in results if r.success),
        "failed": sum(1 for r in results if not r.success),
        "changed": sum(1 for r in results if r.changed),
    }
