"""
Version string mutation for arbitrary text files.

The version is located by a caller-supplied regular expression. Capture group
1 is the token that gets read or replaced; the rest of the file is treated as
opaque text.

Bumping follows a fixed single-digit build convention: the fourth component
counts 0-9 and rolls over into patch. Major and minor are never bumped, and
patch grows without bound.
"""
import re
from typing import List, Optional, Tuple

from .config import logger
from .mutation import (
    ErrorKind, Mutation, MutationResult, PatternError,
    compile_pattern, fail_all, mutate_files,
)

BASELINE_VERSION = (1, 0, 0, 0)
VERSION_COMPONENTS = 4
BUILD_ROLLOVER = 9

_VERSION_RE = re.compile(r"[0-9]+(?:\.[0-9]+){0,3}")

Version = Tuple[int, int, int, int]


def is_valid_version(text) -> bool:
    """True for one to four dot-separated non-negative integers."""
    return isinstance(text, str) and _VERSION_RE.fullmatch(text) is not None


def normalize_version(text) -> Version:
    """
    Converts a version string to (major, minor, patch, build).

    Missing components are padded with zeros. Anything that is not one to four
    dotted integers is replaced by the 1.0.0.0 baseline.
    """
    if not is_valid_version(text):
        return BASELINE_VERSION
    parts = [int(p) for p in text.split(".")]
    parts.extend([0] * (VERSION_COMPONENTS - len(parts)))
    return tuple(parts)


def increment_version(version: Version) -> Version:
    """Adds one to build, carrying into patch when build passes 9."""
    major, minor, patch, build = version
    build += 1
    if build > BUILD_ROLLOVER:
        build = 0
        patch += 1
    return (major, minor, patch, build)


def format_version(version: Version) -> str:
    return ".".join(str(part) for part in version)


def get_version(content: str, pattern) -> Optional[str]:
    """
    Returns capture group 1 of the first match, or None.

    Raises:
        PatternError: If the pattern does not compile or has no capture group.
    """
    match = compile_pattern(pattern).search(content)
    return match.group(1) if match else None


def set_version(content: str, pattern, new_version: str) -> Tuple[str, bool]:
    """
    Replaces the first match with capture group 1 followed by new_version.

    Group 1 is expected to capture the text in front of the version, with the
    version itself inside the match but outside the group, e.g.
    ``(<Version>)[^<]*``. new_version is inserted as-is.

    Returns:
        tuple: (new_content, changed). Content is unchanged when nothing matches.

    Raises:
        PatternError: If the pattern does not compile or has no capture group.
    """
    match = compile_pattern(pattern).search(content)
    if not match:
        return content, False
    replacement = (match.group(1) or "") + new_version
    return content[:match.start()] + replacement + content[match.end():], True


def bump_version(content: str, pattern) -> Tuple[str, Optional[str], Optional[str], bool]:
    """
    Increments the version captured by group 1 of the first match.

    Only the group 1 span is rewritten, so the rest of the matched text stays
    in place. If the group captures just part of a version, the new version is
    spliced into that part and the leftover digits remain after it.

    Returns:
        tuple: (new_content, old_version, new_version, changed). When nothing
        matches: (content, None, None, False).

    Raises:
        PatternError: If the pattern does not compile or has no capture group.
    """
    match = compile_pattern(pattern).search(content)
    if not match or match.group(1) is None:
        return content, None, None, False

    old_version = match.group(1)
    if not is_valid_version(old_version):
        logger.warning(
            f"Malformed version {old_version!r}, bumping from {format_version(BASELINE_VERSION)}"
        )
    new_version = format_version(increment_version(normalize_version(old_version)))
    new_content = content[:match.start(1)] + new_version + content[match.end(1):]
    return new_content, old_version, new_version, True


def read_versions(files, pattern) -> List[MutationResult]:
    """Reports the current version of each file without modifying anything."""
    try:
        compiled = compile_pattern(pattern)
    except PatternError as e:
        return fail_all(files, ErrorKind.INVALID_PATTERN, str(e))

    def transform(content, path):
        match = compiled.search(content)
        if not match:
            return None
        return Mutation(content=content, old_value=match.group(1), new_value=match.group(1))

    return mutate_files(files, transform, dry_run=True)


def set_version_in_files(files, pattern, new_version, backup=False, dry_run=False) -> List[MutationResult]:
    """Sets new_version in every file; one MutationResult per file."""
    try:
        compiled = compile_pattern(pattern)
    except PatternError as e:
        return fail_all(files, ErrorKind.INVALID_PATTERN, str(e))

    def transform(content, path):
        match = compiled.search(content)
        if not match:
            return None
        new_content, changed = set_version(content, compiled, new_version)
        value_start = match.end(1) if match.group(1) is not None else match.start()
        return Mutation(
            content=new_content,
            old_value=content[value_start:match.end()],
            new_value=new_version,
            changed=changed and new_content != content,
        )

    return mutate_files(files, transform, backup=backup, dry_run=dry_run)


def bump_version_in_files(files, pattern, backup=False, dry_run=False) -> List[MutationResult]:
    """Bumps the build number in every file; one MutationResult per file."""
    try:
        compiled = compile_pattern(pattern)
    except PatternError as e:
        return fail_all(files, ErrorKind.INVALID_PATTERN, str(e))

    def transform(content, path):
        new_content, old_version, new_version, changed = bump_version(content, compiled)
        if not changed:
            return None
        warnings = []
        if not is_valid_version(old_version):
            warnings.append(f"{ErrorKind.MALFORMED_VERSION.value}: {old_version!r} replaced by baseline")
        return Mutation(
            content=new_content,
            old_value=old_version,
            new_value=new_version,
            changed=True,
            warnings=warnings,
        )

    return mutate_files(files, transform, backup=backup, dry_run=dry_run)
