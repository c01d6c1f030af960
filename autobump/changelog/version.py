"""Semantic version lookup and bump calculation."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from semver import Version

from .errors import InvalidVersionFormatError, NoChangesInUnreleasedError, NoVersionFoundError


# When a changelog only has an [Unreleased] section we release straight to 1.0.0
INITIAL_RELEASE_VERSION = "1.0.0"

UNRELEASED = "Unreleased"

# Optional "v" in front of a heading or entry version
VERSION_PREFIX = "v"

# Matches "## [1.2.0] - 2024-01-01", "## [1.2.0]" and "## [Unreleased]"
VERSION_HEADING_RE = re.compile(r'^\s*##\s*\[([^\]]+)\]')


@dataclass
class MagnitudeTally:
    """Counts of entries that call for a major, minor or patch release."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def is_empty(self) -> bool:
        return self.major == 0 and self.minor == 0 and self.patch == 0


def parse_version(value: str) -> Version:
    """Parse a semantic version string.

    A leading ``v`` is ignored and missing minor or patch numbers count as
    zero, so ``v1.2`` parses as ``1.2.0``.

    Args:
        value: Version text such as ``1.2.3``, ``v1.2`` or ``0.9.0-SNAPSHOT``

    Returns:
        Parsed version

    Raises:
        InvalidVersionFormatError: If the text is not a valid version
    """
    text = value[len(VERSION_PREFIX):] if value.startswith(VERSION_PREFIX) else value
    try:
        return Version.parse(text, optional_minor_and_patch=True)
    except ValueError:
        raise InvalidVersionFormatError(value)


def version_heading_token(line: str) -> Optional[str]:
    """Return the bracketed token of a ``## [...]`` heading, or None."""
    match = VERSION_HEADING_RE.match(line)
    if not match:
        return None
    return match.group(1)


def is_version_heading(line: str) -> bool:
    """Check if a line is a released version heading (not Unreleased)."""
    token = version_heading_token(line)
    return token is not None and token != UNRELEASED


def find_latest_version(lines: List[str]) -> Tuple[Version, str]:
    """Find the highest released version in the changelog.

    Every ``## [...]`` heading except ``[Unreleased]`` must hold a valid
    version; a malformed one aborts the search.

    Args:
        lines: Changelog lines

    Returns:
        Tuple of (latest version, heading token as written in the document)

    Raises:
        InvalidVersionFormatError: If a version heading cannot be parsed
        NoVersionFoundError: If no version heading exists
    """
    logger = logging.getLogger(__name__)

    latest: Optional[Version] = None
    latest_token = ""

    for line in lines:
        token = version_heading_token(line)
        if token is None or token == UNRELEASED:
            continue

        try:
            version = parse_version(token)
        except InvalidVersionFormatError:
            logger.error(f"Error parsing version '{token}'")
            raise

        if latest is None or version > latest:
            latest = version
            latest_token = token

    if latest is None:
        raise NoVersionFoundError()

    return latest, latest_token


def format_version(version: Version) -> str:
    """Render a version as MAJOR.MINOR.PATCH."""
    return f"{version.major}.{version.minor}.{version.patch}"


def _is_prerelease(version: Version) -> bool:
    return version.prerelease is not None


def next_version(current: Version, tally: MagnitudeTally) -> str:
    """Calculate the next version from the change tally.

    A patch bump of a pre-release releases that version as-is
    (``1.1.0-rc.1`` becomes ``1.1.0``). Build metadata is dropped and does
    not stop the increment (``1.0.0+build.5`` becomes ``1.0.1``).

    Args:
        current: Latest released version
        tally: Counts from the deduplicated Unreleased entries

    Returns:
        Next version as MAJOR.MINOR.PATCH

    Raises:
        NoChangesInUnreleasedError: If the tally is empty
    """
    if tally.is_empty():
        raise NoChangesInUnreleasedError()

    major, minor, patch = current.major, current.minor, current.patch

    if tally.major > 0:
        return f"{major + 1}.0.0"
    if tally.minor > 0:
        return f"{major}.{minor + 1}.0"
    if _is_prerelease(current):
        return f"{major}.{minor}.{patch}"
    return f"{major}.{minor}.{patch + 1}"
