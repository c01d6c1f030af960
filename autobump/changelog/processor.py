"""Top-level processing of a Keep-a-Changelog document."""

import logging
import re
from datetime import date
from typing import List, Optional, Tuple

from .errors import ChangelogError, NoChangesInUnreleasedError, NoVersionFoundError
from .section import (
    deduplicate_sections,
    fix_section_headings,
    is_unreleased_heading,
    make_new_sections,
    make_new_sections_from_unreleased,
    parse_unreleased_into_sections,
    update_section,
)
from .version import INITIAL_RELEASE_VERSION, find_latest_version, version_heading_token


BULLET_LINE_RE = re.compile(r'^\s*-\s*[^ ]+')


def process_changelog(lines: List[str], today: Optional[date] = None) -> Tuple[str, List[str]]:
    """Release the Unreleased section of a changelog.

    The Unreleased block (everything from ``## [Unreleased]`` up to the
    latest version heading) is classified, deduplicated and rendered as a
    new dated release under a fresh, empty ``## [Unreleased]`` heading.
    Changelogs without any released version are released as 1.0.0.

    Args:
        lines: Changelog lines
        today: Release date, defaults to the current date

    Returns:
        Tuple of (next version, new changelog lines)

    Raises:
        InvalidVersionFormatError: If a version heading cannot be parsed
        NoChangesInUnreleasedError: If there is nothing to release
    """
    logger = logging.getLogger(__name__)
    today = today or date.today()

    try:
        latest, token = find_latest_version(lines)
    except NoVersionFoundError:
        logger.info(f"No previous version found, will release as {INITIAL_RELEASE_VERSION}")
        return process_new_changelog(lines, today)

    logger.info(f"Previous version: {latest}")

    new_content: List[str] = []
    unreleased: List[str] = []
    next_version = None
    inside = False

    try:
        for line in lines:
            if next_version is None and is_unreleased_heading(line):
                inside = True
            elif inside and version_heading_token(line) == token:
                inside = False
                rendered, next_version = update_section(unreleased, latest, today)
                new_content.extend(rendered)
                unreleased = []

            if inside:
                unreleased.append(line)
            else:
                new_content.append(line)

        # Unreleased block running to the end of the document
        if unreleased:
            rendered, next_version = update_section(unreleased, latest, today)
            new_content.extend(rendered)
    except ChangelogError as e:
        logger.error(f"Error updating section: {e}")
        raise

    if next_version is None:
        logger.error("No [Unreleased] section found")
        raise NoChangesInUnreleasedError()

    logger.info(f"Next calculated version: {next_version}")
    return next_version, new_content


def process_new_changelog(lines: List[str], today: Optional[date] = None) -> Tuple[str, List[str]]:
    """Release a changelog that only has an Unreleased section as 1.0.0.

    Everything from ``## [Unreleased]`` to the end of the document is
    released. Content without recognizable category headings is kept
    verbatim under the new heading.

    Args:
        lines: Changelog lines
        today: Release date, defaults to the current date

    Returns:
        Tuple of (initial version, new changelog lines)

    Raises:
        NoChangesInUnreleasedError: If the changelog has no Unreleased section
    """
    logger = logging.getLogger(__name__)
    today = today or date.today()

    new_content: List[str] = []
    unreleased: List[str] = []
    inside = False

    for line in lines:
        if is_unreleased_heading(line):
            inside = True

        if inside:
            unreleased.append(line)
        else:
            new_content.append(line)

    if not unreleased:
        logger.error("No [Unreleased] section found")
        raise NoChangesInUnreleasedError()

    sections, _ = parse_unreleased_into_sections(fix_section_headings(unreleased))
    sections = deduplicate_sections(sections)

    if any(sections.values()):
        new_content.extend(make_new_sections(sections, INITIAL_RELEASE_VERSION, today))
    else:
        new_content.extend(make_new_sections_from_unreleased(unreleased, INITIAL_RELEASE_VERSION, today))

    logger.info(f"Next calculated version: {INITIAL_RELEASE_VERSION}")
    return INITIAL_RELEASE_VERSION, new_content


def is_unreleased_empty(lines: List[str]) -> bool:
    """Check whether the Unreleased section has no bullet entries.

    Args:
        lines: Changelog lines

    Returns:
        True if there is nothing under ``## [Unreleased]``

    Raises:
        InvalidVersionFormatError: If a version heading cannot be parsed
    """
    try:
        _, token = find_latest_version(lines)
    except NoVersionFoundError:
        token = None

    inside = False
    for line in lines:
        if is_unreleased_heading(line):
            inside = True
        elif token is not None and version_heading_token(line) == token:
            inside = False

        if inside and BULLET_LINE_RE.match(line):
            return False

    return True
