"""Appending entries to the Unreleased section."""

from typing import List

from .section import UNRELEASED_HEADING


CHANGED_SUBHEADING = "### Changed"
H2_PREFIX = "## ["
BULLET_PREFIX = "- "


def _find_unreleased_index(lines: List[str]) -> int:
    for i, line in enumerate(lines):
        if line.strip() == UNRELEASED_HEADING:
            return i
    return -1


def _find_next_h2_index(lines: List[str], start: int) -> int:
    for i in range(start + 1, len(lines)):
        if lines[i].strip().startswith(H2_PREFIX):
            return i
    return len(lines)


def _find_changed_index(lines: List[str], start: int, end: int) -> int:
    for i in range(start + 1, end):
        if lines[i].strip() == CHANGED_SUBHEADING:
            return i
    return -1


def _find_last_bullet(lines: List[str], changed_idx: int, end: int) -> int:
    insert_after = changed_idx
    for i in range(changed_idx + 1, end):
        trimmed = lines[i].strip()
        if not trimmed:
            continue
        if not trimmed.startswith(BULLET_PREFIX):
            break
        insert_after = i
    return insert_after


def insert_changelog_entry(content: str, entries: List[str]) -> str:
    """Insert bullet entries under ``## [Unreleased]`` / ``### Changed``.

    New entries go after the last bullet of an existing Changed
    subsection. Without one, a Changed subsection is created right below
    the Unreleased heading. Content without an Unreleased heading is
    returned unchanged.

    Args:
        content: Changelog text
        entries: Bullet lines to insert, e.g. ``["- bumped foo to 1.2.0"]``

    Returns:
        Updated changelog text
    """
    if not entries:
        return content

    lines = content.split("\n")

    unreleased_idx = _find_unreleased_index(lines)
    if unreleased_idx < 0:
        return content

    next_h2_idx = _find_next_h2_index(lines, unreleased_idx)
    changed_idx = _find_changed_index(lines, unreleased_idx, next_h2_idx)

    if changed_idx >= 0:
        at = _find_last_bullet(lines, changed_idx, next_h2_idx) + 1
        lines[at:at] = list(entries)
    else:
        at = unreleased_idx + 1
        lines[at:at] = ["", CHANGED_SUBHEADING, ""] + list(entries)

    return "\n".join(lines)
