"""Classification and rendering of the Unreleased section."""

import logging
import re
from datetime import date
from typing import Dict, List, Optional, Tuple

from semver import Version

from .dedup import deduplicate_entries
from .version import MagnitudeTally, next_version


UNRELEASED_HEADING = "## [Unreleased]"
CATEGORY_PREFIX = "### "
BREAKING_CHANGE_MARKER = "- **BREAKING CHANGE:**"

# Classification order
CATEGORIES = ("Added", "Changed", "Deprecated", "Removed", "Fixed", "Security")

# Order of subsections in a rendered release
RENDER_ORDER = ("Added", "Changed", "Deprecated", "Fixed", "Removed", "Security")

_CANONICAL_CATEGORIES = {name.lower(): name for name in CATEGORIES}

# Any heading depth, any case: "## fixed", "#### Added"
LOOSE_CATEGORY_HEADING_RE = re.compile(
    r'(?i)^\s*#+\s*(Added|Changed|Deprecated|Removed|Fixed|Security)'
)


def is_unreleased_heading(line: str) -> bool:
    return UNRELEASED_HEADING in line


def category_heading_name(line: str) -> Optional[str]:
    """Return the category a ``### <Category>`` line opens, or None."""
    trimmed = line.strip()
    for name in CATEGORIES:
        if trimmed.startswith(CATEGORY_PREFIX + name):
            return name
    return None


def fix_section_headings(lines: List[str]) -> List[str]:
    """Rewrite category headings of any depth or case to ``### <Category>``.

    Args:
        lines: Unreleased section lines

    Returns:
        New list with canonical category headings
    """
    fixed = []
    for line in lines:
        match = LOOSE_CATEGORY_HEADING_RE.match(line)
        if match:
            name = _CANONICAL_CATEGORIES[match.group(1).lower()]
            rest = line[match.end():].rstrip()
            fixed.append(f"{CATEGORY_PREFIX}{name}{rest}")
        else:
            fixed.append(line)
    return fixed


def _classify(line: str, category: str, tally: MagnitudeTally) -> None:
    if line.startswith(BREAKING_CHANGE_MARKER):
        tally.major += 1
    elif category == "Added":
        tally.minor += 1
    else:
        tally.patch += 1


def new_sections() -> Dict[str, List[str]]:
    return {name: [] for name in CATEGORIES}


def parse_unreleased_into_sections(lines: List[str]) -> Tuple[Dict[str, List[str]], MagnitudeTally]:
    """Split the Unreleased section into categories.

    Lines seen before the first category heading are dropped.

    Args:
        lines: Unreleased section lines, headings already canonical

    Returns:
        Tuple of (entries per category, tally of the raw entries)
    """
    sections = new_sections()
    tally = MagnitudeTally()
    current = None

    for line in lines:
        trimmed = line.strip()

        category = category_heading_name(line)
        if category:
            current = category

        if current is None or trimmed in ("", "-") or trimmed.startswith("##"):
            continue

        sections[current].append(line)
        _classify(line, current, tally)

    return sections, tally


def recount_changes(sections: Dict[str, List[str]]) -> MagnitudeTally:
    """Tally change magnitude from (deduplicated) sections."""
    tally = MagnitudeTally()
    for category, entries in sections.items():
        for line in entries:
            _classify(line, category, tally)
    return tally


def deduplicate_sections(sections: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {category: deduplicate_entries(entries) for category, entries in sections.items()}


def _release_header(version: str, today: date) -> List[str]:
    return [
        UNRELEASED_HEADING,
        "",
        f"## [{version}] - {today.strftime('%Y-%m-%d')}",
        "",
    ]


def make_new_sections(sections: Dict[str, List[str]], version: str, today: date) -> List[str]:
    """Render a fresh Unreleased heading followed by the new release.

    Args:
        sections: Entries per category
        version: Version of the new release
        today: Release date

    Returns:
        Rendered lines
    """
    rendered = _release_header(version, today)

    for category in RENDER_ORDER:
        entries = sections.get(category) or []
        if not entries:
            continue
        rendered.append(CATEGORY_PREFIX + category)
        rendered.append("")
        rendered.extend(sorted(entries))
        rendered.append("")

    return rendered


def make_new_sections_from_unreleased(unreleased: List[str], version: str, today: date) -> List[str]:
    """Move the Unreleased content under a new release heading as-is."""
    rendered = _release_header(version, today)
    rendered.extend(line for line in unreleased if "[Unreleased]" not in line)
    return rendered


def update_section(unreleased: List[str], current: Version, today: date) -> Tuple[List[str], str]:
    """Turn the Unreleased section into a new release.

    Args:
        unreleased: Lines of the Unreleased section, heading included
        current: Latest released version
        today: Release date

    Returns:
        Tuple of (rendered lines, next version)

    Raises:
        NoChangesInUnreleasedError: If no entries remain after deduplication
    """
    logger = logging.getLogger(__name__)

    parsed, _ = parse_unreleased_into_sections(fix_section_headings(unreleased))
    sections = deduplicate_sections(parsed)
    # Tally again so dropped duplicates don't inflate the bump
    tally = recount_changes(sections)

    dropped = sum(len(entries) for entries in parsed.values()) - sum(len(entries) for entries in sections.values())
    logger.debug(f"Unreleased changes: major={tally.major} minor={tally.minor} patch={tally.patch}, {dropped} duplicates dropped")

    version = next_version(current, tally)
    return make_new_sections(sections, version, today), version
