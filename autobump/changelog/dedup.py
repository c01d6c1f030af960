"""Duplicate detection for changelog entries."""

import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from semver import Version

from .errors import InvalidVersionFormatError
from .version import parse_version


# Minimum overlap ratio for two entries to count as duplicates
DEDUPLICATION_OVERLAP_THRESHOLD = 0.6

# Entries with fewer significant words and no version are only removed as
# exact duplicates
MIN_SIGNIFICANT_TOKENS = 2

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "to", "and", "all", "their",
    "its", "a", "an", "of", "in",
    "for", "with", "from", "by", "on",
    "is", "was", "are", "were", "be",
    "been", "being", "has", "have", "had",
    "that", "this", "it", "as",
})

BACKTICK_RE = re.compile(r'`[^`]*`')

# Semver-like numbers such as 1.26.0 or v2.3
ENTRY_VERSION_RE = re.compile(r'v?\d+\.\d+(?:\.\d+)?')

BULLET_PREFIX = "- "


@dataclass
class EntryInfo:
    raw: str
    tokens: FrozenSet[str]
    version: Optional[Version]


def normalize_entry(entry: str) -> str:
    """Strip a changelog entry down to its wording.

    Removes the bullet marker, backtick spans and version numbers, then
    lower-cases and collapses whitespace.

    Args:
        entry: Raw entry line

    Returns:
        Normalized entry text
    """
    text = entry.strip()
    if text.startswith(BULLET_PREFIX):
        text = text[len(BULLET_PREFIX):]
    text = BACKTICK_RE.sub("", text)
    text = ENTRY_VERSION_RE.sub("", text)
    return " ".join(text.lower().split())


def tokenize(normalized: str) -> List[str]:
    """Split a normalized entry into significant words."""
    return [
        word for word in normalized.split()
        if len(word) > 1 and word not in STOP_WORDS
    ]


def extract_max_version(entry: str) -> Optional[Version]:
    """Find the highest version mentioned in an entry's raw text.

    Args:
        entry: Raw entry line

    Returns:
        Highest version or None if the entry mentions none
    """
    highest = None
    for candidate in ENTRY_VERSION_RE.findall(entry):
        try:
            version = parse_version(candidate)
        except InvalidVersionFormatError:
            continue
        if highest is None or version > highest:
            highest = version
    return highest


def overlap_ratio(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """Shared tokens divided by the size of the smaller token set."""
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))


def pick_loser(a: EntryInfo, b: EntryInfo, idx_a: int, idx_b: int) -> int:
    """Decide which of two overlapping entries to drop.

    The entry referencing the lower version loses. An entry without a
    version loses against one with a version. Otherwise the shorter entry
    loses, and on equal length the second one does.

    Returns:
        Index of the entry to remove
    """
    if a.version is not None and b.version is not None:
        if a.version > b.version:
            return idx_b
        if b.version > a.version:
            return idx_a
    elif a.version is not None:
        return idx_b
    elif b.version is not None:
        return idx_a

    if len(a.raw) > len(b.raw):
        return idx_b
    if len(b.raw) > len(a.raw):
        return idx_a
    return idx_b


def _too_short_to_compare(a: EntryInfo, b: EntryInfo) -> bool:
    if a.version is not None or b.version is not None:
        return False
    return min(len(a.tokens), len(b.tokens)) < MIN_SIGNIFICANT_TOKENS


def _entry_info(entry: str) -> EntryInfo:
    return EntryInfo(
        raw=entry,
        tokens=frozenset(tokenize(normalize_entry(entry))),
        version=extract_max_version(entry),
    )


def deduplicate_entries(entries: List[str]) -> List[str]:
    """Remove duplicate and overlapping changelog entries.

    Exact duplicates (ignoring surrounding whitespace) are dropped first,
    keeping the first occurrence. The remaining entries are compared pairwise
    in a single forward sweep; pairs whose token overlap reaches the
    threshold lose one entry according to ``pick_loser``. Pairs of short
    entries without any version (``fix X``, ``fix Y``) are left to the exact
    pass. Removal marks are never revisited.

    Args:
        entries: Entry lines of a single category

    Returns:
        Surviving entries in their original order
    """
    if len(entries) <= 1:
        return list(entries)

    seen = set()
    unique = []
    for entry in entries:
        key = entry.strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)

    if len(unique) <= 1:
        return unique

    infos = [_entry_info(entry) for entry in unique]
    removed = set()

    for i in range(len(infos)):
        if i in removed:
            continue
        for j in range(i + 1, len(infos)):
            if j in removed:
                continue

            if _too_short_to_compare(infos[i], infos[j]):
                continue
            if overlap_ratio(infos[i].tokens, infos[j].tokens) < DEDUPLICATION_OVERLAP_THRESHOLD:
                continue

            removed.add(pick_loser(infos[i], infos[j], i, j))

    return [info.raw for idx, info in enumerate(infos) if idx not in removed]
