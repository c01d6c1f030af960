"""Keep-a-Changelog processing engine."""

from .dedup import deduplicate_entries, normalize_entry, tokenize, extract_max_version
from .errors import (
    ChangelogError,
    NoVersionFoundError,
    InvalidVersionFormatError,
    NoChangesInUnreleasedError,
)
from .insert import insert_changelog_entry
from .processor import process_changelog, process_new_changelog, is_unreleased_empty
from .version import INITIAL_RELEASE_VERSION, find_latest_version, next_version

__all__ = [
    "deduplicate_entries",
    "normalize_entry",
    "tokenize",
    "extract_max_version",
    "ChangelogError",
    "NoVersionFoundError",
    "InvalidVersionFormatError",
    "NoChangesInUnreleasedError",
    "insert_changelog_entry",
    "process_changelog",
    "process_new_changelog",
    "is_unreleased_empty",
    "INITIAL_RELEASE_VERSION",
    "find_latest_version",
    "next_version",
]
