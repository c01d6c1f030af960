"""Release workflow module."""

from .workflow import (
    bump_remote_changelog,
    publish_changelog,
    insert_remote_entries,
    release_section,
)

__all__ = [
    "bump_remote_changelog",
    "publish_changelog",
    "insert_remote_entries",
    "release_section",
]
