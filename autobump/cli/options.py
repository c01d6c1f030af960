"""Shared option callbacks."""

from datetime import date
from typing import Optional

import click
from dateutil.parser import isoparse


def parse_release_date(ctx, param, value) -> Optional[date]:
    """Parse a ``--date`` value such as 2024-05-01."""
    if value is None:
        return None
    try:
        return isoparse(value).date()
    except ValueError as e:
        raise click.BadParameter(f"expected YYYY-MM-DD, got '{value}' ({e})")


def as_bullet(entry: str) -> str:
    """Prefix an entry with the bullet marker unless it already has one."""
    entry = entry.strip()
    if entry.startswith("- "):
        return entry
    return f"- {entry}"
