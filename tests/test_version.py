"""Unit tests for version lookup and bump calculation."""

import pytest

from autobump.changelog.errors import (
    InvalidVersionFormatError,
    NoChangesInUnreleasedError,
    NoVersionFoundError,
)
from autobump.changelog.version import (
    MagnitudeTally,
    find_latest_version,
    is_version_heading,
    next_version,
    parse_version,
)


def test_find_latest_version_uses_semver_precedence():
    lines = [
        "# Changelog",
        "## [Unreleased]",
        "## [1.2.0] - 2024-01-01",
        "## [1.10.0] - 2024-02-01",
        "## [1.0.0] - 2023-11-01",
    ]
    version, token = find_latest_version(lines)
    assert version == parse_version("1.10.0")
    assert token == "1.10.0"


def test_find_latest_version_accepts_heading_without_date():
    version, token = find_latest_version(["  ## [v2.0.1]"])
    assert version == parse_version("2.0.1")
    assert token == "v2.0.1"


def test_no_version_found():
    with pytest.raises(NoVersionFoundError):
        find_latest_version(["# Changelog", "## [Unreleased]", "### Added", "- thing"])


def test_invalid_version_is_fatal():
    lines = [
        "## [Unreleased]",
        "## [1.0.0] - 2024-01-01",
        "## [not-a-version] - 2023-01-01",
    ]
    with pytest.raises(InvalidVersionFormatError) as exc_info:
        find_latest_version(lines)
    assert exc_info.value.version == "not-a-version"


def test_is_version_heading():
    assert is_version_heading("## [1.0.0] - 2024-01-01")
    assert not is_version_heading("## [Unreleased]")
    assert not is_version_heading("### Added")
    assert not is_version_heading("- [1.0.0] mentioned in an entry")


@pytest.mark.parametrize("current,tally,expected", [
    ("1.0.0", MagnitudeTally(patch=1), "1.0.1"),
    ("1.0.0", MagnitudeTally(minor=1, patch=3), "1.1.0"),
    ("1.5.0", MagnitudeTally(major=1, minor=2, patch=1), "2.0.0"),
    ("1.5.3", MagnitudeTally(minor=1), "1.6.0"),
    ("0.9", MagnitudeTally(patch=1), "0.9.1"),
    ("1.1.0-rc.1", MagnitudeTally(patch=1), "1.1.0"),
    ("1.1.0-rc.1", MagnitudeTally(minor=1), "1.2.0"),
    ("1.0.0+build.5", MagnitudeTally(patch=1), "1.0.1"),
    ("1.0.0-rc.1+build.5", MagnitudeTally(patch=1), "1.0.0"),
    ("0.9.0-SNAPSHOT", MagnitudeTally(minor=1), "0.10.0"),
])
def test_next_version(current, tally, expected):
    assert next_version(Version(current), tally) == expected


def test_next_version_requires_changes():
    with pytest.raises(NoChangesInUnreleasedError):
        next_version(parse_version("1.0.0"), MagnitudeTally())


@pytest.mark.parametrize("token", ["0.9.0-SNAPSHOT", "2.0.0-alpha.beta", "1.0.0+build.5", "v1.2", "3"])
def test_parse_version_accepts_semver_tokens(token):
    assert parse_version(token).major in (0, 1, 2, 3)


def test_parse_version_pads_and_strips_prefix():
    assert str(parse_version("v1.2")) == "1.2.0"
    assert str(parse_version("2.0.0-alpha.beta")) == "2.0.0-alpha.beta"


def test_find_latest_version_accepts_arbitrary_prerelease_labels():
    lines = [
        "## [Unreleased]",
        "## [1.0.0] - 2024-01-01",
        "## [1.0.0-SNAPSHOT] - 2023-12-01",
        "## [0.9.0-alpha.beta] - 2023-01-01",
    ]
    version, token = find_latest_version(lines)
    assert token == "1.0.0"
    assert version == parse_version("1.0.0")


def test_find_latest_version_ranks_prerelease_below_release():
    version, token = find_latest_version(["## [2.0.0-rc.1]", "## [1.9.9]"])
    assert token == "2.0.0-rc.1"

    version, token = find_latest_version(["## [2.0.0-rc.1]", "## [2.0.0]"])
    assert token == "2.0.0"


def test_find_latest_version_ignores_build_metadata_in_precedence():
    """Headings differing only in build metadata rank equal; the first one is kept."""
    version, token = find_latest_version(["## [1.0.0+build.1]", "## [1.0.0+build.9]"])
    assert token == "1.0.0+build.1"
