"""Tests for inserting entries into the Unreleased section."""

from autobump.changelog import insert_changelog_entry


def test_appends_after_existing_changed_bullets():
    content = "# Changelog\n\n## [Unreleased]\n\n### Changed\n\n- existing entry\n\n## [1.0.0] - 2024-01-01\n"

    result = insert_changelog_entry(content, ["- new entry"])

    assert result == (
        "# Changelog\n\n## [Unreleased]\n\n### Changed\n\n"
        "- existing entry\n- new entry\n\n"
        "## [1.0.0] - 2024-01-01\n"
    )


def test_appends_after_bullet_run_separated_by_blank_lines():
    content = "## [Unreleased]\n### Changed\n- one\n\n- two\n### Fixed\n- fix\n"

    result = insert_changelog_entry(content, ["- three"])

    assert result == "## [Unreleased]\n### Changed\n- one\n\n- two\n- three\n### Fixed\n- fix\n"


def test_creates_changed_section_when_missing():
    content = "# Changelog\n\n## [Unreleased]\n\n## [1.0.0] - 2024-01-01\n"

    result = insert_changelog_entry(content, ["- new entry"])

    assert result == (
        "# Changelog\n\n## [Unreleased]\n\n### Changed\n\n- new entry\n\n"
        "## [1.0.0] - 2024-01-01\n"
    )


def test_ignores_changed_section_of_released_versions():
    content = "## [Unreleased]\n\n## [1.0.0]\n\n### Changed\n\n- old\n"

    result = insert_changelog_entry(content, ["- new"])

    assert result == "## [Unreleased]\n\n### Changed\n\n- new\n\n## [1.0.0]\n\n### Changed\n\n- old\n"


def test_inserting_twice_appends_in_call_order_without_deduplication():
    content = "# Changelog\n\n## [Unreleased]\n\n## [1.0.0] - 2024-01-01\n"

    result = insert_changelog_entry(content, ["- bumped foo to 1.2.0"])
    result = insert_changelog_entry(result, ["- bumped foo to 1.2.0"])
    result = insert_changelog_entry(result, ["- second entry"])

    assert result == (
        "# Changelog\n\n## [Unreleased]\n\n### Changed\n\n"
        "- bumped foo to 1.2.0\n- bumped foo to 1.2.0\n- second entry\n\n"
        "## [1.0.0] - 2024-01-01\n"
    )


def test_multiple_entries_keep_their_order():
    content = "## [Unreleased]\n"
    result = insert_changelog_entry(content, ["- b", "- a"])
    assert result == "## [Unreleased]\n\n### Changed\n\n- b\n- a\n"


def test_no_unreleased_section_is_a_no_op():
    content = "# Changelog\n\n## [1.0.0] - 2024-01-01\n"
    assert insert_changelog_entry(content, ["- new entry"]) == content


def test_empty_entries_is_a_no_op():
    content = "# Changelog\n\n## [Unreleased]\n"
    assert insert_changelog_entry(content, []) == content
