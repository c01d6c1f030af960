"""Errors raised while processing a changelog."""


class ChangelogError(Exception):
    """Base class for changelog processing errors."""


class NoVersionFoundError(ChangelogError):
    """Raised when the changelog has no released version heading."""

    def __init__(self, message: str = "no version found in the changelog"):
        super().__init__(message)


class InvalidVersionFormatError(ChangelogError, ValueError):
    """Raised when a version heading cannot be parsed as a semantic version."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"error parsing version '{version}'")


class NoChangesInUnreleasedError(ChangelogError):
    """Raised when the Unreleased section has nothing to release."""

    def __init__(self, message: str = "no changes found in the unreleased section"):
        super().__init__(message)
