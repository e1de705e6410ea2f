"""
Custom Exceptions

This module defines the exceptions raised while cleaning shortcodes,
querying the Internet Archive and storing shortcode catalogs.

None of these conditions is retried: each one is terminal for the
current call and carries enough context to be debugged from the
message alone.
"""

from typing import Optional


class URLHeroException(Exception):
    """Base exception for urlhero."""
    pass


class MalformedURLError(URLHeroException):
    """Raised when an observed URL cannot be parsed."""

    def __init__(self, url: str, reason: str = "Malformed URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class ShortcodeMismatchError(URLHeroException):
    """
    Raised when a cleaned shortcode does not match its shortener's pattern.

    This points at a bug in the cleaning logic or in the pattern, so it
    aborts the whole batch instead of dropping the shortcode.
    """

    def __init__(self, shortener: str, shortcode: str, pattern: str, url: str):
        self.shortener = shortener
        self.shortcode = shortcode
        self.pattern = pattern
        self.url = url
        super().__init__(
            f"{shortener}: shortcode {shortcode!r} does not match alphabet "
            f"{pattern} after cleaning: {url!r}"
        )


class ShortenerNotFoundError(URLHeroException):
    """Raised when a shortener name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Shortener '{name}' not found")


class ArchiveQueryError(URLHeroException):
    """Raised when the Internet Archive returns an error or an unreadable response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(f"Archive query failed: {message}")


class DatabaseError(URLHeroException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
