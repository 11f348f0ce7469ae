# src/blogindex/errors.py
from __future__ import annotations


class BlogIndexError(Exception):
    """Base exception for all blogindex errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigError(BlogIndexError):
    """Raised when config is missing or invalid."""


class MissingSettingError(ConfigError):
    """Raised when a required configuration value is absent."""

    def __init__(self, setting_name: str, message: str | None = None) -> None:
        detail = message or f"Missing required setting: {setting_name}"
        super().__init__(detail)
        self.setting_name = setting_name


class FrontmatterError(BlogIndexError):
    """Raised when a document header cannot be located."""


class MissingFrontmatterError(FrontmatterError):
    """Raised when a document does not open with a frontmatter marker."""


class UnterminatedFrontmatterError(FrontmatterError):
    """Raised when the opening marker has no matching closing marker."""


class RepositoryError(BlogIndexError):
    """Base error for repository related failures."""


class PostRepositoryError(RepositoryError):
    """Raised when a source document cannot be read."""


class IndexRepositoryError(RepositoryError):
    """Raised when the index document cannot be written."""


class NoPostsFoundError(BlogIndexError):
    """Raised when a scan yields no usable posts."""
