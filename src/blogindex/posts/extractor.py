from __future__ import annotations

import logging

from blogindex.errors import FrontmatterError
from blogindex.posts.types import PostRecord
from blogindex.utils.frontmatter import parse_frontmatter


class PostExtractor:
    """Turn raw document text into a ``PostRecord``."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("blogindex.extract")

    def extract(
        self, text: str, *, name: str, relative_path: str
    ) -> PostRecord | None:
        """Return the record for one document, or ``None`` when it has no usable header."""

        try:
            fields = parse_frontmatter(text)
        except FrontmatterError as exc:
            self._logger.warning("Skipping %s: %s", relative_path, exc)
            return None
        record = PostRecord.from_frontmatter(
            fields, name=name, relative_path=relative_path
        )
        self._logger.debug(
            "Parsed %s (title=%r, created=%r)",
            relative_path,
            record.title,
            record.created_raw,
        )
        return record
