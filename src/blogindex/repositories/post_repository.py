from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blogindex.errors import PostRepositoryError
from blogindex.repositories.types import PostRepositoryConfig


@dataclass(slots=True)
class PostRepository:
    """Read-only access to the Markdown posts under the root directory."""

    config: PostRepositoryConfig

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> PostRepository:
        return cls(PostRepositoryConfig.from_settings(settings))

    def relative_path(self, path: Path) -> str:
        return path.relative_to(self.config.root_dir).as_posix()

    def _is_excluded(self, path: Path) -> bool:
        if self.config.output_path is not None and path.resolve() == self.config.output_path:
            return True
        parents = path.relative_to(self.config.root_dir).parts[:-1]
        return any(
            part in self.config.exclude_dirs or part.startswith(".") for part in parents
        )

    def list_documents(self) -> list[Path]:
        """Return candidate documents sorted by relative path."""

        root = self.config.root_dir
        if not root.is_dir():
            raise PostRepositoryError(
                f"Root directory not found: {root}",
                hint="Pass an existing directory with --root.",
            )
        documents = [
            path
            for path in root.rglob(self.config.pattern)
            if path.is_file() and not self._is_excluded(path)
        ]
        return sorted(documents, key=self.relative_path)

    def read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise PostRepositoryError(f"Failed to read post: {path} ({exc})") from exc
