from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blogindex.errors import IndexRepositoryError
from blogindex.repositories.types import IndexRepositoryConfig


@dataclass(slots=True)
class IndexRepository:
    """Reads and replaces the generated index document."""

    config: IndexRepositoryConfig

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> IndexRepository:
        return cls(IndexRepositoryConfig.from_settings(settings))

    @property
    def path(self) -> Path:
        return self.config.output_path

    def read_current(self) -> str | None:
        try:
            return self.path.read_text(encoding=self.config.encoding)
        except FileNotFoundError:
            return None
        except UnicodeDecodeError:
            # An index in another encoding is stale by definition.
            return None
        except OSError as exc:
            raise IndexRepositoryError(f"Failed to read index: {self.path}") from exc

    def is_current(self, content: str) -> bool:
        return self.read_current() == content

    def write(self, content: str) -> bool:
        """Replace the index in one step and report whether its content changed."""

        changed = not self.is_current(content)
        target = self.path
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            with os.fdopen(fd, "w", encoding=self.config.encoding, newline="\n") as handle:
                handle.write(content)
            # mkstemp creates 0600 files; keep the index world-readable.
            mode = target.stat().st_mode & 0o777 if target.exists() else 0o644
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise IndexRepositoryError(f"Failed to write index: {target}") from exc
        return changed
