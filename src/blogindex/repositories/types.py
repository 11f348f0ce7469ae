"""Repository data classes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from blogindex.errors import MissingSettingError

DEFAULT_EXCLUDE_DIRS = (
    ".git",
    ".github",
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
)


def _resolve_root(settings: Mapping[str, Any]) -> Path:
    root_dir = settings.get("root_dir")
    if not root_dir:
        raise MissingSettingError("root_dir")
    return Path(str(root_dir)).expanduser().resolve()


def _resolve_output(settings: Mapping[str, Any], root_dir: Path) -> Path:
    output_file = settings.get("output_file")
    if not output_file:
        raise MissingSettingError("output_file")
    return (root_dir / Path(str(output_file)).expanduser()).resolve()


# --- Config. ---
@dataclass(frozen=True, slots=True)
class PostRepositoryConfig:
    """Settings for scanning source documents."""

    root_dir: Path
    output_path: Path | None = None
    pattern: str = "*.md"
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    encoding: str = "utf-8"

    def __post_init__(self) -> None:  # type: ignore[override]
        object.__setattr__(self, "root_dir", Path(self.root_dir).expanduser())
        if self.output_path is not None:
            object.__setattr__(self, "output_path", Path(self.output_path).expanduser())

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> PostRepositoryConfig:
        root_dir = _resolve_root(settings)
        exclude_dirs = settings.get("exclude_dirs", DEFAULT_EXCLUDE_DIRS)
        if isinstance(exclude_dirs, str):
            exclude_dirs = [part.strip() for part in exclude_dirs.split(",")]
        return cls(
            root_dir=root_dir,
            output_path=_resolve_output(settings, root_dir),
            pattern=str(settings.get("pattern") or "*.md"),
            exclude_dirs=tuple(str(name) for name in exclude_dirs if name),
            encoding=str(settings.get("encoding") or "utf-8"),
        )


@dataclass(frozen=True, slots=True)
class IndexRepositoryConfig:
    """Settings for writing the generated index."""

    output_path: Path
    encoding: str = "utf-8"

    def __post_init__(self) -> None:  # type: ignore[override]
        object.__setattr__(self, "output_path", Path(self.output_path).expanduser())

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> IndexRepositoryConfig:
        root_dir = _resolve_root(settings)
        return cls(
            output_path=_resolve_output(settings, root_dir),
            encoding=str(settings.get("encoding") or "utf-8"),
        )
