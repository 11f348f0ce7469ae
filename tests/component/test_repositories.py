from __future__ import annotations

import os
from pathlib import Path

import pytest

from blogindex.errors import IndexRepositoryError, MissingSettingError, PostRepositoryError
from blogindex.repositories import (
    IndexRepository,
    IndexRepositoryConfig,
    PostRepository,
    PostRepositoryConfig,
)


def _touch(path: Path, text: str = "---\ntitle: x\n---\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_list_documents_sorted_and_filtered(tmp_path: Path) -> None:
    root = tmp_path.resolve()
    _touch(root / "b.md")
    _touch(root / "a" / "z.md")
    _touch(root / "README.md")
    _touch(root / ".github" / "pr.md")
    _touch(root / "node_modules" / "pkg" / "readme.md")
    _touch(root / ".drafts" / "wip.md")
    _touch(root / "notes.txt")

    repo = PostRepository(
        PostRepositoryConfig(root_dir=root, output_path=root / "README.md")
    )
    documents = repo.list_documents()
    assert [repo.relative_path(path) for path in documents] == ["a/z.md", "b.md"]


def test_list_documents_missing_root(tmp_path: Path) -> None:
    repo = PostRepository(PostRepositoryConfig(root_dir=tmp_path / "missing"))
    with pytest.raises(PostRepositoryError) as excinfo:
        repo.list_documents()
    assert excinfo.value.hint


def test_read_reports_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.md"
    path.write_bytes(b"---\ntitle: \xff\xfe\n---\n")
    repo = PostRepository(PostRepositoryConfig(root_dir=tmp_path))
    with pytest.raises(PostRepositoryError):
        repo.read(path)


def test_post_repository_from_settings(tmp_path: Path) -> None:
    repo = PostRepository.from_settings(
        {
            "root_dir": str(tmp_path),
            "output_file": "INDEX.md",
            "exclude_dirs": "drafts, archive",
            "pattern": "*.markdown",
        }
    )
    assert repo.config.root_dir == tmp_path.resolve()
    assert repo.config.output_path == (tmp_path / "INDEX.md").resolve()
    assert repo.config.exclude_dirs == ("drafts", "archive")
    assert repo.config.pattern == "*.markdown"


def test_post_repository_requires_root() -> None:
    with pytest.raises(MissingSettingError):
        PostRepositoryConfig.from_settings({"output_file": "README.md"})


def test_index_repository_write_reports_changes(tmp_path: Path) -> None:
    repo = IndexRepository(IndexRepositoryConfig(output_path=tmp_path / "README.md"))
    assert repo.read_current() is None
    assert repo.write("one\n") is True
    assert repo.write("one\n") is False
    assert repo.write("two\n") is True
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "two\n"
    assert [p.name for p in tmp_path.iterdir()] == ["README.md"]


def test_index_repository_keeps_file_mode(tmp_path: Path) -> None:
    target = tmp_path / "README.md"
    target.write_text("old\n", encoding="utf-8")
    os.chmod(target, 0o644)
    IndexRepository(IndexRepositoryConfig(output_path=target)).write("new\n")
    assert target.stat().st_mode & 0o777 == 0o644


def test_index_repository_failed_write_keeps_previous_content(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "README.md"
    target.write_text("previous\n", encoding="utf-8")

    def fail_replace(_src, _dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)
    repo = IndexRepository(IndexRepositoryConfig(output_path=target))
    with pytest.raises(IndexRepositoryError):
        repo.write("next\n")
    assert target.read_text(encoding="utf-8") == "previous\n"
    assert [p.name for p in tmp_path.iterdir()] == ["README.md"]


def test_index_repository_replaces_undecodable_previous_index(tmp_path: Path) -> None:
    target = tmp_path / "README.md"
    target.write_bytes("# old".encode("utf-16"))
    repo = IndexRepository(IndexRepositoryConfig(output_path=target))
    assert repo.read_current() is None
    assert repo.is_current("# new\n") is False
    assert repo.write("# new\n") is True
    assert target.read_text(encoding="utf-8") == "# new\n"
