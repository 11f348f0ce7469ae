from __future__ import annotations

from datetime import datetime

import pytest

from blogindex.errors import ConfigError
from blogindex.posts.types import (
    DEFAULT_TAG_GROUPS,
    IndexRendererConfig,
    PostRecord,
    TagGroup,
    build_tag_groups,
)


def test_post_record_from_frontmatter() -> None:
    record = PostRecord.from_frontmatter(
        {
            "title": "Hello",
            "created": "2025-06-14",
            "categories": ("Azure",),
            "tags": ("a", "b"),
            "extra": "kept",
        },
        name="hello.md",
        relative_path="posts/hello.md",
    )
    assert record.name == "hello.md"
    assert record.relative_path == "posts/hello.md"
    assert record.title == "Hello"
    assert record.created == datetime(2025, 6, 14)
    assert record.categories == ("Azure",)
    assert record.tags == ("a", "b")
    assert record.metadata["extra"] == "kept"


def test_post_record_absent_fields_stay_absent() -> None:
    record = PostRecord.from_frontmatter({}, name="x.md", relative_path="x.md")
    assert record.title is None
    assert record.status is None
    assert record.description is None
    assert record.created is None
    assert record.categories == ()
    assert record.tags == ()
    assert record.sort_date == datetime.min


def test_post_record_invalid_date_keeps_raw_value() -> None:
    record = PostRecord.from_frontmatter(
        {"created": "someday"}, name="x.md", relative_path="x.md"
    )
    assert record.created is None
    assert record.created_raw == "someday"


def test_post_record_scalar_category_becomes_single_item() -> None:
    record = PostRecord.from_frontmatter(
        {"categories": "Azure", "tags": ""}, name="x.md", relative_path="x.md"
    )
    assert record.categories == ("Azure",)
    assert record.tags == ()


def test_tag_group_matches_any_tag() -> None:
    group = TagGroup(label="Debugging", tags=frozenset({"debugging", "errors"}))
    hit = PostRecord(name="a.md", relative_path="a.md", tags=("azure", "errors"))
    miss = PostRecord(name="b.md", relative_path="b.md", tags=("Errors",))
    assert group.matches(hit)
    assert not group.matches(miss)


def test_build_tag_groups_keeps_declared_order() -> None:
    groups = build_tag_groups({"Zeta": ["z"], "Alpha": ["a", " ", "b"]})
    assert [group.label for group in groups] == ["Zeta", "Alpha"]
    assert groups[1].tags == frozenset({"a", "b"})


@pytest.mark.parametrize("raw", [["not", "a", "table"], {"Group": "single-string"}])
def test_build_tag_groups_rejects_bad_shapes(raw) -> None:
    with pytest.raises(ConfigError):
        build_tag_groups(raw)


def test_renderer_config_from_settings_defaults() -> None:
    config = IndexRendererConfig.from_settings({})
    assert [group.label for group in config.tag_groups] == list(DEFAULT_TAG_GROUPS)
    custom = IndexRendererConfig.from_settings(
        {"index_title": "My Notes", "tag_groups": {"Only": ["x"]}}
    )
    assert custom.title == "My Notes"
    assert [group.label for group in custom.tag_groups] == ["Only"]
