"""Render the README index from a set of post records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

from blogindex.posts.types import IndexRendererConfig, PostRecord, TagGroup
from blogindex.utils.dates import format_long_date

UNKNOWN = "Unknown"
DIVIDER = "---"

FOOTER = """\
## About

This blog is a running notebook: things I set up, broke, fixed and wanted to
remember. Posts are written in Markdown and grouped by category and topic so
related notes are easy to find.

## Search and Navigation

- Use the **Latest Posts** list above for what is new.
- Browse **Posts by Category** or **Posts by Topic** for related material.
- Press `t` on GitHub to jump to a file by name, or use the repository search
  to look for a keyword across every post.

## Connect

Questions, corrections and suggestions are welcome. Open an issue or start a
discussion in this repository.

## Automation

This index is generated by `blogindex` from the frontmatter of each post and
is rebuilt automatically whenever a post changes. Edits made directly to this
file will be overwritten.

Thanks for reading!"""


@dataclass(frozen=True, slots=True)
class IndexStats:
    total_posts: int
    category_count: int
    tag_count: int
    most_recent: str | None


def sort_by_recency(records: Sequence[PostRecord]) -> list[PostRecord]:
    """Newest first; undated posts last; ties keep their input order."""

    return sorted(records, key=lambda record: record.sort_date, reverse=True)


def group_by_category(records: Sequence[PostRecord]) -> dict[str, list[PostRecord]]:
    groups: dict[str, list[PostRecord]] = {}
    for record in records:
        for category in record.categories:
            groups.setdefault(category, []).append(record)
    return {category: groups[category] for category in sorted(groups)}


def group_by_tag_group(
    records: Sequence[PostRecord], tag_groups: Sequence[TagGroup]
) -> dict[str, list[PostRecord]]:
    grouped: dict[str, list[PostRecord]] = {}
    for group in tag_groups:
        by_title: dict[str, PostRecord] = {}
        for record in records:
            if group.matches(record):
                by_title.setdefault(display_title(record), record)
        if not by_title:
            continue
        grouped[group.label] = [
            by_title[title]
            for title in sorted(by_title, key=lambda title: (title.casefold(), title))
        ]
    return grouped


def compute_stats(records: Sequence[PostRecord]) -> IndexStats:
    ordered = sort_by_recency(records)
    categories = {category for record in records for category in record.categories}
    tags = {tag for record in records for tag in record.tags}
    most_recent = format_long_date(ordered[0].created) if ordered else None
    return IndexStats(
        total_posts=len(records),
        category_count=len(categories),
        tag_count=len(tags),
        most_recent=most_recent,
    )


def display_title(record: PostRecord) -> str:
    return record.title or UNKNOWN


def link_target(record: PostRecord) -> str:
    return quote(record.relative_path, safe="/")


def post_link(record: PostRecord) -> str:
    return f"[{display_title(record)}]({link_target(record)})"


class IndexRenderer:
    """Pure renderer: the same records always produce the same document."""

    def __init__(self, config: IndexRendererConfig | None = None) -> None:
        self._config = config or IndexRendererConfig()

    @property
    def config(self) -> IndexRendererConfig:
        return self._config

    def render(self, records: Sequence[PostRecord]) -> str:
        records = list(records)
        ordered = sort_by_recency(records)
        sections = [
            self._render_header(),
            self._render_latest(ordered),
            self._render_categories(records),
            self._render_tag_groups(records),
            self._render_stats(records),
            FOOTER,
        ]
        return "\n\n".join(sections) + "\n"

    def _render_header(self) -> str:
        return f"# {self._config.title}\n\n{self._config.intro}"

    def _render_latest(self, ordered: Sequence[PostRecord]) -> str:
        blocks = ["## Latest Posts"]
        for idx, record in enumerate(ordered):
            if idx:
                blocks.append(DIVIDER)
            blocks.append(self._render_post_block(record))
        return "\n\n".join(blocks)

    def _render_post_block(self, record: PostRecord) -> str:
        details = [
            f"- **Created:** {format_long_date(record.created)}",
            f"- **Status:** {record.status or UNKNOWN}",
        ]
        if record.categories:
            details.append(f"- **Categories:** {', '.join(record.categories)}")
        if record.tags:
            details.append(f"- **Tags:** {', '.join(record.tags)}")
        parts = [f"### {post_link(record)}", "\n".join(details)]
        if record.description:
            parts.append(record.description)
        return "\n\n".join(parts)

    def _render_categories(self, records: Sequence[PostRecord]) -> str:
        blocks = ["## Posts by Category"]
        for category, members in group_by_category(records).items():
            blocks.append(f"### {category}")
            blocks.append("\n".join(f"- {post_link(record)}" for record in members))
        return "\n\n".join(blocks)

    def _render_tag_groups(self, records: Sequence[PostRecord]) -> str:
        blocks = ["## Posts by Topic"]
        grouped = group_by_tag_group(records, self._config.tag_groups)
        for label, members in grouped.items():
            blocks.append(f"### {label}")
            blocks.append("\n".join(f"- {post_link(record)}" for record in members))
        return "\n\n".join(blocks)

    def _render_stats(self, records: Sequence[PostRecord]) -> str:
        stats = compute_stats(records)
        lines = [
            f"- **Total Posts:** {stats.total_posts}",
            f"- **Categories:** {stats.category_count}",
            f"- **Tags:** {stats.tag_count}",
        ]
        if stats.most_recent is not None:
            lines.append(f"- **Most Recent:** {stats.most_recent}")
        return "## Blog Statistics\n\n" + "\n".join(lines)
