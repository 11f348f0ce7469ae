"""Post and index data classes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from blogindex.errors import ConfigError
from blogindex.utils.dates import parse_date
from blogindex.utils.frontmatter import FrontmatterValue

DEFAULT_INDEX_TITLE = "Blog Index"
DEFAULT_INDEX_INTRO = (
    "Notes, walkthroughs and fixes from day-to-day work. "
    "This page is generated from the posts in this repository."
)

DEFAULT_TAG_GROUPS: dict[str, list[str]] = {
    "Troubleshooting and Debugging": [
        "troubleshooting",
        "debugging",
        "errors",
        "diagnostics",
        "logging",
    ],
    "Automation and Scripting": [
        "automation",
        "scripting",
        "powershell",
        "python",
        "bash",
        "github-actions",
    ],
    "Cloud and Infrastructure": [
        "azure",
        "aws",
        "cloud",
        "infrastructure",
        "terraform",
        "kubernetes",
        "docker",
    ],
    "Security and Identity": [
        "security",
        "identity",
        "authentication",
        "entra-id",
        "certificates",
    ],
    "Development Practices": [
        "git",
        "testing",
        "devops",
        "ci-cd",
        "best-practices",
    ],
}


def _as_scalar(value: FrontmatterValue | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, tuple):
        return ", ".join(value)
    return value


def _as_list(value: FrontmatterValue | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, tuple):
        return tuple(item for item in value if item)
    stripped = value.strip()
    return (stripped,) if stripped else ()


@dataclass(frozen=True, slots=True)
class PostRecord:
    """Parsed metadata of one source document."""

    name: str
    relative_path: str
    title: str | None = None
    status: str | None = None
    description: str | None = None
    slug: str | None = None
    created: datetime | None = None
    created_raw: str | None = None
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    metadata: Mapping[str, FrontmatterValue] = field(
        default_factory=dict, compare=False, repr=False
    )

    @classmethod
    def from_frontmatter(
        cls,
        fields: Mapping[str, FrontmatterValue],
        *,
        name: str,
        relative_path: str,
    ) -> PostRecord:
        created_raw = _as_scalar(fields.get("created"))
        return cls(
            name=name,
            relative_path=relative_path,
            title=_as_scalar(fields.get("title")),
            status=_as_scalar(fields.get("status")),
            description=_as_scalar(fields.get("description")),
            slug=_as_scalar(fields.get("slug")),
            created=parse_date(created_raw),
            created_raw=created_raw,
            categories=_as_list(fields.get("categories")),
            tags=_as_list(fields.get("tags")),
            metadata=dict(fields),
        )

    @property
    def sort_date(self) -> datetime:
        return self.created or datetime.min


@dataclass(frozen=True, slots=True)
class TagGroup:
    label: str
    tags: frozenset[str]

    def matches(self, record: PostRecord) -> bool:
        return any(tag in self.tags for tag in record.tags)


def build_tag_groups(raw: Any) -> tuple[TagGroup, ...]:
    """Convert a ``label -> [tags]`` mapping into ordered tag groups."""

    if raw is None:
        return ()
    if not isinstance(raw, Mapping):
        raise ConfigError(
            "`tag_groups` must be a table of label = [tags].",
            hint='Example: [tag_groups]\n"Troubleshooting" = ["debugging"]',
        )
    groups: list[TagGroup] = []
    for label, tags in raw.items():
        if isinstance(tags, str) or not isinstance(tags, Iterable):
            raise ConfigError(f"Tag group {label!r} must be a list of tags.")
        groups.append(
            TagGroup(
                label=str(label),
                tags=frozenset(str(tag).strip() for tag in tags if str(tag).strip()),
            )
        )
    return tuple(groups)


# --- Config. ---
@dataclass(frozen=True, slots=True)
class IndexRendererConfig:
    """Index rendering settings (title, intro, tag groups)."""

    title: str = DEFAULT_INDEX_TITLE
    intro: str = DEFAULT_INDEX_INTRO
    tag_groups: tuple[TagGroup, ...] = field(
        default_factory=lambda: build_tag_groups(DEFAULT_TAG_GROUPS)
    )

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> IndexRendererConfig:
        title = str(settings.get("index_title") or DEFAULT_INDEX_TITLE)
        intro = str(settings.get("index_intro") or DEFAULT_INDEX_INTRO)
        tag_groups = build_tag_groups(settings.get("tag_groups", DEFAULT_TAG_GROUPS))
        return cls(title=title, intro=intro, tag_groups=tag_groups)
