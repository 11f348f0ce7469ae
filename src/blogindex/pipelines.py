"""pipelines"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blogindex import config
from blogindex.errors import NoPostsFoundError, PostRepositoryError
from blogindex.logging import get_logger
from blogindex.posts import IndexRenderer, IndexRendererConfig, PostExtractor, PostRecord
from blogindex.repositories import IndexRepository, PostRepository


@dataclass(frozen=True, slots=True)
class BuildResult:
    documents_found: int
    posts_processed: int
    skipped: tuple[str, ...]
    output_path: Path
    content: str
    written: bool
    changed: bool


def _merge_config(cli_options: Mapping[str, Any] | None) -> dict[str, Any]:
    return config.get_config(cli_options or {})


def collect_posts(
    post_repository: PostRepository,
    extractor: PostExtractor,
    logger: logging.Logger,
) -> tuple[list[PostRecord], list[Path], list[str]]:
    """Extract every document in scan order; returns (records, documents, skipped)."""

    documents = post_repository.list_documents()
    records: list[PostRecord] = []
    skipped: list[str] = []
    for path in documents:
        relative_path = post_repository.relative_path(path)
        try:
            text = post_repository.read(path)
        except PostRepositoryError as exc:
            logger.error("Skipping %s: %s", relative_path, exc)
            skipped.append(relative_path)
            continue
        record = extractor.extract(text, name=path.name, relative_path=relative_path)
        if record is None:
            skipped.append(relative_path)
            continue
        records.append(record)
    return records, documents, skipped


def run_build(cli_options: Mapping[str, Any] | None = None) -> BuildResult:
    """
    Build command
    """

    settings = _merge_config(cli_options)
    verbose = bool(settings.get("verbose", False))
    logger = get_logger("blogindex.build", verbose)
    dry_run = bool(settings.get("dry_run", False))
    check = bool(settings.get("check", False))

    post_repository = PostRepository.from_settings(settings)
    index_repository = IndexRepository.from_settings(settings)
    extractor = PostExtractor(logger=get_logger("blogindex.extract", verbose))
    renderer = IndexRenderer(IndexRendererConfig.from_settings(settings))

    logger.info("Scanning %s for posts...", post_repository.config.root_dir)
    records, documents, skipped = collect_posts(post_repository, extractor, logger)
    logger.info(
        "Found %s document(s); processed %s post(s), skipped %s.",
        len(documents),
        len(records),
        len(skipped),
    )
    if not records:
        root_dir = post_repository.config.root_dir
        raise NoPostsFoundError(
            f"No posts with valid frontmatter found under {root_dir}",
            hint="Each post must start with a '---' header block. The index was not written.",
        )

    content = renderer.render(records)
    output_path = index_repository.path

    if dry_run or check:
        changed = not index_repository.is_current(content)
        if check:
            logger.info(
                "Index %s is %s.", output_path, "out of date" if changed else "up to date"
            )
        return BuildResult(
            documents_found=len(documents),
            posts_processed=len(records),
            skipped=tuple(skipped),
            output_path=output_path,
            content=content,
            written=False,
            changed=changed,
        )

    changed = index_repository.write(content)
    if changed:
        logger.info("Wrote index -> %s", output_path)
    else:
        logger.info("Index unchanged -> %s", output_path)
    return BuildResult(
        documents_found=len(documents),
        posts_processed=len(records),
        skipped=tuple(skipped),
        output_path=output_path,
        content=content,
        written=True,
        changed=changed,
    )


def run_init(cli_options: Mapping[str, Any] | None = None):
    """Init command."""
    logger = get_logger("blogindex.init", False)
    init_result = config.initialize_config(cli_options)

    if init_result.config_created:
        logger.info("Config created at %s", init_result.config_path)
    elif init_result.config_updated_keys:
        logger.info(
            "Config updated at %s (added: %s)",
            init_result.config_path,
            ", ".join(init_result.config_updated_keys),
        )
    else:
        logger.info("Config already exists at %s", init_result.config_path)
    return init_result


def _format_setting(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(f'"{item}"' for item in value) + "]"
    return f'"{value}"'


def run_config_show(cli_options: Mapping[str, Any] | None = None) -> str:
    settings = config.get_config_with_sources(cli_options)
    lines = ["Effective configuration:"]
    for key in sorted(settings):
        if key == "tag_groups":
            continue
        value, source = settings[key]
        lines.append(f"  {key} = {_format_setting(value)}  ({source})")

    tag_groups, source = settings.get("tag_groups", ({}, "default"))
    lines.append(f"[tag_groups]  ({source})")
    if isinstance(tag_groups, Mapping):
        for label, tags in tag_groups.items():
            lines.append(f"  {label} = {_format_setting(list(tags))}")
    output = "\n".join(lines)
    print(output)
    return output


def run_config_set(cli_options: Mapping[str, Any] | None = None) -> bool:
    logger = get_logger("blogindex.config", False)
    cli_options = dict(cli_options or {})
    key = str(cli_options.pop("setting_key"))
    value = config.coerce_setting(key, str(cli_options.pop("setting_value")))
    config_path = Path(config.get_config(cli_options)["config_path"])
    updated = config.update_config_value(config_path, key, value)
    if updated:
        logger.info("Config updated: %s=%s (%s)", key, value, config_path)
    else:
        logger.info("Config already set: %s=%s (%s)", key, value, config_path)
    return updated
