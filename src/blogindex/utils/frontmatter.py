"""Line-based parser for the blog's frontmatter subset.

Supported values are plain scalars, quoted scalars and single-level bracket
lists. Quoted list elements containing commas, escaped quotes and nested
brackets are not supported.
"""

from __future__ import annotations

import re

from blogindex.errors import MissingFrontmatterError, UnterminatedFrontmatterError

FrontmatterValue = str | tuple[str, ...]

MARKER = "---"
_BOM = "\ufeff"
_LINE_REGEX = re.compile(r"^\s*(?P<key>[^:\s][^:]*?)\s*:(?P<value>.*)$")


def split_frontmatter(text: str) -> tuple[list[str], str]:
    """Return (header lines, body) or raise when the header is missing."""

    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != MARKER:
        raise MissingFrontmatterError("no frontmatter")
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == MARKER:
            return lines[1:idx], "\n".join(lines[idx + 1 :])
    raise UnterminatedFrontmatterError("unterminated frontmatter")


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def parse_list(value: str) -> tuple[str, ...]:
    stripped = value.strip()
    if not stripped.startswith("[") or not stripped.endswith("]"):
        return ()
    raw = stripped[1:-1].strip()
    if not raw:
        return ()
    items: list[str] = []
    for part in raw.split(","):
        item = unquote(part.strip())
        if item:
            items.append(item)
    return tuple(items)


def parse_value(raw: str) -> FrontmatterValue:
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return unquote(value)
    if value.startswith("[") and value.endswith("]"):
        return parse_list(value)
    return value


def parse_header(lines: list[str]) -> dict[str, FrontmatterValue]:
    meta: dict[str, FrontmatterValue] = {}
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = _LINE_REGEX.match(line)
        if not match:
            continue
        meta[match.group("key")] = parse_value(match.group("value"))
    return meta


def parse_frontmatter(text: str) -> dict[str, FrontmatterValue]:
    header, _ = split_frontmatter(text)
    return parse_header(header)
