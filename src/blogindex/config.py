"""Configuration loading utilities for blogindex."""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from blogindex.errors import ConfigError
from blogindex.posts.types import (
    DEFAULT_INDEX_INTRO,
    DEFAULT_INDEX_TITLE,
    DEFAULT_TAG_GROUPS,
)
from blogindex.repositories.types import DEFAULT_EXCLUDE_DIRS

_ENV_PREFIX = "BLOGINDEX_"
_CONFIG_FILENAME = "blogindex.toml"


_DEFAULT_SETTINGS: dict[str, Any] = {
    "root_dir": ".",
    "output_file": "README.md",
    "pattern": "*.md",
    "exclude_dirs": list(DEFAULT_EXCLUDE_DIRS),
    "encoding": "utf-8",
    "index_title": DEFAULT_INDEX_TITLE,
    "index_intro": DEFAULT_INDEX_INTRO,
    "verbose": False,
    "tag_groups": DEFAULT_TAG_GROUPS,
}

# Tables and per-run flags cannot come from the environment.
_ENV_EXCLUDED_KEYS = {"tag_groups", "dry_run", "check"}
_SETTABLE_KEYS = sorted(
    key for key in _DEFAULT_SETTINGS if key not in {"root_dir", "tag_groups"}
)


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render_value(item) for item in value) + "]"
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _render_tag_groups(tag_groups: Mapping[str, Any]) -> list[str]:
    lines = ["[tag_groups]"]
    for label, tags in tag_groups.items():
        lines.append(f"{_render_value(label)} = {_render_value(list(tags))}")
    return lines


def _build_default_config_template(settings: Mapping[str, Any]) -> str:
    return "\n".join(
        [
            "# blogindex configuration",
            "#",
            "# Paths are relative to root_dir. Run `blogindex build` after editing.",
            "",
            "# Input & output",
            f"output_file = {_render_value(settings['output_file'])}",
            f"pattern = {_render_value(settings['pattern'])}",
            f"exclude_dirs = {_render_value(settings['exclude_dirs'])}",
            f"encoding = {_render_value(settings['encoding'])}",
            "",
            "# Index text",
            f"index_title = {_render_value(settings['index_title'])}",
            f"index_intro = {_render_value(settings['index_intro'])}",
            "",
            "# Logging",
            f"verbose = {_render_value(settings['verbose'])}",
            "",
            "# Tag groups: heading = [tags]. Groups are listed in this order.",
            *_render_tag_groups(settings["tag_groups"]),
            "",
        ]
    )


def _coerce_env_value(key: str, value: str) -> Any:
    default = _DEFAULT_SETTINGS.get(key)
    if isinstance(default, bool):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(default, list):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def _resolve_config_path(cli_options: Mapping[str, Any] | None) -> Path:
    cli_options = dict(cli_options or {})
    raw_config_path = cli_options.get("config_path")
    if raw_config_path:
        return Path(raw_config_path).expanduser()
    root_dir = (
        cli_options.get("root_dir")
        or os.environ.get(f"{_ENV_PREFIX}ROOT_DIR")
        or _DEFAULT_SETTINGS["root_dir"]
    )
    return Path(str(root_dir)).expanduser() / _CONFIG_FILENAME


def coerce_setting(key: str, value: str) -> Any:
    if key not in _SETTABLE_KEYS:
        raise ConfigError(
            f"Unknown or unsupported setting: {key}",
            hint="Settable keys: " + ", ".join(_SETTABLE_KEYS),
        )
    return _coerce_env_value(key, value)


def update_config_value(config_path: Path, key: str, value: Any) -> bool:
    """Set one top-level key; returns False when the file already had that value."""

    rendered = f"{key} = {_render_value(value)}"
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(rendered + "\n", encoding="utf-8")
        return True

    text = config_path.read_text(encoding="utf-8")
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*=")
    lines = text.splitlines()
    # Top-level keys must precede the first table header.
    table_idx = next(
        (idx for idx, line in enumerate(lines) if line.strip().startswith("[")),
        len(lines),
    )
    for idx in range(table_idx):
        if pattern.match(lines[idx]):
            if lines[idx].strip() == rendered:
                return False
            lines[idx] = rendered
            break
    else:
        insert_at = table_idx
        while insert_at > 0 and not lines[insert_at - 1].strip():
            insert_at -= 1
        lines.insert(insert_at, rendered)
    config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return True


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid config file {path}: {exc}",
            hint="Fix the TOML syntax or regenerate it with `blogindex init`.",
        ) from exc


def _load_env_config() -> dict[str, Any]:
    config: dict[str, Any] = {}
    for env_key, raw_value in os.environ.items():
        if env_key.startswith(_ENV_PREFIX):
            normalized = env_key[len(_ENV_PREFIX) :].lower()
            if normalized in _ENV_EXCLUDED_KEYS:
                continue
            config[normalized] = _coerce_env_value(normalized, raw_value)
    return config


def get_config_with_sources(
    cli_options: Mapping[str, Any] | None = None,
) -> dict[str, tuple[Any, str]]:
    """Return every setting as ``(value, source)``; source is default/file/env/cli."""

    cli_options = dict(cli_options or {})
    config_path = _resolve_config_path(cli_options)

    merged: dict[str, tuple[Any, str]] = {
        key: (value, "default") for key, value in _DEFAULT_SETTINGS.items()
    }
    layers = (
        ("file", _load_file_config(config_path)),
        ("env", _load_env_config()),
        (
            "cli",
            {
                key: value
                for key, value in cli_options.items()
                if value is not None and key != "config_path"
            },
        ),
    )
    for source, layer in layers:
        for key, value in layer.items():
            merged[key] = (value, source)

    config_source = "cli" if cli_options.get("config_path") else "default"
    merged["config_path"] = (str(config_path), config_source)
    return merged


def get_config(cli_options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return {key: value for key, (value, _) in get_config_with_sources(cli_options).items()}


@dataclass(slots=True)
class InitResult:
    config_path: Path
    config_created: bool
    config_updated_keys: list[str]


def initialize_config(cli_options: Mapping[str, Any] | None = None) -> InitResult:
    config_path = _resolve_config_path(cli_options)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    cli_options = dict(cli_options or {})
    init_settings = dict(_DEFAULT_SETTINGS)
    for key, value in cli_options.items():
        if key in init_settings and key != "root_dir" and value is not None:
            init_settings[key] = value

    config_created = False
    config_updated_keys: list[str] = []
    if not config_path.exists():
        config_path.write_text(
            _build_default_config_template(init_settings), encoding="utf-8"
        )
        config_created = True
    else:
        existing = _load_file_config(config_path)
        missing_keys = [
            key
            for key in _DEFAULT_SETTINGS
            if key not in existing and key != "root_dir"
        ]
        if missing_keys:
            config_updated_keys = list(missing_keys)
            scalar_keys = [key for key in missing_keys if key != "tag_groups"]
            existing_text = config_path.read_text(encoding="utf-8")
            # Top-level keys after a table header would land inside that table.
            if scalar_keys and any(
                line.strip().startswith("[") for line in existing_text.splitlines()
            ):
                raise ConfigError(
                    f"Cannot append settings to {config_path}: it already has a table.",
                    hint="Add the missing keys above the first [table] by hand: "
                    + ", ".join(scalar_keys),
                )
            with config_path.open("a", encoding="utf-8") as handle:
                handle.write("\n# Added by blogindex init to ensure required defaults.\n")
                for key in scalar_keys:
                    handle.write(f"{key} = {_render_value(init_settings[key])}\n")
                if "tag_groups" in missing_keys:
                    handle.write("\n".join(_render_tag_groups(init_settings["tag_groups"])))
                    handle.write("\n")

    return InitResult(
        config_path=config_path.resolve(),
        config_created=config_created,
        config_updated_keys=config_updated_keys,
    )
