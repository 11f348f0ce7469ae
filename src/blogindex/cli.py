"""Command-line interface entry point for blogindex."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Any

from blogindex import __version__, pipelines
from blogindex.errors import BlogIndexError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogindex", description="Blogindex command-line interface"
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command")

    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--config-path", dest="config_path", help="Override path to config file"
    )
    shared.add_argument(
        "--root",
        dest="root_dir",
        help="Blog root directory (default: current directory)",
    )

    build = subparsers.add_parser(
        "build", parents=[shared], help="Regenerate the README index"
    )
    build.add_argument(
        "--output",
        dest="output_file",
        help="Index file, relative to the root directory",
    )
    build.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        default=None,
        help="Print the index instead of writing it",
    )
    build.add_argument(
        "--check",
        dest="check",
        action="store_true",
        default=None,
        help="Exit with status 1 if the index is out of date",
    )
    build.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )

    subparsers.add_parser(
        "init", parents=[shared], help="Write a default blogindex.toml"
    )

    config = subparsers.add_parser("config", parents=[shared], help="Inspect or edit configuration")
    config_subparsers = config.add_subparsers(dest="config_command")
    config_subparsers.add_parser("show", help="Show the effective configuration")
    config_set = config_subparsers.add_parser(
        "set", help="Write one setting to the config file"
    )
    config_set.add_argument("setting_key", metavar="KEY", help="Setting name")
    config_set.add_argument("setting_value", metavar="VALUE", help="New value")

    return parser


def _normalize_cli_options(namespace: argparse.Namespace) -> dict[str, Any]:
    cli_options = {
        key: value
        for key, value in vars(namespace).items()
        if key not in {"command", "config_command"}
    }
    return {key: value for key, value in cli_options.items() if value is not None}


def _run_build(cli_options: dict[str, Any]) -> int:
    result = pipelines.run_build(cli_options)
    if cli_options.get("dry_run"):
        sys.stdout.write(result.content)
        return 0
    if cli_options.get("check"):
        return 1 if result.changed else 0
    print(
        f"Processed {result.posts_processed} of {result.documents_found} "
        f"document(s) -> {result.output_path}"
    )
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command is None:
        parser.print_help()
        return

    cli_options = _normalize_cli_options(args)
    try:
        if args.command == "build":
            exit_code = _run_build(cli_options)
        elif args.command == "init":
            pipelines.run_init(cli_options)
            exit_code = 0
        elif args.command == "config" and args.config_command == "set":
            pipelines.run_config_set(cli_options)
            exit_code = 0
        elif args.command == "config":
            # `config` alone behaves like `config show`.
            pipelines.run_config_show(cli_options)
            exit_code = 0
        else:  # pragma: no cover - argparse enforces choices
            raise ValueError(f"Unknown command: {args.command}")
    except BlogIndexError as exc:
        print(f"blogindex: error: {exc}", file=sys.stderr)
        if exc.hint:
            print(f"blogindex: hint: {exc.hint}", file=sys.stderr)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
