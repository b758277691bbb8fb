"""CLI entrypoint for parsing a yarn lockfile and printing it as JSON.

Usage:
  yarn-lockfile path/to/yarn.lock [--lockfile] [--no-yaml-fallback] [--config PATH]
  yarn-lockfile https://example.com/yarn.lock

Exit codes: 0 on success (including merged conflicts), 1 on parse, source or
configuration errors, 2 when merge conflicts could not be resolved.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import PurePosixPath

from .config import ConfigError, load_settings
from .core import parse
from .errors import ConflictStructureError, LockfileError
from .models import Lockfile
from .sources import SourceError, is_url, read_lockfile_text

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFLICT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="yarn-lockfile", description="Parse a yarn lockfile and print it as JSON"
    )
    parser.add_argument("source", help="Path or http(s) URL of the lockfile")
    parser.add_argument(
        "--lockfile",
        action="store_true",
        help="Print the typed lockfile (version, dependencies) instead of the raw mapping",
    )
    parser.add_argument(
        "--no-yaml-fallback",
        action="store_true",
        help="Do not retry as YAML when the lockfile format cannot be parsed",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON settings file")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def _file_loc(source: str) -> str:
    if is_url(source):
        return PurePosixPath(source.split("?", 1)[0]).name or "lockfile"
    return PurePosixPath(source).name


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        text = read_lockfile_text(args.source)
    except (ConfigError, SourceError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.no_yaml_fallback:
        settings = replace(settings, yaml_fallback=False)

    outcome = parse(text, file_loc=_file_loc(args.source), settings=settings)
    if outcome.error is not None:
        print(f"ERROR: {outcome.error}", file=sys.stderr)
        if isinstance(outcome.error, ConflictStructureError):
            return EXIT_CONFLICT
        return EXIT_ERROR

    if args.lockfile:
        try:
            payload = Lockfile.from_parse_result(outcome.mapping, outcome.comments).to_dict()
        except (LockfileError, ValueError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return EXIT_ERROR
        payload["status"] = outcome.status.value
    else:
        payload = outcome.to_dict()

    print(json.dumps(payload, indent=2, default=str))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
