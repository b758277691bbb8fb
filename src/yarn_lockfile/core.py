"""Core parsing entrypoints.

``parse`` never raises on malformed input: failures are returned as a
``ParseOutcome`` with ``status == ParseStatus.ERROR``. ``parse_or_raise`` runs
the same pipeline and raises the error instead. Invalid settings are not
input errors: a ``ConfigError`` from ``load_settings()`` propagates from both.
"""

from __future__ import annotations

import logging

from .config import ParserSettings, load_settings
from .errors import LockfileError, UnsupportedVersionError
from .models import Lockfile
from .outcome import ParseOutcome, ParseStatus
from .parsers import lockfile, yaml_fallback
from .parsers.conflicts import has_merge_conflict, resolve_conflicts

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def _parse_yaml(text: str) -> ParseOutcome:
    return ParseOutcome(status=ParseStatus.SUCCESS, mapping=yaml_fallback.parse(text))


def _parse_yarn(text: str, settings: ParserSettings) -> ParseOutcome:
    try:
        mapping, comments = lockfile.parse(text)
    except UnsupportedVersionError:
        # the pragma identifies the file as a yarn lockfile
        raise
    except LockfileError as exc:
        if not settings.yaml_fallback:
            raise
        logger.debug("Lockfile parse failed (%s); retrying as YAML", exc)
        try:
            return _parse_yaml(text)
        except LockfileError:
            raise exc from None
    return ParseOutcome(status=ParseStatus.SUCCESS, mapping=mapping, comments=comments)


def _run(text: str, file_loc: str, settings: ParserSettings) -> ParseOutcome:
    if text.startswith(BOM):
        text = text[len(BOM) :]

    if has_merge_conflict(text):
        logger.debug("Merge conflict markers found in %s", file_loc)
        return resolve_conflicts(text, lambda variant: _run(variant, file_loc, settings))

    if settings.is_yaml_file(file_loc):
        return _parse_yaml(text)
    return _parse_yarn(text, settings)


def parse_or_raise(
    text: str,
    file_loc: str = "lockfile",
    settings: ParserSettings | None = None,
) -> ParseOutcome:
    """Parse lockfile ``text`` and return its mapping and comments.

    Params:
        text: the lockfile contents, optionally starting with a byte-order mark
        file_loc: the lockfile's name; names ending with a configured YAML
            suffix are parsed as YAML instead of yarn's own format
        settings: parser settings; when None they are loaded with
            ``load_settings()``

    Raises:
        LockfileError: the first error met; ``ConflictStructureError`` when the
            input held merge conflicts that could not be resolved.
    """
    if settings is None:
        settings = load_settings()
    return _run(text, file_loc, settings)


def parse(
    text: str,
    file_loc: str = "lockfile",
    settings: ParserSettings | None = None,
) -> ParseOutcome:
    """Same as ``parse_or_raise`` but returns lockfile errors as an outcome.

    Raises:
        ConfigError: when ``settings`` is None and the settings cannot be loaded.
    """
    try:
        return parse_or_raise(text, file_loc, settings)
    except LockfileError as exc:
        return ParseOutcome.failure(exc)


def parse_to_lockfile(
    text: str,
    file_loc: str = "lockfile",
    settings: ParserSettings | None = None,
) -> Lockfile:
    """Parse ``text`` and wrap the result in a ``Lockfile``; raises on failure."""
    outcome = parse_or_raise(text, file_loc, settings)
    return Lockfile.from_parse_result(outcome.mapping, outcome.comments)


def try_parse_to_lockfile(
    text: str,
    file_loc: str = "lockfile",
    settings: ParserSettings | None = None,
) -> Lockfile | LockfileError:
    """Same as ``parse_to_lockfile`` but returns lockfile errors instead of raising."""
    try:
        return parse_to_lockfile(text, file_loc, settings)
    except LockfileError as exc:
        return exc
