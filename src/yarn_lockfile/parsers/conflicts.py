"""Resolve unresolved git merge conflicts embedded in a lockfile.

A conflicted lockfile is split into the "ours" and "theirs" variants of its
first conflict region (dropping any ``|||||||`` common ancestor section), each
variant is parsed on its own and the two results are merged, the second
variant winning on top-level key collisions.
"""

from __future__ import annotations

import logging
import re
from typing import TypeAlias
from collections.abc import Callable

from ..errors import ConflictStructureError, LockfileError
from ..outcome import ParseOutcome, ParseStatus

logger = logging.getLogger(__name__)

MERGE_CONFLICT_START = "<<<<<<<"
MERGE_CONFLICT_ANCESTOR = "|||||||"
MERGE_CONFLICT_SEP = "======="
MERGE_CONFLICT_END = ">>>>>>>"

_LINE_BREAK = re.compile(r"\r?\n")

VariantParser: TypeAlias = Callable[[str], ParseOutcome]


def has_merge_conflict(text: str) -> bool:
    """Return True when all three conflict markers appear somewhere in ``text``."""
    return (
        MERGE_CONFLICT_START in text
        and MERGE_CONFLICT_SEP in text
        and MERGE_CONFLICT_END in text
    )


def extract_conflict_variants(text: str) -> tuple[str, str]:
    """Return the two conflict-free texts for the first conflict region.

    Raises:
        ConflictStructureError: if the start, separator or end marker lines
            cannot be found in order.
    """
    lines = _LINE_BREAK.split(text)
    index = 0

    common_start: list[str] = []
    while index < len(lines) and not lines[index].startswith(MERGE_CONFLICT_START):
        common_start.append(lines[index])
        index += 1
    if index == len(lines):
        raise ConflictStructureError("Merge conflict start marker not found")
    start_line = index + 1
    index += 1

    ours: list[str] = []
    in_ancestor = False
    while True:
        if index == len(lines):
            raise ConflictStructureError(
                f"Merge conflict opened at line {start_line} has no separator"
            )
        line = lines[index]
        index += 1
        if line == MERGE_CONFLICT_SEP:
            break
        if in_ancestor or line.startswith(MERGE_CONFLICT_ANCESTOR):
            in_ancestor = True
            continue
        ours.append(line)

    theirs: list[str] = []
    while True:
        if index == len(lines):
            raise ConflictStructureError(
                f"Merge conflict opened at line {start_line} has no end marker"
            )
        line = lines[index]
        index += 1
        if line.startswith(MERGE_CONFLICT_END):
            break
        theirs.append(line)

    common_end = lines[index:]
    logger.debug(
        "Extracted merge conflict at line %d (%d/%d lines)", start_line, len(ours), len(theirs)
    )
    return (
        "\n".join(common_start + ours + common_end),
        "\n".join(common_start + theirs + common_end),
    )


def _parse_variant(parse_variant: VariantParser, text: str, variant: int) -> ParseOutcome:
    try:
        return parse_variant(text)
    except ConflictStructureError:
        raise
    except LockfileError as exc:
        raise ConflictStructureError(
            f"Merge conflict variant {variant} could not be parsed: {exc.message}",
            token=exc.token,
            variant=variant,
        ) from exc


def merge_comments(first: list[str], second: list[str]) -> list[str]:
    """Concatenate two comment lists, keeping the first occurrence of each."""
    return list(dict.fromkeys([*first, *second]))


def resolve_conflicts(text: str, parse_variant: VariantParser) -> ParseOutcome:
    """Parse both sides of the first conflict region and merge the results.

    ``parse_variant`` is the full parsing pipeline; it must raise a
    ``LockfileError`` on failure and is expected to handle any further
    conflicts left in the shared suffix.
    """
    variant1, variant2 = extract_conflict_variants(text)
    first = _parse_variant(parse_variant, variant1, 1)
    second = _parse_variant(parse_variant, variant2, 2)

    return ParseOutcome(
        status=ParseStatus.MERGE,
        mapping={**first.mapping, **second.mapping},
        comments=merge_comments(first.comments, second.comments),
    )
