"""Parse a yarn lockfile token stream into a nested mapping.

The grammar is indentation driven: each ``key:`` opening an object starts a
child scope one level deeper, and a scope ends as soon as a line is indented
less than its level. Comments never reach the grammar; they are collected on
the side (validating any ``yarn lockfile vN`` pragma) and returned in file
order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any

from ..errors import TruncatedInputError, UnexpectedTokenError, UnsupportedVersionError
from .token import Token, TokenKind, tokenize

LOCKFILE_VERSION = 1

VERSION_PRAGMA = re.compile(r"^yarn lockfile v(\d+)$")


@dataclass(slots=True)
class ParseState:
    """Cursor and accumulated output of one parser scope.

    A child scope shares the token sequence with its parent but owns a fresh
    ``result``; the parent adopts its position and comments once it returns.
    """

    tokens: list[Token]
    position: int = 0
    indent: int = 0
    result: dict[str, Any] = field(default_factory=dict)
    comments: list[str] = field(default_factory=list)
    current: Token | None = None

    def spawn_child(self) -> ParseState:
        return replace(self, indent=self.indent + 1, result={})

    def adopt(self, child: ParseState) -> None:
        self.position = child.position
        self.comments = child.comments
        self.current = child.current

    def assign(self, keys: list[str], value: Any) -> None:
        for key in keys:
            self.result[key] = value


def _check_version(token: Token) -> None:
    match = VERSION_PRAGMA.match(token.value.strip())
    if match is None:
        return
    version = int(match.group(1))
    if version > LOCKFILE_VERSION:
        raise UnsupportedVersionError(
            f"Lockfile version {version} is not supported", version=version, token=token
        )


def _advance(state: ParseState) -> Token:
    """Move to the next grammar token, recording any comments on the way."""
    while True:
        if state.position >= len(state.tokens):
            raise TruncatedInputError("No more tokens", state.current)
        token = state.tokens[state.position]
        state.position += 1
        state.current = token
        if token.kind is not TokenKind.COMMENT:
            return token
        _check_version(token)
        state.comments.append(token.value)


def _continues_scope(state: ParseState, token: Token) -> bool:
    """Return True when an indent token keeps the parser in the current scope."""
    if token.value == state.indent:
        return True
    if token.value > state.indent:
        raise UnexpectedTokenError("Unexpected indentation", token)
    return False


def _is_blank_line(state: ParseState) -> bool:
    """Return True when only comments follow the current indent on its line."""
    position = state.position
    while position < len(state.tokens):
        kind = state.tokens[position].kind
        if kind is not TokenKind.COMMENT:
            return kind in (TokenKind.NEW_LINE, TokenKind.EOF)
        position += 1
    return False


def _collect_keys(state: ParseState, first: str) -> list[str]:
    keys = [first]
    token = _advance(state)
    while token.kind is TokenKind.COMMA:
        token = _advance(state)
        if token.kind is not TokenKind.STRING:
            raise UnexpectedTokenError("Expected string", token)
        keys.append(token.value)
        token = _advance(state)
    return keys


def _parse_scope(state: ParseState) -> None:
    """Consume entries at ``state.indent`` until the scope ends or input runs out.

    On return ``state.current`` is the first token that does not belong to the
    scope (or EOF).
    """
    while True:
        token = state.current

        if token.kind is TokenKind.NEW_LINE:
            token = _advance(state)
            if token.kind is TokenKind.INDENT and _is_blank_line(state):
                _advance(state)
                continue
            if state.indent == 0:
                continue
            if token.kind is not TokenKind.INDENT or not _continues_scope(state, token):
                return
            _advance(state)
            continue

        if token.kind is TokenKind.INDENT:
            if not _continues_scope(state, token):
                return
            _advance(state)
            continue

        if token.kind is TokenKind.EOF:
            return

        if token.kind is not TokenKind.STRING:
            raise UnexpectedTokenError("Unknown token", token)

        keys = _collect_keys(state, token.value)
        was_colon = state.current.kind is TokenKind.COLON
        if was_colon:
            _advance(state)

        if state.current.is_value:
            state.assign(keys, state.current.value)
            _advance(state)
            continue

        if not was_colon:
            raise UnexpectedTokenError("Invalid value type", state.current)

        child = state.spawn_child()
        _parse_scope(child)
        state.assign(keys, child.result)
        state.adopt(child)
        if state.indent != 0 and state.current.kind is not TokenKind.INDENT:
            return


def parse_tokens(tokens: list[Token]) -> tuple[dict[str, Any], list[str]]:
    """Return ``(mapping, comments)`` for a complete token stream.

    Raises:
        UnexpectedTokenError: on a token that does not fit the grammar.
        UnsupportedVersionError: on a ``yarn lockfile vN`` comment with N > 1.
        TruncatedInputError: when the stream ends without an EOF token.
    """
    state = ParseState(tokens=tokens)
    _advance(state)
    _parse_scope(state)
    if state.current.kind is not TokenKind.EOF:
        raise UnexpectedTokenError("Unexpected token", state.current)
    return state.result, state.comments


def parse(text: str) -> tuple[dict[str, Any], list[str]]:
    """Scan and parse lockfile ``text`` (no conflict handling, no fallback)."""
    return parse_tokens(tokenize(text))
