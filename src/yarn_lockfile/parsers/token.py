"""Scan yarn lockfile text into a token stream."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import ScanError


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    COLON = "colon"
    COMMA = "comma"
    NEW_LINE = "new_line"
    INDENT = "indent"
    COMMENT = "comment"
    EOF = "eof"
    INVALID = "invalid"


_VALUE_KINDS = {TokenKind.BOOLEAN, TokenKind.STRING, TokenKind.NUMBER}

_DIGITS = re.compile(r"[0-9]+")
_SPACES = re.compile(r" +")
_BARE_STRING_START = re.compile(r"[a-zA-Z/.-]")
_BARE_STRING = re.compile(r"[^: \r\n,]+")


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical token with its 1-based source line and column."""

    kind: TokenKind
    line: int
    column: int
    value: Any = None

    @property
    def is_value(self) -> bool:
        """Return True for tokens that may stand as a property value."""
        return self.kind in _VALUE_KINDS

    def describe(self) -> str:
        if self.value is None:
            return f"{self.kind.value} at line {self.line}, column {self.column}"
        return f"{self.kind.value} {self.value!r} at line {self.line}, column {self.column}"


def _scan_quoted(text: str, start: int) -> int:
    """Return the index of the closing quote of the string opened at ``start``."""
    pos = start + 1
    while pos < len(text):
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == '"':
            return pos
        if char == "\n":
            break
        pos += 1
    return -1


def _unescape(raw: str, token: Token) -> str:
    try:
        return json.loads(f'"{raw}"', strict=False)
    except json.JSONDecodeError as exc:
        raise ScanError(f"Invalid string escape ({exc.msg})", token) from exc


def tokenize(text: str) -> list[Token]:
    """Return the tokens of ``text``, terminated by a single EOF token.

    Raises:
        ScanError: on odd indentation, an unterminated string or a character
            that cannot start any token.
    """
    tokens: list[Token] = []
    line = 1
    column = 1
    pos = 0
    last_new_line = False
    length = len(text)

    while pos < length:
        char = text[pos]
        after_new_line = last_new_line
        last_new_line = False

        if char == "\n" or text.startswith("\r\n", pos):
            chop = 1 if char == "\n" else 2
            line += 1
            column = chop - 1
            tokens.append(Token(TokenKind.NEW_LINE, line, column))
            pos += chop
            column += 1
            last_new_line = True
            continue

        if char == "#":
            end = text.find("\n", pos + 1)
            if end == -1:
                end = length
            chop = end - pos
            value = text[pos + 1 : end]
            if value.endswith("\r"):
                value = value[:-1]
                # leave the CR for the CRLF rule
                if end < length:
                    chop -= 1
            tokens.append(Token(TokenKind.COMMENT, line, column, value))
        elif char == " ":
            if after_new_line:
                chop = _SPACES.match(text, pos).end() - pos
                if chop % 2:
                    raise ScanError(
                        "Invalid number of spaces", Token(TokenKind.INVALID, line, column)
                    )
                tokens.append(Token(TokenKind.INDENT, line, column, chop // 2))
            else:
                chop = 1
        elif char == '"':
            end = _scan_quoted(text, pos)
            if end == -1:
                raise ScanError("Unterminated string", Token(TokenKind.INVALID, line, column))
            token = Token(TokenKind.STRING, line, column)
            value = _unescape(text[pos + 1 : end], token)
            tokens.append(Token(TokenKind.STRING, line, column, value))
            chop = end - pos + 1
        elif text.startswith("true", pos):
            tokens.append(Token(TokenKind.BOOLEAN, line, column, True))
            chop = 4
        elif text.startswith("false", pos):
            tokens.append(Token(TokenKind.BOOLEAN, line, column, False))
            chop = 5
        elif char == ":":
            tokens.append(Token(TokenKind.COLON, line, column))
            chop = 1
        elif char == ",":
            tokens.append(Token(TokenKind.COMMA, line, column))
            chop = 1
        elif char.isascii() and char.isdigit():
            digits = _DIGITS.match(text, pos).group()
            tokens.append(Token(TokenKind.NUMBER, line, column, int(digits)))
            chop = len(digits)
        elif _BARE_STRING_START.match(char):
            name = _BARE_STRING.match(text, pos).group()
            tokens.append(Token(TokenKind.STRING, line, column, name))
            chop = len(name)
        else:
            raise ScanError(
                f"Unexpected character {char!r}", Token(TokenKind.INVALID, line, column, char)
            )

        pos += chop
        column += chop

    tokens.append(Token(TokenKind.EOF, line, column))
    return tokens
