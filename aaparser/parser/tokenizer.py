# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw input tokens for the command parser.

The grammar recognized here:

- Short option cluster: `-X[Y...]` where every character after the dash is an ASCII
  letter or digit. `X` is the flag to resolve now, the rest is re-queued as `-Y...`.
- Long option: `--name[=value]` where `name` starts with an ASCII letter followed by
  letters, digits and hyphens. The part after `=` (possibly empty) is re-queued as a
  bare value token.
- Literal marker: exactly `--`. Every later token at the same command level is a
  positional value.
- Anything else is a positional token (operand value or subcommand name).

Classification scans characters directly instead of using regular expressions.
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

LITERAL_MARKER = "--"

_LETTERS = frozenset(string.ascii_letters)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_LONG_NAME = frozenset(string.ascii_letters + string.digits + "-")


class TokenKind(Enum):
    """Shape of a raw token."""

    SHORT = "short"
    LONG = "long"
    LITERAL = "literal"
    POSITIONAL = "positional"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """
    A classified raw token.

    Attributes:
        kind (TokenKind): The token shape.
        raw (str): The token as it appeared in the input.
        flag (str | None): The flag to resolve, for short and long options.
        rest (str): Remaining characters of a short option cluster.
        value (str | None): Value attached with `=` to a long option, None if absent.
    """

    kind: TokenKind
    raw: str
    flag: str | None = None
    rest: str = ""
    value: str | None = None

    @property
    def is_option(self) -> bool:
        return self.kind in (TokenKind.SHORT, TokenKind.LONG)


def _scan_long(token: str) -> Token | None:
    body = token[2:]
    if not body or body[0] not in _LETTERS:
        return None
    for index, char in enumerate(body):
        if char == "=":
            return Token(
                TokenKind.LONG, token, flag=f"--{body[:index]}", value=body[index + 1 :]
            )
        if char not in _LONG_NAME:
            return None
    return Token(TokenKind.LONG, token, flag=token)


def _scan_short(token: str) -> Token | None:
    body = token[1:]
    if not body or any(char not in _ALNUM for char in body):
        return None
    return Token(TokenKind.SHORT, token, flag=f"-{body[0]}", rest=body[1:])


def classify(token: str) -> Token:
    """Classify a raw token according to the option grammar."""
    if token == LITERAL_MARKER:
        return Token(TokenKind.LITERAL, token)
    if token.startswith("--"):
        scanned = _scan_long(token)
    elif token.startswith("-"):
        scanned = _scan_short(token)
    else:
        scanned = None
    return scanned or Token(TokenKind.POSITIONAL, token)


def is_short_flag(flag: str) -> bool:
    """True if `flag` is a single short flag such as `-v`."""
    return len(flag) == 2 and flag[0] == "-" and flag[1] in _ALNUM


def is_long_flag(flag: str) -> bool:
    """True if `flag` is a long flag such as `--dry-run` (without a value)."""
    scanned = _scan_long(flag) if flag.startswith("--") else None
    return scanned is not None and scanned.value is None
