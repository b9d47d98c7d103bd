# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by aaparser.

Declaration mistakes (a malformed flag, a duplicate name, an invalid arity) are raised as
`CommandConfigError` while the command tree is being built. Everything that goes wrong
while parsing input tokens is a `CommandArgumentError` carrying a `ParseErrorKind`, the
offending token and the command path of the level that failed, so that a reporting sink
can decide how to present it.

All exceptions inherit from `AAParserError`, the base exception for the package.

Exception Hierarchy:
- AAParserError
    ├── CommandConfigError
    └── CommandArgumentError
        ├── UnknownOptionError
        ├── MissingValueError
        ├── InvalidOptionValueError
        ├── InvalidOperandValueError
        ├── ArityViolationError
        ├── MissingRequiredOptionError
        └── TooManyArgumentsError

Parse errors are fail-fast: the first one raised aborts the whole recursive parse.
"""
from __future__ import annotations

from enum import Enum


class ParseErrorKind(Enum):
    """Kinds of parse failures."""

    UNKNOWN_OPTION = "unknown_option"
    MISSING_VALUE = "missing_value"
    INVALID_OPTION_VALUE = "invalid_option_value"
    INVALID_OPERAND_VALUE = "invalid_operand_value"
    ARITY_VIOLATION = "arity_violation"
    MISSING_REQUIRED_OPTION = "missing_required_option"
    TOO_MANY_ARGUMENTS = "too_many_arguments"

    def __str__(self) -> str:
        return self.value


class ArityReason(Enum):
    """Which side of an operand arity bound was violated."""

    TOO_FEW = "too_few"
    TOO_MANY = "too_many"

    def __str__(self) -> str:
        return self.value


class AAParserError(Exception):
    """Base exception for aaparser."""


class CommandConfigError(AAParserError):
    """Exception raised when a command tree is declared incorrectly."""


class CommandArgumentError(AAParserError):
    """Exception raised when input tokens cannot be parsed against a command tree."""

    kind: ParseErrorKind

    def __init__(
        self,
        message: str,
        *,
        token: str | None = None,
        command: tuple[str, ...] = (),
        value: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        self.command = command
        self.value = value

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind}, token={self.token!r}, "
            f"command={' '.join(self.command)!r}, message={self.message!r})"
        )


class UnknownOptionError(CommandArgumentError):
    """Raised when an option-shaped token matches no option of the current command."""

    kind = ParseErrorKind.UNKNOWN_OPTION


class MissingValueError(CommandArgumentError):
    """Raised when a value-taking option is the last token of the input."""

    kind = ParseErrorKind.MISSING_VALUE


class InvalidOptionValueError(CommandArgumentError):
    """Raised when an option value is rejected by one of its validators."""

    kind = ParseErrorKind.INVALID_OPTION_VALUE


class InvalidOperandValueError(CommandArgumentError):
    """Raised when an operand value is rejected by one of its validators."""

    kind = ParseErrorKind.INVALID_OPERAND_VALUE


class ArityViolationError(CommandArgumentError):
    """Raised when the positional tokens cannot satisfy the declared operand arities."""

    kind = ParseErrorKind.ARITY_VIOLATION

    def __init__(
        self,
        message: str,
        *,
        reason: ArityReason,
        token: str | None = None,
        command: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, token=token, command=command)
        self.reason = reason


class MissingRequiredOptionError(CommandArgumentError):
    """Raised when a required option was never matched at its command level."""

    kind = ParseErrorKind.MISSING_REQUIRED_OPTION

    def __init__(
        self,
        message: str,
        *,
        flags: tuple[str, ...],
        command: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, token=flags[0] if flags else None, command=command)
        self.flags = flags


class TooManyArgumentsError(CommandArgumentError):
    """Raised when a token is left over after the root command finished dispatch."""

    kind = ParseErrorKind.TOO_MANY_ARGUMENTS
