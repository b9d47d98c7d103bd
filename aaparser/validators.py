# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value validators for option and operand values.

A `Validator` pairs a predicate with an optional error message template. Templates use
`string.Template` syntax and the placeholder `${value}` is replaced with the rejected
input when the error is reported.

Validators are run as an ordered chain by `run_validators()`, which stops at the first
predicate returning False. An empty chain accepts everything.

Included factories:
- int_range_validator: Enforces integer input within a range.
- words_validator: Accepts specific words (case-insensitive).
- choices_validator: Accepts exact members of a fixed set.
- pattern_validator: Accepts values fully matching a regular expression.
- convertible: Accepts values that `coerce_value` can convert to a type.
- path_exists_validator: Accepts paths that exist on disk.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Any, Callable, Iterable, Sequence


@dataclass(frozen=True)
class Validator:
    """
    A predicate over a raw string value with an optional error message template.

    Attributes:
        predicate (Callable[[str], bool]): Returns True if the value is acceptable.
        message (str | None): Error template; `${value}` is replaced with the input.
    """

    predicate: Callable[[str], bool]
    message: str | None = None

    @classmethod
    def from_callable(
        cls, predicate: Callable[[str], bool], error_message: str | None = None
    ) -> Validator:
        return cls(predicate=predicate, message=error_message)

    def __call__(self, value: str) -> bool:
        return bool(self.predicate(value))

    def format_message(self, value: str) -> str | None:
        """Return the error template with the rejected value substituted in."""
        if self.message is None:
            return None
        return Template(self.message).safe_substitute(value=value)


def as_validator(obj: Validator | Callable[[str], bool]) -> Validator:
    """Wrap a bare predicate as a `Validator` without a message."""
    if isinstance(obj, Validator):
        return obj
    if callable(obj):
        return Validator(predicate=obj)
    raise TypeError(f"Validator must be callable, got {type(obj).__name__}")


def run_validators(validators: Sequence[Validator], value: str) -> Validator | None:
    """
    Run a validator chain against a value.

    Returns:
        Validator | None: The first validator that rejected the value, or None.
    """
    for validator in validators:
        if not validator(value):
            return validator
    return None


def int_range_validator(minimum: int, maximum: int) -> Validator:
    """Validator for integer ranges."""

    def validate(text: str) -> bool:
        try:
            value = int(text)
            if not minimum <= value <= maximum:
                return False
            return True
        except ValueError:
            return False

    return Validator.from_callable(
        validate,
        error_message=f"Invalid value '${{value}}'. Enter a number between {minimum} and {maximum}.",
    )


def words_validator(words: Iterable[str], error_message: str | None = None) -> Validator:
    """Validator for specific word inputs."""
    words = list(words)
    upper = {word.upper() for word in words}

    def validate(text: str) -> bool:
        return text.upper() in upper

    if error_message is None:
        error_message = f"Invalid value '${{value}}'. Choices: {{{', '.join(words)}}}."

    return Validator.from_callable(validate, error_message=error_message)


def choices_validator(choices: Iterable[Any]) -> Validator:
    """Validator for exact membership in a fixed set of choices."""
    allowed = [str(choice) for choice in choices]

    def validate(text: str) -> bool:
        return text in allowed

    return Validator.from_callable(
        validate,
        error_message=f"Invalid value '${{value}}'. Must be one of {{{', '.join(allowed)}}}.",
    )


def pattern_validator(
    pattern: str | re.Pattern[str], error_message: str | None = None
) -> Validator:
    """Validator for values fully matching a regular expression."""
    compiled = re.compile(pattern)

    def validate(text: str) -> bool:
        return compiled.fullmatch(text) is not None

    if error_message is None:
        error_message = f"Invalid value '${{value}}'. Must match {compiled.pattern!r}."

    return Validator.from_callable(validate, error_message=error_message)


def convertible(target_type: Any) -> Validator:
    """Validator accepting values that can be coerced to `target_type`."""
    from aaparser.parser.utils import coerce_value

    def validate(text: str) -> bool:
        try:
            coerce_value(text, target_type)
        except Exception:
            return False
        return True

    name = getattr(target_type, "__name__", str(target_type))
    return Validator.from_callable(
        validate, error_message=f"Invalid value '${{value}}'. Expected {name}."
    )


def path_exists_validator() -> Validator:
    """Validator for paths that exist on disk."""

    def validate(text: str) -> bool:
        return Path(text).expanduser().exists()

    return Validator.from_callable(
        validate, error_message="No such file or directory: ${value}"
    )
