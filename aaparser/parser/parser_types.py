# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-parse state and result models for the aaparser command parser.

Option and operand specifications are immutable. Everything that changes while a token
list is being parsed lives in the models below, which `Command` creates fresh for every
parse call.

Contents:
- `OptionState`: Tracks an option's value and how often it was matched.
- `OperandState`: Accumulates the values assigned to an operand.
- `ParseResult`: The resolved options and operands of one command level, plus the
  results of the subcommands dispatched from it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

from aaparser.parser.operand import Operand
from aaparser.parser.option import Option

if TYPE_CHECKING:
    from aaparser.parser.command import Command


@dataclass
class OptionState:
    """Tracks an option's current value during one parse."""

    option: Option
    value: Any = None
    matched: int = 0

    @classmethod
    def fresh(cls, option: Option) -> OptionState:
        return cls(option=option, value=option.initial_value())

    @property
    def consumed(self) -> bool:
        return self.matched > 0

    def apply(self, raw: str | None = None) -> Any:
        """Apply one match to the value and return the new value."""
        self.value = self.option.update(self.value, raw)
        self.matched += 1
        return self.value


@dataclass
class OperandState:
    """Accumulates the values assigned to an operand during one parse."""

    operand: Operand
    values: list[str] = field(default_factory=list)

    @property
    def filled(self) -> int:
        return len(self.values)

    def resolve(self) -> Any:
        return self.operand.resolve(self.values)


@dataclass
class ParseResult:
    """
    The outcome of parsing one command level.

    Attributes:
        command (Command): The command this level resolved.
        options (dict[str, Any]): Option name to resolved value, defaults included.
        operands (dict[str, Any]): Operand name to resolved value.
        subcommands (list[ParseResult]): Results of the child commands dispatched from
            this level, in dispatch order.
        residual (list[str]): Tokens this level handed back to its caller unconsumed.
    """

    command: Command
    options: dict[str, Any] = field(default_factory=dict)
    operands: dict[str, Any] = field(default_factory=dict)
    subcommands: list[ParseResult] = field(default_factory=list)
    residual: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.command.name

    @property
    def path(self) -> tuple[str, ...]:
        return self.command.path

    def walk(self) -> Iterator[ParseResult]:
        """Yield this result and every nested subcommand result, in dispatch order."""
        yield self
        for subcommand in self.subcommands:
            yield from subcommand.walk()

    def find(self, name: str) -> ParseResult | None:
        """Return the first dispatched result for the command called `name`."""
        return next((result for result in self.walk() if result.name == name), None)

    def __getitem__(self, key: str) -> Any:
        if key in self.options:
            return self.options[key]
        return self.operands[key]
