# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Option` dataclass, the immutable specification of one command option.

An `Option` is matched by one or more flags (`-v`, `--verbose`) and its `OptionType`
decides what a match does: switches and counters update without consuming a token,
lists and scalars shift the next token off as their value, run it through the
validator chain and feed it to the option's coercion.

Options never hold parse results. The value accumulated during one parse lives in an
`OptionState` created fresh for that parse, so one command tree can be parsed any number
of times.

Options should be created using `Command.add_option()`.

Key Attributes:
- `flags`: One or more short/long flags (e.g. `-v`, `--verbose`)
- `name`: Internal name used as the key in resolved options
- `type`: `OptionType` describing how a match updates the value
- `metavar`: Display name of the value, present only for value-taking options
- `default`: Value reported when the option is never matched
- `store`: Value a switch flips to when matched
- `validators`: Ordered `Validator` chain applied to raw values
- `coerce`: `(raw, current, default) -> new` update function
- `action`: Callback invoked with the new value on every match
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable

from aaparser.parser.option_type import OptionType
from aaparser.parser.utils import Coercion, count
from aaparser.validators import Validator


@dataclass(frozen=True)
class Option:
    """
    Represents a command-line option.

    Attributes:
        flags (tuple[str, ...]): Short and long flags for the option.
        name (str): The key of the option in the resolved options mapping.
        type (OptionType): What a match does to the value.
        metavar (str | None): Value name shown in usage, None for switches and counters.
        required (bool): True if the option must be matched at least once.
        default (Any): The value reported when the option is not matched.
        store (Any): The value a switch is set to when matched.
        validators (tuple[Validator, ...]): Validator chain for raw values.
        coerce (Coercion | None): Update function for value-taking options.
        action (Callable[[Any], Any] | None): Callback invoked on every match.
        help (str): Help text for the option.
    """

    flags: tuple[str, ...]
    name: str
    type: OptionType = OptionType.SWITCH
    metavar: str | None = None
    required: bool = False
    default: Any = None
    store: Any = True
    validators: tuple[Validator, ...] = field(default_factory=tuple)
    coerce: Coercion | None = None
    action: Callable[[Any], Any] | None = None
    help: str = ""

    @property
    def takes_value(self) -> bool:
        """True if a match consumes the next token as the option value."""
        return self.type.takes_value

    def matches(self, flag: str) -> bool:
        """Test whether `flag` is one of this option's flags."""
        return flag in self.flags

    def initial_value(self) -> Any:
        """Return a private copy of the default for a new parse."""
        return deepcopy(self.default)

    def update(self, current: Any, raw: str | None = None) -> Any:
        """
        Compute the value after one match.

        Args:
            current (Any): The value accumulated so far in this parse.
            raw (str | None): The consumed token, for value-taking options.

        Returns:
            Any: The new value.
        """
        if self.type == OptionType.SWITCH:
            return self.store
        if self.type == OptionType.COUNTER:
            return count(None, current, self.default)
        assert self.coerce is not None, "value-taking options always have a coercion"
        return self.coerce(raw, current, self.default)

    def get_flags_text(self) -> str:
        """Return the flags joined for usage output, e.g. `-v | --verbose`."""
        return " | ".join(self.flags)

    def get_usage_text(self) -> str:
        """
        Return the usage fragment for this option.

        Optional options are wrapped in brackets; required options with several flags are
        wrapped in parentheses and a single required flag is left bare.
        """
        usage = self.get_flags_text()
        if self.takes_value:
            usage = f"{usage} <{self.metavar}>"
        if not self.required:
            return f"[{usage}]"
        if len(self.flags) > 1:
            return f"({usage})"
        return usage
