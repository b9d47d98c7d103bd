# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionType`, the enum that fixes how a matched option updates its value.

Exports:
    - OptionType: Enum of option behaviors.

Example:
    OptionType("switch") → OptionType.SWITCH
    OptionType("count")  → OptionType.COUNTER (via alias)
    OptionType("append") → OptionType.LIST (via alias)
"""
from __future__ import annotations

from enum import Enum


class OptionType(Enum):
    """
    Defines the update performed when an option is matched.

    Members:
        SWITCH: Presence-only flag, flips to its store value. Consumes no token.
        COUNTER: Presence-only flag, increments by one per match. Consumes no token.
        LIST: Consumes the next token and appends it to the current list.
        SCALAR: Consumes the next token and overwrites the current value.

    Aliases:
        - "flag", "bool" → "switch"
        - "count" → "counter"
        - "append" → "list"
        - "store", "value" → "scalar"
    """

    SWITCH = "switch"
    COUNTER = "counter"
    LIST = "list"
    SCALAR = "scalar"

    @property
    def takes_value(self) -> bool:
        """Whether a match shifts the next token off as the option value."""
        return self in (OptionType.LIST, OptionType.SCALAR)

    @classmethod
    def choices(cls) -> list[OptionType]:
        """Return a list of all option types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "flag": "switch",
            "bool": "switch",
            "count": "counter",
            "append": "list",
            "store": "scalar",
            "value": "scalar",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> OptionType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the option type."""
        return self.value
