# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Operand` dataclass, the immutable specification of one positional slot.

Each operand declares an arity: an exact positive integer, `?` (zero or one), `*`
(zero or more) or `+` (one or more). `expected` turns it into a `(min, max)` pair
where an unbounded maximum is `math.inf`, which is what the arity resolver in
`aaparser.parser.arity` works with.
"""
from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from aaparser.validators import Validator

ARITY_SYMBOLS = ("?", "*", "+")


@dataclass(frozen=True)
class Operand:
    """
    Represents a positional operand.

    Attributes:
        name (str): The key of the operand in the resolved operands mapping.
        arity (int | str): Exact count > 0, or one of '?', '*', '+'.
        metavar (str): Display name used in usage output.
        validators (tuple[Validator, ...]): Validator chain applied to each value.
        default (Any): Value reported when no token was assigned.
        help (str): Help text for the operand.
    """

    name: str
    arity: int | str = 1
    metavar: str = ""
    validators: tuple[Validator, ...] = field(default_factory=tuple)
    default: Any = None
    help: str = ""

    @property
    def expected(self) -> tuple[int, int | float]:
        """Return the (min, max) number of values this operand binds."""
        if self.arity == "?":
            return 0, 1
        if self.arity == "*":
            return 0, math.inf
        if self.arity == "+":
            return 1, math.inf
        assert isinstance(self.arity, int), f"Invalid arity: {self.arity!r}"
        return self.arity, self.arity

    @property
    def minimum(self) -> int:
        return self.expected[0]

    @property
    def maximum(self) -> int | float:
        return self.expected[1]

    @property
    def unbounded(self) -> bool:
        return self.maximum == math.inf

    @property
    def single(self) -> bool:
        """True if the operand resolves to one value rather than a list."""
        return self.arity == 1

    def resolve(self, values: list[str]) -> Any:
        """Turn the values assigned by the arity resolver into the reported value."""
        if not values and self.default is not None:
            return deepcopy(self.default)
        if self.single:
            return values[0] if values else None
        return list(values)

    def get_usage_text(self) -> str:
        """Return the usage fragment, e.g. `<file> [file ...]`."""
        minimum, maximum = self.expected
        usage = []
        if minimum > 0:
            usage.append(" ".join([f"<{self.metavar}>"] * minimum))
        if maximum == math.inf:
            usage.append(f"[{self.metavar} ...]")
        elif minimum == 0:
            usage.append(f"[{self.metavar}]")
        return " ".join(usage)
