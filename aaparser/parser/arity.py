# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Resolves positional tokens against a command's operand specifications.

Each operand has an expected `(min, max)` count. The resolver walks the tokens once,
front to back. A bounded operand takes tokens greedily until it is full. An unbounded
operand takes a token only while enough tokens remain to satisfy the minimums of every
later operand; once the remaining tokens are exactly what the later operands need,
assignment moves on. Any operand left below its minimum after the pass is an error.

This lets an unbounded operand be followed by mandatory ones:

    files: '*', dest: 1   with [a, b, c]  →  files=[a, b], dest=c
    first: '?', rest: '+' with [a, b, c]  →  first=[a], rest=[b, c]
    first: '?', rest: '+' with [a]        →  too few, `rest` is unmet

Every assigned token is validated through its operand's validator chain before it is
stored. The first rejected value aborts the resolution.
"""
from __future__ import annotations

import math
from typing import Sequence

from aaparser.exceptions import (
    ArityReason,
    ArityViolationError,
    InvalidOperandValueError,
)
from aaparser.logger import logger
from aaparser.parser.operand import Operand
from aaparser.parser.parser_types import OperandState
from aaparser.validators import run_validators


def min_required(operands: Sequence[Operand]) -> int:
    """Return the number of tokens the operands need at the least."""
    return sum(operand.minimum for operand in operands)


def max_capacity(operands: Sequence[Operand]) -> int | float:
    """Return the number of tokens the operands can absorb, `math.inf` if unbounded."""
    total: int | float = 0
    for operand in operands:
        total += operand.maximum
    return total


def _usage(operands: Sequence[Operand]) -> str:
    return " ".join(operand.get_usage_text() for operand in operands)


def _check_bounds(
    operands: Sequence[Operand], tokens: Sequence[str], command: tuple[str, ...]
) -> None:
    minimum = min_required(operands)
    maximum = max_capacity(operands)
    if len(tokens) < minimum:
        missing = _first_unmet(operands, len(tokens))
        raise ArityViolationError(
            f"Too few operands: expected at least {minimum}, got {len(tokens)}. "
            f"Missing <{missing.metavar}>. Usage: {_usage(operands)}",
            reason=ArityReason.TOO_FEW,
            token=None,
            command=command,
        )
    if maximum != math.inf and len(tokens) > maximum:
        extra = tokens[int(maximum)]
        if not operands:
            message = f"Unexpected argument '{extra}'"
        else:
            message = (
                f"Too many operands: expected at most {int(maximum)}, "
                f"got {len(tokens)}. Unexpected '{extra}'"
            )
        raise ArityViolationError(
            message,
            reason=ArityReason.TOO_MANY,
            token=extra,
            command=command,
        )


def _first_unmet(operands: Sequence[Operand], available: int) -> Operand:
    for operand in operands:
        available -= operand.minimum
        if available < 0:
            return operand
    return operands[-1]


def resolve_operands(
    operands: Sequence[Operand],
    tokens: Sequence[str],
    command: tuple[str, ...] = (),
) -> list[OperandState]:
    """
    Assign positional tokens to operands.

    Args:
        operands (Sequence[Operand]): The command's operand specs, in declaration order.
        tokens (Sequence[str]): The positional tokens collected at this command level.
        command (tuple[str, ...]): Command path used in error reports.

    Returns:
        list[OperandState]: One state per operand, in declaration order.

    Raises:
        ArityViolationError: If the token count is outside the operands' bounds.
        InvalidOperandValueError: If a validator rejects an assigned token.
    """
    _check_bounds(operands, tokens, command)

    states = [OperandState(operand) for operand in operands]
    # reserve[i]: tokens the operands after i need at the least
    reserve = [min_required(operands[index + 1 :]) for index in range(len(operands))]

    index = 0
    for position, token in enumerate(tokens):
        remaining = len(tokens) - position
        while True:
            if index >= len(states):
                raise ArityViolationError(
                    f"Unexpected argument '{token}'",
                    reason=ArityReason.TOO_MANY,
                    token=token,
                    command=command,
                )
            state = states[index]
            minimum, maximum = state.operand.expected
            if state.filled < minimum:
                break
            if not state.operand.unbounded and state.filled < maximum:
                break
            if state.operand.unbounded and remaining > reserve[index]:
                break
            index += 1

        failed = run_validators(state.operand.validators, token)
        if failed is not None:
            message = failed.format_message(token) or (
                f"Invalid value for '{state.operand.name}': '{token}'"
            )
            raise InvalidOperandValueError(message, token=token, command=command)
        state.values.append(token)

    for state in states:
        if state.filled < state.operand.minimum:
            raise ArityViolationError(
                f"Too few operands: <{state.operand.metavar}> expects at least "
                f"{state.operand.minimum}, got {state.filled}. "
                f"Usage: {_usage(operands)}",
                reason=ArityReason.TOO_FEW,
                token=None,
                command=command,
            )
        logger.debug(
            "[%s] operand '%s' <- %s",
            " ".join(command),
            state.operand.name,
            state.values,
        )
    return states
