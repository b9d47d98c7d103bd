"""
AAParser Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command, CommandAction
from .operand import Operand
from .option import Option
from .option_type import OptionType
from .parser_types import OperandState, OptionState, ParseResult
from .tokenizer import Token, TokenKind, classify

__all__ = [
    "Command",
    "CommandAction",
    "Operand",
    "Option",
    "OptionType",
    "OptionState",
    "OperandState",
    "ParseResult",
    "Token",
    "TokenKind",
    "classify",
]
