"""
AAParser Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .app import Application
from .exceptions import (
    AAParserError,
    ArityReason,
    ArityViolationError,
    CommandArgumentError,
    CommandConfigError,
    InvalidOperandValueError,
    InvalidOptionValueError,
    MissingRequiredOptionError,
    MissingValueError,
    ParseErrorKind,
    TooManyArgumentsError,
    UnknownOptionError,
)
from .parser import Command, Operand, Option, OptionType, ParseResult
from .validators import Validator

__version__ = "0.1.0"

logger = logging.getLogger("aaparser")


__all__ = [
    "Application",
    "Command",
    "Option",
    "OptionType",
    "Operand",
    "ParseResult",
    "Validator",
    "AAParserError",
    "CommandConfigError",
    "CommandArgumentError",
    "ParseErrorKind",
    "ArityReason",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidOptionValueError",
    "InvalidOperandValueError",
    "ArityViolationError",
    "MissingRequiredOptionError",
    "TooManyArgumentsError",
]
