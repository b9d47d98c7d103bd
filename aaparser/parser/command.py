# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Command`, a node of a command tree and the parser that
recognizes and dispatches input tokens against it.

A command owns its options, its positional operands and its child commands. Parsing a
token list walks the tree top down:

1. Option-shaped tokens are matched against the command's options. Short clusters
   (`-abc`) are resolved one character at a time and `--name=value` re-queues its
   value so that every value-taking option reads its value the same way.
2. Other tokens are collected as positional values while the operands can still absorb
   them. Once they cannot, the next token is tried as a child command name.
3. Required options are checked, positional values are assigned to operands by the
   arity resolver, and the command's action is called with the resolved values.
4. If the next token names a child command, the rest of the input is handed to it. When
   the child returns, a following token naming another child of the same command
   starts the next chained invocation. Anything else is returned to the caller.

A `--` token switches the rest of the current level's input to literal mode, where
every token is a positional value.

Errors are fail-fast: the first problem raises a `CommandArgumentError` subclass and
aborts the whole parse. Actions of levels that were already dispatched are not undone.

Example Usage:
    root = Command("tool")
    root.add_option("-v", "--verbose", type="counter")
    build = root.add_command("build", "Build targets", action=on_build)
    build.add_option("-j", "--jobs", type="scalar", validators=[int_range_validator(1, 64)])
    build.add_operand("targets", "*")

    result = root.parse(["-vv", "build", "-j", "4", "lib", "app"])
    # result.options == {"verbose": 2}
    # result.find("build").operands == {"targets": ["lib", "app"]}

Parsing never mutates the tree: option and operand values live in state objects that
are created for each parse call.
"""
from __future__ import annotations

import sys
import weakref
from collections import deque
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Sequence

from aaparser.exceptions import (
    CommandConfigError,
    InvalidOptionValueError,
    MissingRequiredOptionError,
    MissingValueError,
    TooManyArgumentsError,
    UnknownOptionError,
)
from aaparser.logger import logger
from aaparser.parser.arity import max_capacity, resolve_operands
from aaparser.parser.operand import ARITY_SYMBOLS, Operand
from aaparser.parser.option import Option
from aaparser.parser.option_type import OptionType
from aaparser.parser.parser_types import OptionState, ParseResult
from aaparser.parser.tokenizer import (
    Token,
    TokenKind,
    classify,
    is_long_flag,
    is_short_flag,
)
from aaparser.parser.utils import Coercion, collect
from aaparser.parser.utils import value as store_value
from aaparser.validators import Validator, as_validator, run_validators

CommandAction = Callable[[dict[str, Any], dict[str, Any]], Any]


class Command:
    """
    A node of a command tree.

    Features:
    - Switch, counter, list and scalar options with short and long flags.
    - POSIX-style short option clusters (`-abc`) and `--name=value`.
    - Positional operands with `?`, `*`, `+` and fixed arities.
    - Validator chains and pluggable coercions for values.
    - Nested and chained subcommands.
    - Fresh per-parse state, so a tree can be parsed repeatedly.

    Attributes:
        name (str): The command name, unique among its siblings.
        description (str): Short description shown in help output.
        action (CommandAction | None): Called with (options, operands) when dispatched.
        help_epilog (str): Text shown at the end of the command's help.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        action: CommandAction | None = None,
        help_epilog: str = "",
    ) -> None:
        if not isinstance(name, str) or not name:
            raise CommandConfigError("Command name must be a non-empty string")
        if name.startswith("-"):
            raise CommandConfigError(f"Command name '{name}' must not start with '-'")
        if action is not None and not callable(action):
            raise CommandConfigError(f"Action for command '{name}' must be callable")
        self.name: str = name
        self.description: str = description
        self.action: CommandAction | None = action
        self.help_epilog: str = help_epilog
        self._options: list[Option] = []
        self._flag_map: dict[str, Option] = {}
        self._operands: list[Operand] = []
        self._names: set[str] = set()
        self._commands: dict[str, Command] = {}
        self._parent: weakref.ReferenceType[Command] | None = None

    @property
    def parent(self) -> Command | None:
        """
        The parent command, or None at the root.

        The link is weak: the tree is owned from the root down. If nothing else holds
        the root, its ancestors are collected and `path` starts at this command, so keep
        a reference to the root rather than chaining `Command("tool").add_command("b")`.
        """
        if self._parent is None:
            return None
        return self._parent()

    @property
    def path(self) -> tuple[str, ...]:
        """Names from the root of the tree down to this command."""
        names = []
        command: Command | None = self
        while command is not None:
            names.append(command.name)
            command = command.parent
        return tuple(reversed(names))

    @property
    def root(self) -> Command:
        command = self
        while command.parent is not None:
            command = command.parent
        return command

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    @property
    def operands(self) -> tuple[Operand, ...]:
        return tuple(self._operands)

    @property
    def commands(self) -> Mapping[str, Command]:
        return MappingProxyType(self._commands)

    def has_options(self) -> bool:
        return bool(self._options)

    def has_operands(self) -> bool:
        return bool(self._operands)

    def has_commands(self) -> bool:
        return bool(self._commands)

    def walk(self) -> Iterator[Command]:
        """Yield this command and all of its descendants, depth first."""
        yield self
        for command in self._commands.values():
            yield from command.walk()

    def set_description(self, description: str) -> Command:
        self.description = description
        return self

    def set_action(self, action: CommandAction | None) -> Command:
        if action is not None and not callable(action):
            raise CommandConfigError(f"Action for command '{self.name}' must be callable")
        self.action = action
        return self

    def _validate_flags(self, flags: tuple[str, ...]) -> None:
        """Validate the flags provided for an option."""
        if not flags:
            raise CommandConfigError("No flags provided")
        for flag in flags:
            if not isinstance(flag, str):
                raise CommandConfigError(f"Flag '{flag}' must be a string")
            if not (is_short_flag(flag) or is_long_flag(flag)):
                raise CommandConfigError(
                    f"Flag '{flag}' must be '-' followed by one letter or digit, or '--' "
                    "followed by a letter and then letters, digits or hyphens"
                )
            if flag in self._flag_map:
                raise CommandConfigError(
                    f"Flag '{flag}' is already used by option '{self._flag_map[flag].name}'"
                )
        if len(set(flags)) != len(flags):
            raise CommandConfigError(f"Duplicate flags in {flags}")

    def _validate_name(self, name: str) -> str:
        if not name.replace("_", "").isalnum():
            raise CommandConfigError(
                f"Name '{name}' must be a valid identifier "
                "(letters, digits, and underscores only)"
            )
        if name[0].isdigit():
            raise CommandConfigError(f"Name '{name}' must not start with a digit")
        if name in self._names:
            raise CommandConfigError(
                f"Name '{name}' is already defined on command '{self.name}'"
            )
        return name

    def _get_name_from_flags(self, flags: tuple[str, ...], name: str | None) -> str:
        """Convert flags to an option name."""
        if name:
            return self._validate_name(name)
        long_flags = [flag for flag in flags if flag.startswith("--")]
        flag = long_flags[0] if long_flags else flags[0]
        return self._validate_name(flag.lstrip("-").replace("-", "_"))

    def _validate_type(self, type: OptionType | str) -> OptionType:
        if isinstance(type, OptionType):
            return type
        try:
            return OptionType(type)
        except ValueError as error:
            raise CommandConfigError(str(error)) from error

    def _resolve_default(self, default: Any, type: OptionType, store: Any) -> Any:
        """Get the default value for an option."""
        if type == OptionType.SWITCH:
            if default is None:
                return (not store) if isinstance(store, bool) else False
            return default
        if type == OptionType.COUNTER:
            if default is None:
                return 0
            if not isinstance(default, int) or isinstance(default, bool):
                raise CommandConfigError(
                    f"Default for a counter must be an int, got {default!r}"
                )
            return default
        if type == OptionType.LIST:
            if default is None:
                return []
            if not isinstance(default, list):
                raise CommandConfigError(
                    f"Default for a list option must be a list, got {default!r}"
                )
        return default

    def _resolve_coerce(self, coerce: Coercion | None, type: OptionType) -> Coercion | None:
        if not type.takes_value:
            if coerce is not None:
                raise CommandConfigError(f"coerce cannot be specified for {type} options")
            return None
        if coerce is None:
            return collect if type == OptionType.LIST else store_value
        if not callable(coerce):
            raise CommandConfigError("coerce must be a callable (raw, current, default)")
        return coerce

    def _normalize_validators(
        self, validators: Iterable[Validator | Callable[[str], bool]] | None
    ) -> tuple[Validator, ...]:
        if validators is None:
            return ()
        if isinstance(validators, Validator) or callable(validators):
            validators = [validators]
        try:
            return tuple(as_validator(validator) for validator in validators)
        except TypeError as error:
            raise CommandConfigError(str(error)) from error

    def add_option(
        self,
        *flags: str,
        type: OptionType | str = OptionType.SWITCH,
        name: str | None = None,
        metavar: str | None = None,
        required: bool = False,
        default: Any = None,
        store: Any = True,
        help: str = "",
        validators: Iterable[Validator | Callable[[str], bool]] | None = None,
        coerce: Coercion | None = None,
        action: Callable[[Any], Any] | None = None,
    ) -> Option:
        """
        Define a new option for this command.

        Args:
            *flags (str): The flags identifying the option (e.g., "-v", "--verbose").
            type (OptionType | str): switch, counter, list or scalar.
            name (str | None): Key in the resolved options; derived from the flags if None.
            metavar (str | None): Value name for usage output (value-taking types only).
            required (bool): Whether the option must be matched at least once.
            default (Any): Value reported when the option is not matched.
            store (Any): Value a switch is set to when matched.
            help (str): Help text for rendering in command help.
            validators (Iterable | None): Validators run in order on each raw value.
            coerce (Coercion | None): `(raw, current, default) -> new` update function.
            action (Callable | None): Called with the new value after every match.

        Returns:
            Option: The registered option.
        """
        self._validate_flags(flags)
        option_type = self._validate_type(type)
        option_name = self._get_name_from_flags(flags, name)
        if option_type.takes_value:
            metavar = metavar or option_name.upper()
        elif metavar is not None:
            raise CommandConfigError(f"metavar cannot be specified for {option_type} options")
        if required and not option_type.takes_value:
            raise CommandConfigError(f"Option with type {option_type} cannot be required")
        if action is not None and not callable(action):
            raise CommandConfigError(f"Action for option '{option_name}' must be callable")
        option = Option(
            flags=tuple(flags),
            name=option_name,
            type=option_type,
            metavar=metavar,
            required=required,
            default=self._resolve_default(default, option_type, store),
            store=store,
            validators=self._normalize_validators(validators),
            coerce=self._resolve_coerce(coerce, option_type),
            action=action,
            help=help,
        )
        for flag in option.flags:
            self._flag_map[flag] = option
        self._names.add(option.name)
        self._options.append(option)
        return option

    def add_operand(
        self,
        name: str,
        arity: int | str = 1,
        *,
        metavar: str | None = None,
        help: str = "",
        validators: Iterable[Validator | Callable[[str], bool]] | None = None,
        default: Any = None,
    ) -> Operand:
        """
        Define a new positional operand for this command.

        Args:
            name (str): Key in the resolved operands.
            arity (int | str): Exact count > 0, or one of '?', '*', '+'.
            metavar (str | None): Display name for usage output, defaults to `name`.
            help (str): Help text for rendering in command help.
            validators (Iterable | None): Validators run in order on each assigned value.
            default (Any): Value reported when no token was assigned.

        Returns:
            Operand: The registered operand.
        """
        operand_name = self._validate_name(name)
        if isinstance(arity, bool) or not (
            (isinstance(arity, int) and arity > 0) or arity in ARITY_SYMBOLS
        ):
            raise CommandConfigError(
                "Arity must be an integer > 0 or one of the characters "
                f"'?', '*' or '+'. Input was: {arity!r}"
            )
        operand = Operand(
            name=operand_name,
            arity=arity,
            metavar=metavar or operand_name,
            validators=self._normalize_validators(validators),
            default=default,
            help=help,
        )
        self._names.add(operand.name)
        self._operands.append(operand)
        return operand

    def add_command(
        self,
        command: Command | str,
        description: str = "",
        action: CommandAction | None = None,
    ) -> Command:
        """
        Define a child command.

        Args:
            command (Command | str): A parentless Command to attach, or the name of a
                new one.
            description (str): Description for a new command.
            action (CommandAction | None): Action for a new command.

        The child only holds a weak reference back to this command; the caller keeps
        the tree alive by holding on to the root.

        Returns:
            Command: The child command.
        """
        if isinstance(command, str):
            command = Command(command, description, action)
        elif not isinstance(command, Command):
            raise CommandConfigError(
                f"Expected a Command or a command name, got {type(command).__name__}"
            )
        elif command.parent is not None:
            raise CommandConfigError(
                f"Command '{command.name}' already belongs to '{command.parent.name}'"
            )
        if command.name in self._commands:
            raise CommandConfigError(
                f"Command '{command.name}' already exists under '{self.name}'"
            )
        if any(node is self for node in command.walk()):
            raise CommandConfigError(f"Command '{command.name}' cannot contain itself")
        command._parent = weakref.ref(self)
        self._commands[command.name] = command
        return command

    def prepare(self) -> None:
        """Hook run on the root before the tree is parsed or rendered."""

    def get_option(self, flag: str) -> Option | None:
        """Return the option matched by `flag`, if any."""
        return self._flag_map.get(flag)

    def get_operand(self, name: str) -> Operand | None:
        return next((operand for operand in self._operands if operand.name == name), None)

    def get_command(self, name: str) -> Command | None:
        return self._commands.get(name)

    def _raise_unknown_option(self, flag: str) -> None:
        candidates = [known for known in self._flag_map if known.startswith(flag)]
        if candidates:
            message = (
                f"Unrecognized option '{flag}'. Did you mean one of: "
                f"{', '.join(candidates)}?"
            )
        else:
            message = f"Unrecognized option '{flag}'. Use --help to see available options."
        raise UnknownOptionError(message, token=flag, command=self.path)

    def _consume_option(
        self,
        token: Token,
        queue: deque[str],
        states: dict[str, OptionState],
    ) -> None:
        assert token.flag is not None, "option tokens always carry a flag"
        if token.kind == TokenKind.LONG and token.value is not None:
            queue.appendleft(token.value)

        option = self._flag_map.get(token.flag)
        if option is None:
            self._raise_unknown_option(token.flag)
        assert option is not None

        raw: str | None = None
        if option.takes_value:
            if not queue:
                raise MissingValueError(
                    f"Option '{token.flag}' requires a value <{option.metavar}>",
                    token=token.flag,
                    command=self.path,
                )
            raw = queue.popleft()
            failed = run_validators(option.validators, raw)
            if failed is not None:
                detail = failed.format_message(raw) or f"'{raw}'"
                raise InvalidOptionValueError(
                    f"Invalid value for '{token.flag}': {detail}",
                    token=token.flag,
                    command=self.path,
                    value=raw,
                )

        result = states[option.name].apply(raw)
        logger.debug("[%s] option '%s' -> %r", self.name, token.flag, result)
        if option.action is not None:
            option.action(result)

        if token.kind == TokenKind.SHORT and token.rest:
            queue.appendleft(f"-{token.rest}")

    def _check_required(self, states: dict[str, OptionState]) -> None:
        for state in states.values():
            if state.option.required and not state.consumed:
                flags = state.option.get_flags_text()
                help_text = f" help: {state.option.help}" if state.option.help else ""
                raise MissingRequiredOptionError(
                    f"Missing required option {flags} <{state.option.metavar}>{help_text}",
                    flags=state.option.flags,
                    command=self.path,
                )

    def _parse_level(self, queue: deque[str]) -> ParseResult:
        """Consume this level's tokens from `queue`, dispatch, and recurse."""
        logger.debug("[%s] parsing %s", self.name, list(queue))
        states = {option.name: OptionState.fresh(option) for option in self._options}
        positional: list[str] = []
        capacity = max_capacity(self._operands)
        literal = False

        while queue:
            if literal:
                positional.append(queue.popleft())
                continue
            token = classify(queue[0])
            if token.kind == TokenKind.LITERAL:
                queue.popleft()
                literal = True
            elif token.is_option:
                queue.popleft()
                self._consume_option(token, queue, states)
            elif len(positional) < capacity:
                positional.append(queue.popleft())
            else:
                break

        self._check_required(states)
        operand_states = resolve_operands(self._operands, positional, self.path)

        result = ParseResult(
            command=self,
            options={name: state.value for name, state in states.items()},
            operands={state.operand.name: state.resolve() for state in operand_states},
        )
        if self.action is not None:
            logger.debug("[%s] dispatching action %r", self.name, self.action)
            self.action(result.options, result.operands)

        while queue:
            child = self._commands.get(queue[0])
            if child is None:
                break
            queue.popleft()
            logger.debug("[%s] entering subcommand '%s'", self.name, child.name)
            result.subcommands.append(child._parse_level(queue))

        result.residual = list(queue)
        if result.residual:
            logger.debug("[%s] returning residual %s", self.name, result.residual)
        return result

    def parse(self, argv: Sequence[str] | None = None) -> ParseResult:
        """
        Parse a token list with this command as the root of the invocation.

        Args:
            argv (Sequence[str] | None): Input tokens, `sys.argv[1:]` if None. The
                sequence is copied and never modified.

        Returns:
            ParseResult: The resolved values of this level and of every dispatched
                subcommand.

        Raises:
            CommandArgumentError: On the first parse error; see `aaparser.exceptions`.
        """
        self.root.prepare()
        if argv is None:
            argv = sys.argv[1:]
        queue: deque[str] = deque(argv)
        result = self._parse_level(queue)
        if result.residual:
            token = result.residual[0]
            names = ", ".join(sorted(self._commands))
            hint = f" Available commands: {names}." if names else ""
            raise TooManyArgumentsError(
                f"Unexpected argument '{token}'.{hint}",
                token=token,
                command=self.path,
            )
        return result

    def get_usage(self, plain_text: bool = False) -> str:
        from aaparser.help import get_usage

        return get_usage(self, plain_text=plain_text)

    def render_help(self, console: Any = None) -> None:
        from aaparser.help import render_help

        render_help(self, console=console)

    def __str__(self) -> str:
        """Return a human-readable summary of the command."""
        required = sum(option.required for option in self._options)
        return (
            f"Command(name={self.name!r}, options={len(self._options)}, "
            f"flags={len(self._flag_map)}, operands={len(self._operands)}, "
            f"required={required}, commands={list(self._commands)})"
        )

    def __repr__(self) -> str:
        return str(self)
