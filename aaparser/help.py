# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage and help rendering for command trees.

The renderer only reads a command's name, parent chain, options, operands and children.
It never touches parse state, so help can be rendered at any time, including from an
option action in the middle of a parse. The root's `prepare()` hook runs first so that
options added by the root (such as `--help`) show up before the first parse.

Functions:
- get_usage: Build the usage line for a command.
- render_help: Print usage, description, options, operands and subcommands using Rich.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.text import Text

from aaparser.console import console as default_console

if TYPE_CHECKING:
    from aaparser.parser.command import Command

HELP_INDENT = 10


def get_usage_parts(command: Command) -> list[str]:
    """Return the usage fragments for a command's options, operands and subcommands."""
    usage = [option.get_usage_text() for option in command.options]
    usage.extend(operand.get_usage_text() for operand in command.operands)
    if command.has_commands():
        usage.append("<command> [ARGUMENTS]")
    return usage


def get_usage(command: Command, plain_text: bool = False) -> str:
    """
    Build the usage line for a command.

    Ancestors are listed by name, each followed by `[ARGUMENTS]`, e.g.
    `tool [ARGUMENTS] build [-j | --jobs <JOBS>] [targets ...]`.

    Args:
        command (Command): The command to describe.
        plain_text (bool): If False the result contains Rich markup.

    Returns:
        str: The usage line without the leading "usage:" label.
    """
    command.root.prepare()
    names = list(command.path)
    program = " [ARGUMENTS] ".join(names)
    parts = get_usage_parts(command)
    if plain_text:
        return " ".join([program, *parts]).rstrip()
    styled = [f"[command]{escape(program)}[/command]"]
    styled.extend(escape(part) for part in parts)
    return " ".join(styled)


def render_help(command: Command, console: Console | None = None) -> None:
    """
    Print formatted help text for a command using Rich output.

    Includes usage, description, options, operands, subcommands (sorted by name) and
    the epilog.
    """
    command.root.prepare()
    console = console or default_console
    console.print(f"[usage]usage:[/usage] {get_usage(command)}")

    if command.description:
        console.print()
        console.print(Text(command.description, style="description"))

    if command.has_options() or command.has_operands() or command.has_commands():
        console.print()

    if command.has_options():
        console.print("[section]Options:[/section]")
        for option in command.options:
            line = f"    [flag]{escape(option.get_flags_text())}[/flag]"
            if option.takes_value:
                line += f" [metavar]{escape(f'<{option.metavar}>')}[/metavar]"
            if option.required:
                line += " [hint](required)[/hint]"
            console.print(line)
            if option.help:
                console.print(Padding(Text(option.help), (0, 0, 0, HELP_INDENT)))
        console.print()

    if command.has_operands():
        console.print("[section]Operands:[/section]")
        for operand in command.operands:
            console.print(
                f"    [operand]{escape(operand.name)}[/operand] "
                f"[hint]{escape(operand.get_usage_text())}[/hint]"
            )
            if operand.help:
                console.print(Padding(Text(operand.help), (0, 0, 0, HELP_INDENT)))
        console.print()

    if command.has_commands():
        console.print("[section]Commands:[/section]")
        size = max(len(name) for name in command.commands)
        for name in sorted(command.commands):
            description = command.commands[name].description
            console.print(
                f"    [command]{escape(name.ljust(size))}[/command]    "
                f"{escape(description)}"
            )

    if command.help_epilog:
        console.print()
        console.print(command.help_epilog, style="dim")
