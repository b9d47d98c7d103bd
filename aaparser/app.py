# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Application`, the root command of a command-line program.

`Application` is a `Command` that also plays the parts the parser core leaves to its
collaborators:

- Built-in `-h/--help` on every command of the tree, which renders that command's help
  and raises `HelpSignal`.
- `--version` on the root when a version is set, which prints the version banner and
  raises `VersionSignal`.
- `run()`, the reporting sink: it turns parse errors and flow signals into printed
  output and an exit code, and `main()` exits the process with that code.

Example:
    app = Application("tool", version="1.2.0", description="Build things.")
    build = app.add_command("build", "Build targets", action=on_build)
    build.add_operand("targets", "+")
    app.main()
"""
from __future__ import annotations

import sys
from typing import Any, NoReturn, Sequence

from rich.console import Console
from rich.markup import escape

from aaparser.console import console as default_console
from aaparser.exceptions import CommandArgumentError, CommandConfigError
from aaparser.help import get_usage, render_help
from aaparser.logger import logger
from aaparser.parser.command import Command, CommandAction
from aaparser.parser.parser_types import ParseResult
from aaparser.signals import FlowSignal, HelpSignal, VersionSignal
from aaparser.utils import get_program_invocation

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2


class Application(Command):
    """
    Root command with help, version and error reporting.

    Attributes:
        version (str | None): Program version shown by `--version`.
        add_help (bool): Whether `-h/--help` is added to every command.
        console (Console): Rich console used for all output.
        last_result (ParseResult | None): Result of the last successful `run()`.
    """

    def __init__(
        self,
        program: str | None = None,
        description: str = "",
        version: str | None = None,
        action: CommandAction | None = None,
        add_help: bool = True,
        help_epilog: str = "",
        console: Console | None = None,
    ) -> None:
        super().__init__(
            program or get_program_invocation(),
            description=description,
            action=action,
            help_epilog=help_epilog,
        )
        self.version: str | None = None
        self.add_help: bool = add_help
        self.console: Console = console or default_console
        self.last_result: ParseResult | None = None
        if version is not None:
            self.set_version(version)

    def set_version(self, version: str) -> Application:
        """Set the program version and register `--version` on the root."""
        self.version = version
        if self.get_option("--version") is None:
            self.add_option(
                "--version",
                help="Show the version and exit.",
                action=self._print_version,
            )
        return self

    def _print_version(self, _: Any) -> None:
        self.console.print(f"[version]{escape(self.name)} v{escape(str(self.version))}[/]")
        raise VersionSignal()

    def _help_action(self, command: Command):
        def show_help(_: Any) -> None:
            render_help(command, console=self.console)
            raise HelpSignal()

        return show_help

    def prepare(self) -> None:
        """Add `-h/--help` to every command of the tree that does not have it yet."""
        if not self.add_help:
            return
        for command in self.walk():
            taken = (
                command.get_option("-h") is not None
                or command.get_option("--help") is not None
                or any(option.name == "help" for option in command.options)
                or command.get_operand("help") is not None
            )
            if taken:
                continue
            command.add_option(
                "-h",
                "--help",
                name="help",
                help="Show this help message.",
                action=self._help_action(command),
            )

    def find_command(self, path: Sequence[str]) -> Command:
        """Return the command at `path` (as reported by errors), or the root."""
        command: Command = self
        for name in path[1:]:
            child = command.get_command(name)
            if child is None:
                break
            command = child
        return command

    def report_error(self, error: CommandArgumentError) -> None:
        """Print a parse error with the usage line of the command that failed."""
        command = self.find_command(error.command)
        logger.debug("Parse error %r", error)
        self.console.print(f"[error]error:[/error] {escape(error.message)}")
        self.console.print(f"[usage]usage:[/usage] {get_usage(command)}")
        if self.add_help:
            self.console.print(
                f"[hint]Try '{escape(' '.join(command.path))} --help' for more information.[/]"
            )

    def run(self, argv: Sequence[str] | None = None) -> int:
        """
        Parse `argv`, dispatching actions, and return a process exit code.

        Returns:
            int: 0 on success or after help/version output, 2 on a parse error,
                1 on an invalid command tree.
        """
        self.last_result = None
        try:
            self.last_result = self.parse(argv)
        except HelpSignal:
            return EXIT_OK
        except VersionSignal:
            return EXIT_OK
        except FlowSignal as signal:
            logger.debug("Parse stopped by %r", signal)
            return EXIT_OK
        except CommandArgumentError as error:
            self.report_error(error)
            return EXIT_USAGE_ERROR
        except CommandConfigError as error:
            logger.error("Invalid command definition: %s", error)
            self.console.print(f"[error]error:[/error] {escape(str(error))}")
            return EXIT_CONFIG_ERROR
        return EXIT_OK

    def main(self, argv: Sequence[str] | None = None) -> NoReturn:
        """Run the application and exit the process with its exit code."""
        sys.exit(self.run(argv))
