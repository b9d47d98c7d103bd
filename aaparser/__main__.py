"""
AAParser Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from aaparser import __version__
from aaparser.app import EXIT_CONFIG_ERROR, Application
from aaparser.config import find_config, loader
from aaparser.console import console
from aaparser.exceptions import CommandConfigError
from aaparser.utils import setup_logging, verbosity_to_level
from aaparser.validators import choices_validator, path_exists_validator


def build_cli() -> Application:
    app = Application(
        "aaparser",
        description="Run a command-line program declared in a YAML or TOML file.",
        version=__version__,
        help_epilog="Pass the program's own arguments after '--', "
        "e.g. aaparser -c tool.yaml -- build -j 4.",
    )
    app.add_option(
        "-c",
        "--config",
        type="scalar",
        metavar="PATH",
        validators=[path_exists_validator()],
        help="Config file to load. Defaults to ./aaparser.yaml, ./aaparser.toml "
        "or $AAPARSER_CONFIG.",
    )
    app.add_option(
        "-v",
        "--verbose",
        type="counter",
        help="Increase logging verbosity (-v info, -vv debug).",
    )
    app.add_option(
        "--log-mode",
        type="scalar",
        metavar="MODE",
        validators=[choices_validator(["cli", "json"])],
        help="Log output format: cli or json.",
    )
    app.add_operand("args", "*", help="Arguments for the configured program.")
    return app


def bootstrap(config_path: Path) -> None:
    """Make modules next to the config file importable for its dotted paths."""
    parent = str(config_path.resolve().parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)


def main(argv: Sequence[str] | None = None) -> int:
    cli = build_cli()
    exit_code = cli.run(argv)
    if exit_code or cli.last_result is None:
        return exit_code

    options = cli.last_result.options
    setup_logging(
        mode=options["log_mode"],
        console_log_level=verbosity_to_level(options["verbose"]),
    )

    config_path = Path(options["config"]) if options["config"] else find_config()
    if config_path is None:
        console.print(
            "[error]error:[/error] No config file found. Use --config PATH or create "
            "aaparser.yaml."
        )
        return EXIT_CONFIG_ERROR

    bootstrap(config_path)
    try:
        program = loader(config_path)
    except (CommandConfigError, FileNotFoundError) as error:
        console.print(f"[error]error:[/error] {escape(str(error))}")
        return EXIT_CONFIG_ERROR

    return program.run(cli.last_result.operands["args"])


if __name__ == "__main__":
    sys.exit(main())
