# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for declarative command trees.

A command tree can be described in YAML or TOML instead of Python:

    program: tool
    version: 1.0.0
    options:
      - flags: ["-v", "--verbose"]
        type: counter
    commands:
      - name: build
        description: Build targets
        action: tasks.build
        options:
          - flags: ["-j", "--jobs"]
            type: scalar
            validators: ["tasks.jobs_validator"]
        operands:
          - name: targets
            arity: "*"

Actions, validators and custom coercions are dotted import paths. `coerce` may also
name one of the built-in coercions (`collect`, `count`, `kv`, `listing`, `range`,
`value`), and `choices` adds a choices validator.
"""
from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from aaparser.app import Application
from aaparser.exceptions import CommandConfigError
from aaparser.logger import logger
from aaparser.parser.command import Command
from aaparser.parser.utils import COERCIONS
from aaparser.validators import Validator, as_validator, choices_validator

MAX_DEPTH = 8


def import_action(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise CommandConfigError(f"Invalid import path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise CommandConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is installed "
            "and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise CommandConfigError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


def import_callable(dotted_path: str) -> Callable[..., Any]:
    obj = import_action(dotted_path)
    if not callable(obj):
        raise CommandConfigError(f"'{dotted_path}' is not callable")
    return obj


def build_validators(choices: list[Any], validators: list[str]) -> list[Validator]:
    built = []
    if choices:
        built.append(choices_validator(choices))
    for path in validators:
        built.append(as_validator(import_callable(path)))
    return built


class RawOption(BaseModel):
    """Raw option model for command tree configuration."""

    flags: list[str]
    type: str = "switch"
    name: str | None = None
    metavar: str | None = None
    required: bool = False
    default: Any = None
    store: Any = True
    help: str = ""
    choices: list[Any] = Field(default_factory=list)
    validators: list[str] = Field(default_factory=list)
    coerce: str | None = None
    action: str | None = None

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, flags: list[str]) -> list[str]:
        if not flags:
            raise ValueError("An option needs at least one flag.")
        return flags

    def add_to(self, command: Command) -> None:
        coerce = None
        if self.coerce:
            coerce = COERCIONS.get(self.coerce) or import_callable(self.coerce)
        command.add_option(
            *self.flags,
            type=self.type,
            name=self.name,
            metavar=self.metavar,
            required=self.required,
            default=self.default,
            store=self.store,
            help=self.help,
            validators=build_validators(self.choices, self.validators),
            coerce=coerce,
            action=import_callable(self.action) if self.action else None,
        )


class RawOperand(BaseModel):
    """Raw operand model for command tree configuration."""

    name: str
    arity: int | str = 1
    metavar: str | None = None
    help: str = ""
    default: Any = None
    choices: list[Any] = Field(default_factory=list)
    validators: list[str] = Field(default_factory=list)

    def add_to(self, command: Command) -> None:
        command.add_operand(
            self.name,
            self.arity,
            metavar=self.metavar,
            help=self.help,
            default=self.default,
            validators=build_validators(self.choices, self.validators),
        )


class RawCommand(BaseModel):
    """Raw command model for command tree configuration."""

    name: str
    description: str = ""
    action: str | None = None
    help_epilog: str = ""
    options: list[RawOption] = Field(default_factory=list)
    operands: list[RawOperand] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def populate(self, command: Command, depth: int = 0) -> Command:
        if depth > MAX_DEPTH:
            raise CommandConfigError(
                f"Maximum command depth exceeded ({MAX_DEPTH} levels deep)"
            )
        if self.action:
            command.set_action(import_callable(self.action))
        for option in self.options:
            option.add_to(command)
        for operand in self.operands:
            operand.add_to(command)
        for raw_command in self.commands:
            child = command.add_command(
                raw_command.name, description=raw_command.description
            )
            child.help_epilog = raw_command.help_epilog
            raw_command.populate(child, depth + 1)
        return command


RawCommand.model_rebuild()


class CLIConfig(BaseModel):
    """Command-line program configuration model."""

    program: str
    version: str | None = None
    description: str = ""
    help_epilog: str = ""
    add_help: bool = True
    action: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    operands: list[RawOperand] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def to_application(self) -> Application:
        app = Application(
            self.program,
            description=self.description,
            version=self.version,
            add_help=self.add_help,
            help_epilog=self.help_epilog,
        )
        RawCommand(
            name=self.program,
            action=self.action,
            options=self.options,
            operands=self.operands,
            commands=self.commands,
        ).populate(app)
        return app


def find_config() -> Path | None:
    candidates = [
        Path.cwd() / "aaparser.yaml",
        Path.cwd() / "aaparser.yml",
        Path.cwd() / "aaparser.toml",
    ]
    if env_path := os.environ.get("AAPARSER_CONFIG"):
        candidates.append(Path(env_path))
    return next((path for path in candidates if path.is_file()), None)


def load_raw_config(file_path: Path | str) -> dict[str, Any]:
    """Read a YAML or TOML config file into a dictionary."""
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise CommandConfigError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise CommandConfigError(
            "Configuration file must contain a mapping with a program name.\n"
            "Example:\n"
            "program: 'tool'\n"
            "commands:\n"
            "  - name: 'build'\n"
            "    description: 'Example command'\n"
            "    action: 'my_module.my_function'"
        )
    return raw_config


def loader(file_path: Path | str) -> Application:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (str | Path): Path to the config file.

    Returns:
        Application: The root of the configured command tree.

    Raises:
        FileNotFoundError: If the file does not exist.
        CommandConfigError: If the file format or its content is invalid.
    """
    raw_config = load_raw_config(file_path)
    try:
        config = CLIConfig.model_validate(raw_config)
    except ValidationError as error:
        raise CommandConfigError(f"Invalid configuration in {file_path}:\n{error}") from error
    logger.debug("Loaded configuration for '%s' from %s", config.program, file_path)
    return config.to_application()
