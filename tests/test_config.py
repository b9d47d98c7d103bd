import sys
import textwrap

import pytest

from aaparser.app import EXIT_OK, EXIT_USAGE_ERROR, Application
from aaparser.config import (
    CLIConfig,
    find_config,
    import_action,
    load_raw_config,
    loader,
)
from aaparser.exceptions import CommandConfigError

TASKS = """
CALLS = []


def build(options, operands):
    CALLS.append(("build", options, operands))


def root(options, operands):
    CALLS.append(("root", options, operands))


def even(value):
    return value.isdigit() and int(value) % 2 == 0


NOT_CALLABLE = 3
"""

YAML_CONFIG = """
program: tool
version: 1.0.0
description: Example tool
action: cfg_tasks.root
options:
  - flags: ["-v", "--verbose"]
    type: counter
commands:
  - name: build
    description: Build targets
    action: cfg_tasks.build
    help_epilog: Builds are cached.
    options:
      - flags: ["-j", "--jobs"]
        type: scalar
        validators: ["cfg_tasks.even"]
      - flags: ["-D"]
        name: define
        type: scalar
        coerce: kv
        default: {}
      - flags: ["--mode"]
        type: scalar
        choices: [fast, slow]
    operands:
      - name: targets
        arity: "*"
    commands:
      - name: release
        description: Release build
"""


@pytest.fixture
def tasks(tmp_path, monkeypatch):
    (tmp_path / "cfg_tasks.py").write_text(TASKS)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "cfg_tasks", raising=False)
    import cfg_tasks

    return cfg_tasks


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(textwrap.dedent(content))
    return path


def test_loader_yaml(tmp_path, tasks, console):
    app = loader(write(tmp_path, "tool.yaml", YAML_CONFIG))
    app.console = console

    assert isinstance(app, Application)
    assert app.name == "tool"
    assert app.version == "1.0.0"
    build = app.get_command("build")
    assert build.description == "Build targets"
    assert build.help_epilog == "Builds are cached."
    assert build.get_command("release") is not None

    code = app.run(["-v", "build", "-j", "4", "-D", "a=1", "--mode", "fast", "lib", "app"])
    assert code == EXIT_OK
    assert [name for name, _, _ in tasks.CALLS] == ["root", "build"]
    _, options, operands = tasks.CALLS[1]
    assert options["jobs"] == "4"
    assert options["define"] == {"a": "1"}
    assert options["mode"] == "fast"
    assert operands == {"targets": ["lib", "app"]}


def test_loader_yaml_validators(tmp_path, tasks, console):
    app = loader(write(tmp_path, "tool.yaml", YAML_CONFIG))
    app.console = console

    assert app.run(["build", "-j", "3"]) == EXIT_USAGE_ERROR
    assert app.run(["build", "--mode", "medium"]) == EXIT_USAGE_ERROR
    output = console.file.getvalue()
    assert "Invalid value for '-j': '3'" in output
    assert "Must be one of {fast, slow}" in output


def test_loader_toml(tmp_path, tasks):
    path = write(
        tmp_path,
        "tool.toml",
        """
        program = "tool"

        [[commands]]
        name = "build"
        action = "cfg_tasks.build"

        [[commands.operands]]
        name = "targets"
        arity = "+"
        """,
    )
    app = loader(path)
    result = app.parse(["build", "a", "b"])
    assert result.find("build").operands == {"targets": ["a", "b"]}
    assert tasks.CALLS == [("build", {"help": False}, {"targets": ["a", "b"]})]


def test_load_raw_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_config(tmp_path / "missing.yaml")
    with pytest.raises(CommandConfigError):
        load_raw_config(write(tmp_path, "tool.json", "{}"))
    with pytest.raises(CommandConfigError):
        load_raw_config(write(tmp_path, "list.yaml", "- a\n- b\n"))
    with pytest.raises(CommandConfigError):
        load_raw_config(write(tmp_path, "empty.yaml", ""))
    with pytest.raises(TypeError):
        load_raw_config(42)


@pytest.mark.parametrize(
    "content",
    [
        "description: no program\n",
        "program: tool\noptions:\n  - flags: []\n",
        "program: tool\noperands:\n  - name: x\n    arity: 0\n",
        "program: tool\noptions:\n  - flags: ['--x']\n    type: nope\n",
        "program: tool\naction: missing_module_xyz.run\n",
        "program: tool\naction: run\n",
    ],
)
def test_loader_invalid_content(tmp_path, content):
    with pytest.raises(CommandConfigError):
        loader(write(tmp_path, "tool.yaml", content))


def test_import_action(tasks):
    assert import_action("cfg_tasks.build") is tasks.build
    with pytest.raises(CommandConfigError):
        import_action("cfg_tasks.missing")
    with pytest.raises(CommandConfigError):
        import_action("build")
    with pytest.raises(CommandConfigError):
        CLIConfig.model_validate(
            {"program": "tool", "action": "cfg_tasks.NOT_CALLABLE"}
        ).to_application()


def test_command_depth_limit():
    command = {"name": "leaf"}
    for index in range(10):
        command = {"name": f"level{index}", "commands": [command]}
    config = CLIConfig.model_validate({"program": "tool", "commands": [command]})
    with pytest.raises(CommandConfigError):
        config.to_application()


def test_find_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AAPARSER_CONFIG", raising=False)
    assert find_config() is None

    other = write(tmp_path, "elsewhere.toml", 'program = "tool"\n')
    monkeypatch.setenv("AAPARSER_CONFIG", str(other))
    assert find_config() == other

    write(tmp_path, "aaparser.yaml", "program: tool\n")
    assert find_config().name == "aaparser.yaml"
