import pytest

from aaparser.app import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_USAGE_ERROR, Application
from aaparser.exceptions import CommandConfigError
from aaparser.help import get_usage


def build_app(console, calls=None):
    calls = calls if calls is not None else []
    app = Application("tool", description="A tool.", version="1.2.0", console=console)
    app.add_option("-v", "--verbose", type="counter")
    build = app.add_command(
        "build",
        "Build targets",
        action=lambda options, operands: calls.append((options, operands)),
    )
    build.add_option("-j", "--jobs", type="scalar")
    build.add_operand("targets", "*")
    return app


def test_run_success_records_result(console):
    calls = []
    app = build_app(console, calls)
    assert app.run(["-v", "build", "-j", "2", "lib"]) == EXIT_OK
    assert app.last_result.options == {"verbose": 1, "version": False, "help": False}
    assert calls == [({"jobs": "2", "help": False}, {"targets": ["lib"]})]
    assert console.file.getvalue() == ""


def test_version(console):
    app = build_app(console)
    assert app.run(["--version"]) == EXIT_OK
    assert app.last_result is None
    assert console.file.getvalue().strip() == "tool v1.2.0"


def test_version_stops_before_actions(console):
    calls = []
    app = build_app(console, calls)
    assert app.run(["--version", "build"]) == EXIT_OK
    assert calls == []


def test_help_on_root(console):
    app = build_app(console)
    assert app.run(["--help"]) == EXIT_OK
    output = console.file.getvalue()
    assert "usage: tool" in output
    assert "-h | --help" in output
    assert "--version" in output
    assert "Commands:" in output


def test_help_on_subcommand(console):
    app = build_app(console)
    assert app.run(["build", "-h"]) == EXIT_OK
    output = console.file.getvalue()
    assert "usage: tool [ARGUMENTS] build" in output
    assert "-j | --jobs <JOBS>" in output


def test_help_installed_on_commands_added_later(console):
    app = build_app(console)
    app.run([])
    app.add_command("deploy", "Deploy")
    assert app.run(["deploy", "--help"]) == EXIT_OK
    assert "usage: tool [ARGUMENTS] deploy" in console.file.getvalue()


def test_help_respects_taken_flags(console):
    app = Application("tool", console=console)
    app.add_option("-h", "--host", type="scalar")
    assert app.run(["-h", "example.org"]) == EXIT_OK
    assert app.last_result["host"] == "example.org"
    assert app.run(["--help"]) == EXIT_USAGE_ERROR


def test_help_disabled(console):
    app = Application("tool", add_help=False, console=console)
    assert app.run(["--help"]) == EXIT_USAGE_ERROR
    assert "Try" not in console.file.getvalue()


def test_parse_error_is_reported(console):
    app = build_app(console)
    assert app.run(["build", "--bogus"]) == EXIT_USAGE_ERROR
    output = console.file.getvalue()
    assert "error: Unrecognized option '--bogus'" in output
    assert "usage: tool [ARGUMENTS] build" in output
    assert "Try 'tool build --help' for more information." in output


def test_residual_error_is_reported_for_root(console):
    app = build_app(console)
    assert app.run(["deploy"]) == EXIT_USAGE_ERROR
    output = console.file.getvalue()
    assert "error: Unexpected argument 'deploy'. Available commands: build." in output
    assert "Try 'tool --help' for more information." in output


def test_config_error_from_action(console):
    def broken(options, operands):
        raise CommandConfigError("broken action")

    app = Application("tool", action=broken, console=console)
    assert app.run([]) == EXIT_CONFIG_ERROR
    assert "error: broken action" in console.file.getvalue()


def test_find_command(console):
    app = build_app(console)
    assert app.find_command(("tool", "build")) is app.get_command("build")
    assert app.find_command(("tool", "nope")) is app
    assert app.find_command(()) is app


def test_main_exits_with_code(console):
    app = build_app(console)
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--nope"])
    assert excinfo.value.code == EXIT_USAGE_ERROR

    with pytest.raises(SystemExit) as excinfo:
        app.main(["build"])
    assert excinfo.value.code == EXIT_OK


def test_help_listed_before_first_parse(console):
    app = build_app(console)
    assert "[-h | --help]" in get_usage(app.get_command("build"), plain_text=True)
    app.render_help(console=console)
    assert "-h | --help" in console.file.getvalue()

    declared = [len(command.options) for command in app.walk()]
    assert app.run(["build"]) == EXIT_OK
    assert [len(command.options) for command in app.walk()] == declared
