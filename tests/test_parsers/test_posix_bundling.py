import pytest

from aaparser.exceptions import (
    ArityViolationError,
    CommandArgumentError,
    MissingValueError,
    TooManyArgumentsError,
    UnknownOptionError,
)
from aaparser.parser import Command, OptionType


def build_command(charlie_type=OptionType.SCALAR):
    cmd = Command("tool")
    cmd.add_option("-a", "--alpha", store=False, help="Alpha option")
    cmd.add_option("-b", "--beta", help="Beta option")
    cmd.add_option("-c", "--charlie", type=charlie_type, help="Charlie option")
    return cmd


def test_posix_bundling():
    """Test the bundling of short options in the POSIX style."""
    cmd = build_command(OptionType.SWITCH)

    result = cmd.parse(["-abc"])
    assert result.options == {"alpha": False, "beta": True, "charlie": True}
    assert cmd.parse(["-abc"]).options == cmd.parse(["-a", "-b", "-c"]).options
    assert cmd.parse(["-cba"]).options == cmd.parse(["-c", "-b", "-a"]).options
    assert cmd.parse(["-ab", "-c"]).options == cmd.parse(["-abc"]).options


def test_posix_bundling_last_has_value():
    """Test the bundling of short options with the last option taking a value."""
    cmd = build_command()

    result = cmd.parse(["-abc", "value"])
    assert result["alpha"] is False
    assert result["beta"] is True
    assert result["charlie"] == "value"


def test_posix_bundling_value_option_first():
    """A value-taking option inside a cluster reads the next token, then the cluster goes on."""
    cmd = build_command()

    result = cmd.parse(["-cab", "value"])
    assert result["charlie"] == "value"
    assert result["alpha"] is False
    assert result["beta"] is True


def test_posix_bundling_invalid():
    """Test the bundling of short options in the POSIX style with invalid cases."""
    cmd = build_command()

    result = cmd.parse(["-c", "value"])
    assert result["alpha"] is True
    assert result["beta"] is False
    assert result["charlie"] == "value"

    with pytest.raises(TooManyArgumentsError):
        cmd.parse(["-a", "value"])

    with pytest.raises(TooManyArgumentsError):
        cmd.parse(["-a", "-b", "value"])

    with pytest.raises(UnknownOptionError) as excinfo:
        cmd.parse(["-dbc", "value"])
    assert excinfo.value.token == "-d"

    with pytest.raises(UnknownOptionError) as excinfo:
        cmd.parse(["-abx"])
    assert excinfo.value.token == "-x"

    with pytest.raises(MissingValueError):
        cmd.parse(["-c"])

    with pytest.raises(MissingValueError):
        cmd.parse(["-abc"])


def test_posix_bundling_fuzz():
    """Test malformed option shapes."""
    cmd = Command("tool")
    cmd.add_option("-a", "--alpha", store=False, help="Alpha option")

    assert cmd.parse(["--"]).options == {"alpha": True}

    for argv in (["-"], ["--=value"], ["-a=b"], ["---"]):
        with pytest.raises(TooManyArgumentsError):
            cmd.parse(argv)

    for argv in (["--flag="], ["-a", "-b", "-c"], ["-a", "--flag", "-b"]):
        with pytest.raises(UnknownOptionError):
            cmd.parse(argv)

    with pytest.raises(ArityViolationError):
        cmd.parse(["-a", "--", "-a"])

    with pytest.raises(CommandArgumentError):
        cmd.parse(["-aa", "x"])
