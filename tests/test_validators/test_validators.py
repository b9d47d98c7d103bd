import pytest

from aaparser.validators import (
    Validator,
    as_validator,
    choices_validator,
    convertible,
    int_range_validator,
    path_exists_validator,
    pattern_validator,
    run_validators,
    words_validator,
)


def test_int_range_validator_accepts_valid_numbers():
    validator = int_range_validator(1, 10)
    for valid in ["1", "5", "10"]:
        assert validator(valid)


@pytest.mark.parametrize("invalid", ["0", "11", "5.5", "hello", "-1", ""])
def test_int_range_validator_rejects_invalid(invalid):
    validator = int_range_validator(1, 10)
    assert not validator(invalid)
    assert validator.format_message(invalid) == (
        f"Invalid value '{invalid}'. Enter a number between 1 and 10."
    )


def test_words_validator_is_case_insensitive():
    validator = words_validator(["yes", "no"])
    assert validator("YES")
    assert validator("no")
    assert not validator("maybe")
    assert validator.format_message("maybe") == "Invalid value 'maybe'. Choices: {yes, no}."


def test_choices_validator_is_exact():
    validator = choices_validator(["fast", "slow", 3])
    assert validator("fast")
    assert validator("3")
    assert not validator("FAST")
    assert validator.format_message("x") == "Invalid value 'x'. Must be one of {fast, slow, 3}."


def test_pattern_validator_requires_full_match():
    validator = pattern_validator(r"[a-z]+\d")
    assert validator("abc1")
    assert not validator("abc12")
    assert not validator("1abc1")
    custom = pattern_validator(r"\d+", "Not a number: ${value}")
    assert custom.format_message("x") == "Not a number: x"


def test_convertible():
    validator = convertible(float)
    assert validator("1.5")
    assert not validator("abc")
    assert validator.format_message("abc") == "Invalid value 'abc'. Expected float."


def test_path_exists_validator(tmp_path):
    existing = tmp_path / "config.yaml"
    existing.write_text("program: tool\n")
    validator = path_exists_validator()
    assert validator(str(existing))
    assert not validator(str(tmp_path / "missing.yaml"))


def test_template_substitution_is_safe():
    validator = Validator.from_callable(lambda value: False, "Bad ${value} in $other")
    assert validator.format_message("x") == "Bad x in $other"
    assert Validator(lambda value: False).format_message("x") is None


def test_as_validator():
    validator = int_range_validator(0, 1)
    assert as_validator(validator) is validator
    wrapped = as_validator(str.isdigit)
    assert isinstance(wrapped, Validator)
    assert wrapped.message is None
    with pytest.raises(TypeError):
        as_validator("not callable")


def test_run_validators_returns_first_failure():
    always = Validator(lambda value: True)
    digits = Validator(str.isdigit, "digits")
    short = Validator(lambda value: len(value) < 3, "short")

    assert run_validators([], "anything") is None
    assert run_validators([always, digits, short], "12") is None
    assert run_validators([always, digits, short], "ab") is digits
    assert run_validators([always, digits, short], "1234") is short
