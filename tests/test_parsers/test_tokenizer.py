import pytest

from aaparser.parser.tokenizer import (
    TokenKind,
    classify,
    is_long_flag,
    is_short_flag,
)


@pytest.mark.parametrize(
    "raw, flag, rest",
    [
        ("-a", "-a", ""),
        ("-abc", "-a", "bc"),
        ("-9", "-9", ""),
        ("-v2", "-v", "2"),
    ],
)
def test_classify_short_cluster(raw, flag, rest):
    token = classify(raw)
    assert token.kind == TokenKind.SHORT
    assert token.flag == flag
    assert token.rest == rest
    assert token.is_option


@pytest.mark.parametrize(
    "raw, flag, value",
    [
        ("--verbose", "--verbose", None),
        ("--dry-run", "--dry-run", None),
        ("--name=value", "--name", "value"),
        ("--name=", "--name", ""),
        ("--name=a=b", "--name", "a=b"),
        ("--x2=-1", "--x2", "-1"),
    ],
)
def test_classify_long_option(raw, flag, value):
    token = classify(raw)
    assert token.kind == TokenKind.LONG
    assert token.flag == flag
    assert token.value == value


def test_classify_literal_marker():
    token = classify("--")
    assert token.kind == TokenKind.LITERAL
    assert not token.is_option


@pytest.mark.parametrize(
    "raw",
    ["", "-", "---", "--=value", "--1abc", "-a=b", "-a.b", "--na_me", "build", "a-b", "-é"],
)
def test_classify_positional(raw):
    token = classify(raw)
    assert token.kind == TokenKind.POSITIONAL
    assert token.flag is None
    assert token.raw == raw


def test_flag_shape_helpers():
    assert is_short_flag("-v")
    assert not is_short_flag("-vv")
    assert not is_short_flag("--v")
    assert is_long_flag("--verbose")
    assert not is_long_flag("--verbose=1")
    assert not is_long_flag("-v")
    assert not is_long_flag("--")
