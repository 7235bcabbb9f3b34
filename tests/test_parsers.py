import pytest

from ovenctl.parsers import contains_template, parse_number, tokenize


@pytest.mark.parametrize(
    "text, template, expected",
    [
        ("hello world", "wor", True),
        ("hello world", "w*r", True),
        ("abc", "*b", True),
        ("abc", "xyz", False),
        ("", "a", False),
        ("abc", "***", False),
        ("aab", "ab", False),
    ],
)
def test_contains_template(text, template, expected):
    assert contains_template(text, template) is expected


def test_tokenize_splits_on_delimiters():
    assert tokenize("psetn 1 Bread", " ", 10) == ["psetn", "1", "Bread"]


def test_tokenize_skips_repeated_delimiters():
    assert tokenize("  pget   3  ", " ", 10) == ["pget", "3"]


def test_tokenize_multiple_delimiter_chars():
    assert tokenize("a,b;c", ",;", 10) == ["a", "b", "c"]


def test_tokenize_limits_token_count():
    assert tokenize("a b c d", " ", 2) == ["a", "b"]


def test_tokenize_empty():
    assert tokenize("", " ", 10) == []
    assert tokenize("     ", " ", 10) == []


def test_tokenize_rejects_zero_limit():
    with pytest.raises(ValueError):
        tokenize("a", " ", 0)


@pytest.mark.parametrize("text", ["0", "7", "42", "200", "1000"])
def test_parse_decimal_round_trip(text):
    assert parse_number(text) == int(text)


def test_parse_hexadecimal():
    assert parse_number("0x1A") == 26
    assert parse_number("0x10") == parse_number("16")


def test_parse_signed_and_whitespace():
    assert parse_number("-5") == -5
    assert parse_number("+12") == 12
    assert parse_number(" 7") == 7


def test_parse_saturates_to_all_ones():
    assert parse_number("4294967295") == -1
    assert parse_number("99999999999") == parse_number("4294967295")
    assert parse_number("0xFFFFFFFF") == parse_number("4294967295")


def test_parse_empty_is_zero():
    assert parse_number("") == 0


@pytest.mark.parametrize("text", ["12a", "abc", "0x", "0xg1", " ", "+", "1 ", "1.5"])
def test_parse_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_number(text)