import io

import pytest

from totoro_long.printf import format_string, print_formatted


def test_plain_text_passes_through():
    assert format_string("moves: ") == "moves: "


def test_decimal_round_trip():
    for n in (0, 7, -7, 123456, -2147483648, 2147483647):
        assert int(format_string("%d", n)) == n
        assert format_string("%i", n) == format_string("%d", n)


def test_decimal_wraps_to_32_bits():
    assert int(format_string("%d", 2**31)) == -(2**31)


def test_unsigned_wraps_negative():
    assert int(format_string("%u", -1)) == 2**32 - 1
    assert int(format_string("%u", 5)) == 5


def test_hex_round_trip_and_case():
    for n in (0, 9, 10, 255, 4096, 2**32 - 1):
        lower = format_string("%x", n)
        upper = format_string("%X", n)
        assert int(lower, 16) == n
        assert upper == lower.upper()
        assert lower == lower.lower()


def test_string_and_null():
    assert format_string("[%s]", "abc") == "[abc]"
    assert format_string("%s", None) == "(null)"


def test_pointer():
    assert format_string("%p", 0) == "(nil)"
    assert format_string("%p", None) == "(nil)"
    text = format_string("%p", 48879)
    assert text.startswith("0x")
    assert int(text[2:], 16) == 48879


def test_char_and_percent():
    assert format_string("%c%c", "a", 66) == "aB"
    assert format_string("100%%") == "100%"


def test_unknown_conversion_prints_nothing():
    assert format_string("a%qb") == "ab"


def test_missing_argument_raises():
    with pytest.raises(ValueError):
        format_string("%d")


def test_message_from_game():
    assert format_string("You Win! Moves: %d\n", 12) == "You Win! Moves: 12\n"


def test_print_formatted_writes_and_counts():
    out = io.StringIO()
    count = print_formatted("moves: %d\n", 3, stream=out)
    assert out.getvalue() == "moves: 3\n"
    assert count == len(out.getvalue())


def test_print_formatted_defaults_to_stdout(capsys):
    count = print_formatted("%s!", "hi")
    assert capsys.readouterr().out == "hi!"
    assert count == 3