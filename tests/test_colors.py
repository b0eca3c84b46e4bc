import pytest

from totoro_long.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("snow", 0xFFFAFA),
        ("navy", 0x80),
        ("cornflowerblue", 0x6495ED),
        ("slateblue3", 0x6959CD),
        ("gray50", 0x7F7F7F),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("darkred", 0x8B0000),
    ],
)
def test_known_colors(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent():
    assert lookup_color("none") == -1


def test_lookup_ignores_case():
    assert lookup_color("ReD") == lookup_color("red")
    assert lookup_color("GHOST WHITE") == lookup_color("ghost white")


def test_first_of_repeated_names_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_spaced_and_joined_names_agree():
    assert lookup_color("misty rose") == lookup_color("mistyrose")
    assert lookup_color("deep pink") == lookup_color("deeppink")


@pytest.mark.parametrize("level", range(0, 101))
def test_gray_and_grey_spellings_match(level):
    value = lookup_color(f"gray{level}")
    assert value == lookup_color(f"grey{level}")
    red, green, blue = value >> 16, (value >> 8) & 0xFF, value & 0xFF
    assert red == green == blue


def test_grey_levels_increase():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")


def test_shade_one_matches_base():
    assert lookup_color("red1") == lookup_color("red")
    assert lookup_color("blue1") == lookup_color("blue")


@pytest.mark.parametrize("name", ["", "not a colour", "red5", "gray101"])
def test_unknown_names_raise(name):
    with pytest.raises(KeyError):
        lookup_color(name)