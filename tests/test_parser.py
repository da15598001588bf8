import pytest

from usnglib import Hemisphere, MalformedInput, System
from usnglib.parser import tokenize


def test_utm_tokens():
    tokens = tokenize("13N 234789mE 234789mN")
    assert tokens.system is System.UTM
    assert tokens.zone_number == 13
    assert tokens.leading_letter == "N"
    assert tokens.easting == 234789
    assert tokens.northing == 234789
    assert tokens.trailing_hemisphere is None


def test_whitespace_is_collapsed():
    assert tokenize("  13N   234789mE \t 234789mN  ") == tokenize("13N 234789mE 234789mN")


def test_letters_are_case_insensitive():
    tokens = tokenize("13s 234789mE 2100000mN s")
    assert tokens.leading_letter == "S"
    assert tokens.trailing_hemisphere is Hemisphere.SOUTH
    assert tokens.northing == 2100000


def test_no_leading_letter_with_trailing_north():
    tokens = tokenize("13 234789mE 234789mN N")
    assert tokens.leading_letter is None
    assert tokens.trailing_hemisphere is Hemisphere.NORTH


def test_leading_zeros_are_accepted():
    tokens = tokenize("1C 000500mE 0001000mN")
    assert tokens.zone_number == 1
    assert tokens.easting == 500
    assert tokens.northing == 1000


def test_ups_tokens():
    tokens = tokenize("Z 2000000mE 1900000mN N")
    assert tokens.system is System.UPS
    assert tokens.zone_number is None
    assert tokens.leading_letter == "Z"
    assert tokens.trailing_hemisphere is Hemisphere.NORTH


@pytest.mark.parametrize("text", [
    "",
    "13",
    "13 234789mE",
    "13N 234789mN 234789mE",
    "13N 2347x89mE 234789mN",
    "13N -234789mE 234789mN",
    "13N 234789.5mE 234789mN",
    "13N 234789 234789",
    "13N 234789mE 234789mN X",
    "13N 234789mE 234789mN N S",
    "0N 234789mE 234789mN",
    "61N 234789mE 234789mN",
    "13I 234789mE 234789mN",
    "13O 234789mE 234789mN",
    "13A 234789mE 234789mN",
    "13Z 234789mE 234789mN",
    "C 2000000mE 2000000mN",
    "N 2000000mE 2000000mN",
    "AB 2000000mE 2000000mN",
])
def test_malformed_input(text):
    with pytest.raises(MalformedInput):
        tokenize(text)


def test_non_string_rejected():
    with pytest.raises(MalformedInput):
        tokenize(None)


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError):
        tokenize("not a coordinate")
