from __future__ import annotations
# Tokenizer for "13S 234789mE 4123456mN [N|S]" style UTM/UPS strings
from dataclasses import dataclass
from typing import Optional
import logging
import re

from usnglib.errors import MalformedInput
from usnglib.models import Hemisphere, LATITUDE_BANDS, POLAR_ZONES, System

logger = logging.getLogger(__name__)

_UTM_PATTERN = re.compile(
    r"^(?P<zone>\d{1,2})(?P<letter>[A-Za-z])?"
    r" (?P<easting>\d+)mE"
    r" (?P<northing>\d+)mN"
    r"(?: (?P<trailing>[A-Za-z]))?$"
)
_UPS_PATTERN = re.compile(
    r"^(?P<letter>[A-Za-z])"
    r" (?P<easting>\d+)mE"
    r" (?P<northing>\d+)mN"
    r"(?: (?P<trailing>[A-Za-z]))?$"
)


@dataclass(frozen=True)
class GridTokens:
    """The pieces of a UTM/UPS string before any hemisphere decision."""
    system: System
    zone_number: Optional[int]
    leading_letter: Optional[str]
    easting: int
    northing: int
    trailing_hemisphere: Optional[Hemisphere]


def _trailing(match) -> Optional[Hemisphere]:
    letter = match.group("trailing")
    if letter is None:
        return None
    letter = letter.upper()
    if letter not in "NS":
        raise MalformedInput(f"Invalid trailing hemisphere indicator: {letter}")
    return Hemisphere.from_letter(letter)


def tokenize(text: str) -> GridTokens:
    """
    Split a UTM or UPS coordinate string into GridTokens.

    Whitespace runs are collapsed, so "13N   234789mE   234789mN" is valid.
    Raises MalformedInput for anything that does not fit the grammar:
        <zone>[<band>] <digits>mE <digits>mN [N|S]
        <A|B|Y|Z> <digits>mE <digits>mN [N|S]
    """
    if not isinstance(text, str):
        raise MalformedInput(f"Expected a coordinate string, got {type(text).__name__}")
    normalized = " ".join(text.split())

    match = _UTM_PATTERN.match(normalized)
    if match:
        zone = int(match.group("zone"))
        if not 1 <= zone <= 60:
            raise MalformedInput(f"UTM zone must be 1..60, got {zone}: {text!r}")
        letter = match.group("letter")
        if letter is not None:
            letter = letter.upper()
            if letter not in LATITUDE_BANDS:
                raise MalformedInput(f"Invalid latitude band letter {letter}: {text!r}")
        tokens = GridTokens(
            system=System.UTM,
            zone_number=zone,
            leading_letter=letter,
            easting=int(match.group("easting")),
            northing=int(match.group("northing")),
            trailing_hemisphere=_trailing(match),
        )
        logger.debug("Tokenized UTM string %r -> %s", text, tokens)
        return tokens

    match = _UPS_PATTERN.match(normalized)
    if match:
        letter = match.group("letter").upper()
        if letter not in POLAR_ZONES:
            raise MalformedInput(f"Invalid polar zone letter {letter}: {text!r}")
        tokens = GridTokens(
            system=System.UPS,
            zone_number=None,
            leading_letter=letter,
            easting=int(match.group("easting")),
            northing=int(match.group("northing")),
            trailing_hemisphere=_trailing(match),
        )
        logger.debug("Tokenized UPS string %r -> %s", text, tokens)
        return tokens

    raise MalformedInput(f"Not a UTM/UPS coordinate string: {text!r}")
