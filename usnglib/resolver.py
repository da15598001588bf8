from __future__ import annotations
# Hemisphere and latitude band decisions for tokenized UTM/UPS strings
from dataclasses import dataclass
from typing import Optional
import logging

from usnglib.errors import MalformedInput, OutOfProjectionDomain
from usnglib.models import (
    Hemisphere,
    LATITUDE_BANDS,
    PrecisionLevel,
    SOUTHERN_BANDS,
    System,
    UTM_NORTH_LIMIT,
    UTM_SOUTH_LIMIT,
    UtmUpsCoordinate,
    hemisphere_for_band,
)
from usnglib.parser import GridTokens
from usnglib.projection import (
    UPS_FALSE_ORIGIN,
    UPS_MAX_GRID,
    UTM_FALSE_NORTHING_SOUTH,
    UTM_MAX_EASTING,
    latitude_band_for,
    utm_to_latlon,
)

logger = logging.getLogger(__name__)


# Qualifier kinds for the letter that follows the zone number (or stands alone for UPS)

@dataclass(frozen=True)
class PolarQualifier:
    letter: str


@dataclass(frozen=True)
class BandQualifier:
    letter: str


@dataclass(frozen=True)
class AmbiguousQualifier:
    """N or S after a zone number: a band letter or a hemisphere, can't tell which."""
    letter: str


@dataclass(frozen=True)
class Resolution:
    hemisphere: Hemisphere
    band: Optional[str]  # None when the band must be derived from the grid values


def classify_qualifier(tokens: GridTokens):
    letter = tokens.leading_letter
    if letter is None:
        return None
    if tokens.system is System.UPS:
        return PolarQualifier(letter)
    if letter in "NS":
        return AmbiguousQualifier(letter)
    return BandQualifier(letter)


def _polar_zone_rule(qualifier, trailing):
    if isinstance(qualifier, PolarQualifier):
        # the letter fixes the cap only, the sector comes from the easting
        return Resolution(hemisphere_for_band(qualifier.letter), None)
    return None


def _band_letter_rule(qualifier, trailing):
    if isinstance(qualifier, BandQualifier):
        return Resolution(hemisphere_for_band(qualifier.letter), qualifier.letter)
    return None


def _ambiguous_letter_rule(qualifier, trailing):
    if isinstance(qualifier, AmbiguousQualifier):
        return Resolution(trailing or Hemisphere.NORTH, None)
    return None


def _trailing_indicator_rule(qualifier, trailing):
    if qualifier is None and trailing is not None:
        return Resolution(trailing, None)
    return None


# Highest priority first
RULES = (
    _polar_zone_rule,
    _band_letter_rule,
    _ambiguous_letter_rule,
    _trailing_indicator_rule,
)


def resolve_hemisphere(tokens: GridTokens) -> Resolution:
    qualifier = classify_qualifier(tokens)
    for rule in RULES:
        resolution = rule(qualifier, tokens.trailing_hemisphere)
        if resolution is not None:
            logger.debug("%s resolved %s -> %s", rule.__name__, qualifier, resolution)
            return resolution
    raise MalformedInput(
        f"Zone {tokens.zone_number} has neither a latitude band nor a hemisphere indicator"
    )


def check_utm_envelope(zone: int, easting: float, northing: float):
    if not 0 <= easting <= UTM_MAX_EASTING:
        raise OutOfProjectionDomain(f"Easting {easting} outside 0..{UTM_MAX_EASTING:.0f} in zone {zone}")
    if not 0 <= northing <= UTM_FALSE_NORTHING_SOUTH:
        raise OutOfProjectionDomain(
            f"Northing {northing} outside 0..{UTM_FALSE_NORTHING_SOUTH:.0f} in zone {zone}"
        )


def derive_polar_zone(hemisphere: Hemisphere, easting: float, northing: float) -> str:
    """UPS zone letter of a grid position: A/Y west of the 0/180 meridian line, B/Z east of it."""
    if not (0 <= easting <= UPS_MAX_GRID and 0 <= northing <= UPS_MAX_GRID):
        raise OutOfProjectionDomain(
            f"UPS {easting}mE {northing}mN outside 0..{UPS_MAX_GRID:.0f}"
        )
    west, east = ("A", "B") if hemisphere is Hemisphere.SOUTH else ("Y", "Z")
    return west if easting < UPS_FALSE_ORIGIN else east


def derive_band(zone: int, hemisphere: Hemisphere, easting: float, northing: float) -> str:
    """
    Latitude band of a UTM position, found by unprojecting it in its zone.

    Raises OutOfProjectionDomain when the grid values are outside the zone's
    envelope or the position falls outside the UTM latitude limits for the
    given hemisphere.
    """
    check_utm_envelope(zone, easting, northing)
    lat, _ = utm_to_latlon(zone, hemisphere, easting, northing)
    if not UTM_SOUTH_LIMIT <= lat <= UTM_NORTH_LIMIT:
        raise OutOfProjectionDomain(
            f"{zone} {easting}mE {northing}mN {hemisphere.value} lies at latitude {lat:.4f}, "
            f"outside UTM coverage"
        )
    band = latitude_band_for(lat)
    # keep the equator on the resolved side
    if hemisphere is Hemisphere.SOUTH and band not in SOUTHERN_BANDS:
        band = SOUTHERN_BANDS[-1]
    elif hemisphere is Hemisphere.NORTH and band in SOUTHERN_BANDS:
        band = LATITUDE_BANDS[len(SOUTHERN_BANDS)]
    return band


def resolve(tokens: GridTokens) -> UtmUpsCoordinate:
    """Turn GridTokens into a coordinate at grid zone precision."""
    resolution = resolve_hemisphere(tokens)
    band = resolution.band
    if tokens.system is System.UPS:
        band = derive_polar_zone(resolution.hemisphere, tokens.easting, tokens.northing)
        if band != tokens.leading_letter:
            logger.debug("Polar zone %s moved to %s by easting %d", tokens.leading_letter, band, tokens.easting)
    elif band is None:
        band = derive_band(tokens.zone_number, resolution.hemisphere, tokens.easting, tokens.northing)
        logger.debug("Derived band %s from northing %d", band, tokens.northing)
    else:
        check_utm_envelope(tokens.zone_number, tokens.easting, tokens.northing)
    return UtmUpsCoordinate(
        system=tokens.system,
        zone_number=tokens.zone_number,
        latitude_band=band,
        hemisphere=resolution.hemisphere,
        easting=float(tokens.easting),
        northing=float(tokens.northing),
        precision=PrecisionLevel.GRID_ZONE,
    )
