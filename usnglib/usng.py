from __future__ import annotations
# US National Grid references: "18S UJ 23483 06479"
import logging
import math
import re
import mgrs

from usnglib.errors import MalformedInput
from usnglib.models import (
    GeographicPoint,
    Hemisphere,
    LATITUDE_BANDS,
    POLAR_ZONES,
    PrecisionLevel,
    System,
    UTM_SOUTH_LIMIT,
    UtmUpsCoordinate,
    hemisphere_for_band,
)
from usnglib.projection import (
    UTM_FALSE_NORTHING_SOUTH,
    central_meridian,
    latlon_to_utm,
)

logger = logging.getLogger(__name__)

# Row letters are fixed for all zones (I and O are omitted).
NORTHING_LETTERS = "ABCDEFGHJKLMNPQRSTUV"
ROW_CYCLE = 2000000
SQUARE_SIZE = 100000

_USNG_PATTERN = re.compile(r"^(\d{1,2})([A-Z])(?:([A-Z])([A-Z])(\d*))?$")
_MGRS_PARTS = re.compile(r"^(\d{1,2}[A-Z]|[ABYZ])([A-Z]{2})(\d*)$")


def get_easting_letters(zone: int) -> str:
    """
    Return the valid 100 km column letters for a UTM zone.
    The sequence cycles every 3 zones:
      - If zone % 3 == 1: use "ABCDEFGH"
      - If zone % 3 == 2: use "JKLMNPQR"
      - If zone % 3 == 0: use "STUVWXYZ"
    """
    mod = zone % 3
    if mod == 1:
        return "ABCDEFGH"
    elif mod == 2:
        return "JKLMNPQR"
    else:  # mod == 0
        return "STUVWXYZ"


def band_min_northing(zone: int, band: str) -> int:
    """
    Lowest 100 km row northing that falls inside a latitude band.

    Southern parallels bow poleward away from the central meridian, so the
    zone edge is checked as well.
    """
    hemisphere = hemisphere_for_band(band)
    south = UTM_SOUTH_LIMIT + 8.0 * LATITUDE_BANDS.index(band)
    cm = central_meridian(zone)
    northing = min(latlon_to_utm(south, cm + offset, zone, hemisphere)[1] for offset in (0.0, 3.0))
    return int(math.floor(northing / SQUARE_SIZE)) * SQUARE_SIZE


def _square_origin(zone: int, band: str, column: str, row: str, text: str):
    columns = get_easting_letters(zone)
    if column not in columns:
        raise MalformedInput(f"Column letter {column} is not used in zone {zone}: {text!r}")
    if row not in NORTHING_LETTERS:
        raise MalformedInput(f"Invalid row letter {row}: {text!r}")

    easting = (columns.index(column) + 1) * SQUARE_SIZE
    offset = 5 if zone % 2 == 0 else 0
    northing = ((NORTHING_LETTERS.index(row) - offset) % len(NORTHING_LETTERS)) * SQUARE_SIZE
    min_northing = band_min_northing(zone, band)
    while northing < min_northing:
        northing += ROW_CYCLE
    if hemisphere_for_band(band) is Hemisphere.SOUTH and northing >= UTM_FALSE_NORTHING_SOUTH:
        raise MalformedInput(f"Square {column}{row} does not exist in band {band}: {text!r}")
    return easting, northing


def parse_usng_string(text: str) -> UtmUpsCoordinate:
    """
    Parse a USNG/MGRS grid reference into a coordinate.

    Accepts a bare grid zone designation ("18S"), a 100 km square ("18S UJ")
    or a square plus 1..5 digits per axis ("18S UJ 234 064"). Spaces are
    optional. The precision follows the number of digits and the
    easting/northing are the lower-left corner of the named square.
    """
    if not isinstance(text, str):
        raise MalformedInput(f"Expected a grid reference string, got {type(text).__name__}")
    compact = "".join(text.split()).upper()
    if compact and compact[0] in POLAR_ZONES:
        raise MalformedInput(f"Polar grid references are not supported: {text!r}")

    match = _USNG_PATTERN.match(compact)
    if not match:
        raise MalformedInput(f"Not a USNG grid reference: {text!r}")
    zone = int(match.group(1))
    band = match.group(2)
    if not 1 <= zone <= 60:
        raise MalformedInput(f"UTM zone must be 1..60, got {zone}: {text!r}")
    if band not in LATITUDE_BANDS:
        raise MalformedInput(f"Invalid latitude band letter {band}: {text!r}")
    hemisphere = hemisphere_for_band(band)

    if match.group(3) is None:
        # grid zone only; place the coordinate at the cell's central meridian
        easting, northing = latlon_to_utm(
            UTM_SOUTH_LIMIT + 8.0 * LATITUDE_BANDS.index(band) + 4.0,
            central_meridian(zone), zone, hemisphere,
        )
        return UtmUpsCoordinate(
            System.UTM, zone, band, hemisphere, easting, northing, PrecisionLevel.GRID_ZONE,
        )

    digits = match.group(5)
    if len(digits) % 2 != 0 or len(digits) > 10:
        raise MalformedInput(f"Numeric part must be an even number of up to 10 digits: {text!r}")
    precision = PrecisionLevel.from_digits(len(digits) // 2)

    easting, northing = _square_origin(zone, band, match.group(3), match.group(4), text)
    if digits:
        half = len(digits) // 2
        scale = precision.cell_size
        easting += int(digits[:half]) * scale
        northing += int(digits[half:]) * scale

    coord = UtmUpsCoordinate(
        System.UTM, zone, band, hemisphere, float(easting), float(northing), precision,
    )
    logger.debug("Parsed USNG %r -> %s at %s", text, coord, precision.name)
    return coord


def to_usng_string(point: GeographicPoint, precision: PrecisionLevel = PrecisionLevel.ONE_M) -> str:
    """
    Format a point as a spaced USNG string using the mgrs library.

    GRID_ZONE returns only the grid zone designation ("18S"); metric
    precisions add the 100 km square and 0..5 digits per axis.
    """
    if precision is PrecisionLevel.ZONE:
        raise ValueError("A USNG string names at least a grid zone")
    digits = precision.digits or 0
    mgrs_obj = mgrs.MGRS()
    reference = mgrs_obj.toMGRS(point.lat, point.lon, MGRSPrecision=digits).strip()
    match = _MGRS_PARTS.match(reference)
    if not match:
        raise ValueError(f"Unexpected MGRS reference from mgrs: {reference!r}")
    gzd, square, numbers = match.groups()
    # mgrs zero-pads single digit zones
    gzd = gzd.lstrip("0")
    if precision is PrecisionLevel.GRID_ZONE:
        return gzd
    half = len(numbers) // 2
    parts = [gzd, square, numbers[:half], numbers[half:]]
    return " ".join(part for part in parts if part)
