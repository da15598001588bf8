from __future__ import annotations
# usnglib value types
from dataclasses import dataclass, asdict, replace
from enum import Enum, IntEnum
from typing import Optional
import geojson


# MGRS latitude band letters (C to X, excluding I and O)
LATITUDE_BANDS = "CDEFGHJKLMNPQRSTUVWX"
SOUTHERN_BANDS = LATITUDE_BANDS[:LATITUDE_BANDS.index("N")]
POLAR_ZONES = "ABYZ"

UTM_SOUTH_LIMIT = -80.0
UTM_NORTH_LIMIT = 84.0

# Northern cells start just above the equator. Points at 0 <= lat < 0.01
# still get band N but fall outside its box.
EQUATORIAL_BAND_SOUTH = 0.01

# lat_south, lat_north, lon_west, lon_east
POLAR_SECTORS = {
    "A": (-90.0, -80.0, -180.0, 0.0),
    "B": (-90.0, -80.0, 0.0, 180.0),
    "Y": (84.0, 90.0, -180.0, 0.0),
    "Z": (84.0, 90.0, 0.0, 180.0),
}


class System(Enum):
    UTM = "UTM"
    UPS = "UPS"


class Hemisphere(Enum):
    NORTH = "N"
    SOUTH = "S"

    @classmethod
    def from_letter(cls, letter: str) -> Hemisphere:
        return cls(letter.upper())


class PrecisionLevel(IntEnum):
    """
    How much of a location a coordinate pins down, coarsest first.

    ZONE and GRID_ZONE name whole cells (a zone strip, a zone + band cell).
    The metric levels name squares in the projected frame; ONE_M is an
    exact point.
    """
    ZONE = 0
    GRID_ZONE = 1
    HUNDRED_KM = 2
    TEN_KM = 3
    ONE_KM = 4
    HUNDRED_M = 5
    TEN_M = 6
    ONE_M = 7

    @property
    def cell_size(self) -> Optional[int]:
        """Edge length of the native-frame square in metres, None for cells."""
        if self < PrecisionLevel.HUNDRED_KM:
            return None
        return 10 ** (PrecisionLevel.ONE_M - self)

    @property
    def digits(self) -> Optional[int]:
        """USNG digits per axis for this level (0 for a bare 100 km square)."""
        if self < PrecisionLevel.HUNDRED_KM:
            return None
        return self - PrecisionLevel.HUNDRED_KM

    @property
    def is_point(self) -> bool:
        return self is PrecisionLevel.ONE_M

    @classmethod
    def from_digits(cls, digits: int) -> PrecisionLevel:
        if not 0 <= digits <= 5:
            raise ValueError(f"USNG digit count must be 0..5, got {digits}")
        return cls(cls.HUNDRED_KM + digits)


def hemisphere_for_band(letter: str) -> Hemisphere:
    """Hemisphere implied by a latitude band or polar zone letter."""
    if letter in POLAR_ZONES:
        return Hemisphere.SOUTH if letter in "AB" else Hemisphere.NORTH
    if letter not in LATITUDE_BANDS:
        raise ValueError(f"Invalid latitude band letter: {letter}")
    return Hemisphere.SOUTH if letter in SOUTHERN_BANDS else Hemisphere.NORTH


def band_latitudes(letter: str) -> tuple:
    """Return (south, north) latitude edges of a UTM latitude band."""
    idx = LATITUDE_BANDS.index(letter)
    south = UTM_SOUTH_LIMIT + 8.0 * idx
    north = UTM_NORTH_LIMIT if letter == "X" else south + 8.0
    if letter == "N":
        south = EQUATORIAL_BAND_SOUTH
    return south, north


@dataclass(frozen=True)
class GeographicPoint:
    """A WGS84 latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    def __str__(self):
        return f"Latitude: {self.lat:.8f} Longitude: {self.lon:.8f}"

    def latlon(self):
        """Return latitude and longitude as a tuple."""
        return (self.lat, self.lon)

    def json(self):
        return asdict(self)

    def geojson(self):
        return geojson.Point((self.lon, self.lat))


@dataclass(frozen=True)
class BoundingBox:
    """
    A geographic box. When west > east the box crosses the antimeridian
    and spans west -> 180 -> east.
    """
    north: float
    south: float
    east: float
    west: float

    def __post_init__(self):
        if self.north < self.south:
            raise ValueError(f"North edge {self.north} is below south edge {self.south}")

    @property
    def crosses_antimeridian(self) -> bool:
        return self.west > self.east

    @property
    def is_point(self) -> bool:
        return self.north == self.south and self.east == self.west

    def corners(self):
        """SW, NW, NE, SE corners as (lat, lon) tuples."""
        return [
            (self.south, self.west),
            (self.north, self.west),
            (self.north, self.east),
            (self.south, self.east),
        ]

    def contains(self, point: GeographicPoint) -> bool:
        if not self.south <= point.lat <= self.north:
            return False
        if self.crosses_antimeridian:
            return point.lon >= self.west or point.lon <= self.east
        return self.west <= point.lon <= self.east

    def json(self):
        return asdict(self)

    def geojson(self):
        east = self.east + 360.0 if self.crosses_antimeridian else self.east
        ring = [
            (self.west, self.south),
            (east, self.south),
            (east, self.north),
            (self.west, self.north),
            (self.west, self.south),
        ]
        return geojson.Polygon([ring])


@dataclass(frozen=True)
class UtmUpsCoordinate:
    """
    A projected UTM or UPS coordinate.

    For UTM, latitude_band is the MGRS band letter and zone_number is 1..60.
    For UPS, latitude_band holds the polar zone letter (A, B, Y, Z) and
    zone_number is None.
    """
    system: System
    zone_number: Optional[int]
    latitude_band: str
    hemisphere: Hemisphere
    easting: float
    northing: float
    precision: PrecisionLevel = PrecisionLevel.ONE_M

    def __post_init__(self):
        if self.system is System.UTM:
            if self.zone_number is None or not 1 <= self.zone_number <= 60:
                raise ValueError(f"UTM zone must be 1..60, got {self.zone_number}")
            if self.latitude_band not in LATITUDE_BANDS:
                raise ValueError(f"Invalid latitude band letter: {self.latitude_band}")
        else:
            if self.zone_number is not None:
                raise ValueError("UPS coordinates carry no zone number")
            if self.latitude_band not in POLAR_ZONES:
                raise ValueError(f"Invalid polar zone letter: {self.latitude_band}")
        if hemisphere_for_band(self.latitude_band) is not self.hemisphere:
            raise ValueError(
                f"Band {self.latitude_band} is not in the {self.hemisphere.name.lower()}ern hemisphere"
            )
        if self.easting < 0 or self.northing < 0:
            raise ValueError(f"Easting/northing must be non-negative: {self.easting}, {self.northing}")

    @property
    def grid_zone_designation(self) -> str:
        if self.system is System.UPS:
            return self.latitude_band
        return f"{self.zone_number}{self.latitude_band}"

    def with_precision(self, precision: PrecisionLevel) -> UtmUpsCoordinate:
        return replace(self, precision=precision)

    def __str__(self):
        return (f"{self.grid_zone_designation} {int(self.easting)}mE "
                f"{int(self.northing)}mN {self.hemisphere.value}")

    def json(self):
        return {
            "system": self.system.value,
            "zone_number": self.zone_number,
            "latitude_band": self.latitude_band,
            "hemisphere": self.hemisphere.value,
            "easting": self.easting,
            "northing": self.northing,
            "precision": self.precision.name,
        }
