from __future__ import annotations
# Precision-dependent geographic extent of a UTM/UPS coordinate
import logging
import math

from usnglib.models import (
    BoundingBox,
    Hemisphere,
    LATITUDE_BANDS,
    POLAR_SECTORS,
    PrecisionLevel,
    SOUTHERN_BANDS,
    System,
    UtmUpsCoordinate,
    band_latitudes,
)
from usnglib.projection import (
    UPS_FALSE_ORIGIN,
    central_meridian,
    normalize_lon,
    ups_to_latlon,
    utm_to_latlon,
)

logger = logging.getLogger(__name__)


def _zone_box(coord: UtmUpsCoordinate) -> BoundingBox:
    if coord.system is System.UPS:
        if coord.hemisphere is Hemisphere.NORTH:
            return BoundingBox(north=90.0, south=84.0, east=180.0, west=-180.0)
        return BoundingBox(north=-80.0, south=-90.0, east=180.0, west=-180.0)
    west = central_meridian(coord.zone_number) - 3.0
    if coord.hemisphere is Hemisphere.NORTH:
        south, _ = band_latitudes(LATITUDE_BANDS[len(SOUTHERN_BANDS)])
        _, north = band_latitudes(LATITUDE_BANDS[-1])
    else:
        south, _ = band_latitudes(SOUTHERN_BANDS[0])
        _, north = band_latitudes(SOUTHERN_BANDS[-1])
    return BoundingBox(north=north, south=south, east=west + 6.0, west=west)


def _grid_zone_box(coord: UtmUpsCoordinate) -> BoundingBox:
    if coord.system is System.UPS:
        south, north, west, east = POLAR_SECTORS[coord.latitude_band]
        return BoundingBox(north=north, south=south, east=east, west=west)
    south, north = band_latitudes(coord.latitude_band)
    west = central_meridian(coord.zone_number) - 3.0
    return BoundingBox(north=north, south=south, east=west + 6.0, west=west)


def _unproject(coord: UtmUpsCoordinate, easting: float, northing: float):
    if coord.system is System.UPS:
        return ups_to_latlon(coord.hemisphere, easting, northing)
    return utm_to_latlon(coord.zone_number, coord.hemisphere, easting, northing)


def _enclose(latlons, reference_lon: float) -> BoundingBox:
    """
    Smallest box around a set of (lat, lon) points. Longitudes are unwrapped
    about reference_lon first, so points either side of 180 stay together.
    """
    lats = [max(-90.0, min(90.0, lat)) for lat, _ in latlons]
    lons = [reference_lon + normalize_lon(lon - reference_lon) for _, lon in latlons]
    west, east = min(lons), max(lons)
    if east - west >= 360.0:
        west, east = -180.0, 180.0
    else:
        west = normalize_lon(west)
        east = normalize_lon(east) if east != 180.0 else 180.0
    return BoundingBox(north=max(lats), south=min(lats), east=east, west=west)


def _metric_box(coord: UtmUpsCoordinate) -> BoundingBox:
    size = coord.precision.cell_size
    e0 = math.floor(coord.easting / size) * size
    n0 = math.floor(coord.northing / size) * size
    e1 = e0 + size
    n1 = n0 + size
    corners = [(e0, n0), (e0, n1), (e1, n1), (e1, n0)]
    latlons = [_unproject(coord, e, n) for e, n in corners]

    if coord.system is System.UTM:
        return _enclose(latlons, central_meridian(coord.zone_number))

    center = _unproject(coord, (e0 + e1) / 2, (n0 + n1) / 2)
    if e0 <= UPS_FALSE_ORIGIN <= e1 and n0 <= UPS_FALSE_ORIGIN <= n1:
        pole = 90.0 if coord.hemisphere is Hemisphere.NORTH else -90.0
        lats = [lat for lat, _ in latlons] + [pole]
        return BoundingBox(north=max(lats), south=min(lats), east=180.0, west=-180.0)
    return _enclose(latlons, center[1])


def to_bounding_box(coord: UtmUpsCoordinate) -> BoundingBox:
    """
    Geographic extent named by a coordinate at its precision.

    ZONE and GRID_ZONE give the zone strip or the zone + band cell (the
    polar cap or sector for UPS). Metric precisions give the box around the
    four unprojected corners of the native-frame square containing the
    coordinate. ONE_M collapses to the point itself.
    """
    precision = coord.precision
    if precision is PrecisionLevel.ZONE:
        box = _zone_box(coord)
    elif precision is PrecisionLevel.GRID_ZONE:
        box = _grid_zone_box(coord)
    elif precision.is_point:
        lat, lon = _unproject(coord, coord.easting, coord.northing)
        box = BoundingBox(north=lat, south=lat, east=lon, west=lon)
    else:
        box = _metric_box(coord)
    logger.debug("Bounding box of %s at %s: %s", coord, precision.name, box)
    return box
