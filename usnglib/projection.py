from __future__ import annotations
# Transverse Mercator (UTM) and polar stereographic (UPS) on the WGS84 ellipsoid
from geographiclib.constants import Constants
from typing import Optional
import math

from usnglib.errors import OutOfProjectionDomain
from usnglib.models import (
    GeographicPoint,
    Hemisphere,
    LATITUDE_BANDS,
    PrecisionLevel,
    System,
    UTM_NORTH_LIMIT,
    UTM_SOUTH_LIMIT,
    UtmUpsCoordinate,
)

# WGS84 ellipsoid
WGS84_A = Constants.WGS84_a
WGS84_F = Constants.WGS84_f
WGS84_E2 = WGS84_F * (2 - WGS84_F)
WGS84_E = math.sqrt(WGS84_E2)
# Third flattening
WGS84_N = WGS84_F / (2 - WGS84_F)

UTM_K0 = 0.9996
UTM_FALSE_EASTING = 500000.0
UTM_FALSE_NORTHING_SOUTH = 10000000.0
UTM_MAX_EASTING = 1000000.0

UPS_K0 = 0.994
UPS_FALSE_ORIGIN = 2000000.0
UPS_MAX_GRID = 4000000.0
# UPS is used up to half a degree inside the UTM limits
UPS_NORTH_OVERLAP = 83.5
UPS_SOUTH_OVERLAP = -79.5


def _kruger_coefficients(n: float):
    """
    Series coefficients to order n^6 (Karney 2011, eqs. 35 and 36).
    Returns (A, alpha, beta); alpha[0] and beta[0] are unused.
    """
    n2 = n * n
    n3 = n2 * n
    n4 = n3 * n
    n5 = n4 * n
    n6 = n5 * n
    rectifying_radius = WGS84_A / (1 + n) * (1 + n2 / 4 + n4 / 64 + n6 / 256)
    alpha = (
        0.0,
        n / 2 - 2 * n2 / 3 + 5 * n3 / 16 + 41 * n4 / 180 - 127 * n5 / 288 + 7891 * n6 / 37800,
        13 * n2 / 48 - 3 * n3 / 5 + 557 * n4 / 1440 + 281 * n5 / 630 - 1983433 * n6 / 1935360,
        61 * n3 / 240 - 103 * n4 / 140 + 15061 * n5 / 26880 + 167603 * n6 / 181440,
        49561 * n4 / 161280 - 179 * n5 / 168 + 6601661 * n6 / 7257600,
        34729 * n5 / 80640 - 3418889 * n6 / 1995840,
        212378941 * n6 / 319334400,
    )
    beta = (
        0.0,
        n / 2 - 2 * n2 / 3 + 37 * n3 / 96 - n4 / 360 - 81 * n5 / 512 + 96199 * n6 / 604800,
        n2 / 48 + n3 / 15 - 437 * n4 / 1440 + 46 * n5 / 105 - 1118711 * n6 / 3870720,
        17 * n3 / 480 - 37 * n4 / 840 - 209 * n5 / 4480 + 5569 * n6 / 90720,
        4397 * n4 / 161280 - 11 * n5 / 504 - 830251 * n6 / 7257600,
        4583 * n5 / 161280 - 108847 * n6 / 3991680,
        20648693 * n6 / 638668800,
    )
    return rectifying_radius, alpha, beta


TM_A, TM_ALPHA, TM_BETA = _kruger_coefficients(WGS84_N)

# Polar stereographic scale constant, sqrt((1+e)^(1+e) * (1-e)^(1-e))
PS_C = math.sqrt((1 + WGS84_E) ** (1 + WGS84_E) * (1 - WGS84_E) ** (1 - WGS84_E))


def normalize_lon(lon: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return (lon + 180.0) % 360.0 - 180.0


def central_meridian(zone: int) -> float:
    return -183.0 + 6.0 * zone


def utm_zone_for(lon: float) -> int:
    """Regular 6 degree UTM zone containing a longitude."""
    return int((normalize_lon(lon) + 180.0) // 6.0) % 60 + 1


def latitude_band_for(lat: float) -> str:
    idx = int((lat - UTM_SOUTH_LIMIT) // 8.0)
    idx = max(0, min(idx, len(LATITUDE_BANDS) - 1))
    return LATITUDE_BANDS[idx]


def polar_zone_for(lat: float, lon: float) -> str:
    west = normalize_lon(lon) < 0
    if lat < 0:
        return "A" if west else "B"
    return "Y" if west else "Z"


def _conformal_tan(tau: float) -> float:
    """tan of the conformal latitude for tau = tan(latitude)."""
    sigma = math.sinh(WGS84_E * math.atanh(WGS84_E * tau / math.sqrt(1 + tau * tau)))
    return tau * math.sqrt(1 + sigma * sigma) - sigma * math.sqrt(1 + tau * tau)


def _geodetic_tan(taup: float) -> float:
    """Invert _conformal_tan by Newton's method."""
    tau = taup
    for _ in range(20):
        taup_i = _conformal_tan(tau)
        delta = ((taup - taup_i) / math.sqrt(1 + taup_i * taup_i)
                 * (1 + (1 - WGS84_E2) * tau * tau)
                 / ((1 - WGS84_E2) * math.sqrt(1 + tau * tau)))
        tau += delta
        if abs(delta) <= 1e-12 * max(1.0, abs(tau)):
            break
    return tau


def latlon_to_utm(lat: float, lon: float, zone: int, hemisphere: Optional[Hemisphere] = None):
    """
    Transverse Mercator forward projection into a given zone.

    Returns (easting, northing). The hemisphere selects the false northing
    and defaults to the one the latitude lies in.
    """
    if hemisphere is None:
        hemisphere = Hemisphere.NORTH if lat >= 0 else Hemisphere.SOUTH
    phi = math.radians(lat)
    lam = math.radians(normalize_lon(lon - central_meridian(zone)))
    if abs(lam) >= math.pi / 2:
        raise OutOfProjectionDomain(f"Longitude {lon} is too far from zone {zone}")

    cos_lam = math.cos(lam)
    taup = _conformal_tan(math.tan(phi))
    xip = math.atan2(taup, cos_lam)
    etap = math.asinh(math.sin(lam) / math.sqrt(taup * taup + cos_lam * cos_lam))

    xi = xip
    eta = etap
    for j in range(1, 7):
        xi += TM_ALPHA[j] * math.sin(2 * j * xip) * math.cosh(2 * j * etap)
        eta += TM_ALPHA[j] * math.cos(2 * j * xip) * math.sinh(2 * j * etap)

    easting = UTM_FALSE_EASTING + UTM_K0 * TM_A * eta
    northing = UTM_K0 * TM_A * xi
    if hemisphere is Hemisphere.SOUTH:
        northing += UTM_FALSE_NORTHING_SOUTH
    return easting, northing


def utm_to_latlon(zone: int, hemisphere: Hemisphere, easting: float, northing: float):
    """Transverse Mercator inverse projection, no domain checks. Returns (lat, lon)."""
    y = northing
    if hemisphere is Hemisphere.SOUTH:
        y -= UTM_FALSE_NORTHING_SOUTH
    eta = (easting - UTM_FALSE_EASTING) / (UTM_K0 * TM_A)
    xi = y / (UTM_K0 * TM_A)

    xip = xi
    etap = eta
    for j in range(1, 7):
        xip -= TM_BETA[j] * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
        etap -= TM_BETA[j] * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

    sinh_etap = math.sinh(etap)
    cos_xip = math.cos(xip)
    taup = math.sin(xip) / math.sqrt(sinh_etap * sinh_etap + cos_xip * cos_xip)
    lat = math.degrees(math.atan(_geodetic_tan(taup)))
    lon = central_meridian(zone) + math.degrees(math.atan2(sinh_etap, cos_xip))
    return lat, normalize_lon(lon)


def latlon_to_ups(lat: float, lon: float, hemisphere: Optional[Hemisphere] = None):
    """Polar stereographic forward projection. Returns (easting, northing)."""
    if hemisphere is None:
        hemisphere = Hemisphere.NORTH if lat >= 0 else Hemisphere.SOUTH
    south = hemisphere is Hemisphere.SOUTH
    phi = math.radians(-lat if south else lat)
    lam = math.radians(lon)
    if phi <= -math.pi / 2:
        raise OutOfProjectionDomain(f"Latitude {lat} is the opposite pole")

    esin = WGS84_E * math.sin(phi)
    t = math.tan(math.pi / 4 - phi / 2) / ((1 - esin) / (1 + esin)) ** (WGS84_E / 2)
    rho = 2 * WGS84_A * UPS_K0 * t / PS_C

    easting = UPS_FALSE_ORIGIN + rho * math.sin(lam)
    if south:
        northing = UPS_FALSE_ORIGIN + rho * math.cos(lam)
    else:
        northing = UPS_FALSE_ORIGIN - rho * math.cos(lam)
    return easting, northing


def ups_to_latlon(hemisphere: Hemisphere, easting: float, northing: float):
    """Polar stereographic inverse projection, no domain checks. Returns (lat, lon)."""
    dx = easting - UPS_FALSE_ORIGIN
    dy = northing - UPS_FALSE_ORIGIN
    rho = math.hypot(dx, dy)
    t = rho * PS_C / (2 * WGS84_A * UPS_K0)

    phi = math.pi / 2 - 2 * math.atan(t)
    for _ in range(50):
        esin = WGS84_E * math.sin(phi)
        nxt = math.pi / 2 - 2 * math.atan(t * ((1 - esin) / (1 + esin)) ** (WGS84_E / 2))
        done = abs(nxt - phi) < 1e-15
        phi = nxt
        if done:
            break

    lat = math.degrees(phi)
    if hemisphere is Hemisphere.SOUTH:
        lat = -lat
        dy = -dy
    # longitude is undefined at the pole itself
    lon = math.degrees(math.atan2(dx, -dy)) if rho > 0 else 0.0
    return lat, normalize_lon(lon)


def forward(point: GeographicPoint, zone_hint: Optional[int] = None) -> UtmUpsCoordinate:
    """
    Project a geographic point to UTM, or UPS beyond the UTM latitude limits.

    zone_hint forces a UTM zone (e.g. to express a point in a neighbouring
    zone). The result is at ONE_M precision.
    """
    lat, lon = point.lat, point.lon
    in_utm = UTM_SOUTH_LIMIT <= lat < UTM_NORTH_LIMIT
    hemisphere = Hemisphere.NORTH if lat >= 0 else Hemisphere.SOUTH

    if zone_hint is not None:
        if not 1 <= zone_hint <= 60:
            raise OutOfProjectionDomain(f"UTM zone must be 1..60, got {zone_hint}")
        if not in_utm:
            raise OutOfProjectionDomain(f"Latitude {lat} is outside UTM, cannot use zone {zone_hint}")

    if not in_utm:
        easting, northing = latlon_to_ups(lat, lon, hemisphere)
        return UtmUpsCoordinate(
            System.UPS, None, polar_zone_for(lat, lon), hemisphere,
            easting, northing, PrecisionLevel.ONE_M,
        )

    zone = zone_hint if zone_hint is not None else utm_zone_for(lon)
    easting, northing = latlon_to_utm(lat, lon, zone, hemisphere)
    if not 0 <= easting <= UTM_MAX_EASTING:
        raise OutOfProjectionDomain(f"Easting {easting:.1f} outside zone {zone}")
    return UtmUpsCoordinate(
        System.UTM, zone, latitude_band_for(lat), hemisphere,
        easting, northing, PrecisionLevel.ONE_M,
    )


def inverse(coord: UtmUpsCoordinate) -> GeographicPoint:
    """Unproject a UTM/UPS coordinate, checking the projection's envelope."""
    if coord.system is System.UPS:
        if not (0 <= coord.easting <= UPS_MAX_GRID and 0 <= coord.northing <= UPS_MAX_GRID):
            raise OutOfProjectionDomain(f"UPS easting/northing outside the polar grid: {coord}")
        lat, lon = ups_to_latlon(coord.hemisphere, coord.easting, coord.northing)
        if coord.hemisphere is Hemisphere.NORTH and lat < UPS_NORTH_OVERLAP:
            raise OutOfProjectionDomain(f"{coord} lies at {lat:.4f}, south of the north polar cap")
        if coord.hemisphere is Hemisphere.SOUTH and lat > UPS_SOUTH_OVERLAP:
            raise OutOfProjectionDomain(f"{coord} lies at {lat:.4f}, north of the south polar cap")
        return GeographicPoint(lat, lon)

    if not 0 <= coord.easting <= UTM_MAX_EASTING:
        raise OutOfProjectionDomain(f"Easting {coord.easting} outside zone {coord.zone_number}")
    if not 0 <= coord.northing <= UTM_FALSE_NORTHING_SOUTH:
        raise OutOfProjectionDomain(f"Northing {coord.northing} outside the UTM grid")
    lat, lon = utm_to_latlon(coord.zone_number, coord.hemisphere, coord.easting, coord.northing)
    if not UTM_SOUTH_LIMIT <= lat <= UTM_NORTH_LIMIT:
        raise OutOfProjectionDomain(f"{coord} lies at latitude {lat:.4f}, outside UTM coverage")
    return GeographicPoint(lat, lon)
