from usnglib.errors import MalformedInput, OutOfProjectionDomain, UsngError
from usnglib.models import (
    BoundingBox,
    GeographicPoint,
    Hemisphere,
    PrecisionLevel,
    System,
    UtmUpsCoordinate,
)
from usnglib.translator import (
    from_geographic_point,
    parse_utm_ups_string,
    to_bounding_box,
    to_geographic_point,
)
from usnglib.usng import parse_usng_string, to_usng_string

__all__ = [
    "BoundingBox",
    "GeographicPoint",
    "Hemisphere",
    "MalformedInput",
    "OutOfProjectionDomain",
    "PrecisionLevel",
    "System",
    "UsngError",
    "UtmUpsCoordinate",
    "from_geographic_point",
    "parse_usng_string",
    "parse_utm_ups_string",
    "to_bounding_box",
    "to_geographic_point",
    "to_usng_string",
]
