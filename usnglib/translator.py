from __future__ import annotations
# Public conversion operations
from typing import Optional

from usnglib import bbox, parser, projection, resolver
from usnglib.models import BoundingBox, GeographicPoint, UtmUpsCoordinate


def parse_utm_ups_string(text: str) -> UtmUpsCoordinate:
    """
    Parse "13S 234789mE 4123456mN", "13 234789mE 234789mN N" or
    "A 2347891mE 2347891mN" into a coordinate at grid zone precision.

    An explicit UTM band letter is taken as given and is not checked
    against the northing, so the band's box need not contain the point
    ("13X 234789mE 234789mN" names the 72..84 cell for a point near 2N).
    A UPS letter only picks the polar cap; the sector follows the easting.

    Raises MalformedInput for bad or irreducibly ambiguous text and
    OutOfProjectionDomain when the position cannot exist in the resolved
    hemisphere.
    """
    return resolver.resolve(parser.tokenize(text))


def to_bounding_box(coord: UtmUpsCoordinate) -> BoundingBox:
    return bbox.to_bounding_box(coord)


def to_geographic_point(coord: UtmUpsCoordinate) -> GeographicPoint:
    return projection.inverse(coord)


def from_geographic_point(point: GeographicPoint, zone_hint: Optional[int] = None) -> UtmUpsCoordinate:
    return projection.forward(point, zone_hint)
