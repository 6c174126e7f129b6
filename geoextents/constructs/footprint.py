from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from geopandas import GeoSeries
from pyproj import Transformer
from shapely.geometry import Polygon, mapping
from shapely.ops import transform

from geoextents.exceptions import FormatError
from geoextents.utils.crs import CRS84

if TYPE_CHECKING:
    from geoextents.constructs.envelope import Envelope


class Footprint:
    """
    A rectangular polygon with an associated coordinate reference system (CRS).

    A Footprint is the polygon view of a 2-D envelope: the CRS travels alongside the geometry
    as metadata because shapely geometries carry no CRS of their own. It is typically used to
    run spatial predicates (intersects, contains) against the total extent of a response.

    Args:
        crs: The coordinate reference system of the footprint geometry
        geometry: A Shapely Polygon defining the rectangle

    Attributes:
        crs: The CRS of the footprint
        geometry: The Polygon geometry representing the bounded area

    Examples:
        >>> from geoextents.constructs.envelope import Envelope
        >>> from geoextents.utils.crs import CRS84
        >>>
        >>> env = Envelope.from_corners([0, 0], [10, 5], CRS84)
        >>> footprint = Footprint.from_envelope(env)
        >>> list(footprint.geometry.exterior.coords)
        [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0), (0.0, 5.0), (0.0, 0.0)]
    """

    def __init__(self, crs: Any, geometry: Polygon):
        self.crs = crs
        self.geometry = geometry

    def __repr__(self):
        return f"Footprint(crs={self.crs!r}, geometry={self.geometry.wkt})"

    @classmethod
    def from_envelope(cls, envelope: Envelope) -> Footprint:
        """
        Create a footprint having the same extent as a 2-D envelope.

        The ring is closed and visits the corners in this order: (minX, minY), (maxX, minY),
        (maxX, maxY), (minX, maxY), (minX, minY). X and Y are the first and second axes of
        the envelope's CRS, whatever those axes are.

        Args:
            envelope: A 2-D envelope

        Returns:
            A new Footprint in the envelope's CRS

        Raises:
            FormatError: If the envelope is not 2-dimensional
        """
        if envelope.dimension != 2:
            raise FormatError(
                f"a footprint needs a 2-D envelope but got {envelope.dimension} dimensions"
            )

        min_x, min_y = envelope.lower
        max_x, max_y = envelope.upper
        ring = [
            (min_x, min_y),
            (max_x, min_y),
            (max_x, max_y),
            (min_x, max_y),
            (min_x, min_y),
        ]

        return Footprint(crs=envelope.crs, geometry=Polygon(ring))

    def to_geoseries(self) -> GeoSeries:
        """Single-row GeoSeries holding the footprint, with its CRS set."""
        return GeoSeries([self.geometry], crs=self.crs)

    def to_geojson(self) -> str:
        """
        Convert the footprint to a GeoJSON string.

        The footprint is transformed to CRS84 (longitude, latitude) if it's in a different CRS,
        since GeoJSON uses lon/lat coordinates by convention. The CRS must be a pyproj CRS.

        Returns:
            A GeoJSON string representation of the footprint polygon
        """
        if self.crs != CRS84:
            # geometry x/y follow the CRS axis order, so no always_xy here
            project = Transformer.from_crs(self.crs, CRS84).transform
            geometry = transform(project, self.geometry)
        else:
            geometry = self.geometry

        return json.dumps(mapping(geometry))
