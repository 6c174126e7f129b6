from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple

from shapely.errors import GEOSException
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    box,
)
from shapely.geometry.base import BaseGeometry

from geoextents.constructs.bbox import parse_ordinates
from geoextents.exceptions import FormatError, GeometryDecodeError
from geoextents.gml.parser_interface import GeometryParserInterface, ParsedGeometry
from geoextents.utils.keys import (
    GML_LOWER_CORNER,
    GML_NS,
    GML_UPPER_CORNER,
    SRS_DIMENSION_ATTRIBUTE,
    SRS_NAME_ATTRIBUTE,
    qname,
    split_qname,
)

log = logging.getLogger(__name__)

Position = Tuple[float, ...]

DEFAULT_SRS_DIMENSION = 2


def _gml(local_name: str) -> str:
    return qname(GML_NS, local_name)


def _srs_dimension(element: Any, inherited: int) -> int:
    value = element.get(SRS_DIMENSION_ATTRIBUTE)
    if value is None:
        return inherited
    try:
        dim = int(value)
    except ValueError as e:
        raise FormatError(f"invalid srsDimension {value!r}") from e
    if dim < 1:
        raise FormatError(f"invalid srsDimension {value!r}")
    return dim


def _child(element: Any, local_name: str) -> Any:
    child = element.find(_gml(local_name))
    if child is None:
        raise FormatError(f"{split_qname(element.tag)[1]} has no gml:{local_name}")
    return child


def _geometry_children(element: Any) -> List[Any]:
    return [c for c in element if split_qname(c.tag)[0] == GML_NS]


class GmlGeometryParser(GeometryParserInterface):
    """
    A decoder for GML 3.2 geometry elements, producing Shapely geometries.

    Coordinates are kept exactly as written, in the axis order of the element's CRS; nothing
    is swapped or reprojected. Positions may be given as ``gml:pos``, ``gml:posList`` (split
    according to ``srsDimension``, default 2) or the legacy ``gml:coordinates``.

    Supported elements: Point, LineString, LinearRing, Curve (LineStringSegment patches),
    Polygon, Surface (PolygonPatch patches), Envelope, MultiPoint, MultiCurve,
    MultiLineString, MultiSurface, MultiPolygon and MultiGeometry.

    Examples:
        >>> import xml.etree.ElementTree as ET
        >>> point = ET.fromstring(
        ...     '<gml:Point xmlns:gml="http://www.opengis.net/gml/3.2" srsName="EPSG:4326">'
        ...     '<gml:pos>40.7128 -74.0060</gml:pos></gml:Point>'
        ... )
        >>> parsed = GmlGeometryParser().parse(point)
        >>> parsed.geom.x, parsed.srs_name
        (40.7128, 'EPSG:4326')
    """

    def __init__(self):
        self._decoders: Dict[str, Callable[[Any, int], BaseGeometry]] = {
            "Point": self._point,
            "LineString": self._line_string,
            "LinearRing": self._linear_ring,
            "Curve": self._curve,
            "Polygon": self._polygon,
            "Surface": self._surface,
            "Envelope": self._envelope,
            "MultiPoint": self._multi_point,
            "MultiCurve": self._multi_curve,
            "MultiLineString": self._multi_curve,
            "MultiSurface": self._multi_surface,
            "MultiPolygon": self._multi_surface,
            "MultiGeometry": self._multi_geometry,
        }

    def parse(self, element: Any) -> ParsedGeometry:
        namespace, local_name = split_qname(element.tag)
        if namespace != GML_NS:
            raise GeometryDecodeError(
                f"{element.tag} is not a GML 3.2 geometry element"
            )

        try:
            geom = self._decode(element, DEFAULT_SRS_DIMENSION)
        except (FormatError, GEOSException, ValueError) as e:
            raise GeometryDecodeError(f"could not decode gml:{local_name}: {e}") from e

        srs_name = (element.get(SRS_NAME_ATTRIBUTE) or "").strip()
        log.debug("decoded gml:%s with srsName %r", local_name, srs_name)

        return ParsedGeometry(geom=geom, srs_name=srs_name)

    def _decode(self, element: Any, dim: int) -> BaseGeometry:
        _, local_name = split_qname(element.tag)
        decoder = self._decoders.get(local_name)
        if decoder is None:
            raise GeometryDecodeError(f"unsupported geometry element gml:{local_name}")
        return decoder(element, _srs_dimension(element, dim))

    def _positions(self, element: Any, dim: int) -> List[Position]:
        pos_list = element.find(_gml("posList"))
        if pos_list is not None:
            dim = _srs_dimension(pos_list, dim)
            values = parse_ordinates(pos_list.text or "", "posList")
            if len(values) % dim != 0:
                raise FormatError(
                    f"posList holds {len(values)} values, not a multiple of srsDimension {dim}"
                )
            return [values[i : i + dim] for i in range(0, len(values), dim)]

        coordinates = element.find(_gml("coordinates"))
        if coordinates is not None:
            return [
                parse_ordinates(tuple_text.replace(",", " "), "coordinates")
                for tuple_text in (coordinates.text or "").split()
            ]

        return [
            parse_ordinates(pos.text or "", "pos") for pos in element.findall(_gml("pos"))
        ]

    def _members(self, element: Any, dim: int) -> List[BaseGeometry]:
        # gml:xxxMember wraps one geometry, gml:xxxMembers wraps several
        members = []
        for child in _geometry_children(element):
            _, local_name = split_qname(child.tag)
            if local_name.endswith("Member") or local_name.endswith("Members"):
                members.extend(
                    self._decode(g, dim) for g in _geometry_children(child)
                )
        return members

    def _point(self, element: Any, dim: int) -> Point:
        positions = self._positions(element, dim)
        if len(positions) != 1:
            raise FormatError(f"a point needs one position but got {len(positions)}")
        return Point(positions[0])

    def _line_string(self, element: Any, dim: int) -> LineString:
        return LineString(self._positions(element, dim))

    def _linear_ring(self, element: Any, dim: int) -> LinearRing:
        return LinearRing(self._positions(element, dim))

    def _curve(self, element: Any, dim: int) -> LineString:
        positions: List[Position] = []
        for segment in _geometry_children(_child(element, "segments")):
            segment_positions = self._positions(segment, _srs_dimension(segment, dim))
            if positions and segment_positions and positions[-1] == segment_positions[0]:
                segment_positions = segment_positions[1:]
            positions.extend(segment_positions)
        return LineString(positions)

    def _rings(self, element: Any, dim: int) -> Tuple[Sequence[Position], List]:
        exterior = _child(_child(element, "exterior"), "LinearRing")
        shell = self._positions(exterior, _srs_dimension(exterior, dim))
        holes = [
            self._positions(ring, _srs_dimension(ring, dim))
            for interior in element.findall(_gml("interior"))
            for ring in interior.findall(_gml("LinearRing"))
        ]
        return shell, holes

    def _polygon(self, element: Any, dim: int) -> Polygon:
        shell, holes = self._rings(element, dim)
        return Polygon(shell, holes)

    def _surface(self, element: Any, dim: int) -> BaseGeometry:
        polygons = [
            Polygon(*self._rings(patch, _srs_dimension(patch, dim)))
            for patch in _geometry_children(_child(element, "patches"))
        ]
        if len(polygons) == 1:
            return polygons[0]
        return MultiPolygon(polygons)

    def _envelope(self, element: Any, dim: int) -> BaseGeometry:
        lower = parse_ordinates(_child(element, GML_LOWER_CORNER).text or "", "lowerCorner")
        upper = parse_ordinates(_child(element, GML_UPPER_CORNER).text or "", "upperCorner")
        if len(lower) != len(upper) or len(lower) == 0:
            raise FormatError(
                f"lowerCorner has {len(lower)} ordinates but upperCorner has {len(upper)}"
            )
        if len(lower) == 2:
            return box(lower[0], lower[1], upper[0], upper[1])
        return MultiPoint([lower, upper])

    def _multi_point(self, element: Any, dim: int) -> MultiPoint:
        return MultiPoint(self._members(element, dim))

    def _multi_curve(self, element: Any, dim: int) -> MultiLineString:
        return MultiLineString(self._members(element, dim))

    def _multi_surface(self, element: Any, dim: int) -> MultiPolygon:
        polygons: List[Polygon] = []
        for member in self._members(element, dim):
            if isinstance(member, MultiPolygon):
                polygons.extend(member.geoms)
            else:
                polygons.append(member)
        return MultiPolygon(polygons)

    def _multi_geometry(self, element: Any, dim: int) -> GeometryCollection:
        return GeometryCollection(self._members(element, dim))
