from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import numpy as np
from geopandas import GeoSeries

from geoextents.constructs.envelope import Envelope
from geoextents.exceptions import (
    CRSResolutionError,
    EmptyInputError,
    ExtentsError,
    FormatError,
)
from geoextents.gml.gml_parser import GmlGeometryParser
from geoextents.gml.parser_interface import GeometryParserInterface
from geoextents.referencing.pyproj_resolver import PyprojCRSResolver
from geoextents.referencing.resolver_interface import CRSResolverInterface
from geoextents.utils.crs import abbreviate_crs_identifier, is_crs84

log = logging.getLogger(__name__)


def calculate_envelope(
    geometry_elements: Iterable[Any],
    parser: Optional[GeometryParserInterface] = None,
    resolver: Optional[CRSResolverInterface] = None,
    default_crs: Any = None,
) -> Envelope:
    """
    Calculate the envelope that covers a collection of GML geometry elements.

    The geometries are assumed to all refer to the same CRS. The CRS is read from the
    ``srsName`` of each geometry and the last one read wins; no transformation is done, so
    geometries in mixed CRSs give a meaningless result.

    Args:
        geometry_elements: GML geometry elements (ElementTree elements)
        parser: Decodes the elements. Defaults to a GmlGeometryParser.
        resolver: Turns srsName references into CRS handles. Defaults to a PyprojCRSResolver.
        default_crs: The CRS handle to use when no geometry has an srsName

    Returns:
        A 2-D Envelope representing the overall spatial extent (MBR) of the geometries

    Raises:
        EmptyInputError: If there are no geometry elements
        GeometryDecodeError: If an element cannot be decoded to a geometry
        FormatError: If every geometry is empty
        CRSResolutionError: If an srsName cannot be resolved, or there is none and no default_crs

    Examples:
        >>> import xml.etree.ElementTree as ET
        >>> doc = ET.parse('features.xml')
        >>> geoms = doc.findall('.//{http://www.opengis.net/gml/3.2}Polygon')
        >>> env = calculate_envelope(geoms)
    """
    parser = parser if parser is not None else GmlGeometryParser()
    resolver = resolver if resolver is not None else PyprojCRSResolver()

    geoms = []
    srs_name = ""
    for i, element in enumerate(geometry_elements):
        try:
            parsed = parser.parse(element)
        except ExtentsError as e:
            raise type(e)(f"geometry #{i}: {e}") from e

        if parsed.srs_name:
            srs_name = parsed.srs_name
        geoms.append(parsed.geom)

    if not geoms:
        raise EmptyInputError("cannot calculate the envelope of zero geometries")

    if srs_name:
        if is_crs84(srs_name):
            crs = resolver.default_crs
        else:
            crs = resolver.resolve(abbreviate_crs_identifier(srs_name))
    elif default_crs is not None:
        crs = default_crs
    else:
        raise CRSResolutionError(
            "none of the geometries has an srsName and no default crs was given"
        )

    bounds = GeoSeries(geoms).total_bounds
    if not np.all(np.isfinite(bounds)):
        raise FormatError("cannot calculate the envelope of empty geometries")

    log.debug("envelope of %d geometries: %s", len(geoms), bounds)

    min_x, min_y, max_x, max_y = bounds
    return Envelope.from_corners([min_x, min_y], [max_x, max_y], crs)
