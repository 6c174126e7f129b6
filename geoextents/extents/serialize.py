from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from decimal import ROUND_FLOOR, Decimal, localcontext
from typing import Optional

from geoextents.constructs.envelope import Envelope
from geoextents.constructs.footprint import Footprint
from geoextents.exceptions import FormatError
from geoextents.referencing.pyproj_resolver import PyprojCRSResolver
from geoextents.referencing.resolver_interface import CRSResolverInterface
from geoextents.utils.keys import (
    GML_DECIMAL_PLACES,
    GML_LOWER_CORNER,
    GML_NS,
    GML_UPPER_CORNER,
    SRS_NAME_ATTRIBUTE,
    qname,
)

ET.register_namespace("gml", GML_NS)


def format_ordinate(value: float, places: int = GML_DECIMAL_PLACES) -> str:
    """
    Format an ordinate with at most `places` decimals, rounding toward negative infinity.

    Trailing zeros are dropped, so ``12.347`` gives ``"12.34"``, ``-1.001`` gives ``"-1.01"``
    and ``10.0`` gives ``"10"``. The value is never rounded up.

    Raises:
        FormatError: If the value is NaN or infinite
    """
    if not math.isfinite(value):
        raise FormatError(f"cannot format non-finite ordinate {value}")

    with localcontext() as ctx:
        # enough digits to quantize any finite double
        ctx.prec = 400
        quantum = Decimal(1).scaleb(-places)
        text = f"{Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_FLOOR):f}"

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def envelope_as_gml(
    envelope: Envelope, resolver: Optional[CRSResolverInterface] = None
) -> ET.Element:
    """
    Generate a standard GML representation (gml:Envelope) of an envelope.

    Ordinates are rounded down to 2 decimal places, so the output is lossy; use
    `envelope_as_kvp` where the exact values matter.

    Args:
        envelope: An Envelope defining a bounding rectangle (or prism)
        resolver: Renders the CRS as the srsName. Defaults to a PyprojCRSResolver.

    Returns:
        A gml:Envelope element with gml:lowerCorner and gml:upperCorner children

    Examples:
        >>> env = Envelope.from_corners([12.347, -3.5], [20, 4.999], CRS84)
        >>> ET.tostring(envelope_as_gml(env), encoding="unicode")
        '<gml:Envelope xmlns:gml="http://www.opengis.net/gml/3.2" srsName="urn:ogc:def:crs:OGC:1.3:CRS84"><gml:lowerCorner>12.34 -3.5</gml:lowerCorner><gml:upperCorner>20 4.99</gml:upperCorner></gml:Envelope>'
    """
    resolver = resolver if resolver is not None else PyprojCRSResolver()

    gml_env = ET.Element(qname(GML_NS, "Envelope"))
    gml_env.set(SRS_NAME_ATTRIBUTE, resolver.identify(envelope.crs))

    lower_corner = ET.SubElement(gml_env, qname(GML_NS, GML_LOWER_CORNER))
    lower_corner.text = " ".join(format_ordinate(v) for v in envelope.lower)
    upper_corner = ET.SubElement(gml_env, qname(GML_NS, GML_UPPER_CORNER))
    upper_corner.text = " ".join(format_ordinate(v) for v in envelope.upper)

    return gml_env


def envelope_as_gml_string(
    envelope: Envelope, resolver: Optional[CRSResolverInterface] = None
) -> str:
    """The gml:Envelope of `envelope_as_gml`, serialized to an XML string."""
    return ET.tostring(envelope_as_gml(envelope, resolver), encoding="unicode")


def envelope_as_kvp(
    envelope: Envelope, resolver: Optional[CRSResolverInterface] = None
) -> str:
    """
    Return a string representation of an envelope suitable for use as a query parameter value.

    The value consists of a comma-separated sequence of the lower corner ordinates, the upper
    corner ordinates and the CRS URI, e.g.
    ``-74.1,40.6,-73.7,40.9,urn:ogc:def:crs:OGC:1.3:CRS84`` (OGC 06-121r9, 10.2.3).
    Ordinates are written at full precision.

    Args:
        envelope: An envelope specifying a geographic extent
        resolver: Renders the CRS as a URI. Defaults to a PyprojCRSResolver.

    Returns:
        A string suitable for use as a query parameter value (KVP syntax)
    """
    resolver = resolver if resolver is not None else PyprojCRSResolver()

    items = [repr(float(v)) for v in envelope.lower]
    items.extend(repr(float(v)) for v in envelope.upper)
    items.append(resolver.identify(envelope.crs))

    return ",".join(items)


def envelope_as_polygon(envelope: Envelope) -> Footprint:
    """
    Create a polygon having the same extent as a 2-D envelope.

    Args:
        envelope: An Envelope defining a bounding rectangle

    Returns:
        A Footprint whose geometry is the closed rectangular ring and whose crs is the
        envelope's CRS

    Raises:
        FormatError: If the envelope is not 2-dimensional
    """
    return Footprint.from_envelope(envelope)
