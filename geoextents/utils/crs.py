"""Coordinate Reference System (CRS) constants and identifier helpers used throughout geoextents.

This module defines the default CRS and the identifier forms recognized when reading
``crs`` / ``srsName`` attributes:
- CRS84: WGS84 geographic coordinates in longitude, latitude axis order (OGC:CRS84)
- OGC_CRS84: the URN used to refer to CRS84 in OWS bounding boxes
"""

from __future__ import annotations

import re

from pyproj import CRS

# WGS84 longitude/latitude coordinate system (OGC:CRS84)
# Same datum as EPSG:4326 but with the axes swapped: longitude first
CRS84 = CRS.from_user_input("OGC:CRS84")

# The identifier OWS bounding boxes use for CRS84
OGC_CRS84 = "urn:ogc:def:crs:OGC:1.3:CRS84"

# Every spelling of CRS84 that is treated as the default geographic CRS
CRS84_IDENTIFIERS = frozenset(
    [
        OGC_CRS84,
        "urn:ogc:def:crs:OGC::CRS84",
        "urn:ogc:def:crs:OGC:2:84",
        "http://www.opengis.net/def/crs/OGC/1.3/CRS84",
        "https://www.opengis.net/def/crs/OGC/1.3/CRS84",
        "OGC:CRS84",
        "CRS:84",
    ]
)

# OGC URNs and URIs compare case-insensitively
_CRS84_IDENTIFIERS_UPPER = frozenset(s.upper() for s in CRS84_IDENTIFIERS)

_URN_PATTERN = re.compile(
    r"^urn:(?:x-)?ogc:def:crs:(?P<authority>[^:]+):(?:[^:]*:)?(?P<code>[^:]+)$",
    re.IGNORECASE,
)
_HTTP_PATTERN = re.compile(
    r"^https?://www\.opengis\.net/def/crs/(?P<authority>[^/]+)/[^/]+/(?P<code>[^/]+)$",
    re.IGNORECASE,
)
_GML_SRS_PATTERN = re.compile(
    r"^https?://www\.opengis\.net/gml/srs/(?P<authority>[a-z]+)\.xml#(?P<code>.+)$",
    re.IGNORECASE,
)


def is_crs84(crs_ref: str) -> bool:
    """Whether a crs reference names the default longitude/latitude CRS."""
    return crs_ref.strip().upper() in _CRS84_IDENTIFIERS_UPPER


def abbreviate_crs_identifier(crs_ref: str) -> str:
    """
    Normalize a CRS reference to the abbreviated ``AUTHORITY:CODE`` form.

    The following reference styles are understood:

    - ``urn:ogc:def:crs:EPSG::4326`` and ``urn:ogc:def:crs:EPSG:6.6:4326``
    - ``urn:x-ogc:def:crs:EPSG:4326``
    - ``http://www.opengis.net/def/crs/EPSG/0/4326``
    - ``http://www.opengis.net/gml/srs/epsg.xml#4326``

    Anything else (including a reference that is already abbreviated) is returned
    unchanged, leaving it to the CRS resolver to accept or reject it.

    Args:
        crs_ref: The CRS reference, usually the value of a ``crs`` or ``srsName`` attribute

    Returns:
        The reference in ``AUTHORITY:CODE`` form, with the authority upper-cased

    Examples:
        >>> abbreviate_crs_identifier("urn:ogc:def:crs:EPSG::32618")
        'EPSG:32618'
        >>> abbreviate_crs_identifier("http://www.opengis.net/def/crs/EPSG/0/3857")
        'EPSG:3857'
    """
    ref = crs_ref.strip()
    for pattern in (_URN_PATTERN, _HTTP_PATTERN, _GML_SRS_PATTERN):
        match = pattern.match(ref)
        if match:
            return f"{match.group('authority').upper()}:{match.group('code')}"

    return ref


def crs_urn(authority: str, code: str) -> str:
    """Build the OGC URN for an authority code, e.g. ``urn:ogc:def:crs:EPSG::4326``."""
    if authority.upper() == "OGC" and code.upper() == "CRS84":
        return OGC_CRS84
    return f"urn:ogc:def:crs:{authority}::{code}"
