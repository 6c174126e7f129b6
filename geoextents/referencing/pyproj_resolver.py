from __future__ import annotations

import logging
from typing import Any

from pyproj import CRS
from pyproj.exceptions import CRSError

from geoextents.exceptions import CRSResolutionError
from geoextents.referencing.resolver_interface import CRSResolverInterface
from geoextents.utils.crs import CRS84, crs_urn

log = logging.getLogger(__name__)


class PyprojCRSResolver(CRSResolverInterface):
    """
    A CRS resolver backed by the PROJ database through pyproj.

    Identifiers are resolved with `pyproj.CRS.from_user_input`, so anything pyproj accepts
    works: ``EPSG:4326``, ``OGC:CRS84``, ``ESRI:102003``, full URNs and so on. Axis order is
    the one defined by the authority (latitude first for EPSG:4326).

    Examples:
        >>> resolver = PyprojCRSResolver()
        >>> crs = resolver.resolve("EPSG:32618")
        >>> resolver.identify(crs)
        'urn:ogc:def:crs:EPSG::32618'
        >>> resolver.identify(resolver.default_crs)
        'urn:ogc:def:crs:OGC:1.3:CRS84'
    """

    @property
    def default_crs(self) -> CRS:
        return CRS84

    def resolve(self, identifier: str) -> CRS:
        # convert the identifier to a pyproj.crs.CRS object; this could fail
        try:
            crs = CRS.from_user_input(identifier)
        except CRSError as e:
            raise CRSResolutionError(
                f"Could not resolve CRS identifier: {identifier!r}"
            ) from e

        log.debug("resolved %s to %s", identifier, crs.name)
        return crs

    def identify(self, crs: Any) -> str:
        try:
            crs = CRS.from_user_input(crs)
        except CRSError as e:
            raise CRSResolutionError(f"Not a coordinate reference system: {crs!r}") from e

        authority = crs.to_authority()
        if authority is None:
            raise CRSResolutionError(f"No authority code is known for CRS {crs.name}")

        return crs_urn(*authority)
