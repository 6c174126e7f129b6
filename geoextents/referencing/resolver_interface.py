from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any


class CRSResolverInterface(metaclass=ABCMeta):
    """
    Abstract base class defining how CRS identifiers are turned into CRS handles and back.

    The coalescer and the serializers only ever see CRS handles through this interface, which
    lets tests inject a resolver returning plain tokens instead of real coordinate systems.
    The only thing callers do with a handle is compare it with ``==`` and pass it back to the
    resolver or a transformer.

    Subclasses must implement methods for:
    - Providing the default longitude/latitude CRS (CRS84)
    - Resolving an abbreviated ``AUTHORITY:CODE`` identifier
    - Rendering a handle as an identifier string
    """

    @property
    @abstractmethod
    def default_crs(self) -> Any:
        """
        Get the CRS used for bounding boxes without a CRS reference.

        Returns:
            The handle of the geographic CRS with longitude before latitude (CRS84)
        """

    @abstractmethod
    def resolve(self, identifier: str) -> Any:
        """
        Resolve a CRS identifier to a CRS handle.

        Args:
            identifier: The identifier, usually in abbreviated ``AUTHORITY:CODE`` form

        Returns:
            The CRS handle

        Raises:
            CRSResolutionError: If the identifier does not name a known CRS
        """

    @abstractmethod
    def identify(self, crs: Any) -> str:
        """
        Get the identifier to write for a CRS handle.

        Args:
            crs: A CRS handle previously returned by this resolver

        Returns:
            The CRS identifier as a URI, e.g. ``urn:ogc:def:crs:EPSG::4326``

        Raises:
            CRSResolutionError: If no identifier is known for the handle
        """
