from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any, NamedTuple

from shapely.geometry.base import BaseGeometry


class ParsedGeometry(NamedTuple):
    """
    A decoded geometry element.

    Attributes:
        geom: The Shapely geometry holding the element's coordinates in CRS axis order
        srs_name: The element's CRS reference as written (``srsName``); empty if it has none
    """

    geom: BaseGeometry
    srs_name: str


class GeometryParserInterface(metaclass=ABCMeta):
    """
    Abstract base class defining how a markup geometry element is decoded into coordinates.

    The envelope calculator only depends on this interface, so any markup dialect can be
    supported by providing another implementation.
    """

    @abstractmethod
    def parse(self, element: Any) -> ParsedGeometry:
        """
        Decode one geometry element.

        Args:
            element: The geometry element (an ElementTree element)

        Returns:
            The decoded geometry and its CRS reference

        Raises:
            GeometryDecodeError: If the element is not a supported geometry or is malformed
        """
