from __future__ import annotations

from typing import Any, List, NamedTuple, Sequence, Tuple

from geoextents.exceptions import FormatError
from geoextents.utils.keys import (
    CRS_ATTRIBUTE,
    LOWER_CORNER,
    UPPER_CORNER,
    qname,
    split_qname,
)


def parse_ordinates(text: str, what: str = "coordinate") -> Tuple[float, ...]:
    """
    Parse a whitespace-delimited list of numeric tokens.

    Args:
        text: The text content of a corner or position element
        what: A label for the value being parsed, used in error messages

    Returns:
        The tokens as a tuple of floats

    Raises:
        FormatError: If a token is not a number
    """
    values: List[float] = []
    for token in text.split():
        try:
            values.append(float(token))
        except ValueError as e:
            raise FormatError(f"invalid {what} token {token!r} in {text!r}") from e
    return tuple(values)


class BoundingBoxRecord(NamedTuple):
    """
    The raw content of one bounding box: its CRS reference and its two corners.

    Records are read from ``ows:BoundingBox`` / ``ows:WGS84BoundingBox`` elements (or from a
    KVP bbox value) and handed straight to the coalescer; the CRS reference is kept as text
    and only resolved there.

    Attributes:
        crs_ref: The CRS reference as written in the input; empty when the input has none
        lower: The lower corner ordinates
        upper: The upper corner ordinates, same dimension as ``lower``
    """

    crs_ref: str
    lower: Tuple[float, ...]
    upper: Tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.lower)

    @classmethod
    def from_element(cls, element: Any) -> BoundingBoxRecord:
        """
        Read a bounding box from an ElementTree element.

        The ``LowerCorner`` and ``UpperCorner`` children are looked up in the namespace of the
        bounding box element itself, so both OWS 1.1 and OWS 2.0 boxes are accepted. The
        dimension is the number of tokens in the lower corner.

        Args:
            element: An ``ows:BoundingBox`` or ``ows:WGS84BoundingBox`` element

        Returns:
            A new BoundingBoxRecord

        Raises:
            FormatError: If a corner is missing, holds a non-numeric token, or the corners differ in dimension

        Examples:
            >>> import xml.etree.ElementTree as ET
            >>> box = ET.fromstring(
            ...     '<ows:BoundingBox xmlns:ows="http://www.opengis.net/ows/1.1" crs="urn:ogc:def:crs:EPSG::32618">'
            ...     '<ows:LowerCorner>500000 4500000</ows:LowerCorner>'
            ...     '<ows:UpperCorner>510000 4510000</ows:UpperCorner>'
            ...     '</ows:BoundingBox>'
            ... )
            >>> BoundingBoxRecord.from_element(box).upper
            (510000.0, 4510000.0)
        """
        namespace, local_name = split_qname(element.tag)

        corners = []
        for corner_name in (LOWER_CORNER, UPPER_CORNER):
            corner = element.find(f".//{qname(namespace, corner_name)}")
            if corner is None:
                raise FormatError(f"{local_name} element has no {corner_name}")
            corners.append(parse_ordinates(corner.text or "", corner_name))

        lower, upper = corners
        crs_ref = (element.get(CRS_ATTRIBUTE) or "").strip()

        return cls.from_corners(crs_ref, lower, upper)

    @classmethod
    def from_corners(
        cls, crs_ref: str, lower: Sequence[float], upper: Sequence[float]
    ) -> BoundingBoxRecord:
        lower = tuple(lower)
        upper = tuple(upper)
        if len(lower) == 0:
            raise FormatError("bounding box has an empty lower corner")
        elif len(lower) != len(upper):
            raise FormatError(
                f"lower corner has {len(lower)} ordinates but upper corner has {len(upper)}"
            )
        return cls(crs_ref=crs_ref, lower=lower, upper=upper)

    @classmethod
    def from_kvp(cls, value: str) -> BoundingBoxRecord:
        """
        Read a bounding box from a KVP (query parameter) value.

        The value is a comma-separated list of the lower corner ordinates, the upper corner
        ordinates and an optional trailing CRS reference, e.g.
        ``-74.1,40.6,-73.7,40.9,urn:ogc:def:crs:OGC:1.3:CRS84``. This is the inverse of
        `geoextents.extents.serialize.envelope_as_kvp`.

        Args:
            value: The KVP bbox value

        Returns:
            A new BoundingBoxRecord; crs_ref is empty if the value has no CRS reference

        Raises:
            FormatError: If the number of ordinates is odd or zero, or an ordinate is not a number
        """
        tokens = [t.strip() for t in value.split(",")]

        crs_ref = ""
        if tokens:
            try:
                float(tokens[-1])
            except ValueError:
                crs_ref = tokens.pop()

        if len(tokens) == 0 or len(tokens) % 2 != 0:
            raise FormatError(
                f"bbox value {value!r} must hold an even, non-zero number of ordinates"
            )

        ordinates = parse_ordinates(" ".join(tokens), "bbox")
        if len(ordinates) != len(tokens):
            raise FormatError(f"bbox value {value!r} has an empty ordinate")

        dim = len(ordinates) // 2
        return cls.from_corners(crs_ref, ordinates[:dim], ordinates[dim:])
