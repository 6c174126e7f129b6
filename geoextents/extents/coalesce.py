from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import numpy as np

from geoextents.constructs.bbox import BoundingBoxRecord
from geoextents.constructs.envelope import Envelope
from geoextents.exceptions import EmptyInputError, ExtentsError, FormatError
from geoextents.referencing.pyproj_resolver import PyprojCRSResolver
from geoextents.referencing.pyproj_transformer import PyprojTransformer
from geoextents.referencing.resolver_interface import CRSResolverInterface
from geoextents.referencing.transformer_interface import TransformerInterface
from geoextents.utils.crs import abbreviate_crs_identifier, is_crs84

log = logging.getLogger(__name__)


def resolve_crs_reference(crs_ref: str, resolver: CRSResolverInterface) -> Any:
    """
    Resolve the CRS reference of a bounding box.

    A missing reference or a CRS84 reference gives the resolver's default CRS (longitude
    before latitude); anything else is abbreviated to ``AUTHORITY:CODE`` and resolved.

    Args:
        crs_ref: The CRS reference as written, possibly empty
        resolver: The resolver producing CRS handles

    Returns:
        The CRS handle

    Raises:
        CRSResolutionError: If the reference does not name a known CRS
    """
    if not crs_ref or is_crs84(crs_ref):
        return resolver.default_crs

    return resolver.resolve(abbreviate_crs_identifier(crs_ref))


class _TotalExtent:
    """Running union of envelopes, grown in place and frozen by `to_envelope`."""

    def __init__(self, envelope: Envelope):
        self.crs = envelope.crs
        self.lower = np.array(envelope.lower, dtype=float)
        self.upper = np.array(envelope.upper, dtype=float)

    @property
    def dimension(self) -> int:
        return len(self.lower)

    def add(self, envelope: Envelope):
        if envelope.dimension != self.dimension:
            raise FormatError(
                f"cannot merge a {envelope.dimension}-D box into a {self.dimension}-D extent"
            )
        np.minimum(self.lower, envelope.lower, out=self.lower)
        np.maximum(self.upper, envelope.upper, out=self.upper)

    def to_envelope(self) -> Envelope:
        return Envelope(
            lower=tuple(float(v) for v in self.lower),
            upper=tuple(float(v) for v in self.upper),
            crs=self.crs,
        )


class EnvelopeCoalescer:
    """
    Merges a sequence of bounding boxes into one envelope covering them all.

    The resulting envelope uses the CRS of the *first* bounding box; every later box that is
    in a different CRS is transformed into that CRS before being merged. Downstream consumers
    rely on this, so the output CRS is never chosen any other way.

    Any failure (an unknown CRS, a failed transformation, a malformed corner) aborts the whole
    operation; the error message names the index of the offending box.

    Args:
        resolver: Turns CRS references into CRS handles. Defaults to a PyprojCRSResolver.
        transformer: Transforms envelopes between CRSs. Defaults to a PyprojTransformer.

    Attributes:
        resolver: The CRS resolver in use
        transformer: The coordinate transformer in use

    Examples:
        >>> import xml.etree.ElementTree as ET
        >>> from geoextents.extents.coalesce import EnvelopeCoalescer
        >>>
        >>> doc = ET.parse('capabilities.xml')
        >>> boxes = doc.findall('.//{http://www.opengis.net/ows/1.1}BoundingBox')
        >>> total = EnvelopeCoalescer().coalesce(boxes)
        >>> print(total.lower, total.upper)
    """

    def __init__(
        self,
        resolver: Optional[CRSResolverInterface] = None,
        transformer: Optional[TransformerInterface] = None,
    ):
        self.resolver = resolver if resolver is not None else PyprojCRSResolver()
        self.transformer = (
            transformer if transformer is not None else PyprojTransformer()
        )

    def coalesce(self, bbox_elements: Iterable[Any]) -> Envelope:
        """
        Coalesce bounding box elements into an envelope covering them all.

        Args:
            bbox_elements: ``ows:BoundingBox`` or ``ows:WGS84BoundingBox`` elements (ElementTree
                elements); the boxes may be in different CRSs

        Returns:
            An Envelope encompassing the total extent of the boxes, in the CRS of the first one

        Raises:
            EmptyInputError: If there are no elements
            FormatError: If a box is malformed or its dimension differs from the first box
            CRSResolutionError: If a CRS reference cannot be resolved
            TransformError: If a box cannot be transformed into the CRS of the first box
        """

        def _records():
            for i, element in enumerate(bbox_elements):
                try:
                    yield BoundingBoxRecord.from_element(element)
                except ExtentsError as e:
                    raise type(e)(f"bounding box #{i}: {e}") from e

        return self.coalesce_records(_records())

    def coalesce_records(self, records: Iterable[BoundingBoxRecord]) -> Envelope:
        """
        Coalesce already-read bounding box records; see `coalesce`.

        Args:
            records: The bounding box records, e.g. read with `BoundingBoxRecord.from_kvp`

        Returns:
            An Envelope encompassing the total extent of the records, in the CRS of the first one
        """
        total_extent: Optional[_TotalExtent] = None

        for i, record in enumerate(records):
            try:
                total_extent = self._merge(total_extent, record)
            except ExtentsError as e:
                raise type(e)(f"bounding box #{i}: {e}") from e

        if total_extent is None:
            raise EmptyInputError("cannot coalesce an empty sequence of bounding boxes")

        return total_extent.to_envelope()

    def _merge(
        self, total_extent: Optional[_TotalExtent], record: BoundingBoxRecord
    ) -> _TotalExtent:
        for axis, (lo, hi) in enumerate(zip(record.lower, record.upper)):
            # a wrapped (antimeridian) box would be collapsed by the union
            if lo > hi:
                raise FormatError(
                    f"lower corner exceeds upper corner on axis {axis} ({lo} > {hi})"
                )

        crs = resolve_crs_reference(record.crs_ref, self.resolver)
        axis_info = getattr(crs, "axis_info", None)
        if axis_info and len(axis_info) != record.dimension:
            raise FormatError(
                f"box has {record.dimension} ordinates per corner but its crs "
                f"has {len(axis_info)} axes"
            )

        envelope = Envelope.from_corners(record.lower, record.upper, crs)

        if total_extent is None:
            # first box; fixes the output crs
            log.debug("total extent starts as %s", envelope)
            return _TotalExtent(envelope)

        if crs != total_extent.crs:
            log.debug("transforming %s to the crs of the first box", envelope)
            envelope = self.transformer.transform_envelope(envelope, total_extent.crs)

        total_extent.add(envelope)
        return total_extent


def coalesce_bounding_boxes(
    bbox_elements: Iterable[Any],
    resolver: Optional[CRSResolverInterface] = None,
    transformer: Optional[TransformerInterface] = None,
) -> Envelope:
    """
    Coalesce a sequence of bounding boxes so as to create an envelope that covers them all.

    The resulting envelope will use the same CRS as the first bounding box; the remaining
    bounding boxes will be transformed to this CRS if necessary.

    Args:
        bbox_elements: ``ows:BoundingBox`` or ``ows:WGS84BoundingBox`` elements
        resolver: Turns CRS references into CRS handles. Defaults to a PyprojCRSResolver.
        transformer: Transforms envelopes between CRSs. Defaults to a PyprojTransformer.

    Returns:
        An Envelope encompassing the total extent of the given bounding boxes

    Examples:
        >>> boxes = doc.findall('.//{http://www.opengis.net/ows/1.1}BoundingBox')
        >>> total = coalesce_bounding_boxes(boxes)
    """
    return EnvelopeCoalescer(resolver, transformer).coalesce(bbox_elements)
