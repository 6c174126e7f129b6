from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, NamedTuple, Optional, Sequence, Tuple

from geoextents.exceptions import FormatError

if TYPE_CHECKING:
    from geoextents.constructs.footprint import Footprint
    from geoextents.referencing.transformer_interface import TransformerInterface


class Envelope(NamedTuple):
    """
    An axis-aligned bounding region bound to exactly one coordinate reference system (CRS).

    An Envelope is an immutable pair of corners, each an ordered tuple of N ordinates where N
    is the dimension of the CRS (typically 2). Ordinates are kept in the axis order of the CRS,
    so an envelope in EPSG:4326 holds (latitude, longitude) while one in OGC:CRS84 holds
    (longitude, latitude).

    Attributes:
        lower: The lower corner, one minimum per axis
        upper: The upper corner, one maximum per axis
        crs: The CRS handle the ordinates refer to (a pyproj CRS with the default providers)

    Examples:
        >>> from geoextents.constructs.envelope import Envelope
        >>> from geoextents.utils.crs import CRS84
        >>> env = Envelope.from_corners([-74.1, 40.6], [-73.7, 40.9], CRS84)
        >>> env.dimension
        2
        >>> env.maximum(1)
        40.9
    """

    lower: Tuple[float, ...]
    upper: Tuple[float, ...]
    crs: Any

    def __repr__(self):
        to_authority = getattr(self.crs, "to_authority", None)
        crs_a = to_authority() if to_authority else self.crs
        return f"Envelope(lower={self.lower}, upper={self.upper}, crs={crs_a})"

    @classmethod
    def from_corners(
        cls, lower: Sequence[float], upper: Sequence[float], crs: Any
    ) -> Envelope:
        """
        Create an envelope from two corner coordinate sequences.

        Args:
            lower: The lower corner ordinates in CRS axis order
            upper: The upper corner ordinates in CRS axis order
            crs: The CRS handle the ordinates refer to

        Returns:
            A new Envelope with the ordinates converted to floats

        Raises:
            FormatError: If the corners are empty, differ in dimension, or hold non-finite values
        """
        lower = tuple(float(v) for v in lower)
        upper = tuple(float(v) for v in upper)

        if len(lower) == 0:
            raise FormatError("an envelope needs at least one dimension")
        elif len(lower) != len(upper):
            raise FormatError(
                f"lower corner has {len(lower)} ordinates but upper corner has {len(upper)}"
            )
        elif not all(math.isfinite(v) for v in lower + upper):
            raise FormatError(f"non-finite ordinate in envelope {lower} {upper}")

        return cls(lower=lower, upper=upper, crs=crs)

    @property
    def dimension(self) -> int:
        return len(self.lower)

    def minimum(self, i: int) -> float:
        return self.lower[i]

    def maximum(self, i: int) -> float:
        return self.upper[i]

    def span(self, i: int) -> float:
        """Extent of the envelope along axis i."""
        return self.upper[i] - self.lower[i]

    def is_ordered(self) -> bool:
        """Whether every lower ordinate is less than or equal to its upper ordinate."""
        return all(lo <= hi for lo, hi in zip(self.lower, self.upper))

    def union(self, other: Envelope) -> Envelope:
        """
        Compute the smallest envelope covering this envelope and another one.

        Both envelopes must share the same CRS and dimension; use `to_crs` first to bring
        an envelope into the CRS of the other.

        Args:
            other: The envelope to merge with this one

        Returns:
            A new Envelope in this envelope's CRS

        Raises:
            FormatError: If the dimensions differ
            ValueError: If the CRSs differ
        """
        if other.crs != self.crs:
            raise ValueError(
                "cannot combine envelopes with different coordinate reference systems"
            )
        elif other.dimension != self.dimension:
            raise FormatError(
                f"cannot combine a {self.dimension}-D envelope with a {other.dimension}-D envelope"
            )

        return Envelope(
            lower=tuple(min(a, b) for a, b in zip(self.lower, other.lower)),
            upper=tuple(max(a, b) for a, b in zip(self.upper, other.upper)),
            crs=self.crs,
        )

    def to_crs(
        self, new_crs: Any, transformer: Optional[TransformerInterface] = None
    ) -> Envelope:
        """
        Transform this envelope to a different coordinate reference system (CRS).

        If the target CRS is the same as the current CRS, the envelope is returned unchanged.

        Args:
            new_crs: The target CRS handle
            transformer: The transformer to use; defaults to a PyprojTransformer

        Returns:
            An Envelope covering the transformed region, in the target CRS

        Raises:
            TransformError: If no transformation exists or it is invalid for these ordinates
        """
        if new_crs == self.crs:
            return self

        if transformer is None:
            from geoextents.referencing.pyproj_transformer import PyprojTransformer

            transformer = PyprojTransformer()

        return transformer.transform_envelope(self, new_crs)

    def to_footprint(self) -> Footprint:
        """Rectangular polygon view of this (2-D) envelope; see `Footprint.from_envelope`."""
        from geoextents.constructs.footprint import Footprint

        return Footprint.from_envelope(self)
