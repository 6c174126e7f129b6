from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any, Sequence, Tuple

from geoextents.constructs.envelope import Envelope


class TransformerInterface(metaclass=ABCMeta):
    """
    Abstract base class defining coordinate transformation between two CRS handles.

    All transformers in geoextents implement this interface. The coalescer only calls
    `transform_envelope`, and only when two bounding boxes are in different CRSs, so a fake
    transformer with fixed results is enough to test merging logic.
    """

    @abstractmethod
    def transform_envelope(self, envelope: Envelope, target_crs: Any) -> Envelope:
        """
        Transform an envelope into another CRS.

        The result must cover the whole transformed region, not just the two transformed
        corners, since a rectangle generally maps to a curved shape.

        Args:
            envelope: The envelope to transform, in its own CRS
            target_crs: The CRS handle to transform into

        Returns:
            An envelope in the target CRS

        Raises:
            TransformError: If no transformation path exists or the result is undefined
        """

    @abstractmethod
    def transform_position(
        self, position: Sequence[float], source_crs: Any, target_crs: Any
    ) -> Tuple[float, ...]:
        """
        Transform a single position into another CRS.

        Args:
            position: The ordinates in the source CRS axis order
            source_crs: The CRS handle of the position
            target_crs: The CRS handle to transform into

        Returns:
            The ordinates in the target CRS axis order

        Raises:
            TransformError: If no transformation path exists or the result is undefined
        """
