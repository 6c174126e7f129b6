from __future__ import annotations

import itertools
import logging
from typing import Any, Sequence, Tuple

import numpy as np
from pyproj import Transformer
from pyproj.exceptions import ProjError

from geoextents.constructs.envelope import Envelope
from geoextents.exceptions import TransformError
from geoextents.referencing.transformer_interface import TransformerInterface

log = logging.getLogger(__name__)

# Points sampled along each edge of a 2-D envelope by transform_bounds
DEFAULT_DENSIFY_POINTS = 21


class PyprojTransformer(TransformerInterface):
    """
    A coordinate transformer backed by pyproj.

    Axis order follows the CRS definitions (``always_xy`` is never set), matching the way
    envelope ordinates are stored. 2-D envelopes are transformed with
    `pyproj.Transformer.transform_bounds`, which samples points along every edge so that
    curved edges in the target CRS are still covered. Envelopes of other dimensions are
    transformed through their 2^N corners.

    Args:
        densify_pts: Number of points sampled along each edge of a 2-D envelope. Default is 21.

    Examples:
        >>> from geoextents.constructs.envelope import Envelope
        >>> from geoextents.utils.crs import CRS84
        >>> from pyproj import CRS
        >>>
        >>> env = Envelope.from_corners([-74.1, 40.6], [-73.7, 40.9], CRS84)
        >>> mercator = PyprojTransformer().transform_envelope(env, CRS(3857))
    """

    def __init__(self, densify_pts: int = DEFAULT_DENSIFY_POINTS):
        self.densify_pts = densify_pts

    def _transformer(self, source_crs: Any, target_crs: Any) -> Transformer:
        try:
            return Transformer.from_crs(source_crs, target_crs)
        except ProjError as e:
            raise TransformError(
                f"No transformation available from {source_crs} to {target_crs}"
            ) from e

    def transform_envelope(self, envelope: Envelope, target_crs: Any) -> Envelope:
        if envelope.crs == target_crs:
            return envelope

        transformer = self._transformer(envelope.crs, target_crs)

        try:
            if envelope.dimension == 2:
                bounds = transformer.transform_bounds(
                    *envelope.lower,
                    *envelope.upper,
                    densify_pts=self.densify_pts,
                    errcheck=True,
                )
                lower, upper = np.array(bounds[:2]), np.array(bounds[2:])
            else:
                # every combination of min/max per axis, one corner per column
                corners = np.array(
                    list(itertools.product(*zip(envelope.lower, envelope.upper)))
                ).T
                transformed = np.array(transformer.transform(*corners, errcheck=True))
                lower, upper = transformed.min(axis=1), transformed.max(axis=1)
        except ProjError as e:
            raise TransformError(
                f"Unable to transform {envelope} to {target_crs}: {e}"
            ) from e

        if not (np.all(np.isfinite(lower)) and np.all(np.isfinite(upper))):
            raise TransformError(
                f"Unable to transform {envelope} to {target_crs} ({lower}, {upper})"
            )
        elif np.any(lower > upper):
            raise TransformError(
                f"Transforming {envelope} to {target_crs} wraps around the antimeridian"
            )

        log.debug("transformed %s -> (%s, %s)", envelope, lower, upper)

        return Envelope(
            lower=tuple(float(v) for v in lower),
            upper=tuple(float(v) for v in upper),
            crs=target_crs,
        )

    def transform_position(
        self, position: Sequence[float], source_crs: Any, target_crs: Any
    ) -> Tuple[float, ...]:
        if source_crs == target_crs:
            return tuple(float(v) for v in position)

        transformer = self._transformer(source_crs, target_crs)
        try:
            new_position = transformer.transform(*position, errcheck=True)
        except ProjError as e:
            raise TransformError(
                f"Unable to transform {tuple(position)} from {source_crs} to {target_crs}: {e}"
            ) from e

        if not all(np.isfinite(new_position)):
            raise TransformError(
                f"Unable to convert {source_crs} {tuple(position)} -> {target_crs} {new_position}"
            )

        return tuple(float(v) for v in new_position)
