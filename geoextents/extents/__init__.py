from geoextents.extents.calculate import calculate_envelope
from geoextents.extents.coalesce import EnvelopeCoalescer, coalesce_bounding_boxes
from geoextents.extents.serialize import (
    envelope_as_gml,
    envelope_as_gml_string,
    envelope_as_kvp,
    envelope_as_polygon,
)

__all__ = [
    "EnvelopeCoalescer",
    "calculate_envelope",
    "coalesce_bounding_boxes",
    "envelope_as_gml",
    "envelope_as_gml_string",
    "envelope_as_kvp",
    "envelope_as_polygon",
]
