class ExtentsError(Exception):
    """Base class for every error raised while computing or writing an envelope."""


class FormatError(ExtentsError, ValueError):
    """
    An input bounding box or envelope is malformed.

    Raised for non-numeric or non-finite coordinate tokens, lower/upper corners with
    different dimensions, missing corner elements, and boxes whose dimension does not
    match the rest of the boxes being merged.
    """


class CRSResolutionError(ExtentsError, ValueError):
    """A CRS identifier could not be mapped to a known coordinate reference system."""


class TransformError(ExtentsError, ValueError):
    """Coordinates could not be transformed between two coordinate reference systems."""


class GeometryDecodeError(ExtentsError, ValueError):
    """A geometry element could not be decoded into coordinates."""


class EmptyInputError(ExtentsError, ValueError):
    """An operation that needs at least one input was given none."""
