"""Standard namespace, element and attribute names used when reading and writing markup.

These constants define the qualified names geoextents looks for in OWS bounding boxes
and GML geometries, and the names it emits when serializing envelopes.
"""

# GML 3.2 namespace, used for geometries and for the serialized gml:Envelope
GML_NS = "http://www.opengis.net/gml/3.2"

# OWS namespaces; bounding box children are looked up in the box's own namespace
OWS_NS = "http://www.opengis.net/ows/1.1"
OWS2_NS = "http://www.opengis.net/ows/2.0"

# Attribute holding the CRS reference of an ows:BoundingBox
CRS_ATTRIBUTE = "crs"

# Attribute holding the CRS reference of a GML geometry
SRS_NAME_ATTRIBUTE = "srsName"

# Attribute giving the coordinate tuple size of a gml:posList
SRS_DIMENSION_ATTRIBUTE = "srsDimension"

# Corner element names of an ows:BoundingBox / ows:WGS84BoundingBox
LOWER_CORNER = "LowerCorner"
UPPER_CORNER = "UpperCorner"

# Corner element names of a gml:Envelope
GML_LOWER_CORNER = "lowerCorner"
GML_UPPER_CORNER = "upperCorner"

# Number of decimal places kept when writing gml:Envelope ordinates
GML_DECIMAL_PLACES = 2


def qname(namespace: str, local_name: str) -> str:
    """ElementTree style qualified name: ``{namespace}local_name``."""
    return f"{{{namespace}}}{local_name}" if namespace else local_name


def split_qname(tag: str):
    """Split an ElementTree tag into its (namespace, local name) parts."""
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return "", tag
