"""
# Coalesce Example

An example of merging the bounding boxes advertised in a capabilities document into one total extent
"""


def main():
    """
    First, we load some bounding boxes.
    In a capabilities document each layer or collection advertises one or more `ows:BoundingBox` elements,
    and these can be in different coordinate reference systems (CRS):
    """

    import xml.etree.ElementTree as ET

    capabilities = ET.fromstring(
        """
        <ows:Contents xmlns:ows="http://www.opengis.net/ows/1.1">
          <ows:WGS84BoundingBox>
            <ows:LowerCorner>-74.1 40.6</ows:LowerCorner>
            <ows:UpperCorner>-73.7 40.9</ows:UpperCorner>
          </ows:WGS84BoundingBox>
          <ows:BoundingBox crs="urn:ogc:def:crs:EPSG::4326">
            <ows:LowerCorner>40.7 -74.0</ows:LowerCorner>
            <ows:UpperCorner>41.0 -73.8</ows:UpperCorner>
          </ows:BoundingBox>
          <ows:BoundingBox crs="urn:ogc:def:crs:EPSG::32618">
            <ows:LowerCorner>583000 4506000</ows:LowerCorner>
            <ows:UpperCorner>590000 4512000</ows:UpperCorner>
          </ows:BoundingBox>
        </ows:Contents>
        """
    )
    boxes = list(capabilities)

    """
    Notice that the first box has no crs attribute: it is a WGS84 bounding box and so it uses longitude, latitude order.
    The second box is in EPSG:4326 which, according to the EPSG registry, puts latitude first.
    geoextents never swaps axes on its own; ordinates are always read in the axis order of their CRS.

    Now, let's coalesce the boxes.
    The total extent is expressed in the CRS of the *first* box, and every other box is transformed into that CRS:
    """

    from geoextents.extents import coalesce_bounding_boxes

    total = coalesce_bounding_boxes(boxes)
    print(total)

    """
    The envelope can be written back out as a gml:Envelope (ordinates rounded down to 2 decimal places)
    or as a KVP bbox value at full precision, for example to build a GetFeature request:
    """

    from geoextents.extents import envelope_as_gml_string, envelope_as_kvp

    print(envelope_as_gml_string(total))
    print(f"bbox={envelope_as_kvp(total)}")

    """
    Finally, the envelope can be turned into a polygon to test it against other geometries:
    """

    from geoextents.extents import envelope_as_polygon

    footprint = envelope_as_polygon(total)
    print(footprint.to_geojson())


if __name__ == "__main__":
    main()
