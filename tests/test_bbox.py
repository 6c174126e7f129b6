import xml.etree.ElementTree as ET
from unittest import TestCase

from geoextents.constructs.bbox import BoundingBoxRecord, parse_ordinates
from geoextents.exceptions import FormatError
from geoextents.utils.keys import OWS2_NS


class TestBoundingBoxRecord(TestCase):
    def test_from_element(self):
        box = ET.fromstring(
            '<ows:BoundingBox xmlns:ows="http://www.opengis.net/ows/1.1" '
            'crs=" urn:ogc:def:crs:EPSG::32618 ">'
            "<ows:LowerCorner>500000  4500000</ows:LowerCorner>"
            "<ows:UpperCorner>\n510000 4510000\n</ows:UpperCorner>"
            "</ows:BoundingBox>"
        )

        record = BoundingBoxRecord.from_element(box)

        self.assertEqual(record.crs_ref, "urn:ogc:def:crs:EPSG::32618")
        self.assertEqual(record.lower, (500000.0, 4500000.0))
        self.assertEqual(record.upper, (510000.0, 4510000.0))
        self.assertEqual(record.dimension, 2)

    def test_corners_are_read_in_the_box_namespace(self):
        box = ET.Element(f"{{{OWS2_NS}}}WGS84BoundingBox")
        ET.SubElement(box, f"{{{OWS2_NS}}}LowerCorner").text = "1 2 3"
        ET.SubElement(box, f"{{{OWS2_NS}}}UpperCorner").text = "4 5 6"

        record = BoundingBoxRecord.from_element(box)

        self.assertEqual(record.crs_ref, "")
        self.assertEqual(record.dimension, 3)

    def test_missing_corner_is_format_error(self):
        box = ET.fromstring(
            '<ows:BoundingBox xmlns:ows="http://www.opengis.net/ows/1.1">'
            "<ows:LowerCorner>0 0</ows:LowerCorner>"
            "</ows:BoundingBox>"
        )

        with self.assertRaises(FormatError):
            BoundingBoxRecord.from_element(box)

    def test_corner_in_other_namespace_is_not_used(self):
        box = ET.fromstring(
            '<ows:BoundingBox xmlns:ows="http://www.opengis.net/ows/1.1" '
            'xmlns:o2="http://www.opengis.net/ows/2.0">'
            "<o2:LowerCorner>0 0</o2:LowerCorner>"
            "<o2:UpperCorner>1 1</o2:UpperCorner>"
            "</ows:BoundingBox>"
        )

        with self.assertRaises(FormatError):
            BoundingBoxRecord.from_element(box)

    def test_from_kvp(self):
        record = BoundingBoxRecord.from_kvp(
            "-74.1,40.6,-73.7,40.9,urn:ogc:def:crs:OGC:1.3:CRS84"
        )

        self.assertEqual(record.crs_ref, "urn:ogc:def:crs:OGC:1.3:CRS84")
        self.assertEqual(record.lower, (-74.1, 40.6))
        self.assertEqual(record.upper, (-73.7, 40.9))

    def test_from_kvp_without_crs(self):
        record = BoundingBoxRecord.from_kvp("1,2,3,4,5,6")

        self.assertEqual(record.crs_ref, "")
        self.assertEqual(record.lower, (1.0, 2.0, 3.0))
        self.assertEqual(record.upper, (4.0, 5.0, 6.0))

    def test_from_kvp_rejects_odd_or_empty_ordinates(self):
        for value in ["1,2,3", "EPSG:4326", "1,,3,4", "1,2,x,4,EPSG:4326"]:
            with self.subTest(value=value):
                with self.assertRaises(FormatError):
                    BoundingBoxRecord.from_kvp(value)


class TestParseOrdinates(TestCase):
    def test_parse(self):
        self.assertEqual(parse_ordinates(" 1 -2.5\t3e2 "), (1.0, -2.5, 300.0))

    def test_non_numeric_token(self):
        with self.assertRaises(FormatError) as ctx:
            parse_ordinates("1 2,5")

        self.assertIn("2,5", str(ctx.exception))
