import json
from unittest import TestCase

from pyproj import CRS

from geoextents.constructs.envelope import Envelope
from geoextents.constructs.footprint import Footprint
from geoextents.exceptions import FormatError
from geoextents.utils.crs import CRS84
from tests.fakes import FakeTransformer


class TestEnvelope(TestCase):
    def test_from_corners(self):
        env = Envelope.from_corners([1, 2], ["3.5", 4], "A")

        self.assertEqual(env.lower, (1.0, 2.0))
        self.assertEqual(env.upper, (3.5, 4.0))
        self.assertEqual(env.dimension, 2)
        self.assertEqual(env.minimum(1), 2.0)
        self.assertEqual(env.maximum(0), 3.5)
        self.assertEqual(env.span(0), 2.5)
        self.assertTrue(env.is_ordered())

    def test_from_corners_rejects_bad_input(self):
        for lower, upper in [([], []), ([0, 0], [1]), ([0, float("nan")], [1, 1])]:
            with self.subTest(lower=lower, upper=upper):
                with self.assertRaises(FormatError):
                    Envelope.from_corners(lower, upper, "A")

    def test_is_ordered(self):
        self.assertFalse(Envelope((5.0, 0.0), (1.0, 1.0), "A").is_ordered())

    def test_union(self):
        a = Envelope.from_corners([0, 0], [10, 10], "A")
        b = Envelope.from_corners([5, -5], [20, 5], "A")

        self.assertEqual(a.union(b), Envelope((0.0, -5.0), (20.0, 10.0), "A"))

    def test_union_requires_same_crs_and_dimension(self):
        a = Envelope.from_corners([0, 0], [10, 10], "A")

        with self.assertRaises(ValueError):
            a.union(Envelope.from_corners([0, 0], [1, 1], "B"))
        with self.assertRaises(FormatError):
            a.union(Envelope.from_corners([0, 0, 0], [1, 1, 1], "A"))

    def test_to_crs(self):
        transformer = FakeTransformer({("B", "A"): lambda v: v * 2})
        env = Envelope.from_corners([1, 2], [3, 4], "B")

        self.assertIs(env.to_crs("B", transformer), env)
        self.assertEqual(
            env.to_crs("A", transformer), Envelope((2.0, 4.0), (6.0, 8.0), "A")
        )

    def test_to_crs_with_pyproj(self):
        env = Envelope.from_corners([-74.0, 40.0], [-73.0, 41.0], CRS84)

        latlon = env.to_crs(CRS.from_epsg(4326))

        self.assertAlmostEqual(latlon.minimum(0), 40.0)
        self.assertAlmostEqual(latlon.minimum(1), -74.0)
        self.assertAlmostEqual(latlon.maximum(0), 41.0)
        self.assertAlmostEqual(latlon.maximum(1), -73.0)


class TestFootprint(TestCase):
    def test_from_envelope(self):
        env = Envelope.from_corners([0, 1], [10, 5], "A")

        footprint = env.to_footprint()

        self.assertEqual(footprint.crs, "A")
        self.assertEqual(
            list(footprint.geometry.exterior.coords),
            [(0.0, 1.0), (10.0, 1.0), (10.0, 5.0), (0.0, 5.0), (0.0, 1.0)],
        )
        self.assertEqual(footprint.geometry.area, 40.0)

    def test_from_envelope_needs_two_dimensions(self):
        env = Envelope.from_corners([0, 0, 0], [1, 1, 1], "A")

        with self.assertRaises(FormatError):
            Footprint.from_envelope(env)

    def test_to_geoseries(self):
        footprint = Envelope.from_corners([0, 0], [1, 1], CRS84).to_footprint()

        series = footprint.to_geoseries()

        self.assertEqual(len(series), 1)
        self.assertEqual(series.crs, CRS84)

    def test_to_geojson_is_lon_lat(self):
        env = Envelope.from_corners([40.0, -74.0], [41.0, -73.0], CRS.from_epsg(4326))

        geojson = json.loads(env.to_footprint().to_geojson())

        self.assertEqual(geojson["type"], "Polygon")
        ring = geojson["coordinates"][0]
        self.assertEqual(len(ring), 5)
        self.assertAlmostEqual(ring[0][0], -74.0)
        self.assertAlmostEqual(ring[0][1], 40.0)
        self.assertAlmostEqual(ring[2][0], -73.0)
        self.assertAlmostEqual(ring[2][1], 41.0)
