import math
from unittest import TestCase
from unittest.mock import patch

import numpy as np
from pyproj import CRS
from pyproj.exceptions import ProjError

from geoextents.constructs.envelope import Envelope
from geoextents.exceptions import TransformError
from geoextents.referencing.pyproj_transformer import PyprojTransformer
from geoextents.utils.crs import CRS84

TRANSFORMER = "geoextents.referencing.pyproj_transformer.Transformer"


class TestPyprojTransformer(TestCase):
    def setUp(self):
        self.transformer = PyprojTransformer()

    def test_same_crs_is_returned_unchanged(self):
        env = Envelope.from_corners([0, 0], [1, 1], CRS84)

        self.assertIs(self.transformer.transform_envelope(env, CRS84), env)

    def test_axis_order_follows_crs(self):
        env = Envelope.from_corners([-74.3, 40.5], [-73.7, 41.0], CRS84)

        latlon = self.transformer.transform_envelope(env, CRS.from_epsg(4326))

        self.assertEqual(latlon.crs, CRS.from_epsg(4326))
        np.testing.assert_allclose(latlon.lower, (40.5, -74.3))
        np.testing.assert_allclose(latlon.upper, (41.0, -73.7))

    def test_edges_are_densified(self):
        # the top edge bulges north in a polar projection, so corners alone are not enough
        env = Envelope.from_corners([-40.0, 60.0], [40.0, 70.0], CRS84)

        polar = self.transformer.transform_envelope(env, CRS.from_epsg(3413))
        corners_only = PyprojTransformer(densify_pts=0).transform_envelope(
            env, CRS.from_epsg(3413)
        )

        self.assertTrue(polar.is_ordered())
        for i in range(2):
            self.assertLessEqual(polar.minimum(i), corners_only.minimum(i))
            self.assertGreaterEqual(polar.maximum(i), corners_only.maximum(i))

    def test_transform_position(self):
        position = self.transformer.transform_position(
            (-74.006, 40.7128), CRS84, CRS.from_epsg(4326)
        )

        self.assertAlmostEqual(position[0], 40.7128)
        self.assertAlmostEqual(position[1], -74.006)

    def test_no_transformation_is_transform_error(self):
        env = Envelope.from_corners([0, 0], [1, 1], CRS84)

        with patch(TRANSFORMER) as transformer_cls:
            transformer_cls.from_crs.side_effect = ProjError("no operation")
            with self.assertRaises(TransformError):
                self.transformer.transform_envelope(env, CRS.from_epsg(3857))

    def test_failed_transformation_is_transform_error(self):
        env = Envelope.from_corners([0, 0], [1, 1], CRS84)

        with patch(TRANSFORMER) as transformer_cls:
            transformer_cls.from_crs.return_value.transform_bounds.side_effect = (
                ProjError("invalid coordinate")
            )
            with self.assertRaises(TransformError):
                self.transformer.transform_envelope(env, CRS.from_epsg(3857))

    def test_non_finite_result_is_transform_error(self):
        env = Envelope.from_corners([0, 0], [1, 90], CRS84)

        with patch(TRANSFORMER) as transformer_cls:
            transformer_cls.from_crs.return_value.transform_bounds.return_value = (
                0.0,
                0.0,
                1.0,
                math.inf,
            )
            with self.assertRaises(TransformError):
                self.transformer.transform_envelope(env, CRS.from_epsg(3857))

    def test_antimeridian_wrap_is_transform_error(self):
        env = Envelope.from_corners([0, 0], [1, 1], CRS.from_epsg(3857))

        with patch(TRANSFORMER) as transformer_cls:
            transformer_cls.from_crs.return_value.transform_bounds.return_value = (
                170.0,
                -10.0,
                -170.0,
                10.0,
            )
            with self.assertRaises(TransformError):
                self.transformer.transform_envelope(env, CRS84)

    def test_three_dimensional_envelope_uses_corners(self):
        env = Envelope.from_corners([0, 10, 100], [1, 11, 101], "A")

        def _shift(xx, yy, zz, errcheck=False):
            return xx + 1, yy - 1, zz * 2

        with patch(TRANSFORMER) as transformer_cls:
            transformer_cls.from_crs.return_value.transform.side_effect = _shift
            result = self.transformer.transform_envelope(env, "B")

        self.assertEqual(result.lower, (1.0, 9.0, 200.0))
        self.assertEqual(result.upper, (2.0, 10.0, 202.0))
        self.assertEqual(result.crs, "B")
