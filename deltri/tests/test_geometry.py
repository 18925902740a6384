"""Unit tests for geometry primitives."""
import math

import numpy as np
import pytest

from deltri.core.geometry import (Point, as_point_array, bounding_box, distance, normalize_edge,
                                  orient, triangle_area, triangles_min_angles, triangles_signed_areas)


def test_point_equality_is_exact():
    assert Point(0.1, 0.2) == Point(0.1, 0.2)
    assert Point(0.1, 0.2) != Point(0.1, 0.2 + 1e-15)
    assert str(Point(1.5, -2.0)) == "(1.5, -2)"


def test_distance():
    assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)
    assert distance((1, 1), (1, 1)) == 0.0


def test_orient_sign():
    assert orient((0, 0), (1, 0), (0, 1)) > 0
    assert orient((0, 0), (0, 1), (1, 0)) < 0
    assert orient((0, 0), (1, 1), (2, 2)) == 0


def test_triangle_area():
    assert triangle_area((0, 0), (2, 0), (0, 2)) == pytest.approx(2.0)


def test_bounding_box():
    assert bounding_box([(1, 2), (-1, 5), (3, 0)]) == (-1.0, 0.0, 3.0, 5.0)
    with pytest.raises(ValueError):
        bounding_box([])


def test_as_point_array_shape_check():
    assert as_point_array([]).shape == (0, 2)
    with pytest.raises(ValueError):
        as_point_array([(1, 2, 3)])


def test_vectorized_areas_and_angles():
    pts = np.array([[0, 0], [1, 0], [0, 1], [1, 1]], dtype=float)
    tris = np.array([[0, 1, 2], [1, 3, 2]])
    assert np.allclose(triangles_signed_areas(pts, tris), [0.5, 0.5])
    assert np.allclose(triangles_min_angles(pts, tris), [45.0, 45.0])
    equilateral = np.array([[0, 0], [1, 0], [0.5, math.sqrt(3) / 2]])
    assert triangles_min_angles(equilateral, [[0, 1, 2]])[0] == pytest.approx(60.0)


def test_normalize_edge():
    assert normalize_edge(5, 1) == (1, 5)
    assert normalize_edge(0, 3) == normalize_edge(3, 0)
