"""Geometry primitives: point type, orientation, areas and angles."""
from __future__ import annotations
import math
from typing import List, NamedTuple, Tuple

import numpy as np

__all__ = [
    'Point', 'distance', 'orient', 'triangle_area', 'bounding_box',
    'triangles_signed_areas', 'triangles_min_angles', 'normalize_edge',
    'as_point_array', 'points_from_array',
]


class Point(NamedTuple):
    """Immutable 2D point; equality is exact component-wise comparison."""
    x: float
    y: float

    def __str__(self):
        return f"({self.x:g}, {self.y:g})"


def distance(a, b) -> float:
    """Euclidean distance between two point-likes."""
    return math.hypot(float(b[0]) - float(a[0]), float(b[1]) - float(a[1]))


def orient(a, b, c) -> float:
    """2D orientation (signed area * 2) for points a,b,c.

    Returns a positive value when (a,b,c) are counter-clockwise, negative when clockwise,
    and zero when colinear.
    """
    return (float(b[0]) - float(a[0])) * (float(c[1]) - float(a[1])) \
        - (float(b[1]) - float(a[1])) * (float(c[0]) - float(a[0]))


def triangle_area(p0, p1, p2) -> float:
    return 0.5 * orient(p0, p1, p2)


def as_point_array(points) -> np.ndarray:
    """Coerce a sequence of (x, y) pairs into a C-contiguous float64 (N,2) array."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError("points must have shape (N,2)")
    return np.ascontiguousarray(arr)


def bounding_box(points) -> Tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy) of an (N,2) point array."""
    pts = as_point_array(points)
    if pts.shape[0] == 0:
        raise ValueError("bounding box of an empty point set")
    minx, miny = pts.min(axis=0)
    maxx, maxy = pts.max(axis=0)
    return float(minx), float(miny), float(maxx), float(maxy)


def triangles_signed_areas(points, tris):
    """Vectorized signed area for a batch of triangles.

    points: (N,2) float array
    tris:   (M,3) int array
    Returns: (M,) float64 array of signed areas (0.5 * cross).
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int32)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    d1 = p1 - p0
    d2 = p2 - p0
    return 0.5 * (d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0])


def triangles_min_angles(points, tris):
    """Vectorized per-triangle minimum internal angle (degrees).

    points: (N,2) float array
    tris:   (M,3) int array
    Returns: (M,) float64 array of min angles.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int32)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]
    p1 = pts[T[:, 1]]
    p2 = pts[T[:, 2]]
    # side lengths opposite to vertices: a=|p1-p2|, b=|p0-p2|, c=|p0-p1|
    a = np.linalg.norm(p1 - p2, axis=1)
    b = np.linalg.norm(p0 - p2, axis=1)
    c = np.linalg.norm(p0 - p1, axis=1)
    tiny = np.finfo(np.float64).tiny

    def angle_opposite(A, B, C):
        cosang = (B*B + C*C - A*A) / (2.0 * B * C + tiny)
        return np.degrees(np.arccos(np.clip(cosang, -1.0, 1.0)))

    return np.minimum(angle_opposite(a, b, c),
                      np.minimum(angle_opposite(b, c, a), angle_opposite(c, a, b)))


def normalize_edge(u, v):
    """Return the canonical (min, max) form of an undirected edge."""
    u = int(u); v = int(v)
    return (u, v) if u <= v else (v, u)


def points_from_array(points) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in as_point_array(points)]
