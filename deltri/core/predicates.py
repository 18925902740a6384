"""Geometric predicates used by point location and flip repair.

Both predicates take the triangle as three point-likes in counter-clockwise
order (an ``(3, 2)`` array slice works) and a query point. Tolerances default
to the values in :mod:`deltri.core.constants`.
"""
from __future__ import annotations
import enum
from typing import NamedTuple, Optional

from .constants import EPS_BARYCENTRIC, EPS_INCIRCLE, EPS_DEGENERATE
from .exceptions import DegeneratePredicateError

__all__ = [
    'Location', 'PointClass', 'circumcircle_contains', 'incircle_determinant',
    'classify_point',
]


class Location(enum.Enum):
    OUTSIDE = 'outside'
    INSIDE = 'inside'
    ON_EDGE = 'on_edge'


class PointClass(NamedTuple):
    """Result of :func:`classify_point`.

    ``slot`` is set only for ``ON_EDGE`` and names the triangle corner opposite
    the edge the point lies on (0 -> edge bc, 1 -> edge ca, 2 -> edge ab).
    """
    location: Location
    slot: Optional[int] = None

    @property
    def contained(self) -> bool:
        return self.location is not Location.OUTSIDE


_OUTSIDE = PointClass(Location.OUTSIDE)
_INSIDE = PointClass(Location.INSIDE)


def _check_orientation(ax, ay, bx, by, cx, cy, eps_degenerate):
    """Return the doubled signed area of abc, raising on near-zero area.

    The threshold is relative to the product of the two spanning edge lengths,
    so it bounds the sine of the angle at ``a``.
    """
    ux, uy = bx - ax, by - ay
    vx, vy = cx - ax, cy - ay
    det = ux*vy - uy*vx
    scale = ((ux*ux + uy*uy) * (vx*vx + vy*vy)) ** 0.5
    if scale == 0.0 or abs(det) <= eps_degenerate * scale:
        raise DegeneratePredicateError(
            f"degenerate triangle ({ax}, {ay}), ({bx}, {by}), ({cx}, {cy}): det={det:.3e}")
    return det


def incircle_determinant(tri, point):
    """Lifted 3x3 incircle determinant translated to ``point``, with its permanent.

    Positive when ``point`` is inside the circumcircle of a counter-clockwise
    triangle. The permanent bounds the rounding error and scales the tolerance.
    """
    dx, dy = float(point[0]), float(point[1])
    ax, ay = float(tri[0][0]) - dx, float(tri[0][1]) - dy
    bx, by = float(tri[1][0]) - dx, float(tri[1][1]) - dy
    cx, cy = float(tri[2][0]) - dx, float(tri[2][1]) - dy
    a2 = ax*ax + ay*ay
    b2 = bx*bx + by*by
    c2 = cx*cx + cy*cy
    bc = bx*cy - by*cx
    ca = cx*ay - cy*ax
    ab = ax*by - ay*bx
    det = a2*bc + b2*ca + c2*ab
    permanent = (abs(bx*cy) + abs(by*cx))*a2 + (abs(cx*ay) + abs(cy*ax))*b2 \
        + (abs(ax*by) + abs(ay*bx))*c2
    return det, permanent


def circumcircle_contains(tri, point, eps: float = EPS_INCIRCLE,
                          eps_degenerate: float = EPS_DEGENERATE) -> bool:
    """True iff ``point`` lies strictly inside the circumcircle of ``tri``.

    A point on the circle (determinant within ``eps`` times its permanent) is
    not contained. Raises :class:`DegeneratePredicateError` when ``tri`` has
    (near) zero area.
    """
    orientation = _check_orientation(float(tri[0][0]), float(tri[0][1]),
                                     float(tri[1][0]), float(tri[1][1]),
                                     float(tri[2][0]), float(tri[2][1]), eps_degenerate)
    det, permanent = incircle_determinant(tri, point)
    if orientation < 0.0:
        det = -det
    return det > eps * permanent


def classify_point(tri, point, eps: float = EPS_BARYCENTRIC,
                   eps_degenerate: float = EPS_DEGENERATE) -> PointClass:
    """Classify ``point`` against ``tri`` as outside, inside or on one edge.

    Solves ``point - a = s*(b - a) + t*(c - a)`` for the parametric coordinates
    ``(s, t)``. Inside when ``s > 0``, ``t > 0`` and ``s + t < 1`` outside the
    ``eps`` band; on an edge when exactly one of ``s``, ``t``, ``s + t - 1`` is
    within ``eps`` of zero. A point matching two edges coincides with a vertex,
    which is reported as a degenerate predicate.
    """
    ax, ay = float(tri[0][0]), float(tri[0][1])
    bx, by = float(tri[1][0]), float(tri[1][1])
    cx, cy = float(tri[2][0]), float(tri[2][1])
    det = _check_orientation(ax, ay, bx, by, cx, cy, eps_degenerate)
    wx, wy = float(point[0]) - ax, float(point[1]) - ay
    s = (wx*(cy - ay) - wy*(cx - ax)) / det
    t = ((bx - ax)*wy - (by - ay)*wx) / det
    if s < -eps or t < -eps or s + t > 1.0 + eps:
        return _OUTSIDE
    on_bc = abs(s + t - 1.0) <= eps
    on_ca = abs(s) <= eps
    on_ab = abs(t) <= eps
    hits = on_bc + on_ca + on_ab
    if hits == 0:
        return _INSIDE
    if hits > 1:
        raise DegeneratePredicateError(
            f"point {tuple(point)} coincides with a triangle vertex (s={s:.3e}, t={t:.3e})")
    if on_bc:
        return PointClass(Location.ON_EDGE, 0)
    if on_ca:
        return PointClass(Location.ON_EDGE, 1)
    return PointClass(Location.ON_EDGE, 2)
