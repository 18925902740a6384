"""Point location by linear scan over the live triangles."""
from __future__ import annotations
from typing import NamedTuple, Optional, Tuple

from .constants import EPS_BARYCENTRIC, EPS_DEGENERATE
from .exceptions import PointOutOfBoundsError
from .mesh import TriangleMesh
from .predicates import Location, classify_point

__all__ = ['PointLocation', 'locate_point']


class PointLocation(NamedTuple):
    """Where a query point falls in the mesh.

    For ``INSIDE`` ``triangles`` holds the single containing handle. For
    ``ON_EDGE`` it holds the triangle that matched first and its neighbor
    across the edge, and ``slot`` is the first triangle's corner opposite that
    edge.
    """
    location: Location
    triangles: Tuple[int, ...]
    slot: Optional[int] = None


def locate_point(mesh: TriangleMesh, point, eps: float = EPS_BARYCENTRIC,
                 eps_degenerate: float = EPS_DEGENERATE) -> PointLocation:
    """Find the triangle containing ``point``, or the pair straddling the edge it lies on.

    Raises
    ------
    PointOutOfBoundsError
        No live triangle contains the point, or the point sits on a boundary edge.
    """
    for h in mesh.handles():
        cls = classify_point(mesh.coords(h), point, eps=eps, eps_degenerate=eps_degenerate)
        if cls.location is Location.INSIDE:
            return PointLocation(Location.INSIDE, (h,))
        if cls.location is Location.ON_EDGE:
            other = mesh.neighbor_across(h, cls.slot)
            if other is None:
                raise PointOutOfBoundsError(point, f"point {tuple(point)} lies on the mesh boundary")
            return PointLocation(Location.ON_EDGE, (h, other), cls.slot)
    raise PointOutOfBoundsError(point)
