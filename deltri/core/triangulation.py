"""Incremental Delaunay triangulation driver.

Seeds a bootstrap super-triangle around the input, inserts the points one by
one (locate, split, Lawson repair) and finally strips the bootstrap triangle
and its three vertices.

Example
-------
    from deltri import triangulate
    tri = triangulate([(0, 0), (1, 0), (0.5, 1), (1.5, 2)])
    tri.triangles        # (M,3) int32 vertex indices, counter-clockwise
    tri.triangles_coord()
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .config import TriangulationConfig
from .conformity import check_mesh_conformity
from .constants import N_BOOTSTRAP_VERTICES
from .exceptions import (TriangulationError, InsufficientPointsError, InvalidPointsError)
from .geometry import Point, bounding_box, normalize_edge, points_from_array, triangles_min_angles
from .locate import locate_point
from .logging_utils import get_logger, configure_logging
from .mesh import TriangleMesh
from .operations import op_split_triangle, op_split_edge
from .predicates import Location
from .repair import legalize
from .stats import OpStats, new_registry, timed, print_stats as _print_stats

__all__ = ['super_triangle', 'Triangulation', 'DelaunayTriangulator', 'triangulate']


def super_triangle(points, margin: float) -> np.ndarray:
    """Counter-clockwise triangle strictly containing the expanded bounding box of ``points``.

    The box is grown by ``margin`` times its largest side on every side; the
    triangle then circumscribes the resulting square with room to spare.
    """
    minx, miny, maxx, maxy = bounding_box(points)
    side = max(maxx - minx, maxy - miny)
    if side == 0.0:
        side = max(1.0, abs(minx), abs(miny))
    cx = 0.5 * (minx + maxx)
    cy = 0.5 * (miny + maxy)
    r = side * (0.5 + margin)
    return np.array([
        [cx - 3.0 * r, cy - r],
        [cx + 3.0 * r, cy - r],
        [cx, cy + 3.0 * r],
    ], dtype=np.float64)


def _validate_points(points) -> np.ndarray:
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidPointsError(f"points are not numeric (x, y) pairs: {exc}") from exc
    if arr.size == 0:
        n = 0
    elif arr.ndim == 2 and arr.shape[1] == 2:
        n = arr.shape[0]
    else:
        raise InvalidPointsError(f"points must have shape (N,2), got {arr.shape}")
    if n < 3:
        raise InsufficientPointsError(f"at least 3 points are required, got {n}")
    if not np.all(np.isfinite(arr)):
        raise InvalidPointsError("points contain non-finite coordinates")
    return np.ascontiguousarray(arr)


@dataclass(frozen=True)
class Triangulation:
    """Finished triangulation.

    Attributes
    ----------
    points : (N,2) float64 array
        Input points; row i is the i-th input point.
    triangles : (M,3) int32 array
        Counter-clockwise vertex index triples.
    neighbors : tuple of 3-tuples
        ``neighbors[i][k]`` is the triangle across the edge opposite vertex k
        of triangle i, or ``None`` on the convex hull.
    stats : dict
        Per-operation counters collected while building.
    """
    points: np.ndarray
    triangles: np.ndarray
    neighbors: Tuple[Tuple[Optional[int], Optional[int], Optional[int]], ...]
    stats: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def __len__(self):
        return int(self.triangles.shape[0])

    @property
    def n_vertices(self) -> int:
        return int(self.points.shape[0])

    def vertices(self) -> List[Point]:
        return points_from_array(self.points)

    def triangles_coord(self) -> List[Tuple[Point, Point, Point]]:
        """Triangles with coordinates substituted for vertex indices."""
        verts = self.vertices()
        return [tuple(verts[int(v)] for v in tri) for tri in self.triangles]

    def edges(self) -> List[Tuple[int, int]]:
        """Unique undirected edges as sorted (i, j) pairs with i < j."""
        seen = set()
        for tri in self.triangles:
            a, b, c = (int(v) for v in tri)
            seen.update((normalize_edge(a, b), normalize_edge(b, c), normalize_edge(c, a)))
        return sorted(seen)

    def edges_coord(self) -> List[Tuple[Point, Point]]:
        verts = self.vertices()
        return [(verts[i], verts[j]) for i, j in self.edges()]

    def hull_edges(self) -> List[Tuple[int, int]]:
        """Convex-hull edges in counter-clockwise winding order of their triangle."""
        out = []
        for tri, nbrs in zip(self.triangles, self.neighbors):
            for k in range(3):
                if nbrs[k] is None:
                    out.append((int(tri[(k + 1) % 3]), int(tri[(k + 2) % 3])))
        return out

    def min_angle(self) -> float:
        """Smallest interior angle (degrees) over all triangles."""
        if len(self) == 0:
            return float('nan')
        return float(np.min(triangles_min_angles(self.points, self.triangles)))


class DelaunayTriangulator:
    """Builds Delaunay triangulations by incremental insertion and flip repair.

    The mesh of one run is owned by :meth:`triangulate` and discarded when it
    returns; operation statistics accumulate across runs until
    :meth:`reset_stats`.
    """

    def __init__(self, config: Optional[TriangulationConfig] = None):
        self.config = config or TriangulationConfig()
        self.logger = get_logger(f'deltri.triangulation.{self.__class__.__name__}')
        self._op_stats = new_registry()

    # --- Stats helpers ---
    def _get_op_stats(self, name: str) -> OpStats:
        return self._op_stats[name]

    def stats_summary(self):
        return {k: v.to_dict() for k, v in self._op_stats.items()}

    def print_stats(self, pretty: bool = True, file=None):
        _print_stats(self.stats_summary(), file=file, pretty=pretty)

    def reset_stats(self, drop_ops: bool = False):
        """Zero all counters, or forget every operation when ``drop_ops`` is set."""
        if drop_ops:
            self._op_stats.clear()
        else:
            for s in self._op_stats.values():
                s.reset()

    # --- Construction ---
    def seed(self, points) -> TriangleMesh:
        """Mesh holding only the bootstrap triangle (vertices 0, 1, 2) around ``points``."""
        mesh = TriangleMesh(super_triangle(points, self.config.super_margin))
        mesh.add_triangle((0, 1, 2))
        return mesh

    def insert_point(self, mesh: TriangleMesh, point) -> int:
        """Insert one point into ``mesh``; returns its vertex index."""
        cfg = self.config
        with timed(self._get_op_stats('insert')) as insert_stats:
            with timed(self._get_op_stats('locate')) as locate_stats:
                loc = locate_point(mesh, point, eps=cfg.eps_barycentric,
                                   eps_degenerate=cfg.eps_degenerate)
                locate_stats.success += 1
            v = mesh.add_vertex(point)
            if loc.location is Location.INSIDE:
                created = op_split_triangle(mesh, loc.triangles[0], v,
                                            stats=self._get_op_stats('split_triangle'))
            else:
                created = op_split_edge(mesh, loc.triangles[0], loc.slot, v,
                                        stats=self._get_op_stats('split_edge'))
            if cfg.flip_repair:
                legalize(mesh, v, created, eps=cfg.eps_incircle,
                         eps_degenerate=cfg.eps_degenerate, stats=self._get_op_stats('flip'))
            insert_stats.success += 1
        return v

    def strip_bootstrap(self, mesh: TriangleMesh) -> int:
        """Remove every triangle touching a bootstrap vertex; returns how many were removed."""
        doomed = mesh.triangles_touching(range(N_BOOTSTRAP_VERTICES))
        for h in doomed:
            mesh.remove_triangle(h)
        return len(doomed)

    def triangulate(self, points) -> Triangulation:
        """Delaunay triangulation of ``points`` (sequence of (x, y) or (N,2) array).

        Raises
        ------
        InsufficientPointsError
            Fewer than three points.
        InvalidPointsError
            Malformed or non-finite input.
        PointOutOfBoundsError, DegeneratePredicateError
            A point could not be inserted; no partial result is returned.
        """
        cfg = self.config
        if cfg.log_level is not None:
            configure_logging(cfg.log_level)
        pts = _validate_points(points)
        mesh = self.seed(pts)
        for i, p in enumerate(pts):
            try:
                self.insert_point(mesh, p)
            except TriangulationError as exc:
                self._get_op_stats('insert').fail += 1
                self.logger.warning("triangulation aborted at input point %d %s: %s", i, tuple(p), exc)
                raise
        removed = self.strip_bootstrap(mesh)
        out_pts, tris, nbrs = mesh.compact(drop_vertices=N_BOOTSTRAP_VERTICES)
        result = Triangulation(out_pts, tris, nbrs, stats=self.stats_summary())
        if len(result) == 0:
            self.logger.warning("all %d input points are collinear; no triangles produced", len(pts))
        if cfg.validate:
            ok, msgs = check_mesh_conformity(result.points, result.triangles, result.neighbors)
            if not ok:
                self.logger.warning("final mesh failed conformity: %s", msgs)
                raise TriangulationError("final mesh failed conformity checks: " + "; ".join(msgs[:5]))
        self.logger.info("triangulated %d points into %d triangles (%d bootstrap triangles removed)",
                         result.n_vertices, len(result), removed)
        return result


def triangulate(points, config: Optional[TriangulationConfig] = None, **overrides) -> Triangulation:
    """Functional front-end: ``triangulate(points, flip_repair=False)`` etc.

    Keyword overrides are applied on top of ``config`` (or the defaults).
    """
    cfg = config or TriangulationConfig()
    if overrides:
        cfg = cfg.with_overrides(**overrides)
    return DelaunayTriangulator(cfg).triangulate(points)
