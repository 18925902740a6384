"""Lawson flip repair after a point insertion.

The work queue holds handles of triangles incident to the inserted vertex
``p``. Each such triangle has exactly one edge not touching ``p`` (the edge
opposite ``p``'s corner); that edge is the candidate checked against the
neighbor's far vertex. A flip replaces the candidate with an edge through
``p`` and queues the two triangles whose outer edges are new.
"""
from __future__ import annotations
from collections import deque
from typing import Iterable, Optional

from .constants import EPS_INCIRCLE, EPS_DEGENERATE
from .mesh import TriangleMesh
from .operations import op_flip_edge
from .predicates import circumcircle_contains
from .stats import OpStats
from .logging_utils import get_logger

__all__ = ['legalize', 'is_locally_delaunay']

logger = get_logger('deltri.repair')


def is_locally_delaunay(mesh: TriangleMesh, h: int, slot: int, eps: float = EPS_INCIRCLE,
                        eps_degenerate: float = EPS_DEGENERATE) -> bool:
    """True when the edge opposite ``slot`` of ``h`` needs no flip.

    Boundary edges and co-circular quadrilaterals count as locally Delaunay.
    """
    u = mesh.neighbor_across(h, slot)
    if u is None:
        return True
    other = mesh.triangle(u)
    d = other.corners[other.slot_of_neighbor(h)].vertex
    return not circumcircle_contains(mesh.coords(h), mesh.points[d],
                                     eps=eps, eps_degenerate=eps_degenerate)


def legalize(mesh: TriangleMesh, p: int, seeds: Iterable[int], eps: float = EPS_INCIRCLE,
             eps_degenerate: float = EPS_DEGENERATE, stats: Optional[OpStats] = None) -> int:
    """Flip illegal edges around vertex ``p`` until the star of ``p`` is Delaunay.

    Parameters
    ----------
    mesh : TriangleMesh
    p : int
        Vertex just inserted.
    seeds : iterable of int
        Handles of the triangles created by the insertion.
    stats : OpStats, optional
        Receives one attempt per candidate edge checked and one success per flip.

    Returns
    -------
    int
        Number of flips performed.
    """
    queue = deque(seeds)
    flips = 0
    while queue:
        h = queue.popleft()
        # Handles are reused by flips; entries whose triangle no longer holds p are stale
        if not mesh.is_alive(h) or p not in mesh.triangle(h).vertices:
            continue
        slot = mesh.triangle(h).slot_of_vertex(p)
        if mesh.neighbor_across(h, slot) is None:
            continue
        if stats: stats.attempts += 1
        if is_locally_delaunay(mesh, h, slot, eps=eps, eps_degenerate=eps_degenerate):
            continue
        a, b = op_flip_edge(mesh, h, slot)
        flips += 1
        if stats: stats.success += 1
        queue.append(a)
        queue.append(b)
    if flips:
        logger.debug("vertex %d: %d flip(s)", p, flips)
    return flips
