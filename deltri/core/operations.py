"""Local mesh operations: 1->3 triangle split, 2->4 edge split and edge flip.

Every operation rewires adjacency as it builds the new triangles, including
the back-references held by the untouched outer neighbors. Handles of the
replaced triangles are reused so references from outside the modified region
stay valid.
"""
from __future__ import annotations
from typing import Optional, Tuple

from .mesh import Triangle, TriangleMesh
from .stats import OpStats
from .logging_utils import get_logger

__all__ = [
    'op_split_triangle',
    'op_split_edge',
    'op_flip_edge',
]

logger = get_logger('deltri.operations')


def op_split_triangle(mesh: TriangleMesh, h: int, p: int,
                      stats: Optional[OpStats] = None) -> Tuple[int, int, int]:
    """Split triangle ``h`` = (a,b,c) around interior vertex ``p``.

    Produces (p,b,c), (a,p,c) and (a,b,p); the first reuses handle ``h``.
    In each child ``p`` sits at the corner whose slot is the child's index, so
    child *k*'s outer edge is opposite slot *k*.
    """
    if stats: stats.attempts += 1
    tri = mesh.triangle(h)
    (a, n0), (b, n1), (c, n2) = tri.corners
    h1 = mesh.add_triangle((a, p, c))
    h2 = mesh.add_triangle((a, b, p))
    mesh.set_triangle(h, Triangle.from_vertices((p, b, c), (n0, h1, h2)))
    mesh.set_triangle(h1, Triangle.from_vertices((a, p, c), (h, n1, h2)))
    mesh.set_triangle(h2, Triangle.from_vertices((a, b, p), (h, h1, n2)))
    # n0 keeps pointing at h across (b,c)
    mesh.redirect_neighbor(n1, (c, a), h1)
    mesh.redirect_neighbor(n2, (a, b), h2)
    if stats: stats.success += 1
    logger.debug("split triangle %d %s around vertex %d -> %s", h, tri.vertices, p, (h, h1, h2))
    return h, h1, h2


def op_split_edge(mesh: TriangleMesh, h: int, slot: int, p: int,
                  stats: Optional[OpStats] = None) -> Tuple[int, int, int, int]:
    """Split the edge opposite corner ``slot`` of triangle ``h`` at vertex ``p``.

    With ``h`` rotated to (a,b,c) and its neighbor across (b,c) rotated to
    (d,c,b), the pair is replaced by (a,b,p), (a,p,c), (d,c,p) and (d,p,b).
    The first and third reuse the two original handles. Returns the four
    handles; in each, ``p`` is the corner at index 2, 1, 2, 1 respectively.
    """
    if stats: stats.attempts += 1
    u = mesh.neighbor_across(h, slot)
    if u is None:
        if stats: stats.fail += 1
        raise ValueError(f"edge opposite slot {slot} of triangle {h} is on the boundary")
    t = mesh.triangle(h).rotated(slot)
    s = mesh.triangle(u)
    s = s.rotated(s.slot_of_neighbor(h))
    (a, _), (b, t1), (c, t2) = t.corners
    (d, _), (c2, s1), (b2, s2) = s.corners
    if (b2, c2) != (b, c):
        if stats: stats.fail += 1
        raise ValueError(f"triangles {h} {t.vertices} and {u} {s.vertices} do not share an edge consistently")
    h2 = mesh.add_triangle((a, p, c))
    h4 = mesh.add_triangle((d, p, b))
    # t1: outer across (c,a); t2: outer across (a,b); s1: outer across (b,d); s2: outer across (d,c)
    mesh.set_triangle(h, Triangle.from_vertices((a, b, p), (h4, h2, t2)))
    mesh.set_triangle(h2, Triangle.from_vertices((a, p, c), (u, t1, h)))
    mesh.set_triangle(u, Triangle.from_vertices((d, c, p), (h2, h4, s2)))
    mesh.set_triangle(h4, Triangle.from_vertices((d, p, b), (h, s1, u)))
    mesh.redirect_neighbor(t1, (c, a), h2)
    mesh.redirect_neighbor(s1, (b, d), h4)
    if stats: stats.success += 1
    logger.debug("split edge (%d,%d) of triangles %d/%d at vertex %d -> %s",
                 b, c, h, u, p, (h, h2, u, h4))
    return h, h2, u, h4


def op_flip_edge(mesh: TriangleMesh, h: int, slot: int,
                 stats: Optional[OpStats] = None) -> Tuple[int, int]:
    """Flip the edge opposite corner ``slot`` of triangle ``h``.

    With ``h`` rotated to (p,b,c) and its neighbor to (d,c,b), the diagonal
    (b,c) is replaced by (p,d), giving (p,b,d) on handle ``h`` and (p,d,c) on
    the neighbor's handle. ``p`` is corner 0 of both results, so their edges
    facing away from ``p`` are opposite slot 0. The caller is responsible for
    only flipping edges whose quadrilateral is convex.
    """
    if stats: stats.attempts += 1
    u = mesh.neighbor_across(h, slot)
    if u is None:
        if stats: stats.fail += 1
        raise ValueError(f"edge opposite slot {slot} of triangle {h} is on the boundary")
    t = mesh.triangle(h).rotated(slot)
    s = mesh.triangle(u)
    s = s.rotated(s.slot_of_neighbor(h))
    (p, _), (b, t1), (c, t2) = t.corners
    (d, _), (c2, s1), (b2, s2) = s.corners
    if (b2, c2) != (b, c):
        if stats: stats.fail += 1
        raise ValueError(f"triangles {h} {t.vertices} and {u} {s.vertices} do not share an edge consistently")
    # t1: outer across (c,p); t2: outer across (p,b); s1: outer across (b,d); s2: outer across (d,c)
    mesh.set_triangle(h, Triangle.from_vertices((p, b, d), (s1, u, t2)))
    mesh.set_triangle(u, Triangle.from_vertices((p, d, c), (s2, t1, h)))
    mesh.redirect_neighbor(s1, (b, d), h)
    mesh.redirect_neighbor(t1, (c, p), u)
    if stats: stats.success += 1
    logger.debug("flipped edge (%d,%d) -> (%d,%d) on triangles %d/%d", b, c, p, d, h, u)
    return h, u
