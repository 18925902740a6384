"""Conformity, adjacency and Delaunay checks for finished or in-progress meshes."""
from __future__ import annotations
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from .constants import EPS_INCIRCLE
from .geometry import normalize_edge, triangles_signed_areas
from .mesh import TriangleMesh

__all__ = [
    'build_edge_to_tri_map', 'boundary_edges_from_map', 'check_mesh_conformity',
    'check_adjacency', 'check_arena_adjacency', 'delaunay_violations',
    'euler_characteristic',
]


def build_edge_to_tri_map(triangles) -> Dict[Tuple[int, int], Set[int]]:
    """Map each undirected edge (min, max) to the set of triangle rows using it."""
    edge_map: Dict[Tuple[int, int], Set[int]] = defaultdict(set)
    for ti, tri in enumerate(np.asarray(triangles, dtype=np.int32).reshape(-1, 3)):
        a, b, c = int(tri[0]), int(tri[1]), int(tri[2])
        for e in ((a, b), (b, c), (c, a)):
            edge_map[normalize_edge(*e)].add(ti)
    return edge_map


def boundary_edges_from_map(edge_map) -> List[Tuple[int, int]]:
    return sorted(e for e, s in edge_map.items() if len(s) == 1)


def check_adjacency(triangles, neighbors: Sequence[Sequence[Optional[int]]]) -> List[str]:
    """Check neighbor slots of a dense mesh against its vertex triples.

    Slot k of triangle i must name the triangle sharing the edge opposite
    vertex k, and that triangle must point back across the same edge. ``None``
    must appear exactly on edges used by a single triangle.
    """
    tris = np.asarray(triangles, dtype=np.int32).reshape(-1, 3)
    msgs: List[str] = []
    if len(neighbors) != tris.shape[0]:
        return [f"neighbors has {len(neighbors)} rows for {tris.shape[0]} triangles"]
    edge_map = build_edge_to_tri_map(tris)
    for i, tri in enumerate(tris):
        for k in range(3):
            u, v = int(tri[(k + 1) % 3]), int(tri[(k + 2) % 3])
            users = edge_map[normalize_edge(u, v)] - {i}
            n = neighbors[i][k]
            if n is None:
                if users:
                    msgs.append(f"triangle {i} slot {k}: no neighbor recorded but edge ({u},{v}) is shared with {sorted(users)}")
                continue
            if n not in users:
                msgs.append(f"triangle {i} slot {k}: neighbor {n} does not share edge ({u},{v})")
                continue
            back = [j for j in range(3) if neighbors[n][j] == i]
            ok_back = any(normalize_edge(int(tris[n][(j + 1) % 3]), int(tris[n][(j + 2) % 3]))
                          == normalize_edge(u, v) for j in back)
            if not ok_back:
                msgs.append(f"triangle {i} slot {k}: neighbor {n} does not point back across ({u},{v})")
    return msgs


def check_arena_adjacency(mesh: TriangleMesh) -> List[str]:
    """Adjacency symmetry check on a live arena, before compaction."""
    msgs: List[str] = []
    for h in mesh.handles():
        tri = mesh.triangle(h)
        for k, n in enumerate(tri.neighbors):
            if n is None:
                continue
            if not mesh.is_alive(n):
                msgs.append(f"triangle {h} slot {k}: neighbor {n} is not live")
                continue
            other = mesh.triangle(n)
            try:
                j = other.slot_of_edge(*tri.edge(k))
            except ValueError:
                msgs.append(f"triangle {h} slot {k}: neighbor {n} {other.vertices} lacks edge {tri.edge(k)}")
                continue
            if other.corners[j].neighbor != h:
                msgs.append(f"triangle {h} slot {k}: neighbor {n} points to {other.corners[j].neighbor} across {tri.edge(k)}")
    return msgs


def check_mesh_conformity(points, triangles, neighbors=None, allow_inverted: bool = False):
    """Structural checks on a dense triangle mesh.

    Returns
    -------
    (bool, list of str)
        ``ok`` and the list of problems found: edges used by more than two
        triangles, duplicate triangles, non-positive orientation, out-of-range
        indices, and (if ``neighbors`` is given) adjacency errors.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    tris = np.asarray(triangles, dtype=np.int32).reshape(-1, 3)
    msgs: List[str] = []
    if tris.size and (tris.min() < 0 or tris.max() >= pts.shape[0]):
        msgs.append("triangle references vertex index out of range")
        return False, msgs
    edge_map = build_edge_to_tri_map(tris)
    for e, users in edge_map.items():
        if len(users) > 2:
            msgs.append(f"edge {e} is shared by {len(users)} triangles: {sorted(users)}")
    keys = [tuple(sorted(int(v) for v in t)) for t in tris]
    if len(set(keys)) != len(keys):
        msgs.append("duplicate triangles present")
    if not allow_inverted and tris.size:
        areas = triangles_signed_areas(pts, tris)
        bad = np.nonzero(areas <= 0.0)[0]
        if bad.size:
            msgs.append(f"{bad.size} triangle(s) with non-positive area: {bad[:10].tolist()}")
    if neighbors is not None:
        msgs.extend(check_adjacency(tris, neighbors))
    return (not msgs), msgs


def delaunay_violations(points, triangles, eps: float = EPS_INCIRCLE):
    """Return (triangle, vertex) pairs where the vertex lies strictly inside the circumcircle.

    Vectorized over vertices: for each triangle the lifted incircle determinant
    is evaluated against every point at once.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    tris = np.asarray(triangles, dtype=np.int32).reshape(-1, 3)
    out = []
    for i, tri in enumerate(tris):
        a, b, c = pts[tri[0]], pts[tri[1]], pts[tri[2]]
        A = a - pts; B = b - pts; C = c - pts
        a2 = (A * A).sum(axis=1); b2 = (B * B).sum(axis=1); c2 = (C * C).sum(axis=1)
        bc = B[:, 0] * C[:, 1] - B[:, 1] * C[:, 0]
        ca = C[:, 0] * A[:, 1] - C[:, 1] * A[:, 0]
        ab = A[:, 0] * B[:, 1] - A[:, 1] * B[:, 0]
        det = a2 * bc + b2 * ca + c2 * ab
        perm = a2 * (np.abs(B[:, 0] * C[:, 1]) + np.abs(B[:, 1] * C[:, 0])) \
            + b2 * (np.abs(C[:, 0] * A[:, 1]) + np.abs(C[:, 1] * A[:, 0])) \
            + c2 * (np.abs(A[:, 0] * B[:, 1]) + np.abs(A[:, 1] * B[:, 0]))
        orientation = (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
        if orientation < 0.0:
            det = -det
        inside = np.nonzero(det > eps * perm)[0]
        for v in inside:
            if v not in tri:
                out.append((i, int(v)))
    return out


def euler_characteristic(triangles) -> int:
    """V - E + F over the vertices used by ``triangles``, counting the outer face."""
    tris = np.asarray(triangles, dtype=np.int32).reshape(-1, 3)
    if tris.size == 0:
        return 0
    V = len(np.unique(tris))
    E = len(build_edge_to_tri_map(tris))
    F = tris.shape[0] + 1
    return V - E + F
