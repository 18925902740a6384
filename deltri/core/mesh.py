"""Triangle arena with stable handles and corner-based adjacency.

Each triangle is three :class:`Corner` records in counter-clockwise order. A
corner pairs a vertex index with the handle of the triangle across the edge
opposite that vertex (``None`` on the boundary), so reordering a triangle moves
vertices and neighbors together.

Triangles are addressed by integer handles into the arena. Removing a triangle
tombstones its slot and pushes the handle on a free list; surviving neighbor
references are never renumbered while the mesh lives. :meth:`TriangleMesh.compact`
produces dense arrays once construction is over.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .geometry import as_point_array, normalize_edge
from .logging_utils import get_logger

__all__ = ['Corner', 'Triangle', 'TriangleMesh']

logger = get_logger('deltri.mesh')


class Corner(NamedTuple):
    vertex: int
    neighbor: Optional[int] = None


@dataclass(frozen=True)
class Triangle:
    corners: Tuple[Corner, Corner, Corner]

    @classmethod
    def from_vertices(cls, vertices: Sequence[int],
                      neighbors: Sequence[Optional[int]] = (None, None, None)) -> 'Triangle':
        return cls(tuple(Corner(int(v), n) for v, n in zip(vertices, neighbors)))

    @property
    def vertices(self) -> Tuple[int, int, int]:
        return tuple(c.vertex for c in self.corners)

    @property
    def neighbors(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        return tuple(c.neighbor for c in self.corners)

    def rotated(self, k: int) -> 'Triangle':
        """Return the same triangle with corner ``k`` first (winding preserved)."""
        k %= 3
        return Triangle(self.corners[k:] + self.corners[:k])

    def with_neighbor(self, slot: int, neighbor: Optional[int]) -> 'Triangle':
        corners = list(self.corners)
        corners[slot] = corners[slot]._replace(neighbor=neighbor)
        return Triangle(tuple(corners))

    def edge(self, slot: int) -> Tuple[int, int]:
        """Endpoints of the edge opposite corner ``slot``, in winding order."""
        return (self.corners[(slot + 1) % 3].vertex, self.corners[(slot + 2) % 3].vertex)

    def slot_of_vertex(self, v: int) -> int:
        for k, c in enumerate(self.corners):
            if c.vertex == v:
                return k
        raise ValueError(f"vertex {v} not in triangle {self.vertices}")

    def slot_of_edge(self, u: int, v: int) -> int:
        key = normalize_edge(u, v)
        for k in range(3):
            if normalize_edge(*self.edge(k)) == key:
                return k
        raise ValueError(f"edge {key} not in triangle {self.vertices}")

    def slot_of_neighbor(self, h: int) -> int:
        for k, c in enumerate(self.corners):
            if c.neighbor == h:
                return k
        raise ValueError(f"triangle {h} is not a neighbor of {self.vertices}")


class TriangleMesh:
    """Append-only vertex array plus a triangle arena.

    Parameters
    ----------
    points : (N,2) array-like, optional
        Initial vertices; more may be appended with :meth:`add_vertex`.
    """

    def __init__(self, points=None):
        pts = as_point_array(points if points is not None else [])
        self._coords = np.empty((max(16, 2 * pts.shape[0]), 2), dtype=np.float64)
        self._coords[:pts.shape[0]] = pts
        self._n_vertices = pts.shape[0]
        self._triangles: List[Optional[Triangle]] = []
        self._free: List[int] = []

    # --- vertices ---
    @property
    def points(self) -> np.ndarray:
        """Read-only view of the live vertex coordinates, shape (N,2)."""
        view = self._coords[:self._n_vertices]
        view.flags.writeable = False
        return view

    @property
    def n_vertices(self) -> int:
        return self._n_vertices

    def add_vertex(self, point) -> int:
        if self._n_vertices == self._coords.shape[0]:
            grown = np.empty((2 * self._coords.shape[0], 2), dtype=np.float64)
            grown[:self._n_vertices] = self._coords[:self._n_vertices]
            self._coords = grown
        self._coords[self._n_vertices] = (float(point[0]), float(point[1]))
        self._n_vertices += 1
        return self._n_vertices - 1

    # --- triangles ---
    def __len__(self) -> int:
        return len(self._triangles) - len(self._free)

    def __iter__(self) -> Iterator[int]:
        return self.handles()

    def __contains__(self, h) -> bool:
        return self.is_alive(h)

    def handles(self) -> Iterator[int]:
        """Live triangle handles in ascending order."""
        for h, tri in enumerate(self._triangles):
            if tri is not None:
                yield h

    def is_alive(self, h: Optional[int]) -> bool:
        return h is not None and 0 <= h < len(self._triangles) and self._triangles[h] is not None

    def triangle(self, h: int) -> Triangle:
        if not self.is_alive(h):
            raise KeyError(f"triangle handle {h} is not live")
        return self._triangles[h]

    def __getitem__(self, h: int) -> Triangle:
        return self.triangle(h)

    def coords(self, h: int) -> np.ndarray:
        """(3,2) coordinates of triangle ``h`` in corner order."""
        return self._coords[list(self.triangle(h).vertices)]

    def add_triangle(self, vertices: Sequence[int],
                     neighbors: Sequence[Optional[int]] = (None, None, None)) -> int:
        tri = Triangle.from_vertices(vertices, neighbors)
        if self._free:
            h = self._free.pop()
            self._triangles[h] = tri
        else:
            h = len(self._triangles)
            self._triangles.append(tri)
        return h

    def set_triangle(self, h: int, tri: Triangle) -> None:
        self.triangle(h)
        self._triangles[h] = tri

    def remove_triangle(self, h: int) -> Triangle:
        """Tombstone ``h`` and release its handle; neighbors still pointing at it become boundary."""
        tri = self.triangle(h)
        self._triangles[h] = None
        self._free.append(h)
        for k, n in enumerate(tri.neighbors):
            if n is not None and self.is_alive(n):
                u, v = tri.edge(k)
                other = self._triangles[n]
                slot = other.slot_of_edge(u, v)
                if other.corners[slot].neighbor == h:
                    self._triangles[n] = other.with_neighbor(slot, None)
        return tri

    def set_neighbor(self, h: int, slot: int, neighbor: Optional[int]) -> None:
        self._triangles[h] = self.triangle(h).with_neighbor(slot, neighbor)

    def link(self, h1: int, slot1: int, h2: int, slot2: int) -> None:
        self.set_neighbor(h1, slot1, h2)
        self.set_neighbor(h2, slot2, h1)

    def redirect_neighbor(self, h: Optional[int], edge: Tuple[int, int], new: int) -> None:
        """Point ``h``'s slot across ``edge`` at ``new``; no-op for a boundary (``None``) side."""
        if h is None:
            return
        tri = self.triangle(h)
        self._triangles[h] = tri.with_neighbor(tri.slot_of_edge(*edge), new)

    def neighbor_across(self, h: int, slot: int) -> Optional[int]:
        return self.triangle(h).corners[slot].neighbor

    def triangles_touching(self, vertices) -> List[int]:
        verts = set(int(v) for v in vertices)
        return [h for h in self.handles() if verts.intersection(self._triangles[h].vertices)]

    # --- export ---
    def triangle_array(self) -> np.ndarray:
        """(M,3) int32 vertex triples of live triangles in handle order."""
        rows = [self._triangles[h].vertices for h in self.handles()]
        return np.asarray(rows, dtype=np.int32).reshape(-1, 3)

    def compact(self, drop_vertices: int = 0):
        """Renumber live triangles densely and drop the first ``drop_vertices`` vertices.

        Triangles must no longer reference dropped vertices. Returns
        ``(points, triangles, neighbors)`` where ``neighbors`` is a tuple of
        3-tuples of new triangle indices or ``None``.
        """
        live = list(self.handles())
        old_to_new: Dict[int, int] = {h: i for i, h in enumerate(live)}
        tris = np.empty((len(live), 3), dtype=np.int32)
        neighbors = []
        for i, h in enumerate(live):
            tri = self._triangles[h]
            if min(tri.vertices) < drop_vertices:
                raise ValueError(f"triangle {h} still references a dropped vertex: {tri.vertices}")
            tris[i] = [v - drop_vertices for v in tri.vertices]
            neighbors.append(tuple(old_to_new.get(n) if n is not None else None
                                   for n in tri.neighbors))
        points = np.ascontiguousarray(self._coords[drop_vertices:self._n_vertices].copy())
        logger.debug("compacted mesh: %d live triangles (arena size %d), %d vertices dropped",
                     len(live), len(self._triangles), drop_vertices)
        return points, tris, tuple(neighbors)
