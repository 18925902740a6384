import numpy as np
import pytest

from deltri.core.conformity import check_arena_adjacency
from deltri.core.mesh import Corner, Triangle, TriangleMesh


def _square_mesh():
    # 3 --- 2
    # |  /  |
    # 0 --- 1
    mesh = TriangleMesh([[0, 0], [2, 0], [2, 2], [0, 2]])
    t0 = mesh.add_triangle((0, 1, 2))
    t1 = mesh.add_triangle((0, 2, 3))
    # t0's slot 1 faces (2,0); t1's slot 2 faces (0,2)
    mesh.link(t0, 1, t1, 2)
    return mesh, t0, t1


def test_rotation_moves_vertices_and_neighbors_together():
    t = Triangle.from_vertices((5, 6, 7), (None, 1, 2))
    r = t.rotated(1)
    assert r.vertices == (6, 7, 5)
    assert r.neighbors == (1, 2, None)
    assert r.corners[0] == Corner(6, 1)
    assert t.rotated(3) == t


def test_triangle_edge_lookup():
    t = Triangle.from_vertices((4, 8, 9))
    assert t.edge(0) == (8, 9)
    assert t.edge(1) == (9, 4)
    assert t.slot_of_edge(4, 9) == 1
    assert t.slot_of_vertex(8) == 1
    with pytest.raises(ValueError):
        t.slot_of_edge(4, 5)


def test_link_is_symmetric():
    mesh, t0, t1 = _square_mesh()
    assert mesh.neighbor_across(t0, 1) == t1
    assert mesh.neighbor_across(t1, 2) == t0
    assert check_arena_adjacency(mesh) == []


def test_remove_tombstones_and_reuses_handle():
    mesh, t0, t1 = _square_mesh()
    mesh.remove_triangle(t1)
    assert len(mesh) == 1
    assert t1 not in mesh
    assert mesh.neighbor_across(t0, 1) is None
    with pytest.raises(KeyError):
        mesh.triangle(t1)
    h = mesh.add_triangle((0, 2, 3))
    assert h == t1
    # surviving handle is untouched by removal and reuse
    assert mesh.triangle(t0).vertices == (0, 1, 2)
    assert list(mesh.handles()) == [t0, t1]


def test_vertex_array_grows_and_is_read_only():
    mesh = TriangleMesh()
    for i in range(40):
        assert mesh.add_vertex((i, -i)) == i
    assert mesh.n_vertices == 40
    assert mesh.points.shape == (40, 2)
    assert tuple(mesh.points[-1]) == (39.0, -39.0)
    with pytest.raises(ValueError):
        mesh.points[0, 0] = 1.0


def test_coords_follow_corner_order():
    mesh, t0, _ = _square_mesh()
    assert np.array_equal(mesh.coords(t0), [[0, 0], [2, 0], [2, 2]])


def test_compact_rebases_vertices_and_remaps_neighbors():
    mesh = TriangleMesh([[9, 9], [0, 0], [2, 0], [2, 2], [0, 2]])
    junk = mesh.add_triangle((0, 1, 2))
    t0 = mesh.add_triangle((1, 2, 3))
    t1 = mesh.add_triangle((1, 3, 4))
    mesh.link(t0, 1, t1, 2)
    mesh.remove_triangle(junk)
    points, tris, nbrs = mesh.compact(drop_vertices=1)
    assert points.shape == (4, 2)
    assert np.array_equal(points[0], [0, 0])
    assert tris.tolist() == [[0, 1, 2], [0, 2, 3]]
    assert nbrs == ((None, 1, None), (None, None, 0))


def test_compact_refuses_dangling_vertex_reference():
    mesh = TriangleMesh([[0, 0], [1, 0], [0, 1]])
    mesh.add_triangle((0, 1, 2))
    with pytest.raises(ValueError):
        mesh.compact(drop_vertices=1)


def test_triangles_touching():
    mesh, t0, t1 = _square_mesh()
    assert mesh.triangles_touching([1]) == [t0]
    assert mesh.triangles_touching([0]) == [t0, t1]
    assert mesh.triangle_array().tolist() == [[0, 1, 2], [0, 2, 3]]
