import numpy as np

from deltri.core.conformity import (boundary_edges_from_map, build_edge_to_tri_map, check_adjacency,
                                    check_mesh_conformity, delaunay_violations, euler_characteristic)

PTS = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
TRIS = np.array([[0, 1, 2], [0, 2, 3]])
NBRS = ((None, 1, None), (None, None, 0))


def test_edge_map_and_boundary():
    emap = build_edge_to_tri_map(TRIS)
    assert emap[(0, 2)] == {0, 1}
    assert boundary_edges_from_map(emap) == [(0, 1), (0, 3), (1, 2), (2, 3)]


def test_valid_square_passes():
    ok, msgs = check_mesh_conformity(PTS, TRIS, NBRS)
    assert ok, msgs
    assert euler_characteristic(TRIS) == 2


def test_inverted_and_duplicate_triangles_detected():
    ok, msgs = check_mesh_conformity(PTS, [[0, 2, 1], [0, 2, 3]])
    assert not ok
    assert any('non-positive' in m for m in msgs)
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 2], [1, 2, 0]])
    assert not ok
    assert any('duplicate' in m for m in msgs)


def test_non_manifold_edge_detected():
    pts = np.vstack([PTS, [[2, 0.5]]])
    ok, msgs = check_mesh_conformity(pts, [[0, 1, 2], [0, 2, 3], [1, 4, 2], [0, 1, 2]], allow_inverted=True)
    assert not ok
    assert any('shared by 3' in m for m in msgs)


def test_adjacency_asymmetry_detected():
    assert check_adjacency(TRIS, NBRS) == []
    assert check_adjacency(TRIS, ((None, 1, None), (None, None, None)))
    assert check_adjacency(TRIS, ((1, None, None), (None, None, 0)))


def test_delaunay_violations():
    # kite split along its short diagonal is not Delaunay
    pts = np.array([[0, 0], [2, 1], [-2, 1], [0, 1.5]])
    assert delaunay_violations(pts, [[0, 1, 2], [3, 2, 1]])
    assert delaunay_violations(pts, [[0, 1, 3], [0, 3, 2]]) == []
