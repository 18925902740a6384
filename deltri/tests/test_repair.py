from deltri.core.conformity import check_arena_adjacency
from deltri.core.mesh import TriangleMesh
from deltri.core.repair import is_locally_delaunay, legalize
from deltri.core.stats import OpStats


def _pair(points):
    # vertex 0 is the apex p of (p,b,c); vertex 3 is the far vertex d of (d,c,b)
    mesh = TriangleMesh(points)
    t = mesh.add_triangle((0, 1, 2))
    u = mesh.add_triangle((3, 2, 1))
    mesh.link(t, 0, u, 0)
    return mesh, t, u


def test_legalize_flips_illegal_edge():
    # circumcircle of (0,0),(2,1),(-2,1) is centered at (0,2.5) with radius 2.5
    mesh, t, u = _pair([[0, 0], [2, 1], [-2, 1], [0, 1.5]])
    assert not is_locally_delaunay(mesh, t, 0)
    stats = OpStats()
    flips = legalize(mesh, 0, [t], stats=stats)
    assert flips == 1
    assert stats.success == 1
    got = {tuple(sorted(mesh.triangle(h).vertices)) for h in mesh.handles()}
    assert got == {(0, 1, 3), (0, 2, 3)}
    assert check_arena_adjacency(mesh) == []
    for h in mesh.handles():
        for k in range(3):
            assert is_locally_delaunay(mesh, h, k)
    # already Delaunay: nothing left to do
    assert legalize(mesh, 0, list(mesh.handles())) == 0


def test_legalize_leaves_cocircular_quad_alone():
    # all four vertices on the unit circle
    mesh, t, u = _pair([[-1, 0], [0, -1], [0, 1], [1, 0]])
    assert is_locally_delaunay(mesh, t, 0)
    assert legalize(mesh, 0, [t, u]) == 0
    assert mesh.triangle(t).vertices == (0, 1, 2)


def test_legalize_skips_boundary_and_foreign_triangles():
    mesh, t, u = _pair([[0, 0], [2, 1], [-2, 1], [0, 6]])
    stats = OpStats()
    # u does not contain vertex 0, so it is ignored; t's candidate edge is legal
    assert legalize(mesh, 0, [u, t], stats=stats) == 0
    assert stats.attempts == 1
    assert is_locally_delaunay(mesh, t, 1)
