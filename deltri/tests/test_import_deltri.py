import deltri


def test_public_surface():
    for name in deltri.__all__:
        assert hasattr(deltri, name), name
    assert isinstance(deltri.__version__, str)


def test_flat_exports_match_core():
    from deltri.core.triangulation import triangulate
    from deltri.core.predicates import circumcircle_contains

    assert deltri.triangulate is triangulate
    assert deltri.circumcircle_contains is circumcircle_contains
    assert deltri.triangulation.DelaunayTriangulator is deltri.DelaunayTriangulator


def test_package_logger_is_silent_by_default():
    import logging

    log = logging.getLogger('deltri')
    assert any(isinstance(h, logging.NullHandler) for h in log.handlers)
