"""Public package API for deltri, an incremental 2D Delaunay triangulator.

This facade provides a flat import surface on top of the internal
implementation package ``deltri.core``.

Example
-------
    from deltri import triangulate, TriangulationConfig

    tri = triangulate(points, TriangulationConfig(validate=True))
    tri.triangles, tri.neighbors, tri.triangles_coord()

The deeper modules (``deltri.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:  # Python 3.8+ runtime version export
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("deltri")  # populated when installed
except _NotFound:  # pragma: no cover - source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('deltri.core.constants')
_geom = _imp('deltri.core.geometry')
_pred = _imp('deltri.core.predicates')
_mesh = _imp('deltri.core.mesh')
_tri = _imp('deltri.core.triangulation')
_conf = _imp('deltri.core.conformity')
_stats = _imp('deltri.core.stats')

from .core.config import TriangulationConfig
from .core.exceptions import (TriangulationError, InsufficientPointsError, InvalidPointsError,
                              PointOutOfBoundsError, DegeneratePredicateError)
from .core.logging_utils import configure_logging, get_logger

# Driver
triangulate = _tri.triangulate
DelaunayTriangulator = _tri.DelaunayTriangulator
Triangulation = _tri.Triangulation

# Geometry and predicates
Point = _geom.Point
distance = _geom.distance
circumcircle_contains = _pred.circumcircle_contains
classify_point = _pred.classify_point
Location = _pred.Location

# Mesh store
TriangleMesh = _mesh.TriangleMesh

# Tolerances
EPS_BARYCENTRIC = _const.EPS_BARYCENTRIC
EPS_INCIRCLE = _const.EPS_INCIRCLE
EPS_DEGENERATE = _const.EPS_DEGENERATE

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
predicates = _pred
mesh = _mesh
triangulation = _tri
conformity = _conf
stats = _stats

__all__ = [
    '__version__',
    # driver
    'triangulate', 'DelaunayTriangulator', 'Triangulation', 'TriangulationConfig',
    # primitives
    'Point', 'distance', 'circumcircle_contains', 'classify_point', 'Location', 'TriangleMesh',
    # tolerances
    'EPS_BARYCENTRIC', 'EPS_INCIRCLE', 'EPS_DEGENERATE',
    # errors
    'TriangulationError', 'InsufficientPointsError', 'InvalidPointsError',
    'PointOutOfBoundsError', 'DegeneratePredicateError',
    # logging
    'configure_logging', 'get_logger',
    # submodules / namespaces
    'constants', 'geometry', 'predicates', 'mesh', 'triangulation', 'conformity', 'stats',
]
