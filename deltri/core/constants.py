"""Central numerical tolerances and bootstrap constants.

Every predicate and classification threshold lives here so they can be tuned
consistently and referenced without scattering literals through the engine.
"""
from __future__ import annotations

# Predicate tolerances
EPS_BARYCENTRIC: float = 1e-10    # band around 0 / 1 for parametric point classification
EPS_INCIRCLE: float = 1e-12       # relative band treated as "on the circumcircle"
EPS_DEGENERATE: float = 1e-14     # minimum |determinant| for a well-posed predicate

# Bootstrap triangle: expansion of the bounding box, in units of its largest side
SUPER_TRIANGLE_MARGIN: float = 100.0
MIN_SUPER_TRIANGLE_MARGIN: float = 0.5

# Number of bootstrap vertices stripped after construction
N_BOOTSTRAP_VERTICES: int = 3

__all__ = [
    'EPS_BARYCENTRIC',
    'EPS_INCIRCLE',
    'EPS_DEGENERATE',
    'SUPER_TRIANGLE_MARGIN',
    'MIN_SUPER_TRIANGLE_MARGIN',
    'N_BOOTSTRAP_VERTICES',
]
