"""Configuration objects for Delaunay construction."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .constants import (EPS_BARYCENTRIC, EPS_INCIRCLE, EPS_DEGENERATE,
                        SUPER_TRIANGLE_MARGIN, MIN_SUPER_TRIANGLE_MARGIN)


@dataclass
class TriangulationConfig:
    """Knobs for one triangulation run.

    Attributes
    ----------
    eps_barycentric : float
        Band used when classifying a point against a triangle (inside / on edge).
    eps_incircle : float
        Relative band inside which a point counts as lying on a circumcircle.
    eps_degenerate : float
        Determinants smaller than this abort the run with a degenerate predicate error.
    super_margin : float
        Bounding-box expansion for the bootstrap triangle, in multiples of the
        box's largest side. Must be at least ``MIN_SUPER_TRIANGLE_MARGIN``.
    flip_repair : bool
        Run Lawson flip repair after every insertion. Disabling it yields a
        valid but not necessarily Delaunay triangulation.
    validate : bool
        Run structural conformity checks on the final mesh.
    log_level : str or int, optional
        If set, passed to ``configure_logging`` at the start of the run.
    """
    eps_barycentric: float = EPS_BARYCENTRIC
    eps_incircle: float = EPS_INCIRCLE
    eps_degenerate: float = EPS_DEGENERATE
    super_margin: float = SUPER_TRIANGLE_MARGIN
    flip_repair: bool = True
    validate: bool = False
    log_level: Optional[Union[str, int]] = None

    def __post_init__(self):
        if self.super_margin < MIN_SUPER_TRIANGLE_MARGIN:
            raise ValueError(
                f"super_margin must be >= {MIN_SUPER_TRIANGLE_MARGIN}, got {self.super_margin}")
        for name in ('eps_barycentric', 'eps_incircle', 'eps_degenerate'):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative")

    def with_overrides(self, **overrides) -> 'TriangulationConfig':
        return replace(self, **overrides)


__all__ = ['TriangulationConfig']
