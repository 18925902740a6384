"""Errors raised by the triangulation engine.

All of them are terminal for the current call: no partial mesh is returned.
"""
from __future__ import annotations


class TriangulationError(Exception):
    """Base class for triangulation failures."""


class InsufficientPointsError(TriangulationError, ValueError):
    """Fewer than three input points."""


class InvalidPointsError(TriangulationError, ValueError):
    """Input is not an (N, 2) array of finite coordinates."""


class PointOutOfBoundsError(TriangulationError):
    """No live triangle contains the point being inserted."""

    def __init__(self, point, message=None):
        self.point = point
        super().__init__(message or f"point out of bounds: {tuple(point)}")


class DegeneratePredicateError(TriangulationError, ArithmeticError):
    """A predicate determinant fell below the degeneracy tolerance."""


__all__ = [
    'TriangulationError',
    'InsufficientPointsError',
    'InvalidPointsError',
    'PointOutOfBoundsError',
    'DegeneratePredicateError',
]
