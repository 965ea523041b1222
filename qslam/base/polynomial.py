"""Quadratic polynomial solver used by the conic extremum queries.

Every conic query in this package reduces to a quadratic in one coordinate
once the other coordinate is held fixed. This module solves that quadratic
and reports the no-real-root case explicitly.

Key objects:
    - solve_polynomial: Roots of a*x^2 + b*x + c = 0, raises on complex roots
    - try_solve_polynomial: Same solver, returning a result value instead
    - RootPair: (root1, root2) named tuple
    - ComplexRootError: Raised when the discriminant is negative

Numerical Policy:
    Upstream conics come out of matrix inversions. For tangent lines the
    discriminant should be exactly zero, but in practice lands around
    +-1e-20 for point-conic results and as far out as +-1e-5 for results
    routed through the dual conic. Discriminants with magnitude below
    DISCRIMINANT_ZERO_TOLERANCE are therefore snapped to zero.

Author: Mapping Engineer
Date: 2026
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np


# Snap-to-zero threshold for the discriminant (see module docstring)
DISCRIMINANT_ZERO_TOLERANCE = 1e-10


class RootPair(NamedTuple):
    """Two real roots of a quadratic.

    root1 is computed with +sqrt(disc) and root2 with -sqrt(disc). For
    a < 0 this means root1 <= root2, so callers needing min/max must sort.
    """

    root1: float
    root2: float


class ComplexRootError(ValueError):
    """The quadratic has no real roots.

    In conic terms: the line at the queried coordinate does not meet the
    conic.

    Attributes:
        a, b, c: Polynomial coefficients that were solved.
        discriminant: b^2 - 4ac after snapping (strictly negative).
    """

    def __init__(self, a: float, b: float, c: float, discriminant: float):
        self.a = a
        self.b = b
        self.c = c
        self.discriminant = discriminant
        super().__init__(
            f"complex roots: discriminant {discriminant:.3e} < 0 "
            f"for a={a}, b={b}, c={c}"
        )


@dataclass(frozen=True)
class QuadraticSolution:
    """Outcome of try_solve_polynomial: either roots or the error."""

    roots: Optional[RootPair] = None
    error: Optional[ComplexRootError] = None

    @property
    def ok(self) -> bool:
        return self.roots is not None


def solve_polynomial(
    a: float,
    b: float,
    c: float,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> RootPair:
    """
    Solve a*x^2 + b*x + c = 0 for its two real roots.

    Args:
        a: Quadratic coefficient, must be non-zero.
        b: Linear coefficient.
        c: Constant term.
        tol: Discriminants with |disc| < tol are treated as exactly zero.

    Returns:
        RootPair (root1, root2) = ((-b + sqrt(disc)) / 2a, (-b - sqrt(disc)) / 2a).

    Raises:
        ComplexRootError: If the discriminant is negative after snapping.
        ValueError: If a == 0 (the equation is not quadratic).

    Examples:
        >>> solve_polynomial(1.0, 0.0, -4.0)
        RootPair(root1=2.0, root2=-2.0)
        >>> solve_polynomial(1.0, -2.0, 1.0)  # repeated root
        RootPair(root1=1.0, root2=1.0)
    """
    if a == 0:
        raise ValueError(
            f"Leading coefficient a must be non-zero, got a={a} (b={b}, c={c})"
        )

    disc = b * b - 4.0 * a * c

    # Round away inversion noise around tangency
    if abs(disc) < tol:
        disc = 0.0

    if disc < 0.0:
        raise ComplexRootError(a, b, c, disc)

    sqrt_disc = np.sqrt(disc)
    root1 = (-b + sqrt_disc) / (2.0 * a)
    root2 = (-b - sqrt_disc) / (2.0 * a)
    return RootPair(float(root1), float(root2))


def try_solve_polynomial(
    a: float,
    b: float,
    c: float,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> QuadraticSolution:
    """
    Result-returning form of solve_polynomial.

    Useful when "no intersection along this axis" is an expected outcome,
    e.g. when sweeping query coordinates across a conic.

    Raises:
        ValueError: If a == 0. Only the complex-root case is turned into a value.

    Example:
        >>> sol = try_solve_polynomial(1.0, 0.0, 1.0)
        >>> sol.ok
        False
        >>> sol.error.discriminant
        -4.0
    """
    try:
        return QuadraticSolution(roots=solve_polynomial(a, b, c, tol=tol))
    except ComplexRootError as err:
        return QuadraticSolution(error=err)
