"""Conic extremum queries and conic bounding boxes.

A point conic is a symmetric 3x3 matrix C; a point p = (x, y, 1) lies on the
conic when p^T C p = 0, i.e.

    C00 x^2 + 2 C01 xy + 2 C02 x + C11 y^2 + 2 C12 y + C22 = 0

Holding one coordinate fixed turns this into a quadratic in the other, which
is solved with qslam.base.polynomial.solve_polynomial.

Key functions:
    - conic_points_at_x: y values where the vertical line x = const meets C
    - conic_points_at_y: x values where the horizontal line y = const meets C
    - dual_conic: Line conic D ~ C^-1 (tangent lines l satisfy l^T D l = 0)
    - conic_bounds: Tightest AlignedBox2 around an ellipse
    - conic_extreme_points: The four tangent points that touch the box

Conics that are not symmetric are used as given but trigger a
RuntimeWarning: only the upper triangle enters the formulas above.

Author: Mapping Engineer
Date: 2026
"""

import warnings

import numpy as np

from ..base.polynomial import DISCRIMINANT_ZERO_TOLERANCE, RootPair, solve_polynomial
from .aligned_box import AlignedBox2


# Largest |C - C^T| entry accepted without a warning
SYMMETRY_TOLERANCE = 1e-9


def _as_conic(conic: np.ndarray) -> np.ndarray:
    C = np.asarray(conic, dtype=np.float64)
    if C.shape != (3, 3):
        raise ValueError(f"conic must have shape (3, 3), got {C.shape}")

    asymmetry = np.max(np.abs(C - C.T))
    if asymmetry > SYMMETRY_TOLERANCE:
        warnings.warn(
            f"Conic is not symmetric (max |C - C^T| = {asymmetry:.3e}). "
            "Using the upper triangle; results may be meaningless.",
            RuntimeWarning,
        )
    return C


# The helpers below expect a conic already checked by _as_conic


def _points_at_x(C: np.ndarray, x: float, tol: float) -> RootPair:
    return solve_polynomial(
        C[1, 1],
        2.0 * C[0, 1] * x + 2.0 * C[1, 2],
        C[0, 0] * x * x + 2.0 * C[0, 2] * x + C[2, 2],
        tol=tol,
    )


def _points_at_y(C: np.ndarray, y: float, tol: float) -> RootPair:
    return solve_polynomial(
        C[0, 0],
        2.0 * C[0, 1] * y + 2.0 * C[0, 2],
        C[1, 1] * y * y + 2.0 * C[1, 2] * y + C[2, 2],
        tol=tol,
    )


def _dual(C: np.ndarray) -> np.ndarray:
    D = np.linalg.inv(C)
    if D[2, 2] != 0.0:
        D = D / D[2, 2]
    return D


def _bounds(C: np.ndarray, tol: float) -> AlignedBox2:
    D = _dual(C)

    x_roots = solve_polynomial(D[2, 2], -2.0 * D[0, 2], D[0, 0], tol=tol)
    y_roots = solve_polynomial(D[2, 2], -2.0 * D[1, 2], D[1, 1], tol=tol)

    return AlignedBox2(
        xmin=min(x_roots),
        ymin=min(y_roots),
        xmax=max(x_roots),
        ymax=max(y_roots),
    )


def conic_points_at_x(
    conic: np.ndarray,
    x: float,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> RootPair:
    """
    Solve the conic for y along the vertical line at x.

    Substituting x into the conic equation gives

        C11 y^2 + (2 C01 x + 2 C12) y + (C00 x^2 + 2 C02 x + C22) = 0

    Args:
        conic: Point conic, shape (3, 3), symmetric.
        x: Fixed x coordinate.
        tol: Discriminant snap-to-zero threshold, see solve_polynomial.

    Returns:
        RootPair of y values. At a vertical tangent both roots coincide.

    Raises:
        ComplexRootError: If the line x = const misses the conic.
        ValueError: If conic is not 3x3 or C11 == 0.

    Examples:
        >>> C = np.diag([1.0, 1.0, -4.0])  # circle of radius 2
        >>> conic_points_at_x(C, 0.0)
        RootPair(root1=2.0, root2=-2.0)
    """
    return _points_at_x(_as_conic(conic), x, tol)


def conic_points_at_y(
    conic: np.ndarray,
    y: float,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> RootPair:
    """
    Solve the conic for x along the horizontal line at y.

    Substituting y into the conic equation gives

        C00 x^2 + (2 C01 y + 2 C02) x + (C11 y^2 + 2 C12 y + C22) = 0

    Raises:
        ComplexRootError: If the line y = const misses the conic.
        ValueError: If conic is not 3x3 or C00 == 0.
    """
    return _points_at_y(_as_conic(conic), y, tol)


def dual_conic(conic: np.ndarray) -> np.ndarray:
    """
    Dual (line) conic of a non-degenerate point conic.

    D is proportional to C^-1 and scaled so that D[2, 2] == 1 whenever
    D[2, 2] != 0. A line l = (a, b, c) is tangent to the conic iff
    l^T D l = 0.

    Raises:
        numpy.linalg.LinAlgError: If the conic is degenerate (singular).
    """
    return _dual(_as_conic(conic))


def conic_bounds(
    conic: np.ndarray,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> AlignedBox2:
    """
    Tightest axis-aligned box around an ellipse.

    The vertical line x = k, i.e. l = (1, 0, -k), is tangent when

        D22 k^2 - 2 D02 k + D00 = 0

    and likewise y = k when D22 k^2 - 2 D12 k + D11 = 0. The two roots of each
    quadratic are the box edges along that axis.

    Args:
        conic: Point conic of an ellipse, shape (3, 3).
        tol: Discriminant snap-to-zero threshold.

    Returns:
        AlignedBox2 with xmin <= xmax and ymin <= ymax.

    Raises:
        ComplexRootError: If the conic has no real extent along an axis.
        ValueError: If the conic is unbounded along an axis (D22 == 0).

    Examples:
        >>> C = np.diag([1.0, 1.0, -1.0])
        >>> conic_bounds(C).to_array()
        array([-1., -1.,  1.,  1.])
    """
    return _bounds(_as_conic(conic), tol)


def conic_extreme_points(
    conic: np.ndarray,
    tol: float = DISCRIMINANT_ZERO_TOLERANCE,
) -> np.ndarray:
    """
    The four points where the conic touches its bounding box.

    Queries the conic at each box edge. On a tangent line the two roots
    coincide (up to the snapped discriminant), and their mean is taken as
    the tangent coordinate.

    The conic is divided by its largest absolute entry before the edge
    queries. A conic is only defined up to scale, but the rounding error in
    the edge discriminants grows with the square of that scale, so the
    queries are made on the unit-scale representative.

    Returns:
        Array of shape (4, 2): [left (x=xmin), top (y=ymin), right (x=xmax),
        bottom (y=ymax)].

    Raises:
        ComplexRootError: If an edge does not touch the conic within tol.
    """
    C = _as_conic(conic)
    box = _bounds(C, tol)

    C = C / np.max(np.abs(C))
    left = np.mean(_points_at_x(C, box.xmin, tol))
    right = np.mean(_points_at_x(C, box.xmax, tol))
    top = np.mean(_points_at_y(C, box.ymin, tol))
    bottom = np.mean(_points_at_y(C, box.ymax, tol))

    return np.array(
        [
            [box.xmin, left],
            [top, box.ymin],
            [box.xmax, right],
            [bottom, box.ymax],
        ],
        dtype=np.float64,
    )
