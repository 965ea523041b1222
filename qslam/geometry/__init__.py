"""2D geometry for relating projected quadrics to detector boxes.

Main components:
    - AlignedBox2: Axis-aligned box with corner-sampling set predicates
    - conic_points_at_x, conic_points_at_y: Conic/line intersections
    - dual_conic, conic_bounds, conic_extreme_points: Bounding box of a conic

Example usage:
    >>> import numpy as np
    >>> from qslam.geometry import AlignedBox2, conic_bounds
    >>>
    >>> # Ellipse (x - 3)^2 / 4 + (y - 2)^2 = 1
    >>> C = np.array([[0.25, 0.0, -0.75],
    ...               [0.0, 1.0, -2.0],
    ...               [-0.75, -2.0, 5.25]])
    >>> projected = conic_bounds(C)
    >>> detected = AlignedBox2(0.5, 0.5, 5.5, 3.5)
    >>> detected.completely_contains(projected)
    True

Author: Mapping Engineer
Date: 2026
"""

from .aligned_box import AlignedBox2
from .conic import (
    SYMMETRY_TOLERANCE,
    conic_bounds,
    conic_extreme_points,
    conic_points_at_x,
    conic_points_at_y,
    dual_conic,
)

__all__ = [
    "AlignedBox2",
    "SYMMETRY_TOLERANCE",
    "conic_points_at_x",
    "conic_points_at_y",
    "dual_conic",
    "conic_bounds",
    "conic_extreme_points",
]
