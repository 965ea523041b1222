"""Axis-aligned 2D bounding box used for data association.

Projected quadrics are summarised by the tightest axis-aligned box around
their conic and compared against detector boxes with the predicates below.

Corner-sampling predicates:
    overlaps_corner, completely_contains and intersects only test whether
    other's min corner (xmin, ymin) and max corner (xmax, ymax) fall inside
    this box. That is exact for full containment but only an approximation
    of overlap: a box strictly inside other, or a cross-shaped overlap, has
    neither of other's corners inside and is reported as not intersecting.
    Association code downstream is tuned to this behaviour.

Author: Mapping Engineer
Date: 2026
"""

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True)
class AlignedBox2:
    """
    Axis-aligned box stored as (xmin, ymin, xmax, ymax).

    Values are stored verbatim: no check that xmin <= xmax or ymin <= ymax,
    and no reordering. An inverted box is representable; it simply contains
    no points.

    Attributes:
        xmin: Left edge (pixels).
        ymin: Top edge (pixels, image y grows downwards).
        xmax: Right edge (pixels).
        ymax: Bottom edge (pixels).

    Examples:
        >>> box = AlignedBox2(0.0, 0.0, 10.0, 10.0)
        >>> box.contains(np.array([5.0, 5.0]))
        True
        >>> box.width, box.height
        (10.0, 10.0)
        >>> AlignedBox2.from_array(np.array([1, 2, 3, 4])).to_array()
        array([1., 2., 3., 4.])
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        for name in ("xmin", "ymin", "xmax", "ymax"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def from_array(cls, tlbr: np.ndarray) -> "AlignedBox2":
        """
        Create a box from a 4-vector [xmin, ymin, xmax, ymax].

        Raises:
            ValueError: If tlbr does not have exactly 4 elements.
        """
        tlbr = np.asarray(tlbr, dtype=np.float64).reshape(-1)
        if tlbr.shape != (4,):
            raise ValueError(f"tlbr must have shape (4,), got {tlbr.shape}")
        return cls(*tlbr)

    def to_array(self) -> np.ndarray:
        """Return [xmin, ymin, xmax, ymax] exactly as stored."""
        return np.array([self.xmin, self.ymin, self.xmax, self.ymax], dtype=np.float64)

    @property
    def min_point(self) -> np.ndarray:
        return np.array([self.xmin, self.ymin], dtype=np.float64)

    @property
    def max_point(self) -> np.ndarray:
        return np.array([self.xmax, self.ymax], dtype=np.float64)

    @property
    def center(self) -> np.ndarray:
        return 0.5 * (self.min_point + self.max_point)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def lines(self) -> np.ndarray:
        """
        Box edges as homogeneous lines (a, b, c) with a*x + b*y + c = 0.

        Returns:
            Array of shape (4, 3), rows in the order
            x = xmin, y = ymin, x = xmax, y = ymax.
        """
        return np.array(
            [
                [1.0, 0.0, -self.xmin],
                [0.0, 1.0, -self.ymin],
                [1.0, 0.0, -self.xmax],
                [0.0, 1.0, -self.ymax],
            ],
            dtype=np.float64,
        )

    def _contains_point(self, point: np.ndarray) -> bool:
        point = np.asarray(point, dtype=np.float64).reshape(-1)
        if point.shape != (2,):
            raise ValueError(f"point must have shape (2,), got {point.shape}")
        x, y = point
        return bool(self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax)

    def _corners_inside(self, other: "AlignedBox2") -> int:
        return int(self._contains_point(other.min_point)) + int(
            self._contains_point(other.max_point)
        )

    def contains(self, item: Union[np.ndarray, "AlignedBox2"]) -> bool:
        """
        Point or box containment.

        For a point (x, y): True iff xmin <= x <= xmax and ymin <= y <= ymax.

        For a box this is the weak, corner-sampling test and is identical to
        overlaps_corner: True if either of other's corners is inside. Use
        completely_contains for full containment.

        Raises:
            ValueError: If a point does not have shape (2,).
        """
        if isinstance(item, AlignedBox2):
            return self.overlaps_corner(item)
        return self._contains_point(item)

    def overlaps_corner(self, other: "AlignedBox2") -> bool:
        """True if at least one of other's min/max corners lies in this box."""
        return self._corners_inside(other) > 0

    def completely_contains(self, other: "AlignedBox2") -> bool:
        """True if both of other's corners, hence all of other, lie in this box."""
        return self._corners_inside(other) == 2

    def intersects(self, other: "AlignedBox2") -> bool:
        """
        True if exactly one of other's min/max corners lies in this box.

        This is the two-corner approximation described in the module
        docstring. It returns False when other is completely contained and
        when the boxes overlap without either sampled corner inside.

        Examples:
            >>> a = AlignedBox2(0, 0, 10, 10)
            >>> a.intersects(AlignedBox2(5, 5, 15, 15))
            True
            >>> AlignedBox2(-5, -5, 15, 15).intersects(a)
            False
        """
        return self._corners_inside(other) == 1

    def equals(self, other: "AlignedBox2", tol: float = 1e-9) -> bool:
        """
        Approximate equality: max |self_i - other_i| <= tol over the four values.
        """
        return bool(np.max(np.abs(self.to_array() - other.to_array())) <= tol)

    def __repr__(self) -> str:
        """Readable string representation."""
        return (
            f"AlignedBox2(xmin={self.xmin:.4f}, ymin={self.ymin:.4f}, "
            f"xmax={self.xmax:.4f}, ymax={self.ymax:.4f})"
        )
