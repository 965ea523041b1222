"""Unit tests for qslam.geometry.conic.

Tests the conic/line intersection queries and the bounding box assembled
from them, using circles and ellipses whose extent is known in closed form.

Author: Mapping Engineer
Date: 2026
"""

import warnings

import numpy as np
import pytest

from qslam.base import ComplexRootError
from qslam.geometry import (
    AlignedBox2,
    conic_bounds,
    conic_extreme_points,
    conic_points_at_x,
    conic_points_at_y,
    dual_conic,
)


def circle(r: float) -> np.ndarray:
    """Point conic of x^2 + y^2 - r^2 = 0."""
    return np.diag([1.0, 1.0, -r * r])


def ellipse(center, a: float, b: float, angle: float = 0.0) -> np.ndarray:
    """Point conic of an ellipse with semi-axes a, b rotated by angle."""
    c, s = np.cos(angle), np.sin(angle)
    H = np.array(
        [
            [c, -s, center[0]],
            [s, c, center[1]],
            [0.0, 0.0, 1.0],
        ]
    )
    H_inv = np.linalg.inv(H)
    C = H_inv.T @ np.diag([1.0 / a**2, 1.0 / b**2, -1.0]) @ H_inv
    return 0.5 * (C + C.T)


def ellipse_samples(center, a, b, angle, n=20000):
    """Dense points on the ellipse boundary, shape (n, 2)."""
    t = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    c, s = np.cos(angle), np.sin(angle)
    local = np.column_stack([a * np.cos(t), b * np.sin(t)])
    R = np.array([[c, -s], [s, c]])
    return local @ R.T + np.asarray(center)


def on_conic(C, point) -> float:
    p = np.append(point, 1.0)
    return p @ C @ p


class TestConicPointsAtX:
    """Test suite for conic_points_at_x."""

    @pytest.mark.parametrize("r", [0.5, 1.0, 3.0, 20.0])
    def test_circle_at_center(self, r):
        """Test the vertical line x=0 meets a circle at y = +-r."""
        r1, r2 = conic_points_at_x(circle(r), 0.0)
        assert np.isclose(r1, r)
        assert np.isclose(r2, -r)

    def test_circle_off_center(self):
        """Test x=3 on a radius-5 circle gives y = +-4."""
        r1, r2 = conic_points_at_x(circle(5.0), 3.0)
        assert np.isclose(r1, 4.0)
        assert np.isclose(r2, -4.0)

    def test_tangent_line(self):
        """Test x=r is tangent: repeated root y = 0."""
        r1, r2 = conic_points_at_x(circle(2.0), 2.0)
        assert r1 == r2 == 0.0

    def test_points_lie_on_rotated_ellipse(self):
        """Test returned (x, y) satisfy p^T C p = 0 for a rotated ellipse."""
        C = ellipse([3.0, 2.0], 2.0, 1.0, 0.5)
        x = 3.4
        for y in conic_points_at_x(C, x):
            assert np.isclose(on_conic(C, [x, y]), 0.0, atol=1e-9)

    def test_line_misses_conic(self):
        """Test x beyond the radius raises ComplexRootError."""
        with pytest.raises(ComplexRootError):
            conic_points_at_x(circle(1.0), 1.5)

    def test_invalid_shape(self):
        """Test a 2x2 matrix raises ValueError."""
        with pytest.raises(ValueError, match="must have shape \\(3, 3\\)"):
            conic_points_at_x(np.eye(2), 0.0)

    def test_non_symmetric_warns(self):
        """Test an asymmetric conic triggers a RuntimeWarning but still solves."""
        C = circle(1.0)
        C[1, 0] = 0.3  # lower triangle is ignored by the formulas
        with pytest.warns(RuntimeWarning, match="not symmetric"):
            r1, r2 = conic_points_at_x(C, 0.0)
        assert np.isclose(r1, 1.0)
        assert np.isclose(r2, -1.0)


class TestConicPointsAtY:
    """Test suite for conic_points_at_y."""

    @pytest.mark.parametrize("r", [0.5, 1.0, 3.0, 20.0])
    def test_circle_at_center(self, r):
        """Test the horizontal line y=0 meets a circle at x = +-r."""
        r1, r2 = conic_points_at_y(circle(r), 0.0)
        assert np.isclose(r1, r)
        assert np.isclose(r2, -r)

    def test_translated_ellipse(self):
        """Test y=2 through the center of (x-3)^2/4 + (y-2)^2 = 1 gives x = 5, 1."""
        r1, r2 = conic_points_at_y(ellipse([3.0, 2.0], 2.0, 1.0), 2.0)
        assert np.isclose(r1, 5.0)
        assert np.isclose(r2, 1.0)

    def test_points_lie_on_rotated_ellipse(self):
        C = ellipse([3.0, 2.0], 2.0, 1.0, 0.5)
        y = 1.7
        for x in conic_points_at_y(C, y):
            assert np.isclose(on_conic(C, [x, y]), 0.0, atol=1e-9)

    def test_line_misses_conic(self):
        with pytest.raises(ComplexRootError):
            conic_points_at_y(circle(1.0), -2.0)

    def test_tolerance_forwarded(self):
        """Test a near-miss is accepted once tol is widened."""
        # y = 1 + 1e-7 misses the unit circle by disc = -4(2e-7 + 1e-14)
        with pytest.raises(ComplexRootError):
            conic_points_at_y(circle(1.0), 1.0 + 1e-7)

        r1, r2 = conic_points_at_y(circle(1.0), 1.0 + 1e-7, tol=1e-5)
        assert r1 == r2 == 0.0


class TestDualConic:
    """Test suite for dual_conic."""

    def test_circle(self):
        """Test the dual of a radius-r circle is diag(-r^2, -r^2, 1)."""
        np.testing.assert_allclose(dual_conic(circle(2.0)), np.diag([-4.0, -4.0, 1.0]))

    def test_tangent_lines(self):
        """Test the box edges of a known ellipse satisfy l^T D l = 0."""
        D = dual_conic(ellipse([3.0, 2.0], 2.0, 1.0))
        for line in AlignedBox2(1.0, 1.0, 5.0, 3.0).lines():
            assert np.isclose(line @ D @ line, 0.0, atol=1e-9)

    def test_degenerate_conic_raises(self):
        """Test a singular conic cannot be dualised."""
        with pytest.raises(np.linalg.LinAlgError):
            dual_conic(np.diag([1.0, 1.0, 0.0]))


class TestConicBounds:
    """Test suite for conic_bounds."""

    def test_unit_circle(self):
        box = conic_bounds(circle(1.0))
        assert box.equals(AlignedBox2(-1.0, -1.0, 1.0, 1.0), tol=1e-12)

    def test_axis_aligned_ellipse(self):
        """Test (x-3)^2/4 + (y-2)^2 = 1 is bounded by [1, 5] x [1, 3]."""
        box = conic_bounds(ellipse([3.0, 2.0], 2.0, 1.0))
        assert box.equals(AlignedBox2(1.0, 1.0, 5.0, 3.0), tol=1e-9)

    def test_bounds_are_ordered(self):
        """Test min <= max regardless of root order."""
        box = conic_bounds(ellipse([-4.0, 7.0], 3.0, 0.5, 1.1))
        assert box.xmin <= box.xmax
        assert box.ymin <= box.ymax

    def test_scale_invariant(self):
        """Test scaling the conic matrix does not change its bounds."""
        C = ellipse([3.0, 2.0], 2.0, 1.0, 0.5)
        assert conic_bounds(C).equals(conic_bounds(-7.5 * C), tol=1e-9)

    @pytest.mark.parametrize(
        "center, a, b, angle",
        [
            ([3.0, 2.0], 2.0, 1.0, 0.5),
            ([-4.0, 7.0], 3.0, 0.5, 1.1),
            ([320.0, 240.0], 40.0, 15.0, -0.3),
        ],
    )
    def test_rotated_ellipse_matches_samples(self, center, a, b, angle):
        """Test the box matches the extent of densely sampled boundary points."""
        box = conic_bounds(ellipse(center, a, b, angle))
        pts = ellipse_samples(center, a, b, angle)

        expected = np.array(
            [pts[:, 0].min(), pts[:, 1].min(), pts[:, 0].max(), pts[:, 1].max()]
        )
        np.testing.assert_allclose(box.to_array(), expected, atol=1e-5 * max(a, b))

        # Every sampled point is inside the box
        assert np.all(pts[:, 0] >= box.xmin - 1e-6)
        assert np.all(pts[:, 0] <= box.xmax + 1e-6)
        assert np.all(pts[:, 1] >= box.ymin - 1e-6)
        assert np.all(pts[:, 1] <= box.ymax + 1e-6)

    def test_imaginary_ellipse_raises(self):
        """Test x^2 + y^2 + 1 = 0 has no real extent."""
        with pytest.raises(ComplexRootError):
            conic_bounds(np.diag([1.0, 1.0, 1.0]))

    def test_projected_box_association(self):
        """Test a conic box against detector boxes with the box predicates."""
        projected = conic_bounds(ellipse([3.0, 2.0], 2.0, 1.0))

        assert AlignedBox2(0.5, 0.5, 5.5, 3.5).completely_contains(projected)
        assert AlignedBox2(4.0, 2.5, 8.0, 6.0).intersects(projected)
        assert not AlignedBox2(10.0, 10.0, 12.0, 12.0).contains(projected)


class TestConicExtremePoints:
    """Test suite for conic_extreme_points."""

    def test_circle(self):
        """Test the tangent points of a circle are the four compass points."""
        pts = conic_extreme_points(circle(2.0))
        expected = np.array([[-2.0, 0.0], [0.0, -2.0], [2.0, 0.0], [0.0, 2.0]])
        np.testing.assert_allclose(pts, expected, atol=1e-12)

    def test_rotated_ellipse(self):
        """Test each tangent point is on the conic and on its box edge."""
        C = ellipse([3.0, 2.0], 2.0, 1.0, 0.5)
        box = conic_bounds(C)
        pts = conic_extreme_points(C)

        assert pts.shape == (4, 2)
        for p in pts:
            assert np.isclose(on_conic(C, p), 0.0, atol=1e-8)

        left, top, right, bottom = pts
        assert left[0] == box.xmin
        assert top[1] == box.ymin
        assert right[0] == box.xmax
        assert bottom[1] == box.ymax

    def test_tangent_points_are_extreme(self):
        """Test the tangent points agree with the sampled extremes."""
        center, a, b, angle = [3.0, 2.0], 2.0, 1.0, 0.5
        pts = conic_extreme_points(ellipse(center, a, b, angle))
        samples = ellipse_samples(center, a, b, angle)

        np.testing.assert_allclose(pts[0], samples[np.argmin(samples[:, 0])], atol=1e-3)
        np.testing.assert_allclose(pts[1], samples[np.argmin(samples[:, 1])], atol=1e-3)
        np.testing.assert_allclose(pts[2], samples[np.argmax(samples[:, 0])], atol=1e-3)
        np.testing.assert_allclose(pts[3], samples[np.argmax(samples[:, 1])], atol=1e-3)

    @pytest.mark.parametrize("scale", [1e4, 1e6, -1e6, 1e-3])
    @pytest.mark.parametrize(
        "center, a, b, angle",
        [
            ([3.0, 2.0], 2.0, 1.0, 0.5),
            ([-4.0, 7.0], 3.0, 0.5, 1.1),
            ([320.0, 240.0], 40.0, 15.0, -0.3),
        ],
    )
    def test_scale_invariant(self, scale, center, a, b, angle):
        """Test scaling the conic matrix does not change its tangent points."""
        C = ellipse(center, a, b, angle)
        expected = conic_extreme_points(C)
        pts = conic_extreme_points(scale * C)

        np.testing.assert_allclose(pts, expected, rtol=1e-9, atol=1e-6)
        C_unit = C / np.max(np.abs(C))
        for p in pts:
            assert np.isclose(on_conic(C_unit, p), 0.0, atol=1e-8)

    def test_non_symmetric_warns_once(self):
        """Test an asymmetric conic is checked once, not once per query."""
        C = circle(2.0)
        C[1, 0] = 1e-6
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            pts = conic_extreme_points(C)

        runtime = [w for w in caught if issubclass(w.category, RuntimeWarning)]
        assert len(runtime) == 1
        assert "not symmetric" in str(runtime[0].message)

        expected = np.array([[-2.0, 0.0], [0.0, -2.0], [2.0, 0.0], [0.0, 2.0]])
        np.testing.assert_allclose(pts, expected, atol=1e-12)
