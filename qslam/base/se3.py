"""SE(3) operations (Special Euclidean Group in 3D).

This module implements the Lie-group helpers needed around the pose-matrix
Jacobian: composing and inverting poses, the exponential and logarithm maps,
and geodesic interpolation between two poses.

Key functions:
    - se3_compose: Compose two poses (p1 * p2)
    - se3_inverse: Invert a pose (p^-1)
    - se3_between: Relative pose p1^-1 * p2
    - se3_expmap / se3_logmap: Tangent vector <-> pose
    - se3_retract: Right perturbation p * Exp(xi)
    - interpolate: Geodesic interpolation between two poses

Tangent vectors are 6-vectors xi = [omega, v] (rotation first), matching the
column order of the Jacobian returned by qslam.base.matrices.pose_matrix.

Poses may be passed as Pose3 instances or as 4x4 homogeneous arrays; results
are always Pose3.

References:
    - Barfoot (2017): State Estimation for Robotics, Section 7.1
    - Sola et al. (2018): A micro Lie theory for state estimation

Author: Mapping Engineer
Date: 2026
"""

from typing import Union

import numpy as np
from scipy.spatial.transform import Rotation

from .types import Pose3


# Below this angle the closed-form left Jacobian switches to its Taylor series
ROTATION_EPSILON = 1e-10

PoseLike = Union[Pose3, np.ndarray]


def _as_pose(p: PoseLike) -> Pose3:
    if isinstance(p, Pose3):
        return p
    return Pose3.from_matrix(p)


def skew(v: np.ndarray) -> np.ndarray:
    """
    Skew-symmetric matrix of a 3-vector (hat operator).

    skew(a) @ b == np.cross(a, b)

    Raises:
        ValueError: If v does not have 3 elements.
    """
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    if v.shape != (3,):
        raise ValueError(f"v must have shape (3,), got {v.shape}")
    return np.array(
        [
            [0.0, -v[2], v[1]],
            [v[2], 0.0, -v[0]],
            [-v[1], v[0], 0.0],
        ],
        dtype=np.float64,
    )


def so3_expmap(omega: np.ndarray) -> np.ndarray:
    """Rotation vector -> rotation matrix (Rodrigues)."""
    omega = np.asarray(omega, dtype=np.float64).reshape(-1)
    if omega.shape != (3,):
        raise ValueError(f"omega must have shape (3,), got {omega.shape}")
    return Rotation.from_rotvec(omega).as_matrix()


def so3_logmap(R: np.ndarray) -> np.ndarray:
    """Rotation matrix -> rotation vector, angle in [0, pi]."""
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        raise ValueError(f"R must have shape (3, 3), got {R.shape}")
    return Rotation.from_matrix(R).as_rotvec()


def _so3_left_jacobian(omega: np.ndarray) -> np.ndarray:
    """
    Left Jacobian V of SO(3), relating the translational tangent part to
    the pose translation: t = V(omega) @ v.

        V = I + (1 - cos th)/th^2 K + (th - sin th)/th^3 K^2,   K = skew(omega)
    """
    theta = np.linalg.norm(omega)
    K = skew(omega)

    if theta < ROTATION_EPSILON:
        # Second-order Taylor expansion
        return np.eye(3) + 0.5 * K + (K @ K) / 6.0

    theta2 = theta * theta
    A = (1.0 - np.cos(theta)) / theta2
    B = (theta - np.sin(theta)) / (theta2 * theta)
    return np.eye(3) + A * K + B * (K @ K)


def se3_expmap(xi: np.ndarray) -> Pose3:
    """
    Exponential map: tangent vector [omega, v] -> Pose3.

    Args:
        xi: Tangent vector of shape (6,), rotation part first.

    Returns:
        Pose3 with R = exp(skew(omega)) and t = V(omega) @ v.

    Examples:
        >>> p = se3_expmap(np.array([0, 0, 0, 1.0, 2.0, 3.0]))
        >>> np.allclose(p.translation, [1, 2, 3])
        True
    """
    xi = np.asarray(xi, dtype=np.float64).reshape(-1)
    if xi.shape != (6,):
        raise ValueError(f"xi must have shape (6,), got {xi.shape}")

    omega, v = xi[:3], xi[3:]
    R = so3_expmap(omega)
    t = _so3_left_jacobian(omega) @ v
    return Pose3(rotation=R, translation=t)


def se3_logmap(p: PoseLike) -> np.ndarray:
    """
    Logarithm map: Pose3 -> tangent vector [omega, v].

    Inverse of se3_expmap for rotation angles below pi.
    """
    p = _as_pose(p)
    omega = so3_logmap(p.rotation)
    v = np.linalg.solve(_so3_left_jacobian(omega), p.translation)
    return np.concatenate([omega, v])


def se3_compose(p1: PoseLike, p2: PoseLike) -> Pose3:
    """
    Compose two poses: p1 * p2.

        R = R1 @ R2
        t = R1 @ t2 + t1
    """
    p1 = _as_pose(p1)
    p2 = _as_pose(p2)
    return Pose3(
        rotation=p1.rotation @ p2.rotation,
        translation=p1.rotation @ p2.translation + p1.translation,
    )


def se3_inverse(p: PoseLike) -> Pose3:
    """Invert a pose: (R, t)^-1 = (R^T, -R^T t)."""
    p = _as_pose(p)
    R_inv = p.rotation.T
    return Pose3(rotation=R_inv, translation=-R_inv @ p.translation)


def se3_between(p1: PoseLike, p2: PoseLike) -> Pose3:
    """Relative pose from p1 to p2: p1^-1 * p2."""
    return se3_compose(se3_inverse(p1), p2)


def se3_retract(p: PoseLike, xi: np.ndarray) -> Pose3:
    """
    Apply a right (body-frame) perturbation: p * Exp(xi).

    This is the perturbation the pose-matrix Jacobian is taken with respect
    to.
    """
    return se3_compose(p, se3_expmap(xi))


def interpolate(p1: PoseLike, p2: PoseLike, percent: float) -> Pose3:
    """
    Interpolate along the SE(3) geodesic between two poses.

        p(s) = p1 * Exp(s * Log(p1^-1 * p2))

    Rotation and translation are interpolated jointly (screw motion), so the
    intermediate poses are not the same as interpolating the translation
    linearly.

    Args:
        p1: Start pose (returned for percent = 0).
        p2: End pose (returned for percent = 1).
        percent: Interpolation fraction. Values outside [0, 1] extrapolate.

    Returns:
        Interpolated Pose3.

    Examples:
        >>> a = Pose3.identity()
        >>> b = se3_expmap(np.array([0, 0, np.pi / 2, 2.0, 0, 0]))
        >>> mid = interpolate(a, b, 0.5)
        >>> np.allclose(so3_logmap(mid.rotation), [0, 0, np.pi / 4])
        True
    """
    p1 = _as_pose(p1)
    delta = se3_logmap(se3_between(p1, p2))
    return se3_retract(p1, percent * delta)
