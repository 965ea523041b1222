"""Numeric building blocks: polynomial solver, SE(3) poses, matrix kernels.

Main components:
    - solve_polynomial, try_solve_polynomial: Real roots of a quadratic
    - Pose3: Rigid 3D transform (rotation matrix + translation)
    - se3_compose, se3_inverse, se3_expmap, se3_logmap, interpolate: SE(3) ops
    - pose_matrix: 4x4 pose matrix and its 16x6 tangent-space Jacobian
    - kron, tvec, vec, unvec: Vectorisation kernels for Jacobian chains

Author: Mapping Engineer
Date: 2026
"""

from .matrices import kron, pose_matrix, tvec, unvec, vec
from .polynomial import (
    DISCRIMINANT_ZERO_TOLERANCE,
    ComplexRootError,
    QuadraticSolution,
    RootPair,
    solve_polynomial,
    try_solve_polynomial,
)
from .se3 import (
    interpolate,
    se3_between,
    se3_compose,
    se3_expmap,
    se3_inverse,
    se3_logmap,
    se3_retract,
    skew,
    so3_expmap,
    so3_logmap,
)
from .types import Matrix44, Pose3

__all__ = [
    # Polynomial solver
    "DISCRIMINANT_ZERO_TOLERANCE",
    "ComplexRootError",
    "QuadraticSolution",
    "RootPair",
    "solve_polynomial",
    "try_solve_polynomial",
    # Types
    "Pose3",
    "Matrix44",
    # SE(3) operations
    "skew",
    "so3_expmap",
    "so3_logmap",
    "se3_expmap",
    "se3_logmap",
    "se3_compose",
    "se3_inverse",
    "se3_between",
    "se3_retract",
    "interpolate",
    # Matrix kernels
    "pose_matrix",
    "kron",
    "tvec",
    "vec",
    "unvec",
]
