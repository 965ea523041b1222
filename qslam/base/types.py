"""Type definitions for rigid 3D poses.

Key types:
    - Pose3: SE(3) pose as rotation matrix + translation vector
    - Matrix44: Type alias for 4x4 homogeneous matrices

Tangent-space convention used throughout the package: a perturbation is a
6-vector xi = [omega, v], rotation generators first, then translation.

Author: Mapping Engineer
Date: 2026
"""

from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation


Matrix44 = np.ndarray  # Shape (4, 4), homogeneous [R t; 0 1]


@dataclass(eq=False)
class Pose3:
    """
    SE(3) pose: rotation R (3x3) and translation t (3,).

    The pose maps points from the body frame into the reference frame:
        p_ref = R @ p_body + t

    Attributes:
        rotation: Rotation matrix, shape (3, 3). Must be finite.
        translation: Translation vector, shape (3,). Must be finite.

    Examples:
        >>> p = Pose3.identity()
        >>> p.matrix().shape
        (4, 4)
        >>> q = Pose3(rotation=np.eye(3), translation=np.array([1.0, 2.0, 3.0]))
        >>> q.translation
        array([1., 2., 3.])
    """

    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        """Coerce to float arrays and validate shapes."""
        self.rotation = np.asarray(self.rotation, dtype=np.float64)
        self.translation = np.asarray(self.translation, dtype=np.float64).reshape(-1)

        if self.rotation.shape != (3, 3):
            raise ValueError(
                f"rotation must have shape (3, 3), got {self.rotation.shape}"
            )
        if self.translation.shape != (3,):
            raise ValueError(
                f"translation must have shape (3,), got {self.translation.shape}"
            )
        if not np.all(np.isfinite(self.rotation)):
            raise ValueError("rotation must be finite")
        if not np.all(np.isfinite(self.translation)):
            raise ValueError("translation must be finite")

    @classmethod
    def identity(cls) -> "Pose3":
        """Identity pose (no rotation, origin)."""
        return cls(rotation=np.eye(3), translation=np.zeros(3))

    @classmethod
    def from_matrix(cls, T: np.ndarray) -> "Pose3":
        """
        Create Pose3 from a 4x4 homogeneous matrix.

        Raises:
            ValueError: If T does not have shape (4, 4).
        """
        T = np.asarray(T, dtype=np.float64)
        if T.shape != (4, 4):
            raise ValueError(f"T must have shape (4, 4), got {T.shape}")
        return cls(rotation=T[:3, :3].copy(), translation=T[:3, 3].copy())

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Pose3":
        """
        Create Pose3 from [rx, ry, rz, x, y, z].

        The first three entries are a rotation vector (axis * angle), the
        last three the translation. Note this is NOT the SE(3) exponential
        map; use se3_expmap for tangent vectors.
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (6,):
            raise ValueError(f"Array must have shape (6,), got {arr.shape}")
        R = Rotation.from_rotvec(arr[:3]).as_matrix()
        return cls(rotation=R, translation=arr[3:].copy())

    def to_array(self) -> np.ndarray:
        """Convert to [rx, ry, rz, x, y, z] (rotation vector + translation)."""
        rotvec = Rotation.from_matrix(self.rotation).as_rotvec()
        return np.concatenate([rotvec, self.translation])

    def matrix(self) -> Matrix44:
        """4x4 homogeneous matrix [R t; 0 1]."""
        T = np.eye(4, dtype=np.float64)
        T[:3, :3] = self.rotation
        T[:3, 3] = self.translation
        return T

    def __repr__(self) -> str:
        """Readable string representation."""
        rx, ry, rz, x, y, z = self.to_array()
        return (
            f"Pose3(t=[{x:.4f}, {y:.4f}, {z:.4f}], "
            f"rotvec=[{rx:.4f}, {ry:.4f}, {rz:.4f}])"
        )
