"""Dense matrix kernels for Jacobian chain-rule assembly.

Derivatives of quadric projections are assembled by chaining derivatives of
matrix-valued functions. Working with column-major vectorisations, the
chain rule needs three small kernels:

    - pose_matrix: 4x4 matrix of a pose and d vec(T) / d xi (16x6)
    - kron: Kronecker product, d vec(A X B) / d vec(X) = kron(B^T, A)
    - tvec: commutation matrix, tvec(m, n) @ vec(M) = vec(M^T)

plus vec / unvec to move between matrices and their vectorisations.

All vectorisations here are column-major (Fortran order), i.e. vec stacks
the columns of a matrix.

Author: Mapping Engineer
Date: 2026
"""

from typing import Tuple, Union

import numpy as np

from .types import Matrix44, Pose3


def vec(M: np.ndarray) -> np.ndarray:
    """
    Column-major vectorisation: stack the columns of M into one vector.

    Examples:
        >>> vec(np.array([[1, 2], [3, 4]]))
        array([1., 3., 2., 4.])
    """
    return np.asarray(M, dtype=np.float64).flatten(order="F")


def unvec(v: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """
    Inverse of vec: reshape a column-major vector into a (rows, cols) matrix.

    Raises:
        ValueError: If v does not have rows * cols elements.
    """
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    if v.size != rows * cols:
        raise ValueError(
            f"v must have {rows * cols} elements for a ({rows}, {cols}) matrix, "
            f"got {v.size}"
        )
    return v.reshape((rows, cols), order="F")


def pose_matrix(
    pose: Union[Pose3, np.ndarray],
    return_jacobian: bool = False,
) -> Union[Matrix44, Tuple[Matrix44, np.ndarray]]:
    """
    Flatten a pose into its 4x4 homogeneous matrix, optionally with Jacobian.

    The Jacobian is taken with respect to a right perturbation
    T(xi) = T @ Exp(xi), xi = [omega, v]. Differentiating at xi = 0:

        d T / d omega_k = T @ [e_k]x  ->  only the rotation block changes
        d T / d v_k     = T @ E_k     ->  only the translation column changes

    so each rotation column of the Jacobian touches six entries and each
    translation column three; everything else is exactly zero.

    Args:
        pose: Pose3 instance or 4x4 homogeneous matrix.
        return_jacobian: If True, also return H = d vec(T) / d xi.

    Returns:
        T of shape (4, 4), or (T, H) with H of shape (16, 6) where rows index
        the column-major vectorisation of T.

    Raises:
        ValueError: If a matrix pose does not have shape (4, 4).

    Examples:
        >>> T, H = pose_matrix(Pose3.identity(), return_jacobian=True)
        >>> np.allclose(T, np.eye(4)), H.shape
        (True, (16, 6))
    """
    if isinstance(pose, Pose3):
        T = pose.matrix()
    else:
        T = np.array(pose, dtype=np.float64)
        if T.shape != (4, 4):
            raise ValueError(f"pose must have shape (4, 4), got {T.shape}")

    if not return_jacobian:
        return T

    R = T[:3, :3]
    H = np.zeros((16, 6), dtype=np.float64)

    # omega_x: column 1 of T gains R[:, 2], column 2 loses R[:, 1]
    H[4:7, 0] = R[:, 2]
    H[8:11, 0] = -R[:, 1]

    # omega_y: column 0 loses R[:, 2], column 2 gains R[:, 0]
    H[0:3, 1] = -R[:, 2]
    H[8:11, 1] = R[:, 0]

    # omega_z: column 0 gains R[:, 1], column 1 loses R[:, 0]
    H[0:3, 2] = R[:, 1]
    H[4:7, 2] = -R[:, 0]

    # v: translation column moves along the rotated axes
    H[12:15, 3] = R[:, 0]
    H[12:15, 4] = R[:, 1]
    H[12:15, 5] = R[:, 2]

    return T, H


def kron(m1: np.ndarray, m2: np.ndarray) -> np.ndarray:
    """
    Kronecker product of two matrices.

    The result has shape (r1 * r2, c1 * c2) and block (i, j), located at
    rows i*r2 : (i+1)*r2 and columns j*c2 : (j+1)*c2, equals m1[i, j] * m2.

    Args:
        m1: Matrix of shape (r1, c1). 1-D input is treated as a row vector.
        m2: Matrix of shape (r2, c2). 1-D input is treated as a row vector.

    Returns:
        Kronecker product, shape (r1 * r2, c1 * c2).

    Raises:
        ValueError: If an input has more than 2 dimensions or is empty.

    Examples:
        >>> kron(np.eye(2), np.ones((1, 2)))
        array([[1., 1., 0., 0.],
               [0., 0., 1., 1.]])
    """
    m1 = np.atleast_2d(np.asarray(m1, dtype=np.float64))
    m2 = np.atleast_2d(np.asarray(m2, dtype=np.float64))

    for name, m in (("m1", m1), ("m2", m2)):
        if m.ndim != 2:
            raise ValueError(f"{name} must be 2D, got shape {m.shape}")
        if m.size == 0:
            raise ValueError(f"{name} must be non-empty, got shape {m.shape}")

    return np.kron(m1, m2)


def tvec(m: int, n: int) -> np.ndarray:
    """
    Commutation matrix relating vec(M) and vec(M^T) for M of shape (m, n).

    Entry (i, j), 1-indexed, is 1 exactly when

        j == 1 + m*(i - 1) - (m*n - 1) * floor((i - 1) / n)

    and 0 otherwise, which gives

        tvec(m, n) @ vec(M) == vec(M.T)

    Args:
        m: Rows of M (positive integer).
        n: Columns of M (positive integer).

    Returns:
        Permutation matrix of shape (m*n, m*n).

    Raises:
        ValueError: If m or n is not a positive integer.

    Examples:
        >>> M = np.arange(6.0).reshape(2, 3)
        >>> np.allclose(tvec(2, 3) @ vec(M), vec(M.T))
        True
    """
    for name, dim in (("m", m), ("n", n)):
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {dim!r}")
        if dim < 1:
            raise ValueError(f"{name} must be positive, got {dim}")

    mn = m * n
    i = np.arange(mn)  # 0-indexed rows
    j = np.arange(mn)  # 0-indexed columns

    # Same test as above with i, j shifted to 0-indexing
    target = m * i - (mn - 1) * (i // n)
    return (j[np.newaxis, :] == target[:, np.newaxis]).astype(np.float64)
