"""
Polar decomposition of the deformation gradient and derived strain measures.

F = Q U = V Q, with Q a rotation and U, V the right and left stretch tensors.
Both routes use library linear algebra:
- SVD: F = W Σ Rᵀ  ->  Q = W Rᵀ,  U = R Σ Rᵀ,  V = W Σ Wᵀ
- Eigendecomposition of C = FᵀF: eigenvalues are the squared principal stretches

Strain measures are built in the principal frame and rotated back:
    E = N diag(f(λ)) Nᵀ
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from .errors import DomainError


@dataclass(frozen=True)
class PolarDecomposition:
    """
    Result of polar_decomposition.

    Attributes:
        Q: rotation tensor (3, 3)
        U: right stretch tensor (3, 3)
        V: left stretch tensor (3, 3)
        stretches: principal stretches, descending (3,)
        n: right principal directions as columns (3, 3), eigenvectors of U and C
        m: left principal directions as columns (3, 3), eigenvectors of V and B
    """
    Q: np.ndarray
    U: np.ndarray
    V: np.ndarray
    stretches: np.ndarray
    n: np.ndarray
    m: np.ndarray


def rotation_xyz(a: float, b: float, c: float) -> np.ndarray:
    """Rotation matrix Rx(a) Ry(b) Rz(c), angles in radians."""
    return Rotation.from_euler("XYZ", [a, b, c]).as_matrix()


def deformation_gradient(stretches: Sequence[float], rotation: np.ndarray) -> np.ndarray:
    """F = Q diag(stretches) for a known rotation Q and principal stretches."""
    stretches = np.asarray(stretches, dtype=float)
    if np.any(stretches <= 0):
        raise DomainError(f"principal stretches must be > 0, got {stretches}")
    return np.asarray(rotation, dtype=float) @ np.diag(stretches)


def _check_deformation_gradient(F) -> np.ndarray:
    F = np.asarray(F, dtype=float)
    if F.shape != (3, 3):
        raise ValueError(f"F must be 3x3, got shape {F.shape}")
    if not np.linalg.det(F) > 0:
        raise DomainError("det(F) must be > 0")
    return F


def polar_decomposition(F) -> PolarDecomposition:
    """Polar decomposition of F through its singular value decomposition."""
    F = _check_deformation_gradient(F)
    W, sigma, Rt = np.linalg.svd(F)
    R = Rt.T
    Q = W @ Rt
    U = R @ np.diag(sigma) @ Rt
    V = W @ np.diag(sigma) @ W.T
    return PolarDecomposition(Q=Q, U=U, V=V, stretches=sigma, n=R, m=W)


def right_stretch_eig(F) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Right stretch tensor from the eigendecomposition of C = FᵀF.

    Returns:
        (stretches, N, U, C): ascending principal stretches, eigenvectors as
        columns, right stretch tensor and right Cauchy-Green tensor
    """
    F = _check_deformation_gradient(F)
    C = F.T @ F
    lambda_sq, N = np.linalg.eigh(C)
    stretches = np.sqrt(lambda_sq)
    U = N @ np.diag(stretches) @ N.T
    return stretches, N, U, C


# =============================================================================
# Strain measures
# =============================================================================

def _principal_to_tensor(values, N) -> np.ndarray:
    return N @ np.diag(values) @ N.T


def log_strain(stretches, N) -> np.ndarray:
    """Natural (Hencky) strain ln(U)."""
    return _principal_to_tensor(np.log(stretches), N)


def green_lagrange_strain(stretches, N) -> np.ndarray:
    """Green-Lagrange strain ½(U² - I)."""
    return _principal_to_tensor(0.5 * (np.asarray(stretches) ** 2 - 1.0), N)


def biot_strain(stretches, N) -> np.ndarray:
    """Biot ("linear") strain U - I."""
    return _principal_to_tensor(np.asarray(stretches) - 1.0, N)


def seth_hill_strain(stretches, N, m: float) -> np.ndarray:
    """Seth-Hill strain (Uᵐ - I)/m; m = 0 gives the logarithmic strain."""
    if m == 0:
        return log_strain(stretches, N)
    return _principal_to_tensor((np.asarray(stretches) ** m - 1.0) / m, N)
