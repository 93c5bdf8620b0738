"""
One-term Ogden stress laws under uniaxial loading - pure JAX implementations.

Building blocks for the uniaxial stress-stretch sweep:
- Material parameters (c1, m1, k)
- Constrained (incompressible) closed-form stress
- Unconstrained / coupled stress: volumetric term k (J - 1)
- Uncoupled stress: volumetric term k ln(J) / J and a deviatoric projection

Directions 1 and 2 are transverse, direction 3 is the loading direction.
Uniaxial symmetry gives lambda1 = lambda2 = sqrt(J / lambda3).

All stress functions accept scalars or arrays and return jax arrays.
"""

from dataclasses import dataclass
from typing import Callable, Tuple, Union

import jax
import numpy as np

jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp  # noqa: E402

from .errors import DomainError  # noqa: E402

ArrayLike = Union[float, np.ndarray, jnp.ndarray]

FORMULATIONS = ("constrained", "unconstrained", "uncoupled")


# =============================================================================
# Material Parameters
# =============================================================================

@dataclass(frozen=True)
class MaterialParameters:
    """
    One-term Ogden material parameters.

    Attributes:
        c1: shear-modulus-like coefficient (> 0)
        m1: Ogden exponent / non-linearity parameter (!= 0)
        k: bulk-modulus-like coefficient (> 0)
    """
    c1: float = 1.0
    m1: float = 12.0
    k: float = 1000.0

    def __post_init__(self):
        if not self.c1 > 0:
            raise ValueError(f"c1 must be > 0, got {self.c1}")
        if self.m1 == 0:
            raise ValueError("m1 must be non-zero")
        if not self.k > 0:
            raise ValueError(f"k must be > 0, got {self.k}")

    @classmethod
    def from_config(cls, cfg) -> "MaterialParameters":
        """Build from a mapping/DictConfig with keys c1, m1, k."""
        return cls(c1=float(cfg["c1"]), m1=float(cfg["m1"]), k=float(cfg["k"]))


def check_formulation(formulation: str) -> str:
    """Validate a formulation tag and return it."""
    if formulation not in FORMULATIONS:
        raise ValueError(f"Unknown formulation: {formulation}. Use one of {FORMULATIONS}.")
    return formulation


def check_positive(name: str, value: ArrayLike) -> None:
    """Raise DomainError unless every entry of value is in (0, inf]; NaN fails."""
    if not np.all(np.asarray(value) > 0):
        raise DomainError(f"{name} must be > 0, got {value}")


def transverse_stretch(lambda3: ArrayLike, J: ArrayLike) -> jnp.ndarray:
    """lambda1 = lambda2 = sqrt(J / lambda3) under uniaxial symmetry."""
    check_positive("lambda3", lambda3)
    check_positive("J", J)
    return jnp.sqrt(jnp.asarray(J) / lambda3)


# =============================================================================
# Unchecked kernels (traceable by jax.grad)
# =============================================================================

def _unconstrained_lateral(params: MaterialParameters, lambda3, J):
    c1, m1, k = params.c1, params.m1, params.k
    return k * (J - 1.0) + (1.0 / J) * (c1 / m1) * (jnp.sqrt(J / lambda3) ** m1 - 1.0)


def _uncoupled_lateral(params: MaterialParameters, lambda3, J):
    # Deviatoric mean pre-simplified with lambda1 = lambda2
    c1, m1, k = params.c1, params.m1, params.k
    r = (J / lambda3) ** (m1 / 2.0)
    return k * (jnp.log(J) / J) + (1.0 / J) * (c1 / m1) * (r - (2.0 * r + lambda3 ** m1) / 3.0)


LATERAL_STRESS_KERNELS = {
    "unconstrained": _unconstrained_lateral,
    "uncoupled": _uncoupled_lateral,
}


# =============================================================================
# Constrained Formulation
# =============================================================================

def constrained_principal_stress(
    params: MaterialParameters,
    lambda3: ArrayLike,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Principal Cauchy stresses for the incompressible (constrained) form.

    lambda1 = lambda2 = lambda3^(-1/2) is imposed, so J = 1 and no solve is needed.

    S3 = (c1/m1) (lambda3^m1 - lambda3^(-m1/2)),  S1 = S2 = 0
    """
    check_positive("lambda3", lambda3)
    lambda3 = jnp.asarray(lambda3, dtype=jnp.float64)
    c1, m1 = params.c1, params.m1
    S3 = (c1 / m1) * (lambda3 ** m1 - lambda3 ** (-m1 / 2.0))
    S1 = jnp.zeros_like(S3)
    S2 = jnp.zeros_like(S3)
    return S1, S2, S3


# =============================================================================
# Unconstrained (Coupled) Formulation
# =============================================================================

def unconstrained_lateral_stress(
    params: MaterialParameters,
    lambda3: ArrayLike,
    J: ArrayLike,
) -> jnp.ndarray:
    """
    Lateral stress S1 (= S2) of the coupled form, the root-finding target.

    S1 = k (J - 1) + (1/J) (c1/m1) (sqrt(J/lambda3)^m1 - 1)
    """
    check_positive("lambda3", lambda3)
    check_positive("J", J)
    return _unconstrained_lateral(params, lambda3, jnp.asarray(J, dtype=jnp.float64))


def unconstrained_principal_stress(
    params: MaterialParameters,
    lambda3: ArrayLike,
    J: ArrayLike,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Principal stresses of the coupled form once J is known (not sorted).

    Si = k (J - 1) + (1/J) (c1/m1) (lambda_i^m1 - 1)
    """
    c1, m1, k = params.c1, params.m1, params.k
    lambda1 = transverse_stretch(lambda3, J)
    lambda2 = lambda1
    J = jnp.asarray(J, dtype=jnp.float64)

    def S(lmbd):
        return k * (J - 1.0) + (1.0 / J) * (c1 / m1) * (lmbd ** m1 - 1.0)

    return S(lambda1), S(lambda2), S(jnp.asarray(lambda3, dtype=jnp.float64))


# =============================================================================
# Uncoupled Formulation
# =============================================================================

def uncoupled_lateral_stress(
    params: MaterialParameters,
    lambda3: ArrayLike,
    J: ArrayLike,
) -> jnp.ndarray:
    """
    Lateral stress S1 (= S2) of the uncoupled form, the root-finding target.

    S1 = k ln(J)/J + (1/J) (c1/m1) ((J/lambda3)^(m1/2) - (2 (J/lambda3)^(m1/2) + lambda3^m1) / 3)
    """
    check_positive("lambda3", lambda3)
    check_positive("J", J)
    return _uncoupled_lateral(params, lambda3, jnp.asarray(J, dtype=jnp.float64))


def uncoupled_principal_stress(
    params: MaterialParameters,
    lambda3: ArrayLike,
    J: ArrayLike,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Principal stresses of the uncoupled form once J is known (not sorted).

    Si = k ln(J)/J + (1/J) (c1/m1) (lambda_i^m1 - (lambda1^m1 + lambda2^m1 + lambda3^m1) / 3)
    """
    c1, m1, k = params.c1, params.m1, params.k
    lambda1 = transverse_stretch(lambda3, J)
    lambda2 = lambda1
    lambda3 = jnp.asarray(lambda3, dtype=jnp.float64)
    J = jnp.asarray(J, dtype=jnp.float64)
    mean = (lambda1 ** m1 + lambda2 ** m1 + lambda3 ** m1) / 3.0

    def S(lmbd):
        return k * (jnp.log(J) / J) + (1.0 / J) * (c1 / m1) * (lmbd ** m1 - mean)

    return S(lambda1), S(lambda2), S(lambda3)


# =============================================================================
# Lookup by formulation
# =============================================================================

def make_lateral_stress_fn(formulation: str) -> Callable:
    """Return the checked lateral-stress law (params, lambda3, J) -> S1."""
    check_formulation(formulation)
    if formulation == "constrained":
        raise ValueError("The constrained form has no lateral-stress equation to solve.")
    if formulation == "unconstrained":
        return unconstrained_lateral_stress
    return uncoupled_lateral_stress


def make_principal_stress_fn(formulation: str) -> Callable:
    """
    Return the principal-stress law for a formulation.

    Constrained: (params, lambda3) -> (S1, S2, S3)
    Others: (params, lambda3, J) -> (S1, S2, S3)
    """
    check_formulation(formulation)
    return {
        "constrained": constrained_principal_stress,
        "unconstrained": unconstrained_principal_stress,
        "uncoupled": uncoupled_principal_stress,
    }[formulation]
