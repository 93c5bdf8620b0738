"""
Jacobian solver - find J* > 0 with zero lateral stress for a fixed lambda3.

Two interchangeable strategies:
- "root": scalar root finding from J = 1 (scipy root_scalar, Newton with a
  jax.grad derivative, or secant)
- "interpolate": tabulate the lateral stress over a fixed bracket of trial
  Jacobians and invert it with a PCHIP interpolant at zero stress
  (optionally after re-tabulating the cell that holds the sign change)

Both strategies finish with the same residual check |S1(J*)| <= tol.
The default bracket [0.9, 1.1] assumes the equilibrium Jacobian stays close
to 1; parameters that push J* outside it raise InterpolationDomainError.
"""

from typing import Optional, Sequence

import jax
import numpy as np
from scipy.interpolate import PchipInterpolator
from scipy.optimize import root_scalar

from .errors import DomainError, InterpolationDomainError, RootNotFound
from .ogden import (
    LATERAL_STRESS_KERNELS,
    MaterialParameters,
    check_formulation,
    check_positive,
    make_lateral_stress_fn,
)

STRATEGIES = ("root", "interpolate")
ROOT_METHODS = ("newton", "secant")

DEFAULT_TOL = 1e-6
DEFAULT_BRACKET = (0.9, 1.1)
DEFAULT_N_TEST_POINTS = 100
DEFAULT_N_REFINE = 0


def check_strategy(strategy: str) -> str:
    """Validate a strategy name and return it."""
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}. Use one of {STRATEGIES}.")
    return strategy


def _lateral_formulation(formulation: str) -> str:
    check_formulation(formulation)
    if formulation == "constrained":
        raise ValueError("The constrained form is closed-form; there is no Jacobian to solve for.")
    return formulation


def lateral_residual(params: MaterialParameters, lambda3: float, J: float, formulation: str) -> float:
    """|S1(J)| for the given formulation."""
    return abs(float(make_lateral_stress_fn(formulation)(params, lambda3, J)))


def _check_residual(params, lambda3, J, formulation, tol, strategy):
    residual = lateral_residual(params, lambda3, J, formulation)
    if not residual <= tol:
        raise RootNotFound(
            f"{strategy}: lateral stress {residual:.3e} at J={J:.12g} exceeds tol={tol:.1e} "
            f"(lambda3={lambda3:.6g}, {formulation})"
        )
    return J


# =============================================================================
# Strategy A: direct scalar root finding
# =============================================================================

def solve_root(
    params: MaterialParameters,
    lambda3: float,
    formulation: str = "unconstrained",
    method: str = "newton",
    x0: float = 1.0,
    xtol: float = 1e-12,
    maxiter: int = 50,
    tol: float = DEFAULT_TOL,
) -> float:
    """
    Solve S1(J) = 0 with a bracket-free scalar root finder.

    Args:
        params: material parameters
        lambda3: axial stretch (> 0)
        formulation: "unconstrained" or "uncoupled"
        method: "newton" (derivative from jax.grad) or "secant"
        x0: initial guess for J
        xtol: step tolerance passed to root_scalar
        maxiter: iteration budget
        tol: accepted lateral-stress residual

    Returns:
        J* as a float

    Raises:
        DomainError: lambda3 <= 0
        RootNotFound: no convergence, an iterate left J > 0, or residual > tol
    """
    _lateral_formulation(formulation)
    if method not in ROOT_METHODS:
        raise ValueError(f"Unknown root method: {method}. Use one of {ROOT_METHODS}.")
    check_positive("lambda3", lambda3)

    lateral = make_lateral_stress_fn(formulation)
    kernel = LATERAL_STRESS_KERNELS[formulation]

    def f(J):
        return float(lateral(params, lambda3, float(J)))

    kwargs = {"x0": float(x0), "xtol": xtol, "maxiter": maxiter, "method": method}
    if method == "newton":
        dS_dJ = jax.grad(lambda J: kernel(params, lambda3, J))
        kwargs["fprime"] = lambda J: float(dS_dJ(float(J)))
    else:
        kwargs["x1"] = float(x0) * (1.0 + 1e-3)

    try:
        sol = root_scalar(f, **kwargs)
    except DomainError as e:
        raise RootNotFound(
            f"root ({method}): iterate left the physical domain J > 0 at lambda3={lambda3:.6g}: {e}"
        ) from e

    J_star = float(sol.root)
    if not sol.converged or not np.isfinite(J_star) or J_star <= 0:
        raise RootNotFound(
            f"root ({method}): no convergence after {sol.iterations} iterations "
            f"at lambda3={lambda3:.6g} ({sol.flag})"
        )
    return _check_residual(params, lambda3, J_star, formulation, tol, f"root ({method})")


# =============================================================================
# Strategy B: tabulate and interpolate
# =============================================================================

def tabulate_lateral_stress(
    params: MaterialParameters,
    lambda3: float,
    formulation: str = "unconstrained",
    bracket: Sequence[float] = DEFAULT_BRACKET,
    n_test_points: int = DEFAULT_N_TEST_POINTS,
):
    """
    Evaluate S1 on n_test_points trial Jacobians linearly spaced over bracket.

    Returns:
        (J_test, S1_test) numpy arrays
    """
    _lateral_formulation(formulation)
    if len(bracket) != 2 or not 0 < bracket[0] < bracket[1]:
        raise ValueError(f"bracket must be (lo, hi) with 0 < lo < hi, got {list(bracket)}")
    if n_test_points < 2:
        raise ValueError(f"n_test_points must be >= 2, got {n_test_points}")

    J_test = np.linspace(float(bracket[0]), float(bracket[1]), int(n_test_points))
    S_test = np.asarray(make_lateral_stress_fn(formulation)(params, lambda3, J_test))
    return J_test, S_test


def _inverse_table(params, lambda3, formulation, bracket, n_test_points):
    """Tabulate S1 over bracket, check it, and orient it with S1 increasing."""
    J_test, S_test = tabulate_lateral_stress(params, lambda3, formulation, bracket, n_test_points)

    if not np.all(np.isfinite(S_test)):
        raise InterpolationDomainError(f"non-finite lateral stress in bracket at lambda3={lambda3:.6g}")

    dS = np.diff(S_test)
    if np.all(dS < 0):
        J_test, S_test = J_test[::-1], S_test[::-1]
    elif not np.all(dS > 0):
        raise InterpolationDomainError(
            f"lateral stress is not monotonic over J in [{J_test[0]:.4g}, {J_test[-1]:.4g}] "
            f"at lambda3={lambda3:.6g}"
        )

    if not S_test[0] <= 0.0 <= S_test[-1]:
        raise InterpolationDomainError(
            f"no sign change of the lateral stress for J in [{min(J_test):.4g}, {max(J_test):.4g}] "
            f"at lambda3={lambda3:.6g} (S1 ranges over [{S_test[0]:.4g}, {S_test[-1]:.4g}])"
        )
    return J_test, S_test


def _zero_cell(J_test, S_test):
    """Table cell (lo, hi) whose stresses straddle zero."""
    i = int(np.clip(np.searchsorted(S_test, 0.0), 1, len(S_test) - 1))
    lo, hi = sorted((float(J_test[i - 1]), float(J_test[i])))
    return lo, hi


def solve_interpolate(
    params: MaterialParameters,
    lambda3: float,
    formulation: str = "unconstrained",
    bracket: Sequence[float] = DEFAULT_BRACKET,
    n_test_points: int = DEFAULT_N_TEST_POINTS,
    n_refine: int = DEFAULT_N_REFINE,
    tol: float = DEFAULT_TOL,
) -> float:
    """
    Solve S1(J) = 0 by inverse PCHIP interpolation of a tabulated bracket.

    The tabulated stresses must be strictly monotonic and change sign inside
    the bracket, otherwise the inverse relation J(S1) is not usable.
    By default a single table of n_test_points evaluations is used. Each of the
    optional n_refine passes re-tabulates the table cell that contains the sign
    change with another n_test_points evaluations.

    Raises:
        DomainError: lambda3 <= 0
        InterpolationDomainError: no sign change or non-monotonic stresses
        RootNotFound: interpolated J* misses the residual tolerance
    """
    if n_refine < 0:
        raise ValueError(f"n_refine must be >= 0, got {n_refine}")

    J_test, S_test = _inverse_table(params, lambda3, formulation, bracket, n_test_points)
    for _ in range(int(n_refine)):
        J_test, S_test = _inverse_table(params, lambda3, formulation,
                                        _zero_cell(J_test, S_test), n_test_points)

    J_star = float(PchipInterpolator(S_test, J_test, extrapolate=False)(0.0))
    return _check_residual(params, lambda3, J_star, formulation, tol, "interpolate")


# =============================================================================
# Dispatcher
# =============================================================================

def solve_jacobian(
    params: MaterialParameters,
    lambda3: float,
    formulation: str = "unconstrained",
    strategy: str = "root",
    tol: float = DEFAULT_TOL,
    root_options: Optional[dict] = None,
    interpolate_options: Optional[dict] = None,
) -> float:
    """
    Equilibrium Jacobian for one stretch sample using the chosen strategy.

    Args:
        params: material parameters
        lambda3: axial stretch
        formulation: "unconstrained" or "uncoupled"
        strategy: "root" or "interpolate"
        tol: accepted lateral-stress residual
        root_options: keyword arguments for solve_root (method, x0, xtol, maxiter)
        interpolate_options: keyword arguments for solve_interpolate (bracket, n_test_points, n_refine)
    """
    check_strategy(strategy)
    if strategy == "root":
        return solve_root(params, lambda3, formulation, tol=tol, **(root_options or {}))
    return solve_interpolate(params, lambda3, formulation, tol=tol, **(interpolate_options or {}))


def solver_options_from_config(cfg) -> dict:
    """
    Translate the `solver` config node into keyword arguments for solve_jacobian.

    Example:
        opts = solver_options_from_config(cfg.solver)
        J = solve_jacobian(params, 1.2, "uncoupled", **opts)
    """
    root = cfg.get("root", {}) or {}
    interp = cfg.get("interpolate", {}) or {}
    return {
        "strategy": check_strategy(str(cfg.get("strategy", "root"))),
        "tol": float(cfg.get("tol", DEFAULT_TOL)),
        "root_options": {
            "method": str(root.get("method", "newton")),
            "x0": float(root.get("x0", 1.0)),
            "xtol": float(root.get("xtol", 1e-12)),
            "maxiter": int(root.get("maxiter", 50)),
        },
        "interpolate_options": {
            "bracket": tuple(float(b) for b in interp.get("bracket", DEFAULT_BRACKET)),
            "n_test_points": int(interp.get("n_test_points", DEFAULT_N_TEST_POINTS)),
            "n_refine": int(interp.get("n_refine", DEFAULT_N_REFINE)),
        },
    }
