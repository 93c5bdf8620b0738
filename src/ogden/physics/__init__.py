"""
Physics module - pure functions for the uniaxial Ogden problem.

Provides:
- Ogden stress laws (constrained, unconstrained, uncoupled)
- Jacobian solver (root finding / tabulate-and-interpolate)
- Polar decomposition and strain measures
- Error taxonomy
"""

from .errors import (
    OgdenError,
    DomainError,
    SolverError,
    RootNotFound,
    InterpolationDomainError,
)

from .ogden import (
    FORMULATIONS,
    MaterialParameters,
    check_formulation,
    check_positive,
    transverse_stretch,
    # Stress laws
    constrained_principal_stress,
    unconstrained_lateral_stress,
    unconstrained_principal_stress,
    uncoupled_lateral_stress,
    uncoupled_principal_stress,
    make_lateral_stress_fn,
    make_principal_stress_fn,
)

from .jacobian import (
    STRATEGIES,
    ROOT_METHODS,
    check_strategy,
    lateral_residual,
    solve_root,
    tabulate_lateral_stress,
    solve_interpolate,
    solve_jacobian,
    solver_options_from_config,
)

from .kinematics import (
    PolarDecomposition,
    rotation_xyz,
    deformation_gradient,
    polar_decomposition,
    right_stretch_eig,
    log_strain,
    green_lagrange_strain,
    biot_strain,
    seth_hill_strain,
)

__all__ = [
    "OgdenError",
    "DomainError",
    "SolverError",
    "RootNotFound",
    "InterpolationDomainError",
    "FORMULATIONS",
    "MaterialParameters",
    "check_formulation",
    "check_positive",
    "transverse_stretch",
    "constrained_principal_stress",
    "unconstrained_lateral_stress",
    "unconstrained_principal_stress",
    "uncoupled_lateral_stress",
    "uncoupled_principal_stress",
    "make_lateral_stress_fn",
    "make_principal_stress_fn",
    "STRATEGIES",
    "ROOT_METHODS",
    "check_strategy",
    "lateral_residual",
    "solve_root",
    "tabulate_lateral_stress",
    "solve_interpolate",
    "solve_jacobian",
    "solver_options_from_config",
    "PolarDecomposition",
    "rotation_xyz",
    "deformation_gradient",
    "polar_decomposition",
    "right_stretch_eig",
    "log_strain",
    "green_lagrange_strain",
    "biot_strain",
    "seth_hill_strain",
]
