"""
Exceptions raised by the stress laws and the Jacobian solver.

OgdenError
├── DomainError               non-positive stretch or Jacobian
└── SolverError
    ├── RootNotFound          root finder failed / residual above tolerance
    └── InterpolationDomainError   no usable sign change inside the bracket
"""


class OgdenError(Exception):
    """Base class for all errors raised by the ogden package."""


class DomainError(OgdenError, ValueError):
    """A stress law was evaluated outside lambda3 > 0, J > 0."""


class SolverError(OgdenError):
    """The Jacobian solver could not produce an equilibrium Jacobian."""


class RootNotFound(SolverError):
    """Direct root finding did not converge, or the root misses the tolerance."""


class InterpolationDomainError(SolverError):
    """Zero lateral stress is not reachable by interpolating the tabulated bracket."""
