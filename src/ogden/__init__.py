"""Ogden uniaxial stress-stretch package

Stress laws, Jacobian solvers, sweep driver, configuration and plotting for
one-term Ogden materials under uniaxial loading. It can be imported after
`pip install -e .`:

    from ogden.models.uniaxial import run, print_summary
    from ogden.config import load_config
    from ogden.plot import plot_results

"""

__version__ = "0.1.0"
__all__ = ["physics", "models", "config", "io", "plot"]
