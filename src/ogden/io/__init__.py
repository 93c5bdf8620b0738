"""
IO package - handles saving and loading of sweep results.

API:
    save_run_data(results, run_name=None, problem=None, base_dir=None)
    load_run(run_name, problem, base_dir=None)
"""

from .utils import (
    save_run_data,
    load_run,
    ResultsManager,
)

__all__ = [
    "save_run_data",
    "load_run",
    "ResultsManager",
]
