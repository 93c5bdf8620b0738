import sys
import time
import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np
from omegaconf import DictConfig

from ogden.config import config_to_dict, dict_to_config, load_config, print_config
from ogden.io import save_run_data as _save_run_data
from ogden.io import load_run as _load_run
from ogden.physics import (
    FORMULATIONS,
    MaterialParameters,
    OgdenError,
    check_formulation,
    check_strategy,
    make_principal_stress_fn,
    solve_jacobian,
    solver_options_from_config,
)

PROBLEM = "ogden_uniaxial"


# =============================================================================
# Sweep data types
# =============================================================================

@dataclass(frozen=True)
class EquilibriumState:
    """Solved state of one stretch sample (directions 1, 2 transverse, 3 axial)."""
    lambda3: float
    J: float
    lambda1: float
    lambda2: float
    S1: float
    S2: float
    S3: float


@dataclass(frozen=True)
class SampleFailure:
    """A stretch sample that could not be solved, and why."""
    index: int
    lambda3: float
    formulation: str
    strategy: str
    error_type: str
    message: str

    def describe(self) -> str:
        return (f"{self.formulation} form, sample {self.index} (lambda3={self.lambda3:.6g}), "
                f"strategy '{self.strategy}': {self.error_type}: {self.message}")


@dataclass
class SweepResult:
    """Ordered equilibrium states of one formulation, plus the samples that failed."""
    formulation: str
    strategy: str
    states: List[EquilibriumState] = field(default_factory=list)
    failures: List[SampleFailure] = field(default_factory=list)

    def _column(self, name):
        return np.array([getattr(s, name) for s in self.states], dtype=float)

    @property
    def lambda3(self):
        return self._column("lambda3")

    @property
    def J(self):
        return self._column("J")

    @property
    def lambda1(self):
        return self._column("lambda1")

    @property
    def lambda2(self):
        return self._column("lambda2")

    @property
    def S1(self):
        return self._column("S1")

    @property
    def S2(self):
        return self._column("S2")

    @property
    def S3(self):
        return self._column("S3")

    def to_arrays(self) -> dict:
        """Column arrays keyed by EquilibriumState field name."""
        names = ["lambda3", "J", "lambda1", "lambda2", "S1", "S2", "S3"]
        return {name: self._column(name) for name in names}

    @classmethod
    def from_arrays(cls, formulation, strategy, arrays, failures=None) -> "SweepResult":
        n = len(arrays["lambda3"])
        states = [
            EquilibriumState(**{name: float(arrays[name][i]) for name in
                                ["lambda3", "J", "lambda1", "lambda2", "S1", "S2", "S3"]})
            for i in range(n)
        ]
        return cls(formulation, strategy, states, list(failures or []))


# =============================================================================
# Per-sample solve
# =============================================================================

def stretch_samples(applied_stretch: float, n_data_points: int) -> np.ndarray:
    """Axial stretches from 1 to applied_stretch inclusive."""
    if not applied_stretch > 0:
        raise ValueError(f"applied_stretch must be > 0, got {applied_stretch}")
    if n_data_points < 1:
        raise ValueError(f"n_data_points must be >= 1, got {n_data_points}")
    return np.linspace(1.0, applied_stretch, int(n_data_points))


def solve_sample(
    params: MaterialParameters,
    lambda3: float,
    formulation: str,
    strategy: str = "root",
    **solver_options,
) -> EquilibriumState:
    """
    Equilibrium state for one stretch sample.

    The constrained form is closed-form (J = 1, lambda1 = lambda2 = lambda3^(-1/2));
    the other forms first solve for J with the chosen strategy.
    """
    check_formulation(formulation)
    lambda3 = float(lambda3)

    if formulation == "constrained":
        S1, S2, S3 = make_principal_stress_fn("constrained")(params, lambda3)
        lambda1 = lambda3 ** -0.5
        return EquilibriumState(lambda3, 1.0, lambda1, lambda1, float(S1), float(S2), float(S3))

    J = solve_jacobian(params, lambda3, formulation, strategy=strategy, **solver_options)
    S1, S2, S3 = make_principal_stress_fn(formulation)(params, lambda3, J)
    lambda1 = float(np.sqrt(J / lambda3))
    return EquilibriumState(lambda3, J, lambda1, lambda1, float(S1), float(S2), float(S3))


def sweep(
    params: MaterialParameters,
    stretches: Sequence[float],
    formulation: str,
    strategy: str = "root",
    fail_fast: bool = False,
    **solver_options,
) -> SweepResult:
    """
    Map solve_sample over the stretch sequence, keeping input order.

    A sample that raises an OgdenError is recorded as a SampleFailure and reported
    with warnings.warn; the remaining samples are still processed. With
    fail_fast=True the first error propagates instead.
    """
    check_formulation(formulation)
    check_strategy(strategy)
    label = "closed-form" if formulation == "constrained" else strategy
    result = SweepResult(formulation=formulation, strategy=label)

    for i, lambda3 in enumerate(stretches):
        try:
            state = solve_sample(params, lambda3, formulation, strategy, **solver_options)
        except OgdenError as e:
            if fail_fast:
                raise
            failure = SampleFailure(i, float(lambda3), formulation, label, type(e).__name__, str(e))
            warnings.warn(f"Skipping {failure.describe()}")
            result.failures.append(failure)
            continue
        result.states.append(state)

    return result


def _solved_indices(result, n):
    failed = {f.index for f in result.failures}
    return [i for i in range(n) if i not in failed]


def compare_strategies(
    params: MaterialParameters,
    stretches: Sequence[float],
    formulation: str = "unconstrained",
    tol: float = 1e-6,
    root_options: Optional[dict] = None,
    interpolate_options: Optional[dict] = None,
    fail_fast: bool = False,
) -> dict:
    """
    Sweep the stretches with both strategies and line up the Jacobians.

    Samples that fail under either strategy are left out of the comparison and
    reported in "failures" (one SampleFailure per strategy that failed).

    Returns:
        dict with lambda3, J_root, J_interpolate arrays over the samples both
        strategies solved, max_abs_diff and failures
    """
    if check_formulation(formulation) == "constrained":
        raise ValueError("The constrained form is closed-form; there is no Jacobian to compare.")
    stretches = np.asarray(stretches, dtype=float)
    n = len(stretches)

    by_root = sweep(params, stretches, formulation, "root", fail_fast=fail_fast,
                    tol=tol, root_options=root_options)
    by_interp = sweep(params, stretches, formulation, "interpolate", fail_fast=fail_fast,
                      tol=tol, interpolate_options=interpolate_options)

    J_root = dict(zip(_solved_indices(by_root, n), by_root.J))
    J_interp = dict(zip(_solved_indices(by_interp, n), by_interp.J))
    common = sorted(set(J_root) & set(J_interp))

    J_root = np.array([J_root[i] for i in common], dtype=float)
    J_interp = np.array([J_interp[i] for i in common], dtype=float)
    return {
        "lambda3": stretches[common],
        "J_root": J_root,
        "J_interpolate": J_interp,
        "max_abs_diff": float(np.max(np.abs(J_root - J_interp))) if common else 0.0,
        "failures": by_root.failures + by_interp.failures,
    }


# =============================================================================
# Run
# =============================================================================

def run(cfg: Optional[Union[DictConfig, dict]] = None, overrides: Optional[list] = None) -> dict:
    """Run the stretch sweep for every configured formulation. Returns dict with config, params, sweeps."""
    if cfg is None:
        cfg = load_config(config_name=PROBLEM, overrides=overrides or [])
    elif isinstance(cfg, dict):
        cfg = dict_to_config(cfg)

    params = MaterialParameters.from_config(cfg.material)
    stretches = stretch_samples(float(cfg.loading.applied_stretch), int(cfg.loading.n_data_points))
    solver_options = solver_options_from_config(cfg.solver)
    fail_fast = bool(cfg.solver.get("fail_fast", False))
    formulations = [check_formulation(f) for f in cfg.get("formulations", FORMULATIONS)]

    start_time = time.time()
    sweeps = {
        formulation: sweep(params, stretches, formulation, fail_fast=fail_fast, **solver_options)
        for formulation in formulations
    }
    elapsed = time.time() - start_time

    return {
        "config": config_to_dict(cfg),
        "params": params,
        "sweeps": sweeps,
        "elapsed_time": elapsed,
    }


def print_summary(results: dict) -> None:
    """Print per-formulation extremes and failures of a run."""
    for formulation, result in results["sweeps"].items():
        n_ok, n_failed = len(result.states), len(result.failures)
        print(f"{formulation.capitalize()} form ({result.strategy}): "
              f"{n_ok} solved, {n_failed} failed")
        if n_ok:
            print(f"  Cauchy stress S3, min: {result.S3.min():.6g}, max: {result.S3.max():.6g}")
            print(f"  Jacobian J, min: {result.J.min():.6g}, max: {result.J.max():.6g}")
        for failure in result.failures:
            print(f"  FAILED {failure.describe()}")
    if "elapsed_time" in results:
        print(f"Elapsed time: {results['elapsed_time']:.3f} s")


# =============================================================================
# Problem-specific save/load wrappers
# =============================================================================

def save_run_data(results, run_name=None, base_dir=None):
    """Save run data to disk."""
    return _save_run_data(results, run_name=run_name, problem=PROBLEM, base_dir=base_dir)


def load_run(run_name, base_dir=None):
    """Load a saved run from disk, rebuilding SweepResult objects."""
    raw = _load_run(run_name, problem=PROBLEM, base_dir=base_dir)
    sweeps = {}
    for formulation, data in raw["sweeps"].items():
        failures = [SampleFailure(**f) for f in data["failures"]]
        sweeps[formulation] = SweepResult.from_arrays(formulation, data["strategy"], data["arrays"], failures)
    raw["sweeps"] = sweeps
    material = raw["config"].get("material") if raw["config"] else None
    raw["params"] = MaterialParameters.from_config(material) if material else None
    return raw


if __name__ == "__main__":
    # Parse any command line args as Hydra overrides
    overrides = sys.argv[1:] if len(sys.argv) > 1 else None
    cfg = load_config(config_name=PROBLEM, overrides=overrides)
    print_config(cfg)
    results = run(cfg)
    print_summary(results)

    if cfg.results.save:
        save_run_data(results, run_name=cfg.results.experiment_name)

    if cfg.plot.enabled:
        import matplotlib.pyplot as plt
        from ogden.plot import plot_results

        save_dir = results.get("run_dir", ".") if cfg.plot.save else None
        plot_results(results, save_dir=save_dir)
        if not cfg.plot.save:
            plt.show()
