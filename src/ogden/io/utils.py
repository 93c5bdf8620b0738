"""
utils.py
--------
Utilities for saving and loading sweep results.
Provides a clean, modular interface for persisting run data.

API:
    save_run_data(results, run_name=None, problem=None, base_dir=None)
    load_run(run_name, problem, base_dir=None)

Directory structure:
    {base_dir}/{problem}/{run_name}/run_data.json
    {base_dir}/{problem}/{run_name}/sweeps/{formulation}.npz
"""

import hashlib
import json
import time
from dataclasses import asdict
from pathlib import Path

import numpy as np
from omegaconf import OmegaConf


# =============================================================================
# Results Manager (internal use)
# =============================================================================

def _generate_experiment_name():
    """Timestamp plus a short hash, e.g. 1718000000_3f2a1c."""
    timestamp = str(int(time.time()))
    return f"{timestamp}_{hashlib.md5(timestamp.encode()).hexdigest()[:6]}"


def _get_default_base_dir():
    """project_root/results in a source checkout, ./results otherwise."""
    project_root = Path(__file__).resolve().parents[3]
    if not (project_root / "pyproject.toml").exists():
        project_root = Path.cwd()
    return project_root / "results"


class ResultsManager:
    """Internal class for managing paths. Used by save/load functions.

    Directory structure: {base_dir}/{problem}/{run_name}/
    """

    def __init__(self, problem, run_name, base_dir=None):
        self.base_dir = Path(base_dir) if base_dir else _get_default_base_dir()
        self.problem = problem
        self.run_name = run_name
        self.run_dir = self.base_dir / self.problem / self.run_name

    def ensure_dir(self):
        """Create the run directory if it doesn't exist."""
        self.run_dir.mkdir(parents=True, exist_ok=True)

    def get_path(self, filename):
        """Get the full path for a file in the run directory."""
        return self.run_dir / filename

    @property
    def sweeps_dir(self):
        return self.run_dir / "sweeps"


def _names_from_config(results):
    """(problem.name, results.experiment_name) of the run config, None when unset."""
    config = OmegaConf.create(results.get("config") or {})
    return (OmegaConf.select(config, "problem.name"),
            OmegaConf.select(config, "results.experiment_name"))


# =============================================================================
# Saving Functions
# =============================================================================

def save_run_data(results, run_name=None, problem=None, base_dir=None):
    """
    Save all run data to disk.

    Saves:
    - run_data.json: config, run metrics, per-formulation strategy and failures
    - sweeps/{formulation}.npz: lambda3, J, lambda1, lambda2, S1, S2, S3 columns

    Args:
        results: Dictionary returned by run()
        run_name: Name for this run (subfolder name). If None, taken from
                  results["config"]["results"]["experiment_name"] or auto-generated.
        problem: Problem name. If None, taken from results["config"]["problem"]["name"].
        base_dir: Base directory for results. Defaults to project_root/results.

    Example:
        save_run_data(results)
        save_run_data(results, run_name="k500", base_dir="./my_results")
    """
    config_problem, config_run_name = _names_from_config(results)

    problem = problem or config_problem or "default"
    run_name = run_name or config_run_name or _generate_experiment_name()

    rm = ResultsManager(problem=problem, run_name=run_name, base_dir=base_dir)
    rm.ensure_dir()

    results["run_dir"] = str(rm.run_dir)

    _save_run_metadata(results, rm)
    _save_sweeps(results, rm)

    print(f"Data saved to {rm.run_dir}")
    return rm.run_dir


def _save_run_metadata(results, rm):
    """Save run_data.json with config, metrics and failures."""
    config = results.get("config", {})
    if OmegaConf.is_config(config):
        config = OmegaConf.to_container(config, resolve=True)

    run_data = {
        "config": config,
        "run_metrics": {
            "elapsed_time": results.get("elapsed_time"),
            "run_dir": results.get("run_dir"),
        },
        "sweeps": {
            formulation: {
                "strategy": sweep.strategy,
                "n_solved": len(sweep.states),
                "failures": [asdict(f) for f in sweep.failures],
            }
            for formulation, sweep in results.get("sweeps", {}).items()
        },
    }

    run_data_file = rm.get_path("run_data.json")
    with open(run_data_file, "w") as f:
        json.dump(run_data, f, indent=2, default=str)
    print(f"Saved run metadata to {run_data_file}")


def _save_sweeps(results, rm):
    """Save one compressed npz of state columns per formulation."""
    sweeps = results.get("sweeps", {})
    if not sweeps:
        return
    rm.sweeps_dir.mkdir(parents=True, exist_ok=True)
    for formulation, sweep in sweeps.items():
        np.savez_compressed(rm.sweeps_dir / f"{formulation}.npz", **sweep.to_arrays())


# =============================================================================
# Loading Functions
# =============================================================================

def load_run(run_name, problem, base_dir=None):
    """
    Load a saved run from disk.

    Args:
        run_name: Name of the run (subfolder name)
        problem: Problem name (e.g., "ogden_uniaxial")
        base_dir: Base directory for results. Defaults to project_root/results.

    Returns:
        dict with config (DictConfig), run_metrics, run_dir and
        sweeps: {formulation: {"strategy", "failures", "arrays"}}

    Example:
        raw = load_run("k500", "ogden_uniaxial")
    """
    rm = ResultsManager(problem=problem, run_name=run_name, base_dir=base_dir)
    run_dir = rm.run_dir

    if not run_dir.exists():
        raise FileNotFoundError(f"Run directory not found: {run_dir}")

    config, run_metrics, sweep_meta = _load_run_metadata(rm)
    sweeps = _load_sweeps(rm, sweep_meta)

    return {
        "config": config,
        "run_metrics": run_metrics,
        "elapsed_time": run_metrics.get("elapsed_time"),
        "run_dir": str(run_dir),
        "sweeps": sweeps,
    }


def _load_run_metadata(rm):
    """Load config, run_metrics and sweep metadata from run_data.json."""
    config, run_metrics, sweep_meta = {}, {}, {}

    run_data_file = rm.get_path("run_data.json")
    if run_data_file.exists():
        with open(run_data_file, "r") as f:
            run_data = json.load(f)
        config = OmegaConf.create(run_data.get("config", {}))
        run_metrics = run_data.get("run_metrics", {})
        sweep_meta = run_data.get("sweeps", {})
    else:
        print(f"Warning: No run_data.json found in {rm.run_dir}")

    return config, run_metrics, sweep_meta


def _load_sweeps(rm, sweep_meta):
    """Load the per-formulation npz files listed in the metadata."""
    sweeps = {}
    for formulation, meta in sweep_meta.items():
        path = rm.sweeps_dir / f"{formulation}.npz"
        if not path.exists():
            print(f"Warning: missing sweep file {path}")
            continue
        with np.load(path) as data:
            arrays = {name: data[name] for name in data.files}
        sweeps[formulation] = {
            "strategy": meta.get("strategy"),
            "failures": meta.get("failures", []),
            "arrays": arrays,
        }
    return sweeps
