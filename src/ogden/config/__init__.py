"""
Configuration management using Hydra.

Provides simple config loading with easy notebook overrides:

    # Load the default sweep config
    cfg = load_config("ogden_uniaxial")

    # Override specific values
    cfg = load_config("ogden_uniaxial", overrides=["material.m1=8", "solver.strategy=interpolate"])

    # Modify config after loading
    cfg = load_config("ogden_uniaxial")
    cfg.loading.applied_stretch = 1.5
    cfg.solver.fail_fast = True
"""

from pathlib import Path
from typing import Optional, Dict, Any

from omegaconf import DictConfig, OmegaConf
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra


def get_config_path() -> Path:
    """Get the path to the configs directory."""
    current_path = Path(__file__).resolve()
    project_root = current_path.parent.parent.parent.parent
    config_path = project_root / "configs"

    if not config_path.exists():
        raise FileNotFoundError(f"Config directory not found at {config_path}")

    return config_path


def load_config(
    config_name: str = "ogden_uniaxial",
    overrides: Optional[list] = None,
) -> DictConfig:
    """
    Load a problem configuration.

    Args:
        config_name: Name of the config file in configs/ (without .yaml)
        overrides: List of override strings using dot notation

    Returns:
        DictConfig object (mutable - can modify directly)

    Examples:
        cfg = load_config()

        cfg = load_config("ogden_uniaxial", overrides=[
            "material.k=500",
            "loading.n_data_points=20",
            "formulations=[unconstrained]",
        ])
    """
    config_path = get_config_path()
    overrides = overrides or []

    # Clear any existing Hydra instance
    GlobalHydra.instance().clear()

    try:
        with initialize_config_dir(version_base=None, config_dir=str(config_path)):
            cfg = compose(config_name=config_name, overrides=overrides)
    except Exception:
        GlobalHydra.instance().clear()
        raise

    return cfg


def config_to_dict(cfg: DictConfig) -> Dict[str, Any]:
    """Resolved plain-container copy of a config, as stored in run results."""
    return OmegaConf.to_container(cfg, resolve=True)


def dict_to_config(d: Dict[str, Any]) -> DictConfig:
    """Build a DictConfig from a plain dict, e.g. a config stored in run_data.json."""
    return OmegaConf.create(d)


def set_nested(cfg: DictConfig, key: str, value: Any) -> None:
    """
    Set a nested config value using dot notation.

    Example:
        set_nested(cfg, "material.m1", 8.0)
    """
    OmegaConf.update(cfg, key, value, merge=False)


def print_config(cfg: DictConfig):
    """Print a config as YAML."""
    print(OmegaConf.to_yaml(cfg))
