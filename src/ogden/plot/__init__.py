"""Plot package - stress-stretch plotting utilities."""

# Config exports
from .config import (
    PlottingConfig,
    default_config,
    report_config,
    slides_config,
    get_current_config,
    set_current_config,
    SERIES_COLORS,
    SERIES_LABELS,
    apply_series_colors,
)

# Uniaxial sweep figures
from .plot_uniaxial import (
    init_figure,
    plot_stress,
    plot_jacobian,
    plot_results,
    plot_strategy_comparison,
)

__all__ = [
    # Config
    "PlottingConfig",
    "default_config",
    "report_config",
    "slides_config",
    "get_current_config",
    "set_current_config",
    "SERIES_COLORS",
    "SERIES_LABELS",
    "apply_series_colors",
    # Figures
    "init_figure",
    "plot_stress",
    "plot_jacobian",
    "plot_results",
    "plot_strategy_comparison",
]
