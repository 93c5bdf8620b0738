"""
plot_uniaxial.py
----------------
Stress-stretch and Jacobian-stretch figures for uniaxial sweeps.
"""

from pathlib import Path

import matplotlib.pyplot as plt

from ogden.plot.config import get_current_config, SERIES_COLORS, SERIES_LABELS, STRATEGY_CYCLE


def _form_name(formulation):
    return f"{formulation.capitalize()} form"


def _style_axes(ax, legend=True):
    """Tight square axes with grid, legend outside on the right without frame."""
    if legend:
        ax.legend(loc="upper left", bbox_to_anchor=(1.02, 1.0), frameon=False)
    ax.autoscale(enable=True, axis="both", tight=True)
    ax.set_box_aspect(1)
    ax.grid(True)


def init_figure(figsize=None, dpi=150):
    """Single-axes figure sized from the current plotting config."""
    if figsize is None:
        figsize = get_current_config().figsize
    return plt.subplots(figsize=figsize, dpi=dpi)


def plot_stress(ax, result):
    """
    Plot the three principal stresses against lambda3.

    Args:
        ax: matplotlib axis
        result: SweepResult

    Returns:
        list of line artists (S1, S2, S3)
    """
    config = get_current_config()
    lambda3 = result.lambda3
    lines = []
    for key in ("S1", "S2", "S3"):
        line, = ax.plot(lambda3, getattr(result, key), '-', color=SERIES_COLORS[key],
                        linewidth=config.line_width(key), label=SERIES_LABELS[key])
        lines.append(line)

    if len(lambda3):
        S3 = result.S3
        ax.set_title(f"{_form_name(result.formulation)}. Cauchy stress, "
                     f"min: {S3.min():.5g}, max: {S3.max():.5g}")
    else:
        ax.set_title(f"{_form_name(result.formulation)}. Cauchy stress, no solved samples")
    ax.set_xlabel(r"$\lambda_3$")
    ax.set_ylabel(r"$\sigma$")
    _style_axes(ax)
    return lines


def plot_jacobian(ax, result):
    """Plot the (solved or imposed) Jacobian against lambda3."""
    config = get_current_config()
    lambda3 = result.lambda3
    line, = ax.plot(lambda3, result.J, '-', color=SERIES_COLORS['J'],
                    linewidth=config.line_width('J'), label=SERIES_LABELS['J'])

    if len(lambda3):
        J = result.J
        ax.set_title(f"{_form_name(result.formulation)}. Jacobian, "
                     f"min: {J.min():.5g}, max: {J.max():.5g}")
    else:
        ax.set_title(f"{_form_name(result.formulation)}. Jacobian, no solved samples")
    ax.set_xlabel(r"$\lambda_3$")
    ax.set_ylabel(r"$J$")
    _style_axes(ax)
    return line


def plot_results(results, save_dir=None, dpi=150):
    """
    Stress and Jacobian figures for every formulation of a run.

    Args:
        results: dict returned by run() or load_run()
        save_dir: if given, figures are saved there as {formulation}_stress.png
                  and {formulation}_jacobian.png
        dpi: figure resolution

    Returns:
        dict mapping formulation -> (stress_figure, jacobian_figure)
    """
    figures = {}
    for formulation, result in results["sweeps"].items():
        fig_s, ax_s = init_figure(dpi=dpi)
        plot_stress(ax_s, result)
        fig_j, ax_j = init_figure(dpi=dpi)
        plot_jacobian(ax_j, result)
        figures[formulation] = (fig_s, fig_j)

        if save_dir is not None:
            save_dir = Path(save_dir)
            save_dir.mkdir(parents=True, exist_ok=True)
            fig_s.savefig(save_dir / f"{formulation}_stress.png", bbox_inches="tight")
            fig_j.savefig(save_dir / f"{formulation}_jacobian.png", bbox_inches="tight")

    if save_dir is not None:
        print(f"Figures saved to {save_dir}")
    return figures


def plot_strategy_comparison(comparison, ax=None, save_path=None, dpi=150):
    """
    Jacobians from both solver strategies and their difference.

    Args:
        comparison: dict returned by compare_strategies()
        ax: existing axis (optional)
        save_path: path to save figure
    """
    if ax is None:
        fig, ax = init_figure(dpi=dpi)
    else:
        fig = ax.get_figure()

    lambda3 = comparison["lambda3"]
    ax.plot(lambda3, comparison["J_root"], '-', color=STRATEGY_CYCLE[0], label="root finding")
    ax.plot(lambda3, comparison["J_interpolate"], '--', color=STRATEGY_CYCLE[1], label="interpolation")
    ax.set_title(f"Strategy comparison, max |dJ|: {comparison['max_abs_diff']:.3e}")
    ax.set_xlabel(r"$\lambda_3$")
    ax.set_ylabel(r"$J$")
    _style_axes(ax)

    if save_path:
        fig.savefig(save_path, bbox_inches="tight")

    return fig, ax
