import unittest
import sys
import shutil
import tempfile
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from ogden.models.uniaxial import SweepResult, compare_strategies, stretch_samples, sweep
from ogden.physics import MaterialParameters
from ogden.plot import (
    PlottingConfig,
    get_current_config,
    plot_jacobian,
    plot_results,
    plot_stress,
    plot_strategy_comparison,
    set_current_config,
    slides_config,
)


class TestPlot(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp(prefix="ogden_plots_"))
        self.params = MaterialParameters()
        self.stretches = stretch_samples(1.3, 8)

    def tearDown(self):
        plt.close("all")
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_stress_title(self):
        result = sweep(self.params, self.stretches, "constrained")
        fig, ax = plt.subplots()
        lines = plot_stress(ax, result)
        self.assertEqual(len(lines), 3)
        self.assertTrue(ax.get_title().startswith("Constrained form. Cauchy stress, min:"))
        self.assertIn(f"max: {result.S3.max():.5g}", ax.get_title())

    def test_jacobian_title(self):
        result = sweep(self.params, self.stretches, "unconstrained")
        fig, ax = plt.subplots()
        plot_jacobian(ax, result)
        self.assertTrue(ax.get_title().startswith("Unconstrained form. Jacobian, min:"))

    def test_empty_sweep(self):
        fig, ax = plt.subplots()
        plot_stress(ax, SweepResult("uncoupled", "root"))
        self.assertIn("no solved samples", ax.get_title())

    def test_plot_results_saves_figures(self):
        sweeps = {f: sweep(self.params, self.stretches, f) for f in ("constrained", "uncoupled")}
        with redirect_stdout(StringIO()):
            figures = plot_results({"sweeps": sweeps}, save_dir=self.test_dir)
        self.assertEqual(set(figures), {"constrained", "uncoupled"})
        for formulation in sweeps:
            self.assertTrue((self.test_dir / f"{formulation}_stress.png").exists())
            self.assertTrue((self.test_dir / f"{formulation}_jacobian.png").exists())

    def test_strategy_comparison(self):
        comparison = compare_strategies(self.params, self.stretches, "unconstrained")
        path = self.test_dir / "comparison.png"
        fig, ax = plot_strategy_comparison(comparison, save_path=path)
        self.assertTrue(path.exists())
        self.assertEqual(len(ax.get_lines()), 2)

    def test_current_config(self):
        previous = get_current_config()
        try:
            set_current_config(slides_config)
            self.assertIs(get_current_config(), slides_config)
            self.assertGreater(slides_config.line_width("S1"), slides_config.line_width("S3"))
            self.assertEqual(plt.rcParams["axes.titlesize"], 15)
        finally:
            set_current_config(previous)

    def test_figsize(self):
        config = PlottingConfig(page_width_mm=254)
        self.assertAlmostEqual(config.figsize[0], 5.0)
        self.assertEqual(config.figsize[0], config.figsize[1])


if __name__ == '__main__':
    unittest.main()
