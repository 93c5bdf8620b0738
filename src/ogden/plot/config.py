"""
Plotting configuration for stress-stretch figures.
Centralized settings for figure scaling, font sizes, and series colors.
"""

import matplotlib as mpl
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors

# Module-level variable to store the current plotting config
_current_config = None

# =============================================================================
# Series colors
# =============================================================================
SERIES_COLORS = {
    'S1': (212/255, 119/255, 110/255),   # Coral  #D4776E
    'S2': (156/255, 166/255, 90/255),    # Olive  #9CA65A
    'S3': (29/255, 141/255, 176/255),    # Blue   #1D8DB0
    'J': (47/255, 77/255, 93/255),       # Dark   #2F4D5D
}

# Principal stresses are drawn on top of each other (S1 = S2 for uniaxial
# loading), so the first series is the widest.
SERIES_WIDTHS = {'S1': 4.0, 'S2': 3.0, 'S3': 2.0, 'J': 2.0}

SERIES_LABELS = {
    'S1': r'$\sigma_1$',
    'S2': r'$\sigma_2$',
    'S3': r'$\sigma_3$',
    'J': r'$J$',
}

STRATEGY_CYCLE = [SERIES_COLORS['S3'], SERIES_COLORS['S1'], SERIES_COLORS['S2']]


def apply_series_colors():
    """Use the series palette as the matplotlib color cycle."""
    cycle_hex = [mcolors.rgb2hex(c) for c in SERIES_COLORS.values()]
    plt.rcParams['axes.prop_cycle'] = plt.cycler(color=cycle_hex)


class PlottingConfig:
    """Configuration class for figure and font settings."""

    def __init__(self, page_width_mm=160, title_font_size=9, axes_font_size=8, legend_font_size=9):
        """
        Initialize plotting configuration.

        Args:
            page_width_mm: Page width in millimeters (default 160mm)
            title_font_size: Title font size (default 9)
            axes_font_size: Axes and tick font size (default 8)
            legend_font_size: Legend font size (default 9)
        """
        self.page_width_mm = page_width_mm
        self.title_font_size = title_font_size
        self.axes_font_size = axes_font_size
        self.legend_font_size = legend_font_size

        self.page_width = self._mm_to_inches(page_width_mm)

        # Two square panels side by side on the page
        default_width = mpl.rcParamsDefault.get("figure.figsize", [6.4, 4.8])[0]
        self.scale = self.page_width / default_width * 0.5

    @staticmethod
    def _mm_to_inches(mm):
        """Convert millimeters to inches."""
        return mm / 25.4

    @property
    def figsize(self):
        """Square figure taking half the page width."""
        side = 0.5 * self.page_width
        return (side, side)

    def line_width(self, series):
        """Scaled line width for a series key (S1, S2, S3, J)."""
        return SERIES_WIDTHS.get(series, 1.5) * self.scale

    def apply_font_sizes(self):
        """Apply font size settings to matplotlib."""
        plt.rcParams.update({
            "font.size": self.axes_font_size,
            "axes.titlesize": self.title_font_size,
            "axes.labelsize": self.axes_font_size,
            "legend.fontsize": self.legend_font_size,
        })

    def apply_all(self):
        """Apply all settings at once."""
        self.apply_font_sizes()
        apply_series_colors()

    def set_as_current(self):
        """Set this config as the current plotting configuration."""
        set_current_config(self)

    def __repr__(self):
        return (f"PlottingConfig(page_width={self.page_width_mm}mm, "
                f"scale={self.scale:.2f}, title_fs={self.title_font_size}, "
                f"axes_fs={self.axes_font_size}, legend_fs={self.legend_font_size})")


def set_current_config(config):
    """Set the active plotting configuration and apply it immediately."""
    global _current_config
    _current_config = config
    if _current_config is not None:
        _current_config.apply_all()
    return _current_config


def get_current_config():
    """Get the current plotting configuration."""
    return _current_config


default_config = PlottingConfig()
set_current_config(default_config)

report_config = PlottingConfig(page_width_mm=160, title_font_size=9, axes_font_size=8, legend_font_size=9)
slides_config = PlottingConfig(page_width_mm=250, title_font_size=15, axes_font_size=15, legend_font_size=15)
