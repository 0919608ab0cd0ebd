"""Shared plotting configuration (style, palettes, font sizes)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import matplotlib as mpl
import plotly.io as pio
import seaborn as sns


@dataclass
class PlottingConfig:
    """Reusable plotting style that can be applied across figures.

    ``quality_palette`` colours the ordinal quality score (low to high) and
    ``quartile_palette`` colours quartile bins of a third attribute in
    multivariate scatter plots.
    """

    style: str = "whitegrid"
    palette: str | list[str] = "tab10"
    quality_palette: str = "RdYlGn"
    quartile_palette: str = "viridis"
    font_family: str = "DejaVu Sans"
    font_scale: float = 1.0
    title_size: int = 14
    label_size: int = 12
    tick_size: int = 10
    figure_dpi: int = 100
    savefig_dpi: int = 110
    context: str = "notebook"
    plotly_template: str = "plotly_white"
    plotly_colorway: list[str] | None = None
    seaborn_kwargs: dict[str, Any] = field(default_factory=dict)

    def _rc_params(self) -> dict[str, Any]:
        palette_colors = sns.color_palette(self.palette)
        return {
            "axes.titlesize": self.title_size,
            "axes.labelsize": self.label_size,
            "xtick.labelsize": self.tick_size,
            "ytick.labelsize": self.tick_size,
            "figure.dpi": self.figure_dpi,
            "savefig.dpi": self.savefig_dpi,
            "axes.prop_cycle": mpl.cycler(color=palette_colors),
            "font.family": [self.font_family],
        }

    def _apply_theme(self) -> None:
        sns.set_theme(
            style=self.style,
            palette=sns.color_palette(self.palette),
            context=self.context,
            font_scale=self.font_scale,
            **self.seaborn_kwargs,
        )
        mpl.rcParams.update(self._rc_params())

        pio.templates.default = self.plotly_template
        if self.plotly_colorway is not None:
            pio.templates[self.plotly_template].layout.colorway = self.plotly_colorway

    def apply_global(self) -> None:
        """Apply plotting style globally (no automatic restore); used once per report run."""
        self._apply_theme()


# Default configuration used across plotting functions
DEFAULT_PLOT_CFG = PlottingConfig()


__all__ = ["DEFAULT_PLOT_CFG", "PlottingConfig"]
