"""HTML report assembly for the red wine EDA."""

from .config import ColoredScatterSpec, ReportConfig
from .figures import figure_to_data_uri, plotly_to_html
from .pipeline import build_report, build_sections
from .renderer import ReportFigure, ReportRenderer, ReportSection, ReportTable


__all__ = [
    "ColoredScatterSpec",
    "ReportConfig",
    "ReportFigure",
    "ReportRenderer",
    "ReportSection",
    "ReportTable",
    "build_report",
    "build_sections",
    "figure_to_data_uri",
    "plotly_to_html",
]
