"""Rendering of report sections into one self-contained HTML document."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from .figures import figure_to_data_uri, plotly_to_html


if TYPE_CHECKING:
    import pandas as pd
    import plotly.graph_objects as go
    from matplotlib.figure import Figure


logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
_REPORT_TEMPLATE_NAME = "report.html.j2"


@dataclass(frozen=True)
class ReportFigure:
    """A figure ready for embedding: either a PNG ``data:`` URI or a Plotly HTML fragment."""

    caption: str
    data_uri: str | None = None
    html: Markup | None = None

    @classmethod
    def from_matplotlib(cls, fig: Figure, caption: str, *, dpi: int = 110) -> ReportFigure:
        """Encode a matplotlib figure (the figure is closed)."""
        return cls(caption=caption, data_uri=figure_to_data_uri(fig, dpi=dpi))

    @classmethod
    def from_plotly(cls, fig: go.Figure, caption: str, *, include_plotlyjs: bool = True) -> ReportFigure:
        """Embed an interactive Plotly figure."""
        return cls(caption=caption, html=Markup(plotly_to_html(fig, include_plotlyjs=include_plotlyjs)))


@dataclass(frozen=True)
class ReportTable:
    """A captioned table rendered to HTML from a DataFrame."""

    caption: str
    html: Markup

    @classmethod
    def from_frame(cls, df: pd.DataFrame, caption: str, *, float_format: str = "{:.3f}", index: bool = True) -> ReportTable:
        """Render ``df`` with ``float_format`` applied to float cells; NaN shows as ``NaN``."""
        html = df.to_html(
            classes="data-table",
            border=0,
            index=index,
            na_rep="NaN",
            float_format=float_format.format,
            escape=True,
        )
        return cls(caption=caption, html=Markup(html))


@dataclass
class ReportSection:
    """One titled section of the report.

    Attributes:
        title: Section heading.
        paragraphs: Narrative paragraphs (plain text, escaped on render).
        tables: Tables shown after the narrative.
        figures: Figures shown after the tables.
    """

    title: str
    paragraphs: list[str] = field(default_factory=list)
    tables: list[ReportTable] = field(default_factory=list)
    figures: list[ReportFigure] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        """HTML id used by the table of contents."""
        return "".join(ch if ch.isalnum() else "-" for ch in self.title.lower()).strip("-")


class ReportRenderer:
    """Render :class:`ReportSection` objects with the bundled Jinja2 template.

    Example:
        >>> renderer = ReportRenderer(title="Red Wine EDA")
        >>> renderer.render([ReportSection("Summary", ["1599 rows."])], "report.html")
    """

    def __init__(self, title: str, *, template_dir: str | Path | None = None) -> None:
        self.title = title
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir or _TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_html(self, sections: Sequence[ReportSection]) -> str:
        """Render ``sections`` to an HTML string."""
        if not sections:
            raise ValueError("A report needs at least one section")
        template = self._env.get_template(_REPORT_TEMPLATE_NAME)
        return template.render(
            title=self.title,
            sections=sections,
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )

    def render(self, sections: Sequence[ReportSection], output_path: str | Path) -> Path:
        """Render ``sections`` and write the document to ``output_path``.

        The HTML is rendered completely in memory before the file is opened, so a
        rendering error never leaves a partial document behind.

        Returns:
            The path written to.
        """
        html = self.render_html(sections)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        n_figures = sum(len(s.figures) for s in sections)
        logger.info("Wrote report with %d sections and %d figures to %s", len(sections), n_figures, output_path)
        return output_path
