"""Conversion of rendered figures into HTML-embeddable payloads."""

from __future__ import annotations

import base64
import io
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt


if TYPE_CHECKING:
    import plotly.graph_objects as go
    from matplotlib.figure import Figure


def figure_to_png(fig: Figure, *, dpi: int = 110) -> bytes:
    """Render ``fig`` to PNG bytes and close it."""
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    buffer.seek(0)
    return buffer.getvalue()


def figure_to_data_uri(fig: Figure, *, dpi: int = 110) -> str:
    """Encode ``fig`` as a base64 PNG ``data:`` URI (the figure is closed)."""
    encoded = base64.b64encode(figure_to_png(fig, dpi=dpi)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def plotly_to_html(fig: go.Figure, *, include_plotlyjs: bool = True) -> str:
    """HTML fragment for an interactive Plotly figure.

    With ``include_plotlyjs=True`` the plotly.js bundle is inlined, so the
    document stays self-contained; pass False for every further figure.
    """
    return fig.to_html(full_html=False, include_plotlyjs=include_plotlyjs)
