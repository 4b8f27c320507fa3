"""
overview_view.py
----------------
View: Contains all code for rendering the pathway overview and saving it.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import AbstractSet, Any, Optional, Tuple

import matplotlib.pyplot as plt

from overview_canvas import OverviewCanvas, Stroke
from overview_color import ColorSelector
from overview_geometry import edge_geometry, node_geometry
from overview_model import AnalysisContext, OverviewDiagram, VisualEdge, VisualNode
from overview_profile import ColorProfile

logger = logging.getLogger(__name__)


# -----------------------------
# Drawing configuration
# -----------------------------

# base < selection < flag for each role, so stacked outlines stay visible
EDGE_STROKE = Stroke(1.0)
EDGE_SELECTION_STROKE = Stroke(2.0)
EDGE_FLAG_STROKE = Stroke(3.0)

NODE_STROKE = Stroke(0.0)  # fill only
NODE_SELECTION_STROKE = Stroke(1.0)
NODE_FLAG_STROKE = Stroke(2.0)

LABEL_COLOR = "black"
SELECTED_LABEL_COLOR = "blue"


@dataclass
class Style:
    bg: str = "white"
    label_size: int = 7
    figsize: Tuple[float, float] = (10, 8)
    dpi: int = 200
    pad: float = 10.0


# -----------------------------
# Renderers
# -----------------------------

class EdgeRenderer:
    def __init__(self, profile: ColorProfile, selector: ColorSelector, canvas: OverviewCanvas):
        self.profile = profile
        self.selector = selector
        self.canvas = canvas

    def render(self, edge: VisualEdge, t: int = 0) -> None:
        path = edge_geometry(edge.source.point, edge.target.point).path
        self.canvas.base.add(path, self.selector.edge_color(edge, t), EDGE_STROKE)
        if edge.selected:
            self.canvas.selection.add(path, self.profile.edge.selection, EDGE_SELECTION_STROKE)
        if edge.flagged:
            self.canvas.flags.add(path, self.profile.edge.flag, EDGE_FLAG_STROKE)


class NodeRenderer:
    def __init__(self, profile: ColorProfile, selector: ColorSelector, canvas: OverviewCanvas,
                 selected_ids: AbstractSet[Any] = frozenset()):
        self.profile = profile
        self.selector = selector
        self.canvas = canvas
        self.selected_ids = selected_ids

    def render(self, node: VisualNode, t: int = 0) -> None:
        path = node_geometry(node.point, node.ratio).path
        self.canvas.base.add(path, self.selector.node_color(node, t), NODE_STROKE, filled=True)
        if node.selected:
            self.canvas.selection.add(path, self.profile.node.selection, NODE_SELECTION_STROKE)
        if node.flagged:
            self.canvas.flags.add(path, self.profile.node.flag, NODE_FLAG_STROKE)
        self._text(node)

    def _text(self, node: VisualNode) -> None:
        if node.top_level:
            color = SELECTED_LABEL_COLOR if node.selected else LABEL_COLOR
            self.canvas.text.add(node.name, node.point, color)
        # Explicitly selected nodes get a label even below the top level
        if node.selected and node.id in self.selected_ids:
            self.canvas.text.add(node.name, node.point, SELECTED_LABEL_COLOR)


def render_overview(diagram: OverviewDiagram, profile: ColorProfile, context: AnalysisContext,
                    t: int = 0, selected_ids: AbstractSet[Any] = frozenset(),
                    canvas: Optional[OverviewCanvas] = None) -> OverviewCanvas:
    """
    Draw every edge, then every node, for analysis time step t.
    One entity failing is logged and skipped, with nothing of it left on the
    canvas; the rest still render.
    """
    if t < 0:
        raise ValueError(f"Time step must be >= 0, got {t}")
    canvas = canvas if canvas is not None else OverviewCanvas()
    selector = ColorSelector(profile, context)
    edges = EdgeRenderer(profile, selector, canvas)
    nodes = NodeRenderer(profile, selector, canvas, selected_ids)

    for edge in diagram.edges:
        mark = canvas.mark()
        try:
            edges.render(edge, t)
        except Exception:
            canvas.rollback(mark)
            logger.exception("Could not render edge %s->%s", edge.source.id, edge.target.id)
    for node in diagram.nodes.values():
        mark = canvas.mark()
        try:
            nodes.render(node, t)
        except Exception:
            canvas.rollback(mark)
            logger.exception("Could not render node %s", node.id)
    return canvas


def save_overview(canvas: OverviewCanvas, outpath: str = "overview.png", style: Optional[Style] = None,
                  title: Optional[str] = None) -> str:
    """Paint the canvas onto a fresh figure and save it. Returns the absolute path."""
    style = style or Style()
    fig, ax = plt.subplots(figsize=style.figsize, dpi=style.dpi)
    fig.patch.set_facecolor(style.bg)
    ax.set_facecolor(style.bg)

    canvas.paint(ax, font_size=style.label_size)

    bounds = canvas.bounds(pad=style.pad)
    if bounds is not None:
        xmin, ymin, xmax, ymax = bounds
        ax.set_xlim(xmin, xmax)
        # layout y grows downwards
        ax.set_ylim(ymax, ymin)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=10, color="black", pad=10)

    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)

    path = os.path.abspath(outpath)
    logger.info("Saved overview to %s", path)
    return path
