"""
overview_controller.py
----------------------
Controller: Handles selection/flag decoration, rendering across analysis time
steps, and the example analysis scenarios.
"""

from __future__ import annotations
import logging
from typing import AbstractSet, Any, Iterable, List, Optional

from overview_canvas import OverviewCanvas
from overview_model import AnalysisContext, AnalysisType, OverviewDiagram
from overview_profile import ColorProfile
from overview_view import Style, render_overview, save_overview

logger = logging.getLogger(__name__)


def decorate(diagram: OverviewDiagram,
             selected: Iterable[Any] = (),
             flagged: Iterable[Any] = ()) -> None:
    """
    Apply selection and flags by node id. Previous decoration is cleared.

    An edge is selected when both of its ends are selected, and flagged when
    its target is flagged.
    """
    selected = set(selected)
    flagged = set(flagged)
    unknown = (selected | flagged) - set(diagram.nodes)
    if unknown:
        logger.warning("Ignoring unknown node ids: %s", sorted(map(str, unknown)))
    for node_id, node in diagram.nodes.items():
        node.selected = node_id in selected
        node.flagged = node_id in flagged
    for edge in diagram.edges:
        edge.selected = edge.source.selected and edge.target.selected
        edge.flagged = edge.target.flagged


def render_time_series(diagram: OverviewDiagram,
                       profile: ColorProfile,
                       context: AnalysisContext,
                       steps: Optional[int] = None,
                       selected_ids: AbstractSet[Any] = frozenset()) -> List[OverviewCanvas]:
    """One canvas per analysis time step (defaults to every step the diagram has)."""
    if steps is None:
        steps = diagram.time_steps if context.has_result else 1
    return [render_overview(diagram, profile, context, t=t, selected_ids=selected_ids)
            for t in range(steps)]


def save_time_series(canvases: List[OverviewCanvas], prefix: str = "overview",
                     style: Optional[Style] = None) -> List[str]:
    paths = []
    for t, canvas in enumerate(canvases):
        paths.append(save_overview(canvas, f"{prefix}_t{t}.png", style=style, title=f"t = {t}"))
    return paths


# Example scenario: no analysis yet (everything in the initial color)
def scenario_no_analysis() -> AnalysisContext:
    return AnalysisContext(type=AnalysisType.NONE)


def scenario_expression() -> AnalysisContext:
    """Expression analysis; min/max span the demo series values."""
    return AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)


def scenario_overrepresentation() -> AnalysisContext:
    return AnalysisContext(type=AnalysisType.OVERREPRESENTATION)


def scenario_coverage(diagram: OverviewDiagram) -> AnalysisContext:
    """Coverage mode: every node's size ratio doubles as its coverage."""
    return AnalysisContext(type=AnalysisType.OVERREPRESENTATION, coverage=True,
                           coverages={k: n.ratio for k, n in diagram.nodes.items()})
