"""
overview_color.py
-----------------
Decides the fill color of a node or edge from the current analysis result.

One routine serves both roles: it reads an EntityView (expression, p-value,
coverage key) and the RoleProfile of the role being drawn. Branches are
evaluated in order and the first one that yields a color wins:

  1. no analysis result          -> initial
  2. coverage mode with a value  -> enrichment(coverage)
  3. expression-like analyses    -> expression(normalized value) or hit
  4. GSA regulation              -> regulation sheet entry or hit
  5. over-representation         -> enrichment(p / threshold)
  6. anything else               -> fadeout
"""

from __future__ import annotations
import logging
import math
from typing import Callable, Dict, Optional

from overview_model import AnalysisContext, AnalysisType, EntityView, VisualEdge, VisualNode
from overview_profile import ColorProfile, RegulationSheet, RoleProfile

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

def _value_at(view: EntityView, t: int) -> Optional[float]:
    """Series value at time step t, or None when there is nothing to read."""
    if not view.expression or t < 0 or t >= len(view.expression):
        return None
    value = view.expression[t]
    if value is None or not math.isfinite(value):
        return None
    return float(value)


def _significant(p_value: Optional[float], context: AnalysisContext) -> bool:
    return p_value is not None and p_value <= context.threshold


# ---------------------------
# Per analysis type
# ---------------------------
# Each returns a color, or None to fall through to fadeout.

def _no_result(view: EntityView, role: RoleProfile, context: AnalysisContext, t: int) -> Optional[str]:
    return role.initial


def _expression(view: EntityView, role: RoleProfile, context: AnalysisContext, t: int) -> Optional[str]:
    value = _value_at(view, t)
    if value is None:
        return None
    if not _significant(view.p_value, context):
        return role.hit
    lo, hi = context.min, context.max
    if lo is None or hi is None or hi == lo:
        # no spread: nothing to place on the gradient
        logger.debug("Expression summary has no spread (min=%s, max=%s)", lo, hi)
        return role.hit
    val = 1 - (value - lo) / (hi - lo)
    return role.expression(val)


def _regulation(view: EntityView, role: RoleProfile, context: AnalysisContext, t: int) -> Optional[str]:
    value = _value_at(view, t)
    if value is None:
        return None
    if not _significant(view.p_value, context):
        return role.hit
    code = math.floor(value)
    color = RegulationSheet(role.expression).get(code)
    if color is None:
        logger.debug("No regulation color for code %s", code)
        return role.hit
    return color


def _enrichment(view: EntityView, role: RoleProfile, context: AnalysisContext, t: int) -> Optional[str]:
    if not _significant(view.p_value, context):
        return None
    return role.enrichment(view.p_value / context.threshold)


_BY_TYPE: Dict[AnalysisType, Callable[[EntityView, RoleProfile, AnalysisContext, int], Optional[str]]] = {
    AnalysisType.NONE: _no_result,
    AnalysisType.EXPRESSION: _expression,
    AnalysisType.GSA_STATISTICS: _expression,
    AnalysisType.GSVA: _expression,
    AnalysisType.GSA_REGULATION: _regulation,
    AnalysisType.OVERREPRESENTATION: _enrichment,
    AnalysisType.SPECIES_COMPARISON: _enrichment,
}

_missing = set(AnalysisType) - set(_BY_TYPE)
if _missing:
    raise RuntimeError(f"No color rule for analysis types: {sorted(t.name for t in _missing)}")


def select_color(view: EntityView, role: RoleProfile, context: AnalysisContext, t: int = 0) -> str:
    """Fill color for one entity at time step t. Never raises for missing data."""
    if not context.has_result:
        return role.initial
    if context.coverage:
        c = context.coverage_for(view.coverage_key)
        if c is not None:
            return role.enrichment(c)
    color = _BY_TYPE[context.type](view, role, context, t)
    return color if color is not None else role.fadeout


class ColorSelector:
    """Binds a profile and an analysis context; colors nodes and edges."""

    def __init__(self, profile: ColorProfile, context: AnalysisContext):
        self.profile = profile
        self.context = context

    def node_color(self, node: VisualNode, t: int = 0) -> str:
        return select_color(EntityView.of_node(node), self.profile.node, self.context, t)

    def edge_color(self, edge: VisualEdge, t: int = 0) -> str:
        return select_color(EntityView.of_edge(edge), self.profile.edge, self.context, t)
