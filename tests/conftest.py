"""Pytest configuration and fixtures."""

import matplotlib

matplotlib.use("Agg")

import pytest

from overview_model import OverviewDiagram, Point, VisualNode, build_demo_overview
from overview_profile import ColorProfile, get_profile


@pytest.fixture
def profile() -> ColorProfile:
    """The default built-in profile."""
    return get_profile("Copper")


@pytest.fixture
def demo_diagram() -> OverviewDiagram:
    return build_demo_overview()


@pytest.fixture
def make_node():
    """Factory for nodes at the origin with optional analysis data."""
    def _make(node_id=1, expression=None, p_value=None, **kwargs) -> VisualNode:
        kwargs.setdefault("point", Point(0.0, 0.0))
        return VisualNode(id=node_id, expression=expression, p_value=p_value, **kwargs)
    return _make
