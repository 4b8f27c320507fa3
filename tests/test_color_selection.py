import math

import pytest

from overview_color import ColorSelector, select_color
from overview_model import AnalysisContext, AnalysisType, EntityView, VisualEdge
from overview_profile import RegulationSheet

EXPRESSION_FAMILY = [AnalysisType.EXPRESSION, AnalysisType.GSA_STATISTICS, AnalysisType.GSVA]
ENRICHMENT_FAMILY = [AnalysisType.OVERREPRESENTATION, AnalysisType.SPECIES_COMPARISON]


def test_no_result_is_initial_regardless_of_data(profile, make_node) -> None:
    node = make_node(expression=[5.0], p_value=0.001)
    ctx = AnalysisContext(type=AnalysisType.NONE, min=0.0, max=10.0, coverage=True,
                          coverages={1: 0.5})
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.initial


def test_no_result_edge_uses_edge_initial(profile, make_node) -> None:
    edge = VisualEdge(source=make_node(1), target=make_node(2))
    assert ColorSelector(profile, AnalysisContext()).edge_color(edge) == profile.edge.initial


def test_coverage_overrides_type_logic(profile, make_node) -> None:
    node = make_node(expression=[5.0], p_value=0.9)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0, coverage=True,
                          coverages={1: 0.3})
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.enrichment(0.3)


def test_coverage_absent_falls_through(profile, make_node) -> None:
    node = make_node(p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.OVERREPRESENTATION, coverage=True, coverages={99: 0.3})
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.enrichment(0.01 / 0.05)


def test_edge_coverage_looks_up_target(profile, make_node) -> None:
    edge = VisualEdge(source=make_node(1), target=make_node(2))
    ctx = AnalysisContext(type=AnalysisType.OVERREPRESENTATION, coverage=True,
                          coverages={1: 0.9, 2: 0.2})
    assert ColorSelector(profile, ctx).edge_color(edge) == profile.edge.enrichment(0.2)


@pytest.mark.parametrize("kind", EXPRESSION_FAMILY)
def test_expression_at_threshold_boundary(profile, make_node, kind) -> None:
    node = make_node(expression=[5.0], p_value=0.05)
    ctx = AnalysisContext(type=kind, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.expression(0.5)


@pytest.mark.parametrize("kind", EXPRESSION_FAMILY)
def test_expression_not_significant_is_hit(profile, make_node, kind) -> None:
    node = make_node(expression=[5.0], p_value=0.051)
    ctx = AnalysisContext(type=kind, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.hit


def test_expression_uses_time_step_and_inverts(profile, make_node) -> None:
    node = make_node(expression=[0.0, 10.0, 2.5], p_value=0.01)
    selector = ColorSelector(profile, AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0))
    assert selector.node_color(node, 0) == profile.node.expression(1.0)
    assert selector.node_color(node, 1) == profile.node.expression(0.0)
    assert selector.node_color(node, 2) == profile.node.expression(0.75)


def test_expression_without_spread_is_hit(profile, make_node) -> None:
    node = make_node(expression=[3.0], p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.GSVA, min=3.0, max=3.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.hit


def test_expression_without_series_is_fadeout(profile, make_node) -> None:
    node = make_node(p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.fadeout


def test_expression_time_step_past_series_is_fadeout(profile, make_node) -> None:
    node = make_node(expression=[1.0], p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node, 3) == profile.node.fadeout


def test_expression_missing_p_value_is_hit(profile, make_node) -> None:
    node = make_node(expression=[1.0])
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.hit


def test_edge_expression_reads_target_series(profile, make_node) -> None:
    target = make_node(2, expression=[7.5], p_value=0.02)
    edge = VisualEdge(source=make_node(1, expression=[0.0], p_value=0.02), target=target)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert edge.p_value == 0.02
    assert ColorSelector(profile, ctx).edge_color(edge) == profile.edge.expression(0.25)


def test_edge_own_p_value_wins(profile, make_node) -> None:
    target = make_node(2, expression=[7.5], p_value=0.02)
    edge = VisualEdge(source=make_node(1), target=target, p_value=0.5)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).edge_color(edge) == profile.edge.hit


def test_regulation_uses_floor_of_value(profile, make_node) -> None:
    node = make_node(expression=[1.7, -1.5], p_value=0.01)
    selector = ColorSelector(profile, AnalysisContext(type=AnalysisType.GSA_REGULATION))
    sheet = RegulationSheet(profile.node.expression)
    assert selector.node_color(node, 0) == sheet.get(1)
    assert selector.node_color(node, 1) == sheet.get(-2)


def test_regulation_not_significant_is_hit(profile, make_node) -> None:
    node = make_node(expression=[2.0], p_value=0.2)
    ctx = AnalysisContext(type=AnalysisType.GSA_REGULATION)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.hit


def test_regulation_without_series_is_fadeout(profile, make_node) -> None:
    node = make_node(p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.GSA_REGULATION)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.fadeout


def test_regulation_code_outside_sheet_is_hit(profile, make_node) -> None:
    node = make_node(expression=[5.0], p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.GSA_REGULATION)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.hit


@pytest.mark.parametrize("kind", ENRICHMENT_FAMILY)
def test_enrichment_scales_p_value(profile, make_node, kind) -> None:
    node = make_node(p_value=0.01)
    ctx = AnalysisContext(type=kind)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.enrichment(0.01 / 0.05)


@pytest.mark.parametrize("p_value", [None, 0.051, 0.5])
def test_enrichment_not_significant_is_fadeout(profile, make_node, p_value) -> None:
    node = make_node(p_value=p_value)
    ctx = AnalysisContext(type=AnalysisType.OVERREPRESENTATION)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.fadeout


def test_selection_is_pure(profile, make_node) -> None:
    series = [5.0, 6.0]
    node = make_node(expression=series, p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    view = EntityView.of_node(node)
    first = select_color(view, profile.node, ctx, 1)
    second = select_color(view, profile.node, ctx, 1)
    assert first == second
    assert series == [5.0, 6.0]
    assert ctx.min == 0.0 and ctx.max == 10.0


def test_nan_value_falls_through(profile, make_node) -> None:
    node = make_node(expression=[math.nan], p_value=0.01)
    ctx = AnalysisContext(type=AnalysisType.EXPRESSION, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.fadeout


@pytest.mark.parametrize("kind", [AnalysisType.GSA_REGULATION, AnalysisType.EXPRESSION])
@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_infinite_value_falls_through(profile, make_node, kind, value) -> None:
    node = make_node(expression=[value], p_value=0.01)
    ctx = AnalysisContext(type=kind, min=0.0, max=10.0)
    assert ColorSelector(profile, ctx).node_color(node) == profile.node.fadeout


def test_edge_regulation_uses_edge_sheet(profile, make_node) -> None:
    target = make_node(2, expression=[-1.0], p_value=0.01)
    edge = VisualEdge(source=make_node(1, expression=[2.0], p_value=0.01), target=target)
    ctx = AnalysisContext(type=AnalysisType.GSA_REGULATION)
    sheet = RegulationSheet(profile.edge.expression)
    assert ColorSelector(profile, ctx).edge_color(edge) == sheet.get(-1)


def test_edge_overrepresentation_scales_p_value(profile, make_node) -> None:
    edge = VisualEdge(source=make_node(1, p_value=0.9), target=make_node(2, p_value=0.02))
    ctx = AnalysisContext(type=AnalysisType.OVERREPRESENTATION)
    assert ColorSelector(profile, ctx).edge_color(edge) == profile.edge.enrichment(0.02 / 0.05)
