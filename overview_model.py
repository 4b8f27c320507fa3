"""
overview_model.py
-----------------
Model: Contains all data classes for the pathway overview (nodes, edges, layout
points) and the analysis context that drives the coloring.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence


# Significance cut-off shared by every analysis type
P_VALUE_THRESHOLD = 0.05


# ---------------------------
# Layout objects
# ---------------------------

@dataclass(frozen=True)
class Point:
    """A layout coordinate. Assigned once by the layout, never moved."""
    x: float
    y: float


@dataclass
class VisualNode:
    """
    A node is one pathway drawn as a circle.

    ratio:
      0..1, relative size of the pathway; controls the drawn diameter.

    expression:
      one value per analysis time step (expression-like analyses only).

    selected / flagged:
      independent; may be toggled between renders.
    """
    id: Any
    point: Point
    ratio: float = 0.0
    name: str = ""
    top_level: bool = False
    selected: bool = False
    flagged: bool = False
    expression: Optional[Sequence[float]] = None
    p_value: Optional[float] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.ratio <= 1.0:
            raise ValueError(f"Node {self.id!r} ratio must be within [0, 1], got {self.ratio}")


@dataclass
class VisualEdge:
    """
    An edge is a directional link: source -> target.

    The edge owns no data of its own besides flags; expression values come
    from the target node. p_value defaults to the target's p-value.
    """
    source: VisualNode
    target: VisualNode
    selected: bool = False
    flagged: bool = False
    p_value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.p_value is None:
            self.p_value = self.target.p_value


# ---------------------------
# Analysis
# ---------------------------

class AnalysisType(Enum):
    NONE = "NONE"
    EXPRESSION = "EXPRESSION"
    GSA_STATISTICS = "GSA_STATISTICS"
    GSVA = "GSVA"
    GSA_REGULATION = "GSA_REGULATION"
    OVERREPRESENTATION = "OVERREPRESENTATION"
    SPECIES_COMPARISON = "SPECIES_COMPARISON"


@dataclass(frozen=True)
class AnalysisContext:
    """
    Everything the coloring needs to know about an analysis result.

    min / max:
      expression summary of the whole result, used to normalize series values.

    coverage:
      when True, per-entity coverage ratios override the type-specific coloring
      for entities that have one.
    """
    type: AnalysisType = AnalysisType.NONE
    min: Optional[float] = None
    max: Optional[float] = None
    coverage: bool = False
    coverages: Mapping[Any, float] = field(default_factory=dict)
    threshold: float = P_VALUE_THRESHOLD

    @property
    def has_result(self) -> bool:
        return self.type is not AnalysisType.NONE

    def coverage_for(self, key: Any) -> Optional[float]:
        return self.coverages.get(key)


@dataclass(frozen=True)
class EntityView:
    """What the color selection reads from a node or an edge."""
    expression: Optional[Sequence[float]]
    p_value: Optional[float]
    coverage_key: Any

    @classmethod
    def of_node(cls, node: VisualNode) -> "EntityView":
        return cls(expression=node.expression, p_value=node.p_value, coverage_key=node.id)

    @classmethod
    def of_edge(cls, edge: VisualEdge) -> "EntityView":
        # edges carry no series; everything but the p-value comes from the target
        return cls(expression=edge.target.expression, p_value=edge.p_value,
                   coverage_key=edge.target.id)


# ---------------------------
# Diagram container
# ---------------------------

@dataclass
class OverviewDiagram:
    """
    The whole overview: nodes by id plus the edges between them.
    Edges are drawn first, so nodes sit on top of them.
    """
    nodes: Dict[Any, VisualNode] = field(default_factory=dict)
    edges: List[VisualEdge] = field(default_factory=list)

    def add_node(self, node_id: Any, x: float, y: float, ratio: float = 0.0, name: str = "",
                 top_level: bool = False, expression: Optional[Sequence[float]] = None,
                 p_value: Optional[float] = None) -> VisualNode:
        if node_id in self.nodes:
            raise ValueError(f"Duplicate node id: {node_id}")
        node = VisualNode(id=node_id, point=Point(x, y), ratio=ratio, name=name,
                          top_level=top_level, expression=expression, p_value=p_value)
        self.nodes[node_id] = node
        return node

    def add_edge(self, source: Any, target: Any, p_value: Optional[float] = None) -> VisualEdge:
        if source not in self.nodes or target not in self.nodes:
            raise ValueError(f"Edge references unknown node: {source}->{target}")
        edge = VisualEdge(source=self.nodes[source], target=self.nodes[target], p_value=p_value)
        self.edges.append(edge)
        return edge

    def get(self, node_id: Any) -> VisualNode:
        return self.nodes[node_id]

    @property
    def time_steps(self) -> int:
        """Number of analysis time steps (longest expression series, at least 1)."""
        lengths = [len(n.expression) for n in self.nodes.values() if n.expression]
        return max(lengths, default=1)

    @classmethod
    def from_layout(cls, layout: Mapping[str, Any]) -> "OverviewDiagram":
        """
        Build a diagram from an already parsed layout mapping:

          {"nodes": [{"dbId": 1, "x": 0, "y": 0, "ratio": 0.3, "name": "...", "topLevel": true}, ...],
           "edges": [{"from": 1, "to": 2}, ...]}
        """
        diagram = cls()
        for item in layout.get("nodes", []):
            diagram.add_node(item["dbId"], float(item["x"]), float(item["y"]),
                             ratio=float(item.get("ratio", 0.0)),
                             name=item.get("name", ""),
                             top_level=bool(item.get("topLevel", False)),
                             expression=item.get("exp"),
                             p_value=item.get("pValue"))
        for item in layout.get("edges", []):
            diagram.add_edge(item["from"], item["to"])
        return diagram


# ---------------------------
# Build the demo overview
# ---------------------------

def build_demo_overview() -> OverviewDiagram:
    """
    A small overview with two top-level pathways and their sub-pathways.
    Expression series have three time steps.
    """
    d = OverviewDiagram()

    # ---- Top-level pathways (always labeled)
    d.add_node(1, 0.0, 0.0, ratio=0.9, name="Metabolism", top_level=True,
               expression=[2.0, 4.5, 7.0], p_value=0.001)
    d.add_node(2, 60.0, 0.0, ratio=0.7, name="Signal Transduction", top_level=True,
               expression=[8.0, 6.0, 3.5], p_value=0.02)

    # ---- Sub-pathways of Metabolism
    d.add_node(11, -20.0, 25.0, ratio=0.4, name="Glycolysis",
               expression=[1.0, 2.0, 9.0], p_value=0.04)
    d.add_node(12, 10.0, 30.0, ratio=0.3, name="TCA cycle",
               expression=[5.0, 5.0, 5.0], p_value=0.3)
    d.add_node(121, 25.0, 50.0, ratio=0.1, name="Pyruvate metabolism")

    # ---- Sub-pathways of Signal Transduction
    d.add_node(21, 50.0, 30.0, ratio=0.5, name="MAPK signaling",
               expression=[0.5, 3.0, 10.0], p_value=0.01)
    d.add_node(22, 80.0, 25.0, ratio=0.2, name="WNT signaling", p_value=0.2)

    # ---- Containment links
    d.add_edge(1, 11)
    d.add_edge(1, 12)
    d.add_edge(12, 121)
    d.add_edge(2, 21)
    d.add_edge(2, 22)

    return d
