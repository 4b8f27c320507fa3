"""
overview_canvas.py
------------------
The drawing sink: ordered, append-only layers of shapes and labels that are
painted onto a matplotlib Axes at the end.

Layers always paint base -> selection -> flags -> text, whatever the order in
which shapes were submitted. Within a layer, submission order is kept, so
later shapes draw on top of earlier ones.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from overview_model import Point


@dataclass(frozen=True)
class Stroke:
    width: float
    capstyle: str = "round"
    joinstyle: str = "miter"


@dataclass(frozen=True)
class ShapeItem:
    path: Path
    color: str
    stroke: Stroke
    filled: bool = False


@dataclass(frozen=True)
class TextItem:
    text: str
    point: Point
    color: str


@dataclass
class ShapeLayer:
    name: str
    items: List[ShapeItem] = field(default_factory=list)

    def add(self, path: Path, color: str, stroke: Stroke, filled: bool = False) -> None:
        self.items.append(ShapeItem(path=path, color=color, stroke=stroke, filled=filled))

    def __iter__(self) -> Iterator[ShapeItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class TextLayer:
    name: str = "text"
    items: List[TextItem] = field(default_factory=list)

    def add(self, text: str, point: Point, color: str) -> None:
        self.items.append(TextItem(text=text, point=point, color=color))

    def __iter__(self) -> Iterator[TextItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class OverviewCanvas:
    base: ShapeLayer = field(default_factory=lambda: ShapeLayer("base"))
    selection: ShapeLayer = field(default_factory=lambda: ShapeLayer("selection"))
    flags: ShapeLayer = field(default_factory=lambda: ShapeLayer("flags"))
    text: TextLayer = field(default_factory=TextLayer)

    @property
    def shape_layers(self) -> Tuple[ShapeLayer, ShapeLayer, ShapeLayer]:
        return (self.base, self.selection, self.flags)

    @classmethod
    def merge(cls, canvases: Iterable["OverviewCanvas"]) -> "OverviewCanvas":
        """
        Concatenate canvases layer by layer, in the order given. Lets chunks of
        a diagram be rendered separately without changing the paint order.
        """
        merged = cls()
        for canvas in canvases:
            merged.base.items.extend(canvas.base.items)
            merged.selection.items.extend(canvas.selection.items)
            merged.flags.items.extend(canvas.flags.items)
            merged.text.items.extend(canvas.text.items)
        return merged

    def mark(self) -> Tuple[int, int, int, int]:
        """Current length of every layer, for a later rollback()."""
        return (len(self.base), len(self.selection), len(self.flags), len(self.text))

    def rollback(self, mark: Tuple[int, int, int, int]) -> None:
        """Drop everything added since mark() was taken."""
        for layer, n in zip((*self.shape_layers, self.text), mark):
            del layer.items[n:]

    def bounds(self, pad: float = 0.0) -> Optional[Tuple[float, float, float, float]]:
        """(xmin, ymin, xmax, ymax) over every shape and label, or None if empty."""
        chunks = [item.path.vertices for layer in self.shape_layers for item in layer]
        chunks += [np.array([[t.point.x, t.point.y]]) for t in self.text]
        if not chunks:
            return None
        pts = np.vstack(chunks)
        xmin, ymin = pts.min(axis=0) - pad
        xmax, ymax = pts.max(axis=0) + pad
        return (float(xmin), float(ymin), float(xmax), float(ymax))

    def paint(self, ax, font_size: int = 7) -> None:
        """Add every layer to the axes, later layers with a higher zorder."""
        for z, layer in enumerate(self.shape_layers, start=1):
            for item in layer:
                patch = PathPatch(
                    item.path,
                    facecolor=item.color if item.filled else "none",
                    edgecolor=item.color if item.stroke.width > 0 else "none",
                    linewidth=item.stroke.width,
                    capstyle=item.stroke.capstyle,
                    joinstyle=item.stroke.joinstyle,
                    zorder=z,
                )
                ax.add_patch(patch)
        z_text = len(self.shape_layers) + 1
        for label in self.text:
            ax.text(label.point.x, label.point.y, label.text, color=label.color,
                    fontsize=font_size, ha="center", va="center", zorder=z_text)
