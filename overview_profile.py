"""
overview_profile.py
-------------------
Color profiles: solid colors and gradients per role (node / edge), the
regulation sheet derived from a gradient, and the built-in named profiles.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from matplotlib.colors import LinearSegmentedColormap, is_color_like, to_hex


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def _check_color(color: str, where: str) -> str:
    if not is_color_like(color):
        raise ValueError(f"Invalid color {color!r} for {where}")
    return to_hex(color)


# ---------------------------
# Gradients
# ---------------------------

@dataclass(frozen=True)
class Gradient:
    """
    A continuous color scale: min -> (stop) -> max.

    Calling it with a value in 0..1 returns the interpolated hex color.
    """
    min: str
    max: str
    stop: Optional[str] = None
    _cmap: LinearSegmentedColormap = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        colors = [_check_color(self.min, "gradient min")]
        if self.stop is not None:
            colors.append(_check_color(self.stop, "gradient stop"))
        colors.append(_check_color(self.max, "gradient max"))
        object.__setattr__(self, "_cmap", LinearSegmentedColormap.from_list("gradient", colors))

    def __call__(self, value: float) -> str:
        return to_hex(self._cmap(clamp(float(value))))

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "Gradient":
        return cls(min=data["min"], max=data["max"], stop=data.get("stop"))


class RegulationSheet:
    """
    Discrete colors for regulation codes, taken from an expression gradient.

      2 significantly up      -> gradient(0.0)
      1 non-significantly up  -> gradient(0.25)
      0 not found / unchanged -> gradient(0.5)
     -1 non-significantly down-> gradient(0.75)
     -2 significantly down    -> gradient(1.0)

    Up-regulation sits at the low end of the gradient, the same side where
    high expression values land after normalization.
    """
    CODES = (2, 1, 0, -1, -2)

    def __init__(self, gradient: Gradient):
        self.gradient = gradient
        self._colors: Dict[int, str] = {
            code: gradient((2 - code) / 4.0) for code in self.CODES
        }

    @property
    def color_map(self) -> Dict[int, str]:
        return dict(self._colors)

    def get(self, code: int) -> Optional[str]:
        return self._colors.get(code)


# ---------------------------
# Profiles
# ---------------------------

@dataclass(frozen=True)
class RoleProfile:
    """Colors for one role (nodes or edges)."""
    initial: str
    fadeout: str
    hit: str
    selection: str
    flag: str
    enrichment: Gradient
    expression: Gradient

    def __post_init__(self) -> None:
        for name in ("initial", "fadeout", "hit", "selection", "flag"):
            object.__setattr__(self, name, _check_color(getattr(self, name), name))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoleProfile":
        return cls(
            initial=data["initial"],
            fadeout=data["fadeout"],
            hit=data["hit"],
            selection=data["selection"],
            flag=data["flag"],
            enrichment=Gradient.from_dict(data["enrichment"]),
            expression=Gradient.from_dict(data["expression"]),
        )


@dataclass(frozen=True)
class ColorProfile:
    name: str
    node: RoleProfile
    edge: RoleProfile


def load_profile(data: Mapping[str, Any]) -> ColorProfile:
    """
    Build a profile from an already parsed mapping:
      {"name": ..., "node": {...}, "edge": {...}}
    Each role holds initial/fadeout/hit/selection/flag colors and the
    enrichment/expression gradients as {"min", "stop" (optional), "max"}.
    """
    try:
        return ColorProfile(
            name=data.get("name", "custom"),
            node=RoleProfile.from_dict(data["node"]),
            edge=RoleProfile.from_dict(data["edge"]),
        )
    except KeyError as e:
        raise ValueError(f"Color profile is missing key {e}") from e


# Built-in profiles (colorblind-friendly enrichment scales)
PROFILES: Dict[str, Dict[str, Any]] = {
    "Copper": {
        "name": "Copper",
        "node": {
            "initial": "#e6e6e6", "fadeout": "#f0f0f0", "hit": "#8c8c8c",
            "selection": "#0066ff", "flag": "#ff00ff",
            "enrichment": {"min": "#ffc800", "stop": "#f28d00", "max": "#a0522d"},
            "expression": {"min": "#ffff00", "stop": "#ff8c00", "max": "#0000ff"},
        },
        "edge": {
            "initial": "#bfbfbf", "fadeout": "#e8e8e8", "hit": "#a6a6a6",
            "selection": "#0066ff", "flag": "#ff00ff",
            "enrichment": {"min": "#ffc800", "max": "#a0522d"},
            "expression": {"min": "#ffff00", "stop": "#ff8c00", "max": "#0000ff"},
        },
    },
    "Calcium Salts": {
        "name": "Calcium Salts",
        "node": {
            "initial": "#dadada", "fadeout": "#eeeeee", "hit": "#7f7f7f",
            "selection": "#e41a1c", "flag": "#984ea3",
            "enrichment": {"min": "#ff7f00", "max": "#ffff99"},
            "expression": {"min": "#e41a1c", "stop": "#ffffbf", "max": "#377eb8"},
        },
        "edge": {
            "initial": "#c8c8c8", "fadeout": "#e6e6e6", "hit": "#999999",
            "selection": "#e41a1c", "flag": "#984ea3",
            "enrichment": {"min": "#ff7f00", "max": "#ffff99"},
            "expression": {"min": "#e41a1c", "stop": "#ffffbf", "max": "#377eb8"},
        },
    },
    "Barium Lithium": {
        "name": "Barium Lithium",
        "node": {
            "initial": "#d9d9d9", "fadeout": "#ececec", "hit": "#737373",
            "selection": "#377eb8", "flag": "#ff7f00",
            "enrichment": {"min": "#4daf4a", "max": "#b3de69"},
            "expression": {"min": "#d73027", "stop": "#ffffbf", "max": "#1a9850"},
        },
        "edge": {
            "initial": "#c0c0c0", "fadeout": "#e3e3e3", "hit": "#8c8c8c",
            "selection": "#377eb8", "flag": "#ff7f00",
            "enrichment": {"min": "#4daf4a", "max": "#b3de69"},
            "expression": {"min": "#d73027", "stop": "#ffffbf", "max": "#1a9850"},
        },
    },
}

DEFAULT_PROFILE = "Copper"


def get_profile(name: str = DEFAULT_PROFILE) -> ColorProfile:
    """Look up a built-in profile by (case-insensitive) name."""
    for key, data in PROFILES.items():
        if key.lower() == name.lower():
            return load_profile(data)
    raise KeyError(f"Unknown color profile: {name}")
