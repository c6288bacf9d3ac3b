from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from matplotlib.colors import to_rgba

RGBA = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ShowerGeometry:
    """
    Fixed shower stall dimensions in centimeters (width x height).
    """
    outer_box: Tuple[float, float] = (84.0, 81.0)
    outer_ring: Tuple[float, float] = (78.0, 75.0)
    inner_ring: Tuple[float, float] = (60.0, 60.0)
    ring_corner_ratio: float = 0.08
    corner_segments: int = 24
    baby_size: Tuple[float, float] = (17.0, 40.0)
    plot_padding: float = 6.0

    @property
    def outer_ring_radius(self) -> float:
        return min(self.outer_ring) * self.ring_corner_ratio

    @property
    def inner_ring_radius(self) -> float:
        return min(self.inner_ring) * self.ring_corner_ratio

    @property
    def inner_half_width(self) -> float:
        return self.inner_ring[0] / 2.0

    def plot_limits(self) -> Tuple[float, float, float, float]:
        w, h = self.outer_box
        pad = self.plot_padding
        return (-w / 2.0 - pad, w / 2.0 + pad, -h / 2.0 - pad, h / 2.0 + pad)


@dataclass(frozen=True)
class SceneStyle:
    shower_border: str = "darkslategray"
    shower_outer_fill: RGBA = to_rgba("lightgray", 0.15)
    outer_ring_fill: RGBA = to_rgba("slategray", 0.10)
    inner_ring_fill: RGBA = to_rgba("steelblue", 0.07)
    shower_line_width: float = 2.0
    tub_fill: RGBA = to_rgba("orange", 0.25)
    tub_border: str = "darkorange"
    tub_line_width: float = 3.0
    stacked_fill_alpha: float = 0.22
    palette: Tuple[str, ...] = (
        "crimson",
        "steelblue",
        "forestgreen",
        "darkorange",
        "mediumvioletred",
        "teal",
        "sienna",
        "slateblue",
    )
    baby_fill: RGBA = to_rgba("hotpink", 0.18)
    baby_border: str = "deeppink"
    baby_line_width: float = 2.0

    def palette_color(self, index: int) -> str:
        return self.palette[index % len(self.palette)]


@dataclass(frozen=True)
class SceneConfig:
    shower: ShowerGeometry = field(default_factory=ShowerGeometry)
    style: SceneStyle = field(default_factory=SceneStyle)


DEFAULT_SHOWER = ShowerGeometry()
DEFAULT_SCENE_CONFIG = SceneConfig()
