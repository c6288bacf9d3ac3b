from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple
import math
import numpy as np
from matplotlib.colors import to_rgba

from shapes import rounded_rect_polygon, rect_bounds, rect_corners

from .config import RGBA, SceneConfig, ShowerGeometry, DEFAULT_SCENE_CONFIG


class InvalidBathtubSpec(ValueError):
    """Raised when a bathtub record cannot be laid out."""

    def __init__(self, field_name: str, value: object, reason: str):
        super().__init__(f"{field_name} {reason} (got {value!r})")
        self.field_name = field_name
        self.value = value


@dataclass(frozen=True)
class BathtubSpec:
    name: str
    width_cm: float
    height_cm: float
    corner_radius_percent: float

    @property
    def area(self) -> float:
        return self.width_cm * self.height_cm

    @property
    def corner_radius_cm(self) -> float:
        return min(self.width_cm, self.height_cm) * (self.corner_radius_percent / 100.0)

    @property
    def is_portrait(self) -> bool:
        # Width is expected to be the shorter side
        return self.width_cm <= self.height_cm

    def validate(self) -> "BathtubSpec":
        for field_name in ("width_cm", "height_cm", "corner_radius_percent"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise InvalidBathtubSpec(field_name, value, "must be a finite number")
        if not self.width_cm > 0:
            raise InvalidBathtubSpec("width_cm", self.width_cm, "must be positive")
        if not self.height_cm > 0:
            raise InvalidBathtubSpec("height_cm", self.height_cm, "must be positive")
        if not 0 <= self.corner_radius_percent <= 100:
            raise InvalidBathtubSpec(
                "corner_radius_percent", self.corner_radius_percent, "must be within [0, 100]"
            )
        return self


ShapeKind = Literal["polygon", "rect"]
ShapeRole = Literal["shower_outer", "outer_ring", "inner_ring", "tub", "baby"]


@dataclass(frozen=True)
class SceneShape:
    kind: ShapeKind
    role: ShapeRole
    points: np.ndarray  # (N, 2), clockwise; rects carry their 4 corners
    fill: RGBA
    edge_color: str
    line_width: float
    label: Optional[str] = None
    bounds: Optional[Tuple[float, float, float, float]] = None  # rects only: xmin, xmax, ymin, ymax

    def __post_init__(self):
        self.points.setflags(write=False)


@dataclass(frozen=True)
class TubPlacement:
    spec: BathtubSpec
    center_x: float
    center_y: float
    radius: float


@dataclass(frozen=True)
class Scene:
    title: str
    shapes: Tuple[SceneShape, ...]
    placements: Tuple[TubPlacement, ...]
    innermost: Optional[int]
    limits: Tuple[float, float, float, float]
    shower: ShowerGeometry

    def shapes_with_role(self, role: ShapeRole) -> Tuple[SceneShape, ...]:
        return tuple(s for s in self.shapes if s.role == role)


def format_cm(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def place_tub(spec: BathtubSpec, shower: ShowerGeometry) -> TubPlacement:
    """
    Push the tub against the inner ring's left wall, centered top-to-bottom.
    Oversized tubs are placed the same way and simply protrude.
    """
    center_x = -shower.inner_half_width + spec.width_cm / 2.0
    return TubPlacement(spec=spec, center_x=center_x, center_y=0.0, radius=spec.corner_radius_cm)


def select_innermost(bathtubs: Sequence[BathtubSpec]) -> Optional[int]:
    """
    Index of the smallest-area tub; the first one wins on ties.
    """
    best: Optional[int] = None
    min_area = float("inf")
    for i, spec in enumerate(bathtubs):
        if spec.area < min_area:
            min_area = spec.area
            best = i
    return best


def _centered_rect(
    role: ShapeRole,
    cx: float,
    cy: float,
    w: float,
    h: float,
    fill: RGBA,
    edge_color: str,
    line_width: float,
    label: Optional[str],
) -> SceneShape:
    bounds = rect_bounds(cx, cy, w, h)
    return SceneShape(
        kind="rect",
        role=role,
        points=rect_corners(bounds),
        fill=fill,
        edge_color=edge_color,
        line_width=line_width,
        label=label,
        bounds=bounds,
    )


def _shower_shapes(config: SceneConfig) -> list[SceneShape]:
    shower = config.shower
    style = config.style
    ow, oh = shower.outer_box
    rw, rh = shower.outer_ring
    iw, ih = shower.inner_ring
    outer_ring_pts = rounded_rect_polygon(
        0.0, 0.0, rw, rh, shower.outer_ring_radius, rotation_degrees=0, corner_segments=shower.corner_segments
    )
    inner_ring_pts = rounded_rect_polygon(
        0.0, 0.0, iw, ih, shower.inner_ring_radius, rotation_degrees=0, corner_segments=shower.corner_segments
    )
    return [
        _centered_rect(
            "shower_outer", 0.0, 0.0, ow, oh,
            style.shower_outer_fill, style.shower_border, style.shower_line_width,
            f"Shower Outer {format_cm(ow)}×{format_cm(oh)} cm",
        ),
        SceneShape(
            kind="polygon",
            role="outer_ring",
            points=outer_ring_pts,
            fill=style.outer_ring_fill,
            edge_color=style.shower_border,
            line_width=style.shower_line_width,
            label=f"Outer Ring {format_cm(rw)}×{format_cm(rh)} cm",
        ),
        SceneShape(
            kind="polygon",
            role="inner_ring",
            points=inner_ring_pts,
            fill=style.inner_ring_fill,
            edge_color=style.shower_border,
            line_width=style.shower_line_width,
            label=f"Inner Ring {format_cm(iw)}×{format_cm(ih)} cm",
        ),
    ]


def tub_polygon(placement: TubPlacement, corner_segments: int) -> np.ndarray:
    spec = placement.spec
    return rounded_rect_polygon(
        placement.center_x,
        placement.center_y,
        spec.width_cm,
        spec.height_cm,
        placement.radius,
        rotation_degrees=0,
        corner_segments=corner_segments,
    )


def build_scene(
    bathtubs: Sequence[BathtubSpec],
    with_baby: bool = False,
    config: SceneConfig = DEFAULT_SCENE_CONFIG,
    labels: Optional[Sequence[str]] = None,
    stacked: Optional[bool] = None,
    title: Optional[str] = None,
) -> Scene:
    """
    Lay out the shower geometry plus every tub and return the shapes to draw.

    Single mode (one tub, not stacked) uses the fixed tub colors and the model
    name as the title. Stacked mode colors tubs from the rotating palette and
    labels them with ``labels[i]`` (falling back to the tub name); the baby is
    then centered on the innermost tub. Records are not validated here.
    """
    if stacked is None:
        stacked = len(bathtubs) != 1
    if labels is not None and len(labels) != len(bathtubs):
        raise ValueError("labels must match bathtubs one-to-one")
    shower = config.shower
    style = config.style

    shapes = _shower_shapes(config)
    placements = tuple(place_tub(spec, shower) for spec in bathtubs)

    for i, placement in enumerate(placements):
        spec = placement.spec
        dims = f"{format_cm(spec.width_cm)}×{format_cm(spec.height_cm)} cm"
        if stacked:
            color = style.palette_color(i)
            fill = to_rgba(color, style.stacked_fill_alpha)
            edge = color
            source = labels[i] if labels is not None else spec.name
            label = f"{source}: {dims}"
        else:
            fill = style.tub_fill
            edge = style.tub_border
            label = f"Bathtub {dims}"
        shapes.append(
            SceneShape(
                kind="polygon",
                role="tub",
                points=tub_polygon(placement, shower.corner_segments),
                fill=fill,
                edge_color=edge,
                line_width=style.tub_line_width,
                label=label,
            )
        )

    innermost = select_innermost(bathtubs)
    if with_baby and innermost is not None:
        # Single mode has exactly one tub, so innermost is that tub
        ref = placements[innermost]
        bw, bh = shower.baby_size
        shapes.append(
            _centered_rect(
                "baby", ref.center_x, ref.center_y, bw, bh,
                style.baby_fill, style.baby_border, style.baby_line_width,
                f"Baby {format_cm(bh)}×{format_cm(bw)} cm",
            )
        )

    if title is None:
        if stacked:
            title = f"Bathtub Comparison (stacked) — {len(bathtubs)} model(s)"
        else:
            name = bathtubs[0].name if bathtubs else ""
            title = name if name and name.strip() else "Bathtub Model"

    return Scene(
        title=title,
        shapes=tuple(shapes),
        placements=placements,
        innermost=innermost,
        limits=shower.plot_limits(),
        shower=shower,
    )
