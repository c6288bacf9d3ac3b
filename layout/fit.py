from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from shapely.geometry import Polygon

from shapes import rounded_rect_polygon

from .config import ShowerGeometry
from .scene import Scene, TubPlacement, tub_polygon

# Below this, overflow is float noise from sampling identical edges
AREA_EPS = 1e-6


@dataclass(frozen=True)
class FitReport:
    name: str
    fits: bool
    overflow_area: float  # cm² of tub outside the inner ring
    clearance_right: float
    clearance_top: float
    clearance_bottom: float

    def summary(self) -> str:
        if self.fits:
            return (
                f"{self.name}: fits the inner ring "
                f"(right {self.clearance_right:.1f} cm, top {self.clearance_top:.1f} cm, "
                f"bottom {self.clearance_bottom:.1f} cm spare)"
            )
        return f"{self.name}: protrudes from the inner ring by {self.overflow_area:.1f} cm²"


def inner_ring_geometry(shower: ShowerGeometry) -> Polygon:
    iw, ih = shower.inner_ring
    pts = rounded_rect_polygon(
        0.0, 0.0, iw, ih, shower.inner_ring_radius, corner_segments=shower.corner_segments
    )
    ring = Polygon(pts)
    if not ring.is_valid:
        ring = ring.buffer(0)
    return ring


def check_fit(placement: TubPlacement, shower: ShowerGeometry, ring: Optional[Polygon] = None) -> FitReport:
    """
    Compare a placed tub against the inner ring outline.
    Negative clearances mean the tub's bounding box crosses that ring edge.
    """
    if ring is None:
        ring = inner_ring_geometry(shower)
    tub = Polygon(tub_polygon(placement, shower.corner_segments))
    if not tub.is_valid:
        tub = tub.buffer(0)
    overflow = float(tub.difference(ring).area)
    rminx, rminy, rmaxx, rmaxy = ring.bounds
    tminx, tminy, tmaxx, tmaxy = tub.bounds
    return FitReport(
        name=placement.spec.name,
        fits=overflow <= AREA_EPS,
        overflow_area=overflow if overflow > AREA_EPS else 0.0,
        clearance_right=float(rmaxx - tmaxx),
        clearance_top=float(rmaxy - tmaxy),
        clearance_bottom=float(tminy - rminy),
    )


def check_scene_fits(scene: Scene) -> List[FitReport]:
    ring = inner_ring_geometry(scene.shower)
    return [check_fit(p, scene.shower, ring=ring) for p in scene.placements]
