from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math
import numpy as np


@dataclass(frozen=True)
class Affine2D:
    """
    2D affine transform x -> A x + t
    """
    A: np.ndarray  # shape (2, 2)
    t: np.ndarray  # shape (2,)

    def __post_init__(self):
        if self.A.shape != (2, 2):
            raise ValueError("A must be 2x2")
        if self.t.shape != (2,):
            raise ValueError("t must be length-2")

    def apply(self, point_xy: np.ndarray) -> np.ndarray:
        return self.A @ point_xy + self.t

    def apply_many(self, points_xy: np.ndarray) -> np.ndarray:
        """
        Apply to an (N, 2) array of points, preserving row order.
        """
        pts = np.asarray(points_xy, dtype=float).reshape(-1, 2)
        return pts @ self.A.T + self.t

    # ---- Constructors and composition ----
    @staticmethod
    def from_translate(dx: float, dy: float) -> "Affine2D":
        return Affine2D(A=np.eye(2), t=np.array([dx, dy], dtype=float))

    @staticmethod
    def from_rotation(theta_radians: float) -> "Affine2D":
        c = math.cos(theta_radians)
        s = math.sin(theta_radians)
        return Affine2D(A=np.array([[c, -s], [s, c]], dtype=float), t=np.zeros(2))

    @staticmethod
    def from_rotation_about(theta_radians: float, cx: float, cy: float) -> "Affine2D":
        return (
            Affine2D.from_translate(-cx, -cy)
            .then(Affine2D.from_rotation(theta_radians))
            .then(Affine2D.from_translate(cx, cy))
        )

    def then(self, after: "Affine2D") -> "Affine2D":
        """
        First apply self, then apply 'after'.
        y = after.apply(self.apply(x))
        """
        A_new = after.A @ self.A
        t_new = after.A @ self.t + after.t
        return Affine2D(A=A_new, t=t_new)


# Quarter arcs in clockwise path order: (corner sign x, corner sign y, start deg, end deg)
_CORNER_ARCS: Tuple[Tuple[int, int, float, float], ...] = (
    (-1, 1, 180.0, 90.0),    # top-left
    (1, 1, 90.0, 0.0),       # top-right
    (1, -1, 0.0, -90.0),     # bottom-right
    (-1, -1, -90.0, -180.0), # bottom-left
)


def clamp_corner_radius(width: float, height: float, corner_radius: float) -> float:
    max_r = min(width, height) / 2.0
    return min(max(float(corner_radius), 0.0), max_r)


def rotate_points(points_xy: np.ndarray, center_x: float, center_y: float, degrees: float) -> np.ndarray:
    """
    Rotate points about (center_x, center_y), counter-clockwise positive.
    """
    T = Affine2D.from_rotation_about(math.radians(degrees), center_x, center_y)
    return T.apply_many(points_xy)


def rounded_rect_polygon(
    center_x: float,
    center_y: float,
    width: float,
    height: float,
    corner_radius: float,
    rotation_degrees: float = 0.0,
    corner_segments: int = 16,
) -> np.ndarray:
    """
    Sample a rectangle with circular-arc corners as a clockwise (N, 2) polygon.

    Starts on the west edge of the top-left arc. Every arc contributes
    corner_segments + 1 points including both endpoints, so neighbouring arcs
    share a duplicated seam point; N is always 4 * (corner_segments + 1).
    The radius is clamped to [0, min(width, height) / 2].
    """
    if not (math.isfinite(width) and math.isfinite(height)):
        raise ValueError(f"width and height must be finite, got {width} x {height}")
    if not width > 0.0:
        raise ValueError(f"width must be positive, got {width}")
    if not height > 0.0:
        raise ValueError(f"height must be positive, got {height}")
    if int(corner_segments) < 1:
        raise ValueError(f"corner_segments must be >= 1, got {corner_segments}")
    steps = int(corner_segments)
    r = clamp_corner_radius(width, height, corner_radius)
    ax = width / 2.0 - r
    ay = height / 2.0 - r

    t = np.linspace(0.0, 1.0, steps + 1)
    arcs = []
    for sx, sy, start_deg, end_deg in _CORNER_ARCS:
        ang = np.radians(start_deg) + t * (np.radians(end_deg) - np.radians(start_deg))
        xs = center_x + sx * ax + r * np.cos(ang)
        ys = center_y + sy * ay + r * np.sin(ang)
        arcs.append(np.stack([xs, ys], axis=1))
    pts = np.concatenate(arcs, axis=0)

    if rotation_degrees != 0:
        pts = rotate_points(pts, center_x, center_y, rotation_degrees)
    return pts


def rect_bounds(center_x: float, center_y: float, width: float, height: float) -> Tuple[float, float, float, float]:
    """
    Axis-aligned (xmin, xmax, ymin, ymax) of a centered rectangle.
    """
    hx = width / 2.0
    hy = height / 2.0
    return (center_x - hx, center_x + hx, center_y - hy, center_y + hy)


def rect_corners(bounds: Tuple[float, float, float, float]) -> np.ndarray:
    xmin, xmax, ymin, ymax = bounds
    # Clockwise from top-left, matching rounded_rect_polygon
    return np.array(
        [
            [xmin, ymax],
            [xmax, ymax],
            [xmax, ymin],
            [xmin, ymin],
        ],
        dtype=float,
    )
