# Re-export core geometry API for convenience
from .geometry import (
    Affine2D,
    clamp_corner_radius,
    rotate_points,
    rounded_rect_polygon,
    rect_bounds,
    rect_corners,
)
