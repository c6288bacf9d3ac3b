from .renderer import (
    draw_scene_on_axis,
    render_scene,
    render_scene_grid,
    grid_shape,
)
