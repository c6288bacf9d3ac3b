from __future__ import annotations

from typing import Optional, Sequence, Tuple
import io
import math
import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from PIL import Image

from layout.scene import Scene, SceneShape


def _draw_shape(ax: plt.Axes, shape: SceneShape) -> None:
    if shape.kind == "rect":
        xmin, xmax, ymin, ymax = shape.bounds
        ax.add_patch(
            Rectangle(
                (xmin, ymin),
                xmax - xmin,
                ymax - ymin,
                facecolor=shape.fill,
                edgecolor=shape.edge_color,
                linewidth=shape.line_width,
                label=shape.label,
            )
        )
        return
    pts = np.asarray(shape.points, dtype=float)
    ax.fill(
        pts[:, 0],
        pts[:, 1],
        fc=shape.fill,
        ec=shape.edge_color,
        linewidth=shape.line_width,
        joinstyle="round",
        label=shape.label,
    )


def draw_scene_on_axis(
    ax: plt.Axes,
    scene: Scene,
    show_legend: bool = True,
    title_fontsize: Optional[float] = None,
) -> None:
    """
    Draws every scene shape in order onto a Matplotlib axis.
    Units stay square so rounded corners are not squashed into ellipses.
    """
    for shape in scene.shapes:
        _draw_shape(ax, shape)

    xmin, xmax, ymin, ymax = scene.limits
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.grid(True, alpha=0.2, linestyle="--")
    ax.set_title(scene.title, fontsize=title_fontsize)
    ax.set_xlabel("Width (cm)")
    ax.set_ylabel("Depth (cm)")
    if show_legend:
        ax.legend(loc="upper right", fontsize=8, framealpha=0.85)


def render_scene(
    scene: Scene,
    out_path: Optional[str] = None,
    width: int = 1200,
    height: int = 900,
    dpi: int = 100,
) -> Optional[Image.Image]:
    """
    Renders one scene at width x height pixels.
    Writes to out_path (format from the extension), or returns the PIL Image
    when out_path is None (in-memory rendering).
    """
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    draw_scene_on_axis(ax, scene)

    if out_path is None:
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=dpi, facecolor="white")
        plt.close(fig)
        buffer.seek(0)
        img = Image.open(buffer)
        img.load()
        return img

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    try:
        fig.savefig(out_path, dpi=dpi, facecolor="white")
    finally:
        plt.close(fig)
    return None


def grid_shape(n: int, cols: Optional[int] = None) -> Tuple[int, int]:
    """
    (rows, cols) for n tiles; cols defaults to a square-ish ceil(sqrt(n)).
    """
    if n <= 0:
        raise ValueError("grid needs at least one tile")
    if cols is None or cols <= 0:
        cols = int(math.ceil(math.sqrt(n)))
    rows = int(math.ceil(n / cols))
    return rows, cols


def render_scene_grid(
    scenes: Sequence[Scene],
    out_path: str,
    cols: Optional[int] = None,
    tile_width: int = 1400,
    tile_height: int = 1000,
    margin: int = 40,
    gutter: int = 30,
    dpi: int = 100,
) -> Tuple[int, int]:
    """
    Renders a grid of independent scenes into one image.
    Returns the canvas size in pixels (width, height).
    """
    n = len(scenes)
    if n == 0:
        raise ValueError("No scenes provided")
    rows, cols = grid_shape(n, cols)
    # Margins and gutters only size the canvas; constrained layout spaces the tiles
    total_w = cols * tile_width + (cols - 1) * gutter + 2 * margin
    total_h = rows * tile_height + (rows - 1) * gutter + 2 * margin

    fig, axes = plt.subplots(rows, cols, figsize=(total_w / dpi, total_h / dpi), dpi=dpi, constrained_layout=True)
    fig.patch.set_facecolor("white")

    if rows == 1 and cols == 1:
        axes = np.array([[axes]])
    elif rows == 1:
        axes = np.array([axes])
    elif cols == 1:
        axes = np.expand_dims(axes, axis=1)

    for idx, scene in enumerate(scenes):
        r = idx // cols
        c = idx % cols
        draw_scene_on_axis(axes[r, c], scene)

    for idx in range(n, rows * cols):
        r = idx // cols
        c = idx % cols
        axes[r, c].axis("off")

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    try:
        fig.savefig(out_path, dpi=dpi, facecolor="white")
    finally:
        plt.close(fig)
    return total_w, total_h
