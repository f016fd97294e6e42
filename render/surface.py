"""Off-screen raster surface drawing a Scene with matplotlib's 3D axes.

Scene coordinates are y-up; matplotlib's 3D axes are z-up, so (x, y, z) is
plotted as (x, z, y).
"""

from __future__ import annotations

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from analyzer.logging import get_logger

from .errors import RenderError
from .model import Scene, SceneNode, Shape


log = get_logger("surface")

EXTENT = 10.0
CYLINDER_FACETS = 16


class RasterSurface:
    def __init__(self, width: int = 640, height: int = 480, dpi: int = 100) -> None:
        self.width = width
        self.height = height
        self.dpi = dpi
        self.ready = False
        self._figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self._canvas = FigureCanvasAgg(self._figure)
        self._axes = self._figure.add_subplot(projection="3d")
        self._closed = False

    def draw(self, scene: Scene, azimuth: float = 45.0) -> None:
        if self._closed:
            raise RenderError("Surface is closed")
        ax = self._axes
        ax.cla()
        self._figure.set_facecolor(scene.background)
        ax.set_facecolor(scene.background)
        ax.set_axis_off()
        ax.set_xlim(-EXTENT, EXTENT)
        ax.set_ylim(-EXTENT, EXTENT)
        ax.set_zlim(-3.0, EXTENT)
        ax.view_init(elev=30, azim=azimuth)
        for node in scene.nodes:
            _DRAWERS[node.shape](ax, node)
        self._canvas.draw()
        self.ready = True

    def grab_frame(self) -> np.ndarray:
        """Return the last drawn frame as an (H, W, 3) uint8 array."""
        if not self.ready:
            raise RenderError("Nothing has been drawn yet")
        buffer = np.asarray(self._canvas.buffer_rgba())
        return buffer[..., :3].copy()

    def close(self) -> None:
        if self._closed:
            return
        self._figure.clear()
        self.ready = False
        self._closed = True
        log.debug("Surface closed")


def _draw_grid(ax, node: SceneNode) -> None:
    half = node.size / 2
    ticks = np.linspace(-half, half, int(node.size // 2) + 1)
    y = -2.0
    for t in ticks:
        ax.plot([t, t], [-half, half], [y, y], color=node.color, linewidth=0.3)
        ax.plot([-half, half], [t, t], [y, y], color=node.color, linewidth=0.3)


def _draw_cylinder(ax, node: SceneNode) -> None:
    x, y, z = node.position
    theta = np.linspace(0, 2 * np.pi, CYLINDER_FACETS + 1)
    radii = np.array([[node.radius_bottom], [node.radius_top]])
    heights = np.array([[y - node.height / 2], [y + node.height / 2]])
    xs = x + radii * np.cos(theta)
    zs = z + radii * np.sin(theta)
    ys = np.repeat(heights, theta.size, axis=1)
    ax.plot_surface(xs, zs, ys, color=node.color, alpha=node.opacity, linewidth=0, shade=True)


def _draw_box(ax, node: SceneNode) -> None:
    x, y, z = node.position
    s = node.size
    ax.bar3d(x - s / 2, z - s / 2, y - s / 2, s, s, s, color=node.color, alpha=node.opacity)


def _draw_sphere(ax, node: SceneNode) -> None:
    x, y, z = node.position
    ax.scatter([x], [z], [y], s=(node.radius * 40) ** 2, color=node.color, alpha=node.opacity)


def _draw_label(ax, node: SceneNode) -> None:
    x, y, z = node.position
    ax.text(x, z, y, node.text or "", color="white", fontsize=max(6, node.size * 24), ha="center")


def _draw_points(ax, node: SceneNode) -> None:
    if not node.points:
        return
    pts = np.asarray(node.points)
    ax.scatter(pts[:, 0], pts[:, 2], pts[:, 1], s=2, c=np.asarray(node.point_colors), alpha=node.opacity)


_DRAWERS = {
    Shape.GRID: _draw_grid,
    Shape.CYLINDER: _draw_cylinder,
    Shape.BOX: _draw_box,
    Shape.SPHERE: _draw_sphere,
    Shape.LABEL: _draw_label,
    Shape.POINTS: _draw_points,
}
