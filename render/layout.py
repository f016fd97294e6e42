"""Deterministic layout of an AnalysisResult as a 3D scene."""

from __future__ import annotations

import colorsys
import math
import random
from typing import List

from matplotlib.colors import to_hex

from analyzer.model import AnalysisResult

from .model import NodeRole, Scene, SceneNode, Shape


PLATFORM_Y = -2.0
FUNCTION_RING = 4.0
CLASS_RING = 6.0
LABEL_SIZE = 0.3
MAX_TOWER_HEIGHT = 5.0

FUNCTION_COLOR = "#3498db"
CLASS_COLOR = "#e74c3c"
VARIABLE_COLOR = "#2ecc71"


def _segment_color(index: int) -> str:
    hue = ((index * 30) % 360) / 360.0
    return to_hex(colorsys.hls_to_rgb(hue, 0.5, 0.7))


def _label(node_id: str, text: str, x: float, y: float, z: float) -> SceneNode:
    return SceneNode(
        id=node_id,
        role=NodeRole.LABEL,
        shape=Shape.LABEL,
        position=(x, y, z),
        size=LABEL_SIZE,
        text=text,
    )


def _function_pillars(result: AnalysisResult) -> List[SceneNode]:
    nodes: List[SceneNode] = []
    count = len(result.functions)
    for index, func in enumerate(result.functions):
        height = 3 + index * 0.5
        angle = (index / count) * math.pi * 2
        x = math.cos(angle) * FUNCTION_RING
        z = math.sin(angle) * FUNCTION_RING
        y = height / 2 + PLATFORM_Y
        nodes.append(
            SceneNode(
                id=f"function-{index}",
                role=NodeRole.FUNCTION,
                shape=Shape.CYLINDER,
                position=(x, y, z),
                color=FUNCTION_COLOR,
                radius_top=0.3,
                radius_bottom=0.3,
                height=height,
                text=func.name,
            )
        )
        nodes.append(_label(f"function-{index}-label", func.name, x, y + height / 2 + 0.5, z))
    return nodes


def _class_cubes(result: AnalysisResult, rng: random.Random) -> List[SceneNode]:
    nodes: List[SceneNode] = []
    count = max(len(result.classes), 1)
    for index, cls in enumerate(result.classes):
        size = 1 + index * 0.2
        angle = (index / count) * math.pi * 2 + math.pi / 4
        x = math.cos(angle) * CLASS_RING
        z = math.sin(angle) * CLASS_RING
        y = size / 2 + PLATFORM_Y
        nodes.append(
            SceneNode(
                id=f"class-{index}",
                role=NodeRole.CLASS,
                shape=Shape.BOX,
                position=(x, y, z),
                rotation=(rng.random() * math.pi, rng.random() * math.pi, 0.0),
                color=CLASS_COLOR,
                opacity=0.8,
                size=size,
                text=cls.name,
            )
        )
        nodes.append(_label(f"class-{index}-label", cls.name, x, y + size / 2 + 0.5, z))
    return nodes


def _variable_spheres(result: AnalysisResult, rng: random.Random, limit: int) -> List[SceneNode]:
    nodes: List[SceneNode] = []
    for index, var in enumerate(result.variables[:limit]):
        radius = 0.2 + (index % 3) * 0.1
        nodes.append(
            SceneNode(
                id=f"variable-{index}",
                role=NodeRole.VARIABLE,
                shape=Shape.SPHERE,
                position=((rng.random() - 0.5) * 10, radius - 1, (rng.random() - 0.5) * 10),
                color=VARIABLE_COLOR,
                radius=radius,
                text=var.name,
            )
        )
    return nodes


def _complexity_tower(complexity: int, line_count: int) -> List[SceneNode]:
    nodes = [
        SceneNode(
            id="tower-base",
            role=NodeRole.TOWER_BASE,
            shape=Shape.CYLINDER,
            position=(0.0, 0.5 + PLATFORM_Y, 0.0),
            color="#9b59b6",
            radius_top=2.0,
            radius_bottom=2.5,
            height=1.0,
        )
    ]
    tower_height = min(line_count / 50, MAX_TOWER_HEIGHT)
    for index in range(complexity):
        step = tower_height / complexity
        nodes.append(
            SceneNode(
                id=f"tower-segment-{index}",
                role=NodeRole.TOWER_SEGMENT,
                shape=Shape.CYLINDER,
                position=(0.0, 1 + index * step + PLATFORM_Y, 0.0),
                color=_segment_color(index),
                radius_top=1.5 - index * 0.1,
                radius_bottom=1.6 - index * 0.1,
                height=step,
            )
        )
    nodes.append(
        SceneNode(
            id="tower-top",
            role=NodeRole.TOWER_TOP,
            shape=Shape.SPHERE,
            position=(0.0, 1 + tower_height + 0.8 + PLATFORM_Y, 0.0),
            color="#f1c40f",
            radius=0.8,
        )
    )
    return nodes


def _particles(rng: random.Random, count: int) -> SceneNode:
    points = [
        ((rng.random() - 0.5) * 30, rng.random() * 10, (rng.random() - 0.5) * 30)
        for _ in range(count)
    ]
    colors = [(rng.random(), rng.random(), rng.random()) for _ in range(count)]
    return SceneNode(
        id="particles",
        role=NodeRole.PARTICLES,
        shape=Shape.POINTS,
        opacity=0.6,
        size=0.1,
        points=points,
        point_colors=colors,
    )


def build_scene(
    result: AnalysisResult,
    *,
    max_variables: int = 20,
    particle_count: int = 100,
    seed: int = 0,
) -> Scene:
    """Lay out one primitive per function, class and (up to max_variables) variable,
    a tower sized by complexity and line count, and a particle cloud.
    """
    rng = random.Random(seed)
    nodes: List[SceneNode] = [
        SceneNode(id="grid", role=NodeRole.GRID, shape=Shape.GRID, size=20.0, color="#444444"),
        SceneNode(
            id="platform",
            role=NodeRole.PLATFORM,
            shape=Shape.CYLINDER,
            position=(0.0, PLATFORM_Y, 0.0),
            color="#2c3e50",
            radius_top=8.0,
            radius_bottom=8.0,
            height=0.5,
        ),
    ]
    nodes.extend(_function_pillars(result))
    nodes.extend(_class_cubes(result, rng))
    nodes.extend(_variable_spheres(result, rng, max_variables))
    nodes.extend(_complexity_tower(result.complexity, result.line_count))
    if particle_count > 0:
        nodes.append(_particles(rng, particle_count))
    return Scene(nodes=nodes, complexity=result.complexity, line_count=result.line_count)
