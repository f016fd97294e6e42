from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


Vector = Tuple[float, float, float]


class Shape(str, Enum):
    GRID = "grid"
    CYLINDER = "cylinder"
    BOX = "box"
    SPHERE = "sphere"
    LABEL = "label"
    POINTS = "points"


class NodeRole(str, Enum):
    GRID = "grid"
    PLATFORM = "platform"
    FUNCTION = "function"
    CLASS = "class"
    VARIABLE = "variable"
    TOWER_BASE = "tower_base"
    TOWER_SEGMENT = "tower_segment"
    TOWER_TOP = "tower_top"
    LABEL = "label"
    PARTICLES = "particles"


class SceneNode(BaseModel):
    """One visual primitive. Dimensions are interpreted per shape:
    cylinder uses radius_top/radius_bottom/height, box uses width=height=depth=size,
    sphere uses radius, label uses size for its text height.
    """

    id: str
    role: NodeRole
    shape: Shape
    position: Vector = (0.0, 0.0, 0.0)
    rotation: Vector = (0.0, 0.0, 0.0)
    color: str = "#ffffff"
    opacity: float = 1.0
    radius: float = 0.0
    radius_top: float = 0.0
    radius_bottom: float = 0.0
    height: float = 0.0
    size: float = 0.0
    text: Optional[str] = None
    points: List[Vector] = []
    point_colors: List[Vector] = []


class Scene(BaseModel):
    background: str = "#0a0a0a"
    camera_position: Vector = (10.0, 10.0, 10.0)
    nodes: List[SceneNode] = Field(default_factory=list)
    complexity: int = 0
    line_count: int = 0
