"""Scene construction, animation and frame capture for analysis results.

Modules:
- model.py: Scene graph data structures.
- layout.py: AnalysisResult to Scene.
- renderer.py: Frame scheduler and scene renderer.
- surface.py: Off-screen matplotlib raster surface.
- capture.py: Frame recorder and GIF export.
- errors.py: Renderer and capture exceptions.
"""

from .capture import CaptureState, FrameRecorder, RecordedMedia, suggest_file_name
from .layout import build_scene
from .model import Scene, SceneNode
from .renderer import FrameScheduler, SceneRenderer

__all__ = [
    "CaptureState",
    "FrameRecorder",
    "FrameScheduler",
    "RecordedMedia",
    "Scene",
    "SceneNode",
    "SceneRenderer",
    "build_scene",
    "suggest_file_name",
]
