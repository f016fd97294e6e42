from __future__ import annotations

import itertools
import math
from typing import Callable, Dict, Optional, Protocol

from analyzer.logging import get_logger
from analyzer.model import AnalysisResult

from .errors import RendererDisposedError
from .layout import build_scene
from .model import NodeRole, Scene


log = get_logger("render")

FrameCallback = Callable[[float], None]

PARTICLE_FALL = 0.01
PARTICLE_FLOOR = -5.0
PARTICLE_CEILING = 10.0
SPIN = 0.01
ORBIT_DEGREES_PER_SECOND = 12.0


class Surface(Protocol):
    ready: bool

    def draw(self, scene: Scene, azimuth: float) -> None: ...

    def close(self) -> None: ...


class FrameScheduler:
    """Host-side frame loop. Callbacks run once per step() until cancelled."""

    def __init__(self) -> None:
        self._callbacks: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        self.frame = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    @property
    def active(self) -> int:
        return len(self._callbacks)

    def step(self, dt: float = 1 / 30) -> None:
        self.frame += 1
        # Snapshot so callbacks may cancel themselves or others mid-frame
        for handle, callback in list(self._callbacks.items()):
            if handle in self._callbacks:
                callback(dt)

    def run(self, frames: int, dt: float = 1 / 30) -> None:
        for _ in range(frames):
            self.step(dt)


class SceneRenderer:
    def __init__(
        self,
        scheduler: FrameScheduler,
        surface: Optional[Surface] = None,
        *,
        max_variables: int = 20,
        particle_count: int = 100,
        seed: int = 0,
    ) -> None:
        self.scheduler = scheduler
        self.surface = surface
        self.max_variables = max_variables
        self.particle_count = particle_count
        self.seed = seed
        self.scene: Optional[Scene] = None
        self.azimuth = 45.0
        self._frame_handle: Optional[int] = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def render(self, result: AnalysisResult) -> Scene:
        """Replace the current scene with one built from result."""
        if self._disposed:
            raise RendererDisposedError("Renderer has been disposed")
        self.scene = build_scene(
            result,
            max_variables=self.max_variables,
            particle_count=self.particle_count,
            seed=self.seed,
        )
        log.debug(
            "Rendered %d nodes for %s source (complexity %d)",
            len(self.scene.nodes),
            result.language.value,
            result.complexity,
        )
        if self._frame_handle is None:
            self._frame_handle = self.scheduler.request_frame(self._on_frame)
        if self.surface is not None:
            self.surface.draw(self.scene, self.azimuth)
        return self.scene

    def _on_frame(self, dt: float) -> None:
        if self.scene is None:
            return
        self.advance(dt)
        if self.surface is not None:
            self.surface.draw(self.scene, self.azimuth)

    def advance(self, dt: float) -> None:
        if self.scene is None:
            return
        for index, node in enumerate(self.scene.nodes):
            if node.role == NodeRole.PARTICLES:
                node.points = [
                    (x, PARTICLE_CEILING if y - PARTICLE_FALL < PARTICLE_FLOOR else y - PARTICLE_FALL, z)
                    for x, y, z in node.points
                ]
            if index % 7 == 0:
                rx, ry, rz = node.rotation
                node.rotation = (rx, (ry + SPIN) % (2 * math.pi), rz)
        self.azimuth = (self.azimuth + ORBIT_DEGREES_PER_SECOND * dt) % 360

    def dispose(self) -> None:
        if self._disposed:
            return
        if self._frame_handle is not None:
            self.scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        self.scene = None
        if self.surface is not None:
            self.surface.close()
        self._disposed = True
        log.debug("Renderer disposed")
