"""Headless "render then record" pipeline used by the CLI and the API."""

from __future__ import annotations

from analyzer.model import AnalysisResult

from .capture import FrameRecorder, RecordedMedia
from .renderer import FrameScheduler, SceneRenderer
from .surface import RasterSurface


def record_result(
    result: AnalysisResult,
    frames: int,
    *,
    fps: int = 30,
    width: int = 640,
    height: int = 480,
    max_variables: int = 20,
    particle_count: int = 100,
    seed: int = 0,
    prefix: str = "code-3d-visualization",
) -> RecordedMedia:
    scheduler = FrameScheduler()
    surface = RasterSurface(width, height)
    renderer = SceneRenderer(
        scheduler,
        surface,
        max_variables=max_variables,
        particle_count=particle_count,
        seed=seed,
    )
    recorder = FrameRecorder(scheduler, fps=fps, prefix=prefix)
    try:
        renderer.render(result)
        handle = recorder.start_capture(surface)
        scheduler.run(frames, dt=1 / fps)
        return recorder.stop_capture(handle)
    finally:
        renderer.dispose()
