"""Frame recording from a surface into an animated GIF.

Recording is a small state machine::

    IDLE --start_capture--> RECORDING --stop_capture--> STOPPED
      ^                                                   |
      +------------------ start_capture ------------------+

Only one recording may be in flight; a second start while RECORDING is rejected.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol, Union

import numpy as np
from matplotlib.animation import PillowWriter
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from analyzer.logging import get_logger

from .errors import CaptureInitError, CaptureStateError, EmptyRecordingError
from .renderer import FrameScheduler


log = get_logger("capture")

DEFAULT_PREFIX = "code-3d-visualization"
CONTAINER_EXTENSION = "gif"
MIME_TYPE = "image/gif"


class FrameSource(Protocol):
    ready: bool

    def grab_frame(self) -> np.ndarray: ...


class CaptureState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


@dataclass
class CaptureHandle:
    id: int
    started_at: float
    frames: List[np.ndarray] = field(default_factory=list)


@dataclass
class RecordedMedia:
    frames: List[np.ndarray]
    fps: int
    mime_type: str = MIME_TYPE
    extension: str = CONTAINER_EXTENSION

    @property
    def duration(self) -> float:
        return len(self.frames) / self.fps


def suggest_file_name(prefix: str = DEFAULT_PREFIX, now: Optional[float] = None) -> str:
    """Return "<prefix>-<epoch milliseconds>.gif"."""
    stamp = int((time.time() if now is None else now) * 1000)
    return f"{prefix}-{stamp}.{CONTAINER_EXTENSION}"


class FrameRecorder:
    def __init__(self, scheduler: FrameScheduler, fps: int = 30, prefix: str = DEFAULT_PREFIX) -> None:
        self.scheduler = scheduler
        self.fps = fps
        self.prefix = prefix
        self.state = CaptureState.IDLE
        self._active: Optional[CaptureHandle] = None
        self._frame_handle: Optional[int] = None
        self._ids = itertools.count(1)

    def start_capture(self, source: Optional[FrameSource]) -> CaptureHandle:
        if self.state == CaptureState.RECORDING:
            raise CaptureStateError(
                "A recording is already in progress",
                context={"handle": self._active.id if self._active else None},
            )
        if source is None or not getattr(source, "ready", False):
            raise CaptureInitError("No scene has been rendered to capture from")

        handle = CaptureHandle(id=next(self._ids), started_at=time.time())

        def on_frame(dt: float) -> None:
            handle.frames.append(source.grab_frame())

        self._frame_handle = self.scheduler.request_frame(on_frame)
        self._active = handle
        self.state = CaptureState.RECORDING
        log.info("Recording %d started at %d fps", handle.id, self.fps)
        return handle

    def stop_capture(self, handle: CaptureHandle) -> RecordedMedia:
        if self.state != CaptureState.RECORDING or self._active is not handle:
            raise CaptureStateError(
                "Handle is not the active recording",
                context={"handle": handle.id, "state": self.state.value},
            )
        if self._frame_handle is not None:
            self.scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        self._active = None
        self.state = CaptureState.STOPPED
        if not handle.frames:
            raise EmptyRecordingError("No frames were captured", context={"handle": handle.id})
        log.info("Recording %d stopped with %d frames", handle.id, len(handle.frames))
        return RecordedMedia(frames=list(handle.frames), fps=self.fps)

    def save(
        self,
        media: RecordedMedia,
        suggested_file_name: Optional[str] = None,
        directory: Union[str, Path] = ".",
    ) -> Path:
        return save(media, suggested_file_name or suggest_file_name(self.prefix), directory)


def save(
    media: RecordedMedia,
    suggested_file_name: Optional[str] = None,
    directory: Union[str, Path] = ".",
) -> Path:
    if not media.frames:
        raise EmptyRecordingError("No frames to save")
    path = Path(directory) / (suggested_file_name or suggest_file_name())
    path.parent.mkdir(parents=True, exist_ok=True)
    write_gif(media, path)
    log.info("Saved %d frames to %s", len(media.frames), path)
    return path


def write_gif(media: RecordedMedia, path: Path) -> None:
    height, width = media.frames[0].shape[:2]
    dpi = 100
    figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    FigureCanvasAgg(figure)
    ax = figure.add_axes((0, 0, 1, 1))
    ax.set_axis_off()
    image = ax.imshow(media.frames[0])
    writer = PillowWriter(fps=media.fps)
    with writer.saving(figure, str(path), dpi):
        for frame in media.frames:
            image.set_data(frame)
            writer.grab_frame()
