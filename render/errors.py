"""Exceptions raised by the renderer and the frame recorder.

Hierarchy::

    Code3DError
    ├── RenderError
    │   └── RendererDisposedError
    └── CaptureError
        ├── CaptureStateError
        ├── CaptureInitError
        └── EmptyRecordingError
"""

from __future__ import annotations

from typing import Optional


class Code3DError(Exception):
    """Base class for renderer and capture failures.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


class RenderError(Code3DError):
    pass


class RendererDisposedError(RenderError):
    """The renderer was used after dispose()."""


class CaptureError(Code3DError):
    pass


class CaptureStateError(CaptureError):
    """A capture call arrived in a state that does not allow it."""


class CaptureInitError(CaptureError):
    """Recording could not be started, e.g. no scene has been drawn yet."""


class EmptyRecordingError(CaptureError):
    """A recording was stopped before any frame was captured."""
