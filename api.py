from __future__ import annotations

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field
from starlette.background import BackgroundTask

from analyzer.languages import resolve_language
from analyzer.line_parse import analyze_text
from analyzer.logging import get_logger
from analyzer.model import AnalysisResult, LanguageTag
from render.capture import save, suggest_file_name
from render.errors import CaptureError, CaptureInitError, CaptureStateError, EmptyRecordingError
from render.layout import build_scene
from render.model import Scene
from render.session import record_result
from settings import ConfigError, Settings, load_settings


log = get_logger("api")

app = FastAPI(title="Code 3D Visualizer")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
	"""Load .code3d.yml on first use so a bad file only fails the requests that need it."""
	try:
		return load_settings()
	except ConfigError as exc:
		log.error("Invalid configuration: %s", exc)
		raise HTTPException(status_code=500, detail=str(exc))


class SourceRequest(BaseModel):
	code: str
	language: Optional[str] = None
	filename: Optional[str] = None


class RecordRequest(SourceRequest):
	frames: int = Field(default=30, ge=0, le=600)
	fps: Optional[int] = Field(default=None, ge=1, le=60)


def _analyze(req: SourceRequest) -> AnalysisResult:
	language = resolve_language(req.language, req.filename)
	return analyze_text(req.code, language)


def capture_status(exc: CaptureError) -> int:
	if isinstance(exc, CaptureStateError):
		return 409
	if isinstance(exc, CaptureInitError):
		return 503
	if isinstance(exc, EmptyRecordingError):
		return 422
	return 500


@app.get("/languages")
def languages() -> List[str]:
	return [tag.value for tag in LanguageTag]


@app.post("/analyze", response_model=AnalysisResult)
def analyze(req: SourceRequest) -> AnalysisResult:
	return _analyze(req)


@app.post("/scene", response_model=Scene)
def scene(req: SourceRequest, settings: Settings = Depends(get_settings)) -> Scene:
	return build_scene(
		_analyze(req),
		max_variables=settings.max_variables,
		particle_count=settings.particle_count,
		seed=settings.seed,
	)


@app.post("/record")
def record(req: RecordRequest, settings: Settings = Depends(get_settings)) -> FileResponse:
	result = _analyze(req)
	fps = req.fps or settings.fps
	try:
		media = record_result(
			result,
			req.frames,
			fps=fps,
			width=settings.frame_width,
			height=settings.frame_height,
			max_variables=settings.max_variables,
			particle_count=settings.particle_count,
			seed=settings.seed,
			prefix=settings.file_prefix,
		)
		workdir = Path(tempfile.mkdtemp(prefix="code3d-"))
		filename = suggest_file_name(settings.file_prefix)
		path = save(media, filename, workdir)
	except CaptureError as exc:
		log.warning("Recording failed: %s", exc)
		raise HTTPException(status_code=capture_status(exc), detail=str(exc))

	return FileResponse(
		path,
		media_type=media.mime_type,
		filename=filename,
		background=BackgroundTask(_cleanup, path),
	)


def _cleanup(path: Path) -> None:
	path.unlink(missing_ok=True)
	try:
		path.parent.rmdir()
	except OSError:
		log.debug("Leaving non-empty directory %s", path.parent)


def create_app() -> FastAPI:
	return app
