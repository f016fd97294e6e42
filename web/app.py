from __future__ import annotations

from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from analyzer.highlight import highlight
from analyzer.languages import resolve_language
from analyzer.line_parse import analyze_text
from analyzer.model import AnalysisResult, LanguageTag
from api import SourceRequest, app as api_app, get_settings
from render.layout import build_scene
from render.model import Scene
from settings import Settings

app = FastAPI(title="Code 3D Visualizer Web Interface")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# JSON API (including /record) under /api
app.mount("/api", api_app)


class VisualizeResponse(BaseModel):
    analysis: AnalysisResult
    scene: Scene


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Main page with editor and 3D canvas."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"languages": [tag.value for tag in LanguageTag]},
    )


@app.post("/highlight")
async def highlight_source(req: SourceRequest) -> dict:
    language = resolve_language(req.language, req.filename)
    return {"language": language.value, "html": highlight(req.code, language)}


@app.post("/visualize", response_model=VisualizeResponse)
async def visualize(
    req: SourceRequest, settings: Settings = Depends(get_settings)
) -> VisualizeResponse:
    """Analyze source and return both the summary and the scene to draw."""
    result = analyze_text(req.code, resolve_language(req.language, req.filename))
    scene = build_scene(
        result,
        max_variables=settings.max_variables,
        particle_count=settings.particle_count,
        seed=settings.seed,
    )
    return VisualizeResponse(analysis=result, scene=scene)


def create_app() -> FastAPI:
    return app
