import importlib.util
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import api
from api import app
from settings import Settings


client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_settings():
	api.get_settings.cache_clear()
	yield
	api.get_settings.cache_clear()
	app.dependency_overrides.clear()


def test_languages():
	res = client.get("/languages")
	assert res.status_code == 200
	assert "python" in res.json() and "text" in res.json()


def test_analyze_uses_filename_when_language_missing():
	res = client.post("/analyze", json={"code": "def foo(x):\n    return x\n", "filename": "m.py"})
	assert res.status_code == 200
	body = res.json()
	assert body["language"] == "python"
	assert body["functions"] == [{"name": "foo", "line": 1, "kind": "function"}]
	assert body["line_count"] == 3
	assert body["complexity"] == 1


def test_analyze_unknown_language_falls_back_to_text():
	res = client.post("/analyze", json={"code": "function f() {}", "language": "klingon"})
	assert res.status_code == 200
	assert res.json()["language"] == "text"
	assert res.json()["functions"] == []


def test_scene():
	res = client.post("/scene", json={"code": "class A {}\n", "language": "java"})
	assert res.status_code == 200
	roles = [n["role"] for n in res.json()["nodes"]]
	assert "class" in roles and "platform" in roles


def test_record_returns_gif():
	app.dependency_overrides[api.get_settings] = lambda: Settings(frame_width=120, frame_height=90, particle_count=5)
	res = client.post("/record", json={"code": "def f():\n", "language": "python", "frames": 2, "fps": 5})
	assert res.status_code == 200
	assert res.headers["content-type"] == "image/gif"
	assert "code-3d-visualization-" in res.headers["content-disposition"]
	assert res.content[:4] == b"GIF8"


def test_record_with_no_frames_is_unprocessable():
	res = client.post("/record", json={"code": "x = 1", "frames": 0})
	assert res.status_code == 422
	assert "No frames" in res.json()["detail"]


def test_capture_status_mapping():
	from render.errors import CaptureInitError, CaptureStateError, EmptyRecordingError

	assert api.capture_status(CaptureStateError("busy")) == 409
	assert api.capture_status(CaptureInitError("no scene")) == 503
	assert api.capture_status(EmptyRecordingError("empty")) == 422


def test_import_ignores_bad_config_file(tmp_path, monkeypatch):
	(tmp_path / ".code3d.yml").write_text("fps: many\n")
	monkeypatch.chdir(tmp_path)
	spec = importlib.util.spec_from_file_location("api_under_bad_config", Path(api.__file__))
	module = importlib.util.module_from_spec(spec)
	spec.loader.exec_module(module)
	assert module.app.title == "Code 3D Visualizer"


def test_bad_config_fails_only_requests_that_need_settings(tmp_path, monkeypatch):
	(tmp_path / ".code3d.yml").write_text("fps: many\n")
	monkeypatch.chdir(tmp_path)
	assert client.post("/analyze", json={"code": "x = 1", "language": "python"}).status_code == 200
	res = client.post("/scene", json={"code": "x = 1", "language": "python"})
	assert res.status_code == 500
	assert "fps" in res.json()["detail"]


def test_settings_are_read_from_working_directory(tmp_path, monkeypatch):
	(tmp_path / ".code3d.yml").write_text("particle_count: 3\n")
	monkeypatch.chdir(tmp_path)
	res = client.post("/scene", json={"code": "x = 1", "language": "python"})
	assert res.status_code == 200
	particles = [n for n in res.json()["nodes"] if n["role"] == "particles"]
	assert len(particles[0]["points"]) == 3
