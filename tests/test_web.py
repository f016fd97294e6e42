from fastapi.testclient import TestClient

from web.app import app


client = TestClient(app)


def test_index_lists_languages():
	res = client.get("/")
	assert res.status_code == 200
	assert '<option value="javascript">' in res.text


def test_highlight():
	res = client.post("/highlight", json={"code": "def f(): pass", "filename": "a.py"})
	assert res.status_code == 200
	assert res.json()["language"] == "python"
	assert '<span class="keyword">def</span>' in res.json()["html"]


def test_visualize_returns_analysis_and_scene():
	res = client.post("/visualize", json={"code": "function go() {}\nlet n = 2;", "language": "javascript"})
	assert res.status_code == 200
	body = res.json()
	assert [f["name"] for f in body["analysis"]["functions"]] == ["go"]
	assert [v["name"] for v in body["analysis"]["variables"]] == ["n"]
	assert any(n["role"] == "function" for n in body["scene"]["nodes"])


def test_api_is_mounted():
	res = client.get("/api/languages")
	assert res.status_code == 200
