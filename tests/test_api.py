"""
Tests for the FastAPI server.
"""

import json

import pytest
from fastapi.testclient import TestClient

from text2world.config import RESOLUTION
from text2world.inference.api import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["resolution"] == RESOLUTION
    assert data["has_world"] is False


def test_export_before_generate(client):
    response = client.get("/export/glb")
    assert response.status_code == 204
    assert response.headers["x-export-status"] == "nothing to export"

    response = client.get("/export/world")
    assert response.status_code == 204


def test_generate(client):
    response = client.post("/generate", json={"prompt": "mountain north village", "seed": 42})
    assert response.status_code == 200
    data = response.json()
    assert data["published"] is True
    assert data["zones"]["north"] == 8.0
    assert data["zones"]["center"] == 2.0
    assert len(data["features"]) == 5
    assert data["mesh"]["vertex_count"] == (RESOLUTION + 1) ** 2
    assert data["heightmap_image"] is None
    assert [m["token"] for m in data["matched_keywords"]] == ["mountain", "north"]

    assert client.get("/health").json()["has_world"] is True


def test_generate_with_image(client):
    response = client.post("/generate", json={"prompt": "lake", "seed": 1, "return_image": True})
    assert response.status_code == 200
    assert response.json()["heightmap_image"].startswith("data:image/png;base64,")


def test_generate_with_malformed_override(client):
    response = client.post("/generate", json={
        "prompt": "mountain",
        "seed": 1,
        "overrides": {"mountain_height": "abc", "river_width": 0.2},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["overrides"]["mountain_height"] == 8.0
    assert data["overrides"]["river_width"] == 0.2
    assert data["zones"]["center"] == 8.0


def test_exports_after_generate(client):
    client.post("/generate", json={"prompt": "castle river", "seed": 7})

    response = client.get("/export/glb")
    assert response.status_code == 200
    assert response.headers["content-type"] == "model/gltf-binary"
    assert response.content[:4] == b"glTF"

    response = client.get("/export/world")
    assert response.status_code == 200
    record = json.loads(response.content)
    assert record["seed"] == 7
    assert "features" not in record

    response = client.get("/export/world", params={"include_features": "true"})
    assert len(response.json()["features"]) == 3


def test_generate_requires_prompt(client):
    response = client.post("/generate", json={"seed": 1})
    assert response.status_code == 422


def test_parameters(client):
    data = client.get("/parameters").json()
    assert data["overrides"]["mountain_height"] == {"min": 0.0, "max": 32.0, "default": 8.0}
    assert "river" in data["keywords"]["river"]
    assert "village" in data["keywords"]["structures"]
    assert data["terrain_size"] == 100.0


def test_superseded_generate_reports_its_own_world(monkeypatch):
    app = create_app()
    client = TestClient(app)
    sampler = app.state.sampler
    original = sampler.generate_world
    newer = []

    def interrupted(prompt, seed, overrides=None):
        world = original(prompt, seed, overrides)
        if not newer:
            monkeypatch.setattr(sampler, "generate_world", original)
            newer.append(sampler.regenerate("mountain", 2, {"mountain_height": 3}))
        return world

    monkeypatch.setattr(sampler, "generate_world", interrupted)
    response = client.post("/generate", json={
        "prompt": "mountain",
        "seed": 1,
        "overrides": {"mountain_height": 12},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["published"] is False
    assert data["zones"]["center"] == 12.0
    assert data["overrides"]["mountain_height"] == 12.0
    assert sampler.latest.zones.center == 3.0
