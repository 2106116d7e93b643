"""Tests for the HTTP host around the engine."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from geodesic_core.constants import SAGITTARIUS_A_MASS, c


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def scene(client):
    """Fresh process-wide scene with a small wave."""
    resp = client.post("/scene", json={"spawn_count": 6})
    assert resp.status_code == 200
    return client


class TestDerived:
    def test_schwarzschild_radius(self, client):
        resp = client.post("/derived", json={"mass": SAGITTARIUS_A_MASS})
        assert resp.status_code == 200
        body = resp.json()
        assert body["schwarzschild_radius"] == pytest.approx(1.2684e10, rel=1e-3)
        assert "weak_field_deflection" not in body

    def test_weak_field_deflection(self, client):
        resp = client.post("/derived", json={"mass": SAGITTARIUS_A_MASS, "impact_parameter": 1e12})
        body = resp.json()
        assert body["weak_field_deflection"] == pytest.approx(2.0 * body["schwarzschild_radius"] / 1e12)

    def test_invalid_mass(self, client):
        resp = client.post("/derived", json={"mass": -5.0})
        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidMass"


class TestIntegrate:
    def test_radial_capture(self, client):
        resp = client.post("/integrate", json={
            "mass": SAGITTARIUS_A_MASS, "x": 5e10, "y": 0.0, "vx": -c, "vy": 0.0, "steps": 400,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "captured"
        assert body["hit_horizon"] is True
        assert body["trail"][0] == [5e10, 0.0]

    def test_below_horizon(self, client):
        resp = client.post("/integrate", json={
            "mass": SAGITTARIUS_A_MASS, "x": 1e9, "y": 0.0, "vx": c, "vy": 0.0,
        })
        assert resp.status_code == 400
        assert resp.json()["error"] == "BelowHorizon"

    def test_rejects_bad_step(self, client):
        resp = client.post("/integrate", json={
            "mass": SAGITTARIUS_A_MASS, "x": 5e10, "y": 0.0, "vx": -c, "vy": 0.0, "dlam": 0.0,
        })
        assert resp.status_code == 422


class TestScene:
    def test_reset(self, scene):
        body = scene.get("/scene/rays").json()
        assert body["tick"] == 0
        assert body["rays"] == []

    def test_reset_invalid_mass(self, client):
        resp = client.post("/scene", json={"mass": 0.0})
        assert resp.status_code == 400

    def test_spawn_default_wave(self, scene):
        resp = scene.post("/scene/spawn", json={})
        assert resp.json() == {"spawned": 6, "total": 6}
        rays = scene.get("/scene/rays").json()["rays"]
        assert [r["position"][0] for r in rays] == pytest.approx([-9e10] * 6)

    def test_spawn_custom_line(self, scene):
        resp = scene.post("/scene/spawn", json={"x": 0.0, "y": 0.0, "count": 5, "span": 1e11})
        # the ray on the mass itself is skipped
        assert resp.json() == {"spawned": 4, "total": 4}

    def test_spawn_zero_direction(self, scene):
        resp = scene.post("/scene/spawn", json={"vx": 0.0, "vy": 0.0})
        assert resp.status_code == 422

    def test_tick(self, scene):
        scene.post("/scene/spawn", json={})
        resp = scene.post("/scene/tick", json={"ticks": 3})
        body = resp.json()
        assert body["tick"] == 3
        assert body["reports"] == [{"alive": 6, "captured": 0, "escaped": 0}] * 3
        rays = scene.get("/scene/rays").json()["rays"]
        assert all(len(r["trail"]) == 4 for r in rays)
