import json
import time

import anyio
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from flightloop.api import map as map_module
from flightloop.config import settings
from flightloop.ingestors.dataset import EmptyDatasetError, LoadError
from flightloop.main import app, start_replay
from flightloop.models.state_vector import Dataset, StateVector


def _payload(states):
    return {"date": "2025-12-01", "states": states}


def _record(time, icao24="4cc2a1", lat=64.0):
    return {
        "time": time,
        "icao24": icao24,
        "lat": lat,
        "lon": -21.0,
        "callsign": "ICE42 ",
        "velocity": 200.0,
        "heading": 90.0,
        "geoaltitude": 8000.0,
    }


@pytest.fixture
def replay_settings(monkeypatch, tmp_path):
    path = tmp_path / "flights.json"
    path.write_text(
        json.dumps(_payload([_record(t, lat=64.0 + t / 1000) for t in range(0, 601, 60)]))
    )
    monkeypatch.setattr(settings, "data_source", str(path))
    monkeypatch.setattr(settings, "enable_replay", True)
    monkeypatch.setattr(settings, "frame_rate", 200.0)
    return path


class FakeLoader:
    def __init__(self, dataset=None, exc=None):
        self.dataset = dataset
        self.exc = exc
        self.call_count = 0

    async def load(self):
        self.call_count += 1
        if self.exc:
            raise self.exc
        return self.dataset


def _wait_for_ticks(client, timeout=5.0):
    deadline = time.monotonic() + timeout
    status = client.get("/api/v1/replay/status").json()
    while status["ticks"] == 0 and time.monotonic() < deadline:
        time.sleep(0.02)
        status = client.get("/api/v1/replay/status").json()
    return status


def test_replay_runs_after_startup(replay_settings):
    with TestClient(app) as client:
        status = _wait_for_ticks(client)

        assert status["state"] == "running"
        assert status["date"] == "2025-12-01"
        assert status["record_count"] == 11
        assert status["ticks"] > 0

        frame = client.get("/api/v1/replay/frame").json()
        assert frame["positions"]["type"] == "FeatureCollection"
        assert len(frame["positions"]["features"]) == 1
        feature = frame["positions"]["features"][0]
        assert feature["geometry"]["type"] == "Point"
        assert feature["properties"]["label"] == "ICE42"
        assert feature["properties"]["entityId"] == "4cc2a1"

        trails = client.get("/api/v1/replay/sources/trails").json()
        assert trails["type"] == "FeatureCollection"


def test_missing_data_file_leaves_sources_empty(replay_settings, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "data_source", str(tmp_path / "missing.json"))

    with TestClient(app) as client:
        status = client.get("/api/v1/replay/status").json()
        positions = client.get("/api/v1/replay/sources/positions").json()

    assert status["state"] == "failed"
    assert positions == {"type": "FeatureCollection", "features": []}


def test_empty_data_file_does_not_start_replay(replay_settings):
    replay_settings.write_text(json.dumps(_payload([])))

    with TestClient(app) as client:
        status = client.get("/api/v1/replay/status").json()
        frame = client.get("/api/v1/replay/frame").json()

    assert status["state"] == "empty"
    assert status["ticks"] == 0
    assert frame["positions"]["features"] == []
    assert frame["trails"]["features"] == []


def test_replay_can_be_disabled(replay_settings, monkeypatch):
    monkeypatch.setattr(settings, "enable_replay", False)

    with TestClient(app) as client:
        status = client.get("/api/v1/replay/status").json()

    assert status["state"] == "idle"


def test_unknown_source_returns_404(replay_settings, monkeypatch):
    monkeypatch.setattr(settings, "enable_replay", False)

    with TestClient(app) as client:
        response = client.get("/api/v1/replay/sources/weather")

    assert response.status_code == 404


def test_health_and_root(replay_settings, monkeypatch):
    monkeypatch.setattr(settings, "enable_replay", False)

    with TestClient(app) as client:
        health = client.get("/healthz").json()
        root = client.get("/").json()

    assert health["status"] == "ok"
    assert health["replay"] == "idle"
    assert "message" in root


def test_map_config_includes_view_layers_and_token(monkeypatch):
    monkeypatch.setattr(map_module, "get_map_access_token", lambda: "pk.test-token")

    config = map_module.get_map_config()

    assert config.access_token == "pk.test-token"
    assert config.center == (-18.5, 65.0)
    assert config.bounds.south == 60.0
    assert config.sources == ["positions", "trails"]
    assert [layer.id for layer in config.layers] == [
        "flight-trails",
        "flight-glow",
        "flight-points",
        "flight-labels",
    ]


def test_map_config_without_token(monkeypatch):
    def missing_token():
        raise RuntimeError("Map access token not configured in SSM")

    monkeypatch.setattr(map_module, "get_map_access_token", missing_token)

    assert map_module.get_map_config().access_token is None


@pytest.mark.anyio
async def test_start_replay_skips_loop_for_empty_dataset():
    test_app = FastAPI()
    loader = FakeLoader(exc=EmptyDatasetError("No usable state vectors"))

    await start_replay(test_app, loader=loader)

    assert loader.call_count == 1
    assert test_app.state.session is None
    assert test_app.state.replay_status.state == "empty"
    assert test_app.state.surface.updates == 0
    assert test_app.state.surface.source("positions").features == []


@pytest.mark.anyio
async def test_start_replay_records_load_failure():
    test_app = FastAPI()

    await start_replay(test_app, loader=FakeLoader(exc=LoadError("HTTP 503")))

    assert test_app.state.session is None
    assert test_app.state.replay_status.state == "failed"
    assert test_app.state.replay_status.detail == "HTTP 503"


@pytest.mark.anyio
async def test_start_replay_starts_session(monkeypatch):
    monkeypatch.setattr(settings, "frame_rate", 200.0)
    dataset = Dataset.from_states(
        "2025-12-01", [StateVector(time=0, icao24="4cc2a1", lat=64.0, lon=-21.0)]
    )
    test_app = FastAPI()

    await start_replay(test_app, loader=FakeLoader(dataset=dataset))
    session = test_app.state.session
    try:
        assert session is not None
        with anyio.fail_after(5):
            while session.ticks == 0:
                await anyio.sleep(0.01)
        assert session.running
        assert test_app.state.surface.updates > 0
    finally:
        await session.stop()

    assert not session.running
