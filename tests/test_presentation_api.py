from __future__ import annotations

import json

import pytest
from flask import Flask

from src.intern_portal.intern_portal.container import build_container
from src.intern_portal.intern_portal.core.constants import PRESENTED_IDS_KEY
from src.intern_portal.intern_portal.main import create_app
from src.intern_portal.intern_portal.presentations.controller import register
from src.intern_portal.intern_portal.presentations.ticker import ManualTicker


@pytest.fixture
def roster(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            [
                {"uid": "a", "name": "An", "gender": "F", "isStudent": True},
                {"uid": "b", "name": "Binh", "gender": "M", "hasWifi": True},
                {"uid": "c", "name": "Chi", "gender": "F", "hasWifi": True},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def portal(tmp_path, roster, ticker):
    settings = {
        "STORE_BACKEND": "file",
        "STORE_DIR": str(tmp_path / "store"),
        "DIRECTORY_BACKEND": "json",
        "ROSTER_PATH": str(roster),
        "DIRECTORY_TTL_SECONDS": 0,
    }
    container = build_container(settings=settings, ticker=ticker)
    app = Flask(__name__)
    app.config["TESTING"] = True
    register(app, container)
    return app.test_client(), container


def test_generate_run_and_mark_presented(portal, ticker):
    client, container = portal

    res = client.post("/presentations/queue", json={"duration_seconds": 35})
    assert res.status_code == 200
    state = res.get_json()["state"]
    assert state["queue_length"] == 3
    assert state["timer"] == {"phase": "IDLE", "remaining": None}
    assert state["countdown_label"] == "—"
    assert state["estimated_total_label"] == "1m 10s remaining"

    state = client.post("/presentations/start").get_json()["state"]
    assert state["timer"] == {"phase": "RUNNING", "remaining": 35}
    assert state["action_label"] == "Pause"

    ticker.advance(35)
    state = client.get("/presentations/state").get_json()
    assert state["timer"]["phase"] == "EXPIRED"
    assert state["countdown_label"] == "Time's Up!"
    cues = [c["cue"] for c in state["cues"]]
    assert cues.count("warning") == 1
    assert cues.count("low_time") == 10
    assert cues[-1] == "stop"
    assert client.get("/presentations/state").get_json()["cues"] == []

    current = state["current"]["id"]
    body = client.post("/presentations/presented").get_json()
    assert body["ok"] is True
    assert body["state"]["presented_ids"] == [current]
    assert container.store.get(PRESENTED_IDS_KEY) == [current]


def test_filter_from_request(portal):
    client, _ = portal
    body = client.post(
        "/presentations/queue",
        json={"duration_seconds": 60, "gender": "F", "only_connectivity": True},
    ).get_json()
    assert body["state"]["current"]["id"] == "c"
    assert body["state"]["filter"] == {"gender": "F", "only_students": False, "only_connectivity": True}


def test_invalid_input_returns_400(portal):
    client, _ = portal
    res = client.post("/presentations/queue", json={"duration_seconds": 2})
    assert res.status_code == 400
    assert "duration_seconds" in res.get_json()["error"]

    res = client.post("/presentations/filter", json={"gender": "X"})
    assert res.status_code == 400

    res = client.post("/presentations/duration", json={"duration_seconds": 1})
    assert res.status_code == 400
    assert "duration_seconds" in res.get_json()["error"]


def test_non_object_body_is_rejected(portal):
    client, container = portal
    for path in ("/presentations/queue", "/presentations/filter", "/presentations/duration"):
        res = client.post(path, json=[1])
        assert res.status_code == 400
        assert res.get_json()["error"] == "request body must be a JSON object"
    assert container.presentation_engine.queue == ()


def test_unreadable_roster_after_generate(portal, roster, ticker):
    client, container = portal
    client.post("/presentations/queue", json={"duration_seconds": 30})
    roster.write_text("[not json", encoding="utf-8")

    res = client.post("/presentations/start")
    assert res.status_code == 200
    ticker.advance(2)

    res = client.post("/presentations/presented")
    assert res.status_code == 200
    body = res.get_json()
    assert body["ok"] is True
    assert body["state"]["queue_length"] == 2
    assert body["state"]["available_count"] == 1
    assert len(container.store.get(PRESENTED_IDS_KEY)) == 1

    res = client.get("/presentations/state")
    assert res.status_code == 200
    assert res.get_json()["timer"]["phase"] == "IDLE"


def test_invalid_operations_are_reported_not_failed(portal):
    client, _ = portal
    for path in ("/presentations/start", "/presentations/pause", "/presentations/presented", "/presentations/skip"):
        res = client.post(path)
        assert res.status_code == 200
        assert res.get_json()["ok"] is False


def test_duration_and_reset(portal):
    client, container = portal
    client.post("/presentations/queue", json={"duration_seconds": 60})
    client.post("/presentations/presented")

    state = client.post("/presentations/duration", json={"delta_seconds": 180}).get_json()["state"]
    assert state["duration_seconds"] == 240
    assert state["duration_label"] == "4m remaining"

    state = client.post("/presentations/reset").get_json()["state"]
    assert state["presented_ids"] == []
    assert state["queue_length"] == 0
    assert state["duration_seconds"] == 0
    assert container.store.get(PRESENTED_IDS_KEY) is None


def test_history_survives_restart(tmp_path, roster, ticker):
    settings = {
        "STORE_BACKEND": "file",
        "STORE_DIR": str(tmp_path / "store"),
        "DIRECTORY_BACKEND": "json",
        "ROSTER_PATH": str(roster),
    }
    first = build_container(settings=settings, ticker=ticker).presentation_engine
    first.generate_queue(30)
    first.mark_presented()
    presented = first.presented_ids

    second = build_container(settings=settings, ticker=ticker).presentation_engine
    assert second.presented_ids == presented
    second.generate_queue(30)
    assert len(second.queue) == 2


def test_create_app_with_testing_settings(ticker):
    app = create_app("config.testing", ticker=ticker)
    client = app.test_client()

    state = client.get("/presentations/state").get_json()
    assert state["current"] is None
    assert state["timer"]["phase"] == "IDLE"
    assert state["duration_seconds"] == 30
