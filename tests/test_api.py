from __future__ import annotations

import importlib
import json
import os
import sys
from datetime import date

from fastapi.testclient import TestClient


_DEF_MODULES = [
    "mbti_core.config",
    "mbti_core.storage",
    "api.app",
]


def _reload_app(tmp_path) -> object:
    os.environ["DATA_DIR"] = str(tmp_path)
    for name in _DEF_MODULES:
        if name in sys.modules:
            importlib.reload(sys.modules[name])
        else:
            __import__(name)
    return sys.modules["api.app"]


def _write(tmp_path, name: str, payload) -> None:
    (tmp_path / name).write_text(json.dumps(payload), encoding="utf-8")


def _adult_dob() -> str:
    today = date.today()
    return date(today.year - 30, 1, 1).isoformat()


def _seed_content(tmp_path) -> None:
    _write(tmp_path, "mbti_info.json", [
        {"id": 7, "trait": "ESTJ", "age_from": 18, "age_to": 99, "info": "organiser",
         "strengths": "s", "challenges": "c", "future_pathways": "f", "mini_scenario": "m",
         "trait_": "Extroverted Sensing Thinking Judging"},
    ])
    _write(tmp_path, "mbti_videos.json", [
        {"trait": "ESTJ", "title": "intro", "url": "https://example.org/v", "thumbnail_url": None},
    ])


def test_full_session_flow_persists_and_returns_content(tmp_path):
    app_module = _reload_app(tmp_path)
    _seed_content(tmp_path)
    _write(tmp_path, "profiles.json", {"u1": {"id": "u1", "date_of_birth": _adult_dob()}})
    client = TestClient(app_module.app)

    start = client.post("/session/start", json={"user_id": "u1"})
    assert start.status_code == 200
    body = start.json()
    sid = body["session_id"]
    assert body["age"] == 30 and body["total"] == 20
    assert {o["value"] for o in body["options"]} == {-2, -1, 0, 1, 2}

    early = client.post(f"/session/{sid}/submit")
    assert early.status_code == 409

    for q in body["questions"]:
        resp = client.post(f"/session/{sid}/answer", json={"question_id": q["id"], "value": 0})
        assert resp.status_code == 200
    assert resp.json() == {"answered": 20, "total": 20, "complete": True}

    done = client.post(f"/session/{sid}/submit")
    assert done.status_code == 200
    result = done.json()
    assert result["code"] == "ESTJ"
    assert result["persisted"] is True
    assert result["content"]["description"]["info"] == "organiser"
    assert [v["title"] for v in result["content"]["videos"]] == ["intro"]
    assert [t["letter"] for t in result["traits"]] == ["E", "S", "T", "J"]

    # session is discarded once scored
    assert client.get(f"/session/{sid}").status_code == 404
    profile = client.get("/users/u1/profile").json()
    assert profile["mbti_personality"] == "ESTJ"


def test_answer_validation_errors(tmp_path):
    app_module = _reload_app(tmp_path)
    client = TestClient(app_module.app)
    sid = client.post("/session/start", json={"date_of_birth": _adult_dob()}).json()["session_id"]

    assert client.post(f"/session/{sid}/answer", json={"question_id": 424242, "value": 1}).status_code == 422
    qid = client.get(f"/session/{sid}").json()["questions"][0]["id"]
    assert client.post(f"/session/{sid}/answer", json={"question_id": qid, "value": 3}).status_code == 422
    assert client.post("/session/nope/answer", json={"question_id": qid, "value": 1}).status_code == 404


def test_start_needs_a_date_of_birth(tmp_path):
    app_module = _reload_app(tmp_path)
    client = TestClient(app_module.app)
    assert client.post("/session/start", json={}).status_code == 422
    assert client.post("/session/start", json={"user_id": "ghost"}).status_code == 422


def test_no_eligible_questions_for_age(tmp_path):
    app_module = _reload_app(tmp_path)
    client = TestClient(app_module.app)
    resp = client.post("/session/start", json={"date_of_birth": date.today().replace(day=1).isoformat()})
    assert resp.status_code == 404


def test_restart_abandons_previous_session_without_side_effects(tmp_path):
    app_module = _reload_app(tmp_path)
    client = TestClient(app_module.app)
    dob = _adult_dob()
    first = client.post("/session/start", json={"user_id": "u2", "date_of_birth": dob}).json()["session_id"]
    second = client.post("/session/start", json={"user_id": "u2", "date_of_birth": dob}).json()["session_id"]
    assert first != second
    assert client.get(f"/session/{first}").status_code == 404
    assert client.delete(f"/session/{second}").status_code == 200
    assert client.get(f"/session/{second}").status_code == 404
    assert not (tmp_path / "profiles.json").exists()


def test_content_endpoint_reports_catalog_gap(tmp_path):
    app_module = _reload_app(tmp_path)
    _seed_content(tmp_path)
    client = TestClient(app_module.app)

    ok = client.get("/content/estj", params={"age": 40})
    assert ok.status_code == 200 and ok.json()["description"]["trait_"].startswith("Extroverted")
    assert client.get("/content/ESTJ", params={"age": 12}).status_code == 404
    assert client.get("/content/XXXX", params={"age": 40}).status_code == 422

    (tmp_path / "mbti_info.json").write_text("{broken", encoding="utf-8")
    assert client.get("/content/ESTJ", params={"age": 40}).status_code == 503


def test_careers_endpoint_disabled_by_default(tmp_path, monkeypatch):
    monkeypatch.delenv("USE_LLM_CAREERS", raising=False)
    app_module = _reload_app(tmp_path)
    client = TestClient(app_module.app)
    assert client.post("/careers", json={"trait": "INTJ", "age": 17}).status_code == 503
    assert client.get("/health").json()["careers_enabled"] is False
