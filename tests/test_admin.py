from datetime import date

from fastapi.testclient import TestClient

from main import create_app


def test_admin_reload_unauthorized(client):
    r = client.post("/admin/reload")
    assert r.status_code == 401


def test_admin_reload_wrong_token(client):
    r = client.post("/admin/reload", headers={"x-admin-token": "nope"})
    assert r.status_code == 401


def test_admin_reload_ok(client):
    r = client.post("/admin/reload", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    b = r.json()
    # bank already seeded at startup
    assert b["ok"] is True and b["added"] == 0 and b["count"] >= 20


def test_admin_ensure_daily_for_date_is_idempotent(client):
    headers = {"x-admin-token": "secret"}
    r1 = client.post("/admin/daily", json={"game_date": "2024-01-01"}, headers=headers)
    r2 = client.post("/admin/daily", json={"game_date": "2024-01-01"}, headers=headers)
    assert r1.status_code == 200
    b1, b2 = r1.json(), r2.json()
    assert b1["game_date"] == "2024-01-01"
    assert len(b1["question_ids"]) == 9
    assert b1["question_ids"] == b2["question_ids"]


def test_admin_ensure_daily_defaults_to_today(client):
    r = client.post("/admin/daily", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    today = client.app.state.manager.today()
    assert r.json()["game_date"] == today.isoformat()

    day = client.get("/daily", params={"user_id": "u"}).json()
    assert [q["id"] for q in day["questions"]] == r.json()["question_ids"]


def test_admin_without_configured_token(settings):
    with TestClient(create_app(settings.model_copy(update={"admin_token": ""}))) as c:
        r = c.post("/admin/reload", headers={"x-admin-token": ""})
        assert r.status_code == 500


def test_admin_pool_too_small(settings):
    app = create_app(settings.model_copy(update={"daily_game_size": 500}))
    with TestClient(app) as c:
        r = c.post(
            "/admin/daily",
            json={"game_date": date(2024, 2, 2).isoformat()},
            headers={"x-admin-token": "secret"},
        )
        assert r.status_code == 409
        assert r.json()["error"] == "pool_too_small"
