from sqlalchemy import text


def test_health_db(client):
    r = client.get("/health/db")
    assert r.status_code == 200
    b = r.json()
    assert b["ok"] is True
    assert b["daily_games"] == 0
    assert b["todays_game"] is False

    client.get("/daily", params={"user_id": "u"})
    b = client.get("/health/db").json()
    assert b["daily_games"] == 1
    assert b["todays_game"] is True
    assert b["game_date"] == client.app.state.manager.today().isoformat()


def test_health_db_fails_without_daily_games_table(client):
    with client.app.state.engine.begin() as conn:
        conn.execute(text("DROP TABLE daily_questions"))
        conn.execute(text("DROP TABLE daily_games"))
    r = client.get("/health/db")
    assert r.status_code == 500
    assert "db_error" in r.json()["detail"]


def test_health_migrations_basic(client):
    r = client.get("/health/migrations")
    assert r.status_code == 200
    b = r.json()
    assert "code_heads" in b and isinstance(b["code_heads"], list)
    assert b["code_heads"] == ["4f2a9c1d7e30"]
    # schema came from create_all, so nothing is stamped
    assert b["db_version"] is None
    assert b["synced"] is False
