def test_list_questions(client):
    r = client.get("/questions")
    assert r.status_code == 200
    data = r.json()
    assert isinstance(data, list) and len(data) >= 1
    q = data[0]
    assert {"id", "category", "prompt", "difficulty"}.issubset(q.keys())
    assert "answer" not in q


def test_list_questions_filter_and_limit(client):
    r = client.get("/questions", params={"category": "Science", "limit": 2, "random": True})
    data = r.json()
    assert len(data) == 2
    assert all(q["category"] == "Science" for q in data)


def test_get_question_detail_ok(client):
    r = client.get("/questions/geo-001")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == "geo-001"
    assert "prompt" in body
    assert "answer" not in body


def test_get_question_detail_404(client):
    r = client.get("/questions/missing")
    assert r.status_code == 404
    assert r.json()["error"] == "question_not_found"
