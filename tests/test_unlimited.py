def test_unlimited_batch(client):
    r = client.get("/unlimited/batch")
    assert r.status_code == 200
    data = r.json()
    assert len(data) == 12
    assert len({q["id"] for q in data}) == 12
    assert all("answer" not in q for q in data)


def test_unlimited_answers_are_graded_not_stored(client):
    qid = client.get("/unlimited/batch").json()[0]["id"]
    answer = client.app.state.store.find_question(qid).answer

    r = client.post("/unlimited/answers", json={"question_id": qid, "answer": f"  {answer}!"})
    b = r.json()
    assert b["ok"] is True and b["is_correct"] is True and b.get("correct_answer") is None

    # answering again is fine: nothing was recorded
    r = client.post("/unlimited/answers", json={"question_id": qid, "answer": "zzz"})
    b = r.json()
    assert b["is_correct"] is False and b["already_answered"] is False
    assert b["correct_answer"] == answer


def test_unlimited_unknown_question(client):
    r = client.post("/unlimited/answers", json={"question_id": "missing", "answer": "x"})
    assert r.status_code == 404


def test_unlimited_punctuation_only_answer(client):
    qid = client.get("/unlimited/batch").json()[0]["id"]
    r = client.post("/unlimited/answers", json={"question_id": qid, "answer": "... ?!"})
    b = r.json()
    assert b["ok"] is False
    assert b["feedback"] == "Answer required."
