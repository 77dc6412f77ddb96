from fastapi.testclient import TestClient

from main import app
from store import SessionStore

client = TestClient(app)


def _new(seed=3, bookwork_chance=0.0):
    r = client.post("/sessions", json={"seed": seed})
    assert r.status_code == 201
    sid = r.json()["id"]
    SessionStore.get(sid).bookwork_chance = bookwork_chance
    return sid, {"x-session-id": sid}


def _answer(sid):
    return SessionStore.get(sid).question.answer


def _to_practice(h, topic="expand_brackets"):
    assert client.post("/session/topic", json={"topic_id": topic}, headers=h).status_code == 200
    r = client.post("/session/practice", headers=h)
    assert r.status_code == 200
    return r.json()


def test_create_session_without_body():
    r = client.post("/sessions")
    assert r.status_code == 201
    body = r.json()
    assert body["view"] == "menu"
    assert body["xp"] == 0
    assert body["bookwork"]["state"] == "inactive"


def test_missing_or_unknown_session():
    assert client.get("/session").status_code == 400
    assert client.get("/session", headers={"x-session-id": "nope"}).status_code == 404


def test_practice_view_hides_answer():
    sid, h = _new()
    body = _to_practice(h)
    assert body["view"] == "practice"
    assert body["round_count"] == 1
    assert body["question"]["id"] == 1
    assert body["question"]["steps"] is None
    assert "answer" not in body["question"]


def test_locked_topic_forbidden():
    sid, h = _new()
    r = client.post("/session/topic", json={"topic_id": "pythagoras"}, headers=h)
    assert r.status_code == 403


def test_unknown_topic_not_found():
    sid, h = _new()
    r = client.post("/session/topic", json={"topic_id": "nope"}, headers=h)
    assert r.status_code == 404


def test_answer_outside_practice_conflict():
    sid, h = _new()
    r = client.post("/session/answer", json={"answer": "1"}, headers=h)
    assert r.status_code == 409


def test_wrong_then_retry_then_correct():
    sid, h = _new()
    _to_practice(h)

    r = client.post("/session/answer", json={"answer": "nope"}, headers=h)
    assert r.status_code == 200
    b = r.json()
    assert b["ok"] is True and b["correct"] is False and b["feedback"]

    view = client.get("/session", headers=h).json()
    assert view["feedback"] == "wrong"
    assert view["question"]["steps"] == b["feedback"]

    view = client.post("/session/retry", headers=h).json()
    assert view["feedback"] == "idle" and view["question"]["steps"] is None

    r = client.post("/session/answer", json={"answer": _answer(sid).upper()}, headers=h)
    b = r.json()
    assert b["correct"] is True and b["score"] == 100


def test_blank_and_overlong_answers():
    sid, h = _new()
    _to_practice(h)
    b = client.post("/session/answer", json={"answer": "  "}, headers=h).json()
    assert b["ok"] is False and b["feedback"] == "Answer required."
    r = client.post("/session/answer", json={"answer": "1" * 101}, headers=h)
    assert r.status_code == 422


def test_full_round_unlocks_next_topic():
    sid, h = _new()
    _to_practice(h)
    n = SessionStore.get(sid).questions_per_round
    for i in range(n):
        b = client.post("/session/answer", json={"answer": _answer(sid)}, headers=h).json()
        assert b["correct"] is True
        assert b["round_complete"] is (i == n - 1)

    view = client.get("/session", headers=h).json()
    assert view["view"] == "level_complete"
    assert view["xp"] == 100 * n
    assert view["unlocked_topics"] == ["expand_brackets", "factorise_linear"]

    menu = client.get("/topics", headers=h).json()
    assert menu[1]["locked"] is False and menu[2]["locked"] is True

    # replay keeps XP and starts a fresh round
    view = client.post("/session/practice", headers=h).json()
    assert view["view"] == "practice" and view["round_count"] == 1 and view["xp"] == 100 * n

    view = client.post("/session/exit", headers=h).json()
    assert view["view"] == "menu" and view["question"] is None


def test_bookwork_flow_over_http():
    sid, h = _new(bookwork_chance=1.0)
    _to_practice(h)
    first = _answer(sid)
    client.post("/session/answer", json={"answer": first}, headers=h)
    b = client.post("/session/answer", json={"answer": _answer(sid)}, headers=h).json()
    assert b["bookwork_check"] is True

    view = client.get("/session", headers=h).json()
    assert view["bookwork"]["state"] == "awaiting_input"
    assert view["bookwork"]["target"] == 1
    assert view["bookwork"]["expected"] is None

    # normal answers are blocked while the overlay is up
    r = client.post("/session/answer", json={"answer": "1"}, headers=h)
    assert r.status_code == 409

    b = client.post("/session/bookwork", json={"answer": "wrong"}, headers=h).json()
    assert b["correct"] is False and b["expected"] == first and b["submitted"] == "wrong"

    view = client.get("/session", headers=h).json()
    assert view["bookwork"]["state"] == "failed"
    assert view["bookwork"]["expected"] == first

    view = client.post("/session/bookwork/acknowledge", headers=h).json()
    assert view["bookwork"]["state"] == "inactive"
    assert view["question"]["id"] == 2 and view["feedback"] == "idle"

    # answer Q2 again; the next check passes and the round moves on
    client.post("/session/answer", json={"answer": _answer(sid)}, headers=h)
    b = client.post("/session/bookwork", json={"answer": first}, headers=h).json()
    assert b["correct"] is True
    view = client.get("/session", headers=h).json()
    assert view["round_count"] == 3 and view["bookwork"]["state"] == "inactive"


def test_bookwork_endpoints_conflict_when_inactive():
    sid, h = _new()
    _to_practice(h)
    assert client.post("/session/bookwork", json={"answer": "x"}, headers=h).status_code == 409
    assert client.post("/session/bookwork/acknowledge", headers=h).status_code == 409


def test_end_session():
    sid, h = _new()
    assert client.delete("/session", headers=h).json()["ok"] is True
    assert client.get("/session", headers=h).status_code == 404


def test_openapi_documents_view_states():
    schema = client.get("/openapi.json").json()["components"]["schemas"]
    assert schema["SessionOut"]["properties"]["view"]["enum"] == [
        "menu",
        "explainer",
        "practice",
        "level_complete",
    ]
    assert schema["SessionOut"]["properties"]["feedback"]["enum"] == ["idle", "correct", "wrong"]
    assert schema["BookworkView"]["properties"]["state"]["enum"] == [
        "inactive",
        "awaiting_input",
        "failed",
    ]


def test_next_topic_from_completion_screen_over_http():
    sid, h = _new()
    _to_practice(h)
    for _ in range(SessionStore.get(sid).questions_per_round):
        client.post("/session/answer", json={"answer": _answer(sid)}, headers=h)
    r = client.post("/session/topic", json={"topic_id": "factorise_linear"}, headers=h)
    assert r.status_code == 200
    assert r.json()["view"] == "explainer"
