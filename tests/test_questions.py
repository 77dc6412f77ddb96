from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_sample_questions():
    r = client.get("/questions", params={"topic": "percentages", "limit": 3})
    assert r.status_code == 200
    data = r.json()
    assert len(data) == 3
    assert [q["id"] for q in data] == [1, 2, 3]
    for q in data:
        assert q["topic"] == "percentages"
        assert q["prompt"].startswith("Find ")
        assert "answer" not in q


def test_sample_questions_seeded_repeatable():
    params = {"topic": "solve_quadratics", "limit": 5, "seed": 42}
    a = client.get("/questions", params=params).json()
    b = client.get("/questions", params=params).json()
    assert a == b


def test_sample_questions_unknown_topic_404():
    r = client.get("/questions", params={"topic": "missing"})
    assert r.status_code == 404


def test_sample_questions_limit_bounds():
    r = client.get("/questions", params={"topic": "profit", "limit": 0})
    assert r.status_code == 422
