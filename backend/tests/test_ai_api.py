"""
API tests for the /ai router: generate-test (AI and fallback), analyze, plan, streaming chat,
admin insights, health and startup key check.
Uses FastAPI TestClient with the gateway dependency overridden by an in-memory fake.
Requires: fastapi, httpx.
"""
import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_gateway  # noqa: E402
from app.config import settings  # noqa: E402
from app.llm.errors import InvalidRequestError, QuotaExceededError  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.question import Question  # noqa: E402
from app.schemas.result import AnalysisResponse, TopicPerformance  # noqa: E402
from app.services.plan_builder import build_plan  # noqa: E402


class FakeGateway:
    """AIGateway stand-in. Set .error to make generate/analyze/chat/insights raise it."""

    def __init__(self):
        self.error = None
        self.calls = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    def generate_questions(self, test_type, num_questions, topic=None, difficulty=None, avoid_topics=None):
        self.calls.append(("generate_questions", test_type, num_questions, topic, difficulty, avoid_topics))
        self._maybe_fail()
        return [
            Question(id=f"ai-{i}", question_text=f"AI question {i}?", options=["a", "b", "c", "d"],
                     correct_answer_index=1, explanation="Because.", topic="Algebra")
            for i in range(num_questions)
        ]

    def analyze_results(self, test_result):
        self.calls.append(("analyze_results",))
        if not test_result.questions or not test_result.answers:
            raise InvalidRequestError("Questions & answers required.")
        self._maybe_fail()
        return AnalysisResponse(
            summary="Solid work.",
            question_analysis=[],
            topic_performance=[TopicPerformance(topic="Algebra", correct=1, total=1)],
        )

    def generate_plan(self, goal, test_result):
        return build_plan(goal, test_result)

    def stream_chat_response(self, history, context=None):
        self.calls.append(("stream_chat_response", [m.role for m in history], context))
        self._maybe_fail()
        return iter(["Slope is ", "rise over ", "run."])

    def get_admin_insights(self, stats):
        self._maybe_fail()
        return f"{stats.total_users} users; weakest topic is Algebra."


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(gateway, monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    app.dependency_overrides[get_gateway] = lambda: gateway
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_generate_test_from_ai(client, gateway):
    r = client.post("/ai/generate-test", json={
        "test_type": "SAT_MATH", "num_questions": 3, "topic": "Lines", "difficulty": "hard",
        "avoid_topics": ["Statistics"],
    })
    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "ai"
    assert body["error_kind"] is None
    assert [q["id"] for q in body["questions"]] == ["ai-0", "ai-1", "ai-2"]
    assert gateway.calls[0] == ("generate_questions", "SAT_MATH", 3, "Lines", "hard", ["Statistics"])


def test_generate_test_falls_back_on_provider_error(client, gateway):
    gateway.error = QuotaExceededError("quota hit", raw_message="429 RESOURCE_EXHAUSTED")
    r = client.post("/ai/generate-test", json={"test_type": "AP_BIOLOGY", "num_questions": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["error_kind"] == "QuotaExceeded"
    assert len(body["questions"]) == 5
    for q in body["questions"]:
        assert 0 <= q["correct_answer_index"] < len(q["options"])


def test_generate_test_without_fallback_returns_status(client, gateway, monkeypatch):
    """With FALLBACK_ON_AI_ERROR off the normalized status and user-safe message are returned."""
    monkeypatch.setattr(settings, "fallback_on_ai_error", False)
    gateway.error = QuotaExceededError("Daily limit reached.", raw_message="429 RESOURCE_EXHAUSTED secret")
    r = client.post("/ai/generate-test", json={"test_type": "SAT_MATH", "num_questions": 2})
    assert r.status_code == 429
    assert r.json()["detail"] == "Daily limit reached."
    assert "secret" not in r.text


@pytest.mark.parametrize("num_questions", [0, -1, 51])
def test_generate_test_rejects_out_of_range_count(client, num_questions):
    r = client.post("/ai/generate-test", json={"test_type": "SAT_MATH", "num_questions": num_questions})
    assert r.status_code == 422


def test_fallback_test_endpoint(client, gateway):
    r = client.post("/ai/fallback-test", json={"test_type": "ACT_MATH", "num_questions": 12})
    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert len(body["questions"]) == 12
    assert len({q["id"] for q in body["questions"]}) == 12
    assert gateway.calls == []


def test_analyze_requires_questions_and_answers(client):
    r = client.post("/ai/analyze", json={"test_type": "SAT_MATH", "questions": [], "answers": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "Questions & answers required."


def test_analyze_happy_path(client):
    payload = {
        "test_type": "SAT_MATH",
        "questions": [{
            "id": "q1", "question_text": "1+1?", "options": ["1", "2"], "correct_answer_index": 1,
            "explanation": "Add.", "topic": "Algebra",
        }],
        "answers": [{"question_id": "q1", "answer_index": 1}],
    }
    r = client.post("/ai/analyze", json=payload)
    assert r.status_code == 200
    assert r.json()["summary"] == "Solid work."


def test_plan_defaults_to_eight_weeks(client):
    r = client.post("/ai/plan", json={
        "goal": {"exam": "SAT"},
        "result": {"test_type": "SAT_MATH", "topic_performance": [{"topic": "Algebra", "correct": 1, "total": 4}]},
    })
    assert r.status_code == 200
    weeks = r.json()["weeks"]
    assert len(weeks) == 8
    assert [s["type"] for s in weeks[0]["steps"]] == ["concept", "review", "test"]
    assert weeks[0]["steps"][0]["topic"] == "Algebra"


def test_plan_does_not_build_gateway(client):
    """Plans are computed locally, so no Gemini client is needed."""
    def no_gateway():
        raise AssertionError("gateway requested for /ai/plan")

    app.dependency_overrides[get_gateway] = no_gateway
    r = client.post("/ai/plan", json={"goal": {"exam": "ACT"}, "result": {"test_type": "ACT_MATH"}})
    assert r.status_code == 200
    assert r.json()["weeks"][0]["steps"][0]["topic"] == "General"


def test_chat_streams_text(client, gateway):
    r = client.post("/ai/chat", json={
        "history": [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello"},
                    {"role": "user", "content": "What is slope?"}],
        "context": "SAT prep",
    })
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "Slope is rise over run."
    assert gateway.calls[-1] == ("stream_chat_response", ["user", "assistant", "user"], "SAT prep")


def test_chat_error_before_stream_is_normalized(client, gateway):
    gateway.error = QuotaExceededError("Daily limit reached.")
    r = client.post("/ai/chat", json={"history": [{"role": "user", "content": "Hi"}]})
    assert r.status_code == 429


def test_chat_requires_history(client):
    r = client.post("/ai/chat", json={"history": []})
    assert r.status_code == 422


def test_admin_insights(client):
    r = client.post("/ai/admin-insights", json={"total_users": 42, "weakest_topics": [{"topic": "Algebra"}]})
    assert r.status_code == 200
    assert r.json() == {"insights": "42 users; weakest topic is Algebra."}


def test_metrics_endpoint(client):
    client.post("/ai/fallback-test", json={"test_type": "SAT_MATH", "num_questions": 2})
    body = client.get("/metrics").json()
    assert body["fallback_questions_served_total"] >= 2
    assert "provider_errors_total" in body


def test_startup_fails_without_api_key(monkeypatch):
    """The app refuses to start when GEMINI_API_KEY is missing."""
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        with TestClient(app):
            pass
