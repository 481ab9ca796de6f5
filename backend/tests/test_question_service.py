"""Unit tests for AI-first question generation with offline fallback."""
import pytest

from app.llm.errors import InvalidRequestError, MalformedResponseError, QuotaExceededError
from app.schemas.question import Question
from app.services.question_service import SOURCE_AI, SOURCE_FALLBACK, generate_questions_with_fallback


class _Gateway:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def generate_questions(self, test_type, num_questions, topic=None, difficulty=None, avoid_topics=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [
            Question(id=str(i), question_text="Q?", options=["a", "b"], correct_answer_index=0,
                     explanation="E", topic="T")
            for i in range(num_questions)
        ]


def test_ai_success_is_returned_as_is():
    result = generate_questions_with_fallback(_Gateway(), "SAT_MATH", 3)
    assert result.source == SOURCE_AI
    assert result.error is None
    assert [q.id for q in result.questions] == ["0", "1", "2"]


@pytest.mark.parametrize("error", [QuotaExceededError("q"), MalformedResponseError("m")])
def test_provider_failure_serves_fallback_after_single_attempt(error):
    gateway = _Gateway(error)
    result = generate_questions_with_fallback(gateway, "ACT_SCIENCE", 4)
    assert gateway.calls == 1
    assert result.source == SOURCE_FALLBACK
    assert result.error is error
    assert len(result.questions) == 4


def test_failure_reraised_when_fallback_disabled():
    with pytest.raises(QuotaExceededError):
        generate_questions_with_fallback(_Gateway(QuotaExceededError("q")), "SAT_MATH", 2, use_fallback=False)


def test_invalid_request_never_falls_back():
    with pytest.raises(InvalidRequestError):
        generate_questions_with_fallback(_Gateway(InvalidRequestError("bad")), "SAT_MATH", 2)
