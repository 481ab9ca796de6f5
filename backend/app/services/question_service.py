"""
Question generation for request handlers: try the AI gateway once, fall back to the offline bank.
"""
import logging
from dataclasses import dataclass

from app.llm.base import AIGateway
from app.llm.errors import AIServiceError, InvalidRequestError
from app.schemas.question import Question
from app.services.fallback_selector import generate_fallback_questions

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


@dataclass
class GeneratedQuestions:
    questions: list[Question]
    source: str
    error: AIServiceError | None = None


def generate_questions_with_fallback(
    gateway: AIGateway,
    test_type: str,
    num_questions: int,
    topic: str | None = None,
    difficulty: str | None = None,
    avoid_topics: list[str] | None = None,
    use_fallback: bool = True,
) -> GeneratedQuestions:
    """
    Single AI attempt. On any provider or parse failure, serve fallback questions when use_fallback
    is set, otherwise re-raise. Caller precondition errors (InvalidRequestError) always propagate.
    """
    try:
        questions = gateway.generate_questions(test_type, num_questions, topic, difficulty, avoid_topics)
        return GeneratedQuestions(questions=questions, source=SOURCE_AI)
    except InvalidRequestError:
        raise
    except AIServiceError as e:
        if not use_fallback:
            raise
        logger.warning(
            "AI generation failed (kind=%s status=%s); using fallback bank for test_type=%r",
            e.kind.value,
            e.status_code,
            test_type,
        )
        return GeneratedQuestions(
            questions=generate_fallback_questions(test_type, num_questions),
            source=SOURCE_FALLBACK,
            error=e,
        )
