"""
Fallback selector: exactly num_questions offline questions for any test type.
Never raises and never touches the network; used when the AI gateway fails or is bypassed.
"""
import logging
import uuid

from app.metrics import increment_fallback_questions_served
from app.schemas.question import (
    DEFAULT_DIFFICULTY,
    DEFAULT_OPTIONS,
    DEFAULT_TOPIC,
    PLACEHOLDER_QUESTION,
    Question,
    coerce_answer_index,
    coerce_difficulty,
)
from app.services.fallback_bank import FallbackCategory, get_pool
from app.services.taxonomy import FAMILY_ACT, FAMILY_AP, FAMILY_SAT, FamilyTable, Rule, classify

logger = logging.getLogger(__name__)

PLACEHOLDER_EXPLANATION = "No explanation."

C = FallbackCategory

FALLBACK_TABLES: dict[str, FamilyTable[FallbackCategory]] = {
    FAMILY_SAT: FamilyTable((
        Rule(("math", "algebra", "geometry"), C.SAT_MATH),
        Rule(("diagnostic", "rw", "reading", "writing"), C.SAT_RW),
    ), default=C.SAT_MATH),
    FAMILY_ACT: FamilyTable((
        Rule(("math",), C.ACT_MATH),
        Rule(("english", "writing", "reading"), C.ACT_ENGLISH),
        Rule(("science", "diagnostic"), C.ACT_SCIENCE),
    ), default=C.ACT_MATH),
    FAMILY_AP: FamilyTable((
        Rule(("biology",), C.AP_BIOLOGY),
        Rule(("chem",), C.AP_CHEM),
        Rule(("physics",), C.AP_PHYSICS),
        Rule(("psych",), C.AP_PSYCH),
        Rule(("world",), C.AP_WORLD),
        Rule(("ush", "history"), C.AP_USH),
        Rule(("calc",), C.AP_CALC),
        Rule(("lit", "english"), C.AP_LIT),
    ), default=C.AP_BIOLOGY),
}


def fallback_category(test_type: str) -> FallbackCategory:
    """Bank category for test_type. Quiz, adaptive-only and unrecognized types resolve to DEFAULT."""
    return classify(test_type, FALLBACK_TABLES, C.DEFAULT)


def _materialize(template: dict) -> Question:
    options = [str(o) for o in (template.get("options") or ())]
    if len(options) < 2:
        options = list(DEFAULT_OPTIONS)
    return Question(
        id=str(uuid.uuid4()),
        question_text=template.get("question_text") or PLACEHOLDER_QUESTION,
        options=options,
        correct_answer_index=coerce_answer_index(template.get("correct_answer_index", 0), len(options)),
        explanation=template.get("explanation") or PLACEHOLDER_EXPLANATION,
        topic=template.get("topic") or DEFAULT_TOPIC,
        difficulty=coerce_difficulty(template.get("difficulty") or DEFAULT_DIFFICULTY),
        passage=template.get("passage") or None,
    )


def generate_fallback_questions(test_type: str, num_questions: int) -> list[Question]:
    """
    Return num_questions questions from the bank category for test_type.
    When num_questions exceeds the pool, templates repeat in order (index modulo pool size);
    each question still gets a fresh id. num_questions < 1 yields an empty list.
    """
    category = fallback_category(test_type)
    pool = get_pool(category)
    questions = [_materialize(pool[i % len(pool)]) for i in range(max(0, num_questions))]
    logger.warning(
        "Serving fallback questions: test_type=%r category=%s count=%s pool_size=%s",
        test_type,
        category.value,
        len(questions),
        len(pool),
    )
    increment_fallback_questions_served(len(questions))
    return questions
