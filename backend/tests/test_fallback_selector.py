"""Unit tests for the offline fallback bank and selector."""
import pytest

from app import metrics
from app.services.fallback_bank import FALLBACK_BANK, FallbackCategory
from app.services.fallback_selector import fallback_category, generate_fallback_questions

TEST_TYPES = [
    "SAT_MATH",
    "SAT_RW_MOCK",
    "ACT_SCIENCE_DIAGNOSTIC",
    "AP_WORLD_HISTORY",
    "DAILY_QUIZ",
    "ADAPTIVE_TEST",
    "completely unknown",
    "",
]


def _assert_valid(q):
    assert isinstance(q.question_text, str) and q.question_text
    assert isinstance(q.explanation, str) and q.explanation
    assert isinstance(q.topic, str) and q.topic
    assert len(q.options) >= 2
    assert all(isinstance(o, str) for o in q.options)
    assert 0 <= q.correct_answer_index < len(q.options)
    assert q.difficulty in ("easy", "medium", "hard")


@pytest.mark.parametrize("test_type", TEST_TYPES)
@pytest.mark.parametrize("n", [1, 3, 25])
def test_fallback_returns_exactly_n_valid_questions(test_type, n):
    questions = generate_fallback_questions(test_type, n)
    assert len(questions) == n
    for q in questions:
        _assert_valid(q)


def test_every_bank_category_has_valid_templates():
    """All categories present and non-empty; every template materializes to a valid Question."""
    assert set(FALLBACK_BANK) == set(FallbackCategory)
    for category, pool in FALLBACK_BANK.items():
        assert pool, category
        for t in pool:
            assert 0 <= t["correct_answer_index"] < len(t["options"]), t["question_text"]


@pytest.mark.parametrize(
    "test_type, category",
    [
        ("SAT_MATH", FallbackCategory.SAT_MATH),
        ("SAT_DIAGNOSTIC", FallbackCategory.SAT_RW),
        ("SAT_RW_MOCK", FallbackCategory.SAT_RW),
        ("SAT_FULL_MOCK", FallbackCategory.SAT_MATH),
        ("ACT_MATH", FallbackCategory.ACT_MATH),
        ("ACT_READING_MOCK", FallbackCategory.ACT_ENGLISH),
        ("ACT_SCIENCE_DIAGNOSTIC", FallbackCategory.ACT_SCIENCE),
        ("AP_BIOLOGY", FallbackCategory.AP_BIOLOGY),
        ("AP_USH_MOCK", FallbackCategory.AP_USH),
        ("AP_WORLD_HISTORY", FallbackCategory.AP_WORLD),
        ("AP_CALCULUS_AB", FallbackCategory.AP_CALC),
        ("AP_CHEMISTRY", FallbackCategory.AP_CHEM),
        ("AP_PHYSICS_1", FallbackCategory.AP_PHYSICS),
        ("AP_PSYCHOLOGY", FallbackCategory.AP_PSYCH),
        ("AP_ENGLISH_LITERATURE", FallbackCategory.AP_LIT),
        ("AP_SOMETHING", FallbackCategory.AP_BIOLOGY),
        ("DAILY_QUIZ", FallbackCategory.DEFAULT),
        ("nonsense", FallbackCategory.DEFAULT),
        ("", FallbackCategory.DEFAULT),
    ],
)
def test_fallback_category(test_type, category):
    assert fallback_category(test_type) == category
    assert fallback_category(test_type) == fallback_category(test_type)


def test_fallback_category_is_case_insensitive():
    assert fallback_category("sat_math") == fallback_category("SAT_MATH") == FallbackCategory.SAT_MATH


def test_oversampling_cycles_pool_in_order_with_fresh_ids():
    """25 from a pool of 10: templates 0..9, 0..9, 0..4; every id distinct."""
    pool = FALLBACK_BANK[FallbackCategory.SAT_MATH]
    assert len(pool) == 10
    questions = generate_fallback_questions("SAT_MATH", 25)
    expected = [pool[i % 10]["question_text"] for i in range(25)]
    assert [q.question_text for q in questions] == expected
    assert len({q.id for q in questions}) == 25


def test_fallback_copies_template_fields():
    q = generate_fallback_questions("AP_CALC", 1)[0]
    t = FALLBACK_BANK[FallbackCategory.AP_CALC][0]
    assert q.question_text == t["question_text"]
    assert q.options == list(t["options"])
    assert q.correct_answer_index == t["correct_answer_index"]
    assert q.topic == t["topic"]


def test_fallback_zero_questions_is_empty():
    assert generate_fallback_questions("SAT_MATH", 0) == []


def test_fallback_counts_served_questions():
    before = metrics.snapshot()["fallback_questions_served_total"]
    generate_fallback_questions("ACT_MATH", 4)
    assert metrics.snapshot()["fallback_questions_served_total"] == before + 4
