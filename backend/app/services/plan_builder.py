"""
Study plan generation (local, no AI call).
Ranks topics weakest-first, sizes the plan from the exam date and fills each week with one weak
topic and a fixed concept -> review -> test sequence.
"""
import math
import uuid
from datetime import datetime, timedelta, timezone

from app.schemas.plan import Exam, ExamGoal, Plan, PlanStep, PlanWeek
from app.schemas.result import TestResult, TopicPerformance

MIN_WEEKS = 4
MAX_WEEKS = 12
DEFAULT_WEEKS = 8
MIN_DAYS_UNTIL_EXAM = 7
WEAK_TOPIC_LIMIT = 5
DEFAULT_TOPIC = "General"

# Mini-test offered in each week's final step, by exam.
MINI_TEST_BY_EXAM: dict[str, str] = {
    Exam.SAT.value: "SAT_RW_MOCK",
    Exam.ACT.value: "ACT_READING_MOCK",
    Exam.AP.value: "AP_USH_MOCK",
}


def _accuracy(tp: TopicPerformance) -> float:
    return tp.correct / tp.total if tp.total else 0.0


def rank_weak_topics(topic_performance: list[TopicPerformance], limit: int = WEAK_TOPIC_LIMIT) -> list[str]:
    """Topic names by ascending accuracy (total=0 counts as 0%). Stable: ties keep input order."""
    ranked = sorted(topic_performance, key=_accuracy)
    return [tp.topic for tp in ranked[:limit]]


def _now_like(ref: datetime, now: datetime | None) -> datetime:
    """now (or the current time) in the same naive/aware form as ref so they can be subtracted."""
    if now is None:
        now = datetime.now(timezone.utc)
    if ref.tzinfo and not now.tzinfo:
        return now.replace(tzinfo=timezone.utc)
    if not ref.tzinfo and now.tzinfo:
        return now.astimezone(timezone.utc).replace(tzinfo=None)
    return now


def plan_week_count(exam_date: datetime | None, now: datetime | None = None) -> int:
    """
    Weeks until the exam, clamped to [MIN_WEEKS, MAX_WEEKS]; DEFAULT_WEEKS without a date.
    Days are rounded and floored at MIN_DAYS_UNTIL_EXAM, so past dates give MIN_WEEKS.
    """
    if exam_date is None:
        return DEFAULT_WEEKS
    current = _now_like(exam_date, now)
    # half days round up, not to even
    days = max(MIN_DAYS_UNTIL_EXAM, math.floor((exam_date - current).total_seconds() / 86400 + 0.5))
    return min(MAX_WEEKS, max(MIN_WEEKS, math.ceil(days / 7)))


def _mini_test_type(goal: ExamGoal, result: TestResult) -> str:
    exam = (goal.exam or "").strip().upper()
    return MINI_TEST_BY_EXAM.get(exam, result.test_type)


def _week_steps(topic: str, mini_test_type: str) -> list[PlanStep]:
    return [
        PlanStep(
            id=str(uuid.uuid4()),
            title="Learn core concepts",
            description=f"Study key ideas for {topic}.",
            type="concept",
            topic=topic,
            estimated_time="~30 mins",
        ),
        PlanStep(
            id=str(uuid.uuid4()),
            title="Practice questions",
            description=f"Solve focused questions on {topic}.",
            type="review",
            topic=topic,
            estimated_time="~25 mins",
        ),
        PlanStep(
            id=str(uuid.uuid4()),
            title="Mini test",
            description="Take a short timed quiz.",
            type="test",
            related_test_type=mini_test_type,
            estimated_time="~20 mins",
        ),
    ]


def build_plan(goal: ExamGoal, result: TestResult, now: datetime | None = None) -> Plan:
    """Multi-week plan targeting the five weakest topics of result, cycling them week by week."""
    if now is None:
        now = datetime.now(timezone.utc)
    weakest = rank_weak_topics(result.topic_performance)
    weeks_count = plan_week_count(goal.exam_date, now)
    mini = _mini_test_type(goal, result)

    weeks: list[PlanWeek] = []
    for i in range(weeks_count):
        start = now + timedelta(days=7 * i)
        topic = (weakest[i % len(weakest)] if weakest else "") or DEFAULT_TOPIC
        weeks.append(PlanWeek(
            week=i + 1,
            start_date=start,
            end_date=start + timedelta(days=6),
            summary=f"Focus on {topic} and timed practice.",
            steps=_week_steps(topic, mini),
        ))
    return Plan(id=str(uuid.uuid4()), generated_on=now, goal=goal, weeks=weeks)
