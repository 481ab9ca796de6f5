"""
Test result and analysis schemas.
"""
from pydantic import BaseModel

from app.schemas.question import Question


class UserAnswer(BaseModel):
    question_id: str
    answer_index: int


class TopicPerformance(BaseModel):
    topic: str
    correct: int = 0
    total: int = 1


class TestResult(BaseModel):
    """A completed test: the questions shown, the user's answers and per-topic scores."""

    __test__ = False  # not a pytest class

    test_type: str = ""
    questions: list[Question] = []
    answers: list[UserAnswer] = []
    topic_performance: list[TopicPerformance] = []


class QuestionAnalysis(BaseModel):
    question_text: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    explanation: str
    topic: str
    question_type: str = ""


class AnalysisResponse(BaseModel):
    summary: str
    question_analysis: list[QuestionAnalysis]
    topic_performance: list[TopicPerformance]
