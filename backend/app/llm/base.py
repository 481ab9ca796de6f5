"""
AI gateway interface. Implementations raise only AIServiceError subclasses (see app.llm.errors)
and return fully sanitized pydantic objects, never raw provider output.
"""
from typing import Iterator, Protocol

from app.schemas.ai import AdminInsightStats, ChatMessage
from app.schemas.plan import ExamGoal, Plan
from app.schemas.question import Question
from app.schemas.result import AnalysisResponse, TestResult


class AIGateway(Protocol):
    """Abstract interface for question generation, result analysis, planning, chat and admin insights."""

    def generate_questions(
        self,
        test_type: str,
        num_questions: int,
        topic: str | None = None,
        difficulty: str | None = None,
        avoid_topics: list[str] | None = None,
    ) -> list[Question]:
        """One schema-constrained call; every returned Question is valid. Raises MalformedResponseError on unparseable output."""
        ...

    def analyze_results(self, test_result: TestResult) -> AnalysisResponse:
        """Structured analysis of a finished test. Raises InvalidRequestError without questions or answers."""
        ...

    def generate_plan(self, goal: ExamGoal, test_result: TestResult) -> Plan:
        """Local plan computation; no provider call."""
        ...

    def stream_chat_response(self, history: list[ChatMessage], context: str | None = None) -> Iterator[str]:
        """Lazy text chunks of the tutor's reply. Consumers may stop early."""
        ...

    def get_admin_insights(self, stats: AdminInsightStats) -> str:
        """Short free-text summary of platform stats."""
        ...
