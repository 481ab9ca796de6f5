"""
Request/response bodies for the /ai router.
"""
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.config import settings
from app.schemas.plan import ExamGoal
from app.schemas.question import Difficulty, Question
from app.schemas.result import TestResult


class GenerateTestRequest(BaseModel):
    test_type: str
    num_questions: int = 10
    topic: str | None = None
    difficulty: Difficulty | None = None
    avoid_topics: list[str] | None = None

    @field_validator("num_questions")
    @classmethod
    def num_questions_range(cls, v: int) -> int:
        if v < 1 or v > settings.max_questions_per_request:
            raise ValueError(f"num_questions must be between 1 and {settings.max_questions_per_request}")
        return v


class GenerateTestResponse(BaseModel):
    questions: list[Question]
    source: Literal["ai", "fallback"]
    error_kind: str | None = None  # set when source is fallback because the AI call failed


class PlanRequest(BaseModel):
    goal: ExamGoal
    result: TestResult


class ChatMessage(BaseModel):
    role: str  # "user" | "assistant"
    content: str


class ChatRequest(BaseModel):
    history: list[ChatMessage] = Field(min_length=1)
    context: str | None = None


class AdminInsightStats(BaseModel):
    total_users: int
    user_stats: list[dict] = []
    weakest_topics: list[dict] = []


class AdminInsightsResponse(BaseModel):
    insights: str
