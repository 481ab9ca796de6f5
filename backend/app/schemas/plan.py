"""
Exam goal and generated study plan schemas.
"""
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel


class Exam(str, Enum):
    SAT = "SAT"
    ACT = "ACT"
    AP = "AP"


class ExamGoal(BaseModel):
    exam: str
    exam_date: datetime | None = None
    target_score: int | None = None


class PlanStep(BaseModel):
    id: str
    title: str
    description: str
    type: Literal["concept", "review", "test"]
    topic: str | None = None
    related_test_type: str | None = None
    completed: bool = False
    estimated_time: str


class PlanWeek(BaseModel):
    week: int  # 1-based
    start_date: datetime
    end_date: datetime
    summary: str
    steps: list[PlanStep]


class Plan(BaseModel):
    id: str
    generated_on: datetime
    goal: ExamGoal
    weeks: list[PlanWeek]
