"""
Question schema shared by AI generation and the offline fallback bank.
Every Question handed to a caller is fully populated: options has at least two entries and
correct_answer_index points into it.
"""
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

Difficulty = Literal["easy", "medium", "hard"]
DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY = "medium"
DEFAULT_OPTIONS: tuple[str, ...] = ("A", "B", "C", "D")
# Stand-ins for fields missing from model output or bank templates.
PLACEHOLDER_QUESTION = "Placeholder Question"
DEFAULT_TOPIC = "General"


class Question(BaseModel):
    id: str
    question_text: str
    options: list[str]
    correct_answer_index: int
    explanation: str
    topic: str
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    passage: str | None = None

    @field_validator("options")
    @classmethod
    def at_least_two_options(cls, v: list[str]) -> list[str]:
        if len(v) < 2:
            raise ValueError("options must have at least 2 items")
        return v

    @model_validator(mode="after")
    def correct_index_in_range(self) -> "Question":
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError("correct_answer_index must point into options")
        return self


def coerce_difficulty(value: object) -> str:
    """Map free-form difficulty to easy|medium|hard; anything else is medium."""
    if isinstance(value, str):
        d = value.strip().lower()
        if d in DIFFICULTIES:
            return d
    return DEFAULT_DIFFICULTY


def coerce_answer_index(value: object, num_options: int) -> int:
    """Return value as an index into options, or 0 when it is missing, non-integral or out of range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    idx = int(value)
    return idx if 0 <= idx < num_options else 0
