"""
Structured-output schemas sent with generateContent requests.

Fields are declared as (name, type) tables plus a required list and turned into google.genai
Schema objects. Field names are the wire names the model must emit (camelCase), not our pydantic names.
"""
from google.genai import types

# (field, type) where type is one of STRING, NUMBER, BOOLEAN, or ("ARRAY", item_type)
QUESTION_FIELDS: tuple[tuple[str, object], ...] = (
    ("id", "STRING"),
    ("questionText", "STRING"),
    ("options", ("ARRAY", "STRING")),
    ("correctAnswerIndex", "NUMBER"),
    ("explanation", "STRING"),
    ("topic", "STRING"),
    ("difficulty", "STRING"),
    ("passage", "STRING"),
)
QUESTION_REQUIRED = ("id", "questionText", "options", "correctAnswerIndex", "explanation", "topic")

QUESTION_ANALYSIS_FIELDS: tuple[tuple[str, object], ...] = (
    ("questionText", "STRING"),
    ("userAnswer", "STRING"),
    ("correctAnswer", "STRING"),
    ("isCorrect", "BOOLEAN"),
    ("explanation", "STRING"),
    ("topic", "STRING"),
    ("questionType", "STRING"),
)
QUESTION_ANALYSIS_REQUIRED = ("questionText", "userAnswer", "correctAnswer", "isCorrect", "explanation", "topic")

TOPIC_PERFORMANCE_FIELDS: tuple[tuple[str, object], ...] = (
    ("topic", "STRING"),
    ("correct", "NUMBER"),
    ("total", "NUMBER"),
)
TOPIC_PERFORMANCE_REQUIRED = ("topic", "correct", "total")


def _field_schema(field_type: object) -> types.Schema:
    if isinstance(field_type, tuple):
        container, item_type = field_type
        return types.Schema(type=types.Type(container), items=_field_schema(item_type))
    return types.Schema(type=types.Type(field_type))


def object_schema(fields: tuple[tuple[str, object], ...], required: tuple[str, ...]) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={name: _field_schema(t) for name, t in fields},
        required=list(required),
    )


def question_list_schema() -> types.Schema:
    """Array of question objects (generate_questions)."""
    return types.Schema(
        type=types.Type.ARRAY,
        items=object_schema(QUESTION_FIELDS, QUESTION_REQUIRED),
    )


def analysis_schema() -> types.Schema:
    """Object with summary, questionAnalysis[] and topicPerformance[] (analyze_results)."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "summary": types.Schema(type=types.Type.STRING),
            "questionAnalysis": types.Schema(
                type=types.Type.ARRAY,
                items=object_schema(QUESTION_ANALYSIS_FIELDS, QUESTION_ANALYSIS_REQUIRED),
            ),
            "topicPerformance": types.Schema(
                type=types.Type.ARRAY,
                items=object_schema(TOPIC_PERFORMANCE_FIELDS, TOPIC_PERFORMANCE_REQUIRED),
            ),
        },
        required=["summary", "questionAnalysis", "topicPerformance"],
    )
