"""
Gemini (Google) AI gateway via google.genai.
Uses GEN_MODEL_NAME (e.g. gemini-2.5-flash) and GEMINI_API_KEY.

Each operation is a single provider call (no automatic retry; callers decide whether to fall back).
Structured output is handled in two separate steps: a strict JSON parse that fails closed
(MalformedResponseError) and a lenient sanitize/repair pass that never raises.
"""
import json
import logging
import os
import time
import uuid
from typing import Any, Iterator

from app.config import normalize_model_name, settings
from app.llm.errors import (
    AIServiceError,
    InvalidRequestError,
    MalformedResponseError,
    normalize_provider_error,
)
from app.llm.sanitize import sanitize_options, sanitize_text
from app.llm.schemas import analysis_schema, question_list_schema
from app.metrics import record_provider_error
from app.schemas.ai import AdminInsightStats, ChatMessage
from app.schemas.plan import ExamGoal, Plan
from app.schemas.question import (
    DEFAULT_OPTIONS,
    DEFAULT_TOPIC,
    PLACEHOLDER_QUESTION,
    Question,
    coerce_answer_index,
    coerce_difficulty,
)
from app.schemas.result import AnalysisResponse, QuestionAnalysis, TestResult, TopicPerformance
from app.services.plan_builder import build_plan
from app.services.prompt_builder import QUESTION_GEN_SYSTEM, build_question_prompt

logger = logging.getLogger(__name__)

NO_EXPLANATION = "No explanation provided."
NOT_ANSWERED = "Not answered"

ANALYSIS_SYSTEM = """You are an exam coach reviewing a student's completed practice test.
For every question say whether the student's answer is correct, explain the right answer briefly,
and classify the question type. Then give per-topic correct/total counts and a short encouraging summary."""

ADMIN_INSIGHTS_PROMPT = """
Analyze platform data (under 150 words):
- Total Users: {total_users}
- User Stats: {user_stats}
- Weakest Topics: {weakest_topics}
"""


def get_gemini_api_key() -> str:
    """Resolve Gemini API key from settings or env. Never log the key."""
    return (getattr(settings, "gemini_api_key", "") or os.environ.get("GEMINI_API_KEY") or "").strip()


def _safety_settings_none():
    """Safety settings to avoid blocking exam content such as history or biology passages."""
    from google.genai import types
    return [
        types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_NONE"),
        types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_NONE"),
        types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_NONE"),
        types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_NONE"),
    ]


def _strip_json_fences(text: str) -> str:
    """Remove a markdown code fence (```json ... ```) wrapped around the payload."""
    t = text.strip()
    if t.startswith("```"):
        lines = t.split("\n")
        lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        t = "\n".join(lines).strip()
    if t.endswith("```"):
        t = t[:-3]
    return t.strip()


def parse_json_response(raw: str | None) -> Any:
    """Strict parse of a model response. Raises MalformedResponseError on empty or invalid JSON."""
    if not raw or not raw.strip():
        logger.warning("Gemini JSON parse: empty raw response")
        raise MalformedResponseError("The AI response was empty.")
    text = _strip_json_fences(raw)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(
            "Gemini JSON parse failed: %s. raw response (first 2000 chars): %s",
            e,
            (raw[:2000] + "..." if len(raw) > 2000 else raw),
        )
        raise MalformedResponseError("The AI returned malformed JSON.", raw_message=str(e)) from e


def _first(raw: dict, *keys: str) -> Any:
    """Value of the first key present; the model sometimes answers in snake_case."""
    for k in keys:
        if k in raw:
            return raw[k]
    return None


def question_from_raw(item: Any) -> Question:
    """Repair one model-produced question into a valid Question. Never raises."""
    raw = item if isinstance(item, dict) else {}
    options = sanitize_options(_first(raw, "options", "choices"))
    if len(options) < 2:
        options = list(DEFAULT_OPTIONS)
    passage = sanitize_text(raw.get("passage"))
    return Question(
        id=sanitize_text(_first(raw, "id", "_id")) or str(uuid.uuid4()),
        question_text=sanitize_text(_first(raw, "questionText", "question_text", "question"), PLACEHOLDER_QUESTION),
        options=options,
        correct_answer_index=coerce_answer_index(_first(raw, "correctAnswerIndex", "correct_answer_index"), len(options)),
        explanation=sanitize_text(raw.get("explanation"), NO_EXPLANATION),
        topic=sanitize_text(raw.get("topic"), DEFAULT_TOPIC),
        difficulty=coerce_difficulty(sanitize_text(raw.get("difficulty"))),
        passage=passage or None,
    )


def _count(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def analysis_from_raw(data: Any) -> AnalysisResponse:
    """Repair the analysis object. Missing topic counts default to correct=0, total=1."""
    if not isinstance(data, dict):
        raise MalformedResponseError("AI returned an invalid analysis.")
    items = data.get("questionAnalysis")
    topics = data.get("topicPerformance")
    question_analysis = []
    for qa in items if isinstance(items, list) else []:
        qa = qa if isinstance(qa, dict) else {}
        question_analysis.append(QuestionAnalysis(
            question_text=sanitize_text(qa.get("questionText")),
            user_answer=sanitize_text(qa.get("userAnswer")),
            correct_answer=sanitize_text(qa.get("correctAnswer")),
            is_correct=_as_bool(qa.get("isCorrect")),
            explanation=sanitize_text(qa.get("explanation")),
            topic=sanitize_text(qa.get("topic")),
            question_type=sanitize_text(qa.get("questionType")),
        ))
    topic_performance = []
    for tp in topics if isinstance(topics, list) else []:
        tp = tp if isinstance(tp, dict) else {}
        topic_performance.append(TopicPerformance(
            topic=sanitize_text(tp.get("topic")),
            correct=_count(tp.get("correct"), 0),
            total=_count(tp.get("total"), 1),
        ))
    return AnalysisResponse(
        summary=sanitize_text(data.get("summary")),
        question_analysis=question_analysis,
        topic_performance=topic_performance,
    )


def build_analysis_payload(test_result: TestResult) -> list[dict]:
    """Pair each question with the option the user picked (or "Not answered")."""
    picked: dict[str, int] = {}
    for a in test_result.answers:
        picked.setdefault(a.question_id, a.answer_index)
    payload = []
    for q in test_result.questions:
        idx = picked.get(q.id)
        user_answer = q.options[idx] if idx is not None and 0 <= idx < len(q.options) else NOT_ANSWERED
        payload.append({
            "question": q.question_text,
            "correctAnswer": q.options[q.correct_answer_index],
            "userAnswer": user_answer,
            "topic": q.topic,
        })
    return payload


def _to_provider_role(role: str) -> str:
    """The provider only knows "user" and "model"; our "assistant" is its "model"."""
    return "model" if (role or "").strip().lower() in ("assistant", "model") else "user"


def get_llm_service():
    """Return the Gemini gateway. GEMINI_API_KEY must be set."""
    key = get_gemini_api_key()
    if not key:
        raise RuntimeError("GEMINI_API_KEY is not set; cannot use Gemini.")
    model_name = normalize_model_name(getattr(settings, "gen_model_name", ""))
    logger.info("Using LLM: %s (Gemini)", model_name)
    return GeminiService(model_name=model_name, api_key=key)


class GeminiService:
    """Google Gemini implementation of AIGateway via google.genai SDK."""

    def __init__(self, model_name: str | None = None, api_key: str | None = None) -> None:
        from google import genai
        key = api_key or get_gemini_api_key()
        self._client = genai.Client(api_key=key)
        self._model_name = normalize_model_name(model_name or getattr(settings, "gen_model_name", ""))

    def _fail(self, exc: BaseException, action: str) -> AIServiceError:
        err = normalize_provider_error(exc, action)
        record_provider_error(err.kind.value)
        return err

    def _generate(self, action: str, contents, config):
        t_api_start = time.perf_counter()
        logger.info("Gemini API request: model=%s, action=%s", self._model_name, action)
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise self._fail(e, action) from e
        logger.info("Gemini %s API %.2fs", action, time.perf_counter() - t_api_start)
        um = getattr(response, "usage_metadata", None)
        if um:
            logger.info(
                "Gemini API response: input_tokens=%s, output_tokens=%s",
                getattr(um, "prompt_token_count", 0) or 0,
                getattr(um, "candidates_token_count", 0) or 0,
            )
        return response

    def _json_config(self, schema, system_instruction: str | None = None):
        from google.genai import types
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            safety_settings=_safety_settings_none(),
            max_output_tokens=settings.gemini_max_output_tokens,
            temperature=settings.gemini_temperature,
            response_mime_type="application/json",
            response_schema=schema,
        )

    def generate_questions(
        self,
        test_type: str,
        num_questions: int,
        topic: str | None = None,
        difficulty: str | None = None,
        avoid_topics: list[str] | None = None,
    ) -> list[Question]:
        if num_questions < 1:
            raise InvalidRequestError("num_questions must be at least 1.")
        action = "generating test questions"
        prompt = build_question_prompt(test_type, num_questions, topic, difficulty, avoid_topics)
        config = self._json_config(question_list_schema(), QUESTION_GEN_SYSTEM)
        response = self._generate(action, prompt, config)
        try:
            data = parse_json_response(getattr(response, "text", None))
            if not isinstance(data, list) or not data:
                raise MalformedResponseError("AI returned an empty or invalid list of questions.")
        except MalformedResponseError as e:
            raise self._fail(e, action)
        questions = [question_from_raw(item) for item in data]
        logger.info("Gemini generate_questions: test_type=%r requested=%s parsed=%s", test_type, num_questions, len(questions))
        return questions

    def analyze_results(self, test_result: TestResult) -> AnalysisResponse:
        if not test_result.questions or not test_result.answers:
            raise InvalidRequestError("Questions & answers required.")
        action = "analyzing your test results"
        prompt = f"Analyze test results: {json.dumps(build_analysis_payload(test_result), ensure_ascii=False)}"
        config = self._json_config(analysis_schema(), ANALYSIS_SYSTEM)
        response = self._generate(action, prompt, config)
        try:
            return analysis_from_raw(parse_json_response(getattr(response, "text", None)))
        except MalformedResponseError as e:
            raise self._fail(e, action)

    def generate_plan(self, goal: ExamGoal, test_result: TestResult) -> Plan:
        return build_plan(goal, test_result)

    def stream_chat_response(self, history: list[ChatMessage], context: str | None = None) -> Iterator[str]:
        """
        Start the chat stream and return a lazy iterator of text chunks.
        The first chunk is fetched eagerly so provider errors surface here rather than mid-response.
        Closing the iterator early closes the underlying provider stream.
        """
        from google.genai import types
        action = f"chatting with {settings.chat_assistant_name}"
        system = f"You are {settings.chat_assistant_name}, a friendly AI tutor."
        if context:
            system += f" User context: {context}"
        contents = [
            types.Content(role=_to_provider_role(m.role), parts=[types.Part(text=m.content)])
            for m in history
        ]
        config = types.GenerateContentConfig(system_instruction=system, safety_settings=_safety_settings_none())
        logger.info("Gemini API stream request: model=%s, messages=%s", self._model_name, len(contents))
        try:
            stream = self._client.models.generate_content_stream(
                model=self._model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise self._fail(e, action) from e
        chunks = self._iter_text(stream, action)
        try:
            first = next(chunks)
        except StopIteration:
            return iter(())
        return self._prepend(first, chunks)

    def _iter_text(self, stream, action: str) -> Iterator[str]:
        try:
            for chunk in stream:
                text = getattr(chunk, "text", None)
                if text:
                    yield text
        except Exception as e:
            raise self._fail(e, action) from e
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

    @staticmethod
    def _prepend(first: str, rest) -> Iterator[str]:
        try:
            yield first
            yield from rest
        finally:
            rest.close()

    def get_admin_insights(self, stats: AdminInsightStats) -> str:
        from google.genai import types
        prompt = ADMIN_INSIGHTS_PROMPT.format(
            total_users=stats.total_users,
            user_stats=json.dumps(stats.user_stats, default=str),
            weakest_topics=json.dumps(stats.weakest_topics, default=str),
        )
        # Free text: no response schema.
        config = types.GenerateContentConfig(safety_settings=_safety_settings_none())
        response = self._generate("generating admin insights", prompt, config)
        return (getattr(response, "text", None) or "").strip()
