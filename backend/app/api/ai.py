"""
AI API: generate test questions (with offline fallback), analyze results, build a study plan,
stream tutor chat, admin insights. Callers are already authenticated upstream.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from app.api.deps import get_gateway
from app.config import settings
from app.llm import AIGateway, AIServiceError
from app.schemas.ai import (
    AdminInsightsResponse,
    AdminInsightStats,
    ChatRequest,
    GenerateTestRequest,
    GenerateTestResponse,
    PlanRequest,
)
from app.schemas.plan import Plan
from app.schemas.result import AnalysisResponse, TestResult
from app.services.fallback_selector import generate_fallback_questions
from app.services.plan_builder import build_plan
from app.services.question_service import SOURCE_FALLBACK, generate_questions_with_fallback

router = APIRouter(prefix="/ai", tags=["ai"])


def _http_error(e: AIServiceError) -> HTTPException:
    """User-safe message and stable status; the raw provider text was already logged."""
    return HTTPException(status_code=e.status_code, detail=e.user_message)


@router.post("/generate-test", response_model=GenerateTestResponse)
def generate_test(data: GenerateTestRequest, gateway: AIGateway = Depends(get_gateway)):
    """Generate questions with the AI; serve fallback questions on provider failure when FALLBACK_ON_AI_ERROR is on."""
    try:
        result = generate_questions_with_fallback(
            gateway,
            data.test_type,
            data.num_questions,
            topic=data.topic,
            difficulty=data.difficulty,
            avoid_topics=data.avoid_topics,
            use_fallback=settings.fallback_on_ai_error,
        )
    except AIServiceError as e:
        raise _http_error(e)
    return GenerateTestResponse(
        questions=result.questions,
        source=result.source,
        error_kind=result.error.kind.value if result.error else None,
    )


@router.post("/fallback-test", response_model=GenerateTestResponse)
def fallback_test(data: GenerateTestRequest):
    """Offline questions only; no provider call."""
    questions = generate_fallback_questions(data.test_type, data.num_questions)
    return GenerateTestResponse(questions=questions, source=SOURCE_FALLBACK)


@router.post("/analyze", response_model=AnalysisResponse)
def analyze(data: TestResult, gateway: AIGateway = Depends(get_gateway)):
    try:
        return gateway.analyze_results(data)
    except AIServiceError as e:
        raise _http_error(e)


@router.post("/plan", response_model=Plan)
def plan(data: PlanRequest):
    """Local plan computation; no gateway or provider call."""
    return build_plan(data.goal, data.result)


@router.post("/chat")
def chat(data: ChatRequest, gateway: AIGateway = Depends(get_gateway)):
    """Stream the tutor's reply as plain text chunks."""
    try:
        chunks = gateway.stream_chat_response(data.history, data.context)
    except AIServiceError as e:
        raise _http_error(e)
    return StreamingResponse(chunks, media_type="text/plain; charset=utf-8")


@router.post("/admin-insights", response_model=AdminInsightsResponse)
def admin_insights(data: AdminInsightStats, gateway: AIGateway = Depends(get_gateway)):
    try:
        return AdminInsightsResponse(insights=gateway.get_admin_insights(data))
    except AIServiceError as e:
        raise _http_error(e)
