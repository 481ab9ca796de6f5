"""
AI gateway: generate_questions, analyze_results, generate_plan, stream_chat_response, get_admin_insights.
Gemini only. Uses GEN_MODEL_NAME and GEMINI_API_KEY.
"""
from functools import lru_cache

from app.llm.base import AIGateway
from app.llm.errors import AIServiceError, ErrorKind


@lru_cache(maxsize=1)
def get_ai_gateway() -> AIGateway:
    """Process-wide Gemini gateway. Raises RuntimeError when GEMINI_API_KEY is missing (startup already refuses to run without it)."""
    from app.llm.gemini_impl import get_llm_service
    return get_llm_service()


__all__ = ["AIGateway", "AIServiceError", "ErrorKind", "get_ai_gateway"]
