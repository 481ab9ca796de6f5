"""
FastAPI application entrypoint.
Run with: uvicorn app.main:app --reload --port 8000 (from backend/).

API base path: routes are mounted at root (no /api/v1 prefix).
  - AI:  POST /ai/generate-test, POST /ai/fallback-test, POST /ai/analyze, POST /ai/plan,
         POST /ai/chat (streaming text), POST /ai/admin-insights
  - GET /health, GET /metrics

GEMINI_API_KEY is required: startup fails without it.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import metrics
from app.api.ai import router as ai_router
from app.config import settings

app = FastAPI(
    title="Exam Prep AI API",
    description="Practice questions (AI with offline fallback), result analysis, study plans and tutor chat.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai_router)


@app.on_event("startup")
def startup():
    """Configure logging and fail fast when the Gemini credential is missing."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    _log = logging.getLogger("app.main")
    from app.llm.gemini_impl import get_gemini_api_key
    key = get_gemini_api_key()
    if not key:
        _log.critical("GEMINI_API_KEY is not set. Set GEMINI_API_KEY in env or backend/.env.")
        raise RuntimeError("GEMINI_API_KEY is not set. Set GEMINI_API_KEY in env or backend/.env.")
    _log.info("Gemini: API key loaded (len=%s). Model: %s", len(key), settings.active_llm_model)
    if settings.fallback_on_ai_error:
        _log.info("Fallback question bank enabled for /ai/generate-test.")


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Exam Prep AI API"}


@app.get("/metrics")
def get_metrics():
    """Process-local counters (fallback usage, provider errors by kind)."""
    return metrics.snapshot()
