"""
Application configuration from environment variables.
Loads .env from the backend directory so GEMINI_API_KEY is found regardless of cwd.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default model for generateContent (v1beta). gemini-2.0-flash is no longer available to new users.
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Models that return 404 or are unsupported. Normalized at config load to DEFAULT_GEMINI_MODEL.
_UNSUPPORTED_GEMINI_MODELS = frozenset({
    "gemini-1.5-flash-002", "gemini-1.5-flash-001", "gemini-1.5-flash",
    "gemini-1.5-pro", "gemini-1.5-pro-001", "gemini-1.5-pro-002",
    "gemini-2.0-flash", "gemini-2.0-flash-001", "gemini-2.0-flash-lite", "gemini-2.0-flash-lite-001",
})
_UNSUPPORTED_GEMINI_PREFIXES = ("gemini-1.5-flash-", "gemini-1.5-pro", "gemini-2.0-flash")


def normalize_model_name(v: str | None) -> str:
    """Return a model id that works with generateContent. Retired ids (e.g. from an old .env) map to the default."""
    s = (v or DEFAULT_GEMINI_MODEL).strip()
    if not s:
        return DEFAULT_GEMINI_MODEL
    if s in _UNSUPPORTED_GEMINI_MODELS or s.startswith(_UNSUPPORTED_GEMINI_PREFIXES):
        return DEFAULT_GEMINI_MODEL
    return s


# .env next to backend/ (parent of app/). Loaded explicitly so the key is set even when run from repo root
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)
else:
    # Fallback: try backend/.env relative to cwd (e.g. when running from repo root)
    import os
    _cwd_env = Path(os.getcwd()) / "backend" / ".env"
    if _cwd_env.exists():
        from dotenv import load_dotenv
        load_dotenv(_cwd_env, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gemini. GEMINI_API_KEY is required; the app refuses to start without it (see app.main startup).
    gemini_api_key: str = ""
    gen_model_name: str = DEFAULT_GEMINI_MODEL
    gemini_temperature: float = 0.7
    gemini_max_output_tokens: int = 8192

    @field_validator("gen_model_name", mode="before")
    @classmethod
    def _resolve_gen_model(cls, v: str) -> str:
        return normalize_model_name(v) if isinstance(v, str) else DEFAULT_GEMINI_MODEL

    # Upper bound on num_questions accepted by the HTTP layer. The gateway itself only requires >= 1.
    max_questions_per_request: int = 50
    # Serve offline fallback questions from /ai/generate-test when the provider call fails.
    fallback_on_ai_error: bool = True

    # Tutor persona used in the chat system instruction.
    chat_assistant_name: str = "Aicey"

    # CORS: comma-separated origins
    cors_origins: str = "http://localhost:5173"

    @property
    def active_llm_model(self) -> str:
        """Model name for display/logging."""
        return normalize_model_name(self.gen_model_name)


settings = Settings()
