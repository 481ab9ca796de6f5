"""
Shared dependencies: the AI gateway used by the /ai routes.
Tests replace it through app.dependency_overrides[get_gateway].
"""
from app.llm import AIGateway, get_ai_gateway


def get_gateway() -> AIGateway:
    """Return the process-wide AI gateway."""
    return get_ai_gateway()
