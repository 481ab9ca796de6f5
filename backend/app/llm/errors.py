"""
AI service error taxonomy and provider error normalization.

Provider failures are classified from the error message text only (no SDK exception types), by an
ordered rule table: first matching rule wins. Callers get a stable kind, a numeric status code and a
user-safe message; the raw provider text stays in server-side logs.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    MALFORMED_RESPONSE = "MalformedResponse"
    QUOTA_EXCEEDED = "QuotaExceeded"
    CONFIGURATION_ERROR = "ConfigurationError"
    MODEL_UNAVAILABLE = "ModelUnavailable"
    UNKNOWN_PROVIDER_ERROR = "UnknownProviderError"
    INVALID_REQUEST = "InvalidRequest"


class AIServiceError(Exception):
    """Base for every error the AI gateway raises. str(err) is the user-safe message."""

    kind: ErrorKind = ErrorKind.UNKNOWN_PROVIDER_ERROR
    status_code: int = 500
    retriable: bool | None = None

    def __init__(self, user_message: str, raw_message: str = "") -> None:
        super().__init__(user_message)
        self.user_message = user_message
        # Server-side diagnostics only; never returned to API clients.
        self.raw_message = raw_message


class MalformedResponseError(AIServiceError):
    kind = ErrorKind.MALFORMED_RESPONSE


class QuotaExceededError(AIServiceError):
    kind = ErrorKind.QUOTA_EXCEEDED
    status_code = 429
    retriable = True


class ConfigurationError(AIServiceError):
    kind = ErrorKind.CONFIGURATION_ERROR
    retriable = False


class ModelUnavailableError(AIServiceError):
    kind = ErrorKind.MODEL_UNAVAILABLE
    retriable = False


class UnknownProviderError(AIServiceError):
    kind = ErrorKind.UNKNOWN_PROVIDER_ERROR


class InvalidRequestError(AIServiceError):
    kind = ErrorKind.INVALID_REQUEST
    status_code = 400
    retriable = False


@dataclass(frozen=True)
class ErrorRule:
    pattern: re.Pattern
    error_cls: type[AIServiceError]
    user_message: str
    operator_hint: str | None = None  # logged at CRITICAL when set

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


QUOTA_MESSAGE = (
    "Our AI test generator has hit its daily limit for this project. "
    "Please wait a little while and try again, or come back later today."
)
UNKNOWN_MESSAGE = "Something went wrong while {action}. Please try again in a moment."

# Priority order matters: a 429 body that also mentions a model name must still classify as quota.
ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(
        re.compile(r"exceeded.*quota|quota|429|RESOURCE_EXHAUSTED", re.IGNORECASE),
        QuotaExceededError,
        QUOTA_MESSAGE,
    ),
    ErrorRule(
        re.compile(r"API key not valid|API_KEY_INVALID", re.IGNORECASE),
        ConfigurationError,
        "AI Service Configuration Error: The API key provided is invalid.",
        operator_hint="Gemini API key is invalid. Check GEMINI_API_KEY in backend/.env",
    ),
    ErrorRule(
        re.compile(r"not found|404", re.IGNORECASE),
        ModelUnavailableError,
        "AI Service Error: The selected model is unavailable.",
        operator_hint="Gemini model not found. Check GEN_MODEL_NAME.",
    ),
)


def classify_message(message: str) -> ErrorRule | None:
    """Return the first rule matching message, or None (unknown provider error)."""
    for rule in ERROR_RULES:
        if rule.matches(message or ""):
            return rule
    return None


def normalize_provider_error(exc: BaseException, action: str) -> AIServiceError:
    """
    Convert any exception raised around a provider call into an AIServiceError.
    Already-normalized errors are returned unchanged. action is a gerund phrase used in the
    generic message, e.g. "generating test questions".
    """
    if isinstance(exc, AIServiceError):
        return exc
    raw = str(exc)
    rule = classify_message(raw)
    if rule is None:
        err: AIServiceError = UnknownProviderError(UNKNOWN_MESSAGE.format(action=action), raw_message=raw)
    else:
        err = rule.error_cls(rule.user_message, raw_message=raw)
        if rule.operator_hint:
            logger.critical(rule.operator_hint)
    logger.error(
        "Gemini API error during [%s]: kind=%s status=%s message=%s",
        action,
        err.kind.value,
        err.status_code,
        raw,
    )
    return err
