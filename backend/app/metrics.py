"""
In-process counters for observability. Process-local; for multi-worker use external metrics (e.g. Prometheus).
"""
import threading
from collections import Counter

# Questions served from the offline fallback bank instead of the AI provider.
fallback_questions_served_total: int = 0
# Provider failures by ErrorKind value (e.g. "QuotaExceeded").
provider_errors_total: Counter = Counter()
_lock = threading.Lock()


def increment_fallback_questions_served(n: int) -> int:
    """Add n to fallback_questions_served_total; return new value. Thread-safe."""
    global fallback_questions_served_total
    with _lock:
        fallback_questions_served_total += n
        return fallback_questions_served_total


def record_provider_error(kind: str) -> int:
    """Count one provider failure of the given kind; return the new count for that kind. Thread-safe."""
    with _lock:
        provider_errors_total[kind] += 1
        return provider_errors_total[kind]


def snapshot() -> dict:
    with _lock:
        return {
            "fallback_questions_served_total": fallback_questions_served_total,
            "provider_errors_total": dict(provider_errors_total),
        }
