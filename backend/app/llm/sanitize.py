"""
Best-effort coercion of loosely-typed model output into plain strings.
The model sometimes wraps text in an object ({"content": "..."}) or returns nested structures
where a string was asked for. Nothing here raises.
"""
import json
from typing import Any


def sanitize_content(value: Any) -> Any:
    """
    Reduce value to a string (or a list of sanitized values when value is a list).
    Objects prefer their "content" field, then the first string-valued property, then a JSON dump.
    Sanitized output is a fixed point: sanitize_content(sanitize_content(x)) == sanitize_content(x).
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return [sanitize_content(v) for v in value]
    if isinstance(value, dict):
        if "content" in value:
            inner = sanitize_content(value["content"])
            if isinstance(inner, str):
                return inner
        for v in value.values():
            if isinstance(v, str):
                return v
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def sanitize_text(value: Any, default: str = "") -> str:
    """Like sanitize_content but always a single string; lists are joined with spaces. Empty -> default."""
    out = sanitize_content(value)
    if isinstance(out, list):
        out = " ".join(s for s in (sanitize_text(v) for v in out) if s)
    out = out.strip()
    return out or default


def sanitize_options(value: Any) -> list[str]:
    """Answer options as a list of strings. Accepts a list, or a label->text dict like {"A": ..., "B": ...}."""
    if isinstance(value, dict):
        value = list(value.values())
    if not isinstance(value, (list, tuple)):
        return []
    return [sanitize_text(o) for o in value]
