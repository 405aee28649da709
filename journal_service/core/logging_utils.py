"""
Logging utilities for safe logging of journal content.

Includes:
- Redaction/truncation of user text before it reaches a log line
- Structured usage logging for LLM calls
"""
import json
import logging
import re
from typing import Any, Optional


# Keys whose values are never logged
SENSITIVE_KEYS = [
    "api_key", "token", "password", "secret", "auth",
    "email", "phone", "authorization",
    "entrytext", "entry_text", "content", "text",
]


def sanitize_for_logging(data: Any, max_len: int = 100) -> Any:
    """
    Sanitize data for safe logging - redacts secrets and journal text.

    Args:
        data: The data to sanitize (dict, list, str, or other types)
        max_len: Maximum length for string values before truncation

    Returns:
        Sanitized version of the data safe for logging
    """
    if data is None:
        return "None"

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if any(sensitive in str(k).lower() for sensitive in SENSITIVE_KEYS):
                sanitized[k] = "***REDACTED***"
            else:
                sanitized[k] = sanitize_for_logging(v, max_len)
        return sanitized

    if isinstance(data, list):
        return [sanitize_for_logging(item, max_len) for item in data]

    if isinstance(data, str):
        cleaned = re.sub(r'[\x00-\x1F\x7F]', '', data)
        if len(cleaned) > max_len:
            return cleaned[:max_len] + "..."
        return cleaned

    return sanitize_for_logging(str(data), max_len)


def describe_text(text: Optional[str]) -> str:
    """Describe user text by size only, e.g. ``<142 chars>``."""
    if text is None:
        return "<none>"
    return f"<{len(text)} chars>"


# =============================================================================
# STRUCTURED LLM USAGE LOGGING
# =============================================================================

_usage_logger = logging.getLogger("Journal.LLMUsage")


def log_llm_usage(
    model: str,
    input_tokens: int,
    output_tokens: int,
    duration_ms: Optional[int] = None,
    endpoint: str = "unknown",
) -> None:
    """
    Log a structured usage event for an LLM API call.

    Produces a single ``LLM_USAGE {...}`` line that log aggregation can parse.
    """
    event = {
        "event": "llm_usage",
        "model": model,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": input_tokens + output_tokens,
        "endpoint": endpoint,
    }

    if duration_ms is not None:
        event["duration_ms"] = duration_ms

    _usage_logger.info("LLM_USAGE %s", json.dumps(event))
