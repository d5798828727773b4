"""Helpers for redacting credentials from logs and journal payloads."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(
    r"(authorization|password|passwd|token|secret|api[_-]?key)",
    re.IGNORECASE,
)
_AUTH_HEADER_INLINE_RE = re.compile(
    r"(?i)\b(basic|bearer)\s+[A-Za-z0-9\-._~+/]+=*",
)
_URL_USERINFO_RE = re.compile(
    r"(?i)\b(https?://)[^/\s:@]+:[^/\s@]+@",
)
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (
      authorization|
      password|
      passwd|
      token|
      secret|
      api[_-]?key
    )
    \s*[:=]\s*
    ([^\s,;&]+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact credentials embedded in plain text."""
    sanitized = _AUTH_HEADER_INLINE_RE.sub(r"\1 " + REDACTED, text)
    sanitized = _URL_USERINFO_RE.sub(r"\1" + REDACTED + "@", sanitized)
    sanitized = _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)
    return sanitized


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive values in nested structures."""
    if isinstance(value, dict):
        sanitized: dict[Any, Any] = {}
        for key, child in value.items():
            if _SENSITIVE_KEY_RE.search(str(key)):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(child)
        return sanitized
    if isinstance(value, list):
        return [sanitize_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
