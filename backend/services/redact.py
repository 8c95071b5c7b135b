"""PII redaction for log payloads.

Audit and error logs pass their structured data through ``redact_object`` so
candidate names, emails and phone numbers never reach the log stream.
"""

import logging
import re
from typing import Any

MASK = "•"

_SECRET_KEYS = ("password", "token", "secret", "api_key", "apikey")


def redact_email(email: str) -> str:
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain:
        return email
    return local[0] + MASK * (len(local) - 1) + "@" + domain


def redact_phone(phone: str) -> str:
    digits = re.sub(r"\D", "", phone)
    if len(digits) < 6:
        return phone
    return MASK * (len(digits) - 4) + digits[-4:]


def redact_name(name: str) -> str:
    parts = name.split()
    if len(parts) == 1:
        word = parts[0]
        return word if len(word) <= 2 else word[0] + MASK * (len(word) - 2) + word[-1]
    return " ".join(p[0] + MASK * (len(p) - 1) for p in parts)


def _redact_value(key: str, value: str) -> str:
    key = key.lower()
    if "email" in key:
        return redact_email(value)
    if "phone" in key or "mobile" in key:
        return redact_phone(value)
    if any(s in key for s in _SECRET_KEYS):
        return MASK * 8
    if "name" in key:
        return redact_name(value)
    return value


def redact_object(obj: Any) -> Any:
    """Recursively mask known PII fields by key name."""
    if isinstance(obj, dict):
        out = {}
        for key, value in obj.items():
            if isinstance(value, str) and value:
                out[key] = _redact_value(str(key), value)
            else:
                out[key] = redact_object(value)
        return out
    if isinstance(obj, (list, tuple)):
        return [redact_object(item) for item in obj]
    return obj


def safe_log(logger: logging.Logger, message: str, data: dict | None = None, level: int = logging.INFO) -> None:
    if data:
        logger.log(level, "%s %s", message, redact_object(data))
    else:
        logger.log(level, message)
