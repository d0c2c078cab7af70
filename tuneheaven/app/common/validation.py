from __future__ import annotations

import re
from typing import Any, Dict

from flask import request

from tuneheaven.app.common.errors import abort_json

# One "@", a non-empty local part and a dotted domain.
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def get_json() -> Dict[str, Any]:
    if not request.is_json:
        abort_json(400, "invalid_json", "Request must be application/json")
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        abort_json(400, "invalid_json", "Malformed JSON body")
    return data


def get_payload() -> Dict[str, Any]:
    """JSON body when sent as JSON, otherwise the submitted form."""
    if request.is_json:
        return get_json()
    return request.form.to_dict()


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


def parse_positive_int(raw: Any, default: int = 1) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default
