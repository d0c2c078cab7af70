"""Error types shared by the `/api` views and the storefront client."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Any failure talking to the Storefront API: transport, HTTP or GraphQL."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


@dataclass
class ApiError(Exception):
    """Raised by `/api` views; the factory renders it as `{"error": {...}}`."""

    status_code: int
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self, request_id: Optional[str] = None) -> Dict[str, Any]:
        return error_payload(self.code, self.message, request_id, self.details)


def error_payload(
    code: str,
    message: str,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "request_id": request_id,
        }
    }


def abort_json(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
    raise ApiError(status_code, code, message, details or {})
