from __future__ import annotations

from flask import jsonify

def ok(data=None, status=200):
    if data is None:
        return ("", status)
    return jsonify(data), status


def envelope(ok_flag: bool, status: int, error: str | None = None):
    """`{"ok": ..., "error": ...}` envelope used by the form endpoints."""
    payload = {"ok": ok_flag}
    if error is not None:
        payload["error"] = error
    return jsonify(payload), status
