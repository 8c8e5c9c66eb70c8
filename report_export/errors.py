from __future__ import annotations

from typing import Any


class ExportError(Exception):
    """A request the export endpoint rejects with a stable error code."""

    def __init__(self, status_code: int, code: str):
        super().__init__(code)
        self.status_code = status_code
        self.code = code


def method_not_allowed() -> ExportError:
    return ExportError(405, "method_not_allowed")


def missing_json_url() -> ExportError:
    return ExportError(400, "missing_json_url")


def unsupported_format() -> ExportError:
    return ExportError(400, "unsupported_format")


def invalid_json_url() -> ExportError:
    return ExportError(400, "invalid_json_url")


def cannot_parse_report_path() -> ExportError:
    return ExportError(400, "cannot_parse_report_path")


def error_message(exc: BaseException) -> str:
    """Best-effort human readable message for a 500 response."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    if exc.args and isinstance(exc.args[0], dict):
        detail: Any = exc.args[0].get("message") or exc.args[0].get("error")
        if detail:
            return str(detail)
    return str(exc) or type(exc).__name__
