"""
Exceptions raised while talking to the ProcessOut API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = ["APIError", "ProcessOutError", "ResponseDecodeError"]


class ProcessOutError(Exception):
    """Base class for errors raised while talking to the API."""


class APIError(ProcessOutError):
    """The API answered with an envelope whose ``success`` flag is false."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        raw: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.raw = raw or {}


class ResponseDecodeError(ProcessOutError):
    """The response body could not be decoded into a JSON envelope or record."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
