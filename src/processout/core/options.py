"""
Per-call request options and path helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence
from urllib.parse import quote_plus

__all__ = ["RequestOptions", "escape_segment"]


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call options.

    ``expand`` lists the relations the API should inline in the response.
    ``idempotency_key`` is sent as the ``Idempotency-Key`` header when set.
    """

    expand: Sequence[str] = ()
    idempotency_key: Optional[str] = None


def escape_segment(value: Any) -> str:
    """Escape a value for use as a single URL path segment (query-style)."""
    return quote_plus(str(value))
