"""
Typed records decoded from ProcessOut API responses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

__all__ = [
    "AuthorizationRequest",
    "Customer",
    "Project",
    "Token",
    "parse_timestamp",
]


_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:\d{2}$|$)")


def _six_digit_fraction(match: "re.Match[str]") -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as sent by the API.

    Fractional seconds of any length are truncated or padded to microseconds.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_six_digit_fraction, text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp '{value}'") from exc


def _mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def _nested(model: Any, value: Any) -> Any:
    if isinstance(value, dict):
        return model.from_response(value)
    return None


@dataclass(frozen=True)
class Project:
    id: Optional[str] = None
    name: Optional[str] = None
    logo_url: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Project":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            logo_url=payload.get("logo_url"),
            email=payload.get("email"),
            created_at=parse_timestamp(payload.get("created_at")),
            raw=payload,
        )


@dataclass(frozen=True)
class Customer:
    id: Optional[str] = None
    project: Optional[Project] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = None
    balance: Optional[str] = None
    currency: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    sandbox: bool = False
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    WRITABLE_FIELDS = (
        "email",
        "first_name",
        "last_name",
        "address1",
        "address2",
        "city",
        "state",
        "zip",
        "country_code",
        "currency",
        "metadata",
    )

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Customer":
        return cls(
            id=payload.get("id"),
            project=_nested(Project, payload.get("project")),
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            address1=payload.get("address1"),
            address2=payload.get("address2"),
            city=payload.get("city"),
            state=payload.get("state"),
            zip=payload.get("zip"),
            country_code=payload.get("country_code"),
            balance=payload.get("balance"),
            currency=payload.get("currency"),
            metadata=_mapping(payload.get("metadata")),
            sandbox=bool(payload.get("sandbox")),
            created_at=parse_timestamp(payload.get("created_at")),
            raw=payload,
        )

    def writable_body(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.WRITABLE_FIELDS}


@dataclass(frozen=True)
class Token:
    id: Optional[str] = None
    customer: Optional[Customer] = None
    customer_id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    card_id: Optional[str] = None
    is_default: bool = False
    metadata: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Token":
        return cls(
            id=payload.get("id"),
            customer=_nested(Customer, payload.get("customer")),
            customer_id=payload.get("customer_id"),
            name=payload.get("name"),
            type=payload.get("type"),
            card_id=payload.get("card_id"),
            is_default=bool(payload.get("is_default")),
            metadata=_mapping(payload.get("metadata")),
            created_at=parse_timestamp(payload.get("created_at")),
            raw=payload,
        )


@dataclass(frozen=True)
class AuthorizationRequest:
    """
    A pending customer payment authorization flow.

    ``url`` is where the customer should be redirected to proceed with the
    authorization; ``return_url`` and ``cancel_url`` are where they land once
    it is accepted or canceled. ``custom`` is passed along in events and
    webhooks.
    """

    id: Optional[str] = None
    project: Optional[Project] = None
    customer: Optional[Customer] = None
    url: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    custom: Optional[str] = None
    sandbox: bool = False
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "AuthorizationRequest":
        return cls(
            id=payload.get("id"),
            project=_nested(Project, payload.get("project")),
            customer=_nested(Customer, payload.get("customer")),
            url=payload.get("url"),
            name=payload.get("name"),
            currency=payload.get("currency"),
            return_url=payload.get("return_url"),
            cancel_url=payload.get("cancel_url"),
            custom=payload.get("custom"),
            sandbox=bool(payload.get("sandbox")),
            created_at=parse_timestamp(payload.get("created_at")),
            raw=payload,
        )
