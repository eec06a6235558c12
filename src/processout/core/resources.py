"""
Resource-bound operations for the ProcessOut API.

Each class wraps one remote resource. Operations serialize their arguments,
issue the call through :meth:`ProcessOutClient.request` and decode the named
key of the response envelope into a record from :mod:`.models`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from .errors import ResponseDecodeError
from .models import AuthorizationRequest, Customer, Project, Token
from .options import RequestOptions, escape_segment

if TYPE_CHECKING:
    from .client import ProcessOutClient

__all__ = [
    "AuthorizationRequests",
    "Customers",
    "Projects",
    "Tokens",
]


def _decode(model: Any, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object for {model.__name__}, got {type(payload).__name__}"
        )
    try:
        return model.from_response(payload)
    except ValueError as exc:
        raise ResponseDecodeError(f"Failed to decode {model.__name__}: {exc}") from exc


def _require_id(record: Any, kind: str) -> str:
    record_id = getattr(record, "id", None)
    if not record_id:
        raise ValueError(f"{kind} must have an id")
    return record_id


class _Resource:
    def __init__(self, client: "ProcessOutClient") -> None:
        self._client = client

    def _call(
        self,
        method: str,
        path: str,
        key: Optional[str],
        *,
        body: Optional[Dict[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        envelope = self._client.request(method, path, body=body, options=options)
        if key is None:
            return None
        return envelope.get(key) or {}


class AuthorizationRequests(_Resource):
    """Operations on authorization requests."""

    def customer(
        self,
        authorization_request: AuthorizationRequest,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Customer:
        """Get the customer linked to the authorization request."""
        request_id = _require_id(authorization_request, "authorization_request")
        path = f"/authorization-requests/{escape_segment(request_id)}/customers"
        return _decode(
            Customer,
            self._call("GET", path, "customer", options=options)
        )

    def authorize(
        self,
        authorization_request: AuthorizationRequest,
        gateway_name: str,
        name: str,
        token: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Token:
        """Authorize (create) a new customer token on the given gateway."""
        request_id = _require_id(authorization_request, "authorization_request")
        path = (
            f"/authorization-requests/{escape_segment(request_id)}"
            f"/gateways/{escape_segment(gateway_name)}/tokens"
        )
        body = {"name": name, "token": token}
        return _decode(
            Token,
            self._call("POST", path, "token", body=body, options=options)
        )

    def create(
        self,
        authorization_request: AuthorizationRequest,
        customer_id: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> AuthorizationRequest:
        """Create a new authorization request for the given customer ID."""
        body = {
            "name": authorization_request.name,
            "currency": authorization_request.currency,
            "return_url": authorization_request.return_url,
            "cancel_url": authorization_request.cancel_url,
            "custom": authorization_request.custom,
            "customer_id": customer_id,
        }
        return _decode(
            AuthorizationRequest,
            self._call(
                "POST",
                "/authorization-requests",
                "authorization_request",
                body=body,
                options=options,
            )
        )

    def find(
        self,
        authorization_request_id: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> AuthorizationRequest:
        """Find an authorization request by its ID."""
        path = f"/authorization-requests/{escape_segment(authorization_request_id)}"
        return _decode(
            AuthorizationRequest,
            self._call("GET", path, "authorization_request", options=options)
        )


class Customers(_Resource):
    """Operations on customers."""

    def all(self, *, options: Optional[RequestOptions] = None) -> List[Customer]:
        envelope = self._client.request("GET", "/customers", options=options)
        return [_decode(Customer, item) for item in envelope.get("customers") or []]

    def create(
        self,
        customer: Customer,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Customer:
        return _decode(
            Customer,
            self._call(
                "POST",
                "/customers",
                "customer",
                body=customer.writable_body(),
                options=options,
            )
        )

    def find(
        self,
        customer_id: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Customer:
        path = f"/customers/{escape_segment(customer_id)}"
        return _decode(
            Customer,
            self._call("GET", path, "customer", options=options)
        )

    def save(
        self,
        customer: Customer,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Customer:
        """Update the customer's writable fields."""
        path = f"/customers/{escape_segment(_require_id(customer, 'customer'))}"
        return _decode(
            Customer,
            self._call(
                "PUT", path, "customer", body=customer.writable_body(), options=options
            )
        )

    def delete(
        self,
        customer: Customer,
        *,
        options: Optional[RequestOptions] = None,
    ) -> None:
        path = f"/customers/{escape_segment(_require_id(customer, 'customer'))}"
        self._call("DELETE", path, None, options=options)

    def tokens(
        self,
        customer: Customer,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Token]:
        """List the tokens saved for the customer."""
        path = f"/customers/{escape_segment(_require_id(customer, 'customer'))}/tokens"
        envelope = self._client.request("GET", path, options=options)
        return [_decode(Token, item) for item in envelope.get("tokens") or []]


class Tokens(_Resource):
    """Operations on customer tokens."""

    def find(
        self,
        customer_id: str,
        token_id: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Token:
        path = (
            f"/customers/{escape_segment(customer_id)}"
            f"/tokens/{escape_segment(token_id)}"
        )
        return _decode(Token, self._call("GET", path, "token", options=options))

    def create(
        self,
        customer_id: str,
        source: str,
        *,
        metadata: Optional[Mapping[str, str]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Token:
        """Save ``source`` (a card or gateway request ID) as a customer token."""
        path = f"/customers/{escape_segment(customer_id)}/tokens"
        body = {"source": source, "metadata": dict(metadata or {})}
        return _decode(
            Token,
            self._call("POST", path, "token", body=body, options=options)
        )

    def delete(
        self,
        customer_id: str,
        token_id: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> None:
        path = (
            f"/customers/{escape_segment(customer_id)}"
            f"/tokens/{escape_segment(token_id)}"
        )
        self._call("DELETE", path, None, options=options)


class Projects(_Resource):
    def current(self, *, options: Optional[RequestOptions] = None) -> Project:
        """Fetch the project the client credentials belong to."""
        return _decode(
            Project,
            self._call("GET", "/projects/this", "project", options=options)
        )
