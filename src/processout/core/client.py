"""
HTTP client helpers for the ProcessOut API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .errors import APIError, ProcessOutError, ResponseDecodeError
from .options import RequestOptions
from .resources import AuthorizationRequests, Customers, Projects, Tokens

__all__ = [
    "APIError",
    "ProcessOutClient",
    "ProcessOutError",
    "ResponseDecodeError",
]

_BODY_METHODS = frozenset(["POST", "PUT"])


def _resolve_options(options: Optional[RequestOptions]) -> RequestOptions:
    if options is None:
        return RequestOptions()
    if not isinstance(options, RequestOptions):
        raise TypeError(
            f"options must be a RequestOptions instance, got {type(options).__name__}"
        )
    return options


def _decode_envelope(response: requests.Response, url: str) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise ResponseDecodeError(
            f"Failed to parse JSON from {url} ({response.status_code}): {response.text}",
            status_code=response.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object from {url}, got {type(payload).__name__}",
            status_code=response.status_code,
        )
    return payload


class ProcessOutClient:
    """
    Thin wrapper around a :class:`requests.Session` bound to one project.

    Resource operations are grouped on the ``authorization_requests``,
    ``customers``, ``tokens`` and ``projects`` attributes.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.authorization_requests = AuthorizationRequests(self)
        self.customers = Customers(self)
        self.tokens = Tokens(self)
        self.projects = Projects(self)

    def headers(self, method: str, options: RequestOptions) -> Dict[str, str]:
        headers = {
            "API-Version": self.config.api_version,
            "Accept": "application/json",
        }
        if method in _BODY_METHODS:
            headers["Content-Type"] = "application/json"
        if options.idempotency_key:
            headers["Idempotency-Key"] = options.idempotency_key
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """
        Issue a call and return the decoded envelope.

        Raises :class:`APIError` when the envelope reports a failure and
        :class:`ResponseDecodeError` when the body is not a JSON object.
        Transport errors from :mod:`requests` propagate unchanged.
        """
        method = method.upper()
        opts = _resolve_options(options)
        url = self.config.url(path)
        expand = list(opts.expand)

        kwargs: Dict[str, Any] = {
            "headers": self.headers(method, opts),
            "auth": self.config.auth,
            "timeout": self.config.timeout_seconds,
        }
        if method in _BODY_METHODS:
            payload = dict(body or {})
            payload["expand"] = expand
            kwargs["json"] = payload
        elif expand:
            kwargs["params"] = {"expand": expand}

        logging.info("%s %s", method, path)
        response = self.session.request(method, url, **kwargs)
        envelope = _decode_envelope(response, url)

        if not envelope.get("success"):
            message = envelope.get("message") or (
                f"Request failed with status {response.status_code}"
            )
            logging.warning(
                "%s %s failed with %s: %s", method, path, response.status_code, message
            )
            raise APIError(
                message,
                status_code=response.status_code,
                error_type=envelope.get("error_type"),
                raw=envelope,
            )
        return envelope

    def close(self) -> None:
        """Close the session if this client created it; caller sessions stay open."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ProcessOutClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
