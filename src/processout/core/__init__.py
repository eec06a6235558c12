"""
Core primitives that bind the ProcessOut REST API.
"""

from .client import ProcessOutClient
from .config import (
    ConfigError,
    ClientConfig,
    ClientParameters,
    load_client_config,
)
from .errors import APIError, ProcessOutError, ResponseDecodeError
from .environment import ClientEnvironment, build_environment
from .models import AuthorizationRequest, Customer, Project, Token
from .options import RequestOptions, escape_segment
from .resources import AuthorizationRequests, Customers, Projects, Tokens

__all__ = [
    "APIError",
    "AuthorizationRequest",
    "AuthorizationRequests",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "Customer",
    "Customers",
    "ProcessOutClient",
    "ProcessOutError",
    "Project",
    "Projects",
    "RequestOptions",
    "ResponseDecodeError",
    "Token",
    "Tokens",
    "build_environment",
    "escape_segment",
    "load_client_config",
]
