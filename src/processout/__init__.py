"""
Public facade for the ProcessOut client package.

The most useful pieces are re-exported so integrators can
``from processout import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    APIError,
    AuthorizationRequest,
    ClientConfig,
    ClientEnvironment,
    ClientParameters,
    ConfigError,
    Customer,
    ProcessOutClient,
    ProcessOutError,
    Project,
    RequestOptions,
    ResponseDecodeError,
    Token,
    build_environment,
    load_client_config,
)

__version__ = "0.1.0"

__all__ = (
    "APIError",
    "AuthorizationRequest",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "Customer",
    "ProcessOutClient",
    "ProcessOutError",
    "Project",
    "RequestOptions",
    "ResponseDecodeError",
    "Token",
    "build_environment",
    "create_client",
    "load_client_config",
)
