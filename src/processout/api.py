"""
Public, high-level helpers for building a ProcessOut client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import ProcessOutClient
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    project_id: Optional[str] = None,
    project_secret: Optional[str] = None,
    host: Optional[str] = None,
    api_version: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ProcessOutClient:
    """
    Construct a :class:`ProcessOutClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            project_id,
            project_secret,
            host,
            api_version,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            project_id=project_id,
            project_secret=project_secret,
            host=host,
            api_version=api_version,
            timeout_seconds=timeout_seconds,
        )
    return ProcessOutClient(cfg, session=session)
