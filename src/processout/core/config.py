"""
Configuration objects and helpers for the ProcessOut client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .environment import build_environment

__all__ = [
    "ConfigError",
    "ClientConfig",
    "ClientParameters",
    "DEFAULT_API_VERSION",
    "DEFAULT_HOST",
    "load_client_config",
]

DEFAULT_HOST = "https://api.processout.com"
DEFAULT_API_VERSION = "1.3.0.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "project_id": "PROCESSOUT_PROJECT_ID",
    "project_secret": "PROCESSOUT_PROJECT_SECRET",
    "host": "PROCESSOUT_HOST",
    "api_version": "PROCESSOUT_API_VERSION",
    "timeout_seconds": "PROCESSOUT_TIMEOUT_SECONDS",
}


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    project_id: Optional[str] = None
    project_secret: Optional[str] = None
    host: Optional[str] = None
    api_version: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = str(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - callers pass fixed keys
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None:
        raise ConfigError(f"{key} must be provided")
    value = raw.strip()
    if not value:
        raise ConfigError(f"{key} must not be empty")
    return value


def _normalize_host(raw_host: str) -> str:
    host = raw_host.strip().rstrip("/")
    parsed = urlparse(host)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(
            f"PROCESSOUT_HOST must be an http(s) URL, got '{raw_host}'"
        )
    return host


def _parse_timeout(raw_timeout: str) -> float:
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(
            f"PROCESSOUT_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("PROCESSOUT_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    project_id: str
    project_secret: str
    host: str = DEFAULT_HOST
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def auth(self) -> tuple[str, str]:
        return (self.project_id, self.project_secret)

    def url(self, path: str) -> str:
        return self.host + path

    def __repr__(self) -> str:
        return (
            f"ClientConfig(project_id={self.project_id!r}, project_secret='***', "
            f"host={self.host!r}, api_version={self.api_version!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        project_id = _require(values, "PROCESSOUT_PROJECT_ID")
        project_secret = _require(values, "PROCESSOUT_PROJECT_SECRET")
        host = _normalize_host(values.get("PROCESSOUT_HOST", DEFAULT_HOST))

        api_version = values.get("PROCESSOUT_API_VERSION", DEFAULT_API_VERSION).strip()
        if not api_version:
            raise ConfigError("PROCESSOUT_API_VERSION must not be empty")

        timeout_seconds = _parse_timeout(
            values.get("PROCESSOUT_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )

        return cls(
            project_id=project_id,
            project_secret=project_secret,
            host=host,
            api_version=api_version,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        project_id: Optional[str] = None,
        project_secret: Optional[str] = None,
        host: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "project_id": project_id,
                "project_secret": project_secret,
                "host": host,
                "api_version": api_version,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    project_id: Optional[str] = None,
    project_secret: Optional[str] = None,
    host: Optional[str] = None,
    api_version: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
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
