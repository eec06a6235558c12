"""Shared fixtures: a fake requests session that never touches the network."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from processout.core.client import ProcessOutClient
from processout.core.config import ClientConfig


def make_response(payload, status_code=200):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if isinstance(payload, (bytes, str)):
        body = payload.encode("utf-8") if isinstance(payload, str) else payload
    else:
        body = json.dumps(payload).encode("utf-8")
    response._content = body
    return response


@pytest.fixture
def config():
    return ClientConfig(
        project_id="proj_test",
        project_secret="key_secret",
        host="https://api.example.test",
        api_version="1.3.0.0",
        timeout_seconds=12.5,
    )


@pytest.fixture
def session():
    fake = MagicMock(spec=requests.Session)
    fake.request.return_value = make_response({"success": True})
    return fake


@pytest.fixture
def client(config, session):
    return ProcessOutClient(config, session=session)


@pytest.fixture
def respond(session):
    """Queue the payload the fake session returns for the next call."""

    def _respond(payload, status_code=200):
        session.request.return_value = make_response(payload, status_code)
        return session

    return _respond
