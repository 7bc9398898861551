import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests


def make_response(status: int = 200, body: Any = "") -> requests.Response:
    """Build a real ``requests.Response`` with the given status and body."""
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    return response


def last_call(session: MagicMock) -> dict:
    """Keyword arguments of the most recent ``session.request`` call."""
    return session.request.call_args.kwargs


@pytest.fixture
def session() -> MagicMock:
    mock = MagicMock(spec=requests.Session)
    mock.request.return_value = make_response(200, {})
    return mock


@pytest.fixture
def respond(session):
    """Set the next response returned by the fake session."""

    def _respond(status: int = 200, body: Any = "") -> None:
        session.request.return_value = make_response(status, body)

    return _respond
