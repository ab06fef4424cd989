"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def region():
    """AWS region used by test clients."""
    return "us-east-1"


@pytest.fixture
def created_at():
    """Creation timestamp returned by the mocked service."""
    return datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def boto_session(created_at):
    """boto3 session whose client() returns a mocked bedrock-agentcore client."""
    session = MagicMock()
    client = MagicMock()
    client.start_code_interpreter_session.return_value = {"sessionId": "ci-sess-1", "createdAt": created_at}
    client.stop_code_interpreter_session.return_value = {"sessionId": "ci-sess-1"}
    client.start_browser_session.return_value = {"sessionId": "br-sess-1", "createdAt": created_at}
    client.stop_browser_session.return_value = {"sessionId": "br-sess-1"}
    session.client.return_value = client
    return session
