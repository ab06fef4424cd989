"""Tests for Browser."""

from urllib.parse import urlparse

import pytest
from botocore.credentials import Credentials

from agentcore_tools import (
    Browser,
    ConfigurationError,
    NoActiveSessionError,
    SessionAlreadyActiveError,
    ViewportConfig,
)
from agentcore_tools.browser import DEFAULT_IDENTIFIER


@pytest.fixture
def browser(boto_session, region):
    """Browser backed by the mocked boto3 client."""
    return Browser(region=region, boto_session=boto_session)


@pytest.mark.asyncio
async def test_start_session_with_viewport(browser):
    session = await browser.start_session(session_name="shop", viewport=ViewportConfig(width=1280, height=720))

    assert session.session_id == "br-sess-1"
    browser._client.start_browser_session.assert_called_once_with(
        browserIdentifier=DEFAULT_IDENTIFIER,
        name="shop",
        sessionTimeoutSeconds=3600,
        viewPort={"width": 1280, "height": 720},
    )


@pytest.mark.asyncio
async def test_start_session_without_viewport(browser):
    await browser.start_session()

    kwargs = browser._client.start_browser_session.call_args.kwargs
    assert "viewPort" not in kwargs


@pytest.mark.asyncio
async def test_start_session_twice_raises(browser):
    await browser.start_session()

    with pytest.raises(SessionAlreadyActiveError):
        await browser.start_session()


@pytest.mark.asyncio
async def test_stop_session(browser):
    await browser.stop_session()
    browser._client.stop_browser_session.assert_not_called()

    await browser.start_session()
    await browser.stop_session()

    browser._client.stop_browser_session.assert_called_once_with(
        browserIdentifier=DEFAULT_IDENTIFIER,
        sessionId="br-sess-1",
    )
    assert browser.session is None


@pytest.mark.asyncio
async def test_get_session_uses_active_session(browser, created_at):
    browser._client.get_browser_session.return_value = {
        "sessionId": "br-sess-1",
        "browserIdentifier": DEFAULT_IDENTIFIER,
        "name": "default",
        "status": "READY",
        "createdAt": created_at,
        "sessionTimeoutSeconds": 3600,
    }
    await browser.start_session()

    details = await browser.get_session()

    assert details.status == "READY"
    browser._client.get_browser_session.assert_called_once_with(
        browserIdentifier=DEFAULT_IDENTIFIER,
        sessionId="br-sess-1",
    )


@pytest.mark.asyncio
async def test_get_session_explicit_ids(browser, created_at):
    browser._client.get_browser_session.return_value = {
        "sessionId": "other",
        "browserIdentifier": "custom-browser",
        "name": "x",
        "status": "TERMINATED",
        "createdAt": created_at,
    }

    details = await browser.get_session(browser_id="custom-browser", session_id="other")

    assert details.session_id == "other"
    browser._client.start_browser_session.assert_not_called()


@pytest.mark.asyncio
async def test_get_session_without_session_id_raises(browser):
    with pytest.raises(ConfigurationError):
        await browser.get_session()

    browser._client.get_browser_session.assert_not_called()


@pytest.mark.asyncio
async def test_list_sessions(browser, created_at):
    browser._client.list_browser_sessions.return_value = {
        "items": [
            {"sessionId": "a", "name": "one", "status": "READY", "createdAt": created_at, "lastUpdatedAt": created_at},
            {"sessionId": "b", "name": "two", "createdAt": created_at, "lastUpdatedAt": created_at},
        ],
        "nextToken": "page-2",
    }

    page = await browser.list_sessions(status="READY", max_results=2)

    assert [s.session_id for s in page.items] == ["a", "b"]
    assert page.items[1].status == "UNKNOWN"
    assert page.next_token == "page-2"
    browser._client.list_browser_sessions.assert_called_once_with(
        browserIdentifier=DEFAULT_IDENTIFIER,
        status="READY",
        maxResults=2,
    )


@pytest.mark.asyncio
async def test_list_sessions_empty(browser):
    browser._client.list_browser_sessions.return_value = {}

    page = await browser.list_sessions()

    assert page.items == []
    assert page.next_token is None


@pytest.mark.asyncio
async def test_update_browser_stream(browser):
    browser._client.update_browser_stream.return_value = {
        "streams": {"automationStream": {"streamEndpoint": "wss://automation", "streamStatus": "DISABLED"}}
    }
    await browser.start_session()

    result = await browser.update_browser_stream("DISABLED")

    assert result.stream_status == "DISABLED"
    assert result.stream_endpoint == "wss://automation"
    browser._client.update_browser_stream.assert_called_once_with(
        browserIdentifier=DEFAULT_IDENTIFIER,
        sessionId="br-sess-1",
        streamUpdate={"automationStreamUpdate": {"streamStatus": "DISABLED"}},
    )


@pytest.mark.asyncio
async def test_update_browser_stream_without_session_raises(browser):
    with pytest.raises(ConfigurationError):
        await browser.update_browser_stream("ENABLED")


@pytest.mark.asyncio
async def test_generate_ws_url_requires_session(browser):
    with pytest.raises(NoActiveSessionError):
        await browser.generate_ws_url()


@pytest.mark.asyncio
async def test_generate_ws_url_signs_request(browser, boto_session, region):
    """generate_ws_url returns the automation endpoint with SigV4 headers."""
    boto_session.get_credentials.return_value = Credentials("AKIDEXAMPLE", "secret", "session-token")
    await browser.start_session()

    connection = await browser.generate_ws_url()

    url = urlparse(connection.url)
    assert url.scheme == "wss"
    assert url.netloc == f"bedrock-agentcore.{region}.amazonaws.com"
    assert url.path == f"/browser-streams/{DEFAULT_IDENTIFIER}/sessions/br-sess-1/automation"
    assert connection.headers["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
    assert f"/{region}/bedrock-agentcore/aws4_request" in connection.headers["Authorization"]
    assert connection.headers["X-Amz-Security-Token"] == "session-token"
    assert "X-Amz-Date" in connection.headers


@pytest.mark.asyncio
async def test_generate_ws_url_without_credentials(browser, boto_session):
    boto_session.get_credentials.return_value = None
    await browser.start_session()

    with pytest.raises(ConfigurationError):
        await browser.generate_ws_url()
