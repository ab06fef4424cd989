"""AgentCore Browser session client."""

import asyncio

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest

from .client import SERVICE_NAME, SandboxClient
from .exceptions import ConfigurationError, NoActiveSessionError
from .types import (
    BrowserSessionDetails,
    BrowserSessionStatus,
    ListSessionsResult,
    SessionInfo,
    StreamStatus,
    StreamUpdateResult,
    ViewportConfig,
    WebSocketConnection,
    _parse_session_details,
    _parse_session_summary,
)

DEFAULT_IDENTIFIER = "aws.browser.v1"


class Browser(SandboxClient):
    """Client for AgentCore Browser sessions.

    Manages the browser session lifecycle and produces the signed WebSocket
    endpoint an automation library attaches to. It has no automation methods
    itself; see PlaywrightBrowser for those.

    Example:
        >>> browser = Browser(region="us-east-1")
        >>> await browser.start_session(session_name="research")
        >>> connection = await browser.generate_ws_url()
        >>> await browser.stop_session()
    """

    default_identifier = DEFAULT_IDENTIFIER
    _identifier_param = "browserIdentifier"
    _start_operation = "start_browser_session"
    _stop_operation = "stop_browser_session"

    async def start_session(
        self,
        *,
        session_name: str | None = None,
        description: str | None = None,
        timeout: int | None = None,
        viewport: ViewportConfig | None = None,
    ) -> SessionInfo:
        """Start a new browser session.

        Args:
            session_name: Session name (default: "default")
            description: Optional description kept on the returned SessionInfo
            timeout: Session timeout in seconds, 1-28800 (default: 3600)
            viewport: Browser viewport dimensions

        Raises:
            SessionAlreadyActiveError: If a session is already active
        """
        view_port = {"width": viewport.width, "height": viewport.height} if viewport else None
        return await self._start_exclusive(session_name, description, timeout, viewPort=view_port)

    def _target_session_id(self, session_id: str | None) -> str:
        session_id = session_id or (self._session.session_id if self._session else None)
        if not session_id:
            raise ConfigurationError(
                "Session ID must be provided or available from the current session. "
                "Start a session first or provide an explicit ID."
            )
        return session_id

    async def get_session(
        self,
        *,
        browser_id: str | None = None,
        session_id: str | None = None,
    ) -> BrowserSessionDetails:
        """Get details of a browser session (default: the active one).

        Raises:
            ConfigurationError: If no session ID is given and none is active

        Example:
            >>> details = await browser.get_session()
            >>> print(details.status)
            READY
        """
        data = await self._call(
            "get_browser_session",
            browserIdentifier=browser_id or self.identifier,
            sessionId=self._target_session_id(session_id),
        )
        return _parse_session_details(data)

    async def list_sessions(
        self,
        *,
        browser_id: str | None = None,
        status: BrowserSessionStatus | None = None,
        max_results: int | None = None,
        next_token: str | None = None,
    ) -> ListSessionsResult:
        """List browser sessions, one page at a time.

        Example:
            >>> page = await browser.list_sessions(status="READY", max_results=10)
            >>> while page.next_token:
            ...     page = await browser.list_sessions(max_results=10, next_token=page.next_token)
        """
        params = {"browserIdentifier": browser_id or self.identifier}
        if status:
            params["status"] = status
        if max_results:
            params["maxResults"] = max_results
        if next_token:
            params["nextToken"] = next_token

        data = await self._call("list_browser_sessions", **params)
        return ListSessionsResult(
            items=[_parse_session_summary(item) for item in data.get("items") or []],
            next_token=data.get("nextToken") or None,
        )

    async def update_browser_stream(
        self,
        stream_status: StreamStatus,
        *,
        browser_id: str | None = None,
        session_id: str | None = None,
    ) -> StreamUpdateResult:
        """Enable or disable the automation stream of a session.

        Raises:
            ConfigurationError: If no session ID is given and none is active
        """
        data = await self._call(
            "update_browser_stream",
            browserIdentifier=browser_id or self.identifier,
            sessionId=self._target_session_id(session_id),
            streamUpdate={"automationStreamUpdate": {"streamStatus": stream_status}},
        )
        automation = (data.get("streams") or {}).get("automationStream") or {}
        return StreamUpdateResult(
            stream_endpoint=automation.get("streamEndpoint"),
            stream_status=automation.get("streamStatus"),
        )

    async def generate_ws_url(self) -> WebSocketConnection:
        """Build the SigV4-signed automation WebSocket endpoint of the active session.

        Raises:
            NoActiveSessionError: If no session is active
            ConfigurationError: If no AWS credentials can be resolved
        """
        if self._session is None:
            raise NoActiveSessionError("No active session. Call start_session() first.")

        host = f"{SERVICE_NAME}.{self.region}.amazonaws.com"
        path = f"/browser-streams/{self.identifier}/sessions/{self._session.session_id}/automation"

        credentials = await asyncio.to_thread(self._boto_session.get_credentials)
        if credentials is None:
            raise ConfigurationError("No AWS credentials found for signing the automation endpoint")

        request = AWSRequest(method="GET", url=f"https://{host}{path}", headers={"host": host})
        SigV4Auth(credentials.get_frozen_credentials(), SERVICE_NAME, self.region).add_auth(request)

        return WebSocketConnection(
            url=f"wss://{host}{path}",
            headers={key: value for key, value in request.headers.items() if isinstance(value, str)},
        )
