"""Type definitions for AgentCore tools."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

CodeLanguage = Literal["python", "javascript", "typescript"]
BrowserSessionStatus = Literal["READY", "TERMINATING", "TERMINATED"]
StreamStatus = Literal["ENABLED", "DISABLED"]


@dataclass
class SessionInfo:
    """The sandbox session owned by a client."""

    session_name: str
    """Name the session was started with"""

    session_id: str
    """Opaque session identifier assigned by the service"""

    created_at: datetime
    """When the session was created"""

    description: str | None = None
    """Optional caller-supplied description"""


@dataclass
class FileContent:
    """A file to write into the code interpreter sandbox."""

    path: str
    """File path (relative to the sandbox working directory or absolute)"""

    content: str
    """Text content of the file"""


@dataclass
class InvokeResult:
    """Normalized outcome of one code interpreter tool call."""

    text: str
    """Flattened text content of the response"""

    is_error: bool = False
    """Whether the service flagged the call as failed"""

    structured_content: dict[str, Any] | None = None
    """Structured payload (stdout, stderr, exitCode, ...) when provided"""


@dataclass
class ViewportConfig:
    """Browser viewport dimensions in pixels."""

    width: int
    height: int


@dataclass
class WebSocketConnection:
    """Signed endpoint for attaching an automation client to a browser session."""

    url: str
    """wss:// URL of the automation stream"""

    headers: dict[str, str] = field(default_factory=dict)
    """SigV4 headers (Authorization, X-Amz-Date, X-Amz-Security-Token)"""


@dataclass
class StreamInfo:
    """Endpoint metadata of one browser stream."""

    stream_endpoint: str
    stream_status: str | None = None


@dataclass
class BrowserSessionStreams:
    """Streams exposed by a browser session."""

    automation_stream: StreamInfo | None = None
    live_view_stream: StreamInfo | None = None


@dataclass
class BrowserSessionDetails:
    """Detailed information about a browser session."""

    session_id: str
    browser_identifier: str
    name: str
    status: str
    """READY, TERMINATING, TERMINATED (UNKNOWN if not reported)"""

    created_at: datetime
    last_updated_at: datetime
    session_timeout_seconds: int | None = None
    streams: BrowserSessionStreams | None = None


@dataclass
class SessionSummary:
    """Summary entry returned when listing browser sessions."""

    session_id: str
    name: str
    status: str
    created_at: datetime | None = None
    last_updated_at: datetime | None = None


@dataclass
class ListSessionsResult:
    """One page of browser session summaries."""

    items: list[SessionSummary]
    next_token: str | None = None
    """Pass back to list_sessions() to fetch the next page"""


@dataclass
class StreamUpdateResult:
    """Automation stream state after an update."""

    stream_endpoint: str | None = None
    stream_status: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_streams(data: dict | None) -> BrowserSessionStreams | None:
    """Parse the streams block of a browser session. Endpoints without a URL are dropped."""
    if not data:
        return None
    streams = BrowserSessionStreams()
    automation = data.get("automationStream") or {}
    if automation.get("streamEndpoint"):
        streams.automation_stream = StreamInfo(
            stream_endpoint=automation["streamEndpoint"],
            stream_status=automation.get("streamStatus"),
        )
    live_view = data.get("liveViewStream") or {}
    if live_view.get("streamEndpoint"):
        streams.live_view_stream = StreamInfo(stream_endpoint=live_view["streamEndpoint"])
    return streams


def _parse_session_details(data: dict) -> BrowserSessionDetails:
    """Parse a get_browser_session response. Handles optional fields."""
    created_at = data.get("createdAt") or _utcnow()
    return BrowserSessionDetails(
        session_id=data["sessionId"],
        browser_identifier=data["browserIdentifier"],
        name=data.get("name", ""),
        status=data.get("status") or "UNKNOWN",
        created_at=created_at,
        last_updated_at=data.get("lastUpdatedAt") or created_at,
        session_timeout_seconds=data.get("sessionTimeoutSeconds"),
        streams=_parse_streams(data.get("streams")),
    )


def _parse_session_summary(data: dict) -> SessionSummary:
    return SessionSummary(
        session_id=data["sessionId"],
        name=data.get("name", ""),
        status=data.get("status") or "UNKNOWN",
        created_at=data.get("createdAt"),
        last_updated_at=data.get("lastUpdatedAt"),
    )
