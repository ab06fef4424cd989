"""AgentCore tools — Python client for AWS Bedrock AgentCore code interpreter and browser sandboxes."""

from importlib.metadata import version

from .browser import Browser
from .client import DEFAULT_REGION, DEFAULT_SESSION_NAME, DEFAULT_TIMEOUT, SandboxClient
from .code_interpreter import CodeInterpreter
from .content import normalize_response, render_content
from .exceptions import (
    AgentCoreError,
    BrowserConnectionError,
    ConfigurationError,
    ElementNotFoundError,
    NoActiveSessionError,
    SessionAlreadyActiveError,
)
from .types import (
    BrowserSessionDetails,
    BrowserSessionStreams,
    FileContent,
    InvokeResult,
    ListSessionsResult,
    SessionInfo,
    SessionSummary,
    StreamInfo,
    StreamUpdateResult,
    ViewportConfig,
    WebSocketConnection,
)

__version__ = version("agentcore-tools")
__all__ = [
    "SandboxClient",
    "CodeInterpreter",
    "Browser",
    "PlaywrightBrowser",
    "normalize_response",
    "render_content",
    "DEFAULT_REGION",
    "DEFAULT_SESSION_NAME",
    "DEFAULT_TIMEOUT",
    "SessionInfo",
    "FileContent",
    "InvokeResult",
    "ViewportConfig",
    "WebSocketConnection",
    "StreamInfo",
    "BrowserSessionStreams",
    "BrowserSessionDetails",
    "SessionSummary",
    "ListSessionsResult",
    "StreamUpdateResult",
    "AgentCoreError",
    "SessionAlreadyActiveError",
    "NoActiveSessionError",
    "ConfigurationError",
    "ElementNotFoundError",
    "BrowserConnectionError",
]


def __getattr__(name: str):
    """Lazy import for optional integrations (agentcore-tools[browser], agentcore-tools[agents])."""
    if name == "PlaywrightBrowser":
        from .playwright_browser import PlaywrightBrowser

        return PlaywrightBrowser
    if name in ("create_code_interpreter_tools", "create_browser_tools", "code_interpreter_tools_for_session"):
        from . import agents as _agents

        return getattr(_agents, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
