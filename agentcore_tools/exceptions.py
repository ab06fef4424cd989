"""AgentCore tools exception hierarchy."""


class AgentCoreError(Exception):
    """Base exception for all AgentCore tools errors."""


class SessionAlreadyActiveError(AgentCoreError):
    """Raised when starting a session while another one is still active."""


class NoActiveSessionError(AgentCoreError):
    """Raised when an operation needs a live session and none exists."""


class ConfigurationError(AgentCoreError):
    """Raised when a target session or credentials cannot be resolved."""


class ElementNotFoundError(AgentCoreError):
    """Raised when a selector matches no element on the page."""

    def __init__(self, selector: str):
        super().__init__(f"Element not found: {selector}")
        self.selector = selector


class BrowserConnectionError(AgentCoreError):
    """Raised when the automation connection has no usable browser context."""
