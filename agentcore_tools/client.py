"""Session lifecycle shared by the AgentCore sandbox clients."""

import asyncio
import logging
import os
from datetime import datetime, timezone
from typing import Any

import boto3
from botocore.config import Config

from .exceptions import SessionAlreadyActiveError
from .types import SessionInfo

logger = logging.getLogger(__name__)

SERVICE_NAME = "bedrock-agentcore"
DEFAULT_REGION = "us-west-2"
DEFAULT_SESSION_NAME = "default"
DEFAULT_TIMEOUT = 3600


class SandboxClient:
    """Base client owning at most one AgentCore sandbox session.

    A client holds a single session slot. Operations that need a sandbox
    start a default session on first use; ``start_session`` refuses to
    replace a live session so a remote sandbox is never silently abandoned.

    Subclasses name the boto3 operations and identifier parameter of their
    sandbox family.

    Example:
        >>> async with CodeInterpreter(region="us-east-1") as interpreter:
        ...     print(await interpreter.execute_code("print(1 + 1)"))
    """

    default_identifier: str = ""
    _identifier_param: str = ""
    _start_operation: str = ""
    _stop_operation: str = ""

    def __init__(
        self,
        *,
        region: str | None = None,
        identifier: str | None = None,
        boto_session: boto3.session.Session | None = None,
        client_config: Config | None = None,
    ):
        """Initialize the client.

        Args:
            region: AWS region (default: $AWS_REGION, then us-west-2)
            identifier: Sandbox identifier (default: the family's system sandbox)
            boto_session: boto3 session used to resolve credentials
                (default: a new session with the standard credential chain)
            client_config: Optional botocore Config for the service client
        """
        self.region = region or os.environ.get("AWS_REGION") or DEFAULT_REGION
        self.identifier = identifier or self.default_identifier
        self._boto_session = boto_session or boto3.session.Session()
        self._client = self._boto_session.client(
            SERVICE_NAME,
            region_name=self.region,
            config=client_config,
        )
        self._session: SessionInfo | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> SessionInfo | None:
        """The active session, or None."""
        return self._session

    async def start_session(
        self,
        *,
        session_name: str | None = None,
        description: str | None = None,
        timeout: int | None = None,
    ) -> SessionInfo:
        """Start a new sandbox session.

        Args:
            session_name: Session name (default: "default")
            description: Optional description kept on the returned SessionInfo
            timeout: Session timeout in seconds (default: 3600)

        Returns:
            SessionInfo with the service-assigned session ID

        Raises:
            SessionAlreadyActiveError: If a session is already active
            botocore.exceptions.ClientError: If the service rejects the request
        """
        return await self._start_exclusive(session_name, description, timeout)

    async def stop_session(self) -> None:
        """Stop the active session.

        Does nothing when no session is active, so it is safe to call from
        cleanup code unconditionally.
        """
        async with self._lock:
            if self._session is None:
                return
            await self._call(
                self._stop_operation,
                **{self._identifier_param: self.identifier, "sessionId": self._session.session_id},
            )
            logger.info("Stopped session %s", self._session.session_id)
            self._session = None

    async def _start_exclusive(
        self,
        session_name: str | None,
        description: str | None,
        timeout: int | None,
        **request: Any,
    ) -> SessionInfo:
        async with self._lock:
            if self._session is not None:
                raise SessionAlreadyActiveError("Session already active. Call stop_session() first.")
            return await self._open(session_name, description, timeout, **request)

    async def _ensure_session(self) -> SessionInfo:
        """Return the active session, starting a default one if needed."""
        async with self._lock:
            if self._session is None:
                await self._open(None, None, None)
            return self._session

    async def _open(
        self,
        session_name: str | None,
        description: str | None,
        timeout: int | None,
        **request: Any,
    ) -> SessionInfo:
        # Caller holds self._lock.
        name = session_name or DEFAULT_SESSION_NAME
        params = {
            self._identifier_param: self.identifier,
            "name": name,
            "sessionTimeoutSeconds": DEFAULT_TIMEOUT if timeout is None else timeout,
        }
        params.update({key: value for key, value in request.items() if value is not None})

        response = await self._call(self._start_operation, **params)

        self._session = SessionInfo(
            session_name=name,
            session_id=response["sessionId"],
            created_at=response.get("createdAt") or datetime.now(timezone.utc),
            description=description,
        )
        logger.info("Started session %s (%s) on %s", self._session.session_id, name, self.identifier)
        return self._session

    async def _call(self, operation: str, **params: Any) -> Any:
        """Run one blocking boto3 operation in a worker thread."""
        return await asyncio.to_thread(getattr(self._client, operation), **params)

    async def __aenter__(self) -> "SandboxClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args) -> None:
        """Context manager exit - stops the active session."""
        await self.stop_session()
