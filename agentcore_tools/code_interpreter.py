"""AgentCore Code Interpreter client."""

import asyncio
import logging
from typing import Any, Mapping, Sequence

from .client import SandboxClient
from .content import normalize_response
from .types import CodeLanguage, FileContent, InvokeResult

logger = logging.getLogger(__name__)

DEFAULT_IDENTIFIER = "aws.codeinterpreter.v1"
DEFAULT_LANGUAGE: CodeLanguage = "python"


class CodeInterpreter(SandboxClient):
    """Client for the AgentCore Code Interpreter sandbox.

    Runs Python, JavaScript and TypeScript code, shell commands and file
    operations inside an isolated sandbox. A session is created on first use
    and can also be managed explicitly with start_session()/stop_session().

    The high-level operations (execute_code, execute_command and the file
    helpers) never raise: they return the sandbox output as a string, and a
    failed call comes back as ``"Error: <message>"``. Use invoke() for a
    result with an explicit is_error flag and propagated transport errors.

    Example:
        >>> interpreter = CodeInterpreter(region="us-east-1")
        >>> try:
        ...     print(await interpreter.execute_code('print("Hello")'))
        ... finally:
        ...     await interpreter.stop_session()
    """

    default_identifier = DEFAULT_IDENTIFIER
    _identifier_param = "codeInterpreterIdentifier"
    _start_operation = "start_code_interpreter_session"
    _stop_operation = "stop_code_interpreter_session"

    async def invoke(self, name: str, arguments: Mapping[str, Any]) -> InvokeResult:
        """Invoke a sandbox tool by name.

        Starts a default session if none is active.

        Args:
            name: Tool name (executeCode, executeCommand, readFiles, ...)
            arguments: Tool arguments

        Returns:
            InvokeResult with the flattened text and the error flag

        Raises:
            botocore.exceptions.ClientError: If the service call fails
        """
        session = await self._ensure_session()
        return await asyncio.to_thread(self._invoke_blocking, session.session_id, name, dict(arguments))

    def _invoke_blocking(self, session_id: str, name: str, arguments: dict) -> InvokeResult:
        # The event stream is read lazily from the connection, so it is
        # consumed here, in the worker thread.
        response = self._client.invoke_code_interpreter(
            codeInterpreterIdentifier=self.identifier,
            sessionId=session_id,
            name=name,
            arguments=arguments,
        )
        return normalize_response(response)

    async def _invoke_text(self, name: str, arguments: Mapping[str, Any], fallback: str) -> str:
        try:
            result = await self.invoke(name, arguments)
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s failed: %s", name, exc)
            return f"Error: {str(exc) or fallback}"
        return result.text

    async def execute_code(
        self,
        code: str,
        *,
        language: CodeLanguage = DEFAULT_LANGUAGE,
        clear_context: bool | None = None,
    ) -> str:
        """Execute code in the sandbox.

        Args:
            code: Source code to run
            language: python, javascript or typescript (default: python)
            clear_context: Reset interpreter state before running

        Returns:
            Execution output, or "Error: ..." on failure

        Example:
            >>> await interpreter.execute_code("x = 21 * 2\\nprint(x)")
            '42'
        """
        arguments: dict[str, Any] = {"code": code, "language": language}
        if clear_context is not None:
            arguments["clearContext"] = clear_context
        return await self._invoke_text("executeCode", arguments, "Unknown execution error")

    async def execute_command(self, command: str) -> str:
        """Execute a shell command in the sandbox.

        Example:
            >>> await interpreter.execute_command("ls -la")
        """
        return await self._invoke_text("executeCommand", {"command": command}, "Command execution failed")

    async def read_files(self, paths: Sequence[str]) -> str:
        """Read files from the sandbox.

        Args:
            paths: File paths to read

        Returns:
            File contents, or the service's error text
        """
        return await self._invoke_text("readFiles", {"paths": list(paths)}, "Read failed")

    async def write_files(self, files: Sequence[FileContent | Mapping[str, str]]) -> str:
        """Write text files to the sandbox.

        Args:
            files: FileContent items or {"path": ..., "content": ...} mappings

        Example:
            >>> await interpreter.write_files([
            ...     FileContent(path="script.py", content='print("Hello")'),
            ...     {"path": "data.json", "content": '{"key": "value"}'},
            ... ])
        """
        try:
            content = [_file_entry(f) for f in files]
        except (KeyError, TypeError) as exc:
            return f"Error: Invalid file entry: {exc}"
        return await self._invoke_text("writeFiles", {"content": content}, "Write failed")

    async def list_files(self, path: str = ".") -> str:
        """List files in a sandbox directory (default: the working directory)."""
        return await self._invoke_text("listFiles", {"path": path}, "List failed")

    async def remove_files(self, paths: Sequence[str]) -> str:
        """Remove files from the sandbox."""
        return await self._invoke_text("removeFiles", {"paths": list(paths)}, "Remove failed")


def _file_entry(file: FileContent | Mapping[str, str]) -> dict[str, str]:
    if isinstance(file, FileContent):
        return {"path": file.path, "text": file.content}
    return {"path": file["path"], "text": file["content"]}
