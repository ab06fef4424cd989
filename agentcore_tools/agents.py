"""OpenAI Agents SDK integration for AgentCore tools.

Provides pre-built @function_tool tools bound to a CodeInterpreter or a
PlaywrightBrowser.
Requires: pip install agentcore-tools[agents] or pip install openai-agents
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from .code_interpreter import CodeInterpreter
from .types import FileContent

if TYPE_CHECKING:
    from .playwright_browser import PlaywrightBrowser


def _check_agents_installed() -> None:
    """Raise helpful ImportError if openai-agents is not installed."""
    try:
        import agents  # noqa: F401
    except ImportError as e:
        raise ImportError(
            "OpenAI Agents SDK is required for agentcore_tools.agents. "
            "Install with: pip install agentcore-tools[agents] or pip install openai-agents"
        ) from e


def create_code_interpreter_tools(interpreter: CodeInterpreter) -> list:
    """Create tools bound to a code interpreter.

    The tools return the sandbox output as text. Failures come back as
    "Error: ..." strings, so the agent can read and react to them.

    Args:
        interpreter: The code interpreter the tools run against. A session
            is started on the first tool call if none is active.

    Returns:
        List of @function_tool-decorated tools.
    """
    _check_agents_installed()
    from agents import function_tool

    @function_tool
    async def execute_code(code: str, language: str = "python", clear_context: bool = False) -> str:
        """Execute code in the sandbox. Variables persist between calls unless clear_context is set.

        Args:
            code: The code to execute.
            language: python, javascript or typescript.
            clear_context: Reset interpreter state before running.
        """
        return await interpreter.execute_code(code, language=language, clear_context=clear_context or None)

    @function_tool
    async def execute_command(command: str) -> str:
        """Execute a shell command in the sandbox (e.g. 'pip install pandas', 'ls -la')."""
        return await interpreter.execute_command(command)

    @function_tool
    async def read_files(paths: list[str]) -> str:
        """Read one or more files from the sandbox."""
        return await interpreter.read_files(paths)

    @function_tool
    async def write_files(path: str, content: str) -> str:
        """Write a text file to the sandbox.

        Args:
            path: File path, relative to the working directory or absolute.
            content: The text content to write.
        """
        return await interpreter.write_files([FileContent(path=path, content=content)])

    @function_tool
    async def list_files(path: str = ".") -> str:
        """List files and directories in the sandbox (default '.' for the working directory)."""
        return await interpreter.list_files(path)

    @function_tool
    async def remove_files(paths: list[str]) -> str:
        """Remove files from the sandbox."""
        return await interpreter.remove_files(paths)

    return [
        execute_code,
        execute_command,
        read_files,
        write_files,
        list_files,
        remove_files,
    ]


def _error(exc: Exception) -> str:
    return f"Error: {str(exc) or type(exc).__name__}"


def create_browser_tools(browser: PlaywrightBrowser) -> list:
    """Create tools bound to a Playwright browser.

    Browser automation raises on failure; these tools report the failure as
    an "Error: ..." string instead.

    Args:
        browser: The browser the tools drive.

    Returns:
        List of @function_tool-decorated tools.
    """
    _check_agents_installed()
    from agents import function_tool

    @function_tool
    async def browser_navigate(url: str) -> str:
        """Navigate the browser to a URL. Must include the protocol prefix."""
        try:
            await browser.navigate(url)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)
        return f"Navigated to {url}"

    @function_tool
    async def browser_click(selector: str) -> str:
        """Click the element matching a CSS selector."""
        try:
            await browser.click(selector)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)
        return f"Clicked {selector}"

    @function_tool
    async def browser_type(selector: str, text: str) -> str:
        """Type text into the input matching a CSS selector."""
        try:
            await browser.type(selector, text)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)
        return f"Typed into {selector}"

    @function_tool
    async def browser_get_text(selector: str | None = None) -> str:
        """Get the text of an element, or of the whole page when no selector is given."""
        try:
            return await browser.get_text(selector)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)

    @function_tool
    async def browser_get_html(selector: str | None = None) -> str:
        """Get the HTML of an element, or of the whole page when no selector is given."""
        try:
            return await browser.get_html(selector)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)

    @function_tool
    async def browser_screenshot(path: str | None = None, full_page: bool = False) -> str:
        """Take a screenshot of the page, optionally saving it to a file.

        Returns:
            Confirmation message (with the file path when saved).
        """
        try:
            await browser.screenshot(path=path, full_page=full_page)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)
        return f"Screenshot saved to {path}" if path else "Screenshot captured"

    @function_tool
    async def browser_evaluate(script: str) -> str:
        """Evaluate a JavaScript expression in the page and return its result as text."""
        try:
            result = await browser.evaluate(script)
        except Exception as exc:  # noqa: BLE001
            return _error(exc)
        return "" if result is None else str(result)

    return [
        browser_navigate,
        browser_click,
        browser_type,
        browser_get_text,
        browser_get_html,
        browser_screenshot,
        browser_evaluate,
    ]


@asynccontextmanager
async def code_interpreter_tools_for_session(
    interpreter: CodeInterpreter | None = None,
    *,
    session_name: str | None = None,
    timeout: int | None = None,
    **client_kwargs: Any,
):
    """Async context manager for session-scoped code interpreter tools.

    Starts a session, yields (interpreter, tools), and stops the session on
    exit.

    Args:
        interpreter: Interpreter to use (default: a new CodeInterpreter built
            from client_kwargs).
        session_name: Session name (default: "default").
        timeout: Session timeout in seconds (default: 3600).

    Yields:
        Tuple of (interpreter, tools). Tools are bound to the interpreter.
    """
    interpreter = interpreter or CodeInterpreter(**client_kwargs)
    await interpreter.start_session(session_name=session_name, timeout=timeout)
    try:
        tools = create_code_interpreter_tools(interpreter)
        yield interpreter, tools
    finally:
        await interpreter.stop_session()


__all__ = [
    "create_code_interpreter_tools",
    "create_browser_tools",
    "code_interpreter_tools_for_session",
]
