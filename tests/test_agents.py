"""Tests for the OpenAI Agents SDK integration."""

import pytest

pytest.importorskip("agents")

from agentcore_tools import CodeInterpreter  # noqa: E402
from agentcore_tools.agents import (  # noqa: E402
    code_interpreter_tools_for_session,
    create_browser_tools,
    create_code_interpreter_tools,
)


def test_code_interpreter_tool_names(boto_session):
    tools = create_code_interpreter_tools(CodeInterpreter(boto_session=boto_session))

    assert [t.name for t in tools] == [
        "execute_code",
        "execute_command",
        "read_files",
        "write_files",
        "list_files",
        "remove_files",
    ]


def test_browser_tool_names(boto_session):
    pytest.importorskip("playwright")
    from agentcore_tools.playwright_browser import PlaywrightBrowser

    tools = create_browser_tools(PlaywrightBrowser(boto_session=boto_session))

    assert [t.name for t in tools] == [
        "browser_navigate",
        "browser_click",
        "browser_type",
        "browser_get_text",
        "browser_get_html",
        "browser_screenshot",
        "browser_evaluate",
    ]


@pytest.mark.asyncio
async def test_tools_for_session_stops_session(boto_session):
    """The context manager starts a session and stops it on exit."""
    interpreter = CodeInterpreter(boto_session=boto_session)

    async with code_interpreter_tools_for_session(interpreter, session_name="agent") as (active, tools):
        assert active is interpreter
        assert active.session.session_name == "agent"
        assert len(tools) == 6

    assert interpreter.session is None
    interpreter._client.stop_code_interpreter_session.assert_called_once()
