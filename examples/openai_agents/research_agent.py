"""Research agent with a browser and a code sandbox.

The agent browses with an AgentCore Browser session and analyses what it
finds in a Code Interpreter session. Both sessions are stopped on exit.

Requires: pip install agentcore-tools[agents,browser]

Usage:
  python examples/openai_agents/research_agent.py "What is on the front page of example.com?"
"""

import asyncio
import logging
import sys

from agents import Agent, Runner
from agentcore_tools import (
    PlaywrightBrowser,
    ViewportConfig,
    code_interpreter_tools_for_session,
    create_browser_tools,
)


async def run_research(question: str) -> str:
    """Answer a question using the browser and code interpreter tools."""
    browser = PlaywrightBrowser()
    await browser.start_session(session_name="research", viewport=ViewportConfig(width=1280, height=800))
    try:
        async with code_interpreter_tools_for_session(session_name="research") as (_, code_tools):
            agent = Agent(
                name="research-assistant",
                instructions=(
                    "Browse the web with the browser_* tools. Use execute_code "
                    "for any calculation or data processing. Cite the URLs you used."
                ),
                tools=create_browser_tools(browser) + code_tools,
            )
            result = await Runner.run(agent, question)
            return result.final_output or ""
    finally:
        await browser.stop_session()


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    question = " ".join(sys.argv[1:]) or "Summarize the front page of https://example.com"
    print(await run_research(question))


if __name__ == "__main__":
    asyncio.run(main())
