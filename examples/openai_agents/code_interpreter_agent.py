"""OpenAI Agents SDK + AgentCore Code Interpreter — minimal example.

Requires: pip install agentcore-tools[agents]

Uses the standard AWS credential chain. Set AWS_REGION to pick the region
(default: us-west-2).
"""

import asyncio

from agents import Agent, Runner
from agentcore_tools import CodeInterpreter, create_code_interpreter_tools


async def main() -> None:
    interpreter = CodeInterpreter()

    try:
        agent = Agent(
            name="coding-assistant",
            instructions=(
                "You have a code sandbox. Use execute_code to run Python and "
                "write_files/read_files/list_files to manage files."
            ),
            tools=create_code_interpreter_tools(interpreter),
        )

        result = await Runner.run(
            agent,
            "Write a Python script that prints the first 5 Fibonacci numbers, then run it.",
        )

        print(result.final_output)
    finally:
        await interpreter.stop_session()


if __name__ == "__main__":
    asyncio.run(main())
