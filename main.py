# =============================================================================
# main.py  -  Interactive client for the Course Catalog MCP server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Spawns the stdio server (python -m tools.mcp_server) as a subprocess
#   2. Performs the MCP handshake and lists the server's tools
#   3. Runs a sample search for "machine learning"
#   4. Loops: each line you type is sent as the search_courses query
#
# Server logs appear on this terminal's stderr; results are printed here.
# =============================================================================

import asyncio
import json
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

SAMPLE_QUERY = "machine learning"


def _print_result(result) -> None:
    """Print the text payload of a CallToolResult."""
    text = "\n".join(item.text for item in result.content if getattr(item, "text", None))
    if result.isError:
        print(f"\n⚠️  {text}")
        return

    courses = json.loads(text)
    if not courses:
        print("\n  No matching courses.")
        return
    for course in courses:
        print(
            f"\n  [{course['id']}] {course['title']}"
            f"\n      {course['instructor']} · {course['provider']} · "
            f"{course['level']} · {course['duration']} weeks"
            f"\n      {course['url']}"
        )


async def run_client():
    project_root = os.path.dirname(os.path.abspath(__file__))
    transport = StdioTransport(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env=dict(os.environ),
    )

    print("=" * 70)
    print("  COURSE CATALOG MCP CLIENT")
    print("=" * 70)

    async with Client(transport) as client:
        tools = await client.list_tools()
        print("\n🔧 Tools:")
        for tool in tools:
            params = ", ".join(tool.inputSchema.get("properties", {}))
            print(f"  - {tool.name}({params})")

        print(f"\n🔎 Sample search: query={SAMPLE_QUERY!r}")
        _print_result(await client.call_tool_mcp("search_courses", {"query": SAMPLE_QUERY}))

        print("\n💬 Type a search term (Enter for all courses, 'quit' to exit)")
        print("-" * 70)
        while True:
            try:
                user_input = input("\n🔎 Search: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\n👋 Goodbye!")
                break

            if user_input.lower() in ("quit", "exit", "q"):
                print("\n👋 Goodbye!")
                break

            arguments = {"query": user_input} if user_input else {}
            _print_result(await client.call_tool_mcp("search_courses", arguments))


if __name__ == "__main__":
    asyncio.run(run_client())
