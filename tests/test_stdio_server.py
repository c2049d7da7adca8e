import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _send(proc, message):
    proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.flush()


def _read_response(proc, request_id):
    """Read stdout lines until the JSON-RPC response with ``request_id``."""
    while True:
        line = proc.stdout.readline()
        if not line:
            raise AssertionError("server closed stdout before responding")
        message = json.loads(line)
        if message.get("id") == request_id:
            return message


@pytest.fixture
def stdio_server():
    """``python -m tools.mcp_server`` as a subprocess, with LOG_LEVEL=WARNING."""
    env = {**os.environ, "LOG_LEVEL": "WARNING", "PYTHONUNBUFFERED": "1"}
    env.pop("COURSE_CATALOG_PATH", None)
    proc = subprocess.Popen(
        [sys.executable, "-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    yield proc
    if proc.poll() is None:
        proc.kill()
        proc.wait(timeout=10)


class TestStdioServer:
    """The stdio entry point speaks MCP on stdin/stdout."""

    def test_handshake_list_and_call(self, stdio_server):
        """Initialize, list tools, call search_courses, then exit on EOF."""
        _send(stdio_server, {
            "jsonrpc": "2.0", "id": 1, "method": "initialize",
            "params": {
                "protocolVersion": "2024-11-05",
                "capabilities": {},
                "clientInfo": {"name": "test-client", "version": "1.0.0"},
            },
        })
        init = _read_response(stdio_server, 1)
        assert init["result"]["serverInfo"]["name"] == "course-catalog-server"

        _send(stdio_server, {"jsonrpc": "2.0", "method": "notifications/initialized"})
        _send(stdio_server, {"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}})
        tools = _read_response(stdio_server, 2)["result"]["tools"]
        assert [t["name"] for t in tools] == ["search_courses"]

        _send(stdio_server, {
            "jsonrpc": "2.0", "id": 3, "method": "tools/call",
            "params": {"name": "search_courses", "arguments": {"query": "machine learning"}},
        })
        result = _read_response(stdio_server, 3)["result"]
        assert not result.get("isError")
        assert [c["id"] for c in json.loads(result["content"][0]["text"])] == ["1"]

        stdio_server.stdin.close()
        stdio_server.wait(timeout=30)
        stderr = stdio_server.stderr.read()

        # Printed even though LOG_LEVEL hides INFO logs.
        assert "Course Catalog MCP server running on stdio" in stderr
        assert "search_courses called with" not in stderr
