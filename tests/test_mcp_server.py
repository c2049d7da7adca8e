import asyncio
import json

import pytest
from fastmcp import Client

from core.catalog import CourseCatalog, default_catalog
from core.models import Course
from tools.mcp_server import create_mcp_server, format_courses

FIELD_ORDER = [
    "id", "title", "description", "instructor", "duration",
    "level", "subject", "provider", "url",
]


@pytest.fixture
def server():
    """A FastMCP server over the built-in catalog."""
    return create_mcp_server(default_catalog())


def call_search(server, arguments=None):
    """Call search_courses in-process and return the raw CallToolResult."""
    async def _call():
        async with Client(server) as client:
            return await client.call_tool_mcp("search_courses", arguments or {})
    return asyncio.run(_call())


def list_tools(server):
    async def _list():
        async with Client(server) as client:
            return await client.list_tools()
    return asyncio.run(_list())


def payload(result):
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return result.content[0].text


class TestToolDiscovery:
    """What clients see from tools/list."""

    def test_single_search_tool(self, server):
        tools = list_tools(server)
        assert [t.name for t in tools] == ["search_courses"]

    def test_all_parameters_optional(self, server):
        schema = list_tools(server)[0].inputSchema
        assert set(schema["properties"]) == {"query", "subject", "level", "duration", "provider"}
        assert not schema.get("required")

    def test_parameters_described(self, server):
        properties = list_tools(server)[0].inputSchema["properties"]
        assert "weeks" in properties["duration"]["description"]
        assert "Coursera" in properties["provider"]["description"]


class TestSearchTool:
    """Calling search_courses end to end."""

    def test_no_arguments_returns_everything(self, server):
        result = call_search(server)
        assert not result.isError
        assert [c["id"] for c in json.loads(payload(result))] == ["1", "2", "3", "4", "5"]

    def test_query(self, server):
        result = call_search(server, {"query": "machine learning"})
        courses = json.loads(payload(result))
        assert [c["id"] for c in courses] == ["1"]
        assert courses[0]["title"] == "Introduction to Machine Learning"

    def test_subject_and_level(self, server):
        result = call_search(server, {"subject": "Computer Science", "level": "intermediate"})
        assert [c["id"] for c in json.loads(payload(result))] == ["3", "5"]

    def test_duration(self, server):
        result = call_search(server, {"duration": 8})
        assert [c["id"] for c in json.loads(payload(result))] == ["1", "5"]

    def test_unknown_provider_is_empty_success(self, server):
        result = call_search(server, {"provider": "nonexistent"})
        assert not result.isError
        assert json.loads(payload(result)) == []

    def test_falsy_arguments_ignored(self, server):
        result = call_search(server, {"query": "", "duration": 0})
        assert len(json.loads(payload(result))) == 5

    def test_payload_is_indented_json_in_field_order(self, server):
        text = payload(call_search(server, {"query": "calculus"}))
        assert text.startswith('[\n  {\n    "id": "4",')
        assert list(json.loads(text)[0]) == FIELD_ORDER

    def test_catalog_is_injected(self):
        """Each server searches the catalog it was built with."""
        custom = CourseCatalog([
            Course("z9", "Pottery", "Wheel throwing.", "M. Clay", 3,
                   "beginner", "Art", "Local", "https://example.org/pottery"),
        ])
        result = call_search(create_mcp_server(custom))
        assert [c["id"] for c in json.loads(payload(result))] == ["z9"]


class TestSearchToolErrors:
    """Failures surface as error results, not protocol faults."""

    def test_exception_becomes_error_result(self, server, monkeypatch):
        def boom(criteria, catalog):
            raise RuntimeError("index exploded")

        monkeypatch.setattr("tools.mcp_server.run_search", boom)
        result = call_search(server, {"query": "python"})

        assert result.isError
        assert "Error searching courses: index exploded" in payload(result)

    def test_server_still_works_after_error(self, server, monkeypatch):
        monkeypatch.setattr("tools.mcp_server.run_search", lambda c, cat: 1 / 0)
        assert call_search(server).isError

        monkeypatch.undo()
        assert not call_search(server).isError


class TestFormatCourses:

    def test_empty(self):
        assert format_courses([]) == "[]"

    def test_non_ascii_kept(self):
        course = Course("u", "Café Français", "d", "Zoë", 2, "beginner", "Languages", "P", "u")
        assert "Café Français" in format_courses([course])
