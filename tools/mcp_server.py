# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (stdio transport)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the search_courses MCP tool.  The tool is a thin wrapper around
#   core.search.search_courses: it turns the raw arguments into
#   SearchCriteria, runs the search against the injected catalog, and
#   serializes the result as indented JSON text.
#
# HOW IT WORKS (the flow):
#   1. A client calls "search_courses" over MCP with optional filters
#   2. FastMCP validates the arguments against the tool signature
#   3. The tool builds SearchCriteria and calls the core query engine
#   4. Matching courses come back as one JSON text payload
#   5. Any unexpected failure comes back as an error result (isError=True)
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server            (stdio; what MCP clients spawn)
#   python -m tools.sse_server            (HTTP/SSE; see tools/sse_server.py)
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

# The tools layer depends on core/ and nothing else.
from core.catalog import CourseCatalog, build_catalog
from core.config import get_settings
from core.models import Course, SearchCriteria
# Aliased so the MCP tool below can be named search_courses.
from core.search import search_courses as run_search

SERVER_NAME = "course-catalog-server"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: under the stdio transport, STDOUT carries the MCP
# JSON-RPC stream and any stray output there corrupts it.
#
#   CYAN   - incoming tool calls with their parameters
#   YELLOW - intermediate status
#   GREEN  - response summaries
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

log = logging.getLogger(__name__)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its supplied parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items()) or "(no filters)"
    log.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    log.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, courses: list[Course]) -> None:
    ids = ",".join(c.id for c in courses)
    log.info(f"{_GREEN}  ← {tool_name} response: {len(courses)} course(s) [{ids}]{_RESET}")


def format_courses(courses: list[Course]) -> str:
    """Serialize courses as a JSON array indented by two spaces.

    Keys follow Course field order: id, title, description, instructor,
    duration, level, subject, provider, url.
    """
    return json.dumps([asdict(c) for c in courses], indent=2, ensure_ascii=False)


# =============================================================================
# Server factory
# =============================================================================
# The catalog is passed in rather than read from a module global, so tests
# (and the SSE server) can build as many independent servers as they like.
# =============================================================================
def create_mcp_server(catalog: Optional[CourseCatalog] = None) -> FastMCP:
    """Create a FastMCP server exposing search_courses over ``catalog``.

    Args:
        catalog: The courses to search.  Defaults to the configured catalog
            (COURSE_CATALOG_PATH, or the built-in sample).

    Returns:
        A FastMCP server ready for ``run()`` or ``http_app()``.
    """
    if catalog is None:
        catalog = build_catalog(get_settings())

    mcp = FastMCP(SERVER_NAME)

    # =========================================================================
    # TOOL: search_courses
    # =========================================================================
    # Every parameter is optional.  Leaving all of them out returns the
    # whole catalog.  Empty strings and 0 are treated as "not supplied".
    # =========================================================================
    @mcp.tool()
    def search_courses(
        query: Annotated[Optional[str], Field(
            description="Search keywords (e.g., 'machine learning', 'python programming')",
        )] = None,
        subject: Annotated[Optional[str], Field(
            description="Subject area (e.g., 'Computer Science', 'Mathematics')",
        )] = None,
        level: Annotated[Optional[str], Field(
            description="Difficulty level ('beginner', 'intermediate', 'advanced')",
        )] = None,
        duration: Annotated[Optional[float], Field(
            description="Maximum course duration in weeks",
        )] = None,
        provider: Annotated[Optional[str], Field(
            description="Platform provider (e.g., 'Coursera', 'edX')",
        )] = None,
    ) -> str:
        """Search the course catalog by keywords and filters.

        query matches course titles, descriptions and instructor names
        (case-insensitive substring).  subject, level and provider must
        match exactly, ignoring case.  duration keeps courses no longer
        than the given number of weeks.  All supplied filters must match.

        Returns:
            A JSON array of courses with fields id, title, description,
            instructor, duration, level, subject, provider and url.
        """
        criteria = SearchCriteria.from_arguments(
            query=query, subject=subject, level=level,
            duration=duration, provider=provider,
        )
        _log_request("search_courses", **criteria.active_filters())

        try:
            courses = run_search(criteria, catalog)
            payload = format_courses(courses)
        except Exception as e:
            log.exception("search_courses failed")
            raise ToolError(f"Error searching courses: {e}") from e

        _log_response("search_courses", courses)
        return payload

    _log_status(f"Serving {len(catalog)} courses")
    return mcp


def main() -> None:
    """Run the server over stdio."""
    mcp = create_mcp_server()
    # Written directly so LOG_LEVEL cannot hide it.
    print("Course Catalog MCP server running on stdio", file=sys.stderr, flush=True)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
