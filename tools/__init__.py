# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP boundary around core/.
#
#   mcp_server.py - FastMCP server factory, the search_courses tool, and
#                   the stdio entry point
#   sse_server.py - the same server over HTTP/SSE, plus /health and CORS
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain matching logic (that's core/search.py)
#   - They do NOT own course data (that's core/catalog.py)
#
# Both transports share one create_mcp_server(); only the wiring differs.
# =============================================================================
