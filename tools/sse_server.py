# =============================================================================
# tools/sse_server.py  -  HTTP/SSE Transport
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Serves the same FastMCP server as tools/mcp_server.py over HTTP using
#   server-sent events, so remote clients can connect by URL instead of
#   spawning a subprocess.
#
# ROUTES:
#   GET  /sse        MCP event stream (FastMCP)
#   POST /messages/  MCP client-to-server messages (FastMCP)
#   GET  /health     {"status": "ok", "server": "course-catalog-mcp"}
#   OPTIONS *        always 200
#   anything else    404 "Not found"
#
# Every response carries the Access-Control-Allow-* headers in CORS_HEADERS.
#
# RUNNING:
#   python -m tools.sse_server        (PORT env var, default 3001)
# =============================================================================

import logging
from typing import Optional

import uvicorn
from starlette.datastructures import MutableHeaders
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.catalog import CourseCatalog
from core.config import Settings, get_settings
from tools.mcp_server import create_mcp_server

log = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class AllowAllCORSMiddleware:
    """Put CORS_HEADERS on every HTTP response and answer every OPTIONS with 200.

    Headers are added to the response start message, so streamed
    responses (the SSE channel) get them too.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            response = Response(status_code=200, headers=CORS_HEADERS)
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                MutableHeaders(scope=message).update(CORS_HEADERS)
            await send(message)

        await self.app(scope, receive, send_with_cors)


async def _not_found(request: Request, exc: Exception) -> Response:
    return PlainTextResponse("Not found", status_code=404)


def create_sse_app(
    catalog: Optional[CourseCatalog] = None,
    settings: Optional[Settings] = None,
):
    """Build the ASGI app serving search_courses over SSE.

    Args:
        catalog: Courses to search; defaults to the configured catalog.
        settings: Defaults to ``get_settings()``.

    Returns:
        A Starlette application (run it with uvicorn).
    """
    settings = settings or get_settings()
    mcp = create_mcp_server(catalog)

    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "server": settings.server_name})

    app = mcp.http_app(
        transport="sse",
        middleware=[Middleware(AllowAllCORSMiddleware)],
    )
    # Unknown paths and wrong methods both answer 404.
    app.add_exception_handler(404, _not_found)
    app.add_exception_handler(405, _not_found)
    return app


def main() -> None:
    settings = get_settings()
    app = create_sse_app(settings=settings)

    log.info("Course Catalog MCP SSE server running on port %d", settings.port)
    log.info("SSE endpoint: http://localhost:%d/sse", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
