# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the course catalog server:
# the course models, the catalog store, the query engine and settings.
#
# Nothing in this package imports FastMCP, Starlette or uvicorn.  Every
# module here can be imported and tested without starting a server.
# =============================================================================
