# =============================================================================
# core/config.py  -  Runtime Settings
# =============================================================================
#
# Settings come from environment variables, with a .env file in the working
# directory loaded first (python-dotenv; real env vars win over .env).
#
#   SERVER_NAME          name reported by GET /health   (course-catalog-mcp)
#   HOST                 SSE server bind address         (0.0.0.0)
#   PORT                 SSE server port                 (3001)
#   COURSE_CATALOG_PATH  JSON catalog file               (built-in sample)
#   LOG_LEVEL            logging level name              (INFO)
# =============================================================================

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class Settings:
    server_name: str = "course-catalog-mcp"
    host: str = "0.0.0.0"
    port: int = 3001
    catalog_path: Optional[str] = None
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment.  A non-numeric PORT raises ValueError."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        server_name=os.getenv("SERVER_NAME", "course-catalog-mcp"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3001")),
        catalog_path=os.getenv("COURSE_CATALOG_PATH") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
