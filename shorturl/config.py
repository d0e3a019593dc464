"""
Runtime configuration for the Short URL service
===============================================

Simple settings module that reads from environment variables (only here),
and exposes a stable `settings` object for the rest of the codebase.
Avoid reading env vars anywhere else; import from this module instead.

Server
------
- PORT                   : listening port (default 8080)
- SHORTURL_HOST          : bind address (default "0.0.0.0", all interfaces)
- SHORTURL_LOG_LEVEL     : root log level name (default "INFO")

Shortening behaviour
--------------------
- SHORTURL_VALIDATE_URLS : "1" (default) rejects URLs not starting with "http";
                           "0" accepts any string
- SHORTURL_LINK_STYLE    : "id" (default) returns the bare integer id as
                           `short_url`; "url" returns the full redirect URL
                           (`http://<host>/api/shorturl/<id>`, not `http://<host>/<id>`,
                           since only the /api/shorturl/<id> route redirects)
"""

import logging
import os
from dataclasses import dataclass

log = logging.getLogger("shorturl.config")

DEFAULT_PORT = 8080
LINK_STYLES = ("id", "url")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_port(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        port = int(raw)
    except ValueError:
        log.warning("Ignoring unparsable %s=%r, using %d", name, raw, default)
        return default
    if not 0 < port < 65536:
        log.warning("Ignoring out-of-range %s=%r, using %d", name, raw, default)
        return default
    return port


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    PORT: int = DEFAULT_PORT
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"
    VALIDATE_URLS: bool = True
    LINK_STYLE: str = "id"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment (read at call time)."""
        style = os.getenv("SHORTURL_LINK_STYLE", "id").strip().lower()
        if style not in LINK_STYLES:
            log.warning("Unknown SHORTURL_LINK_STYLE=%r, using 'id'", style)
            style = "id"
        level = os.getenv("SHORTURL_LOG_LEVEL", "INFO").strip().upper()
        if level not in LOG_LEVELS:
            log.warning("Unknown SHORTURL_LOG_LEVEL=%r, using INFO", level)
            level = "INFO"
        return cls(
            PORT=_get_port("PORT", DEFAULT_PORT),
            HOST=os.getenv("SHORTURL_HOST", "0.0.0.0").strip() or "0.0.0.0",
            LOG_LEVEL=level,
            VALIDATE_URLS=_get_bool("SHORTURL_VALIDATE_URLS", True),
            LINK_STYLE=style,
        )


settings = Settings.from_env()
