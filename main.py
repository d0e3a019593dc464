"""
Main API module for the Short URL service.

Responsibilities:
    - Expose REST endpoints for shortening a URL and redirecting by id
    - Serve a static greeting on "/" as a liveness check
    - Apply a permissive CORS policy (all origins, GET and POST)
    - Boot uvicorn on the configured port

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - One in-memory MemoryStore per app, shared by all handler threads.
    - Manager owns the validation gate; routes only translate to HTTP.
    - Store-touching routes are sync `def` handlers, so FastAPI runs them in
      its thread pool. Request bodies are read in an async dependency first,
      which keeps the store lock away from any await.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
import re
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI, Path, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from shorturl.config import Settings, settings as default_settings
from shorturl.manager.shortener import InvalidURLError, ShortUrlManager
from shorturl.storage.base import BaseStore
from shorturl.storage.storage import MemoryStore

GREETING = "Hello, World!"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

log = logging.getLogger("shorturl")


def redirect_to(url: str) -> Response:
    """
    302 response whose Location is the stored URL byte for byte (UTF-8).

    Only control characters are percent-encoded, so CR/LF in a stored URL
    cannot split the header.
    """
    safe = _CONTROL_CHARS.sub(lambda m: "%%%02X" % ord(m.group()), url)
    response = Response(status_code=302)
    response.raw_headers.append((b"location", safe.encode("utf-8")))
    return response


class URLRequest(BaseModel):
    """Request payload for shortening a URL (form field or JSON key `url`)."""
    url: str


async def read_submission(request: Request) -> URLRequest:
    """
    Parse the shorten request body into a URLRequest.

    Accepts application/x-www-form-urlencoded, multipart/form-data or JSON.
    Anything without a string `url` field is rejected with 422 before the
    handler (and the store lock) is reached.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            payload: Any = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body"}]
            )
    else:
        form = await request.form()
        payload = dict(form)

    try:
        return URLRequest.model_validate(payload)
    except ValidationError as exc:
        # Drop raw inputs: form uploads are not JSON-serializable.
        errors = [
            {k: v for k, v in err.items() if k != "input"}
            for err in exc.errors(include_url=False, include_context=False)
        ]
        raise RequestValidationError(errors)


def create_app(settings: Optional[Settings] = None, store: Optional[BaseStore] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        settings (Settings, optional): Explicit settings; defaults to the
            environment-derived module settings.
        store (BaseStore, optional): Shared store handle; a fresh MemoryStore
            is created when omitted.

    Returns:
        FastAPI: A configured application with its own store and manager.
    """
    cfg = settings or default_settings
    app = FastAPI(
        title="Short URL",
        description="Sequential-id URL shortener with an in-memory store",
        docs_url="/docs",
    )

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=cfg.LOG_LEVEL)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests)
    # ----------------------------------------------------------------
    if store is None:
        store = MemoryStore()
    manager = ShortUrlManager(store=store, validate_urls=cfg.VALIDATE_URLS)
    app.state.store = store
    app.state.manager = manager
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
    )

    log.info(
        "Short URL app ready (validate_urls=%s, link_style=%s)",
        cfg.VALIDATE_URLS,
        cfg.LINK_STYLE,
    )

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return GREETING

    @app.post("/api/shorturl")
    def shorten_url(
        request: Request,
        submission: URLRequest = Depends(read_submission),
    ) -> Dict[str, Any]:
        """
        Shorten a URL.

        Returns:
            dict: {"original_url", "short_url"} on success, or
                  {"error": "invalid url"} when the submission is rejected.
                  Both are sent with status 200.
        """
        try:
            entry = manager.shorten(submission.url)
        except InvalidURLError as err:
            log.info("Rejected submission url=%r", err.url)
            return {"error": str(err)}

        short_url: Any = entry.id
        if cfg.LINK_STYLE == "url":
            short_url = str(request.url_for("redirect_short_url", entry_id=entry.id))
        return {"original_url": entry.original_url, "short_url": short_url}

    @app.get("/api/shorturl/{entry_id}")
    def redirect_short_url(entry_id: int = Path(..., ge=0)) -> Response:
        """
        Redirect to the original URL for `entry_id`.

        Returns:
            302 with Location set to the stored URL, or an empty 404.
        """
        url = manager.resolve(entry_id)
        if url is None:
            return Response(status_code=404)
        return redirect_to(url)

    return app


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    cfg = Settings.from_env()
    logging.basicConfig(level=cfg.LOG_LEVEL)
    log.info("listening on %s:%d", cfg.HOST, cfg.PORT)
    # Single process: ids come from an in-memory counter.
    uvicorn.run(create_app(settings=cfg), host=cfg.HOST, port=cfg.PORT)


# `uvicorn main:app` and `from main import app` keep working.
app = create_app()


if __name__ == "__main__":
    run()
