"""Middleware chain for the FastAPI application.

Request order, outermost first:

    ErrorHandlingMiddleware -> authentication -> request logging
        -> [HTTPS redirect] -> router

Authentication and logging are plain ``(request, call_next) -> response``
functions listed in ``MIDDLEWARE_CHAIN``. Error handling is a raw ASGI
middleware because ``BaseHTTPMiddleware`` re-raises inner exceptions after
its dispatch function has already returned a response.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from user_api.config import Settings

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]

PROTECTED_PREFIX = "/users"
INTERNAL_ERROR_BODY = {"error": "Internal server error."}
REDACTED = "[Redacted]"
REDACTED_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})


class ErrorHandlingMiddleware:
    """Convert any unhandled failure from inner stages into a generic 500.

    The failure is logged with its traceback; the caller only ever sees
    ``INTERNAL_ERROR_BODY``. If the response has already started there is
    nothing left to replace, so the exception is re-raised for the server.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.error("Unhandled exception for %s %s", scope["method"], scope["path"], exc_info=True)
            if response_started:
                raise
            response = JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR_BODY)
            await response(scope, receive, send)


def _is_loggable_content(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.startswith("text/") or media_type == "application/json" or media_type.endswith("+json")


def _format_headers(headers: Headers) -> str:
    return ", ".join(
        f"{name}: {REDACTED if name.lower() in REDACTED_HEADERS else value}" for name, value in headers.items()
    )


class BodyPreview:
    """First ``limit`` bytes of a body plus its total size.

    Only the head is retained, however many bytes are fed.
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.head = bytearray()
        self.total = 0

    def feed(self, chunk: bytes) -> None:
        room = self.limit - len(self.head)
        if room > 0:
            self.head += chunk[:room]
        self.total += len(chunk)

    def __str__(self) -> str:
        text = self.head.decode("utf-8", errors="replace")
        if self.total > len(self.head):
            text += f"... [{self.total - len(self.head)} more bytes]"
        return text


async def _logged_body(body_iterator: AsyncIterator[bytes], limit: int) -> AsyncIterator[bytes]:
    preview = BodyPreview(limit)
    try:
        async for chunk in body_iterator:
            preview.feed(chunk)
            yield chunk
    finally:
        if preview.total:
            logger.info("Response body: %s", preview)


async def authentication_middleware(request: Request, call_next: CallNext) -> Response:
    """Require the shared-secret Authorization header on /users paths."""
    if request.url.path.startswith(PROTECTED_PREFIX):
        settings: Settings = request.app.state.settings
        if request.headers.get("Authorization") != settings.auth_token:
            logger.warning("Rejected unauthenticated request: %s %s", request.method, request.url.path)
            return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)
    return await call_next(request)


async def request_logging_middleware(request: Request, call_next: CallNext) -> Response:
    """Log the request line, headers, status, and size-capped text/JSON bodies.

    The request body is read through Starlette's cached request so the
    handler can read it again. The response body streams through untouched;
    only its first ``body_log_limit`` bytes are kept for the log line, which
    is written once the stream ends.
    """
    limit = request.app.state.settings.body_log_limit

    logger.info("Request: %s %s", request.method, request.url.path)
    logger.info("Request headers: %s", _format_headers(request.headers))
    if _is_loggable_content(request.headers.get("content-type")):
        body = await request.body()
        if body:
            preview = BodyPreview(limit)
            preview.feed(body)
            logger.info("Request body: %s", preview)

    response = await call_next(request)

    logger.info("Response: %s", response.status_code)
    logger.info("Response headers: %s", _format_headers(response.headers))
    if _is_loggable_content(response.headers.get("content-type")):
        response.body_iterator = _logged_body(response.body_iterator, limit)
    return response


# Outermost first; all of them run inside ErrorHandlingMiddleware.
MIDDLEWARE_CHAIN: list[Middleware] = [
    authentication_middleware,
    request_logging_middleware,
]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Starlette wraps the most recently added middleware around the rest,
    # so register innermost first.
    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)
    for middleware in reversed(MIDDLEWARE_CHAIN):
        app.add_middleware(BaseHTTPMiddleware, dispatch=middleware)
    app.add_middleware(ErrorHandlingMiddleware)

    logger.info(
        "Middleware chain: %s (https_redirect=%s)",
        ["error_handling", *(middleware.__name__ for middleware in MIDDLEWARE_CHAIN)],
        settings.https_redirect,
    )
