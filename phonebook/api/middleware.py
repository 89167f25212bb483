"""Request Middleware — access log and cross-origin policy, applied to every request.

Invariants:
    - Access log never alters the response
    - Request body is logged as received (decoded as UTF-8, undecodable bytes replaced)
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger("phonebook.access")


def register_middleware(app: FastAPI, cors_origins: list[str]) -> None:
    """Install access logging and CORS. CORS is outermost so preflights are answered first."""

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next):
        body = (await request.body()).decode("utf-8", errors="replace")
        logger.info(
            f"{request.method} {request.url.path} body={body or '-'}",
            extra={"method": request.method, "path": request.url.path},
        )
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            # Unhandled errors are answered by the outermost server error handler
            status_code = response.status_code if response is not None else 500
            content_length = (
                response.headers.get("content-length", "-") if response is not None else "-"
            )
            duration_ms = round((time.perf_counter() - start) * 1000, 3)
            logger.info(
                f"{request.method} {request.url.path} {status_code} "
                f"{content_length} - {duration_ms} ms {body or '{}'}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "content_length": content_length,
                    "duration_ms": duration_ms,
                },
            )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
