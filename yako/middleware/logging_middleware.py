"""
Request / response logging middleware.

API calls are logged at INFO with the short session id the chat pipeline uses;
static assets, robots.txt and the sitemap only at DEBUG.
"""

import time

from fastapi import Request
from loguru import logger


async def logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    path = request.url.path
    level = "INFO" if path.startswith("/api/") else "DEBUG"
    session = request.headers.get(request.app.state.settings.SESSION_HEADER) or "-"
    logger.log(level, f"→ {request.method} {path} [{session[:8]}]")

    response = await call_next(request)

    elapsed = round((time.perf_counter() - start) * 1000, 2)
    logger.log(level, f"← {request.method} {path} [{response.status_code}] {elapsed}ms")

    return response
