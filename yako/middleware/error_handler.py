"""
Global exception handler middleware and the pipeline error handlers.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from yako.errors import InternalError, InvalidInput

GENERIC_ERROR = "Sorry, I encountered an error. Please try again."


async def global_exception_handler(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as exc:
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR, "details": str(exc) or type(exc).__name__},
        )


async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def internal_error_handler(request: Request, exc: InternalError):
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR, "details": str(exc)})
