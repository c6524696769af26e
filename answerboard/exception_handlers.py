"""
Exception handlers for the answerboard API.

Register these on a FastAPI app instance via `register_exception_handlers(app)`.
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .core.env import is_local_env
from .errors import QAError, StorageError

logger = logging.getLogger("answerboard")


async def qa_error_handler(request: Request, exc: QAError):
    """Map domain errors to their status codes."""
    if isinstance(exc, StorageError):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal storage error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    # Details only leave the process in local/dev
    if is_local_env():
        error_response = {"detail": f"Internal server error: {exc}"}
    else:
        error_response = {"detail": "Internal server error"}
    return JSONResponse(status_code=500, content=error_response)


def register_exception_handlers(app):
    app.add_exception_handler(QAError, qa_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
