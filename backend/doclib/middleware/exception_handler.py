"""Exception handlers for structured error responses.

Every error leaves the API as ``{"error", "message", "details"}``.  Request
body validation failures are reported as 400 VALIDATION_ERROR rather than
FastAPI's default 422, matching what the web client expects.
"""

import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from ..exceptions import LibraryException, ValidationError

logger = logging.getLogger(__name__)


async def library_exception_handler(request: Request, exc: LibraryException) -> JSONResponse:
    """
    Handle custom exceptions and return structured JSON responses.

    Args:
        request: FastAPI request object
        exc: LibraryException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"LibraryException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Translate pydantic request validation errors into a 400 ValidationError."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    error = ValidationError("Invalid request data", errors=jsonable_encoder(errors))
    return await library_exception_handler(request, error)
