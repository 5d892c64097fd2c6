import logging
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ImageServerError(Exception):
    """Base error for the image server. Carries the HTTP status it maps to."""
    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(ImageServerError):
    """Missing or malformed input: empty payload, unknown MIME type, bad dimensions."""
    status_code = 400


class ImageTooLargeError(InvalidInputError):
    status_code = 413


class ImageTransformError(ImageServerError):
    """Image bytes could not be decoded or re-encoded while scaling."""
    status_code = 422


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def image_server_exception_handler(request: Request, exc: ImageServerError) -> JSONResponse:
    """Render domain errors with the same envelope as HTTP errors"""
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )
