from typing import Optional

from fastapi.responses import JSONResponse

from sitecontent.models.response import ErrorResponse

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Content not found for the tenant."},
    500: {"model": ErrorResponse, "description": "Storage or unexpected failure."},
}


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    """Return the ``{"error", "details"?}`` body used by every failing route."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
