"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }

    404s raised through HTTPException are wrapped by FastAPI as
    { "detail": { "error": ... } }; unhandled errors return it unwrapped.
    """

    error: ErrorDetail


def error_body(code: str, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build an ErrorResponse body ready for HTTPException / JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump()
