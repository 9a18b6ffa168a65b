"""Request-body checks shared by the list/entry routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

JSON_MEDIA_TYPE = "application/json"


class UnsupportedMediaTypeError(Exception):
    """Raised when a body-carrying request is not declared as JSON."""


def require_json(request: Request) -> None:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";", 1)[0].strip().lower() != JSON_MEDIA_TYPE:
        raise UnsupportedMediaTypeError(content_type)


_FIELD_ERRORS = {"missing", "string_too_short"}


def _field_name(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    return ".".join(loc)


def _is_field_error(error: dict) -> bool:
    return bool(_field_name(error)) and error.get("type") in _FIELD_ERRORS


def validation_error_response(exc: RequestValidationError) -> JSONResponse:
    """Missing or empty fields are listed by name; every other failure is a bad body."""
    errors = exc.errors()
    if not errors or not all(_is_field_error(err) for err in errors):
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
    return JSONResponse(status_code=400, content={"errors": [f"{_field_name(err)} required" for err in errors]})


def unsupported_media_type_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Unsupported media type"})
