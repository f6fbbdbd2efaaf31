import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from library_api.schemas.validation import ValidationFinding, ValidationProblem
from library_api.validation import findings_from_errors

logger = logging.getLogger(__name__)

UNEXPECTED_FAULT_DETAIL = "An unexpected fault happened. Try again later."


class LibraryError(Exception):
    """Base exception for library domain errors."""

    pass


class PersistenceError(LibraryError):
    """Raised when the repository fails to save a unit of work."""

    pass


def validation_problem_response(findings: list[ValidationFinding]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(ValidationProblem(detail=findings)),
    )


def _is_malformed_body(error: Mapping[str, Any]) -> bool:
    if error.get("type") == "json_invalid":
        return True
    # a document that is not the array the endpoint binds, e.g. a patch sent as an object
    return error.get("type") == "list_type" and tuple(error.get("loc", ())) == ("body",)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    if any(_is_malformed_body(error) for error in exc.errors()):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Request body is malformed"},
        )

    return validation_problem_response(findings_from_errors(exc.errors()))


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(
        "Persistence failure: %s",
        exc,
        extra={"method": request.method, "path": str(request.url.path)},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": UNEXPECTED_FAULT_DETAIL},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
