from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from library_api.dependencies.library import (
    get_author_service,
    get_authors_resource_parameters,
)
from library_api.domain import AuthorId
from library_api.errors import validation_problem_response
from library_api.links import PAGINATION_HEADER, pagination_header
from library_api.pagination import AuthorsResourceParameters
from library_api.schemas.author import AuthorForCreation, AuthorRead
from library_api.schemas.validation import ValidationProblem
from library_api.services.author_service import AuthorService, validate_author_for_creation

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", name="get_authors", response_model=list[AuthorRead])
def get_authors(
    request: Request,
    response: Response,
    svc: Annotated[AuthorService, Depends(get_author_service)],
    parameters: Annotated[AuthorsResourceParameters, Depends(get_authors_resource_parameters)],
) -> list[AuthorRead]:
    """Retrieve a page of authors; paging metadata is returned in the X-Pagination header."""
    page = svc.get_authors(parameters)
    response.headers[PAGINATION_HEADER] = pagination_header(
        request.url_for("get_authors"), parameters, page
    )
    return list(page.items)


@router.get("/{author_id}", name="get_author", response_model=AuthorRead)
def get_author(
    author_id: AuthorId,
    svc: Annotated[AuthorService, Depends(get_author_service)],
) -> AuthorRead:
    author = svc.get_author(author_id)
    if author is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Author with id {author_id} not found",
        )
    return author


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthorRead,
    responses={
        400: {"description": "Missing request body"},
        422: {"model": ValidationProblem},
    },
)
def create_author(
    request: Request,
    svc: Annotated[AuthorService, Depends(get_author_service)],
    payload: Annotated[AuthorForCreation | None, Body()] = None,
) -> JSONResponse:
    """Create an author, together with any books given in the payload."""
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing author")

    findings = validate_author_for_creation(payload)
    if findings:
        return validation_problem_response(findings)

    author = svc.create_author(payload)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=author.model_dump(mode="json"),
        headers={"Location": str(request.url_for("get_author", author_id=str(author.id)))},
    )


@router.post(
    "/{author_id}",
    responses={
        404: {"description": "Author does not exist"},
        409: {"description": "Author already exists"},
    },
)
def block_author_creation(
    author_id: AuthorId,
    svc: Annotated[AuthorService, Depends(get_author_service)],
) -> None:
    """Creating an author under a client-chosen id is not supported."""
    if svc.author_exists(author_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Author with id {author_id} already exists",
        )
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Author with id {author_id} not found",
    )


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(
    author_id: AuthorId,
    svc: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Delete an author and all of their books."""
    if not svc.delete_author(author_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Author with id {author_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
