from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from library_api.dependencies.library import get_book_service
from library_api.domain import AuthorId, BookId
from library_api.errors import validation_problem_response
from library_api.patching import PatchOperation
from library_api.schemas.book import BookForCreation, BookForUpdate, BookRead
from library_api.schemas.validation import ValidationProblem
from library_api.services.book_service import BookService, BookWriteResult, WriteStatus

router = APIRouter(prefix="/authors/{author_id}/books", tags=["books"])

WRITE_RESPONSES: dict[int | str, dict] = {
    400: {"description": "Missing request body"},
    404: {"description": "Author not found"},
    422: {"model": ValidationProblem},
}


def _author_not_found(author_id: AuthorId) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Author with id {author_id} not found",
    )


def _book_not_found(author_id: AuthorId, book_id: BookId) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Book with id {book_id} not found for author {author_id}",
    )


def _missing_body(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Missing {what}")


def _write_response(request: Request, author_id: AuthorId, result: BookWriteResult) -> Response:
    if result.status is WriteStatus.INVALID:
        return validation_problem_response(result.findings)
    if result.status is WriteStatus.AUTHOR_NOT_FOUND:
        raise _author_not_found(author_id)
    if result.status is WriteStatus.CREATED and result.book is not None:
        location = request.url_for(
            "get_book_for_author", author_id=str(author_id), book_id=str(result.book.id)
        )
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=result.book.model_dump(mode="json"),
            headers={"Location": str(location)},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=list[BookRead])
def get_books_for_author(
    author_id: AuthorId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> list[BookRead]:
    books = svc.get_books_for_author(author_id)
    if books is None:
        raise _author_not_found(author_id)
    return books


@router.get("/{book_id}", name="get_book_for_author", response_model=BookRead)
def get_book_for_author(
    author_id: AuthorId,
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    book = svc.get_book_for_author(author_id, book_id)
    if book is None:
        raise _book_not_found(author_id, book_id)
    return book


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookRead,
    responses=WRITE_RESPONSES,
)
def create_book_for_author(
    request: Request,
    author_id: AuthorId,
    svc: Annotated[BookService, Depends(get_book_service)],
    payload: Annotated[BookForCreation | None, Body()] = None,
) -> Response:
    if payload is None:
        raise _missing_body("book")
    result = svc.create_book_for_author(author_id, payload)
    return _write_response(request, author_id, result)


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={201: {"model": BookRead, "description": "Book created"}, **WRITE_RESPONSES},
)
def update_book_for_author(
    request: Request,
    author_id: AuthorId,
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
    payload: Annotated[BookForUpdate | None, Body()] = None,
) -> Response:
    """Replace a book, or create it under the given id if it does not exist yet."""
    if payload is None:
        raise _missing_body("book")
    result = svc.update_book_for_author(author_id, book_id, payload)
    return _write_response(request, author_id, result)


@router.patch(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={201: {"model": BookRead, "description": "Book created"}, **WRITE_RESPONSES},
)
def partially_update_book_for_author(
    request: Request,
    author_id: AuthorId,
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
    operations: Annotated[list[PatchOperation] | None, Body()] = None,
) -> Response:
    """
    Apply a JSON Patch document to a book.

    Paths address the fields of the update representation (``/title``,
    ``/description``). A book that does not exist yet is created from an empty
    representation with the patch applied.
    """
    if operations is None:
        raise _missing_body("patch document")
    result = svc.patch_book_for_author(author_id, book_id, operations)
    return _write_response(request, author_id, result)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book_for_author(
    author_id: AuthorId,
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Response:
    if not svc.delete_book_for_author(author_id, book_id):
        raise _book_not_found(author_id, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
