from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from library_api.database import SessionLocal
from library_api.pagination import DEFAULT_PAGE_SIZE, AuthorsResourceParameters
from library_api.repositories.library_repository import LibraryRepository
from library_api.services.author_collection_service import AuthorCollectionService
from library_api.services.author_service import AuthorService
from library_api.services.book_service import BookService


def get_db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_library_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> LibraryRepository:
    return LibraryRepository(session=session)


def get_author_service(
    repo: Annotated[LibraryRepository, Depends(get_library_repository)],
) -> AuthorService:
    return AuthorService(repo=repo)


def get_author_collection_service(
    repo: Annotated[LibraryRepository, Depends(get_library_repository)],
) -> AuthorCollectionService:
    return AuthorCollectionService(repo=repo)


def get_book_service(
    repo: Annotated[LibraryRepository, Depends(get_library_repository)],
) -> BookService:
    return BookService(repo=repo)


def get_authors_resource_parameters(
    page_number: int = Query(1, alias="pageNumber", ge=1, description="Page number"),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE,
        alias="pageSize",
        ge=1,
        description="Items per page; values above 20 are reduced to 20",
    ),
    search_query: str | None = Query(
        None, alias="searchQuery", description="Case-insensitive match on name or genre"
    ),
    genre: str | None = Query(None, description="Filter by genre, ignoring case"),
) -> AuthorsResourceParameters:
    return AuthorsResourceParameters(
        page_number=page_number, page_size=page_size, search_query=search_query, genre=genre
    )
