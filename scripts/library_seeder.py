from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from pydantic import TypeAdapter
from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal
from library_api.mapping import author_from_creation
from library_api.models import Author, Book
from library_api.repositories.library_repository import LibraryRepository
from library_api.schemas.author import AuthorForCreation
from library_api.schemas.book import BookForCreation
from library_api.services.author_service import validate_author_for_creation

authors_adapter = TypeAdapter(list[AuthorForCreation])


@dataclass
class SeedStats:
    authors: int = 0
    books: int = 0
    skipped_authors: int = 0


DEFAULT_CATALOGUE = [
    AuthorForCreation(
        first_name="Stephen",
        last_name="King",
        date_of_birth=date(1947, 9, 21),
        genre="Horror",
        books=[
            BookForCreation(
                title="The Shining",
                description="The Shining is a horror novel by American author Stephen King.",
            ),
            BookForCreation(
                title="It",
                description="It is a 1986 horror novel by American author Stephen King.",
            ),
        ],
    ),
    AuthorForCreation(
        first_name="George",
        last_name="RR Martin",
        date_of_birth=date(1948, 9, 20),
        genre="Fantasy",
        books=[
            BookForCreation(
                title="A Game of Thrones",
                description="The first novel in A Song of Ice and Fire.",
            ),
            BookForCreation(
                title="The Winds of Winter",
                description="Forthcoming 6th novel in A Song of Ice and Fire.",
            ),
        ],
    ),
    AuthorForCreation(
        first_name="Neil",
        last_name="Gaiman",
        date_of_birth=date(1960, 11, 10),
        genre="Fantasy",
        books=[
            BookForCreation(
                title="American Gods",
                description="A Hugo and Nebula Award-winning novel by English author Neil Gaiman.",
            ),
        ],
    ),
    AuthorForCreation(
        first_name="Tom",
        last_name="Lanoye",
        date_of_birth=date(1958, 8, 27),
        genre="Various",
        books=[
            BookForCreation(
                title="Speechless",
                description="Good-natured and often humorous, a portrait of a mother's decline.",
            ),
        ],
    ),
    AuthorForCreation(
        first_name="Douglas",
        last_name="Adams",
        date_of_birth=date(1952, 3, 11),
        date_of_death=date(2001, 5, 11),
        genre="Science Fiction",
        books=[
            BookForCreation(
                title="The Hitchhiker's Guide to the Galaxy",
                description="A comedy science fiction series created by Douglas Adams.",
            ),
        ],
    ),
    AuthorForCreation(
        first_name="Jens",
        last_name="Lapidus",
        date_of_birth=date(1974, 5, 24),
        genre="Thriller",
        books=[
            BookForCreation(
                title="Easy Money",
                description="The first novel in the Stockholm Noir trilogy by Jens Lapidus.",
            ),
        ],
    ),
]


def load_catalogue(path: Path | str) -> list[AuthorForCreation]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return authors_adapter.validate_python(json.load(handle))


def seed_catalogue(
    session: Session, catalogue: list[AuthorForCreation], *, reset: bool = False
) -> SeedStats:
    repo = LibraryRepository(session=session)
    if reset:
        session.execute(delete(Book))
        session.execute(delete(Author))

    stats = SeedStats()
    for payload in catalogue:
        findings = validate_author_for_creation(payload)
        if findings:
            stats.skipped_authors += 1
            print(
                f"skipping {payload.first_name} {payload.last_name}: "
                + "; ".join(f"{f.field}: {f.message}" for f in findings)
            )
            continue
        author = author_from_creation(payload)
        repo.add_author(author)
        stats.authors += 1
        stats.books += len(author.books)

    if not repo.save():
        raise RuntimeError("Seeding the library failed on save.")
    return stats


def seed_library(data_file: Path | str | None = None, *, reset: bool = False) -> SeedStats:
    catalogue = load_catalogue(data_file) if data_file is not None else DEFAULT_CATALOGUE
    session = SessionLocal()
    try:
        return seed_catalogue(session, catalogue, reset=reset)
    finally:
        session.close()
