import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from library_api.domain import AuthorId, BookId
from library_api.errors import PersistenceError
from library_api.mapping import apply_book_update, book_from_creation, book_to_read, book_to_update
from library_api.models import Book
from library_api.patching import PatchOperation, apply_patch
from library_api.repositories.library_repository import LibraryRepository
from library_api.schemas.book import BookForCreation, BookForUpdate, BookRead
from library_api.schemas.validation import ValidationFinding
from library_api.validation import check_title_differs_from_description, validate_document

logger = logging.getLogger(__name__)

EMPTY_BOOK_FOR_UPDATE = dict.fromkeys(BookForUpdate.model_fields)


class WriteStatus(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    INVALID = "invalid"
    AUTHOR_NOT_FOUND = "author_not_found"


@dataclass
class BookWriteResult:
    status: WriteStatus
    book: BookRead | None = None
    findings: list[ValidationFinding] = field(default_factory=list)


class BookService:
    def __init__(self, repo: LibraryRepository) -> None:
        self.repo = repo

    def get_books_for_author(self, author_id: AuthorId) -> list[BookRead] | None:
        if not self.repo.author_exists(author_id):
            return None
        return [book_to_read(book) for book in self.repo.get_books_for_author(author_id)]

    def get_book_for_author(self, author_id: AuthorId, book_id: BookId) -> BookRead | None:
        if not self.repo.author_exists(author_id):
            return None
        book = self.repo.get_book_for_author(author_id, book_id)
        if book is None:
            return None
        return book_to_read(book)

    def create_book_for_author(
        self, author_id: AuthorId, payload: BookForCreation
    ) -> BookWriteResult:
        findings = check_title_differs_from_description(payload)
        if findings:
            return BookWriteResult(status=WriteStatus.INVALID, findings=findings)

        if not self.repo.author_exists(author_id):
            return BookWriteResult(status=WriteStatus.AUTHOR_NOT_FOUND)

        book = book_from_creation(payload)
        self.repo.add_book_for_author(author_id, book)
        if not self.repo.save():
            raise PersistenceError(f"Creating a book for author {author_id} failed on save.")

        logger.info("Book %s created for author %s", book.id, author_id)
        return BookWriteResult(status=WriteStatus.CREATED, book=book_to_read(book))

    def update_book_for_author(
        self, author_id: AuthorId, book_id: BookId, payload: BookForUpdate
    ) -> BookWriteResult:
        """Full replacement of a book, creating it under ``book_id`` when missing."""
        findings = check_title_differs_from_description(payload)
        if findings:
            return BookWriteResult(status=WriteStatus.INVALID, findings=findings)

        if not self.repo.author_exists(author_id):
            return BookWriteResult(status=WriteStatus.AUTHOR_NOT_FOUND)

        book = self.repo.get_book_for_author(author_id, book_id)
        if book is None:
            return self._upsert(author_id, book_id, payload)

        apply_book_update(payload, book)
        return self._update(author_id, book, action="Updating")

    def patch_book_for_author(
        self, author_id: AuthorId, book_id: BookId, operations: Sequence[PatchOperation]
    ) -> BookWriteResult:
        """
        Applies patch operations to a book, creating it under ``book_id`` when missing.

        Operations run against a ``BookForUpdate`` projection: the stored book for an
        existing id, an empty document otherwise. The merged projection is validated
        before anything is written back to the entity.
        """
        if not self.repo.author_exists(author_id):
            return BookWriteResult(status=WriteStatus.AUTHOR_NOT_FOUND)

        book = self.repo.get_book_for_author(author_id, book_id)
        document = EMPTY_BOOK_FOR_UPDATE if book is None else book_to_update(book).model_dump()

        patched, findings = apply_patch(document, operations)
        payload, validation_findings = validate_document(BookForUpdate, patched)
        findings += validation_findings
        if payload is None or findings:
            logger.info(
                "Rejected patch for book %s of author %s",
                book_id,
                author_id,
                extra={"finding_count": len(findings)},
            )
            return BookWriteResult(status=WriteStatus.INVALID, findings=findings)

        if book is None:
            return self._upsert(author_id, book_id, payload)

        apply_book_update(payload, book)
        return self._update(author_id, book, action="Patching")

    def delete_book_for_author(self, author_id: AuthorId, book_id: BookId) -> bool:
        if not self.repo.author_exists(author_id):
            return False
        book = self.repo.get_book_for_author(author_id, book_id)
        if book is None:
            return False

        self.repo.delete_book(book)
        if not self.repo.save():
            raise PersistenceError(
                f"Deleting book {book_id} for author {author_id} failed on save."
            )

        logger.info("Book %s for author %s was deleted.", book_id, author_id)
        return True

    def _upsert(
        self, author_id: AuthorId, book_id: BookId, payload: BookForUpdate
    ) -> BookWriteResult:
        book = book_from_creation(payload)
        book.id = book_id
        self.repo.add_book_for_author(author_id, book)
        if not self.repo.save():
            raise PersistenceError(
                f"Upserting book {book_id} for author {author_id} failed on save."
            )

        logger.info("Book %s upserted for author %s", book_id, author_id)
        return BookWriteResult(status=WriteStatus.CREATED, book=book_to_read(book))

    def _update(self, author_id: AuthorId, book: Book, action: str) -> BookWriteResult:
        self.repo.update_book_for_author(book)
        if not self.repo.save():
            raise PersistenceError(
                f"{action} book {book.id} for author {author_id} failed on save."
            )

        logger.info("Book %s for author %s was updated", book.id, author_id)
        return BookWriteResult(status=WriteStatus.UPDATED, book=book_to_read(book))
