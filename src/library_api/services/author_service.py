import logging

from library_api.domain import AuthorId
from library_api.errors import PersistenceError
from library_api.mapping import author_from_creation, author_to_read
from library_api.pagination import AuthorsResourceParameters, PagedList
from library_api.repositories.library_repository import LibraryRepository
from library_api.schemas.author import AuthorForCreation, AuthorRead
from library_api.schemas.validation import ValidationFinding
from library_api.validation import check_title_differs_from_description

logger = logging.getLogger(__name__)


class AuthorService:
    def __init__(self, repo: LibraryRepository) -> None:
        self.repo = repo

    def get_authors(self, parameters: AuthorsResourceParameters) -> PagedList[AuthorRead]:
        return self.repo.get_authors(parameters).map(author_to_read)

    def get_author(self, author_id: AuthorId) -> AuthorRead | None:
        author = self.repo.get_author(author_id)
        if author is None:
            return None
        return author_to_read(author)

    def author_exists(self, author_id: AuthorId) -> bool:
        return self.repo.author_exists(author_id)

    def create_author(self, payload: AuthorForCreation) -> AuthorRead:
        author = author_from_creation(payload)
        self.repo.add_author(author)

        if not self.repo.save():
            raise PersistenceError("Creating an author failed on save.")

        logger.info("Author %s created with %d book(s)", author.id, len(author.books))
        return author_to_read(author)

    def delete_author(self, author_id: AuthorId) -> bool:
        author = self.repo.get_author(author_id)
        if author is None:
            return False

        self.repo.delete_author(author)
        if not self.repo.save():
            raise PersistenceError(f"Deleting author {author_id} failed on save.")

        logger.info("Author %s was deleted.", author_id)
        return True


def validate_author_for_creation(payload: AuthorForCreation) -> list[ValidationFinding]:
    """Apply the book title rule to every book nested in an author payload."""
    findings = []
    for index, book in enumerate(payload.books):
        for finding in check_title_differs_from_description(book):
            findings.append(
                finding.model_copy(update={"field": f"books.{index}.{finding.field}"})
            )
    return findings
