import logging
from collections.abc import Sequence

from library_api.domain import AuthorId
from library_api.errors import PersistenceError
from library_api.mapping import author_from_creation, author_to_read
from library_api.repositories.library_repository import LibraryRepository
from library_api.schemas.author import AuthorForCreation, AuthorRead

logger = logging.getLogger(__name__)


def join_ids(author_ids: Sequence[AuthorId]) -> str:
    return ",".join(str(author_id) for author_id in author_ids)


class AuthorCollectionService:
    def __init__(self, repo: LibraryRepository) -> None:
        self.repo = repo

    def create_author_collection(
        self, payloads: Sequence[AuthorForCreation]
    ) -> tuple[list[AuthorRead], str]:
        """
        Creates all authors in a single unit of work.

        Returns the created authors and their comma-joined ids, which address
        the same set through the collection lookup.
        """
        authors = [author_from_creation(payload) for payload in payloads]
        for author in authors:
            self.repo.add_author(author)

        if not self.repo.save():
            raise PersistenceError("Creating author collection failed on save.")

        created = [author_to_read(author) for author in authors]
        ids = join_ids([author.id for author in created])
        logger.info("Author collection created", extra={"author_count": len(created)})
        return created, ids

    def get_author_collection(self, author_ids: Sequence[AuthorId]) -> list[AuthorRead] | None:
        """Returns the requested authors in request order, or None unless all exist."""
        authors = self.repo.get_authors_by_ids(author_ids)
        if len(authors) != len(author_ids):
            return None

        by_id = {author.id: author for author in authors}
        return [author_to_read(by_id[author_id]) for author_id in author_ids]
