import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import Select, exists, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.domain import AuthorId, BookId
from library_api.models import Author, Book
from library_api.pagination import AuthorsResourceParameters, PagedList

logger = logging.getLogger(__name__)


class LibraryRepository:
    """
    Data access for authors and their books.

    Mutating methods only stage changes on the session; ``save`` commits
    everything staged since the previous call as one unit of work.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # authors

    def add_author(self, author: Author) -> None:
        if author.id is None:
            author.id = uuid.uuid4()
        for book in author.books:
            if book.id is None:
                book.id = uuid.uuid4()
            book.author_id = author.id
        self.session.add(author)

    def get_author(self, author_id: AuthorId) -> Author | None:
        return self.session.get(Author, author_id)

    def get_authors_by_ids(self, author_ids: Sequence[AuthorId]) -> Sequence[Author]:
        stmt = (
            select(Author)
            .where(Author.id.in_(author_ids))
            .order_by(Author.first_name, Author.last_name)
        )
        return self.session.scalars(stmt).all()

    def get_authors(self, parameters: AuthorsResourceParameters) -> PagedList[Author]:
        """
        Returns the requested page of authors, filtered by genre and search query
        and ordered by name.
        """
        stmt = self._filtered_authors(select(Author), parameters)
        count_stmt = self._filtered_authors(select(func.count()).select_from(Author), parameters)

        stmt = (
            stmt.order_by(Author.first_name, Author.last_name, Author.id)
            .limit(parameters.page_size)
            .offset(parameters.offset)
        )

        total = self.session.execute(count_stmt).scalar_one()
        items = self.session.scalars(stmt).all()

        return PagedList(
            items=items,
            total_count=total,
            current_page=parameters.page_number,
            page_size=parameters.page_size,
        )

    @staticmethod
    def _filtered_authors(stmt: Select, parameters: AuthorsResourceParameters) -> Select:
        if parameters.genre and parameters.genre.strip():
            genre = parameters.genre.strip().lower()
            stmt = stmt.where(func.lower(Author.genre) == genre)

        if parameters.search_query and parameters.search_query.strip():
            query = parameters.search_query.strip().lower()
            stmt = stmt.where(
                or_(
                    func.lower(Author.genre).contains(query, autoescape=True),
                    func.lower(Author.first_name).contains(query, autoescape=True),
                    func.lower(Author.last_name).contains(query, autoescape=True),
                )
            )
        return stmt

    def author_exists(self, author_id: AuthorId) -> bool:
        return bool(self.session.scalar(select(exists().where(Author.id == author_id))))

    def delete_author(self, author: Author) -> None:
        self.session.delete(author)

    # books

    def add_book_for_author(self, author_id: AuthorId, book: Book) -> None:
        if book.id is None:
            book.id = uuid.uuid4()
        book.author_id = author_id
        self.session.add(book)

    def get_book_for_author(self, author_id: AuthorId, book_id: BookId) -> Book | None:
        stmt = select(Book).where(Book.author_id == author_id, Book.id == book_id)
        return self.session.scalars(stmt).first()

    def get_books_for_author(self, author_id: AuthorId) -> Sequence[Book]:
        stmt = select(Book).where(Book.author_id == author_id).order_by(Book.title, Book.id)
        return self.session.scalars(stmt).all()

    def update_book_for_author(self, book: Book) -> None:
        # tracked entities are flushed by the session on save
        pass

    def delete_book(self, book: Book) -> None:
        self.session.delete(book)

    def save(self) -> bool:
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to commit library changes")
            self.session.rollback()
            return False
        return True
