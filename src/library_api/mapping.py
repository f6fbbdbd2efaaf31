"""Field-by-field mapping between ORM entities and transfer objects."""

from datetime import date

from library_api.domain import AuthorId, BookId
from library_api.models import Author, Book
from library_api.schemas.author import AuthorForCreation, AuthorRead
from library_api.schemas.book import BookForCreation, BookForUpdate, BookRead


def current_age(
    date_of_birth: date, date_of_death: date | None = None, today: date | None = None
) -> int:
    until = date_of_death or today or date.today()
    age = until.year - date_of_birth.year
    if (until.month, until.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def author_to_read(author: Author) -> AuthorRead:
    return AuthorRead(
        id=AuthorId(author.id),
        name=f"{author.first_name} {author.last_name}",
        age=current_age(author.date_of_birth, author.date_of_death),
        genre=author.genre,
    )


def author_from_creation(payload: AuthorForCreation) -> Author:
    return Author(
        first_name=payload.first_name,
        last_name=payload.last_name,
        date_of_birth=payload.date_of_birth,
        date_of_death=payload.date_of_death,
        genre=payload.genre,
        books=[book_from_creation(book) for book in payload.books],
    )


def book_to_read(book: Book) -> BookRead:
    return BookRead(
        id=BookId(book.id),
        title=book.title,
        description=book.description,
        author_id=AuthorId(book.author_id),
    )


def book_from_creation(payload: BookForCreation | BookForUpdate) -> Book:
    return Book(title=payload.title, description=payload.description)


def book_to_update(book: Book) -> BookForUpdate:
    # stored rows are projected as-is; validation runs after the patch is applied
    return BookForUpdate.model_construct(title=book.title, description=book.description)


def apply_book_update(payload: BookForUpdate, book: Book) -> None:
    book.title = payload.title
    book.description = payload.description
