import uuid
from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models import Author, Book


class DataFactory:
    def __init__(self, session: Session):
        self.session = session

    def create_author(
        self,
        first_name: str = "Stephen",
        last_name: str = "King",
        genre: str = "Horror",
        date_of_birth: date = date(1947, 9, 21),
        **kwargs,
    ) -> Author:
        kwargs.setdefault("id", uuid.uuid4())
        a = Author(
            first_name=first_name,
            last_name=last_name,
            genre=genre,
            date_of_birth=date_of_birth,
            **kwargs,
        )
        self.session.add(a)
        return a

    def create_book(self, author: Author, title: str, description: str | None = None) -> Book:
        b = Book(id=uuid.uuid4(), author_id=author.id, title=title, description=description)
        self.session.add(b)
        return b

    def get_book(self, book_id: uuid.UUID) -> Book | None:
        self.session.expire_all()
        return self.session.get(Book, book_id)

    def count_books(self) -> int:
        return len(self.session.execute(select(Book)).scalars().all())

    def commit(self):
        self.session.commit()


@pytest.fixture
def test_data(db_session: Session) -> DataFactory:
    return DataFactory(db_session)


@pytest.fixture
def sample_authors(test_data: DataFactory) -> list[Author]:
    authors = [
        test_data.create_author("Stephen", "King", "Horror", date(1947, 9, 21)),
        test_data.create_author("George", "RR Martin", "Fantasy", date(1948, 9, 20)),
        test_data.create_author("Neil", "Gaiman", "Fantasy", date(1960, 11, 10)),
        test_data.create_author("Tom", "Lanoye", "Various", date(1958, 8, 27)),
        test_data.create_author(
            "Douglas",
            "Adams",
            "Science Fiction",
            date(1952, 3, 11),
            date_of_death=date(2001, 5, 11),
        ),
        test_data.create_author("Jens", "Lapidus", "Thriller", date(1974, 5, 24)),
    ]
    test_data.commit()
    return authors
