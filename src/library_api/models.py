import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.domain import (
    MAX_DESCRIPTION_LENGTH,
    MAX_GENRE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_TITLE_LENGTH,
)


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    date_of_death: Mapped[date | None] = mapped_column(Date, nullable=True)
    genre: Mapped[str] = mapped_column(String(MAX_GENRE_LENGTH), nullable=False)

    books: Mapped[list["Book"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Book.title",
    )


class Book(Base):
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(String(MAX_DESCRIPTION_LENGTH), nullable=True)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("authors.id", ondelete="CASCADE"), nullable=False, index=True
    )

    author: Mapped[Author] = relationship(back_populates="books")
