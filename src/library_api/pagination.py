import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")
U = TypeVar("U")

MAX_PAGE_SIZE = 20
DEFAULT_PAGE_SIZE = 10


class AuthorsResourceParameters(BaseModel):
    """Filtering and paging input for the author collection.

    ``page_size`` is clamped to ``MAX_PAGE_SIZE`` whenever it is written,
    at construction as well as on later assignment.
    """

    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    search_query: str | None = None
    genre: str | None = None

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        return min(value, MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class PagedList(Generic[T]):
    items: Sequence[T]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "PagedList[U]":
        return PagedList(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            current_page=self.current_page,
            page_size=self.page_size,
        )
