from datetime import date

from pydantic import BaseModel, Field

from library_api.domain import AuthorId, Genre, PersonName
from library_api.schemas.book import BookForCreation


class AuthorRead(BaseModel):
    id: AuthorId = Field(description="Unique identifier of the author")
    name: str = Field(description="Full name of the author", examples=["George RR Martin"])
    age: int = Field(description="Age in whole years, at death if deceased", examples=[70])
    genre: str = Field(description="Main genre of the author", examples=["Fantasy"])


class AuthorForCreation(BaseModel):
    first_name: PersonName = Field(description="First name of the author", examples=["George"])
    last_name: PersonName = Field(description="Last name of the author", examples=["RR Martin"])
    date_of_birth: date = Field(description="Date of birth", examples=["1948-09-20"])
    date_of_death: date | None = Field(default=None, description="Date of death, if any")
    genre: Genre = Field(description="Main genre of the author", examples=["Fantasy"])
    books: list[BookForCreation] = Field(
        default_factory=list, description="Books to create together with the author"
    )
