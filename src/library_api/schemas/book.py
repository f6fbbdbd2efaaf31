from pydantic import BaseModel, ConfigDict, Field

from library_api.domain import AuthorId, BookId, Description, Title


class BookRead(BaseModel):
    id: BookId = Field(description="Unique identifier of the book")
    title: str = Field(description="Title of the book", examples=["The Winds of Winter"])
    description: str | None = Field(
        default=None,
        description="Short description of the book",
        examples=["Forthcoming 6th novel in A Song of Ice and Fire."],
    )
    author_id: AuthorId = Field(description="Identifier of the author who wrote the book")

    model_config = ConfigDict(from_attributes=True)


class BookForCreation(BaseModel):
    title: Title = Field(description="Title of the book", examples=["The Winds of Winter"])
    description: Description | None = Field(
        default=None,
        description="Short description of the book; must differ from the title",
        examples=["Forthcoming 6th novel in A Song of Ice and Fire."],
    )


class BookForUpdate(BaseModel):
    title: Title = Field(description="Title of the book", examples=["The Winds of Winter"])
    description: Description = Field(
        description="Short description of the book; must differ from the title",
        examples=["Forthcoming 6th novel in A Song of Ice and Fire."],
    )
