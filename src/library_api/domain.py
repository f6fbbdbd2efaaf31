import typing
import uuid
from typing import Annotated

from pydantic import Field

MAX_NAME_LENGTH = 50
MAX_GENRE_LENGTH = 50
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

AuthorId = typing.NewType("AuthorId", uuid.UUID)
BookId = typing.NewType("BookId", uuid.UUID)

if typing.TYPE_CHECKING:
    PersonName = typing.NewType("PersonName", str)
    Genre = typing.NewType("Genre", str)
    Title = typing.NewType("Title", str)
    Description = typing.NewType("Description", str)
else:
    _PersonNameStr = Annotated[str, Field(min_length=1, max_length=MAX_NAME_LENGTH)]
    PersonName = typing.NewType("PersonName", _PersonNameStr)

    _GenreStr = Annotated[str, Field(min_length=1, max_length=MAX_GENRE_LENGTH)]
    Genre = typing.NewType("Genre", _GenreStr)

    _TitleStr = Annotated[str, Field(max_length=MAX_TITLE_LENGTH)]
    Title = typing.NewType("Title", _TitleStr)

    _DescriptionStr = Annotated[str, Field(max_length=MAX_DESCRIPTION_LENGTH)]
    Description = typing.NewType("Description", _DescriptionStr)
