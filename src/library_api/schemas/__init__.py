from library_api.schemas.author import AuthorForCreation, AuthorRead
from library_api.schemas.book import BookForCreation, BookForUpdate, BookRead
from library_api.schemas.validation import ValidationFinding, ValidationProblem

__all__ = [
    "AuthorForCreation",
    "AuthorRead",
    "BookForCreation",
    "BookForUpdate",
    "BookRead",
    "ValidationFinding",
    "ValidationProblem",
]
