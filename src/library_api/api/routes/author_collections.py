import uuid
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from library_api.dependencies.library import get_author_collection_service
from library_api.domain import AuthorId
from library_api.errors import validation_problem_response
from library_api.schemas.author import AuthorForCreation, AuthorRead
from library_api.schemas.validation import ValidationProblem
from library_api.services.author_collection_service import AuthorCollectionService
from library_api.services.author_service import validate_author_for_creation

router = APIRouter(prefix="/authorcollections", tags=["author collections"])

COLLECTION_IDS_HEADER = "X-Author-Collection-Ids"


def parse_author_ids(raw_ids: str) -> list[AuthorId] | None:
    """Parse a comma-separated id list; None when empty or malformed."""
    parts = [part.strip() for part in raw_ids.split(",")]
    if not parts or any(not part for part in parts):
        return None
    try:
        return [AuthorId(uuid.UUID(part)) for part in parts]
    except ValueError:
        return None


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=list[AuthorRead],
    responses={
        400: {"description": "Missing request body"},
        422: {"model": ValidationProblem},
    },
)
def create_author_collection(
    request: Request,
    svc: Annotated[AuthorCollectionService, Depends(get_author_collection_service)],
    payload: Annotated[list[AuthorForCreation] | None, Body()] = None,
) -> JSONResponse:
    """Create several authors at once; either all of them are stored or none."""
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing author collection"
        )

    findings = []
    for index, author in enumerate(payload):
        for finding in validate_author_for_creation(author):
            findings.append(finding.model_copy(update={"field": f"{index}.{finding.field}"}))
    if findings:
        return validation_problem_response(findings)

    authors, ids = svc.create_author_collection(payload)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=[author.model_dump(mode="json") for author in authors],
        headers={
            "Location": str(request.url_for("get_author_collection", ids=ids)),
            COLLECTION_IDS_HEADER: ids,
        },
    )


@router.get("/({ids})", name="get_author_collection", response_model=list[AuthorRead])
def get_author_collection(
    ids: str,
    svc: Annotated[AuthorCollectionService, Depends(get_author_collection_service)],
) -> list[AuthorRead]:
    """Retrieve exactly the authors listed in a comma-separated id list."""
    author_ids = parse_author_ids(ids)
    if author_ids is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Expected a comma-separated list of author ids",
        )

    authors = svc.get_author_collection(author_ids)
    if authors is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="One or more authors in the collection were not found",
        )
    return authors
