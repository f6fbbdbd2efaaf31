"""
Validation of book payloads.

Findings are accumulated as an ordered list of ``ValidationFinding`` values and
returned to the caller; nothing here raises for an invalid payload.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from library_api.schemas.validation import ValidationFinding

ModelT = TypeVar("ModelT", bound=BaseModel)

DESCRIPTION_EQUALS_TITLE = "The provided description should be different from the title."

_REQUEST_SECTIONS = ("body", "query", "path", "header")


class TitledPayload(Protocol):
    title: Any
    description: Any


def check_title_differs_from_description(
    payload: TitledPayload | Mapping[str, Any],
) -> list[ValidationFinding]:
    """Fail when title and description are equal, compared ordinally.

    Two missing values, or two empty strings, count as equal.
    """
    if isinstance(payload, Mapping):
        title, description = payload.get("title"), payload.get("description")
    else:
        title, description = payload.title, payload.description

    if title == description:
        return [ValidationFinding(field="description", message=DESCRIPTION_EQUALS_TITLE)]
    return []


def findings_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[ValidationFinding]:
    """Flatten pydantic error dicts into findings keyed by dotted field location."""
    findings = []
    for error in errors:
        loc = [str(part) for part in error["loc"]]
        if loc and loc[0] in _REQUEST_SECTIONS:
            loc = loc[1:]
        findings.append(ValidationFinding(field=".".join(loc) or "body", message=error["msg"]))
    return findings


def validate_document(
    schema: type[ModelT], document: Mapping[str, Any]
) -> tuple[ModelT | None, list[ValidationFinding]]:
    """Run the title rule, then the schema constraints, over a merged document."""
    findings = check_title_differs_from_description(document)
    try:
        model = schema.model_validate(dict(document))
    except ValidationError as exc:
        return None, findings + findings_from_errors(exc.errors())
    if findings:
        return None, findings
    return model, findings
