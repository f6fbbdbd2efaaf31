"""
JSON Patch (RFC 6902) operations over flat transfer documents.

A patch is a list of operations interpreted against a plain ``dict`` whose keys
are the fields of a transfer object (for example a ``BookForUpdate`` dump).
Only single-segment paths such as ``/title`` are addressable. Problems are
reported as validation findings and the remaining operations still run.
"""

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from library_api.schemas.validation import ValidationFinding


class _Operation(BaseModel):
    path: str = Field(description="JSON pointer to the target field", examples=["/title"])

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PatchAdd(_Operation):
    op: Literal["add"]
    value: Any


class PatchReplace(_Operation):
    op: Literal["replace"]
    value: Any


class PatchRemove(_Operation):
    op: Literal["remove"]


class PatchMove(_Operation):
    op: Literal["move"]
    from_: str = Field(alias="from", description="JSON pointer to the source field")


class PatchCopy(_Operation):
    op: Literal["copy"]
    from_: str = Field(alias="from", description="JSON pointer to the source field")


class PatchTest(_Operation):
    op: Literal["test"]
    value: Any


PatchOperation = Annotated[
    PatchAdd | PatchReplace | PatchRemove | PatchMove | PatchCopy | PatchTest,
    Field(discriminator="op"),
]


class _PathNotFound(Exception):
    def __init__(self, segment: str) -> None:
        super().__init__(segment)
        self.segment = segment


def _resolve(document: Mapping[str, Any], pointer: str) -> str:
    """Map a JSON pointer onto a document key, ignoring case."""
    if not pointer.startswith("/"):
        raise _PathNotFound(pointer)
    segments = [s.replace("~1", "/").replace("~0", "~") for s in pointer[1:].split("/")]
    if len(segments) != 1 or not segments[0]:
        raise _PathNotFound(pointer)

    wanted = segments[0].lower()
    for key in document:
        if key.lower() == wanted:
            return key
    raise _PathNotFound(segments[0])


def _not_found(operation: _Operation, segment: str) -> ValidationFinding:
    return ValidationFinding(
        field=operation.path,
        message=f"The target location specified by path segment '{segment}' was not found.",
    )


def apply_patch(
    document: Mapping[str, Any], operations: Sequence[PatchOperation]
) -> tuple[dict[str, Any], list[ValidationFinding]]:
    """Apply operations in order and return the patched copy with any findings.

    ``remove`` resets a field to ``None``. The input document is left untouched.
    """
    patched = dict(document)
    findings: list[ValidationFinding] = []

    for operation in operations:
        try:
            target = _resolve(patched, operation.path)
            match operation:
                case PatchAdd(value=value) | PatchReplace(value=value):
                    patched[target] = value
                case PatchRemove():
                    patched[target] = None
                case PatchMove(from_=source_path):
                    source = _resolve(patched, source_path)
                    value = patched[source]
                    patched[source] = None
                    patched[target] = value
                case PatchCopy(from_=source_path):
                    source = _resolve(patched, source_path)
                    patched[target] = patched[source]
                case PatchTest(value=value):
                    if patched[target] != value:
                        findings.append(
                            ValidationFinding(
                                field=operation.path,
                                message=(
                                    f"The current value '{patched[target]}' at path "
                                    f"'{operation.path}' is not equal to the test value "
                                    f"'{value}'."
                                ),
                            )
                        )
        except _PathNotFound as exc:
            findings.append(_not_found(operation, exc.segment))

    return patched, findings
