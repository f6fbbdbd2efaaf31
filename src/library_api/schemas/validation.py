from pydantic import BaseModel, Field


class ValidationFinding(BaseModel):
    field: str = Field(description="Name or path of the offending field", examples=["description"])
    message: str = Field(
        description="Human readable explanation",
        examples=["The provided description should be different from the title."],
    )


class ValidationProblem(BaseModel):
    detail: list[ValidationFinding] = Field(description="Validation findings, in evaluation order")
