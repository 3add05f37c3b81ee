"""Request and response models for the ask endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeSourceSchema(BaseModel):
    """A knowledge source as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    url: str | None = None
    content: str


class AskRequest(BaseModel):
    """Question submitted by a client.

    ``question`` is optional at the schema level so a missing question is
    reported as an invalid-input error rather than a validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str | None = Field(default=None, description="The user's question")
    session_id: str | None = Field(
        default=None,
        alias="sessionId",
        description="Opaque client session identifier; generated when omitted",
    )


class AskResponse(BaseModel):
    """Answer with the sources that were used as context."""

    model_config = ConfigDict(populate_by_name=True)

    answer: str
    sources: list[KnowledgeSourceSchema] = Field(default_factory=list)
    session_id: str = Field(alias="sessionId")


class ErrorResponse(BaseModel):
    """Error payload. Never contains internal details."""

    error: str
