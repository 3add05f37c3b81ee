"""In-memory chat state models. Nothing here is persisted."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class SourceLink(BaseModel):
    """A cited source as shown under an answer."""

    id: str
    title: str
    url: str | None = None


class Message(BaseModel):
    """One completed question/answer round trip."""

    id: str
    question: str
    answer: str
    sources: list[SourceLink] = Field(default_factory=list)
    timestamp: datetime


class Notification(BaseModel):
    """Transient message shown to the user (e.g. a failed request)."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"
