from typing import Optional

from pydantic import BaseModel, Field, field_validator

from soulchat.models.base import CamelModel


class SearchOutcome(BaseModel):
    """Result of one search attempt. Never persisted."""

    success: bool
    result_text: Optional[str] = None
    error_message: Optional[str] = None


class SearchRequest(CamelModel):
    query: str = Field(..., min_length=1, examples=["latest mars rover news"])


class SearchResult(BaseModel):
    title: str = ""
    url: str = ""
    content: str = ""

    @field_validator("title", "url", "content", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        # The provider sends explicit nulls for fields it could not fill.
        return "" if value is None else value


class SearchResponse(CamelModel):
    results: list[SearchResult]
    search_id: Optional[str] = None
    query: str
