"""Data models produced by relevance matching and ranking."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class CodeBlock:
    """A code block found in a document."""

    language: str
    code: str

    def to_fenced(self) -> str:
        """Render as a Markdown fenced block."""
        return f"```{self.language}\n{self.code}\n```"


class QueryResult(BaseModel):
    """
    One excerpt returned for a query.

    Serialised for the protocol front end with ``to_response()``, which
    uses the wire field names (``source``, ``type``, ``relevanceScore``).
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: str
    url: str | None = None
    source_name: str = Field(alias="source")
    source_type: str | None = Field(default=None, alias="type")
    relevance_score: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        alias="relevanceScore",
    )
    summary: str | None = None

    def to_response(self) -> dict[str, Any]:
        """Convert to the result item shape handed to the protocol layer."""
        return self.model_dump(by_alias=True, exclude_none=True)
