"""Query service: the engine entry point."""

from wikicontext.services.query_service import (
    PLACEHOLDER_TITLE,
    WikiContextService,
    placeholder_result,
)
from wikicontext.services.schemas import ContextRequest, SourceDetail, SourceStats

__all__ = [
    "PLACEHOLDER_TITLE",
    "ContextRequest",
    "SourceDetail",
    "SourceStats",
    "WikiContextService",
    "placeholder_result",
]
