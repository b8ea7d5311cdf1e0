"""Sources: configured documentation URLs, type detection and credentials."""

from wikicontext.sources.auth import AuthResolver
from wikicontext.sources.detection import DETECTION_RULES, detect_source_type
from wikicontext.sources.registry import (
    InvalidSourceURLError,
    SourceRegistry,
    build_entry,
    title_from_url,
)
from wikicontext.sources.schemas import (
    AuthBinding,
    AuthRule,
    BasicAuth,
    CustomHeaderAuth,
    OAuthClientCredentials,
    SourceEntry,
    SourceType,
    TokenAuth,
)

__all__ = [
    "AuthBinding",
    "AuthResolver",
    "AuthRule",
    "BasicAuth",
    "CustomHeaderAuth",
    "DETECTION_RULES",
    "InvalidSourceURLError",
    "OAuthClientCredentials",
    "SourceEntry",
    "SourceRegistry",
    "SourceType",
    "TokenAuth",
    "build_entry",
    "detect_source_type",
    "title_from_url",
]
