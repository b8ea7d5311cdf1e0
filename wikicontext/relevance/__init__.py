"""Relevance matching: keywords, relevance predicate and excerpt extraction."""

from wikicontext.relevance.keywords import STOP_WORDS, build_word_index, extract_keywords
from wikicontext.relevance.matcher import (
    extract_code_blocks,
    extract_section,
    is_relevant,
    required_keyword_matches,
)
from wikicontext.relevance.schemas import CodeBlock, QueryResult

__all__ = [
    "CodeBlock",
    "QueryResult",
    "STOP_WORDS",
    "build_word_index",
    "extract_code_blocks",
    "extract_keywords",
    "extract_section",
    "is_relevant",
    "required_keyword_matches",
]
