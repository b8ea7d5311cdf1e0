"""Keyword extraction for queries and documents."""

import re
from collections import Counter

# Fixed English stop-word list shared by query keyword extraction and
# the per-document word index.
STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can",
    "had", "her", "was", "one", "our", "out", "day", "get", "has", "him",
    "his", "how", "man", "new", "now", "old", "see", "two", "way", "who",
    "boy", "did", "its", "let", "put", "say", "she", "too", "use", "what",
    "when", "where", "which", "why", "with", "this", "that", "these", "those",
    "from", "have", "does", "into", "about", "your", "them", "then", "than",
    "there", "their", "they", "will", "would", "should", "could", "been",
    "being", "were", "some", "more", "most", "also", "just", "only", "over",
    "such", "very", "each", "other", "using", "want", "need", "like", "make",
})

_NON_WORD = re.compile(r"[^\w\s]")
_INDEX_TOKEN = re.compile(r"\b\w{3,}\b")


def extract_keywords(text: str) -> list[str]:
    """
    Extract search keywords from free text.

    Lowercases, strips non-word characters, splits on whitespace and drops
    tokens of two characters or fewer as well as stop words. Duplicates
    keep their first position.

    Args:
        text: Query or document text

    Returns:
        Distinct keywords in order of appearance
    """
    if not text:
        return []

    cleaned = _NON_WORD.sub("", text.lower())
    keywords: list[str] = []
    for token in cleaned.split():
        if len(token) <= 2 or token in STOP_WORDS:
            continue
        if token not in keywords:
            keywords.append(token)
    return keywords


def build_word_index(content: str) -> dict[str, int]:
    """
    Count word frequencies in a document.

    Args:
        content: Document text

    Returns:
        Mapping of lowercase word (3+ chars, no stop words) to count
    """
    counts = Counter(
        word
        for word in _INDEX_TOKEN.findall(content.lower())
        if word not in STOP_WORDS
    )
    return dict(counts)
