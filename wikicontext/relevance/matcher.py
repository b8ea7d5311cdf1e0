"""
Relevance filtering and excerpt extraction for fetched documents.

Given a document and a query, decides whether the document is worth
returning and picks the part of it to return: matching code blocks
first, then a window around the query, then a window around the first
keyword, then the document's opening.
"""

import html
import math
import re

from wikicontext.relevance.schemas import CodeBlock

KEYWORD_OVERLAP_RATIO = 0.5
MAX_CODE_BLOCKS = 3

_FENCED_BLOCK = re.compile(r"```([\w+#.-]*)[^\n]*\n([\s\S]*?)```")
_HTML_PRE_CODE = re.compile(
    r"<pre[^>]*>\s*<code([^>]*)>([\s\S]*?)</code>\s*</pre>",
    re.IGNORECASE,
)
_HTML_LANGUAGE = re.compile(r"class=[\"'](?:[^\"']*\s)?(?:language|lang)-([\w+#.-]+)", re.IGNORECASE)
_SYNTAX_HIGHLIGHT = re.compile(
    r"<syntaxhighlight([^>]*)>([\s\S]*?)</syntaxhighlight>",
    re.IGNORECASE,
)
_SYNTAX_LANGUAGE = re.compile(r"lang=[\"']?([\w+#.-]+)", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]+>")


def required_keyword_matches(keywords: list[str]) -> int:
    """Distinct keywords a document must contain to count as relevant."""
    return max(1, math.ceil(len(keywords) * KEYWORD_OVERLAP_RATIO))


def is_relevant(content: str, query: str, keywords: list[str]) -> bool:
    """
    Decide whether a document is relevant to a query.

    True when the document contains the whole query (case-insensitive),
    or when at least half of the distinct keywords (minimum one) occur in it.
    """
    content_lower = content.lower()
    query_lower = query.lower()
    if query_lower in content_lower:
        return True

    matches = sum(1 for keyword in set(keywords) if keyword in content_lower)
    return matches >= required_keyword_matches(keywords)


def extract_code_blocks(content: str) -> list[CodeBlock]:
    """
    Extract code blocks in document order.

    Recognises Markdown fenced blocks, HTML ``<pre><code>`` blocks and
    MediaWiki ``<syntaxhighlight>`` blocks.
    """
    found: list[tuple[int, CodeBlock]] = []

    for match in _FENCED_BLOCK.finditer(content):
        found.append((match.start(), CodeBlock(match.group(1), match.group(2).strip("\n"))))

    for match in _HTML_PRE_CODE.finditer(content):
        language = _HTML_LANGUAGE.search(match.group(1))
        code = html.unescape(_HTML_TAG.sub("", match.group(2))).strip("\n")
        found.append((match.start(), CodeBlock(language.group(1) if language else "", code)))

    for match in _SYNTAX_HIGHLIGHT.finditer(content):
        language = _SYNTAX_LANGUAGE.search(match.group(1))
        code = html.unescape(match.group(2)).strip("\n")
        found.append((match.start(), CodeBlock(language.group(1) if language else "", code)))

    found.sort(key=lambda item: item[0])
    return [block for _, block in found]


def _window(content: str, start: int, end: int) -> str:
    return content[max(0, start):min(len(content), end)]


def extract_section(content: str, query: str, keywords: list[str]) -> str:
    """
    Pick the excerpt of a document to return for a query.

    Priority:
        1. Up to three code blocks mentioning a keyword or a query word
           longer than three characters, re-fenced, blank-line separated
        2. The query in context: 150 chars before, 350 after
        3. The first keyword found in context: 100 chars before, 400 after
        4. The first 500 characters
    """
    query_words = [w for w in query.lower().split() if len(w) > 3]
    terms = list(keywords) + [w for w in query_words if w not in keywords]

    matching = [
        block
        for block in extract_code_blocks(content)
        if any(term in block.code.lower() for term in terms)
    ]
    if matching:
        return "\n\n".join(block.to_fenced() for block in matching[:MAX_CODE_BLOCKS])

    content_lower = content.lower()
    query_lower = query.lower()
    index = content_lower.find(query_lower)
    if index != -1:
        return _window(content, index - 150, index + len(query_lower) + 350)

    for keyword in keywords:
        index = content_lower.find(keyword)
        if index != -1:
            return _window(content, index - 100, index + len(keyword) + 400)

    return content[:500] + "..."
