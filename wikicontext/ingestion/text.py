"""Text utilities for turning fetched documents into indexable content."""

import re

import markdown
from bs4 import BeautifulSoup, Comment

# Page chrome that never carries documentation content
BOILERPLATE_TAGS = ["script", "style", "header", "footer", "nav", "aside"]

_HTML_PREFIX = re.compile(r"^\s*<(!doctype\s+html|html)", re.IGNORECASE)


def looks_like_html(text: str) -> bool:
    """Check whether a response body is a full HTML document."""
    return bool(_HTML_PREFIX.match(text))


def html_to_text(html_content: str) -> str:
    """
    Extract readable text from an HTML page.

    Drops boilerplate elements and comments, strips remaining tags and
    collapses whitespace.

    Args:
        html_content: Raw HTML string

    Returns:
        Clean text content
    """
    if not html_content:
        return ""

    soup = BeautifulSoup(html_content, "html.parser")

    for element in soup(BOILERPLATE_TAGS):
        element.decompose()

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    text = soup.get_text(separator=" ")
    return re.sub(r"\s+", " ", text).strip()


def render_markdown(source: str) -> str:
    """Render Markdown to HTML, keeping fenced code languages as classes."""
    return markdown.markdown(source, extensions=["fenced_code"])
