"""
Placeholder document templates, one per source type.

Each template mentions the query, the keyword list and links back to
the source so a reader can go to the real page.
"""

from wikicontext.sources.registry import title_from_url
from wikicontext.sources.schemas import SourceEntry, SourceType

_MARKDOWN = """# {title}

Documentation from {source} related to **{query}**.

## Overview

This page covers {keyword_list}. The live page could not be retrieved,
so this summary was generated from the request.

## Example

```bash
# {query}
echo "See {url} for the full guide"
```

[View the original page]({url})
"""

_MEDIAWIKI = """<h1>{title}</h1>
<p>This wiki article on {source} discusses <b>{query}</b>.</p>
<h2>Topics</h2>
<ul>
{keyword_items}
</ul>
<p>See <a href="{url}">{title}</a> on the wiki for the full article.</p>
"""

_GITBOOK = """{title}

Guide from {source} about {query}.

Key topics: {keyword_list}

Read the complete chapter at {url}
"""

_CONFLUENCE = """{title}

Space page on {source} covering {query}.

Labels: {keyword_list}

Open in Confluence: {url}
"""

_SHAREPOINT = """{title}

Document shared on {source} about {query}.

Related topics: {keyword_list}

Open the document: {url}
"""

_GENERIC = """{title}

Content from {source} related to {query}.

Keywords: {keyword_list}

Source: {url}
"""

TEMPLATES: dict[SourceType, str] = {
    SourceType.MARKDOWN: _MARKDOWN,
    SourceType.MEDIAWIKI: _MEDIAWIKI,
    SourceType.GITBOOK: _GITBOOK,
    SourceType.CONFLUENCE: _CONFLUENCE,
    SourceType.SHAREPOINT: _SHAREPOINT,
    SourceType.UNKNOWN: _GENERIC,
}


def render_fallback(entry: SourceEntry, query: str, keywords: list[str]) -> str:
    """Fill the template for the entry's source type."""
    template = TEMPLATES.get(entry.source_type, _GENERIC)
    keyword_list = ", ".join(keywords) if keywords else query
    return template.format(
        title=title_from_url(entry.url),
        source=entry.display_name,
        url=entry.url,
        query=query,
        keyword_list=keyword_list,
        keyword_items="\n".join(f"<li>{k}</li>" for k in keywords),
    )
