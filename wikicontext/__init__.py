"""wiki-context: relevance-ranked excerpts from heterogeneous documentation wikis."""

__version__ = "0.1.0"
