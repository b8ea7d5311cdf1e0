"""Tests for the source registry."""

import pytest

from wikicontext.sources.registry import (
    InvalidSourceURLError,
    SourceRegistry,
    build_entry,
    title_from_url,
)
from wikicontext.sources.schemas import SourceType, TokenAuth


class TestBuildEntry:
    def test_fields(self) -> None:
        entry = build_entry("https://docs.example.com/guide/setup.md")

        assert entry.url == "https://docs.example.com/guide/setup.md"
        assert entry.source_type == SourceType.MARKDOWN
        assert entry.display_name == "docs.example.com"
        assert entry.auth is None
        assert entry.request_headers() == {}

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/x", "https://", ""])
    def test_invalid_url(self, url: str) -> None:
        with pytest.raises(InvalidSourceURLError):
            build_entry(url)

    def test_entry_is_immutable(self) -> None:
        entry = build_entry("https://example.com")
        with pytest.raises(AttributeError):
            entry.source_type = SourceType.GITBOOK  # type: ignore[misc]


class TestTitleFromUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/docs/getting-started.md", "getting started"),
            ("https://wiki.example.org/wiki/Kubernetes_Setup", "Kubernetes Setup"),
            ("https://example.com/docs/", "docs"),
            ("https://example.com", "example.com"),
        ],
    )
    def test_titles(self, url: str, expected: str) -> None:
        assert title_from_url(url) == expected


class TestSourceRegistry:
    def test_preserves_order_and_types(self, make_registry) -> None:
        registry = make_registry(
            [
                "https://team.gitbook.io/handbook",
                "https://example.com/docs/readme.md",
                "https://example.com/api/status",
            ]
        )

        assert len(registry) == 3
        assert [e.source_type for e in registry] == [
            SourceType.GITBOOK,
            SourceType.MARKDOWN,
            SourceType.UNKNOWN,
        ]

    def test_invalid_url_does_not_abort(self, make_registry) -> None:
        registry = make_registry(["https://good.example.com/a", "nonsense", "https://b.example.com"])

        assert [e.url for e in registry] == ["https://good.example.com/a", "https://b.example.com"]
        assert registry.invalid_urls == ["nonsense"]

    def test_duplicates_keep_first(self, make_registry) -> None:
        registry = make_registry(["https://example.com/a", "https://example.com/a"])
        assert len(registry) == 1

    def test_auth_attached_once(self, make_registry) -> None:
        registry = make_registry(
            ["https://private.example.com/docs/x.md", "https://public.example.com/docs/y.md"],
            [{"urlPattern": "private", "type": "token", "token": "t"}],
        )

        private = registry.get("https://private.example.com/docs/x.md")
        public = registry.get("https://public.example.com/docs/y.md")
        assert isinstance(private.auth, TokenAuth)
        assert private.auth_type == "token"
        assert public.auth is None

    def test_get_missing(self, make_registry) -> None:
        assert make_registry([]).get("https://example.com") is None

    def test_counts_by_type(self, make_registry) -> None:
        registry = make_registry(
            [
                "https://a.example.com/docs/one.md",
                "https://b.example.com/docs/two.md",
                "https://wiki.example.org/",
            ]
        )
        assert registry.counts_by_type() == {"markdown": 2, "mediawiki": 1}

    def test_from_config(self) -> None:
        registry = SourceRegistry.from_config(
            ["https://example.com/docs/a.md"],
            [{"urlPattern": ".*", "type": "basic", "username": "u", "password": "p"}],
        )
        assert registry.entries[0].auth_type == "basic"
