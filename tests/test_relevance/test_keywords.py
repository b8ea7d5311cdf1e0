"""Tests for keyword extraction."""

from wikicontext.relevance.keywords import STOP_WORDS, build_word_index, extract_keywords


class TestExtractKeywords:
    def test_basic_query(self):
        assert extract_keywords("How do I deploy to Kubernetes?") == ["deploy", "kubernetes"]

    def test_drops_short_tokens(self):
        assert extract_keywords("go to ci on k8s") == ["k8s"]

    def test_strips_punctuation(self):
        assert extract_keywords("nix-shell, flake.nix!") == ["nixshell", "flakenix"]

    def test_dedupes_preserving_order(self):
        assert extract_keywords("docker compose docker swarm compose") == [
            "docker",
            "compose",
            "swarm",
        ]

    def test_stop_words_removed(self):
        keywords = extract_keywords("what is the best way to use this")
        assert keywords == ["best"]
        assert "the" in STOP_WORDS

    def test_empty(self):
        assert extract_keywords("") == []
        assert extract_keywords("a an is") == []


class TestBuildWordIndex:
    def test_counts(self):
        index = build_word_index("Terraform plan. terraform apply; TERRAFORM destroy")

        assert index["terraform"] == 3
        assert index["plan"] == 1
        assert index["apply"] == 1

    def test_excludes_stop_words_and_short(self):
        index = build_word_index("the cat and a dog")
        assert index == {"cat": 1, "dog": 1}
