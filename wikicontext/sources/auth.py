"""Matching source URLs against configured authentication rules."""

import logging
import re
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from wikicontext.sources.schemas import AuthBinding, AuthRule

logger = logging.getLogger(__name__)


class AuthResolver:
    """
    Resolves the credentials for a URL.

    Rules are checked in configured order and the first rule whose
    ``url_pattern`` regex matches (``re.search``) wins. A pattern that
    does not compile is logged once and never matches.

    Usage:
        resolver = AuthResolver.from_config([
            {"urlPattern": "^https://private\\.", "type": "basic",
             "username": "u", "password": "p"},
        ])
        binding = resolver.resolve("https://private.example.com/x")
    """

    def __init__(self, rules: Iterable[AuthRule] = ()):
        self._rules: list[tuple[re.Pattern[str] | None, AuthRule]] = []
        for rule in rules:
            try:
                compiled = re.compile(rule.url_pattern)
            except (re.error, TypeError) as e:
                logger.warning("Invalid auth urlPattern %r: %s", rule.url_pattern, e)
                compiled = None
            self._rules.append((compiled, rule))

    @classmethod
    def from_config(cls, raw_rules: Iterable[dict[str, Any]]) -> "AuthResolver":
        """
        Build a resolver from raw config rules, skipping malformed ones.

        Args:
            raw_rules: Ordered ``{urlPattern, type, ...}`` mappings
        """
        rules: list[AuthRule] = []
        for raw in raw_rules:
            try:
                rules.append(AuthRule.from_config(raw))
            except (KeyError, ValidationError) as e:
                logger.warning("Skipping malformed auth rule %r: %s", raw.get("urlPattern"), e)
        return cls(rules)

    @property
    def rules(self) -> list[AuthRule]:
        """Configured rules in match order."""
        return [rule for _, rule in self._rules]

    def resolve(self, url: str) -> AuthBinding | None:
        """
        Find the credentials for a URL.

        Args:
            url: Source URL

        Returns:
            The binding of the first matching rule, or None
        """
        for compiled, rule in self._rules:
            if compiled is not None and compiled.search(url):
                return rule.binding
        return None
