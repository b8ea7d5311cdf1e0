"""Loading engine configuration from the JSON config file shape.

The config file mirrors what editors ship alongside the server::

    {
      "wikiUrls": ["https://..."],
      "cacheTimeoutMinutes": 30,
      "auth": [{"urlPattern": "^https://private\\.", "type": "basic", ...}],
      "ai": {"enabled": true, "primaryProvider": "mock", "minimumRelevanceScore": 0.5,
             "providers": {"mock": {"type": "mock", "enabled": true}}},
      "fallback": {"probability": 0.7, "seed": 42}
    }

Keys that are absent fall back to environment variables and defaults.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wikicontext.config.settings import Settings
from wikicontext.fallback.config import FallbackConfig
from wikicontext.ranking.config import RankingConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "mcp.config.json"

_SETTINGS_KEYS = {
    "wikiUrls": "wiki_urls",
    "cacheTimeoutMinutes": "cache_timeout_minutes",
    "auth": "auth",
    "httpTimeout": "http_timeout",
    "maxHttpRetries": "max_http_retries",
}

_AI_KEYS = {
    "enabled": "enabled",
    "primaryProvider": "primary_provider",
    "minimumRelevanceScore": "minimum_relevance_score",
    "providers": "providers",
    "useMock": "use_mock",
}

_FALLBACK_KEYS = {
    "enabled": "enabled",
    "probability": "probability",
    "seed": "seed",
}


@dataclass
class WikiContextConfig:
    """Bundle of the settings objects the engine is built from."""

    settings: Settings = field(default_factory=Settings)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)


def _pick(data: Mapping[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    """Translate camelCase config keys to settings field names."""
    picked: dict[str, Any] = {}
    for key, value in data.items():
        if key in keys:
            picked[keys[key]] = value
        elif key in keys.values():
            picked[key] = value
    return picked


def load_config(data: Mapping[str, Any]) -> WikiContextConfig:
    """
    Build engine configuration from a parsed config mapping.

    Args:
        data: Parsed JSON config (camelCase or snake_case keys)

    Returns:
        WikiContextConfig with settings, ranking and fallback sections
    """
    ai_section = data.get("ai") or {}
    fallback_section = data.get("fallback") or {}

    return WikiContextConfig(
        settings=Settings(**_pick(data, _SETTINGS_KEYS)),
        ranking=RankingConfig(**_pick(ai_section, _AI_KEYS)),
        fallback=FallbackConfig(**_pick(fallback_section, _FALLBACK_KEYS)),
    )


def load_config_file(path: str | Path | None = None) -> WikiContextConfig:
    """
    Load engine configuration from a JSON file.

    A missing file yields the environment/default configuration. A file
    that cannot be parsed is logged and also yields the defaults.

    Args:
        path: Config file path (defaults to ./mcp.config.json)
    """
    config_path = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_FILE
    if not config_path.exists():
        logger.info("No config file at %s, using environment settings", config_path)
        return WikiContextConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load %s: %s", config_path, e)
        return WikiContextConfig()

    if not isinstance(data, dict):
        logger.warning("Config file %s does not contain a JSON object", config_path)
        return WikiContextConfig()

    return load_config(data)
