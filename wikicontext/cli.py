"""
Command-line interface for wiki-context.

Usage:
    wikicontext query "deploy to kubernetes"   # Search configured sources
    wikicontext sources                          # List sources and cache state
    wikicontext prefetch                         # Warm the content cache
    wikicontext --config path/to/mcp.config.json query "..."
"""

import asyncio
import json
from typing import Any

import click

from wikicontext.config.loader import WikiContextConfig, load_config_file
from wikicontext.observability.logging import setup_logging
from wikicontext.observability.metrics import get_metrics


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON config file (default: ./mcp.config.json)",
)
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: str | None) -> None:
    """Wiki Context - documentation retrieval for coding assistants."""
    config = load_config_file(config_path)
    if debug:
        config.settings = config.settings.model_copy(update={"log_level": "DEBUG"})

    setup_logging(config.settings)
    ctx.obj = config


@main.command()
@click.argument("text")
@click.option("--max-results", default=None, type=int, help="Maximum results to return")
@click.option("--min-score", default=None, type=float, help="Minimum relevance score")
@click.option("--metrics-port", default=None, type=int, help="Expose metrics on this port")
@click.pass_obj
def query(
    config: WikiContextConfig,
    text: str,
    max_results: int | None,
    min_score: float | None,
    metrics_port: int | None,
) -> None:
    """Search the configured sources for TEXT."""
    from wikicontext.services.query_service import WikiContextService

    if metrics_port:
        get_metrics().start_server(port=metrics_port)

    async def run() -> list[dict[str, Any]]:
        async with WikiContextService.from_config(config) as service:
            results = await service.search(
                text,
                max_results=max_results,
                min_relevance_score=min_score,
            )
            return [r.to_response() for r in results]

    try:
        _echo_json(asyncio.run(run()))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="TEXT") from e


@main.command()
@click.option("--top-words", default=0, help="Show the most frequent words per cached source")
@click.option("--prefetch", "warm", is_flag=True, help="Fetch all sources first")
@click.pass_obj
def sources(config: WikiContextConfig, top_words: int, warm: bool) -> None:
    """List configured sources with type, auth and cache state."""
    from wikicontext.services.query_service import WikiContextService

    async def run() -> dict[str, Any]:
        async with WikiContextService.from_config(config) as service:
            if warm:
                await service.prefetch()
            return {
                "summary": service.source_stats(top_words=top_words).to_response(),
                "sources": [d.to_response() for d in service.source_details()],
            }

    _echo_json(asyncio.run(run()))


@main.command()
@click.pass_obj
def prefetch(config: WikiContextConfig) -> None:
    """Fetch every source once and report where content came from."""
    from wikicontext.services.query_service import WikiContextService

    async def run() -> dict[str, str]:
        async with WikiContextService.from_config(config) as service:
            return await service.prefetch()

    outcomes = asyncio.run(run())
    _echo_json(outcomes)

    failed = [url for url, origin in outcomes.items() if origin != "network"]
    if failed:
        click.echo(f"{len(failed)} of {len(outcomes)} sources not fetched from network", err=True)


if __name__ == "__main__":
    main()
