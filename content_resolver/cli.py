"""
Command-line interface for the content resolver.

Uses Typer to resolve an alias, a revision id or a user path against the
configured GraphQL endpoint and print the resulting page view model as
JSON. Supports loading .env files for endpoint configuration.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Awaitable, Callable

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import AppConfig, load_config
from .core.types import Instance
from .core.view_models import PageViewModel
from .errors import ConfigError, UpstreamError
from .fetch import GraphQLClient
from .output import write_page
from .resolve import PageResolver
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()

InstanceOption = typer.Option(Instance.DE, "--instance", "-l", help="Platform instance (locale tag).")
ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
EndpointOption = typer.Option(
    None,
    "--endpoint",
    envvar="CONTENT_RESOLVER_ENDPOINT",
    help="GraphQL endpoint (or set CONTENT_RESOLVER_ENDPOINT / .env).",
)
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")
HtmlOption = typer.Option(None, "--html", help="Also write an HTML preview to this path.")


def _prepare(config: Path | None, endpoint: str | None, log_level: str | None) -> AppConfig:
    load_dotenv()
    try:
        cfg = load_config(str(config) if config else None)
    except ConfigError as exc:
        console.print(f"[red]Invalid config:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    if endpoint:
        cfg.api.endpoint = endpoint
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging, log_dir=Path("logs"))
    return cfg


def _run(
    cfg: AppConfig,
    resolve: Callable[[PageResolver], Awaitable[PageViewModel]],
    html: Path | None,
) -> None:
    async def main() -> PageViewModel:
        async with GraphQLClient(cfg.api) as client:
            return await resolve(PageResolver(client, cfg.resolver))

    try:
        page = asyncio.run(main())
    except UpstreamError as exc:
        console.print(f"[red]Upstream error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print_json(json.dumps(page.to_dict(), ensure_ascii=False))
    if html is not None:
        write_page(page, html)
        console.print(f"HTML preview written: {html}")


@app.command()
def page(
    alias: str = typer.Argument(..., help="Alias path, e.g. /mathe/zahlen or /1555."),
    instance: Instance = InstanceOption,
    config: Path | None = ConfigOption,
    endpoint: str | None = EndpointOption,
    log_level: str | None = LogLevelOption,
    html: Path | None = HtmlOption,
):
    """Resolve an alias to a page view model."""
    cfg = _prepare(config, endpoint, log_level)
    _run(cfg, lambda resolver: resolver.resolve_page(alias, instance), html)


@app.command()
def revision(
    revision_id: int = typer.Argument(..., help="Revision id."),
    instance: Instance = InstanceOption,
    config: Path | None = ConfigOption,
    endpoint: str | None = EndpointOption,
    log_level: str | None = LogLevelOption,
    html: Path | None = HtmlOption,
):
    """Resolve a revision id to a revision page."""
    cfg = _prepare(config, endpoint, log_level)
    _run(cfg, lambda resolver: resolver.resolve_revision(revision_id, instance), html)


@app.command()
def user(
    path: str = typer.Argument(..., help="Profile path, e.g. /user/profile/admin."),
    instance: Instance = InstanceOption,
    config: Path | None = ConfigOption,
    endpoint: str | None = EndpointOption,
    log_level: str | None = LogLevelOption,
    html: Path | None = HtmlOption,
):
    """Resolve a user path to a profile page."""
    cfg = _prepare(config, endpoint, log_level)
    _run(cfg, lambda resolver: resolver.resolve_user(path, instance), html)


if __name__ == "__main__":
    app()
