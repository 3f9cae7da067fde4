"""CLI interface for Pagestage."""

import logging
import sys
from pathlib import Path

import click

from pagestage.config import Config
from pagestage.core.caching import PageCache
from pagestage.core.store import MemoryContentStore


@click.group()
def cli() -> None:
    """Pagestage - content server with access control and page caching."""


@click.group()
def cache() -> None:
    """Page cache commands."""


cli.add_command(cache)

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagestage.toml)",
)


@cli.command()
@_config_option
@click.option(
    "--manifest",
    "-m",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Content manifest (overrides config)",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--cache/--no-cache",
    "cache_enabled",
    default=None,
    help="Enable/disable page caching (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    manifest: Path | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
    cache_enabled: bool | None,
) -> None:
    """Start the content server."""
    from pagestage.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        manifest=manifest,
        cache_dir=cache_dir,
        cache_enabled=cache_enabled,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content manifest: {config.content.manifest}")
    if config.cache.enabled:
        click.echo(f"Cache directory: {config.cache.cache_dir}")
    else:
        click.echo("Cache: disabled")

    run_server(config)


@cli.command()
@_config_option
def check(config_path: Path | None) -> None:
    """Validate the configuration and content manifest."""
    config = _load_config(config_path)
    try:
        store = MemoryContentStore.load(config.content.manifest)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Pages: {len(store.pages)}")
    paths = {page.path for page in store.pages if page.is_live}
    for name, path in (
        ("not_found", config.errors.not_found),
        ("access_denied", config.errors.access_denied),
        ("server_error", config.errors.server_error),
    ):
        if path in paths:
            click.echo(f"Error page {name}: {path}")
        else:
            click.echo(
                click.style(f"Warning: no live error page for {name} at {path}", fg="yellow")
            )
    click.echo(click.style("Configuration OK", fg="green", bold=True))


@cache.command()
@_config_option
@click.option(
    "--path",
    "page_path",
    default=None,
    help="Invalidate a single canonical path instead of the whole cache",
)
def clear(config_path: Path | None, page_path: str | None) -> None:
    """Remove cached pages."""
    config = _load_config(config_path)
    page_cache = PageCache(config.cache.cache_dir)
    if page_path is not None:
        page_cache.invalidate(page_path)
        click.echo(f"Invalidated {page_path}")
    else:
        page_cache.clear()
        click.echo(f"Cleared {config.cache.cache_dir}")


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
