#!/usr/bin/env python3
"""
Main CLI entry point for the Bookshelf GraphQL server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from bookshelf import __version__
from bookshelf.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
def cli() -> None:
    """Bookshelf CLI - run the GraphQL server and inspect its schema."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=4000, type=int, help="Port to bind to (default: 4000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option("--api-url", default=None, help="Upstream REST API base URL (enables proxy mode)")
@click.option(
    "--store",
    "store_backend",
    default=None,
    type=click.Choice(["memory", "rest"]),
    help="Backing store (default: rest when an API URL is set, else memory)",
)
@click.option("--seed", is_flag=True, default=False, help="Load sample data into the memory store")
def serve(
    host: str,
    port: int,
    reload: bool,
    log_level: str,
    api_url: str | None,
    store_backend: str | None,
    seed: bool,
) -> None:
    """Start the Bookshelf GraphQL server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    # The app factory reads settings from the environment once uvicorn calls it
    if api_url:
        os.environ["BOOKSHELF_API_URL"] = api_url
    if store_backend:
        os.environ["BOOKSHELF_STORE_BACKEND"] = store_backend
    if seed:
        os.environ["BOOKSHELF_SEED_DEMO_DATA"] = "true"
    os.environ["BOOKSHELF_DEBUG"] = "true" if log_level == "debug" else "false"
    os.environ["BOOKSHELF_LOG_LEVEL"] = log_level

    logger.info(
        "Starting Bookshelf API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        store_backend=store_backend,
    )

    try:
        uvicorn.run(
            "bookshelf.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the SDL to this file instead of stdout",
)
def schema(output: str | None) -> None:
    """Print the GraphQL schema in SDL form."""
    from bookshelf.graphql.schema import print_schema

    sdl = print_schema()
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(sdl + "\n")
        click.echo(f"✓ Schema written to {output}")
    else:
        click.echo(sdl)


@cli.command("check-api")
@click.option("--api-url", default=None, help="REST API base URL (default: from settings)")
def check_api(api_url: str | None) -> None:
    """Check that the upstream REST API answers on /authors and /books."""
    from bookshelf.config import settings
    from bookshelf.store import StoreError, create_rest_store

    configure_logging()

    url = api_url or settings.api_url
    if not url:
        click.echo("✗ No API URL configured (use --api-url or BOOKSHELF_API_URL)", err=True)
        sys.exit(1)

    async def do_check() -> tuple[int, int]:
        store = create_rest_store(url)
        try:
            authors = await store.authors.list()
            books = await store.books.list()
            return len(authors), len(books)
        finally:
            await store.close()

    try:
        author_count, book_count = asyncio.run(do_check())
    except StoreError as e:
        logger.error("REST API check failed", api_url=url, error=str(e))
        click.echo(f"✗ {url}: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ {url}: {author_count} authors, {book_count} books")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
