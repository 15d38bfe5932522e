"""Command-line interface for QuillBase.

Runs the collections API and exposes the naming rules and the field type
catalog for quick checks from a terminal.
"""

import asyncio
from typing import NoReturn

import click

from quillbase.core.config import get_settings
from quillbase.core.logging import configure_logging, get_logger
from quillbase.domain.services.collection_gateway import GatewayError, describe_failure
from quillbase.domain.services.collection_name_validator import CollectionNameValidator
from quillbase.domain.services.field_name_validator import naming_hints, validate_field_name
from quillbase.domain.services.field_type_registry import FIELD_GROUPS, search_groups


@click.group()
@click.version_option(version="0.1.0", prog_name="QuillBase")
def cli() -> None:
    """QuillBase - collection schema builder for a headless CMS."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the collections API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    get_logger(__name__).info(
        "Starting QuillBase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "quillbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the collection store tables."""
    from quillbase.infrastructure.persistence.database import close_database, init_database

    configure_logging(get_settings())

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

    asyncio.run(initialize())


@cli.command("check-name")
@click.argument("name")
@click.option("--plural", "custom_plural", default="", help="Custom plural to use instead")
def check_name(name: str, custom_plural: str) -> None:
    """Normalize and validate a collection NAME.

    Exits with status 1 if the name is invalid.
    """
    result = CollectionNameValidator.validate_and_normalize(name)

    click.echo(f"Singular:     {result.singular or '-'}")
    if not result.is_valid:
        for error in result.errors:
            click.echo(f"  x {error}", err=True)
        raise SystemExit(1)

    plural = CollectionNameValidator.resolve_plural(result, custom_plural)
    routes = CollectionNameValidator.generate_routes(result.singular, plural)
    click.echo(f"Plural:       {plural}")
    click.echo(f"Display name: {result.display_name}")
    click.echo("Routes:")
    for route in routes.values():
        click.echo(f"  {route}")


@cli.command("check-field")
@click.argument("name")
@click.option("--type", "type_key", default=None, help="Field type key, for naming hints")
def check_field(name: str, type_key: str | None) -> None:
    """Validate a field NAME and print naming hints."""
    error = validate_field_name(name)
    if error:
        click.echo(f"x {error}", err=True)
        raise SystemExit(1)

    click.echo(f"{name}: ok")
    for hint in naming_hints(name, type_key):
        click.echo(f"  hint: {hint}")


@cli.command("field-types")
@click.option("--search", default="", help="Filter groups by name")
def field_types(search: str) -> None:
    """List the field type catalog."""
    groups = search_groups(search) if search else list(FIELD_GROUPS)
    for group in groups:
        click.echo(f"{group.name} ({group.icon})")
        for field_type in group.types:
            limit = f", max {field_type.max_length}" if field_type.max_length else ""
            click.echo(f"  {field_type.type:<14} {field_type.label} [{field_type.component.value}{limit}]")


@cli.command("list-collections")
def list_collections() -> None:
    """List collections stored behind the configured gateway."""
    from quillbase.domain.services.collection_catalog import CollectionCatalog
    from quillbase.infrastructure.gateways import create_gateway

    configure_logging(get_settings())
    catalog = CollectionCatalog(create_gateway())

    try:
        collections = asyncio.run(catalog.refresh())
    except GatewayError as e:
        click.echo(describe_failure(e), err=True)
        raise SystemExit(1)

    if not collections:
        click.echo("No collections.")
        return
    for collection in collections:
        click.echo(
            f"{collection.id:<24} {collection.type.value:<10} "
            f"/{collection.plural} ({len(collection.fields)} fields)"
        )


@cli.command()
def info() -> None:
    """Display QuillBase configuration."""
    settings = get_settings()

    click.echo(f"""
QuillBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Gateway:
  Base URL:     {settings.gateway_base_url}
  Timeout:      {settings.gateway_timeout}s

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Entry point for the ``quillbase`` command and ``python -m quillbase``."""
    cli()


if __name__ == "__main__":
    main()
