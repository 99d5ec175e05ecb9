"""Management CLI: schema bootstrap, user accounts and offline EDI parsing."""

import asyncio
from pathlib import Path

import click

from edi_dashboard.config import settings
from edi_dashboard.db import Database
from edi_dashboard.logging import configure_logging, setup_logging
from edi_dashboard.models.enums import UserRole
from edi_dashboard.services.auth.auth_service import AuthService
from edi_dashboard.services.edi.encoding import decode_edi_bytes
from edi_dashboard.services.edi.parser import parse_edi_text
from edi_dashboard.services.edi.upload_validation import validate_edi_upload
from edi_dashboard.services.exceptions import ValidationError


def style_header(text: str) -> str:
    """Style section headers (yellow, bold)."""
    return click.style(text, fg="yellow", bold=True)


def style_count(value: int, color: str) -> str:
    return click.style(str(value), fg=color, bold=True)


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", help="Override the configured database URL")
@click.option("--verbose", "-v", is_flag=True, help="Log at debug level")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None, verbose: bool) -> None:
    """EDI dashboard management commands."""
    if verbose:
        configure_logging("debug")
    else:
        setup_logging()
    ctx.obj = database_url or settings.database_url


async def _init_db(url: str) -> None:
    database = Database(url)
    try:
        await database.create_all()
    finally:
        await database.dispose()


@cli.command("init-db")
@click.pass_obj
def init_db(database_url: str) -> None:
    """Create all tables directly from the models (development only; use Alembic in production)."""
    asyncio.run(_init_db(database_url))
    click.echo("Tables created")


async def _create_user(url: str, username: str, password: str, email: str | None, role: UserRole) -> None:
    database = Database(url)
    try:
        async with database.session() as session:
            await AuthService(session).create_user(username, password, email=email, role=role)
    finally:
        await database.dispose()


@cli.command("create-user")
@click.argument("username")
@click.password_option()
@click.option("--email", default=None, help="Contact address")
@click.option(
    "--role",
    type=click.Choice([r.value for r in UserRole]),
    default=UserRole.USER.value,
    show_default=True,
)
@click.pass_obj
def create_user(database_url: str, username: str, password: str, email: str | None, role: str) -> None:
    """Create a dashboard login."""
    try:
        asyncio.run(_create_user(database_url, username, password, email, UserRole(role)))
    except ValidationError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Created {role} user {username}")


@cli.command("parse-edi")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--encoding", default=settings.edi_encoding, show_default=True, help="Legacy encoding to try first")
@click.option("--show-skipped", is_flag=True, help="List the rows that were skipped")
def parse_edi(file: Path, encoding: str, show_skipped: bool) -> None:
    """Decode and parse an EDI file without touching the database."""
    content = file.read_bytes()
    try:
        validate_edi_upload(
            file.name,
            content,
            allowed_extensions=settings.edi_allowed_extensions,
            max_size=settings.edi_max_upload_bytes,
        )
        decoded = decode_edi_bytes(content, encoding)
        result = parse_edi_text(decoded.text)
    except ValidationError as e:
        raise click.ClickException(str(e)) from e

    click.echo(style_header(f"{file.name}"))
    click.echo(f"  encoding:  {decoded.encoding}" + (" (fallback)" if decoded.used_fallback else ""))
    click.echo(f"  rows:      {result.total_rows}")
    click.echo(f"  extracted: {style_count(result.extracted_rows, 'green')}")
    click.echo(f"  skipped:   {style_count(result.skipped_rows, 'yellow')}")

    if result.records:
        click.echo(style_header("Orders:"))
        for record in result.records:
            click.echo(
                f"  {record.order_number}\t{record.product_name or '-'}\t"
                f"{record.order_quantity}\t{record.delivery_date or '-'}"
            )

    if show_skipped and result.skipped:
        click.echo(style_header("Skipped rows:"))
        for row in result.skipped:
            click.echo(f"  line {row.line_number}: {row.reason} ({row.column_count} columns)")


if __name__ == "__main__":
    cli()
