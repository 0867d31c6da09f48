"""presign CLI - sign, inspect and verify pre-signed URLs."""

import sys
import time

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from presign.common.errors import (
    InvalidArgumentError,
    SignatureExpiredError,
    SignatureMismatchError,
)
from presign.common.logging import setup_logging
from presign.common.settings import get_settings
from presign.url.canonical import build_canonical_request
from presign.url.methods import HttpMethod
from presign.url.signer import HMAC_SIGNATURE, generate_presigned_url, generate_signature
from presign.url.validator import validate_presigned_url

console = Console()

EXIT_MISMATCH = 1
EXIT_INVALID = 2

METHOD = click.Choice([m.value for m in HttpMethod], case_sensitive=False)


def _require_secret(ctx: click.Context) -> str:
    secret = ctx.obj["secret"]
    if not secret:
        console.print("[red]No secret configured (use --secret or PRESIGN_SECRET)[/red]")
        sys.exit(EXIT_INVALID)
    return str(secret)


@click.group()
@click.option(
    "--secret",
    default=None,
    help="Shared secret (defaults to PRESIGN_SECRET)",
)
@click.option(
    "--algorithm",
    type=click.Choice(["sha1", "sha256", "sha512"]),
    default=None,
    help="HMAC digest (defaults to PRESIGN_HMAC_ALGORITHM or sha256)",
)
@click.pass_context
def cli(ctx: click.Context, secret: str | None, algorithm: str | None) -> None:
    """presign - Pre-signed, time-limited URLs."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    ctx.ensure_object(dict)
    ctx.obj["secret"] = secret or settings.secret_value
    ctx.obj["algorithm"] = algorithm or settings.hmac_algorithm
    ctx.obj["default_expires_seconds"] = settings.default_expires_seconds


@cli.command("canonical")
@click.argument("method", type=METHOD)
@click.argument("url")
@click.option("--param", default=HMAC_SIGNATURE, show_default=True, help="Signature parameter to exclude")
def canonical_cmd(method: str, url: str, param: str) -> None:
    """Show the canonical string signed for METHOD and URL."""
    try:
        request = build_canonical_request(method, url, param)
    except InvalidArgumentError as exc:
        console.print(f"[red]Invalid input: {escape(str(exc))}[/red]")
        sys.exit(EXIT_INVALID)

    table = Table(title="Canonical Request")
    table.add_column("Part", style="cyan")
    table.add_column("Value")
    table.add_row("method", request.method.value)
    table.add_row("host", escape(request.host))
    table.add_row("path", escape(request.path) or "(empty)")
    for key, value in request.params:
        table.add_row("param", escape(f"{key}={value}"))
    console.print(table)
    click.echo(str(request))


@cli.command("signature")
@click.argument("method", type=METHOD)
@click.argument("url")
@click.option("--param", default=HMAC_SIGNATURE, show_default=True, help="Signature parameter to exclude")
@click.pass_context
def signature_cmd(ctx: click.Context, method: str, url: str, param: str) -> None:
    """Print the raw HMAC signature for METHOD and URL."""
    secret = _require_secret(ctx)
    try:
        signature = generate_signature(method, url, param, secret, ctx.obj["algorithm"])
    except InvalidArgumentError as exc:
        console.print(f"[red]Invalid input: {escape(str(exc))}[/red]")
        sys.exit(EXIT_INVALID)
    click.echo(signature)


@cli.command("sign")
@click.argument("method", type=METHOD)
@click.argument("url")
@click.option("--expires-in", type=int, help="Lifetime in seconds (default from settings)")
@click.option("--expires-at", type=int, help="Absolute expiration in epoch milliseconds")
@click.option("--no-expiry", is_flag=True, help="Sign without an expiration")
@click.pass_context
def sign_cmd(
    ctx: click.Context,
    method: str,
    url: str,
    expires_in: int | None,
    expires_at: int | None,
    no_expiry: bool,
) -> None:
    """Generate a pre-signed URL."""
    secret = _require_secret(ctx)
    if sum([expires_in is not None, expires_at is not None, no_expiry]) > 1:
        raise click.UsageError("Use only one of --expires-in, --expires-at, --no-expiry")

    expires: int | None
    if no_expiry:
        expires = None
    elif expires_at is not None:
        expires = expires_at
    else:
        lifetime = expires_in if expires_in is not None else ctx.obj["default_expires_seconds"]
        expires = int(time.time() * 1000) + lifetime * 1000

    try:
        presigned = generate_presigned_url(method, url, expires, secret, ctx.obj["algorithm"])
    except InvalidArgumentError as exc:
        console.print(f"[red]Invalid input: {escape(str(exc))}[/red]")
        sys.exit(EXIT_INVALID)
    click.echo(presigned)


@cli.command("verify")
@click.argument("method", type=METHOD)
@click.argument("url")
@click.pass_context
def verify_cmd(ctx: click.Context, method: str, url: str) -> None:
    """Validate a pre-signed URL."""
    secret = _require_secret(ctx)
    try:
        validate_presigned_url(method, url, secret, digestmod=ctx.obj["algorithm"])
    except InvalidArgumentError as exc:
        console.print(f"[red]Malformed URL: {escape(str(exc))}[/red]")
        sys.exit(EXIT_INVALID)
    except SignatureExpiredError as exc:
        console.print(f"[red]Expired: {escape(str(exc))}[/red]")
        sys.exit(EXIT_MISMATCH)
    except SignatureMismatchError as exc:
        console.print(f"[red]Rejected: {escape(str(exc))}[/red]")
        sys.exit(EXIT_MISMATCH)

    console.print("[green]Signature valid[/green]")


def main() -> None:
    """Entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
