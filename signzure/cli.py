"""
signzure Command-Line Interface

Builds SAS, JWT and Cosmos DB authorization tokens and exposes the encoding
helpers for shell use.
"""

import logging
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from signzure import __version__
from signzure.codec.base64url import base64_decode, base64_encode, base64_url_escape
from signzure.codec.percent import HexCase, PercentMode, percent_decode, percent_encode
from signzure.core.config_manager import ConfigManager, SignzureConfig
from signzure.core.logging_config import configure_logging, get_logger, log_with_context
from signzure.crypto.digest import calc_digest_hex
from signzure.exceptions import SignzureError
from signzure.tokens.cosmos import cosmos_auth_token
from signzure.tokens.jwt_hs256 import jwt_hmac256
from signzure.tokens.sas import sas_token

logger = get_logger("signzure.cli")


@contextmanager
def signing_errors():
    """Report library errors as click errors (exit code 1)."""
    try:
        yield
    except SignzureError as e:
        log_with_context(logger, logging.DEBUG, "Command failed", error_code=e.error_code, error=e.message)
        raise click.ClickException(f"{e.error_code}: {e.message}")


def _config(ctx: click.Context) -> SignzureConfig:
    return ctx.obj["config"]


@click.group()
@click.version_option(version=__version__, prog_name="signzure")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (YAML or JSON)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level (overrides configuration)",
)
@click.pass_context
def cli(ctx, config_file: Optional[Path], log_level: Optional[str]):
    """
    signzure - Azure REST API signing helpers

    Build SAS tokens, HS256 JWTs and Cosmos DB authorization headers.
    """
    ctx.ensure_object(dict)

    overrides = {"logging": {"level": log_level.upper()}} if log_level else None
    try:
        config = ConfigManager().load(
            config_file=str(config_file) if config_file else None,
            cli_overrides=overrides,
        )
    except (ValidationError, ValueError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    configure_logging(config.logging)
    ctx.obj["config"] = config


@cli.command()
@click.option("--key", required=True, help="Shared access key (used as-is)")
@click.option("--url", required=True, help="Resource URI, e.g. myns.servicebus.windows.net/myhub")
@click.option("--key-name", required=True, help="Shared access policy name")
@click.option("--expiry", default=None, help="Absolute expiry in seconds since the epoch")
@click.option("--ttl", default=None, type=int, help="Lifetime in seconds (default from configuration)")
@click.pass_context
def sas(ctx, key: str, url: str, key_name: str, expiry: Optional[str], ttl: Optional[int]):
    """
    Build a Shared Access Signature token.

    Examples:
        signzure sas --key myPrimaryKey --url myns.servicebus.windows.net/hub --key-name Root --ttl 300
    """
    if expiry and ttl is not None:
        raise click.UsageError("--expiry and --ttl are mutually exclusive")

    config = _config(ctx)
    if not expiry:
        expiry = timedelta(seconds=ttl if ttl is not None else config.tokens.sas_default_ttl_seconds)

    with signing_errors():
        click.echo(sas_token(key, url, key_name, expiry, engine=config.create_engine()))


@cli.command()
@click.option("--secret", required=True, help="HMAC secret")
@click.option("--header", default='{"alg":"HS256","typ":"JWT"}', show_default=True, help="Serialized header JSON")
@click.option("--payload", required=True, help="Serialized claims JSON")
@click.pass_context
def jwt(ctx, secret: str, header: str, payload: str):
    """Build an HS256 JSON Web Token from serialized header and payload."""
    with signing_errors():
        click.echo(jwt_hmac256(secret, header, payload, engine=_config(ctx).create_engine()))


@cli.command()
@click.option("--key", required=True, help="Master key, base64 encoded as shown in the portal")
@click.option("--verb", required=True, help="HTTP verb")
@click.option("--resource-type", default="", help="dbs, colls, docs, ...")
@click.option("--resource-link", default="", help="Resource link, e.g. dbs/ToDoList")
@click.option("--date", required=True, help="RFC 7231 date sent as x-ms-date")
@click.option("--strict/--no-strict", default=None, help="Reject empty resource type/link")
@click.pass_context
def cosmos(ctx, key: str, verb: str, resource_type: str, resource_link: str, date: str, strict: Optional[bool]):
    """Build a Cosmos DB master-key authorization token."""
    config = _config(ctx)
    if strict is None:
        strict = config.tokens.cosmos_strict_resource_fields

    with signing_errors():
        click.echo(cosmos_auth_token(
            base64_decode(key),
            verb,
            resource_type,
            resource_link,
            date,
            strict=strict,
            engine=config.create_engine(),
        ))


@cli.command()
@click.argument("text")
@click.option("--algorithm", default="MD5", show_default=True, help="Legacy digest (MD5 or MD4)")
@click.pass_context
def digest(ctx, text: str, algorithm: str):
    """Print the hex digest of TEXT (legacy compatibility only)."""
    with signing_errors():
        click.echo(calc_digest_hex(algorithm, text, engine=_config(ctx).create_engine()))


@cli.group(name="base64")
def base64_group():
    """Base64 encode and decode."""


@base64_group.command(name="encode")
@click.argument("text")
@click.option("--url-safe", is_flag=True, help="Apply base64url escaping")
def base64_encode_cmd(text: str, url_safe: bool):
    """Base64 encode the UTF-8 bytes of TEXT."""
    encoded = base64_encode(text)
    click.echo(base64_url_escape(encoded) if url_safe else encoded)


@base64_group.command(name="decode")
@click.argument("text")
def base64_decode_cmd(text: str):
    """Decode base64 TEXT and print it as UTF-8."""
    with signing_errors():
        decoded = base64_decode(text)
    click.echo(decoded.decode("utf-8", errors="replace"))


@cli.command()
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in PercentMode]),
    default=PercentMode.RFC3986.value,
    show_default=True,
)
@click.option(
    "--case",
    type=click.Choice([c.value for c in HexCase]),
    default=HexCase.UPPER.value,
    show_default=True,
)
@click.option("--decode", "decode_", is_flag=True, help="Decode instead of encode")
def urlencode(text: str, mode: str, case: str, decode_: bool):
    """Percent-encode (or decode) TEXT."""
    with signing_errors():
        click.echo(percent_decode(text) if decode_ else percent_encode(text, mode, case))


@cli.command(name="config")
@click.pass_context
def show_config(ctx):
    """Show the active configuration."""
    click.echo(yaml.safe_dump(_config(ctx).model_dump(mode="json"), sort_keys=False))


@cli.command()
def version():
    """Show signzure version."""
    click.echo(f"signzure version {__version__}")


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
